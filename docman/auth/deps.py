
import logging

from fastapi import Request, Depends
from sqlalchemy.orm import Session
from docman.auth.permissions import Requester, is_admin_role
from docman.db.session import SessionLocal
from docman.errors import AuthenticationRequired, Forbidden, InvalidToken, SessionInvalidated
from docman.models.user import User, REGISTERED
from docman.utils.security import decode_token

logger = logging.getLogger(__name__)

TOKEN_HEADER = "x-access-token"


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_token(request: Request) -> str | None:
    token = request.headers.get(TOKEN_HEADER)
    if token:
        return token
    auth = request.headers.get("Authorization")
    if auth and auth.startswith("Bearer "):
        return auth.split(" ", 1)[1].strip() or None
    return None

def session_is_current(user: User, token: str) -> bool:
    # "registered" accepts any valid token until the first login; after that
    # only the latest issued token passes, and logout clears the marker.
    return user.session_token == REGISTERED or user.session_token == token

def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    token = get_token(request)
    if not token:
        raise AuthenticationRequired()

    claims = decode_token(token)

    user = db.get(User, claims.user_id)
    if user is None:
        raise InvalidToken()
    if not session_is_current(user, token):
        logger.info("rejected stale session token for user %s", user.id)
        raise SessionInvalidated()

    return user

def get_requester(user: User = Depends(get_current_user), db: Session = Depends(get_db)) -> Requester:
    # the role is taken from the row, not the token, so role changes apply at once
    return Requester(user_id=user.id, role_id=user.role_id, is_admin=is_admin_role(db, user.role_id))

def require_admin(requester: Requester = Depends(get_requester)) -> Requester:
    if not requester.is_admin:
        raise Forbidden("You are not authorized!")
    return requester
