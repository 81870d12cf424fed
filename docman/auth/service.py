
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session
from docman.auth.permissions import admin_role_id
from docman.db.session import REGULAR_ROLE
from docman.errors import AuthenticationRequired, ValidationError
from docman.models.role import Role
from docman.models.user import User
from docman.schemas.auth import SignupIn
from docman.utils.security import hash_password, verify_password, create_access_token

logger = logging.getLogger(__name__)

def ensure_unique(db: Session, username: str | None, email: str | None, exclude_id: int | None = None) -> None:
    if username is not None:
        stmt = select(User.id).where(User.username == username)
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        if db.scalar(stmt) is not None:
            raise ValidationError("username must be unique.")
    if email is not None:
        stmt = select(User.id).where(User.email == email)
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        if db.scalar(stmt) is not None:
            raise ValidationError("email must be unique.")

def signup_role_id(db: Session, role_id: int | None) -> int:
    if role_id is None:
        role_id = db.scalar(select(Role.id).where(Role.title == REGULAR_ROLE))
        if role_id is None:
            raise ValidationError("Role does not exist.")
        return role_id
    if role_id == admin_role_id(db):
        raise ValidationError("You can't sign up as an admin.")
    if db.get(Role, role_id) is None:
        raise ValidationError("Role does not exist.")
    return role_id

def register_user(db: Session, body: SignupIn) -> tuple[User, str]:
    if body.id is not None:
        raise ValidationError("Sorry, You can't pass an id.")
    role_id = signup_role_id(db, body.role_id)
    ensure_unique(db, body.username, body.email)

    user = User(
        username=body.username,
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
        password_hash=hash_password(body.password),
        role_id=role_id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("registered user %s (%s)", user.id, user.username)
    return user, create_access_token(user.id, user.role_id)

def login_user(db: Session, username: str, password: str) -> tuple[User, str]:
    user = db.scalar(select(User).where(User.username == username))
    if user is None:
        logger.info("login for unknown username %r", username)
        raise AuthenticationRequired("User does not exist.")
    if not verify_password(password, user.password_hash):
        logger.info("failed login for user %s", user.id)
        raise AuthenticationRequired("Incorrect username and password combination!")

    token = create_access_token(user.id, user.role_id)
    # a new login replaces the previous session
    user.session_token = token
    db.commit()
    db.refresh(user)
    logger.info("user %s logged in", user.id)
    return user, token

def logout_user(db: Session, user: User) -> None:
    user.session_token = None
    db.commit()
    logger.info("user %s logged out", user.id)
