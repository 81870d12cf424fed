
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session
from docman.auth.permissions import Requester, ensure_user_delete, user_update_fields
from docman.auth.service import ensure_unique
from docman.errors import NotFound, ValidationError
from docman.models.role import Role
from docman.models.user import User
from docman.pagination import PageParams, paginate
from docman.schemas.user import UserUpdate
from docman.utils.security import hash_password

logger = logging.getLogger(__name__)

def get_user_or_404(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found.")
    return user

def list_users(db: Session, params: PageParams):
    return paginate(db, select(User).order_by(User.id), params)

def update_user(db: Session, requester: Requester, user_id: int, body: UserUpdate) -> User:
    user = get_user_or_404(db, user_id)
    changes = user_update_fields(requester, user, body.model_dump(exclude_unset=True, exclude_none=True))

    if "role_id" in changes and db.get(Role, changes["role_id"]) is None:
        raise ValidationError("Role does not exist.")
    ensure_unique(db, changes.get("username"), changes.get("email"), exclude_id=user.id)

    if "password" in changes:
        user.password_hash = hash_password(changes.pop("password"))
    for field, value in changes.items():
        setattr(user, field, value)

    db.commit()
    db.refresh(user)
    logger.info("user %s updated by %s: %s", user.id, requester.user_id, sorted(changes))
    return user

def delete_user(db: Session, requester: Requester, user_id: int) -> None:
    user = get_user_or_404(db, user_id)
    ensure_user_delete(db, requester, user)
    db.delete(user)
    db.commit()
    logger.info("user %s deleted by %s", user_id, requester.user_id)
