"""Ownership and role rules shared by the user and document routes."""

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from docman.db.session import ADMIN_ROLE
from docman.errors import AdminProtected, Forbidden, ImmutableFieldViolation
from docman.models.document import SHARED_ACCESS
from docman.models.role import Role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Requester:
    user_id: int
    role_id: int
    is_admin: bool = False


def admin_role_id(db: Session) -> int | None:
    return db.scalar(select(Role.id).where(Role.title == ADMIN_ROLE))


def is_admin_role(db: Session, role_id: int | None) -> bool:
    if role_id is None:
        return False
    return role_id == admin_role_id(db)


def can_act_on(requester: Requester, owner_id: int) -> bool:
    return owner_id == requester.user_id or requester.is_admin


def ensure_owner_or_admin(requester: Requester, owner_id: int) -> None:
    if not can_act_on(requester, owner_id):
        logger.warning("user %s denied access to resource owned by %s", requester.user_id, owner_id)
        raise Forbidden()


def ensure_document_write(requester: Requester, document, fields_set: set[str]) -> None:
    ensure_owner_or_admin(requester, document.owner_id)
    if "owner_id" in fields_set:
        raise ImmutableFieldViolation()


def can_read_document(requester: Requester, document) -> bool:
    return can_act_on(requester, document.owner_id) or document.access in SHARED_ACCESS


def ensure_user_delete(db: Session, requester: Requester, target) -> None:
    ensure_owner_or_admin(requester, target.id)
    if is_admin_role(db, target.role_id):
        logger.warning("user %s tried to delete admin %s", requester.user_id, target.id)
        raise AdminProtected()


def user_update_fields(requester: Requester, target, changes: dict) -> dict:
    """Return the subset of ``changes`` the requester may apply to ``target``.

    An admin editing someone else can only reassign the role; everything else
    submitted alongside it is dropped. Non-admins may edit their own profile
    but never their role.
    """
    ensure_owner_or_admin(requester, target.id)
    if requester.is_admin and requester.user_id != target.id:
        return {k: v for k, v in changes.items() if k == "role_id"}
    if not requester.is_admin and "role_id" in changes and changes["role_id"] != target.role_id:
        raise Forbidden("Only an admin can change roles.")
    return changes
