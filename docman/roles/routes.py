
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.orm import Session
from docman.auth.deps import get_db, require_admin
from docman.auth.permissions import Requester
from docman.errors import NotFound, ValidationError
from docman.models.role import Role
from docman.schemas.role import RoleCreate, RoleOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/roles", tags=["roles"])

@router.get("", response_model=list[RoleOut])
def list_roles(db: Session = Depends(get_db), admin: Requester = Depends(require_admin)):
    return db.scalars(select(Role).order_by(Role.id)).all()

@router.post("", response_model=RoleOut, status_code=status.HTTP_201_CREATED)
def create_role(body: RoleCreate, db: Session = Depends(get_db), admin: Requester = Depends(require_admin)):
    if db.scalar(select(Role.id).where(Role.title == body.title)) is not None:
        raise ValidationError("title must be unique.")
    role = Role(title=body.title)
    db.add(role); db.commit(); db.refresh(role)
    logger.info("role %s (%s) created by %s", role.id, role.title, admin.user_id)
    return role

@router.get("/{role_id}", response_model=RoleOut)
def get_role(role_id: int, db: Session = Depends(get_db), admin: Requester = Depends(require_admin)):
    role = db.get(Role, role_id)
    if role is None:
        raise NotFound("Role not found.")
    return role
