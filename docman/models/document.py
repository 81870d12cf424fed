
import enum
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from docman.db.session import Base


class Access(str, enum.Enum):
    private = "private"
    public = "public"
    role = "role"


# tiers visible to every authenticated user, not just the owner
SHARED_ACCESS = (Access.public, Access.role)


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Document(Base):
    __tablename__ = "documents"
    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    access = Column(
        Enum(Access, name="document_access", native_enum=False, validate_strings=True, values_callable=lambda e: [m.value for m in e]),
        default=Access.public,
        nullable=False,
    )
    created_at = Column(DateTime, default=_utcnow, index=True)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    owner = relationship("User", back_populates="documents")
