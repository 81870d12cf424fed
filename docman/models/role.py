
from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from docman.db.session import Base

class Role(Base):
    __tablename__ = "roles"
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(50), unique=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    users = relationship("User", back_populates="role")
