from sqlalchemy import Boolean, Column, String
from sqlalchemy.orm import relationship

from marketplace.platform.db.base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    # Stored exactly as submitted; lookups are case-sensitive.
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    is_verified = Column(Boolean, nullable=False, default=False)

    sessions = relationship("UserSession", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, is_verified={self.is_verified})>"
