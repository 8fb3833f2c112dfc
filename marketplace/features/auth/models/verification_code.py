from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from marketplace.platform.db.base import Base


class VerificationCode(Base):
    __tablename__ = "verification_codes"

    # One pending code per user: the primary key is the owning user.
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    email = Column(String(255), nullable=False)
    code = Column(String(6), nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)

    def __repr__(self):
        return f"<VerificationCode(user_id={self.user_id}, expires_at={self.expires_at})>"
