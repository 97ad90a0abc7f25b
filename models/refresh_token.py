"""
RefreshToken model: one row per issued refresh token.
Fields:
- token (primary key): 64 hex chars
- user_id (String(36)) - FK to users.id
- created_at, updated_at, expires_at
- revoked_at: NULL while the token is usable
"""
from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship

from models.base_model import Base, TimestampMixin, UTCDateTime


class RefreshToken(TimestampMixin, Base):
    __tablename__ = "refresh_tokens"

    token = Column(String(64), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expires_at = Column(UTCDateTime(timezone=True), nullable=False)
    revoked_at = Column(UTCDateTime(timezone=True), nullable=True)

    user = relationship("User", back_populates="refresh_tokens")

    def __repr__(self):
        return f"<RefreshToken user={self.user_id} revoked={self.revoked_at is not None}>"
