from sqlalchemy import Column, ForeignKey, Index, String
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base

# bytes of UTF-8, not characters
MAX_CHIRP_LENGTH = 140


class Chirp(BaseModel, Base):
    __tablename__ = "chirps"

    body = Column(String(MAX_CHIRP_LENGTH), nullable=False)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    user = relationship("User", back_populates="chirps")

    __table_args__ = (
        Index("ix_chirps_user_id_created_at", "user_id", "created_at"),
    )
