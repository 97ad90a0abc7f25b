from models.base_model import Base, BaseModel
from sqlalchemy import Boolean, Column, String, false
from sqlalchemy.orm import relationship


class User(BaseModel, Base):
    __tablename__ = "users"
    email = Column(String(255), nullable=False, unique=True, index=True)
    hashed_password = Column(String(255), nullable=False)
    is_chirpy_red = Column(Boolean, nullable=False, default=False, server_default=false())

    chirps = relationship("Chirp", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    refresh_tokens = relationship(
        "RefreshToken", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
