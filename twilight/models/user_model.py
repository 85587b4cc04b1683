from sqlalchemy import Column, Text, TIMESTAMP, Boolean, false
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from twilight.models.base import Base, IdType


class User(Base):
    __tablename__ = "user_tbl"

    user_id = Column(IdType, primary_key=True, index=True)
    username = Column(Text, nullable=False, unique=True, index=True)
    email = Column(Text, nullable=False, unique=True, index=True)
    first_name = Column(Text, nullable=False)
    password = Column(Text, nullable=False)
    is_verified = Column(Boolean, nullable=False, default=False, server_default=false())
    # sha256 of the pending email-verification or password-reset token
    token = Column(Text, unique=True, index=True)
    token_expiration = Column(TIMESTAMP(timezone=True))
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    tweets = relationship("Tweet", back_populates="author", cascade="all, delete-orphan")
