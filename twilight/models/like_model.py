from sqlalchemy import Column, TIMESTAMP, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from twilight.models.base import Base, IdType


class Like(Base):
    __tablename__ = "like_tbl"
    __table_args__ = (UniqueConstraint("tweet_id", "user_id", name="uq_like_tweet_user"),)

    like_id = Column(IdType, primary_key=True, index=True)
    tweet_id = Column(IdType, ForeignKey("tweet_tbl.tweet_id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(IdType, ForeignKey("user_tbl.user_id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    tweet = relationship("Tweet", back_populates="likes")
