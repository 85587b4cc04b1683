from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from twilight.models.base import Base, IdType


class Tweet(Base):
    __tablename__ = "tweet_tbl"

    tweet_id = Column(IdType, primary_key=True, index=True)
    author_id = Column(IdType, ForeignKey("user_tbl.user_id", ondelete="CASCADE"), nullable=False, index=True)
    message = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), index=True)

    author = relationship("User", back_populates="tweets")
    likes = relationship("Like", back_populates="tweet", cascade="all, delete-orphan")
    hashtag_links = relationship("TweetHashtag", back_populates="tweet", cascade="all, delete-orphan")


class TweetHashtag(Base):
    __tablename__ = "tweet_hashtag_tbl"
    __table_args__ = (UniqueConstraint("tweet_id", "hashtag_id", name="uq_tweet_hashtag"),)

    tweet_hashtag_id = Column(IdType, primary_key=True, index=True)
    tweet_id = Column(IdType, ForeignKey("tweet_tbl.tweet_id", ondelete="CASCADE"), nullable=False, index=True)
    hashtag_id = Column(IdType, ForeignKey("hashtag_tbl.hashtag_id", ondelete="CASCADE"), nullable=False, index=True)

    tweet = relationship("Tweet", back_populates="hashtag_links")
    hashtag = relationship("Hashtag", back_populates="tweet_links")
