from sqlalchemy import Column, Text
from sqlalchemy.orm import relationship
from twilight.models.base import Base, IdType


class Hashtag(Base):
    __tablename__ = "hashtag_tbl"

    hashtag_id = Column(IdType, primary_key=True, index=True)
    hashtag = Column(Text, nullable=False, unique=True, index=True)

    tweet_links = relationship("TweetHashtag", back_populates="hashtag")
