from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from twilight.schemas.common_schema import ResultResponse


class TweetCreate(BaseModel):
    message: str = Field(..., min_length=1)


class TweetAuthor(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    username: str
    first_name: str = Field(..., alias="firstName")


class TweetRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    author: TweetAuthor
    message: str
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    since: str
    nb_likes: int = Field(0, alias="nbLikes")
    liked: bool = False


class TweetCreated(BaseModel):
    id: int
    message: str
    hashtags: list[str]


class TweetCreateResponse(ResultResponse):
    tweet: TweetCreated


class LastTweetsResponse(ResultResponse):
    model_config = ConfigDict(populate_by_name=True)

    last_tweets: list[TweetRead] = Field(default_factory=list, alias="lastTweets")


class LikeResponse(ResultResponse):
    model_config = ConfigDict(populate_by_name=True)

    nb_likes: int = Field(..., alias="nbLikes")
