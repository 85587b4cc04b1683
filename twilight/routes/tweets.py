from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from twilight.core.auth import get_current_user
from twilight.core.config import get_settings
from twilight.core.db import get_db
from twilight.controllers import tweet_controller
from twilight.schemas.common_schema import ResultResponse
from twilight.schemas.tweet_schema import LastTweetsResponse, LikeResponse, TweetCreate, TweetCreateResponse

router = APIRouter(prefix="/tweets", tags=["tweets"])

# ids are BIGINT; anything above cannot match a row and would overflow the bind
MAX_TWEET_ID = 2**63 - 1
MAX_PAGE_SIZE = 100


@router.post("/new", response_model=TweetCreateResponse, status_code=status.HTTP_201_CREATED)
def create_tweet_route(
    payload: TweetCreate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return tweet_controller.create_tweet(db, user, payload.message)


@router.get("", response_model=LastTweetsResponse)
def last_tweets_route(
    since: Optional[int] = Query(None, ge=0, le=MAX_TWEET_ID),
    nb_max_tweets: Optional[int] = Query(None, alias="nbMaxTweets", ge=0, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    # 0 or absent means the default page size
    limit = nb_max_tweets or get_settings().max_nb_tweets
    return tweet_controller.list_last_tweets(db, user, since, limit)


@router.delete("/{tweet_id}", response_model=ResultResponse)
def delete_tweet_route(
    tweet_id: int,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return tweet_controller.remove_tweet(db, user, tweet_id)


@router.post("/{tweet_id}/like", response_model=LikeResponse, status_code=status.HTTP_201_CREATED)
def like_tweet_route(
    tweet_id: int,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return tweet_controller.like_tweet(db, user, tweet_id)


@router.delete("/{tweet_id}/like", response_model=LikeResponse)
def unlike_tweet_route(
    tweet_id: int,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return tweet_controller.unlike_tweet(db, user, tweet_id)
