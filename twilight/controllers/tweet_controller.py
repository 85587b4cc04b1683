import logging
from sqlalchemy.orm import Session
from twilight.core.errors import AppError, ErrorKind
from twilight.models.tweet_model import Tweet
from twilight.models.user_model import User
from twilight.repositories.like_repo import count_likes, create_like, delete_like, get_like
from twilight.repositories.tweet_repo import (
    create_tweet_with_hashtags,
    delete_tweet,
    get_last_tweets,
    get_tweet_by_id,
)
from twilight.schemas.common_schema import ResultResponse
from twilight.schemas.tweet_schema import (
    LastTweetsResponse,
    LikeResponse,
    TweetAuthor,
    TweetCreated,
    TweetCreateResponse,
    TweetRead,
)
from twilight.utils.text import extract_hashtags, format_since

logger = logging.getLogger(__name__)


def _get_tweet_or_404(db: Session, tweet_id: int) -> Tweet:
    tweet = get_tweet_by_id(db, tweet_id)
    if not tweet:
        raise AppError(ErrorKind.NOT_FOUND, "Tweet does not exist")
    return tweet


def create_tweet(db: Session, author: User, message: str) -> TweetCreateResponse:
    hashtags = extract_hashtags(message)
    tweet = create_tweet_with_hashtags(db, author.user_id, message, hashtags)
    logger.info("User %s posted tweet %s with %d hashtag(s)", author.user_id, tweet.tweet_id, len(hashtags))
    return TweetCreateResponse(
        message="Tweet created",
        tweet=TweetCreated(id=tweet.tweet_id, message=tweet.message, hashtags=hashtags),
    )


def list_last_tweets(db: Session, user: User, since_id: int | None, limit: int) -> LastTweetsResponse:
    rows = get_last_tweets(db, user.user_id, since_id, limit)
    last_tweets = [
        TweetRead(
            id=row["tweet_id"],
            author=TweetAuthor(id=row["user_id"], username=row["username"], first_name=row["first_name"]),
            message=row["message"],
            created_at=row["created_at"],
            since=format_since(row["created_at"]),
            nb_likes=row["nb_likes"],
            liked=row["is_liked"],
        )
        for row in rows
    ]
    return LastTweetsResponse(last_tweets=last_tweets)


def remove_tweet(db: Session, user: User, tweet_id: int) -> ResultResponse:
    tweet = _get_tweet_or_404(db, tweet_id)
    # only the author may delete a tweet
    if tweet.author_id != user.user_id:
        raise AppError(ErrorKind.FORBIDDEN, "User Not allowed to delete this tweet")
    pruned = delete_tweet(db, tweet)
    logger.info("Tweet %s deleted, %d orphan hashtag(s) pruned", tweet_id, pruned)
    return ResultResponse(message=f"Tweet {tweet_id} deleted")


def like_tweet(db: Session, user: User, tweet_id: int) -> LikeResponse:
    tweet = _get_tweet_or_404(db, tweet_id)
    if tweet.author_id == user.user_id:
        raise AppError(ErrorKind.FORBIDDEN, "User cannot like their own tweet")
    if get_like(db, tweet_id, user.user_id):
        raise AppError(ErrorKind.CONFLICT, "Tweet already liked")
    create_like(db, tweet_id, user.user_id)
    return LikeResponse(message="Tweet liked", nb_likes=count_likes(db, tweet_id))


def unlike_tweet(db: Session, user: User, tweet_id: int) -> LikeResponse:
    _get_tweet_or_404(db, tweet_id)
    like = get_like(db, tweet_id, user.user_id)
    if not like:
        raise AppError(ErrorKind.NOT_FOUND, "Tweet is not liked")
    delete_like(db, like)
    return LikeResponse(message="Tweet unliked", nb_likes=count_likes(db, tweet_id))
