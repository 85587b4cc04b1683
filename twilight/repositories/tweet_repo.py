from sqlalchemy import exists, func, select
from sqlalchemy.orm import Session
from twilight.core.errors import store_errors
from twilight.models.like_model import Like
from twilight.models.tweet_model import Tweet, TweetHashtag
from twilight.models.user_model import User
from twilight.repositories.crud import Table, find_one, find_or_create
from twilight.repositories.hashtag_repo import prune_orphan_hashtags


def get_tweet_by_id(db: Session, tweet_id: int) -> Tweet | None:
    return find_one(db, Table.TWEETS, "tweet_id", tweet_id)


def create_tweet_with_hashtags(db: Session, author_id: int, message: str, hashtags: list[str]) -> Tweet:
    """Insert the tweet and link each hashtag, all in one transaction."""
    with store_errors(db, "Tweet creation"):
        tweet = Tweet(author_id=author_id, message=message)
        db.add(tweet)
        db.flush()
        for tag in hashtags:
            hashtag = find_or_create(db, Table.HASHTAGS, "hashtag", tag)
            db.add(TweetHashtag(tweet_id=tweet.tweet_id, hashtag_id=hashtag.hashtag_id))
        db.commit()
        db.refresh(tweet)
    return tweet


def has_tweets_after(db: Session, since_id: int) -> bool:
    stmt = select(Tweet.tweet_id).where(Tweet.tweet_id > since_id).limit(1)
    with store_errors(db, "Recent tweets check"):
        return db.execute(stmt).first() is not None


def get_last_tweets(db: Session, user_id: int, since_id: int | None, limit: int) -> list[dict]:
    """Latest tweets, newest first, with like count and the caller's liked flag.

    When ``since_id`` is given the whole page is returned only if a tweet newer
    than ``since_id`` exists; otherwise nothing is returned. The page itself is
    never filtered by ``since_id``.
    """
    if since_id is not None and not has_tweets_after(db, since_id):
        return []

    nb_likes = (
        select(func.count(Like.like_id))
        .where(Like.tweet_id == Tweet.tweet_id)
        .correlate(Tweet)
        .scalar_subquery()
    )
    is_liked = exists().where(Like.tweet_id == Tweet.tweet_id, Like.user_id == user_id).correlate(Tweet)
    stmt = (
        select(
            Tweet.tweet_id,
            Tweet.message,
            Tweet.created_at,
            User.user_id,
            User.username,
            User.first_name,
            nb_likes.label("nb_likes"),
            is_liked.label("is_liked"),
        )
        .join(User, User.user_id == Tweet.author_id)
        .order_by(Tweet.created_at.desc(), Tweet.tweet_id.desc())
        .limit(limit)
    )
    with store_errors(db, "Last tweets query"):
        rows = db.execute(stmt).mappings().all()
    return [
        {**row, "nb_likes": int(row["nb_likes"] or 0), "is_liked": bool(row["is_liked"])}
        for row in rows
    ]


def delete_tweet(db: Session, tweet: Tweet) -> int:
    """Delete a tweet with its likes and links, then drop orphaned hashtags.

    Returns the number of pruned hashtags.
    """
    with store_errors(db, "Tweet deletion"):
        db.delete(tweet)
        db.flush()
        pruned = prune_orphan_hashtags(db)
        db.commit()
    return pruned
