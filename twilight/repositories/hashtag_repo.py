from sqlalchemy import delete, exists, func, select
from sqlalchemy.orm import Session
from twilight.core.errors import store_errors
from twilight.models.hashtag_model import Hashtag
from twilight.models.tweet_model import Tweet, TweetHashtag


def prune_orphan_hashtags(db: Session) -> int:
    """Delete hashtags no tweet refers to any more. Does not commit."""
    stmt = (
        delete(Hashtag)
        .where(~exists().where(TweetHashtag.hashtag_id == Hashtag.hashtag_id))
        .execution_options(synchronize_session=False)
    )
    result = db.execute(stmt)
    return result.rowcount or 0


def get_recent_tags(db: Session, max_hashtags: int, sample_size: int) -> list[dict]:
    """Most used hashtags among the ``sample_size`` latest tweets."""
    recent = (
        select(Tweet.tweet_id)
        .order_by(Tweet.created_at.desc(), Tweet.tweet_id.desc())
        .limit(sample_size)
        .subquery()
    )
    nb_uses = func.count(TweetHashtag.tweet_hashtag_id).label("nb_uses")
    stmt = (
        select(Hashtag.hashtag_id, Hashtag.hashtag, nb_uses)
        .join(TweetHashtag, TweetHashtag.hashtag_id == Hashtag.hashtag_id)
        .join(recent, recent.c.tweet_id == TweetHashtag.tweet_id)
        .group_by(Hashtag.hashtag_id, Hashtag.hashtag)
        .order_by(nb_uses.desc(), Hashtag.hashtag.asc())
        .limit(max_hashtags)
    )
    with store_errors(db, "Recent hashtags query"):
        return [dict(row) for row in db.execute(stmt).mappings().all()]
