from sqlalchemy.orm import Session
from twilight.repositories.hashtag_repo import get_recent_tags
from twilight.schemas.hashtag_schema import HashtagCount, HashtagListResponse


def list_recent_hashtags(db: Session, max_hashtags: int, sample_size: int) -> HashtagListResponse:
    rows = get_recent_tags(db, max_hashtags, sample_size)
    return HashtagListResponse(
        hashtags=[HashtagCount(id=row["hashtag_id"], hashtag=row["hashtag"], count=row["nb_uses"]) for row in rows]
    )
