from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from twilight.core.auth import get_current_user
from twilight.core.config import get_settings
from twilight.core.db import get_db
from twilight.controllers.hashtag_controller import list_recent_hashtags
from twilight.schemas.hashtag_schema import HashtagListResponse

router = APIRouter(prefix="/hashtags", tags=["hashtags"])


@router.get("", response_model=HashtagListResponse)
def recent_hashtags_route(
    db: Session = Depends(get_db),
    _user=Depends(get_current_user),
):
    settings = get_settings()
    return list_recent_hashtags(db, settings.max_nb_hashtags, settings.tweets_sample_size)
