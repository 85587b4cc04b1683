from pydantic import BaseModel
from twilight.schemas.common_schema import ResultResponse


class HashtagCount(BaseModel):
    id: int
    hashtag: str
    count: int


class HashtagListResponse(ResultResponse):
    hashtags: list[HashtagCount]
