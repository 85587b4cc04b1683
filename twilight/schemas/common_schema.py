from pydantic import BaseModel
from typing import Optional


class ResultResponse(BaseModel):
    result: bool = True
    message: Optional[str] = None
