from typing import Optional

from pydantic import BaseModel, ConfigDict


class Post(BaseModel):
    id: int
    body: str


class PostPayload(BaseModel):
    # Unknown fields are dropped; the id is accepted but the path id always wins.
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    # None means the field was left out: create stores "", update keeps the stored body.
    body: Optional[str] = None
