# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the post endpoints."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


# -- Requests --------------------------------------------------------------
# Content rules (non-empty title/content, http(s) image URL) are enforced by
# the Post model itself; these schemas only describe the shape.


class PostCreate(BaseModel):
    title: str
    content: str
    images: Optional[str] = None


class PostUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    images: Optional[str] = None


# -- Responses -------------------------------------------------------------


class PostResponse(BaseModel):
    id: int
    title: str
    content: str
    images: Optional[str] = None
    author_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PostListResponse(BaseModel):
    posts: List[PostResponse]
