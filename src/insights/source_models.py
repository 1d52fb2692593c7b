"""
Source Record Models
====================

Pydantic models for the raw records handed over by the content-fetching
layer (forum posts, short videos, image posts, product reviews).

Scraped payloads are loosely typed: ids arrive as ints or strings, counts
as "12" or None, ratings as "4.0 out of 5", and each platform names its text
field differently. These models accept all of that and expose one shape.
"""

import re
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

LEADING_NUMBER = re.compile(r"^\s*([-+]?\d+(?:[.,]\d+)?)")


def _to_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _to_count(value: Any) -> int:
    """Engagement counts: None or unparseable values count as 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return max(0, int(value))
    match = LEADING_NUMBER.match(str(value))
    if not match:
        return 0
    return max(0, int(float(match.group(1).replace(",", "."))))


def parse_rating(value: Any) -> float:
    """Leading number of a rating ("4", 4.5, "4,0 van 5"); 0.0 when absent."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    match = LEADING_NUMBER.match(str(value))
    if not match:
        return 0.0
    return float(match.group(1).replace(",", "."))


class CommentRecord(BaseModel):
    """A comment under a post or video."""
    id: str = ""
    text: str = Field("", validation_alias=AliasChoices("text", "body", "content"))
    likes: int = Field(0, validation_alias=AliasChoices("likes", "score", "like_count"))

    class Config:
        populate_by_name = True
        extra = "ignore"

    @field_validator("id", "text", mode="before")
    @classmethod
    def _coerce_str(cls, v):
        return _to_str(v)

    @field_validator("likes", mode="before")
    @classmethod
    def _coerce_count(cls, v):
        return _to_count(v)


class PostRecord(BaseModel):
    """A forum post, short video or image post."""
    id: str = ""
    url: Optional[str] = None
    title: str = ""
    text: str = Field(
        "",
        validation_alias=AliasChoices("text", "selftext", "caption", "description", "body"),
    )
    likes: int = Field(0, validation_alias=AliasChoices("likes", "score", "ups", "like_count"))
    comments_count: int = Field(
        0, validation_alias=AliasChoices("comments_count", "num_comments", "comment_count"),
    )
    shares: Optional[int] = Field(None, validation_alias=AliasChoices("shares", "share_count"))
    views: int = Field(0, validation_alias=AliasChoices("views", "play_count", "view_count"))
    comments: List[CommentRecord] = Field(default_factory=list)

    class Config:
        populate_by_name = True
        extra = "ignore"

    @field_validator("id", "title", "text", mode="before")
    @classmethod
    def _coerce_str(cls, v):
        return _to_str(v)

    @field_validator("likes", "comments_count", "views", mode="before")
    @classmethod
    def _coerce_count(cls, v):
        return _to_count(v)

    @field_validator("shares", mode="before")
    @classmethod
    def _coerce_shares(cls, v):
        return None if v is None else _to_count(v)

    @field_validator("comments", mode="before")
    @classmethod
    def _drop_unusable_comments(cls, v):
        if not isinstance(v, list):
            return []
        return [c for c in v if isinstance(c, (dict, CommentRecord))]

    @property
    def full_text(self) -> str:
        """Title and body as one document."""
        return f"{self.title} {self.text}".strip()

    @property
    def engagement(self) -> int:
        return self.likes + self.comments_count + (self.shares or 0)


class ReviewRecord(BaseModel):
    """A product review or review-site entry."""
    id: str = Field("", validation_alias=AliasChoices("id", "review_id"))
    title: str = ""
    content: str = Field("", validation_alias=AliasChoices("content", "body", "text"))
    rating: float = 0.0

    class Config:
        populate_by_name = True
        extra = "ignore"

    @field_validator("id", "title", "content", mode="before")
    @classmethod
    def _coerce_str(cls, v):
        return _to_str(v)

    @field_validator("rating", mode="before")
    @classmethod
    def _coerce_rating(cls, v):
        return parse_rating(v)

    @property
    def full_text(self) -> str:
        return f"{self.title} {self.content}".strip()
