import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from blogfeed.utils import parse_published_at


class Post(BaseModel):
    """Canonical post shared by local files, mirrored Velog files and live Velog listings."""

    slug: str
    title: str
    publishedAt: str
    summary: str = ""
    image: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    content: str = ""
    isVelogPost: bool = False
    velogUrl: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be empty")
        return value

    @field_validator("publishedAt")
    @classmethod
    def _published_at_parses(cls, value: str) -> str:
        parse_published_at(value)
        return value

    @model_validator(mode="after")
    def _velog_url_matches_origin(self):
        if self.isVelogPost != bool(self.velogUrl):
            raise ValueError("velogUrl must be set exactly when isVelogPost is true")
        return self

    @property
    def published_date(self) -> datetime.datetime:
        return parse_published_at(self.publishedAt)


class PostSummary(BaseModel):
    slug: str
    title: str
    summary: str = ""
    image: Optional[str] = None
    publishedAt: str
    formattedDate: str
    tags: List[str] = Field(default_factory=list)
    category: str
    readingTime: str
    isVelogPost: bool = False
    velogUrl: Optional[str] = None


class PostDetail(PostSummary):
    content: str


class CategoryCount(BaseModel):
    name: str
    count: int
