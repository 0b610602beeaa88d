from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator


class VelogUser(BaseModel):
    username: str


class VelogPost(BaseModel):
    id: str
    title: str
    short_description: str = ""
    thumbnail: Optional[str] = None
    user: VelogUser
    url_slug: str
    released_at: str
    updated_at: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    @field_validator("short_description", mode="before")
    @classmethod
    def _none_description(cls, value):
        return value or ""

    @field_validator("tags", mode="before")
    @classmethod
    def _none_tags(cls, value):
        return value or []


class VelogPostDetail(VelogPost):
    body: str = ""

    @field_validator("body", mode="before")
    @classmethod
    def _none_body(cls, value):
        return value or ""


class FetchStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    FAILED = "failed"


class FetchResult(BaseModel):
    """
    Outcome of a Velog call.

    Lets callers tell "genuinely nothing there" (``not_found`` or an empty ``ok``)
    apart from "the request failed", while the fail-soft helpers on the client
    still collapse both to empty.
    """

    status: FetchStatus
    data: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: Any) -> "FetchResult":
        return cls(status=FetchStatus.OK, data=data)

    @classmethod
    def not_found(cls) -> "FetchResult":
        return cls(status=FetchStatus.NOT_FOUND)

    @classmethod
    def failed(cls, error: str) -> "FetchResult":
        return cls(status=FetchStatus.FAILED, error=error)

    @property
    def is_ok(self) -> bool:
        return self.status == FetchStatus.OK
