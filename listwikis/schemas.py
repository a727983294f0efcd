# listwikis/schemas.py

import re
from datetime import datetime, timezone
from typing import Optional, Union, Literal

from pydantic import BaseModel, Field, field_validator

TS_MW_FORMAT = "%Y%m%d%H%M%S"
_TS_MW_RE = re.compile(r"^\d{14}$")


def to_ts_mw(value) -> Optional[str]:
    """Convert an ISO 8601 or TS_MW timestamp to TS_MW. Returns None if unparsable."""
    if value is None:
        return None
    value = str(value).strip()
    if not value:
        return None
    if _TS_MW_RE.match(value):
        try:
            datetime.strptime(value, TS_MW_FORMAT)
        except ValueError:
            return None
        return value
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.strftime(TS_MW_FORMAT)


def is_ts_mw(value) -> bool:
    return isinstance(value, str) and to_ts_mw(value) == value


def ts_mw_to_iso(value: str) -> str:
    """TS_MW -> ISO 8601 (TS_ISO_8601), as used for continuation values."""
    return datetime.strptime(value, TS_MW_FORMAT).strftime("%Y-%m-%dT%H:%M:%SZ")


def _positive_int(value) -> Optional[int]:
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


class ListWikisParams(BaseModel):
    """Request parameters of list=listwikis, without the ``sw`` prefix.

    Invalid numeric filters are treated as if they were not given.
    """

    wid: Optional[int] = None
    deleted: bool = False
    from_: Optional[int] = Field(default=None, alias="from")
    to: Optional[int] = None
    countonly: bool = False
    lang: Optional[str] = None
    limit: Union[int, Literal["max"], None] = None
    start: Optional[str] = None
    end: Optional[str] = None
    dir: Literal["newer", "older"] = "older"

    class Config:
        populate_by_name = True
        extra = "ignore"

    @field_validator("wid", "from_", "to", mode="before")
    @classmethod
    def _ids(cls, value):
        return _positive_int(value)

    @field_validator("deleted", mode="before")
    @classmethod
    def _deleted(cls, value):
        # Presence alone enables it, even swdeleted=0
        return value is not False

    @field_validator("countonly", mode="before")
    @classmethod
    def _countonly(cls, value):
        if isinstance(value, bool):
            return value
        try:
            return int(str(value).strip()) != 0
        except (TypeError, ValueError):
            return False

    @field_validator("lang", mode="before")
    @classmethod
    def _lang(cls, value):
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("limit", mode="before")
    @classmethod
    def _limit(cls, value):
        if value is None:
            return None
        if str(value).strip() == "max":
            return "max"
        try:
            return int(str(value).strip())
        except (TypeError, ValueError):
            return None

    @field_validator("start", "end", mode="before")
    @classmethod
    def _timestamps(cls, value):
        return to_ts_mw(value)

    @field_validator("dir", mode="before")
    @classmethod
    def _dir(cls, value):
        return value if value in ("newer", "older") else "older"


class CallerContext(BaseModel):
    user: Optional[str] = None
    groups: list[str] = Field(default_factory=lambda: ["*"])

    def in_group(self, group: str) -> bool:
        return group in self.groups


class WikiEntry(BaseModel):
    id: int
    lang: Optional[str] = None
    url: str
    sitename: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    creationtimestamp: str
    type: Optional[str] = None
