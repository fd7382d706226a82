from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.core.constants import (
    MAX_LOCATION_LENGTH,
    MAX_TAG_LENGTH,
    MAX_TAGS_PER_VIDEO,
    MAX_TITLE_LENGTH,
)
from app.core.datetime_utils import UTCDatetime
from app.core.schemas import PaginationMeta
from app.videos.models.video import VideoPlatform


def _clean_tags(tags: list[str] | None) -> list[str] | None:
    if tags is None:
        return None
    cleaned = [t.strip() for t in tags if t and t.strip()]
    if len(cleaned) > MAX_TAGS_PER_VIDEO:
        raise ValueError(f"At most {MAX_TAGS_PER_VIDEO} tags are allowed")
    if any(len(t) > MAX_TAG_LENGTH for t in cleaned):
        raise ValueError(f"Tags must be at most {MAX_TAG_LENGTH} characters long")
    return cleaned


class VideoBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)
    description: str = Field(..., min_length=1)
    platform: VideoPlatform
    url: str = Field(..., min_length=1, max_length=2048)
    thumbnail: str | None = Field(None, max_length=2048)
    tags: list[str] = []
    location: str = Field(..., min_length=1, max_length=MAX_LOCATION_LENGTH)
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: list[str]) -> list[str]:
        return _clean_tags(v) or []


class VideoCreate(VideoBase):
    pass


class VideoUpdate(BaseModel):
    """Partial update; only fields present in the request body are applied."""

    title: str | None = Field(None, min_length=1, max_length=MAX_TITLE_LENGTH)
    description: str | None = Field(None, min_length=1)
    platform: VideoPlatform | None = None
    url: str | None = Field(None, min_length=1, max_length=2048)
    thumbnail: str | None = Field(None, max_length=2048)  # Send null to clear
    tags: list[str] | None = None
    location: str | None = Field(None, min_length=1, max_length=MAX_LOCATION_LENGTH)
    lat: float | None = Field(None, ge=-90, le=90)
    lng: float | None = Field(None, ge=-180, le=180)

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: list[str] | None) -> list[str] | None:
        return _clean_tags(v)


class VideoResponse(BaseModel):
    id: UUID
    title: str
    description: str
    platform: str
    url: str
    thumbnail: str | None = None
    tags: list[str] = []
    location: str
    lat: float
    lng: float
    created_at: UTCDatetime
    updated_at: UTCDatetime

    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )


class VideoListResponse(BaseModel):
    videos: list[VideoResponse]
    pagination: PaginationMeta


class VideoFilters(BaseModel):
    platform: VideoPlatform | None = None
    tags: list[str] = []
    location: str | None = None

    @classmethod
    def from_query(
        cls, platform: VideoPlatform | None, tags: str | None, location: str | None
    ) -> "VideoFilters":
        tag_list = [t.strip() for t in tags.split(",") if t.strip()] if tags else []
        return cls(platform=platform, tags=tag_list, location=(location or "").strip() or None)


class VideoDeleteResponse(BaseModel):
    message: str = "Video deleted successfully"
