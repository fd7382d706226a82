from app.videos.schemas.video import (
    VideoCreate,
    VideoDeleteResponse,
    VideoFilters,
    VideoListResponse,
    VideoResponse,
    VideoUpdate,
)

__all__ = [
    "VideoCreate",
    "VideoUpdate",
    "VideoResponse",
    "VideoListResponse",
    "VideoFilters",
    "VideoDeleteResponse",
]
