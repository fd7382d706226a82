from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.auth.dependencies import require_admin
from app.auth.schemas.auth import AuthCredential
from app.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from app.db.session import get_db
from app.videos.models.video import VideoPlatform
from app.videos.schemas import (
    VideoCreate,
    VideoDeleteResponse,
    VideoFilters,
    VideoListResponse,
    VideoResponse,
    VideoUpdate,
)
from app.videos.services import VideoService

router = APIRouter()


@router.get("", response_model=VideoListResponse)
def list_videos(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    platform: VideoPlatform | None = Query(None),
    tags: str | None = Query(None, description="Comma-separated tags, any match"),
    location: str | None = Query(None, description="Case-insensitive substring"),
    db: Session = Depends(get_db),
) -> VideoListResponse:
    """List videos for the globe and the wall, newest first."""
    filters = VideoFilters.from_query(platform=platform, tags=tags, location=location)
    return VideoService(db).list_videos(filters, page=page, limit=limit)


@router.get("/{video_id}", response_model=VideoResponse)
def get_video(video_id: UUID, db: Session = Depends(get_db)) -> VideoResponse:
    return VideoService(db).get_video(video_id)


@router.post("", response_model=VideoResponse, status_code=status.HTTP_201_CREATED)
def create_video(
    data: VideoCreate,
    _admin: AuthCredential = Depends(require_admin),
    db: Session = Depends(get_db),
) -> VideoResponse:
    """Create a new video - Admin only."""
    return VideoService(db).create_video(data)


@router.put("/{video_id}", response_model=VideoResponse)
def update_video(
    video_id: UUID,
    data: VideoUpdate,
    _admin: AuthCredential = Depends(require_admin),
    db: Session = Depends(get_db),
) -> VideoResponse:
    """Update the supplied fields of a video - Admin only."""
    return VideoService(db).update_video(video_id, data)


@router.delete("/{video_id}", response_model=VideoDeleteResponse)
def delete_video(
    video_id: UUID,
    _admin: AuthCredential = Depends(require_admin),
    db: Session = Depends(get_db),
) -> VideoDeleteResponse:
    """Delete a video - Admin only."""
    VideoService(db).delete_video(video_id)
    return VideoDeleteResponse()
