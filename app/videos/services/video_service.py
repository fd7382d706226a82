import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.core.schemas import PaginationMeta
from app.videos.models.video import Video
from app.videos.repository import VideoRepository
from app.videos.schemas import (
    VideoCreate,
    VideoFilters,
    VideoListResponse,
    VideoResponse,
    VideoUpdate,
)

logger = logging.getLogger(__name__)

# Columns that cannot be cleared by sending null in an update
_NON_NULLABLE_FIELDS = frozenset(
    {"title", "description", "platform", "url", "tags", "location", "lat", "lng"}
)


class VideoService:
    def __init__(self, db: Session):
        self.db = db
        self.videos = VideoRepository(db)

    def list_videos(self, filters: VideoFilters, page: int, limit: int) -> VideoListResponse:
        videos, total = self.videos.list_page(filters, page, limit)
        return VideoListResponse(
            videos=[VideoResponse.model_validate(v) for v in videos],
            pagination=PaginationMeta.from_query(total=total, page=page, limit=limit),
        )

    def get_video(self, video_id: UUID) -> VideoResponse:
        return VideoResponse.model_validate(self._get_or_404(video_id))

    def create_video(self, data: VideoCreate) -> VideoResponse:
        values = data.model_dump(mode="json")
        tags = values.pop("tags")

        video = Video(**values)
        video.tags = tags
        video = self.videos.add(video)

        logger.info("video_created", extra={"video_id": str(video.id)})
        return VideoResponse.model_validate(video)

    def update_video(self, video_id: UUID, data: VideoUpdate) -> VideoResponse:
        video = self._get_or_404(video_id)

        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True, mode="json").items()
            if value is not None or key not in _NON_NULLABLE_FIELDS
        }
        if changes:
            # Tag-only edits touch video_tags alone, so onupdate would not fire
            video = self.videos.update(video, **changes, updated_at=datetime.now(UTC))

        logger.info(
            "video_updated", extra={"video_id": str(video_id), "fields": sorted(changes)}
        )
        return VideoResponse.model_validate(video)

    def delete_video(self, video_id: UUID) -> None:
        video = self._get_or_404(video_id)
        self.videos.delete(video)
        logger.info("video_deleted", extra={"video_id": str(video_id)})

    def _get_or_404(self, video_id: UUID) -> Video:
        video = self.videos.get_by_id(video_id)
        if video is None:
            raise NotFoundError("Video not found", resource="video")
        return video
