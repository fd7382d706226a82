from typing import cast

from sqlalchemy.orm import Query, Session

from app.core.repository import BaseRepository
from app.videos.models.video import Video, VideoTag
from app.videos.schemas.video import VideoFilters


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class VideoRepository(BaseRepository[Video]):
    def __init__(self, db: Session):
        super().__init__(db, Video)

    def _filtered_query(self, filters: VideoFilters) -> Query:
        query = self.db.query(Video)

        if filters.platform:
            query = query.filter(Video.platform == filters.platform.value)

        if filters.tags:
            # Match videos carrying any of the requested tags
            query = query.filter(Video.tag_links.any(VideoTag.name.in_(filters.tags)))

        if filters.location:
            pattern = f"%{_escape_like(filters.location)}%"
            query = query.filter(Video.location.ilike(pattern, escape="\\"))

        return query

    def list_page(self, filters: VideoFilters, page: int, limit: int) -> tuple[list[Video], int]:
        query = self._filtered_query(filters)
        total: int = query.count()
        videos = (
            query.order_by(Video.created_at.desc(), Video.id)
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return cast(list[Video], videos), total
