import enum
import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base


class VideoPlatform(str, enum.Enum):
    YOUTUBE = "youtube"
    TIKTOK = "tiktok"
    INSTAGRAM = "instagram"


class Video(Base):
    __tablename__ = "videos"
    __table_args__ = (
        Index("ix_videos_platform", "platform"),
        Index("ix_videos_created_at", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text)
    platform: Mapped[str] = mapped_column(String(20))
    url: Mapped[str] = mapped_column(String(2048))
    thumbnail: Mapped[str | None] = mapped_column(String(2048), nullable=True, default=None)
    location: Mapped[str] = mapped_column(String(255))
    lat: Mapped[float] = mapped_column(Float)
    lng: Mapped[float] = mapped_column(Float)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    tag_links: Mapped[list["VideoTag"]] = relationship(
        "VideoTag",
        back_populates="video",
        cascade="all, delete-orphan",
        order_by="VideoTag.position",
        lazy="selectin",
    )

    @property
    def tags(self) -> list[str]:
        return [link.name for link in self.tag_links]

    @tags.setter
    def tags(self, names: list[str]) -> None:
        self.tag_links = [VideoTag(name=name, position=i) for i, name in enumerate(names)]

    def __repr__(self) -> str:
        return f"<Video(id={self.id}, title={self.title}, platform={self.platform})>"


class VideoTag(Base):
    """One tag of a video; ``position`` keeps the order the tags were entered in."""

    __tablename__ = "video_tags"
    __table_args__ = (
        Index("ix_video_tags_video", "video_id"),
        Index("ix_video_tags_name", "name"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    video_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("videos.id", ondelete="CASCADE"))
    name: Mapped[str] = mapped_column(String(50))
    position: Mapped[int] = mapped_column(Integer, default=0)

    video: Mapped["Video"] = relationship("Video", back_populates="tag_links")
