from app.videos.services.video_service import VideoService

__all__ = ["VideoService"]
