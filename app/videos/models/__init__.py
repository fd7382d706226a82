from app.videos.models.video import Video, VideoPlatform, VideoTag

__all__ = ["Video", "VideoPlatform", "VideoTag"]
