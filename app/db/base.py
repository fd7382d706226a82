"""
Database base module - imports all models so they register with Base.metadata.

While the imports appear unused, ``init_db`` and the test suite rely on them
to create every table.
"""

from app.auth.models.user import User
from app.videos.models.video import Video, VideoTag

__all__ = [
    "User",
    "Video",
    "VideoTag",
]
