"""Seed the database with an admin account and the sample videos.

Usage:
    python -m app.scripts.seed
"""

import os
import secrets
import string

from sqlalchemy.orm import Session

from app.auth.models.user import User, UserRole
from app.auth.repository import UserRepository
from app.core.security import get_password_hash
from app.db.session import SessionLocal, init_db
from app.videos.models.video import Video
from app.videos.schemas import VideoCreate
from app.videos.services import VideoService

SAMPLE_VIDEOS: list[dict] = [
    {
        "title": "Life Advice from Tokyo",
        "description": (
            "A heartwarming message about finding balance in life, shared from the bustling "
            "streets of Tokyo. This video explores the Japanese concept of Ikigai and how to "
            "find your life's purpose."
        ),
        "platform": "youtube",
        "url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "thumbnail": "https://img.youtube.com/vi/dQw4w9WgXcQ/maxresdefault.jpg",
        "tags": ["life-advice", "balance", "ikigai", "japan"],
        "location": "Tokyo, Japan",
        "lat": 35.6762,
        "lng": 139.6503,
    },
    {
        "title": "Wisdom from New York",
        "description": (
            "Street wisdom from the Big Apple about pursuing your dreams and never giving up. "
            "A motivational message from someone who made it in the city that never sleeps."
        ),
        "platform": "tiktok",
        "url": "https://www.tiktok.com/@example/video/1234567890",
        "tags": ["motivation", "dreams", "nyc", "success"],
        "location": "New York, USA",
        "lat": 40.7128,
        "lng": -74.0060,
    },
    {
        "title": "Mindfulness from Bali",
        "description": (
            "Peaceful advice about living in the moment and appreciating nature, shared from "
            "the beautiful beaches of Bali. Learn about mindfulness practices and meditation."
        ),
        "platform": "instagram",
        "url": "https://www.instagram.com/p/example123/",
        "tags": ["mindfulness", "nature", "meditation", "bali"],
        "location": "Bali, Indonesia",
        "lat": -8.4095,
        "lng": 115.1889,
    },
    {
        "title": "Startup Advice from London",
        "description": (
            "Entrepreneurial wisdom from London's tech scene. Tips on building a startup, "
            "managing team, and staying resilient through challenges."
        ),
        "platform": "youtube",
        "url": "https://www.youtube.com/watch?v=example456",
        "tags": ["entrepreneurship", "startup", "business", "london"],
        "location": "London, UK",
        "lat": 51.5074,
        "lng": -0.1278,
    },
    {
        "title": "Family Values from Mumbai",
        "description": (
            "Touching advice about family relationships and cultural values, shared from the "
            "vibrant city of Mumbai. How to balance tradition with modern life."
        ),
        "platform": "youtube",
        "url": "https://www.youtube.com/watch?v=example789",
        "tags": ["family", "values", "culture", "mumbai"],
        "location": "Mumbai, India",
        "lat": 19.0760,
        "lng": 72.8777,
    },
]


def generate_secure_password(length: int = 24) -> str:
    alphabet = string.ascii_letters + string.digits + "!@#$%&*"
    return "".join(secrets.choice(alphabet) for _ in range(length))


def seed_admin_user(db: Session) -> User | None:
    """Create the admin account unless it exists. Returns the new user, if any."""
    admin_email = os.environ.get("ADMIN_EMAIL", "admin@adviceglobe.com")
    admin_password = os.environ.get("ADMIN_PASSWORD") or generate_secure_password()

    users = UserRepository(db)
    if users.find_by_email(admin_email):
        print(f"✓ Admin user already exists: {admin_email}")
        return None

    admin = users.add(
        User(
            email=admin_email,
            hashed_password=get_password_hash(admin_password),
            role=UserRole.ADMIN.value,
        )
    )

    print("✓ Admin user created successfully!")
    print(f"  Email:    {admin_email}")
    print(f"  Password: {admin_password}")
    print("  Save this password now, it won't be shown again.")
    return admin


def seed_sample_videos(db: Session) -> int:
    """Create each sample video whose title is not taken yet. Returns how many were created."""
    service = VideoService(db)
    created = 0
    for video_data in SAMPLE_VIDEOS:
        exists = db.query(Video).filter(Video.title == video_data["title"]).first()
        if exists:
            print(f"  Video already exists: {video_data['title']}")
            continue
        service.create_video(VideoCreate(**video_data))
        print(f"✓ Created sample video: {video_data['title']}")
        created += 1
    return created


def main() -> None:
    init_db()
    db = SessionLocal()
    try:
        seed_admin_user(db)
        seed_sample_videos(db)
        print("\nSeed completed successfully!")
    except Exception as e:
        print(f"✗ Seeding failed: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
