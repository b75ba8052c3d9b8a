import random
import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from streamstats.models import Event, Video
from streamstats.schemas.event import EventAction, EventRecord
from streamstats.schemas.video import VideoRecord

QUALITIES = ["360p", "480p", "720p", "1080p", "4K"]
DEVICE_TYPES = ["mobile", "desktop", "tablet", "tv", "console"]

CATEGORIES = [
    "Action", "Comedy", "Drama", "Documentary", "Sci-Fi",
    "Horror", "Romance", "Thriller", "Animation", "Adventure",
]

MOVIES_BY_CATEGORY = {
    "Action": ["The Dark Knight", "Mad Max: Fury Road", "John Wick", "Die Hard", "Gladiator", "Mission: Impossible"],
    "Comedy": ["The Hangover", "Superbad", "Bridesmaids", "Step Brothers", "Anchorman", "The Office"],
    "Drama": ["The Shawshank Redemption", "Forrest Gump", "The Godfather", "Schindler's List", "Breaking Bad", "The Crown"],
    "Documentary": ["Planet Earth", "Our Planet", "Making a Murderer", "The Social Dilemma", "Free Solo", "Tiger King"],
    "Sci-Fi": ["Interstellar", "Inception", "The Matrix", "Blade Runner 2049", "Stranger Things", "Black Mirror"],
    "Horror": ["The Conjuring", "Get Out", "A Quiet Place", "Hereditary", "The Shining", "IT"],
    "Romance": ["The Notebook", "Titanic", "Pride and Prejudice", "La La Land", "When Harry Met Sally", "Bridgerton"],
    "Thriller": ["Gone Girl", "Se7en", "Silence of the Lambs", "Shutter Island", "Zodiac", "Mindhunter"],
    "Animation": ["Toy Story", "Finding Nemo", "The Lion King", "Spirited Away", "Frozen", "Spider-Man: Into the Spider-Verse"],
    "Adventure": ["Indiana Jones", "Jurassic Park", "Avatar", "Pirates of the Caribbean", "The Lord of the Rings", "Dune"],
}

NUM_USERS = 50000
NUM_VIDEOS = 60


class DataGeneratorService:
    """Writes a synthetic video catalog and viewing events so the stats rebuild has data to aggregate.

    Users and videos are drawn uniformly from ``user_1..num_users`` and
    ``video_1..num_videos``; timestamps fall within the 24 hours before ``now``.
    Catalog entry ``video_<n>`` always maps to the same category and title.
    """

    def __init__(
        self,
        db: AsyncSession,
        num_users: int = NUM_USERS,
        num_videos: int = NUM_VIDEOS,
        seed: Optional[int] = None,
        now: Optional[datetime] = None,
    ):
        if num_users < 1 or num_videos < 1:
            raise ValueError("num_users and num_videos must be >= 1")
        self.db = db
        self.num_users = num_users
        self.num_videos = num_videos
        self.random = random.Random(seed)
        self.now = now or datetime.now(timezone.utc)

    def generate_video(self, video_number: int) -> VideoRecord:
        if video_number < 1:
            raise ValueError("video_number must be >= 1")

        category = CATEGORIES[(video_number - 1) % len(CATEGORIES)]
        titles = MOVIES_BY_CATEGORY[category]
        title = titles[((video_number - 1) // len(CATEGORIES)) % len(titles)]

        return VideoRecord(
            video_id=f"video_{video_number}",
            title=title,
            category=category,
            duration=self.random.randint(5400, 10799),
            upload_date=self.now - timedelta(days=self.random.randrange(365)),
            views=self.random.randint(100, 999999),
            likes=self.random.randint(10, 49999),
        )

    async def generate_videos(self, count: Optional[int] = None) -> int:
        count = self.num_videos if count is None else count
        if count < 0:
            raise ValueError("count must be >= 0")

        video_ids = [f"video_{n}" for n in range(1, count + 1)]
        result = await self.db.execute(select(Video.video_id).where(Video.video_id.in_(video_ids)))
        existing = set(result.scalars().all())

        videos = [
            Video(**self.generate_video(n).model_dump())
            for n in range(1, count + 1)
            if f"video_{n}" not in existing
        ]
        if videos:
            await self._commit_batch(videos)

        logger.info(f"Video catalog: {len(videos)} added, {len(existing)} already present")
        return len(videos)

    def generate_event(self) -> EventRecord:
        action = self.random.choice(list(EventAction))
        if action == EventAction.WATCH:
            duration = self.random.randint(30, 3599)
        else:
            duration = self.random.randint(0, 299)

        return EventRecord(
            id=f"evt_{uuid.UUID(int=self.random.getrandbits(128)).hex[:12]}",
            user_id=f"user_{self.random.randint(1, self.num_users)}",
            video_id=f"video_{self.random.randint(1, self.num_videos)}",
            action=action,
            duration=duration,
            quality=self.random.choice(QUALITIES),
            device_type=self.random.choice(DEVICE_TYPES),
            timestamp=self.now - timedelta(minutes=self.random.randrange(24 * 60)),
        )

    async def generate_events(self, count: int, batch_size: int = 1000) -> int:
        if count < 0:
            raise ValueError("count must be >= 0")

        events_loaded = 0
        batch: List[Event] = []

        for _ in range(count):
            record = self.generate_event()
            batch.append(Event(**record.model_dump()))

            if len(batch) >= batch_size:
                await self._commit_batch(batch)
                events_loaded += len(batch)
                batch = []
                logger.info(f"Loaded batch: {events_loaded}/{count} events")

        if batch:
            await self._commit_batch(batch)
            events_loaded += len(batch)

        logger.info(f"Event generation completed: {events_loaded} events")
        return events_loaded

    async def _commit_batch(self, batch: list) -> None:
        try:
            self.db.add_all(batch)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error committing batch: {e}")
            raise
