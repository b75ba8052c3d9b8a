from datetime import datetime

import pytest_asyncio

from streamstats.db.database import Base, create_engine, create_sessionmaker
from streamstats.models import Event, Video


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    db_path = tmp_path / "streamstats.db"
    engine = create_engine(f"sqlite+aiosqlite:///{db_path}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    session_maker = create_sessionmaker(db_engine)
    async with session_maker() as session:
        yield session


def make_event(event_id, video_id, user_id, duration=60, action="WATCH", timestamp=None):
    return Event(
        id=event_id,
        user_id=user_id,
        video_id=video_id,
        action=action,
        duration=duration,
        quality="1080p",
        device_type="desktop",
        timestamp=timestamp,
    )


def make_video(video_id, category, views, title=None):
    return Video(
        video_id=video_id,
        title=title or f"Title of {video_id}",
        category=category,
        duration=1200,
        upload_date=datetime(2024, 1, 1),
        views=views,
        likes=0,
    )
