from datetime import datetime, timedelta

import pytest
from sqlalchemy import func, select

from conftest import make_video
from streamstats.models import Event, Video
from streamstats.schemas.event import EventAction
from streamstats.services.data_generator_service import (
    CATEGORIES,
    DEVICE_TYPES,
    MOVIES_BY_CATEGORY,
    QUALITIES,
    DataGeneratorService,
)
from streamstats.services.stats_service import StatsService

NOW = datetime(2024, 5, 2, 0, 0, 0)


def test_generated_events_are_within_bounds():
    generator = DataGeneratorService(None, num_users=10, num_videos=3, seed=7, now=NOW)

    events = [generator.generate_event() for _ in range(500)]

    assert {e.video_id for e in events} <= {"video_1", "video_2", "video_3"}
    assert all(1 <= int(e.user_id.split("_")[1]) <= 10 for e in events)
    assert all(e.quality in QUALITIES and e.device_type in DEVICE_TYPES for e in events)
    assert all(NOW - timedelta(hours=24) < e.timestamp <= NOW for e in events)
    for e in events:
        if e.action == EventAction.WATCH:
            assert 30 <= e.duration < 3600
        else:
            assert 0 <= e.duration < 300
    assert len({e.id for e in events}) == len(events)


def test_generator_is_reproducible_with_seed():
    first = DataGeneratorService(None, seed=42, now=NOW).generate_event()
    second = DataGeneratorService(None, seed=42, now=NOW).generate_event()

    assert first == second


def test_generator_rejects_empty_population():
    with pytest.raises(ValueError):
        DataGeneratorService(None, num_videos=0)


@pytest.mark.asyncio
async def test_generate_events_inserts_in_batches(db_session):
    generator = DataGeneratorService(db_session, num_users=50, num_videos=5, seed=1, now=NOW)

    loaded = await generator.generate_events(250, batch_size=100)

    assert loaded == 250
    total = (await db_session.execute(select(func.count()).select_from(Event))).scalar_one()
    assert total == 250


@pytest.mark.asyncio
async def test_generated_events_feed_the_rebuild(db_session):
    await DataGeneratorService(db_session, num_users=20, num_videos=4, seed=3, now=NOW).generate_events(400)

    watched = await db_session.execute(
        select(func.count(Event.video_id.distinct())).where(Event.action == "WATCH")
    )

    assert await StatsService(db_session).rebuild() == watched.scalar_one()


def test_generated_videos_map_ids_to_categories_and_titles():
    generator = DataGeneratorService(None, seed=5, now=NOW)

    first, second, eleventh, sixtieth = (generator.generate_video(n) for n in (1, 2, 11, 60))

    assert (first.category, first.title) == ("Action", "The Dark Knight")
    assert (second.category, second.title) == ("Comedy", "The Hangover")
    assert (eleventh.category, eleventh.title) == ("Action", "Mad Max: Fury Road")
    assert (sixtieth.category, sixtieth.title) == ("Adventure", "Dune")


def test_generated_videos_are_within_bounds():
    generator = DataGeneratorService(None, seed=11, now=NOW)

    videos = [generator.generate_video(n) for n in range(1, 61)]

    assert len({v.title for v in videos}) == 60
    for v in videos:
        assert v.category in CATEGORIES
        assert v.title in MOVIES_BY_CATEGORY[v.category]
        assert 5400 <= v.duration < 10800
        assert NOW - timedelta(days=365) < v.upload_date <= NOW
        assert 100 <= v.views < 1000000
        assert 10 <= v.likes < 50000


def test_generate_video_rejects_non_positive_number():
    with pytest.raises(ValueError):
        DataGeneratorService(None).generate_video(0)


@pytest.mark.asyncio
async def test_generate_videos_skips_existing_ids(db_session):
    db_session.add(make_video("video_2", "Educational", 8500))
    await db_session.commit()
    generator = DataGeneratorService(db_session, num_videos=12, seed=2, now=NOW)

    added = await generator.generate_videos()
    added_again = await generator.generate_videos()

    assert added == 11
    assert added_again == 0
    videos = (await db_session.execute(select(Video))).scalars().all()
    by_id = {v.video_id: v for v in videos}
    assert len(by_id) == 12
    assert by_id["video_2"].category == "Educational"
    assert by_id["video_11"].category == "Action"
