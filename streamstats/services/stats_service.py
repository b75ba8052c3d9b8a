from datetime import datetime, timezone
from typing import List, Optional

from loguru import logger
from sqlalchemy import delete, func, insert, select
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from streamstats.core.exceptions import ConnectionFailure, PipelineFailure
from streamstats.models import Event, Video, VideoStats, VideoStatsStaging
from streamstats.schemas.event import EventAction
from streamstats.schemas.video import CategoryBreakdown
from streamstats.schemas.video_stats import StatsReport, VideoStatsRecord

STATS_COLUMNS = ["video_id", "total_views", "avg_duration", "unique_viewers", "last_updated"]

REBUILT_INDEXES = ("ix_video_stats_video_id", "ix_video_stats_total_views")


class StatsService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def run(self, top_n: int = 5, as_of: Optional[datetime] = None) -> StatsReport:
        created = await self.rebuild(as_of=as_of)
        await self.ensure_indexes()
        top_videos = await self.top_videos(limit=top_n)
        categories = await self.category_breakdown()
        return StatsReport(created=created, top_n=top_n, top_videos=top_videos, categories=categories)

    async def rebuild(self, as_of: Optional[datetime] = None) -> int:
        as_of = as_of or datetime.now(timezone.utc)

        aggregation = (
            select(
                Event.video_id,
                func.count(),
                func.avg(Event.duration),
                func.count(Event.user_id.distinct()),
                func.coalesce(func.max(Event.timestamp), as_of),
            )
            .where(Event.action == EventAction.WATCH.value)
            .group_by(Event.video_id)
        )
        staging_columns = [getattr(VideoStatsStaging, name) for name in STATS_COLUMNS]

        try:
            await self.db.execute(delete(VideoStatsStaging))
            await self.db.execute(insert(VideoStatsStaging).from_select(STATS_COLUMNS, aggregation))
            await self.db.execute(delete(VideoStats))
            await self.db.execute(
                insert(VideoStats).from_select(STATS_COLUMNS, select(*staging_columns))
            )
            await self.db.execute(delete(VideoStatsStaging))
            await self.db.commit()
        except (OperationalError, InterfaceError) as e:
            await self.db.rollback()
            if e.connection_invalidated or isinstance(e.orig, OSError):
                raise ConnectionFailure(f"Storage lost during stats rebuild: {e}") from e
            raise PipelineFailure(f"Stats rebuild failed: {e.orig}") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PipelineFailure(f"Stats rebuild failed: {e}") from e

        count = await self.count()
        logger.info(f"Created {count} video stats entries")
        return count

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(VideoStats))
        return int(result.scalar_one())

    async def ensure_indexes(self) -> None:
        indexes = [ix for ix in VideoStats.__table__.indexes if ix.name in REBUILT_INDEXES]
        conn = await self.db.connection()

        def _create(sync_conn):
            for index in indexes:
                index.create(sync_conn, checkfirst=True)

        await conn.run_sync(_create)
        await self.db.commit()
        logger.debug(f"Indexes ensured: {', '.join(ix.name for ix in indexes)}")

    async def top_videos(self, limit: int = 5) -> List[VideoStatsRecord]:
        stmt = (
            select(VideoStats)
            .order_by(VideoStats.total_views.desc(), VideoStats.video_id)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [VideoStatsRecord.model_validate(row) for row in result.scalars().all()]

    async def category_breakdown(self) -> List[CategoryBreakdown]:
        total_views = func.coalesce(func.sum(Video.views), 0).label("total_views")
        stmt = (
            select(Video.category, func.count(Video.video_id).label("count"), total_views)
            .group_by(Video.category)
            .order_by(total_views.desc(), Video.category)
        )
        result = await self.db.execute(stmt)
        categories = [
            CategoryBreakdown(category=category, count=count, total_views=int(views))
            for category, count, views in result.all()
        ]
        logger.debug(f"Category breakdown: {len(categories)} categories")
        return categories
