from sqlalchemy import Column, DateTime, Float, Index, Integer, String

from streamstats.db.database import Base


class VideoStatsColumns:
    video_id = Column(String, primary_key=True)

    total_views = Column(Integer, nullable=False, default=0)
    avg_duration = Column(Float, nullable=False, default=0.0)
    unique_viewers = Column(Integer, nullable=False, default=0)

    last_updated = Column(DateTime(timezone=True), nullable=False)


class VideoStats(VideoStatsColumns, Base):
    __tablename__ = "video_stats"


# Snapshot computed by the rebuild before it replaces video_stats.
class VideoStatsStaging(VideoStatsColumns, Base):
    __tablename__ = "video_stats_staging"


Index("ix_video_stats_video_id", VideoStats.video_id)
Index("ix_video_stats_total_views", VideoStats.total_views.desc())
Index("ix_video_stats_last_updated", VideoStats.last_updated.desc())
