from sqlalchemy import Column, DateTime, Index, Integer, String

from streamstats.db.database import Base


class Video(Base):
    __tablename__ = "videos"

    video_id = Column(String, primary_key=True)

    title = Column(String, nullable=False)
    category = Column(String, nullable=False)

    duration = Column(Integer, nullable=False, default=0)
    upload_date = Column(DateTime(timezone=True), nullable=False)

    views = Column(Integer, nullable=False, default=0)
    likes = Column(Integer, nullable=False, default=0)


Index("ix_videos_category", Video.category)
Index("ix_videos_views", Video.views.desc())
