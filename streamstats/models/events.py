from sqlalchemy import Column, DateTime, Index, Integer, String

from streamstats.db.database import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(String, primary_key=True)

    user_id = Column(String, nullable=False)
    video_id = Column(String, nullable=False)

    action = Column(String(16), nullable=False)
    duration = Column(Integer, nullable=False, default=0)
    quality = Column(String(16), nullable=True)
    device_type = Column(String(16), nullable=True)

    timestamp = Column(DateTime(timezone=True), nullable=True)


Index("ix_events_user_id", Event.user_id)
Index("ix_events_video_id", Event.video_id)
Index("ix_events_timestamp", Event.timestamp.desc())
Index("ix_events_user_id_timestamp", Event.user_id, Event.timestamp.desc())
Index("ix_events_video_id_timestamp", Event.video_id, Event.timestamp.desc())
