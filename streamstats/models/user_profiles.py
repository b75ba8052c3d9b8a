from sqlalchemy import JSON, Column, DateTime, String

from streamstats.db.database import Base


class UserProfile(Base):
    __tablename__ = "user_profiles"

    user_id = Column(String, primary_key=True)

    watch_history = Column(JSON, nullable=False, default=list)
    # category -> watch count
    preferences = Column(JSON, nullable=False, default=dict)
    recommended_videos = Column(JSON, nullable=False, default=list)

    last_active = Column(DateTime(timezone=True), nullable=True)
