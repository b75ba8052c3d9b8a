from streamstats.models.events import Event
from streamstats.models.user_profiles import UserProfile
from streamstats.models.video_stats import VideoStats, VideoStatsStaging
from streamstats.models.videos import Video

__all__ = ["Event", "UserProfile", "Video", "VideoStats", "VideoStatsStaging"]
