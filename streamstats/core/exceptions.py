class StreamStatsError(Exception):
    pass


class ConnectionFailure(StreamStatsError):
    """The storage engine could not be reached."""


class ConstraintViolation(StreamStatsError):
    """A unique key already exists, e.g. when bootstrap runs a second time."""


class PipelineFailure(StreamStatsError):
    """The stats rebuild failed; the previous video_stats contents are kept."""
