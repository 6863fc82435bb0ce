"""Analytics error types."""


class AnalyticsError(Exception):
    """Base error for the analytics core."""
    pass


class InvalidEventTypeError(AnalyticsError, ValueError):
    """An operation was given a timeline event of the wrong type."""
    pass


class UnknownTimeRangeError(AnalyticsError, ValueError):
    """A time range name outside the supported set."""
    pass
