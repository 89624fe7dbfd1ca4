"""Expiry markers and values that carry an expiry time."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Union

Duration = Union[timedelta, int, float]


def _as_timedelta(duration: Duration) -> timedelta:
    if isinstance(duration, timedelta):
        return duration
    return timedelta(seconds=duration)


class Expires:
    """A point in wall-clock time after which something is stale.

    It can also be marked as expired by hand before that point.
    """

    def __init__(self, duration: Duration) -> None:
        self.at: datetime = datetime.now(timezone.utc) + _as_timedelta(duration)
        self.aborted: bool = False

    def is_expired(self) -> bool:
        """Return True once the deadline has passed or the marker was set."""
        return self.aborted or datetime.now(self.at.tzinfo) > self.at

    def set_expired(self, value: bool) -> None:
        """Force the expired state on or off."""
        self.aborted = bool(value)

    def __str__(self) -> str:
        return f"expires at: {self.at}, abort: {str(self.aborted).lower()}"


def expires_at(moment: datetime) -> Expires:
    """Build an Expires that runs out at an absolute moment."""
    marker = Expires(0)
    marker.at = moment
    return marker


class DataExpires(Expires):
    """A value together with the time it stops being valid."""

    def __init__(self, data: Any, duration: Duration) -> None:
        super().__init__(duration)
        self.data = data