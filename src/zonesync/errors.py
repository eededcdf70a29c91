"""Domain errors raised by the sync core.

Every error is recoverable: the operation that raised it left the tracked
state untouched.
"""

from __future__ import annotations


class ZoneSyncError(Exception):
    """Base class for all zonesync errors."""


class InvalidZoneError(ZoneSyncError, ValueError):
    """Zone identifier is not known to the time zone catalog."""

    def __init__(self, zone_id: str) -> None:
        super().__init__(f"Unknown time zone: {zone_id!r}")
        self.zone_id = zone_id


class IndexOutOfRangeError(ZoneSyncError, IndexError):
    """Position does not address a tracked zone."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"Index {index} out of range for {length} tracked zone(s)")
        self.index = index
        self.length = length


class InvalidDialHourError(ZoneSyncError, ValueError):
    """Dial value outside 0..23."""

    def __init__(self, hour: object) -> None:
        super().__init__(f"Dial hour must be an integer 0..23, got {hour!r}")
        self.hour = hour


class MalformedLinkError(ZoneSyncError, ValueError):
    """Shared link cannot be parsed."""
