"""IANA time zone catalog backed by zoneinfo.

The rest of the package only talks to TimeZoneCatalog; it never imports
zoneinfo directly.  Instants are integer Unix timestamps (seconds).

Ambiguous local times are resolved by taking the later valid instant:
  - repeated hour (fall back): the second occurrence wins
  - skipped hour (spring forward): the wall time after the gap wins,
    e.g. 02:30 in a 02:00-03:00 gap resolves to 03:30
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from functools import cached_property
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

from .errors import InvalidZoneError
from .types import Instant

logger = logging.getLogger(__name__)


class TimeZoneCatalog:
    """Resolves zone ids, offsets and local wall-clock projections."""

    @cached_property
    def _zone_ids(self) -> frozenset[str]:
        zone_ids = frozenset(available_timezones())
        logger.debug("Loaded %d time zones", len(zone_ids))
        return zone_ids

    def list_zone_ids(self) -> list[str]:
        return sorted(self._zone_ids)

    def is_valid_zone(self, zone_id: str) -> bool:
        return zone_id in self._zone_ids

    def _zone(self, zone_id: str) -> ZoneInfo:
        if not self.is_valid_zone(zone_id):
            raise InvalidZoneError(zone_id)
        try:
            return ZoneInfo(zone_id)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise InvalidZoneError(zone_id) from e

    # --- Projections ---

    def local_datetime(self, instant: Instant, zone_id: str) -> datetime:
        """Aware datetime for `instant` on the zone's wall clock."""
        return datetime.fromtimestamp(instant, tz=self._zone(zone_id))

    def local_date(self, instant: Instant, zone_id: str) -> date:
        return self.local_datetime(instant, zone_id).date()

    def local_hour(self, instant: Instant, zone_id: str) -> int:
        return self.local_datetime(instant, zone_id).hour

    def offset_minutes(self, instant: Instant, zone_id: str) -> int:
        offset = self.local_datetime(instant, zone_id).utcoffset()
        if offset is None:
            return 0
        return int(offset.total_seconds()) // 60

    def format(self, instant: Instant, zone_id: str, pattern: str) -> str:
        """strftime-style formatting of the zone-local wall time."""
        return self.local_datetime(instant, zone_id).strftime(pattern)

    # --- Local wall time → instant ---

    def at_local(self, zone_id: str, day: date, time_of_day: time) -> Instant:
        """Instant whose wall time in `zone_id` is `day` at `time_of_day`.

        Ambiguous and skipped wall times resolve to the later instant.
        """
        tz = self._zone(zone_id)
        naive = datetime.combine(day, time_of_day.replace(tzinfo=None))
        return max(
            int(naive.replace(tzinfo=tz, fold=fold).timestamp()) for fold in (0, 1)
        )

    def with_local_date(self, instant: Instant, zone_id: str, day: date) -> Instant:
        """Move `instant` onto `day`, keeping the zone-local time of day."""
        local = self.local_datetime(instant, zone_id)
        return self.at_local(zone_id, day, local.time())


def search_zones(catalog: TimeZoneCatalog, text: str) -> list[str]:
    """Case-insensitive substring search over all zone ids.

    Blank input returns no suggestions.
    """
    needle = text.strip().lower()
    if not needle:
        return []
    return [z for z in catalog.list_zone_ids() if needle in z.lower()]
