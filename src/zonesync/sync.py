"""Pure transformations over a TrackedZoneSet.

Every function returns a new set and never mutates its input.  After any
transformation each row satisfies:

    row.dial_hour == catalog.local_hour(row.instant, row.zone_id)
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, time

from .catalog import TimeZoneCatalog
from .errors import IndexOutOfRangeError, InvalidDialHourError, InvalidZoneError
from .types import Instant, TrackedZone, TrackedZoneSet

_SECONDS_PER_HOUR = 3600


def _check_index(zones: TrackedZoneSet, index: int) -> None:
    """Reject anything outside [0, len), including negative indices."""
    if not 0 <= index < len(zones):
        raise IndexOutOfRangeError(index, len(zones))


def _track(catalog: TimeZoneCatalog, zone_id: str, instant: Instant) -> TrackedZone:
    return TrackedZone(
        zone_id=zone_id,
        instant=instant,
        dial_hour=catalog.local_hour(instant, zone_id),
    )


def add_zone(
    zones: TrackedZoneSet,
    zone_id: str,
    at_instant: Instant,
    catalog: TimeZoneCatalog,
) -> TrackedZoneSet:
    """Append `zone_id` showing `at_instant`."""
    if not catalog.is_valid_zone(zone_id):
        raise InvalidZoneError(zone_id)
    return TrackedZoneSet(zones.zones + (_track(catalog, zone_id, at_instant),))


def remove_zone(zones: TrackedZoneSet, index: int) -> TrackedZoneSet:
    _check_index(zones, index)
    return TrackedZoneSet(zones.zones[:index] + zones.zones[index + 1 :])


def reorder(zones: TrackedZoneSet, from_index: int, to_index: int) -> TrackedZoneSet:
    """Move one row to `to_index`, keeping the others in relative order."""
    _check_index(zones, from_index)
    _check_index(zones, to_index)
    if from_index == to_index:
        return zones
    items = list(zones.zones)
    moved = items.pop(from_index)
    items.insert(to_index, moved)
    return TrackedZoneSet(tuple(items))


def reverse_order(zones: TrackedZoneSet) -> TrackedZoneSet:
    return TrackedZoneSet(zones.zones[::-1])


def shift_dial(
    zones: TrackedZoneSet,
    index: int,
    new_dial_hour: int,
    catalog: TimeZoneCatalog,
) -> TrackedZoneSet:
    """Move one row's dial and shift every row by the same number of hours.

    The delta is the literal slider distance (23 → 0 is -23 hours, not +1).
    Each row's dial is then recomputed from its own shifted instant, so
    zones with fractional offsets keep their real local hour.
    """
    _check_index(zones, index)
    if (
        isinstance(new_dial_hour, bool)
        or not isinstance(new_dial_hour, int)
        or not 0 <= new_dial_hour <= 23
    ):
        raise InvalidDialHourError(new_dial_hour)

    delta = new_dial_hour - zones[index].dial_hour
    if delta == 0:
        return zones
    shift = delta * _SECONDS_PER_HOUR
    return TrackedZoneSet(
        tuple(_track(catalog, z.zone_id, z.instant + shift) for z in zones)
    )


def set_reference_date(
    zones: TrackedZoneSet, day: date, catalog: TimeZoneCatalog
) -> TrackedZoneSet:
    """Put every row on `day` in its own calendar, keeping its time of day."""
    return TrackedZoneSet(
        tuple(
            _track(catalog, z.zone_id, catalog.with_local_date(z.instant, z.zone_id, day))
            for z in zones
        )
    )


def restore_zones(
    pairs: Sequence[tuple[str, time]],
    day: date,
    catalog: TimeZoneCatalog,
) -> TrackedZoneSet:
    """Build a set from (zone_id, local time) pairs on `day`.

    Raises InvalidZoneError on the first unknown zone id.
    """
    restored = TrackedZoneSet()
    for zone_id, time_of_day in pairs:
        restored = add_zone(
            restored, zone_id, catalog.at_local(zone_id, day, time_of_day), catalog
        )
    return restored
