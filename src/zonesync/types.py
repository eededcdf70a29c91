"""Data models for tracked zones and their serializable snapshot."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from datetime import date, time
from typing import Any

# Unix timestamp (seconds, UTC)
Instant = int


@dataclass(frozen=True)
class TrackedZone:
    """One tracked row: a zone, the instant it shows, and its dial value.

    `dial_hour` caches the zone-local hour of `instant` and drives the slider.
    """

    zone_id: str
    instant: Instant
    dial_hour: int


@dataclass(frozen=True)
class TrackedZoneSet:
    """Immutable, ordered collection of tracked zones.

    Order is user-visible and persisted.  Duplicate zone ids are allowed;
    each row is tracked independently.
    """

    zones: tuple[TrackedZone, ...] = ()

    def __len__(self) -> int:
        return len(self.zones)

    def __iter__(self) -> Iterator[TrackedZone]:
        return iter(self.zones)

    def __getitem__(self, index: int) -> TrackedZone:
        return self.zones[index]

    def zone_ids(self) -> list[str]:
        return [z.zone_id for z in self.zones]


@dataclass(frozen=True)
class SnapshotZone:
    """Zone id plus its wall-clock time of day."""

    zone_id: str
    local_time: time

    def to_dict(self) -> dict[str, Any]:
        return {
            "zone_id": self.zone_id,
            "local_time": self.local_time.strftime("%H:%M:%S"),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SnapshotZone:
        return cls(
            zone_id=data["zone_id"],
            local_time=time.fromisoformat(data["local_time"]),
        )


@dataclass(frozen=True)
class ShareSnapshot:
    """Minimal state needed to rebuild a session (persisted to state.json)."""

    reference_date: date
    zones: tuple[SnapshotZone, ...] = field(default_factory=tuple)
    version: int = 1

    @property
    def pairs(self) -> list[tuple[str, time]]:
        return [(z.zone_id, z.local_time) for z in self.zones]

    @classmethod
    def from_pairs(
        cls, reference_date: date, pairs: Sequence[tuple[str, time]]
    ) -> ShareSnapshot:
        return cls(
            reference_date=reference_date,
            zones=tuple(SnapshotZone(zone_id, t) for zone_id, t in pairs),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "reference_date": self.reference_date.isoformat(),
            "zones": [z.to_dict() for z in self.zones],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ShareSnapshot:
        return cls(
            reference_date=date.fromisoformat(data["reference_date"]),
            zones=tuple(SnapshotZone.from_dict(z) for z in data.get("zones", [])),
            version=data.get("version", 1),
        )
