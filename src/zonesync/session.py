"""ConverterSession — the single entry point for the hosting UI layer.

Holds the current TrackedZoneSet and reference date.  Every mutating call:
  1. computes the new set with the pure functions in sync.py
  2. commits it (only if step 1 succeeded)
  3. notifies the snapshot sink and the render trigger

Side-effect failures in step 3 are logged and kept in
`last_side_effect_error`; they never undo the committed state.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import date, datetime, timezone
from typing import Protocol

from . import sync
from .catalog import TimeZoneCatalog, search_zones
from .errors import InvalidZoneError
from .link import decode_link, encode_link, meeting_link
from .settings import AppConfig
from .types import Instant, ShareSnapshot, TrackedZoneSet

logger = logging.getLogger(__name__)


class SnapshotSink(Protocol):
    """Durable storage for the session state."""

    def load(self) -> ShareSnapshot | None: ...

    def save(self, snapshot: ShareSnapshot) -> None: ...


def _system_clock() -> Instant:
    return int(time.time())


def _utc_date(instant: Instant) -> date:
    return datetime.fromtimestamp(instant, tz=timezone.utc).date()


class ConverterSession:
    """Tracks zones for one user and reports every change outward."""

    def __init__(
        self,
        *,
        catalog: TimeZoneCatalog,
        zones: TrackedZoneSet,
        reference_date: date,
        config: AppConfig,
        sink: SnapshotSink | None = None,
        on_change: Callable[[ConverterSession], None] | None = None,
        clock: Callable[[], Instant] = _system_clock,
    ) -> None:
        self._catalog = catalog
        self._zones = zones
        self._reference_date = reference_date
        self._config = config
        self._sink = sink
        self._on_change = on_change
        self._clock = clock
        self.last_side_effect_error: str = ""

    # --- Construction ---

    @classmethod
    def start(
        cls,
        *,
        catalog: TimeZoneCatalog,
        config: AppConfig,
        sink: SnapshotSink | None = None,
        link: str = "",
        on_change: Callable[[ConverterSession], None] | None = None,
        clock: Callable[[], Instant] = _system_clock,
    ) -> ConverterSession:
        """Restore a session: shared link first, then the sink, then defaults.

        A malformed link raises MalformedLinkError; nothing is persisted
        until the first change.
        """
        now = clock()
        reference_date: date | None = None
        pairs: list = []
        source = "defaults"

        if link:
            reference_date, pairs = decode_link(link, catalog)
            source = "link"
        elif sink is not None:
            snapshot = sink.load()
            if snapshot is not None:
                reference_date, pairs = snapshot.reference_date, snapshot.pairs
                source = "snapshot"

        if reference_date is None:
            reference_date = _utc_date(now)

        if source == "link":
            zones = sync.restore_zones(pairs, reference_date, catalog)
        elif source == "snapshot":
            try:
                zones = sync.restore_zones(pairs, reference_date, catalog)
            except InvalidZoneError as e:
                logger.warning("Ignoring saved snapshot: %s", e)
                source = "defaults"
                reference_date = _utc_date(now)

        if source == "defaults":
            zones = TrackedZoneSet()
            for zone_id in config.default_zones:
                zones = sync.add_zone(zones, zone_id, now, catalog)

        logger.info(
            "Session started from %s with %d zone(s) on %s",
            source,
            len(zones),
            reference_date,
        )
        return cls(
            catalog=catalog,
            zones=zones,
            reference_date=reference_date,
            config=config,
            sink=sink,
            on_change=on_change,
            clock=clock,
        )

    # --- Read-only state ---

    @property
    def zones(self) -> TrackedZoneSet:
        return self._zones

    @property
    def reference_date(self) -> date:
        return self._reference_date

    @property
    def catalog(self) -> TimeZoneCatalog:
        return self._catalog

    def snapshot(self) -> ShareSnapshot:
        return ShareSnapshot.from_pairs(
            self._reference_date,
            [
                (z.zone_id, self._catalog.local_datetime(z.instant, z.zone_id).time())
                for z in self._zones
            ],
        )

    # --- Transitions ---

    def add_zone(self, zone_id: str) -> None:
        """Track `zone_id` at the current time of day on the reference date."""
        now = self._clock()
        if self._catalog.is_valid_zone(zone_id):
            now = self._catalog.with_local_date(now, zone_id, self._reference_date)
        self._commit(sync.add_zone(self._zones, zone_id, now, self._catalog))

    def remove_zone(self, index: int) -> None:
        self._commit(sync.remove_zone(self._zones, index))

    def reorder(self, from_index: int, to_index: int) -> None:
        self._commit(sync.reorder(self._zones, from_index, to_index))

    def reverse_order(self) -> None:
        self._commit(sync.reverse_order(self._zones))

    def shift_dial(self, index: int, new_dial_hour: int) -> None:
        self._commit(
            sync.shift_dial(self._zones, index, new_dial_hour, self._catalog)
        )

    def set_date(self, day: date) -> None:
        zones = sync.set_reference_date(self._zones, day, self._catalog)
        self._commit(zones, reference_date=day)

    def open_link(self, link: str) -> None:
        """Replace the whole state with the one encoded in a share link."""
        reference_date, pairs = decode_link(link, self._catalog)
        if reference_date is None:
            reference_date = self._reference_date
        zones = sync.restore_zones(pairs, reference_date, self._catalog)
        self._commit(zones, reference_date=reference_date)

    def _commit(
        self, zones: TrackedZoneSet, reference_date: date | None = None
    ) -> None:
        self._zones = zones
        if reference_date is not None:
            self._reference_date = reference_date
        logger.debug(
            "State now %s on %s", zones.zone_ids(), self._reference_date
        )
        self._notify()

    def _notify(self) -> None:
        self.last_side_effect_error = ""
        if self._sink is not None:
            self._run_side_effect("save snapshot", self._sink.save, self.snapshot())
        if self._on_change is not None:
            self._run_side_effect("render", self._on_change, self)

    def _run_side_effect(self, label: str, fn: Callable, *args) -> None:
        try:
            fn(*args)
        except Exception as e:
            logger.warning("Failed to %s: %s", label, e)
            self.last_side_effect_error = f"Failed to {label}: {e}"

    # --- Derived outputs ---

    def share_link(self) -> str:
        return encode_link(
            self._zones, self._reference_date, self._catalog, self._config.origin
        )

    def copy_share_link(self, clipboard: Callable[[str], None]) -> str:
        """Hand the share link to a clipboard writer; failures are non-fatal."""
        link = self.share_link()
        self.last_side_effect_error = ""
        self._run_side_effect("copy link", clipboard, link)
        return link

    def schedule_meeting(self) -> tuple[str | None, str]:
        """Return (meeting_url, message); message is set when no zones exist."""
        return meeting_link(self._zones, self._config.meet_provider)

    def suggest(self, text: str) -> list[tuple[str, str]]:
        """Search zone ids, pairing each hit with its time on the reference date."""
        now = self._clock()
        results = []
        for zone_id in search_zones(self._catalog, text):
            instant = self._catalog.with_local_date(now, zone_id, self._reference_date)
            results.append(
                (zone_id, self._catalog.format(instant, zone_id, "%Y-%m-%d %H:%M:%S"))
            )
        return results
