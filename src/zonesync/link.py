"""Shareable link codec and the derived meeting-scheduler link.

Link format:
  <origin>?date=YYYY-MM-DD&timezones=Zone/A:HH:MM:SS,Zone/B:HH:MM:SS

  - zone order matches the tracked order and must round-trip exactly
  - "/" and "_" in zone ids stay literal; other reserved characters
    (e.g. "+" in Etc/GMT+5) are percent-encoded
  - an empty set encodes to the bare origin
"""

from __future__ import annotations

import logging
import re
import urllib.parse
from datetime import date, datetime, time, timezone

from .catalog import TimeZoneCatalog
from .errors import MalformedLinkError
from .types import TrackedZoneSet

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
_TIME_RE = re.compile(r"^[0-9]{2}$")

NO_ZONES_MESSAGE = "Please add time zones first."


# ---------------------------------------------------------------------------
# Encode
# ---------------------------------------------------------------------------


def encode_link(
    zones: TrackedZoneSet,
    reference_date: date,
    catalog: TimeZoneCatalog,
    origin: str,
) -> str:
    """Render the canonical share link for `zones` on `reference_date`."""
    if not zones:
        return origin
    segments = ",".join(
        f"{urllib.parse.quote(z.zone_id, safe='/')}:"
        f"{catalog.format(z.instant, z.zone_id, '%H:%M:%S')}"
        for z in zones
    )
    return f"{origin}?date={reference_date.isoformat()}&timezones={segments}"


# ---------------------------------------------------------------------------
# Decode
# ---------------------------------------------------------------------------


def _parse_query(query: str) -> dict[str, str]:
    """Split a query string without treating "+" as a space."""
    params: dict[str, str] = {}
    for part in query.split("&"):
        if not part:
            continue
        key, sep, value = part.partition("=")
        if not sep:
            raise MalformedLinkError(f"Query parameter without value: {part!r}")
        params[urllib.parse.unquote(key)] = value
    return params


def _parse_date(text: str) -> date:
    if not _DATE_RE.match(text):
        raise MalformedLinkError(f"Date must be YYYY-MM-DD, got {text!r}")
    try:
        return date.fromisoformat(text)
    except ValueError as e:
        raise MalformedLinkError(f"Invalid date {text!r}: {e}") from e


def _parse_segment(segment: str, catalog: TimeZoneCatalog) -> tuple[str, time]:
    """Parse one "Zone/Id:HH:MM:SS" segment."""
    zone_part, sep, time_part = segment.partition(":")
    fields = time_part.split(":") if sep else []
    if len(fields) != 3 or not all(_TIME_RE.match(f) for f in fields):
        raise MalformedLinkError(f"Expected Zone:HH:MM:SS, got {segment!r}")

    zone_id = urllib.parse.unquote(zone_part)
    if not catalog.is_valid_zone(zone_id):
        raise MalformedLinkError(f"Unknown time zone in link: {zone_id!r}")

    hour, minute, second = (int(f) for f in fields)
    try:
        return zone_id, time(hour, minute, second)
    except ValueError as e:
        raise MalformedLinkError(f"Invalid time in {segment!r}: {e}") from e


def decode_link(
    link: str, catalog: TimeZoneCatalog
) -> tuple[date | None, list[tuple[str, time]]]:
    """Parse a share link into (reference_date, [(zone_id, local_time), ...]).

    A link without a query string (the encoding of an empty set) yields
    (None, []).
    """
    query = urllib.parse.urlsplit(link.strip()).query
    if not query:
        return None, []

    params = _parse_query(query)
    if "date" not in params:
        raise MalformedLinkError("Link is missing the date parameter")
    reference_date = _parse_date(urllib.parse.unquote(params["date"]))

    raw_zones = params.get("timezones", "")
    if not raw_zones:
        return reference_date, []
    pairs = [_parse_segment(seg, catalog) for seg in raw_zones.split(",")]
    logger.debug("Decoded link with %d zone(s) on %s", len(pairs), reference_date)
    return reference_date, pairs


# ---------------------------------------------------------------------------
# Meeting link
# ---------------------------------------------------------------------------


def meeting_link(
    zones: TrackedZoneSet, provider: str = "google.com"
) -> tuple[str | None, str]:
    """Build the meeting-scheduler URL from the first tracked zone.

    Returns (url, error_message). With no tracked zones url is None and
    error_message is meant for the user.
    """
    if not zones:
        return None, NO_ZONES_MESSAGE
    start = datetime.fromtimestamp(zones[0].instant, tz=timezone.utc)
    return (
        f"https://meet.{provider}/new?startTime={start.strftime('%Y-%m-%dT%H:%M:%S')}",
        "",
    )
