"""Command-line host for a ConverterSession.

Usage:
  zonesync                          — show tracked zones
  zonesync add <zone>               — track another zone
  zonesync remove <n>               — stop tracking row n
  zonesync move <from> <to>         — reorder rows
  zonesync reverse                  — reverse row order
  zonesync shift <n> <hour>         — set row n's dial to hour (0-23)
  zonesync date <YYYY-MM-DD>        — move every zone onto a date
  zonesync link                     — print the shareable link
  zonesync open <link>              — restore the state from a link
  zonesync meet                     — print a meeting-scheduler link
  zonesync search <text>            — find zone ids

Rows are numbered from 1.  State is kept in <config_dir>/state.json.
"""

from __future__ import annotations

import logging
import sys
from datetime import date

from .catalog import TimeZoneCatalog
from .errors import ZoneSyncError
from .session import ConverterSession
from .settings import AppConfig, load_settings
from .store import SnapshotStore

logger = logging.getLogger(__name__)

_USAGE = (__doc__ or "").split("Usage:\n", 1)[-1].split("\n\n", 1)[0]


_SLIDER_LABELS = ("12am", "3am", "6am", "9am", "12pm", "3pm", "6pm", "9pm")


def _dial_label(hour: int) -> str:
    """Nearest slider label: 4 → 3am, 5 → 6am, 23 → 9pm."""
    return _SLIDER_LABELS[min(round(hour / 3), len(_SLIDER_LABELS) - 1)]


def _format_offset(minutes: int) -> str:
    sign = "+" if minutes >= 0 else "-"
    minutes = abs(minutes)
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def render(session: ConverterSession) -> None:
    """Print the tracked zones as a table."""
    catalog = session.catalog
    print(f"Date: {session.reference_date.isoformat()}")
    if not session.zones:
        print("No time zones tracked. Use `zonesync add <zone>`.")
        return
    width = max(len(z.zone_id) for z in session.zones)
    for i, z in enumerate(session.zones, 1):
        local = catalog.format(z.instant, z.zone_id, "%Y-%m-%d %H:%M:%S")
        offset = _format_offset(catalog.offset_minutes(z.instant, z.zone_id))
        print(
            f"{i:>2}. {z.zone_id:<{width}}  {local}  UTC{offset}  "
            f"dial {z.dial_hour:>2} ({_dial_label(z.dial_hour)})"
        )
    if session.last_side_effect_error:
        print(f"Warning: {session.last_side_effect_error}")


def _parse_row(text: str) -> int:
    """1-based CLI row number → 0-based index."""
    try:
        return int(text) - 1
    except ValueError:
        raise ValueError(f"Row must be a number, got {text!r}") from None


def _parse_int(text: str, what: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"{what} must be a number, got {text!r}") from None


def run(args: list[str], config: AppConfig, catalog: TimeZoneCatalog) -> int:
    """Execute one CLI command. Returns the process exit status."""
    sub = args[0].lower() if args else "show"
    rest = args[1:]

    if sub in ("help", "-h", "--help"):
        print(f"Usage:\n{_USAGE}")
        return 0

    if sub == "search":
        # Read-only: no render trigger
        if not rest:
            print("Usage: zonesync search <text>")
            return 1
        session = ConverterSession.start(
            catalog=catalog, config=config, sink=SnapshotStore(config.state_file)
        )
        matches = session.suggest(" ".join(rest))
        if not matches:
            print("No matching time zones.")
        for zone_id, local in matches:
            print(f"{zone_id:<32} {local}")
        return 0

    session = ConverterSession.start(
        catalog=catalog,
        config=config,
        sink=SnapshotStore(config.state_file),
        on_change=render,
    )

    if sub == "show" and not rest:
        render(session)
    elif sub == "add" and len(rest) == 1:
        session.add_zone(rest[0])
    elif sub == "remove" and len(rest) == 1:
        session.remove_zone(_parse_row(rest[0]))
    elif sub == "move" and len(rest) == 2:
        session.reorder(_parse_row(rest[0]), _parse_row(rest[1]))
    elif sub == "reverse" and not rest:
        session.reverse_order()
    elif sub == "shift" and len(rest) == 2:
        session.shift_dial(_parse_row(rest[0]), _parse_int(rest[1], "Hour"))
    elif sub == "date" and len(rest) == 1:
        try:
            day = date.fromisoformat(rest[0])
        except ValueError:
            raise ValueError(f"Date must be YYYY-MM-DD, got {rest[0]!r}") from None
        session.set_date(day)
    elif sub == "link" and not rest:
        print(session.share_link())
    elif sub == "open" and len(rest) == 1:
        session.open_link(rest[0])
    elif sub == "meet" and not rest:
        url, message = session.schedule_meeting()
        if url is None:
            print(message)
            return 1
        print(url)
    else:
        print(f"Usage:\n{_USAGE}")
        return 1
    return 0


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = sys.argv[1:] if argv is None else argv

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.WARNING,
    )

    try:
        config = load_settings()
    except ValueError as e:
        print(f"Error: {e}\n", file=sys.stderr)
        print("Check your settings.toml configuration.", file=sys.stderr)
        sys.exit(1)

    logging.getLogger("zonesync").setLevel(config.log_level)
    logger.debug("Config dir: %s", config.config_dir)

    try:
        status = run(args, config, TimeZoneCatalog())
    except (ZoneSyncError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    if status:
        sys.exit(status)


if __name__ == "__main__":
    main()
