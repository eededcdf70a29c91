"""Tests for the command-line host."""

import json
from pathlib import Path

import pytest

from zonesync.catalog import TimeZoneCatalog
from zonesync.main import _dial_label, _format_offset, main, run
from zonesync.settings import AppConfig

ORIGIN = "https://zones.example.com"


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    return AppConfig(config_dir=tmp_path, origin=ORIGIN)


def _seed(config: AppConfig, zones: list[tuple[str, str]], day: str = "2024-01-01"):
    config.state_file.write_text(
        json.dumps(
            {
                "version": 1,
                "reference_date": day,
                "zones": [{"zone_id": z, "local_time": t} for z, t in zones],
            }
        )
    )


def _saved_zone_ids(config: AppConfig) -> list[str]:
    data = json.loads(config.state_file.read_text())
    return [z["zone_id"] for z in data["zones"]]


class TestHelpers:
    @pytest.mark.parametrize(
        "hour,label",
        [(0, "12am"), (1, "12am"), (4, "3am"), (5, "6am"), (12, "12pm"), (15, "3pm"), (23, "9pm")],
    )
    def test_dial_label(self, hour: int, label: str):
        assert _dial_label(hour) == label

    def test_format_offset(self):
        assert _format_offset(330) == "+05:30"
        assert _format_offset(-210) == "-03:30"
        assert _format_offset(0) == "+00:00"


class TestRun:
    def test_show(self, config: AppConfig, catalog: TimeZoneCatalog, capsys):
        _seed(config, [("UTC", "00:00:00"), ("Asia/Kolkata", "05:30:00")])
        assert run([], config, catalog) == 0
        out = capsys.readouterr().out
        assert "Date: 2024-01-01" in out
        assert " 1. UTC" in out
        assert "2024-01-01 05:30:00  UTC+05:30  dial  5 (6am)" in out

    def test_add_and_persist(self, config: AppConfig, catalog: TimeZoneCatalog, capsys):
        _seed(config, [("UTC", "00:00:00")])
        assert run(["add", "Asia/Tokyo"], config, catalog) == 0
        assert _saved_zone_ids(config) == ["UTC", "Asia/Tokyo"]
        assert "Asia/Tokyo" in capsys.readouterr().out

    def test_rows_are_one_based(self, config: AppConfig, catalog: TimeZoneCatalog):
        _seed(config, [("UTC", "00:00:00"), ("Asia/Kolkata", "05:30:00"), ("Europe/Paris", "01:00:00")])
        run(["move", "3", "1"], config, catalog)
        assert _saved_zone_ids(config) == ["Europe/Paris", "UTC", "Asia/Kolkata"]
        run(["remove", "2"], config, catalog)
        assert _saved_zone_ids(config) == ["Europe/Paris", "Asia/Kolkata"]
        run(["reverse"], config, catalog)
        assert _saved_zone_ids(config) == ["Asia/Kolkata", "Europe/Paris"]

    def test_shift(self, config: AppConfig, catalog: TimeZoneCatalog):
        _seed(config, [("UTC", "00:00:00"), ("Asia/Kolkata", "05:30:00")])
        run(["shift", "1", "5"], config, catalog)
        data = json.loads(config.state_file.read_text())
        assert [z["local_time"] for z in data["zones"]] == ["05:00:00", "10:30:00"]

    def test_date(self, config: AppConfig, catalog: TimeZoneCatalog):
        _seed(config, [("UTC", "08:00:00")])
        run(["date", "2024-09-09"], config, catalog)
        data = json.loads(config.state_file.read_text())
        assert data["reference_date"] == "2024-09-09"
        assert data["zones"][0]["local_time"] == "08:00:00"

    def test_bad_date(self, config: AppConfig, catalog: TimeZoneCatalog):
        with pytest.raises(ValueError, match="YYYY-MM-DD"):
            run(["date", "tomorrow"], config, catalog)

    def test_link_and_open(self, config: AppConfig, catalog: TimeZoneCatalog, capsys):
        _seed(config, [("UTC", "00:00:00"), ("Asia/Kolkata", "05:30:00")])
        run(["link"], config, catalog)
        link = capsys.readouterr().out.strip()
        assert link == f"{ORIGIN}?date=2024-01-01&timezones=UTC:00:00:00,Asia/Kolkata:05:30:00"

        run(["open", f"{ORIGIN}?date=2024-02-02&timezones=Asia/Tokyo:09:00:00"], config, catalog)
        assert _saved_zone_ids(config) == ["Asia/Tokyo"]

    def test_meet(self, config: AppConfig, catalog: TimeZoneCatalog, capsys):
        _seed(config, [("Asia/Kolkata", "05:30:00")])
        assert run(["meet"], config, catalog) == 0
        assert capsys.readouterr().out.strip() == (
            "https://meet.google.com/new?startTime=2024-01-01T00:00:00"
        )

    def test_meet_without_zones(self, config: AppConfig, catalog: TimeZoneCatalog, capsys):
        _seed(config, [])
        assert run(["meet"], config, catalog) == 1
        assert "Please add time zones first." in capsys.readouterr().out

    def test_search(self, config: AppConfig, catalog: TimeZoneCatalog, capsys):
        _seed(config, [("UTC", "00:00:00")])
        assert run(["search", "kolkata"], config, catalog) == 0
        assert "Asia/Kolkata" in capsys.readouterr().out

    def test_unknown_command(self, config: AppConfig, catalog: TimeZoneCatalog, capsys):
        assert run(["frobnicate"], config, catalog) == 1
        assert "Usage:" in capsys.readouterr().out


class TestMain:
    @pytest.fixture(autouse=True)
    def _config_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("ZONESYNC_DIR", str(tmp_path))

    def test_invalid_zone_exits(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["add", "Not/AZone"])
        assert exc.value.code == 1
        assert "Unknown time zone" in capsys.readouterr().err

    def test_bad_index_exits(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["remove", "9"])
        assert exc.value.code == 1
        assert "out of range" in capsys.readouterr().err

    def test_bad_settings_exit(self, tmp_path: Path, capsys):
        (tmp_path / "settings.toml").write_text('[zonesync]\nlog_level = "loud"\n')
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 1
        assert "log_level" in capsys.readouterr().err

    def test_show_defaults(self, capsys):
        main([])
        out = capsys.readouterr().out
        assert "UTC" in out
        assert "Asia/Kolkata" in out
