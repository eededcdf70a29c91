"""Tests for tracked-zone data models and snapshot serialization."""

from datetime import date, time

import pytest

from zonesync.types import ShareSnapshot, SnapshotZone, TrackedZone, TrackedZoneSet


class TestTrackedZoneSet:
    def test_sequence_protocol(self):
        a = TrackedZone("UTC", 0, 0)
        b = TrackedZone("Asia/Kolkata", 0, 5)
        zones = TrackedZoneSet((a, b))
        assert len(zones) == 2
        assert zones[1] is b
        assert list(zones) == [a, b]
        assert zones.zone_ids() == ["UTC", "Asia/Kolkata"]

    def test_empty_is_falsy(self):
        assert not TrackedZoneSet()

    def test_immutable(self):
        zones = TrackedZoneSet((TrackedZone("UTC", 0, 0),))
        with pytest.raises(AttributeError):
            zones.zones = ()  # type: ignore[misc]

    def test_value_equality(self):
        a = TrackedZoneSet((TrackedZone("UTC", 10, 0),))
        b = TrackedZoneSet((TrackedZone("UTC", 10, 0),))
        assert a == b


class TestShareSnapshot:
    def test_to_dict_shape(self):
        snap = ShareSnapshot.from_pairs(
            date(2024, 1, 1), [("UTC", time(5, 0)), ("Asia/Kolkata", time(10, 30))]
        )
        assert snap.to_dict() == {
            "version": 1,
            "reference_date": "2024-01-01",
            "zones": [
                {"zone_id": "UTC", "local_time": "05:00:00"},
                {"zone_id": "Asia/Kolkata", "local_time": "10:30:00"},
            ],
        }

    def test_from_dict(self):
        snap = ShareSnapshot.from_dict(
            {
                "reference_date": "2024-03-05",
                "zones": [{"zone_id": "Europe/Paris", "local_time": "23:59:01"}],
            }
        )
        assert snap.reference_date == date(2024, 3, 5)
        assert snap.version == 1
        assert snap.pairs == [("Europe/Paris", time(23, 59, 1))]

    def test_from_dict_without_zones(self):
        snap = ShareSnapshot.from_dict({"reference_date": "2024-03-05"})
        assert snap.zones == ()

    def test_snapshot_zone_missing_field(self):
        with pytest.raises(KeyError):
            SnapshotZone.from_dict({"zone_id": "UTC"})
