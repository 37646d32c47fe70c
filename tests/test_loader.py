"""End-to-end tests: loading dive logs from in-memory trees."""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from divetreelib import (
    CollectErrorsPolicy,
    ContentLoadError,
    DecodeHooks,
    DiveCollection,
    LoaderConfig,
    MemoryTreeAdapter,
    UnknownEntryError,
    load_dives_from_tree,
)
from divetreelib.dives import Dive, Trip


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def load(files, **kwargs):
    adapter = MemoryTreeAdapter.from_paths(files)
    kwargs.setdefault("policy", CollectErrorsPolicy())
    return load_dives_from_tree(adapter.create_root_node(), adapter, **kwargs)


class TestEndToEnd:

    def test_dive_outside_trip(self):
        result = load({
            "2019/05/12-deep-09:30:00/Dive": b"dive",
            "2019/05/12-deep-09:30:00/Divecomputer1": b"dc",
        })
        log = result.collection
        assert len(log.dives) == 1
        assert log.trips == []
        dive = log.dives[0]
        assert dive.when == utc(2019, 5, 12, 9, 30, 0)
        assert dive.trip is None
        assert dive.content == b"dive"
        assert dive.divecomputers == {"1": b"dc"}
        assert result.errors_reported == 0
        assert result.files_processed == 2

    def test_dive_in_trip(self):
        result = load({
            "2019/05/03-reef/14-07:00:00~a3f/": None,
            "2019/05/03-reef/00-Trip": b"location Reef",
        })
        log = result.collection
        assert len(log.trips) == 1
        assert len(log.dives) == 1
        trip, dive = log.trips[0], log.dives[0]
        assert trip.when == utc(2019, 5, 3)
        assert dive.when == utc(2019, 5, 14, 7, 0, 0)
        assert dive.trip is trip
        assert trip.dives == [dive]
        assert trip.content == b"location Reef"
        assert result.errors_reported == 0

    def test_new_month_clears_trip(self):
        result = load({
            "2019/04/20-trip/21-Sun-10:00:00/Dive": b"",
            "2019/05/12-Sun-09:30:00/Dive": b"",
        })
        first, second = result.collection.dives
        assert first.trip is result.collection.trips[0]
        assert second.trip is None

    def test_dive_after_trip_in_same_month_has_no_trip(self):
        result = load({
            "2019/05/03-reef/04-Sat-09:00:00/Dive": b"",
            "2019/05/12-Sun-09:30:00/Dive": b"",
        })
        assert result.collection.dives[1].trip is None
        assert len(result.collection.trips[0].dives) == 1

    def test_files_belong_to_their_own_directory(self):
        """A dive file next to a dive directory is not attributed to that dive."""
        policy = CollectErrorsPolicy()
        result = load({
            "2019/05/03-reef/14-07:00:00/Dive1": b"",
            "2019/05/03-reef/Dive2": b"",
        }, policy=policy)
        assert result.collection.dives[0].number == 1
        errors = [e["error"] for e in policy.errors]
        assert [type(e) for e in errors] == [UnknownEntryError]
        assert errors[0].path == "2019/05/03-reef/Dive2"

    def test_several_trips_and_dives(self):
        result = load({
            "2018/11/02-Egypt/03-Sat-09:00:00/Dive1": b"",
            "2018/11/02-Egypt/03-Sat-14:00:00/Dive2": b"",
            "2018/11/02-Egypt/00-Trip": b"",
            "2019/01/2019-01-05-Sat-10:00:00/Dive3": b"",
            "2019/05/03-reef/04-Sat-09:00:00/Dive4": b"",
            "2019/05/03-reef/00-Trip": b"",
        })
        log = result.collection
        assert [d.number for d in log.dives] == [1, 2, 3, 4]
        assert [t.when for t in log.trips] == [utc(2018, 11, 2), utc(2019, 5, 3)]
        assert [len(t.dives) for t in log.trips] == [2, 1]
        assert log.dives_without_trip() == [log.dives[2]]
        assert result.trips_created == 2
        assert result.dives_created == 4
        assert result.errors_reported == 0


class TestSkippingAndErrors:

    def test_non_dive_directories_are_not_entered(self):
        result = load({
            "2019/05/12-deep-09:30:00/Dive": b"",
            "pictures/IMG_0001.jpg": b"",
            "2019/05/12-deep-09:30:00/pictures~1/IMG_0002.jpg": b"",
        })
        assert len(result.collection.dives) == 1
        assert result.directories_skipped == 2
        assert result.errors_reported == 0

    def test_unknown_file_is_reported_and_walk_continues(self):
        result = load({
            "README": b"",
            "2019/05/12-deep-09:30:00/Dive": b"",
        })
        assert len(result.collection.dives) == 1
        assert result.errors_reported == 1

    def test_unreadable_file_is_reported_and_walk_continues(self):
        policy = CollectErrorsPolicy()
        result = load({
            "2019/05/12-deep-09:30:00/Dive3": None,
            "2019/05/12-deep-09:30:00/Divecomputer": b"dc",
        }, policy=policy)
        dive = result.collection.dives[0]
        assert dive.number is None
        assert dive.divecomputers == {"": b"dc"}
        assert [e["error_type"] for e in policy.errors] == ["ContentLoadError"]

    def test_strict_config_stops_at_first_error(self):
        with pytest.raises(UnknownEntryError):
            load({"README": b""}, policy=None, config=LoaderConfig(strict=True))

    def test_unlistable_directory_is_reported(self):
        class BrokenAdapter(MemoryTreeAdapter):
            def get_children(self, node):
                if node.name == "03-reef":
                    raise ContentLoadError("Unable to read tree", path=node.path)
                return super().get_children(node)

        adapter = BrokenAdapter.from_paths({
            "2019/05/03-reef/04-Sat-09:00:00/Dive": b"",
            "2019/05/12-Sun-09:30:00/Dive": b"",
        })
        policy = CollectErrorsPolicy()
        result = load_dives_from_tree(adapter.create_root_node(), adapter, policy=policy)
        assert len(result.collection.trips) == 1
        assert len(result.collection.dives) == 1
        assert policy.errors[0]['path'] == "2019/05/03-reef"

    def test_max_depth_limits_walk(self):
        files = {"2019/05/12-deep-09:30:00/Dive": b""}
        result = load(files, config=LoaderConfig(max_depth=3))
        assert len(result.collection.dives) == 1
        assert result.files_processed == 0
        assert result.entries_visited == 3

    def test_invalid_config_is_rejected(self):
        with pytest.raises(ValueError):
            load({}, config=LoaderConfig(max_depth=-1))

    def test_empty_tree(self):
        result = load({})
        assert result.entries_visited == 0
        assert len(result.collection) == 0


class TestCollaborators:

    def test_custom_hooks_receive_payloads(self):
        class Hooks(DecodeHooks):
            def __init__(self):
                self.seen = []

            def dive(self, dive, content):
                self.seen.append(("dive", content))

            def divecomputer(self, dive, suffix, content):
                self.seen.append(("divecomputer", suffix, content))

            def trip(self, trip, content):
                self.seen.append(("trip", content))

        hooks = Hooks()
        load({
            "2019/05/03-reef/00-Trip": b"t",
            "2019/05/03-reef/04-Sat-09:00:00/Dive": b"d",
            "2019/05/03-reef/04-Sat-09:00:00/Divecomputer2": b"c",
        }, hooks=hooks)
        assert hooks.seen == [("trip", b"t"), ("dive", b"d"), ("divecomputer", "2", b"c")]

    def test_custom_collection_sees_calls_in_walk_order(self):
        class Recorder(DiveCollection):
            def __init__(self):
                self.calls = []

            def create_trip(self, when):
                self.calls.append(("trip", when))
                return Trip(when)

            def create_dive(self, when):
                self.calls.append(("dive", when))
                return Dive(when)

            def link(self, dive, trip):
                self.calls.append(("link", dive.when, trip.when))
                super().link(dive, trip)

        collection = Recorder()
        result = load({
            "2019/05/03-reef/04-Sat-09:00:00/Dive": b"",
            "2019/05/12-Sun-09:30:00/Dive": b"",
        }, collection=collection)
        assert result.collection is collection
        assert collection.calls == [
            ("trip", utc(2019, 5, 3)),
            ("dive", utc(2019, 5, 4, 9, 0, 0)),
            ("link", utc(2019, 5, 4, 9, 0, 0), utc(2019, 5, 3)),
            ("dive", utc(2019, 5, 12, 9, 30, 0)),
        ]


