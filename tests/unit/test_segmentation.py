"""
Unit tests for segmentation of items into the visible week.
"""

import logging
from datetime import datetime, timedelta, timezone

from src.core.segmentation import segment_item, segment_items
from src.core.timeline_items import ViewWindow


class TestSegmentItems:
    """Tests for segment_items."""

    def test_single_day_item_is_not_split(self, week_window, make_item, at):
        item = make_item("a", at(2, 10), at(2, 11))

        segments = segment_items([item], week_window)

        assert len(segments) == 1
        segment = segments[0]
        assert segment.is_split is False
        assert segment.segment_id == "a"
        assert segment.start_time == at(2, 10)
        assert segment.end_time == at(2, 11)
        assert segment.day_index == 2
        assert segment.end_day_index == 2
        assert segment.segment_index == 1
        assert segment.segment_count == 1
        assert segment.is_final_segment is True

    def test_items_outside_window_are_dropped(self, week_window, make_item, at):
        items = [
            make_item("before", at(3, 9, week_offset=-1), at(3, 10, week_offset=-1)),
            make_item("after", at(1, 9, week_offset=1), at(1, 10, week_offset=1)),
        ]

        assert segment_items(items, week_window) == []

    def test_item_ending_at_window_start_is_dropped(self, week_window, make_item):
        start = week_window.week_start
        item = make_item("edge", start - timedelta(hours=2), start)

        assert segment_items([item], week_window) == []

    def test_item_starting_at_window_end_is_dropped(self, week_window, make_item):
        end = week_window.week_end
        item = make_item("edge", end, end + timedelta(hours=2))

        assert segment_items([item], week_window) == []

    def test_item_crossing_week_end_is_clamped(self, week_window, make_item, at):
        """Friday 22:00 to the following Monday 02:00."""
        item = make_item("trip", at(5, 22), at(1, 2, week_offset=1))

        segments = segment_items([item], week_window)

        assert len(segments) == 1
        segment = segments[0]
        assert segment.is_split is True
        assert segment.start_time == at(5, 22)
        assert segment.end_time == datetime(2024, 3, 9, 23, 59, 59)
        assert segment.is_final_segment is False
        assert segment.day_index == 5
        assert segment.end_day_index == 6
        assert segment.segment_id == "trip_week_2024-03-03"
        assert segment.original_start_time == at(5, 22)
        assert segment.original_end_time == at(1, 2, week_offset=1)

    def test_remainder_appears_in_next_week(self, make_item, at):
        item = make_item("trip", at(5, 22), at(1, 2, week_offset=1))
        next_week = ViewWindow(week_start=datetime(2024, 3, 10))

        segment = segment_item(item, next_week)

        assert segment.start_time == datetime(2024, 3, 10)
        assert segment.end_time == at(1, 2, week_offset=1)
        assert segment.is_final_segment is True
        assert segment.segment_index == 2
        assert segment.day_index == 0
        assert segment.end_day_index == 1

    def test_multi_day_item_inside_week_is_split(self, week_window, make_item, at):
        item = make_item("night", at(1, 22), at(2, 2))

        segment = segment_items([item], week_window)[0]

        assert segment.is_split is True
        assert segment.start_time == at(1, 22)
        assert segment.end_time == at(2, 2)
        assert segment.is_final_segment is True
        assert segment.segment_count == 1
        assert segment.day_index == 1
        assert segment.end_day_index == 2

    def test_item_starting_before_window_is_clamped_to_midnight(
        self, week_window, make_item, at
    ):
        item = make_item("late", at(4, 8, week_offset=-1), at(2, 12))

        segment = segment_items([item], week_window)[0]

        assert segment.start_time == week_window.week_start
        assert segment.end_time == at(2, 12)
        assert segment.is_final_segment is True
        assert segment.segment_index == 2
        assert segment.day_index == 0

    def test_segment_count_uses_week_heuristic(self, week_window, make_item, at):
        item = make_item("sprint", at(0, 0, week_offset=-1), at(0, 0, week_offset=2))

        segment = segment_items([item], week_window)[0]

        assert segment.segment_count == 3
        assert segment.segment_index == 2
        assert segment.start_time == week_window.week_start
        assert segment.end_time == week_window.last_instant
        assert segment.is_final_segment is False

    def test_segments_stay_inside_window(self, week_window, make_item, at):
        items = [
            make_item("a", at(4, 8, week_offset=-1), at(2, 12)),
            make_item("b", at(5, 22), at(1, 2, week_offset=1)),
            make_item("c", at(0, 0, week_offset=-2), at(0, 0, week_offset=3)),
        ]

        for segment in segment_items(items, week_window):
            assert segment.start_time >= week_window.week_start
            assert segment.end_time <= week_window.week_end

    def test_child_items_are_ignored(self, week_window, make_item, at):
        child = make_item("child", at(2, 10), at(2, 11), parent_id="p")

        assert segment_items([child], week_window) == []

    def test_unscheduled_items_are_skipped(self, week_window, make_item, at):
        items = [
            make_item("no-start", None, at(2, 11)),
            make_item("ok", at(2, 10), at(2, 11)),
        ]

        segments = segment_items(items, week_window)

        assert [s.item_id for s in segments] == ["ok"]

    def test_reversed_interval_becomes_zero_length(
        self, week_window, make_item, at, caplog
    ):
        item = make_item("bad", at(2, 11), at(2, 10))

        with caplog.at_level(logging.WARNING):
            segments = segment_items([item], week_window)

        assert len(segments) == 1
        assert segments[0].start_time == segments[0].end_time
        assert segments[0].duration_minutes == 0
        assert "bad" in caplog.text

    def test_incomparable_item_does_not_stop_others(
        self, week_window, make_item, at, caplog
    ):
        aware = make_item(
            "aware",
            datetime(2024, 3, 5, 10, tzinfo=timezone.utc),
            datetime(2024, 3, 5, 11, tzinfo=timezone.utc),
        )
        naive = make_item("naive", at(2, 10), at(2, 11))

        with caplog.at_level(logging.WARNING):
            segments = segment_items([aware, naive], week_window)

        assert [s.item_id for s in segments] == ["naive"]
        assert "aware" in caplog.text

    def test_metadata_is_passed_through(self, week_window, make_item, at):
        item = make_item("a", at(2, 10), at(2, 11), metadata={"color": "#ff0000"})

        segment = segment_items([item], week_window)[0]

        assert segment.metadata == {"color": "#ff0000"}

    def test_child_toggle_only_on_final_piece(self, week_window, make_item, at):
        items = [
            make_item("plain", at(2, 10), at(2, 11)),
            make_item("cut", at(5, 22), at(1, 2, week_offset=1)),
            make_item("tail", at(4, 8, week_offset=-1), at(2, 12)),
        ]

        toggles = {
            s.item_id: s.shows_child_toggle for s in segment_items(items, week_window)
        }

        assert toggles == {"plain": True, "cut": False, "tail": True}

    def test_item_ending_exactly_at_week_end_is_final(
        self, week_window, make_item, at
    ):
        """Saturday 22:00 to the next Sunday 00:00 has nothing left over."""
        item = make_item("late", at(6, 22), week_window.week_end)

        segment = segment_item(item, week_window)

        assert segment.is_split is True
        assert segment.end_time == week_window.last_instant
        assert segment.is_final_segment is True
        assert segment.shows_child_toggle is True
        assert segment_item(item, ViewWindow(week_start=datetime(2024, 3, 10))) is None

    def test_aware_times_use_window_clock(self, make_item):
        plus_two = timezone(timedelta(hours=2))
        window = ViewWindow(week_start=datetime(2024, 3, 3, tzinfo=plus_two))
        item = make_item(
            "call",
            datetime(2024, 3, 4, 21, tzinfo=timezone.utc),
            datetime(2024, 3, 4, 23, tzinfo=timezone.utc),
        )

        segment = segment_item(item, window)

        assert segment.start_time == datetime(2024, 3, 4, 23, tzinfo=plus_two)
        assert segment.end_time == datetime(2024, 3, 5, 1, tzinfo=plus_two)
        assert segment.day_index == 1
        assert segment.end_day_index == 2
        assert segment.is_multi_day is True
        assert segment.original_start_time == item.start_time
