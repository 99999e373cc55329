"""
Unit tests for block caption helpers.
"""

from datetime import date, datetime

from src.core.segmentation import segment_item
from src.core.timeline_labels import (
    describe_segment,
    format_date,
    format_range_for_day,
    format_time,
    format_time_range,
)


class TestFormatting:
    def test_format_time(self):
        assert format_time(datetime(2024, 3, 5, 9, 5)) == "9:05 AM"
        assert format_time(datetime(2024, 3, 5, 0, 0)) == "12:00 AM"
        assert format_time(datetime(2024, 3, 5, 12, 30)) == "12:30 PM"
        assert format_time(datetime(2024, 3, 5, 15, 0)) == "3:00 PM"

    def test_format_date(self):
        assert format_date(date(2024, 3, 5)) == "05/03/2024"

    def test_single_day_range_has_no_dates(self):
        label = format_time_range(datetime(2024, 3, 5, 9), datetime(2024, 3, 5, 10))

        assert label.time == "9:00 AM – 10:00 AM"
        assert label.dates is None

    def test_multi_day_range_has_dates(self):
        label = format_time_range(datetime(2024, 3, 5, 22), datetime(2024, 3, 7, 2))

        assert label.dates == "05/03/2024 – 07/03/2024"


class TestRangeForDay:
    start = datetime(2024, 3, 5, 22)
    end = datetime(2024, 3, 7, 2)

    def test_first_day(self):
        text = format_range_for_day(self.start, self.end, date(2024, 3, 5))

        assert text == "Start: 05/03/2024 10:00 PM"

    def test_middle_day(self):
        assert format_range_for_day(self.start, self.end, date(2024, 3, 6)) == (
            "continues..."
        )

    def test_last_day(self):
        text = format_range_for_day(self.start, self.end, date(2024, 3, 7))

        assert text == "End: 07/03/2024 2:00 AM"

    def test_single_day_range(self):
        text = format_range_for_day(
            datetime(2024, 3, 5, 9), datetime(2024, 3, 5, 10), date(2024, 3, 5)
        )

        assert text == "9:00 AM – 10:00 AM"

    def test_describe_segment_uses_unclamped_range(self, week_window, make_item, at):
        item = make_item("trip", at(5, 22), at(1, 2, week_offset=1))
        segment = segment_item(item, week_window)

        assert describe_segment(segment, date(2024, 3, 9)) == "continues..."
        assert describe_segment(segment, date(2024, 3, 8)) == (
            "Start: 08/03/2024 10:00 PM"
        )
