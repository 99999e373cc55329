"""
Timeline Labels Module.

Text helpers a renderer uses to caption a block: time ranges, date
ranges and the per-day wording of items running over several days.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from src.core.segmentation import Segment

RANGE_SEPARATOR = " – "
CONTINUES_LABEL = "continues..."


@dataclass(frozen=True)
class TimeRangeLabel:
    """
    Caption for an item.

    Attributes:
        time: Start and end time of day, e.g. "9:00 AM – 10:30 AM".
        dates: Start and end dates, set only for multi-day ranges.
    """

    time: str
    dates: Optional[str] = None


def format_time(moment: datetime) -> str:
    """Formats a time of day as "9:05 AM" (12-hour clock, no leading zero)."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"


def format_date(moment: date) -> str:
    """Formats a date as day/month/year, e.g. "05/03/2024"."""
    return moment.strftime("%d/%m/%Y")


def format_time_range(start: datetime, end: datetime) -> TimeRangeLabel:
    time_text = f"{format_time(start)}{RANGE_SEPARATOR}{format_time(end)}"
    if start.date() != end.date():
        return TimeRangeLabel(
            time=time_text,
            dates=f"{format_date(start)}{RANGE_SEPARATOR}{format_date(end)}",
        )
    return TimeRangeLabel(time=time_text)


def format_range_for_day(start: datetime, end: datetime, day: date) -> str:
    """
    Describes a range as seen from one calendar day.

    Args:
        start: Start of the range.
        end: End of the range.
        day: The day being drawn.

    Returns:
        str: The time range for single-day ranges; otherwise "Start: ..."
        on the first day, "End: ..." on the last day and "continues..."
        in between.
    """
    time_text = f"{format_time(start)}{RANGE_SEPARATOR}{format_time(end)}"
    if start.date() == end.date():
        return time_text

    is_start = start.date() == day
    is_end = end.date() == day

    if is_start and is_end:
        return time_text
    if is_start:
        return f"Start: {format_date(start)} {format_time(start)}"
    if is_end:
        return f"End: {format_date(end)} {format_time(end)}"
    return CONTINUES_LABEL


def describe_segment(segment: Segment, day: date) -> str:
    """Captions a segment using its item's full, unclamped range."""
    return format_range_for_day(
        segment.original_start_time, segment.original_end_time, day
    )
