"""
Segmentation Module.

Clips timeline items to the visible week and marks the ones that have to
be drawn as a split piece: items crossing a week boundary, and items that
cover more than one calendar day inside the week.

Each item yields at most one segment per window. The pieces of an item
that belong to other weeks are produced when the caller lays out those
weeks.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from src.core.logging_config import get_logger
from src.core.timeline_items import Item, ViewWindow, root_items

logger = get_logger(__name__)

WEEK = timedelta(days=7)


@dataclass(frozen=True)
class Segment:
    """
    A window-clamped view of one Item, valid for a single layout pass.

    Attributes:
        item_id: Id of the originating item.
        segment_id: Unique key of this piece ("<id>_week_<date>" when split).
        start_time: Effective start, clamped to the window.
        end_time: Effective end, clamped to the window.
        original_start_time: The item's true start.
        original_end_time: The item's true end.
        is_split: Whether the item was cut or spans several days.
        segment_index: 1-based week number of this piece, counted from the
            week containing the item's start.
        segment_count: Number of weeks the item covers (duration heuristic).
        is_final_segment: True when no later week holds a piece of the item.
        day_index: Window day (0-6) of the effective start.
        end_day_index: Window day (0-6) of the effective end.
        metadata: The item's metadata, passed through untouched.
    """

    item_id: str
    segment_id: str
    start_time: datetime
    end_time: datetime
    original_start_time: datetime
    original_end_time: datetime
    is_split: bool = False
    segment_index: int = 1
    segment_count: int = 1
    is_final_segment: bool = True
    day_index: Optional[int] = None
    end_day_index: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def duration_minutes(self) -> int:
        seconds = (self.end_time - self.start_time).total_seconds()
        return max(0, round(seconds / 60))

    @property
    def is_multi_day(self) -> bool:
        if self.day_index is None or self.end_day_index is None:
            return False
        return self.end_day_index > self.day_index

    @property
    def shows_child_toggle(self) -> bool:
        """Child expansion is offered on unsplit items and on the last piece."""
        return not self.is_split or self.is_final_segment


def _segment_key(item_id: str, window: ViewWindow) -> str:
    return f"{item_id}_week_{window.week_start.date().isoformat()}"


def segment_item(item: Item, window: ViewWindow) -> Optional[Segment]:
    """
    Clips one item to the window.

    Args:
        item: The item to clip. Must have both instants.
        window: The visible week.

    Returns:
        Optional[Segment]: The item's piece in this week, or None when the
        item does not intersect [week_start, week_end).
    """
    # Geometry reads hours and minutes, so work on the window's clock
    start = window.to_window_time(item.start_time)
    end = window.to_window_time(item.end_time)

    if end < start:
        logger.warning(
            f"Item {item.id} ends before it starts; treating it as zero length"
        )
        end = start

    # Half-open window: an item ending exactly at week_start is not shown
    if end <= window.week_start or start >= window.week_end:
        return None

    starts_before = start < window.week_start
    ends_after = end > window.last_instant
    is_multi_day = start.date() != end.date()

    if not (starts_before or ends_after or is_multi_day):
        return Segment(
            item_id=item.id,
            segment_id=item.id,
            start_time=start,
            end_time=end,
            original_start_time=item.start_time,
            original_end_time=item.end_time,
            day_index=window.day_index_of(start),
            end_day_index=window.day_index_of(end),
            metadata=item.metadata,
        )

    clamped_start = window.week_start if starts_before else start
    clamped_end = window.last_instant if ends_after else end

    segment_count = max(1, math.ceil((end - start) / WEEK))
    first_week = ViewWindow.containing(start).week_start
    segment_index = (window.week_start - first_week) // WEEK + 1

    return Segment(
        item_id=item.id,
        segment_id=_segment_key(item.id, window),
        start_time=clamped_start,
        end_time=clamped_end,
        original_start_time=item.start_time,
        original_end_time=item.end_time,
        is_split=True,
        segment_index=segment_index,
        segment_count=segment_count,
        # An item ending exactly at week_end has no piece in the next week
        is_final_segment=clamped_end == end or end <= window.week_end,
        day_index=window.day_index_of(clamped_start),
        end_day_index=window.day_index_of(clamped_end),
        metadata=item.metadata,
    )


def segment_items(items: Iterable[Item], window: ViewWindow) -> List[Segment]:
    """
    Clips every root item to the window.

    Items without a schedule are skipped, and so are items whose instants
    cannot be compared with the window (mixed naive and aware datetimes);
    one bad item never stops the others from being segmented.

    Args:
        items: Items to lay out; children are ignored.
        window: The visible week.

    Returns:
        List[Segment]: At most one segment per item, in input order.
    """
    segments: List[Segment] = []

    for item in root_items(items):
        if item.start_time is None or item.end_time is None:
            logger.debug(f"Item {item.id} has no schedule, skipping")
            continue
        try:
            segment = segment_item(item, window)
        except TypeError as e:
            logger.warning(f"Skipping item {item.id}: {e}")
            continue
        if segment is not None:
            segments.append(segment)

    logger.debug(
        f"Segmented {len(segments)} items for week of {window.week_start.date()}"
    )
    return segments
