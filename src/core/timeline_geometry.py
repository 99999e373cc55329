"""
Timeline Geometry Module.

Turns a packed segment into the rectangle a renderer draws. Horizontal
values are relative to the start of the segment's first day; the renderer
adds day_index * day_unit to get an absolute x position.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from src.core.logging_config import get_logger
from src.core.segmentation import Segment
from src.core.time_grid import MINUTES_PER_DAY, TimeGrid

logger = get_logger(__name__)


@dataclass(frozen=True)
class PlacedBlock:
    """
    Final placement of one segment.

    Attributes:
        segment: The segment being drawn.
        lane_index: Lane the segment was packed into.
        day_index: Window day of the segment's start (0-6).
        end_day_index: Window day of the segment's end (0-6).
        spanned_days: Number of days covered, at least 1.
        left: Offset from the start of day_index.
        width: Horizontal extent, possibly across several days.
        top: Vertical offset of the lane.
        height: Fixed block height.
    """

    segment: Segment
    lane_index: int
    day_index: int
    end_day_index: int
    spanned_days: int
    left: float
    width: float
    top: int
    height: int

    @property
    def item_id(self) -> str:
        return self.segment.item_id

    def to_dict(self) -> Dict[str, Any]:
        """
        Converts the block to a plain dictionary for a renderer.

        Returns:
            Dict[str, Any]: Geometry plus the segment's display flags.
        """
        return {
            "item_id": self.segment.item_id,
            "segment_id": self.segment.segment_id,
            "is_split": self.segment.is_split,
            "is_final_segment": self.segment.is_final_segment,
            "segment_index": self.segment.segment_index,
            "segment_count": self.segment.segment_count,
            "lane_index": self.lane_index,
            "day_index": self.day_index,
            "end_day_index": self.end_day_index,
            "spanned_days": self.spanned_days,
            "left": self.left,
            "width": self.width,
            "top": self.top,
            "height": self.height,
        }


def _minutes_since_midnight(moment: datetime) -> int:
    return moment.hour * 60 + moment.minute


def compute_geometry(
    segment: Segment, lane_index: int, grid: TimeGrid
) -> Optional[PlacedBlock]:
    """
    Computes the placement of a segment in its lane.

    Zoomed in, positions are measured in minute units; otherwise in
    fractional hours times the hour unit. Multi-day segments add a full
    day for every calendar day crossed. Width never drops below
    grid.min_width, so zero-length segments stay visible.

    Args:
        segment: Segment to place.
        lane_index: Lane chosen by the packer.
        grid: Grid units for the current zoom level.

    Returns:
        Optional[PlacedBlock]: The placement, or None when the segment
        has no day in the window.
    """
    if segment.day_index is None:
        logger.debug(f"Segment {segment.segment_id} is outside the window, dropped")
        return None

    day_index = segment.day_index
    end_day_index = segment.end_day_index
    if end_day_index is None or end_day_index < day_index:
        end_day_index = day_index
    day_diff = end_day_index - day_index

    start_minutes = _minutes_since_midnight(segment.start_time)
    end_minutes = _minutes_since_midnight(segment.end_time)
    span_minutes = day_diff * MINUTES_PER_DAY + end_minutes - start_minutes

    if grid.is_zoomed_in:
        left = start_minutes * grid.minute_unit
        width = span_minutes * grid.minute_unit
    else:
        left = start_minutes / 60 * grid.hour_unit
        width = span_minutes / 60 * grid.hour_unit

    return PlacedBlock(
        segment=segment,
        lane_index=lane_index,
        day_index=day_index,
        end_day_index=end_day_index,
        spanned_days=day_diff + 1,
        left=left,
        width=max(width, grid.min_width),
        top=grid.lane_top(lane_index),
        height=grid.item_height,
    )
