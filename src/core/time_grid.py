"""
Time Grid Module.

Defines the coordinate system of the week timeline: how wide an hour, a
minute and a day are at the current zoom level, and how tall a lane is.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.layout_config import LayoutConfig

DAYS_PER_WEEK = 7
HOURS_PER_DAY = 24
MINUTES_PER_DAY = 1440


@dataclass(frozen=True)
class TimeGrid:
    """
    Immutable set of grid units derived from the zoom flag.

    Attributes:
        is_zoomed_in: Whether the fine minute grid is active.
        hour_unit: Width of one hour.
        minute_unit: Width of one minute (0 in coarse mode).
        day_unit: Width of one day (hour_unit * 24).
        item_height: Height of every block.
        lane_gap: Vertical spacing between lanes.
        top_margin: Offset of lane 0 from the top of the canvas.
        min_width: Smallest width a block may be given.
    """

    is_zoomed_in: bool
    hour_unit: int
    minute_unit: int
    day_unit: int
    item_height: int
    lane_gap: int
    top_margin: int
    min_width: int

    @classmethod
    def for_zoom(
        cls, is_zoomed_in: bool, config: Optional[LayoutConfig] = None
    ) -> "TimeGrid":
        """
        Builds the grid for a zoom level.

        Args:
            is_zoomed_in: True for the minute grid, False for the hour grid.
            config: Grid constants; defaults to LayoutConfig().

        Returns:
            TimeGrid: The derived grid.
        """
        config = config or LayoutConfig()

        if is_zoomed_in:
            hour_unit = config.zoomed_hour_unit
            minute_unit = config.zoomed_minute_unit
            # Zoomed blocks are at least one minute wide
            min_width = minute_unit
        else:
            hour_unit = config.coarse_hour_unit
            minute_unit = config.coarse_minute_unit
            min_width = config.min_coarse_width

        return cls(
            is_zoomed_in=is_zoomed_in,
            hour_unit=hour_unit,
            minute_unit=minute_unit,
            day_unit=hour_unit * HOURS_PER_DAY,
            item_height=config.item_height,
            lane_gap=config.lane_gap,
            top_margin=config.top_margin,
            min_width=min_width,
        )

    @property
    def lane_pitch(self) -> int:
        """Distance between the tops of two consecutive lanes."""
        return self.item_height + self.lane_gap

    def lane_top(self, lane_index: int) -> int:
        return self.top_margin + lane_index * self.lane_pitch

    @property
    def canvas_width(self) -> int:
        return DAYS_PER_WEEK * self.day_unit

    def canvas_height(self, lane_count: int) -> int:
        """
        Height needed to show lane_count lanes.

        Args:
            lane_count: Number of lanes in the layout.

        Returns:
            int: (lane_count) * (item_height + lane_gap).
        """
        return max(lane_count, 0) * self.lane_pitch
