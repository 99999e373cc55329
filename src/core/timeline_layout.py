"""
Timeline Layout Module.

Entry point of the week timeline layout. Chains segmentation, lane
packing and geometry into one pure recomputation:

    items -> segments -> lanes -> placed blocks

Nothing is cached between calls; re-run it whenever the items, the week
or the zoom flag change.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional

from src.core.layout_config import LayoutConfig
from src.core.logging_config import get_logger
from src.core.segmentation import segment_items
from src.core.time_grid import TimeGrid
from src.core.timeline_geometry import PlacedBlock, compute_geometry
from src.core.timeline_items import Item, ViewWindow
from src.core.timeline_lane_packer import TimelineLanePacker

logger = get_logger(__name__)


@dataclass(frozen=True)
class TimelineLayout:
    """
    Result of one layout pass.

    Attributes:
        blocks: Placed blocks, in no guaranteed order.
        lane_count: Number of lanes used.
        grid: Grid units the blocks were computed with.
        week_dates: The seven dates of the window.
    """

    blocks: List[PlacedBlock] = field(default_factory=list)
    lane_count: int = 0
    grid: Optional[TimeGrid] = None
    week_dates: List[date] = field(default_factory=list)

    @property
    def canvas_width(self) -> int:
        return self.grid.canvas_width if self.grid else 0

    @property
    def canvas_height(self) -> int:
        return self.grid.canvas_height(self.lane_count) if self.grid else 0

    def blocks_for_item(self, item_id: str) -> List[PlacedBlock]:
        return [b for b in self.blocks if b.segment.item_id == item_id]


class TimelineLayoutEngine:
    """
    Computes non-overlapping block placements for a week of items.
    """

    def __init__(self, config: Optional[LayoutConfig] = None):
        """
        Initializes the TimelineLayoutEngine.

        Args:
            config: Grid constants. Defaults to LayoutConfig().

        Raises:
            ValueError: If the configuration is invalid.
        """
        self.config = config or LayoutConfig()
        errors = self.config.validate()
        if errors:
            raise ValueError(f"Invalid layout configuration: {'; '.join(errors)}")
        self.packer = TimelineLanePacker()

    def layout(self, items: Iterable[Item], window: ViewWindow) -> TimelineLayout:
        """
        Lays out the root items of one week.

        Args:
            items: Items to place; children and unscheduled items are
                ignored.
            window: Visible week and zoom flag.

        Returns:
            TimelineLayout: Blocks and canvas metrics.
        """
        grid = TimeGrid.for_zoom(window.is_zoomed_in, self.config)

        segments = segment_items(items, window)
        packing = self.packer.pack_segments(segments)

        blocks: List[PlacedBlock] = []
        for segment in segments:
            lane_index = packing.assignments.get(segment.segment_id)
            if lane_index is None:
                continue
            block = compute_geometry(segment, lane_index, grid)
            if block is not None:
                blocks.append(block)

        blocks.sort(
            key=lambda b: (b.lane_index, b.day_index, b.left, b.segment.segment_id)
        )

        logger.debug(
            f"Laid out {len(blocks)} blocks in {packing.lane_count} lanes "
            f"(zoomed={window.is_zoomed_in})"
        )
        return TimelineLayout(
            blocks=blocks,
            lane_count=packing.lane_count,
            grid=grid,
            week_dates=window.week_dates(),
        )


def compute_layout(
    items: Iterable[Item],
    window: ViewWindow,
    config: Optional[LayoutConfig] = None,
) -> List[PlacedBlock]:
    """
    Convenience wrapper returning only the placed blocks.

    Args:
        items: Items to place.
        window: Visible week and zoom flag.
        config: Optional grid constants.

    Returns:
        List[PlacedBlock]: One block per visible root item.
    """
    return TimelineLayoutEngine(config).layout(items, window).blocks
