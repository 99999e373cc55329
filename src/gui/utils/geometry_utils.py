"""
Geometry Utilities.

Provides helper functions mapping timeline layout results onto Qt scene
coordinates: block rectangles on the week canvas and the canvas size.
"""

from PySide6.QtCore import QRectF, QSizeF

from src.core.time_grid import TimeGrid
from src.core.timeline_geometry import PlacedBlock
from src.core.timeline_layout import TimelineLayout

# Horizontal indent per nesting level for child items drawn under a block
INDENT_PER_LEVEL = 20


class GeometryUtils:
    """
    Static utility class converting layout geometry to Qt types.
    """

    @staticmethod
    def block_scene_rect(
        block: PlacedBlock, grid: TimeGrid, indent_level: int = 0
    ) -> QRectF:
        """
        Computes the scene rectangle of a placed block.

        Block offsets are relative to the block's first day; this adds the
        day offset and any nesting indent.

        Args:
            block: The placed block.
            grid: Grid the block was computed with.
            indent_level: Nesting depth (0 for root items).

        Returns:
            QRectF: Absolute rectangle on the week canvas.
        """
        indent = indent_level * INDENT_PER_LEVEL
        x = block.day_index * grid.day_unit + block.left + indent
        width = max(block.width - indent, 0.0)
        return QRectF(x, float(block.top), width, float(block.height))

    @staticmethod
    def canvas_size(layout: TimelineLayout) -> QSizeF:
        """
        Returns the canvas size needed to show every lane of a layout.

        Args:
            layout: Result of a layout pass.

        Returns:
            QSizeF: 7 days wide, lane_count lanes tall.
        """
        return QSizeF(float(layout.canvas_width), float(layout.canvas_height))
