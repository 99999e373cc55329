"""
Layout Configuration Module.
Defines the grid constants used by the timeline layout engine.
"""

import os
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from src.core.logging_config import get_logger

logger = get_logger(__name__)

ENV_PREFIX = "TIMELINE_LAYOUT_"


@dataclass
class LayoutConfig:
    """
    Configuration settings for the week timeline grid.

    All values are in the abstract distance unit a renderer maps 1:1 to pixels.

    Attributes:
        coarse_hour_unit: Width of one hour when not zoomed in.
        coarse_minute_unit: Width of one minute when not zoomed in (0 = hours only).
        zoomed_hour_unit: Width of one hour when zoomed in.
        zoomed_minute_unit: Width of one minute when zoomed in.
        item_height: Fixed height of every placed block.
        lane_gap: Vertical spacing between two lanes.
        top_margin: Offset of the first lane from the top of the canvas.
        min_coarse_width: Minimum block width in coarse mode.
    """

    coarse_hour_unit: int = 40
    coarse_minute_unit: int = 0
    zoomed_hour_unit: int = 240
    zoomed_minute_unit: int = 4
    item_height: int = 60
    lane_gap: int = 8
    top_margin: int = 8
    min_coarse_width: int = 120

    def validate(self) -> List[str]:
        """
        Validates the configuration values.

        Returns:
            List[str]: List of validation error messages.
                       Empty list if valid.
        """
        errors: List[str] = []

        for name in ("coarse_hour_unit", "zoomed_hour_unit", "zoomed_minute_unit"):
            if getattr(self, name) <= 0:
                errors.append(f"{name} must be positive")

        if self.item_height <= 0:
            errors.append("item_height must be positive")

        for name in ("coarse_minute_unit", "lane_gap", "top_margin", "min_coarse_width"):
            if getattr(self, name) < 0:
                errors.append(f"{name} must not be negative")

        return errors

    def to_dict(self) -> Dict[str, Any]:
        """
        Converts the config to a dictionary for JSON serialization.

        Returns:
            dict: Dictionary representation of the configuration.
        """
        return {
            "coarse_hour_unit": self.coarse_hour_unit,
            "coarse_minute_unit": self.coarse_minute_unit,
            "zoomed_hour_unit": self.zoomed_hour_unit,
            "zoomed_minute_unit": self.zoomed_minute_unit,
            "item_height": self.item_height,
            "lane_gap": self.lane_gap,
            "top_margin": self.top_margin,
            "min_coarse_width": self.min_coarse_width,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutConfig":
        """
        Creates a LayoutConfig from a dictionary.

        Unknown keys are ignored and missing keys keep their defaults.

        Args:
            data: Dictionary containing configuration values.

        Returns:
            LayoutConfig: A new LayoutConfig instance.
        """
        defaults = cls()
        return cls(
            coarse_hour_unit=data.get("coarse_hour_unit", defaults.coarse_hour_unit),
            coarse_minute_unit=data.get(
                "coarse_minute_unit", defaults.coarse_minute_unit
            ),
            zoomed_hour_unit=data.get("zoomed_hour_unit", defaults.zoomed_hour_unit),
            zoomed_minute_unit=data.get(
                "zoomed_minute_unit", defaults.zoomed_minute_unit
            ),
            item_height=data.get("item_height", defaults.item_height),
            lane_gap=data.get("lane_gap", defaults.lane_gap),
            top_margin=data.get("top_margin", defaults.top_margin),
            min_coarse_width=data.get("min_coarse_width", defaults.min_coarse_width),
        )

    @classmethod
    def from_env(
        cls, prefix: str = ENV_PREFIX, dotenv_path: Optional[str] = None
    ) -> "LayoutConfig":
        """
        Creates a LayoutConfig from environment variables.

        Loads a .env file first (existing environment variables win), then
        reads one integer per field, e.g. TIMELINE_LAYOUT_ITEM_HEIGHT=48.
        Values that are not integers are logged and ignored.

        Args:
            prefix: Environment variable prefix.
            dotenv_path: Optional explicit path to a .env file.

        Returns:
            LayoutConfig: A new LayoutConfig instance.
        """
        load_dotenv(dotenv_path=dotenv_path)

        overrides: Dict[str, int] = {}
        for f in fields(cls):
            key = f"{prefix}{f.name.upper()}"
            raw = os.environ.get(key)
            if raw is None:
                continue
            try:
                overrides[f.name] = int(raw.strip())
            except ValueError:
                logger.warning(f"Ignoring non-integer layout setting {key}={raw!r}")

        return cls.from_dict(overrides)
