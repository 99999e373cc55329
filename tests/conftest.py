import pathlib
import sys
from datetime import datetime, timedelta

import pytest

# Ensure project root is in sys.path
repo_root = pathlib.Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))

from src.core.timeline_items import Item, ViewWindow  # noqa: E402

# Sunday 3 March 2024
WEEK_START = datetime(2024, 3, 3)


def _at(day_index: int, hour: int, minute: int = 0, week_offset: int = 0) -> datetime:
    return WEEK_START + timedelta(
        weeks=week_offset, days=day_index, hours=hour, minutes=minute
    )


@pytest.fixture
def at():
    """
    Instant on a day of the test week (0 = Sunday), e.g. at(2, 10, 30).
    """
    return _at


@pytest.fixture
def week_window() -> ViewWindow:
    """
    The coarse (not zoomed) window of the test week.
    """
    return ViewWindow(week_start=WEEK_START, is_zoomed_in=False)


@pytest.fixture
def zoomed_window() -> ViewWindow:
    return ViewWindow(week_start=WEEK_START, is_zoomed_in=True)


@pytest.fixture
def make_item():
    """
    Factory for items; start and end are datetimes.
    """

    def _make(item_id, start, end, **kwargs):
        return Item(id=item_id, start_time=start, end_time=end, **kwargs)

    return _make
