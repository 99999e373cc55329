"""Timeline Items Module.

Defines the inputs of the week timeline layout:

- Item: a schedulable entity with a start and an end instant.
- ViewWindow: the Sunday-aligned seven day window being laid out,
  plus the zoom granularity flag.

Instants are plain datetime objects. Callers pass either all naive
(local wall clock) or all timezone-aware values.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Iterable, List, Optional, Union

DAYS_IN_WINDOW = 7
SUNDAY = 6  # datetime.weekday() value


def _parse_instant(value: Union[str, datetime, None]) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


@dataclass
class Item:
    """
    A schedulable entity shown on the timeline.

    Only root items (no parent_id) are laid out; children are kept so
    callers can look them up by id.
    """

    id: str
    start_time: datetime
    end_time: datetime
    parent_id: Optional[str] = None
    children: List["Item"] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def duration_minutes(self) -> int:
        """
        Returns the item's duration rounded to whole minutes.

        Returns:
            int: Minutes between start and end, 0 if either is missing.
        """
        if self.start_time is None or self.end_time is None:
            return 0
        return round((self.end_time - self.start_time).total_seconds() / 60)

    def to_dict(self) -> Dict[str, Any]:
        """
        Converts the Item to a dictionary for storage or serialization.

        Returns:
            Dict[str, Any]: Dictionary with ISO-8601 instants.
        """
        return {
            "id": self.id,
            "start_time": self.start_time.isoformat() if self.start_time else None,
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "parent_id": self.parent_id,
            "children": [child.to_dict() for child in self.children],
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Item":
        """
        Creates an Item from a dictionary.

        Args:
            data: Dictionary containing item data. Instants may be
                datetime objects or ISO-8601 strings.

        Returns:
            Item: New instance.
        """
        return cls(
            id=data["id"],
            start_time=_parse_instant(data.get("start_time")),
            end_time=_parse_instant(data.get("end_time")),
            parent_id=data.get("parent_id"),
            children=[cls.from_dict(c) for c in data.get("children", [])],
            metadata=dict(data.get("metadata", {})),
        )


@dataclass(frozen=True)
class ViewWindow:
    """
    The visible week of the timeline.

    Attributes:
        week_start: First instant of the window (Sunday 00:00).
        is_zoomed_in: Whether the fine minute grid is active.
    """

    week_start: datetime
    is_zoomed_in: bool = False

    @classmethod
    def containing(
        cls, moment: Union[date, datetime], is_zoomed_in: bool = False
    ) -> "ViewWindow":
        """
        Builds the Sunday-aligned window containing a moment.

        Args:
            moment: Any date or datetime inside the wanted week.
            is_zoomed_in: Zoom flag for the window.

        Returns:
            ViewWindow: Window starting on the preceding (or same) Sunday.
        """
        tzinfo = moment.tzinfo if isinstance(moment, datetime) else None
        day = moment.date() if isinstance(moment, datetime) else moment
        offset = (day.weekday() - SUNDAY) % DAYS_IN_WINDOW
        sunday = day - timedelta(days=offset)
        return cls(
            week_start=datetime.combine(sunday, time.min, tzinfo=tzinfo),
            is_zoomed_in=is_zoomed_in,
        )

    @property
    def week_end(self) -> datetime:
        """Exclusive end of the window."""
        return self.week_start + timedelta(days=DAYS_IN_WINDOW)

    @property
    def last_instant(self) -> datetime:
        """Saturday 23:59:59, where items running past the window are cut."""
        return datetime.combine(
            self.week_dates()[-1],
            time(23, 59, 59),
            tzinfo=self.week_start.tzinfo,
        )

    def week_dates(self) -> List[date]:
        """Returns the seven calendar dates of the window, Sunday first."""
        first = self.week_start.date()
        return [first + timedelta(days=i) for i in range(DAYS_IN_WINDOW)]

    def to_window_time(self, moment: datetime) -> datetime:
        """
        Expresses an aware moment on the window's clock.

        Naive moments, or any moment when the window itself is naive, are
        returned unchanged.
        """
        if moment.tzinfo is not None and self.week_start.tzinfo is not None:
            return moment.astimezone(self.week_start.tzinfo)
        return moment

    def day_index_of(self, moment: datetime) -> Optional[int]:
        """
        Finds the window day containing a moment.

        Args:
            moment: The instant to locate.

        Returns:
            Optional[int]: 0 (Sunday) to 6 (Saturday), or None when the
            moment falls on a day outside the window.
        """
        index = (self.to_window_time(moment).date() - self.week_start.date()).days
        if 0 <= index < DAYS_IN_WINDOW:
            return index
        return None

    def validate(self) -> List[str]:
        """
        Checks the window is Sunday-aligned.

        Returns:
            List[str]: Problems found, empty if valid.
        """
        errors: List[str] = []
        if self.week_start.weekday() != SUNDAY:
            errors.append("week_start must be a Sunday")
        if self.week_start.time() != time.min:
            errors.append("week_start must be at midnight")
        return errors


def root_items(items: Iterable[Item]) -> List[Item]:
    """Returns the items that have no parent, in input order."""
    return [item for item in items if item.is_root]


def find_item_by_id(items: Iterable[Item], item_id: str) -> Optional[Item]:
    """
    Searches items and their children depth-first.

    Args:
        items: Top-level items to search.
        item_id: Identifier to look for.

    Returns:
        Optional[Item]: The matching item, or None.
    """
    for item in items:
        if item.id == item_id:
            return item
        if item.children:
            found = find_item_by_id(item.children, item_id)
            if found is not None:
                return found
    return None
