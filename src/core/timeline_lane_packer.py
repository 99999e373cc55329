"""
Timeline Lane Packer Module.

Provides the lane packing algorithm for organizing week segments on the
timeline without overlaps using a greedy "First Fit" approach over two
dimensions: absolute time and window day.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from functools import reduce
from typing import Dict, Iterable, List, Tuple

from src.core.logging_config import get_logger
from src.core.segmentation import Segment

logger = get_logger(__name__)


@dataclass(frozen=True)
class Lane:
    """
    Envelope of everything placed in one vertical row so far.

    Attributes:
        index: Position of the lane, 0 at the top.
        start_time: Earliest start of any segment in the lane.
        end_time: Latest end of any segment in the lane.
        start_day: Lowest day index in the lane.
        end_day: Highest day index in the lane.
    """

    index: int
    start_time: datetime
    end_time: datetime
    start_day: int
    end_day: int

    @classmethod
    def from_segment(cls, index: int, segment: Segment) -> "Lane":
        return cls(
            index=index,
            start_time=segment.start_time,
            end_time=segment.end_time,
            start_day=segment.day_index,
            end_day=_end_day(segment),
        )

    def accepts(self, segment: Segment) -> bool:
        """
        Checks whether a segment may join this lane.

        A segment fits only when it is clear of the lane in time and in
        days at once. Touching time ranges are clear; days are inclusive.

        Args:
            segment: Candidate segment.

        Returns:
            bool: True if the segment can be placed here.
        """
        time_overlap = not (
            segment.end_time <= self.start_time or segment.start_time >= self.end_time
        )
        day_overlap = not (
            _end_day(segment) < self.start_day or segment.day_index > self.end_day
        )
        return not time_overlap and not day_overlap

    def absorb(self, segment: Segment) -> "Lane":
        """Returns the lane grown to cover the segment as well."""
        return replace(
            self,
            start_time=min(self.start_time, segment.start_time),
            end_time=max(self.end_time, segment.end_time),
            start_day=min(self.start_day, segment.day_index),
            end_day=max(self.end_day, _end_day(segment)),
        )


@dataclass(frozen=True)
class LanePacking:
    """
    Result of packing: the lanes and the lane of every segment.

    Attributes:
        lanes: Lanes in creation order.
        assignments: Segment id -> lane index.
    """

    lanes: Tuple[Lane, ...] = ()
    assignments: Dict[str, int] = field(default_factory=dict)

    @property
    def lane_count(self) -> int:
        return len(self.lanes)


def _end_day(segment: Segment) -> int:
    if segment.end_day_index is None:
        return segment.day_index
    return segment.end_day_index


def packing_order_key(segment: Segment) -> Tuple[bool, int, datetime, str]:
    """
    Sort key deciding who gets the upper lanes first.

    Single-day segments come before multi-day ones, then shorter before
    longer, then earlier before later. The id keeps ties stable whatever
    the input order.
    """
    return (
        segment.is_multi_day,
        segment.duration_minutes,
        segment.start_time,
        segment.segment_id,
    )


class TimelineLanePacker:
    """
    Handles the lane packing algorithm for timeline segments.

    Uses a greedy "First Fit" algorithm: segments are visited in
    packing order and each one goes to the first lane whose envelope it
    does not touch, or to a new lane. Lanes only ever grow, so the result
    is a heuristic packing, not a minimal one.
    """

    def pack_segments(self, segments: Iterable[Segment]) -> LanePacking:
        """
        Packs segments into lanes using the First Fit algorithm.

        Args:
            segments: Segments of one window, in any order. Segments
                without a day index are left out.

        Returns:
            LanePacking: Lanes and segment id -> lane index mapping.
        """
        placeable: List[Segment] = []
        for segment in segments:
            if segment.day_index is None:
                logger.debug(f"Segment {segment.segment_id} has no day, not packed")
                continue
            placeable.append(segment)

        logger.debug(f"Packing {len(placeable)} segments")

        ordered = sorted(placeable, key=packing_order_key)
        packing = reduce(self._place, ordered, LanePacking())

        logger.debug(f"Packed into {packing.lane_count} lanes")
        return packing

    def _place(self, packing: LanePacking, segment: Segment) -> LanePacking:
        """
        Places one segment, returning the next packing state.

        Args:
            packing: State after the previous segments.
            segment: Segment to place.

        Returns:
            LanePacking: New state with the segment assigned.
        """
        lanes = list(packing.lanes)

        # First Fit - find first lane the segment is clear of
        for i, lane in enumerate(lanes):
            if lane.accepts(segment):
                lanes[i] = lane.absorb(segment)
                assigned_lane = i
                break
        else:
            # No available lane found, create a new one
            assigned_lane = len(lanes)
            lanes.append(Lane.from_segment(assigned_lane, segment))

        assignments = dict(packing.assignments)
        assignments[segment.segment_id] = assigned_lane
        return LanePacking(lanes=tuple(lanes), assignments=assignments)


def assign_lanes(segments: Iterable[Segment]) -> Dict[str, int]:
    """
    Assigns every segment to a lane.

    Args:
        segments: Segments of one window.

    Returns:
        Dict[str, int]: Segment id -> lane index. Empty for no segments.
    """
    return TimelineLanePacker().pack_segments(segments).assignments
