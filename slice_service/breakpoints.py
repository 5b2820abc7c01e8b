"""
Break point planning for paginating long content into fixed-height slices.

Given the geometry of the block-level elements in a rendered document, pick
the offsets at which the content is cut into images so that no element is
split across two images whenever that can be avoided.

Usage:
    from slice_service.breakpoints import Element, find_optimal_break_points

    elements = [Element(top=0, height=80), Element(top=80, height=30)]
    find_optimal_break_points(elements, target_height=100, total_height=250)
    # Returns: [0, 80, 180]
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Mapping, Sequence

logger = logging.getLogger(__name__)

# Slice content bounds, as fractions of the target height, used when an
# element would otherwise straddle a cut.
MIN_CONTENT_RATIO = 0.5  # break before the element if at least this much content is already in the slice
MAX_CONTENT_RATIO = 1.5  # include the whole element if the slice stays within this much content


@dataclass(frozen=True)
class Element:
    """Vertical extent of one block-level element, in content coordinates."""

    top: float
    height: float

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def straddles(self, offset: float) -> bool:
        """True if offset falls strictly inside the element."""
        return self.top < offset < self.bottom

    @classmethod
    def from_mapping(cls, data: Mapping) -> "Element":
        """Build an Element from a {"top": ..., "height": ...} mapping."""
        return cls(top=data["top"], height=data["height"])


@dataclass(frozen=True)
class Slice:
    """One output image: the half-open span [start, end) of the content."""

    index: int
    start: float
    end: float

    @property
    def height(self) -> float:
        return self.end - self.start


def _fixed_interval_break_points(target_height: float, total_height: float) -> List[float]:
    """Cut every target_height when there is no element structure to respect."""
    num_slices = math.ceil(total_height / target_height)
    return [0] + [i * target_height for i in range(1, num_slices)]


def find_optimal_break_points(
    elements: Sequence[Element],
    target_height: float,
    total_height: float
) -> List[float]:
    """
    Find break points that avoid splitting elements across slices.

    Greedy single pass: starting from offset 0, aim for a cut every
    target_height. When the ideal cut lands inside an element, cut before
    it if the slice already holds at least MIN_CONTENT_RATIO of the target,
    otherwise after it if the slice stays within MAX_CONTENT_RATIO, and
    before it as a last resort. Only the first straddling element is
    considered per step.

    Args:
        elements: Element extents in document order (not mutated)
        target_height: Desired slice height, must be positive and finite
        total_height: Height of the whole content, must be finite

    Returns:
        Ascending list of cut offsets starting at 0. The last entry is the
        start of the final slice, which runs to total_height.
    """
    if not math.isfinite(target_height) or target_height <= 0:
        logger.warning(f"Unusable target height {target_height}, returning a single slice")
        return [0]

    if not math.isfinite(total_height):
        logger.warning(f"Non-finite total height {total_height}, returning a single slice")
        return [0]

    if not elements:
        return _fixed_interval_break_points(target_height, total_height)

    break_points: List[float] = [0]
    current_offset: float = 0

    while current_offset + target_height < total_height:
        ideal_break_point = current_offset + target_height

        straddling = next((e for e in elements if e.straddles(ideal_break_point)), None)

        if straddling is None:
            next_break_point = ideal_break_point
            rule = "ideal"
        else:
            content_before = straddling.top - current_offset
            content_including = straddling.bottom - current_offset

            if content_before >= target_height * MIN_CONTENT_RATIO:
                next_break_point = straddling.top
                rule = "before"
            elif content_including <= target_height * MAX_CONTENT_RATIO:
                next_break_point = straddling.bottom
                rule = "after"
            else:
                # Element too large to include, accept a short slice
                next_break_point = straddling.top
                rule = "before-oversized"

            # Zero-height or overlapping elements can pull the cut backwards
            if next_break_point <= current_offset:
                next_break_point = current_offset + target_height
                rule = "forced"

        logger.debug(f"Break point {next_break_point} ({rule}) after offset {current_offset}")
        break_points.append(next_break_point)
        current_offset = next_break_point

    return break_points


def break_points_to_slices(break_points: Sequence[float], total_height: float) -> List[Slice]:
    """
    Turn a break point sequence into explicit slice spans.

    Each slice runs from its break point to the next one; the last slice
    runs to total_height.
    """
    slices = []
    for index, start in enumerate(break_points):
        if index + 1 < len(break_points):
            end = break_points[index + 1]
        else:
            end = max(start, total_height)
        slices.append(Slice(index=index, start=start, end=end))
    return slices


def plan_slices(
    elements: Sequence[Element],
    target_height: float,
    total_height: float
) -> List[Slice]:
    """Plan break points and return the resulting slices."""
    break_points = find_optimal_break_points(elements, target_height, total_height)
    return break_points_to_slices(break_points, total_height)
