"""
Viewport size descriptor parsing.

Descriptors are either "auto" (use the natural content size) or
"<width>x<height>" such as "1200x675". Parsing never raises: failures are
reported through ViewportParseResult.reason so callers can log through
their own channel. get_viewport_dimensions() is the simple form that
returns None and logs the diagnostic itself.
"""

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)

AUTO = "auto"
SEPARATOR = "x"

# Named sizes offered by the export UI
VIEWPORT_PRESETS: Dict[str, str] = {
    "16:9": "1200x675",
    "square": "1200x1200",
    "twitter-card": "1200x628",
    "portrait": "1080x1920",
    "small": "600x335",
}

_NUMBER_RE = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$')

Number = Union[int, float]


class ViewportErrorReason(str, Enum):
    """Why a descriptor could not be turned into dimensions."""

    MISSING_SEPARATOR = "MissingSeparator"
    NON_NUMERIC = "NonNumeric"
    NON_POSITIVE = "NonPositive"


@dataclass(frozen=True)
class ViewportDimensions:
    width: Number
    height: Number

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True)
class ViewportParseResult:
    """
    Outcome of parsing a viewport descriptor.

    Exactly one of these holds: is_auto is True, dimensions is set, or
    reason is set. width/height keep the raw parsed values (possibly NaN)
    whenever the separator was present.
    """

    raw: str
    dimensions: Optional[ViewportDimensions] = None
    reason: Optional[ViewportErrorReason] = None
    is_auto: bool = False
    width: Optional[float] = None
    height: Optional[float] = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    @property
    def message(self) -> Optional[str]:
        """Diagnostic text for a failed parse, None otherwise."""
        if self.reason is None:
            return None
        if self.reason == ViewportErrorReason.MISSING_SEPARATOR:
            return f"Invalid viewport size format: {self.raw}"
        return f"Invalid viewport dimensions: {_format_number(self.width)} {_format_number(self.height)}"


def _parse_number(segment: str) -> float:
    """
    Parse one dimension segment.

    Surrounding whitespace is ignored and an empty segment counts as 0.
    Anything that is not a plain decimal number is NaN.
    """
    segment = segment.strip()
    if not segment:
        return 0.0
    if not _NUMBER_RE.match(segment):
        return math.nan
    value = float(segment)
    # Exponent overflow ("1e999") is not a usable dimension
    if not math.isfinite(value):
        return math.nan
    return value


def _to_number(value: float) -> Number:
    return int(value) if value.is_integer() else value


def _format_number(value: Optional[float]) -> str:
    if value is None:
        return "None"
    if math.isnan(value):
        return "NaN"
    return str(_to_number(value))


def parse_viewport_size(descriptor: str) -> ViewportParseResult:
    """
    Parse a viewport size descriptor.

    Args:
        descriptor: "auto" or "<width>x<height>"; segments after the second are ignored

    Returns:
        ViewportParseResult with dimensions, is_auto, or a reason code
    """
    if descriptor == AUTO:
        return ViewportParseResult(raw=descriptor, is_auto=True)

    if SEPARATOR not in descriptor:
        return ViewportParseResult(raw=descriptor, reason=ViewportErrorReason.MISSING_SEPARATOR)

    parts = descriptor.split(SEPARATOR)
    width = _parse_number(parts[0])
    height = _parse_number(parts[1])

    if math.isnan(width) or math.isnan(height):
        reason = ViewportErrorReason.NON_NUMERIC
    elif width <= 0 or height <= 0:
        reason = ViewportErrorReason.NON_POSITIVE
    else:
        reason = None

    if reason is not None:
        return ViewportParseResult(raw=descriptor, reason=reason, width=width, height=height)

    return ViewportParseResult(
        raw=descriptor,
        dimensions=ViewportDimensions(width=_to_number(width), height=_to_number(height)),
        width=width,
        height=height,
    )


def resolve_viewport_size(name_or_descriptor: str) -> ViewportParseResult:
    """Parse a descriptor, accepting preset names from VIEWPORT_PRESETS."""
    return parse_viewport_size(VIEWPORT_PRESETS.get(name_or_descriptor, name_or_descriptor))


def get_viewport_dimensions(descriptor: str) -> Optional[ViewportDimensions]:
    """
    Get viewport dimensions for a descriptor.

    Returns None for "auto" (use the content size) and for invalid input.
    Invalid input is logged at ERROR level.
    """
    result = parse_viewport_size(descriptor)
    if not result.ok:
        logger.error(result.message)
    return result.dimensions
