"""
Slice Service - FastAPI application for slice planning helpers.

Provides endpoints for computing image break points from element geometry,
normalizing multibyte markdown emphasis, and resolving viewport sizes.
Rendering itself happens in the caller; this service only does the math.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field, model_validator

from . import __version__
from .breakpoints import Element, plan_slices
from .config import get_settings, validate_config_on_startup
from .logger import get_logger, setup_logging
from .markdown_normalizer import contains_wide_characters, normalize_multibyte_emphasis
from .viewport import resolve_viewport_size

logger = get_logger(__name__)

app = FastAPI(
    title="Slice Service",
    version=__version__,
    description="Break point planning and markdown helpers for image export"
)


# ============================================================================
# Startup Event - Validate Configuration
# ============================================================================

@app.on_event("startup")
async def configure_on_startup():
    """Validate settings and configure logging before serving requests."""
    settings = validate_config_on_startup()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"Slice Service {__version__} started ({settings.environment})")


# ============================================================================
# Request/Response Models
# ============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    timestamp: datetime
    version: str
    environment: str


class ElementModel(BaseModel):
    """Vertical extent of one block element."""
    top: float = Field(..., allow_inf_nan=False, description="Offset of the element's top edge")
    height: float = Field(..., ge=0, allow_inf_nan=False, description="Element height")


class BreakPointsRequest(BaseModel):
    """Element geometry for one content block."""
    elements: List[ElementModel] = Field(default_factory=list, description="Block elements in document order")
    targetHeight: Optional[float] = Field(None, gt=0, allow_inf_nan=False, description="Target slice height (defaults to settings)")
    totalHeight: float = Field(..., ge=0, allow_inf_nan=False, description="Total content height")

    @model_validator(mode="after")
    def check_slice_count(self) -> "BreakPointsRequest":
        """Reject height ratios that would plan more than max_slices slices."""
        settings = get_settings()
        target_height = self.targetHeight or settings.default_slice_height
        if self.totalHeight / target_height > settings.max_slices:
            raise ValueError(
                f"totalHeight/targetHeight ratio exceeds max_slices ({settings.max_slices})"
            )
        return self


class SliceModel(BaseModel):
    index: int
    start: float
    end: float
    height: float


class BreakPointsResponse(BaseModel):
    breakPoints: List[float]
    slices: List[SliceModel]
    targetHeight: float


class NormalizeRequest(BaseModel):
    text: str = Field(..., description="Markdown source")


class NormalizeResponse(BaseModel):
    text: str
    changed: bool
    containsWideCharacters: bool


class ViewportResponse(BaseModel):
    """Resolved viewport; invalid descriptors carry a reason instead of dimensions."""
    size: str
    auto: bool = False
    width: Optional[float] = None
    height: Optional[float] = None
    reason: Optional[str] = None
    message: Optional[str] = None


# ============================================================================
# Health Check Endpoint
# ============================================================================

@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for container orchestration."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.utcnow(),
        version=__version__,
        environment=get_settings().environment
    )


# ============================================================================
# Planning Endpoints
# ============================================================================

@app.post("/breakpoints", response_model=BreakPointsResponse)
def compute_break_points(request: BreakPointsRequest) -> BreakPointsResponse:
    """
    Compute slice break points for a content block.

    Runs in the FastAPI threadpool, off the event loop.

    Args:
        request: Element geometry, target and total height

    Returns:
        Break point offsets and the slices they produce

    Raises:
        HTTPException: 500 if planning fails unexpectedly
    """
    request_logger = get_logger(__name__, request_id=uuid.uuid4().hex)
    target_height = request.targetHeight or get_settings().default_slice_height

    try:
        elements = [Element.from_mapping(e.model_dump()) for e in request.elements]
        slices = plan_slices(elements, target_height, request.totalHeight)
    except Exception as e:
        request_logger.error(f"Break point planning failed: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail=f"Break point planning failed: {str(e)}"
        )

    request_logger.info(
        f"Planned {len(slices)} slice(s) for {len(elements)} element(s) "
        f"(target={target_height}, total={request.totalHeight})"
    )

    return BreakPointsResponse(
        breakPoints=[s.start for s in slices],
        slices=[SliceModel(index=s.index, start=s.start, end=s.end, height=s.height) for s in slices],
        targetHeight=target_height
    )


@app.post("/normalize-markdown", response_model=NormalizeResponse)
async def normalize_markdown(request: NormalizeRequest) -> NormalizeResponse:
    """Normalize emphasis markers so they render next to multibyte text."""
    normalized = normalize_multibyte_emphasis(request.text)
    return NormalizeResponse(
        text=normalized,
        changed=normalized != request.text,
        containsWideCharacters=contains_wide_characters(request.text)
    )


@app.get("/viewport", response_model=ViewportResponse)
async def viewport(size: Optional[str] = Query(None, description="'auto', a preset name, or WIDTHxHEIGHT")) -> ViewportResponse:
    """
    Resolve a viewport descriptor.

    Invalid descriptors are not an HTTP error: the response carries the
    reason code and the caller falls back to auto sizing.
    """
    descriptor = size if size is not None else get_settings().default_viewport_size
    result = resolve_viewport_size(descriptor)

    if not result.ok:
        logger.warning(f"{result.message} ({result.reason.value})")
        return ViewportResponse(
            size=descriptor,
            reason=result.reason.value,
            message=result.message
        )

    if result.is_auto:
        return ViewportResponse(size=descriptor, auto=True)

    return ViewportResponse(
        size=descriptor,
        width=result.dimensions.width,
        height=result.dimensions.height
    )
