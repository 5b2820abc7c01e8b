"""
Verify package imports work correctly.

These tests ensure the package is properly installed and modules
can be imported. Critical for catching setup.py/installation issues
in CI environments.
"""


def test_slice_service_package_structure():
    """Verify slice_service package has expected structure."""
    import importlib.util
    spec = importlib.util.find_spec('slice_service')
    assert spec is not None, "slice_service should be importable (package must be installed)"


def test_breakpoints_can_be_imported():
    """Verify the break point planner can be imported with its constants."""
    from slice_service.breakpoints import (
        MAX_CONTENT_RATIO,
        MIN_CONTENT_RATIO,
        find_optimal_break_points,
    )
    assert callable(find_optimal_break_points)
    assert MIN_CONTENT_RATIO < MAX_CONTENT_RATIO


def test_text_helpers_can_be_imported():
    """Verify markdown and viewport helpers can be imported."""
    from slice_service.markdown_normalizer import normalize_multibyte_emphasis
    from slice_service.viewport import get_viewport_dimensions, parse_viewport_size
    assert callable(normalize_multibyte_emphasis)
    assert callable(get_viewport_dimensions)
    assert callable(parse_viewport_size)


def test_slice_service_app_can_be_imported():
    """Verify slice service FastAPI app can be imported."""
    from slice_service.app import app
    assert app is not None
    assert hasattr(app, 'routes')
