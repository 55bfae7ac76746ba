"""
Viewport math.

Pure functions over ViewportTransform: cursor-anchored zoom and the
fit/center transform. Stateful ownership of the transform lives in the
application layer.
"""

from typing import Tuple

from ..domain.models import TreeBounds, ViewportTransform


def zoom_around_point(transform: ViewportTransform, cursor_x: float,
                      cursor_y: float, zoom_factor: float) -> ViewportTransform:
    """
    Scale by zoom_factor keeping the content point under the cursor fixed.

    Args:
        transform: Current transform
        cursor_x: Cursor x relative to the container
        cursor_y: Cursor y relative to the container
        zoom_factor: Multiplier, e.g. 1.1 to zoom in or 1/1.1 to zoom out
    """
    anchor = transform.to_content(cursor_x, cursor_y)
    scale = transform.scale * zoom_factor
    return ViewportTransform(
        scale=scale,
        pan_x=cursor_x - anchor.x * scale,
        pan_y=cursor_y - anchor.y * scale,
    )


def wheel_zoom_factor(delta_y: float, zoom_step: float = 1.1) -> float:
    """Scroll down (positive delta) zooms out, scroll up zooms in."""
    return 1 / zoom_step if delta_y > 0 else zoom_step


def compute_fit_transform(bounds: TreeBounds, container_width: float,
                          container_height: float,
                          padding: float = 100) -> ViewportTransform:
    """
    Transform that fits the padded bounds into the container, centered.

    The scale is capped at 1 so a fit never magnifies beyond 1:1.
    """
    scale_x, scale_y = _fit_scales(bounds, container_width, container_height, padding)
    scale = min(scale_x, scale_y, 1.0)
    return ViewportTransform(
        scale=scale,
        pan_x=(container_width - bounds.width * scale) / 2 - bounds.min_x * scale,
        pan_y=(container_height - bounds.height * scale) / 2 - bounds.min_y * scale,
    )


def _fit_scales(bounds: TreeBounds, container_width: float,
                container_height: float, padding: float) -> Tuple[float, float]:
    padded_width = bounds.width + padding
    padded_height = bounds.height + padding
    # Degenerate boxes (zero size and padding) impose no constraint
    scale_x = container_width / padded_width if padded_width else float("inf")
    scale_y = container_height / padded_height if padded_height else float("inf")
    return scale_x, scale_y
