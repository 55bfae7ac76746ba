"""
Viewport ViewModel.

Owns the pan/zoom transform of one viewer:
- Direct assignment, pan, and reset
- Cursor-anchored zoom (wheel) and fixed-step zoom (toolbar)
- Fit/center transforms computed from tree bounds

The renderer listens to `transform_changed` and applies the transform to
the whole node/edge group.
"""

import logging
from typing import Optional, Tuple

from PyQt6.QtCore import pyqtSignal

from .base import BaseViewModel
from treeviewer_core.domain.models import Point, TreeBounds, ViewportTransform
from treeviewer_core.services.viewport import compute_fit_transform, zoom_around_point


logger = logging.getLogger(__name__)


class ViewportVM(BaseViewModel):
    """
    ViewModel for the viewport transform.

    Signals:
        transform_changed: Emitted with the new ViewportTransform

    State:
        transform: Current (scale, pan_x, pan_y)
    """

    transform_changed = pyqtSignal(object)

    def __init__(
        self,
        zoom_step: float = 1.1,
        reset_pan: Tuple[float, float] = (50, 50),
    ):
        """
        Initialize the ViewModel.

        Args:
            zoom_step: Factor applied per zoom step
            reset_pan: Pan offset restored by reset_transform()
        """
        super().__init__()

        self._zoom_step = zoom_step
        self._reset_pan = reset_pan
        self._transform = ViewportTransform()

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def transform(self) -> ViewportTransform:
        return self._transform

    @property
    def scale(self) -> float:
        return self._transform.scale

    @property
    def pan_x(self) -> float:
        return self._transform.pan_x

    @property
    def pan_y(self) -> float:
        return self._transform.pan_y

    @property
    def zoom_step(self) -> float:
        return self._zoom_step

    def content_point(self, container_x: float, container_y: float) -> Point:
        """Map a container pixel position to content coordinates."""
        return self._transform.to_content(container_x, container_y)

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def set_transform(self, scale: float, pan_x: float, pan_y: float) -> None:
        """Assign the transform directly. No validation."""
        self._apply(ViewportTransform(scale, pan_x, pan_y))

    def pan_to(self, pan_x: float, pan_y: float) -> None:
        """Move the content origin, keeping the scale."""
        self._apply(ViewportTransform(self._transform.scale, pan_x, pan_y))

    def zoom_around_point(self, cursor_x: float, cursor_y: float,
                          zoom_factor: float) -> None:
        """Zoom keeping the content point under the cursor in place."""
        self._apply(zoom_around_point(self._transform, cursor_x, cursor_y, zoom_factor))

    def zoom_in(self) -> None:
        """Toolbar zoom in: scale up one step, pan unchanged."""
        t = self._transform
        self._apply(ViewportTransform(t.scale * self._zoom_step, t.pan_x, t.pan_y))

    def zoom_out(self) -> None:
        """Toolbar zoom out: scale down one step, pan unchanged."""
        t = self._transform
        self._apply(ViewportTransform(t.scale / self._zoom_step, t.pan_x, t.pan_y))

    def compute_fit_transform(self, bounds: TreeBounds, container_width: float,
                              container_height: float,
                              padding: float = 100) -> ViewportTransform:
        """Transform fitting the padded bounds into the container (not applied)."""
        return compute_fit_transform(bounds, container_width, container_height, padding)

    def fit_to_bounds(self, bounds: TreeBounds, container_width: float,
                      container_height: float, padding: float = 100) -> Optional[ViewportTransform]:
        """
        Center and fit the bounds into the container.

        Returns:
            The applied transform, or None when the container has no area
        """
        if container_width <= 0 or container_height <= 0:
            logger.debug("Skipping fit: container is %sx%s", container_width, container_height)
            return None
        transform = self.compute_fit_transform(bounds, container_width, container_height, padding)
        self._apply(transform)
        return transform

    def reset_transform(self) -> None:
        """Return to scale 1 and the fixed reset pan, whatever the tree bounds."""
        pan_x, pan_y = self._reset_pan
        self._apply(ViewportTransform(1.0, pan_x, pan_y))

    def _apply(self, transform: ViewportTransform) -> None:
        self._set_and_notify("_transform", transform, self.transform_changed)
