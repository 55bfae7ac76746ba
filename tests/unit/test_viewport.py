"""
Tests for the viewport math and ViewportVM.
"""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from PyQt6.QtCore import QCoreApplication

from treeviewer_core.domain.models import TreeBounds, ViewportTransform
from treeviewer_core.services.viewport import (
    compute_fit_transform, wheel_zoom_factor, zoom_around_point,
)
from treeviewer_app.viewmodels.viewport_vm import ViewportVM


app = QCoreApplication.instance() or QCoreApplication([])

BOUNDS = TreeBounds(0, 0, 360, 250)


class TestZoomAroundPoint:
    """The content point under the cursor stays put."""

    @pytest.mark.parametrize("factor", [1.1, 1 / 1.1, 2.0, 0.25])
    def test_anchor_invariant(self, factor):
        before = ViewportTransform(1.3, 40, -25)
        after = zoom_around_point(before, 310, 120, factor)

        assert after.scale == pytest.approx(1.3 * factor)
        a = before.to_content(310, 120)
        b = after.to_content(310, 120)
        assert b.x == pytest.approx(a.x)
        assert b.y == pytest.approx(a.y)

    def test_double_at_cursor(self):
        after = zoom_around_point(ViewportTransform(), 100, 100, 2.0)
        assert after == ViewportTransform(2.0, -100, -100)

    def test_wheel_direction(self):
        assert wheel_zoom_factor(120) == pytest.approx(1 / 1.1)
        assert wheel_zoom_factor(-120) == pytest.approx(1.1)
        assert wheel_zoom_factor(-3, zoom_step=1.5) == 1.5


class TestFitTransform:
    """Centering and fitting bounds into a container."""

    def test_scale_capped_at_one(self):
        t = compute_fit_transform(BOUNDS, 800, 600, 100)
        assert t == ViewportTransform(1.0, 220, 175)

    def test_small_container(self):
        t = compute_fit_transform(BOUNDS, 400, 300, 100)
        assert t.scale == pytest.approx(600 / 700)
        assert t.pan_x == pytest.approx((400 - 360 * t.scale) / 2)
        assert t.pan_y == pytest.approx((300 - 250 * t.scale) / 2)

    def test_bounds_centered(self):
        """The bounds' center maps to the container's center."""
        bounds = TreeBounds(-120, 40, 900, 700)
        t = compute_fit_transform(bounds, 640, 480, 50)
        center = t.to_container((bounds.min_x + bounds.max_x) / 2, (bounds.min_y + bounds.max_y) / 2)
        assert center.x == pytest.approx(320)
        assert center.y == pytest.approx(240)

    def test_zero_padding_exact_fit(self):
        t = compute_fit_transform(TreeBounds(0, 0, 1600, 600), 800, 600, 0)
        assert t.scale == pytest.approx(0.5)
        assert t.pan_x == pytest.approx(0)
        assert t.pan_y == pytest.approx(150)

    def test_empty_bounds_zero_padding(self):
        t = compute_fit_transform(TreeBounds(), 800, 600, 0)
        assert t == ViewportTransform(1.0, 400, 300)


class TestViewportVM:
    """Stateful transform ownership."""

    def test_initial_identity(self):
        vm = ViewportVM()
        assert vm.transform == ViewportTransform(1.0, 0.0, 0.0)

    def test_set_transform_emits(self):
        vm = ViewportVM()
        seen = []
        vm.transform_changed.connect(lambda t: seen.append(t))

        vm.set_transform(2.0, 10, 20)
        vm.set_transform(2.0, 10, 20)

        assert seen == [ViewportTransform(2.0, 10, 20)]

    def test_pan_keeps_scale(self):
        vm = ViewportVM()
        vm.set_transform(1.5, 0, 0)
        vm.pan_to(-30, 45)
        assert vm.transform == ViewportTransform(1.5, -30, 45)

    def test_toolbar_zoom_keeps_pan(self):
        vm = ViewportVM(zoom_step=1.25)
        vm.set_transform(1.0, 10, 20)
        vm.zoom_in()
        assert vm.transform == ViewportTransform(1.25, 10, 20)
        vm.zoom_out()
        assert vm.scale == pytest.approx(1.0)
        assert (vm.pan_x, vm.pan_y) == (10, 20)

    def test_zoom_around_point(self):
        vm = ViewportVM()
        before = vm.content_point(200, 150)
        vm.zoom_around_point(200, 150, 1.1)
        after = vm.content_point(200, 150)
        assert after.x == pytest.approx(before.x)
        assert after.y == pytest.approx(before.y)

    def test_reset(self):
        vm = ViewportVM(reset_pan=(50, 50))
        vm.set_transform(3.0, -400, 12)
        vm.reset_transform()
        assert vm.transform == ViewportTransform(1.0, 50, 50)

    def test_fit_applies(self):
        vm = ViewportVM()
        applied = vm.fit_to_bounds(BOUNDS, 800, 600, 100)
        assert applied == ViewportTransform(1.0, 220, 175)
        assert vm.transform == applied

    def test_compute_fit_does_not_apply(self):
        vm = ViewportVM()
        vm.compute_fit_transform(BOUNDS, 800, 600)
        assert vm.transform == ViewportTransform()

    def test_fit_skipped_for_zero_size_container(self):
        vm = ViewportVM()
        vm.set_transform(2.0, 5, 5)
        assert vm.fit_to_bounds(BOUNDS, 0, 600) is None
        assert vm.transform == ViewportTransform(2.0, 5, 5)
