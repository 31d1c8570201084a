"""
Tests for the primitive data model.
"""
import math

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.primitives import Arc, Box, Placement, Polyline, anchor_points, segment


class TestArc:

    def test_counter_clockwise_sweep(self):
        arc = Arc(0.0, 0.0, 1.0, 0.0, math.pi / 2)
        assert arc.sweep == pytest.approx(math.pi / 2)

    def test_clockwise_sweep(self):
        arc = Arc(0.0, 0.0, 1.0, 0.0, math.pi / 2, clockwise=True)
        assert arc.sweep == pytest.approx(-3 * math.pi / 2)

    def test_full_turn(self):
        assert Arc(0.0, 0.0, 1.0, 0.0, 2 * math.pi).sweep == pytest.approx(2 * math.pi)

    def test_same_angle_is_a_point(self):
        assert Arc(0.0, 0.0, 1.0, 1.0, 1.0).sweep == 0.0

    def test_wrapping_sweep(self):
        # pi - a -> pi + a stays on the near side
        a = 0.8
        arc = Arc(0.0, 0.0, 1.0, math.pi - a, math.pi + a)
        assert arc.sweep == pytest.approx(2 * a)

    def test_endpoints(self):
        arc = Arc(2.0, -1.0, 3.0, 0.0, math.pi, samples=5)
        pts = list(arc.points(0.5))
        assert len(pts) == 5
        assert pts[0] == pytest.approx((5.0, 0.5, -1.0))
        assert pts[-1] == pytest.approx((-1.0, 0.5, -1.0))
        assert pts[2] == pytest.approx((2.0, 0.5, 2.0))

    def test_restartable(self):
        arc = Arc(0.0, 0.0, 1.0, 0.0, math.pi, samples=8)
        assert list(arc.points(0.0)) == list(arc.points(0.0))

    def test_open_loop_has_no_closing_point(self):
        pts = list(Arc(0.0, 0.0, 1.0, 0.0, 2 * math.pi, samples=4).points(0.0, endpoint=False))
        assert pts[1] == pytest.approx((0.0, 0.0, 1.0))
        assert pts[-1] == pytest.approx((0.0, 0.0, -1.0))

    def test_needs_two_samples(self):
        with pytest.raises(ValueError):
            Arc(0.0, 0.0, 1.0, 0.0, 1.0, samples=1)


class TestPrimitives:

    def test_segment_length(self):
        s = segment((0, 0, 0), (3, 4, 0))
        assert isinstance(s, Polyline)
        assert s.length == pytest.approx(5.0)
        assert s.points == ((0.0, 0.0, 0.0), (3.0, 4.0, 0.0))

    def test_value_equality(self):
        a = Box(1.0, 2.0, 3.0, placement=Placement((1.0, 0.0, 0.0)))
        b = Box(1.0, 2.0, 3.0, placement=Placement((1.0, 0.0, 0.0)))
        assert a == b
        assert hash(a) == hash(b)

    def test_anchor_points(self):
        box = Box(1.0, 1.0, 1.0, placement=Placement((4.0, 5.0, 6.0)))
        assert anchor_points(box) == ((4.0, 5.0, 6.0),)
        s = segment((0, 0, 0), (1, 1, 1))
        assert anchor_points(s) == s.points
