import pytest
import math
from bezpath.geom import *
from bezpath.path import Path
from bezpath.combine import *

"""Test functions for the Boolean combination wrapper"""


def makeCircles(center, rad=1.0, sep=1.0):
    """Helper function to create two overlapping circles"""
    c1 = Path.circle(center, rad)
    c2 = Path.circle(add(center, point(sep, 0)), rad)
    return c1, c2


class TestBoolean:
    """Tests for Boolean combinations of closed paths"""

    def test_types(self):
        a = Path.rectangle(0, 0, 2, 2)
        b = Path.rectangle(1, 1, 2, 2)
        assert Boolean('union', [a, b]).area == pytest.approx(7.0)
        assert Boolean('intersection', [a, b]).area == pytest.approx(1.0)
        assert Boolean('difference', [a, b]).area == pytest.approx(3.0)
        assert Boolean('union', [a, b]).type == 'union'

    def test_bad_type(self):
        with pytest.raises(ValueError):
            Boolean('xor', [])

    def test_open_path_rejected(self):
        opened = Path.from_polygon([(0, 0), (1, 0), (1, 1)], closed=False)
        with pytest.raises(ValueError):
            Boolean('union', [opened, Path.rectangle(0, 0, 1, 1)])
        with pytest.raises(ValueError):
            Boolean('union', ['not a path'])

    def test_too_few_operands(self):
        b = Boolean('union', [Path.rectangle(0, 0, 1, 1)])
        with pytest.raises(ValueError):
            b.path

    def test_fold_three_operands(self):
        a = Path.rectangle(0, 0, 2, 2)
        b = Path.rectangle(1, 1, 2, 2)
        c = Path.rectangle(2.5, -0.5, 1.5, 2)
        u = Boolean('union', [a, b, c])
        bb = u.bounding_box
        assert bb.min == pytest.approx((0.0, -0.5))
        assert bb.max == pytest.approx((4.0, 3.0))
        assert u.area == pytest.approx(9.75)
        assert u.path.contains((3.5, 0.0))

    def test_lazy_update(self):
        c1, c2 = makeCircles(point(0, 0))
        b = Boolean('intersection', [c1, c2])
        assert b.update
        lens = b.area
        assert not b.update
        assert lens == pytest.approx(2*math.acos(0.5) - 0.5*math.sqrt(3), rel=1e-2)
        assert b.path is b.path

    def test_translate(self):
        c1, c2 = makeCircles(point(0, 0))
        b = Boolean('union', [c1, c2])
        area = b.area
        b.translate(point(10, 5))
        assert b.update
        bb = b.bounding_box
        assert bb.min == pytest.approx((9.0, 4.0), abs=1e-6)
        assert bb.max == pytest.approx((12.0, 6.0), abs=1e-6)
        assert b.area == pytest.approx(area, rel=1e-6)

    def test_scale_and_rotate(self):
        a = Path.rectangle(0, 0, 2, 2)
        b = Path.rectangle(1, 1, 2, 2)
        u = Boolean('difference', [a, b])
        u.scale(2.0)
        assert u.area == pytest.approx(12.0)
        u.rotate(90, point(0, 0))
        bb = u.bounding_box
        assert bb.min == pytest.approx((-4.0, 0.0), abs=1e-9)
        assert bb.max == pytest.approx((0.0, 4.0), abs=1e-9)

    def test_bad_matrix(self):
        b = Boolean('union', [Path.rectangle(0, 0, 1, 1), Path.rectangle(2, 2, 1, 1)])
        with pytest.raises(ValueError):
            b.transform('not a matrix')
