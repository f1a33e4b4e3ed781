import math

import pytest

from bezpath.curves import CubicCurve, LineSegment
from bezpath.path import (FillRule, IndexedPathComponentLocation, IndexedPathLocation,
                          Path, PathComponent, PathIntersection, curve_winding)
from bezpath.xform import Translation

## unit tests for bezpath path.py

L = IndexedPathComponentLocation


def square():
    return Path.rectangle(0.0, 0.0, 2.0, 2.0)


class TestPathComponent:

    def test_construction(self):
        c = square().components[0]
        assert c.number_of_elements == 4
        assert c.orders == (1, 1, 1, 1)
        assert c.is_closed
        assert c.starting_point == (0.0, 0.0)
        assert c.ending_point == (0.0, 0.0)
        assert c.element(1) == LineSegment([(2.0, 0.0), (2.0, 2.0)])
        assert c.starting_indexed_location == L(0, 0.0)
        assert c.ending_indexed_location == L(3, 1.0)

    def test_bad_components(self):
        with pytest.raises(ValueError):
            PathComponent([(0, 0), (1, 1)], [2])
        with pytest.raises(ValueError):
            PathComponent([(0, 0), (1, 1), (2, 2), (3, 3), (4, 4)], [4])
        with pytest.raises(ValueError):
            PathComponent([(0, 0)], [])

    def test_from_curves(self):
        c = PathComponent.from_curves([
            LineSegment([(0, 0), (1, 0)]),
            CubicCurve([(1, 0), (1, 1), (0, 1), (0, 0)])])
        assert c.orders == (1, 3)
        assert len(c.points) == 5
        assert c.is_closed

    def test_point_and_normal(self):
        c = square().components[0]
        assert c.point(L(1, 0.5)) == (2.0, 1.0)
        assert c.normal(L(0, 0.5)) == pytest.approx((0.0, 1.0))

    def test_location_order(self):
        assert L(0, 0.9) < L(1, 0.0)
        assert IndexedPathLocation(0, 3, 0.5) < IndexedPathLocation(1, 0, 0.0)
        assert IndexedPathLocation.of(2, L(1, 0.5)).location_in_component == L(1, 0.5)

    def test_split(self):
        c = square().components[0]
        s = c.split(L(0, 0.5), L(2, 0.5))
        assert s.points == ((1.0, 0.0), (2.0, 0.0), (2.0, 2.0), (1.0, 2.0))
        assert s.orders == (1, 1, 1)
        assert c.split(L(2, 0.5), L(0, 0.5)) == s.reversed()
        ## an end at the start of an element stops at the previous one
        s = c.split(L(0, 0.5), L(2, 0.0))
        assert s.points == ((1.0, 0.0), (2.0, 0.0), (2.0, 2.0))
        s = c.split(L(1, 0.25), L(1, 0.75))
        assert s.points == ((2.0, 0.5), (2.0, 1.5))

    def test_reversed(self):
        c = square().components[0]
        r = c.reversed()
        assert r.points == tuple(reversed(c.points))
        assert r.reversed() == c

    def test_normalize_location(self):
        c = square().components[0]
        assert c.normalize_location(L(0, 1.0)) == L(1, 0.0)
        assert c.normalize_location(L(3, 1.0)) == L(0, 0.0)
        assert c.normalize_location(L(1, 1e-9)) == L(1, 0.0)
        assert c.normalize_location(L(1, 1.0 - 1e-9)) == L(2, 0.0)
        assert c.normalize_location(L(1, 0.5)) == L(1, 0.5)
        opened = PathComponent([(0, 0), (1, 0), (1, 1)], [1, 1])
        assert opened.normalize_location(L(1, 1.0)) == L(1, 1.0)

    def test_area(self):
        assert square().components[0].area == pytest.approx(4.0)
        assert square().components[0].reversed().area == pytest.approx(-4.0)

    def test_self_intersections(self):
        bowtie = Path.from_polygon([(0, 0), (2, 2), (2, 0), (0, 2)]).components[0]
        x = bowtie.self_intersections()
        assert len(x) == 1
        a, b = x[0]
        assert a == L(0, 0.5)
        assert b == L(2, 0.5)
        assert square().components[0].self_intersections() == []


class TestContainment:

    def test_square(self):
        p = square()
        assert p.contains((1.0, 1.0))
        assert p.contains((0.1, 1.9))
        assert not p.contains((3.0, 1.0))
        assert not p.contains((1.0, -0.5))
        assert not p.contains((-1.0, 1.0))
        assert p.winding_count((1.0, 1.0)) == 1
        assert p.reversed().winding_count((1.0, 1.0)) == -1

    def test_vertex_level_ray(self):
        ## the ray passes through a vertex of a diamond
        diamond = Path.from_polygon([(1, 0), (2, 1), (1, 2), (0, 1)])
        assert diamond.contains((0.5, 1.0))
        assert diamond.winding_count((0.5, 1.0)) == 1
        assert not diamond.contains((-0.5, 1.0))

    def test_fill_rules(self):
        outer = Path.rectangle(0.0, 0.0, 4.0, 4.0).components[0]
        inner = Path.rectangle(1.0, 1.0, 2.0, 2.0).components[0]
        nested = Path([outer, inner])
        assert nested.winding_count((2.0, 2.0)) == 2
        assert nested.contains((2.0, 2.0), FillRule.WINDING)
        assert not nested.contains((2.0, 2.0), FillRule.EVEN_ODD)
        assert nested.contains((0.5, 0.5), FillRule.EVEN_ODD)
        holed = Path([outer, inner.reversed()])
        assert not holed.contains((2.0, 2.0), FillRule.WINDING)

    def test_open_component_closed_implicitly(self):
        p = Path.from_polygon([(0, 0), (2, 0), (2, 2), (0, 2)], closed=False)
        assert not p.components[0].is_closed
        assert p.contains((1.0, 1.0))
        assert p.area == pytest.approx(4.0)

    def test_circle(self):
        c = Path.circle((1.0, 1.0), 2.0)
        assert c.contains((1.0, 1.0))
        assert c.contains((2.9, 1.0))
        assert not c.contains((3.1, 1.0))
        assert not c.contains((2.5, 2.5))

    def test_curve_winding(self):
        arc = CubicCurve([(1.0, -1.0), (2.0, -0.5), (2.0, 0.5), (1.0, 1.0)])
        assert curve_winding(arc, (0.0, 0.0)) == 1
        assert curve_winding(arc.reversed(), (0.0, 0.0)) == -1
        assert curve_winding(arc, (3.0, 0.0)) == 0
        assert curve_winding(arc, (0.0, 2.0)) == 0


class TestPath:

    def test_factories(self):
        r = Path.rectangle(1.0, 2.0, 3.0, 4.0)
        assert len(r) == 1
        assert r.area == pytest.approx(12.0)
        b = r.bounding_box
        assert b.min == (1.0, 2.0)
        assert b.max == (4.0, 6.0)
        with pytest.raises(ValueError):
            Path.from_polygon([(0, 0)])
        with pytest.raises(ValueError):
            Path(['not a component'])

    def test_circle(self):
        c = Path.circle((0.0, 0.0), 1.0)
        assert c.components[0].orders == (3, 3, 3, 3)
        assert c.area == pytest.approx(math.pi, rel=1e-3)
        b = c.bounding_box
        assert b.min == pytest.approx((-1.0, -1.0))
        assert b.max == pytest.approx((1.0, 1.0))

    def test_empty(self):
        assert Path().is_empty
        assert Path().area == 0.0
        assert not Path().contains((0.0, 0.0))
        assert Path().bounding_box.is_empty

    def test_transform_and_reverse(self):
        p = square().transform(Translation((5.0, 5.0)))
        assert p.bounding_box.min == (5.0, 5.0)
        assert p.contains((6.0, 6.0))
        assert p.reversed().area == pytest.approx(-4.0)
        assert p.reversed().reversed() == p

    def test_intersections(self):
        a = Path.rectangle(0.0, 0.0, 2.0, 2.0)
        b = Path.rectangle(1.0, 1.0, 2.0, 2.0)
        x = a.intersections(b)
        assert x == [
            PathIntersection(IndexedPathLocation(0, 1, 0.5), IndexedPathLocation(0, 0, 0.5)),
            PathIntersection(IndexedPathLocation(0, 2, 0.5), IndexedPathLocation(0, 3, 0.5)),
        ]
        assert a.intersections(Path.rectangle(5.0, 5.0, 1.0, 1.0)) == []

    def test_shared_vertex_reported_once(self):
        a = Path.rectangle(0.0, 0.0, 1.0, 1.0)
        b = Path.rectangle(1.0, 1.0, 1.0, 1.0)
        x = a.intersections(b)
        assert x == [PathIntersection(IndexedPathLocation(0, 2, 0.0),
                                      IndexedPathLocation(0, 0, 0.0))]

    def test_circle_intersections(self):
        a = Path.circle((0.0, 0.0), 1.0)
        b = Path.circle((1.0, 0.0), 1.0)
        x = a.intersections(b)
        assert len(x) == 2
        for i in x:
            pa = a.components[0].point(i.location1.location_in_component)
            pb = b.components[0].point(i.location2.location_in_component)
            assert pa == pytest.approx(pb, abs=1e-9)
            assert pa[0] == pytest.approx(0.5, abs=1e-3)

    def test_self_intersections_across_components(self):
        a = Path.rectangle(0.0, 0.0, 2.0, 2.0).components[0]
        b = Path.rectangle(1.0, 1.0, 2.0, 2.0).components[0]
        x = Path([a, b]).self_intersections()
        assert len(x) == 2
        assert all(i.location1.component_index == 0 for i in x)
        assert all(i.location2.component_index == 1 for i in x)
