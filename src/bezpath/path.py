## path components and paths for bezpath
## Copyright (c) 2020 Richard W. DeVaul
## Copyright (c) 2020 yapCAD contributors
## Copyright (c) 2026 bezpath contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
# 
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
# 
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Outlines built from Bezier curves.

A :class:`PathComponent` is one contour: a flat list of points plus the
order of each element, so consecutive elements share their joining
point.  A :class:`Path` is an ordered collection of components and is
what the boolean operations consume and produce.

Positions on a contour are :class:`IndexedPathComponentLocation`
values ``(element_index, t)``; positions on a path add the component
index.  Both order lexicographically, which is the order the boolean
graph walks a path in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

import bezpath.geom as geom
from bezpath.config import DEFAULT_TOLERANCES, Tolerances
from bezpath.curves import BezierCurve, BoundingBox, LineSegment, curve_from_points
from bezpath.diagnostics import Diagnostics
from bezpath.intersect import Intersection, intersect, self_intersections
from bezpath.xform import Matrix

logger = logging.getLogger(__name__)

## four cubic arcs approximate a circle with this control arm length
KAPPA = 0.5522847498

## the integrand of Green's theorem is at most degree 5 for cubics
_AREA_NODES, _AREA_WEIGHTS = np.polynomial.legendre.leggauss(8)


class FillRule(Enum):
    WINDING = 'winding'
    EVEN_ODD = 'even-odd'


@dataclass(frozen=True, order=True)
class IndexedPathComponentLocation:
    element_index: int
    t: float


@dataclass(frozen=True, order=True)
class IndexedPathLocation:
    component_index: int
    element_index: int
    t: float

    @property
    def location_in_component(self) -> IndexedPathComponentLocation:
        return IndexedPathComponentLocation(self.element_index, self.t)

    @classmethod
    def of(cls, component_index: int,
           location: IndexedPathComponentLocation) -> "IndexedPathLocation":
        return cls(component_index, location.element_index, location.t)


@dataclass(frozen=True, order=True)
class PathIntersection:
    """The same point seen from the first and the second path."""

    location1: IndexedPathLocation
    location2: IndexedPathLocation


def _filled(winding: int, fill_rule: FillRule) -> bool:
    if fill_rule is FillRule.EVEN_ODD:
        return winding % 2 == 1
    return winding != 0


## containment
## -----------

def _solve_y(curve: BezierCurve, y: float, a: float, b: float,
             iterations: int) -> float:
    ## bisection for curve.y(t) == y on a y-monotonic piece [a, b]
    ya = curve.compute(a)[1]
    for _ in range(iterations):
        m = 0.5 * (a + b)
        if m == a or m == b:
            break
        ym = curve.compute(m)[1]
        if (ym < y) == (ya < y):
            a, ya = m, ym
        else:
            b = m
    return 0.5 * (a + b)


def curve_winding(curve: BezierCurve, p: Tuple[float, float],
                  tolerances: Tolerances = DEFAULT_TOLERANCES) -> int:
    """Signed crossings of the ray from ``p`` toward +x with ``curve``.

    A y-monotonic piece crosses the ray when exactly one of its ends is
    strictly below ``p``; upward pieces count +1, downward ones -1.
    """

    px, py = p
    box = curve.bounding_box
    if box.min[1] >= py or box.max[1] < py or box.max[0] <= px:
        return 0
    ts = [0.0] + [t for t in curve.extrema_by_axis()[1] if 0.0 < t < 1.0] + [1.0]
    ts = sorted(set(ts))
    count = 0
    for a, b in zip(ts, ts[1:]):
        ya = curve.compute(a)[1]
        yb = curve.compute(b)[1]
        if (ya < py) == (yb < py):
            continue
        t = _solve_y(curve, py, a, b, tolerances.containment_max_iterations)
        if curve.compute(t)[0] > px:
            count += 1 if yb > ya else -1
    return count


class PathComponent:
    """A single contour of lines, quadratics and cubics."""

    def __init__(self, points: Sequence[Sequence[float]], orders: Sequence[int]):
        points = tuple(geom.point(p) for p in points)
        orders = tuple(int(o) for o in orders)
        if not orders:
            raise ValueError('a path component needs at least one element')
        for o in orders:
            if o < 1 or o > 3:
                raise ValueError('element orders must be 1, 2 or 3, got {}'.format(o))
        if len(points) != 1 + sum(orders):
            raise ValueError('{} points do not match orders {}'.format(len(points), list(orders)))
        self._points = points
        self._orders = orders
        offsets = []
        k = 0
        for o in orders:
            offsets.append(k)
            k += o
        self._offsets = tuple(offsets)
        self._curves = None

    @classmethod
    def from_curves(cls, curves: Iterable[BezierCurve]) -> "PathComponent":
        curves = list(curves)
        if not curves:
            raise ValueError('a path component needs at least one curve')
        points = [curves[0].start_point]
        for c in curves:
            points.extend(c.points[1:])
        return cls(points, [c.order for c in curves])

    @property
    def points(self) -> Tuple[Tuple[float, float], ...]:
        return self._points

    @property
    def orders(self) -> Tuple[int, ...]:
        return self._orders

    def __repr__(self):
        return 'PathComponent({} elements, closed={})'.format(
            self.number_of_elements, self.is_closed)

    def __eq__(self, other):
        if not isinstance(other, PathComponent):
            return NotImplemented
        return self._points == other._points and self._orders == other._orders

    def __hash__(self):
        return hash((self._points, self._orders))

    @property
    def number_of_elements(self) -> int:
        return len(self._orders)

    def element(self, i: int) -> BezierCurve:
        return self.curves[i]

    @property
    def curves(self) -> List[BezierCurve]:
        if self._curves is None:
            self._curves = [
                curve_from_points(self._points[k:k + o + 1])
                for k, o in zip(self._offsets, self._orders)]
        return self._curves

    @property
    def starting_point(self):
        return self._points[0]

    @property
    def ending_point(self):
        return self._points[-1]

    @property
    def starting_indexed_location(self) -> IndexedPathComponentLocation:
        return IndexedPathComponentLocation(0, 0.0)

    @property
    def ending_indexed_location(self) -> IndexedPathComponentLocation:
        return IndexedPathComponentLocation(self.number_of_elements - 1, 1.0)

    @property
    def is_closed(self) -> bool:
        return self._points[0] == self._points[-1]

    @property
    def bounding_box(self) -> BoundingBox:
        box = BoundingBox.empty()
        for c in self.curves:
            box = box.union(c.bounding_box)
        return box

    def point(self, at: IndexedPathComponentLocation):
        return self.element(at.element_index).compute(at.t)

    def normal(self, at: IndexedPathComponentLocation):
        return self.element(at.element_index).normal(at.t)

    def reversed(self) -> "PathComponent":
        return PathComponent(self._points[::-1], self._orders[::-1])

    def transform(self, matrix: Matrix) -> "PathComponent":
        return PathComponent([matrix.transform_point(p) for p in self._points], self._orders)

    def split(self, start: IndexedPathComponentLocation,
              end: IndexedPathComponentLocation) -> "PathComponent":
        """The part of the contour between two locations; reversed when
        ``end`` comes before ``start``."""

        if end < start:
            return self.split(end, start).reversed()
        if start.t == 1.0 and start.element_index < end.element_index:
            start = IndexedPathComponentLocation(start.element_index + 1, 0.0)
        if end.t == 0.0 and end.element_index > start.element_index:
            end = IndexedPathComponentLocation(end.element_index - 1, 1.0)
        if start.element_index == end.element_index:
            return PathComponent.from_curves(
                [self.element(start.element_index).split(start.t, end.t)])
        curves = [self.element(start.element_index).split(start.t, 1.0)]
        curves.extend(self.curves[start.element_index + 1:end.element_index])
        curves.append(self.element(end.element_index).split(0.0, end.t))
        return PathComponent.from_curves(curves)

    ## containment and area
    ## --------------------

    def _closed_curves(self) -> List[BezierCurve]:
        if self.is_closed:
            return self.curves
        return self.curves + [LineSegment((self.ending_point, self.starting_point))]

    def winding_count(self, p, tolerances: Tolerances = DEFAULT_TOLERANCES) -> int:
        p = geom.point(p)
        return sum(curve_winding(c, p, tolerances) for c in self._closed_curves())

    def contains(self, p, fill_rule: FillRule = FillRule.WINDING,
                 tolerances: Tolerances = DEFAULT_TOLERANCES) -> bool:
        return _filled(self.winding_count(p, tolerances), fill_rule)

    @property
    def area(self) -> float:
        """Signed area, positive for counter-clockwise contours."""

        total = 0.0
        for c in self._closed_curves():
            for x, w in zip(_AREA_NODES, _AREA_WEIGHTS):
                t = 0.5 * (float(x) + 1.0)
                p = c.compute(t)
                d = c.derivative(t)
                total += float(w) * geom.cross(p, d)
        ## half from Green's theorem, half from mapping [-1,1] onto [0,1]
        return 0.25 * total

    ## intersections
    ## -------------

    def normalize_location(self, location: IndexedPathComponentLocation,
                           tolerances: Tolerances = DEFAULT_TOLERANCES) -> IndexedPathComponentLocation:
        """Snap ``t`` onto element ends and move an element's end onto the
        start of the next element."""

        i, t = location.element_index, location.t
        if t < tolerances.intersection_merge:
            t = 0.0
        elif t > 1.0 - tolerances.intersection_merge:
            t = 1.0
        if t == 1.0:
            if i + 1 < self.number_of_elements:
                i, t = i + 1, 0.0
            elif self.is_closed:
                i, t = 0, 0.0
        return IndexedPathComponentLocation(i, t)

    def _pair(self, other: "PathComponent", i: int, j: int, r: Intersection,
              tolerances: Tolerances):
        return (self.normalize_location(IndexedPathComponentLocation(i, r.t1), tolerances),
                other.normalize_location(IndexedPathComponentLocation(j, r.t2), tolerances))

    def intersections(self, other: "PathComponent",
                      threshold: Optional[float] = None,
                      *,
                      tolerances: Tolerances = DEFAULT_TOLERANCES,
                      diagnostics: Optional[Diagnostics] = None):
        """Sorted, unique ``(location_here, location_there)`` pairs."""

        results = set()
        if not self.bounding_box.overlaps(other.bounding_box):
            return []
        for i, c1 in enumerate(self.curves):
            for j, c2 in enumerate(other.curves):
                if not c1.bounding_box.overlaps(c2.bounding_box):
                    continue
                for r in intersect(c1, c2, threshold, tolerances=tolerances,
                                   diagnostics=diagnostics):
                    results.add(self._pair(other, i, j, r, tolerances))
        return sorted(results)

    def self_intersections(self, threshold: Optional[float] = None,
                           *,
                           tolerances: Tolerances = DEFAULT_TOLERANCES,
                           diagnostics: Optional[Diagnostics] = None):
        """Points where the contour crosses itself, away from the joints
        between consecutive elements."""

        results = set()
        curves = self.curves
        for i, c1 in enumerate(curves):
            for r in self_intersections(c1, threshold, tolerances=tolerances,
                                        diagnostics=diagnostics):
                a, b = self._pair(self, i, i, r, tolerances)
                if a != b:
                    results.add((a, b))
            for j in range(i + 1, len(curves)):
                c2 = curves[j]
                if not c1.bounding_box.overlaps(c2.bounding_box):
                    continue
                for r in intersect(c1, c2, threshold, tolerances=tolerances,
                                   diagnostics=diagnostics):
                    a, b = self._pair(self, i, j, r, tolerances)
                    if a != b:
                        results.add((a, b))
        return sorted(results)


class Path:
    """An ordered collection of :class:`PathComponent` contours."""

    def __init__(self, components: Iterable[PathComponent] = ()):
        components = tuple(components)
        for c in components:
            if not isinstance(c, PathComponent):
                raise ValueError('bad component passed to Path: {!r}'.format(c))
        self._components = components

    ## constructors
    ## ------------

    @classmethod
    def from_components(cls, components: Iterable[PathComponent]) -> "Path":
        return cls(components)

    @classmethod
    def from_curves(cls, curves: Iterable[BezierCurve]) -> "Path":
        return cls([PathComponent.from_curves(curves)])

    @classmethod
    def from_polygon(cls, points: Sequence[Sequence[float]], closed: bool = True) -> "Path":
        pts = [geom.point(p) for p in points]
        if len(pts) < 2:
            raise ValueError('a polygon needs at least two points')
        if closed and pts[0] != pts[-1]:
            pts.append(pts[0])
        return cls([PathComponent(pts, [1] * (len(pts) - 1))])

    @classmethod
    def rectangle(cls, x: float, y: float, width: float, height: float) -> "Path":
        """Counter-clockwise rectangle with its lower left corner at (x, y)."""

        return cls.from_polygon([(x, y), (x + width, y),
                                 (x + width, y + height), (x, y + height)])

    @classmethod
    def circle(cls, center: Sequence[float], radius: float) -> "Path":
        """Counter-clockwise circle made of four cubic arcs."""

        cx, cy = geom.point(center)
        r = float(radius)
        k = KAPPA * r
        points = [(cx + r, cy), (cx + r, cy + k), (cx + k, cy + r),
                  (cx, cy + r), (cx - k, cy + r), (cx - r, cy + k),
                  (cx - r, cy), (cx - r, cy - k), (cx - k, cy - r),
                  (cx, cy - r), (cx + k, cy - r), (cx + r, cy - k),
                  (cx + r, cy)]
        return cls([PathComponent(points, [3, 3, 3, 3])])

    ## queries
    ## -------

    @property
    def components(self) -> Tuple[PathComponent, ...]:
        return self._components

    def __repr__(self):
        return 'Path({})'.format(list(self._components))

    def __eq__(self, other):
        if not isinstance(other, Path):
            return NotImplemented
        return self._components == other._components

    def __hash__(self):
        return hash(self._components)

    def __len__(self):
        return len(self._components)

    @property
    def is_empty(self) -> bool:
        return not self._components

    @property
    def bounding_box(self) -> BoundingBox:
        box = BoundingBox.empty()
        for c in self._components:
            box = box.union(c.bounding_box)
        return box

    @property
    def area(self) -> float:
        return sum(c.area for c in self._components)

    def winding_count(self, p, tolerances: Tolerances = DEFAULT_TOLERANCES) -> int:
        return sum(c.winding_count(p, tolerances) for c in self._components)

    def contains(self, p, fill_rule: FillRule = FillRule.WINDING,
                 tolerances: Tolerances = DEFAULT_TOLERANCES) -> bool:
        return _filled(self.winding_count(p, tolerances), fill_rule)

    def reversed(self) -> "Path":
        return Path(c.reversed() for c in self._components)

    def transform(self, matrix: Matrix) -> "Path":
        return Path(c.transform(matrix) for c in self._components)

    ## intersections
    ## -------------

    def intersections(self, other: "Path", threshold: Optional[float] = None,
                      **kwargs) -> List[PathIntersection]:
        results = []
        for i, c1 in enumerate(self._components):
            for j, c2 in enumerate(other.components):
                for a, b in c1.intersections(c2, threshold, **kwargs):
                    results.append(PathIntersection(IndexedPathLocation.of(i, a),
                                                    IndexedPathLocation.of(j, b)))
        logger.debug('%d intersections between paths of %d and %d components',
                     len(results), len(self._components), len(other.components))
        return results

    def self_intersections(self, threshold: Optional[float] = None,
                           **kwargs) -> List[PathIntersection]:
        results = []
        for i, c1 in enumerate(self._components):
            for a, b in c1.self_intersections(threshold, **kwargs):
                results.append(PathIntersection(IndexedPathLocation.of(i, a),
                                                IndexedPathLocation.of(i, b)))
            for j in range(i + 1, len(self._components)):
                for a, b in c1.intersections(self._components[j], threshold, **kwargs):
                    results.append(PathIntersection(IndexedPathLocation.of(i, a),
                                                    IndexedPathLocation.of(j, b)))
        return results

    ## boolean operations
    ## ------------------

    def union(self, other: "Path", **kwargs) -> "Path":
        from bezpath.boolean import union
        return union(self, other, **kwargs)

    def intersect(self, other: "Path", **kwargs) -> "Path":
        from bezpath.boolean import intersect as intersect_paths
        return intersect_paths(self, other, **kwargs)

    def subtract(self, other: "Path", **kwargs) -> "Path":
        from bezpath.boolean import subtract
        return subtract(self, other, **kwargs)

    def remove_crossings(self, **kwargs) -> "Path":
        from bezpath.boolean import remove_crossings
        return remove_crossings(self, **kwargs)


__all__ = [
    'FillRule',
    'IndexedPathComponentLocation',
    'IndexedPathLocation',
    'PathIntersection',
    'PathComponent',
    'Path',
    'curve_winding',
    'KAPPA',
]
