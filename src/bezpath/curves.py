## Bezier curve primitives for bezpath
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

"""Bezier curves of order one to three.

The concrete curve types are :class:`LineSegment`, :class:`QuadraticCurve`
and :class:`CubicCurve`.  Curves are immutable values: every operation
that changes geometry (``split``, ``reversed``, ``transform``,
``offset``) returns new curves, and two curves compare equal when
their control points do.

A :class:`Subcurve` remembers where a piece came from, so parameters
found on a reduced or split piece can be mapped back onto the parent
curve.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import cached_property
from typing import List, Optional, Sequence, Tuple

import numpy as np

import bezpath.geom as geom
from bezpath.config import DEFAULT_TOLERANCES, Tolerances
from bezpath.polynomial import BernsteinPolynomial, droots
from bezpath.xform import Matrix, Rotation, Translation

Point = Tuple[float, float]

## Gauss-Legendre nodes and weights on [-1,1], used for arc length
_LEGENDRE_NODES, _LEGENDRE_WEIGHTS = np.polynomial.legendre.leggauss(24)

## control points within this distance of the baseline count as colinear
_LINEAR_TOLERANCE = 1.0e-4


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box; ``min`` and ``max`` are corner points."""

    min: Point
    max: Point

    @classmethod
    def empty(cls) -> "BoundingBox":
        return cls((math.inf, math.inf), (-math.inf, -math.inf))

    @classmethod
    def from_points(cls, points: Sequence[Point]) -> "BoundingBox":
        box = cls.empty()
        for p in points:
            box = box.union_point(p)
        return box

    @property
    def is_empty(self) -> bool:
        return self.min[0] > self.max[0] or self.min[1] > self.max[1]

    @property
    def size(self) -> Point:
        if self.is_empty:
            return (0.0, 0.0)
        return (self.max[0] - self.min[0], self.max[1] - self.min[1])

    @property
    def area(self) -> float:
        w, h = self.size
        return w * h

    def overlaps(self, other: "BoundingBox") -> bool:
        """Closed-interval overlap test; touching boxes overlap."""

        if self.is_empty or other.is_empty:
            return False
        return (self.min[0] <= other.max[0] and other.min[0] <= self.max[0]
                and self.min[1] <= other.max[1] and other.min[1] <= self.max[1])

    def union(self, other: "BoundingBox") -> "BoundingBox":
        return BoundingBox((min(self.min[0], other.min[0]), min(self.min[1], other.min[1])),
                           (max(self.max[0], other.max[0]), max(self.max[1], other.max[1])))

    def union_point(self, p: Point) -> "BoundingBox":
        return BoundingBox((min(self.min[0], p[0]), min(self.min[1], p[1])),
                           (max(self.max[0], p[0]), max(self.max[1], p[1])))

    def lower_bound_distance_to(self, p: Point) -> float:
        """Distance from ``p`` to the nearest point of the box; no point
        of anything inside the box is closer."""

        if self.is_empty:
            return math.inf
        dx = max(self.min[0] - p[0], 0.0, p[0] - self.max[0])
        dy = max(self.min[1] - p[1], 0.0, p[1] - self.max[1])
        return math.hypot(dx, dy)

    def contains(self, p: Point) -> bool:
        return (self.min[0] <= p[0] <= self.max[0]
                and self.min[1] <= p[1] <= self.max[1])


def align(points: Sequence[Point], p1: Point, p2: Point) -> List[Point]:
    """Move ``points`` into the frame where ``p1`` is the origin and
    ``p2`` lies on the positive x axis."""

    d = geom.sub(p2, p1)
    a = math.degrees(math.atan2(d[1], d[0]))
    m = Rotation(-a).mul(Translation(p1, inverse=True))
    return [m.transform_point(p) for p in points]


def _blossom(points: Sequence[Point], params: Sequence[float]) -> Point:
    pts = list(points)
    for u in params:
        pts = [geom.lerp(pts[k], pts[k + 1], u) for k in range(len(pts) - 1)]
    return pts[0]


class BezierCurve:
    """Common behavior of the fixed-order curve types."""

    order = 0

    def __init__(self, points: Sequence[Sequence[float]]):
        points = tuple(geom.point(p) for p in points)
        if len(points) != self.order + 1:
            raise ValueError('{} needs {} control points, got {}'.format(
                type(self).__name__, self.order + 1, len(points)))
        self._points = points

    @property
    def points(self) -> Tuple[Point, ...]:
        return self._points

    @property
    def start_point(self) -> Point:
        return self._points[0]

    @property
    def end_point(self) -> Point:
        return self._points[-1]

    def __repr__(self):
        return '{}({})'.format(type(self).__name__,
                               ', '.join(geom.vstr(p) for p in self._points))

    def __eq__(self, other):
        if not isinstance(other, BezierCurve):
            return NotImplemented
        return type(self) is type(other) and self._points == other._points

    def __hash__(self):
        return hash((type(self).__name__, self._points))

    ## evaluation
    ## ----------

    def compute(self, t: float) -> Point:
        """Point at parameter ``t``; exact control points at 0 and 1."""

        if t == 0:
            return self._points[0]
        if t == 1:
            return self._points[-1]
        return _blossom(self._points, [t] * self.order)

    @cached_property
    def dpoints(self) -> List[List[Point]]:
        """Control points of the successive derivative curves."""

        levels = []
        p = list(self._points)
        n = len(p) - 1
        while n > 0:
            p = [geom.scale(geom.sub(p[i + 1], p[i]), n) for i in range(n)]
            levels.append(p)
            n -= 1
        return levels

    def derivative(self, t: float) -> Point:
        d = self.dpoints[0]
        if len(d) == 1:
            return d[0]
        return _blossom(d, [t] * (len(d) - 1))

    def normal(self, t: float) -> Point:
        """Unit left-hand normal at ``t``."""

        d = self.derivative(t)
        if d == (0.0, 0.0):
            ## a coincident control point kills the derivative at the
            ## ends; the chord still gives the direction of travel
            d = geom.sub(self.end_point, self.start_point)
        return geom.perp(geom.normalize(d))

    def hull(self, t: float) -> List[Point]:
        """All intermediate de Casteljau points at ``t``, level by level."""

        pts = list(self._points)
        result = list(pts)
        while len(pts) > 1:
            pts = [geom.lerp(pts[k], pts[k + 1], t) for k in range(len(pts) - 1)]
            result.extend(pts)
        return result

    def polynomial(self, axis: int) -> BernsteinPolynomial:
        """The ``axis`` coordinate (0 for x, 1 for y) as a polynomial in t."""

        return BernsteinPolynomial(p[axis] for p in self._points)

    def lookup_table(self, steps: int = 100) -> List[Point]:
        if steps < 1:
            raise ValueError('lookup_table needs at least one step')
        return [self.compute(i / steps) for i in range(steps + 1)]

    ## splitting and reversal
    ## ----------------------

    def split(self, t1: float, t2: float) -> "BezierCurve":
        """The piece of the curve between ``t1`` and ``t2``.

        Control points come from the curve's blossom, so the piece's end
        points coincide with ``compute(t1)`` and ``compute(t2)``.
        """

        if t1 == 0 and t2 == 1:
            return self
        n = self.order
        pts = []
        for i in range(n + 1):
            if i == 0 and t1 in (0, 1):
                pts.append(self.compute(t1))
            elif i == n and t2 in (0, 1):
                pts.append(self.compute(t2))
            else:
                pts.append(_blossom(self._points, [t1] * (n - i) + [t2] * i))
        return type(self)(pts)

    def split_at(self, t: float) -> Tuple["BezierCurve", "BezierCurve"]:
        return self.split(0.0, t), self.split(t, 1.0)

    def reversed(self) -> "BezierCurve":
        return type(self)(self._points[::-1])

    def transform(self, matrix: Matrix) -> "BezierCurve":
        return type(self)([matrix.transform_point(p) for p in self._points])

    ## shape analysis
    ## --------------

    def extrema_by_axis(self) -> List[List[float]]:
        """Per-axis parameters where the derivative vanishes; cubics also
        report their inflection candidates."""

        result = []
        for axis in (0, 1):
            roots = []
            d = [p[axis] for p in self.dpoints[0]]
            if len(d) > 1:
                roots.extend(droots(*d))
            if self.order == 3:
                roots.extend(droots(*[p[axis] for p in self.dpoints[1]]))
            result.append([r for r in roots if 0 <= r <= 1])
        return result

    def extrema(self) -> List[float]:
        values: List[float] = []
        for v in sorted(r for axis in self.extrema_by_axis() for r in axis):
            if not values or v > values[-1]:
                values.append(v)
        return values

    @cached_property
    def bounding_box(self) -> BoundingBox:
        ts = [0.0, 1.0]
        for axis in (0, 1):
            d = [p[axis] for p in self.dpoints[0]]
            if len(d) > 1:
                ts.extend(r for r in droots(*d) if 0 <= r <= 1)
        return BoundingBox.from_points([self.compute(t) for t in ts])

    @property
    def linear(self) -> bool:
        if self.order == 1:
            return True
        aligned = align(self._points, self.start_point, self.end_point)
        return all(abs(p[1]) <= _LINEAR_TOLERANCE for p in aligned)

    @property
    def simple(self) -> bool:
        """True when all control points sit on one side of the baseline
        and the end normals differ by less than 60 degrees."""

        if self.order == 1:
            return True
        p = self._points
        if self.order == 3:
            a1 = geom.angle(p[0], p[3], p[1])
            a2 = geom.angle(p[0], p[3], p[2])
            if (a1 > 0 and a2 < 0) or (a1 < 0 and a2 > 0):
                return False
        n1 = self.normal(0.0)
        n2 = self.normal(1.0)
        s = max(-1.0, min(1.0, geom.dot(n1, n2)))
        return abs(math.acos(s)) < math.pi / 3.0

    def length(self) -> float:
        """Arc length by 24-point Gauss-Legendre quadrature."""

        total = 0.0
        for x, w in zip(_LEGENDRE_NODES, _LEGENDRE_WEIGHTS):
            t = 0.5 * (float(x) + 1.0)
            total += float(w) * geom.mag(self.derivative(t))
        return 0.5 * total

    def project(self, p: Sequence[float]) -> Tuple[Point, float]:
        """Closest point on the curve to ``p`` and its parameter."""

        p = geom.point(p)
        lut = self.lookup_table()
        steps = len(lut) - 1
        distances = [geom.dist(q, p) for q in lut]
        closest = min(range(len(lut)), key=distances.__getitem__)
        if closest == 0 or closest == steps:
            t = closest / steps
            return self.compute(t), t

        ## refine between the neighbouring table entries
        t1 = (closest - 1) / steps
        t2 = (closest + 1) / steps
        step = 0.1 / steps
        best = distances[closest] + 1
        ft = t1
        t = t1
        while t < t2 + step:
            tc = min(1.0, t)
            d = geom.dist(self.compute(tc), p)
            if d < best:
                best = d
                ft = tc
            t += step
        return self.compute(ft), ft

    def reduce(self, tolerances: Tolerances = DEFAULT_TOLERANCES) -> List["Subcurve"]:
        """Split the curve into simple pieces, tagged with their parent
        parameter range."""

        step = tolerances.reduce_step
        extrema = [t for t in self.extrema() if step <= t <= 1.0 - step]
        extrema = [0.0] + extrema + [1.0]

        pass1 = [Subcurve(t1, t2, self.split(t1, t2))
                 for t1, t2 in zip(extrema, extrema[1:])]

        pass2: List[Subcurve] = []
        for piece in pass1:
            t1 = 0.0
            while t1 < 1.0:
                full = piece.split(t1, 1.0)
                if 1.0 - t1 <= step or full.curve.simple:
                    pass2.append(full)
                    t1 = 1.0
                else:
                    t2 = _bisect_simple(piece, t1, step)
                    pass2.append(piece.split(t1, t2))
                    t1 = t2
        return pass2

    def scale(self, distance: float) -> "BezierCurve":
        """Move the curve ``distance`` along its normals, scaling about
        the intersection of the end normals.  Only meaningful for simple
        curves."""

        order = self.order
        c0, c1 = self.compute(0.0), self.compute(1.0)
        n0, n1 = self.normal(0.0), self.normal(1.0)
        o = geom.lli4(geom.add(c0, geom.scale(n0, 10.0)), c0,
                      geom.add(c1, geom.scale(n1, 10.0)), c1)
        if o is None:
            ## parallel end normals: the curve is straight enough to
            ## translate
            return self.transform(Translation(geom.scale(n0, distance)))

        pts = list(self._points)
        new = [None] * (order + 1)
        new[0] = geom.add(pts[0], geom.scale(n0, distance))
        new[order] = geom.add(pts[order], geom.scale(n1, distance))
        for t in (0, 1):
            if order == 1 or (order == 2 and t == 1):
                break
            p = new[t * order]
            p2 = geom.add(p, self.derivative(float(t)))
            moved = geom.lli4(p, p2, o, pts[t + 1])
            if moved is None:
                moved = geom.add(pts[t + 1], geom.scale(n0 if t == 0 else n1, distance))
            new[t + 1] = moved
        return type(self)(new)

    def offset(self, distance: float,
               tolerances: Tolerances = DEFAULT_TOLERANCES) -> List["BezierCurve"]:
        """Approximate the curve at constant ``distance`` along its normal."""

        if self.linear:
            n = self.normal(0.0)
            return [self.transform(Translation(geom.scale(n, distance)))]
        return [s.curve.scale(distance) for s in self.reduce(tolerances)]

    ## intersection
    ## ------------

    def intersections(self, other: "BezierCurve", threshold: Optional[float] = None, **kwargs):
        from bezpath.intersect import intersect
        return intersect(self, other, threshold=threshold, **kwargs)

    def self_intersections(self, threshold: Optional[float] = None, **kwargs):
        from bezpath.intersect import self_intersections
        return self_intersections(self, threshold=threshold, **kwargs)


def _bisect_simple(piece: "Subcurve", t1: float, step: float) -> float:
    ## largest t2 (to within step) such that piece[t1:t2] is simple
    lb = t1 + step
    ub = 1.0
    while ub - lb > step:
        val = 0.5 * (lb + ub)
        if piece.split(t1, val).curve.simple:
            lb = val
        else:
            ub = val
    return lb


class LineSegment(BezierCurve):
    order = 1

    def compute(self, t):
        if t == 0:
            return self._points[0]
        if t == 1:
            return self._points[1]
        return geom.lerp(self._points[0], self._points[1], t)

    def length(self):
        return geom.dist(self._points[0], self._points[1])

    @cached_property
    def bounding_box(self):
        return BoundingBox.from_points(self._points)


class QuadraticCurve(BezierCurve):
    order = 2

    @classmethod
    def from_points(cls, start, end, mid, t=0.5) -> "QuadraticCurve":
        """The quadratic from ``start`` to ``end`` that passes through
        ``mid`` at parameter ``t``."""

        if not 0 < t < 1:
            raise ValueError('t must lie strictly between 0 and 1, got {}'.format(t))
        start, end, mid = geom.point(start), geom.point(end), geom.point(mid)
        mt = 1.0 - t
        a = mt * mt
        c = t * t
        b = 2.0 * t * mt
        control = ((mid[0] - a * start[0] - c * end[0]) / b,
                   (mid[1] - a * start[1] - c * end[1]) / b)
        return cls((start, control, end))


class CubicCurve(BezierCurve):
    order = 3


@dataclass(frozen=True)
class Subcurve:
    """A piece of a parent curve over ``[t1, t2]`` of its parameter."""

    t1: float
    t2: float
    curve: BezierCurve

    def split(self, t1: float, t2: float) -> "Subcurve":
        return Subcurve(geom.map_range(t1, 0.0, 1.0, self.t1, self.t2),
                        geom.map_range(t2, 0.0, 1.0, self.t1, self.t2),
                        self.curve.split(t1, t2))


_CURVE_TYPES = {2: LineSegment, 3: QuadraticCurve, 4: CubicCurve}


def curve_from_points(points: Sequence[Sequence[float]]) -> BezierCurve:
    """Build the curve type matching the number of control points."""

    try:
        kind = _CURVE_TYPES[len(points)]
    except KeyError:
        raise ValueError('curves need 2, 3 or 4 control points, got {}'.format(len(points))) from None
    return kind(points)


__all__ = [
    'BoundingBox',
    'BezierCurve',
    'LineSegment',
    'QuadraticCurve',
    'CubicCurve',
    'Subcurve',
    'align',
    'curve_from_points',
]
