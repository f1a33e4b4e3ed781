## curve/curve intersection for bezpath
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

"""Intersections between pairs of Bezier curves.

:func:`intersect` dispatches on the curve types:

* two line segments are solved in closed form,
* a line against a curve is solved by aligning the curve with the line
  and finding the roots of its y polynomial,
* two curves are reduced to simple pieces and subdivided pairwise until
  overlapping pieces shrink below the threshold, then each candidate is
  polished with a few Newton steps.

Results are :class:`Intersection` values ordered by the first curve's
parameter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import bezpath.geom as geom
from bezpath.config import DEFAULT_TOLERANCES, Tolerances
from bezpath.curves import BezierCurve, LineSegment, Subcurve, align
from bezpath.diagnostics import Degeneracy, Diagnostics, report
from bezpath.polynomial import BernsteinPolynomial, find_roots

logger = logging.getLogger(__name__)

## Newton polishing of curve/curve candidates
_POLISH_ITERATIONS = 8


@dataclass(frozen=True, order=True)
class Intersection:
    """Parameters on the first (``t1``) and second (``t2``) curve."""

    t1: float
    t2: float


def _unique(results: List[Intersection]) -> List[Intersection]:
    out: List[Intersection] = []
    for r in sorted(results):
        if not out or r != out[-1]:
            out.append(r)
    return out


def _snap_unit(t: float, tol: float) -> Optional[float]:
    ## None when t is outside [0,1] by more than tol
    if t < 0.0:
        return 0.0 if t > -tol else None
    if t > 1.0:
        return 1.0 if t < 1.0 + tol else None
    return t


## line segments
## -------------

def line_line(a: LineSegment, b: LineSegment,
              diagnostics: Optional[Diagnostics] = None) -> List[Intersection]:
    """Closed-form intersection of two segments; parallel segments,
    including overlapping ones, report no intersection."""

    d1 = geom.sub(a.end_point, a.start_point)
    d2 = geom.sub(b.end_point, b.start_point)
    A = d1[0]
    B = -d2[0]
    C = d1[1]
    D = -d2[1]
    E = b.start_point[0] - a.start_point[0]
    F = b.start_point[1] - a.start_point[1]
    det = A * D - B * C
    if det == 0:
        report(logger, diagnostics, Degeneracy.PARALLEL_NO_INTERSECTION,
               f'{a!r} and {b!r}')
        return []
    t1 = (D * E - B * F) / det
    t2 = (A * F - C * E) / det
    if not (geom.between(t1, 0.0, 1.0) and geom.between(t2, 0.0, 1.0)):
        return []
    return [Intersection(t1, t2)]


def line_curve(line: LineSegment, curve: BezierCurve,
               tolerances: Tolerances = DEFAULT_TOLERANCES,
               diagnostics: Optional[Diagnostics] = None) -> List[Intersection]:
    """Intersections of a segment with a curve, ordered along the line."""

    direction = geom.sub(line.end_point, line.start_point)
    length2 = geom.dot(direction, direction)
    if length2 == 0.0:
        return []
    aligned = align(curve.points, line.start_point, line.end_point)
    ys = BernsteinPolynomial(p[1] for p in aligned)
    results = []
    for t2 in find_roots(ys, tolerances=tolerances, diagnostics=diagnostics):
        p = curve.compute(t2)
        t1 = geom.dot(geom.sub(p, line.start_point), direction) / length2
        t1 = _snap_unit(t1, tolerances.intersection_merge)
        if t1 is None:
            continue
        results.append(Intersection(t1, t2))
    return _unique(results)


## curve pairs
## -----------

def default_threshold(c1: BezierCurve, c2: BezierCurve,
                      tolerances: Tolerances = DEFAULT_TOLERANCES) -> float:
    """Subdivision threshold relative to the larger of the two curves."""

    size = max(sum(c1.bounding_box.size), sum(c2.bounding_box.size))
    if size == 0.0:
        return tolerances.curve_intersection_threshold
    return tolerances.curve_intersection_threshold * size


def _box_extent(piece: Subcurve) -> float:
    w, h = piece.curve.bounding_box.size
    return w + h


def _subdivide(pairs: List[Tuple[Subcurve, Subcurve]],
               threshold: float,
               tolerances: Tolerances,
               diagnostics: Optional[Diagnostics]) -> List[Tuple[float, float]]:
    ## breadth-first pair iteration; returns candidate parameter pairs
    candidates = []
    frontier = pairs
    while frontier:
        if len(frontier) > tolerances.max_intersection_pairs:
            report(logger, diagnostics, Degeneracy.UNRESOLVED_INTERSECTION,
                   f'{len(frontier)} overlapping pieces, curves probably coincide')
            break
        following = []
        for left, right in frontier:
            if not left.curve.bounding_box.overlaps(right.curve.bounding_box):
                continue
            if _box_extent(left) < threshold and _box_extent(right) < threshold:
                candidates.append((0.5 * (left.t1 + left.t2),
                                   0.5 * (right.t1 + right.t2)))
                continue
            halves1 = (left.split(0.0, 0.5), left.split(0.5, 1.0))
            halves2 = (right.split(0.0, 0.5), right.split(0.5, 1.0))
            for h1 in halves1:
                for h2 in halves2:
                    if h1.curve.bounding_box.overlaps(h2.curve.bounding_box):
                        following.append((h1, h2))
        frontier = following
    return candidates


def _polish(c1: BezierCurve, c2: BezierCurve, t1: float, t2: float,
            tolerance: float) -> Optional[Tuple[float, float]]:
    ## Newton's method on c1(t1) - c2(t2) = 0
    for _ in range(_POLISH_ITERATIONS):
        f = geom.sub(c1.compute(t1), c2.compute(t2))
        if geom.mag(f) <= tolerance:
            return t1, t2
        d1 = c1.derivative(t1)
        d2 = c2.derivative(t2)
        det = geom.cross(d2, d1)
        if det == 0.0:
            return None
        ## solve d1*dt1 - d2*dt2 = -f
        dt1 = geom.cross(d2, f) / det
        dt2 = geom.cross(d1, f) / det
        t1 = min(1.0, max(0.0, t1 - dt1))
        t2 = min(1.0, max(0.0, t2 - dt2))
    f = geom.sub(c1.compute(t1), c2.compute(t2))
    if geom.mag(f) <= tolerance:
        return t1, t2
    return None


def _endpoint_intersections(c1: BezierCurve, c2: BezierCurve) -> List[Intersection]:
    results = []
    for t1, p1 in ((0.0, c1.start_point), (1.0, c1.end_point)):
        for t2, p2 in ((0.0, c2.start_point), (1.0, c2.end_point)):
            if p1 == p2:
                results.append(Intersection(t1, t2))
    return results


def _resolve(c1: BezierCurve, c2: BezierCurve,
             candidates: List[Tuple[float, float]],
             threshold: float,
             exact: List[Intersection],
             separate: bool = False) -> List[Intersection]:
    ## polish, drop anything at an exact endpoint hit, merge neighbours
    scale = max(sum(c1.bounding_box.size), sum(c2.bounding_box.size), 1.0)
    tolerance = 1.0e-12 * scale
    resolved = []
    for t1, t2 in candidates:
        polished = _polish(c1, c2, t1, t2, tolerance)
        if separate:
            ## a self-intersection must polish to two distinct
            ## parameters; anything else is a joint between pieces
            if polished is None or abs(polished[0] - polished[1]) < 1.0e-6:
                continue
        if polished is not None:
            t1, t2 = polished
        resolved.append(Intersection(t1, t2))

    merged = list(exact)
    for r in sorted(resolved):
        p1 = c1.compute(r.t1)
        p2 = c2.compute(r.t2)
        duplicate = False
        for m in merged:
            if geom.dist(p1, c1.compute(m.t1)) <= threshold and \
               geom.dist(p2, c2.compute(m.t2)) <= threshold:
                duplicate = True
                break
        if not duplicate:
            merged.append(r)
    return _unique(merged)


def curve_curve(c1: BezierCurve, c2: BezierCurve,
                threshold: Optional[float] = None,
                tolerances: Tolerances = DEFAULT_TOLERANCES,
                diagnostics: Optional[Diagnostics] = None) -> List[Intersection]:
    if threshold is None:
        threshold = default_threshold(c1, c2, tolerances)

    if c1 == c2:
        return [Intersection(0.0, 0.0), Intersection(1.0, 1.0)]
    if c1 == c2.reversed():
        return [Intersection(0.0, 1.0), Intersection(1.0, 0.0)]

    exact = _endpoint_intersections(c1, c2)
    pairs = [(a, b) for a in c1.reduce(tolerances) for b in c2.reduce(tolerances)
             if a.curve.bounding_box.overlaps(b.curve.bounding_box)]
    candidates = _subdivide(pairs, threshold, tolerances, diagnostics)
    return _resolve(c1, c2, candidates, threshold, exact)


def intersect(a: BezierCurve, b: BezierCurve,
              threshold: Optional[float] = None,
              *,
              tolerances: Tolerances = DEFAULT_TOLERANCES,
              diagnostics: Optional[Diagnostics] = None) -> List[Intersection]:
    """All intersections of ``a`` and ``b`` as ``(t1, t2)`` parameter pairs.

    ``threshold`` is the bounding box extent below which subdivided
    pieces count as intersecting; it only affects curve/curve pairs and
    defaults to a fraction of the curves' size.
    """

    if threshold is not None and not threshold > 0:
        raise ValueError('intersection threshold must be positive, got {}'.format(threshold))

    if isinstance(a, LineSegment):
        if isinstance(b, LineSegment):
            return line_line(a, b, diagnostics)
        return line_curve(a, b, tolerances, diagnostics)
    if isinstance(b, LineSegment):
        swapped = line_curve(b, a, tolerances, diagnostics)
        return sorted(Intersection(i.t2, i.t1) for i in swapped)
    return curve_curve(a, b, threshold, tolerances, diagnostics)


def self_intersections(curve: BezierCurve,
                       threshold: Optional[float] = None,
                       *,
                       tolerances: Tolerances = DEFAULT_TOLERANCES,
                       diagnostics: Optional[Diagnostics] = None) -> List[Intersection]:
    """Points where ``curve`` crosses itself, with ``t1 < t2``.

    Only cubics can self-intersect.  Neighbouring simple pieces cannot
    cross each other, so each piece is tested against the pieces at
    least two further along.
    """

    if threshold is not None and not threshold > 0:
        raise ValueError('intersection threshold must be positive, got {}'.format(threshold))
    if curve.order < 3:
        return []
    if threshold is None:
        threshold = default_threshold(curve, curve, tolerances)

    reduced = curve.reduce(tolerances)
    pairs = []
    for i in range(len(reduced) - 2):
        for other in reduced[i + 2:]:
            if reduced[i].curve.bounding_box.overlaps(other.curve.bounding_box):
                pairs.append((reduced[i], other))
    candidates = _subdivide(pairs, threshold, tolerances, diagnostics)
    results = _resolve(curve, curve, candidates, threshold, [], separate=True)
    return _unique([r if r.t1 < r.t2 else Intersection(r.t2, r.t1) for r in results])


__all__ = [
    'Intersection',
    'intersect',
    'self_intersections',
    'line_line',
    'line_curve',
    'curve_curve',
    'default_threshold',
]
