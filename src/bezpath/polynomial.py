## Bernstein polynomial root finding for bezpath
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

"""Bernstein-basis polynomials and their real roots.

A :class:`BernsteinPolynomial` of order ``n`` holds ``n+1`` Bernstein
coefficients over the unit interval.  It is exactly the form produced
by projecting a Bezier curve's control points onto an axis, which is
how the intersection and containment code builds them.

:func:`find_roots` solves orders one to three in closed form (see
:func:`droots`) and everything above numerically: the roots of the
derivative partition the interval into monotonic pieces, and each
piece yields at most one root through Newton's method, with bisection
as the fallback when Newton overshoots the piece.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Tuple

import mpmath as mpm

from bezpath.config import DEFAULT_TOLERANCES, Tolerances
from bezpath.diagnostics import Degeneracy, Diagnostics, report

logger = logging.getLogger(__name__)

## roots computed in closed form may stray outside [0,1] by a few
## ulps; anything within this margin is clamped back onto the interval
_CLAMP_MARGIN = 1.0e-12


class BernsteinPolynomial:
    """Immutable polynomial in Bernstein form over ``[0, 1]``."""

    __slots__ = ('_coefficients',)

    def __init__(self, coefficients: Iterable[float]):
        coefficients = tuple(float(c) for c in coefficients)
        if not coefficients:
            raise ValueError('a polynomial needs at least one coefficient')
        self._coefficients = coefficients

    @property
    def coefficients(self) -> Tuple[float, ...]:
        return self._coefficients

    @property
    def order(self) -> int:
        return len(self._coefficients) - 1

    def __repr__(self):
        return f'BernsteinPolynomial({list(self._coefficients)})'

    def __eq__(self, other):
        if not isinstance(other, BernsteinPolynomial):
            return NotImplemented
        return self._coefficients == other._coefficients

    def __hash__(self):
        return hash(self._coefficients)

    def f(self, x: float) -> float:
        """Evaluate by repeated linear interpolation (de Casteljau)."""

        scratch = list(self._coefficients)
        mx = 1.0 - x
        for i in range(len(scratch) - 1, 0, -1):
            for j in range(i):
                scratch[j] = mx * scratch[j] + x * scratch[j + 1]
        return scratch[0]

    __call__ = f

    def derivative(self) -> "BernsteinPolynomial":
        n = self.order
        if n == 0:
            return BernsteinPolynomial((0.0,))
        c = self._coefficients
        return BernsteinPolynomial(n * (c[i + 1] - c[i]) for i in range(n))

    def analytical_roots(self, start: float = 0.0, end: float = 1.0) -> Optional[List[float]]:
        """Closed-form roots in ``[start, end]``, or ``None`` above order 3."""

        order = self.order
        if order == 0:
            return []
        if order > 3:
            return None
        roots = [r for r in droots(*self._coefficients) if start <= r <= end]
        return _sorted_unique(roots)


def _sorted_unique(values: Iterable[float]) -> List[float]:
    result: List[float] = []
    for v in sorted(values):
        if not result or v > result[-1]:
            result.append(v)
    return result


def _accept_unit(roots: Iterable, out: List[float]) -> None:
    for r in roots:
        r = float(r)
        if math.isnan(r):
            continue
        if -_CLAMP_MARGIN <= r <= 1.0 + _CLAMP_MARGIN:
            out.append(min(1.0, max(0.0, r)))


def _crt(v):
    ## real cube root; mpmath's cbrt returns the principal complex root
    ## for negative arguments
    if v < 0:
        return -mpm.cbrt(-v)
    return mpm.cbrt(v)


def droots(*p: float) -> List[float]:
    """Roots in ``[0, 1]`` of a Bernstein polynomial of order 1, 2 or 3.

    The coefficients are passed positionally.  Degenerate leading terms
    fall back to the next lower order, and a vanishing polynomial has no
    isolated roots.
    """

    roots: List[float] = []
    if len(p) == 2:
        a, b = p
        if a != b:
            _accept_unit([a / (a - b)], roots)
        return roots

    if len(p) == 3:
        a, b, c = p
        d = a - 2.0 * b + c
        scale = max(abs(a), abs(b), abs(c))
        if d != 0 and abs(d) > 1.0e-14 * scale:
            disc = b * b - a * c
            if disc < 0:
                return roots
            m1 = -math.sqrt(disc)
            m2 = -a + b
            _accept_unit([-(m1 + m2) / d, -(-m1 + m2) / d], roots)
        elif b != c:
            _accept_unit([(2.0 * b - c) / (2.0 * (b - c))], roots)
        return roots

    if len(p) == 4:
        p0, p1, p2, p3 = p
        d = -p0 + 3.0 * p1 - 3.0 * p2 + p3
        if abs(d) < 1.0e-8 * max(1.0, abs(p0), abs(p1), abs(p2), abs(p3)):
            ## the cubic term vanishes: solve the power-basis quadratic
            ## a t^2 + b t + c, rewritten in Bernstein form
            a = 3.0 * p0 - 6.0 * p1 + 3.0 * p2
            b = -3.0 * p0 + 3.0 * p1
            c = p0
            return droots(c, b / 2.0 + c, a + b + c)

        ## Cardano on the monic cubic t^3 + a t^2 + b t + c
        mpd = mpm.mpf(d)
        a = (3 * mpm.mpf(p0) - 6 * mpm.mpf(p1) + 3 * mpm.mpf(p2)) / mpd
        b = (-3 * mpm.mpf(p0) + 3 * mpm.mpf(p1)) / mpd
        c = mpm.mpf(p0) / mpd
        pp = (3 * b - a * a) / 3
        q = (2 * a * a * a - 9 * a * b + 27 * c) / 27
        q2 = q / 2
        discriminant = q2 * q2 + pp * pp * pp / 27
        tiny = mpm.mpf(1.0e-14)
        if discriminant < -tiny:
            ## three real roots
            mp3 = -pp / 3
            r = mpm.sqrt(mp3 * mp3 * mp3)
            t = -q / (2 * r)
            cosphi = min(mpm.mpf(1), max(mpm.mpf(-1), t))
            phi = mpm.acos(cosphi)
            t1 = 2 * _crt(r)
            _accept_unit([t1 * mpm.cos(phi / 3) - a / 3,
                          t1 * mpm.cos((phi + 2 * mpm.pi) / 3) - a / 3,
                          t1 * mpm.cos((phi + 4 * mpm.pi) / 3) - a / 3], roots)
        elif discriminant > tiny:
            ## one real root
            sd = mpm.sqrt(discriminant)
            u1 = _crt(-q2 + sd)
            v1 = _crt(q2 + sd)
            _accept_unit([u1 - v1 - a / 3], roots)
        else:
            ## a double root and a single root
            u1 = _crt(-q2) if q2 < 0 else -_crt(q2)
            _accept_unit([2 * u1 - a / 3, -u1 - a / 3], roots)
        return roots

    raise ValueError('droots() handles orders 1 to 3, got {} coefficients'.format(len(p)))


def newton(polynomial: BernsteinPolynomial,
           derivative: BernsteinPolynomial,
           guess: float,
           tolerances: Tolerances = DEFAULT_TOLERANCES) -> float:
    """Newton's method from ``guess``; returns the last iterate."""

    x = guess
    for _ in range(tolerances.newton_max_iterations):
        fx = polynomial.f(x)
        if fx == 0.0:
            break
        fprime = derivative.f(x)
        if fprime == 0.0:
            break
        previous = x
        x -= fx / fprime
        if not abs(x - previous) > tolerances.newton_step:
            break
    return x


def bisect_root(polynomial: BernsteinPolynomial,
                start: float,
                end: float,
                max_iterations: int = DEFAULT_TOLERANCES.bisection_max_iterations,
                width: float = DEFAULT_TOLERANCES.bisection_width) -> float:
    """Bisection on ``[start, end]``, whose ends must differ in sign."""

    guess = (start + end) / 2
    low = start
    high = end
    low_negative = polynomial.f(low) < 0
    assert low_negative != (polynomial.f(high) < 0), 'bisection needs a sign change'
    iterations = 0
    while high - low > width:
        guess = (low + high) / 2
        value = polynomial.f(guess)
        if value == 0:
            return guess
        elif (value < 0) == low_negative:
            low = guess
        else:
            high = guess
        iterations += 1
        if iterations >= max_iterations:
            break
    return guess


def clip_interval(polynomial: BernsteinPolynomial,
                  start: float = 0.0,
                  end: float = 1.0) -> Optional[Tuple[float, float]]:
    """Tighten ``[start, end]`` to where the control polygon's convex hull
    meets the x axis.

    The Bernstein control points ``(i/n, c_i)`` bound the graph of the
    polynomial over ``[0, 1]``, so every root lies inside the span of
    the hull/axis crossing.  Returns ``None`` when there can be no root
    in ``[start, end]``.
    """

    c = polynomial.coefficients
    n = polynomial.order
    if n == 0:
        return None if c[0] != 0 else (start, end)
    xs = [i / n for i in range(n + 1)]
    crossings = [xs[i] for i in range(n + 1) if c[i] == 0]
    for i in range(n + 1):
        for j in range(i + 1, n + 1):
            if (c[i] < 0 < c[j]) or (c[j] < 0 < c[i]):
                crossings.append(xs[i] + (xs[j] - xs[i]) * c[i] / (c[i] - c[j]))
    if not crossings:
        return None
    lo = max(start, min(crossings))
    hi = min(end, max(crossings))
    if lo > hi:
        return None
    return lo, hi


def find_roots(polynomial: BernsteinPolynomial,
               start: float = 0.0,
               end: float = 1.0,
               *,
               tolerances: Tolerances = DEFAULT_TOLERANCES,
               clip: bool = False,
               diagnostics: Optional[Diagnostics] = None) -> List[float]:
    """Ordered, deduplicated real roots of ``polynomial`` in ``[start, end]``."""

    if not start < end:
        raise ValueError('find_roots needs start < end, got {} and {}'.format(start, end))

    analytical = polynomial.analytical_roots(start, end)
    if analytical is not None:
        return analytical

    if clip:
        bounds = clip_interval(polynomial, start, end)
        if bounds is None:
            return []
        ## a zero-width hull crossing carries no useful bound
        if bounds[0] < bounds[1]:
            start, end = bounds

    derivative = polynomial.derivative()
    critical = find_roots(derivative, start, end, tolerances=tolerances,
                          clip=clip, diagnostics=diagnostics)

    intervals = [start] + [x for x in critical if start < x < end] + [end]

    roots: List[float] = []
    last_root: Optional[float] = None
    if polynomial.f(start) == 0.0:
        roots.append(start)
        last_root = start
    for a, b in zip(intervals, intervals[1:]):
        fa = polynomial.f(a)
        fb = polynomial.f(b)
        if fa * fb < 0:
            root = newton(polynomial, derivative, (a + b) / 2, tolerances)
            if not a < root < b:
                report(logger, diagnostics, Degeneracy.NEWTON_FALLBACK,
                       f'newton left [{a}, {b}], bisecting')
                root = bisect_root(polynomial, a, b,
                                   tolerances.bisection_max_iterations,
                                   tolerances.bisection_width)
        else:
            ## no sign change: only a tangential (double) root at the
            ## right end of the piece can live here
            root = newton(polynomial, derivative, b, tolerances)
            if abs(root - b) >= tolerances.tangential_seed or \
               abs(polynomial.f(root)) >= tolerances.tangential_residual:
                if fa * fb == 0 or abs(fb) < tolerances.tangential_residual:
                    report(logger, diagnostics, Degeneracy.ROOT_REJECTED,
                           f'no acceptable root near {b}')
                continue
            report(logger, diagnostics, Degeneracy.TANGENTIAL_ROOT,
                   f'tangential root at {root}')
        if last_root is not None and not last_root + tolerances.root_uniqueness < root:
            continue
        last_root = root
        roots.append(root)
    return roots


__all__ = [
    'BernsteinPolynomial',
    'droots',
    'newton',
    'bisect_root',
    'clip_interval',
    'find_roots',
]
