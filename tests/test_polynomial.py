import math

import numpy as np
import pytest

from bezpath.config import Tolerances
from bezpath.diagnostics import Degeneracy, Diagnostics
from bezpath.polynomial import (BernsteinPolynomial, bisect_root, clip_interval,
                                droots, find_roots)

## unit tests for bezpath polynomial.py


def bernstein_from_power(a):
    """Bernstein coefficients of sum(a[j] * t**j) over [0, 1]"""
    n = len(a) - 1
    return [sum(math.comb(i, j) / math.comb(n, j) * a[j] for j in range(i + 1))
            for i in range(n + 1)]


def bernstein_from_roots(roots):
    return bernstein_from_power(np.polynomial.polynomial.polyfromroots(roots))


class TestBernsteinPolynomial:

    def test_evaluate(self):
        p = BernsteinPolynomial([1, 2, 3])
        assert p.f(0.0) == 1.0
        assert p.f(1.0) == 3.0
        assert p.f(0.5) == 2.0
        assert p(0.25) == p.f(0.25)

    def test_order_and_derivative(self):
        p = BernsteinPolynomial([1, 2, 4])
        assert p.order == 2
        assert p.derivative().coefficients == (2.0, 4.0)
        assert BernsteinPolynomial([5]).derivative().coefficients == (0.0,)

    def test_empty(self):
        with pytest.raises(ValueError):
            BernsteinPolynomial([])

    def test_equality(self):
        assert BernsteinPolynomial([1, 2]) == BernsteinPolynomial((1.0, 2.0))
        assert hash(BernsteinPolynomial([1, 2])) == hash(BernsteinPolynomial([1.0, 2.0]))
        assert BernsteinPolynomial([1, 2]) != BernsteinPolynomial([2, 1])

    def test_analytical_roots(self):
        assert BernsteinPolynomial([3]).analytical_roots() == []
        assert BernsteinPolynomial([1, 2, 3, 4, 5]).analytical_roots() is None
        assert BernsteinPolynomial([-1, 1]).analytical_roots() == [0.5]
        assert BernsteinPolynomial([-1, 1]).analytical_roots(0.6, 1.0) == []


class TestDroots:

    def test_linear(self):
        assert droots(1.0, -1.0) == [0.5]
        assert droots(1.0, 1.0) == []
        assert droots(1.0, 2.0) == []

    def test_quadratic(self):
        roots = sorted(droots(3 / 16, -5 / 16, 3 / 16))
        assert roots == pytest.approx([0.25, 0.75])

    def test_quadratic_no_real_roots(self):
        assert droots(1.0, 0.0, 1.0) == []

    def test_quadratic_degenerate_to_linear(self):
        ## a - 2b + c == 0
        assert droots(1.0, 0.0, -1.0) == pytest.approx([0.5])

    def test_cubic_three_roots(self):
        roots = sorted(droots(0.0, 1.0, -1.0, 0.0))
        assert roots == pytest.approx([0.0, 0.5, 1.0], abs=1e-9)
        assert all(0.0 <= r <= 1.0 for r in roots)

    def test_cubic_single_root(self):
        ## (t - 0.3)(t**2 + 1)
        roots = droots(*bernstein_from_power([-0.3, 1.0, -0.3, 1.0]))
        assert roots == pytest.approx([0.3])

    def test_cubic_from_roots(self):
        roots = sorted(droots(*bernstein_from_roots([0.2, 0.5, 0.7])))
        assert roots == pytest.approx([0.2, 0.5, 0.7], abs=1e-9)

    def test_cubic_degenerate_to_quadratic(self):
        ## degree-elevated quadratic (3/16, -5/16, 3/16)
        q = [3 / 16, -5 / 16, 3 / 16]
        c = [q[0], (q[0] + 2 * q[1]) / 3, (2 * q[1] + q[2]) / 3, q[2]]
        assert sorted(droots(*c)) == pytest.approx([0.25, 0.75])

    def test_bad_order(self):
        with pytest.raises(ValueError):
            droots(1.0, 2.0, 3.0, 4.0, 5.0)


class TestFindRoots:

    def test_high_order(self):
        p = BernsteinPolynomial(bernstein_from_roots([0.1, 0.3, 0.6, 0.9]))
        assert p.order == 4
        roots = find_roots(p)
        assert roots == pytest.approx([0.1, 0.3, 0.6, 0.9], abs=1e-5)

    def test_high_order_with_clipping(self):
        p = BernsteinPolynomial(bernstein_from_roots([0.15, 0.4, 0.55, 0.8, 0.95]))
        roots = find_roots(p, clip=True)
        assert roots == pytest.approx([0.15, 0.4, 0.55, 0.8, 0.95], abs=1e-5)

    def test_roots_ordered_and_distinct(self):
        p = BernsteinPolynomial(bernstein_from_roots([0.7, 0.2, 0.45, 0.05]))
        roots = find_roots(p)
        assert roots == sorted(roots)
        assert all(b - a > 1e-5 for a, b in zip(roots, roots[1:]))

    def test_end_point_roots(self):
        ## the degree-elevated cubic t (t - 1/2) (t - 1)
        p = BernsteinPolynomial([0.0, 0.75, 0.0, -0.75, 0.0])
        assert find_roots(p) == pytest.approx([0.0, 0.5, 1.0], abs=1e-9)

    def test_sub_interval(self):
        p = BernsteinPolynomial(bernstein_from_roots([0.1, 0.3, 0.6, 0.9]))
        assert find_roots(p, 0.2, 0.7) == pytest.approx([0.3, 0.6], abs=1e-5)

    def test_no_roots(self):
        p = BernsteinPolynomial([1.0, 2.0, 1.5, 3.0, 1.0])
        assert find_roots(p) == []
        assert find_roots(p, clip=True) == []

    def test_closed_form_orders(self):
        assert find_roots(BernsteinPolynomial([-1.0, 1.0])) == [0.5]
        assert find_roots(BernsteinPolynomial([3 / 16, -5 / 16, 3 / 16])) == \
            pytest.approx([0.25, 0.75])

    def test_bad_interval(self):
        p = BernsteinPolynomial([-1.0, 1.0])
        with pytest.raises(ValueError):
            find_roots(p, 0.5, 0.5)
        with pytest.raises(ValueError):
            find_roots(p, 1.0, 0.0)

    def test_diagnostics_collects(self):
        p = BernsteinPolynomial([0.0, 0.75, 0.0, -0.75, 0.0])
        diagnostics = Diagnostics()
        find_roots(p, diagnostics=diagnostics)
        assert len(diagnostics) > 0

    def test_interior_double_root(self):
        p = BernsteinPolynomial(bernstein_from_roots([0.1, 0.3, 0.5, 0.5, 0.9]))
        assert p.order == 5
        roots = find_roots(p)
        assert len(roots) == 4
        assert roots == pytest.approx([0.1, 0.3, 0.5, 0.9], abs=1e-5)

    def test_tangential_root(self):
        ## (2t - 1)**4 touches zero at t = 1/2 without changing sign
        p = BernsteinPolynomial([1.0, -1.0, 1.0, -1.0, 1.0])
        diagnostics = Diagnostics()
        assert find_roots(p, diagnostics=diagnostics) == [0.5]
        assert diagnostics.count(Degeneracy.TANGENTIAL_ROOT) == 1
        ## the seed from the far end of [1/2, 1] wanders off and is dropped
        assert diagnostics.count(Degeneracy.ROOT_REJECTED) == 1

    def test_no_tangential_root_off_axis(self):
        ## (2t - 1)**4 + 1/16 has a minimum but no root
        p = BernsteinPolynomial([1.0625, -0.9375, 1.0625, -0.9375, 1.0625])
        diagnostics = Diagnostics()
        assert find_roots(p, diagnostics=diagnostics) == []
        assert diagnostics.count(Degeneracy.TANGENTIAL_ROOT) == 0

    def test_newton_falls_back_to_bisection(self):
        ## t**4 - 0.9: one Newton step from t = 1/2 overshoots past 2
        p = BernsteinPolynomial(bernstein_from_power([-0.9, 0.0, 0.0, 0.0, 1.0]))
        diagnostics = Diagnostics()
        tol = Tolerances(newton_max_iterations=1)
        roots = find_roots(p, tolerances=tol, diagnostics=diagnostics)
        assert roots == pytest.approx([0.9 ** 0.25], abs=1e-4)
        assert diagnostics.count(Degeneracy.NEWTON_FALLBACK) == 1
        ## converged Newton needs no fallback
        diagnostics.clear()
        assert find_roots(p, diagnostics=diagnostics) == pytest.approx([0.9 ** 0.25], abs=1e-9)
        assert diagnostics.count(Degeneracy.NEWTON_FALLBACK) == 0

    def test_custom_tolerances(self):
        p = BernsteinPolynomial(bernstein_from_roots([0.1, 0.3, 0.6, 0.9]))
        tol = Tolerances(newton_max_iterations=50, root_uniqueness=1e-3)
        assert find_roots(p, tolerances=tol) == pytest.approx([0.1, 0.3, 0.6, 0.9], abs=1e-5)


class TestHelpers:

    def test_bisect_root(self):
        p = BernsteinPolynomial([-1.0, 3.0])
        assert bisect_root(p, 0.0, 1.0) == pytest.approx(0.25, abs=1e-5)

    def test_clip_interval(self):
        p = BernsteinPolynomial([-1.0, -1.0, 1.0, 1.0])
        lo, hi = clip_interval(p)
        assert lo == pytest.approx(1 / 3)
        assert hi == pytest.approx(2 / 3)
        assert lo <= 0.5 <= hi

    def test_clip_interval_no_crossing(self):
        assert clip_interval(BernsteinPolynomial([1.0, 2.0, 3.0])) is None
        assert clip_interval(BernsteinPolynomial([-1.0, 1.0]), 0.6, 1.0) is None
