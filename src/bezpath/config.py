## numerical tolerances for bezpath
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

"""Tolerance configuration threaded through the numeric code.

Every solver, intersector and boolean call takes a ``tolerances``
keyword argument.  ``DEFAULT_TOLERANCES`` reproduces the constants the
algorithms were tuned with; derive variants with
:meth:`Tolerances.replace`.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass


@dataclass(frozen=True)
class Tolerances:
    """Iteration caps and convergence thresholds."""

    newton_max_iterations: int = 20
    newton_step: float = 1.0e-10
    bisection_max_iterations: int = 20
    bisection_width: float = 1.0e-5
    root_uniqueness: float = 1.0e-5
    tangential_seed: float = 1.0e-5
    tangential_residual: float = 1.0e-10
    reduce_step: float = 0.01
    # fraction of the larger curve's bounding box size
    curve_intersection_threshold: float = 1.0e-3
    max_intersection_pairs: int = 512
    intersection_merge: float = 1.0e-7
    small_distance: float = 1.0e-6
    containment_max_iterations: int = 100

    def __post_init__(self):
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f'{f.name} must be a number, got {value!r}')
            if value <= 0:
                raise ValueError(f'{f.name} must be positive, got {value!r}')

    def replace(self, **changes) -> "Tolerances":
        """Return a copy with ``changes`` applied."""

        return dataclasses.replace(self, **changes)


DEFAULT_TOLERANCES = Tolerances()


__all__ = ['Tolerances', 'DEFAULT_TOLERANCES']
