## degeneracy reporting for bezpath
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

"""Explicit degeneracy kinds for absorbed numerical failures.

The solvers never raise on degenerate geometry; they return "no
result" instead.  Callers that need to tell a genuine miss from a
solver that gave up pass a :class:`Diagnostics` collector, which
records one :class:`DegeneracyEvent` per absorbed failure.  Every event
is also logged at DEBUG level whether or not a collector is present.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Degeneracy(Enum):
    PARALLEL_NO_INTERSECTION = 'parallel-no-intersection'
    NEWTON_FALLBACK = 'newton-fallback'
    TANGENTIAL_ROOT = 'tangential-root'
    ROOT_REJECTED = 'root-rejected'
    UNRESOLVED_INTERSECTION = 'unresolved-intersection'
    DEGENERATE_TRACE = 'degenerate-trace'


@dataclass(frozen=True)
class DegeneracyEvent:
    kind: Degeneracy
    detail: str = ''


@dataclass
class Diagnostics:
    """Collects degeneracy events raised during one or more calls."""

    events: List[DegeneracyEvent] = field(default_factory=list)

    def record(self, kind: Degeneracy, detail: str = '') -> None:
        self.events.append(DegeneracyEvent(kind, detail))

    def count(self, kind: Degeneracy) -> int:
        return sum(1 for e in self.events if e.kind is kind)

    def kinds(self) -> set:
        return {e.kind for e in self.events}

    def clear(self) -> None:
        self.events.clear()

    def __len__(self) -> int:
        return len(self.events)


def report(logger: logging.Logger,
           diagnostics: Optional[Diagnostics],
           kind: Degeneracy,
           detail: str = '') -> None:
    """Log a degeneracy and hand it to ``diagnostics`` when one is given."""

    logger.debug('%s: %s', kind.value, detail, extra={'degeneracy': kind.value})
    if diagnostics is not None:
        diagnostics.record(kind, detail)


__all__ = ['Degeneracy', 'DegeneracyEvent', 'Diagnostics', 'report']
