## logging setup for bezpath
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

"""
Logging Configuration
Sets up the ``bezpath`` package logger.

Library modules only ever call ``logging.getLogger(__name__)``; nothing
is printed unless an application calls :func:`setup_logging` or
configures logging itself.

Records written by :func:`bezpath.diagnostics.report` carry the
degeneracy kind in a ``degeneracy`` attribute.  The handlers installed
here show it between brackets, and can be limited to a chosen set of
kinds so that a noisy solver path does not drown the rest of the log.
"""
import logging
import sys
from typing import Iterable, Optional

from bezpath.diagnostics import Degeneracy

LOG_FORMAT = '%(asctime)s %(levelname)-7s %(name)s [%(degeneracy)s] %(message)s'


class DegeneracyFilter(logging.Filter):
    """Fill in ``record.degeneracy`` and drop degeneracy records whose
    kind is not in ``kinds``; ``kinds=None`` lets every kind through."""

    def __init__(self, kinds: Optional[Iterable[Degeneracy]] = None):
        super().__init__()
        self.kinds = None if kinds is None else {Degeneracy(k).value for k in kinds}

    def filter(self, record):
        kind = getattr(record, 'degeneracy', None)
        if kind is None:
            record.degeneracy = '-'
            return True
        return self.kinds is None or kind in self.kinds


def setup_logging(level: int = logging.INFO,
                  log_file: Optional[str] = None,
                  kinds: Optional[Iterable[Degeneracy]] = None) -> logging.Logger:
    """
    Configures the logger for the 'bezpath' namespace.

    Args:
        level: Logging level; degeneracies are only logged at DEBUG.
        log_file: Optional path to save logs to a file.
        kinds: Degeneracy kinds to show; all of them when None.

    Calling it again replaces (and closes) the handlers of the previous call.
    """
    logger = logging.getLogger("bezpath")
    logger.setLevel(level)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    degeneracies = DegeneracyFilter(kinds)
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for h in handlers:
        h.setLevel(level)
        h.setFormatter(formatter)
        h.addFilter(degeneracies)
        logger.addHandler(h)

    logger.debug("Logging initialized at %s.", logging.getLevelName(level))
    return logger


__all__ = ['DegeneracyFilter', 'LOG_FORMAT', 'setup_logging']
