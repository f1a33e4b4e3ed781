## bezpath lazily evaluated boolean combinations of closed paths
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

from bezpath.boolean import BooleanOperation, boolean_operation
from bezpath.path import Path
from bezpath.xform import Matrix, Rotation, Scale, Translation


class Boolean:
    """Boolean combination of two or more closed paths, folded left to
    right and evaluated on first access"""

    types = ('union','intersection','difference')

    def __repr__(self):
        return f"Boolean({self.type},{self.elem})"

    def __init__(self,type='union',paths=(), *, tolerances=None):
        if not type in self.types:
            raise ValueError('invalid type passed to Boolean(): {}'.format(type))
        self.elem = []
        for p in paths:
            if not ( isinstance(p,Path) and
                     all(c.is_closed for c in p.components)):
                raise ValueError('not a closed Path instance: {}'.format(p))
            self.elem.append(p)

        self.__type=type
        self.__operation = BooleanOperation.coerce(type)
        self.__tolerances = tolerances
        self.__update = True
        self.__result = None

    @property
    def type(self):
        return self.__type

    @property
    def update(self):
        return self.__update

    def _combine(self,p1,p2):
        if self.__tolerances is None:
            return boolean_operation(p1,p2,self.__operation)
        return boolean_operation(p1,p2,self.__operation,
                                 tolerances=self.__tolerances)

    ## every operand is moved by the same matrix, and the result is
    ## recomputed on next access

    def transform(self,m):
        if not isinstance(m,Matrix):
            raise ValueError('bad transformation matrix: {}'.format(m))
        self.__update = True
        self.elem = [p.transform(m) for p in self.elem]

    def translate(self,delta):
        self.transform(Translation(delta))

    def scale(self,sx,sy=None):
        self.transform(Scale(sx,sy))

    def rotate(self,angle,cent=(0.0,0.0)):
        m = Translation(cent).mul(Rotation(angle)).mul(Translation(cent,inverse=True))
        self.transform(m)

    @property
    def path(self):
        if self.__update:
            if len(self.elem) < 2:
                raise ValueError('Boolean requires at least two operands')

            result = self.elem[0]
            for operand in self.elem[1:]:
                result = self._combine(result, operand)

            self.__result = result
            self.__update = False
        return self.__result

    @property
    def area(self):
        return abs(self.path.area)

    @property
    def bounding_box(self):
        return self.path.bounding_box


__all__ = ['Boolean']
