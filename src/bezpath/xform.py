## affine matrix transformations for 2D homogeneous coordinates in bezpath
## adapted from yapCAD's xform.py
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

from math import cos, sin, radians

import bezpath.geom as geom

## a matrix is represented as a list of three three-vectors. In a
## matrix, vectors represent rows unless the transpose property is
## true.  Points are lifted to homogeneous form (x, y, 1) for
## multiplication and dropped back to (x, y) afterwards, so only the
## top two rows of an affine matrix carry information.


class Matrix:
    """3x3 transformation matrix class for transforming homogeneous 2D coordinates"""

    def __init__(self,a=None,trans=False):
        self.m = [[1.0,0.0,0.0],
                  [0.0,1.0,0.0],
                  [0.0,0.0,1.0]]
        self.trans=False

        if isinstance(a,Matrix):
            for i in range(3):
                self.setrow(i,a.getrow(i))

        elif isinstance(a,(tuple,list)):
            if len(a) == 3:
                if not all(isinstance(r,(tuple,list)) and len(r) == 3 for r in a):
                    raise ValueError('bad rows in matrix initialization: {}'.format(a))
                for i in range(3):
                    for j in range(3):
                        self.set(i,j,a[i][j])
            elif len(a)==9:
                for i in range(3):
                    for j in range(3):
                        self.set(i,j,a[i*3+j])
            else:
                raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))
        elif a is not None:
            raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))
        self.trans=trans

    def __repr__(self):
        return "Matrix({},{},{},{})".format(self.m[0],self.m[1],
                                            self.m[2],self.trans)

    def __eq__(self,other):
        if not isinstance(other,Matrix):
            return NotImplemented
        return all(self.getrow(i) == other.getrow(i) for i in range(3))

    #return value indexed by i,j
    def get(self,i,j):
        if i < 0 or i > 2 or j < 0 or j > 2:
            raise ValueError('bad index passed to get: {},{}'.format(i,j))
        if self.trans:
            return self.m[j][i]
        else:
            return self.m[i][j]

    #set value indexed by i,j
    def set(self,i,j,x):
        if i < 0 or i > 2 or j < 0 or j > 2:
            raise ValueError('bad index passed to set: {},{}'.format(i,j))
        if not geom.isgoodnum(x):
            raise ValueError('bad value passed to set: {}'.format(x))
        if self.trans:
            self.m[j][i]=float(x)
        else:
            self.m[i][j]=float(x)

    def getrow(self,i):
        if i < 0 or i > 2:
            raise ValueError('bad row passed to getrow: {}'.format(i))
        if self.trans:
            return [self.m[0][i],self.m[1][i],self.m[2][i]]
        else:
            return list(self.m[i])

    def getcol(self,j):
        if j < 0 or j > 2:
            raise ValueError('bad column passed to getcol: {}'.format(j))
        if not self.trans:
            return [self.m[0][j],self.m[1][j],self.m[2][j]]
        else:
            return list(self.m[j])

    def setrow(self,i,x):
        if len(x) != 3:
            raise ValueError('bad row passed to setrow: {}'.format(x))
        for j in range(3):
            self.set(i,j,x[j])

    # matrix multiply.  If x is a matrix, compute MX.  If x is a
    # point, compute Mx. If x is a scalar, compute xM.  Respects
    # transpose flag.

    def mul(self,x):
        if isinstance(x,Matrix):
            result = Matrix()
            for i in range(3):
                row = self.getrow(i)
                for j in range(3):
                    col = x.getcol(j)
                    result.set(i,j,row[0]*col[0]+row[1]*col[1]+row[2]*col[2])
            return result
        elif geom.ispoint(x):
            return self.transform_point(x)
        elif geom.isgoodnum(x):
            result = Matrix()
            for i in range(3):
                result.setrow(i,[v*x for v in self.getrow(i)])
            return result

        raise ValueError('bad thing passed to mul(): {}'.format(x))

    def transform_point(self,p):
        r0 = self.getrow(0)
        r1 = self.getrow(1)
        return (r0[0]*p[0]+r0[1]*p[1]+r0[2],
                r1[0]*p[0]+r1[1]*p[1]+r1[2])


# rotation about the origin, angle in degrees
def Rotation(angle,inverse=False):
    if inverse:
        angle *= -1.0
    rad = radians(angle%360.0)
    cang = cos(rad)
    sang = sin(rad)
    R = [[cang,-sang,0.0],
         [sang,cang,0.0],
         [0.0,0.0,1.0]]
    return Matrix(R)

def Translation(delta,inverse=False):
    if inverse:
        delta = geom.scale(delta,-1.0)
    T = [[1.0,0.0,delta[0]],
         [0.0,1.0,delta[1]],
         [0.0,0.0,1.0]]
    return Matrix(T)

def Scale(x,y=None,inverse=False):
    if geom.isgoodnum(x):
        sx = x
        sy = y if geom.isgoodnum(y) else x
    elif geom.ispoint(x):
        sx, sy = x
    else:
        raise ValueError('bad scaling values passed to Scale')

    if inverse:
        sx = 1.0/sx
        sy = 1.0/sy

    S = [[sx,0.0,0.0],
         [0.0,sy,0.0],
         [0.0,0.0,1.0]]
    return Matrix(S)


__all__ = ['Matrix', 'Rotation', 'Translation', 'Scale']
