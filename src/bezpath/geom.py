## foundational vector helpers for bezpath
## Born on 29 July, 2020 as part of yapCAD's geom.py
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

"""scalar and vector helpers for **bezpath**

Points and vectors are plain 2-tuples of floats, ``(x, y)``.  The
functions in this module never mutate their arguments, so points can
be shared freely between curves, paths and the boolean graph.
"""

from math import atan2, hypot


## operations on scalars
## -----------------------

## utility function to determine if argument is a "real" python
## number, since booleans are considered ints (True=1 and False=0 for
## integer arithmetic) but 1 and 0 are not considered boolean

def isgoodnum(n):
    """ determine if an argument is actually a scalar number, and not boolean
    """
    return (not isinstance(n,bool)) and isinstance(n,(int,float))

def between(v,lo,hi,tol=0.0):
    """is ``v`` inside the closed interval between ``lo`` and ``hi``"""
    if lo > hi:
        lo, hi = hi, lo
    return lo - tol <= v <= hi + tol

def map_range(v,ds,de,ts,te):
    """map ``v`` from the interval ``[ds,de]`` onto ``[ts,te]``"""
    return ts + (te-ts)*(v-ds)/(de-ds)


## operations on points and vectors
## --------------------------------

def point(x=0.0,y=0.0):
    """Make a point from two numbers or from any two-plus element sequence
    """
    if isinstance(x,(tuple,list)):
        if len(x) < 2:
            raise ValueError('point needs two coordinates: {}'.format(x))
        x, y = x[0], x[1]
    if not (isgoodnum(x) and isgoodnum(y)):
        raise ValueError('bad coordinates passed to point(): {}, {}'.format(x,y))
    return (float(x),float(y))

def ispoint(x):
    """is ``x`` a bezpath point"""
    return isinstance(x,tuple) and len(x) == 2 and \
        isgoodnum(x[0]) and isgoodnum(x[1])

def vstr(a):
    """compact string form of a point, ``[x, y]``"""
    return '[{}, {}]'.format(a[0],a[1])

def add(a,b):
    """ ``a + b``"""
    return (a[0]+b[0],a[1]+b[1])

def sub(a,b):
    """ ``a - b``"""
    return (a[0]-b[0],a[1]-b[1])

def scale(a,c):
    """ ``c * a`` for scalar ``c``"""
    return (a[0]*c,a[1]*c)

def dot(a,b):
    return a[0]*b[0]+a[1]*b[1]

## the z component of the 3D cross product of two planar vectors
def cross(a,b):
    return a[0]*b[1]-a[1]*b[0]

def mag(a):
    return hypot(a[0],a[1])

def dist(a,b):  # compute distance between two points a & b
    return hypot(a[0]-b[0],a[1]-b[1])

def normalize(a):
    """unit vector in the direction of ``a``; the zero vector maps to itself"""
    m = mag(a)
    if m == 0.0:
        return (0.0,0.0)
    return (a[0]/m,a[1]/m)

def lerp(a,b,t):
    """linear interpolation, ``(1-t)*a + t*b``"""
    mt = 1.0-t
    return (mt*a[0]+t*b[0],mt*a[1]+t*b[1])

## left-hand perpendicular, the planar analogue of yapCAD's orthoXY()
def perp(a):
    return (-a[1],a[0])

def angle(o,v1,v2):
    """signed angle between ``v1-o`` and ``v2-o``, in radians"""
    d1 = sub(v1,o)
    d2 = sub(v2,o)
    return atan2(cross(d1,d2),dot(d1,d2))

def lli8(x1,y1,x2,y2,x3,y3,x4,y4):
    """intersection of the infinite lines through (x1,y1)-(x2,y2) and
    (x3,y3)-(x4,y4), or ``None`` for parallel lines"""
    nx = (x1*y2-y1*x2)*(x3-x4)-(x1-x2)*(x3*y4-y3*x4)
    ny = (x1*y2-y1*x2)*(y3-y4)-(y1-y2)*(x3*y4-y3*x4)
    d = (x1-x2)*(y3-y4)-(y1-y2)*(x3-x4)
    if d == 0:
        return None
    return (nx/d,ny/d)

def lli4(p1,p2,p3,p4):
    return lli8(p1[0],p1[1],p2[0],p2[1],p3[0],p3[1],p4[0],p4[1])


__all__ = [
    'isgoodnum',
    'between',
    'map_range',
    'point',
    'ispoint',
    'vstr',
    'add',
    'sub',
    'scale',
    'dot',
    'cross',
    'mag',
    'dist',
    'normalize',
    'lerp',
    'perp',
    'angle',
    'lli8',
    'lli4',
]
