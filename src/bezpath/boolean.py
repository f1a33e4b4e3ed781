## boolean operations on paths for bezpath
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

"""Boolean operations on :class:`~bezpath.path.Path` outlines.

The two paths and their intersections are turned into an augmented
boundary graph: one node per intersection (merged where several land
on the same location), plus a start and end node per component, with an
edge for every stretch of contour between consecutive nodes.  Each
edge is classified by probing just either side of its midpoint against
the operation's containment rule, and the result contours are traced
through the edges that separate "inside" from "outside".

Nodes and edges are held in flat lists and refer to one another by
index, so a graph is discarded simply by dropping it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import bezpath.geom as geom
from bezpath.config import DEFAULT_TOLERANCES, Tolerances
from bezpath.diagnostics import Degeneracy, Diagnostics, report
from bezpath.path import (FillRule, IndexedPathLocation, Path, PathComponent,
                          PathIntersection)

logger = logging.getLogger(__name__)


class BooleanOperation(Enum):
    UNION = 'union'
    INTERSECT = 'intersect'
    SUBTRACT = 'subtract'
    REMOVE_CROSSINGS = 'remove_crossings'

    @classmethod
    def coerce(cls, value) -> "BooleanOperation":
        """Accept an operation or its name, including the
        ``'intersection'`` and ``'difference'`` spellings."""

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            name = _ALIASES.get(value.lower(), value.lower())
            for op in cls:
                if op.value == name:
                    return op
        raise ValueError('unknown boolean operation: {!r}'.format(value))


_ALIASES = {'intersection': 'intersect', 'difference': 'subtract'}


class EdgeSolution(Enum):
    NO = 0
    CLOCKWISE = 1
    COUNTER_CLOCKWISE = 2


@dataclass
class Node:
    location: IndexedPathLocation
    path: Path
    forward_edge: Optional[int] = None
    backward_edge: Optional[int] = None
    neighbors: List[int] = field(default_factory=list)

    @property
    def component(self) -> PathComponent:
        return self.path.components[self.location.component_index]


@dataclass
class Edge:
    start: int
    end: int
    visited: bool = False
    in_solution: EdgeSolution = EdgeSolution.NO

    @property
    def needs_visiting(self) -> bool:
        return not self.visited and self.in_solution is not EdgeSolution.NO


def _interval_end(t: float) -> bool:
    return t == 0.0 or t == 1.0


class AugmentedGraph:
    """Boundary graph of two paths and their intersections."""

    def __init__(self, path1: Path, path2: Path,
                 intersections: List[PathIntersection],
                 operation: BooleanOperation,
                 tolerances: Tolerances = DEFAULT_TOLERANCES,
                 diagnostics: Optional[Diagnostics] = None):
        self.operation = operation
        self.path1 = path1
        self.path2 = path1 if operation is BooleanOperation.REMOVE_CROSSINGS else path2
        self.tolerances = tolerances
        self.diagnostics = diagnostics
        self.nodes: List[Node] = []
        self.edges: List[Edge] = []

        single = operation is BooleanOperation.REMOVE_CROSSINGS
        first: List[int] = []
        second: List[int] = []
        for x in intersections:
            n1 = self._add_node(x.location1, self.path1)
            n2 = self._add_node(x.location2, self.path2)
            self.nodes[n1].neighbors.append(n2)
            self.nodes[n2].neighbors.append(n1)
            first.append(n1)
            (first if single else second).append(n2)

        first = self._sort_and_merge(first)
        self.graph1 = self._path_graph(self.path1, first)
        if single:
            self.graph2 = self.graph1
        else:
            self.graph2 = self._path_graph(self.path2, self._sort_and_merge(second))

        self._classify(self.graph1)
        if not single:
            self._classify(self.graph2)
        logger.debug('%s graph: %d intersections, %d nodes, %d edges',
                     operation.value, len(intersections), len(self.nodes), len(self.edges))

    ## construction
    ## ------------

    def _add_node(self, location: IndexedPathLocation, path: Path) -> int:
        self.nodes.append(Node(location, path))
        return len(self.nodes) - 1

    def _add_edge(self, start: int, end: int) -> int:
        self.edges.append(Edge(start, end))
        e = len(self.edges) - 1
        self.nodes[start].forward_edge = e
        self.nodes[end].backward_edge = e
        return e

    def _merge_neighbors(self, keep: int, drop: int) -> None:
        ## everything that pointed at drop now points at keep
        kept = self.nodes[keep]
        for n in self.nodes[drop].neighbors:
            other = self.nodes[n]
            replaced = []
            for x in other.neighbors:
                x = keep if x == drop else x
                if x != n and x not in replaced:
                    replaced.append(x)
            other.neighbors = replaced
            if n != keep and n not in kept.neighbors:
                kept.neighbors.append(n)
        self.nodes[drop].neighbors = []

    def _unlink(self, n: int) -> None:
        node = self.nodes[n]
        node.neighbors = []
        node.forward_edge = None
        node.backward_edge = None

    def _sort_and_merge(self, ids: List[int]) -> List[int]:
        ids = sorted(ids, key=lambda n: self.nodes[n].location)
        merged: List[int] = []
        for n in ids:
            if merged and self.nodes[merged[-1]].location == self.nodes[n].location:
                self._merge_neighbors(merged[-1], n)
            else:
                merged.append(n)
        return merged

    def _path_graph(self, path: Path, ids: List[int]) -> List[List[int]]:
        by_component: List[List[int]] = [[] for _ in path.components]
        for n in ids:
            by_component[self.nodes[n].location.component_index].append(n)
        return [self._component_graph(path, i, nodes)
                for i, nodes in enumerate(by_component)]

    def _component_graph(self, path: Path, index: int, nodes: List[int]) -> List[int]:
        component = path.components[index]
        start = IndexedPathLocation.of(index, component.starting_indexed_location)
        end = IndexedPathLocation.of(index, component.ending_indexed_location)
        nodes = list(nodes)
        if not nodes or self.nodes[nodes[0]].location != start:
            nodes.insert(0, self._add_node(start, path))
        if self.nodes[nodes[-1]].location != end:
            nodes.append(self._add_node(end, path))
        for a, b in zip(nodes, nodes[1:]):
            self._add_edge(a, b)

        if component.is_closed:
            ## close the loop: the last stretch ends at the first node and
            ## the end node folds into it
            first = nodes[0]
            last = nodes[-1]
            second_to_last = self.edges[self.nodes[last].backward_edge].start
            self._add_edge(second_to_last, first)
            self._merge_neighbors(first, last)
            self._unlink(last)
            nodes.pop()
        return nodes

    ## edge geometry
    ## -------------

    def edge_component(self, e: int) -> PathComponent:
        """The stretch of contour an edge stands for."""

        edge = self.edges[e]
        end = self.nodes[edge.end]
        component = end.component
        next_location = end.location.location_in_component
        if next_location == component.starting_indexed_location:
            next_location = component.ending_indexed_location
        return component.split(self.nodes[edge.start].location.location_in_component,
                               next_location)

    def _probe_points(self, e: int):
        curve = self.edge_component(e).element(0)
        p = curve.compute(0.5)
        n = curve.normal(0.5)
        d = self.tolerances.small_distance
        return geom.add(p, geom.scale(n, d)), geom.sub(p, geom.scale(n, d))

    def _in_result(self, p) -> bool:
        op = self.operation
        if op is BooleanOperation.REMOVE_CROSSINGS:
            return self.path1.contains(p, FillRule.WINDING, self.tolerances)
        contained1 = self.path1.contains(p, FillRule.EVEN_ODD, self.tolerances)
        contained2 = self.path2.contains(p, FillRule.EVEN_ODD, self.tolerances)
        if op is BooleanOperation.UNION:
            return contained1 or contained2
        if op is BooleanOperation.INTERSECT:
            return contained1 and contained2
        return contained1 and not contained2

    def _classify(self, graph: List[List[int]]) -> None:
        included = 0
        for nodes in graph:
            for n in nodes:
                e = self.nodes[n].forward_edge
                if e is None:
                    continue
                p1, p2 = self._probe_points(e)
                inside1 = self._in_result(p1)
                inside2 = self._in_result(p2)
                if inside1 != inside2:
                    ## clockwise edges take the hardest left turn when
                    ## tracing, counter-clockwise ones the hardest right
                    self.edges[e].in_solution = (EdgeSolution.CLOCKWISE if inside1
                                                 else EdgeSolution.COUNTER_CLOCKWISE)
                    included += 1
        logger.debug('%d boundary edges classified into the result', included)

    def _visit_coincident_edges(self, e: int) -> None:
        edge = self.edges[e]
        start = self.nodes[edge.start]
        end = self.nodes[edge.end]
        p1, p2 = self._probe_points(e)

        def coincident(other: Edge) -> bool:
            component = self.nodes[other.start].component
            return (component.contains(p1, FillRule.EVEN_ODD, self.tolerances)
                    != component.contains(p2, FillRule.EVEN_ODD, self.tolerances))

        for n in start.neighbors:
            o = self.nodes[n].forward_edge
            if o is None or self.edges[o].visited:
                continue
            other = self.edges[o]
            if not (_interval_end(start.location.t) or _interval_end(self.nodes[other.start].location.t)):
                continue
            if not (_interval_end(end.location.t) or _interval_end(self.nodes[other.end].location.t)):
                continue
            if edge.end in self.nodes[other.end].neighbors and coincident(other):
                other.visited = True

        for n in start.neighbors:
            o = self.nodes[n].backward_edge
            if o is None or self.edges[o].visited:
                continue
            other = self.edges[o]
            if not (_interval_end(start.location.t) or _interval_end(self.nodes[other.end].location.t)):
                continue
            if not (_interval_end(end.location.t) or _interval_end(self.nodes[other.start].location.t)):
                continue
            if edge.end in self.nodes[other.start].neighbors and coincident(other):
                other.visited = True

    ## tracing
    ## -------

    def _incident_edges(self, n: int) -> List[Tuple[int, bool]]:
        result = []
        for m in [n] + self.nodes[n].neighbors:
            node = self.nodes[m]
            if node.forward_edge is not None:
                result.append((node.forward_edge, True))
            if node.backward_edge is not None:
                result.append((node.backward_edge, False))
        return result

    def _candidates(self, n: int, preferring: EdgeSolution) -> List[Tuple[int, bool]]:
        preferred = preferring
        opposite = (EdgeSolution.COUNTER_CLOCKWISE if preferring is EdgeSolution.CLOCKWISE
                    else EdgeSolution.CLOCKWISE)

        def priority(candidate):
            e, forwards = candidate
            solution = self.edges[e].in_solution
            if forwards and solution is preferred:
                return 3
            elif not forwards and solution is opposite:
                return 2
            elif forwards:
                return 1
            return 0

        ## best candidate last, so the walk pops from the end
        return sorted(self._incident_edges(n), key=priority)

    def find_unvisited_path(self, start: int,
                            preferring: EdgeSolution) -> Optional[List[Tuple[int, bool]]]:
        """Depth-first walk of unvisited result edges from ``start`` back
        to it; ``None`` when every branch dead-ends elsewhere."""

        if preferring is not EdgeSolution.CLOCKWISE:
            preferring = EdgeSolution.COUNTER_CLOCKWISE
        opposite = (EdgeSolution.COUNTER_CLOCKWISE if preferring is EdgeSolution.CLOCKWISE
                    else EdgeSolution.CLOCKWISE)
        goal = start
        stack = [(start, preferring, self._candidates(start, preferring))]
        walked: List[Tuple[int, bool]] = []
        while stack:
            n, frame_preferring, candidates = stack[-1]
            advanced = False
            while candidates:
                e, forwards = candidates.pop()
                edge = self.edges[e]
                if not edge.needs_visiting:
                    continue
                edge.visited = True
                self._visit_coincident_edges(e)
                following = edge.end if forwards else edge.start
                if forwards:
                    next_preferring = frame_preferring
                else:
                    next_preferring = (opposite if frame_preferring is preferring
                                       else preferring)
                walked.append((e, forwards))
                stack.append((following, next_preferring,
                              self._candidates(following, next_preferring)))
                advanced = True
                break
            if advanced:
                continue
            if n == goal or goal in self.nodes[n].neighbors:
                return walked
            stack.pop()
            if walked:
                walked.pop()
        return None

    def create_component(self, walk: List[Tuple[int, bool]]) -> PathComponent:
        points = []
        orders = []
        for e, forwards in walk:
            component = self.edge_component(e)
            if not forwards:
                component = component.reversed()
            if not points:
                points.append(component.starting_point)
            points.extend(component.points[1:])
            orders.extend(component.orders)
        points[-1] = points[0]
        return PathComponent(points, orders)

    def perform(self) -> Path:
        components: List[PathComponent] = []
        graphs = [self.graph1]
        if self.operation is not BooleanOperation.REMOVE_CROSSINGS:
            graphs.append(self.graph2)
        for graph in graphs:
            for nodes in graph:
                for n in nodes:
                    e = self.nodes[n].forward_edge
                    if e is None or not self.edges[e].needs_visiting:
                        continue
                    start = self.edges[e].start
                    walk = self.find_unvisited_path(start, self.edges[e].in_solution)
                    if walk is None:
                        report(logger, self.diagnostics, Degeneracy.DEGENERATE_TRACE,
                               f'no closed walk from node {start}')
                        continue
                    if walk:
                        components.append(self.create_component(walk))
        logger.debug('%s traced %d components', self.operation.value, len(components))
        return Path(components)


def boolean_operation(path1: Path, path2: Optional[Path], operation,
                      threshold: Optional[float] = None,
                      *,
                      tolerances: Tolerances = DEFAULT_TOLERANCES,
                      diagnostics: Optional[Diagnostics] = None) -> Path:
    """Combine two paths; ``operation`` is a :class:`BooleanOperation` or
    its name.  Crossing removal only looks at ``path1``."""

    operation = BooleanOperation.coerce(operation)
    if operation is BooleanOperation.REMOVE_CROSSINGS:
        intersections = path1.self_intersections(threshold, tolerances=tolerances,
                                                 diagnostics=diagnostics)
        graph = AugmentedGraph(path1, path1, intersections, operation,
                               tolerances, diagnostics)
        return graph.perform()

    if path2 is None:
        raise ValueError('{} needs a second path'.format(operation.value))
    if operation is BooleanOperation.UNION:
        if path1.is_empty:
            return path2
        if path2.is_empty:
            return path1
    elif operation is BooleanOperation.SUBTRACT:
        path2 = path2.reversed()
    intersections = path1.intersections(path2, threshold, tolerances=tolerances,
                                        diagnostics=diagnostics)
    graph = AugmentedGraph(path1, path2, intersections, operation,
                           tolerances, diagnostics)
    return graph.perform()


def union(path1: Path, path2: Path, **kwargs) -> Path:
    return boolean_operation(path1, path2, BooleanOperation.UNION, **kwargs)


def intersect(path1: Path, path2: Path, **kwargs) -> Path:
    return boolean_operation(path1, path2, BooleanOperation.INTERSECT, **kwargs)


def subtract(path1: Path, path2: Path, **kwargs) -> Path:
    return boolean_operation(path1, path2, BooleanOperation.SUBTRACT, **kwargs)


def remove_crossings(path: Path, **kwargs) -> Path:
    return boolean_operation(path, None, BooleanOperation.REMOVE_CROSSINGS, **kwargs)


__all__ = [
    'BooleanOperation',
    'EdgeSolution',
    'AugmentedGraph',
    'boolean_operation',
    'union',
    'intersect',
    'subtract',
    'remove_crossings',
]
