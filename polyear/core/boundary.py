"""Circular boundary list over an arena of integer vertex handles.

The live polygon boundary is a doubly-linked circular list. Instead of node
objects pointing at each other, every vertex is a row of a numpy arena: handle
``h`` owns ``points[h]`` and its links ``next[h]`` / ``prev[h]`` (``-1`` when
the node is not linked). Handle ``i`` is the ``i``-th input point.

The convex/reflex partition used by the optimized driver is an index over the
same handles. It never owns nodes: removal goes through
``ConvexReflexPartition.remove`` which unlinks the node from the boundary and
drops it from the index in one call.
"""
from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .errors import InvalidInputError
from .geometry import as_point_array

__all__ = ['CircularBoundary', 'BoundaryWalk', 'ConvexReflexPartition']

UNLINKED = -1


class BoundaryWalk:
    """Restartable view of the handles met following ``next`` from ``start``.

    Each iteration walks the ring afresh, so the view can be consumed several
    times; it stops when it returns to ``start``.
    """

    __slots__ = ('_boundary', '_start')

    def __init__(self, boundary: 'CircularBoundary', start: int):
        self._boundary = boundary
        self._start = start

    def __iter__(self) -> Iterator[int]:
        b = self._boundary
        if b.size == 0:
            return
        h = self._start
        for _ in range(b.size):
            yield h
            h = b.next(h)
            if h == self._start:
                return

    def __len__(self) -> int:
        return self._boundary.size


class CircularBoundary:
    """Doubly-linked circular list of polygon vertices stored as index arrays.

    Attributes
    ----------
    points : (N, 2) float64 ndarray
        Arena payload; row ``h`` is the coordinate of handle ``h``.
    is_convex, is_ear : (N,) bool ndarray
        Classification flags, meaningful only while the node is linked.
    head : int
        Handle of the head node, ``-1`` when empty.
    size : int
        Number of linked nodes.
    """

    def __init__(self, points=None):
        pts = np.empty((0, 2), dtype=np.float64) if points is None else np.asarray(points, dtype=np.float64)
        if pts.ndim != 2 or pts.shape[1] != 2:
            raise InvalidInputError(f"expected an (N, 2) array of points, got shape {pts.shape}")
        n = pts.shape[0]
        self.points = np.ascontiguousarray(pts)
        self._next = np.full(n, UNLINKED, dtype=np.int64)
        self._prev = np.full(n, UNLINKED, dtype=np.int64)
        self.is_convex = np.zeros(n, dtype=bool)
        self.is_ear = np.zeros(n, dtype=bool)
        # python-float copy for the predicate hot path
        self._xy: List[Tuple[float, float]] = [tuple(p) for p in self.points.tolist()]
        self.head = UNLINKED
        self.size = 0

    @classmethod
    def build(cls, points) -> 'CircularBoundary':
        """Create one node per point in input order, linked circularly."""
        arr = as_point_array(points)
        boundary = cls(arr)
        for h in range(arr.shape[0]):
            boundary.insert(h)
        return boundary

    # ------------------------------------------------------------------
    # arena access
    # ------------------------------------------------------------------
    @property
    def capacity(self) -> int:
        return self.points.shape[0]

    def point(self, h: int) -> Tuple[float, float]:
        return self._xy[h]

    def next(self, h: int) -> int:
        return int(self._next[h])

    def prev(self, h: int) -> int:
        return int(self._prev[h])

    def is_linked(self, h: int) -> bool:
        return 0 <= h < self.capacity and self._next[h] != UNLINKED

    def points_of(self, handles: Iterable[int]) -> List[Tuple[float, float]]:
        return [self._xy[h] for h in handles]

    def append_point(self, point) -> int:
        """Grow the arena by one unlinked node and return its handle."""
        p = np.asarray(point, dtype=np.float64).reshape(1, 2)
        if not np.all(np.isfinite(p)):
            raise InvalidInputError("point contains non-finite coordinates")
        self.points = np.vstack((self.points, p))
        self._next = np.append(self._next, UNLINKED)
        self._prev = np.append(self._prev, UNLINKED)
        self.is_convex = np.append(self.is_convex, False)
        self.is_ear = np.append(self.is_ear, False)
        self._xy.append((float(p[0, 0]), float(p[0, 1])))
        return self.capacity - 1

    # ------------------------------------------------------------------
    # list operations
    # ------------------------------------------------------------------
    def _check_handle(self, node: Optional[int]) -> int:
        if node is None:
            raise InvalidInputError("input node is None")
        h = int(node)
        if not 0 <= h < self.capacity:
            raise InvalidInputError(f"unknown vertex handle {h}")
        return h

    def insert(self, node: int, after: Optional[int] = None) -> None:
        """Link ``node`` after ``after`` (default: at the tail, just before head)."""
        h = self._check_handle(node)
        if self.is_linked(h):
            raise InvalidInputError(f"vertex {h} is already in the boundary")
        if self.head == UNLINKED:
            self._next[h] = h
            self._prev[h] = h
            self.head = h
            self.size = 1
            return
        if after is None:
            after = self.prev(self.head)
        a = self._check_handle(after)
        if not self.is_linked(a):
            raise InvalidInputError(f"cannot insert after vertex {a}: it is not in the boundary")
        nxt = self.next(a)
        self._next[a] = h
        self._prev[h] = a
        self._next[h] = nxt
        self._prev[nxt] = h
        self.size += 1

    def delete(self, node: int) -> None:
        """Unlink ``node``; head moves to its successor when head is deleted."""
        h = self._check_handle(node)
        if not self.is_linked(h):
            raise InvalidInputError(f"vertex {h} is not in the boundary")
        if self.size == 1:
            self.head = UNLINKED
        else:
            if h == self.head:
                self.head = self.next(h)
            p = self.prev(h); n = self.next(h)
            self._next[p] = n
            self._prev[n] = p
        self._next[h] = UNLINKED
        self._prev[h] = UNLINKED
        self.is_convex[h] = False
        self.is_ear[h] = False
        self.size -= 1

    def vertices_around(self, start: Optional[int] = None) -> BoundaryWalk:
        """Handles from ``start`` (default head) following ``next`` once around."""
        if start is None:
            start = self.head
        elif not self.is_linked(int(start)):
            raise InvalidInputError(f"vertex {start} is not in the boundary")
        return BoundaryWalk(self, int(start))

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[int]:
        return iter(self.vertices_around())

    def check_integrity(self) -> Tuple[bool, List[str]]:
        """Verify ring closure, link symmetry and size; returns (ok, messages)."""
        msgs: List[str] = []
        linked = np.nonzero(self._next != UNLINKED)[0]
        if linked.shape[0] != self.size:
            msgs.append(f"size={self.size} but {linked.shape[0]} nodes are linked")
        if self.size == 0:
            if self.head != UNLINKED:
                msgs.append(f"empty boundary has head {self.head}")
            return (not msgs), msgs
        if not self.is_linked(self.head):
            msgs.append(f"head {self.head} is not linked")
            return False, msgs
        for h in linked.tolist():
            if self._prev[self._next[h]] != h:
                msgs.append(f"prev(next({h})) != {h}")
        h = self.head
        for _ in range(self.size):
            h = self.next(h)
        if h != self.head:
            msgs.append(f"following next {self.size} times from head does not return to head")
        return (not msgs), msgs


class ConvexReflexPartition:
    """Non-owning convex/reflex membership index over boundary handles.

    Every linked node belongs to exactly one of ``convex`` / ``reflex``; both
    are insertion-ordered (dict keys) so scans are deterministic.
    """

    def __init__(self, boundary: CircularBoundary):
        self.boundary = boundary
        self.convex: Dict[int, None] = {}
        self.reflex: Dict[int, None] = {}

    def assign(self, h: int, convex: bool) -> bool:
        """Place ``h`` in the set matching ``convex``; returns True when it moved."""
        target, other = (self.convex, self.reflex) if convex else (self.reflex, self.convex)
        self.boundary.is_convex[h] = convex
        if h in target:
            return False
        moved = h in other
        other.pop(h, None)
        target[h] = None
        if not convex:
            self.boundary.is_ear[h] = False
        return moved

    def remove(self, h: int) -> None:
        """Unlink ``h`` from the boundary and drop it from the index."""
        self.boundary.delete(h)
        self.convex.pop(h, None)
        self.reflex.pop(h, None)

    def reflex_points(self) -> List[Tuple[float, float]]:
        return self.boundary.points_of(self.reflex)

    def check(self) -> Tuple[bool, List[str]]:
        """Verify the partition against the boundary; returns (ok, messages)."""
        b = self.boundary
        msgs: List[str] = []
        both = self.convex.keys() & self.reflex.keys()
        if both:
            msgs.append(f"vertices in both sets: {sorted(both)}")
        members = self.convex.keys() | self.reflex.keys()
        stale = [h for h in members if not b.is_linked(h)]
        if stale:
            msgs.append(f"deleted vertices still indexed: {sorted(stale)}")
        missing = [h for h in b.vertices_around() if h not in members]
        if missing:
            msgs.append(f"vertices in neither set: {sorted(missing)}")
        wrong = [h for h in self.convex if not b.is_convex[h]] + [h for h in self.reflex if b.is_convex[h]]
        if wrong:
            msgs.append(f"is_convex flag disagrees with membership: {sorted(wrong)}")
        return (not msgs), msgs
