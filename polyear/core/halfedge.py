"""Half-edge (doubly-connected edge list) view of a polygon triangulation.

Consumes triangulation output to expose adjacency: which triangles share a
diagonal, the boundary cycle, the triangles around a face. Like the
boundary list, it is an arena of integer handles held in numpy arrays.

Half-edges ``3f, 3f+1, 3f+2`` are the sides of triangle ``f`` in its vertex
order. Boundary half-edges (twins of polygon sides) follow with face ``-1``.
"""
from __future__ import annotations

from typing import Dict, List, Set, Tuple

import numpy as np

from .errors import InvalidInputError
from .geometry import as_point_array
from .logging_utils import get_logger

logger = get_logger('polyear.halfedge')

__all__ = ['HalfEdgeMesh']

OUTER = -1


class HalfEdgeMesh:
    """Half-edge mesh of a triangulated simple polygon.

    Attributes
    ----------
    points : (N, 2) float64 ndarray
    triangles : (M, 3) int64 ndarray
    origin, twin, next, prev, face : (H,) int64 ndarrays
        Per half-edge records; ``face == -1`` marks the outer face.
    vertex_he : (N,) int64 ndarray
        One outgoing half-edge per vertex (``-1`` for unused vertices).
    """

    def __init__(self, points, triangles):
        self.points = as_point_array(points)
        tris = np.asarray(triangles, dtype=np.int64)
        if tris.ndim != 2 or tris.shape[1] != 3 or tris.shape[0] == 0:
            raise InvalidInputError(f"expected an (M, 3) array of triangles, got shape {tris.shape}")
        n = self.points.shape[0]
        if tris.min() < 0 or tris.max() >= n:
            raise InvalidInputError("triangle refers to a vertex index outside the point array")
        self.triangles = tris
        self._build()

    @classmethod
    def from_triangulation(cls, points, triangles) -> 'HalfEdgeMesh':
        return cls(points, triangles)

    @classmethod
    def from_polygon(cls, polygon, method='naive', **kwargs) -> 'HalfEdgeMesh':
        """Triangulate ``polygon`` and wrap the result."""
        from .triangulation import triangulate_indices
        pts = as_point_array(polygon)
        return cls(pts, triangulate_indices(pts, method, **kwargs))

    def _build(self):
        tris = self.triangles
        m = tris.shape[0]
        origin = tris.reshape(-1).tolist()
        nxt = [3 * (h // 3) + (h % 3 + 1) % 3 for h in range(3 * m)]
        prv = [3 * (h // 3) + (h % 3 + 2) % 3 for h in range(3 * m)]
        face = [h // 3 for h in range(3 * m)]

        directed: Dict[Tuple[int, int], int] = {}
        for h in range(3 * m):
            key = (origin[h], origin[nxt[h]])
            if key[0] == key[1]:
                raise InvalidInputError(f"triangle {h // 3} repeats vertex {key[0]}")
            if key in directed:
                raise InvalidInputError(f"edge {key} is used twice in the same direction (non-manifold)")
            directed[key] = h

        twin = [OUTER] * (3 * m)
        boundary_out: Dict[int, int] = {}
        for (u, v), h in directed.items():
            t = directed.get((v, u))
            if t is not None:
                twin[h] = t
                continue
            # polygon side: add the outer half-edge v -> u
            b = len(origin)
            origin.append(v); face.append(OUTER); twin.append(h)
            nxt.append(OUTER); prv.append(OUTER)
            twin[h] = b
            if v in boundary_out:
                raise InvalidInputError(f"vertex {v} touches the boundary twice (non-manifold)")
            boundary_out[v] = b
        for b in boundary_out.values():
            dest = origin[twin[b]]
            following = boundary_out.get(dest)
            if following is None:
                raise InvalidInputError(f"boundary is not closed at vertex {dest}")
            nxt[b] = following
            prv[following] = b

        self.origin = np.asarray(origin, dtype=np.int64)
        self.twin = np.asarray(twin, dtype=np.int64)
        self.next = np.asarray(nxt, dtype=np.int64)
        self.prev = np.asarray(prv, dtype=np.int64)
        self.face = np.asarray(face, dtype=np.int64)
        vertex_he = np.full(self.points.shape[0], OUTER, dtype=np.int64)
        vertex_he[self.origin[::-1]] = np.arange(len(origin) - 1, -1, -1)
        self.vertex_he = vertex_he
        self._boundary_start = next(iter(boundary_out.values()), OUTER)
        logger.debug("half-edge mesh: %d faces, %d half-edges, %d boundary",
                     m, len(origin), len(boundary_out))

    # ------------------------------------------------------------------
    @property
    def num_faces(self) -> int:
        return int(self.triangles.shape[0])

    @property
    def num_half_edges(self) -> int:
        return int(self.origin.shape[0])

    def dest(self, h: int) -> int:
        return int(self.origin[self.twin[h]])

    def face_half_edges(self, f: int) -> List[int]:
        return [3 * f, 3 * f + 1, 3 * f + 2]

    def vertices_around_face(self, f: int) -> List[int]:
        if not 0 <= f < self.num_faces:
            raise InvalidInputError(f"unknown face {f}")
        start = 3 * f
        out = []
        h = start
        while True:
            out.append(int(self.origin[h]))
            h = int(self.next[h])
            if h == start:
                return out

    def adjacent_faces(self, f: int) -> List[int]:
        """Faces sharing a diagonal with face ``f``."""
        return [int(self.face[self.twin[h]]) for h in self.face_half_edges(f)
                if self.face[self.twin[h]] != OUTER]

    def boundary_cycle(self) -> List[int]:
        """Polygon vertices in input order, walked along the inner side of the boundary."""
        if self._boundary_start == OUTER:
            return []
        out = []
        b = self._boundary_start
        while True:
            out.append(self.dest(b))
            b = int(self.prev[b])
            if b == self._boundary_start:
                break
        return out

    def edges(self) -> Set[Tuple[int, int]]:
        return {(min(u, v), max(u, v)) for u, v in zip(self.origin.tolist(), self.origin[self.twin].tolist())}

    def diagonals(self) -> Set[Tuple[int, int]]:
        """Undirected interior edges: both sides belong to a triangle."""
        out = set()
        for h in range(3 * self.num_faces):
            if self.face[self.twin[h]] != OUTER:
                u = int(self.origin[h]); v = self.dest(h)
                out.add((min(u, v), max(u, v)))
        return out

    def check_integrity(self) -> Tuple[bool, List[str]]:
        """Verify twin/next/prev consistency and Euler's formula for a disk."""
        msgs: List[str] = []
        H = self.num_half_edges
        idx = np.arange(H)
        if np.any(self.twin[self.twin] != idx):
            msgs.append("twin(twin(h)) != h")
        if np.any(self.prev[self.next] != idx):
            msgs.append("prev(next(h)) != h")
        if np.any(self.origin[self.next] != self.origin[self.twin]):
            msgs.append("next(h) does not start where h ends")
        used = int(np.count_nonzero(self.vertex_he != OUTER))
        euler = used - len(self.edges()) + self.num_faces
        if euler != 1:
            msgs.append(f"V - E + F = {euler}, expected 1 for a triangulated disk")
        return (not msgs), msgs
