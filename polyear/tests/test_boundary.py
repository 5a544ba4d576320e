import numpy as np
import pytest

from polyear.core.boundary import CircularBoundary, ConvexReflexPartition
from polyear.core.errors import InvalidInputError
from polyear.core.geometry import is_convex_angle


def _ring(b, start=None):
    return list(b.vertices_around(start))


def test_build_links_in_input_order(square):
    b = CircularBoundary.build(square)
    assert b.size == 4
    assert b.head == 0
    assert _ring(b) == [0, 1, 2, 3]
    assert b.prev(0) == 3 and b.next(3) == 0
    assert b.point(2) == (4.0, 4.0)
    ok, msgs = b.check_integrity()
    assert ok, msgs


def test_build_rejects_fewer_than_three_points():
    with pytest.raises(InvalidInputError):
        CircularBoundary.build([(0, 0), (1, 0)])


def test_insert_into_empty_self_links():
    b = CircularBoundary([(1.0, 2.0), (3.0, 4.0)])
    assert b.size == 0 and b.head == -1
    b.insert(1)
    assert b.head == 1
    assert b.next(1) == 1 and b.prev(1) == 1
    assert b.size == 1


def test_insert_after_node():
    b = CircularBoundary([(0, 0), (1, 0), (2, 0), (3, 0)])
    b.insert(0)
    b.insert(1)
    b.insert(2, after=0)
    assert _ring(b) == [0, 2, 1]
    b.insert(3)  # default: at the tail, before head
    assert _ring(b) == [0, 2, 1, 3]
    ok, msgs = b.check_integrity()
    assert ok, msgs


def test_insert_rejects_bad_handles(square):
    b = CircularBoundary.build(square)
    with pytest.raises(InvalidInputError):
        b.insert(None)
    with pytest.raises(InvalidInputError):
        b.insert(17)
    with pytest.raises(InvalidInputError):
        b.insert(2)  # already linked


def test_append_point_then_insert(square):
    b = CircularBoundary.build(square)
    h = b.append_point((2.0, -1.0))
    assert h == 4
    assert not b.is_linked(h)
    b.insert(h, after=0)
    assert _ring(b) == [0, 4, 1, 2, 3]
    assert b.point(h) == (2.0, -1.0)
    ok, msgs = b.check_integrity()
    assert ok, msgs


def test_delete_head_advances_to_successor(square):
    b = CircularBoundary.build(square)
    b.delete(0)
    assert b.head == 1
    assert b.size == 3
    assert _ring(b) == [1, 2, 3]
    assert not b.is_linked(0)
    ok, msgs = b.check_integrity()
    assert ok, msgs


def test_delete_middle_keeps_head(square):
    b = CircularBoundary.build(square)
    b.delete(2)
    assert b.head == 0
    assert _ring(b) == [0, 1, 3]
    assert b.next(1) == 3 and b.prev(3) == 1


def test_delete_until_empty(square):
    b = CircularBoundary.build(square)
    for h in [1, 3, 0, 2]:
        b.delete(h)
    assert b.size == 0
    assert b.head == -1
    assert _ring(b) == []
    ok, msgs = b.check_integrity()
    assert ok, msgs


def test_delete_rejects_none_and_unlinked(square):
    b = CircularBoundary.build(square)
    with pytest.raises(InvalidInputError):
        b.delete(None)
    b.delete(1)
    with pytest.raises(InvalidInputError):
        b.delete(1)


def test_deleted_node_can_be_reinserted(square):
    b = CircularBoundary.build(square)
    b.delete(1)
    b.insert(1, after=0)
    assert _ring(b) == [0, 1, 2, 3]


def test_vertices_around_is_restartable_and_lazy(square):
    b = CircularBoundary.build(square)
    walk = b.vertices_around(2)
    assert list(walk) == [2, 3, 0, 1]
    assert list(walk) == [2, 3, 0, 1]
    it = iter(walk)
    assert next(it) == 2
    assert len(walk) == 4


def test_vertices_around_unlinked_start(square):
    b = CircularBoundary.build(square)
    b.delete(3)
    with pytest.raises(InvalidInputError):
        b.vertices_around(3)


def test_ring_invariant_after_many_deletions(rng):
    pts = rng.uniform(size=(40, 2))
    b = CircularBoundary.build(pts)
    order = rng.permutation(40)[:30]
    for h in order:
        b.delete(int(h))
        ok, msgs = b.check_integrity()
        assert ok, msgs
    remaining = sorted(set(range(40)) - {int(h) for h in order})
    assert sorted(_ring(b)) == remaining
    # next/prev are exact inverses
    for h in _ring(b):
        assert b.prev(b.next(h)) == h


def _classify(b, partition):
    for h in b.vertices_around():
        partition.assign(h, is_convex_angle(b.point(b.prev(h)), b.point(h), b.point(b.next(h))))


class TestConvexReflexPartition:

    def test_initial_partition_of_arrow(self, arrow):
        b = CircularBoundary.build(arrow)
        part = ConvexReflexPartition(b)
        _classify(b, part)
        assert list(part.reflex) == [1]
        assert list(part.convex) == [0, 2, 3, 4]
        assert b.is_convex.tolist() == [True, False, True, True, True]
        ok, msgs = part.check()
        assert ok, msgs

    def test_assign_moves_between_sets(self, arrow):
        b = CircularBoundary.build(arrow)
        part = ConvexReflexPartition(b)
        _classify(b, part)
        assert part.assign(1, True) is True
        assert 1 in part.convex and 1 not in part.reflex
        assert part.assign(1, True) is False
        b.is_ear[1] = True
        assert part.assign(1, False) is True
        assert not b.is_ear[1]
        ok, msgs = part.check()
        assert ok, msgs

    def test_remove_updates_boundary_and_index_together(self, arrow):
        b = CircularBoundary.build(arrow)
        part = ConvexReflexPartition(b)
        _classify(b, part)
        part.remove(0)
        assert not b.is_linked(0)
        assert 0 not in part.convex and 0 not in part.reflex
        assert b.size == 4
        ok, msgs = part.check()
        assert ok, msgs

    def test_check_reports_stale_and_missing(self, arrow):
        b = CircularBoundary.build(arrow)
        part = ConvexReflexPartition(b)
        _classify(b, part)
        # bypass the partition: node leaves the ring but stays indexed
        b.delete(3)
        ok, msgs = part.check()
        assert not ok
        assert any("deleted" in m for m in msgs)
        part.convex.pop(3)
        part.convex.pop(4)
        ok, msgs = part.check()
        assert not ok
        assert any("neither" in m for m in msgs)

    def test_reflex_points(self, arrow):
        b = CircularBoundary.build(arrow)
        part = ConvexReflexPartition(b)
        _classify(b, part)
        assert part.reflex_points() == [(2.0, 1.0)]


def test_numpy_input_is_copied_as_float():
    pts = np.array([[0, 0], [4, 0], [4, 4]], dtype=int)
    b = CircularBoundary.build(pts)
    assert b.points.dtype == np.float64
    assert b.point(1) == (4.0, 0.0)
