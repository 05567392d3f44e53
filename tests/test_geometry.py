import math

import pytest

from geometry import Polygon, Segment2, break_segments, divide, seg_intersection


def _square(x, y, size=1.0):
    return Polygon([(x, y), (x + size, y), (x + size, y + size), (x, y + size)])


@pytest.mark.parametrize(
    ("a", "b"),
    [((0, 0), (1, 1)), ((-3.5, 2.0), (7.25, -1.0)), ((5, 5), (5, 6))],
)
def test_segment_equality_ignores_order(a, b) -> None:
    assert Segment2(a, b) == Segment2(b, a)
    assert hash(Segment2(a, b)) == hash(Segment2(b, a))
    assert len({Segment2(a, b), Segment2(b, a)}) == 1


def test_segment_inequality() -> None:
    assert Segment2((0, 0), (1, 0)) != Segment2((0, 0), (1, 1e-9))


def test_segment_length_and_direction() -> None:
    s = Segment2((0, 0), (3, 4))
    assert s.length == pytest.approx(5.0)
    assert s.direction == pytest.approx((0.6, 0.8))


def test_degenerate_direction_is_nan() -> None:
    d = Segment2((2, 2), (2, 2)).direction
    assert math.isnan(d[0]) and math.isnan(d[1])


def test_distance_clamps_to_endpoints() -> None:
    s = Segment2((0, 0), (10, 0))
    assert s.distance_to_point((5, 3)) == pytest.approx(3.0)
    assert s.distance_to_point((13, 4)) == pytest.approx(5.0)
    assert s.distance_to_point((-3, -4)) == pytest.approx(5.0)


def test_divide_yields_dashes_with_gaps() -> None:
    dashes = list(divide(Segment2((0, 0), (20, 0)), 5, 5))
    assert dashes == [Segment2((0, 0), (5, 0)), Segment2((10, 0), (15, 0))]


def test_divide_clips_last_dash() -> None:
    dashes = list(divide(Segment2((0, 0), (22, 0)), 5, 5))
    assert len(dashes) == 3
    assert dashes[-1].p2 == pytest.approx((22.0, 0.0))
    assert dashes[-1].length == pytest.approx(2.0)


def test_divide_is_lazy_and_empty_for_degenerate_segment() -> None:
    gen = divide(Segment2((0, 0), (100, 0)), 5, 5)
    assert next(gen) == Segment2((0, 0), (5, 0))
    assert list(divide(Segment2((1, 1), (1, 1)), 5, 5)) == []


def test_seg_intersection_crossing_and_parallel() -> None:
    hit, p, t, u = seg_intersection((0, 0), (2, 2), (0, 2), (2, 0))
    assert hit and p == pytest.approx((1.0, 1.0))
    assert t == pytest.approx(0.5) and u == pytest.approx(0.5)
    assert not seg_intersection((0, 0), (1, 0), (0, 1), (1, 1))[0]
    # collinear overlap is not resolved
    assert not seg_intersection((0, 0), (2, 0), (1, 0), (3, 0))[0]


def test_contains_point_unit_square() -> None:
    sq = _square(0, 0)
    assert sq.contains_point((0.5, 0.5))
    assert not sq.contains_point((2, 2))
    assert not sq.contains_point((-0.5, 0.5))


def test_contains_segment_uses_midpoint() -> None:
    sq = _square(0, 0, 4)
    # both ends outside, midpoint inside
    assert sq.contains_segment(Segment2((-1, 2), (5, 2)))
    assert not sq.contains_segment(Segment2((5, 0), (5, 4)))


def test_polygon_derives_closed_boundary() -> None:
    sq = _square(0, 0)
    assert len(sq.segments) == 4
    assert sq.segments[-1] == Segment2((0, 1), (0, 0))


def test_polygon_distances() -> None:
    a = _square(0, 0)
    b = _square(3, 0)
    assert a.distance_to_point((0.5, 3)) == pytest.approx(2.0)
    assert a.distance_to_polygon(b) == pytest.approx(2.0)
    assert not a.intersects_polygon_segments(b)
    assert a.intersects_polygon_segments(_square(0.5, 0.5))


def test_union_of_disjoint_polygons_keeps_every_segment() -> None:
    a = _square(0, 0)
    b = _square(10, 10)
    result = Polygon.union([a, b])
    assert result == a.segments + b.segments


def test_union_of_identical_rectangles_drops_shared_segments() -> None:
    verts = [(0, 0), (4, 0), (4, 2), (0, 2)]
    result = Polygon.union([Polygon(verts), Polygon(verts)])
    assert len(result) < 8


def test_union_of_overlapping_squares() -> None:
    a = _square(0, 0, 2)
    b = _square(1, 1, 2)
    result = Polygon.union([a, b])
    assert len(result) == 8
    assert sum(s.length for s in result) == pytest.approx(12.0)
    assert Segment2((2, 1), (2, 2)) not in result
    assert Segment2((1, 1), (2, 1)) not in result
    # inputs are left untouched
    assert len(a.segments) == 4 and len(b.segments) == 4


def test_break_splits_only_strict_interior_crossings() -> None:
    s1 = [Segment2((0, 0), (2, 0))]
    s2 = [Segment2((1, -1), (1, 1)), Segment2((2, 0), (2, 1))]
    out1, out2 = break_segments(s1, s2)
    assert out1 == [Segment2((0, 0), (1, 0)), Segment2((1, 0), (2, 0))]
    assert out2 == [Segment2((1, -1), (1, 0)), Segment2((1, 0), (1, 1)), Segment2((2, 0), (2, 1))]
    assert len(s1) == 1 and len(s2) == 2


def test_segment_state_round_trip() -> None:
    s = Segment2((1.5, -2), (3, 4))
    assert s.to_state() == [[1.5, -2.0], [3.0, 4.0]]
    assert Segment2.from_state(s.to_state()) == s
