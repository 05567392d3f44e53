import pytest

from envelope import Envelope
from geometry import Segment2


@pytest.mark.parametrize("roundness", [1, 2, 3, 8, 16])
def test_vertex_count(roundness: int) -> None:
    env = Envelope(Segment2((0, 0), (50, 20)), 10, roundness)
    assert len(env.get_polygon_vertices()) == 2 * (roundness + 1)


def test_single_arc_envelope_is_a_rectangle() -> None:
    env = Envelope(Segment2((0, 0), (10, 0)), 4, 1)
    verts = env.get_polygon_vertices()
    expected = [(0, 2), (0, -2), (10, -2), (10, 2)]
    for v, e in zip(verts, expected):
        assert v == pytest.approx(e, abs=1e-9)


@pytest.mark.parametrize("roundness", [1, 16])
def test_vertices_sit_at_half_width_from_skeleton(roundness: int) -> None:
    skeleton = Segment2((-20, 5), (30, 40))
    env = Envelope(skeleton, 30, roundness)
    for v in env.get_polygon_vertices():
        assert skeleton.distance_to_point(v) == pytest.approx(15.0)


def test_envelope_contains_its_skeleton() -> None:
    skeleton = Segment2((0, 0), (100, 30))
    poly = Envelope(skeleton, 20, 16).get_polygon()
    assert poly.contains_point(skeleton.midpoint())
    assert not poly.contains_point((50, 60))


def test_scale_widens_around_same_skeleton() -> None:
    env = Envelope(Segment2((0, 0), (10, 0)), 30, 16)
    wide = env.scale(1.2)
    assert wide.skeleton == env.skeleton
    assert wide.width == pytest.approx(36.0)
    assert wide.roundness == 16
    assert len(wide.get_polygon_vertices()) == len(env.get_polygon_vertices())


def test_vertices_accessor_returns_a_copy() -> None:
    env = Envelope(Segment2((0, 0), (10, 0)), 4, 1)
    env.get_polygon_vertices().clear()
    assert len(env.get_polygon().vertices) == 4
