import pytest

from exastitch.elements import (
    Plane,
    intersect_hex,
    intersect_indexed,
    intersect_pair,
    intersect_pyr,
    intersect_tet,
    intersect_wedge,
    make_plane,
)


def linear_field(p):
    return p[0] + 2.0 * p[1] + 4.0 * p[2]


def with_field(points, field=linear_field):
    return [(x, y, z, field((x, y, z))) for x, y, z in points]


TET = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)]

PYR = [
    (0.0, 0.0, 0.0),
    (1.0, 0.0, 0.0),
    (1.0, 1.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.5, 0.5, 1.0),
]

WEDGE = [
    (0.0, 0.0, 0.0),
    (1.0, 0.0, 0.0),
    (0.5, 0.0, 1.0),
    (0.0, 1.0, 0.0),
    (1.0, 1.0, 0.0),
    (0.5, 1.0, 1.0),
]

HEX = [
    (0.0, 0.0, 0.0),
    (1.0, 0.0, 0.0),
    (1.0, 1.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, 0.0, 1.0),
    (1.0, 0.0, 1.0),
    (1.0, 1.0, 1.0),
    (0.0, 1.0, 1.0),
]


def test_plane_vanishes_at_defining_points():
    a, b, c = (1.0, 2.0, 3.0), (4.0, 0.0, 1.0), (-2.0, 5.0, 2.0)
    plane = make_plane(a, b, c)
    assert [plane.eval(v) for v in (a, b, c)] == [0.0, 0.0, 0.0]


def test_plane_accepts_four_component_vertices():
    plane3 = make_plane((0, 0, 0), (1, 0, 0), (0, 1, 0))
    plane4 = make_plane((0, 0, 0, 9), (1, 0, 0, 9), (0, 1, 0, 9))
    assert plane3 == plane4
    assert plane3.normal == (0.0, 0.0, 1.0)
    assert plane3.eval((5.0, 5.0, 2.0, 7.0)) == 2.0


def test_plane_eval_sign():
    plane = Plane((0.0, 0.0, 1.0), 1.0)
    assert plane.eval((0.0, 0.0, 3.0)) > 0.0
    assert plane.eval((0.0, 0.0, -3.0)) < 0.0


@pytest.mark.parametrize(
    "point", [(0.1, 0.2, 0.3), (0.25, 0.25, 0.25), (0.05, 0.6, 0.1)]
)
def test_tet_reproduces_linear_field(point):
    value = intersect_tet(point, *with_field(TET))
    assert value == pytest.approx(linear_field(point))


def test_tet_vertex_value():
    verts = [(x, y, z, w) for (x, y, z), w in zip(TET, (3.0, 5.0, 7.0, 11.0))]
    assert intersect_tet(TET[2], *verts) == pytest.approx(7.0)


@pytest.mark.parametrize(
    "point", [(-0.5, -0.5, -0.5), (1.0, 1.0, 1.0), (0.5, 0.5, -0.1)]
)
def test_tet_outside(point):
    assert intersect_tet(point, *with_field(TET)) is None


def test_tet_orientation_independent():
    verts = with_field(TET)
    point = (0.2, 0.1, 0.3)
    a, b, c, d = verts
    assert intersect_tet(point, a, c, b, d) == pytest.approx(
        intersect_tet(point, a, b, c, d)
    )


def test_pair_uses_second_tet():
    a, b, c = (0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)
    d0, d1 = (0.0, 0.0, 1.0), (0.0, 0.0, -1.0)
    verts = with_field([a, b, c, d0, d1])
    for point in [(0.1, 0.1, 0.1), (0.1, 0.1, -0.1)]:
        assert intersect_pair(point, *verts) == pytest.approx(linear_field(point))


def test_pair_outside():
    a, b, c = (0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)
    d0, d1 = (0.0, 0.0, 1.0), (0.0, 0.0, -1.0)
    verts = with_field([a, b, c, d0, d1])
    assert intersect_pair((2.0, 2.0, 0.0), *verts) is None


def test_pyr_constant_field():
    verts = [(x, y, z, 7.0) for x, y, z in PYR]
    assert intersect_pyr((0.5, 0.5, 0.1), *verts) == pytest.approx(7.0)


def test_pyr_apex_value():
    values = (1.0, 2.0, 3.0, 4.0, 9.0)
    verts = [(x, y, z, w) for (x, y, z), w in zip(PYR, values)]
    assert intersect_pyr(PYR[4], *verts) == pytest.approx(9.0)


def test_pyr_outside():
    verts = [(x, y, z, 7.0) for x, y, z in PYR]
    assert intersect_pyr((2.0, 0.5, 0.1), *verts) is None


def test_wedge_constant_field():
    verts = [(x, y, z, 3.5) for x, y, z in WEDGE]
    assert intersect_wedge((0.5, 0.5, 0.2), *verts) == pytest.approx(3.5)


def test_wedge_vertex_value():
    values = (10.0, 20.0, 30.0, 40.0, 50.0, 60.0)
    verts = [(x, y, z, w) for (x, y, z), w in zip(WEDGE, values)]
    assert intersect_wedge(WEDGE[0], *verts) == pytest.approx(10.0)


@pytest.mark.parametrize("point", [(0.5, 0.5, -0.1), (0.5, 1.5, 0.2), (0.5, -0.5, 0.2)])
def test_wedge_outside(point):
    verts = [(x, y, z, 1.0) for x, y, z in WEDGE]
    assert intersect_wedge(point, *verts) is None


@pytest.mark.parametrize(
    "point", [(0.25, 0.5, 0.75), (0.5, 0.5, 0.5), (0.9, 0.1, 0.3)]
)
def test_hex_reproduces_linear_field(point):
    assert intersect_hex(point, *with_field(HEX)) == pytest.approx(linear_field(point))


def test_hex_reproduces_trilinear_field():
    def field(p):
        return p[0] * p[1] * p[2] + p[0]

    point = (0.3, 0.6, 0.8)
    assert intersect_hex(point, *with_field(HEX, field)) == pytest.approx(field(point))


def test_hex_vertex_value():
    verts = [(x, y, z, float(i)) for i, (x, y, z) in enumerate(HEX)]
    assert intersect_hex(HEX[6], *verts) == pytest.approx(6.0)


@pytest.mark.parametrize("point", [(1.5, 0.5, 0.5), (0.5, -0.1, 0.5), (0.5, 0.5, 1.1)])
def test_hex_outside(point):
    assert intersect_hex(point, *with_field(HEX)) is None


def test_indexed_matches_direct_calls():
    vertices = with_field(HEX)
    point = (0.4, 0.3, 0.2)
    indices = list(range(8))
    assert intersect_indexed("hex", point, vertices, indices) == pytest.approx(
        intersect_hex(point, *vertices)
    )
    tet_indices = [0, 1, 3, 4]
    tet = [vertices[i] for i in tet_indices]
    assert intersect_indexed("tet", (0.1, 0.1, 0.1), vertices, tet_indices) == pytest.approx(
        intersect_tet((0.1, 0.1, 0.1), *tet)
    )


def test_indexed_shuffled_vertex_list():
    vertices = list(reversed(with_field(HEX)))
    indices = [7 - i for i in range(8)]
    point = (0.6, 0.2, 0.7)
    assert intersect_indexed("hex", point, vertices, indices) == pytest.approx(
        linear_field(point)
    )


def test_indexed_unknown_kind():
    with pytest.raises(ValueError):
        intersect_indexed("octahedron", (0, 0, 0), with_field(HEX), list(range(8)))


def test_indexed_too_few_indices():
    with pytest.raises(ValueError):
        intersect_indexed("wedge", (0, 0, 0), with_field(HEX), [0, 1, 2])


def test_indexed_outside_returns_none():
    vertices = with_field(PYR)
    result = intersect_indexed("pyr", (5.0, 5.0, 5.0), vertices, [0, 1, 2, 3, 4])
    assert result is None