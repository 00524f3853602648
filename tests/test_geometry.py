import math

import numpy as np
import pytest

from iontrack.geometry import Grid1D, Grid3D, deflect_vector


def uniform(w=10.0, n=10, periodic=False):
    g = Grid1D()
    g.set_uniform(w, n)
    g.periodic = periodic
    return g


def nonuniform():
    g = Grid1D()
    g.set_points([2.0, 2.5, 4.0, 7.0, 12.0])
    return g


def test_uniform_grid_points():
    g = uniform(10.0, 4)
    assert len(g) == 5
    assert g.points[0] == 0.0
    assert g.points[-1] == 10.0
    assert g.equispaced
    assert g.dx * 4 == pytest.approx(10.0)


def test_set_points_shifts_origin_and_keeps_spacing():
    src = [2.0, 2.5, 4.0, 7.0, 12.0]
    g = nonuniform()
    assert g.points[0] == 0.0
    assert g.points[-1] == g.w
    assert not g.equispaced
    got = [b - a for a, b in zip(g.points, g.points[1:])]
    want = [b - a for a, b in zip(src, src[1:])]
    assert got == pytest.approx(want)


@pytest.mark.parametrize("pts", [[1.0], [0.0, 1.0, 1.0], [0.0, 2.0, 1.0]])
def test_set_points_invalid(pts):
    with pytest.raises(ValueError):
        Grid1D().set_points(pts)


def test_set_uniform_invalid():
    with pytest.raises(ValueError):
        Grid1D().set_uniform(1.0, 0)
    with pytest.raises(ValueError):
        Grid1D().set_uniform(-1.0, 3)


def test_contains():
    g = uniform()
    assert g.contains(0.0)
    assert not g.contains(g.w)
    assert not g.contains(-1e-9)


@pytest.mark.parametrize("grid", [uniform(10.0, 10), uniform(3.0, 7), nonuniform()])
def test_pos2cell_lands_in_cell(grid):
    for x in np.linspace(0.0, grid.w, 201)[:-1]:
        i = grid.pos2cell(float(x))
        assert grid.contains_cell(i, float(x))
    last = math.nextafter(grid.w, -math.inf)
    assert grid.pos2cell(last) == grid.ncells - 1


def test_pos2cell_outside_raises():
    g = uniform()
    with pytest.raises(ValueError):
        g.pos2cell(g.w)
    with pytest.raises(ValueError):
        g.pos2cell(-0.5)


@pytest.mark.parametrize("x", [-25.3, -10.0, 13.7, 40.0, 3.0, -1e-20])
def test_wrap_periodic(x):
    g = uniform(10.0, 5, periodic=True)
    r = g.wrap(x)
    assert 0.0 <= r < g.w
    k = (r - x) / g.w
    assert k == pytest.approx(round(k), abs=1e-9)
    assert g.apply_bc(x) == r


def test_wrap_non_periodic():
    g = uniform(10.0, 5)
    assert g.wrap(-1.0) is None
    assert g.wrap(11.0) is None
    assert g.wrap(4.5) == 4.5
    assert g.apply_bc(11.0) == 11.0


def test_cell_range_centers_within():
    g = uniform(10.0, 10)
    lo, hi = 2.0, 5.0
    i1, i2 = g.cell_range(lo, hi)
    centers = [0.5 * (g[i] + g[i + 1]) for i in range(g.ncells)]
    assert i1 <= i2
    assert all(lo <= centers[i] <= hi for i in range(i1, i2 + 1))
    assert centers[i1 - 1] < lo
    assert centers[i2 + 1] > hi


def test_distance2boundary_1d():
    g = uniform(10.0, 10)
    i, x = 3, 3.4
    d = g.distance2boundary(i, x, 0.5)
    assert x + 0.5 * d == pytest.approx(g[i + 1])
    d = g.distance2boundary(i, x, -0.25)
    assert x - 0.25 * d == pytest.approx(g[i])
    assert g.distance2boundary(i, x, 0.0) == math.inf


def test_boundary_is_outside_cell():
    g = uniform(10.0, 10)
    up = g.boundary(4, 1.0)
    down = g.boundary(4, -1.0)
    assert up > g[5] and not g.contains_cell(4, up)
    assert down < g[4] and not g.contains_cell(4, down)
    assert g.contains_cell(5, up)
    assert g.contains_cell(3, down)


def test_contains_cell_bad_index():
    g = uniform(10.0, 10)
    with pytest.raises(IndexError):
        g.contains_cell(10, 1.0)


def test_distance_periodic_minimum_image():
    g = uniform(10.0, 10, periodic=True)
    assert g.distance(1.0, 9.0) == pytest.approx(2.0)
    assert g.distance(9.0, 1.0) == g.distance(1.0, 9.0)
    for a, b in [(0.1, 9.9), (3.0, 4.0), (0.0, 5.0), (2.0, 8.5)]:
        assert g.distance(a, b) <= g.w / 2 + 1e-12
    h = uniform(10.0, 10)
    assert h.distance(1.0, 9.0) == abs(1.0 - 9.0)


def test_default_grid3d():
    g = Grid3D()
    assert g.ncells() == 8
    assert g.volume() == 1.0
    assert g.box() == ((0.0, 0.0, 0.0), (1.0, 1.0, 1.0))


def make3d(periodic=(False, False, False)):
    g = Grid3D()
    g.set_x(10.0, 5, periodic[0])
    g.set_y(6.0, 3, periodic[1])
    g.set_z(4.0, 2, periodic[2])
    return g


def test_grid3d_sizes():
    g = make3d()
    assert g.ncells() == 5 * 3 * 2
    assert g.volume() == pytest.approx(10.0 * 6.0 * 4.0)
    assert g.box()[1] == (10.0, 6.0, 4.0)


def test_cellid_unique_and_dense():
    g = make3d()
    ids = {
        g.cellid((i, j, k))
        for i in range(g.x.ncells)
        for j in range(g.y.ncells)
        for k in range(g.z.ncells)
    }
    assert ids == set(range(g.ncells()))


def test_pos2cell_and_cell_box():
    g = make3d()
    for p in [(0.0, 0.0, 0.0), (9.99, 5.9, 3.9), (4.2, 2.7, 1.1)]:
        i = g.pos2cell(p)
        assert g.contains_cell(i, p)
        lo, hi = g.cell_box(i)
        assert all(a <= c < b for a, c, b in zip(lo, p, hi))
    with pytest.raises(ValueError):
        g.pos2cell((10.0, 1.0, 1.0))


def test_bring2boundary_crosses_one_face():
    g = make3d()
    pos = (5.0, 3.0, 1.0)
    i = g.pos2cell(pos)
    direction = (0.6, 0.8, 0.0)
    d0, axis = g.distance2boundary(i, pos, direction)
    d, new = g.bring2boundary(i, pos, direction)
    assert d == d0
    assert not g.contains_cell(i, new)
    j = g.pos2cell(new)
    diffs = [b - a for a, b in zip(i, j)]
    assert abs(diffs[axis]) == 1
    assert sum(abs(x) for x in diffs) == 1


def test_distance2boundary_outside_cell_raises():
    g = make3d()
    with pytest.raises(ValueError):
        g.distance2boundary((0, 0, 0), (5.0, 3.0, 1.0), (1.0, 0.0, 0.0))


def test_wrap_3d():
    g = make3d((True, False, True))
    w = g.wrap((-1.0, 2.0, 5.0))
    assert g.contains(w)
    assert g.wrap((1.0, 7.0, 1.0)) is None
    v = g.apply_bc((12.0, 7.0, -1.0))
    assert 0.0 <= v[0] < 10.0 and v[1] == 7.0 and 0.0 <= v[2] < 4.0


def test_null_cells():
    assert Grid3D.is_null(Grid3D.nullcell())
    assert not Grid3D.is_null((0, 0, 0))
    assert Grid3D.is_null((0, -1, 2))


def test_distance_3d():
    g = make3d((True, True, True))
    a, b = (1.0, 1.0, 1.0), (9.0, 5.0, 3.0)
    assert g.distance(a, a) == 0.0
    assert g.distance(a, b) == pytest.approx(g.distance(b, a))
    h = make3d()
    assert g.distance(a, b) <= h.distance(a, b)


def test_deflect_along_z_returns_n():
    n = (0.6, 0.0, 0.8)
    assert deflect_vector((0.0, 0.0, 1.0), n) == n


def test_deflect_no_scattering_keeps_direction():
    m = (0.48, 0.6, 0.64)
    r = deflect_vector(m, (0.0, 0.0, 1.0))
    assert r == pytest.approx(m)


@pytest.mark.parametrize("theta,phi", [(0.3, 0.0), (1.2, 2.0), (2.9, -1.0)])
def test_deflect_preserves_angle_and_norm(theta, phi):
    m = (0.48, 0.6, 0.64)
    n = (math.cos(phi) * math.sin(theta), math.sin(phi) * math.sin(theta), math.cos(theta))
    r = deflect_vector(m, n)
    assert math.hypot(*r) == pytest.approx(1.0)
    assert sum(a * b for a, b in zip(m, r)) == pytest.approx(math.cos(theta))