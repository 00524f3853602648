import math

import numpy as np
import pytest

from iontrack.corteo import CorteoRange, LinInterp, LogInterp


def test_documented_two_bit_range():
    r = CorteoRange(2, 0, 2)
    assert len(r) == 9
    assert list(r) == [1, 1.25, 1.5, 1.75, 2, 2.5, 3, 3.5, 4]


def test_documented_four_bit_range_endpoints():
    r = CorteoRange(4, 0, 1)
    vals = list(r)
    assert len(vals) == 17
    assert vals[0] == 1.0
    assert vals[-1] == 2.0


def test_cross_section_index_sizes():
    assert len(CorteoRange(4, -19, 21)) == 641
    assert len(CorteoRange(4, -26, 6)) == 513


def test_negative_exponent_range_start():
    r = CorteoRange(4, -26, 6)
    assert r.value(0) == math.ldexp(1.0, -26)
    assert r.value(r.dim) == 64.0


@pytest.mark.parametrize("nbits,lo,hi", [(2, 0, 2), (4, -19, 21), (3, -5, 3)])
def test_index_value_round_trip(nbits, lo, hi):
    r = CorteoRange(nbits, lo, hi)
    for i in range(len(r)):
        assert r.index(r.value(i)) == i


def test_values_strictly_increasing():
    r = CorteoRange(4, -3, 5)
    vals = list(r)
    assert vals[0] == 0.125
    assert vals[-1] == 32.0
    for lower, upper in zip(vals, vals[1:]):
        assert lower < upper


def test_index_truncates_between_points():
    r = CorteoRange(2, 0, 2)
    for i in range(r.dim):
        mid = 0.5 * (r.value(i) + r.value(i + 1))
        assert r.index(mid) == i


def test_index_clamped_outside_range():
    r = CorteoRange(2, 0, 2)
    assert r.index(0.1) == 0
    assert r.index(-5.0) == 0
    assert r.index(100.0) == r.dim
    assert r.index(4.0) == r.dim


def test_invalid_ranges():
    with pytest.raises(ValueError):
        CorteoRange(4, 3, 3)
    with pytest.raises(ValueError):
        CorteoRange(24, 0, 1)
    with pytest.raises(ValueError):
        CorteoRange(4, -200, 1)


def test_value_out_of_range():
    r = CorteoRange(2, 0, 2)
    with pytest.raises(IndexError):
        r.value(-1)
    with pytest.raises(IndexError):
        r.value(len(r))


def test_index_nan():
    with pytest.raises(ValueError):
        CorteoRange(2, 0, 2).index(float("nan"))


def test_lin_interp_exact_on_linear_function():
    r = CorteoRange(3, -2, 4)
    y = [3.0 * x + 1.0 for x in r]
    f = LinInterp(r, y)
    for x in (0.3, 1.1, 2.7, 9.5, 15.9):
        assert f(x) == pytest.approx(3.0 * x + 1.0, rel=1e-5)


def test_lin_interp_nodes_and_clamping():
    r = CorteoRange(2, 0, 2)
    y = [float(i * i) for i in range(len(r))]
    f = LinInterp(r, y)
    for i, x in enumerate(r):
        if i < r.dim:
            assert f(x) == pytest.approx(y[i])
    assert f(0.5) == y[0]
    assert f(10.0) == y[-1]
    np.testing.assert_allclose(f.data(), y)


def test_log_interp_exact_on_power_law():
    r = CorteoRange(4, -4, 4)
    y = [x**2.5 for x in r]
    f = LogInterp(r, y)
    for x in (0.07, 0.5, 1.3, 7.7, 14.2):
        assert f(x) == pytest.approx(x**2.5, rel=1e-4)


def test_log_interp_clamping():
    r = CorteoRange(2, 0, 2)
    y = [float(i + 1) for i in range(len(r))]
    f = LogInterp(r, y)
    assert f(0.01) == y[0]
    assert f(50.0) == y[-1]


def test_log_interp_rejects_non_positive():
    r = CorteoRange(2, 0, 2)
    with pytest.raises(ValueError):
        LogInterp(r, [0.0] * len(r))


def test_short_data_rejected():
    r = CorteoRange(2, 0, 2)
    with pytest.raises(ValueError):
        LinInterp(r, [1.0] * (len(r) - 1))
    with pytest.raises(ValueError):
        LogInterp(r, [1.0] * 3)


def test_unset_interpolator_raises():
    r = CorteoRange(2, 0, 2)
    with pytest.raises(ValueError):
        LinInterp(r)(1.5)
    with pytest.raises(ValueError):
        LogInterp(r).data()


def test_set_replaces_data():
    r = CorteoRange(2, 0, 2)
    f = LinInterp(r, [1.0] * len(r))
    f.set([2.0] * len(r))
    assert f(1.7) == pytest.approx(2.0)