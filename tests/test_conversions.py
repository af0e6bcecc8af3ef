import pytest
from hypothesis import given, strategies as st

from atc.conversions import (
    kts_to_mps, mps_to_kts, feet_to_metres, metres_to_feet, fpm_to_mps, mps_to_fpm,
    nm_to_metres, metres_to_nm, g_force_to_vertical_acceleration,
    vertical_acceleration_to_g_force, dms_to_decimal_degrees, decimal_degrees_to_dms,
)


def test_knots():
    assert kts_to_mps(1) == pytest.approx(0.51444, abs=1e-4)
    assert mps_to_kts(1) == pytest.approx(1.94384, abs=1e-4)


def test_feet_and_fpm():
    assert feet_to_metres(1000) == pytest.approx(304.8)
    assert metres_to_feet(304.8) == pytest.approx(1000)
    assert fpm_to_mps(500) == pytest.approx(2.54)
    assert mps_to_fpm(2.54) == pytest.approx(500)


def test_nautical_miles():
    assert nm_to_metres(1) == 1852.0
    assert metres_to_nm(1852.0 * 3) == pytest.approx(3.0)


def test_g_force_gravity_correction():
    assert g_force_to_vertical_acceleration(1.0, apply_gravity=True) == 0.0
    assert g_force_to_vertical_acceleration(1.0) == pytest.approx(9.80665)
    assert g_force_to_vertical_acceleration(0.9, apply_gravity=True) < 0.0
    assert vertical_acceleration_to_g_force(0.0, apply_gravity=True) == 1.0


def test_dms():
    assert dms_to_decimal_degrees(55, 52, 12) == pytest.approx(55.87)
    assert decimal_degrees_to_dms(55.87) == (55, 52, 12)


@given(x=st.floats(-1e5, 1e5))
def test_speed_round_trip(x):
    assert mps_to_kts(kts_to_mps(x)) == pytest.approx(x, rel=1e-9, abs=1e-9)
