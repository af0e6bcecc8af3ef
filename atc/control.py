import math
from typing import Optional, Tuple

import config
from .conversions import feet_to_metres, fpm_to_mps, kts_to_mps, g_force_to_vertical_acceleration
from .geodesy import normalize_heading, heading_difference

# Derived limits (SI)
CLIMB_ACCEL_MPS2 = g_force_to_vertical_acceleration(config.MAX_VERTICAL_G, apply_gravity=True)
DESCENT_ACCEL_MPS2 = abs(g_force_to_vertical_acceleration(config.MIN_VERTICAL_G, apply_gravity=True))
HORIZONTAL_ACCEL_MPS2 = config.MAX_HORIZONTAL_G * config.G_MPS2

MAX_CLIMB_MPS = fpm_to_mps(config.MAX_CLIMB_RATE_FPM)
MAX_DESCENT_MPS = fpm_to_mps(config.MAX_DESCENT_RATE_FPM)
MIN_VERTICAL_RATE_MPS = fpm_to_mps(config.MIN_VERTICAL_RATE_FPM)

ALTITUDE_TOLERANCE_M = feet_to_metres(config.ALTITUDE_TOLERANCE_FT)
ALTITUDE_CAPTURE_M = feet_to_metres(config.ALTITUDE_CAPTURE_FT)
ALTITUDE_ARRIVAL_M = 1e-6       # float residue left by a capped step

MIN_ALTITUDE_M = feet_to_metres(config.MIN_ALTITUDE_FT)
MAX_ALTITUDE_M = feet_to_metres(config.MAX_ALTITUDE_FT)
MIN_SPEED_MPS = kts_to_mps(config.MIN_SPEED_KT)
MAX_SPEED_MPS = kts_to_mps(config.MAX_SPEED_KT)


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


# ============================================================
#   ALTITUDE
# ============================================================

def desired_vertical_speed(altitude_error_m: float) -> float:
    """
    Vertical speed (m/s) commanded for a given altitude error.

    The error is clamped to the capture band, mapped onto [-pi/4, pi/4] and
    passed through tan(), giving a shaped term t in [-1, 1]. The command is
    at least 500 fpm in the direction of the target, plus t times the rest of
    the way to the climb or descent ceiling. The shape is empirical.
    """
    e = clamp(altitude_error_m, -ALTITUDE_CAPTURE_M, ALTITUDE_CAPTURE_M)
    t = math.tan(e / ALTITUDE_CAPTURE_M * math.pi / 4)
    ceiling = MAX_CLIMB_MPS if t > 0 else MAX_DESCENT_MPS
    rate = MIN_VERTICAL_RATE_MPS + abs(t) * (ceiling - MIN_VERTICAL_RATE_MPS)
    return math.copysign(rate, t)


def rate_limit_vertical_speed(vs_mps: float, desired_mps: float, dt: float) -> float:
    """Move vertical speed toward ``desired_mps`` within the vertical G limits."""
    if desired_mps > vs_mps:
        return min(desired_mps, vs_mps + CLIMB_ACCEL_MPS2 * dt)
    return max(desired_mps, vs_mps - DESCENT_ACCEL_MPS2 * dt)


def integrate_altitude(altitude_m: float, vs_mps: float, target_m: Optional[float],
                       dt: float) -> float:
    """Altitude after ``dt`` at ``vs_mps``; a step that would cross the target ends on it."""
    new_altitude_m = altitude_m + vs_mps * dt
    if target_m is not None and (target_m - altitude_m) * (target_m - new_altitude_m) < 0:
        return target_m
    return new_altitude_m


def altitude_step(altitude_m: float, vs_mps: float, target_m: Optional[float],
                  dt: float) -> Tuple[float, float]:
    """
    One tick of the altitude law. Returns (altitude_m, vs_mps).

    Vertical speed never carries the aircraft past its target on the next
    integration step. Inside the tolerance band vertical speed is
    rate-limited toward zero and, once it is ~0, the altitude is snapped to
    the target exactly. An aircraft moving away from the target inside the
    band is slowed at the vertical G limit like anywhere else.
    """
    if target_m is None:
        return altitude_m, vs_mps

    error = target_m - altitude_m

    if abs(error) > ALTITUDE_TOLERANCE_M:
        vs_mps = rate_limit_vertical_speed(vs_mps, desired_vertical_speed(error), dt)
        return altitude_m, _cap_at_target(vs_mps, error, dt)

    vs_mps = _cap_at_target(rate_limit_vertical_speed(vs_mps, 0.0, dt), error, dt)

    if abs(vs_mps) < config.VERTICAL_SPEED_EPSILON_MPS:
        return target_m, 0.0
    return altitude_m, vs_mps


def _cap_at_target(vs_mps: float, error_m: float, dt: float) -> float:
    # closing on the target, or already on it: land exactly on it next step
    closing = vs_mps * error_m > 0 or abs(error_m) <= ALTITUDE_ARRIVAL_M
    if dt > 0 and closing and abs(vs_mps) * dt > abs(error_m):
        return error_m / dt
    return vs_mps


# ============================================================
#   SPEED
# ============================================================

def speed_step(speed_mps: float, target_mps: Optional[float], dt: float) -> float:
    if target_mps is None:
        return speed_mps
    diff = target_mps - speed_mps
    step = HORIZONTAL_ACCEL_MPS2 * dt
    if abs(diff) <= step:
        return target_mps
    return speed_mps + math.copysign(step, diff)


# ============================================================
#   HEADING
# ============================================================

def heading_step(heading_deg: float, target_deg: Optional[float], dt: float) -> float:
    """Turn toward the target the short way at the maximum turn rate."""
    if target_deg is None:
        return heading_deg
    diff = heading_difference(heading_deg, target_deg)
    step = config.MAX_TURN_RATE_DEG_S * dt
    if abs(diff) <= step:
        return normalize_heading(target_deg)
    return normalize_heading(heading_deg + math.copysign(step, diff))


def turn_radius(speed_mps: float) -> float:
    """Radius (m) of a turn flown at the maximum turn rate."""
    omega = math.radians(config.MAX_TURN_RATE_DEG_S)
    return speed_mps / omega
