import math
from typing import Tuple

import config

METRES_TO_FEET = 1.0 / config.FT_TO_M
MPS_TO_KT = 1.0 / config.KT_TO_MPS


def kts_to_mps(kts: float) -> float:
    return kts * config.KT_TO_MPS

def mps_to_kts(mps: float) -> float:
    return mps * MPS_TO_KT

def feet_to_metres(feet: float) -> float:
    return feet * config.FT_TO_M

def metres_to_feet(metres: float) -> float:
    return metres * METRES_TO_FEET

def fpm_to_mps(fpm: float) -> float:
    return fpm * config.FPM_TO_MPS

def mps_to_fpm(mps: float) -> float:
    return mps / config.FPM_TO_MPS

def nm_to_metres(nm: float) -> float:
    return nm * config.NM_TO_M

def metres_to_nm(metres: float) -> float:
    return metres / config.NM_TO_M


def g_force_to_vertical_acceleration(g_force: float, apply_gravity: bool = False) -> float:
    """Load factor -> vertical acceleration (m/s^2).

    With ``apply_gravity`` the 1 g needed to hold level flight is removed
    first, so 1.0 maps to 0 m/s^2.
    """
    correction = 1.0 if apply_gravity else 0.0
    return (g_force - correction) * config.G_MPS2

def vertical_acceleration_to_g_force(mps2: float, apply_gravity: bool = False) -> float:
    correction = 1.0 if apply_gravity else 0.0
    return mps2 / config.G_MPS2 + correction


def dms_to_decimal_degrees(degrees: float, minutes: float, seconds: float) -> float:
    return degrees + minutes / 60.0 + seconds / 3600.0

def decimal_degrees_to_dms(decimal_degrees: float) -> Tuple[int, int, int]:
    degrees = math.floor(decimal_degrees)
    minutes = math.floor((decimal_degrees - degrees) * 60)
    seconds = round(((decimal_degrees - degrees) * 60 - minutes) * 60)
    return degrees, minutes, seconds
