from dataclasses import dataclass
from typing import Optional
from enum import Enum, auto


class HistorySeparation(Enum):
    DISTANCE = auto()
    TIME = auto()       # declared, not implemented


@dataclass(frozen=True)
class Position:
    latitude: Optional[float]
    longitude: Optional[float]

    @property
    def is_empty(self) -> bool:
        return self.latitude is None or self.longitude is None


# Returned for empty history slots
NO_POSITION = Position(None, None)


@dataclass
class Bounds:
    """Circular simulated area. Radius in metres."""
    latitude: float
    longitude: float
    radius_m: float


@dataclass(frozen=True)
class Aircraft:
    """Copy of one aircraft's state at the time it was read (metric units)."""
    # -------------------------------
    # Identity
    # -------------------------------
    index: int
    callsign: str
    aircraft_type: str
    squawk: str

    # -------------------------------
    # Kinematics
    # -------------------------------
    latitude: float                     # deg
    longitude: float                    # deg
    altitude_m: float
    heading_deg: float                  # [0, 360)
    speed_mps: float
    vertical_speed_mps: float

    # -------------------------------
    # Commanded targets (None = no target)
    # -------------------------------
    target_altitude_m: Optional[float] = None
    target_speed_mps: Optional[float] = None
    target_heading_deg: Optional[float] = None


@dataclass(frozen=True)
class ImperialAircraft:
    """Display view of an aircraft: feet, knots and feet per minute."""
    index: int
    callsign: str
    aircraft_type: str
    squawk: str
    latitude: float
    longitude: float
    altitude_ft: float
    heading_deg: float
    speed_kt: float
    vertical_speed_fpm: float
    target_altitude_ft: Optional[float] = None
    target_speed_kt: Optional[float] = None
    target_heading_deg: Optional[float] = None

    @property
    def flight_level(self) -> int:
        return int(round(self.altitude_ft / 100.0))

    @property
    def target_flight_level(self) -> Optional[int]:
        if self.target_altitude_ft is None:
            return None
        return int(round(self.target_altitude_ft / 100.0))


@dataclass(frozen=True)
class SeparationIncident:
    plane1: int
    plane2: int
    horizontal_m: float
    vertical_m: float
