"""Fixed scope furniture: navaids, runways and approach centrelines.

Pure geometry only; drawing lives in ``radar_display``.
"""
from dataclasses import dataclass
from typing import List, Tuple

from atc import geodesy
from atc.models import Position
import config


@dataclass(frozen=True)
class NavAid:
    ident: str
    kind: str                   # "VOR-DME" or "IDB"
    latitude: float
    longitude: float
    label_direction: str = "SE"


@dataclass(frozen=True)
class Threshold:
    designator: str
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Runway:
    ends: Tuple[Threshold, Threshold]

    @property
    def name(self) -> str:
        return "/".join(end.designator for end in self.ends)


def load_navaids(table=config.NAVAIDS) -> List[NavAid]:
    return [NavAid(ident, kind, lat, lon, direction) for ident, kind, lat, lon, direction in table]


def load_runways(table=config.RUNWAYS) -> List[Runway]:
    return [
        Runway((Threshold(d_a, lat_a, lon_a), Threshold(d_b, lat_b, lon_b)))
        for d_a, lat_a, lon_a, d_b, lat_b, lon_b in table
    ]


def approach_centreline(runway: Runway, designator: str,
                        length_m: float) -> Tuple[Position, Position]:
    """
    Extended centreline for landing on ``designator``: from that threshold
    outward along the reciprocal of the landing direction.
    """
    if runway.ends[0].designator == designator:
        threshold, far_end = runway.ends
    elif runway.ends[1].designator == designator:
        far_end, threshold = runway.ends
    else:
        raise ValueError(f"runway {runway.name} has no end {designator}")

    outbound = geodesy.bearing(far_end.latitude, far_end.longitude,
                               threshold.latitude, threshold.longitude)
    start = Position(threshold.latitude, threshold.longitude)
    return start, geodesy.destination(threshold.latitude, threshold.longitude, length_m, outbound)


def label_offset(direction: str, dx: int, dy: int) -> Tuple[int, int]:
    """Pixel offset for a label placed toward a compass direction (screen y grows down)."""
    direction = direction.lower() or "se"
    ox = -dx if "w" in direction else dx
    oy = -dy if "n" in direction else dy
    return ox, oy
