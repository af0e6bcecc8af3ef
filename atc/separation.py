from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, List, Set, Tuple
import logging

import config
from . import geodesy
from .conversions import feet_to_metres
from .models import SeparationIncident

if TYPE_CHECKING:
    from .planes import PlaneList

logger = logging.getLogger(__name__)

MIN_VERTICAL_SEP_M = feet_to_metres(config.MIN_VERTICAL_SEP_FT)
MIN_HORIZONTAL_SEP_M = config.MIN_HORIZONTAL_SEP_NM * config.NM_TO_M


def detect_incidents(
    planes: "PlaneList",
    min_vertical_sep_m: float = MIN_VERTICAL_SEP_M,
    min_horizontal_sep_m: float = MIN_HORIZONTAL_SEP_M,
) -> List[SeparationIncident]:
    """
    Every ordered pair (i, j), i != j, that is within the vertical minimum
    (inclusive) and inside the horizontal minimum (exclusive).

    Each conflicting pair is reported twice, once from each aircraft, with
    identical separations. Use ``involved_indices`` or ``unique_pairs`` when
    only the set matters.
    """
    n = planes.n_planes
    lats = planes.latitudes
    lons = planes.longitudes
    alts = planes.altitudes

    incidents: List[SeparationIncident] = []
    for i in range(n):
        for j in range(n):
            if i == j:
                continue
            vert_m = abs(alts[i] - alts[j])
            if vert_m > min_vertical_sep_m:
                continue
            horiz_m = geodesy.distance(lats[i], lons[i], lats[j], lons[j])
            if horiz_m < min_horizontal_sep_m:
                incidents.append(SeparationIncident(i, j, horiz_m, vert_m))
    return incidents


def involved_indices(incidents: Iterable[SeparationIncident]) -> Set[int]:
    """Indices of every aircraft taking part in at least one incident."""
    out: Set[int] = set()
    for inc in incidents:
        out.add(inc.plane1)
        out.add(inc.plane2)
    return out


def unique_pairs(incidents: Iterable[SeparationIncident]) -> List[Tuple[int, int]]:
    return sorted({(min(inc.plane1, inc.plane2), max(inc.plane1, inc.plane2)) for inc in incidents})


@dataclass
class SeparationStats:
    """Aggregated statistics for a simulation run."""
    checks: int = 0
    checks_with_incident: int = 0
    pair_incidents: int = 0
    min_horizontal_m: float = field(default=float("inf"))

    def record(self, incidents: List[SeparationIncident]) -> None:
        self.checks += 1
        if not incidents:
            return
        self.checks_with_incident += 1
        self.pair_incidents += len(unique_pairs(incidents))
        closest = min(inc.horizontal_m for inc in incidents)
        if closest < self.min_horizontal_m:
            self.min_horizontal_m = closest


class SeparationMonitor:
    """
    Runs the separation check and keeps run statistics.

    Only logs when the set of conflicting pairs changes, not every frame.
    """

    def __init__(
        self,
        min_vertical_sep_m: float = MIN_VERTICAL_SEP_M,
        min_horizontal_sep_m: float = MIN_HORIZONTAL_SEP_M,
    ) -> None:
        self.min_vertical_sep_m = min_vertical_sep_m
        self.min_horizontal_sep_m = min_horizontal_sep_m
        self.stats = SeparationStats()
        self._last_pairs: Set[Tuple[str, str]] = set()

    def check(self, planes: "PlaneList") -> List[SeparationIncident]:
        incidents = detect_incidents(planes, self.min_vertical_sep_m, self.min_horizontal_sep_m)
        self.stats.record(incidents)

        # indices shift after removals; compare by callsign
        pairs = {
            tuple(sorted((planes.callsigns[i], planes.callsigns[j])))
            for i, j in unique_pairs(incidents)
        }
        for a, b in sorted(pairs - self._last_pairs):
            logger.warning("Separation lost: %s / %s", a, b)
        for a, b in sorted(self._last_pairs - pairs):
            logger.info("Separation restored: %s / %s", a, b)
        self._last_pairs = pairs
        return incidents

    def reset(self) -> None:
        self.stats = SeparationStats()
        self._last_pairs = set()

    def summary(self) -> SeparationStats:
        return self.stats
