from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional
import csv
import logging
import os
import random

from atc.conversions import feet_to_metres, nm_to_metres, metres_to_feet, metres_to_nm
from atc.models import SeparationIncident
from atc.planes import PlaneList
from atc.separation import SeparationMonitor
import config

logger = logging.getLogger(__name__)


@dataclass
class WorldParams:
    centre_lat: float = config.CENTRE_LAT
    centre_lon: float = config.CENTRE_LON
    radius_nm: float = config.RADAR_RADIUS_NM
    scale: float = config.MAP_SCALE

    max_planes: int = config.MAX_PLANES
    max_history: int = config.MAX_HISTORY
    history_separation_nm: float = config.HISTORY_SEPARATION_NM
    remove_out_of_bounds: bool = config.REMOVE_OUT_OF_BOUNDS

    min_vertical_sep_ft: float = config.MIN_VERTICAL_SEP_FT
    min_horizontal_sep_nm: float = config.MIN_HORIZONTAL_SEP_NM

    seed: Optional[int] = None


class World:
    """
    Simulation context: owns the aircraft store, the radar bounds, the pause
    gate and the separation monitor. Driven once per frame by ``step``.
    """

    def __init__(self, params: WorldParams | None = None, log_path: str | None = None) -> None:
        self.params = params or WorldParams()
        p = self.params

        self.planes = PlaneList(
            max_planes=p.max_planes,
            max_history=p.max_history,
            history_distance_m=nm_to_metres(p.history_separation_nm),
            remove_out_of_bounds=p.remove_out_of_bounds,
            rng=random.Random(p.seed),
        )
        self.planes.set_bounds(p.centre_lat, p.centre_lon, nm_to_metres(p.radius_nm))

        self.monitor = SeparationMonitor(
            min_vertical_sep_m=feet_to_metres(p.min_vertical_sep_ft),
            min_horizontal_sep_m=nm_to_metres(p.min_horizontal_sep_nm),
        )

        self.time_s: float = 0.0
        self.paused: bool = False
        self.incidents: List[SeparationIncident] = []

        # --- Incident log (optional) ---
        self.log_path = log_path
        self.log_file = None
        self.log_writer = None

        if self.log_path is not None:
            log_dir = os.path.dirname(self.log_path)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

            self.log_file = open(self.log_path, "w", newline="", encoding="utf-8")
            self.log_writer = csv.writer(self.log_file)

            # one row per conflicting pair per timestep
            self.log_writer.writerow([
                "time_s",
                "callsign_1",
                "callsign_2",
                "horizontal_nm",
                "vertical_ft",
            ])

    @property
    def min_horizontal_sep_m(self) -> float:
        return self.monitor.min_horizontal_sep_m

    def step(self, dt: float) -> List[SeparationIncident]:
        if self.paused:
            return self.incidents

        # --- 1) Move every aircraft (may cull) ---
        culled = self.planes.tick_all(dt)
        if culled:
            logger.debug("t=%.1fs culled %d aircraft", self.time_s, culled)

        # --- 2) Separation, after all positions settled ---
        self.incidents = self.monitor.check(self.planes)

        if self.log_writer is not None:
            for inc in _one_per_pair(self.incidents):
                self.log_writer.writerow([
                    f"{self.time_s + dt:.2f}",
                    self.planes.callsigns[inc.plane1],
                    self.planes.callsigns[inc.plane2],
                    f"{metres_to_nm(inc.horizontal_m):.2f}",
                    f"{metres_to_feet(inc.vertical_m):.0f}",
                ])

        self.time_s += dt
        return self.incidents

    def change_centre(self, latitude: float, longitude: float) -> None:
        self.params.centre_lat = latitude
        self.params.centre_lon = longitude
        self.planes.set_bounds(latitude, longitude, nm_to_metres(self.params.radius_nm))

    def load(self, scenario: Callable[["World"], None]) -> None:
        """Drop all traffic and populate from a scenario function."""
        self.planes.clear()
        self.monitor.reset()
        self.incidents = []
        self.time_s = 0.0
        scenario(self)
        logger.info("Loaded scenario %s with %d aircraft",
                    getattr(scenario, "__name__", scenario), self.planes.n_planes)

    def close(self) -> None:
        """Call this when the simulation ends to flush/close the log file."""
        if self.log_file is not None:
            self.log_file.close()
            self.log_file = None
            self.log_writer = None


def _one_per_pair(incidents: List[SeparationIncident]) -> List[SeparationIncident]:
    return [inc for inc in incidents if inc.plane1 < inc.plane2]
