from __future__ import annotations
import logging
import random
from typing import Dict, Iterator, List, Optional, Tuple

import config
from . import control, geodesy
from .conversions import feet_to_metres, kts_to_mps, metres_to_feet, mps_to_kts, mps_to_fpm
from .history import PositionHistory
from .models import Aircraft, Bounds, HistorySeparation, ImperialAircraft, SeparationIncident
from .separation import detect_incidents

logger = logging.getLogger(__name__)


class PlaneList:
    """
    Fixed-capacity store of simulated aircraft.

    State is kept as parallel lists indexed 0..n_planes-1 plus a
    callsign -> index table. Removal moves the last aircraft into the freed
    slot, so an index is only stable until the next removal.

    The per-field lists are public for the render and separation code;
    treat them as read-only and go through the setters to change state.
    """

    def __init__(
        self,
        max_planes: int = config.MAX_PLANES,
        max_history: int = config.MAX_HISTORY,
        history_distance_m: float = config.HISTORY_SEPARATION_NM * config.NM_TO_M,
        remove_out_of_bounds: bool = config.REMOVE_OUT_OF_BOUNDS,
        history_separation: HistorySeparation = HistorySeparation.DISTANCE,
        rng: random.Random | None = None,
    ) -> None:
        if max_planes <= 0:
            raise ValueError(f"max_planes must be positive, got {max_planes}")
        if history_separation is not HistorySeparation.DISTANCE:
            raise NotImplementedError(f"history separation {history_separation.name} is not implemented")

        self.max_planes = max_planes
        self.max_history = max_history
        self.history_distance_m = history_distance_m
        self.remove_out_of_bounds = remove_out_of_bounds
        self.history_separation = history_separation
        self.bounds: Optional[Bounds] = None
        self.rng = rng or random.Random()

        self.n_planes = 0
        self.index_lookup: Dict[str, int] = {}

        # -------------------------------
        # Identity
        # -------------------------------
        self.callsigns: List[Optional[str]] = [None] * max_planes
        self.types: List[Optional[str]] = [None] * max_planes
        self.squawks: List[Optional[str]] = [None] * max_planes

        # -------------------------------
        # Kinematics (SI)
        # -------------------------------
        self.latitudes: List[Optional[float]] = [None] * max_planes
        self.longitudes: List[Optional[float]] = [None] * max_planes
        self.altitudes: List[Optional[float]] = [None] * max_planes
        self.headings: List[Optional[float]] = [None] * max_planes
        self.speeds: List[Optional[float]] = [None] * max_planes
        self.vertical_speeds: List[Optional[float]] = [None] * max_planes

        # -------------------------------
        # Targets (None = no target)
        # -------------------------------
        self.target_altitudes: List[Optional[float]] = [None] * max_planes
        self.target_speeds: List[Optional[float]] = [None] * max_planes
        self.target_headings: List[Optional[float]] = [None] * max_planes

        self.histories: List[Optional[PositionHistory]] = [None] * max_planes

        self._selected: Optional[int] = None
        self._hovered: Optional[int] = None

    def _columns(self) -> Tuple[list, ...]:
        return (
            self.callsigns, self.types, self.squawks,
            self.latitudes, self.longitudes, self.altitudes,
            self.headings, self.speeds, self.vertical_speeds,
            self.target_altitudes, self.target_speeds, self.target_headings,
            self.histories,
        )

    def __len__(self) -> int:
        return self.n_planes

    def is_valid_index(self, index: Optional[int]) -> bool:
        return index is not None and 0 <= index < self.n_planes

    def _check_index(self, index: Optional[int], action: str) -> bool:
        if self.is_valid_index(index):
            return True
        logger.warning("Invalid plane index %s (n_planes=%d); cannot %s", index, self.n_planes, action)
        return False

    # ============================================================
    #   CREATE / REMOVE
    # ============================================================

    def add(self, callsign: str, aircraft_type: str, squawk: str,
            latitude: float, longitude: float, altitude_m: float,
            speed_mps: float, heading_deg: float, vertical_speed_mps: float = 0.0) -> Optional[int]:
        """Add an aircraft; returns its index, or None if rejected."""
        if self.n_planes >= self.max_planes:
            logger.warning("Plane list is full (%d); cannot add %s", self.max_planes, callsign)
            return None
        if callsign in self.index_lookup:
            logger.warning("Callsign %s already exists at index %d", callsign, self.index_lookup[callsign])
            return None

        i = self.n_planes
        heading_deg = geodesy.normalize_heading(heading_deg)

        self.callsigns[i] = callsign
        self.types[i] = aircraft_type
        self.squawks[i] = squawk
        self.latitudes[i] = latitude
        self.longitudes[i] = longitude
        self.altitudes[i] = altitude_m
        self.headings[i] = heading_deg
        self.speeds[i] = speed_mps
        self.vertical_speeds[i] = vertical_speed_mps

        # no pending command
        self.target_altitudes[i] = altitude_m
        self.target_speeds[i] = speed_mps
        self.target_headings[i] = heading_deg

        history = PositionHistory(self.max_history)
        history.add_sample(latitude, longitude)
        self.histories[i] = history

        self.index_lookup[callsign] = i
        self.n_planes += 1
        logger.info("Added plane %s at index %d", callsign, i)
        return i

    def add_random(self, callsign: str, aircraft_type: str, squawk: str) -> Optional[int]:
        """Add an aircraft at a random point inside the bounds circle."""
        if self.bounds is None:
            logger.warning("No bounds set; cannot place random plane %s", callsign)
            return None

        rng = self.rng
        spawn = geodesy.destination(
            self.bounds.latitude,
            self.bounds.longitude,
            rng.uniform(0.0, self.bounds.radius_m),
            rng.uniform(0.0, 360.0),
        )
        altitude_m = feet_to_metres(rng.uniform(config.SPAWN_MIN_ALTITUDE_FT, config.SPAWN_MAX_ALTITUDE_FT))
        speed_mps = kts_to_mps(rng.uniform(config.SPAWN_MIN_SPEED_KT, config.SPAWN_MAX_SPEED_KT))
        heading_deg = rng.uniform(0.0, 360.0)

        return self.add(callsign, aircraft_type, squawk,
                        spawn.latitude, spawn.longitude,
                        altitude_m, speed_mps, heading_deg, 0.0)

    def remove(self, index: int) -> bool:
        """
        Swap-remove the aircraft at ``index``: the last aircraft moves into the
        freed slot.

        Selection and hover on the removed aircraft are cleared. If the moved
        aircraft was selected or hovered, that state follows it to ``index``.
        """
        if not self._check_index(index, "remove"):
            return False

        last = self.n_planes - 1
        callsign = self.callsigns[index]
        del self.index_lookup[callsign]

        if self._selected == index:
            self._selected = None
        if self._hovered == index:
            self._hovered = None

        if index != last:
            for column in self._columns():
                column[index] = column[last]
            self.index_lookup[self.callsigns[index]] = index
            # selection follows the moved aircraft
            if self._selected == last:
                self._selected = index
            if self._hovered == last:
                self._hovered = index

        for column in self._columns():
            column[last] = None

        self.n_planes -= 1
        logger.info("Removed plane %s from index %d", callsign, index)
        return True

    def remove_by_callsign(self, callsign: str) -> bool:
        index = self.index_of(callsign)
        if index is None:
            logger.warning("Unknown callsign %s; cannot remove", callsign)
            return False
        return self.remove(index)

    def clear(self) -> None:
        for column in self._columns():
            for i in range(self.n_planes):
                column[i] = None
        self.index_lookup.clear()
        self.n_planes = 0
        self._selected = None
        self._hovered = None

    # ============================================================
    #   LOOKUP
    # ============================================================

    def index_of(self, callsign: str) -> Optional[int]:
        return self.index_lookup.get(callsign)

    def by_index(self, index: int) -> Optional[Aircraft]:
        if not self.is_valid_index(index):
            return None
        return Aircraft(
            index=index,
            callsign=self.callsigns[index],
            aircraft_type=self.types[index],
            squawk=self.squawks[index],
            latitude=self.latitudes[index],
            longitude=self.longitudes[index],
            altitude_m=self.altitudes[index],
            heading_deg=self.headings[index],
            speed_mps=self.speeds[index],
            vertical_speed_mps=self.vertical_speeds[index],
            target_altitude_m=self.target_altitudes[index],
            target_speed_mps=self.target_speeds[index],
            target_heading_deg=self.target_headings[index],
        )

    def by_callsign(self, callsign: str) -> Optional[Aircraft]:
        index = self.index_of(callsign)
        return self.by_index(index) if index is not None else None

    def by_index_imperial(self, index: int) -> Optional[ImperialAircraft]:
        ac = self.by_index(index)
        if ac is None:
            return None

        def opt(fn, value):
            return fn(value) if value is not None else None

        return ImperialAircraft(
            index=ac.index,
            callsign=ac.callsign,
            aircraft_type=ac.aircraft_type,
            squawk=ac.squawk,
            latitude=ac.latitude,
            longitude=ac.longitude,
            altitude_ft=metres_to_feet(ac.altitude_m),
            heading_deg=ac.heading_deg,
            speed_kt=mps_to_kts(ac.speed_mps),
            vertical_speed_fpm=mps_to_fpm(ac.vertical_speed_mps),
            target_altitude_ft=opt(metres_to_feet, ac.target_altitude_m),
            target_speed_kt=opt(mps_to_kts, ac.target_speed_mps),
            target_heading_deg=ac.target_heading_deg,
        )

    def history(self, index: int) -> Optional[PositionHistory]:
        if not self.is_valid_index(index):
            return None
        return self.histories[index]

    def planes(self) -> Iterator[Aircraft]:
        for i in range(self.n_planes):
            yield self.by_index(i)

    def nearest_plane(self, latitude: float, longitude: float) -> Optional[Tuple[int, float]]:
        """(index, distance_m) of the aircraft closest to a point, or None if empty."""
        best: Optional[Tuple[int, float]] = None
        for i in range(self.n_planes):
            d = geodesy.distance(latitude, longitude, self.latitudes[i], self.longitudes[i])
            if best is None or d < best[1]:
                best = (i, d)
        return best

    # ============================================================
    #   SELECTION / HOVER
    # ============================================================

    @property
    def selected_index(self) -> Optional[int]:
        if not self.is_valid_index(self._selected):
            self._selected = None
        return self._selected

    @property
    def hovered_index(self) -> Optional[int]:
        if not self.is_valid_index(self._hovered):
            self._hovered = None
        return self._hovered

    def select_plane(self, index: int) -> bool:
        if not self._check_index(index, "select"):
            return False
        self._selected = index
        return True

    def deselect_plane(self) -> None:
        self._selected = None

    def set_hovered_plane(self, index: Optional[int]) -> bool:
        """Set the hovered aircraft; None or -1 clears it."""
        if index is None or index == -1:
            self._hovered = None
            return True
        if not self._check_index(index, "hover"):
            return False
        self._hovered = index
        return True

    # ============================================================
    #   BOUNDS
    # ============================================================

    def set_bounds(self, latitude: float, longitude: float, radius_m: float) -> None:
        self.bounds = Bounds(latitude, longitude, radius_m)

    def distance_from_centre(self, index: int) -> Optional[float]:
        if self.bounds is None or not self.is_valid_index(index):
            return None
        return geodesy.distance(self.bounds.latitude, self.bounds.longitude,
                                self.latitudes[index], self.longitudes[index])

    def in_bounds(self, index: int) -> bool:
        """True when no bounds are set or the aircraft is inside the circle."""
        d = self.distance_from_centre(index)
        return d is None or d <= self.bounds.radius_m

    # ============================================================
    #   TARGETS
    # ============================================================

    def set_target_altitude(self, index: int, altitude_m: Optional[float]) -> bool:
        if not self._check_index(index, "set target altitude"):
            return False
        if altitude_m is not None:
            altitude_m = control.clamp(altitude_m, control.MIN_ALTITUDE_M, control.MAX_ALTITUDE_M)
        self.target_altitudes[index] = altitude_m
        logger.debug("%s target altitude -> %s m", self.callsigns[index], altitude_m)
        return True

    def set_target_flight_level(self, index: int, flight_level: float) -> bool:
        return self.set_target_altitude(index, feet_to_metres(flight_level * 100.0))

    def set_target_speed(self, index: int, speed_mps: Optional[float]) -> bool:
        if not self._check_index(index, "set target speed"):
            return False
        if speed_mps is not None:
            speed_mps = control.clamp(speed_mps, control.MIN_SPEED_MPS, control.MAX_SPEED_MPS)
        self.target_speeds[index] = speed_mps
        logger.debug("%s target speed -> %s m/s", self.callsigns[index], speed_mps)
        return True

    def set_target_heading(self, index: int, heading_deg: Optional[float]) -> bool:
        if not self._check_index(index, "set target heading"):
            return False
        if heading_deg is not None:
            heading_deg = geodesy.normalize_heading(heading_deg)
        self.target_headings[index] = heading_deg
        logger.debug("%s target heading -> %s deg", self.callsigns[index], heading_deg)
        return True

    def update_plane(
        self,
        callsign: str,
        *,
        aircraft_type: Optional[str] = None,
        squawk: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        altitude_m: Optional[float] = None,
        speed_mps: Optional[float] = None,
        heading_deg: Optional[float] = None,
        vertical_speed_mps: Optional[float] = None,
    ) -> bool:
        """
        Overwrite state fields of one aircraft. A field is applied iff it is
        not None, so zero values (heading 000, level flight) are kept.
        """
        index = self.index_of(callsign)
        if index is None:
            logger.warning("Unknown callsign %s; cannot update", callsign)
            return False

        if aircraft_type is not None:
            self.types[index] = aircraft_type
        if squawk is not None:
            self.squawks[index] = squawk
        if latitude is not None:
            self.latitudes[index] = latitude
        if longitude is not None:
            self.longitudes[index] = longitude
        if altitude_m is not None:
            self.altitudes[index] = altitude_m
        if speed_mps is not None:
            self.speeds[index] = speed_mps
        if heading_deg is not None:
            self.headings[index] = geodesy.normalize_heading(heading_deg)
        if vertical_speed_mps is not None:
            self.vertical_speeds[index] = vertical_speed_mps
        return True

    def turn_radius(self, index: int) -> Optional[float]:
        if not self._check_index(index, "compute turn radius"):
            return None
        return control.turn_radius(self.speeds[index])

    # ============================================================
    #   MOTION
    # ============================================================

    def tick(self, index: int, dt: float) -> bool:
        """
        Advance one aircraft by ``dt`` seconds.

        Returns True if the aircraft left the bounds and was removed; the
        slot then holds a different aircraft.
        """
        if not self._check_index(index, "tick"):
            return False

        # --- 1) Integrate position ---
        alt_old = self.altitudes[index]
        alt_new = control.integrate_altitude(
            alt_old, self.vertical_speeds[index], self.target_altitudes[index], dt
        )
        pos = geodesy.destination(
            self.latitudes[index],
            self.longitudes[index],
            self.speeds[index] * dt,
            self.headings[index],
            (alt_old + alt_new) / 2,
        )
        self.latitudes[index] = pos.latitude
        self.longitudes[index] = pos.longitude
        self.altitudes[index] = alt_new

        # --- 2) Trail ---
        self.histories[index].add_sample_if_farther_than(pos.latitude, pos.longitude, self.history_distance_m)

        # --- 3) Cull ---
        if self.remove_out_of_bounds and not self.in_bounds(index):
            logger.info("%s left the radar area", self.callsigns[index])
            self.remove(index)
            return True

        # --- 4-6) Control laws ---
        self.altitudes[index], self.vertical_speeds[index] = control.altitude_step(
            self.altitudes[index], self.vertical_speeds[index], self.target_altitudes[index], dt
        )
        self.speeds[index] = control.speed_step(self.speeds[index], self.target_speeds[index], dt)
        self.headings[index] = control.heading_step(self.headings[index], self.target_headings[index], dt)
        return False

    def tick_all(self, dt: float) -> int:
        """Tick every aircraft in index order; returns how many were culled."""
        culled = 0
        i = 0
        while i < self.n_planes:
            if self.tick(i, dt):
                # the last aircraft now sits at i
                culled += 1
                continue
            i += 1
        return culled

    # ============================================================
    #   SEPARATION
    # ============================================================

    def detect_incidents(
        self,
        min_vertical_sep_m: float = feet_to_metres(config.MIN_VERTICAL_SEP_FT),
        min_horizontal_sep_m: float = config.MIN_HORIZONTAL_SEP_NM * config.NM_TO_M,
    ) -> List[SeparationIncident]:
        return detect_incidents(self, min_vertical_sep_m, min_horizontal_sep_m)
