from __future__ import annotations
from typing import TYPE_CHECKING

from atc import geodesy
from atc.conversions import feet_to_metres, kts_to_mps, nm_to_metres

if TYPE_CHECKING:
    from sim.world import World


def two_random(world: "World") -> None:
    # Two random arrivals; the first is given a descent, turn and slow-down
    planes = world.planes
    first = planes.add_random("BAW123", "B737", "1234")
    planes.add_random("BAW456", "B747", "5678")
    if first is not None:
        planes.set_target_flight_level(first, 60)
        planes.set_target_heading(first, 315)
        planes.set_target_speed(first, kts_to_mps(150))


def head_on_same_level(world: "World") -> None:
    # Head-on at FL70, 8 NM apart, closing at ~500 kt
    p = world.params
    west = geodesy.destination(p.centre_lat, p.centre_lon, nm_to_metres(4), 270)
    east = geodesy.destination(p.centre_lat, p.centre_lon, nm_to_metres(4), 90)
    world.planes.add("EZY101", "A320", "4521", west.latitude, west.longitude,
                     feet_to_metres(7000), kts_to_mps(250), 90)
    world.planes.add("RYR202", "B738", "4522", east.latitude, east.longitude,
                     feet_to_metres(7000), kts_to_mps(250), 270)


def crossing_level_change(world: "World") -> None:
    # Crossing tracks; LOG303 is cleared down through TOM404's level
    p = world.params
    south = geodesy.destination(p.centre_lat, p.centre_lon, nm_to_metres(6), 180)
    west = geodesy.destination(p.centre_lat, p.centre_lon, nm_to_metres(6), 270)
    planes = world.planes
    planes.add("TOM404", "B752", "6610", south.latitude, south.longitude,
               feet_to_metres(6000), kts_to_mps(220), 0)
    low = planes.add("LOG303", "SF34", "6611", west.latitude, west.longitude,
                     feet_to_metres(9000), kts_to_mps(200), 90)
    if low is not None:
        planes.set_target_flight_level(low, 50)


def busy_sector(world: "World") -> None:
    for k in range(12):
        world.planes.add_random(f"SIM{k:03d}", "A320", f"{7000 + k:04d}")


SCENARIOS = {
    "1": two_random,
    "2": head_on_same_level,
    "3": crossing_level_change,
    "4": busy_sector,
}
