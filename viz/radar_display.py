import math

import pygame
from typing import List, Optional, Sequence, Set

from atc import geodesy
from atc.models import ImperialAircraft
from atc.planes import PlaneList
from atc.separation import involved_indices
from .colors import WHITE, GREY, GREEN, DIM_GREEN, RED, YELLOW, BLUE, LIGHT_GREEN
from .map_view import MapView
from .navaids import NavAid, Runway, approach_centreline, label_offset
import config

SYMBOL_RADIUS_PX = 4
VECTOR_LOOKAHEAD_S = 60.0       # speed vector shows one minute of flight
LABEL_OFFSET = (14, 10)
NAVAID_LABEL_OFFSET = (8, 6)
NAVAID_SYMBOL_PX = 6


def draw_range_circle(screen, view: MapView, planes: PlaneList):
    bounds = planes.bounds
    if bounds is None:
        return
    centre = view.lat_lon_to_xy(bounds.latitude, bounds.longitude)
    radius = int(view.metres_to_pixels(bounds.radius_m))
    pygame.draw.circle(screen, DIM_GREEN, centre, radius, 2)

    # range rings every quarter
    for k in range(1, 4):
        pygame.draw.circle(screen, (30, 50, 30), centre, int(radius * k / 4), 1)


def draw_trail(screen, view: MapView, planes: PlaneList, index: int):
    history = planes.history(index)
    if history is None:
        return
    n = len(history)
    for j in range(n):
        pos = history.sample_at(j)
        if pos.is_empty:
            continue
        # older samples shrink
        size = max(1, int(round(3 * (1 - j / max(1, history.max_history)))))
        pygame.draw.circle(screen, DIM_GREEN, view.lat_lon_to_xy(pos.latitude, pos.longitude), size)


def draw_aircraft(screen, view: MapView, planes: PlaneList, index: int,
                  sep_radius_px: int, in_conflict: bool, highlighted: bool):
    ac = planes.by_index(index)
    if ac is None:
        return
    x, y = view.lat_lon_to_xy(ac.latitude, ac.longitude)

    ring_color = RED if in_conflict else GREEN
    pygame.draw.circle(screen, ring_color, (x, y), max(2, sep_radius_px), 1)
    pygame.draw.circle(screen, WHITE if highlighted else GREEN, (x, y), SYMBOL_RADIUS_PX)

    tip = geodesy.destination(ac.latitude, ac.longitude, ac.speed_mps * VECTOR_LOOKAHEAD_S, ac.heading_deg)
    pygame.draw.line(screen, WHITE if highlighted else GREEN, (x, y),
                     view.lat_lon_to_xy(tip.latitude, tip.longitude), 1)

    if highlighted and ac.target_heading_deg is not None and ac.target_heading_deg != ac.heading_deg:
        tgt = geodesy.destination(ac.latitude, ac.longitude, ac.speed_mps * VECTOR_LOOKAHEAD_S,
                                  ac.target_heading_deg)
        pygame.draw.line(screen, YELLOW, (x, y), view.lat_lon_to_xy(tgt.latitude, tgt.longitude), 1)


def label_lines(ac: ImperialAircraft):
    """Data block text: callsign, type, speed, level and heading with targets."""
    speed = f"{ac.speed_kt:.0f}KTS"
    if ac.target_speed_kt is not None and abs(ac.speed_kt - ac.target_speed_kt) > 0.2:
        speed += f"=>{ac.target_speed_kt:.0f}KTS"

    level = f"FL{ac.flight_level:03d}"
    tfl = ac.target_flight_level
    if tfl is not None and tfl != ac.flight_level:
        level += f"=>{tfl:03d} ({ac.vertical_speed_fpm:+.0f}FPM)"

    heading = f"{round(ac.heading_deg) % 360:03d}°"
    if ac.target_heading_deg is not None and round(ac.target_heading_deg) != round(ac.heading_deg):
        heading += f"=>{round(ac.target_heading_deg) % 360:03d}°"

    return [ac.callsign, ac.aircraft_type, speed, level, heading]


def draw_label(screen, font, view: MapView, ac: ImperialAircraft, color):
    x, y = view.lat_lon_to_xy(ac.latitude, ac.longitude)
    line_h = font.get_linesize()
    for k, line in enumerate(label_lines(ac)):
        surf = font.render(line, True, color)
        screen.blit(surf, (x + LABEL_OFFSET[0], y + LABEL_OFFSET[1] + k * line_h))


def draw_navaids(screen, font, view: MapView, navaids: Sequence[NavAid],
                 runways: Sequence[Runway], active_runway: Optional[str] = None):
    """Runways with approach centrelines, then navaid symbols and idents."""
    approach_m = config.APPROACH_LENGTH_NM * config.NM_TO_M
    for runway in runways:
        a, b = runway.ends
        pygame.draw.line(screen, GREY, view.lat_lon_to_xy(a.latitude, a.longitude),
                         view.lat_lon_to_xy(b.latitude, b.longitude), 3)
        for end in runway.ends:
            start, tip = approach_centreline(runway, end.designator, approach_m)
            width = 2 if end.designator == active_runway else 1
            pygame.draw.line(screen, BLUE, view.lat_lon_to_xy(start.latitude, start.longitude),
                             view.lat_lon_to_xy(tip.latitude, tip.longitude), width)

    for navaid in navaids:
        x, y = view.lat_lon_to_xy(navaid.latitude, navaid.longitude)
        if navaid.kind == "VOR-DME":
            color = BLUE
            r = NAVAID_SYMBOL_PX
            pygame.draw.polygon(screen, color, _hexagon(x, y, r), 1)
            pygame.draw.rect(screen, color, (x - r, y - r, 2 * r, 2 * r), 1)
        else:
            color = LIGHT_GREEN
            pygame.draw.circle(screen, color, (x, y), 2)
            pygame.draw.circle(screen, color, (x, y), NAVAID_SYMBOL_PX, 1)

        surf = font.render(navaid.ident, True, color)
        ox, oy = label_offset(navaid.label_direction, *NAVAID_LABEL_OFFSET)
        if ox < 0:
            ox -= surf.get_width()
        if oy < 0:
            oy -= surf.get_height()
        screen.blit(surf, (x + ox, y + oy))


def _hexagon(x: int, y: int, r: int) -> List[tuple]:
    return [(x + r * math.cos(math.radians(60 * k)), y + r * math.sin(math.radians(60 * k)))
            for k in range(6)]


def draw_radar(screen, font, view: MapView, planes: PlaneList, incidents,
               min_horizontal_sep_m: float, show_history: bool = True,
               navaids: Sequence[NavAid] = (), runways: Sequence[Runway] = ()):
    """Radar scope: range circle, navaids, trails, symbols, separation rings and labels."""
    draw_range_circle(screen, view, planes)
    draw_navaids(screen, font, view, navaids, runways, config.ACTIVE_RUNWAY)

    conflict: Set[int] = involved_indices(incidents)
    display: Optional[int] = planes.selected_index
    if display is None:
        display = planes.hovered_index

    # ring radius is half the minimum: touching rings = separation lost
    sep_radius_px = int(view.metres_to_pixels(min_horizontal_sep_m / 2))

    for i in range(planes.n_planes):
        if show_history:
            draw_trail(screen, view, planes, i)
        draw_aircraft(screen, view, planes, i, sep_radius_px, i in conflict, i == display)
        ac = planes.by_index_imperial(i)
        color = RED if i in conflict else (WHITE if i == display else GREY)
        draw_label(screen, font, view, ac, color)
