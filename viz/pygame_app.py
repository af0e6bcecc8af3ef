import config
from .hud import draw_hud
from .map_view import MapView
from .navaids import load_navaids, load_runways
from .radar_display import draw_radar

NAVAIDS = load_navaids()
RUNWAYS = load_runways()


def make_view(world, width_px: int, height_px: int) -> MapView:
    p = world.params
    return MapView(p.centre_lat, p.centre_lon, p.radius_nm, p.scale, width_px, height_px)


def render(screen, font, world, view: MapView, show_history: bool = True):
    screen.fill(config.BG_COLOR)
    draw_radar(screen, font, view, world.planes, world.incidents,
               world.min_horizontal_sep_m, show_history=show_history,
               navaids=NAVAIDS, runways=RUNWAYS)
    draw_hud(screen, font, world, show_history=show_history)
