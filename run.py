import argparse
import logging
import sys

import pygame

import config
from atc.conversions import feet_to_metres, kts_to_mps
from sim.scenarios import SCENARIOS
from sim.world import World, WorldParams
from viz.pygame_app import make_view, render

logger = logging.getLogger("run")

RADAR_FRACTION = 0.75           # window width left of the HUD
WHEEL_LEVEL_FT = 500.0
WHEEL_HEADING_DEG = 5.0
WHEEL_SPEED_KT = 5.0


def nudge_targets(world: World, index, d_alt_ft=0.0, d_hdg_deg=0.0, d_spd_kt=0.0):
    """Shift an aircraft's targets; a missing target starts from the current value."""
    ac = world.planes.by_index(index)
    if ac is None:
        return
    if d_alt_ft:
        base = ac.target_altitude_m if ac.target_altitude_m is not None else ac.altitude_m
        world.planes.set_target_altitude(index, base + feet_to_metres(d_alt_ft))
    if d_hdg_deg:
        base = ac.target_heading_deg if ac.target_heading_deg is not None else ac.heading_deg
        world.planes.set_target_heading(index, base + d_hdg_deg)
    if d_spd_kt:
        base = ac.target_speed_mps if ac.target_speed_mps is not None else ac.speed_mps
        world.planes.set_target_speed(index, base + kts_to_mps(d_spd_kt))


def active_index(world: World):
    index = world.planes.selected_index
    return index if index is not None else world.planes.hovered_index


def main():
    parser = argparse.ArgumentParser(description="2-D radar traffic simulator")
    parser.add_argument(
        "--scenario", "-s",
        help="scenario key (%s)" % "/".join(SCENARIOS),
        default="1",
    )
    parser.add_argument("--radius", type=float, default=config.RADAR_RADIUS_NM,
                        help="radar radius (NM)")
    parser.add_argument("--remove-out-of-bounds", action="store_true",
                        default=config.REMOVE_OUT_OF_BOUNDS,
                        help="remove aircraft that leave the radar circle")
    parser.add_argument("--seed", type=int, default=None, help="random seed for spawns")
    parser.add_argument("--log", default=None, help="CSV file for separation incidents")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    params = WorldParams(
        radius_nm=args.radius,
        remove_out_of_bounds=args.remove_out_of_bounds,
        seed=args.seed,
    )
    world = World(params, log_path=args.log)
    world.load(SCENARIOS.get(args.scenario, SCENARIOS["1"]))

    pygame.init()
    screen = pygame.display.set_mode((config.SCREEN_W, config.SCREEN_H))
    pygame.display.set_caption("Radar Traffic Simulator")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("consolas,menlo,monospace", 14)

    view = make_view(world, int(config.SCREEN_W * RADAR_FRACTION), config.SCREEN_H)
    show_history = True
    spawn_count = 0

    running = True
    while running:
        dt = clock.tick(int(1.0 / config.DT)) / 1000.0
        dt *= config.SPEED_MULTIPLIER

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                running = False

            elif e.type == pygame.MOUSEMOTION:
                # hover the nearest aircraft within half the separation minimum
                lat, lon = view.xy_to_lat_lon(*e.pos)
                nearest = world.planes.nearest_plane(lat, lon)
                if nearest is not None and nearest[1] < world.min_horizontal_sep_m / 2:
                    world.planes.set_hovered_plane(nearest[0])
                else:
                    world.planes.set_hovered_plane(None)

            elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                hovered = world.planes.hovered_index
                if hovered is not None and hovered != world.planes.selected_index:
                    world.planes.select_plane(hovered)
                else:
                    world.planes.deselect_plane()

            elif e.type == pygame.MOUSEWHEEL:
                index = active_index(world)
                if index is None:
                    continue
                step = 1 if e.y > 0 else -1
                mods = pygame.key.get_mods()
                if mods & pygame.KMOD_SHIFT:
                    nudge_targets(world, index, d_hdg_deg=step * WHEEL_HEADING_DEG)
                elif mods & pygame.KMOD_CTRL:
                    nudge_targets(world, index, d_spd_kt=step * WHEEL_SPEED_KT)
                else:
                    nudge_targets(world, index, d_alt_ft=step * WHEEL_LEVEL_FT)

            elif e.type == pygame.KEYDOWN:
                index = active_index(world)

                if e.key == pygame.K_ESCAPE:
                    running = False

                elif e.key == pygame.K_SPACE:
                    world.paused = not world.paused

                elif e.key == pygame.K_h:
                    show_history = not show_history

                elif e.unicode in SCENARIOS:
                    world.load(SCENARIOS[e.unicode])

                elif e.key == pygame.K_TAB:
                    n = world.planes.n_planes
                    if n:
                        current = world.planes.selected_index
                        world.planes.select_plane(0 if current is None else (current + 1) % n)

                elif e.key == pygame.K_n:
                    spawn_count += 1
                    world.planes.add_random(f"NEW{spawn_count:03d}", "A320", f"{4600 + spawn_count:04d}")

                elif e.key == pygame.K_c and index is not None:
                    ac = world.planes.by_index(index)
                    world.change_centre(ac.latitude, ac.longitude)
                    view.set_centre(ac.latitude, ac.longitude)

                elif e.key == pygame.K_DELETE:
                    selected = world.planes.selected_index
                    if selected is not None:
                        world.planes.remove(selected)

                elif index is not None:
                    if e.key == pygame.K_UP:
                        nudge_targets(world, index, d_alt_ft=1000.0)
                    elif e.key == pygame.K_DOWN:
                        nudge_targets(world, index, d_alt_ft=-1000.0)
                    elif e.key == pygame.K_LEFT:
                        nudge_targets(world, index, d_hdg_deg=-5.0)
                    elif e.key == pygame.K_RIGHT:
                        nudge_targets(world, index, d_hdg_deg=5.0)
                    elif e.key == pygame.K_PAGEUP:
                        nudge_targets(world, index, d_spd_kt=10.0)
                    elif e.key == pygame.K_PAGEDOWN:
                        nudge_targets(world, index, d_spd_kt=-10.0)

        # world step (no-op while paused)
        world.step(dt)

        render(screen, font, world, view, show_history=show_history)
        pygame.display.flip()

    world.close()
    summary = world.monitor.summary()
    logger.info("Run ended after %.1fs: %d conflict frames of %d",
                world.time_s, summary.checks_with_incident, summary.checks)

    pygame.quit()
    sys.exit(0)


if __name__ == "__main__":
    main()
