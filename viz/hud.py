import pygame

from atc.conversions import metres_to_feet, metres_to_nm
from atc.separation import unique_pairs
from .colors import WHITE, AMBER, RED, GREEN


def draw_hud(screen, font, world, show_history: bool = True):
    """Side HUD panel: clock, controls, selected aircraft and separation status."""
    screen_w, screen_h = screen.get_size()
    panel_w = int(screen_w * 0.25)
    panel_x = screen_w - panel_w
    margin_x, margin_y = 12, 10
    line_spacing = 20

    # translucent panel
    hud_surface = pygame.Surface((panel_w, screen_h), pygame.SRCALPHA)
    hud_surface.fill((0, 0, 0, 180))
    y = margin_y

    planes = world.planes
    header_lines = [
        f"t = {world.time_s:6.1f}s{'   PAUSED' if world.paused else ''}",
        f"Aircraft: {planes.n_planes}/{planes.max_planes}",
        f"Trails: {'ON' if show_history else 'OFF'}",
        "",
        "Controls:",
        "[1-4]    Load scenario",
        "[SPACE]  Pause / Resume",
        "[CLICK]  Select / deselect",
        "[TAB]    Next aircraft",
        "[WHEEL]  Level (+SHIFT hdg, +CTRL spd)",
        "[UP/DN]  Level +/-1000 ft",
        "[LT/RT]  Heading -/+5",
        "[PGUP/DN] Speed +/-10 kt",
        "[N]      Add random aircraft",
        "[DEL]    Remove selected",
        "[C]      Centre on aircraft",
        "[H]      Toggle trails",
        "",
    ]

    for line in header_lines:
        surf = font.render(line, True, WHITE)
        hud_surface.blit(surf, (margin_x, y))
        y += line_spacing

    # selected / hovered aircraft
    index = planes.selected_index
    if index is None:
        index = planes.hovered_index
    ac = planes.by_index_imperial(index) if index is not None else None

    if ac is not None:
        lines = [
            f"{ac.callsign}  {ac.aircraft_type}  sq {ac.squawk}",
            f"ALT {ac.altitude_ft:7.0f} ft  -> {_opt(ac.target_altitude_ft, '{:.0f} ft')}",
            f"VS  {ac.vertical_speed_fpm:+7.0f} fpm",
            f"SPD {ac.speed_kt:7.0f} kt  -> {_opt(ac.target_speed_kt, '{:.0f} kt')}",
            f"HDG {ac.heading_deg:7.1f}     -> {_opt(ac.target_heading_deg, '{:.0f}')}",
            f"Turn radius {metres_to_nm(planes.turn_radius(index)):.2f} NM",
        ]
    else:
        lines = ["No aircraft selected"]

    for line in lines:
        surf = font.render(line, True, AMBER)
        hud_surface.blit(surf, (margin_x, y))
        y += line_spacing
    y += line_spacing

    # separation section
    pairs = unique_pairs(world.incidents)
    status = f"Separation: {len(pairs)} conflict(s)" if pairs else "Separation: OK"
    surf = font.render(status, True, RED if pairs else GREEN)
    hud_surface.blit(surf, (margin_x, y))
    y += line_spacing

    by_pair = {(inc.plane1, inc.plane2): inc for inc in world.incidents}
    for i, j in pairs:
        if y > screen_h - 2 * line_spacing:
            break
        inc = by_pair[(i, j)]
        text = (
            f"{planes.callsigns[i]}/{planes.callsigns[j]} "
            f"{metres_to_nm(inc.horizontal_m):.1f}NM {metres_to_feet(inc.vertical_m):.0f}ft"
        )
        hud_surface.blit(font.render(text, True, RED), (margin_x, y))
        y += line_spacing

    stats = world.monitor.summary()
    if stats.checks:
        closest = "-" if stats.min_horizontal_m == float("inf") else f"{metres_to_nm(stats.min_horizontal_m):.2f} NM"
        text = f"Conflict frames {stats.checks_with_incident}/{stats.checks}  closest {closest}"
        hud_surface.blit(font.render(text, True, WHITE), (margin_x, screen_h - 2 * line_spacing))

    # border line separating radar and HUD
    pygame.draw.line(hud_surface, (120, 120, 120), (0, 0), (0, screen_h), 1)
    screen.blit(hud_surface, (panel_x, 0))


def _opt(value, fmt):
    return "-" if value is None else fmt.format(value)
