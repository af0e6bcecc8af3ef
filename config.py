# Global knobs (simulation, control limits, separation minima, display)
SCREEN_W, SCREEN_H = 1200, 800

DT = 1/30.0                 # frame step cap (s)
SPEED_MULTIPLIER = 1.0

NM_TO_M = 1852.0
FT_TO_M = 0.3048
KT_TO_MPS = NM_TO_M / 3600.0
FPM_TO_MPS = FT_TO_M / 60.0
G_MPS2 = 9.80665

# ---------------------------------------------------------------------
# Radar area (Glasgow GOW VOR by default)
# ---------------------------------------------------------------------
CENTRE_LAT = 55.869772
CENTRE_LON = -4.433617
RADAR_RADIUS_NM = 16.0
MAP_SCALE = 1.1             # map shows 10% more than the radar radius

# Reference navaids drawn on the scope
NAVAIDS = [
    # ident, type, lat, lon, label direction
    ("GOW", "VOR-DME", 55.869772, -4.433617, "SE"),
    ("CVL", "VOR-DME", 56.02460152231144, -4.076019368863338, "SE"),
    ("GLW", "IDB", 55.870507, -4.445715, "NW"),
]

# Runways: one row per strip, thresholds at either end
RUNWAYS = [
    # designator A, lat A, lon A, designator B, lat B, lon B
    ("05", 55.863473, -4.449054, "23", 55.878078, -4.421762),
]
ACTIVE_RUNWAY = "05"
APPROACH_LENGTH_NM = 10.0   # drawn length of the extended centreline

# ---------------------------------------------------------------------
# Entity store
# ---------------------------------------------------------------------
MAX_PLANES = 100
MAX_HISTORY = 10
HISTORY_SEPARATION_NM = 0.5
REMOVE_OUT_OF_BOUNDS = False

# ---------------------------------------------------------------------
# Operational envelopes (targets are clamped into these)
# ---------------------------------------------------------------------
MIN_ALTITUDE_FT = 0.0
MAX_ALTITUDE_FT = 41000.0
MIN_SPEED_KT = 120.0
MAX_SPEED_KT = 350.0

# Randomised spawns
SPAWN_MIN_ALTITUDE_FT = 3000.0
SPAWN_MAX_ALTITUDE_FT = 12000.0
SPAWN_MIN_SPEED_KT = 180.0
SPAWN_MAX_SPEED_KT = 280.0

# ---------------------------------------------------------------------
# Control limits. Vertical G bounds are passenger comfort limits:
# pull-up may be firmer than push-over.
# ---------------------------------------------------------------------
MAX_VERTICAL_G = 1.15       # load factor, 1 g = level flight
MIN_VERTICAL_G = 0.9
MAX_HORIZONTAL_G = 0.05
MAX_TURN_RATE_DEG_S = 3.0   # rate one turn

MAX_CLIMB_RATE_FPM = 2500.0
MAX_DESCENT_RATE_FPM = 3000.0
MIN_VERTICAL_RATE_FPM = 500.0

ALTITUDE_TOLERANCE_FT = 5.0     # inside this the altitude is captured
ALTITUDE_CAPTURE_FT = 100.0     # error beyond this commands the full rate
VERTICAL_SPEED_EPSILON_MPS = 0.01

# ---------------------------------------------------------------------
# Separation minima (radar, terminal area)
# ---------------------------------------------------------------------
MIN_VERTICAL_SEP_FT = 1000.0
MIN_HORIZONTAL_SEP_NM = 3.0

# Colors
BG_COLOR = (12, 12, 18)
