"""Soccer Match Analytics: shared constants.

Single source of truth for pitch geometry, tactical zones, and engine defaults.
"""

# ── Pitch geometry (normalized 0-100 scale) ─────────────────────────────
FIELD_WIDTH = 100.0
FIELD_HEIGHT = 100.0

# Goal centre used by the shot-quality heuristic (attacking left to right)
GOAL_X = 100.0
GOAL_Y = 50.0

# Shot-quality bands along the x axis
BOX_EDGE_X = 90.0
BOX_APPROACH_X = 75.0

# Thirds / lanes boundaries
THIRD_LOW = 33.33
THIRD_HIGH = 66.67

# ── Tactical 3x3 zones ──────────────────────────────────────────────────
TACTICAL_GRID_SIZE = 3

# Row 1 is the right lane, column 1 the defensive third.
ZONE_ROW_LABELS = {1: "Right", 2: "Center", 3: "Left"}
ZONE_COL_LABELS = {1: "Def", 2: "Mid", 3: "Att"}

ZONE_CODES = (
    "R1C1", "R1C2", "R1C3",
    "R2C1", "R2C2", "R2C3",
    "R3C1", "R3C2", "R3C3",
)

ZONE_LABELS = {
    f"R{row}C{col}": f"{ZONE_COL_LABELS[col]} {ZONE_ROW_LABELS[row]}"
    for row in (1, 2, 3)
    for col in (1, 2, 3)
}

# Display order, top to bottom then left to right
ZONE_DISPLAY_ORDER = (
    "R3C1", "R3C2", "R3C3",
    "R2C1", "R2C2", "R2C3",
    "R1C1", "R1C2", "R1C3",
)

# ── Heatmap grid sizes ──────────────────────────────────────────────────
HEATMAP_GRID_FULL = 10
HEATMAP_GRID_PLAYER = 8
HEATMAP_GRID_COMPACT = 6

# ── Timeline ────────────────────────────────────────────────────────────
DEFAULT_TIMELINE_INTERVAL = 5

# ── Radar ───────────────────────────────────────────────────────────────
RADAR_FULL_MARK = 100.0
DEFAULT_RADAR_COEFFICIENTS = {
    "recoveries": 7.0,
    "total_touches": 1.5,
}

# ── Event classification tokens ─────────────────────────────────────────
SHOT_EVENT_TYPE = "Shot"
PASS_CATEGORY = "Pass"
DUEL_CATEGORY = "Duel"
RECOVERY_EVENT_TYPE = "Recovery"
ON_TARGET_TOKEN = "On Target"
PROGRESSIVE_PASS_OUTCOME = "Progressive Pass"

PASS_EVENT_TYPES = ("Pass", "Long Pass")
DEFENSIVE_EVENT_TYPES = ("Recovery", "Clearance", "Defensive Duel")
PRESSURE_EVENT_CATEGORIES = ("Duel", "Recovery")
PRESSURE_EVENT_TYPES = ("Recovery", "Defensive Duel")

BREAKDOWN_CATEGORIES = ("Pass", "Duel", "Recovery", "Shot")

# ── Persistence ─────────────────────────────────────────────────────────
DATA_DIR = "data"
PLAYER_STATS_FILE = "player_stats.csv"
TEAM_STATS_FILE = "team_stats.csv"
EVENTS_FILE = "events_clean.csv"
MATCH_SUMMARY_FILE = "match_summary.json"
