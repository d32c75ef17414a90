"""
Global configuration for the encounter catalog builder.
All paths, labels, and fallback values live here.
"""

from pathlib import Path

# ── Paths ────────────────────────────────────────────────────────────────────
ROOT_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = ROOT_DIR / "data"
EXPORT_DIR = ROOT_DIR / "exports"

# ── Title data files ─────────────────────────────────────────────────────────
PERSONAL_FILE = "personal.json"
EVOLUTIONS_FILE = "evolutions.json"
LOCATIONS_FILE = "locations.json"

# ── Version availability labels ─────────────────────────────────────────────
BOTH = "Both"
UNKNOWN_VERSION = "Unknown"

# Every paired release: two single-variant labels that widen to "Both".
VERSION_PAIRS = (
    ("Let's Go Pikachu", "Let's Go Eevee"),
    ("Sword", "Shield"),
    ("Brilliant Diamond", "Shining Pearl"),
    ("Scarlet", "Violet"),
)

# ── Levels ───────────────────────────────────────────────────────────────────
MIN_LEVEL = 1
MAX_LEVEL = 100

# ── Locations ────────────────────────────────────────────────────────────────
UNKNOWN_LOCATION_FORMAT = "Unknown Location {location_id}"
TRADE_LOCATION_ID = -1
TRADE_LOCATION_NAME = "In-Game Trade"

# ── Export ───────────────────────────────────────────────────────────────────
EXPORT_FORMATS = ("json", "csv")
DEFAULT_EXPORT_FORMAT = "json"
JSON_INDENT = 2
