"""
LiftAI — Configuration

Program constants for the block generator plus environment-driven settings
for local persistence and the remote backup store.
"""
import os

# ── Local persistence ────────────────────────────────────────────────
STATE_PATH = os.environ.get("LIFTAI_STATE_PATH", "liftai_state.json")
BACKUP_DIR = os.environ.get("LIFTAI_BACKUP_DIR", "backup")
STATE_VERSION = "fully_fixed_v1"

# ── Remote backup (Supabase REST) ────────────────────────────────────
# Empty URL or key = remote backup disabled. Generation never depends on it.
SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_ANON_KEY = os.environ.get("SUPABASE_ANON_KEY", "")
SUPABASE_TABLE = os.environ.get("SUPABASE_TABLE", "training_blocks")
MAX_PAYLOAD_BYTES = 1024 * 1024  # 1MB per backed-up block

# Retry with exponential backoff, capped
RETRY_MAX_ATTEMPTS = 3
RETRY_BASE_DELAY = 1.0  # seconds
RETRY_MAX_DELAY = 5.0
REQUEST_TIMEOUT = 15

# ── Block shape ──────────────────────────────────────────────────────
MIN_BLOCK_LENGTH = 4
MAX_BLOCK_LENGTH = 12
DEFAULT_BLOCK_LENGTH = 8
PHASE_CYCLE_LENGTH = 4  # acc, acc, int, deload

DEFAULT_MAIN_DAYS = [2, 4, 6]
DEFAULT_ACCESSORY_DAYS = [7]
DEFAULT_DURATION = 75  # minutes
DEFAULT_REST_DURATION = 180  # seconds
SHORT_SESSION_DURATION = 60

# ── Lifts ────────────────────────────────────────────────────────────
MAIN_LIFTS = ["snatch", "cj", "fs", "bs"]  # mandatory 1RMs
ALL_LIFTS = ["snatch", "cj", "fs", "bs", "pushPress", "strictPress"]
CUSTOM_MAX_KEYS = [
    "powerSnatch", "powerClean", "ohs",
    "hangPowerSnatch", "hangSnatch", "hangClean",
]
WORKING_MAX_FACTOR = 0.90

# ── Autoregulation bounds ────────────────────────────────────────────
LIFT_BIAS_LIMIT = 0.05       # persistent per-lift adjustment, ±5%
WEIGHT_OFFSET_LIMIT = 0.10   # per-exercise offset override, ±10%
COMPLEX_LOAD_FACTOR = 0.95   # complexes are 5% lighter than singles
COMPLEX_HARDNESS = 0.95
COMPLEX_FATIGUE_CUT = 0.95

# Final per-week bounds
INTENSITY_FLOOR = 0.55
INTENSITY_CEILING = 0.92
INTENSITY_SAFETY_CAP = 0.95
VOLUME_FLOOR = 0.45
VOLUME_CEILING = 1.10

# Warm-up ladder for percentage-based main lifts
WARMUP_LADDER = [0.40, 0.50, 0.60, 0.70]
WARMUP_MARGIN = 0.02

# ── Fatigue detection thresholds ─────────────────────────────────────
FATIGUE_READINESS_MAX = 2      # latest readiness <= 2 → fatigued
FATIGUE_HIGH_RPE = 9           # an RPE >= 9 counts as high
FATIGUE_HIGH_RPE_COUNT = 10
FATIGUE_MISS_COUNT = 5
FATIGUE_SCORE = 0.3
DEFAULT_READINESS = 3

# ── Program types / enums ────────────────────────────────────────────
PROGRAM_TYPES = [
    "general", "strength", "hypertrophy", "powerbuilding",
    "competition", "maximum_strength", "technique",
]
LIMITERS = [
    "pull", "receiving", "squat", "overhead", "positions",
    "timing", "consistency", "balanced",
]
ATHLETE_MODES = ["recreational", "competition"]
INJURY_AREAS = ["shoulder", "wrist", "elbow", "knee", "back", "hip", "ankle"]
OUTCOME_ACTIONS = ["make", "belt", "heavy", "miss", "none"]

# Unit rounding increments (1kg / 1lb)
ROUND_INCREMENT = {"kg": 1, "lb": 1}


def default_profile() -> dict:
    """Fresh default athlete profile (camelCase keys, same as persisted state)."""
    return {
        "name": "Default",
        "units": "kg",
        "blockLength": DEFAULT_BLOCK_LENGTH,
        "programType": "general",
        "transitionWeeks": 1,
        "transitionProfile": "standard",
        "prefPreset": "balanced",
        "athleteMode": "recreational",
        "includeBlocks": True,
        "volumePref": "reduced",
        "duration": DEFAULT_DURATION,
        "restDuration": DEFAULT_REST_DURATION,
        "autoCut": True,
        "age": None,
        "trainingAge": 1,
        "recovery": 3,
        "limiter": "balanced",
        "injuries": [],
        "mainDays": list(DEFAULT_MAIN_DAYS),
        "accessoryDays": list(DEFAULT_ACCESSORY_DAYS),
        "maxes": {
            "snatch": 80, "cj": 100, "fs": 130, "bs": 150,
            "pushPress": 0, "strictPress": 0,
            "powerSnatch": None, "powerClean": None, "ohs": None,
            "hangPowerSnatch": None, "hangSnatch": None, "hangClean": None,
        },
        "workingMaxes": {"snatch": 72, "cj": 90, "fs": 117, "bs": 135, "pushPress": 0, "strictPress": 0},
        "liftAdjustments": {"snatch": 0, "cj": 0, "fs": 0, "bs": 0, "pushPress": 0, "strictPress": 0},
        "readinessLog": [],
        "accessoryWeights": {},
        "lastBlockSeed": 0,
    }
