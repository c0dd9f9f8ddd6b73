"""
LiftAI — Exercise Catalog

Static tables the generator draws from: per-family variation pools,
complex structures, accessory/hypertrophy pools and the name → 1RM tables
used for base-weight resolution. Pool ORDER matters: index 0 is the
competition-standard entry and hash-based picks depend on positions.
"""

# ── Olympic-lift variation pools ─────────────────────────────────────
SWAP_POOLS = {
    "snatch": [
        # Basic variations
        {"name": "Snatch", "liftKey": "snatch"},
        {"name": "Power Snatch", "liftKey": "snatch"},
        {"name": "Hang Snatch (knee)", "liftKey": "snatch"},
        {"name": "Hang Power Snatch", "liftKey": "snatch"},
        {"name": "Block Snatch (knee)", "liftKey": "snatch"},
        {"name": "Pause Snatch (2s)", "liftKey": "snatch"},
        {"name": "Snatch from Blocks (mid-thigh)", "liftKey": "snatch"},
        {"name": "Muscle Snatch", "liftKey": "snatch"},
        # Technique & position complexes
        {"name": "Snatch High Pull + Hang Snatch + OHS", "liftKey": "snatch"},
        {"name": "Snatch (pause at knee) + Snatch", "liftKey": "snatch"},
        {"name": "Hang Snatch (above knee) + Snatch", "liftKey": "snatch"},
        {"name": "Snatch + OHS (pause)", "liftKey": "snatch"},
        {"name": "Muscle Snatch + OHS", "liftKey": "snatch"},
        {"name": "Tall Snatch + Snatch", "liftKey": "snatch"},
        {"name": "Low Hang Snatch + Hang Snatch + Snatch", "liftKey": "snatch"},
        {"name": "Hip Snatch + Hang Snatch + Snatch", "liftKey": "snatch"},
        {"name": "Snatch Balance + OHS", "liftKey": "snatch"},
        # Pull-to-catch complexes
        {"name": "Snatch Pull + Snatch", "liftKey": "snatch"},
        {"name": "Snatch Pull + Hang Snatch + Snatch", "liftKey": "snatch"},
        {"name": "Snatch High Pull + Snatch", "liftKey": "snatch"},
        {"name": "Segment Snatch Pull + Snatch", "liftKey": "snatch"},
        {"name": "Halting Snatch Deadlift + Snatch Pull + Snatch", "liftKey": "snatch"},
        # Competition & rehearsal
        {"name": "Snatch + Snatch (1+1)", "liftKey": "snatch"},
        {"name": "Power Snatch + Snatch", "liftKey": "snatch"},
        {"name": "Block Snatch + Snatch", "liftKey": "snatch"},
    ],
    "cj": [
        {"name": "Clean & Jerk", "liftKey": "cj"},
        {"name": "Power Clean + Jerk", "liftKey": "cj"},
        {"name": "Hang Clean (knee) + Jerk", "liftKey": "cj"},
        {"name": "Clean + Push Jerk", "liftKey": "cj"},
        {"name": "Clean + Power Jerk", "liftKey": "cj"},
        {"name": "Block Clean (knee) + Jerk", "liftKey": "cj"},
        {"name": "Power Jerk from Rack", "liftKey": "cj"},
        {"name": "Hang Power Clean + Jerk", "liftKey": "cj"},
        # Clean technique & position complexes
        {"name": "Clean Pull + Hang Clean + Front Squat", "liftKey": "cj"},
        {"name": "Clean (pause at knee) + Clean", "liftKey": "cj"},
        {"name": "Hang Clean (above knee) + Clean", "liftKey": "cj"},
        {"name": "Tall Clean + Clean", "liftKey": "cj"},
        {"name": "Low Hang Clean + Hang Clean + Clean", "liftKey": "cj"},
        {"name": "Hip Clean + Hang Clean + Clean", "liftKey": "cj"},
        # Clean strength-in-lift complexes
        {"name": "Clean + Front Squat", "liftKey": "cj"},
        {"name": "Clean + Front Squat + Clean", "liftKey": "cj"},
        {"name": "Clean + Front Squat (2 reps)", "liftKey": "cj"},
        {"name": "Clean + Front Squat + Jerk", "liftKey": "cj"},
        {"name": "Clean Pull + Clean + Front Squat", "liftKey": "cj"},
        # Jerk complexes
        {"name": "Jerk Dip Squat (pause) + Jerk", "liftKey": "cj"},
        {"name": "Power Jerk + Split Jerk", "liftKey": "cj"},
        {"name": "Pause Jerk + Jerk", "liftKey": "cj"},
        {"name": "Split Jerk + Jerk Balance", "liftKey": "cj"},
        {"name": "Jerk from Blocks + Jerk", "liftKey": "cj"},
        {"name": "Clean + Jerk + Jerk", "liftKey": "cj"},
        # Competition & rehearsal
        {"name": "Clean + Jerk (1+1)", "liftKey": "cj"},
        {"name": "Power Clean + Clean + Jerk", "liftKey": "cj"},
        {"name": "Block Clean + Clean + Jerk", "liftKey": "cj"},
        {"name": "Tempo Clean (3s) + Clean", "liftKey": "cj"},
    ],
    "pull_snatch": [
        {"name": "Snatch Pull", "liftKey": "snatch"},
        {"name": "Snatch High Pull", "liftKey": "snatch"},
        {"name": "Deficit Snatch Pull", "liftKey": "snatch"},
        {"name": "Halting Snatch Pull", "liftKey": "snatch"},
    ],
    "pull_clean": [
        {"name": "Clean Pull", "liftKey": "cj"},
        {"name": "Clean High Pull", "liftKey": "cj"},
        {"name": "Deficit Clean Pull", "liftKey": "cj"},
        {"name": "Halting Clean Pull", "liftKey": "cj"},
    ],
    "bs": [
        {"name": "Back Squat", "liftKey": "bs"},
        {"name": "Pause Back Squat", "liftKey": "bs"},
        {"name": "Tempo Back Squat", "liftKey": "bs"},
    ],
    "fs": [
        {"name": "Front Squat", "liftKey": "fs"},
        {"name": "Pause Front Squat", "liftKey": "fs"},
        {"name": "Tempo Front Squat", "liftKey": "fs"},
    ],
    "press": [
        {"name": "Push Press", "liftKey": "pushPress"},
        {"name": "Strict Press", "liftKey": "strictPress"},
        {"name": "Behind-the-Neck Push Press", "liftKey": "pushPress"},
        {"name": "Jerk Dip + Drive", "liftKey": "cj"},
    ],
    "accessory": [
        {"name": "RDL", "liftKey": "bs", "recommendedPct": 0.60, "description": "~60% of Back Squat"},
        {"name": "Good Morning", "liftKey": "bs", "recommendedPct": 0.50, "description": "~50% of Back Squat"},
        {"name": "Bulgarian Split Squat", "liftKey": "bs", "recommendedPct": 0.55, "description": "~55% of Back Squat"},
        {"name": "Row", "liftKey": "bs", "recommendedPct": 0.30, "description": "~30% of Back Squat"},
        {"name": "Pull-up", "liftKey": "", "recommendedPct": 0, "description": "Bodyweight or add load"},
        {"name": "Plank", "liftKey": "", "recommendedPct": 0, "description": "Bodyweight hold"},
        {"name": "Back Extension", "liftKey": "bs", "recommendedPct": 0.40, "description": "~40% of Back Squat"},
    ],
}

# Last-resort picks when the injury filter empties a family's pool
EMERGENCY_FALLBACKS = {
    "snatch": {"name": "Power Snatch", "liftKey": "snatch"},
    "cj": {"name": "Power Clean + Push Jerk", "liftKey": "cj"},
    "bs": {"name": "Tempo Front Squat", "liftKey": "fs"},
    "fs": {"name": "Tempo Front Squat", "liftKey": "fs"},
    "pull_snatch": {"name": "Tempo Snatch High Pull", "liftKey": "snatch"},
    "pull_clean": {"name": "Tempo Clean High Pull", "liftKey": "cj"},
    "press": {"name": "Push Press", "liftKey": "pushPress"},
}


# ── Complex structures ───────────────────────────────────────────────
def _pattern(*movements) -> list[dict]:
    """('pull', 1), ('snatch', 1) → [{'type': 'pull', 'reps': 1}, ...]"""
    return [{"type": t, "reps": r} for t, r in movements]


COMPLEX_DEFINITIONS = {
    # Snatch: pull + lift (preparatory, pull emphasis)
    "Snatch Pull + Snatch": {"primaryLift": "snatch", "pattern": _pattern(("pull", 1), ("snatch", 1))},
    "Snatch Pull + Hang Snatch + Snatch": {"primaryLift": "snatch", "pattern": _pattern(("pull", 1), ("hang_snatch", 1), ("snatch", 1))},
    "Snatch High Pull + Snatch": {"primaryLift": "snatch", "pattern": _pattern(("high_pull", 1), ("snatch", 1))},
    "Segment Snatch Pull + Snatch": {"primaryLift": "snatch", "pattern": _pattern(("segment_pull", 1), ("snatch", 1))},
    "Halting Snatch Deadlift + Snatch Pull + Snatch": {"primaryLift": "snatch", "pattern": _pattern(("halting_deadlift", 1), ("pull", 1), ("snatch", 1))},
    # Snatch: lift + squat (receiving emphasis)
    "Snatch + OHS (pause)": {"primaryLift": "snatch", "pattern": _pattern(("snatch", 1), ("overhead_squat", 1))},
    "Snatch + Snatch (1+1)": {"primaryLift": "snatch", "pattern": _pattern(("snatch", 1), ("snatch", 1))},
    "Muscle Snatch + OHS": {"primaryLift": "snatch", "pattern": _pattern(("muscle_snatch", 1), ("overhead_squat", 1))},
    "Snatch Balance + OHS": {"primaryLift": "snatch", "pattern": _pattern(("snatch_balance", 1), ("overhead_squat", 1))},
    # Snatch: positions
    "Snatch High Pull + Hang Snatch + OHS": {"primaryLift": "snatch", "pattern": _pattern(("high_pull", 1), ("hang_snatch", 1), ("overhead_squat", 1))},
    "Snatch (pause at knee) + Snatch": {"primaryLift": "snatch", "pattern": _pattern(("pause_snatch", 1), ("snatch", 1))},
    "Hang Snatch (above knee) + Snatch": {"primaryLift": "snatch", "pattern": _pattern(("hang_snatch", 1), ("snatch", 1))},
    "Tall Snatch + Snatch": {"primaryLift": "snatch", "pattern": _pattern(("tall_snatch", 1), ("snatch", 1))},
    "Low Hang Snatch + Hang Snatch + Snatch": {"primaryLift": "snatch", "pattern": _pattern(("low_hang_snatch", 1), ("hang_snatch", 1), ("snatch", 1))},
    "Hip Snatch + Hang Snatch + Snatch": {"primaryLift": "snatch", "pattern": _pattern(("hip_snatch", 1), ("hang_snatch", 1), ("snatch", 1))},
    "Power Snatch + Snatch": {"primaryLift": "snatch", "pattern": _pattern(("power_snatch", 1), ("snatch", 1))},
    "Block Snatch + Snatch": {"primaryLift": "snatch", "pattern": _pattern(("block_snatch", 1), ("snatch", 1))},
    # Clean: pull + clean
    "Clean Pull + Clean": {"primaryLift": "cj", "pattern": _pattern(("pull", 1), ("clean", 1))},
    "Clean Pull + Hang Clean + Front Squat": {"primaryLift": "cj", "pattern": _pattern(("pull", 1), ("hang_clean", 1), ("front_squat", 1))},
    "Clean Pull + Clean + Front Squat": {"primaryLift": "cj", "pattern": _pattern(("pull", 1), ("clean", 1), ("front_squat", 1))},
    # Clean: receiving
    "Clean + Front Squat": {"primaryLift": "cj", "pattern": _pattern(("clean", 1), ("front_squat", 1))},
    "Clean + Front Squat + Clean": {"primaryLift": "cj", "pattern": _pattern(("clean", 1), ("front_squat", 1), ("clean", 1))},
    "Clean + Front Squat (2 reps)": {"primaryLift": "cj", "pattern": _pattern(("clean", 1), ("front_squat", 2))},
    # Clean: positions
    "Clean (pause at knee) + Clean": {"primaryLift": "cj", "pattern": _pattern(("pause_clean", 1), ("clean", 1))},
    "Hang Clean (above knee) + Clean": {"primaryLift": "cj", "pattern": _pattern(("hang_clean", 1), ("clean", 1))},
    "Tall Clean + Clean": {"primaryLift": "cj", "pattern": _pattern(("tall_clean", 1), ("clean", 1))},
    "Low Hang Clean + Hang Clean + Clean": {"primaryLift": "cj", "pattern": _pattern(("low_hang_clean", 1), ("hang_clean", 1), ("clean", 1))},
    "Hip Clean + Hang Clean + Clean": {"primaryLift": "cj", "pattern": _pattern(("hip_clean", 1), ("hang_clean", 1), ("clean", 1))},
    # Jerk
    "Clean + Jerk + Jerk": {"primaryLift": "cj", "pattern": _pattern(("clean", 1), ("jerk", 2))},
    "Jerk Dip Squat (pause) + Jerk": {"primaryLift": "cj", "pattern": _pattern(("jerk_dip", 1), ("jerk", 1))},
    "Power Jerk + Split Jerk": {"primaryLift": "cj", "pattern": _pattern(("power_jerk", 1), ("split_jerk", 1))},
    "Pause Jerk + Jerk": {"primaryLift": "cj", "pattern": _pattern(("pause_jerk", 1), ("jerk", 1))},
    "Split Jerk + Jerk Balance": {"primaryLift": "cj", "pattern": _pattern(("split_jerk", 1), ("jerk_balance", 1))},
    "Jerk from Blocks + Jerk": {"primaryLift": "cj", "pattern": _pattern(("block_jerk", 1), ("jerk", 1))},
    # Full C&J
    "Clean + Front Squat + Jerk": {"primaryLift": "cj", "pattern": _pattern(("clean", 1), ("front_squat", 1), ("jerk", 1))},
    "Clean + Jerk (1+1)": {"primaryLift": "cj", "pattern": _pattern(("clean", 1), ("jerk", 1))},
    "Power Clean + Clean + Jerk": {"primaryLift": "cj", "pattern": _pattern(("power_clean", 1), ("clean", 1), ("jerk", 1))},
    "Block Clean + Clean + Jerk": {"primaryLift": "cj", "pattern": _pattern(("block_clean", 1), ("clean", 1), ("jerk", 1))},
    "Tempo Clean (3s) + Clean": {"primaryLift": "cj", "pattern": _pattern(("tempo_clean", 1), ("clean", 1))},
}

# 3-rep → 2-rep substitutions applied while fatigued
COMPLEX_DOWNGRADES = {
    "Snatch Pull + Hang Snatch + Snatch": "Snatch Pull + Snatch",
    "Snatch High Pull + Hang Snatch + OHS": "Snatch High Pull + Snatch",
    "Low Hang Snatch + Hang Snatch + Snatch": "Hang Snatch + Snatch",
    "Hip Snatch + Hang Snatch + Snatch": "Hang Snatch + Snatch",
    "Halting Snatch Deadlift + Snatch Pull + Snatch": "Snatch Pull + Snatch",
    "Clean Pull + Hang Clean + Front Squat": "Clean Pull + Clean",
    "Clean Pull + Clean + Front Squat": "Clean Pull + Clean",
    "Clean + Front Squat + Clean": "Clean + Front Squat",
    "Low Hang Clean + Hang Clean + Clean": "Hang Clean + Clean",
    "Hip Clean + Hang Clean + Clean": "Hang Clean + Clean",
    "Power Clean + Clean + Jerk": "Clean + Jerk",
    "Block Clean + Clean + Jerk": "Clean + Jerk",
    "Clean + Front Squat + Jerk": "Clean + Jerk",
    "Clean + Jerk + Jerk": "Clean + Jerk",
}

# Diagnostic complex per (day kind, limiter) → {role: complex}
DIAGNOSTIC_COMPLEXES = {
    "snatch": {
        "pull": {"preparatory": "Snatch Pull + Hang Snatch + Snatch", "specific": "Snatch Pull + Snatch"},
        "receiving": {"preparatory": "Snatch + OHS (pause)", "specific": "Snatch + Snatch (1+1)"},
        "squat": {"preparatory": "Snatch + OHS (pause)", "specific": "Snatch + Snatch (1+1)"},
        "overhead": {"preparatory": "Muscle Snatch + OHS", "specific": "Snatch Balance + OHS"},
        "positions": {"preparatory": "Low Hang Snatch + Hang Snatch + Snatch", "specific": "Hang Snatch (above knee) + Snatch"},
        "timing": {"preparatory": "Low Hang Snatch + Hang Snatch + Snatch", "specific": "Hang Snatch (above knee) + Snatch"},
    },
    "cj": {
        "pull": {"preparatory": "Clean Pull + Hang Clean + Front Squat", "specific": "Clean Pull + Clean"},
        "receiving": {"preparatory": "Clean + Front Squat (2 reps)", "specific": "Clean + Front Squat + Clean"},
        "squat": {"preparatory": "Clean + Front Squat (2 reps)", "specific": "Clean + Front Squat + Clean"},
        "overhead": {"preparatory": "Jerk Dip Squat (pause) + Jerk", "specific": "Clean + Jerk + Jerk"},
        "jerk": {"preparatory": "Jerk Dip Squat (pause) + Jerk", "specific": "Clean + Jerk + Jerk"},
        "positions": {"preparatory": "Low Hang Clean + Hang Clean + Clean", "specific": "Hang Clean (above knee) + Clean"},
        "timing": {"preparatory": "Low Hang Clean + Hang Clean + Clean", "specific": "Hang Clean (above knee) + Clean"},
        "consistency": {"preparatory": "Clean + Front Squat + Jerk", "specific": "Power Clean + Clean + Jerk"},
        "full_lift": {"preparatory": "Clean + Front Squat + Jerk", "specific": "Power Clean + Clean + Jerk"},
    },
}


# ── Base-weight tables ───────────────────────────────────────────────
# Checked in order with substring matching; first hit wins.
CUSTOM_MAX_MAPPING = [
    ("power snatch", "powerSnatch"),
    ("power clean", "powerClean"),
    ("overhead squat", "ohs"),
    ("hang power snatch", "hangPowerSnatch"),
    ("hang snatch", "hangSnatch"),
    ("hang clean", "hangClean"),
]

# Checked in order; first substring hit wins.
VARIATION_RATIOS = {
    "power snatch": 0.88,
    "power clean": 0.90,
    "overhead squat": 0.85,
    "hang power snatch": 0.80,
    "hang snatch": 0.95,
    "hang clean": 0.95,
}

# Main-lift name pattern for warm-up ladders
MAIN_LIFT_PATTERN = r"snatch|clean|jerk|squat|pull"


# ── Accessory database (swap categories) ─────────────────────────────
ACCESSORY_DATABASE = {
    "back_vertical": [
        "Pull-up", "Pull-ups", "Weighted Pull-up", "Weighted Pull-ups",
        "Chin-up", "Chin-ups",
        "Lat Pulldown", "Wide-Grip Lat Pulldown", "Close-Grip Lat Pulldown",
    ],
    "back_horizontal": [
        "Barbell Row", "Pendlay Row", "T-Bar Row",
        "Dumbbell Row", "Single-Arm Row", "Single-Arm Dumbbell Row",
        "Chest-Supported Row", "Seated Cable Row", "Cable Row", "Machine Row",
        "TRX Row", "Row", "Back Extension",
    ],
    "shoulders_press": [
        "Overhead Press", "Seated Dumbbell Press", "Standing Dumbbell Press",
        "Overhead Dumbbell Press", "Arnold Press", "Machine Shoulder Press",
        "Landmine Press",
    ],
    "shoulders_lateral": [
        "Dumbbell Lateral Raise", "Cable Lateral Raise", "Machine Lateral Raise",
        "Leaning Cable Lateral Raise", "Lateral Raise", "Front Raise",
    ],
    "shoulders_rear": [
        "Face Pull", "Reverse Pec Deck", "Bent-Over Dumbbell Fly",
        "Cable Rear Delt Fly", "Rear Delt Row", "Rear Delt Fly",
    ],
    "chest_press": [
        "Barbell Bench Press", "Incline Barbell Bench Press", "Dumbbell Bench Press",
        "Incline Dumbbell Press", "Weighted Dips", "Bodyweight Dips",
        "Machine Chest Press", "Dips", "Close-Grip Push-up",
    ],
    "chest_isolation": [
        "Cable Flyes", "Dumbbell Flyes", "Pec Deck Machine", "Incline Cable Flyes",
    ],
    "legs_quad": [
        "Leg Extension", "Single-Leg Extension", "Leg Press",
        "Hack Squat Machine", "Bulgarian Split Squat",
    ],
    "legs_hamstring": [
        "Leg Curl", "Seated Leg Curl", "Lying Leg Curl", "Nordic Curl",
        "Romanian Deadlift", "RDL", "Dumbbell Romanian Deadlift", "Good Morning",
    ],
    "legs_glutes": [
        "Hip Thrust", "Barbell Glute Bridge", "Glute Bridge", "Cable Pull-Through",
    ],
    "legs_calves": [
        "Standing Calf Raise", "Seated Calf Raise", "Leg Press Calf Raise", "Calf Raises",
    ],
    "arms_biceps": [
        "Barbell Curl", "EZ-Bar Curl", "Dumbbell Curl", "Hammer Curl",
        "Incline Dumbbell Curl", "Cable Curl", "Preacher Curl",
    ],
    "arms_triceps": [
        "Close-Grip Bench Press", "Dumbbell Overhead Extension",
        "Cable Tricep Pushdown", "Rope Tricep Pushdown", "Tricep Pushdown",
        "Overhead Cable Extension", "Skull Crusher", "Rope Tricep Extension", "Tricep Extension",
    ],
    "core": [
        "Plank", "Ab Wheel Rollout", "Cable Crunch", "Pallof Press",
        "Side Plank", "Core + Mobility", "Core Circuit",
    ],
}

# Reverse lookup: exercise name → category
EXERCISE_CATEGORIES = {
    name: category
    for category, names in ACCESSORY_DATABASE.items()
    for name in names
}


# ── Hypertrophy pools (powerbuilding / hypertrophy / strength) ───────
HYPERTROPHY_POOLS = {
    "upperPush": [
        {"name": "Dumbbell Bench Press", "refLift": "bs", "refPct": 0.22, "description": "~22% of BS per hand"},
        {"name": "Incline Dumbbell Press", "refLift": "bs", "refPct": 0.20, "description": "~20% of BS per hand"},
        {"name": "Dips", "refLift": "bs", "refPct": 0.00, "description": "Bodyweight or add load"},
        {"name": "Overhead Dumbbell Press", "refLift": "bs", "refPct": 0.15, "description": "~15% of BS per hand"},
        {"name": "Landmine Press", "refLift": "bs", "refPct": 0.30, "description": "~30% of BS"},
    ],
    "upperPull": [
        {"name": "Barbell Row", "refLift": "bs", "refPct": 0.40, "description": "~40% of BS"},
        {"name": "Pull-ups", "refLift": "", "refPct": 0, "description": "Bodyweight or add load"},
        {"name": "Lat Pulldown", "refLift": "bs", "refPct": 0.35, "description": "~35% of BS"},
        {"name": "Cable Row", "refLift": "bs", "refPct": 0.35, "description": "~35% of BS"},
        {"name": "T-Bar Row", "refLift": "bs", "refPct": 0.40, "description": "~40% of BS"},
        {"name": "Single-Arm Dumbbell Row", "refLift": "bs", "refPct": 0.18, "description": "~18% of BS per hand"},
    ],
    "shoulders": [
        {"name": "Lateral Raise", "refLift": "bs", "refPct": 0.06, "description": "~6% of BS per hand"},
        {"name": "Face Pull", "refLift": "bs", "refPct": 0.15, "description": "~15% of BS"},
        {"name": "Rear Delt Fly", "refLift": "bs", "refPct": 0.05, "description": "~5% of BS per hand"},
        {"name": "Front Raise", "refLift": "bs", "refPct": 0.06, "description": "~6% of BS per hand"},
        {"name": "Cable Lateral Raise", "refLift": "bs", "refPct": 0.06, "description": "~6% of BS per hand"},
    ],
    "arms": [
        {"name": "Barbell Curl", "refLift": "bs", "refPct": 0.25, "description": "~25% of BS"},
        {"name": "Hammer Curl", "refLift": "bs", "refPct": 0.12, "description": "~12% of BS per hand"},
        {"name": "Tricep Extension", "refLift": "bs", "refPct": 0.20, "description": "~20% of BS"},
        {"name": "Tricep Pushdown", "refLift": "bs", "refPct": 0.25, "description": "~25% of BS"},
        {"name": "Dumbbell Curl", "refLift": "bs", "refPct": 0.10, "description": "~10% of BS per hand"},
        {"name": "Close-Grip Push-up", "refLift": "", "refPct": 0, "description": "Bodyweight or add load"},
    ],
    "lowerPosterior": [
        {"name": "Romanian Deadlift", "refLift": "bs", "refPct": 0.60, "description": "~60% of BS"},
        {"name": "Leg Curl", "refLift": "bs", "refPct": 0.25, "description": "~25% of BS"},
        {"name": "Good Morning", "refLift": "bs", "refPct": 0.50, "description": "~50% of BS"},
        {"name": "Glute Bridge", "refLift": "bs", "refPct": 0.60, "description": "~60% of BS"},
        {"name": "Nordic Curl", "refLift": "", "refPct": 0, "description": "Bodyweight"},
    ],
    "lowerQuad": [
        {"name": "Bulgarian Split Squat", "refLift": "bs", "refPct": 0.55, "description": "~55% of BS"},
        {"name": "Leg Press", "refLift": "bs", "refPct": 1.20, "description": "~120% of BS"},
        {"name": "Walking Lunge", "refLift": "bs", "refPct": 0.35, "description": "~35% of BS"},
        {"name": "Leg Extension", "refLift": "bs", "refPct": 0.30, "description": "~30% of BS"},
        {"name": "Step-up", "refLift": "bs", "refPct": 0.40, "description": "~40% of BS"},
    ],
}

# Accessory-day description suffixes per program type
ACCESSORY_CUES = {
    "hypertrophy": " | Tempo: 3-1-1-0 (slow eccentric) | RIR: 1-2 (near failure) | Focus: Muscle tension",
    "powerbuilding": " | Tempo: 3-1-1-0 (slow eccentric) | RIR: 1-2 (near failure) | Focus: Muscle tension",
    "competition": " | Tempo: Explosive | RIR: 3-4 (technical reserve) | Focus: Speed & quality",
    "maximum_strength": " | Tempo: Controlled | RIR: 2-3 | Focus: Stability",
}
