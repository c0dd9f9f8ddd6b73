"""
LiftAI — Exercise Selection

Deterministic hash-based pool picks, injury/safety filtering and the
variation choosers used by the week assembler. Every pick is a pure
function of (seed, family, slot, phase, program type, mode, day, week).
"""
from liftai.catalog import (
    SWAP_POOLS, EMERGENCY_FALLBACKS, HYPERTROPHY_POOLS,
    ACCESSORY_DATABASE, EXERCISE_CATEGORIES,
)

FNV_OFFSET = 2166136261
FNV_PRIME = 16777619
POOL_SPREAD = 7  # hash is folded mod (len * 7) before mod len
SPECIFIC_BIAS = 7  # out of 10


# ═════════════════════════════════════════════════════════════════════
# HASHING
# ═════════════════════════════════════════════════════════════════════

def hash32(text: str) -> int:
    """FNV-1a style 32-bit hash over UTF-16 code units."""
    h = FNV_OFFSET
    data = str(text).encode("utf-16-le", errors="surrogatepass")
    for i in range(0, len(data), 2):
        h ^= data[i] | (data[i + 1] << 8)
        h = (h * FNV_PRIME) & 0xFFFFFFFF
    return h


def pick_from_pool(pool: list[dict], key: str, week_index: int) -> dict | None:
    if not pool:
        return None
    h = hash32(f"{key}|w{week_index}")
    return pool[(h % (len(pool) * POOL_SPREAD)) % len(pool)]


def pick_from_pool_excluding(pool: list[dict], key: str, week_index: int,
                             exclude_names=()) -> dict | None:
    """Same pick over the pool minus excluded names (unfiltered pool if that empties it)."""
    if not pool:
        return None
    available = [ex for ex in pool if ex["name"] not in exclude_names]
    return pick_from_pool(available or pool, key, week_index)


def prefers_specific(key: str, week_index: int) -> bool:
    """Specificity roll: 70% of keys land on the pool's competition-standard entry."""
    return hash32(f"{key}|w{week_index}") % 10 < SPECIFIC_BIAS


def selection_key(profile, family: str, slot_key: str, phase: str, day_index: int) -> str:
    seed = int(profile.last_block_seed or 0)
    return (f"{seed}|{family}|{slot_key}|{phase}|{profile.program_type or 'general'}"
            f"|{profile.athlete_mode or 'recreational'}|d{day_index}")


# ═════════════════════════════════════════════════════════════════════
# SAFETY FILTERS
# ═════════════════════════════════════════════════════════════════════

def injury_reason(name: str, injuries) -> str | None:
    """Return the blocking reason if `name` is contraindicated, else None."""
    n = (name or "").lower()
    has = lambda *s: any(x in n for x in s)  # noqa: E731

    if "shoulder" in injuries:
        if "snatch" in n and not has("pull", "power"):
            return "shoulder - overhead catch"
        if has("jerk", "strict press") and not has("power jerk", "push jerk", "push press"):
            return "shoulder - overhead press"
        if has("overhead squat", "ohs"):
            return "shoulder - OHS"
        if has("behind-the-neck", "btn"):
            return "shoulder - BTN"
    if "wrist" in injuries:
        if (has("front squat") or ("clean" in n and "pull" not in n)) and "power" not in n:
            return "wrist - front rack"
    if "elbow" in injuries:
        if "press" in n and "leg press" not in n:
            return "elbow - pressing"
        if "jerk" in n:
            return "elbow - jerk lockout"
    if "knee" in injuries:
        if has("squat", "snatch", "clean") and not has("power", "pause", "tempo"):
            return "knee - full depth"
    if "back" in injuries:
        if has("back squat", "deadlift", "good morning"):
            return "back - axial load"
        if "pull" in n and "high pull" not in n:
            return "back - heavy pull"
    if "hip" in injuries:
        if "squat" in n and "tempo" not in n:
            return "hip - squatting"
    if "ankle" in injuries:
        if "jerk" in n and not has("power jerk", "push jerk"):
            return "ankle - split stance"
    return None


def is_safe(name: str, injuries) -> bool:
    return injury_reason(name, injuries) is None


def filter_injuries(family: str, pool: list[dict], injuries, verbose: bool = False) -> list[dict]:
    """
    Drop contraindicated entries; never returns an empty pool.

    An emptied pool falls back to the family's single emergency pick, and
    only families without one fall back to the unfiltered pool.
    """
    if not injuries:
        return list(pool)
    safe = [ex for ex in pool if is_safe(ex["name"], injuries)]
    if safe:
        if verbose and len(safe) < len(pool):
            print(f"  ✅ Injury filter: {len(pool)} → {len(safe)} safe exercises for {family}")
        return safe
    fallback = EMERGENCY_FALLBACKS.get(family)
    if fallback:
        # Used even when its own name trips a rule
        print(f"  ⚠️ All {family} exercises filtered, using emergency fallback {fallback['name']}")
        return [dict(fallback)]
    print(f"  ⚠️ All {family} exercises filtered, safety filter bypassed")
    return list(pool)


def filter_blocks(pool: list[dict]) -> list[dict]:
    """Strip block variations; keep the pool as given if that empties it."""
    kept = [ex for ex in pool if "block" not in ex["name"].lower()]
    return kept or list(pool)


def candidate_pool(family: str, profile, verbose: bool = False) -> list[dict]:
    pool = filter_injuries(family, SWAP_POOLS.get(family, []), profile.injuries, verbose=verbose)
    if not profile.include_blocks:
        pool = filter_blocks(pool)
    return pool


# ═════════════════════════════════════════════════════════════════════
# VARIATION CHOICE
# ═════════════════════════════════════════════════════════════════════

def _choose(pool: list[dict], profile, key: str, week_index: int, phase: str) -> dict:
    specific = profile.athlete_mode == "competition" or profile.program_type == "competition"
    if specific and phase == "intensification" and prefers_specific(key, week_index):
        return pool[0]
    return pick_from_pool(pool, key, week_index) or pool[0]


def choose_variation(family: str, profile, week_index: int, phase: str,
                     slot_key: str, day_index: int = 0) -> dict:
    if not SWAP_POOLS.get(family):
        return {"name": slot_key, "liftKey": ""}
    pool = candidate_pool(family, profile, verbose=(week_index == 0 and day_index == 0))
    key = selection_key(profile, family, slot_key, phase, day_index)
    return _choose(pool, profile, key, week_index, phase)


def choose_variation_excluding(family: str, profile, week_index: int, phase: str,
                               slot_key: str, exclude_names=(), day_index: int = 0) -> dict:
    if not SWAP_POOLS.get(family):
        return {"name": slot_key, "liftKey": ""}
    pool = candidate_pool(family, profile)
    pool = [ex for ex in pool if ex["name"] not in exclude_names] or pool
    key = selection_key(profile, family, slot_key, phase, day_index)
    return _choose(pool, profile, key, week_index, phase)


def choose_hypertrophy_exercise(pool_name: str, profile, slot_key: str,
                                exclude_names=()) -> dict:
    """Fixed for the whole block: the key carries no week and picks use week 0."""
    full = HYPERTROPHY_POOLS.get(pool_name, [])
    if not full:
        return {"name": pool_name, "refLift": "", "refPct": 0, "description": ""}
    pool = [ex for ex in full if is_safe(ex["name"], profile.injuries)] or full
    seed = int(profile.last_block_seed or 0)
    key = f"{seed}|hyp|{pool_name}|{slot_key}|{profile.program_type or 'general'}"
    return pick_from_pool_excluding(pool, key, 0, exclude_names) or pool[0]


# ═════════════════════════════════════════════════════════════════════
# SWAPS
# ═════════════════════════════════════════════════════════════════════

def infer_swap_family(name: str, lift_key: str = "") -> str:
    n = (name or "").lower()
    if "pull" in n:
        return "pull_snatch" if lift_key == "snatch" else "pull_clean"
    if "squat" in n:
        return "fs" if ("front" in n or lift_key == "fs") else "bs"
    if "press" in n or "jerk dip" in n:
        return "press"
    if "snatch" in n:
        return "snatch"
    if "clean" in n or "jerk" in n:
        return "cj"
    return "accessory"


def get_swap_options_for_exercise(ex, day=None) -> list[dict]:
    """Alternatives for an exercise, current one first, de-duplicated by name."""
    lift_key = ex.lift_key or (day.lift_key if day else "")
    category = EXERCISE_CATEGORIES.get(ex.name)
    if category:
        options = [{"name": n, "liftKey": ""} for n in ACCESSORY_DATABASE[category]]
    else:
        family = infer_swap_family(ex.name, lift_key)
        options = [dict(o) for o in SWAP_POOLS.get(family, [])]

    current = next((o for o in options if o["name"] == ex.name), None)
    result = [current or {"name": ex.name, "liftKey": lift_key}]
    seen = {ex.name}
    for o in options:
        if o["name"] not in seen:
            seen.add(o["name"])
            result.append(o)
    return result
