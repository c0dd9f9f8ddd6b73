"""
LiftAI — Loads & Set Schemes

Base-weight resolution off TRUE 1RMs (never the working max), warm-up +
work set schemes and the in-session cumulative adjustment driven by
logged outcomes.
"""
import re

from liftai.catalog import CUSTOM_MAX_MAPPING, MAIN_LIFT_PATTERN, VARIATION_RATIOS
from liftai.config import (
    COMPLEX_LOAD_FACTOR, LIFT_BIAS_LIMIT, ROUND_INCREMENT,
    WARMUP_LADDER, WARMUP_MARGIN,
)
from liftai.complexes import is_complex
from liftai.models import clamp, round_to, safe_float

# In-session delta applied to later sets of the same exercise
ACTION_DELTAS = {"make": 0.01, "belt": 0.0, "heavy": -0.02, "miss": -0.05}

_MAIN_LIFT_RE = re.compile(MAIN_LIFT_PATTERN, re.IGNORECASE)


def action_delta(action: str) -> float:
    return ACTION_DELTAS.get((action or "").lower(), 0.0)


def unit_increment(profile) -> float:
    return ROUND_INCREMENT.get(profile.units, 1)


# ═════════════════════════════════════════════════════════════════════
# BASE WEIGHT
# ═════════════════════════════════════════════════════════════════════

def variation_ratio(name: str) -> float:
    """Share of the parent lift's true max for named technical variations."""
    n = (name or "").lower()
    for fragment, ratio in VARIATION_RATIOS.items():
        if fragment in n:
            return ratio
    return 1.0


def get_base_for_exercise_internal(name: str, lift_key: str, profile) -> float:
    """Base without the complex reduction. Complexes skip custom 1RMs and ratios."""
    bias = clamp(profile.lift_bias(lift_key), -LIFT_BIAS_LIMIT, LIFT_BIAS_LIMIT)
    n = (name or "").lower()

    if not is_complex(name):
        for fragment, key in CUSTOM_MAX_MAPPING:
            if fragment in n:
                custom = safe_float(profile.maxes.get(key))
                if custom > 0:
                    return custom * (1 + bias)
                break
        ratio = variation_ratio(name)
    else:
        ratio = 1.0

    return profile.true_max(lift_key) * ratio * (1 + bias)


def get_base_for_exercise(name: str, lift_key: str, profile) -> float:
    base = get_base_for_exercise_internal(name, lift_key, profile)
    if is_complex(name):
        return base * COMPLEX_LOAD_FACTOR
    return base


# ═════════════════════════════════════════════════════════════════════
# SET SCHEMES
# ═════════════════════════════════════════════════════════════════════

def build_set_scheme(ex, lift_key: str, profile, work_sets: int = None) -> list[dict]:
    """
    Ordered warm-up + work sets for one prescription.

    Warm-ups come from the fixed ladder (below target − 2%) and only for
    percentage-based barbell lifts; `work_sets` overrides the prescribed count.
    """
    target_pct = safe_float(ex.pct) or safe_float(ex.recommended_pct)
    base = get_base_for_exercise(ex.name, lift_key, profile) if lift_key else 0
    inc = unit_increment(profile)
    n_work = ex.sets if work_sets is None else work_sets

    def _set(pct, reps, tag):
        weight = round_to(base * pct, inc) if (base and pct) else 0
        return {"target_pct": pct, "target_reps": reps, "tag": tag, "target_weight": weight}

    scheme = []
    if target_pct and lift_key and _MAIN_LIFT_RE.search(ex.name or ""):
        warm_reps = min(3, max(1, ex.reps))
        for pct in WARMUP_LADDER:
            if pct < target_pct - WARMUP_MARGIN:
                scheme.append(_set(pct, warm_reps, "warmup"))
    for _ in range(int(n_work)):
        scheme.append(_set(target_pct, ex.reps, "work"))
    return scheme


def compute_cumulative_adj(day_log, ex_index: int, set_index: int, scheme: list[dict]) -> float:
    """Offset override plus the deltas of logged actions on earlier work sets."""
    d = day_log.weight_offset(ex_index)
    for i in range(min(set_index, len(scheme))):
        if scheme[i]["tag"] != "work":
            continue
        entry = day_log.get(ex_index, i)
        if entry and entry.action:
            d += action_delta(entry.action)
    return d


def prescribed_weight(day_log, ex_index: int, set_index: int, scheme: list[dict], profile) -> float:
    """Displayed target for a set after cumulative in-session adjustment."""
    target = scheme[set_index]["target_weight"]
    if not target:
        return 0
    adj = compute_cumulative_adj(day_log, ex_index, set_index, scheme)
    return round_to(target * (1 + adj), unit_increment(profile))
