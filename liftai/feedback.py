"""
LiftAI — Performance Feedback

Folds a completed day's logged outcomes into the persistent per-lift bias,
scores readiness checks and applies readiness-based day adjustments.
"""
import copy
import math
from datetime import date

from liftai.config import LIFT_BIAS_LIMIT
from liftai.loads import build_set_scheme, get_base_for_exercise, prescribed_weight, unit_increment
from liftai.models import clamp, round_half_up, round_to, safe_float

# Persistent bias step per outcome of an exercise's last work set
ACTION_TO_ADJ = {"make": 0.0025, "belt": 0.0010, "heavy": -0.0015, "miss": -0.0050}
PERFORMANCE_WEIGHT = 0.25
PERFORMANCE_CLAMP = 0.02

LOW_READINESS = 2.5
HIGH_READINESS = 3.5


def action_to_adj(action: str) -> float:
    return ACTION_TO_ADJ.get((action or "").lower(), 0.0)


# ═════════════════════════════════════════════════════════════════════
# DAY COMPLETION
# ═════════════════════════════════════════════════════════════════════

def compute_day_deltas(profile, day_plan, day_log) -> dict:
    """Bias delta per lift key from the last work set of each %-based exercise."""
    deltas = {}
    for ex_index, ex in enumerate(day_plan.work):
        lift_key = ex.lift_key or day_plan.lift_key
        if not lift_key or not ex.pct:
            continue
        scheme = build_set_scheme(ex, lift_key, profile,
                                  work_sets=day_log.work_sets(ex_index, ex.sets))
        work_idx = [i for i, s in enumerate(scheme) if s["tag"] == "work"]
        if not work_idx:
            continue
        last = work_idx[-1]
        entry = day_log.get(ex_index, last)
        d = action_to_adj(entry.action if entry else "")

        prescribed = prescribed_weight(day_log, ex_index, last, scheme, profile)
        performed = safe_float(entry.weight) if entry else 0
        if performed > 0 and prescribed > 0:
            ratio = performed / prescribed - 1
            d += PERFORMANCE_WEIGHT * clamp(ratio, -PERFORMANCE_CLAMP, PERFORMANCE_CLAMP)
        deltas[lift_key] = deltas.get(lift_key, 0.0) + d
    return deltas


def complete_day(profile, day_plan, day_log) -> dict:
    """Apply the day's deltas to the profile's lift biases (clamped ±5%). Returns new biases."""
    deltas = compute_day_deltas(profile, day_plan, day_log)
    updated = {}
    for lift_key, delta in deltas.items():
        prev = profile.lift_bias(lift_key)
        updated[lift_key] = clamp(prev + delta, -LIFT_BIAS_LIMIT, LIFT_BIAS_LIMIT)
        profile.lift_adjustments[lift_key] = updated[lift_key]
    if updated:
        summary = ", ".join(f"{k} {v:+.4f}" for k, v in updated.items())
        print(f"  🔄 Lift adjustments updated: {summary}")
    return updated


def session_summary(profile, day_plan) -> dict:
    """Completion-history record body: title plus weight text per exercise."""
    inc = unit_increment(profile)
    work = []
    for ex in day_plan.work:
        lift_key = ex.lift_key or day_plan.lift_key
        text = ""
        if ex.pct and lift_key:
            weight = round_to(get_base_for_exercise(ex.name, lift_key, profile) * ex.pct, inc)
            text = f"{weight} {profile.units} ({round_half_up(ex.pct * 100)}%)"
        work.append({**ex.to_dict(), "weightText": text})
    return {"title": day_plan.title, "work": work}


# ═════════════════════════════════════════════════════════════════════
# READINESS
# ═════════════════════════════════════════════════════════════════════

def readiness_score(sleep_hours: float = 7, sleep_quality: int = 3, stress: int = 3,
                    soreness: int = 3, readiness: int = 3) -> float:
    """1-5 wellness score; stress and soreness are inverted."""
    raw = ((sleep_hours / 2) + sleep_quality + (6 - stress) + (6 - soreness) + readiness) / 5
    return round_half_up(raw * 10) / 10


def log_readiness(profile, sleep_hours: float = 7, sleep_quality: int = 3, stress: int = 3,
                  soreness: int = 3, readiness: int = 3, on: str = None) -> dict:
    score = readiness_score(sleep_hours, sleep_quality, stress, soreness, readiness)
    entry = {
        "date": on or date.today().isoformat(),
        "score": score,
        "sleep": sleep_hours, "quality": sleep_quality, "stress": stress,
        "soreness": soreness, "readiness": readiness,
        "notes": "Pre-workout check",
    }
    profile.readiness_log.append(entry)
    print(f"  ✅ Readiness logged: {score:.1f}/5.0")
    return entry


def apply_readiness_adjustment(day_plan, score: float):
    """
    Re-derive the day's work from its untouched copy, then scale it:
    low readiness trims 20% of sets and 5% of load, high readiness adds
    10% sets and 3% load. Repeated calls never compound.
    """
    if day_plan.original_work is None:
        day_plan.original_work = copy.deepcopy(day_plan.work)
    day_plan.work = copy.deepcopy(day_plan.original_work)
    day_plan.readiness_score = score

    if score < LOW_READINESS:
        for ex in day_plan.work:
            ex.sets = max(1, math.floor(ex.sets * 0.8))
            if ex.pct > 0:
                ex.pct = max(0.5, ex.pct - 0.05)
    elif score > HIGH_READINESS:
        for ex in day_plan.work:
            ex.sets = math.ceil(ex.sets * 1.1)
            if ex.pct > 0:
                ex.pct = min(0.98, ex.pct + 0.03)
    return day_plan


# ── Accessory recall ─────────────────────────────────────────────────
def remember_accessory_weight(profile, name: str, weight):
    w = safe_float(weight)
    if w > 0:
        profile.accessory_weights[name] = w


def recall_accessory_weight(profile, name: str) -> float | None:
    return profile.accessory_weights.get(name)
