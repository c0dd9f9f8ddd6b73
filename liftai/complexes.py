"""
LiftAI — Complex Engine

A complex is any exercise name containing '+': a sequence of movements
done under one bar load. Handles rep totals, rep-based intensity caps,
limiter-driven diagnostic selection and fatigue downgrades.
"""
from liftai.catalog import COMPLEX_DEFINITIONS, COMPLEX_DOWNGRADES, DIAGNOSTIC_COMPLEXES
from liftai.config import COMPLEX_HARDNESS, COMPLEX_FATIGUE_CUT
from liftai.periodization import complex_phase_role


def is_complex(name: str) -> bool:
    return "+" in (name or "")


def get_complex_pattern(name: str) -> list[dict] | None:
    entry = COMPLEX_DEFINITIONS.get(name)
    return entry["pattern"] if entry else None


def get_complex_total_reps(pattern) -> int:
    if not pattern:
        return 0
    return sum(m.get("reps", 0) or 0 for m in pattern)


def cap_complex_intensity(pct: float, total_reps: int) -> float:
    """≤2 reps → 0.90, 3 → 0.85, 4-5 → 0.75, 6+ → 0.70."""
    if not total_reps or total_reps <= 0:
        return pct
    if total_reps <= 2:
        cap = 0.90
    elif total_reps == 3:
        cap = 0.85
    elif total_reps <= 5:
        cap = 0.75
    else:
        cap = 0.70
    return min(pct, cap)


def choose_complex_for_day(kind: str, profile, phase: str) -> str | None:
    """Diagnostic complex for the athlete's limiter, or None to defer to variation choice."""
    limiter = profile.limiter
    if not limiter:
        return None
    role = complex_phase_role(phase)
    return DIAGNOSTIC_COMPLEXES.get(kind, {}).get(limiter, {}).get(role)


def downgrade_complex_if_fatigued(name: str, fatigued: bool) -> str:
    if not fatigued or not is_complex(name):
        return name
    lighter = COMPLEX_DOWNGRADES.get(name)
    if lighter:
        print(f"  🔄 Fatigue downgrade: {name} → {lighter}")
        return lighter
    return name


def apply_complex_fatigue_adjustment(pct: float, name: str, fatigued: bool) -> float:
    if not is_complex(name) or not pct or not fatigued:
        return pct
    return pct * COMPLEX_FATIGUE_CUT


def shape_complex_intensity(pct: float, name: str, fatigued: bool) -> float:
    """Hardness factor, rep cap (when the structure is known) and fatigue cut."""
    if not is_complex(name):
        return pct
    pct = pct * COMPLEX_HARDNESS
    pattern = get_complex_pattern(name)
    if pattern:
        pct = cap_complex_intensity(pct, get_complex_total_reps(pattern))
    return apply_complex_fatigue_adjustment(pct, name, fatigued)
