"""
LiftAI — Periodization Model

Phase machine (acc, acc, int, deload repeating every 4 weeks), intensity
curves, transition ramp, volume scaling and per-phase offsets.
"""
from liftai.config import (
    PHASE_CYCLE_LENGTH, INTENSITY_SAFETY_CAP,
    INTENSITY_FLOOR, INTENSITY_CEILING, VOLUME_FLOOR, VOLUME_CEILING,
)
from liftai.models import clamp, safe_float

# ── Phase ────────────────────────────────────────────────────────────
ACCUMULATION = "accumulation"
INTENSIFICATION = "intensification"
DELOAD = "deload"

# Transition floors: profile → (intensity, volume)
TRANSITION_FLOORS = {
    "standard": (0.85, 0.80),
    "conservative": (0.80, 0.70),
    "aggressive": (0.90, 0.90),
}

VOLUME_PREF_BASE = {"standard": 1.0, "reduced": 0.8, "minimal": 0.6}
PHASE_VOLUME = {ACCUMULATION: 1.0, INTENSIFICATION: 0.85, DELOAD: 0.6}

# Pull offsets: phase → (snatch, clean)
PULL_OFFSETS = {
    ACCUMULATION: (0.05, 0.08),
    INTENSIFICATION: (0.10, 0.15),
    "competition": (0.08, 0.12),
    "peaking": (0.08, 0.12),
}
DEFAULT_PULL_OFFSET = (0.08, 0.10)

# Hypertrophy progression: week-in-mesocycle → (set multiplier, RIR adjustment)
HYPERTROPHY_PROGRESSION = {
    0: (1.0, 1),
    1: (1.0, 0),
    2: (1.2, 0),
    3: (1.2, -1),
}
DELOAD_HYPERTROPHY = (0.6, 2)


def phase_for_week(week_index: int) -> str:
    w = week_index % PHASE_CYCLE_LENGTH
    if w in (0, 1):
        return ACCUMULATION
    if w == 2:
        return INTENSIFICATION
    return DELOAD


def complex_phase_role(phase: str) -> str:
    if phase == ACCUMULATION:
        return "preparatory"
    if phase == INTENSIFICATION:
        return "specific"
    return "deload"


def training_age_cap(training_age: float) -> float:
    """Intensity ceiling by years of training; 3+ years uncapped."""
    ta = safe_float(training_age) or 1
    if ta < 1:
        return 0.75
    if ta < 2:
        return 0.85
    if ta < 3:
        return 0.90
    return 1.0


# ═════════════════════════════════════════════════════════════════════
# INTENSITY / VOLUME
# ═════════════════════════════════════════════════════════════════════

def micro_intensity_for(profile, phase: str, week_index: int) -> float:
    """Block-length-adaptive base intensity before the transition ramp."""
    block_length = int(safe_float(profile.block_length)) or 8
    progress = week_index / (block_length - 1) if block_length > 1 else 0
    progress = clamp(progress, 0.0, 1.0)
    pt = profile.program_type or "general"

    if pt == "competition":
        # 70% → 95%, slower start
        intensity = 0.70 + 0.25 * progress ** 0.8
    elif pt == "maximum_strength":
        intensity = 0.80 + 0.15 * progress
    elif pt == "powerbuilding":
        intensity = 0.70 + 0.13 * progress
    elif pt == "hypertrophy":
        intensity = 0.68 + 0.12 * progress
    elif phase == ACCUMULATION:
        intensity = 0.70 + 0.10 * progress
    elif phase == INTENSIFICATION:
        intensity = 0.78 + 0.10 * progress
    else:
        intensity = 0.60

    intensity = min(intensity, training_age_cap(profile.training_age))
    return min(intensity, INTENSITY_SAFETY_CAP)


def transition_multiplier(profile, week_index: int) -> tuple[float, float]:
    """(intensity, volume) multipliers ramping linearly to 1.0 over the transition window."""
    tw = int(safe_float(profile.transition_weeks))
    if tw <= 0 or week_index >= tw:
        return 1.0, 1.0
    min_i, min_v = TRANSITION_FLOORS.get(profile.transition_profile, TRANSITION_FLOORS["standard"])
    t = (week_index + 1) / tw
    return min_i + (1 - min_i) * t, min_v + (1 - min_v) * t


def volume_factor_for(profile, phase: str, week_index: int = 0) -> float:
    base = VOLUME_PREF_BASE.get(profile.volume_pref, 0.8)
    phase_mult = PHASE_VOLUME.get(phase, 0.6)

    age = safe_float(profile.age)
    age_mult = 1.0
    if age >= 50:
        age_mult = 0.85
    elif age >= 40:
        age_mult = 0.90

    # +5% per completed 4-week wave, capped at +15%
    wave_mult = min(1 + 0.05 * (week_index // PHASE_CYCLE_LENGTH), 1.15)
    return base * phase_mult * age_mult * wave_mult


def week_intensity(profile, week_index: int) -> float:
    phase = phase_for_week(week_index)
    ti, _ = transition_multiplier(profile, week_index)
    return clamp(micro_intensity_for(profile, phase, week_index) * ti, INTENSITY_FLOOR, INTENSITY_CEILING)


def week_volume(profile, week_index: int) -> float:
    phase = phase_for_week(week_index)
    _, tv = transition_multiplier(profile, week_index)
    return clamp(volume_factor_for(profile, phase, week_index) * tv, VOLUME_FLOOR, VOLUME_CEILING)


# ── Offsets / progressions ───────────────────────────────────────────
def get_pull_offset(phase: str, pull_type: str) -> float:
    snatch, clean = PULL_OFFSETS.get(phase, DEFAULT_PULL_OFFSET)
    return snatch if pull_type == "snatch" else clean


def get_hypertrophy_progression(week_index: int, phase: str) -> tuple[float, int]:
    """(set multiplier, RIR adjustment) for supplemental hypertrophy work."""
    if phase == DELOAD:
        return DELOAD_HYPERTROPHY
    return HYPERTROPHY_PROGRESSION[week_index % PHASE_CYCLE_LENGTH]
