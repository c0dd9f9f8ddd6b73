"""
LiftAI — Block Orchestrator

Validates the profile, mints the seed and builds every week of a block.
Structural edits (swap / remove / add / move) mutate one day in place and
clear the affected exercise's set logs.
"""
import math
import time
from datetime import date

from liftai.config import MAIN_LIFTS, MAX_BLOCK_LENGTH, MIN_BLOCK_LENGTH
from liftai.models import Block, ExercisePrescription, clamp
from liftai.planner import make_week_plan
from liftai.setlog import SetLogStore, is_complex_fatigued


class ValidationError(ValueError):
    """Generation refused: missing/invalid 1RMs or no training days."""


def validate_profile(profile):
    bad = []
    for lift in MAIN_LIFTS:
        v = profile.maxes.get(lift)
        try:
            v = float(v)
        except (TypeError, ValueError):
            bad.append(lift)
            continue
        if not math.isfinite(v) or v <= 0:
            bad.append(lift)
    if bad:
        raise ValidationError(
            f"All four main 1RMs (snatch, cj, fs, bs) must be positive; invalid: {', '.join(bad)}"
        )
    if not profile.main_days:
        raise ValidationError("Select at least one main training day before generating a block")


def new_seed() -> int:
    return int(time.time() * 1000)


def generate_block(profile, store: SetLogStore = None, seed: int = None,
                   block_length: int = None, start_date: str = None,
                   fatigue_since_week: int = None) -> Block:
    """
    Generate a full block for `profile`.

    Raises ValidationError before touching the profile. On success the
    profile's seed, clamped block length and working maxes are updated.
    """
    validate_profile(profile)

    length = int(clamp(block_length or profile.block_length or 8, MIN_BLOCK_LENGTH, MAX_BLOCK_LENGTH))
    seed = new_seed() if seed is None else int(seed)

    profile.block_length = length
    profile.last_block_seed = seed
    profile.compute_working_maxes()

    fatigued = is_complex_fatigued(profile, store or SetLogStore(), since_week=fatigue_since_week)
    weeks = [make_week_plan(profile, w, fatigued=fatigued) for w in range(length)]

    block = Block(
        seed=seed,
        profile_name=profile.name,
        start_date=start_date or date.today().isoformat(),
        program_type=profile.program_type,
        block_length=length,
        weeks=weeks,
    )
    print(f"✅ Generated {length}-week {profile.program_type} block for {profile.name} (seed {seed})")
    return block


# ═════════════════════════════════════════════════════════════════════
# STRUCTURAL EDITS
# ═════════════════════════════════════════════════════════════════════

def _day(block: Block, week: int, day: int):
    try:
        return block.weeks[week].days[day]
    except IndexError:
        raise IndexError(f"No day {day} in week {week} of this block") from None


def swap_exercise(block: Block, week: int, day: int, ex_index: int,
                  name: str, lift_key: str = None, day_log=None) -> ExercisePrescription:
    """Replace the exercise name (and lift key if given); sets/reps/% stay."""
    d = _day(block, week, day)
    ex = d.work[ex_index]
    ex.name = name
    if lift_key:
        ex.lift_key = lift_key
    if day_log is not None:
        day_log.clear_exercise(ex_index)
    return ex


def remove_exercise(block: Block, week: int, day: int, ex_index: int, day_log=None) -> ExercisePrescription:
    d = _day(block, week, day)
    removed = d.work.pop(ex_index)
    if day_log is not None:
        day_log.remove_exercise(ex_index)
    return removed


def add_exercise(block: Block, week: int, day: int, name: str, sets: int = 3, reps: int = 5,
                 lift_key: str = "", pct: float = 0.0) -> ExercisePrescription:
    ex = ExercisePrescription(name.strip(), lift_key, int(sets), int(reps), pct, "custom")
    _day(block, week, day).work.append(ex)
    return ex


def move_exercise(block: Block, week: int, day: int, ex_index: int, target_day: int,
                  day_log=None) -> ExercisePrescription:
    """Move an exercise to another day of the same week; its logs are dropped."""
    ex = remove_exercise(block, week, day, ex_index, day_log)
    _day(block, week, target_day).work.append(ex)
    return ex
