"""
LiftAI — Week Plan Assembler

Turns (profile, week index) into a WeekPlan: balanced template rotation
over the main days, accessory days, program-type supplemental work and
session-duration enforcement.
"""
from functools import partial

from liftai.catalog import ACCESSORY_CUES
from liftai.complexes import (
    choose_complex_for_day, downgrade_complex_if_fatigued,
    shape_complex_intensity,
)
from liftai.config import SHORT_SESSION_DURATION
from liftai.models import DayPlan, ExercisePrescription, WeekPlan, clamp, round_half_up
from liftai.periodization import (
    ACCUMULATION, INTENSIFICATION, get_hypertrophy_progression, get_pull_offset,
    phase_for_week, week_intensity, week_volume,
)
from liftai.selection import (
    choose_hypertrophy_exercise, choose_variation, choose_variation_excluding, is_safe,
)

# Day count → template rotation keeping snatch and C&J exposure balanced
BALANCED_PATTERNS = {
    1: [0, 1, 3],
    2: [0, 1, 3, 0, 1, 3],
    3: [0, 1, 3],
    4: [0, 1, 0, 1],
    5: [0, 1, 3, 0, 1],
    6: [0, 1, 3, 0, 1, 3],
}


def get_balanced_template_index(day_count: int, day_index: int, week_index: int) -> int:
    pattern = BALANCED_PATTERNS.get(day_count, BALANCED_PATTERNS[6])
    if day_count <= 2:
        # Rotate the start so one or two weekly sessions cycle through every emphasis
        offset = (week_index * day_count) % len(pattern)
        return pattern[(day_index + offset) % len(pattern)]
    return pattern[day_index % len(pattern)]


def _sets(base: int, vol: float) -> int:
    return round_half_up(base * vol)


class _WeekContext:
    """Per-call values shared by every template of one week."""

    def __init__(self, profile, week_index: int, fatigued: bool):
        self.profile = profile
        self.week = week_index
        self.phase = phase_for_week(week_index)
        self.intensity = week_intensity(profile, week_index)
        self.vol = week_volume(profile, week_index)
        self.fatigued = fatigued

    def variation(self, family, slot, day_index=0) -> dict:
        return choose_variation(family, self.profile, self.week, self.phase, slot, day_index)


# ═════════════════════════════════════════════════════════════════════
# MAIN-DAY TEMPLATES
# ═════════════════════════════════════════════════════════════════════

def _main_lift(ctx: _WeekContext, kind: str, family: str, slot: str,
               base_pct: float, day_index: int) -> tuple[str, float]:
    """Diagnostic complex (if any) or a variation, with complex intensity shaping."""
    name = choose_complex_for_day(kind, ctx.profile, ctx.phase)
    if name and ctx.fatigued:
        name = downgrade_complex_if_fatigued(name, True)
    if name and not is_safe(name, ctx.profile.injuries):
        name = None
    if not name:
        name = ctx.variation(family, slot, day_index)["name"]
    return name, shape_complex_intensity(base_pct, name, ctx.fatigued)


def _snatch_focus(ctx: _WeekContext, d: int) -> DayPlan:
    i, vol, phase = ctx.intensity, ctx.vol, ctx.phase
    name, pct = _main_lift(ctx, "snatch", "snatch", "snatch_main", i, d)
    return DayPlan("Snatch Focus", "snatch", "snatch", 0, [
        ExercisePrescription(name, "snatch", _sets(5, vol), 2, pct),
        ExercisePrescription(ctx.variation("pull_snatch", "snatch_pull", d)["name"], "snatch",
                             _sets(4, vol), 3, clamp(i + get_pull_offset(phase, "snatch"), 0.65, 1.00)),
        ExercisePrescription(ctx.variation("bs", "back_squat", d)["name"], "bs",
                             _sets(4, vol), 5, clamp(i + 0.05, 0.55, 0.92)),
    ])


def _cj_focus(ctx: _WeekContext, d: int) -> DayPlan:
    i, vol, phase = ctx.intensity, ctx.vol, ctx.phase
    name, pct = _main_lift(ctx, "cj", "cj", "cj_main", clamp(i + 0.05, 0.60, 0.95), d)
    return DayPlan("Clean & Jerk Focus", "cj", "cj", 0, [
        ExercisePrescription(name, "cj", _sets(5, vol), 1, pct),
        ExercisePrescription(ctx.variation("pull_clean", "clean_pull", d)["name"], "cj",
                             _sets(4, vol), 3, clamp(i + get_pull_offset(phase, "clean"), 0.70, 1.05)),
        ExercisePrescription(ctx.variation("fs", "front_squat", d)["name"], "fs",
                             _sets(4, vol), 3, clamp(i + 0.08, 0.55, 0.92)),
    ])


def _strength_positions(ctx: _WeekContext, d: int) -> DayPlan:
    # Not in the balanced rotation; reachable for imported/legacy plans
    i, vol = ctx.intensity, ctx.vol
    press = ctx.variation("press", "press", d)
    return DayPlan("Strength + Positions", "strength", "bs", 0, [
        ExercisePrescription(ctx.variation("bs", "back_squat_strength", d)["name"], "bs",
                             _sets(5, vol), 3, clamp(i + 0.08, 0.55, 0.95)),
        ExercisePrescription(ctx.variation("snatch", "snatch_secondary", d)["name"], "snatch",
                             _sets(4, vol), 2, clamp(i - 0.02, 0.55, 0.90)),
        ExercisePrescription(press["name"], press["liftKey"], _sets(4, vol), 5, clamp(i - 0.12, 0.45, 0.80)),
    ])


def _combined(ctx: _WeekContext, d: int) -> DayPlan:
    i, vol = ctx.intensity, ctx.vol
    name, pct = _main_lift(ctx, "snatch", "snatch", "snatch_skill", clamp(i - 0.05, 0.55, 0.88), d)
    press = ctx.variation("press", "press_accessory", d)
    return DayPlan("Combined + Squat", "combined", "snatch", 0, [
        ExercisePrescription(name, "snatch", _sets(4, vol), 2, pct),
        ExercisePrescription(ctx.variation("cj", "cj_skill", d)["name"], "cj",
                             _sets(4, vol), 1, clamp(i, 0.60, 0.90)),
        ExercisePrescription(ctx.variation("bs", "back_squat_combined", d)["name"], "bs",
                             _sets(4, vol), 3, clamp(i + 0.08, 0.55, 0.95)),
        ExercisePrescription(press["name"], press["liftKey"], _sets(3, vol), 5, clamp(i - 0.15, 0.40, 0.75)),
    ])


TEMPLATES = [_snatch_focus, _cj_focus, _strength_positions, _combined]


def _accessory_day(ctx: _WeekContext, d: int) -> DayPlan:
    p = ctx.profile
    acc1 = choose_variation("accessory", p, ctx.week, ctx.phase, "accessory_1", d)
    acc2 = choose_variation_excluding("accessory", p, ctx.week, ctx.phase, "accessory_2",
                                      [acc1["name"]], d)
    pt = p.program_type or "general"
    cue = ACCESSORY_CUES.get(pt, "")
    reps = (10, 12) if pt == "hypertrophy" else (5, 8)

    work = [
        ExercisePrescription(
            acc["name"], acc.get("liftKey", ""), _sets(3, ctx.vol), r, 0.0, "work",
            recommended_pct=acc.get("recommendedPct") or 0,
            description=(acc.get("description") or "") + cue,
        )
        for acc, r in zip((acc1, acc2), reps)
    ]
    work.append(ExercisePrescription("Core + Mobility", "", 1, 1, 0.0, "core"))
    return DayPlan("Accessory + Core", "accessory", "", 0, work)


# ═════════════════════════════════════════════════════════════════════
# SUPPLEMENTAL WORK
# ═════════════════════════════════════════════════════════════════════

def _hyp(ctx: _WeekContext, pool: str, slot: str, sets: int, reps: int, base_rir: int,
         rir_adj: int, exclude=()) -> ExercisePrescription:
    ex = choose_hypertrophy_exercise(pool, ctx.profile, slot, exclude)
    return ExercisePrescription(
        ex["name"], ex.get("refLift") or "", sets, reps, 0.0, "hypertrophy",
        recommended_pct=ex.get("refPct") or 0,
        description=ex.get("description") or "",
        target_rir=max(0, base_rir + rir_adj),
    )


def _powerbuilding(ctx: _WeekContext, day: DayPlan, si: int, duration: int):
    mult, rir = get_hypertrophy_progression(ctx.week, ctx.phase)
    base = 4 if ctx.phase in (ACCUMULATION, INTENSIFICATION) else 2
    n = round_half_up(base * ctx.vol * mult)
    reps = 12 if ctx.phase == ACCUMULATION else 8
    h = partial(_hyp, ctx, rir_adj=rir)
    long_session = duration >= 90

    if day.kind == "accessory":
        day.title = "Hypertrophy + Pump"
        dk = f"d{si}"
        if long_session:
            sh1 = h("shoulders", f"hyp_acc_sh1_{dk}", n, 10, 2)
            sh2 = h("shoulders", f"hyp_acc_sh2_{dk}", n, 15, 3, exclude=[sh1.name])
            day.work = [
                h("upperPush", f"hyp_acc_push_{dk}", n + 1, reps, 2),
                h("upperPull", f"hyp_acc_pull_{dk}", n + 1, reps, 2),
                sh1, sh2,
                h("lowerQuad", f"hyp_acc_quad_{dk}", n, 15, 3),
                h("lowerPosterior", f"hyp_acc_post_{dk}", n, reps, 2),
                ExercisePrescription("Core Circuit", "", 3, 1, 0.0, "core"),
            ]
        else:
            day.work = [
                h("upperPush", f"hyp_acc_push_{dk}", n, reps, 2),
                h("upperPull", f"hyp_acc_pull_{dk}", n, reps, 2),
                h("lowerQuad", f"hyp_acc_quad_{dk}", n, 12, 2),
                ExercisePrescription("Core Circuit", "", 2, 1, 0.0, "core"),
            ]
    elif day.kind == "snatch":
        if long_session:
            day.work += [
                h("upperPush", "hyp_sn_push", n, reps - 2, 2),
                h("upperPull", "hyp_sn_pull", n, reps - 2, 2),
                h("shoulders", "hyp_sn_sh", n, reps, 2),
                h("arms", "hyp_sn_arm", n, reps, 2),
            ]
        else:
            day.work += [
                h("upperPush", "hyp_sn_push", n, 10, 2),
                h("upperPull", "hyp_sn_pull", n, 10, 2),
            ]
    elif day.kind == "cj":
        if long_session:
            pull1 = h("upperPull", "hyp_cj_pull1", n, reps - 2, 2)
            day.work += [
                pull1,
                h("upperPull", "hyp_cj_pull2", n, reps, 2, exclude=[pull1.name]),
                h("shoulders", "hyp_cj_sh", n, reps, 2),
                h("arms", "hyp_cj_arm1", n, reps, 3),
            ]
        else:
            day.work += [
                h("upperPull", "hyp_cj_pull", n, 10, 2),
                h("arms", "hyp_cj_arm1", n, 12, 2),
            ]
    elif day.kind == "strength":
        if long_session:
            post1 = h("lowerPosterior", "hyp_st_post1", n, reps - 2, 2)
            day.work += [
                post1,
                h("lowerPosterior", "hyp_st_post2", n, reps, 2, exclude=[post1.name]),
                h("lowerQuad", "hyp_st_quad", n, reps - 2, 2),
                ExercisePrescription("Calf Raises", "", 4, 15, 0.0, "hypertrophy"),
            ]
        else:
            day.work += [
                h("lowerPosterior", "hyp_st_post1", n, 10, 2),
                ExercisePrescription("Calf Raises", "", 3, 15, 0.0, "hypertrophy"),
            ]


def _hypertrophy(ctx: _WeekContext, day: DayPlan, si: int, duration: int):
    if duration < 75:
        return
    mult, rir = get_hypertrophy_progression(ctx.week, ctx.phase)
    n = round_half_up((5 if ctx.phase == ACCUMULATION else 4) * ctx.vol * mult)

    if day.kind == "accessory":
        dk = f"d{si}"
        day.work += [
            _hyp(ctx, "upperPush", f"hyp_acc_extra1_{dk}", n, 12, 2, rir),
            _hyp(ctx, "shoulders", f"hyp_acc_extra2_{dk}", 3, 15, 3, rir),
        ]
    elif day.kind in ("snatch", "strength"):
        day.work += [
            _hyp(ctx, "upperPush", f"hyp_{day.kind}_push", n, 10, 2, rir),
            _hyp(ctx, "upperPull", f"hyp_{day.kind}_pull", n, 10, 2, rir),
        ]
    elif day.kind == "cj":
        day.work += [
            _hyp(ctx, "lowerQuad", "hyp_cj_quad", n, 12, 2, rir),
            _hyp(ctx, "lowerPosterior", "hyp_cj_post", n, 10, 2, rir),
        ]


def _strength(ctx: _WeekContext, day: DayPlan, duration: int):
    if duration < 75 or day.kind == "accessory":
        return
    family = {"snatch": "pull_snatch", "cj": "pull_clean"}.get(day.kind, "bs")
    support = ctx.variation(family, f"{day.kind}_support")
    pull_type = "snatch" if day.kind == "snatch" else "clean"
    day.work.append(ExercisePrescription(
        support["name"], support["liftKey"], _sets(3, ctx.vol), 3,
        clamp(ctx.intensity + get_pull_offset(ctx.phase, pull_type), 0.65, 1.05), "strength",
    ))


def _enforce_short_session(day: DayPlan):
    """60-minute sessions: accessory days emptied, max 3 exercises, max 5 sets."""
    if day.kind == "accessory":
        day.work = []
        return
    if len(day.work) > 3:
        print(f"  ⏱ 60min session: {day.title} truncated from {len(day.work)} to 3 exercises")
        day.work = day.work[:3]
    for ex in day.work:
        ex.sets = min(ex.sets, 5)


# ═════════════════════════════════════════════════════════════════════
# ASSEMBLY
# ═════════════════════════════════════════════════════════════════════

def make_week_plan(profile, week_index: int, fatigued: bool = False) -> WeekPlan:
    """
    Build one week. `fatigued` is the complex-fatigue flag evaluated once
    per block generation (see setlog.is_complex_fatigued).
    """
    ctx = _WeekContext(profile, week_index, fatigued)
    main_days = sorted({int(d) for d in profile.main_days})
    acc_days = sorted({int(d) for d in profile.accessory_days} - set(main_days))

    days = []
    for i, dow in enumerate(main_days):
        template = TEMPLATES[get_balanced_template_index(len(main_days), i, week_index)]
        day = template(ctx, i)
        day.dow = dow
        days.append(day)
    for i, dow in enumerate(acc_days):
        day = _accessory_day(ctx, len(main_days) + i)
        day.dow = dow
        days.append(day)

    duration = int(profile.duration or 75)
    pt = profile.program_type or "general"
    for si, day in enumerate(days):
        if pt == "powerbuilding":
            _powerbuilding(ctx, day, si, duration)
        elif pt == "hypertrophy":
            _hypertrophy(ctx, day, si, duration)
        elif pt == "strength":
            _strength(ctx, day, duration)

    if duration == SHORT_SESSION_DURATION:
        for day in days:
            _enforce_short_session(day)

    return WeekPlan(week_index, ctx.phase, ctx.intensity, ctx.vol, days)
