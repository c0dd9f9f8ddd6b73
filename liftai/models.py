"""
LiftAI — Data Model

Dataclasses for athlete profiles and generated plans. Persisted state uses
camelCase keys; `from_dict` loaders are tolerant and fill missing/garbage
fields from the default profile.
"""
import copy
import math
from dataclasses import dataclass, field

import numpy as np

from liftai.config import (
    ALL_LIFTS, ATHLETE_MODES, CUSTOM_MAX_KEYS, LIMITERS, MIN_BLOCK_LENGTH,
    MAX_BLOCK_LENGTH, PROGRAM_TYPES, WORKING_MAX_FACTOR, default_profile,
)


# ── Numeric guards ───────────────────────────────────────────────────
def safe_float(value, default: float = 0.0) -> float:
    """None / NaN / inf / non-numeric → default."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        return default
    return v if np.isfinite(v) else default


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def round_half_up(x: float) -> int:
    """Round .5 away from zero for positives (2.5 → 3), unlike round()."""
    return int(math.floor(x + 0.5))


def round_to(x: float, increment: float = 1) -> float:
    if not increment:
        return x
    r = round_half_up(x / increment) * increment
    return int(r) if float(increment).is_integer() else r


# ═════════════════════════════════════════════════════════════════════
# ATHLETE PROFILE
# ═════════════════════════════════════════════════════════════════════

@dataclass
class AthleteProfile:
    name: str = "Default"
    units: str = "kg"
    program_type: str = "general"
    athlete_mode: str = "recreational"
    training_age: float = 1
    age: int | None = None
    recovery: int = 3
    limiter: str = "balanced"
    injuries: list = field(default_factory=list)

    main_days: list = field(default_factory=lambda: [2, 4, 6])
    accessory_days: list = field(default_factory=lambda: [7])
    duration: int = 75
    rest_duration: int = 180

    block_length: int = 8
    transition_weeks: int = 1
    transition_profile: str = "standard"
    volume_pref: str = "reduced"
    include_blocks: bool = True
    pref_preset: str = "balanced"
    auto_cut: bool = True

    maxes: dict = field(default_factory=dict)
    working_maxes: dict = field(default_factory=dict)
    lift_adjustments: dict = field(default_factory=dict)

    readiness_log: list = field(default_factory=list)
    accessory_weights: dict = field(default_factory=dict)
    last_block_seed: int = 0

    def __post_init__(self):
        defaults = default_profile()
        if not self.maxes:
            self.maxes = dict(defaults["maxes"])
        for key in ALL_LIFTS + CUSTOM_MAX_KEYS:
            self.maxes.setdefault(key, defaults["maxes"].get(key))
        for key in ALL_LIFTS:
            self.lift_adjustments.setdefault(key, 0)
        # Main wins on collision
        self.main_days = sorted({int(d) for d in self.main_days})
        self.accessory_days = sorted(
            {int(d) for d in self.accessory_days} - set(self.main_days)
        )

    # ── Helpers ──
    def true_max(self, lift_key: str) -> float:
        return safe_float(self.maxes.get(lift_key))

    def lift_bias(self, lift_key: str) -> float:
        return safe_float(self.lift_adjustments.get(lift_key))

    def compute_working_maxes(self) -> dict:
        """90% of each main max, rounded to the unit increment."""
        self.working_maxes = {
            k: round_to(self.true_max(k) * WORKING_MAX_FACTOR, 1) for k in ALL_LIFTS
        }
        return self.working_maxes

    def latest_readiness(self) -> float | None:
        if not self.readiness_log:
            return None
        return safe_float(self.readiness_log[-1].get("score"), default=None)

    # ── Persistence ──
    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "units": self.units,
            "programType": self.program_type,
            "athleteMode": self.athlete_mode,
            "trainingAge": self.training_age,
            "age": self.age,
            "recovery": self.recovery,
            "limiter": self.limiter,
            "injuries": list(self.injuries),
            "mainDays": list(self.main_days),
            "accessoryDays": list(self.accessory_days),
            "duration": self.duration,
            "restDuration": self.rest_duration,
            "blockLength": self.block_length,
            "transitionWeeks": self.transition_weeks,
            "transitionProfile": self.transition_profile,
            "volumePref": self.volume_pref,
            "includeBlocks": self.include_blocks,
            "prefPreset": self.pref_preset,
            "autoCut": self.auto_cut,
            "maxes": dict(self.maxes),
            "workingMaxes": dict(self.working_maxes),
            "liftAdjustments": dict(self.lift_adjustments),
            "readinessLog": copy.deepcopy(self.readiness_log),
            "accessoryWeights": dict(self.accessory_weights),
            "lastBlockSeed": self.last_block_seed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AthleteProfile":
        """Load a persisted profile, filling anything missing or malformed from defaults."""
        d = default_profile()
        if isinstance(data, dict):
            d.update({k: v for k, v in data.items() if v is not None})

        def _num(key, cast=float):
            v = safe_float(d.get(key), default=None)
            if v is None:
                v = default_profile()[key]
            return cast(v)

        def _days(key):
            raw = d.get(key)
            if not isinstance(raw, (list, tuple, set)):
                return list(default_profile()[key])
            return [int(safe_float(x)) for x in raw if 1 <= safe_float(x) <= 7]

        maxes = default_profile()["maxes"]
        if isinstance(d.get("maxes"), dict):
            maxes.update(d["maxes"])
        age = safe_float(d.get("age"), default=None)
        injuries = d.get("injuries") if isinstance(d.get("injuries"), list) else []

        return cls(
            name=str(d.get("name") or "Default"),
            units=d.get("units") if d.get("units") in ("kg", "lb") else "kg",
            program_type=d.get("programType") if d.get("programType") in PROGRAM_TYPES else "general",
            athlete_mode=d.get("athleteMode") if d.get("athleteMode") in ATHLETE_MODES else "recreational",
            training_age=_num("trainingAge"),
            age=int(age) if age else None,
            recovery=_num("recovery", int),
            limiter=d.get("limiter") if d.get("limiter") in LIMITERS else "balanced",
            injuries=[str(i).lower() for i in injuries],
            main_days=_days("mainDays"),
            accessory_days=_days("accessoryDays"),
            duration=_num("duration", int),
            rest_duration=_num("restDuration", int),
            block_length=int(clamp(_num("blockLength", int), MIN_BLOCK_LENGTH, MAX_BLOCK_LENGTH)),
            transition_weeks=_num("transitionWeeks", int),
            transition_profile=str(d.get("transitionProfile") or "standard"),
            volume_pref=str(d.get("volumePref") or "reduced"),
            include_blocks=bool(d.get("includeBlocks", True)),
            pref_preset=str(d.get("prefPreset") or "balanced"),
            auto_cut=bool(d.get("autoCut", True)),
            maxes=maxes,
            working_maxes=dict(d.get("workingMaxes") or {}),
            lift_adjustments=dict(d.get("liftAdjustments") or {}),
            readiness_log=list(d.get("readinessLog") or []),
            accessory_weights=dict(d.get("accessoryWeights") or {}),
            last_block_seed=int(safe_float(d.get("lastBlockSeed"))),
        )


# ═════════════════════════════════════════════════════════════════════
# PLANS
# ═════════════════════════════════════════════════════════════════════

@dataclass
class ExercisePrescription:
    """One entry in a day's work list. `tag` discriminates the variant:
    work | hypertrophy | strength | core | custom."""
    name: str
    lift_key: str = ""
    sets: int = 0
    reps: int = 0
    pct: float = 0.0
    tag: str = "work"
    recommended_pct: float | None = None
    description: str | None = None
    target_rir: int | None = None

    def to_dict(self) -> dict:
        d = {
            "name": self.name, "liftKey": self.lift_key, "sets": self.sets,
            "reps": self.reps, "pct": self.pct, "tag": self.tag,
        }
        if self.recommended_pct is not None:
            d["recommendedPct"] = self.recommended_pct
        if self.description is not None:
            d["description"] = self.description
        if self.target_rir is not None:
            d["targetRIR"] = self.target_rir
        return d

    @classmethod
    def from_dict(cls, d: dict) -> "ExercisePrescription":
        rec = d.get("recommendedPct")
        rir = d.get("targetRIR")
        return cls(
            name=str(d.get("name", "")),
            lift_key=str(d.get("liftKey") or ""),
            sets=int(safe_float(d.get("sets"))),
            reps=int(safe_float(d.get("reps"))),
            pct=safe_float(d.get("pct")),
            tag=str(d.get("tag") or "work"),
            recommended_pct=safe_float(rec) if rec is not None else None,
            description=d.get("description"),
            target_rir=int(safe_float(rir)) if rir is not None else None,
        )


@dataclass
class DayPlan:
    title: str
    kind: str
    lift_key: str
    dow: int
    work: list = field(default_factory=list)
    original_work: list | None = None  # pre-readiness copy
    readiness_score: float | None = None

    def to_dict(self) -> dict:
        d = {
            "title": self.title, "kind": self.kind, "liftKey": self.lift_key,
            "dow": self.dow, "work": [ex.to_dict() for ex in self.work],
        }
        if self.original_work is not None:
            d["originalWork"] = [ex.to_dict() for ex in self.original_work]
            d["readinessScore"] = self.readiness_score
        return d

    @classmethod
    def from_dict(cls, d: dict) -> "DayPlan":
        orig = d.get("originalWork")
        return cls(
            title=str(d.get("title", "")),
            kind=str(d.get("kind", "")),
            lift_key=str(d.get("liftKey") or ""),
            dow=int(safe_float(d.get("dow"))),
            work=[ExercisePrescription.from_dict(e) for e in d.get("work", [])],
            original_work=[ExercisePrescription.from_dict(e) for e in orig] if orig else None,
            readiness_score=d.get("readinessScore"),
        )


@dataclass
class WeekPlan:
    week_index: int
    phase: str
    intensity: float
    volume: float
    days: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "weekIndex": self.week_index, "phase": self.phase,
            "intensity": self.intensity, "volume": self.volume,
            "days": [d.to_dict() for d in self.days],
        }

    @classmethod
    def from_dict(cls, d: dict) -> "WeekPlan":
        return cls(
            week_index=int(safe_float(d.get("weekIndex"))),
            phase=str(d.get("phase", "")),
            intensity=safe_float(d.get("intensity")),
            volume=safe_float(d.get("volume")),
            days=[DayPlan.from_dict(x) for x in d.get("days", [])],
        )


@dataclass
class Block:
    seed: int
    profile_name: str
    start_date: str
    program_type: str
    block_length: int
    weeks: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "seed": self.seed, "profileName": self.profile_name,
            "startDateISO": self.start_date, "programType": self.program_type,
            "blockLength": self.block_length,
            "weeks": [w.to_dict() for w in self.weeks],
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Block":
        return cls(
            seed=int(safe_float(d.get("seed"))),
            profile_name=str(d.get("profileName", "")),
            start_date=str(d.get("startDateISO", "")),
            program_type=str(d.get("programType", "general")),
            block_length=int(safe_float(d.get("blockLength"))),
            weeks=[WeekPlan.from_dict(w) for w in d.get("weeks", [])],
        )
