"""
LiftAI — Set Logs

Logged performance keyed by (profile, week, day), independent of the block
so logs survive regeneration. Inside a day, entries are keyed by
(exercise index, set index). Also provides the DataFrame view of all logs
and the complex-fatigue scan that feeds generation.
"""
from dataclasses import dataclass, asdict

import pandas as pd

from liftai.config import (
    DEFAULT_READINESS, FATIGUE_HIGH_RPE, FATIGUE_HIGH_RPE_COUNT,
    FATIGUE_MISS_COUNT, FATIGUE_READINESS_MAX, FATIGUE_SCORE,
    OUTCOME_ACTIONS, WEIGHT_OFFSET_LIMIT,
)
from liftai.complexes import is_complex
from liftai.loads import build_set_scheme
from liftai.models import clamp, safe_float

LOG_COLUMNS = [
    "profile", "week", "day", "ex_index", "set_index", "exercise",
    "weight", "reps", "rpe", "action", "status",
]


def normalize_action(action) -> str:
    a = str(action or "none").lower()
    return a if a in OUTCOME_ACTIONS else "none"


@dataclass
class SetLogEntry:
    weight: float | None = None
    reps: int | None = None
    rpe: float | None = None
    action: str = "none"
    status: str = "pending"
    exercise_name: str = ""

    def __post_init__(self):
        self.action = normalize_action(self.action)

    @classmethod
    def from_dict(cls, d: dict) -> "SetLogEntry":
        return cls(
            weight=safe_float(d["weight"]) if d.get("weight") not in (None, "") else None,
            reps=int(safe_float(d["reps"])) if d.get("reps") not in (None, "") else None,
            rpe=safe_float(d["rpe"]) if d.get("rpe") not in (None, "") else None,
            action=d.get("action") or "none",
            status=d.get("status") or "pending",
            exercise_name=d.get("exercise_name") or d.get("exerciseName") or "",
        )


class DayLog:
    """Entries for one (profile, week, day) plus per-exercise overrides."""

    def __init__(self):
        self.entries: dict[tuple[int, int], SetLogEntry] = {}
        self.overrides: dict[int, dict] = {}

    # ── Entries ──
    def get(self, ex_index: int, set_index: int) -> SetLogEntry | None:
        return self.entries.get((ex_index, set_index))

    def ensure(self, ex_index: int, set_index: int, exercise_name: str = "") -> SetLogEntry:
        """Lazily create the entry (as when the workout detail is opened)."""
        key = (ex_index, set_index)
        if key not in self.entries:
            self.entries[key] = SetLogEntry(exercise_name=exercise_name)
        return self.entries[key]

    def log_set(self, ex_index: int, set_index: int, exercise_name: str = "", **fields) -> SetLogEntry:
        entry = self.ensure(ex_index, set_index, exercise_name)
        for k, v in fields.items():
            setattr(entry, k, normalize_action(v) if k == "action" else v)
        if exercise_name:
            entry.exercise_name = exercise_name
        return entry

    # ── Overrides ──
    def work_sets(self, ex_index: int, fallback: int) -> int:
        o = self.overrides.get(ex_index, {})
        n = o.get("work_sets")
        if n is None:
            n = fallback
        return max(1, int(safe_float(n) or safe_float(fallback) or 1))

    def set_work_sets(self, ex_index: int, n: int):
        self.overrides.setdefault(ex_index, {})["work_sets"] = max(1, int(safe_float(n) or 1))

    def clear_work_sets(self, ex_index: int):
        self.overrides.get(ex_index, {}).pop("work_sets", None)

    def weight_offset(self, ex_index: int) -> float:
        v = safe_float(self.overrides.get(ex_index, {}).get("weight_offset"))
        return clamp(v, -WEIGHT_OFFSET_LIMIT, WEIGHT_OFFSET_LIMIT)

    def set_weight_offset(self, ex_index: int, offset: float):
        self.overrides.setdefault(ex_index, {})["weight_offset"] = clamp(
            safe_float(offset), -WEIGHT_OFFSET_LIMIT, WEIGHT_OFFSET_LIMIT
        )

    # ── Structural edits ──
    def clear_exercise(self, ex_index: int):
        """Drop every entry and override of one exercise."""
        for key in [k for k in self.entries if k[0] == ex_index]:
            del self.entries[key]
        self.overrides.pop(ex_index, None)

    def remove_exercise(self, ex_index: int):
        """Clear one exercise and shift later exercise indices down by one."""
        self.clear_exercise(ex_index)
        self.entries = {
            ((e - 1 if e > ex_index else e), s): v for (e, s), v in self.entries.items()
        }
        self.overrides = {
            (e - 1 if e > ex_index else e): v for e, v in self.overrides.items()
        }

    # ── Persistence ──
    def to_dict(self) -> dict:
        return {
            "entries": {f"{e}:{s}": asdict(v) for (e, s), v in self.entries.items()},
            "overrides": {str(e): dict(v) for e, v in self.overrides.items()},
        }

    @classmethod
    def from_dict(cls, d: dict) -> "DayLog":
        log = cls()
        for k, v in (d.get("entries") or {}).items():
            try:
                e, s = (int(x) for x in k.split(":"))
            except ValueError:
                print(f"  ⚠️ Skipping malformed set-log key {k!r}")
                continue
            log.entries[(e, s)] = SetLogEntry.from_dict(v or {})
        for k, v in (d.get("overrides") or {}).items():
            if str(k).isdigit() and isinstance(v, dict):
                log.overrides[int(k)] = dict(v)
        return log


class SetLogStore:
    """All day logs keyed by (profile name, week index, day index)."""

    def __init__(self):
        self.logs: dict[tuple[str, int, int], DayLog] = {}

    def day_log(self, profile_name: str, week: int, day: int) -> DayLog:
        key = (profile_name, week, day)
        if key not in self.logs:
            self.logs[key] = DayLog()
        return self.logs[key]

    def peek(self, profile_name: str, week: int, day: int) -> DayLog | None:
        return self.logs.get((profile_name, week, day))

    def drop_profile(self, profile_name: str):
        for key in [k for k in self.logs if k[0] == profile_name]:
            del self.logs[key]

    def to_frame(self) -> pd.DataFrame:
        """One row per logged set across every profile."""
        rows = []
        for (profile, week, day), log in self.logs.items():
            for (ex_index, set_index), e in log.entries.items():
                rows.append({
                    "profile": profile, "week": week, "day": day,
                    "ex_index": ex_index, "set_index": set_index,
                    "exercise": e.exercise_name, "weight": e.weight,
                    "reps": e.reps, "rpe": e.rpe, "action": e.action,
                    "status": e.status,
                })
        return pd.DataFrame(rows, columns=LOG_COLUMNS)

    def to_dict(self) -> dict:
        return {f"{p}|w{w}|d{d}": log.to_dict() for (p, w, d), log in self.logs.items()}

    @classmethod
    def from_dict(cls, d: dict) -> "SetLogStore":
        store = cls()
        for key, v in (d or {}).items():
            try:
                profile, w, dd = key.rsplit("|", 2)
                week, day = int(w.lstrip("w")), int(dd.lstrip("d"))
            except ValueError:
                print(f"  ⚠️ Skipping malformed day-log key {key!r}")
                continue
            store.logs[(profile, week, day)] = DayLog.from_dict(v or {})
        return store


# ═════════════════════════════════════════════════════════════════════
# FATIGUE
# ═════════════════════════════════════════════════════════════════════

def get_recent_complex_fatigue_flags(store: SetLogStore, since_week: int = None,
                                     profile_name: str = None) -> dict:
    """
    High-RPE and miss counts over logged complex sets.

    Scans every profile's logs for all time unless bounded by `since_week`
    and/or `profile_name`.
    """
    df = store.to_frame()
    if since_week is not None:
        df = df[df["week"] >= since_week]
    if profile_name is not None:
        df = df[df["profile"] == profile_name]
    if df.empty:
        return {"high_rpe_count": 0, "miss_count": 0, "complex_set_count": 0, "fatigue_score": 0.0}
    df = df[df["exercise"].fillna("").map(is_complex).astype(bool)]

    complex_sets = len(df)
    high_rpe = int((pd.to_numeric(df["rpe"], errors="coerce").fillna(0) >= FATIGUE_HIGH_RPE).sum())
    misses = int((df["action"].fillna("").str.lower() == "miss").sum())
    score = (high_rpe + 2 * misses) / complex_sets if complex_sets else 0.0
    return {
        "high_rpe_count": high_rpe,
        "miss_count": misses,
        "complex_set_count": complex_sets,
        "fatigue_score": score,
    }


def is_complex_fatigued(profile, store: SetLogStore, since_week: int = None) -> bool:
    """Evaluated once per generation; low readiness or heavy complex stress."""
    readiness = profile.latest_readiness()
    if readiness is None:
        readiness = DEFAULT_READINESS
    flags = get_recent_complex_fatigue_flags(store, since_week=since_week)
    fatigued = (
        readiness <= FATIGUE_READINESS_MAX
        or flags["high_rpe_count"] >= FATIGUE_HIGH_RPE_COUNT
        or flags["miss_count"] >= FATIGUE_MISS_COUNT
        or flags["fatigue_score"] >= FATIGUE_SCORE
    )
    if fatigued:
        print(f"  ⚠️ Fatigue detected: readiness {readiness}, high RPE {flags['high_rpe_count']}, "
              f"misses {flags['miss_count']}, score {flags['fatigue_score']:.2f}")
    return fatigued


# ── Progress ─────────────────────────────────────────────────────────
def get_set_progress(day_plan, day_log: DayLog | None, profile) -> tuple[int, int]:
    """(done, total) sets for a day, honouring work-set overrides."""
    day_log = day_log or DayLog()
    done = total = 0
    for ex_index, ex in enumerate(day_plan.work):
        lift_key = ex.lift_key or day_plan.lift_key
        scheme = build_set_scheme(ex, lift_key, profile,
                                  work_sets=day_log.work_sets(ex_index, ex.sets))
        total += len(scheme)
        for set_index in range(len(scheme)):
            entry = day_log.get(ex_index, set_index)
            if entry and entry.status and entry.status != "pending":
                done += 1
    return done, total
