"""
LiftAI — Local State

One AppState object carries everything the engine mutates: the profiles,
which one is active, the current block, block history, set logs and the
completion history. It is persisted as a single JSON document; anything
unreadable falls back to a fresh default state.
"""
import json
import os
import uuid
from datetime import date

from liftai import feedback
from liftai.block import generate_block
from liftai.config import STATE_PATH, STATE_VERSION
from liftai.loads import build_set_scheme, get_base_for_exercise, prescribed_weight, unit_increment
from liftai.models import AthleteProfile, Block, round_half_up, round_to
from liftai.setlog import SetLogStore

HISTORY_LIMIT = 200


def _day_key(profile_name: str, week: int, day: int) -> str:
    return f"{profile_name}|w{week}|d{day}"


class AppState:
    def __init__(self, profiles: dict = None, active_profile: str = "Default",
                 current_block: Block = None, block_history: list = None,
                 set_logs: SetLogStore = None, history: list = None,
                 completed_days: dict = None, user_id: str = None):
        self.profiles: dict[str, AthleteProfile] = profiles or {"Default": AthleteProfile()}
        self.active_profile = active_profile
        self.current_block = current_block
        self.block_history = block_history or []  # newest first
        self.set_logs = set_logs or SetLogStore()
        self.history = history or []  # completed sessions, newest first
        self.completed_days = completed_days or {}
        self.user_id = user_id or str(uuid.uuid4())
        self.version = STATE_VERSION
        if self.active_profile not in self.profiles:
            self.active_profile = next(iter(self.profiles))

    # ── Profiles ──
    @property
    def profile(self) -> AthleteProfile:
        return self.profiles[self.active_profile]

    def create_profile(self, name: str, **fields) -> AthleteProfile:
        name = (name or "").strip()
        if not name:
            raise ValueError("Profile name cannot be empty")
        if name in self.profiles:
            raise ValueError(f"Profile {name!r} already exists")
        self.profiles[name] = AthleteProfile(name=name, **fields)
        return self.profiles[name]

    def switch_profile(self, name: str) -> AthleteProfile:
        if name not in self.profiles:
            raise KeyError(f"Unknown profile {name!r}")
        self.active_profile = name
        if self.current_block is not None and self.current_block.profile_name != name:
            self.current_block = None
        return self.profile

    def delete_profile(self, name: str):
        if name not in self.profiles:
            raise KeyError(f"Unknown profile {name!r}")
        if len(self.profiles) == 1:
            raise ValueError("Cannot delete the last profile")
        del self.profiles[name]
        self.set_logs.drop_profile(name)
        self.completed_days = {
            k: v for k, v in self.completed_days.items() if k.rsplit("|", 2)[0] != name
        }
        if self.current_block is not None and self.current_block.profile_name == name:
            self.current_block = None
        if self.active_profile == name:
            self.active_profile = next(iter(self.profiles))

    # ── Blocks ──
    def generate_for_active(self, seed: int = None, block_length: int = None,
                            start_date: str = None) -> Block:
        block = generate_block(self.profile, self.set_logs, seed=seed,
                               block_length=block_length, start_date=start_date)
        self.current_block = block
        self.block_history.insert(0, self._history_entry(block))
        return block

    def _history_entry(self, block: Block) -> dict:
        profile = self.profile
        inc = unit_increment(profile)
        weeks = []
        for week in block.weeks:
            days = []
            for d_idx, day in enumerate(week.days):
                exercises = []
                for ex in day.work:
                    lift_key = ex.lift_key or day.lift_key
                    weight = None
                    if ex.pct and lift_key:
                        weight = round_to(get_base_for_exercise(ex.name, lift_key, profile) * ex.pct, inc)
                    exercises.append({
                        "name": ex.name, "sets": ex.sets, "reps": ex.reps,
                        "prescribedWeight": weight,
                        "prescribedPct": round_half_up(ex.pct * 100) if ex.pct else None,
                        "liftKey": lift_key, "actualSets": [],
                    })
                days.append({
                    "dayIndex": d_idx, "title": day.title, "dow": day.dow,
                    "completed": False, "completedDate": None, "exercises": exercises,
                })
            weeks.append({"weekIndex": week.week_index, "phase": week.phase, "days": days})
        return {
            "id": f"{profile.name}_{block.seed}",
            "profileName": profile.name,
            "startDateISO": block.start_date,
            "programType": block.program_type,
            "blockLength": block.block_length,
            "blockSeed": block.seed,
            "units": profile.units,
            "maxes": dict(profile.maxes),
            "block": block.to_dict(),
            "weeks": weeks,
        }

    def find_history(self, block_id: str) -> dict | None:
        return next((h for h in self.block_history if h.get("id") == block_id), None)

    def load_block_from_history(self, block_id: str) -> Block:
        entry = self.find_history(block_id)
        if entry is None:
            raise KeyError(f"No block {block_id!r} in history")
        profile_name = entry.get("profileName")
        if profile_name in self.profiles:
            self.active_profile = profile_name
        self.current_block = Block.from_dict(entry["block"])
        print(f"  📥 Loaded block {block_id} ({self.current_block.block_length} weeks)")
        return self.current_block

    def delete_block_from_history(self, block_id: str) -> bool:
        before = len(self.block_history)
        self.block_history = [h for h in self.block_history if h.get("id") != block_id]
        return len(self.block_history) < before

    # ── Days ──
    def day_plan(self, week: int, day: int):
        if self.current_block is None:
            raise LookupError("No current block; generate one first")
        return self.current_block.weeks[week].days[day]

    def day_log(self, week: int, day: int):
        return self.set_logs.day_log(self.active_profile, week, day)

    def complete_day(self, week: int, day: int, on: str = None) -> dict:
        """
        Fold the day's outcomes into the lift biases and record completion.

        Returns the new biases per lift key.
        """
        profile = self.profile
        plan = self.day_plan(week, day)
        log = self.day_log(week, day)
        updated = feedback.complete_day(profile, plan, log)

        on = on or date.today().isoformat()
        self.completed_days[_day_key(profile.name, week, day)] = True
        self.history.insert(0, {
            "profileName": profile.name,
            "dateISO": on,
            "weekIndex": week,
            "dayIndex": day,
            "title": plan.title,
            "session": feedback.session_summary(profile, plan),
        })
        del self.history[HISTORY_LIMIT:]
        self._record_actuals(week, day, plan, log, on)
        return updated

    def _record_actuals(self, week: int, day: int, plan, log, on: str):
        entry = self.find_history(f"{self.active_profile}_{self.current_block.seed}")
        if entry is None:
            return
        try:
            hist_day = entry["weeks"][week]["days"][day]
        except (IndexError, KeyError):
            return
        hist_day["completed"] = True
        hist_day["completedDate"] = on
        for ex_index, ex in enumerate(plan.work):
            if ex_index >= len(hist_day["exercises"]):
                break
            lift_key = ex.lift_key or plan.lift_key
            scheme = build_set_scheme(ex, lift_key, self.profile,
                                      work_sets=log.work_sets(ex_index, ex.sets))
            actual = []
            for s_idx, s in enumerate(scheme):
                logged = log.get(ex_index, s_idx)
                actual.append({
                    "setIndex": s_idx,
                    "tag": s["tag"],
                    "prescribedWeight": prescribed_weight(log, ex_index, s_idx, scheme, self.profile),
                    "weight": logged.weight if logged else None,
                    "reps": logged.reps if logged else None,
                    "rpe": logged.rpe if logged else None,
                    "action": logged.action if logged else "none",
                })
            hist_day["exercises"][ex_index]["actualSets"] = actual

    def is_day_completed(self, week: int, day: int) -> bool:
        return bool(self.completed_days.get(_day_key(self.active_profile, week, day)))

    def count_completed_for_week(self, week: int) -> int:
        if self.current_block is None or week >= len(self.current_block.weeks):
            return 0
        days = self.current_block.weeks[week].days
        return sum(self.is_day_completed(week, d) for d in range(len(days)))

    # ── Persistence ──
    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "activeProfile": self.active_profile,
            "profiles": {name: p.to_dict() for name, p in self.profiles.items()},
            "currentBlock": self.current_block.to_dict() if self.current_block else None,
            "blockHistory": self.block_history,
            "setLogs": self.set_logs.to_dict(),
            "history": self.history,
            "completedDays": self.completed_days,
            "userId": self.user_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AppState":
        raw_profiles = data.get("profiles")
        if not isinstance(raw_profiles, dict) or not raw_profiles:
            raise ValueError("state has no profiles")
        profiles = {}
        for name, p in raw_profiles.items():
            if not isinstance(p, dict):
                raise ValueError(f"profile {name!r} is not an object")
            profiles[name] = AthleteProfile.from_dict({**p, "name": name})

        block = data.get("currentBlock")
        return cls(
            profiles=profiles,
            active_profile=str(data.get("activeProfile") or ""),
            current_block=Block.from_dict(block) if isinstance(block, dict) else None,
            block_history=[h for h in data.get("blockHistory") or [] if isinstance(h, dict)],
            set_logs=SetLogStore.from_dict(data.get("setLogs") or {}),
            history=[h for h in data.get("history") or [] if isinstance(h, dict)],
            completed_days=dict(data.get("completedDays") or {}),
            user_id=data.get("userId"),
        )


def load_state(path: str = None) -> AppState:
    """Read state from disk; any missing or corrupt file yields the default state."""
    path = path or STATE_PATH
    if not os.path.exists(path):
        print(f"  ⚠️ No saved state at {path}, starting fresh")
        return AppState()
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"  ⚠️ Could not read state {path}: {e}; using defaults")
        return AppState()
    if not isinstance(data, dict):
        print(f"  ⚠️ State {path} is not an object; using defaults")
        return AppState()
    try:
        state = AppState.from_dict(data)
    except (ValueError, TypeError, KeyError, AttributeError) as e:
        print(f"  ⚠️ Invalid state {path}: {e}; using defaults")
        return AppState()
    print(f"  📥 Loaded state: {len(state.profiles)} profiles, active {state.active_profile!r}")
    return state


def save_state(state: AppState, path: str = None) -> str:
    path = path or STATE_PATH
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(state.to_dict(), f, indent=2)
    print(f"  💾 State saved → {path}")
    return path
