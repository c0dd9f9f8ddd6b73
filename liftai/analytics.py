"""
LiftAI — Pandas Analytics

Block-level load metrics (ARI, K-value), week WL intensity, hypertrophy
interference/budget and log compliance. Everything works off a flat
prescription frame: one row per exercise per day per week.
"""
import numpy as np
import pandas as pd

from liftai.loads import get_base_for_exercise, unit_increment
from liftai.models import round_to

MAIN_LIFT_KEYS = ["snatch", "cj", "bs", "fs"]
WL_LIFT_KEYS = ["snatch", "cj"]
WL_MINUTES = 45
MINUTES_PER_HYP_SET = 8

PRESCRIPTION_COLUMNS = [
    "week", "phase", "day", "dow", "title", "kind", "exercise", "lift_key",
    "sets", "reps", "pct", "tag", "total_reps", "weight",
]


def block_frame(block, profile=None) -> pd.DataFrame:
    """Flatten a block; `weight` is filled when a profile is given and the row is %-based."""
    rows = []
    inc = unit_increment(profile) if profile else 1
    for week in block.weeks:
        for d_idx, day in enumerate(week.days):
            for ex in day.work:
                lift_key = ex.lift_key or day.lift_key
                weight = 0
                if profile is not None and ex.pct and lift_key:
                    weight = round_to(get_base_for_exercise(ex.name, lift_key, profile) * ex.pct, inc)
                rows.append({
                    "week": week.week_index, "phase": week.phase, "day": d_idx,
                    "dow": day.dow, "title": day.title, "kind": day.kind,
                    "exercise": ex.name, "lift_key": ex.lift_key,
                    "sets": ex.sets, "reps": ex.reps, "pct": ex.pct, "tag": ex.tag,
                    "total_reps": ex.sets * ex.reps, "weight": weight,
                })
    return pd.DataFrame(rows, columns=PRESCRIPTION_COLUMNS)


def _ari(df: pd.DataFrame, lift_keys: list[str]) -> float:
    if df.empty:
        return 0.0
    sub = df[df["lift_key"].isin(lift_keys) & (df["pct"] > 0) & (df["total_reps"] > 0)]
    reps = sub["total_reps"].sum()
    if not reps:
        return 0.0
    return float((sub["pct"] * sub["total_reps"]).sum() / reps)


# ═════════════════════════════════════════════════════════════════════
# 1. LOAD METRICS
# ═════════════════════════════════════════════════════════════════════

def compute_block_ari(block) -> float:
    """Σ(%1RM × reps) / Σ(reps) over snatch, C&J and squats."""
    return _ari(block_frame(block), MAIN_LIFT_KEYS)


def compute_k_value(block, two_lift_total: float) -> float | None:
    if not two_lift_total or two_lift_total <= 0:
        return None
    ari = compute_block_ari(block)
    if not ari:
        return None
    return ari * 100


def estimate_week_wl_ari(week) -> float:
    """Competition lifts only (snatch / C&J)."""
    if week is None:
        return 0.0
    rows = [
        {"lift_key": ex.lift_key, "pct": ex.pct, "total_reps": ex.sets * ex.reps}
        for day in week.days for ex in day.work
    ]
    return _ari(pd.DataFrame(rows, columns=["lift_key", "pct", "total_reps"]), WL_LIFT_KEYS)


def hypertrophy_interference_multiplier(wl_ari: float) -> float:
    if wl_ari >= 0.82:
        return 0.8
    if wl_ari >= 0.78:
        return 0.9
    return 1.0


def estimate_hypertrophy_set_budget(duration_minutes: int, wl_minutes: int = WL_MINUTES) -> int:
    spare = max(0, duration_minutes - wl_minutes)
    return spare // MINUTES_PER_HYP_SET


# ═════════════════════════════════════════════════════════════════════
# 2. SUMMARIES
# ═════════════════════════════════════════════════════════════════════

def weekly_summary(block) -> pd.DataFrame:
    """Per-week totals: work sets, reps, mean main-lift intensity."""
    df = block_frame(block)
    if df.empty:
        return pd.DataFrame()
    main = df[df["lift_key"].isin(MAIN_LIFT_KEYS) & (df["pct"] > 0)]
    weekly = (
        df.groupby(["week", "phase"])
        .agg(
            days=("day", "nunique"),
            exercises=("exercise", "count"),
            total_sets=("sets", "sum"),
            total_reps=("total_reps", "sum"),
        )
        .reset_index()
    )
    ari = (
        main.assign(load=main["pct"] * main["total_reps"])
        .groupby("week")
        .agg(load=("load", "sum"), reps=("total_reps", "sum"))
        .reset_index()
    )
    ari["ari"] = np.where(ari["reps"] > 0, ari["load"] / ari["reps"].replace(0, np.nan), 0.0)
    weekly = weekly.merge(ari[["week", "ari"]], on="week", how="left")
    weekly["ari"] = weekly["ari"].fillna(0).round(3)
    weekly["sets_delta_pct"] = (weekly["total_sets"].pct_change() * 100).round(1)
    return weekly


def block_summary(block, profile) -> dict:
    ari = compute_block_ari(block)
    total = profile.true_max("snatch") + profile.true_max("cj")
    df = block_frame(block)
    return {
        "weeks": len(block.weeks),
        "sessions": int(df.groupby(["week", "day"]).ngroups) if not df.empty else 0,
        "total_sets": int(df["sets"].sum()) if not df.empty else 0,
        "ari": round(ari, 4),
        "k_value": compute_k_value(block, total),
        "unique_exercises": int(df["exercise"].nunique()) if not df.empty else 0,
    }


def log_compliance(log_df: pd.DataFrame) -> pd.DataFrame:
    """Per (profile, week, day): logged sets, done sets, make rate and mean RPE."""
    if log_df.empty:
        return pd.DataFrame()
    df = log_df.copy()
    df["done"] = df["status"] == "done"
    df["make"] = df["action"].isin(["make", "belt"])
    df["rpe"] = pd.to_numeric(df["rpe"], errors="coerce")
    out = (
        df.groupby(["profile", "week", "day"])
        .agg(
            logged=("set_index", "count"),
            done=("done", "sum"),
            makes=("make", "sum"),
            avg_rpe=("rpe", "mean"),
        )
        .reset_index()
    )
    out["make_rate"] = (out["makes"] / out["logged"] * 100).round(0)
    out["avg_rpe"] = out["avg_rpe"].round(1)
    return out
