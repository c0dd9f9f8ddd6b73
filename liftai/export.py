"""
LiftAI — CSV Block Interchange

Denormalised rows: Week,Day,Exercise,Sets,Reps,Percentage,Notes
(Notes = "<phase>|<day title>"). Weeks are 1-based in the file.
"""
import io
import time
from datetime import date

import pandas as pd

from liftai.models import Block, DayPlan, ExercisePrescription, WeekPlan, round_half_up, safe_float

CSV_COLUMNS = ["Week", "Day", "Exercise", "Sets", "Reps", "Percentage", "Notes"]

# Imported days get weekdays by how many there are in the week
IMPORT_DOWS = {3: [1, 3, 5], 4: [1, 2, 4, 5], 5: [1, 2, 3, 4, 5], 6: [1, 2, 3, 4, 5, 6]}


class BlockImportError(ValueError):
    """CSV could not be turned into a block."""


def block_to_frame(block) -> pd.DataFrame:
    rows = []
    for w_idx, week in enumerate(block.weeks):
        for day in week.days:
            for ex in day.work:
                rows.append({
                    "Week": w_idx + 1,
                    "Day": day.title or "workout",
                    "Exercise": ex.name,
                    "Sets": ex.sets,
                    "Reps": ex.reps,
                    "Percentage": round_half_up(ex.pct * 100) if ex.pct else "",
                    "Notes": f"{week.phase or 'accumulation'}|{day.title or 'workout'}",
                })
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def export_block_csv(block, path=None) -> str:
    """Return the CSV text; also written to `path` when given."""
    df = block_to_frame(block)
    if df.empty:
        print("⚠️ No exercises found in training block, nothing to export")
    text = df.to_csv(index=False)
    if path:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        print(f"  💾 Exported {len(df)} rows → {path}")
    return text


# ── Import ───────────────────────────────────────────────────────────
def infer_day_kind(title: str) -> str:
    t = title.lower()
    if "clean" in t or "jerk" in t or "c&j" in t:
        return "cj"
    if "combined" in t:
        return "combined"
    if "strength" in t:
        return "strength"
    if "accessory" in t or "hypertrophy" in t:
        return "accessory"
    return "snatch"


def infer_lift_key(name: str) -> str:
    n = name.lower()
    if "snatch" in n:
        return "snatch"
    if "clean" in n or "jerk" in n:
        return "cj"
    if "front squat" in n:
        return "fs"
    if "squat" in n:
        return "bs"
    if "push press" in n:
        return "pushPress"
    if "press" in n:
        return "strictPress"
    return ""


DAY_LIFT_KEYS = {"snatch": "snatch", "cj": "cj", "combined": "snatch"}


def import_block_csv(text: str, profile_name: str = "Imported", program_type: str = "general") -> Block:
    """
    Parse exported CSV back into a Block.

    A new day starts whenever the Day title changes between consecutive
    rows of a week, so repeated templates in one week stay separate days.
    """
    try:
        df = pd.read_csv(io.StringIO(text or ""), dtype=str, keep_default_na=False)
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise BlockImportError(f"Unreadable CSV: {e}") from e

    cols = {c.strip().lower(): c for c in df.columns}
    if "week" not in cols or "exercise" not in cols:
        raise BlockImportError(
            "Invalid CSV format. Must have 'Week' and 'Exercise' columns "
            "(expected Week,Day,Exercise,Sets,Reps,Percentage,Notes)"
        )

    def col(row, name, default=""):
        return str(row[cols[name]]).strip() if name in cols else default

    weeks: dict[int, WeekPlan] = {}
    last_title: dict[int, str] = {}
    parsed = skipped = 0
    for _, row in df.iterrows():
        week_no = safe_float(col(row, "week"))
        name = col(row, "exercise")
        if week_no < 1 or not name:
            skipped += 1
            continue
        w = int(week_no) - 1
        title = col(row, "day") or "workout"
        notes = col(row, "notes")

        if w not in weeks:
            weeks[w] = WeekPlan(w, notes.split("|")[0] or "accumulation", 0.75, 1.0)
        week = weeks[w]
        if last_title.get(w) != title or not week.days:
            kind = infer_day_kind(title)
            week.days.append(DayPlan(title, kind, DAY_LIFT_KEYS.get(kind, ""), 0))
            last_title[w] = title

        pct = safe_float(col(row, "percentage"))
        week.days[-1].work.append(ExercisePrescription(
            name, infer_lift_key(name),
            int(safe_float(col(row, "sets"))), int(safe_float(col(row, "reps"))),
            pct / 100 if pct else 0.0, "work",
        ))
        parsed += 1

    if not parsed:
        raise BlockImportError("No valid exercises found in CSV")

    ordered = [weeks[i] for i in sorted(weeks)]
    for position, week in enumerate(ordered):
        week.week_index = position  # gaps in the file collapse
        dows = IMPORT_DOWS.get(len(week.days))
        for idx, day in enumerate(week.days):
            day.dow = dows[idx] if dows else idx + 1

    print(f"  📥 Imported {parsed} exercises over {len(ordered)} weeks ({skipped} rows skipped)")
    return Block(
        seed=int(time.time() * 1000),
        profile_name=profile_name,
        start_date=date.today().isoformat(),
        program_type=program_type,
        block_length=len(ordered),
        weeks=ordered,
    )
