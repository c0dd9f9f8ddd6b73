"""
LiftAI — Block Generation Orchestrator
Run manually or on a schedule: python -m liftai.sync [--dry-run] [--weeks N]
"""
import os
import sys
from datetime import datetime

from liftai.analytics import block_summary, weekly_summary
from liftai.block import ValidationError
from liftai.cloud_client import backup_block, is_configured
from liftai.config import BACKUP_DIR, STATE_PATH
from liftai.export import export_block_csv
from liftai.storage import load_state, save_state


def parse_weeks(argv: list) -> int | None:
    """Value after --weeks, or None when absent/unparseable."""
    if "--weeks" not in argv:
        return None
    idx = argv.index("--weeks")
    try:
        return int(argv[idx + 1])
    except (IndexError, ValueError):
        print("⚠️  --weeks needs an integer, using the profile's block length")
        return None


def run_generate(dry_run: bool = False, weeks: int = None, state_path: str = None) -> dict:
    """
    Full generation pipeline:
    1. Load state (defaults on any problem)
    2. Generate a fresh-seed block for the active profile
    3. Print the summary
    4. Save state (skipped on dry run)
    """
    print("🔄 LiftAI — Generating block...")
    print(f"   {datetime.now().isoformat()}")

    state = load_state(state_path or STATE_PATH)
    profile = state.profile
    print(f"\n👤 Profile: {profile.name} ({profile.program_type}, {profile.units})")

    block = state.generate_for_active(block_length=weeks)

    summary = block_summary(block, profile)
    weekly = weekly_summary(block)
    print(f"\n{'='*50}")
    print("📊 Block Summary:")
    print(f"   Weeks: {summary['weeks']}")
    print(f"   Sessions: {summary['sessions']}")
    print(f"   Total sets: {summary['total_sets']}")
    print(f"   ARI: {summary['ari']:.3f}")
    if not weekly.empty:
        for _, row in weekly.iterrows():
            print(f"   W{int(row['week']) + 1} {row['phase']:<16} {int(row['total_sets']):>3} sets  ARI {row['ari']:.3f}")

    if dry_run:
        print("\n🏃 DRY RUN — state not saved")
    else:
        save_state(state, state_path or STATE_PATH)

    return {"state": state, "block": block, "summary": summary}


def backup_csv(block, profile_name: str) -> str:
    """CSV copy of the block for disaster recovery. Saved to the backup dir."""
    os.makedirs(BACKUP_DIR, exist_ok=True)
    today = datetime.now().strftime("%Y-%m-%d")
    path = os.path.join(BACKUP_DIR, f"{profile_name}_{block.seed}_{today}.csv")
    export_block_csv(block, path)
    return path


if __name__ == "__main__":
    dry = "--dry-run" in sys.argv
    result = {"error": None}
    errors = []

    try:
        result = run_generate(dry_run=dry, weeks=parse_weeks(sys.argv))
    except ValidationError as e:
        errors.append(str(e))
        print(f"\n❌ Generation refused: {e}")
    except Exception as e:
        errors.append(str(e))
        print(f"\n❌ Generation FAILED: {e}")

    if result.get("block") is not None and not dry:
        state, block = result["state"], result["block"]

        # CSV backup (always runs, even if the remote push fails)
        print("\n💾 Creating CSV backup...")
        try:
            backup_csv(block, state.profile.name)
        except OSError as e:
            errors.append(str(e))
            print(f"⚠️  CSV backup failed: {e}")

        if is_configured():
            print("\n📤 Pushing block to remote backup...")
            status = backup_block(state.profile, block, state.user_id)
            if not status["ok"]:
                errors.append(status["error"])
        else:
            print("\n⚠️  Remote backup not configured, skipping")

    print(f"\nDone. {'Generated' if result.get('block') is not None else 'No'} block.")
    if errors:
        print("⚠️  Errors occurred:")
        for err in errors:
            print(f"  {err}")
        sys.exit(1)
