"""
Recompute stored streak counters from each plan's completion history.

Reports plans whose stored current/longest streak disagrees with the history
and, unless --dry-run is given, writes the recomputed values back. Longest
streaks are never lowered.
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path to import from reading_tracker
sys.path.append(str(Path(__file__).parent.parent))

from reading_tracker.config import get_settings
from reading_tracker.repositories.progress import ProgressRepository
from reading_tracker.services.progress_tracker import recompute_streaks
from reading_tracker.storage import create_store


def repair_streaks(dry_run: bool = False) -> int:
    """Return the number of plan entries whose streaks changed."""
    settings = get_settings()
    store = create_store(settings)
    try:
        repository = ProgressRepository(store, settings.progress_key)
        progress = repository.load()
        if progress is None:
            print("No progress record found")
            return 0

        repaired = recompute_streaks(progress, tz=settings.local_timezone)
        changed = 0
        for plan_id, before in progress.plan_progress.items():
            after = repaired.plan_progress[plan_id]
            if (before.current_streak, before.longest_streak) != (after.current_streak, after.longest_streak):
                changed += 1
                print(
                    f"{plan_id}: current {before.current_streak} -> {after.current_streak}, "
                    f"longest {before.longest_streak} -> {after.longest_streak}"
                )

        if changed and not dry_run:
            repository.save(repaired)
            print(f"✓ Repaired {changed} plan(s)")
        elif not changed:
            print("All streaks match their history")
        return changed
    finally:
        store.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Recompute reading streaks from completion history")
    parser.add_argument("--dry-run", action="store_true", help="Report differences without saving")
    args = parser.parse_args()
    repair_streaks(dry_run=args.dry_run)
