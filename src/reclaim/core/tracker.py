"""Tracks reclaimed space across runs."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from reclaim.models.report import ReclaimReport
from reclaim.storage import append_run, load_history

log = logging.getLogger(__name__)


class Tracker:
    """Persists applied reclaim reports and aggregates statistics."""

    def record(self, report: ReclaimReport) -> bool:
        """Append *report* to the history. Dry runs are not recorded."""
        if report.dry_run:
            log.debug("Not recording dry run for %s", report.volume)
            return False

        append_run(
            {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "volume": report.volume,
                "found_gib": report.junk_found,
                "removed_gib": report.junk_removed,
                "not_removed_gib": report.junk_not_removed,
                "files_removed": report.files_removed,
            }
        )
        log.info("Saved run: %.2f GiB removed from %s", report.junk_removed, report.volume)
        return True

    def get_last_run_time(self) -> str | None:
        """Return ISO timestamp of the most recent applied run, or None."""
        runs = load_history().get("runs", [])
        return runs[-1]["timestamp"] if runs else None

    def get_stats(self, period: str = "all") -> dict[str, Any]:
        """Get aggregated statistics for a time period.

        Args:
            period: One of 'today', 'week', 'month', 'all'.
        """
        all_runs = load_history().get("runs", [])

        match period:
            case "today":
                cutoff = _start_of_today()
            case "week":
                cutoff = _start_of_today() - timedelta(days=7)
            case "month":
                cutoff = _start_of_today() - timedelta(days=30)
            case _:
                cutoff = None

        if cutoff is not None:
            runs = [r for r in all_runs if datetime.fromisoformat(r["timestamp"]) >= cutoff]
        else:
            runs = all_runs

        return {
            "period": period,
            "removed_gib": _total(runs, "removed_gib"),
            "found_gib": _total(runs, "found_gib"),
            "files_removed": sum(r.get("files_removed", 0) for r in runs),
            "run_count": len(runs),
            "lifetime_removed_gib": _total(all_runs, "removed_gib"),
            "per_volume": self._aggregate_volume_stats(runs),
        }

    @staticmethod
    def _aggregate_volume_stats(runs: list[dict[str, Any]]) -> dict[str, dict[str, Any]]:
        """Aggregate per-volume statistics across runs."""
        totals: dict[str, dict[str, Any]] = {}
        for run in runs:
            volume = run.get("volume", "?")
            if volume not in totals:
                totals[volume] = {"removed_gib": 0.0, "run_count": 0}
            totals[volume]["removed_gib"] = round(totals[volume]["removed_gib"] + run.get("removed_gib", 0.0), 2)
            totals[volume]["run_count"] += 1
        return totals


def _total(runs: list[dict[str, Any]], key: str) -> float:
    return round(sum(r.get(key, 0.0) for r in runs), 2)


def _start_of_today() -> datetime:
    """Return the start of the current UTC day."""
    now = datetime.now(timezone.utc)
    return now.replace(hour=0, minute=0, second=0, microsecond=0)
