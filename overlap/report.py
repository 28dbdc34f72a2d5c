"""
Human-readable rendering of a SavingsReport.
"""
from pathlib import Path
from typing import List

from .models import SavingsReport


def format_size(size_bytes: int) -> str:
    """
    Format size in bytes to human-readable string.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted string (e.g., "1.50 GB")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    size = size_bytes / 1024.0
    for unit in ['KB', 'MB', 'GB', 'TB']:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0
    return f"{size:.2f} PB"


def render_report(report: SavingsReport, top: int = 10) -> List[str]:
    """Render the report as console lines."""
    lines = [f"Analyzed {len(report.archives)} archives"]

    for pair in report.pairs:
        lines.append(
            f"{pair.archive_a} and {pair.archive_b} share {pair.shared_count} paths, "
            f"duplicated bytes: {pair.shared_bytes} ({format_size(pair.shared_bytes)})"
        )

    for stat in report.savings.archive_stats:
        lines.append(
            f"{stat.archive}: {stat.percent:.2f}% ({format_size(stat.dup)}) "
            f"of bytes present in other archives"
        )

    entries = report.top_entries(top)
    if entries:
        lines.append(f"Top {len(entries)} duplicated entries by savable bytes:")
        for entry in entries:
            lines.append(
                f"  {entry.name}: {entry.occurrences} copies, "
                f"{format_size(entry.savable)} savable"
            )

    savings = report.savings
    lines.append(
        f"Total deduplicatable bytes: {format_size(savings.total_savable)} "
        f"of {format_size(savings.total_bytes)} ({savings.percent_reduction:.2f}% reduction)"
    )
    return lines


def short_name(archive: str) -> str:
    """Archive filename for narrow displays."""
    return Path(archive).name
