"""Display helpers for remaining time and progress."""

from __future__ import annotations


def format_duration(seconds: int) -> str:
    """Format seconds as zero-padded ``MM:SS``; minutes are not wrapped at 60."""
    minutes, remainder = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{remainder:02d}"


def progress_fraction(duration_seconds: int, remaining_seconds: int) -> float:
    if duration_seconds <= 0:
        return 0.0
    elapsed = duration_seconds - remaining_seconds
    return max(0.0, min(1.0, elapsed / duration_seconds))
