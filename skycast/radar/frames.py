"""Radar frame ordering and time-windowing around the current moment."""

import logging
from collections.abc import Iterable

from skycast.models.common import UnixTime
from skycast.models.radar import RadarFrame

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SECONDS = 2 * 60 * 60


def merge_frames(*sequences: Iterable[RadarFrame]) -> list[RadarFrame]:
    """Concatenate frame sequences and sort ascending by timestamp."""
    merged = [frame for seq in sequences for frame in seq]
    return sorted(merged, key=lambda f: f.time)


def find_pivot(frames: list[RadarFrame], now: UnixTime) -> UnixTime:
    """Timestamp of the first frame at or after ``now``, else ``now`` itself."""
    for frame in frames:
        if frame.time >= now:
            return frame.time
    return now


def select_frames(
    past: Iterable[RadarFrame],
    forecast: Iterable[RadarFrame],
    now: UnixTime,
    window_seconds: int = DEFAULT_WINDOW_SECONDS,
) -> list[RadarFrame]:
    """Merge past and nowcast frames and keep those near the pivot frame.

    Frames within ``window_seconds`` either side of the pivot (inclusive) are
    kept. An empty list means there is no radar coverage for the window.
    """
    frames = merge_frames(past, forecast)
    pivot = find_pivot(frames, now)
    selected = [
        f for f in frames
        if pivot - window_seconds <= f.time <= pivot + window_seconds
    ]
    if not selected:
        logger.warning(
            "No radar frames within %ds of pivot %d (%d candidates)",
            window_seconds, pivot, len(frames),
        )
    return selected
