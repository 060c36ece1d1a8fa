"""Tone synthesis for the completion chime."""

from __future__ import annotations

import numpy as np

_FADE_SECONDS = 0.01
_GAP_SECONDS = 0.12


def synthesize_chime(
    *,
    frequency_hz: float,
    duration_seconds: float,
    sample_rate_hz: int,
    volume: float = 0.4,
    repeats: int = 1,
) -> np.ndarray:
    """Return a mono float32 buffer of ``repeats`` faded sine beeps separated by short gaps."""
    sample_count = max(1, int(round(duration_seconds * sample_rate_hz)))
    t = np.arange(sample_count, dtype=np.float32) / float(sample_rate_hz)
    tone = np.sin(2.0 * np.pi * frequency_hz * t).astype(np.float32) * float(volume)

    # Short linear fades avoid clicks at the tone edges.
    fade_count = min(sample_count // 2, int(_FADE_SECONDS * sample_rate_hz))
    if fade_count > 0:
        ramp = np.linspace(0.0, 1.0, fade_count, dtype=np.float32)
        tone[:fade_count] *= ramp
        tone[-fade_count:] *= ramp[::-1]

    if repeats <= 1:
        return tone

    gap = np.zeros(int(_GAP_SECONDS * sample_rate_hz), dtype=np.float32)
    parts: list[np.ndarray] = []
    for index in range(repeats):
        if index:
            parts.append(gap)
        parts.append(tone)
    return np.concatenate(parts)
