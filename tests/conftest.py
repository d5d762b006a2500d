"""Shared test fixtures and helpers for Cry Translator tests.

Provides WAV byte builders, a controllable clock, and fake context
providers and history sinks.
"""

from __future__ import annotations

import io
import math
import struct
import wave
from datetime import datetime, timedelta, timezone

import pytest

from cry_translator.context.base import FeedingContextProvider, SleepContextProvider
from cry_translator.history.base import HistorySink
from cry_translator.models.features import AudioFeatures
from cry_translator.models.history import HistoryEntry
from cry_translator.models.result import ClassificationResult

SAMPLE_RATE = 44100


# ---------------------------------------------------------------------------
# Recording builders
# ---------------------------------------------------------------------------


def make_pcm_bytes(samples: list[int], header: bytes = b"\x00" * 44) -> bytes:
    """Pack raw 16-bit sample values behind a 44-byte header."""
    return header + b"".join(struct.pack("<h", s) for s in samples)


def make_wav_bytes(samples: list[float], sample_rate: int = SAMPLE_RATE) -> bytes:
    """Encode float samples [-1.0, 1.0] as a real mono 16-bit WAV file."""
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(sample_rate)
        pcm_data = b"".join(
            struct.pack("<h", max(-32768, min(32767, int(s * 32767))))
            for s in samples
        )
        wf.writeframes(pcm_data)
    return buf.getvalue()


def make_sine(
    freq: float = 440.0,
    seconds: float = 1.0,
    amplitude: float = 0.5,
    sample_rate: int = SAMPLE_RATE,
) -> list[float]:
    n = int(seconds * sample_rate)
    return [amplitude * math.sin(2 * math.pi * freq * i / sample_rate) for i in range(n)]


def make_bursty(n: int = 1000, level: float = 0.9) -> list[float]:
    """Loud first half, silent second half."""
    half = n // 2
    return [level] * half + [0.0] * (n - half)


def make_features(
    volume: float = 0.5,
    pitch: float = 300.0,
    duration: float = 2.0,
    is_rhythmic: bool = True,
) -> AudioFeatures:
    """Create AudioFeatures with ambiguous defaults (no acoustic rule fires)."""
    return AudioFeatures(volume=volume, pitch=pitch, duration=duration, is_rhythmic=is_rhythmic)


# ---------------------------------------------------------------------------
# Clock and providers
# ---------------------------------------------------------------------------


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class StaticFeeding(FeedingContextProvider):
    def __init__(self, hours: float | None) -> None:
        self.hours = hours

    def last_feeding_hours_ago(self) -> float | None:
        return self.hours


class StaticSleep(SleepContextProvider):
    def __init__(self, minutes: float | None) -> None:
        self.minutes = minutes

    def last_wake_minutes_ago(self) -> float | None:
        return self.minutes


class BrokenFeeding(FeedingContextProvider):
    def last_feeding_hours_ago(self) -> float | None:
        raise RuntimeError("feeding store unavailable")


class BrokenSleep(SleepContextProvider):
    def last_wake_minutes_ago(self) -> float | None:
        raise RuntimeError("sleep store unavailable")


class FailingHistory(HistorySink):
    """Sink whose writes always fail."""

    def __init__(self) -> None:
        self.attempts = 0

    def append(self, result: ClassificationResult, timestamp: datetime) -> None:
        self.attempts += 1
        raise OSError("disk full")

    def list(self) -> list[HistoryEntry]:
        return []

    def clear(self) -> None:
        pass


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()
