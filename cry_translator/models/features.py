"""AudioFeatures dataclass -- output of ``extract_features()``."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class AudioFeatures:
    """Fixed-size acoustic summary of a single recording.

    Produced once per clip by the feature extractor and consumed by
    ``HybridClassifier``.  The classifier never sees the raw samples.
    """

    volume: float
    """Gain-adjusted RMS energy, 0.0 to 1.0."""

    pitch: float
    """Zero-crossing pitch estimate in Hz."""

    duration: float
    """Clip length in seconds at the nominal sample rate."""

    is_rhythmic: bool
    """Whether loudness stays steady across the clip."""

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable mapping of the features."""
        return asdict(self)


EMPTY_FEATURES = AudioFeatures(volume=0.0, pitch=0.0, duration=0.0, is_rhythmic=False)
"""Features of a recording with no decodable samples."""

DEGRADED_FEATURES = AudioFeatures(volume=0.5, pitch=400.0, duration=0.0, is_rhythmic=False)
"""Ambiguous features substituted when decoding or analysis fails."""
