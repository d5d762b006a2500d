"""Acoustic feature extraction for cry recordings.

Turns raw recording bytes into an :class:`AudioFeatures` vector:

- **volume** -- RMS energy scaled by a fixed microphone gain and
  clamped to 1.0
- **pitch** -- zero-crossing frequency estimate
- **duration** -- sample count over the nominal sample rate
- **is_rhythmic** -- low variance of loudness across ten equal chunks

Extraction never raises.  A recording with no samples yields
``EMPTY_FEATURES``; anything that goes wrong during decoding or
analysis yields ``DEGRADED_FEATURES`` so the classifier always
receives a structurally valid vector.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from cry_translator.audio.decoder import SAMPLE_RATE, decode_pcm16
from cry_translator.models.features import DEGRADED_FEATURES, EMPTY_FEATURES, AudioFeatures

logger = logging.getLogger(__name__)

VOLUME_GAIN = 5.0
"""Calibration multiplier applied to RMS energy."""

RHYTHM_CHUNKS = 10
"""Number of equal chunks compared for the rhythm check."""

RHYTHM_VARIANCE_THRESHOLD = 0.05
"""Chunk-loudness variance below which a cry counts as rhythmic."""


def compute_volume(samples: np.ndarray) -> float:
    """Return gain-adjusted RMS volume in ``[0.0, 1.0]``."""
    if samples.size == 0:
        return 0.0
    rms = float(np.sqrt(np.mean(np.square(samples))))
    return min(1.0, rms * VOLUME_GAIN)


def count_zero_crossings(samples: np.ndarray) -> int:
    """Count sign transitions between adjacent samples.

    A transition is counted when a strictly positive sample is followed
    by a non-positive one, or a strictly negative sample by a
    non-negative one.
    """
    if samples.size < 2:
        return 0
    prev = samples[:-1]
    cur = samples[1:]
    crossings = ((prev > 0) & (cur <= 0)) | ((prev < 0) & (cur >= 0))
    return int(np.count_nonzero(crossings))


def estimate_pitch(samples: np.ndarray, sample_rate: int = SAMPLE_RATE) -> float:
    """Estimate frequency in Hz from the zero-crossing rate."""
    if samples.size == 0:
        return 0.0
    return count_zero_crossings(samples) * sample_rate / (2 * samples.size)


def chunk_variance(samples: np.ndarray, chunks: int = RHYTHM_CHUNKS) -> float | None:
    """Return the variance of mean absolute amplitude across chunks.

    Samples beyond ``chunks * (len(samples) // chunks)`` are dropped.
    Returns ``None`` when there are too few samples to fill every chunk.
    """
    chunk_size = samples.size // chunks
    if chunk_size == 0:
        return None
    trimmed = np.abs(samples[: chunk_size * chunks]).reshape(chunks, chunk_size)
    return float(np.var(trimmed.mean(axis=1)))


def is_rhythmic(samples: np.ndarray) -> bool:
    variance = chunk_variance(samples)
    return variance is not None and variance < RHYTHM_VARIANCE_THRESHOLD


def features_from_samples(samples: np.ndarray) -> AudioFeatures:
    """Compute features from already-decoded samples."""
    if samples.size == 0:
        return EMPTY_FEATURES

    return AudioFeatures(
        volume=compute_volume(samples),
        pitch=estimate_pitch(samples),
        duration=samples.size / float(SAMPLE_RATE),
        is_rhythmic=is_rhythmic(samples),
    )


def extract_features(data: bytes | bytearray | memoryview) -> AudioFeatures:
    """Extract an :class:`AudioFeatures` vector from recording bytes.

    Parameters
    ----------
    data:
        Raw recording bytes (44-byte header + 16-bit LE PCM).

    Returns
    -------
    AudioFeatures
        ``EMPTY_FEATURES`` for recordings without samples,
        ``DEGRADED_FEATURES`` if decoding or analysis fails.
    """
    try:
        samples = decode_pcm16(data)
        features = features_from_samples(samples)
    except Exception:
        logger.warning(
            "Audio feature extraction failed; using degraded features",
            exc_info=True,
        )
        return DEGRADED_FEATURES

    logger.debug("Extracted audio features: %s", features)
    return features


def extract_features_from_file(path: str | Path) -> AudioFeatures:
    """Read a recording from disk and extract its features.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    """
    return extract_features(Path(path).read_bytes())


class FeatureExtractor:
    """Stateless wrapper around :func:`extract_features`.

    Exists so the engine can accept an injected extractor, e.g. one
    backed by a different decoder.
    """

    def extract(self, data: bytes | bytearray | memoryview) -> AudioFeatures:
        return extract_features(data)
