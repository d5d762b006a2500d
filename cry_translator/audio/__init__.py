"""Audio decoding and acoustic feature extraction.

Usage::

    from cry_translator.audio import extract_features

    features = extract_features(recording_bytes)
"""

from __future__ import annotations

from cry_translator.audio.decoder import HEADER_SIZE, SAMPLE_RATE, decode_pcm16
from cry_translator.audio.features import (
    FeatureExtractor,
    extract_features,
    extract_features_from_file,
)

__all__ = [
    "FeatureExtractor",
    "HEADER_SIZE",
    "SAMPLE_RATE",
    "decode_pcm16",
    "extract_features",
    "extract_features_from_file",
]
