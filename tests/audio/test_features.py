"""Tests for acoustic feature extraction."""

from __future__ import annotations

import numpy as np
import pytest

from cry_translator.audio import features as features_module
from cry_translator.audio.features import (
    FeatureExtractor,
    chunk_variance,
    compute_volume,
    count_zero_crossings,
    estimate_pitch,
    extract_features,
    extract_features_from_file,
)
from cry_translator.errors import AudioDecodeError
from cry_translator.models.features import DEGRADED_FEATURES, EMPTY_FEATURES
from tests.conftest import make_bursty, make_pcm_bytes, make_sine, make_wav_bytes


class TestVolume:
    def test_rms_times_gain(self) -> None:
        samples = np.full(100, 0.1)
        assert compute_volume(samples) == pytest.approx(0.5)

    def test_clamped_to_one(self) -> None:
        assert compute_volume(np.full(100, 0.9)) == 1.0

    def test_silence(self) -> None:
        assert compute_volume(np.zeros(100)) == 0.0

    def test_empty(self) -> None:
        assert compute_volume(np.zeros(0)) == 0.0


class TestZeroCrossings:
    def test_alternating_signal(self) -> None:
        samples = np.array([0.25, -0.25] * 50)
        assert count_zero_crossings(samples) == 99

    def test_positive_to_zero_counts(self) -> None:
        assert count_zero_crossings(np.array([0.5, 0.0])) == 1

    def test_negative_to_zero_counts(self) -> None:
        assert count_zero_crossings(np.array([-0.5, 0.0])) == 1

    def test_zero_to_signed_does_not_count(self) -> None:
        assert count_zero_crossings(np.array([0.0, 0.5, 0.5])) == 0
        assert count_zero_crossings(np.array([0.0, -0.5])) == 0

    def test_single_sample(self) -> None:
        assert count_zero_crossings(np.array([0.5])) == 0

    def test_pitch_formula(self) -> None:
        samples = np.array([0.25, -0.25] * 50)
        assert estimate_pitch(samples) == 99 * 44100 / (2 * 100)

    def test_sine_pitch(self) -> None:
        samples = np.array(make_sine(freq=440.0, seconds=1.0))
        assert estimate_pitch(samples) == pytest.approx(440.0, abs=2.0)


class TestRhythm:
    def test_steady_signal_has_low_variance(self) -> None:
        samples = np.array(make_sine(freq=300.0, seconds=0.5))
        variance = chunk_variance(samples)
        assert variance is not None
        assert variance < 0.05

    def test_bursty_signal_has_high_variance(self) -> None:
        variance = chunk_variance(np.array(make_bursty(1000, level=0.9)))
        assert variance == pytest.approx(0.2025)

    def test_remainder_samples_dropped(self) -> None:
        # 25 samples -> 10 chunks of 2; the last 5 loud samples are ignored
        samples = np.array([0.5] * 20 + [1.0, 0.0, 1.0, 0.0, 1.0])
        assert chunk_variance(samples) == 0.0

    def test_too_few_samples(self) -> None:
        assert chunk_variance(np.full(9, 0.5)) is None


class TestExtractFeatures:
    def test_empty_buffer(self) -> None:
        assert extract_features(b"") is EMPTY_FEATURES

    def test_under_46_bytes_is_empty(self) -> None:
        features = extract_features(b"\x00" * 45)
        assert features.volume == 0.0
        assert features.pitch == 0.0
        assert features.duration == 0.0
        assert features.is_rhythmic is False

    def test_single_sample(self) -> None:
        features = extract_features(make_pcm_bytes([16384]))
        assert features.volume == 1.0
        assert features.pitch == 0.0
        assert features.duration == pytest.approx(1 / 44100)
        assert features.is_rhythmic is False

    def test_decode_fault_yields_degraded(self) -> None:
        features = extract_features(None)  # type: ignore[arg-type]
        assert features == DEGRADED_FEATURES
        assert features.volume == 0.5
        assert features.pitch == 400.0
        assert features.duration == 0.0
        assert features.is_rhythmic is False

    def test_computation_fault_yields_degraded(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def boom(samples: np.ndarray) -> float:
            raise FloatingPointError("overflow")

        monkeypatch.setattr(features_module, "compute_volume", boom)
        assert extract_features(make_pcm_bytes([1, 2, 3])) is DEGRADED_FEATURES

    def test_decoder_error_yields_degraded(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def bad_decode(data: bytes) -> np.ndarray:
            raise AudioDecodeError("unexpected size")

        monkeypatch.setattr(features_module, "decode_pcm16", bad_decode)
        assert extract_features(make_pcm_bytes([1, 2, 3])) is DEGRADED_FEATURES

    def test_loud_steady_sine(self) -> None:
        features = extract_features(make_wav_bytes(make_sine(440.0, seconds=1.0, amplitude=0.5)))
        assert features.volume == 1.0
        assert features.pitch == pytest.approx(440.0, abs=2.0)
        assert features.duration == pytest.approx(1.0)
        assert features.is_rhythmic is True

    def test_quiet_sine_volume(self) -> None:
        features = extract_features(make_wav_bytes(make_sine(440.0, seconds=0.5, amplitude=0.05)))
        # RMS of a sine is amplitude / sqrt(2)
        assert features.volume == pytest.approx(0.05 / np.sqrt(2) * 5.0, rel=5e-3)

    def test_bursty_not_rhythmic(self) -> None:
        features = extract_features(make_wav_bytes(make_bursty(2000, level=0.9)))
        assert features.is_rhythmic is False

    def test_returns_python_types(self) -> None:
        features = extract_features(make_wav_bytes(make_sine(seconds=0.1)))
        assert type(features.volume) is float
        assert type(features.pitch) is float
        assert type(features.is_rhythmic) is bool

    @pytest.mark.parametrize(
        "samples",
        [
            [32767] * 50,
            [-32768] * 50,
            [32767, -32768] * 40,
            [0] * 10,
            list(range(-5000, 5000, 37)),
        ],
    )
    def test_valid_buffers_stay_in_range(self, samples: list[int]) -> None:
        features = extract_features(make_pcm_bytes(samples))
        assert 0.0 <= features.volume <= 1.0
        assert features.pitch >= 0.0
        assert features.duration >= 0.0

    def test_deterministic(self) -> None:
        data = make_wav_bytes(make_sine(523.0, seconds=0.3))
        assert extract_features(data) == extract_features(data)


class TestFileAndWrapper:
    def test_from_file(self, tmp_path) -> None:
        path = tmp_path / "cry.wav"
        path.write_bytes(make_wav_bytes(make_sine(seconds=0.2)))
        assert extract_features_from_file(path).duration == pytest.approx(0.2)

    def test_missing_file_raises(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            extract_features_from_file(tmp_path / "missing.wav")

    def test_extractor_delegates(self) -> None:
        assert FeatureExtractor().extract(b"") is EMPTY_FEATURES
