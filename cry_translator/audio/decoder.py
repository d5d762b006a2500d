"""Minimal WAV decoding for cry recordings.

Recordings are treated as a fixed 44-byte header followed by signed
16-bit little-endian PCM samples.  No header fields are parsed: the
sample rate is assumed to be :data:`SAMPLE_RATE` and every sample is
read as a single mono channel.
"""

from __future__ import annotations

import numpy as np

from cry_translator.errors import AudioDecodeError

HEADER_SIZE = 44
"""Bytes skipped before the first sample."""

SAMPLE_WIDTH = 2
"""Bytes per 16-bit sample."""

SAMPLE_RATE = 44100
"""Nominal sample rate of every recording, in Hz."""

PCM16_SCALE = 32768.0


def decode_pcm16(data: bytes | bytearray | memoryview) -> np.ndarray:
    """Decode a recording into normalized float samples.

    Parameters
    ----------
    data:
        Raw recording bytes, header included.

    Returns
    -------
    numpy.ndarray
        1-D ``float64`` array with values in ``[-1.0, 1.0)``.  Empty
        when ``data`` holds fewer than ``HEADER_SIZE + SAMPLE_WIDTH``
        bytes.  A trailing odd byte is ignored.

    Raises
    ------
    AudioDecodeError
        If ``data`` is not a bytes-like object.
    """
    try:
        view = memoryview(data).cast("B")
    except TypeError as exc:
        raise AudioDecodeError(
            f"Expected a bytes-like recording, got {type(data).__name__}"
        ) from exc

    n_samples = (len(view) - HEADER_SIZE) // SAMPLE_WIDTH
    if n_samples <= 0:
        return np.zeros(0, dtype=np.float64)

    raw = np.frombuffer(view, dtype="<i2", count=n_samples, offset=HEADER_SIZE)
    return raw.astype(np.float64) / PCM16_SCALE
