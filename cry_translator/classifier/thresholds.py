"""Cascade thresholds and their YAML loader.

The defaults are the calibrated values the classifier ships with.
A YAML file can override any subset of them::

    thresholds:
      high_pitch_hz: 650
      overdue_feeding_hours: 3.0
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml


@dataclass(frozen=True)
class Thresholds:
    """Numeric boundaries used by the rule cascade.

    Attributes
    ----------
    high_pitch_hz:
        Pitch above which a cry is treated as distress.
    loud_volume:
        Volume above which a rhythmic cry is treated as a demand cry.
    soft_volume:
        Volume below which a non-rhythmic cry is treated as whimpering.
    overdue_feeding_hours:
        Hours since feeding above which hunger is assumed.
    recent_feeding_hours:
        Hours since feeding below which gas is assumed.
    wake_window_min_minutes:
        Inclusive lower bound of the typical wake window.
    wake_window_max_minutes:
        Exclusive upper bound of the typical wake window.
    """

    high_pitch_hz: float = 600.0
    loud_volume: float = 0.6
    soft_volume: float = 0.4
    overdue_feeding_hours: float = 2.5
    recent_feeding_hours: float = 0.5
    wake_window_min_minutes: float = 60.0
    wake_window_max_minutes: float = 120.0


DEFAULT_THRESHOLDS = Thresholds()


def thresholds_from_dict(data: dict[str, Any] | None) -> Thresholds:
    """Build :class:`Thresholds` from a mapping of overrides.

    Raises
    ------
    ValueError
        If a key is unknown, a value is not numeric, or the wake
        window bounds are inverted.
    """
    if not data:
        return DEFAULT_THRESHOLDS

    known = {f.name for f in fields(Thresholds)}
    overrides: dict[str, float] = {}
    for key, value in data.items():
        if key not in known:
            raise ValueError(
                f"Unknown threshold {key!r}. Known thresholds: {', '.join(sorted(known))}"
            )
        if isinstance(value, bool):
            raise ValueError(f"Threshold {key!r} must be numeric, got {value!r}")
        try:
            overrides[key] = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Threshold {key!r} must be numeric, got {value!r}") from exc

    thresholds = replace(DEFAULT_THRESHOLDS, **overrides)
    if thresholds.wake_window_min_minutes >= thresholds.wake_window_max_minutes:
        raise ValueError(
            "Threshold 'wake_window_min_minutes' must be below "
            f"'wake_window_max_minutes', got {thresholds.wake_window_min_minutes:g} "
            f"and {thresholds.wake_window_max_minutes:g}"
        )
    return thresholds


def parse_thresholds_yaml(path: str | Path) -> Thresholds:
    """Load threshold overrides from a YAML file.

    Parameters
    ----------
    path:
        Path to a YAML file with a top-level ``thresholds`` mapping.

    Returns
    -------
    Thresholds
        Defaults with the file's overrides applied.

    Raises
    ------
    FileNotFoundError
        If the YAML file does not exist.
    ValueError
        If the YAML structure is invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Thresholds file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict) or "thresholds" not in data:
        raise ValueError(
            f"Invalid thresholds file: expected a top-level 'thresholds' key in {path}"
        )

    section = data["thresholds"]
    if section is not None and not isinstance(section, dict):
        raise ValueError(
            f"Invalid thresholds file: 'thresholds' must be a mapping in {path}"
        )

    return thresholds_from_dict(section)
