from __future__ import annotations

import math
import numbers
from typing import Any, List

import numpy as np

_BASELINE_LENGTH = 12


def safe_num(v: Any) -> float:
    """Coerce any value to a finite float, defaulting to 0.0."""
    if isinstance(v, bool):
        return float(v)
    try:
        n = float(v)
    except (TypeError, ValueError):
        return 0.0
    return n if math.isfinite(n) else 0.0


def ensure_baseline_12(b: Any) -> List[float]:
    """
    Return exactly 12 finite amounts.

    Non-sequences give an all-zero baseline; longer input is truncated,
    shorter input is padded with zeros, bad entries become 0.
    """
    if isinstance(b, np.ndarray):
        b = b.tolist()
    if not isinstance(b, (list, tuple)):
        return [0.0] * _BASELINE_LENGTH
    out = [safe_num(x) for x in b[:_BASELINE_LENGTH]]
    out.extend([0.0] * (_BASELINE_LENGTH - len(out)))
    return out


def is_valid_month(month: Any) -> bool:
    if isinstance(month, bool) or not isinstance(month, numbers.Integral):
        return False
    return 0 <= int(month) < _BASELINE_LENGTH


def require_month(month: Any) -> None:
    if not is_valid_month(month):
        raise ValueError(f"Month index must be an integer in 0-11, got {month!r}")
