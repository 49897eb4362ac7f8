from __future__ import annotations

from typing import Optional


def safe_float(x, default: float = float("nan")) -> float:
    try:
        v = float(x)
        if v != v:  # NaN
            return default
        return v
    except Exception:
        return default


def safe_int(x, default: Optional[int] = None) -> Optional[int]:
    if x is None:
        return default
    s = str(x).strip()
    if not s:
        return default
    try:
        return int(s)
    except ValueError:
        return default


def clamp(x: float, lo: float, hi: float) -> float:
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x
