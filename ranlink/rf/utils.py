from __future__ import annotations

import numpy as np


def log10(x: float) -> float:
    """Base-10 logarithm that never raises.

    Returns -inf for 0 and NaN for negative input, so a transient invalid
    value while the caller is still editing yields a meaningless number
    rather than an exception.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.log10(x))


def is_finite(*values: float) -> bool:
    return bool(np.all(np.isfinite(values)))
