"""Threshold parsing and color classification."""

import re

from memline.formatting import BINARY_BASE
from memline.models import ColorState

# Suffix -> power of BINARY_BASE applied to the parsed amount
SUFFIX_EXPONENTS = {
    "k": 1,
    "m": 3,
    "g": 4,
    "t": 5,
}

_AMOUNT = re.compile(r"\s*\+?(\d*)\s*", re.ASCII)


def memory_absolute(expression: str, total: int) -> int:
    """
    Convert a threshold expression to an absolute number of bytes.

    ``"N%"`` is taken relative to ``total`` (truncating). ``"N"`` followed by
    one of ``k``, ``m``, ``g``, ``t`` (any case) is scaled by a power of 1024.
    Any other trailing text leaves ``N`` as raw bytes.
    """
    match = _AMOUNT.match(expression)
    amount = int(match.group(1) or 0)
    suffix = expression[match.end():match.end() + 1]

    if suffix == "%":
        return total * amount // 100
    exponent = SUFFIX_EXPONENTS.get(suffix.lower())
    if exponent is not None:
        return amount * BINARY_BASE**exponent
    return amount


def classify(
    available: int,
    total: int,
    threshold_degraded: str | None = None,
    threshold_critical: str | None = None,
) -> ColorState:
    """Select the color state for the current amount of available memory."""
    state = ColorState.NORMAL
    if threshold_degraded is not None:
        if available < memory_absolute(threshold_degraded, total):
            state = ColorState.DEGRADED
    if threshold_critical is not None:
        if available < memory_absolute(threshold_critical, total):
            state = ColorState.CRITICAL
    return state
