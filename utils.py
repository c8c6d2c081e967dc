"""Soccer Match Analytics: shared utility functions.

Numeric coercion and label helpers shared by the aggregation modules.
"""
import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from numbers import Integral, Real


# ── Numeric Coercion ────────────────────────────────────────────────────

def safe_float(value, default=0.0):
    """Return *value* as a finite float, or *default* for missing/invalid input."""
    if value is None or isinstance(value, bool):
        return float(default)
    try:
        out = float(value)
    except (TypeError, ValueError):
        return float(default)
    if not math.isfinite(out):
        return float(default)
    return out


def coerce_int(value):
    """Coerce an identifier-like value to ``int``; return None when not integral.

    Accepts ints, integral floats and integral numeric strings such as ``"7"``
    or ``"7.0"`` (surrounding whitespace allowed). ``"3abc"``, ``"3.5"``,
    booleans and NaN all yield None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Integral):
        return int(value)
    if isinstance(value, Real):
        numeric = float(value)
        if math.isfinite(numeric) and numeric.is_integer():
            return int(numeric)
        return None
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = Decimal(text)
    except InvalidOperation:
        return None
    if number.is_finite() and number == number.to_integral_value():
        return int(number)
    return None


def round_half_up(value, digits=1):
    """Round half away from zero at *digits* decimals (``6.25 -> 6.3``)."""
    try:
        quantum = Decimal(1).scaleb(-int(digits))
        return float(Decimal(str(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))
    except (InvalidOperation, TypeError, ValueError):
        return 0.0


def safe_ratio(numerator, denominator):
    """Division that returns 0.0 for a zero/missing denominator."""
    den = safe_float(denominator)
    if den == 0:
        return 0.0
    return safe_float(numerator) / den


# ── Labels ──────────────────────────────────────────────────────────────

def interval_label(start, end):
    """Format a minute interval as *start-end*."""
    return f"{int(start)}-{int(end)}"

