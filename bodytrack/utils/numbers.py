import math


def to_finite_number(value):
    """``float(value)``, or None when it is not a finite number (NaN, Infinity, "abc", True)."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def compact_number(value: float):
    """Whole floats back to int so 450.0 is stored and served as 450."""
    return int(value) if value.is_integer() else value
