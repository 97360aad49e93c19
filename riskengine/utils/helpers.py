"""
Helper Functions
Small numeric and formatting helpers shared across the engine
"""

import math
import numbers
import random
import string
from datetime import datetime
from typing import Any

def generate_id(prefix: str = "assessment") -> str:
    timestamp = datetime.utcnow().strftime("%Y%m%d%H%M%S")
    random_suffix = ''.join(random.choices(string.ascii_lowercase + string.digits, k=6))
    return f"{prefix}_{timestamp}_{random_suffix}"

def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))

def round_score(value: float, decimal_places: int = 2) -> float:
    return round(float(value), decimal_places)

def to_float(value: Any, default: float = 0.0) -> float:
    """Numeric signal value, or ``default`` for booleans, strings, None, non-finite and out-of-range numbers."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return default
    try:
        result = float(value)
    except (OverflowError, ValueError):
        return default
    if not math.isfinite(result):
        return default
    return result
