from __future__ import annotations

import math
from typing import Any


def string_to_number(value: Any) -> float | None:
    """Parse ffprobe's textual numbers ("128000", "3600.123").

    Missing values, "N/A" and anything else float() rejects come back as
    ``None`` instead of raising.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if math.isnan(number):
        return None
    return number


def parse_frame_rate(rate: str) -> float:
    """Evaluate an ffprobe rational such as "30000/1001" as a float.

    A bare number is taken as-is. Missing or non-numeric parts count as zero,
    and a zero denominator yields 0.0.
    """
    numerator, _, denominator = str(rate).partition("/")
    n = string_to_number(numerator) or 0.0
    d = string_to_number(denominator) if denominator else 1.0
    if not d:
        return 0.0
    return n / d
