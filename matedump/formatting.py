from __future__ import annotations

import math
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from numbers import Real
from typing import Optional

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def _finite(value: object) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    as_float = float(value)
    if not math.isfinite(as_float):
        return None
    return as_float


def to_fixed(value: float, digits: int) -> str:
    # Round half up on the exact binary value, like JavaScript's toFixed().
    quantum = Decimal(1).scaleb(-digits)
    try:
        return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        return f"{value:.{digits}f}"


def format_byte_size(size: object) -> str:
    value = _finite(size)
    if value is None or value < 0:
        return ""
    if value == 0:
        return "0 B"
    index = math.floor(math.log(value) / math.log(1024))
    index = max(0, min(index, len(SIZE_UNITS) - 1))
    scaled = value / math.pow(1024, index)
    digits = 0 if scaled >= 10 or index == 0 else 1
    text = to_fixed(scaled, digits)
    if text.endswith(".0"):
        # Whole values read as "1 KB", not "1.0 KB".
        text = text[:-2]
    return f"{text} {SIZE_UNITS[index]}"


def format_timestamp(ms: object) -> str:
    """Render epoch milliseconds as a local, locale-formatted date-time.

    The exact text depends on the host locale and time zone; callers may only
    rely on it being non-empty for representable timestamps.
    """
    value = _finite(ms)
    if value is None:
        return ""
    try:
        moment = datetime.fromtimestamp(value / 1000)
    except (OverflowError, OSError, ValueError):
        return ""
    return moment.strftime("%c")
