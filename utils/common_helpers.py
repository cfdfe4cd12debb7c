import math
from typing import Any, Optional


def safe_float(x: Any) -> Optional[float]:
    try:
        if x is None:
            return None
        f = float(x)
    except (TypeError, ValueError, OverflowError):
        return None
    return f if math.isfinite(f) else None


def safe_int(x: Any) -> Optional[int]:
    f = safe_float(x)
    return None if f is None else int(f)


def normalize_symbol(value: Optional[str]) -> str:
    """Case-folded ticker used for lookups; stored symbols keep their original casing."""
    return (value or "").strip().upper()
