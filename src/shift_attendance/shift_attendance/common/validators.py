from __future__ import annotations

import math
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def finite_or_none(value: Any) -> Optional[float]:
    """Coerce to a finite float; non-numeric, NaN and infinite values become None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def finite_or_zero(value: Any) -> float:
    number = finite_or_none(value)
    return number if number is not None else 0.0


def clean_text(value: Any) -> str:
    return str(value).strip() if value is not None else ""
