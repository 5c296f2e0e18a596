"""Risk Advisor – Field validation helpers.

Small helpers shared by the profile and portfolio record types. Every
helper raises :class:`~riskadvisor.core.errors.ValidationError` naming
the offending field; values are never silently coerced into range.
"""

from __future__ import annotations

import math
import numbers
from enum import Enum
from typing import Any, Mapping, Type, TypeVar

from riskadvisor.core.errors import ValidationError


E = TypeVar("E", bound=Enum)


def coerce_enum(enum_cls: Type[E], value: Any, field: str) -> E:
    """Return ``value`` as a member of ``enum_cls``.

    Accepts either a member or its string value (case-insensitive).
    """

    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    allowed = ", ".join(m.value for m in enum_cls)
    raise ValidationError(f"{field}={value!r} is not one of: {allowed}", field=field)


def require_non_negative(value: Any, field: str) -> float:
    """Return ``value`` as a finite float >= 0."""

    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValidationError(f"{field} must be a number, got {value!r}", field=field)
    result = float(value)
    if math.isnan(result) or math.isinf(result):
        raise ValidationError(f"{field} must be finite, got {value!r}", field=field)
    if result < 0.0:
        raise ValidationError(f"{field} must be non-negative, got {value!r}", field=field)
    return result


def require_int(value: Any, field: str, *, minimum: int) -> int:
    """Return ``value`` as an int >= ``minimum``."""

    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValidationError(f"{field} must be an integer, got {value!r}", field=field)
    result = int(value)
    if result < minimum:
        raise ValidationError(f"{field} must be >= {minimum}, got {value!r}", field=field)
    return result


def pick(data: Mapping[str, Any], snake: str, camel: str, default: Any = ...) -> Any:
    """Read a field from a raw record under its snake_case or camelCase key."""

    if snake in data:
        return data[snake]
    if camel in data:
        return data[camel]
    if default is ...:
        raise ValidationError(f"missing required field {snake!r}", field=snake)
    return default
