"""
Input Normalization Utilities
=============================

Single source of truth for input normalization.
All parsing of external inputs happens here, nowhere else.

Two flavours:

- STRICT (to_int, to_float, to_bool, to_enum, ...): raise ValidationError on
  malformed input. Used where a bad value must be rejected (enums).
- PERMISSIVE (float_or_none, int_or_default): malformed or out-of-range input
  degrades to "absent" / default and is logged at DEBUG. Used for optional
  search filters, where a bad bound should widen the search, not fail it.

Usage:
    from utils.normalize import to_enum, float_or_none, ValidationError

    def parse(args):
        min_rent = float_or_none(args.get("minRent"), field="minRent", min_value=0)
        try:
            room_type = to_enum(args.get("roomType"), RoomType, field="roomType")
        except ValidationError as e:
            raise InvalidEnum(str(e), field="roomType")
"""

import logging
import math
from enum import Enum
from typing import Any, Optional, Type, TypeVar

E = TypeVar('E', bound=Enum)

logger = logging.getLogger('utils.normalize')


class ValidationError(ValueError):
    """Raised when input cannot be normalized to expected type."""

    def __init__(self, message: str, field: str = None, received_value=None):
        super().__init__(message)
        self.field = field
        self.received_value = received_value


def to_int(
    value: Optional[str],
    *,
    default: Optional[int] = None,
    field: str = None
) -> Optional[int]:
    """
    Convert string to int, with explicit None handling.

    Args:
        value: Input string (typically from request.args.get())
        default: Value to return if input is None or empty
        field: Field name for error messages

    Returns:
        Parsed integer or default

    Raises:
        ValidationError: If value cannot be converted to int
    """
    if value is None or value == "":
        return default
    try:
        return int(str(value).strip())
    except (ValueError, TypeError):
        raise ValidationError(
            f"Expected int, got {type(value).__name__}: {value!r}",
            field=field,
            received_value=value
        )


def to_float(
    value: Optional[str],
    *,
    default: Optional[float] = None,
    field: str = None
) -> Optional[float]:
    """
    Convert string to a finite float, with explicit None handling.

    'nan' and 'inf' parse as floats in Python but are rejected here:
    they are never meaningful as prices or coordinates.

    Raises:
        ValidationError: If value cannot be converted to a finite float
    """
    if value is None or value == "":
        return default
    try:
        result = float(str(value).strip())
    except (ValueError, TypeError):
        raise ValidationError(
            f"Expected float, got {type(value).__name__}: {value!r}",
            field=field,
            received_value=value
        )
    if not math.isfinite(result):
        raise ValidationError(
            f"Expected finite float, got: {value!r}",
            field=field,
            received_value=value
        )
    return result


def to_bool(
    value: Optional[str],
    *,
    default: Optional[bool] = False,
    field: str = None
) -> Optional[bool]:
    """
    Convert string to bool.

    Accepts (case-insensitive):
        True: 'true', '1', 'yes', 'on'
        False: 'false', '0', 'no', 'off'

    Raises:
        ValidationError: If value is not a recognized boolean string
    """
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    lower = str(value).strip().lower()
    if lower in ("true", "1", "yes", "on"):
        return True
    if lower in ("false", "0", "no", "off"):
        return False
    raise ValidationError(
        f"Expected bool, got: {value!r}",
        field=field,
        received_value=value
    )


def to_str(
    value: Optional[str],
    *,
    default: Optional[str] = None,
    strip: bool = True,
    field: str = None
) -> Optional[str]:
    """
    Normalize string input, optionally stripping whitespace.

    Whitespace-only input is treated as empty and returns default.
    """
    if value is None or value == "":
        return default
    result = str(value)
    if strip:
        result = result.strip()
    if result == "":
        return default
    return result


def to_list(
    value: Optional[str],
    *,
    default: Optional[list] = None,
    separator: str = ",",
    unique: bool = False,
    field: str = None
) -> list:
    """
    Convert a separated string to a list of trimmed, non-empty strings.

    Args:
        value: Input string (e.g., "WiFi, AC,,Parking")
        default: Value to return if input is None or empty
        separator: Separator character
        unique: Drop case-insensitive duplicates (first occurrence wins)
        field: Field name for error messages

    Returns:
        List of strings, or default ([] when no default given)
    """
    if value is None or value == "":
        return default if default is not None else []

    items = [item.strip() for item in str(value).split(separator) if item.strip()]

    if unique:
        seen = set()
        deduped = []
        for item in items:
            key = item.lower()
            if key not in seen:
                seen.add(key)
                deduped.append(item)
        items = deduped

    return items


def to_enum(
    value: Optional[str],
    enum_class: Type[E],
    *,
    default: Optional[E] = None,
    field: str = None
) -> Optional[E]:
    """
    Convert string to enum member.

    Matches by value only (exact, then case-insensitive). Member names are
    not accepted: "ONE_BHK" is not a wire value for "1bhk".

    Raises:
        ValidationError: If value doesn't match any enum member
    """
    if value is None or value == "":
        return default

    value = str(value).strip()
    if value == "":
        return default

    for member in enum_class:
        if member.value == value:
            return member

    value_lower = value.lower()
    for member in enum_class:
        if str(member.value).lower() == value_lower:
            return member

    valid_values = [m.value for m in enum_class]
    raise ValidationError(
        f"Expected one of {valid_values}, got: {value!r}",
        field=field,
        received_value=value
    )


# ============================================================================
# PERMISSIVE PARSING (optional search filters)
# ============================================================================

def float_or_none(
    value: Any,
    *,
    field: str = None,
    min_value: Optional[float] = None,
) -> Optional[float]:
    """
    Parse an optional numeric filter, dropping anything unusable.

    Malformed, non-finite, or below-minimum values return None (the filter
    is treated as absent) and are logged at DEBUG as a degraded input.
    """
    try:
        result = to_float(value, field=field)
    except ValidationError:
        _log_degraded(field, value, "not a number")
        return None
    if result is None:
        return None
    if min_value is not None and result < min_value:
        _log_degraded(field, value, f"below {min_value}")
        return None
    return result


def int_or_default(
    value: Any,
    default: int,
    *,
    field: str = None,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> int:
    """
    Parse an optional integer, falling back to default when unusable.

    Used for page/limit: "page=abc" or "page=0" should not fail a search.
    Values above max_value are clamped to it.
    """
    try:
        result = to_int(value, field=field)
    except ValidationError:
        _log_degraded(field, value, "not an integer")
        return default
    if result is None:
        return default
    if min_value is not None and result < min_value:
        _log_degraded(field, value, f"below {min_value}")
        return default
    if max_value is not None and result > max_value:
        _log_degraded(field, value, f"clamped to {max_value}")
        return max_value
    return result


def _log_degraded(field: Optional[str], value: Any, reason: str) -> None:
    logger.debug("input_degraded field=%s value=%r reason=%s", field, value, reason)

