"""
Input validation utilities for engineer, project and assignment records.

These checks fail fast with InputError. They guard against caller bugs and
are never used to report business-rule violations such as exceeded capacity.
"""
from collections import abc
from datetime import date, datetime
from typing import Any, Optional, FrozenSet

from utils.errors import InputError


def check_percentage(value: Any, field_name: str) -> int:
    """
    Check that a value is an integer percentage in the range 0-100.

    Args:
        value: Value to check
        field_name: Field name used in the error message

    Returns:
        int: The value as an integer

    Raises:
        InputError: If the value is not an integer or is out of range
    """
    # bool is an int subclass but never a meaningful percentage
    if isinstance(value, bool):
        raise InputError(f"{field_name} must be an integer, got {value!r}")

    if isinstance(value, float):
        if not value.is_integer():
            raise InputError(f"{field_name} must be a whole number, got {value!r}")
        value = int(value)

    if not isinstance(value, int):
        raise InputError(f"{field_name} must be an integer, got {value!r}")

    if value < 0 or value > 100:
        raise InputError(f"{field_name} must be between 0 and 100, got {value}")

    return value


def parse_date(value: Any, field_name: str) -> Optional[date]:
    """
    Parse an optional date value.

    Accepts None, empty strings, date and datetime objects, and ISO-8601
    strings ("2024-03-01" or a full timestamp such as
    "2024-03-01T00:00:00.000Z").

    Raises:
        InputError: If the value cannot be interpreted as a date
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if not isinstance(value, str):
        raise InputError(f"{field_name} must be an ISO date string, got {value!r}")

    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise InputError(f"{field_name} is not a valid date: {value!r}") from None


def check_date_range(
    start_date: Optional[date], end_date: Optional[date], context: str
) -> None:
    """Check that an end date does not precede its start date."""
    if start_date is not None and end_date is not None and end_date < start_date:
        raise InputError(
            f"{context}: endDate {end_date.isoformat()} is before "
            f"startDate {start_date.isoformat()}"
        )


def check_skills(skills: Any, field_name: str) -> FrozenSet[str]:
    """
    Normalise a skill collection to a frozenset of strings.

    Raises:
        InputError: If the collection is a bare string or holds non-strings
    """
    if skills is None:
        return frozenset()

    if isinstance(skills, str) or not isinstance(skills, abc.Iterable):
        raise InputError(f"{field_name} must be a list of strings, got {skills!r}")

    items = list(skills)
    for skill in items:
        if not isinstance(skill, str):
            raise InputError(f"{field_name} must contain only strings, got {skill!r}")

    return frozenset(items)


def require_field(record: dict, *names: str) -> Any:
    """
    Return the first present value among several field aliases.

    Raises:
        InputError: If none of the aliases is present
    """
    for name in names:
        if record.get(name) is not None:
            return record[name]
    raise InputError(f"Missing required field {names[0]!r} in record {record!r}")


def reference_id(value: Any, field_name: str) -> str:
    """
    Extract an id from a reference that may be a plain id or a populated record.
    """
    if isinstance(value, dict):
        value = value.get("_id", value.get("id"))

    if value is None or value == "":
        raise InputError(f"{field_name} is missing")

    return str(value)
