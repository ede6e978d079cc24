"""Validators that check an answer and raise ValidationError when it is unacceptable."""

from __future__ import annotations

from collections.abc import Sized
from typing import Any, Callable

Validator = Callable[[Any], None]


class ValidationError(ValueError):
    """An answer did not pass validation."""


def is_zero(value: Any) -> bool:
    """Return True if ``value`` is the empty or zero value of its type."""
    if value is None:
        return True
    if isinstance(value, Sized) and not isinstance(value, type):
        return len(value) == 0
    try:
        return value == type(value)()
    except TypeError:
        return False


def required(value: Any) -> None:
    """Reject empty answers; ``False`` is accepted."""
    if is_zero(value) and not isinstance(value, bool):
        raise ValidationError("Value is required")


def _type_name(value: Any) -> str:
    return type(value).__name__


def max_length(length: int) -> Validator:
    """Build a validator that rejects strings longer than ``length`` characters."""

    def validate(value: Any) -> None:
        if not isinstance(value, str):
            raise ValidationError(f"cannot enforce length on response of type {_type_name(value)}")
        if len(value) > length:
            raise ValidationError(f"value is too long. Max length is {length}")

    return validate


def min_length(length: int) -> Validator:
    """Build a validator that rejects strings shorter than ``length`` characters."""

    def validate(value: Any) -> None:
        if not isinstance(value, str):
            raise ValidationError(f"cannot enforce length on response of type {_type_name(value)}")
        if len(value) < length:
            raise ValidationError(f"value is too short. Min length is {length}")

    return validate


def compose_validators(*validators: Validator) -> Validator:
    """Combine validators; the first failure is raised."""

    def validate(value: Any) -> None:
        for validator in validators:
            validator(value)

    return validate