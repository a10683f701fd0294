"""Recursive required-field walker.

Walks a structured record (a dataclass instance) depth-first in field
declaration order and yields the dotted path of every required field that
holds its zero value.

A required field that is zero is reported once by its own path; its subtree
is not descended. Any other field holding a dataclass instance is descended,
whether or not it is required. A nullable field holding None is neither
descended nor reported unless it is required.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, TypeVar

from pyrsistent import PVector, pvector

from pyrequired.core.fields import (
    FieldDescriptor,
    NotStructuredValueError,
    describe_fields,
    is_structured,
)
from pyrequired.core.zero import field_is_zero

T = TypeVar("T")

PATH_SEPARATOR = "."


class MissingRequiredFieldsError(ValueError):
    """Raised by require_present when required fields hold zero values."""

    def __init__(self, missing: tuple[str, ...]):
        self.missing = missing
        super().__init__(f"Missing required fields: {', '.join(missing)}")


# ---------------------------------------------------------------------------
# Helper predicates
# ---------------------------------------------------------------------------


def _is_required_and_empty(descriptor: FieldDescriptor, value: Any) -> bool:
    return descriptor.required and field_is_zero(descriptor, value)


def _should_recurse_into(value: Any) -> bool:
    # None (an unset nullable field) and non-record values stop the descent.
    return is_structured(value)


# ---------------------------------------------------------------------------
# Walker implementation
# ---------------------------------------------------------------------------


def _iter_missing(record: Any, parent: PVector) -> Iterator[str]:
    """Yield missing paths lazily so callers can stop at the first one."""
    for descriptor in describe_fields(record):
        value = descriptor.value_of(record)
        path = parent.append(descriptor.name)

        if _is_required_and_empty(descriptor, value):
            yield PATH_SEPARATOR.join(path)
            continue  # Reported as a whole; skip its subtree.

        if _should_recurse_into(value):
            yield from _iter_missing(value, path)


def _walk(value: Any) -> Iterator[str]:
    # Not a generator itself, so the shape check raises at call time.
    if not is_structured(value):
        raise NotStructuredValueError(value)
    return _iter_missing(value, pvector())


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def find_missing_required(value: Any) -> list[str]:
    """Return paths of required fields that hold their zero value.

    Paths are dot-separated field names from the root record, ordered
    depth-first by field declaration. Embedded fields contribute their own
    name like any other field. An empty list means every required field is
    set.

    Raises:
        NotStructuredValueError: If ``value`` is not a dataclass instance.
    """
    return list(_walk(value))


def all_required_present(value: Any) -> bool:
    """Return True when no required field, at any depth, holds its zero value.

    Stops at the first missing field.

    Raises:
        NotStructuredValueError: If ``value`` is not a dataclass instance.
    """
    return next(_walk(value), None) is None


def require_present(value: T) -> T:
    """Return ``value`` unchanged if all required fields are set.

    Raises:
        NotStructuredValueError: If ``value`` is not a dataclass instance.
        MissingRequiredFieldsError: If any required field holds its zero value.
    """
    missing = find_missing_required(value)
    if missing:
        raise MissingRequiredFieldsError(tuple(missing))
    return value
