"""Zero-value ("is default") checks.

``is_zero`` is a single-dispatch function so host applications can teach it
about their own value types:

    @is_zero.register
    def _(value: Money) -> bool:
        return value.cents == 0
"""

from __future__ import annotations

from collections.abc import Sized
from functools import singledispatch
from numbers import Number

from pyrequired.core.fields import UNSET, FieldDescriptor, describe_fields, is_structured


@singledispatch
def is_zero(value: object) -> bool:
    """Return True when ``value`` holds the default value for its type.

    None is zero. A dataclass instance is zero when all of its accessible
    fields are zero. Values of unknown types are never zero.
    """
    if value is None:
        return True
    if is_structured(value):
        return record_is_zero(value)
    return False


@is_zero.register
def _(value: Number) -> bool:
    return value == 0


@is_zero.register
def _(value: Sized) -> bool:
    if is_structured(value):
        return record_is_zero(value)
    return len(value) == 0


def field_is_zero(descriptor: FieldDescriptor, value: object) -> bool:
    """Zero check for a field value, honoring the declared nullability.

    A field that was never assigned is zero whatever its type.
    """
    if value is UNSET:
        return True
    if descriptor.nullable:
        return value is None
    return is_zero(value)


def record_is_zero(record: object) -> bool:
    return all(field_is_zero(d, d.value_of(record)) for d in describe_fields(record))
