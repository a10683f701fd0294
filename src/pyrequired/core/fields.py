"""Field descriptors for structured records.

A structured record is a dataclass instance. Each of its fields may carry a
``required`` marker in ``dataclasses.field(metadata=...)``; this module reads
those markers into ordered FieldDescriptor tuples for the walker.
"""

from __future__ import annotations

import dataclasses
import os
import types
import typing
import warnings
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Union

REQUIRED_KEY = "required"
EMBEDDED_KEY = "embedded"

_REQUIRED_VALUES = (True, "true")
_NOT_REQUIRED_VALUES = (False, "false")
_NONE_NAMES = frozenset({"None", "NoneType"})
_PACKAGE_DIR = os.path.dirname(os.path.dirname(__file__)) + os.sep

# Stands in for a field that was never assigned (declared with init=False).
UNSET: Any = object()


class NotStructuredValueError(TypeError):
    """Raised when a value is not a structured record (dataclass instance)."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Expected a dataclass instance, got {type(value).__name__}.")


class RequiredMarkerWarning(UserWarning):
    """Emitted when a ``required`` marker holds a value other than true/false."""


@dataclass(frozen=True)
class FieldDescriptor:
    """Accessible field of a structured record type.

    Attributes:
        name: Declared field name, also the path segment used in reports.
        required: True when the field is marked ``required``.
        nullable: True when the declared type admits ``None``. A nullable field
            is zero only while it holds ``None``.
        embedded: True when the field is marked ``embedded``. Recorded for
            callers; path naming is the same as for any other field.
        accessor: Reads the field value from an instance, or UNSET when the
            attribute was never assigned.
    """

    name: str
    required: bool
    nullable: bool
    embedded: bool
    accessor: Callable[[Any], Any] = dataclasses.field(compare=False, repr=False)

    def value_of(self, record: Any) -> Any:
        return self.accessor(record)


def required(*, embedded: bool = False, **field_kwargs: Any) -> Any:
    """Declare a required dataclass field.

    Accepts the keyword arguments of ``dataclasses.field``; any ``metadata``
    passed in is kept and extended with the required marker.

        @dataclass
        class Person:
            name: str = required(default="")
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[REQUIRED_KEY] = True
    if embedded:
        metadata[EMBEDDED_KEY] = True
    return dataclasses.field(metadata=metadata, **field_kwargs)


def is_structured(value: object) -> bool:
    """Return True for dataclass instances (not dataclass types)."""
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def is_accessible(name: str) -> bool:
    return not name.startswith("_")


def describe_fields(record_or_type: object) -> tuple[FieldDescriptor, ...]:
    """Return accessible field descriptors of a dataclass type or instance.

    Fields are returned in declaration order, base-class fields first.
    Fields whose name starts with an underscore are omitted.

    Raises:
        NotStructuredValueError: If the argument is not a dataclass.
    """
    if not dataclasses.is_dataclass(record_or_type):
        raise NotStructuredValueError(record_or_type)

    cls = record_or_type if isinstance(record_or_type, type) else type(record_or_type)
    hints = _resolved_hints(cls)

    descriptors: list[FieldDescriptor] = []
    for f in dataclasses.fields(cls):
        if not is_accessible(f.name):
            continue
        descriptors.append(
            FieldDescriptor(
                name=f.name,
                required=parse_required_marker(f.metadata, owner=cls.__qualname__, field=f.name),
                nullable=is_nullable(hints.get(f.name, f.type)),
                embedded=bool(f.metadata.get(EMBEDDED_KEY, False)),
                accessor=_field_reader(f.name),
            )
        )
    return tuple(descriptors)


def parse_required_marker(metadata: Mapping[str, Any], *, owner: str, field: str) -> bool:
    """Interpret the ``required`` marker of one field's metadata.

    ``True`` and ``"true"`` mean required; ``False``, ``"false"`` and absence
    mean not required. Anything else is not required and warns.
    """
    if REQUIRED_KEY not in metadata:
        return False
    marker = metadata[REQUIRED_KEY]
    # bool is an int subclass; 1 == True must not count as a recognized marker.
    if isinstance(marker, (bool, str)):
        if marker in _REQUIRED_VALUES:
            return True
        if marker in _NOT_REQUIRED_VALUES:
            return False
    warnings.warn(
        f"Field {owner}.{field} has unrecognized {REQUIRED_KEY!r} marker {marker!r}; "
        "treating it as not required.",
        RequiredMarkerWarning,
        skip_file_prefixes=(_PACKAGE_DIR,),
    )
    return False


def is_nullable(annotation: object) -> bool:
    """Return True when an annotation admits ``None``.

    String annotations (unresolved forward references) are parsed at their
    top level only, so ``None`` inside a generic such as ``list[int | None]``
    does not make the field nullable.
    """
    if isinstance(annotation, str):
        return _text_is_nullable(annotation)
    if annotation is None or annotation is type(None):
        return True
    origin = typing.get_origin(annotation)
    if origin is typing.Annotated:
        return is_nullable(typing.get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        return any(is_nullable(arg) for arg in typing.get_args(annotation))
    return False


def _resolved_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        # Forward references to names that are not importable from the
        # defining module (e.g. classes local to a function).
        return {}


def _field_reader(name: str) -> Callable[[Any], Any]:
    def _read(record: Any) -> Any:
        return getattr(record, name, UNSET)

    return _read


def _text_is_nullable(text: str) -> bool:
    text = text.strip().strip("'\"").strip()
    members = _split_top_level(text, "|")
    if len(members) > 1:
        return any(_text_is_nullable(member) for member in members)

    bracket = text.find("[")
    if bracket == -1 or not text.endswith("]"):
        return text.rsplit(".", 1)[-1] in _NONE_NAMES

    origin = text[:bracket].strip().rsplit(".", 1)[-1]
    args = _split_top_level(text[bracket + 1 : -1], ",")
    if origin == "Optional":
        return True
    if origin == "Union":
        return any(_text_is_nullable(arg) for arg in args)
    if origin == "Annotated":
        return _text_is_nullable(args[0])
    return False


def _split_top_level(text: str, separator: str) -> list[str]:
    """Split ``text`` on ``separator`` where it is not nested inside brackets."""
    parts: list[str] = []
    depth = 0
    start = 0
    for index, char in enumerate(text):
        if char in "[(":
            depth += 1
        elif char in "])":
            depth -= 1
        elif char == separator and depth == 0:
            parts.append(text[start:index])
            start = index + 1
    parts.append(text[start:])
    return parts
