"""pyrequired: report unset required fields of dataclass records."""

from pyrequired.core import (
    EMBEDDED_KEY,
    REQUIRED_KEY,
    FieldDescriptor,
    MissingRequiredFieldsError,
    NotStructuredValueError,
    RequiredMarkerWarning,
    all_required_present,
    describe_fields,
    find_missing_required,
    is_zero,
    require_present,
    required,
)

__all__ = [
    "EMBEDDED_KEY",
    "REQUIRED_KEY",
    "FieldDescriptor",
    "MissingRequiredFieldsError",
    "NotStructuredValueError",
    "RequiredMarkerWarning",
    "all_required_present",
    "describe_fields",
    "find_missing_required",
    "is_zero",
    "require_present",
    "required",
]
