"""Required-field validation for structured records.

Records are dataclass instances. Fields are marked required through their
``dataclasses.field`` metadata, and the walker reports the dotted path of
every required field still holding its zero value.
"""

from pyrequired.core.fields import (
    EMBEDDED_KEY,
    REQUIRED_KEY,
    FieldDescriptor,
    NotStructuredValueError,
    RequiredMarkerWarning,
    describe_fields,
    required,
)
from pyrequired.core.walker import (
    MissingRequiredFieldsError,
    all_required_present,
    find_missing_required,
    require_present,
)
from pyrequired.core.zero import is_zero

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
