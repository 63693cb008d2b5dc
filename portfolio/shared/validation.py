"""
Validation gate shared by every resource.

Each resource defines pydantic schemas; run_gate checks required fields first
(an empty string counts as missing) and then lets the schema check formats
and enumerations. Nothing here performs I/O.
"""
from typing import Any, Callable, Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from portfolio.shared.errors import ValidationError

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"


def missing_fields(data: dict, required: tuple[str, ...]) -> list[str]:
    return [name for name in required if not data.get(name)]


def reject_null(value: Any) -> Any:
    """Before-validator for update fields that may be left out but never cleared."""
    if value is None:
        raise ValueError("must not be null")
    return value


def run_gate(
    schema: Type[BaseModel],
    data: dict,
    required: tuple[str, ...] = (),
    describe: Optional[Callable[[str], Optional[str]]] = None,
    partial: bool = False,
) -> dict:
    """
    Validate data against schema and return the cleaned record.

    With partial=True only the fields present in data are returned, for
    update bodies.

    Raises:
        ValidationError: listing missing required fields, or describing the
            first field that failed the schema
    """
    missing = missing_fields(data, required)
    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}",
            missing_fields=missing,
        )

    try:
        model = schema.model_validate(data)
    except SchemaValidationError as e:
        first = e.errors()[0]
        field_name = str(first["loc"][0]) if first["loc"] else ""
        message = describe(field_name) if describe else None
        if message is None:
            message = f"Invalid value for {field_name}: {first['msg']}"
        raise ValidationError(message) from e

    return model.model_dump(exclude_unset=partial)
