"""
Schema-driven record validation and normalization.

This module validates a raw attribute bag against a template's field list and
produces either a normalized bag or the complete list of problems.

Validation Rules:
- The payload must be a mapping, else a single structural detail on field "_"
- Keys not declared in the schema are rejected, one detail per key
- None, "" and absent keys are "missing"; required+missing is a detail,
  optional+missing is silently dropped from the output
- Per-type checks are independent per field (no cross-field rules):
  - string: must already be a string
  - number: number or numeric string, then min, then max (first failure wins)
  - boolean: bool or exactly "true"/"false"
  - date: YYYY-MM-DD that round-trips as a real calendar date
  - select: string member of the field's options

Normalization:
- numbers become int/float, booleans become bool, other types stay strings

The validator never raises for data-shaped problems: every detail is
collected so a form can highlight every invalid field at once. Re-validating
a normalized bag yields the same bag.
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from recordforge.models import (
    BooleanField,
    DateField,
    FieldSpec,
    NumberField,
    RecordValidationFailure,
    RecordValidationResult,
    RecordValidationSuccess,
    SelectField,
    StringField,
    TemplateSchema,
    TemplateSpec,
    ValidationDetail,
)
from recordforge.services.coercion import (
    coerce_boolean,
    coerce_number,
    is_missing,
    parse_calendar_date,
)

# Configure module logger
logger = logging.getLogger(__name__)

# Field key used for errors about the payload as a whole
STRUCTURAL_FIELD = '_'

# (normalized value, error message) - exactly one of the two is set
CheckOutcome = Tuple[Any, Optional[str]]


# =============================================================================
# Per-Type Checks
# =============================================================================


def _check_string(field: StringField, value: Any) -> CheckOutcome:
    if not isinstance(value, str):
        return None, f"{field.display_name} must be a string"
    return value, None


def _check_number(field: NumberField, value: Any) -> CheckOutcome:
    number = coerce_number(value)
    if number is None:
        return None, f"{field.display_name} must be a number"
    if field.min is not None and number < field.min:
        return None, f"{field.display_name} must be >= {_format_bound(field.min)}"
    if field.max is not None and number > field.max:
        return None, f"{field.display_name} must be <= {_format_bound(field.max)}"
    return number, None


def _check_boolean(field: BooleanField, value: Any) -> CheckOutcome:
    flag = coerce_boolean(value)
    if flag is None:
        return None, f"{field.display_name} must be a boolean"
    return flag, None


def _check_date(field: DateField, value: Any) -> CheckOutcome:
    if parse_calendar_date(value) is None:
        return None, f"{field.display_name} must be a date in YYYY-MM-DD format"
    return value, None


def _check_select(field: SelectField, value: Any) -> CheckOutcome:
    if not isinstance(value, str):
        return None, f"{field.display_name} must be a string"
    if value not in field.options:
        return None, f"{field.display_name} must be one of: {', '.join(field.options)}"
    return value, None


_CHECKS: Dict[str, Callable[[Any, Any], CheckOutcome]] = {
    'string': _check_string,
    'number': _check_number,
    'boolean': _check_boolean,
    'date': _check_date,
    'select': _check_select,
}


def _format_bound(bound: float) -> str:
    """Render 0.0 as "0" and 2.5 as "2.5" in messages."""
    if float(bound).is_integer():
        return str(int(bound))
    return str(bound)


# =============================================================================
# Public API
# =============================================================================


def resolve_fields(
    schema: Union[TemplateSpec, TemplateSchema, Sequence[FieldSpec]]
) -> List[FieldSpec]:
    """
    Extract the ordered field list from a template, schema, or field sequence.

    Raises:
        TypeError: If `schema` is none of the accepted shapes.
    """
    if isinstance(schema, TemplateSpec):
        return list(schema.schema_.fields)
    if isinstance(schema, TemplateSchema):
        return list(schema.fields)
    if isinstance(schema, (list, tuple)):
        for f in schema:
            if getattr(f, 'type', None) not in _CHECKS:
                raise TypeError(f"Unsupported field definition: {f!r}")
        return list(schema)
    raise TypeError(
        f"schema must be a TemplateSpec, TemplateSchema or field list, got {type(schema).__name__}"
    )


def check_field_value(field: FieldSpec, value: Any) -> CheckOutcome:
    """
    Run the type-specific check for one present (non-missing) value.

    Returns:
        (normalized_value, None) on success or (None, message) on failure.

    Raises:
        TypeError: If the field carries an unknown type tag.
    """
    check = _CHECKS.get(field.type)
    if check is None:
        raise TypeError(f"Unsupported field type: {field.type!r}")
    return check(field, value)


def validate_record(
    schema: Union[TemplateSpec, TemplateSchema, Sequence[FieldSpec]],
    raw: Any,
) -> RecordValidationResult:
    """
    Validate and normalize a raw attribute bag against a schema.

    Args:
        schema: Template, schema, or ordered list of fields.
        raw: The incoming attribute bag (usually decoded JSON).

    Returns:
        RecordValidationSuccess with the normalized bag, or
        RecordValidationFailure listing every problem found.

    Example:
        >>> result = validate_record(schema, {"amount": "42.5"})
        >>> result.ok, result.data
        (True, {'amount': 42.5})
    """
    fields = resolve_fields(schema)

    if not isinstance(raw, Mapping):
        return RecordValidationFailure(details=[
            ValidationDetail(field=STRUCTURAL_FIELD, message="data must be an object")
        ])

    details: List[ValidationDetail] = []
    normalized: Dict[str, Any] = {}
    allowed_ids = {f.id for f in fields}

    for key in raw.keys():
        if key not in allowed_ids:
            details.append(ValidationDetail(
                field=str(key),
                message=f'Unknown field "{key}" for this template',
            ))

    for field in fields:
        value = raw.get(field.id)

        if is_missing(value):
            if field.required:
                details.append(ValidationDetail(
                    field=field.id,
                    message=f"{field.display_name} is required",
                ))
            continue

        normalized_value, error = check_field_value(field, value)
        if error is not None:
            details.append(ValidationDetail(field=field.id, message=error))
            continue
        normalized[field.id] = normalized_value

    if details:
        logger.debug(
            f"Record rejected with {len(details)} detail(s): "
            f"{', '.join(d.field for d in details)}"
        )
        return RecordValidationFailure(details=details)

    return RecordValidationSuccess(data=normalized)
