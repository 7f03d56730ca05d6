"""Schema Engine - validates row payloads against a datagrid's columns.

The column set is advisory: required columns must be filled and known keys
must fit their column type and rules, but keys without a column pass
through untouched unless strict mode is requested.
"""

import re
from datetime import date, datetime
from typing import Any, Iterable, Optional, Union

from pydantic import ValidationError

from core.exceptions import SchemaViolation
from core.logging_config import get_logger
from core.settings import settings
from schemas.column_schema import ColumnSchema, ColumnType, FieldError, ValidationRules
from services.column_type_registry import ColumnValueError, get_column_type_registry

logger = get_logger(__name__)

TEMPORAL_TYPES = (ColumnType.DATE, ColumnType.DATETIME)


def is_empty(value: Any) -> bool:
    """None, blank strings and empty containers count as missing; False and 0 do not."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, dict)):
        return len(value) == 0
    return False


def as_column_schemas(columns: Iterable[Any]) -> list[ColumnSchema]:
    return [
        column if isinstance(column, ColumnSchema) else ColumnSchema.model_validate(column)
        for column in columns
    ]


def check(
    columns: Iterable[Any],
    payload: Any,
    strict: bool = False,
) -> tuple[dict, list[FieldError]]:
    """
    Validate ``payload`` against ``columns`` and collect every problem.

    Returns the normalized payload (coerced values, everything else unchanged)
    together with the list of field errors. Nothing is raised for bad data.
    """
    if not isinstance(payload, dict):
        return {}, [FieldError.invalid_type("data", "an object mapping column keys to values")]

    schemas = as_column_schemas(columns)
    by_key = {column.key: column for column in schemas}
    registry = get_column_type_registry()

    errors: list[FieldError] = []
    for column in schemas:
        if column.required and is_empty(payload.get(column.key)):
            errors.append(FieldError.missing_field(column.key))

    normalized = dict(payload)
    for key, value in payload.items():
        column = by_key.get(key)
        if column is None:
            if strict:
                errors.append(FieldError.unknown_key(key))
            continue
        if is_empty(value):
            continue

        try:
            column_settings = column.settings
            column.rules  # parse only
        except ValidationError:
            logger.warning(f"Column '{key}' has an invalid definition; rejecting its value")
            errors.append(FieldError.rule_violation(key, "definition", f"{key} has an invalid column definition"))
            continue

        handler = registry.get_handler(column.type)
        try:
            coerced = handler.coerce(key, value, column_settings)
        except ColumnValueError as e:
            errors.append(e.error)
            continue

        errors.extend(apply_rules(column, coerced))
        normalized[key] = coerced

    return normalized, errors


def validate(
    columns: Iterable[Any],
    payload: Any,
    strict: Optional[bool] = None,
) -> dict:
    """Return the normalized payload or raise SchemaViolation with all field errors."""
    if strict is None:
        strict = settings.DATAGRID_REJECT_UNKNOWN_KEYS
    normalized, errors = check(columns, payload, strict=strict)
    if errors:
        logger.warning_ctx(
            "Row payload rejected",
            keys=",".join(dict.fromkeys(error.key for error in errors)),
            error_count=len(errors),
        )
        raise SchemaViolation(errors)
    return normalized


def apply_rules(column: ColumnSchema, value: Any) -> list[FieldError]:
    """Evaluate the column's validation rules against an already coerced value."""
    if not column.validation_rules:
        return []
    rules = column.rules
    key = column.key

    if column.type in TEMPORAL_TYPES:
        return _temporal_rule_errors(key, column.type, value, rules)
    if isinstance(value, bool):
        return []
    if isinstance(value, (int, float)):
        return _bound_errors(key, value, rules.min, rules.max, "")
    if isinstance(value, str):
        errors = _length_errors(key, len(value), rules, "characters")
        errors.extend(_pattern_errors(key, value, rules.pattern))
        return errors
    if isinstance(value, list):
        return _length_errors(key, len(value), rules, "items")
    return []


def _as_number(raw: Any) -> Optional[float]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return raw
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


def _bound_errors(key: str, value: Union[int, float], low: Any, high: Any, unit: str) -> list[FieldError]:
    errors = []
    suffix = f" {unit}" if unit else ""
    low_number = _as_number(low) if low is not None else None
    high_number = _as_number(high) if high is not None else None
    if low is not None and low_number is None:
        logger.warning(f"Ignoring non-numeric 'min' rule on column '{key}': {low!r}")
    if high is not None and high_number is None:
        logger.warning(f"Ignoring non-numeric 'max' rule on column '{key}': {high!r}")
    if low_number is not None and value < low_number:
        errors.append(FieldError.rule_violation(key, "min", f"{key} must be at least {low}{suffix}"))
    if high_number is not None and value > high_number:
        errors.append(FieldError.rule_violation(key, "max", f"{key} must be at most {high}{suffix}"))
    return errors


def _length_errors(key: str, length: int, rules: ValidationRules, unit: str) -> list[FieldError]:
    # min/max on text and lists bound the length
    errors = _bound_errors(key, length, rules.min, rules.max, unit)
    if rules.min_length is not None and length < rules.min_length:
        errors.append(FieldError.rule_violation(
            key, "minLength", f"{key} must have at least {rules.min_length} {unit}"
        ))
    if rules.max_length is not None and length > rules.max_length:
        errors.append(FieldError.rule_violation(
            key, "maxLength", f"{key} must have at most {rules.max_length} {unit}"
        ))
    return errors


def _pattern_errors(key: str, value: str, pattern: Optional[str]) -> list[FieldError]:
    if not pattern:
        return []
    try:
        matched = re.search(pattern, value) is not None
    except re.error:
        logger.warning(f"Invalid pattern rule on column '{key}': {pattern!r}")
        return [FieldError.rule_violation(key, "pattern", f"{key} has an invalid pattern rule")]
    if not matched:
        return [FieldError.rule_violation(key, "pattern", f"{key} does not match pattern {pattern}")]
    return []


def _parse_temporal(column_type: ColumnType, raw: Any) -> Optional[Union[date, datetime]]:
    if isinstance(raw, (date, datetime)):
        return raw
    if not isinstance(raw, str):
        return None
    try:
        if column_type == ColumnType.DATE:
            return date.fromisoformat(raw)
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None


def _temporal_rule_errors(key: str, column_type: ColumnType, value: str, rules: ValidationRules) -> list[FieldError]:
    current = _parse_temporal(column_type, value)
    errors = []
    for rule, bound in (("min", rules.min), ("max", rules.max)):
        if bound is None:
            continue
        limit = _parse_temporal(column_type, bound)
        if limit is None:
            logger.warning(f"Ignoring unparseable '{rule}' rule on column '{key}': {bound!r}")
            continue
        try:
            too_early = rule == "min" and current < limit
            too_late = rule == "max" and current > limit
        except TypeError:
            # Naive and aware datetimes cannot be compared
            logger.warning(f"Ignoring '{rule}' rule on column '{key}': timezone mismatch")
            continue
        if too_early:
            errors.append(FieldError.rule_violation(key, "min", f"{key} must not be before {bound}"))
        if too_late:
            errors.append(FieldError.rule_violation(key, "max", f"{key} must not be after {bound}"))
    return errors
