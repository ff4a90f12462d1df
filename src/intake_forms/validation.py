"""FieldValidator — per-field and whole-form validation.

Rules run in a fixed order and the first failure wins, so a field carries
at most one message:

  1. **required**: ``None``/absent or ``""`` fails
  2. **numeric bounds** (``number`` fields with an answer): below ``min`` or
     above ``max`` fails; bounds are inclusive
  3. **email format** (``email`` fields with a truthy answer)
  4. **pattern** (any field with ``validation.pattern`` and a truthy answer):
     regex search on the stringified answer

Other types (scale, select, date, phone ...) only go through the required
check unless a pattern is configured.

Whole-form validation only looks at fields that are currently visible, so a
required field hidden by its condition never blocks submission.  All
functions are total: they return messages, never raise.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

from intake_forms.coercion import (
    MISSING,
    format_number,
    is_empty,
    is_truthy,
    to_display_string,
    to_number,
)
from intake_forms.constants import (
    EMAIL_PATTERN,
    INVALID_EMAIL_MESSAGE,
    INVALID_FORMAT_MESSAGE,
    MAX_VALUE_MESSAGE,
    MIN_VALUE_MESSAGE,
    NON_INPUT_TYPES,
    REQUIRED_MESSAGE,
)
from intake_forms.models.field import FormField
from intake_forms.models.schema import FormSchema
from intake_forms.models.session import FieldError, ValidationResult
from intake_forms.visibility import VisibilityEvaluator

_EMAIL_RE = re.compile(EMAIL_PATTERN)


class FieldValidator:
    """Validates answers against field definitions.

    Args:
        evaluator: visibility evaluator used to skip hidden fields in
            :meth:`validate_form`; a fresh one is created when omitted.
    """

    def __init__(self, evaluator: VisibilityEvaluator | None = None) -> None:
        self._evaluator = evaluator or VisibilityEvaluator()

    def validate_field(self, field: FormField, value: Any = MISSING) -> str | None:
        """Return the first failing rule's message, or None when valid."""
        if field.required and is_empty(value):
            return REQUIRED_MESSAGE

        rules = field.validation

        if field.type == "number" and not is_empty(value) and rules is not None:
            num = to_number(value)
            # NaN compares False both ways, so unparseable input passes here
            if rules.min is not None and num < rules.min:
                return MIN_VALUE_MESSAGE.format(bound=format_number(rules.min))
            if rules.max is not None and num > rules.max:
                return MAX_VALUE_MESSAGE.format(bound=format_number(rules.max))

        if field.type == "email" and is_truthy(value):
            if not _EMAIL_RE.fullmatch(to_display_string(value)):
                return INVALID_EMAIL_MESSAGE

        if rules is not None and rules.pattern and is_truthy(value):
            if not re.search(rules.pattern, to_display_string(value)):
                return rules.pattern_message or INVALID_FORMAT_MESSAGE

        return None

    def validate_form(self, schema: FormSchema, responses: Mapping[str, Any]) -> dict[str, str]:
        """Validate every visible field; return ``{field_id: message}``.

        Keys follow schema declaration order.  An empty dict means the
        responses can be submitted.
        """
        errors: dict[str, str] = {}
        for field in schema.fields:
            if field.type in NON_INPUT_TYPES:
                continue
            if not self._evaluator.is_visible(field, responses):
                continue
            message = self.validate_field(field, responses.get(field.id, MISSING))
            if message is not None:
                errors[field.id] = message
        return errors

    def validate_responses(
        self, schema: FormSchema, responses: Mapping[str, Any]
    ) -> ValidationResult:
        """Like :meth:`validate_form` but wrapped in a ``ValidationResult``."""
        errors = self.validate_form(schema, responses)
        return ValidationResult(
            is_valid=not errors,
            errors=[FieldError(field_id=fid, message=msg) for fid, msg in errors.items()],
        )


_default_validator = FieldValidator()


def validate_field(field: FormField, value: Any = MISSING) -> str | None:
    """Shorthand for :meth:`FieldValidator.validate_field`."""
    return _default_validator.validate_field(field, value)


def validate_form(schema: FormSchema, responses: Mapping[str, Any]) -> dict[str, str]:
    """Shorthand for :meth:`FieldValidator.validate_form`."""
    return _default_validator.validate_form(schema, responses)


def validate_responses(schema: FormSchema, responses: Mapping[str, Any]) -> ValidationResult:
    """Shorthand for :meth:`FieldValidator.validate_responses`."""
    return _default_validator.validate_responses(schema, responses)
