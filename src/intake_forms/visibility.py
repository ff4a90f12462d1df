"""VisibilityEvaluator — decides whether a field is currently shown.

A field with a ``conditional_on`` rule is shown only when the referenced
field's current answer satisfies the comparison.  Both sides are compared as
display strings (see :mod:`intake_forms.coercion`):

  - **equals** (default): strings are equal
  - **not_equals**: strings differ
  - **contains**: the answer's string contains the target string
    (case-sensitive substring; a list answer is matched against its
    comma-joined form)

Unknown operator tokens leave the field visible.

Each field is evaluated on its own rule only.  A field whose dependency is
itself hidden by another rule can still be visible; there is no cascade.
Stale answers for hidden fields are kept in the response map and simply
ignored.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from intake_forms.coercion import MISSING, to_display_string
from intake_forms.constants import DEFAULT_CONDITION_OPERATOR
from intake_forms.models.field import FieldCondition, FormField
from intake_forms.models.schema import FormSchema

logger = logging.getLogger(__name__)


class VisibilityEvaluator:
    """Evaluates field visibility rules against a response map.

    Stateless; a single instance can be shared across sessions.
    """

    def is_visible(self, field: FormField, responses: Mapping[str, Any]) -> bool:
        """Return True if ``field`` should currently be shown.

        Only ``responses[field.conditional_on.field_id]`` is consulted, so
        editing any other answer never changes the result.
        """
        cond = field.conditional_on
        if cond is None:
            return True
        current = responses.get(cond.field_id, MISSING)
        return self._compare(cond, current)

    def visible_fields(
        self, schema: FormSchema, responses: Mapping[str, Any]
    ) -> list[FormField]:
        """All currently visible fields of ``schema`` in declaration order."""
        return [f for f in schema.fields if self.is_visible(f, responses)]

    @staticmethod
    def _compare(cond: FieldCondition, current: Any) -> bool:
        op = cond.operator or DEFAULT_CONDITION_OPERATOR
        answer = to_display_string(current)
        target = to_display_string(cond.value)

        if op == "equals":
            return answer == target
        if op == "not_equals":
            return answer != target
        if op == "contains":
            return target in answer

        logger.warning("Unknown condition operator %r on %s; field stays visible", op, cond.field_id)
        return True


# Module-level convenience API backed by a shared evaluator.
_default_evaluator = VisibilityEvaluator()


def is_visible(field: FormField, responses: Mapping[str, Any]) -> bool:
    """Shorthand for :meth:`VisibilityEvaluator.is_visible`."""
    return _default_evaluator.is_visible(field, responses)


def visible_fields(schema: FormSchema, responses: Mapping[str, Any]) -> list[FormField]:
    """Shorthand for :meth:`VisibilityEvaluator.visible_fields`."""
    return _default_evaluator.visible_fields(schema, responses)
