"""FormSession — holds the answers and errors of one in-progress form.

Lifecycle::

    session = FormSession(schema, on_submit=save_responses)
    session.set_value("name", "Ana")        # clears any error on "name"
    result = session.submit()               # validate visible fields
    if result.type == "rejected":
        show(result.errors)                 # nothing was handed off
    # else: save_responses(responses) was called exactly once

State machine: ``editing`` → (submit) → ``invalid`` | ``submitted``.  There
is no in-flight state: hand-off to ``on_submit`` is a single call from the
session's point of view.  If the collaborator persists asynchronously it
owns its own loading/retry state and must not call :meth:`submit_async`
again while the first call is pending.

Responses and errors are never mutated in place; every change swaps in a
new dict, so snapshots handed out earlier stay unchanged.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Mapping, Optional

from intake_forms.constants import NON_INPUT_TYPES
from intake_forms.layout import build_render_plan
from intake_forms.models.field import FormField, FormFieldValue
from intake_forms.models.render import RenderPlan
from intake_forms.models.schema import FormResponses, FormSchema
from intake_forms.models.session import (
    AcceptedSubmission,
    FormSessionStatus,
    RejectedSubmission,
    SubmitResult,
)
from intake_forms.validation import FieldValidator
from intake_forms.visibility import VisibilityEvaluator

logger = logging.getLogger(__name__)

SubmitHandler = Callable[[FormResponses], Any]
CancelHandler = Callable[[], Any]


def initial_responses(schema: FormSchema) -> FormResponses:
    """Seed a response map from the fields' ``default_value`` entries."""
    return {
        f.id: list(f.default_value) if isinstance(f.default_value, list) else f.default_value
        for f in schema.fields
        if f.default_value is not None and f.type not in NON_INPUT_TYPES
    }


class FormSession:
    """Session controller for a single form being filled in.

    Args:
        schema: the form definition; treated as read-only
        initial_data: answers to start from (edit flows); copied
        on_submit: called with the response map once validation passes
        on_cancel: called by :meth:`cancel`
    """

    def __init__(
        self,
        schema: FormSchema,
        *,
        initial_data: Optional[Mapping[str, FormFieldValue]] = None,
        on_submit: Optional[SubmitHandler] = None,
        on_cancel: Optional[CancelHandler] = None,
    ) -> None:
        self._schema = schema
        self._header_ids = {f.id for f in schema.fields if f.type in NON_INPUT_TYPES}
        self._responses: FormResponses = {
            k: v for k, v in (initial_data or {}).items() if k not in self._header_ids
        }
        self._errors: dict[str, str] = {}
        self._status = FormSessionStatus.EDITING
        self._on_submit = on_submit
        self._on_cancel = on_cancel
        self._evaluator = VisibilityEvaluator()
        self._validator = FieldValidator(self._evaluator)

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def schema(self) -> FormSchema:
        return self._schema

    @property
    def responses(self) -> FormResponses:
        """Snapshot of the current answers."""
        return dict(self._responses)

    @property
    def errors(self) -> dict[str, str]:
        """Snapshot of the current errors, keyed by field id."""
        return dict(self._errors)

    @property
    def status(self) -> FormSessionStatus:
        return self._status

    def value_for(self, field_id: str) -> FormFieldValue:
        return self._responses.get(field_id)

    def error_for(self, field_id: str) -> str | None:
        return self._errors.get(field_id)

    def visible_fields(self) -> list[FormField]:
        """Fields currently shown, in declaration order."""
        return self._evaluator.visible_fields(self._schema, self._responses)

    def render(self, *, read_only: bool = False) -> RenderPlan:
        """Render plan for the current answers and errors."""
        return build_render_plan(
            self._schema,
            self._responses,
            self._errors,
            read_only=read_only,
            evaluator=self._evaluator,
        )

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def set_value(self, field_id: str, value: FormFieldValue) -> None:
        """Record an answer and clear that field's error.

        No validation runs here; errors only reappear on the next submit.
        Answers of fields that become hidden are kept so that re-revealing
        the field shows the earlier answer again.

        Raises:
            ValueError: if ``field_id`` is a section header.
        """
        if field_id in self._header_ids:
            raise ValueError(f"field {field_id!r} is a section header and has no value")
        self._responses = {**self._responses, field_id: value}
        if field_id in self._errors:
            self._errors = {k: v for k, v in self._errors.items() if k != field_id}
        if not self._errors:
            self._status = FormSessionStatus.EDITING

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def _check(self) -> RejectedSubmission | None:
        errors = self._validator.validate_form(self._schema, self._responses)
        if errors:
            self._errors = errors
            self._status = FormSessionStatus.INVALID
            logger.info(
                "Form %r rejected: %d field error(s) %s",
                self._schema.title, len(errors), list(errors),
            )
            return RejectedSubmission(errors=errors)
        return None

    def _accept(self, responses: FormResponses, handler_result: Any) -> AcceptedSubmission:
        self._status = FormSessionStatus.SUBMITTED
        logger.info("Form %r submitted with %d answer(s)", self._schema.title, len(responses))
        return AcceptedSubmission(responses=responses, handler_result=handler_result)

    def submit(self) -> SubmitResult:
        """Validate visible fields and hand the answers to ``on_submit``.

        On failure the error map is replaced and ``on_submit`` is not
        called.  On success responses and errors are left as they are; the
        collaborator decides what happens next (navigate, clear ...).

        If ``on_submit`` returns an awaitable it is returned un-awaited in
        ``handler_result``; use :meth:`submit_async` for async handlers.
        """
        rejected = self._check()
        if rejected is not None:
            return rejected

        responses = self.responses
        result = self._on_submit(responses) if self._on_submit is not None else None
        return self._accept(responses, result)

    async def submit_async(self) -> SubmitResult:
        """Same as :meth:`submit`, awaiting ``on_submit`` if it is async."""
        rejected = self._check()
        if rejected is not None:
            return rejected

        responses = self.responses
        result = None
        if self._on_submit is not None:
            result = self._on_submit(responses)
            if inspect.isawaitable(result):
                result = await result
        return self._accept(responses, result)

    def cancel(self) -> None:
        """Notify ``on_cancel``; the session state is left untouched."""
        if self._on_cancel is not None:
            self._on_cancel()
