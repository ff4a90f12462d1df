"""Render plan builder — turns a schema plus session state into what a UI draws.

Sections keep their declaration order; fields inside a section are sorted by
``order`` (stable, so ties keep their declared order) and filtered to the
ones currently visible.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from intake_forms.constants import FULL_WIDTH_TYPES
from intake_forms.models.field import FormField
from intake_forms.models.render import RenderedField, RenderedSection, RenderPlan
from intake_forms.models.schema import FormSchema
from intake_forms.visibility import VisibilityEvaluator


def sort_fields(fields: Iterable[FormField]) -> list[FormField]:
    """Fields sorted ascending by ``order``; equal orders keep input order."""
    return sorted(fields, key=lambda f: f.order)


def is_full_width(field: FormField) -> bool:
    """True when the field spans the whole row.

    Text areas and section headers always do; other types only with an
    explicit ``width="full"`` hint.
    """
    return field.width == "full" or field.type in FULL_WIDTH_TYPES


def build_render_plan(
    schema: FormSchema,
    responses: Mapping[str, Any],
    errors: Mapping[str, str] | None = None,
    *,
    read_only: bool = False,
    evaluator: VisibilityEvaluator | None = None,
) -> RenderPlan:
    """Build the render plan for the current responses and errors.

    Args:
        schema: the form being filled in
        responses: current answers keyed by field id
        errors: current errors keyed by field id (from the last submit)
        read_only: render every input disabled (e.g. reviewing a submission)
        evaluator: visibility evaluator to use; a fresh one when omitted
    """
    evaluator = evaluator or VisibilityEvaluator()
    errors = errors or {}

    sections: list[RenderedSection] = []
    for section in schema.sections:
        rendered = [
            RenderedField(
                field=field,
                value=responses.get(field.id),
                error=errors.get(field.id),
                full_width=is_full_width(field),
                disabled=read_only or field.read_only,
            )
            for field in sort_fields(section.fields)
            if evaluator.is_visible(field, responses)
        ]
        sections.append(
            RenderedSection(title=section.title, description=section.description, fields=rendered)
        )

    return RenderPlan(title=schema.title, description=schema.description, sections=sections)
