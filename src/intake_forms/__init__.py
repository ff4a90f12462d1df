"""intake_forms — data-driven clinical intake forms.

Public API:
    FormSchema          — immutable form definition (sections of fields)
    TemplateStore       — loads the built-in templates keyed by specialty
    FormSession         — holds answers/errors and gates submission
    VisibilityEvaluator — decides whether a conditional field is shown
    FieldValidator      — per-field and whole-form validation

Functional shorthands:
    is_visible, visible_fields         — visibility with a shared evaluator
    validate_field, validate_form      — validation with a shared validator
    validate_responses                 — validation wrapped in ValidationResult
    build_render_plan, sort_fields     — what a renderer draws, in order
    coerce_input, toggle_option        — raw widget values to stored answers
"""

from intake_forms.inputs import coerce_input, scale_points, toggle_option
from intake_forms.layout import build_render_plan, is_full_width, sort_fields
from intake_forms.models import (
    AcceptedSubmission,
    FieldCondition,
    FieldError,
    FieldOption,
    FieldValidation,
    FormField,
    FormFieldValue,
    FormResponses,
    FormSchema,
    FormSection,
    FormSessionStatus,
    RejectedSubmission,
    RenderedField,
    RenderedSection,
    RenderPlan,
    SubmitResult,
    TemplateInfo,
    ValidationResult,
)
from intake_forms.session import FormSession, initial_responses
from intake_forms.templates import TemplateStore
from intake_forms.validation import (
    FieldValidator,
    validate_field,
    validate_form,
    validate_responses,
)
from intake_forms.visibility import VisibilityEvaluator, is_visible, visible_fields

__all__ = [
    # Schema
    "FieldCondition",
    "FieldOption",
    "FieldValidation",
    "FormField",
    "FormFieldValue",
    "FormResponses",
    "FormSchema",
    "FormSection",
    "TemplateInfo",
    # Templates
    "TemplateStore",
    # Visibility
    "VisibilityEvaluator",
    "is_visible",
    "visible_fields",
    # Validation
    "FieldError",
    "FieldValidator",
    "ValidationResult",
    "validate_field",
    "validate_form",
    "validate_responses",
    # Session
    "AcceptedSubmission",
    "FormSession",
    "FormSessionStatus",
    "RejectedSubmission",
    "SubmitResult",
    "initial_responses",
    # Rendering
    "RenderedField",
    "RenderedSection",
    "RenderPlan",
    "build_render_plan",
    "coerce_input",
    "is_full_width",
    "scale_points",
    "sort_fields",
    "toggle_option",
]
