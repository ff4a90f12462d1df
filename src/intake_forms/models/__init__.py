"""Public model re-exports for intake_forms.

Consumers should import from ``intake_forms.models`` rather than
reaching into sub-modules directly.
"""

# --- Fields ---
from intake_forms.models.field import (
    FieldCondition,
    FieldOption,
    FieldType,
    FieldValidation,
    FieldWidth,
    FormField,
    FormFieldValue,
)

# --- Schema ---
from intake_forms.models.schema import (
    FormResponses,
    FormSchema,
    FormSection,
    TemplateInfo,
)

# --- Session / results ---
from intake_forms.models.session import (
    AcceptedSubmission,
    FieldError,
    FormSessionStatus,
    RejectedSubmission,
    SubmitResult,
    ValidationResult,
)

# --- Render plan ---
from intake_forms.models.render import (
    RenderedField,
    RenderedSection,
    RenderPlan,
)

__all__ = [
    # Fields
    "FieldCondition",
    "FieldOption",
    "FieldType",
    "FieldValidation",
    "FieldWidth",
    "FormField",
    "FormFieldValue",
    # Schema
    "FormResponses",
    "FormSchema",
    "FormSection",
    "TemplateInfo",
    # Session
    "AcceptedSubmission",
    "FieldError",
    "FormSessionStatus",
    "RejectedSubmission",
    "SubmitResult",
    "ValidationResult",
    # Render plan
    "RenderedField",
    "RenderedSection",
    "RenderPlan",
]
