"""Form engine constants shared across the SDK.

These values are referenced by the schema models, the visibility evaluator,
the validation engine, and the render plan builder.  Error messages are the
ones shown to patients inline next to the offending input.
"""

# Every input type the renderer knows how to draw.
FIELD_TYPES: tuple[str, ...] = (
    "text",
    "textarea",
    "number",
    "email",
    "phone",
    "date",
    "select",
    "multiselect",
    "checkbox",
    "radio",
    "file",
    "section_header",
    "scale",
)

# Choice-based types that cannot be rendered without a non-empty option list.
# ``checkbox`` is absent: without options it is a single boolean checkbox.
OPTION_TYPES: set[str] = {"select", "multiselect", "radio"}

# Types that always span the full row regardless of their ``width`` hint.
FULL_WIDTH_TYPES: set[str] = {"textarea", "section_header"}

# Types that never carry a value and are never part of a submission.
NON_INPUT_TYPES: set[str] = {"section_header"}

# Conditional-display operators the evaluator understands.  Any other token
# leaves the field visible.
CONDITION_OPERATORS: tuple[str, ...] = ("equals", "not_equals", "contains")
DEFAULT_CONDITION_OPERATOR = "equals"

# Scale fields without explicit bounds render the points 1..10.
DEFAULT_SCALE_MIN = 1
DEFAULT_SCALE_MAX = 10

# --- Validation messages ---
REQUIRED_MESSAGE = "Campo obrigatório"
MIN_VALUE_MESSAGE = "Valor mínimo: {bound}"
MAX_VALUE_MESSAGE = "Valor máximo: {bound}"
INVALID_EMAIL_MESSAGE = "E-mail inválido"
INVALID_FORMAT_MESSAGE = "Formato inválido"

# Single ``@``, no whitespace in the local part or the domain, dotted domain.
EMAIL_PATTERN = r"[^\s@]+@[^\s@]+\.[^\s@]+"
