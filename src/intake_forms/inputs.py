"""Input coercion for renderers — raw widget values to stored answers.

Renderers call :func:`coerce_input` with whatever their widget produced and
pass the result to ``FormSession.set_value``.  The conversion is a single
dispatch over the field type:

  - number, scale → float/int (browser ``Number()`` rules)
  - checkbox with options → toggles the raw option value in the current list
  - checkbox without options → bool ("true"/"on" strings count as checked)
  - multiselect → list of option values
  - section_header → rejected, it has no value
  - everything else → string
"""

from __future__ import annotations

import math
from typing import Any

from intake_forms.coercion import to_display_string, to_number
from intake_forms.constants import DEFAULT_SCALE_MAX, DEFAULT_SCALE_MIN
from intake_forms.models.field import FormField, FormFieldValue


def toggle_option(current: Any, value: str) -> list[str]:
    """Return a new list with ``value`` added, or removed if already present."""
    values = list(current) if isinstance(current, list) else []
    if value in values:
        return [v for v in values if v != value]
    return values + [value]


def scale_points(field: FormField) -> list[int]:
    """The clickable points of a scale field, ``min``..``max`` inclusive."""
    rules = field.validation
    lo = rules.min if rules is not None and rules.min is not None else DEFAULT_SCALE_MIN
    hi = rules.max if rules is not None and rules.max is not None else DEFAULT_SCALE_MAX
    return list(range(int(lo), int(hi) + 1))


def _as_number(raw: Any) -> int | float:
    num = to_number(raw)
    if not math.isnan(num) and not math.isinf(num) and num.is_integer():
        return int(num)
    return num


def coerce_input(field: FormField, raw: Any, current: Any = None) -> FormFieldValue:
    """Convert a raw widget value into the answer stored for ``field``.

    Args:
        field: the field being edited
        raw: the widget's value (text, number, the clicked option value ...)
        current: the field's current answer; needed for checkbox groups,
            which toggle one option at a time

    Raises:
        ValueError: for ``section_header`` fields, which never carry a value.
    """
    ftype = field.type
    if ftype == "section_header":
        raise ValueError(f"field {field.id!r} is a section header and has no value")
    if ftype in ("number", "scale"):
        return _as_number(raw)
    if ftype == "checkbox":
        if field.is_checkbox_group:
            return toggle_option(current, to_display_string(raw))
        if isinstance(raw, str):
            # HTML checkboxes post "on"; conditions compare against "true"
            return raw.strip().lower() in ("true", "on", "1")
        return bool(raw)
    if ftype == "multiselect":
        if isinstance(raw, (list, tuple)):
            return [to_display_string(v) for v in raw]
        return toggle_option(current, to_display_string(raw))
    if raw is None:
        return ""
    return to_display_string(raw)
