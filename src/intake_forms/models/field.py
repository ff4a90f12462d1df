"""Field-level models for dynamic form schemas.

A ``FormField`` is one question/input.  Its ``type`` maps to a specific input
widget in the renderer and decides which validation rules apply:

  Value-carrying inputs:
    - text, textarea, email, phone, date: free text (email adds format check)
    - number, scale: numeric input (number adds min/max check)
    - select, radio: pick one option; the option ``value`` is stored
    - multiselect: pick several options; a list of option values is stored
    - checkbox: a single boolean, or a group of options stored as a list
    - file: storage URL of an uploaded file

  Layout only:
    - section_header: visual divider, never validated or submitted

Models are frozen: a schema is read-only for the life of a form session.
Storage/wire JSON uses camelCase keys (``helpText``, ``conditionalOn`` ...);
Python code and YAML templates may use the snake_case field names.
"""

from __future__ import annotations

import re
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from intake_forms.constants import OPTION_TYPES

FieldType = Literal[
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
]

FieldWidth = Literal["full", "half", "third"]

# Value of a single field in a response map:
#   text/textarea/email/phone/date/select/radio/file -> str
#   number/scale -> int | float
#   checkbox (single) -> bool
#   multiselect/checkbox (group) -> list[str]
FormFieldValue = Union[str, int, float, bool, List[str], None]


class FieldOption(BaseModel):
    """A selectable choice; ``value`` is compared and stored, ``label`` is shown."""

    model_config = ConfigDict(frozen=True)

    label: str
    value: str


class FieldValidation(BaseModel):
    """Validation constraints attached to a field.

    ``min``/``max`` bound the value of number/scale fields.  ``pattern`` is a
    regular expression searched in the stringified value; it is compiled
    here so that a broken pattern fails when the schema is loaded rather
    than when a patient submits.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    min: Optional[Union[int, float]] = None
    max: Optional[Union[int, float]] = None
    pattern: Optional[str] = None
    pattern_message: Optional[str] = Field(default=None, alias="patternMessage")
    step: Optional[Union[int, float]] = None
    # File fields only, enforced by the upload collaborator, not the engine
    max_file_size: Optional[int] = Field(default=None, alias="maxFileSize")
    accepted_file_types: Optional[List[str]] = Field(default=None, alias="acceptedFileTypes")

    @field_validator("pattern")
    @classmethod
    def _compile_pattern(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            try:
                re.compile(v)
            except re.error as exc:
                raise ValueError(f"pattern {v!r} is not a valid regular expression: {exc}") from exc
        return v


class FieldCondition(BaseModel):
    """Show the owning field only when another field's value matches.

    ``operator`` is one of ``equals`` (default), ``not_equals``, ``contains``.
    Other tokens are accepted but never hide the field.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    field_id: str = Field(alias="fieldId")
    value: Union[str, bool, int, float]
    operator: Optional[str] = None


class FormField(BaseModel):
    """One question/input of a form."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    type: FieldType
    label: str
    placeholder: Optional[str] = None
    required: bool = False
    help_text: Optional[str] = Field(default=None, alias="helpText")
    options: Optional[List[FieldOption]] = None
    validation: Optional[FieldValidation] = None
    conditional_on: Optional[FieldCondition] = Field(default=None, alias="conditionalOn")
    # Fields render in ascending order within their section
    order: int = 0
    width: Optional[FieldWidth] = None
    default_value: Optional[Union[str, bool, int, float, List[str]]] = Field(
        default=None, alias="defaultValue"
    )
    read_only: bool = Field(default=False, alias="readOnly")

    @model_validator(mode="after")
    def _chk_options(self):
        if self.type in OPTION_TYPES and not self.options:
            raise ValueError(f"field {self.id!r} of type {self.type!r} requires options")
        if self.type == "checkbox" and self.options is not None and not self.options:
            raise ValueError(f"checkbox group {self.id!r} has an empty option list")
        return self

    @property
    def is_checkbox_group(self) -> bool:
        """True for a checkbox rendered as a list of options (value is a list)."""
        return self.type == "checkbox" and bool(self.options)

    @property
    def option_values(self) -> list[str]:
        return [opt.value for opt in self.options or []]
