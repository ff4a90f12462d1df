"""Schema-level models: sections, whole forms, and catalogue summaries.

  - FormSection: a titled group of fields, rendered in declaration order
  - FormSchema: the complete form, stored as JSON alongside each template
  - TemplateInfo: catalogue entry returned when listing templates
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from intake_forms.constants import NON_INPUT_TYPES
from intake_forms.models.field import FormField, FormFieldValue

# Field id → current answer.  The only state persisted for a submission.
FormResponses = Dict[str, FormFieldValue]


class FormSection(BaseModel):
    """A logical group of fields (e.g. "Dados Pessoais")."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: Optional[str] = None
    fields: List[FormField] = Field(default_factory=list)


class FormSchema(BaseModel):
    """Complete form definition.

    ``version`` is bumped on breaking changes to a template.  Field ids must
    be unique across all sections since they key the response map.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    description: Optional[str] = None
    version: Optional[int] = None
    sections: List[FormSection] = Field(default_factory=list)

    @model_validator(mode="after")
    def _chk_unique_ids(self):
        seen: set[str] = set()
        for field in self.fields:
            if field.id in seen:
                raise ValueError(f"duplicate field id {field.id!r} in form {self.title!r}")
            seen.add(field.id)
        return self

    @property
    def fields(self) -> list[FormField]:
        """All fields across all sections, in declaration order."""
        return [field for section in self.sections for field in section.fields]

    @property
    def question_count(self) -> int:
        """Number of fields that collect an answer (section headers excluded)."""
        return sum(1 for f in self.fields if f.type not in NON_INPUT_TYPES)

    def get_field(self, field_id: str) -> FormField:
        """Look up a field by id.

        Raises:
            KeyError: if no field has this id.
        """
        for field in self.fields:
            if field.id == field_id:
                return field
        raise KeyError(f"field {field_id!r} not found in form {self.title!r}")


class TemplateInfo(BaseModel):
    """Summary of a catalogue template for listing screens."""

    model_config = ConfigDict(populate_by_name=True)

    key: str
    title: str
    description: Optional[str] = None
    version: Optional[int] = None
    section_count: int = Field(alias="sectionCount")
    question_count: int = Field(alias="questionCount")
    specialties: List[str] = Field(default_factory=list)
