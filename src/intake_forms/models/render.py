"""Render plan models — what a UI needs to draw the form in its current state.

The plan only contains visible fields, already sorted, each paired with its
current value and error.  A renderer walks it and switches on
``field.type``; it never has to evaluate conditions or sort anything itself.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from intake_forms.models.field import FormField, FormFieldValue


class RenderedField(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    field: FormField
    value: FormFieldValue = None
    error: Optional[str] = None
    full_width: bool = Field(default=False, alias="fullWidth")
    disabled: bool = False


class RenderedSection(BaseModel):
    title: str
    description: Optional[str] = None
    fields: List[RenderedField] = Field(default_factory=list)


class RenderPlan(BaseModel):
    title: str
    description: Optional[str] = None
    sections: List[RenderedSection] = Field(default_factory=list)

    @property
    def field_ids(self) -> list[str]:
        """Ids of every rendered field, top to bottom."""
        return [rf.field.id for section in self.sections for rf in section.fields]
