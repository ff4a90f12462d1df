"""Session and result models — the contract between the form engine and callers.

Result types:
  - FieldError / ValidationResult: outcome of validating a response map
  - AcceptedSubmission: validation passed, responses handed to ``on_submit``
  - RejectedSubmission: at least one visible field failed, nothing submitted

The ``SubmitResult`` union covers both submission cases so callers can
dispatch on ``type``.
"""

import enum
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field


class FormSessionStatus(str, enum.Enum):
    """Where a form session stands.

    ``invalid`` is the editing state with errors showing from the last
    submit attempt.
    """

    EDITING = "editing"
    INVALID = "invalid"
    SUBMITTED = "submitted"


class FieldError(BaseModel):
    """Validation error attached to a single field."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    field_id: str = Field(alias="fieldId")
    message: str


class ValidationResult(BaseModel):
    """Result of validating a whole response map."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_valid: bool = Field(alias="isValid")
    errors: List[FieldError] = Field(default_factory=list)

    @property
    def error_map(self) -> dict[str, str]:
        """Errors keyed by field id, in schema order."""
        return {e.field_id: e.message for e in self.errors}


class AcceptedSubmission(BaseModel):
    """Submit outcome: every visible field passed and ``on_submit`` was called."""

    type: Literal["submitted"] = "submitted"
    # Exactly the map handed to on_submit; not re-validated after the hand-off
    responses: Dict[str, Any]
    # Whatever the on_submit collaborator returned (e.g. a success flag)
    handler_result: Any = None


class RejectedSubmission(BaseModel):
    """Submit outcome: validation failed; responses were not handed off."""

    type: Literal["rejected"] = "rejected"
    errors: Dict[str, str]


# Callers can match on result.type to decide between navigation and
# showing inline errors.
SubmitResult = AcceptedSubmission | RejectedSubmission
