"""Ad-hoc form endpoints — validate responses against a caller-supplied schema.

Custom forms authored in the form builder are not part of the catalogue.
The caller sends the schema together with the responses; a malformed schema
(duplicate ids, select without options, broken pattern ...) is rejected by
request validation with 422.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from intake_forms.models import FormResponses, FormSchema, ValidationResult
from intake_forms.validation import FieldValidator

from intake_server.dependencies import get_validator

router = APIRouter(prefix="/forms", tags=["forms"])


class SchemaValidateRequest(BaseModel):
    """Body for POST /forms/validate."""

    model_config = ConfigDict(populate_by_name=True)

    form_schema: FormSchema = Field(alias="schema")
    responses: FormResponses = Field(default_factory=dict)


@router.post("/validate")
def validate_form_responses(
    body: SchemaValidateRequest,
    validator: FieldValidator = Depends(get_validator),
) -> ValidationResult:
    """Validate a response map against the schema sent in the body."""
    return validator.validate_responses(body.form_schema, body.responses)
