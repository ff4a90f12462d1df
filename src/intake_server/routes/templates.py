"""Template catalogue endpoints — list, fetch, validate against, and render templates.

The catalogue is read-only public reference data loaded once at startup
from the YAML files packaged with ``intake_forms``.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from intake_forms.layout import build_render_plan
from intake_forms.models import FormResponses, FormSchema, RenderPlan, TemplateInfo, ValidationResult
from intake_forms.templates import TemplateStore
from intake_forms.validation import FieldValidator

from intake_server.dependencies import get_store, get_validator

router = APIRouter(tags=["templates"])


# ------------------------------------------------------------------
# Request models
# ------------------------------------------------------------------

class ValidateRequest(BaseModel):
    """Body for POST /templates/{key}/validate."""

    responses: FormResponses = Field(default_factory=dict)


class RenderRequest(BaseModel):
    """Body for POST /templates/{key}/render.

    ``errors`` are the ones currently displayed (from the last submit);
    they are attached to visible fields as-is.
    """

    model_config = ConfigDict(populate_by_name=True)

    responses: FormResponses = Field(default_factory=dict)
    errors: dict[str, str] = Field(default_factory=dict)
    read_only: bool = Field(default=False, alias="readOnly")


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("/templates")
def list_templates(
    store: TemplateStore = Depends(get_store),
) -> list[TemplateInfo]:
    """Return catalogue summaries for every system template."""
    return store.list_templates()


@router.get("/templates/{key}", response_model_exclude_none=True)
def get_template(
    key: str,
    store: TemplateStore = Depends(get_store),
) -> FormSchema:
    """Return the full schema of a template (camelCase JSON)."""
    return store.get_template(key)


@router.get("/specialties")
def list_specialties(
    store: TemplateStore = Depends(get_store),
) -> dict[str, str]:
    """Return the specialty slug → template key mapping."""
    return dict(store.specialties)


@router.get("/specialties/{specialty}/template", response_model_exclude_none=True)
def get_specialty_template(
    specialty: str,
    store: TemplateStore = Depends(get_store),
) -> FormSchema:
    """Return the default template for a professional specialty."""
    return store.get_for_specialty(specialty)


@router.post("/templates/{key}/validate")
def validate_template_responses(
    key: str,
    body: ValidateRequest,
    store: TemplateStore = Depends(get_store),
    validator: FieldValidator = Depends(get_validator),
) -> ValidationResult:
    """Validate a response map against a catalogue template.

    Only fields visible under these responses are checked.  The result
    lists at most one error per field, in schema order.
    """
    schema = store.get_template(key)
    return validator.validate_responses(schema, body.responses)


@router.post("/templates/{key}/render", response_model_exclude_none=True)
def render_template(
    key: str,
    body: RenderRequest,
    store: TemplateStore = Depends(get_store),
) -> RenderPlan:
    """Return the render plan: visible fields, sorted, with values and errors."""
    schema = store.get_template(key)
    return build_render_plan(schema, body.responses, body.errors, read_only=body.read_only)
