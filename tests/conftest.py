import pytest

from intake_forms.models import FormField, FormSchema, FormSection
from intake_forms.templates import TemplateStore


def make_field(field_id="f1", field_type="text", **kwargs) -> FormField:
    """Shorthand to build a FormField with sensible defaults."""
    kwargs.setdefault("label", field_id.replace("_", " ").title())
    return FormField(id=field_id, type=field_type, **kwargs)


def make_schema(*fields, title="Test Form") -> FormSchema:
    """Shorthand to build a single-section schema from fields."""
    return FormSchema(title=title, sections=[FormSection(title="Main", fields=list(fields))])


@pytest.fixture(scope="session")
def store():
    """Load the packaged TemplateStore once for the entire test session."""
    s = TemplateStore()
    s.load()
    return s


@pytest.fixture
def therapy_schema():
    """Two-field form: detail only shown when previous therapy was stopped."""
    return make_schema(
        make_field(
            "previous_therapy",
            "select",
            required=True,
            order=1,
            options=[
                {"label": "Não", "value": "no"},
                {"label": "Sim, mas parei", "value": "yes_stopped"},
            ],
        ),
        make_field(
            "previous_therapy_detail",
            "textarea",
            required=False,
            order=2,
            conditional_on={"field_id": "previous_therapy", "value": "yes_stopped"},
        ),
    )
