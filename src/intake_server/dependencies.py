"""FastAPI dependency injection — provides the template store and shared engines."""

from fastapi import Request

from intake_forms.templates import TemplateStore
from intake_forms.validation import FieldValidator


def get_store(request: Request) -> TemplateStore:
    """Return the TemplateStore singleton from ``app.state``."""
    return request.app.state.store


def get_validator(request: Request) -> FieldValidator:
    """Return the FieldValidator singleton from ``app.state``."""
    return request.app.state.validator
