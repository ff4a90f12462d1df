"""TemplateStore — loads the system form templates from YAML into typed schemas.

This is the single source of truth for the built-in catalogue at runtime.
The store is loaded once at startup and provides lookup by template key and
by professional specialty.

Layout of the template directory::

    specialties.yaml        specialty slug -> template key
    <template key>.yaml     one FormSchema per file

Usage::

    store = TemplateStore()          # defaults to the packaged templates/
    store.load()                     # parse and validate every template

    schema = store.get_for_specialty("psicologia")
    field = schema.get_field("previous_therapy_detail")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from intake_forms.models.schema import FormSchema, TemplateInfo

logger = logging.getLogger(__name__)

SPECIALTIES_FILE = "specialties.yaml"


def default_template_dir() -> Path:
    """The ``templates/`` directory shipped inside this package."""
    return Path(__file__).resolve().parent / "templates"


def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


class TemplateStore:
    """Loads all template YAML and provides typed lookup.

    Attributes populated after :meth:`load`:

        templates     — dict[key, FormSchema]
        specialties   — dict[specialty slug, template key]
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = default_template_dir()
        self._base = Path(template_dir)

        # Populated by load()
        self.templates: dict[str, FormSchema] = {}
        self.specialties: dict[str, str] = {}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Parse every template under the template directory.

        Call this once at startup.  A malformed template (unknown field
        type, missing options, duplicate ids, broken regex ...) raises
        ``pydantic.ValidationError``; a specialty pointing at an unknown
        template raises ``ValueError``.
        """
        self._load_specialties()
        self._load_templates()
        logger.info(
            "TemplateStore loaded: %d templates, %d specialties",
            len(self.templates),
            len(self.specialties),
        )

    def _load_specialties(self) -> None:
        raw = load_yaml(self._base / SPECIALTIES_FILE) or {}
        self.specialties = {str(k): str(v) for k, v in raw.items()}

    def _load_templates(self) -> None:
        """Load one schema per referenced template key, keyed by file stem."""
        for key in dict.fromkeys(self.specialties.values()):
            path = self._base / f"{key}.yaml"
            if not path.exists():
                raise ValueError(f"Specialty mapping references unknown template '{key}'")
            self.templates[key] = self._parse(key, load_yaml(path))

        # Templates not referenced by any specialty are still part of the catalogue
        for path in sorted(self._base.glob("*.yaml")):
            key = path.stem
            if path.name == SPECIALTIES_FILE or key in self.templates:
                continue
            self.templates[key] = self._parse(key, load_yaml(path))

    @staticmethod
    def _parse(key: str, raw: dict) -> FormSchema:
        schema = FormSchema.model_validate(raw)
        ids = {f.id for f in schema.fields}
        for field in schema.fields:
            cond = field.conditional_on
            if cond is not None and cond.field_id not in ids:
                logger.warning(
                    "Template %s: field %s depends on unknown field %s",
                    key, field.id, cond.field_id,
                )
        return schema

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------

    def get_template(self, key: str) -> FormSchema:
        """Look up a template by key (e.g. "nutrition").

        Raises:
            KeyError: if the template is not in the catalogue.
        """
        try:
            return self.templates[key]
        except KeyError:
            raise KeyError(f"Template '{key}' not found") from None

    def get_for_specialty(self, specialty: str) -> FormSchema:
        """Return the default template for a specialty slug (e.g. "nutricao").

        Raises:
            KeyError: if the specialty has no template.
        """
        key = self.specialties.get(specialty)
        if key is None:
            raise KeyError(f"Specialty '{specialty}' not found")
        return self.templates[key]

    @property
    def by_specialty(self) -> dict[str, FormSchema]:
        """Specialty slug → schema, the read-only template source for sessions."""
        return {spec: self.templates[key] for spec, key in self.specialties.items()}

    def specialties_for(self, key: str) -> list[str]:
        """Specialty slugs that use the given template."""
        return [spec for spec, k in self.specialties.items() if k == key]

    def list_templates(self, key: Optional[str] = None) -> list[TemplateInfo]:
        """Catalogue summaries, optionally restricted to one template key."""
        keys = [key] if key is not None else list(self.templates)
        infos = []
        for k in keys:
            schema = self.get_template(k)
            infos.append(
                TemplateInfo(
                    key=k,
                    title=schema.title,
                    description=schema.description,
                    version=schema.version,
                    section_count=len(schema.sections),
                    question_count=schema.question_count,
                    specialties=self.specialties_for(k),
                )
            )
        return infos
