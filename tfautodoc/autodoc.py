"""Documentation generation entry point.

Generates mkdocs-style documentation for a Terraform provider. Text templates
are loaded recursively from the templates directory and fed the provider
schema. Let ROOT be ``root_dir`` and DOCS be ``docs_dir``; the following files
are produced:

1. ``ROOT/mkdocs.yml`` from ``mkdocs.yml.template``
2. ``ROOT/DOCS/index.md`` from ``index.md.template``
3. ``ROOT/DOCS/resources/<name>.md`` from ``resource.md.template``, one per
   resource
4. ``ROOT/DOCS/data-sources/<name>.md`` from ``datasource.md.template``, one
   per data source
"""

from __future__ import annotations

import logging

from .core.errors import AutodocError
from .core.models import ProviderSchema, TemplateBindings
from .core.settings import AutodocSettings, load_settings
from .dispatch import dispatcher
from .rendering.engine import TemplateSet

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1


def document(
    schema: ProviderSchema,
    settings: AutodocSettings | None = None,
    bindings: TemplateBindings | None = None,
) -> list[Exception]:
    """Generate all documentation files for *schema*.

    Settings and template loading failures abort the run before any document is rendered
    and are returned as the only error.

    Args:
        schema: Provider schema tree
        settings: Run configuration (defaults read from the environment)
        bindings: Template names per document role

    Returns:
        Every error encountered; an empty list means success
    """
    try:
        settings = settings or load_settings()
        templates = TemplateSet.build(
            settings.templates_path, settings.template_file_extension
        )
    except AutodocError as e:
        return [e]

    logger.info(f"Loaded {len(templates)} template(s) from {settings.templates_path}")
    return dispatcher.run(schema, templates, settings, bindings)


def exit_status(errors: list[Exception]) -> int:
    """Process exit status for the result of :func:`document`."""
    return EXIT_ERROR if errors else EXIT_SUCCESS
