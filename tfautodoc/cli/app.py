"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import click
import typer
from typer.core import TyperCommand
from typing_extensions import Annotated

from ..autodoc import EXIT_ERROR, document
from ..core.errors import AutodocError
from ..core.settings import load_settings
from ..schema import load_provider_schema
from .parsers import parse_file_mode, parse_template_ext

logger = logging.getLogger(__name__)

EPILOG = (
    "Generated files: mkdocs.yml, DOCS_DIR/index.md, DOCS_DIR/resources/*.md and "
    "DOCS_DIR/data-sources/*.md, rendered from mkdocs.yml, index.md, resource.md "
    "and datasource.md templates (plus the template extension). Templates are "
    "Jinja2. Exits 0 on success, 1 on error."
)

app = typer.Typer(
    name="tfautodoc",
    help="Generate mkdocs style documentation for a Terraform provider.",
    add_completion=False,
)


def generate_docs(
    schema_path: str,
    *,
    provider_source: str | None = None,
    provider_name: str | None = None,
    root_dir: Path | None = None,
    docs_dir: str | None = None,
    templates_dir: Path | None = None,
    template_ext: str | None = None,
    file_mode: str | None = None,
) -> list[Exception]:
    """Validate options, load the schema and generate all documents.

    Argument and schema errors are fatal and returned as the only error.
    """
    try:
        settings = load_settings(
            provider_name=provider_name,
            root_dir=root_dir,
            docs_dir=docs_dir,
            templates_dir=templates_dir,
            template_file_extension=parse_template_ext(template_ext),
            file_mode=parse_file_mode(file_mode),
        )
        schema = load_provider_schema(schema_path, provider_source)
    except AutodocError as e:
        return [e]

    logger.debug(f"Settings: {settings.model_dump()}")
    return document(schema, settings)


class AutodocCommand(TyperCommand):
    """Command reporting usage errors with the general error exit status."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = EXIT_ERROR
            raise


@app.command(cls=AutodocCommand, epilog=EPILOG)
def generate(
    schema_path: Annotated[
        str,
        typer.Option(
            "--schema",
            help="Output of 'terraform providers schema -json' ('-' for stdin).",
            metavar="FILE",
        ),
    ],
    provider_source: Annotated[
        Optional[str],
        typer.Option(
            "--provider-source",
            help="Provider address to document when the schema holds several providers.",
            metavar="ADDRESS",
        ),
    ] = None,
    provider_name: Annotated[
        Optional[str],
        typer.Option(
            "--provider",
            help="Name of the Terraform provider (default: 'Terraform Provider').",
            metavar="NAME",
        ),
    ] = None,
    root_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--root",
            help="Directory receiving mkdocs.yml and the docs directory (default: cwd).",
            metavar="DIR",
        ),
    ] = None,
    docs_dir: Annotated[
        Optional[str],
        typer.Option(
            "--docs-dir",
            help="Documentation directory relative to --root (default: docs).",
            metavar="DIR",
        ),
    ] = None,
    templates_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--templates-dir",
            help="Template directory, loaded recursively, relative to --root (default: templates).",
            metavar="DIR",
        ),
    ] = None,
    template_ext: Annotated[
        Optional[str],
        typer.Option(
            "--template-ext",
            help="File extension of template files (default: .template).",
            metavar="EXT",
        ),
    ] = None,
    file_mode: Annotated[
        Optional[str],
        typer.Option(
            "--mode",
            help="Permissions of generated files in octal (default: 0644).",
            metavar="OCTAL",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Render provider documentation from Jinja2 templates."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    logger.debug("Starting tfautodoc")

    errors = generate_docs(
        schema_path,
        provider_source=provider_source,
        provider_name=provider_name,
        root_dir=root_dir,
        docs_dir=docs_dir,
        templates_dir=templates_dir,
        template_ext=template_ext,
        file_mode=file_mode,
    )

    for error in errors:
        logger.error(f"{type(error).__name__}: {error}")

    if errors:
        logger.error(f"Documentation generation failed with {len(errors)} error(s)")
        raise typer.Exit(code=EXIT_ERROR)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
