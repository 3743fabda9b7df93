"""Template loading and rendering engine."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import (
    DictLoader,
    Environment,
    StrictUndefined,
    Template,
    TemplateSyntaxError,
)

from ..core.errors import RenderError, TemplateLoadError, TemplateNotFoundError, WriteError
from .io import write_document

logger = logging.getLogger(__name__)


def create_environment(sources: Mapping[str, str]) -> Environment:
    """Create the Jinja2 environment used for every template of a set.

    Templates reference each other (``include``/``extends``) by their
    registered name.
    """
    return Environment(
        loader=DictLoader(dict(sources)),
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        auto_reload=False,
    )


def _raise_walk_error(error: OSError) -> None:
    raise error


def discover_templates(root_dir: Path, file_extension: str) -> dict[str, Path]:
    """Find every template file below *root_dir*.

    Args:
        root_dir: Directory searched recursively
        file_extension: Suffix identifying template files

    Returns:
        Mapping of template name (file name without extension) to file path

    Raises:
        TemplateLoadError: If the directory cannot be walked or two files
            share a template name
    """
    if not root_dir.is_dir():
        raise TemplateLoadError(f"Template directory not found: {root_dir}")

    found: dict[str, Path] = {}
    try:
        for dirpath, dirnames, filenames in os.walk(root_dir, onerror=_raise_walk_error):
            dirnames.sort()
            for filename in sorted(filenames):
                if not filename.endswith(file_extension):
                    continue
                path = Path(dirpath) / filename
                if not path.is_file():
                    continue
                name = filename[: -len(file_extension)]
                if not name:
                    logger.warning(f"Skipping template without a name: {path}")
                    continue
                if name in found:
                    raise TemplateLoadError(
                        f"Duplicate template name {name!r}: {found[name]} and {path}"
                    )
                found[name] = path
    except OSError as e:
        raise TemplateLoadError(f"Cannot read template directory {root_dir}: {e}") from e

    return found


class TemplateSet:
    """Immutable collection of compiled templates addressed by name.

    Instances are created with :meth:`build` and are safe to share between
    threads: after construction only lookups and rendering happen.
    """

    def __init__(
        self,
        templates: Mapping[str, Template],
        *,
        file_extension: str = ".template",
        origins: Mapping[str, Path] | None = None,
    ) -> None:
        self._templates = dict(templates)
        self._origins = dict(origins or {})
        self.file_extension = file_extension

    @classmethod
    def build(cls, root_dir: str | Path, file_extension: str = ".template") -> TemplateSet:
        """Load and compile every template below *root_dir*.

        Args:
            root_dir: Template directory, searched recursively
            file_extension: Suffix of template files, stripped from names

        Returns:
            Fully populated template set

        Raises:
            TemplateLoadError: On unreadable directories or files, template
                syntax errors and duplicate template names
        """
        root = Path(root_dir)
        if not file_extension:
            raise TemplateLoadError("Template file extension must not be empty")

        logger.debug(f"Loading templates from {root} (*{file_extension})")
        origins = discover_templates(root, file_extension)

        sources: dict[str, str] = {}
        for name, path in origins.items():
            try:
                sources[name] = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise TemplateLoadError(f"Cannot read template {path}: {e}") from e

        env = create_environment(sources)
        compiled: dict[str, Template] = {}
        for name, path in origins.items():
            try:
                compiled[name] = env.get_template(name)
            except TemplateSyntaxError as e:
                raise TemplateLoadError(
                    f"Template syntax error in {path}:{e.lineno}: {e.message}"
                ) from e

        logger.debug(f"Loaded {len(compiled)} template(s): {sorted(compiled)}")
        return cls(compiled, file_extension=file_extension, origins=origins)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._normalize(name) in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    @property
    def names(self) -> list[str]:
        return sorted(self._templates)

    def origin(self, name: str) -> Path | None:
        """Return the file a template was loaded from, if known."""
        return self._origins.get(self._normalize(name))

    def _normalize(self, name: str) -> str:
        ext = self.file_extension
        if ext and name.endswith(ext) and name[: -len(ext)] in self._templates:
            return name[: -len(ext)]
        return name

    def get(self, name: str) -> Template:
        """Look up a template by name, with or without the file extension.

        Raises:
            TemplateNotFoundError: If no template is registered under *name*
        """
        try:
            return self._templates[self._normalize(name)]
        except KeyError:
            raise TemplateNotFoundError(name) from None

    def render(
        self,
        name: str,
        output_path: str | Path,
        data: Mapping[str, Any],
        *,
        mode: int = 0o644,
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Missing parent directories are created.

        Returns:
            Output file path

        Raises:
            TemplateNotFoundError: If the template does not exist
            RenderError: If the template fails to execute against *data*
            WriteError: If the output file cannot be written
        """
        path = Path(output_path)
        try:
            template = self.get(name)
        except TemplateNotFoundError:
            raise TemplateNotFoundError(name, path) from None

        try:
            text = template.render(**data)
        except Exception as e:
            raise RenderError(f"Failed to render template {name!r} for {path}: {e}") from e

        try:
            write_document(path, text, mode=mode)
        except OSError as e:
            raise WriteError(f"Failed to write {path}: {e}") from e

        return path
