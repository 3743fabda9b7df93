"""Writing rendered documents to disk."""

from __future__ import annotations

import os
import tempfile
from contextlib import suppress
from pathlib import Path


def write_document(path: Path, text: str, mode: int = 0o644) -> None:
    """Replace *path* with *text* in one rename, creating missing directories.

    The document is staged in a hidden sibling file so readers never observe
    a partially written file. Concurrent callers must use distinct paths.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, staged = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".partial", dir=path.parent)
    try:
        with open(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)
        os.chmod(staged, mode)
        os.replace(staged, path)
    finally:
        with suppress(FileNotFoundError):
            os.unlink(staged)
