"""tfautodoc - mkdocs documentation generator for Terraform providers.

Renders Jinja2 templates against a provider schema, one worker thread per
generated document.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .autodoc import document
from .cli import main

__all__ = ["document", "main"]
