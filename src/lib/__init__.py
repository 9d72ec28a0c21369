"""
slidemark - Template engine for markdown slide decks

Expands slide templates, embedded notes and named-block variables in
annotated markdown before it is handed to a slide renderer.
"""

__version__ = "1.0.0"

from .processor import MarkdownProcessor
from .template import TemplateProcessor, TemplateCycleError
from .resolver import FileResolver, TemplateError, TemplateNotFoundError
from .multifile import MultipleFileProcessor
from .footnotes import FootnoteProcessor
from .variables import variables_compute
from .log import LOG, state_connectToLogger

__all__ = [
    "MarkdownProcessor",
    "TemplateProcessor",
    "TemplateCycleError",
    "FileResolver",
    "TemplateError",
    "TemplateNotFoundError",
    "MultipleFileProcessor",
    "FootnoteProcessor",
    "variables_compute",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
