"""
slidemark - Template engine for markdown slide decks

Expands slide templates, embedded notes and named-block variables in
annotated markdown before it is handed to a slide renderer.
"""

__version__ = "1.0.0"

from .lib import MarkdownProcessor, FileResolver, variables_compute, LOG, state_connectToLogger
from .models import ProcessorOptions, options_fromMarkdown

__all__ = [
    "MarkdownProcessor",
    "FileResolver",
    "ProcessorOptions",
    "options_fromMarkdown",
    "variables_compute",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
