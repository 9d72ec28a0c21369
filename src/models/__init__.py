"""
Models package for slidemark

Contains data structures and type definitions for the processing pipeline.
"""

from .state import ProgramState, pipeline
from .options import (
    ProcessorOptions,
    OptionsError,
    frontmatter_split,
    options_fromMarkdown,
    templateName_normalize,
)
from .template import TemplateReference, NamedBlock

__all__ = [
    "ProgramState",
    "pipeline",
    "ProcessorOptions",
    "OptionsError",
    "frontmatter_split",
    "options_fromMarkdown",
    "templateName_normalize",
    "TemplateReference",
    "NamedBlock",
]
