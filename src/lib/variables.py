"""
Named block and placeholder resolution

A slide produced by template expansion carries its values as named blocks
and the template's slots as placeholders:

    ::: title
    # Quarterly results
    :::

    <% title %>        required: replaced by the block
    <%? footer %>      optional: replaced by the block, removed if none

Each named block is re-wrapped as an anonymous block ("::: block") at every
placeholder with its name, and its original text is removed. Blocks are flat:
the first line starting with ":::" after the opening marker closes the block,
so a block cannot contain another block.

The name "block" is reserved for anonymous wrappers and is never a source
of values.
"""

import re
from typing import Iterator, Optional

from ..models.template import NamedBlock
from .footnotes import FootnoteProcessor


RESERVED_BLOCK = "block"

BLOCK_REGEX = re.compile(r"^:::[ \t]+([^\n]+)\s*(.*?^:::[^\n]*)", re.DOTALL | re.MULTILINE)
OPTIONAL_REGEX = re.compile(r"<%\?.*?%>")


def namedBlocks_find(text: str) -> Iterator[NamedBlock]:
    """
    Lazily scan a slide for named blocks.

    Each call starts a fresh scan, so the iterator can be restarted simply
    by calling the function again.

    Args:
        text: Slide text

    Yields:
        NamedBlock for every ::: name ... ::: region, in document order,
        the reserved "block" wrappers included
    """
    for match in BLOCK_REGEX.finditer(text):
        yield NamedBlock(raw=match.group(0), name=match.group(1).strip(), content=match.group(2))


def placeholder_regex(name: str, optional: bool = False) -> re.Pattern[str]:
    """Pattern for <% name %> or <%? name %>, tolerant of inner whitespace"""
    marker = r"<%\?" if optional else r"<%"
    return re.compile(rf"{marker}\s*{re.escape(name)}\s*%>")


def variables_compute(slide: str, footnotes: Optional[FootnoteProcessor] = None) -> str:
    """
    Resolve named blocks and placeholders in one slide.

    Args:
        slide: Slide text after template expansion
        footnotes: Footnote collaborator run over the resolved slide

    Returns:
        Slide without named block delimiters, with matched required
        placeholders substituted and no optional placeholders left
    """
    if footnotes is None:
        footnotes = FootnoteProcessor()

    result = slide
    for block in namedBlocks_find(slide):
        if block.name == RESERVED_BLOCK:
            continue

        value = block.value
        # Optional markers stay behind the value and are stripped below
        result = placeholder_regex(block.name, optional=True).sub(
            lambda match: f"{value}\n{match.group(0)}", result
        )
        result = placeholder_regex(block.name).sub(lambda match: value, result)
        result = result.replace(block.raw, '')

    result = footnotes.footnotes_transform(result)
    return OPTIONAL_REGEX.sub('', result)
