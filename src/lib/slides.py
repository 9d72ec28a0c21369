"""
Slide splitting along configured separator patterns

Documents are split into slide groups on the horizontal separator and each
group into slides on the vertical separator. Unlike re.split(), the exact
separator text matched in the document is kept so that reassembly is
lossless, even when the pattern has capture groups or alternatives.
"""

import re
from typing import Callable, List, Tuple

from ..models.options import ProcessorOptions


SEPARATOR_FLAGS = re.MULTILINE | re.IGNORECASE


def text_split(pattern: str, text: str) -> Tuple[List[str], List[str]]:
    """
    Split text on a separator regex, keeping the matched separators.

    Empty matches are ignored; they would otherwise split between every
    character.

    Args:
        pattern: Separator regular expression
        text: Text to split

    Returns:
        (pieces, separators) with len(pieces) == len(separators) + 1

    Example:
        >>> text_split(r"\\n---\\n", "a\\n---\\nb")
        (['a', 'b'], ['\\n---\\n'])
    """
    pieces: List[str] = []
    separators: List[str] = []
    position = 0

    for match in re.finditer(pattern, text, SEPARATOR_FLAGS):
        if match.start() == match.end():
            continue
        pieces.append(text[position:match.start()])
        separators.append(match.group(0))
        position = match.end()

    pieces.append(text[position:])
    return pieces, separators


def text_join(pieces: List[str], separators: List[str]) -> str:
    """Inverse of text_split()"""
    parts = [pieces[0]]
    for separator, piece in zip(separators, pieces[1:]):
        parts.append(separator)
        parts.append(piece)
    return ''.join(parts)


def slides_map(
    markdown: str, options: ProcessorOptions, transform: Callable[[str], str]
) -> str:
    """
    Apply a transform to every slide of a document.

    Args:
        markdown: Document text
        options: Supplies the separator patterns
        transform: Function (slide) -> slide

    Returns:
        Document with every slide transformed and separators untouched
    """
    groups, group_separators = text_split(options.separator, markdown)

    new_groups = []
    for group in groups:
        slides, slide_separators = text_split(options.vertical_separator, group)
        new_groups.append(text_join([transform(slide) for slide in slides], slide_separators))

    return text_join(new_groups, group_separators)


def slides_count(markdown: str, options: ProcessorOptions) -> int:
    """Number of slides (vertical and horizontal) in a document"""
    groups, _ = text_split(options.separator, markdown)
    return sum(len(text_split(options.vertical_separator, group)[0]) for group in groups)
