"""
Multi-file inliner for ![[note]] embeds

Replaces embed directives with the content of the referenced note,
recursively. Supported forms:

    ![[note]]              whole note (".md" appended)
    ![[folder/note.md]]    relative path
    ![[note#Heading]]      only the section under that heading
    ![[note|alias]]        alias is ignored

Embeds of non-markdown files (images, pdf, ...) are left for later passes.
Embeds of notes that cannot be found are left untouched. Embeds that would
recurse into a note already being inlined, or nest deeper than
embed_max_depth, are dropped with a warning so that the document converges.
"""

import re
from typing import Tuple

from ..config import appsettings
from ..models.options import FRONTMATTER_REGEX
from .log import LOG
from .resolver import FileResolver, TemplateNotFoundError


EMBED_REGEX = re.compile(r"!\[\[(?P<name>[^\]|#]+)(?:#(?P<heading>[^\]|]*))?(?:\|[^\]]*)?\]\]")
HEADING_REGEX = re.compile(r"^(#{1,6})\s+(.*?)\s*#*\s*$")
EXTENSION_REGEX = re.compile(r"\.([A-Za-z0-9]{1,5})$")


class MultipleFileProcessor:
    """
    Inline embedded notes into a document

    Args:
        resolver: FileResolver used to locate and read embedded notes
    """

    def __init__(self, resolver: FileResolver) -> None:
        self.resolver = resolver

    def markdown_is(self, name: str) -> bool:
        """True if an embed target is a note rather than an attachment"""
        match = EXTENSION_REGEX.search(name)
        if not match:
            return True
        return f".{match.group(1).lower()}" == appsettings.template_extension

    def section_extract(self, content: str, heading: str) -> str:
        """
        Return the part of a note under a heading.

        The section runs from the heading line up to the next heading of the
        same or a higher level. If the heading is missing, the whole note is
        returned.
        """
        lines = content.splitlines(keepends=True)
        start = None
        level = 0

        for index, line in enumerate(lines):
            match = HEADING_REGEX.match(line.rstrip('\r\n'))
            if not match:
                continue
            if start is None:
                if match.group(2) == heading.strip():
                    start = index
                    level = len(match.group(1))
            elif len(match.group(1)) <= level:
                return ''.join(lines[start:index])

        if start is None:
            LOG(f"Heading '{heading}' not found, embedding whole note", level=2)
            return content
        return ''.join(lines[start:])

    def process(self, markdown: str, chain: Tuple[str, ...] = ()) -> str:
        """
        Inline every markdown embed in the text.

        Args:
            markdown: Text possibly containing ![[note]] embeds
            chain: Notes currently being inlined (outermost first)

        Returns:
            Text with embeds replaced by note content
        """

        def embed_replace(match: re.Match[str]) -> str:
            name = match.group('name').strip()
            if not self.markdown_is(name):
                return match.group(0)

            filename = appsettings.templateFile_name(name)
            if filename in chain:
                LOG(f"Embed cycle: {' -> '.join(chain + (filename,))}", severity="WARNING")
                return ''
            if len(chain) >= appsettings.embed_max_depth:
                LOG(f"Embed depth limit reached at {filename}", severity="WARNING")
                return ''

            try:
                content = self.resolver.file_read(filename)
            except TemplateNotFoundError as e:
                LOG(f"Cannot embed: {e}", level=2)
                return match.group(0)

            content = FRONTMATTER_REGEX.sub('', content, count=1)
            heading = match.group('heading')
            if heading:
                content = self.section_extract(content, heading)

            LOG(f"Embedding {filename}", level=3)
            return self.process(content, chain + (filename,))

        return EMBED_REGEX.sub(embed_replace, markdown)
