"""
Markdown processor: template driver and pass orchestration

Processing runs in two phases:

1. Template resolution. Embeds are inlined and templates expanded over the
   whole document, round after round, until a round leaves the document
   unchanged. Expanding a template can surface new embeds and new template
   directives, hence the repetition. The number of rounds is capped; hitting
   the cap logs a warning and keeps the last result.

2. Passes. An ordered list of stateless transforms, each a function
   (document, options) -> document, applied in sequence.
"""

import re
from typing import Callable, List, Optional, Sequence, Tuple

from ..config import appsettings
from ..models.options import ProcessorOptions
from .footnotes import FootnoteProcessor
from .log import LOG
from .multifile import MultipleFileProcessor
from .resolver import FileResolver
from .slides import SEPARATOR_FLAGS
from .template import TemplateProcessor


Pass = Callable[[str, ProcessorOptions], str]


class MarkdownProcessor:
    """
    Turn an annotated markdown note into slide-ready markdown

    Args:
        resolver: Locates templates and embedded notes
        passes: Ordered (name, transform) list run after template
                resolution. Defaults to the footnote pass.
        max_rounds: Template resolution round cap
    """

    def __init__(
        self,
        resolver: FileResolver,
        passes: Optional[Sequence[Tuple[str, Pass]]] = None,
        max_rounds: Optional[int] = None,
    ) -> None:
        self.resolver = resolver
        self.footnote_processor = FootnoteProcessor()
        self.multiple_file_processor = MultipleFileProcessor(resolver)
        self.template_processor = TemplateProcessor(
            resolver, self.multiple_file_processor, self.footnote_processor
        )
        self.max_rounds = max_rounds or appsettings.template_max_rounds

        if passes is None:
            passes = [("footnotes", self.footnote_processor.process)]
        self.passes: List[Tuple[str, Pass]] = list(passes)

    def ending_trim(self, markdown: str, options: ProcessorOptions) -> str:
        """
        Drop a separator that ends the document.

        A newline is appended first so that a final "---" without trailing
        newline still counts. The horizontal separator is checked before the
        vertical one; at most one is removed.
        """
        text = f"{markdown}\n"

        for pattern in (options.separator, options.vertical_separator):
            match = re.search(pattern, text, SEPARATOR_FLAGS)
            if match is None or not match.group(0):
                continue
            if text.endswith(match.group(0)):
                return text[:text.rfind(match.group(0))]

        return markdown

    def templates_resolve(self, markdown: str, options: ProcessorOptions) -> str:
        """
        Inline embeds and expand templates until the document is stable.

        The default template only applies to the first round; afterwards
        options.default_template is cleared so it is not applied to slides
        that are the product of an expansion.

        Args:
            markdown: Document text
            options: Processing options (default_template is cleared)

        Returns:
            Stable document, or the last round's result if the cap is hit
        """
        before = markdown
        rounds = 0

        while True:
            rounds += 1
            inlined = self.multiple_file_processor.process(before)
            after = self.template_processor.process(inlined, options)

            options.default_template = None

            if after == before:
                LOG(f"Templates stable after {rounds} round(s)", level=2)
                return after

            if rounds >= self.max_rounds:
                LOG(
                    f"Circuit in template hierarchy detected: document still changing "
                    f"after {rounds} rounds",
                    severity="WARNING",
                )
                return after

            before = after

    def diff_log(self, name: str, before: str, after: str) -> None:
        """Log a pass result when it changed the document"""
        if before != after:
            LOG(f"{name}: {after}", severity="INFO")

    def process(self, markdown: str, options: ProcessorOptions) -> str:
        """
        Run template resolution and every pass.

        Args:
            markdown: Document text (front matter already removed)
            options: Processing options

        Returns:
            Final document
        """
        document = self.templates_resolve(self.ending_trim(markdown, options), options)

        if options.log:
            self.diff_log("markdown", "", markdown)
            self.diff_log("merge & template", markdown, document)

        for name, transform in self.passes:
            result = transform(document, options)
            if options.log:
                self.diff_log(name, document, result)
            document = result

        return document
