"""
Footnote renumbering per slide

Markdown footnotes are document-global, but each slide is rendered on its
own. This pass turns every slide's footnotes into self-contained HTML:

    Text[^src]            ->  Text<sup id="fnref:1" role="doc-noteref">1</sup>
    [^src]: Source text   ->  (moved into a footnote list at the slide end)

Footnotes are numbered in order of first reference within the slide.
References without a definition stay as written; definitions that are never
referenced are dropped. A slide without definitions is returned unchanged.
"""

import re
from typing import Dict, List

from ..models.options import ProcessorOptions
from .slides import slides_map


DEFINITION_REGEX = re.compile(r"^\[\^([^\]\s]+)\]:[ \t]?(.*)(?:\r?\n|\Z)", re.MULTILINE)
REFERENCE_REGEX = re.compile(r"\[\^([^\]\s]+)\](?!:)")


class FootnoteProcessor:
    """Renumber and relink footnotes slide by slide"""

    def definitions_extract(self, slide: str) -> Dict[str, str]:
        """Map footnote ids to their text, first definition wins"""
        definitions: Dict[str, str] = {}
        for match in DEFINITION_REGEX.finditer(slide):
            definitions.setdefault(match.group(1), match.group(2).strip())
        return definitions

    def footnotes_transform(self, slide: str) -> str:
        """
        Renumber the footnotes of a single slide.

        Args:
            slide: Slide text

        Returns:
            Slide with references rewritten as numbered superscripts and
            definitions collected into a footnote list at the end
        """
        definitions = self.definitions_extract(slide)
        if not definitions:
            return slide

        body = DEFINITION_REGEX.sub('', slide)
        numbers: Dict[str, int] = {}
        order: List[str] = []

        def reference_replace(match: re.Match[str]) -> str:
            key = match.group(1)
            if key not in definitions:
                return match.group(0)
            if key not in numbers:
                numbers[key] = len(numbers) + 1
                order.append(key)
            number = numbers[key]
            return f'<sup id="fnref:{number}" role="doc-noteref">{number}</sup>'

        body = REFERENCE_REGEX.sub(reference_replace, body)
        if not order:
            return body

        items = '\n'.join(
            f'<li role="doc-endnote" id="fn:{numbers[key]}"><p>{definitions[key]}</p></li>'
            for key in order
        )
        footer = f'<div class="footnotes" role="doc-endnotes">\n<ol>\n{items}\n</ol>\n</div>'
        return f"{body.rstrip()}\n\n{footer}\n"

    def process(self, markdown: str, options: ProcessorOptions) -> str:
        """Document pass: renumber footnotes in every slide"""
        return slides_map(markdown, options, self.footnotes_transform)
