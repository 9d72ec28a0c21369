"""
Template expansion for slides

A slide opts into a template with a comment directive:

    <!-- .slide: template="[[tpl-two-columns]]" -->
    ::: left
    ...
    :::

The template note is loaded, its embeds are inlined, and its
"<% content %>" token is replaced by the slide (minus the template
attribute). Templates may themselves carry a template directive, so the
expansion repeats until none is left. The slide's named blocks are then
resolved against the template's placeholders (see variables.py).

Expansion errors never abort the document: the failing slide is logged and
kept as written.
"""

import re
from typing import Optional, Tuple

from ..config import appsettings
from ..models.options import ProcessorOptions
from ..models.template import TemplateReference
from .footnotes import FootnoteProcessor
from .log import LOG
from .multifile import MultipleFileProcessor
from .resolver import FileResolver, TemplateError
from .slides import slides_map
from .variables import variables_compute


TEMPLATE_COMMENT_REGEX = re.compile(r'<!--\s*(?:\.)?slide.*(template="\[\[([^\]]+)\]\]"\s*).*-->')
EMPTY_SLIDE_COMMENT_REGEX = re.compile(r"<!--\s*(?:\.)?slide(?::)?\s*-->")


class TemplateCycleError(TemplateError):
    """Raised when a template chain refers back to a template already expanded"""
    pass


def templateReference_find(slide: str) -> Optional[TemplateReference]:
    """
    Locate the template directive of a slide.

    Returns:
        TemplateReference for the first directive, or None
    """
    match = TEMPLATE_COMMENT_REGEX.search(slide)
    if not match:
        return None
    return TemplateReference(attribute=match.group(1), name=match.group(2))


def templateDirective_make(name: str) -> str:
    """Directive comment applying a template to a slide"""
    return f'<!-- .slide: template="[[{name}]]" -->'


class TemplateProcessor:
    """
    Expand template directives slide by slide

    Args:
        resolver: Loads template notes by name
        multiple_file_processor: Inlines embeds inside loaded templates;
                                 built on the same resolver when omitted
        footnotes: Footnote collaborator used while resolving variables
    """

    def __init__(
        self,
        resolver: FileResolver,
        multiple_file_processor: Optional[MultipleFileProcessor] = None,
        footnotes: Optional[FootnoteProcessor] = None,
    ) -> None:
        self.resolver = resolver
        self.multiple_file_processor = multiple_file_processor or MultipleFileProcessor(resolver)
        self.footnotes = footnotes or FootnoteProcessor()

    def slide_transform(self, slide: str) -> str:
        """
        Expand one level of template.

        Args:
            slide: Slide text

        Returns:
            The template content with the slide spliced in, or the slide
            unchanged when it has no template directive

        Raises:
            TemplateNotFoundError: If the template note does not exist
        """
        reference = templateReference_find(slide)
        if reference is None:
            return slide

        filename = appsettings.templateFile_name(reference.name)
        LOG(f"Expanding template {filename}", level=3)

        template = self.resolver.file_read(filename)
        template = self.multiple_file_processor.process(template)
        return template.replace(
            appsettings.content_placeholder, slide.replace(reference.attribute, '')
        )

    def templates_expand(self, slide: str) -> Tuple[str, Tuple[str, ...]]:
        """
        Expand templates until the slide carries no directive.

        Returns:
            (expanded slide, chain of template files applied)

        Raises:
            TemplateCycleError: If a template in the chain is reached twice
        """
        chain: Tuple[str, ...] = ()
        reference = templateReference_find(slide)

        while reference is not None:
            filename = appsettings.templateFile_name(reference.name)
            if filename in chain:
                raise TemplateCycleError(
                    f"Circular template chain: {' -> '.join(chain + (filename,))}"
                )
            chain = chain + (filename,)
            slide = self.slide_transform(slide)
            reference = templateReference_find(slide)

        return slide, chain

    def slide_process(self, slide: str, default_template: Optional[str] = None) -> str:
        """
        Fully process one slide: templates, then variables.

        Args:
            slide: Slide text
            default_template: Template applied when the slide has none

        Returns:
            Processed slide. Slides without a template, and slides whose
            expansion fails, are returned unchanged.
        """
        source = slide
        if default_template and templateReference_find(slide) is None:
            source = templateDirective_make(default_template) + slide
            if templateReference_find(source) is None:
                LOG(f"Default template {default_template!r} is not a usable note name", severity="WARNING")
                return slide

        if templateReference_find(source) is None:
            return slide

        try:
            expanded, chain = self.templates_expand(source)
            expanded = EMPTY_SLIDE_COMMENT_REGEX.sub('', expanded)
            expanded = variables_compute(expanded, self.footnotes)
        except Exception as e:
            LOG(f"Cannot process template: {e}", severity="ERROR")
            return slide

        LOG(f"Applied {' -> '.join(chain)}", level=2)
        return expanded

    def process(self, markdown: str, options: ProcessorOptions) -> str:
        """
        One expansion round over the whole document.

        Args:
            markdown: Document text
            options: Separators and default template

        Returns:
            Document with every templated slide expanded
        """
        def slide_apply(slide: str) -> str:
            return self.slide_process(slide, options.default_template)

        return slides_map(markdown, options, slide_apply)
