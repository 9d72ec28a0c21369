"""
Template-specific data models

Structures describing what the template and variable scanners find in a
slide. They are transient: built from a slide string and discarded once the
slide has been rewritten.
"""

from dataclasses import dataclass


@dataclass
class TemplateReference:
    """
    A template directive located in a slide

    Attributes:
        attribute: Exact attribute text matched in the slide, including any
                   trailing whitespace (e.g. 'template="[[tpl-basic]]" ').
                   It is removed from the slide body before splicing so the
                   directive is not copied into the expanded content.
        name: Template name as written between the brackets

    Example:
        For '<!-- .slide: template="[[tpl-basic]]" -->':
        TemplateReference(attribute='template="[[tpl-basic]]" ', name="tpl-basic")
    """
    attribute: str
    name: str


@dataclass
class NamedBlock:
    """
    A ::: name ... ::: region found in a slide

    Attributes:
        raw: Full matched text, from the opening marker to the end of the
             closing marker line
        name: Block name, trimmed
        content: Block body including the closing ::: line

    Example:
        For "::: greet\\nHello\\n:::":
        NamedBlock(raw="::: greet\\nHello\\n:::", name="greet", content="Hello\\n:::")
    """
    raw: str
    name: str
    content: str

    @property
    def value(self) -> str:
        """Content re-wrapped as an anonymous block"""
        return f"::: block\n{self.content}"
