"""
Processing options threaded through every pass

ProcessorOptions replaces a process-wide options store: each call receives
the options explicitly. Defaults come from AppSettings and can be overridden
by a YAML front matter block at the top of the source document.
"""

import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

import yaml

from ..config import appsettings


FRONTMATTER_REGEX = re.compile(r"\A---\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)

# Front matter keys -> ProcessorOptions fields
FRONTMATTER_KEYS: Dict[str, str] = {
    "separator": "separator",
    "verticalSeparator": "vertical_separator",
    "defaultTemplate": "default_template",
    "log": "log",
}


class OptionsError(Exception):
    """Raised when front matter cannot be parsed into options"""
    pass


TEMPLATE_LINK_REGEX = re.compile(r"^\[\[([^\[\]|]+)(?:\|[^\[\]]*)?\]\]$")
TRUE_SPELLINGS = {"true", "yes", "on", "1"}
FALSE_SPELLINGS = {"false", "no", "off", "0", ""}


def templateName_normalize(value: Any) -> Optional[str]:
    """
    Reduce a default template setting to a bare note name.

    Front matter usually writes the template as a link. Quoted, it arrives
    as the string "[[tpl]]"; unquoted, YAML reads [[tpl]] as the nested
    list [["tpl"]]. Both become "tpl".

    Args:
        value: Raw setting from front matter or the CLI

    Returns:
        Note name, or None when no template is set

    Raises:
        OptionsError: If the value cannot name a single note
    """
    if value is None:
        return None

    while isinstance(value, list) and len(value) == 1:
        value = value[0]
    if not isinstance(value, str):
        raise OptionsError(f"defaultTemplate must name one note, got {value!r}")

    name = value.strip()
    link = TEMPLATE_LINK_REGEX.match(name)
    if link:
        name = link.group(1).strip()
    if '[' in name or ']' in name:
        raise OptionsError(f"defaultTemplate is not a valid note name: {value!r}")
    return name or None


def flag_parse(value: Any) -> bool:
    """
    Read a boolean front matter setting.

    Raises:
        OptionsError: For values that are not a recognisable yes/no
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        spelling = value.strip().lower()
        if spelling in TRUE_SPELLINGS:
            return True
        if spelling in FALSE_SPELLINGS:
            return False
    raise OptionsError(f"Expected true or false, got {value!r}")


@dataclass
class ProcessorOptions:
    """
    Options consumed by the markdown processor

    Attributes:
        separator: Regex separating horizontal slides (slide groups)
        vertical_separator: Regex separating vertical slides inside a group
        default_template: Template applied to slides without their own
                          template directive. The template driver clears it
                          after the first expansion round.
        log: Log every pass whose output differs from its input
    """
    separator: str = field(default_factory=lambda: appsettings.separator)
    vertical_separator: str = field(default_factory=lambda: appsettings.vertical_separator)
    default_template: Optional[str] = field(default=None)
    log: bool = field(default=False)

    def copy(self) -> "ProcessorOptions":
        """Shallow copy, so callers can keep their own instance untouched"""
        return replace(self)

    def merge(self, overrides: Dict[str, Any]) -> "ProcessorOptions":
        """
        Return a copy with front matter style overrides applied.

        Unknown keys are ignored; they belong to other passes.

        Args:
            overrides: Mapping using front matter key names
                       (e.g. {"verticalSeparator": "^--$"})

        Raises:
            OptionsError: If defaultTemplate or log has an unusable value
        """
        values = {}
        for key, value in overrides.items():
            attribute = FRONTMATTER_KEYS.get(key)
            if attribute is None:
                continue
            if attribute == "log":
                value = flag_parse(value)
            elif attribute == "default_template":
                value = templateName_normalize(value)
            elif value is not None:
                value = str(value)
            values[attribute] = value
        return replace(self, **values)


def frontmatter_split(markdown: str) -> Tuple[Dict[str, Any], str]:
    """
    Separate a leading YAML front matter block from the document body.

    Args:
        markdown: Full source document

    Returns:
        (front matter mapping, remaining body). Documents without front
        matter yield an empty mapping and the unchanged text.

    Raises:
        OptionsError: If the front matter is not valid YAML or not a mapping
    """
    match = FRONTMATTER_REGEX.match(markdown)
    if not match:
        return {}, markdown

    try:
        data: Any = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        raise OptionsError(f"Failed to parse front matter: {e}")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise OptionsError("Front matter must be a mapping")

    return data, markdown[match.end():]


def options_fromMarkdown(
    markdown: str, base: Optional[ProcessorOptions] = None
) -> Tuple[ProcessorOptions, str]:
    """
    Build the options for a document from its front matter.

    Args:
        markdown: Full source document
        base: Options to start from (defaults to AppSettings values)

    Returns:
        (options, body without front matter)
    """
    frontmatter, body = frontmatter_split(markdown)
    options = base.copy() if base else ProcessorOptions()
    return options.merge(frontmatter), body
