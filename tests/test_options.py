"""
Options and front matter tests
"""

import pytest

from slidemark.config import appsettings
from slidemark.models.options import (
    OptionsError,
    ProcessorOptions,
    frontmatter_split,
    options_fromMarkdown,
    templateName_normalize,
)


class TestProcessorOptions:
    """ProcessorOptions defaults and merging"""

    def test_defaults_from_settings(self):
        """Separators default to the application settings"""
        options = ProcessorOptions()
        assert options.separator == appsettings.separator
        assert options.vertical_separator == appsettings.vertical_separator
        assert options.default_template is None
        assert options.log is False

    def test_merge_front_matter_keys(self):
        """camelCase keys map onto option fields"""
        options = ProcessorOptions().merge({
            "verticalSeparator": "^--$",
            "defaultTemplate": "tpl",
            "log": True,
        })
        assert options.vertical_separator == "^--$"
        assert options.default_template == "tpl"
        assert options.log is True

    def test_merge_ignores_unknown_keys(self):
        """Keys for other passes are ignored"""
        options = ProcessorOptions().merge({"theme": "black"})
        assert options == ProcessorOptions()

    def test_merge_returns_copy(self):
        """The original options are not modified"""
        original = ProcessorOptions()
        original.merge({"defaultTemplate": "tpl"})
        assert original.default_template is None


class TestFrontmatter:
    """frontmatter_split() and options_fromMarkdown()"""

    def test_no_front_matter(self):
        """Documents without front matter are returned as they are"""
        assert frontmatter_split("# Slide") == ({}, "# Slide")

    def test_front_matter_split(self):
        """Mapping and body are separated"""
        data, body = frontmatter_split("---\ndefaultTemplate: tpl\nlog: true\n---\n# Slide")
        assert data == {"defaultTemplate": "tpl", "log": True}
        assert body == "# Slide"

    def test_invalid_yaml(self):
        """Broken YAML raises OptionsError"""
        with pytest.raises(OptionsError, match="Failed to parse"):
            frontmatter_split("---\nkey: [unclosed\n---\nbody")

    def test_not_a_mapping(self):
        """A YAML list is rejected"""
        with pytest.raises(OptionsError, match="mapping"):
            frontmatter_split("---\n- a\n- b\n---\nbody")

    def test_options_from_markdown(self):
        """Front matter overrides the base options"""
        base = ProcessorOptions(default_template="cli")
        options, body = options_fromMarkdown("---\ndefaultTemplate: note\n---\nBody", base)

        assert options.default_template == "note"
        assert body == "Body"
        assert base.default_template == "cli"


class TestDefaultTemplateValue:
    """templateName_normalize() and defaultTemplate in front matter"""

    @pytest.mark.parametrize("value", ["tpl", " tpl ", "[[tpl]]", "[[ tpl ]]", "[[tpl|Shown]]", [["tpl"]], ["tpl"]])
    def test_forms_reduced_to_name(self, value):
        """Plain names, links and YAML-list links all give the note name"""
        assert templateName_normalize(value) == "tpl"

    @pytest.mark.parametrize("value", [None, "", "[[ ]]"])
    def test_empty_means_no_template(self, value):
        """Missing or blank settings disable the default template"""
        assert templateName_normalize(value) is None

    @pytest.mark.parametrize("value", [["a", "b"], {"name": "tpl"}, 3, "a]b", "[[a]] [[b]]"])
    def test_unusable_values_rejected(self, value):
        """Values that cannot name one note raise OptionsError"""
        with pytest.raises(OptionsError, match="defaultTemplate"):
            templateName_normalize(value)

    def test_quoted_link_in_front_matter(self):
        """defaultTemplate: "[[T]]" """
        options, _ = options_fromMarkdown('---\ndefaultTemplate: "[[T]]"\n---\nA')
        assert options.default_template == "T"

    def test_unquoted_link_in_front_matter(self):
        """defaultTemplate: [[T]] loads as a nested list"""
        options, _ = options_fromMarkdown("---\ndefaultTemplate: [[T]]\n---\nA")
        assert options.default_template == "T"


class TestLogFlag:
    """log in front matter"""

    @pytest.mark.parametrize("value, expected", [
        (True, True), (False, False), ("true", True), ("false", False),
        ("Yes", True), ("off", False), (1, True), (0, False), (None, False),
    ])
    def test_spellings(self, value, expected):
        """Booleans and their usual string spellings"""
        assert ProcessorOptions().merge({"log": value}).log is expected

    def test_quoted_false_in_front_matter(self):
        """log: "false" keeps logging off"""
        options, _ = options_fromMarkdown('---\nlog: "false"\n---\nA')
        assert options.log is False

    @pytest.mark.parametrize("value", ["maybe", 2, ["true"]])
    def test_unrecognised_rejected(self, value):
        """Anything else raises OptionsError"""
        with pytest.raises(OptionsError, match="true or false"):
            ProcessorOptions().merge({"log": value})
