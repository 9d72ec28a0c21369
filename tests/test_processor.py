"""
Markdown processor tests

Tests the fixed-point template driver, ending trim, the round cap and the
ordered pass list.
"""

import pytest

from slidemark.lib.processor import MarkdownProcessor
from slidemark.lib.resolver import FileResolver
from slidemark.models.options import ProcessorOptions, options_fromMarkdown


def processor_make(root, **kwargs):
    return MarkdownProcessor(FileResolver(root), **kwargs)


class TestEndingTrim:
    """ending_trim()"""

    def test_trailing_horizontal_separator(self, vault):
        """A final --- is dropped"""
        processor = processor_make(vault({}))
        assert processor.ending_trim("A\n---\nB\n---", ProcessorOptions()) == "A\n---\nB"

    def test_trailing_vertical_separator(self, vault):
        """A final -- is dropped"""
        processor = processor_make(vault({}))
        assert processor.ending_trim("A\n--\nB\n--", ProcessorOptions()) == "A\n--\nB"

    def test_no_trailing_separator(self, vault):
        """Documents not ending in a separator are unchanged"""
        processor = processor_make(vault({}))
        assert processor.ending_trim("A\n---\nB", ProcessorOptions()) == "A\n---\nB"


class TestFixedPoint:
    """templates_resolve()"""

    def test_plain_document_unchanged(self, vault):
        """Nothing to expand, nothing changes"""
        processor = processor_make(vault({}))
        document = "# One\n---\n# Two\n--\n# Three"
        assert processor.templates_resolve(document, ProcessorOptions()) == document

    def test_embed_then_template(self, vault):
        """A template directive brought in by an embed is expanded"""
        root = vault({
            "note.md": 'N<!-- slide template="[[T]]" -->',
            "T.md": "X<% content %>Y",
        })
        result = processor_make(root).templates_resolve("![[note]]", ProcessorOptions())
        assert result == "XNY"

    def test_default_template_cleared(self, vault):
        """The default template is consumed by the first round"""
        options = ProcessorOptions(default_template="T")
        processor_make(vault({"T.md": "X<% content %>Y"})).templates_resolve("A", options)
        assert options.default_template is None

    def test_default_template_applied_once(self, vault):
        """Expanded slides do not get the default template again"""
        processor = processor_make(vault({"T.md": "X<% content %>Y"}))
        result = processor.templates_resolve("A", ProcessorOptions(default_template="T"))
        assert result == "XAY"

    def test_mutual_templates_terminate(self, vault):
        """Templates referring to each other return, unexpanded"""
        root = vault({
            "a.md": '<!-- slide template="[[b]]" --><% content %>',
            "b.md": '<!-- slide template="[[a]]" --><% content %>',
        })
        document = 'X<!-- slide template="[[a]]" -->'
        assert processor_make(root).templates_resolve(document, ProcessorOptions()) == document

    def test_round_cap_warns(self, vault, log_records):
        """Hitting the cap logs a warning and returns the last result"""
        root = vault({
            "note.md": 'N<!-- slide template="[[T]]" -->',
            "T.md": "X<% content %>Y",
        })
        processor = processor_make(root, max_rounds=1)

        result = processor.templates_resolve("![[note]]", ProcessorOptions())

        assert result == "XNY"
        warnings = [r for r in log_records if r["level"].name == "WARNING"]
        assert len(warnings) == 1
        assert "Circuit in template hierarchy" in warnings[0]["message"]

    def test_no_warning_when_stable(self, vault, log_records):
        """Converging documents do not warn"""
        processor = processor_make(vault({"T.md": "X<% content %>Y"}))
        processor.templates_resolve('A<!--slide template="[[T]]"-->', ProcessorOptions())
        assert [r for r in log_records if r["level"].name == "WARNING"] == []


class TestPasses:
    """process() and the pass list"""

    def test_passes_run_in_order(self, vault):
        """Passes see the output of the previous pass"""
        processor = processor_make(vault({}), passes=[
            ("upper", lambda document, options: document.upper()),
            ("bang", lambda document, options: document + "!"),
        ])
        assert processor.process("abc", ProcessorOptions()) == "ABC!"

    def test_passes_receive_options(self, vault):
        """Options are threaded to every pass"""
        seen = []
        processor = processor_make(vault({}), passes=[
            ("spy", lambda document, options: seen.append(options) or document),
        ])
        options = ProcessorOptions()
        processor.process("abc", options)
        assert seen == [options]

    def test_default_passes_renumber_footnotes(self, vault):
        """Footnotes are handled by the default pass list"""
        processor = processor_make(vault({}))
        result = processor.process("Text[^a]\n\n[^a]: Note", ProcessorOptions())
        assert '<sup id="fnref:1" role="doc-noteref">1</sup>' in result
        assert "[^a]: Note" not in result

    def test_templates_before_passes(self, vault):
        """Passes see the expanded document"""
        processor = processor_make(vault({"T.md": "X<% content %>Y"}), passes=[
            ("check", lambda document, options: "expanded" if document == "XAY" else "raw"),
        ])
        assert processor.process('A<!--slide template="[[T]]"-->', ProcessorOptions()) == "expanded"

    def test_log_option_reports_changes(self, vault, log_records):
        """With options.log, passes that change the document are logged"""
        processor = processor_make(vault({}), passes=[
            ("upper", lambda document, options: document.upper()),
            ("same", lambda document, options: document),
        ])
        processor.process("abc", ProcessorOptions(log=True))

        messages = [r["message"] for r in log_records if r["level"].name == "INFO"]
        assert "upper: ABC" in messages
        assert not any(message.startswith("same:") for message in messages)

    def test_log_option_off(self, vault, log_records):
        """Without options.log nothing is reported"""
        processor = processor_make(vault({}), passes=[
            ("upper", lambda document, options: document.upper()),
        ])
        processor.process("abc", ProcessorOptions())
        assert [r for r in log_records if r["level"].name == "INFO"] == []

    def test_full_document(self, vault):
        """Template, blocks, optional slot and footnotes together"""
        root = vault({
            "tpl.md": "# <% title %>\n<% content %>\n<%? footer %>",
        })
        document = (
            '<!-- .slide: template="[[tpl]]" -->\n'
            "::: title\nIntro\n:::\n"
            "Body[^n]\n\n[^n]: Source\n"
            "---\n"
            "Second slide\n"
            "---"
        )
        result = processor_make(root).process(document, ProcessorOptions())

        first, second = result.split("\n---\n")
        assert first.startswith("# ::: block\nIntro\n:::\n")
        assert '<sup id="fnref:1" role="doc-noteref">1</sup>' in first
        assert '<li role="doc-endnote" id="fn:1"><p>Source</p></li>' in first
        assert "<%" not in first
        assert second == "Second slide"


class GrowingInliner:
    """Inliner stand-in whose output differs on every call"""

    def __init__(self):
        self.calls = 0

    def process(self, text):
        self.calls += 1
        return text + "."


class TestRoundCap:
    """The default round cap"""

    def test_nine_rounds_then_warning(self, vault, log_records):
        """A document that never settles runs nine rounds, then warns once"""
        processor = processor_make(vault({}))
        inliner = GrowingInliner()
        processor.multiple_file_processor = inliner

        result = processor.templates_resolve("A", ProcessorOptions())

        assert inliner.calls == 9
        assert result == "A" + "." * 9
        warnings = [r for r in log_records if r["level"].name == "WARNING"]
        assert len(warnings) == 1
        assert "after 9 rounds" in warnings[0]["message"]


class TestFrontMatterDefaultTemplate:
    """defaultTemplate written as a link in front matter"""

    @pytest.mark.parametrize("front_matter", [
        'defaultTemplate: "[[T]]"',
        "defaultTemplate: [[T]]",
        "defaultTemplate: T",
    ])
    def test_link_forms_expand(self, vault, front_matter):
        """Quoted link, unquoted link and bare name all apply the template"""
        processor = processor_make(vault({"T.md": "X<% content %>Y"}))
        options, body = options_fromMarkdown(f"---\n{front_matter}\n---\nA")

        assert processor.process(body, options) == "XAY"
