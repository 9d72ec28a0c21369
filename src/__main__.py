#!/usr/bin/env python3
"""
slidemark - Template engine for markdown slide decks

Expands slide templates, embedded notes and named-block variables in an
annotated markdown note and writes slide-ready markdown for a renderer such
as reveal.js.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Markup handled:
    - Slide templates: <!-- .slide: template="[[tpl-name]]" -->
    - Template slot for the slide body: <% content %>
    - Named blocks: ::: name ... :::
    - Placeholders: <% name %> (required), <%? name %> (optional)
    - Embedded notes: ![[note]], ![[note#Heading]]
    - Footnotes, renumbered per slide

Usage:
    slidemark inputdir/ outputdir/ --inputFile deck.md

    Templates and embedded notes are looked up below inputdir. The processed
    note is written to outputdir/ under the same name unless --outputFile
    is given.

Examples:
    # Basic processing
    slidemark vault/ output/ --inputFile talk.md

    # Apply a template to every slide that has none
    slidemark vault/ output/ --inputFile talk.md --defaultTemplate tpl-basic

    # Log every pass that changed the document
    slidemark vault/ output/ --inputFile talk.md --log -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .lib import MarkdownProcessor, FileResolver, __version__, LOG, state_connectToLogger
from .lib.slides import slides_count
from .models import ProgramState, pipeline, ProcessorOptions, OptionsError, options_fromMarkdown, templateName_normalize


# Define CLI arguments
parser = ArgumentParser(
    description="slidemark - Template engine for markdown slide decks",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input markdown note (relative to inputdir)"
)

parser.add_argument(
    "--outputFile",
    default=None,
    type=str,
    help="Output file name (relative to outputdir). Defaults to the input file name",
)

parser.add_argument(
    "--separator",
    default=None,
    type=str,
    help="Regex separating horizontal slides (overrides settings, overridden by front matter)",
)

parser.add_argument(
    "--verticalSeparator",
    default=None,
    type=str,
    help="Regex separating vertical slides (overrides settings, overridden by front matter)",
)

parser.add_argument(
    "--defaultTemplate",
    default=None,
    type=str,
    help="Template applied to every slide without its own template directive",
)

parser.add_argument(
    "--log",
    action="store_true",
    help="Log the document after every pass that changed it",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve file paths.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the input note
            - outputTargetFile: Path of the file to write
            - envOK: True if environment is valid

    Exits:
        1 if the input file is not found
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    state.outputTargetFile = state.outputdir / (state.outputFile or state.inputFile)
    state.outputTargetFile.parent.mkdir(parents=True, exist_ok=True)
    LOG(f"Output file: {state.outputTargetFile}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the source note.

    Returns:
        ProgramState with added field:
            - sourceText: Raw note content

    Exits:
        1 if the file cannot be read
    """
    state = inputstate.copy()

    LOG("Reading source file...", level=1)

    try:
        state.sourceText = state.inputSourceFile.read_text(encoding="utf-8")
        LOG(f"Read {len(state.sourceText)} characters from {state.inputSourceFile.name}", level=2)
    except Exception as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)
    return state


def options_build(state: ProgramState) -> ProcessorOptions:
    """Processor options from settings defaults and CLI overrides"""
    options = ProcessorOptions(default_template=templateName_normalize(state.defaultTemplate), log=state.log)
    if state.separator:
        options.separator = state.separator
    if state.verticalSeparator:
        options.vertical_separator = state.verticalSeparator
    return options


def markdown_process(inputstate: ProgramState) -> ProgramState:
    """
    Expand templates, embeds and variables, then run the remaining passes.

    Front matter in the note overrides CLI options and is not copied to
    the output.

    Returns:
        ProgramState with added field:
            - processedText: Slide-ready markdown

    Exits:
        1 if front matter is invalid or processing fails
    """
    state = inputstate.copy()

    LOG("Processing markdown...", level=1)

    try:
        options, body = options_fromMarkdown(state.sourceText or "", options_build(state))
    except OptionsError as e:
        print(f"Options error: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Separators: {options.separator!r} / {options.vertical_separator!r}", level=3)

    try:
        processor = MarkdownProcessor(FileResolver(state.inputdir))
        state.processedText = processor.process(body, options)
    except Exception as e:
        print(f"Processing error: {e}", file=sys.stderr)
        if state.verbosity >= 3:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    state.processResult = {
        'status': False,
        'output_file': str(state.outputTargetFile),
        'slide_count': slides_count(state.processedText, options),
    }
    return state


def results_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the processed note to disk.

    Returns:
        ProgramState with processResult['status'] set

    Exits:
        1 if there is nothing to write or the write fails
    """
    state = inputstate.copy()

    if state.processedText is None or state.processResult is None:
        print("Error: No processed document available", file=sys.stderr)
        sys.exit(1)

    try:
        state.outputTargetFile.write_text(state.processedText, encoding="utf-8")
        LOG(f"Wrote {state.outputTargetFile}", level=2)
    except OSError as e:
        print(f"Error writing output file: {e}", file=sys.stderr)
        sys.exit(1)

    state.processResult = {**state.processResult, 'status': True}
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display processing results to the user.

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if processResult is missing or unsuccessful
    """
    state: ProgramState = inputstate.copy()
    if not state.processResult or not state.processResult['status']:
        print("Error: Processing failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Processing successful!", level=1)
    LOG(f"  Output: {state.processResult['output_file']}", level=1)
    LOG(f"  Slides: {state.processResult['slide_count']}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="slidemark - Template engine for markdown slide decks",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - process a markdown note into slide-ready markdown.

    Orchestrates the pipeline:
        1. env_check: Validate paths and environment
        2. source_read: Read the note
        3. markdown_process: Expand templates and run passes
        4. results_write: Write the output note
        5. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, source_read, markdown_process, results_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
