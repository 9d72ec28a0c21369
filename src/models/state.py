"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Optional, Type, TypeVar, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the processing pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as processing progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, outputFile,
                   separator, verticalSeparator, defaultTemplate, log
        - env_check: inputSourceFile, outputTargetFile, envOK
        - source_read: sourceText
        - markdown_process: processedText
        - results_write: processResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the source note, its templates and embeds
        outputdir: Base output directory for the processed note
        verbosity: Logging verbosity level (1-3)
        inputFile: Input markdown filename (relative to inputdir)
        outputFile: Output filename (relative to outputdir); defaults to inputFile
        separator: Optional horizontal separator regex override
        verticalSeparator: Optional vertical separator regex override
        defaultTemplate: Optional template applied to every slide
        log: Log intermediate pass results
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the input note
        outputTargetFile: Resolved path of the file to write
        sourceText: Raw text of the input note
        processedText: Document after all passes
        processResult: Summary (output_file, slide_count, status)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    outputFile: Optional[str] = field(default=None)
    separator: Optional[str] = field(default=None)
    verticalSeparator: Optional[str] = field(default=None)
    defaultTemplate: Optional[str] = field(default=None)
    log: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    outputTargetFile: Path = field(default=Path("/"))
    sourceText: Optional[str] = field(default=None)
    processedText: Optional[str] = field(default=None)
    processResult: Optional[Dict] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputFile, defaultTemplate, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for processing output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Namespace may carry extras added by the plugin wrapper
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_read,
            markdown_process,
            results_write,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
