"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional CLI pipeline and the
pipeline() helper for composing transformation stages.
"""

import dataclasses
from argparse import Namespace
from dataclasses import dataclass, field
from functools import reduce
from pathlib import Path
from typing import Callable, Optional, Type, TypeVar

from .compile import CompileResult


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the compilation pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: inputFile, outputFile, verbosity
        - env_check: inputSourceFile, htmlOutputFile, envOK
        - source_read: sourceText
        - html_compile: compileResult, htmlText
        - output_write: written
        - results_report: (no additions, terminal stage)

    Attributes:
        inputFile: Input path as given on the command line
        outputFile: Optional output path as given on the command line
        verbosity: Logging verbosity level (1-3)
        envOK: Input path validated
        inputSourceFile: Resolved input path
        htmlOutputFile: Resolved output path (derived when not given)
        sourceText: Raw LPML source
        compileResult: Compiler outcome (parse errors, partial tree, HTML)
        htmlText: Generated HTML
        written: Output file was written
    """

    # CLI arguments
    inputFile: str = field(default="")
    outputFile: Optional[str] = field(default=None)
    verbosity: int = field(default=1)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    htmlOutputFile: Path = field(default=Path("/"))
    sourceText: str = field(default="")
    compileResult: Optional[CompileResult] = field(default=None)
    htmlText: Optional[str] = field(default=None)
    written: bool = field(default=False)

    @classmethod
    def state_createFromNamespace(cls: Type[PS], options: Namespace) -> PS:
        """
        Create ProgramState from an argparse Namespace.

        Options that are not ProgramState fields are ignored.
        """
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}
        return cls(**filtered_options)

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

    Example:
        final_state = pipeline(initial_state, env_check, source_read, html_compile)

    is equivalent to html_compile(source_read(env_check(initial_state))).
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
