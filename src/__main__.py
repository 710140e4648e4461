#!/usr/bin/env python3
"""
lpml - Lazy Page Maker Language compiler

Compiles a bracket-tagged .lpml source file into a static HTML page.

Usage:
    lpml page.lpml                  # writes page.html next to the source
    lpml page.lpml out/index.html   # explicit output path
    lpml page.lpml -vv              # debug trace of sections/elements

If the parser records any error, every error is reported and no output
file is written.
"""

import sys
from argparse import ArgumentParser, ArgumentDefaultsHelpFormatter, Namespace
from pathlib import Path
from typing import List, Optional

from .config import appsettings
from .lib import Compiler, LOG, state_connectToLogger, state_disconnectFromLogger, __version__
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
  _
 | |_ __  _ __ ___  | |
 | | '_ \| '_ ` _ \ | |
 | | |_) | | | | | || |
 |_| .__/|_| |_| |_||_|
   |_|
  LAZY PAGE MAKER LANG
"""

parser = ArgumentParser(
    prog="lpml",
    description="lpml - compile LPML markup to static HTML",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "inputFile", type=str, help="Input LPML source file (must end in .lpml)"
)

parser.add_argument(
    "outputFile",
    nargs="?",
    default=None,
    type=str,
    help="Output HTML file. Defaults to the input path with its suffix replaced by .html",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate the input path and resolve the output path.

    Exits:
        1 if the input does not carry the LPML suffix or does not exist
    """
    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    input_file = Path(state.inputFile)

    if not appsettings.sourceSuffix_check(input_file):
        print(
            f"Error: Invalid file type: needs to end in suffix {appsettings.source_suffix}",
            file=sys.stderr,
        )
        sys.exit(1)

    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        sys.exit(1)

    state.inputSourceFile = input_file
    if state.outputFile:
        state.htmlOutputFile = Path(state.outputFile)
    else:
        state.htmlOutputFile = appsettings.outputPath_derive(input_file)

    LOG(f"Input file: {state.inputSourceFile}", level=2)
    LOG(f"Output file: {state.htmlOutputFile}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the LPML source file.

    Exits:
        1 if the file cannot be read or is not valid UTF-8
    """
    state = inputstate.copy()

    LOG("Reading source file...", level=1)
    try:
        state.sourceText = state.inputSourceFile.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: Failed to read file: {e}", file=sys.stderr)
        sys.exit(1)
    LOG(f"Read {len(state.sourceText)} characters from {state.inputSourceFile.name}", level=2)
    return state


def html_compile(inputstate: ProgramState) -> ProgramState:
    """
    Parse the source and generate HTML through the Compiler.

    Returns:
        ProgramState with added fields:
            - compileResult: CompileResult (status, html, errors, document)
            - htmlText: the generated page

    Exits:
        1 if the parser recorded any error; every message is reported
    """
    state = inputstate.copy()

    LOG("Compiling source to HTML...", level=1)
    compiler = Compiler(state.sourceText, verbosity=state.verbosity)
    state.compileResult = compiler.compile()

    if not state.compileResult.status:
        print("Parsing errors:", file=sys.stderr)
        for message in state.compileResult.errors:
            print(f"  - {message}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Compilation complete: {state.compileResult.section_count} page sections", level=2)
    state.htmlText = state.compileResult.html
    return state


def output_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the generated HTML to the output path.

    Exits:
        1 if the file cannot be written
    """
    state = inputstate.copy()

    try:
        state.htmlOutputFile.write_text(state.htmlText or "", encoding="utf-8")
    except OSError as e:
        print(f"Error: Failed to write output file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Wrote {state.htmlOutputFile}", level=2)
    state.written = True
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """Tell the user where the output went (terminal stage)."""
    state = inputstate.copy()
    if not state.written:
        print("Error: Compilation failed", file=sys.stderr)
        sys.exit(1)

    print(f"Successfully generated: {state.htmlOutputFile}")
    return state


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point - compile one .lpml file to HTML.

    Orchestrates the pipeline:
        1. env_check: Validate input suffix/existence, resolve output path
        2. source_read: Read the source file
        3. html_compile: Parse and generate through the Compiler, report parse errors
        4. output_write: Persist the HTML
        5. results_report: Report the output path

    Returns:
        0 on success (failures exit with status 1)
    """
    options: Namespace = parser.parse_args(argv)
    state = ProgramState.state_createFromNamespace(options)

    state_connectToLogger(state)
    try:
        pipeline(state, env_check, source_read, html_compile, output_write, results_report)
    finally:
        state_disconnectFromLogger()
    return 0


if __name__ == "__main__":
    sys.exit(main())
