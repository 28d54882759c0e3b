#!/usr/bin/env python3
"""
mdpage - Markdown page compiler

Compiles a markdown file into an HTML fragment ready to be spliced between
a site's header and footer.

Supported markdown:
    - Headings:       # Title ... ###### Title
    - Fenced code:    ```python ... ```
    - Blockquotes:    > quoted, >> nested
    - Lists:          - item, * item, 1. item
    - Paragraphs:     consecutive lines, separated by blank lines

Markdown the grammar cannot parse (an unterminated fence, say) is rendered
as a single escaped paragraph instead of failing, unless --strict is given.

Usage:
    mdpage inputdir/ outputdir/ --inputFile page.md

Examples:
    # Basic compilation
    mdpage . output/ --inputFile about.md

    # Named fragment in an output subdirectory
    mdpage . output/ --inputFile about.md --outputFile about.html --outputSubdir pages/

    # Fail on unparseable markdown, verbose output
    mdpage . output/ --inputFile about.md --strict -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import Lexer, combine, render, __version__, LOG, state_connectToLogger
from .lib.markdown import source_decode
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
               _
   _ __ ___   __| |_ __   __ _  __ _  ___
  | '_ ` _ \ / _` | '_ \ / _` |/ _` |/ _ \
  | | | | | | (_| | |_) | (_| | (_| |  __/
  |_| |_| |_|\__,_| .__/ \__,_|\__, |\___|
                  |_|          |___/
  Markdown page compiler
"""

# Define CLI arguments
parser = ArgumentParser(
    description="mdpage - Markdown page compiler",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input markdown file (relative to inputdir)"
)

parser.add_argument(
    "--outputFile",
    default="index.html",
    type=str,
    help="Filename for the rendered HTML fragment",
)

parser.add_argument(
    "--outputSubdir",
    default=".",
    type=str,
    help="Subdirectory within outputdir for the rendered fragment",
)

parser.add_argument(
    "--strict",
    action="store_true",
    default=appsettings.strict_mode,
    help="Fail instead of rendering unparseable markdown as literal text",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=appsettings.verbosity_default(),
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the markdown file
            - htmlOutputdir: Created output directory path
            - envOK: True if environment is valid

    Exits:
        1 if the input file is not found
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile

    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    state.htmlOutputdir = state.outputdir / state.outputSubdir
    state.htmlOutputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.htmlOutputdir}", level=2)

    state.envOK = True
    return state


def source_parse(inputstate: ProgramState) -> ProgramState:
    """
    Read the markdown file and build its normalized document.

    Args:
        inputstate: Program state with inputSourceFile path set

    Returns:
        ProgramState with added fields:
            - markdownSource: Decoded file contents
            - parsedDocument: Normalized document (List[Entry])
            - fellBack: True if the lexer used the literal-text fallback

    Exits:
        1 if the file cannot be read, or on fallback in strict mode
    """

    state = inputstate.copy()

    LOG("Reading source file...", level=1)

    try:
        state.markdownSource = source_decode(state.inputSourceFile.read_bytes())
        LOG(f"Read {len(state.markdownSource)} characters from {state.inputSourceFile.name}", level=2)
    except OSError as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG("Lexing markdown...", level=1)
    lexer = Lexer(state.markdownSource)
    raw_entries = lexer.lex()
    state.fellBack = lexer.fellBack

    if state.fellBack:
        if state.strict:
            print(
                f"Parse error: {state.inputSourceFile.name} is not valid markdown (strict mode)",
                file=sys.stderr,
            )
            sys.exit(1)
        LOG("Markdown not parseable, rendering as literal text", level=1)

    state.parsedDocument = combine(raw_entries)
    LOG(f"Normalized {len(raw_entries)} raw entries into {len(state.parsedDocument)} entries", level=2)
    return state


def html_compile(inputstate: ProgramState) -> ProgramState:
    """
    Render the normalized document and write the HTML fragment.

    Args:
        inputstate: Program state with parsedDocument

    Returns:
        ProgramState with added field:
            - compileResult: Dict containing:
                - status: bool (rendering success)
                - output_file: str (path to the written fragment)
                - entry_count: int (number of normalized entries)

    Exits:
        1 if parsedDocument is missing or the fragment cannot be written
    """

    state = inputstate.copy()

    LOG("Rendering document to HTML...", level=1)

    if state.parsedDocument is None:
        print("Error: No parsed document available", file=sys.stderr)
        sys.exit(1)

    fragment = render(state.parsedDocument)
    output_file = state.htmlOutputdir / state.outputFile

    try:
        output_file.write_text(fragment, encoding="utf-8")
    except OSError as e:
        print(f"Error writing output file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Wrote {output_file}", level=2)
    state.compileResult = {
        'status': True,
        'output_file': str(output_file),
        'entry_count': len(state.parsedDocument),
    }
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display compilation results to user.

    Args:
        inputstate: Program state with compileResult populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if compileResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.compileResult:
        print("Error: Compilation failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Compilation successful!", level=1)
    LOG(f"  Output:  {state.compileResult['output_file']}", level=1)
    LOG(f"  Entries: {state.compileResult['entry_count']}", level=1)
    if state.fellBack:
        LOG("  Note:    source was rendered as literal text", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="mdpage - Markdown page compiler",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - compile a markdown file to an HTML fragment.

    Orchestrates the pipeline:
        1. env_check: Validate paths and environment
        2. source_parse: Read, lex and normalize the markdown
        3. html_compile: Render and write the fragment
        4. results_report: Display results to user

    Args:
        options: CLI arguments from argparse
        inputdir: Directory containing the markdown file
        outputdir: Directory where the fragment will be written
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, source_parse, html_compile, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
