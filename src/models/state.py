"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

import dataclasses
from functools import reduce
from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the command-line pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the compilation progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, outputFile,
                   outputSubdir, strict
        - env_check: inputSourceFile, htmlOutputdir, envOK
        - source_parse: markdownSource, parsedDocument, fellBack
        - html_compile: compileResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the markdown file
        outputdir: Base output directory for the rendered fragment
        verbosity: Logging verbosity level (1-3)
        inputFile: Markdown filename (relative to inputdir)
        outputFile: Fragment filename written inside htmlOutputdir
        outputSubdir: Subdirectory within outputdir for output
        strict: Refuse to write a fallback (literal text) document
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the markdown file
        htmlOutputdir: Final output directory (outputdir + outputSubdir)
        markdownSource: Text read from inputSourceFile
        parsedDocument: Normalized document (List[Entry])
        fellBack: Lexer could not parse the source and used literal text
        compileResult: Rendering results (output_file, entry_count, status)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    outputFile: str = field(default="index.html")
    outputSubdir: str = field(default=".")
    strict: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    htmlOutputdir: Path = field(default=Path("/"))
    markdownSource: str = field(default="")
    parsedDocument: Optional[List[Any]] = field(default=None)  # List[Entry] at runtime
    fellBack: bool = field(default=False)
    compileResult: Optional[Dict] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Options that are not ProgramState fields are dropped; the explicit
        directories override anything of the same name in the namespace.

        Args:
            options: Parsed CLI arguments (inputFile, outputFile, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for rendered output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}
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

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_parse,
            html_compile,
            results_report
        )

    This is equivalent to:
        results_report(html_compile(source_parse(env_check(initial_state))))
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
