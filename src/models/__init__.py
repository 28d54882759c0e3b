"""
Models package for mdpage

Contains data structures and type definitions for the compilation pipeline.
"""

from .state import ProgramState, pipeline
from .document import (
    ContainerKind,
    Container,
    Heading,
    CodeBlock,
    Line,
    RawEntry,
    ContainerOpen,
    ContainerClose,
    Paragraph,
    StackDiff,
    Entry,
    Document,
)
from .lexer import ExtractedContainers, FenceMatch

__all__ = [
    "ProgramState",
    "pipeline",
    "ContainerKind",
    "Container",
    "Heading",
    "CodeBlock",
    "Line",
    "RawEntry",
    "ContainerOpen",
    "ContainerClose",
    "Paragraph",
    "StackDiff",
    "Entry",
    "Document",
    "ExtractedContainers",
    "FenceMatch",
]
