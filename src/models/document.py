"""
Document model for the markdown compiler

Defines the tagged-union entry types shared by the lexer, the normalizer
and the renderer.

Two phases produce two kinds of entries:
    - Raw entries (lexer output): one per physical line or fenced block,
      each carrying the container stack detected on that line.
    - Normalized entries (normalizer output): headings, code blocks,
      paragraphs and explicit container open/close events.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union


class ContainerKind(Enum):
    """
    Kinds of nesting constructs

    The value doubles as the HTML tag name emitted by the renderer.
    """
    BLOCKQUOTE = "blockquote"        # > quoted
    UNORDERED_LIST = "ul"            # - item / * item
    ORDERED_LIST = "ol"              # 1. item


@dataclass(frozen=True)
class Container:
    """
    A single container descriptor on a line's container stack

    Attributes:
        kind: Which construct opened this level
        indent: Count of blanks before the list marker (always 0 for
                blockquotes)

    Two containers are equal only if both kind and indent match, so
    "- a" followed by "  - b" is a different stack, not the same list.
    """
    kind: ContainerKind
    indent: int = 0


@dataclass(frozen=True)
class Heading:
    """ATX heading: level is the count of leading '#' (1-6)"""
    level: int
    name: str


@dataclass(frozen=True)
class CodeBlock:
    """
    Fenced code block

    Attributes:
        language: Identifier following the opening fence, or None
        code: Verbatim text between the fences (no trailing newline)
    """
    language: Optional[str]
    code: str


@dataclass(frozen=True)
class Line:
    """Plain line of text. An empty line is the blank-line signal."""
    text: str


RawContent = Union[Heading, CodeBlock, Line]


@dataclass(frozen=True)
class RawEntry:
    """
    Lexer output for one logical line

    Attributes:
        containers: Container stack on this line, outermost first
        content: What the line holds once its prefixes are stripped

    Example:
        For the line "> - hello":
        RawEntry(
            containers=(Container(BLOCKQUOTE), Container(UNORDERED_LIST, 0)),
            content=Line("hello")
        )
    """
    containers: Tuple[Container, ...]
    content: RawContent


@dataclass(frozen=True)
class ContainerOpen:
    """Increase event: a container starts here"""
    container: Container

    @property
    def kind(self) -> ContainerKind:
        return self.container.kind


@dataclass(frozen=True)
class ContainerClose:
    """Decrease event: the innermost open container of this kind ends here"""
    container: Container

    @property
    def kind(self) -> ContainerKind:
        return self.container.kind


@dataclass(frozen=True)
class Paragraph:
    """Consecutive non-empty lines merged into one block"""
    lines: Tuple[str, ...] = field(default_factory=tuple)


Entry = Union[Heading, CodeBlock, ContainerOpen, ContainerClose, Paragraph]

# The document handed to the renderer
Document = List[Entry]


@dataclass(frozen=True)
class StackDiff:
    """
    Result of comparing two container stacks

    Attributes:
        closed: Containers of the old stack past the prefix, innermost first
        opened: Containers of the new stack past the prefix, outermost first

    Example:
        old = (BLOCKQUOTE, UL(0)), new = (BLOCKQUOTE, OL(0))
        StackDiff(closed=(UL(0),), opened=(OL(0),))
    """
    closed: Tuple[Container, ...]
    opened: Tuple[Container, ...]

    @property
    def changed(self) -> bool:
        return bool(self.closed or self.opened)
