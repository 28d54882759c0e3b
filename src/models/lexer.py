"""
Lexer-specific data models

Type-safe structures for lexer operations and return values.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .document import Container


@dataclass
class ExtractedContainers:
    """
    Result of scanning the container prefixes at the start of a line

    Returned by Lexer.containers_extract() after greedily consuming
    blockquote and list markers.

    Attributes:
        containers: Detected container stack, outermost first
        position: Character position in source just past the last prefix
                  (unchanged if no prefix was found)

    Example:
        Input line: "> 1. step one"
        Result: ExtractedContainers(
            containers=(Container(BLOCKQUOTE), Container(ORDERED_LIST, 0)),
            position=5
        )
    """
    containers: Tuple[Container, ...]
    position: int


@dataclass
class FenceMatch:
    """
    Result of matching a fenced code block at the current position

    Attributes:
        language: Language identifier after the opening fence, or None
        code: Verbatim content between the fences
        end: Character position just past the closing fence
    """
    language: Optional[str]
    code: str
    end: int
