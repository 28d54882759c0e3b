"""
Lexer for the markdown subset

Turns raw markdown text into a list of RawEntry, one per logical line
(a fenced code block counts as one line no matter how many it spans).

The grammar is evaluated at the start of every line:
1. Container prefixes: zero or more blockquote / list markers, greedy
2. Content, ordered choice: heading, else fenced code block, else plain line

Lines are separated by "\\n" or "\\r\\n" and the whole input must be
consumed. Whenever the grammar fails (an unterminated fence being the
practical case), the lexer recovers by returning the fallback document:
a single plain line holding the entire input verbatim.

Example:
    >>> entries = lex("> # Title\\nbody")
    >>> entries[0].containers
    (Container(kind=<ContainerKind.BLOCKQUOTE: 'blockquote'>, indent=0),)
    >>> entries[0].content
    Heading(level=1, name='Title')
    >>> entries[1].content
    Line(text='body')
"""

import re
from typing import List, Optional

from ..models.document import (
    Container,
    ContainerKind,
    Heading,
    CodeBlock,
    Line,
    RawContent,
    RawEntry,
)
from ..models.lexer import ExtractedContainers, FenceMatch
from .log import LOG


# Text up to (not including) a line separator; a lone "\r" is ordinary text
_LINE_TEXT = r'(?:[^\r\n]|\r(?!\n))*'
_LINE_END = r'(?=\r?\n|\Z)'

_BLOCKQUOTE_PREFIX = re.compile(r'[ \t]*>[ \t]?')
_UNORDERED_PREFIX = re.compile(r'([ \t]*)[-*][ \t]')
_ORDERED_PREFIX = re.compile(r'([ \t]*)[0-9]+\.[ \t]')

_HEADING = re.compile(r'(#{1,6})[ \t]+([^ \t\r\n]' + _LINE_TEXT + r')' + _LINE_END)
_FENCE_OPEN = re.compile(r'```([^\s`]+)?' + _LINE_END)
_FENCE_CLOSE = re.compile(r'\r?\n```' + _LINE_END)
_PLAIN_LINE = re.compile(_LINE_TEXT)
_SEPARATOR = re.compile(r'\r?\n')


class MarkdownSyntaxError(SyntaxError):
    """
    Grammar failure while lexing markdown

    Never escapes lex(); it signals the lexer to produce the fallback
    document instead.
    """


class Lexer:
    """
    Recursive-descent lexer for the markdown subset

    Handles:
    - Blockquote prefixes ("> ", ">>", "> > ")
    - Unordered list prefixes ("- ", "* ", with leading indentation)
    - Ordered list prefixes ("1. ", with leading indentation)
    - ATX headings ("# " to "###### ")
    - Fenced code blocks with an optional language tag
    - Plain lines (possibly empty)
    """

    def __init__(self, source: str):
        """
        Initialize lexer with source text

        Args:
            source: Raw markdown text

        Attributes:
            source: Source text being lexed
            position: Current character position in source
            line_number: Current line number in source (for error reporting)
            fellBack: True once lex() has replaced the result with the
                      fallback document
        """
        self.source = source
        self.position = 0
        self.line_number = 1
        self.fellBack = False

    def lex(self) -> List[RawEntry]:
        """
        Lex source text into raw entries

        Main entry point. Never raises: a grammar failure is logged and
        answered with the fallback document.

        Returns:
            List of RawEntry. Empty source gives an empty list.

        Example:
            >>> Lexer("```\\nnever closed").lex()
            [RawEntry(containers=(), content=Line(text='```\\nnever closed'))]
        """
        self.fellBack = False
        if not self.source:
            return []

        try:
            entries = self.document_parse()
        except MarkdownSyntaxError as e:
            LOG(f"Markdown not parseable, rendering as literal text: {e.msg}", level=2)
            self.fellBack = True
            return [RawEntry(containers=(), content=Line(self.source))]

        LOG(f"Lexed {len(entries)} raw entries over {self.line_number} lines", level=3)
        return entries

    def document_parse(self) -> List[RawEntry]:
        """
        Parse the whole source as separator-delimited entries

        Raises:
            MarkdownSyntaxError: If an entry fails or input is left over
        """
        entries: List[RawEntry] = []
        self.position = 0
        self.line_number = 1

        while True:
            entries.append(self.entry_parse())
            if self.position >= len(self.source):
                break
            if not self.separator_consume():
                self.error("Expected line separator")

        if self.position != len(self.source):
            self.error("Unconsumed trailing input")

        return entries

    def entry_parse(self) -> RawEntry:
        """
        Parse one logical line: its container prefixes, then its content

        Content is an ordered choice. A heading or fence that does not match
        falls through to the next alternative; only a fence that opened and
        never closed is an error.
        """
        extracted = self.containers_extract(self.position)
        self.position = extracted.position

        content: Optional[RawContent] = self.heading_match()
        if content is None:
            content = self.codeblock_match()
        if content is None:
            content = self.line_match()

        return RawEntry(containers=extracted.containers, content=content)

    def containers_extract(self, pos: int) -> ExtractedContainers:
        """
        Greedily consume container prefixes starting at pos

        Each blockquote marker ('>') opens one level. A list marker records
        the number of blanks before it as the indentation.

        Args:
            pos: Character position of the start of a line

        Returns:
            ExtractedContainers with the stack (outermost first) and the
            position just past the last prefix

        Example:
            For source ">> 2. item" at position 0:
            Returns ExtractedContainers(
                containers=(Container(BLOCKQUOTE), Container(BLOCKQUOTE),
                            Container(ORDERED_LIST, 0)),
                position=6
            )
        """
        containers: List[Container] = []

        while pos < len(self.source):
            match = _BLOCKQUOTE_PREFIX.match(self.source, pos)
            if match:
                containers.append(Container(ContainerKind.BLOCKQUOTE))
                pos = match.end()
                continue

            match = _UNORDERED_PREFIX.match(self.source, pos)
            if match:
                containers.append(Container(ContainerKind.UNORDERED_LIST, len(match.group(1))))
                pos = match.end()
                continue

            match = _ORDERED_PREFIX.match(self.source, pos)
            if match:
                containers.append(Container(ContainerKind.ORDERED_LIST, len(match.group(1))))
                pos = match.end()
                continue

            break

        return ExtractedContainers(containers=tuple(containers), position=pos)

    def heading_match(self) -> Optional[Heading]:
        """
        Match an ATX heading at the current position

        Returns:
            Heading, or None if the line is not a heading ('#######', '#x'
            and '# ' with nothing after all fall through)
        """
        match = _HEADING.match(self.source, self.position)
        if not match:
            return None

        self.position = match.end()
        return Heading(level=len(match.group(1)), name=match.group(2))

    def codeblock_match(self) -> Optional[CodeBlock]:
        """
        Match a fenced code block at the current position

        Returns:
            CodeBlock, or None if the line is not an opening fence

        Raises:
            MarkdownSyntaxError: If the fence opens but never closes
        """
        fence = self.fence_find(self.position)
        if fence is None:
            return None

        self.line_number += self.source.count('\n', self.position, fence.end)
        self.position = fence.end
        return CodeBlock(language=fence.language, code=fence.code)

    def fence_find(self, pos: int) -> Optional[FenceMatch]:
        """
        Locate an opening fence at pos and its closing fence

        The opening line is exactly ``` plus an optional language. The code
        runs verbatim until a line separator followed by a line that is
        exactly ```.

        Args:
            pos: Character position where line content starts

        Returns:
            FenceMatch, or None if pos does not start an opening fence

        Raises:
            MarkdownSyntaxError: If no closing fence follows

        Example:
            For source "```python\\nprint(1)\\n```" at position 0:
            Returns FenceMatch(language="python", code="print(1)", end=22)
        """
        opening = _FENCE_OPEN.match(self.source, pos)
        if not opening:
            return None

        body_start = opening.end()
        closing = _FENCE_CLOSE.search(self.source, body_start)
        if closing is None:
            self.error("Unterminated code fence")

        if closing.start() == body_start:
            code = ""
        else:
            separator = _SEPARATOR.match(self.source, body_start)
            code = self.source[separator.end():closing.start()]

        return FenceMatch(language=opening.group(1), code=code, end=closing.end())

    def line_match(self) -> Line:
        """Match the rest of the line as plain text (always succeeds)"""
        match = _PLAIN_LINE.match(self.source, self.position)
        self.position = match.end()
        return Line(match.group(0))

    def separator_consume(self) -> bool:
        """Consume one line separator at the current position, if present"""
        match = _SEPARATOR.match(self.source, self.position)
        if not match:
            return False

        self.position = match.end()
        self.line_number += 1
        return True

    def error(self, message: str) -> None:
        """
        Report lexer error with source context

        Raises MarkdownSyntaxError with the message, line number, position
        and an excerpt (±40 characters) with a caret under the error.

        Args:
            message: Human-readable error description

        Raises:
            MarkdownSyntaxError: Always

        Example output:
            Unterminated code fence
            Line 3, position 42
            Context: ...intro text ```python print(1)...
                                  ^
        """
        context_start = max(0, self.position - 40)
        context_end = min(len(self.source), self.position + 40)
        context = self.source[context_start:context_end].replace('\n', ' ')

        raise MarkdownSyntaxError(
            f"{message}\n"
            f"Line {self.line_number}, position {self.position}\n"
            f"Context: ...{context}...\n"
            f"            {' ' * (self.position - context_start)}^"
        )


def lex(text: str) -> List[RawEntry]:
    """
    Lex markdown text into raw entries

    Convenience wrapper around Lexer(text).lex().

    Args:
        text: Raw markdown text

    Returns:
        List of RawEntry; the fallback document if the grammar fails
    """
    return Lexer(text).lex()
