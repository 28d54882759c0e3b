"""
Normalizer (combine pass) for raw lexer entries

Flattens the per-line container stacks produced by the lexer into explicit
open/close events and merges consecutive plain lines into paragraphs.

The pass is a single forward walk:
1. Diff each line's container stack against the previous line's
2. Close what ended (innermost first), open what started (outermost first)
3. Accumulate lines into the open paragraph; blank lines end it

Every ContainerOpen is matched by exactly one later ContainerClose, so the
renderer can emit tags in order without keeping its own stack.

Example:
    >>> combine(lex("> one\\n> two"))
    [ContainerOpen(container=Container(kind=<ContainerKind.BLOCKQUOTE: 'blockquote'>, indent=0)),
     Paragraph(lines=('one', 'two')),
     ContainerClose(container=Container(kind=<ContainerKind.BLOCKQUOTE: 'blockquote'>, indent=0))]
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from ..models.document import (
    Container,
    ContainerOpen,
    ContainerClose,
    Entry,
    Line,
    Paragraph,
    RawEntry,
    StackDiff,
)
from .log import LOG


def containers_diff(old: Sequence[Container], new: Sequence[Container]) -> StackDiff:
    """
    Compare two container stacks by longest common prefix

    Equality is element-wise and includes the list indentation. The first
    differing level invalidates everything below it, even if deeper levels
    would match again.

    Args:
        old: Stack of the previous line, outermost first
        new: Stack of the current line, outermost first

    Returns:
        StackDiff with the containers to close (innermost first) and the
        containers to open (outermost first)

    Example:
        >>> containers_diff((BQ, UL0), (BQ, OL0))
        StackDiff(closed=(UL0,), opened=(OL0,))
    """
    common = 0
    for previous, current in zip(old, new):
        if previous != current:
            break
        common += 1

    return StackDiff(
        closed=tuple(reversed(old[common:])),
        opened=tuple(new[common:]),
    )


class Normalizer:
    """
    Combines raw entries into a normalized document

    Attributes:
        document: Normalized entries emitted so far
        lastContainers: Container stack of the previous raw entry
        paragraphLines: Lines of the open paragraph, or None if no
                        paragraph is open. Kept apart from the document and
                        pushed only when the paragraph is flushed.
    """

    def __init__(self) -> None:
        self.document: List[Entry] = []
        self.lastContainers: Tuple[Container, ...] = ()
        self.paragraphLines: Optional[List[str]] = None

    def combine(self, entries: Iterable[RawEntry]) -> List[Entry]:
        """
        Run the combine pass over raw entries

        Args:
            entries: Lexer output, in source order

        Returns:
            Normalized document. Containers still open at the end of input
            are closed so the open/close events always balance.
        """
        for entry in entries:
            self.containers_update(entry.containers)
            self.entry_add(entry)

        self.paragraph_flush()
        self.containers_update(())

        LOG(f"Normalized into {len(self.document)} entries", level=3)
        return self.document

    def containers_update(self, containers: Tuple[Container, ...]) -> None:
        """Emit close/open events for the change from lastContainers to containers"""
        diff = containers_diff(self.lastContainers, containers)
        if not diff.changed:
            return

        self.paragraph_flush()
        for container in diff.closed:
            self.document.append(ContainerClose(container))
        for container in diff.opened:
            self.document.append(ContainerOpen(container))

        self.lastContainers = containers

    def entry_add(self, entry: RawEntry) -> None:
        """Dispatch on the raw entry's content"""
        content = entry.content

        if isinstance(content, Line):
            self.line_add(content.text)
            return

        # Heading or code block
        self.paragraph_flush()
        self.document.append(content)

    def line_add(self, text: str) -> None:
        """
        Feed one plain line into paragraph accumulation

        A blank line outside a paragraph is structural and ignored. A blank
        line inside one ends it and leaves a fresh, empty paragraph open.
        """
        if not text:
            if self.paragraphLines is not None:
                self.paragraph_start()
            return

        if self.paragraphLines is None:
            self.paragraph_start()
        self.paragraphLines.append(text)

    def paragraph_start(self) -> None:
        self.paragraph_flush()
        self.paragraphLines = []

    def paragraph_flush(self) -> None:
        """Close the open paragraph, dropping it if it has no lines"""
        if self.paragraphLines is None:
            return

        if self.paragraphLines:
            self.document.append(Paragraph(tuple(self.paragraphLines)))
        self.paragraphLines = None


def combine(entries: Iterable[RawEntry]) -> List[Entry]:
    """
    Normalize raw entries into a document

    Convenience wrapper around Normalizer().combine(entries).
    """
    return Normalizer().combine(entries)
