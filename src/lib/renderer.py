"""
Renderer for normalized markdown documents

Transforms a normalized document into an HTML fragment. Header/footer
wrapping and template substitution are left to the caller.
"""

import html
from typing import Callable, Dict, List, Optional, Type

from pygments import highlight
from pygments.lexers import get_lexer_by_name, TextLexer
from pygments.lexer import Lexer as PygmentsLexer
from pygments.formatters import HtmlFormatter
from pygments.util import ClassNotFound

from ..models.document import (
    CodeBlock,
    ContainerClose,
    ContainerOpen,
    Entry,
    Heading,
    Paragraph,
)
from .log import LOG


class Renderer:
    """
    Renders a normalized document to an HTML fragment

    Responsibilities:
    - Map each entry kind to its tags
    - HTML-escape every piece of user text
    - Optionally syntax highlight code blocks (appsettings.highlight_code)

    The document's open/close events are already balanced, so container
    tags are emitted in sequence with no stack of their own.
    """

    def __init__(
        self,
        highlight_code: Optional[bool] = None,
        pygments_style: Optional[str] = None,
        line_break: Optional[str] = None,
    ) -> None:
        """
        Initialize renderer

        Args:
            highlight_code: Highlight code blocks that name a language
                            (default: appsettings.highlight_code)
            pygments_style: Pygments style for highlighting
                            (default: appsettings.pygments_style)
            line_break: Separator between paragraph lines
                        (default: appsettings.line_break)
        """
        from ..config import appsettings

        self.settings = appsettings
        self.highlight_code = appsettings.highlight_code if highlight_code is None else highlight_code
        self.pygments_style = pygments_style or appsettings.pygments_style
        self.line_break = appsettings.line_break if line_break is None else line_break

        self.handlers: Dict[Type, Callable[[Entry], str]] = {
            Heading: self.heading_render,
            CodeBlock: self.codeblock_render,
            ContainerOpen: self.containerOpen_render,
            ContainerClose: self.containerClose_render,
            Paragraph: self.paragraph_render,
        }

    def render(self, document: List[Entry]) -> str:
        """
        Render every entry in order

        Args:
            document: Normalized entries from the combine pass

        Returns:
            HTML fragment ('' for an empty document)
        """
        html_parts = [self.entry_render(entry) for entry in document]
        LOG(f"Rendered {len(document)} entries", level=3)
        return ''.join(html_parts)

    def entry_render(self, entry: Entry) -> str:
        handler = self.handlers.get(type(entry))
        if handler is None:
            raise TypeError(f"Cannot render entry of type {type(entry).__name__}")
        return handler(entry)

    def heading_render(self, entry: Heading) -> str:
        return f"<h{entry.level}>{html.escape(entry.name)}</h{entry.level}>\n"

    def codeblock_render(self, entry: CodeBlock) -> str:
        """
        Render a fenced code block

        Plain:       <pre><code>...</code></pre>
        With tag:    <pre><code class="python">...</code></pre>
        Highlighted: same wrapper, body marked up with Pygments spans
        """
        code_class = self.settings.codeClass_make(entry.language)

        if self.highlight_code and entry.language:
            body = self.code_highlight(entry.code, entry.language)
        else:
            body = html.escape(entry.code)

        return f"<pre><code{code_class}>{body}</code></pre>\n"

    def code_highlight(self, code: str, language: str) -> str:
        """
        Highlight code with Pygments

        Unknown languages fall back to plain text. Lexers keep leading and
        trailing blank lines (stripnl=False). The formatter inlines the
        style (noclasses=True) and runs with nowrap=True so only the inner
        spans are produced; Pygments escapes the code itself.

        Args:
            code: Verbatim code content
            language: Language tag from the opening fence

        Returns:
            Highlighted HTML without the trailing newline Pygments appends
        """
        lexer: PygmentsLexer
        try:
            lexer = get_lexer_by_name(language, stripnl=False)
        except ClassNotFound:
            LOG(f"No Pygments lexer for '{language}', using plain text", level=2)
            lexer = TextLexer(stripnl=False)

        formatter = HtmlFormatter(style=self.pygments_style, noclasses=True, nowrap=True)
        highlighted = highlight(code, lexer, formatter)
        if not code.endswith('\n') and highlighted.endswith('\n'):
            highlighted = highlighted[:-1]
        return highlighted

    def containerOpen_render(self, entry: ContainerOpen) -> str:
        return f"<{entry.kind.value}>"

    def containerClose_render(self, entry: ContainerClose) -> str:
        return f"</{entry.kind.value}>\n"

    def paragraph_render(self, entry: Paragraph) -> str:
        lines = self.line_break.join(html.escape(line) for line in entry.lines)
        return f"<p>{lines}</p>\n"


def render(document: List[Entry]) -> str:
    """
    Render a normalized document to an HTML fragment

    Convenience wrapper around Renderer().render(document), using the
    current appsettings.
    """
    return Renderer().render(document)
