"""
mdpage - Markdown page compiler

Lexer, normalizer and renderer for a small markdown subset.
"""

__version__ = "1.0.0"

from .lexer import Lexer, MarkdownSyntaxError, lex
from .normalizer import Normalizer, combine, containers_diff
from .renderer import Renderer, render
from .markdown import render_markdown
from .log import LOG, state_connectToLogger

__all__ = [
    "Lexer",
    "MarkdownSyntaxError",
    "lex",
    "Normalizer",
    "combine",
    "containers_diff",
    "Renderer",
    "render",
    "render_markdown",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
