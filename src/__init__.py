"""
mdpage - Markdown page compiler

Compiles a fixed markdown subset (headings, fenced code, blockquotes,
lists, paragraphs) into an HTML fragment for embedding in a page.
"""

__version__ = "1.0.0"

from .lib import lex, combine, render, render_markdown, LOG, state_connectToLogger

__all__ = ["lex", "combine", "render", "render_markdown", "LOG", "state_connectToLogger", "__version__"]
