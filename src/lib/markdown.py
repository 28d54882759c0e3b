"""
Markdown compiler entry point

render_markdown() is what a page-serving layer calls: markdown text in,
HTML fragment out. The caller splices the fragment between its own header
and footer and substitutes {{key}} placeholders from the same context it
passed here; this module does neither.
"""

from typing import Mapping, Optional, Union

from .lexer import lex
from .normalizer import combine
from .renderer import render
from .log import LOG


def source_decode(text: Union[str, bytes]) -> str:
    """
    Normalize input to text

    Bytes are decoded as UTF-8; invalid sequences become U+FFFD rather
    than raising, so any input still renders.
    """
    if isinstance(text, bytes):
        return text.decode('utf-8', errors='replace')
    return text


def render_markdown(
    text: Union[str, bytes], context: Optional[Mapping[str, str]] = None
) -> str:
    """
    Compile markdown to an HTML fragment

    Runs render(combine(lex(text))). Never raises for any input: markdown
    the grammar cannot parse comes back as a single escaped paragraph.

    Args:
        text: Markdown source (str, or UTF-8 bytes)
        context: Template variables the caller will substitute into the
                 page later; not used by the compiler itself

    Returns:
        HTML fragment ('' for empty input)

    Example:
        >>> render_markdown("# Title")
        '<h1>Title</h1>\\n'
    """
    source = source_decode(text)
    if context:
        LOG(f"Template context keys left for the caller: {sorted(context)}", level=3)
    return render(combine(lex(source)))
