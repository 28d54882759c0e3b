"""
Renderer tests - HTML emitted per entry kind

Tests tags for every normalized entry, HTML escaping of user text, and the
optional Pygments highlighting of code blocks.
"""

import pytest

from mdpage.lib.renderer import Renderer, render
from mdpage.models.document import (
    CodeBlock,
    Container,
    ContainerClose,
    ContainerKind,
    ContainerOpen,
    Heading,
    Paragraph,
)


BQ = Container(ContainerKind.BLOCKQUOTE)
UL0 = Container(ContainerKind.UNORDERED_LIST, 0)
OL0 = Container(ContainerKind.ORDERED_LIST, 0)


class TestBasicEntries:
    """Test the tag mapping for each entry kind"""

    def test_empty_document(self):
        """Nothing to render gives an empty string"""
        assert render([]) == ""

    def test_heading(self):
        """Heading level selects the tag"""
        assert render([Heading(1, "Title")]) == "<h1>Title</h1>\n"
        assert render([Heading(6, "Small")]) == "<h6>Small</h6>\n"

    def test_code_block_with_language(self):
        """Language becomes the class of the code tag"""
        block = CodeBlock(language="python", code="print(1)")

        assert render([block]) == '<pre><code class="python">print(1)</code></pre>\n'

    def test_code_block_without_language(self):
        """No language, no class attribute"""
        assert render([CodeBlock(None, "ls")]) == "<pre><code>ls</code></pre>\n"

    def test_code_block_keeps_newlines(self):
        """Code is emitted verbatim"""
        block = CodeBlock(None, "a\n  b\n\nc")

        assert render([block]) == "<pre><code>a\n  b\n\nc</code></pre>\n"

    def test_paragraph_single_line(self):
        """One line, no break"""
        assert render([Paragraph(("hello",))]) == "<p>hello</p>\n"

    def test_paragraph_lines_joined(self):
        """Lines are joined by a break and newline"""
        assert render([Paragraph(("line1", "line2"))]) == "<p>line1<br/>\nline2</p>\n"

    @pytest.mark.parametrize("container, tag", [
        (BQ, "blockquote"),
        (UL0, "ul"),
        (OL0, "ol"),
    ])
    def test_container_events(self, container, tag):
        """Open emits the bare tag, close adds a newline"""
        assert render([ContainerOpen(container)]) == f"<{tag}>"
        assert render([ContainerClose(container)]) == f"</{tag}>\n"

    def test_nested_document(self):
        """Events nest tags in order"""
        document = [
            ContainerOpen(UL0),
            ContainerOpen(BQ),
            Paragraph(("x",)),
            ContainerClose(BQ),
            ContainerClose(UL0),
        ]

        assert render(document) == "<ul><blockquote><p>x</p>\n</blockquote>\n</ul>\n"

    def test_unknown_entry_rejected(self):
        """Only document entries can be rendered"""
        with pytest.raises(TypeError, match="Cannot render"):
            render([object()])


class TestEscaping:
    """Test HTML escaping of every piece of user text"""

    def test_heading_escaped(self):
        """Heading names are escaped"""
        assert render([Heading(2, "<b> & 'q'")]) == "<h2>&lt;b&gt; &amp; &#x27;q&#x27;</h2>\n"

    def test_code_escaped(self):
        """Code content is escaped"""
        block = CodeBlock("html", '<div class="a">&nbsp;</div>')

        assert render([block]) == (
            '<pre><code class="html">&lt;div class=&quot;a&quot;&gt;&amp;nbsp;&lt;/div&gt;</code></pre>\n'
        )

    def test_language_escaped(self):
        """The language tag cannot break out of the attribute"""
        block = CodeBlock('x"onload="y', "z")

        assert render([block]) == '<pre><code class="x&quot;onload=&quot;y">z</code></pre>\n'

    def test_paragraph_lines_escaped(self):
        """Each paragraph line is escaped"""
        assert render([Paragraph(("a < b", "c > d"))]) == "<p>a &lt; b<br/>\nc &gt; d</p>\n"


class TestRendererOptions:
    """Test constructor overrides and syntax highlighting"""

    def test_custom_line_break(self):
        """Paragraph line separator can be replaced"""
        renderer = Renderer(line_break="<br>")

        assert renderer.render([Paragraph(("a", "b"))]) == "<p>a<br>b</p>\n"

    def test_highlighting_off_by_default(self):
        """Default renderer emits plain escaped code"""
        assert Renderer().highlight_code is False

    def test_highlighted_code(self):
        """Pygments spans inside the usual wrapper"""
        renderer = Renderer(highlight_code=True)

        html = renderer.render([CodeBlock("python", "def f(): pass")])

        assert html.startswith('<pre><code class="python">')
        assert html.endswith("</code></pre>\n")
        assert "<span" in html
        assert "def" in html

    def test_highlighted_code_keeps_blank_lines(self):
        """Leading and trailing blank lines of the code survive highlighting"""
        renderer = Renderer(highlight_code=True)

        html = renderer.render([CodeBlock("python", "\n\nx = 1\n\n")])

        assert html.startswith('<pre><code class="python">\n\n')
        assert html.endswith("\n\n</code></pre>\n")

    def test_unknown_language_keeps_blank_lines(self):
        """The plain-text fallback lexer keeps blank lines too"""
        renderer = Renderer(highlight_code=True)

        html = renderer.render([CodeBlock("no-such-language-xyz", "\nwords")])

        assert html.startswith('<pre><code class="no-such-language-xyz">\nwords')

    def test_style_is_inlined(self):
        """Highlighted spans carry inline styles, not stylesheet classes"""
        renderer = Renderer(highlight_code=True, pygments_style="monokai")

        html = renderer.render([CodeBlock("python", "def f(): pass")])

        assert 'style="' in html
        assert 'class="k"' not in html

    def test_style_changes_markup(self):
        """Different Pygments styles give different markup"""
        block = CodeBlock("python", "def f(): pass")

        default = Renderer(highlight_code=True, pygments_style="default").render([block])
        monokai = Renderer(highlight_code=True, pygments_style="monokai").render([block])

        assert default != monokai

    def test_highlighted_code_escaped(self):
        """Pygments escapes code itself"""
        renderer = Renderer(highlight_code=True)

        html = renderer.render([CodeBlock("python", "x = '<tag>'")])

        assert "&lt;tag&gt;" in html
        assert "<tag>" not in html

    def test_unknown_language_falls_back(self):
        """Unknown language is rendered as plain text"""
        renderer = Renderer(highlight_code=True)

        html = renderer.render([CodeBlock("no-such-language-xyz", "plain words")])

        assert html.startswith('<pre><code class="no-such-language-xyz">')
        assert "plain words" in html

    def test_highlighting_needs_language(self):
        """Blocks without a language are never highlighted"""
        renderer = Renderer(highlight_code=True)

        assert renderer.render([CodeBlock(None, "x")]) == "<pre><code>x</code></pre>\n"
