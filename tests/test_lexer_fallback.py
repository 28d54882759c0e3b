"""
Lexer fallback tests - grammar failures never escape

Tests that unparseable markdown degrades to the fallback document (a single
plain line holding the whole input) and that the full pipeline is total.
"""

import pytest

from mdpage.lib.lexer import Lexer, MarkdownSyntaxError, lex
from mdpage.lib.normalizer import combine
from mdpage.lib.renderer import render
from mdpage.models.document import Line, RawEntry


class TestUnterminatedFence:
    """Test the literal-text fallback"""

    def test_fence_never_closed(self):
        """Unterminated fence returns the whole input as one line"""
        source = "```python\nprint(1)"

        assert lex(source) == [RawEntry(containers=(), content=Line(source))]

    def test_fence_after_other_content(self):
        """Earlier valid entries are discarded too"""
        source = "# Title\n\n> quote\n```\nnever closed"

        assert lex(source) == [RawEntry(containers=(), content=Line(source))]

    def test_bare_fence_at_end(self):
        """An opening fence on the last line cannot close"""
        assert lex("text\n```") == [RawEntry(containers=(), content=Line("text\n```"))]

    def test_fence_inside_container(self):
        """Fallback drops the container stack"""
        source = "> ```\ncode"

        assert lex(source) == [RawEntry(containers=(), content=Line(source))]

    def test_quoted_fence_cannot_close(self):
        """A closing fence is only recognised at the start of a line, so a
        fully quoted code block falls back to literal text"""
        source = "> ```py\n> x\n> ```"

        assert lex(source) == [RawEntry(containers=(), content=Line(source))]
        assert render(combine(lex(source))) == "<p>&gt; ```py\n&gt; x\n&gt; ```</p>\n"

    def test_fell_back_flag(self):
        """Lexer records whether it used the fallback"""
        failing = Lexer("```\nopen")
        failing.lex()
        passing = Lexer("# fine")
        passing.lex()

        assert failing.fellBack is True
        assert passing.fellBack is False


class TestGrammarErrors:
    """Test the internal error reporting"""

    def test_document_parse_raises(self):
        """document_parse raises; only lex() recovers"""
        lexer = Lexer("intro\n```js\nlet a;")

        with pytest.raises(MarkdownSyntaxError, match="Unterminated code fence"):
            lexer.document_parse()

    def test_error_is_syntax_error(self):
        """MarkdownSyntaxError is a SyntaxError"""
        assert issubclass(MarkdownSyntaxError, SyntaxError)

    def test_error_reports_line(self):
        """Error message includes the line of the opening fence"""
        lexer = Lexer("one\ntwo\n```\nopen")

        with pytest.raises(MarkdownSyntaxError, match="Line 3"):
            lexer.document_parse()


class TestTotality:
    """Test that the pipeline returns a string for any input"""

    @pytest.mark.parametrize("source", [
        "",
        "\n",
        "\n\n\n",
        "```",
        "````",
        "``````",
        "#",
        "# ",
        "#######",
        ">",
        ">>>>>>>>",
        "- - - -",
        "1. 2. 3.",
        "> - > 1. > deep",
        "\r\n\r",
        "\r",
        "\t",
        "```\n```\n```",
        "- ```\n> ```",
        "<script>alert('x')</script>",
        "\x00\x01\x02",
        "üñíçødé ✓",
    ])
    def test_pipeline_returns_string(self, source):
        """render(combine(lex(s))) always yields a string"""
        result = render(combine(lex(source)))

        assert isinstance(result, str)

    def test_fallback_renders_verbatim_text(self):
        """Fallback document renders as one escaped paragraph"""
        source = "```\n<b>never closed</b>"

        assert render(combine(lex(source))) == "<p>```\n&lt;b&gt;never closed&lt;/b&gt;</p>\n"
