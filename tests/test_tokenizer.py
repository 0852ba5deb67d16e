"""
Tests for the template lexer.
"""

from ngfmt.tokenizer import TemplateLexer, tokenize
from ngfmt.tokens import TokenKind


def kinds(text):
    return [t.kind for t in tokenize(text)]


def values(text):
    return [t.value for t in tokenize(text)]


class TestTemplateLexer:

    def test_empty_and_whitespace(self):
        """Empty input and whitespace produce no tokens"""
        assert tokenize("") == []
        assert tokenize("   \n\t  ") == []

    def test_simple_element(self):
        tokens = tokenize("<div>Hello</div>")
        assert [t.kind for t in tokens] == [TokenKind.TAG, TokenKind.TEXT, TokenKind.TAG]
        assert [t.value for t in tokens] == ["<div>", "Hello", "</div>"]

    def test_positions(self):
        tokens = tokenize("ab<b>c</b>")
        assert [t.position for t in tokens] == [0, 2, 5, 6]

    def test_text_whitespace_collapsed(self):
        assert values("<p>  hello \n   world  </p>") == ["<p>", "hello world", "</p>"]

    def test_quoted_gt_inside_attribute(self):
        """'>' inside a quoted attribute value does not end the tag"""
        assert values('<div title="a>b">x</div>') == ['<div title="a>b">', "x", "</div>"]
        assert values("<div title='a>b'>x</div>") == ["<div title='a>b'>", "x", "</div>"]

    def test_multiline_tag_joined(self):
        assert values('<div\n    class="a"\n    id="b">') == ['<div class="a" id="b">']

    def test_comment_runs_to_terminator(self):
        tokens = tokenize("<!-- a > b -->x")
        assert tokens[0].kind is TokenKind.TAG
        assert tokens[0].value == "<!-- a > b -->"
        assert tokens[1].value == "x"

    def test_less_than_in_text(self):
        """'<' not followed by a name starter stays text"""
        assert kinds("a < b") == [TokenKind.TEXT]
        assert values("a < b") == ["a < b"]

    def test_unterminated_tag_runs_to_end(self):
        assert values('<div class="x') == ['<div class="x']

    def test_interpolation(self):
        tokens = tokenize("{{ a }}{{b}}")
        assert [t.kind for t in tokens] == [TokenKind.INTERPOLATION, TokenKind.INTERPOLATION]
        assert [t.value for t in tokens] == ["{{ a }}", "{{b}}"]

    def test_nested_interpolation_markers(self):
        assert values("{{ {{ x }} }}y") == ["{{ {{ x }} }}", "y"]

    def test_unterminated_interpolation(self):
        assert values("{{ a") == ["{{ a"]
        assert kinds("{{ a") == [TokenKind.INTERPOLATION]

    def test_interpolation_inside_text(self):
        assert values("Hi, {{ name }}!") == ["Hi,", "{{ name }}", "!"]

    def test_control_block_header(self):
        tokens = tokenize("@for (item of items; track item.id) {<li>x</li>}")
        assert tokens[0].kind is TokenKind.CONTROL_BLOCK
        assert tokens[0].value == "@for (item of items; track item.id) {"
        assert tokens[0].keyword == "for"
        assert tokens[-1].kind is TokenKind.CLOSE_BRACE
        assert tokens[-1].value == "}"

    def test_else_after_close_brace(self):
        tokens = tokenize("@if (a) {x} @else {y}")
        assert [t.value for t in tokens] == ["@if (a) {", "x", "}", "@else {", "y", "}"]
        assert tokens[3].keyword == "else"

    def test_control_close_marker(self):
        tokens = tokenize("@}")
        assert len(tokens) == 1
        assert tokens[0].kind is TokenKind.CLOSE_BRACE
        assert tokens[0].value == "@}"

    def test_keyword_must_be_whole_word(self):
        """'@format' is not an '@for' block"""
        assert kinds("mail@format") == [TokenKind.TEXT]
        assert kinds("@iffy") == [TokenKind.TEXT]

    def test_stray_double_brace_is_text(self):
        assert values("x }} y") == ["x }} y"]

    def test_nested_blocks_closed_by_double_brace(self):
        """A fused '}}' stays text and closes neither block"""
        tokens = tokenize("@if (a) {@if (b) {<span>x</span>}}")
        assert [t.value for t in tokens] == ["@if (a) {", "@if (b) {", "<span>", "x", "</span>", "}}"]
        assert tokens[-1].kind is TokenKind.TEXT

    def test_close_brace_in_text(self):
        tokens = tokenize("a}b")
        assert [t.kind for t in tokens] == [TokenKind.TEXT, TokenKind.CLOSE_BRACE, TokenKind.TEXT]

    def test_multiline_header_joined(self):
        assert values("@if (a &&\n    b) {") == ["@if (a && b) {"]

    def test_lexer_is_reusable(self):
        lexer = TemplateLexer("<b>x</b>")
        first = lexer.tokenize()
        second = lexer.tokenize()
        assert first == second
