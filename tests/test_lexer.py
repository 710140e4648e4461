"""
Lexer tests

Tags vs arrays, literals, code blocks, variable references and position
tracking.
"""

import pytest

from lpml.lib.lexer import Lexer
from lpml.models.tokens import (
    TokenType,
    closingTag_get,
    closingTag_is,
    ident_lookUp,
    openingTag_is,
    sectionOpener_is,
)


def types_of(source):
    return [tok.type for tok in Lexer(source)]


def literals_of(source):
    return [tok.literal for tok in Lexer(source)]


class TestTags:
    """Bracketed tag recognition"""

    def test_opening_and_closing_tag(self):
        """[p-start] and [p-end] classify as P_START / P_END"""
        assert types_of("[p-start][p-end]") == [
            TokenType.P_START,
            TokenType.P_END,
            TokenType.EOF,
        ]

    def test_tag_literal_is_bare_name(self):
        tokens = list(Lexer("[mid-page-start]"))
        assert tokens[0].type is TokenType.MID_PAGE_START
        assert tokens[0].literal == "mid-page-start"

    def test_shared_list_closing_tag(self):
        """Both list kinds close with [lst-end]"""
        assert types_of("[lst-ord][lst-unord][lst-end]") == [
            TokenType.LIST_ORD_START,
            TokenType.LIST_UNORD_START,
            TokenType.LST_END,
            TokenType.EOF,
        ]

    def test_unknown_tag_becomes_identifier(self):
        tokens = list(Lexer("[fancy-widget]"))
        assert tokens[0].type is TokenType.IDENT
        assert tokens[0].literal == "fancy-widget"

    def test_text_after_tag_name_is_dropped(self):
        """Anything between the tag name and ']' is skipped"""
        assert types_of("[p-start junk here]") == [TokenType.P_START, TokenType.EOF]


class TestArrays:
    """'[' opens an array only before a digit, $, \", ] or whitespace"""

    @pytest.mark.parametrize("source", ["[1]", "[$a]", '["a"]', "[]", "[ 1]", "[\n1]", "[\t1]"])
    def test_array_triggers(self, source):
        assert Lexer(source).next_token().type is TokenType.LBRACKET

    def test_array_tokens(self):
        assert types_of('[1, "two", $three]') == [
            TokenType.LBRACKET,
            TokenType.NUMBER,
            TokenType.COMMA,
            TokenType.STRING,
            TokenType.COMMA,
            TokenType.DOLLAR,
            TokenType.RBRACKET,
            TokenType.EOF,
        ]

    def test_letter_after_bracket_is_a_tag(self):
        assert Lexer("[abc]").next_token().type is TokenType.IDENT


class TestLiterals:
    """Strings, numbers, identifiers, variable references"""

    def test_string_content_without_quotes(self):
        assert literals_of('"hello world"') == ["hello world", ""]

    def test_string_has_no_escapes(self):
        """A backslash is kept as-is and does not escape the quote"""
        assert literals_of(r'"a\"') == ["a\\", ""]

    def test_unterminated_string_runs_to_end(self):
        tokens = list(Lexer('"never closed'))
        assert tokens[0].type is TokenType.STRING
        assert tokens[0].literal == "never closed"
        assert tokens[1].type is TokenType.EOF

    def test_number_keeps_source_text(self):
        tokens = list(Lexer("3.140"))
        assert tokens[0].type is TokenType.NUMBER
        assert tokens[0].literal == "3.140"

    def test_identifier(self):
        tokens = list(Lexer("format_with2"))
        assert tokens[0].type is TokenType.IDENT
        assert tokens[0].literal == "format_with2"

    def test_variable_reference(self):
        tokens = list(Lexer("$main_title"))
        assert tokens[0].type is TokenType.DOLLAR
        assert tokens[0].literal == "main_title"

    def test_space_after_dollar_breaks_reference(self):
        assert types_of("$ name") == [TokenType.DOLLAR, TokenType.IDENT, TokenType.EOF]
        assert literals_of("$ name")[0] == ""

    def test_punctuation(self):
        assert types_of("= , ]") == [
            TokenType.EQUALS,
            TokenType.COMMA,
            TokenType.RBRACKET,
            TokenType.EOF,
        ]

    def test_unknown_character_is_illegal(self):
        tokens = list(Lexer("@"))
        assert tokens[0].type is TokenType.ILLEGAL
        assert tokens[0].literal == "@"


class TestCodeBlocks:
    """Brace-delimited raw text"""

    def test_leading_and_trailing_whitespace_trimmed(self):
        tokens = list(Lexer("{\n    print('hi')\n   \n}"))
        assert tokens[0].type is TokenType.CODEBLOCK
        assert tokens[0].literal == "print('hi')"

    def test_nested_braces_preserved(self):
        source = "{ if (a) { b({}); }  }"
        assert literals_of(source)[0] == "if (a) { b({}); }"

    def test_interior_whitespace_verbatim(self):
        source = "{ line1\n\n    line2 }"
        assert literals_of(source)[0] == "line1\n\n    line2"

    def test_unterminated_block_runs_to_end(self):
        tokens = list(Lexer("{ abc {"))
        assert tokens[0].type is TokenType.CODEBLOCK
        assert tokens[0].literal == "abc {"
        assert tokens[1].type is TokenType.EOF


class TestWhitespaceAndPositions:
    """Whitespace skipping and line/column tracking"""

    def test_newlines_never_become_tokens(self):
        assert TokenType.NEWLINE not in types_of('"a"\n\n\r\n"b"\n')

    def test_line_and_column(self):
        tokens = list(Lexer("\n\n  [p-start]"))
        assert tokens[0].line == 3
        assert tokens[0].column == 3

    def test_first_character_column(self):
        token = Lexer("[p-start]").next_token()
        assert (token.line, token.column) == (1, 1)

    def test_eof_is_sticky(self):
        lexer = Lexer("")
        assert lexer.next_token().type is TokenType.EOF
        assert lexer.next_token().type is TokenType.EOF

    def test_iteration_stops_after_eof(self):
        tokens = list(Lexer('contains = "x"'))
        assert tokens[-1].type is TokenType.EOF
        assert len(tokens) == 4


class TestTokenCategories:
    """Tag-name lookup and opening/closing classification"""

    def test_lookup_known_and_unknown(self):
        assert ident_lookUp("top-of-page-start") == TokenType.TOP_OF_PAGE_START
        assert ident_lookUp("lst-end") == TokenType.LST_END
        assert ident_lookUp("heading-start") == TokenType.IDENT

    def test_closing_tag_pairs(self):
        assert closingTag_get(TokenType.P_START) == TokenType.P_END
        assert closingTag_get(TokenType.MID_PAGE_START) == TokenType.MID_PAGE_END
        assert closingTag_get(TokenType.LIST_START) == TokenType.LIST_END

    def test_list_openers_share_closer(self):
        assert closingTag_get(TokenType.LIST_ORD_START) == TokenType.LST_END
        assert closingTag_get(TokenType.LIST_UNORD_START) == TokenType.LST_END

    def test_non_opener_has_no_closer(self):
        assert closingTag_get(TokenType.STRING) == TokenType.ILLEGAL
        assert closingTag_get(TokenType.P_END) == TokenType.ILLEGAL

    def test_opening_and_closing_predicates(self):
        assert openingTag_is(TokenType.LIST_ORD_START)
        assert openingTag_is(TokenType.TOP_OF_PAGE_START)
        assert not openingTag_is(TokenType.P_END)
        assert closingTag_is(TokenType.LST_END)
        assert closingTag_is(TokenType.CODE_END)
        assert not closingTag_is(TokenType.IDENT)

    def test_section_openers(self):
        assert sectionOpener_is(TokenType.BOTTOM_OF_PAGE_START)
        assert not sectionOpener_is(TokenType.DIVIDE_START)
