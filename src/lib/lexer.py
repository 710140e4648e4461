"""
Lexer for LPML source text

Converts raw source into tokens on demand: each call to next_token()
consumes just enough characters for one token, looking at most one
character ahead.

Token shapes:
    [p-start]            tag (name classified through the keyword table)
    [1, "a", $x]         array: '[' followed by digit, '$', '"', ']' or whitespace
    "text"               string (no escapes, runs to the next '"')
    42  3.14             number (digits and dots)
    contains             identifier (letters, digits, underscore)
    $label               variable reference
    { code }             code block (brace-depth aware)
    =  ,  ]              punctuation

Example:
    >>> lexer = Lexer('[p-start] contains = "Hi" [p-end]')
    >>> [tok.type.name for tok in lexer]
    ['P_START', 'IDENT', 'EQUALS', 'STRING', 'P_END', 'EOF']
"""

from typing import Iterator

from ..models.tokens import Token, TokenType, ident_lookUp


WHITESPACE = " \t\r\n"
ARRAY_TRIGGERS = '$"]'


def letter_is(ch: str) -> bool:
    return ('a' <= ch <= 'z') or ('A' <= ch <= 'Z')


def digit_is(ch: str) -> bool:
    return '0' <= ch <= '9'


def tagChar_is(ch: str) -> bool:
    """Letters, digits, hyphen and underscore may appear in tag names"""
    return letter_is(ch) or digit_is(ch) or ch == '-' or ch == '_'


class Lexer:
    """
    Hand-written LPML lexer

    Attributes:
        source: Full source text
        position: Index of the current character
        ch: Current character ('' at end of input)
        line: Current line (1-based)
        column: Current column; reset to 0 on each newline
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.position = -1
        self.ch = ''
        self.line = 1
        self.column = 0
        self.char_read()

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens lazily, ending with (and including) EOF"""
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.EOF:
                return

    def char_read(self) -> None:
        """Advance one character, updating line/column"""
        self.position += 1
        self.ch = self.source[self.position] if self.position < len(self.source) else ''
        self.column += 1
        if self.ch == '\n':
            self.line += 1
            self.column = 0

    def char_peek(self) -> str:
        """Return the character after the current one without consuming it"""
        next_pos = self.position + 1
        return self.source[next_pos] if next_pos < len(self.source) else ''

    def whitespace_skip(self) -> None:
        # Newlines included: NEWLINE tokens are never emitted.
        while self.ch and self.ch in WHITESPACE:
            self.char_read()

    def next_token(self) -> Token:
        """
        Return the next token from the source

        Never raises. Characters that start no token become a one-character
        ILLEGAL token; past the end of input every call returns EOF.
        """
        self.whitespace_skip()

        line, column = self.line, self.column
        ch = self.ch

        if ch == '':
            return Token(TokenType.EOF, "", line, column)

        if ch == '[':
            if self.arrayStart_is():
                self.char_read()
                return Token(TokenType.LBRACKET, ch, line, column)
            return self.tag_read()

        if ch in ']=,':
            punctuation = {
                ']': TokenType.RBRACKET,
                '=': TokenType.EQUALS,
                ',': TokenType.COMMA,
            }
            self.char_read()
            return Token(punctuation[ch], ch, line, column)

        if ch == '{':
            return self.codeBlock_read()

        if ch == '$':
            return self.variableReference_read()

        if ch == '"':
            return Token(TokenType.STRING, self.string_read(), line, column)

        if digit_is(ch):
            return Token(TokenType.NUMBER, self.number_read(), line, column)

        if letter_is(ch) or ch == '_':
            return Token(TokenType.IDENT, self.identifier_read(), line, column)

        self.char_read()
        return Token(TokenType.ILLEGAL, ch, line, column)

    def arrayStart_is(self) -> bool:
        """
        Decide whether the current '[' opens an array rather than a tag

        A tag name can therefore never start with a digit, '$', '"', ']'
        or whitespace.
        """
        following = self.char_peek()
        if following == '':
            return False
        return digit_is(following) or following in ARRAY_TRIGGERS or following in WHITESPACE

    def tag_read(self) -> Token:
        """Read ``[tag-name ...]``; anything after the name up to ']' is dropped"""
        line, column = self.line, self.column
        self.char_read()  # '['

        start = self.position
        while self.ch and tagChar_is(self.ch):
            self.char_read()
        tag_name = self.source[start:self.position]

        while self.ch and self.ch != ']':
            self.char_read()
        if self.ch == ']':
            self.char_read()

        return Token(ident_lookUp(tag_name), tag_name, line, column)

    def codeBlock_read(self) -> Token:
        """
        Read a ``{ ... }`` code block

        Whitespace right after '{' is skipped, inner brace pairs are kept
        verbatim, trailing whitespace before the closing '}' is trimmed.
        An unterminated block runs to end of input.
        """
        line, column = self.line, self.column
        self.char_read()  # '{'

        while self.ch and self.ch in WHITESPACE:
            self.char_read()

        start = self.position
        depth = 1
        while self.ch:
            if self.ch == '{':
                depth += 1
            elif self.ch == '}':
                depth -= 1
                if depth == 0:
                    break
            self.char_read()

        content = self.source[start:self.position].rstrip(WHITESPACE)

        if self.ch == '}':
            self.char_read()

        return Token(TokenType.CODEBLOCK, content, line, column)

    def variableReference_read(self) -> Token:
        """Read ``$name``; the literal is the bare name (may be empty)"""
        line, column = self.line, self.column
        self.char_read()  # '$'
        return Token(TokenType.DOLLAR, self.identifier_read(), line, column)

    def string_read(self) -> str:
        self.char_read()  # opening quote
        start = self.position
        while self.ch and self.ch != '"':
            self.char_read()
        text = self.source[start:self.position]
        if self.ch == '"':
            self.char_read()
        return text

    def number_read(self) -> str:
        start = self.position
        while self.ch and (digit_is(self.ch) or self.ch == '.'):
            self.char_read()
        return self.source[start:self.position]

    def identifier_read(self) -> str:
        start = self.position
        while self.ch and (letter_is(self.ch) or digit_is(self.ch) or self.ch == '_'):
            self.char_read()
        return self.source[start:self.position]
