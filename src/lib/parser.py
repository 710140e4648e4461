"""
Parser for LPML token streams

Builds a Document from the lexer's tokens by recursive descent.

The parser is error tolerant: problems are appended to ``errors`` and
parsing continues, so a broken document still yields a best-effort tree
plus a full list of what went wrong. Callers decide whether to generate.

Grammar (informal):
    document  := ( section | <any other token, skipped> )*
    section   := SECTION_START element* SECTION_END
    element   := OPEN ( property | element | <other, skipped> )* CLOSE
    property  := IDENT '=' value
    value     := STRING | NUMBER | '$'name | array | CODEBLOCK
    array     := '[' ( STRING | NUMBER | '$'name | ',' | <other, skipped> )* ']'

Example:
    >>> parser = Parser('[mid-page-start] [p-start] contains = "Hi" [p-end] [mid-page-end]')
    >>> document = parser.parse()
    >>> document.sections[0].children[0].kind
    <ElementKind.P: 'p'>
    >>> parser.errors
    []
"""

from typing import List, Optional, Union

from ..models.tokens import (
    Token,
    TokenType,
    LIST_OPENERS,
    closingTag_get,
    openingTag_is,
    sectionOpener_is,
)
from ..models.ast import (
    Document,
    PageSection,
    Element,
    Value,
    StringValue,
    NumberValue,
    VariableRef,
    ArrayValue,
    CodeBlockValue,
    SECTION_KINDS,
    ELEMENT_KINDS,
)
from .lexer import Lexer
from .log import LOG


class Parser:
    """
    Recursive-descent LPML parser

    Holds the current token and a single token of lookahead.
    """

    def __init__(self, source: Union[str, Lexer], debug: bool = False) -> None:
        """
        Args:
            source: LPML source text, or an already constructed Lexer
            debug: Log every section/element as it is parsed (verbosity 3)
        """
        self.lexer = source if isinstance(source, Lexer) else Lexer(source)
        self.debug = debug
        self.errors: List[str] = []

        eof = Token(TokenType.EOF, "", 0, 0)
        self.cur_token: Token = eof
        self.peek_token: Token = eof
        self.token_next()
        self.token_next()

    def token_next(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def error_add(self, message: str) -> None:
        self.errors.append(message)
        LOG(f"Parse error: {message}", level=2)

    def parse(self) -> Document:
        """
        Parse the whole token stream

        Tokens outside page sections are skipped without complaint.

        Returns:
            Document with one PageSection per section opener, in source order
        """
        document = Document()

        while self.cur_token.type is not TokenType.EOF:
            if sectionOpener_is(self.cur_token.type):
                document.sections.append(self.section_parse())
            else:
                self.token_next()

        LOG(
            f"Parsed {len(document.sections)} sections with {len(self.errors)} errors",
            level=2,
        )
        return document

    def section_parse(self) -> PageSection:
        """
        Parse one page section

        A missing closing tag is recorded as an error; children parsed so
        far are kept.
        """
        opener = self.cur_token
        section = PageSection(token=opener, kind=SECTION_KINDS[opener.type])
        closing = closingTag_get(opener.type)

        if self.debug:
            LOG(f"Section {section.kind.value} at line {opener.line}", level=3)

        self.token_next()

        while self.cur_token.type is not closing and self.cur_token.type is not TokenType.EOF:
            child = self.element_parse()
            if child is not None:
                section.children.append(child)

        if self.cur_token.type is closing:
            self.token_next()
        else:
            self.error_add(
                f"expected closing tag for section {section.kind.name.lower()} "
                f"({section.kind.value}) opened at line {opener.line}"
            )

        return section

    def element_parse(self) -> Optional[Element]:
        """
        Parse one element starting at an opening tag

        If the current token is not an opening tag it is skipped and None
        is returned.
        """
        opener = self.cur_token
        if not openingTag_is(opener.type) or sectionOpener_is(opener.type):
            self.token_next()
            return None

        element = Element(token=opener, kind=ELEMENT_KINDS[opener.type])

        if self.debug:
            LOG(f"Element {element.kind.value} at line {opener.line}", level=3)

        self.token_next()

        while (
            not self.close_matches(opener.type, self.cur_token.type)
            and self.cur_token.type is not TokenType.EOF
        ):
            if self.cur_token.type is TokenType.IDENT:
                self.property_parse(element)
            elif openingTag_is(self.cur_token.type) and not sectionOpener_is(self.cur_token.type):
                child = self.element_parse()
                if child is not None:
                    element.children.append(child)
            else:
                self.token_next()

        if self.close_matches(opener.type, self.cur_token.type):
            self.token_next()
        else:
            self.error_add(
                f"expected closing tag for element {element.kind.value} at line {opener.line}"
            )

        return element

    def close_matches(self, opening: TokenType, closing: TokenType) -> bool:
        """
        Check whether ``closing`` closes ``opening``

        [lst-ord] and [lst-unord] both close with [lst-end]; this is the only
        tag pair that is not one-to-one.
        """
        if opening in LIST_OPENERS:
            return closing is TokenType.LST_END
        return closing is closingTag_get(opening)

    def property_parse(self, element: Element) -> None:
        """
        Parse ``name = value`` into element.properties

        On a missing '=' only the name is consumed; parsing resumes at the
        unexpected token.
        """
        name_token = self.cur_token
        name = name_token.literal
        self.token_next()

        if self.cur_token.type is not TokenType.EQUALS:
            self.error_add(
                f"expected '=' after property name {name} at line {name_token.line}, "
                f"got {self.cur_token.type.value}"
            )
            return
        self.token_next()

        value = self.value_parse(name)
        if value is not None:
            element.properties[name] = value

    def value_parse(self, name: str) -> Optional[Value]:
        """Parse a property value; any unexpected token is an error and yields None"""
        token = self.cur_token

        if token.type is TokenType.STRING:
            self.token_next()
            return StringValue(token=token, value=token.literal)

        if token.type is TokenType.NUMBER:
            self.token_next()
            return NumberValue(token=token, value=token.literal)

        if token.type is TokenType.DOLLAR:
            self.token_next()
            return VariableRef(token=token, name=token.literal)

        if token.type is TokenType.LBRACKET:
            return self.array_parse()

        if token.type is TokenType.CODEBLOCK:
            self.token_next()
            return CodeBlockValue(token=token, content=token.literal)

        self.error_add(
            f"expected value for property {name} at line {token.line}, got {token.type.value}"
        )
        return None

    def array_parse(self) -> ArrayValue:
        """
        Parse ``[item, item, ...]``

        Only strings, numbers and variable references are kept. Commas and
        any other tokens are skipped silently, so arrays cannot nest.
        """
        array = ArrayValue(token=self.cur_token)
        self.token_next()

        while self.cur_token.type not in (TokenType.RBRACKET, TokenType.EOF):
            token = self.cur_token
            if token.type is TokenType.STRING:
                array.values.append(StringValue(token=token, value=token.literal))
            elif token.type is TokenType.NUMBER:
                array.values.append(NumberValue(token=token, value=token.literal))
            elif token.type is TokenType.DOLLAR:
                array.values.append(VariableRef(token=token, name=token.literal))
            self.token_next()

        if self.cur_token.type is TokenType.RBRACKET:
            self.token_next()

        return array
