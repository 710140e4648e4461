"""
Token model for the LPML lexer

Defines the closed set of lexical categories produced by the lexer and the
tables that classify bracketed tag names into opening/closing tag tokens.

Tag spelling:
    [p-start] ... [p-end]           most elements use a -start/-end pair
    [lst-ord] ... [lst-end]         ordered list
    [lst-unord] ... [lst-end]       unordered list (shares the closing tag)
"""

from enum import Enum
from dataclasses import dataclass
from typing import Dict, FrozenSet


class TokenType(Enum):
    """
    Lexical categories

    NEWLINE is part of the category set but is never produced: whitespace
    skipping consumes newlines before they can become tokens.
    """
    # Special
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # Structural
    LBRACKET = "["
    RBRACKET = "]"
    LBRACE = "{"
    RBRACE = "}"
    EQUALS = "="
    DOLLAR = "$"
    COMMA = ","
    NEWLINE = "NEWLINE"

    # Literals
    STRING = "STRING"
    NUMBER = "NUMBER"
    IDENT = "IDENT"
    CODEBLOCK = "CODEBLOCK"

    # Page sections
    TOP_OF_PAGE_START = "TOP_OF_PAGE_START"
    TOP_OF_PAGE_END = "TOP_OF_PAGE_END"
    MID_PAGE_START = "MID_PAGE_START"
    MID_PAGE_END = "MID_PAGE_END"
    BOTTOM_OF_PAGE_START = "BOTTOM_OF_PAGE_START"
    BOTTOM_OF_PAGE_END = "BOTTOM_OF_PAGE_END"

    # Element opening tags
    DIVIDE_START = "DIVIDE_START"
    P_START = "P_START"
    H_START = "H_START"
    LINK_START = "LINK_START"
    IMG_START = "IMG_START"
    LIST_START = "LIST_START"
    LIST_ORD_START = "LIST_ORD_START"
    LIST_UNORD_START = "LIST_UNORD_START"
    ITEM_START = "ITEM_START"
    TABLE_START = "TABLE_START"
    ROW_START = "ROW_START"
    CELL_START = "CELL_START"
    FORM_START = "FORM_START"
    INPUT_START = "INPUT_START"
    BTN_START = "BTN_START"
    BOLD_START = "BOLD_START"
    ITALIC_START = "ITALIC_START"
    CODE_START = "CODE_START"

    # Element closing tags
    DIVIDE_END = "DIVIDE_END"
    P_END = "P_END"
    H_END = "H_END"
    LINK_END = "LINK_END"
    IMG_END = "IMG_END"
    LIST_END = "LIST_END"
    LST_END = "LST_END"
    ITEM_END = "ITEM_END"
    TABLE_END = "TABLE_END"
    ROW_END = "ROW_END"
    CELL_END = "CELL_END"
    FORM_END = "FORM_END"
    INPUT_END = "INPUT_END"
    BTN_END = "BTN_END"
    BOLD_END = "BOLD_END"
    ITALIC_END = "ITALIC_END"
    CODE_END = "CODE_END"


@dataclass(frozen=True)
class Token:
    """
    A single lexical token

    Attributes:
        type: Lexical category
        literal: Source text of the token. For strings this is the content
                 between the quotes, for variable references the name
                 without the leading '$', for tags the bare tag name.
        line: 1-based source line where the token starts
        column: Source column where the token starts
    """
    type: TokenType
    literal: str
    line: int
    column: int


KEYWORDS: Dict[str, TokenType] = {
    # Page sections
    "top-of-page-start": TokenType.TOP_OF_PAGE_START,
    "top-of-page-end": TokenType.TOP_OF_PAGE_END,
    "mid-page-start": TokenType.MID_PAGE_START,
    "mid-page-end": TokenType.MID_PAGE_END,
    "bottom-of-page-start": TokenType.BOTTOM_OF_PAGE_START,
    "bottom-of-page-end": TokenType.BOTTOM_OF_PAGE_END,

    # Element opening tags
    "divide-start": TokenType.DIVIDE_START,
    "p-start": TokenType.P_START,
    "h-start": TokenType.H_START,
    "link-start": TokenType.LINK_START,
    "img-start": TokenType.IMG_START,
    "list-start": TokenType.LIST_START,
    "lst-ord": TokenType.LIST_ORD_START,
    "lst-unord": TokenType.LIST_UNORD_START,
    "item-start": TokenType.ITEM_START,
    "table-start": TokenType.TABLE_START,
    "row-start": TokenType.ROW_START,
    "cell-start": TokenType.CELL_START,
    "form-start": TokenType.FORM_START,
    "input-start": TokenType.INPUT_START,
    "btn-start": TokenType.BTN_START,
    "bold-start": TokenType.BOLD_START,
    "italic-start": TokenType.ITALIC_START,
    "code-start": TokenType.CODE_START,

    # Element closing tags
    "divide-end": TokenType.DIVIDE_END,
    "p-end": TokenType.P_END,
    "h-end": TokenType.H_END,
    "link-end": TokenType.LINK_END,
    "img-end": TokenType.IMG_END,
    "list-end": TokenType.LIST_END,
    "lst-end": TokenType.LST_END,
    "item-end": TokenType.ITEM_END,
    "table-end": TokenType.TABLE_END,
    "row-end": TokenType.ROW_END,
    "cell-end": TokenType.CELL_END,
    "form-end": TokenType.FORM_END,
    "input-end": TokenType.INPUT_END,
    "btn-end": TokenType.BTN_END,
    "bold-end": TokenType.BOLD_END,
    "italic-end": TokenType.ITALIC_END,
    "code-end": TokenType.CODE_END,
}

# Opening tag -> closing tag. The two list kinds are absent:
# they share [lst-end] and are matched by the parser.
MATCHING_CLOSE: Dict[TokenType, TokenType] = {
    TokenType.TOP_OF_PAGE_START: TokenType.TOP_OF_PAGE_END,
    TokenType.MID_PAGE_START: TokenType.MID_PAGE_END,
    TokenType.BOTTOM_OF_PAGE_START: TokenType.BOTTOM_OF_PAGE_END,
    TokenType.DIVIDE_START: TokenType.DIVIDE_END,
    TokenType.P_START: TokenType.P_END,
    TokenType.H_START: TokenType.H_END,
    TokenType.LINK_START: TokenType.LINK_END,
    TokenType.IMG_START: TokenType.IMG_END,
    TokenType.LIST_START: TokenType.LIST_END,
    TokenType.ITEM_START: TokenType.ITEM_END,
    TokenType.TABLE_START: TokenType.TABLE_END,
    TokenType.ROW_START: TokenType.ROW_END,
    TokenType.CELL_START: TokenType.CELL_END,
    TokenType.FORM_START: TokenType.FORM_END,
    TokenType.INPUT_START: TokenType.INPUT_END,
    TokenType.BTN_START: TokenType.BTN_END,
    TokenType.BOLD_START: TokenType.BOLD_END,
    TokenType.ITALIC_START: TokenType.ITALIC_END,
    TokenType.CODE_START: TokenType.CODE_END,
}

LIST_OPENERS: FrozenSet[TokenType] = frozenset({
    TokenType.LIST_ORD_START,
    TokenType.LIST_UNORD_START,
})

OPENING_TAGS: FrozenSet[TokenType] = frozenset(MATCHING_CLOSE) | LIST_OPENERS
CLOSING_TAGS: FrozenSet[TokenType] = frozenset(MATCHING_CLOSE.values()) | {TokenType.LST_END}

SECTION_OPENERS: FrozenSet[TokenType] = frozenset({
    TokenType.TOP_OF_PAGE_START,
    TokenType.MID_PAGE_START,
    TokenType.BOTTOM_OF_PAGE_START,
})


def ident_lookUp(name: str) -> TokenType:
    """
    Classify a bracketed tag name

    Unknown names fall back to IDENT, which the parser then rejects as a
    property name without '='.

    Example:
        >>> ident_lookUp("p-start")
        <TokenType.P_START: 'P_START'>
        >>> ident_lookUp("nope-start")
        <TokenType.IDENT: 'IDENT'>
    """
    return KEYWORDS.get(name, TokenType.IDENT)


def closingTag_get(opening: TokenType) -> TokenType:
    """
    Return the closing tag category for an opening tag

    The list openers map to the shared LST_END. Anything that is not an
    opening tag maps to ILLEGAL.
    """
    if opening in LIST_OPENERS:
        return TokenType.LST_END
    return MATCHING_CLOSE.get(opening, TokenType.ILLEGAL)


def openingTag_is(token_type: TokenType) -> bool:
    """True if token_type opens a section or element"""
    return token_type in OPENING_TAGS


def closingTag_is(token_type: TokenType) -> bool:
    """True if token_type closes a section or element"""
    return token_type in CLOSING_TAGS


def sectionOpener_is(token_type: TokenType) -> bool:
    """True if token_type opens a top/mid/bottom page section"""
    return token_type in SECTION_OPENERS
