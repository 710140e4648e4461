"""
Abstract syntax tree for LPML documents

The parser produces a Document holding page sections; each section holds
Elements, and each Element holds a property map plus nested Elements.
Text never appears as a child node: it arrives through the ``contains``
property or an ``items`` array.

Tag kinds are resolved to enums once, at parse time, so the generator
dispatches on ElementKind rather than comparing tag-name strings.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, List, Union

from .tokens import Token, TokenType


class SectionKind(Enum):
    """Page section kinds, valued by their CSS class name"""
    TOP = "top-of-page"
    MID = "mid-page"
    BOTTOM = "bottom-of-page"


class ElementKind(Enum):
    """Element kinds, valued by their LPML tag stem"""
    DIVIDE = "divide"
    P = "p"
    H = "h"
    LINK = "link"
    IMG = "img"
    LIST = "list"
    LIST_ORD = "lst-ord"
    LIST_UNORD = "lst-unord"
    ITEM = "item"
    TABLE = "table"
    ROW = "row"
    CELL = "cell"
    FORM = "form"
    INPUT = "input"
    BTN = "btn"
    BOLD = "bold"
    ITALIC = "italic"
    CODE = "code"


SECTION_KINDS: Dict[TokenType, SectionKind] = {
    TokenType.TOP_OF_PAGE_START: SectionKind.TOP,
    TokenType.MID_PAGE_START: SectionKind.MID,
    TokenType.BOTTOM_OF_PAGE_START: SectionKind.BOTTOM,
}

ELEMENT_KINDS: Dict[TokenType, ElementKind] = {
    TokenType.DIVIDE_START: ElementKind.DIVIDE,
    TokenType.P_START: ElementKind.P,
    TokenType.H_START: ElementKind.H,
    TokenType.LINK_START: ElementKind.LINK,
    TokenType.IMG_START: ElementKind.IMG,
    TokenType.LIST_START: ElementKind.LIST,
    TokenType.LIST_ORD_START: ElementKind.LIST_ORD,
    TokenType.LIST_UNORD_START: ElementKind.LIST_UNORD,
    TokenType.ITEM_START: ElementKind.ITEM,
    TokenType.TABLE_START: ElementKind.TABLE,
    TokenType.ROW_START: ElementKind.ROW,
    TokenType.CELL_START: ElementKind.CELL,
    TokenType.FORM_START: ElementKind.FORM,
    TokenType.INPUT_START: ElementKind.INPUT,
    TokenType.BTN_START: ElementKind.BTN,
    TokenType.BOLD_START: ElementKind.BOLD,
    TokenType.ITALIC_START: ElementKind.ITALIC,
    TokenType.CODE_START: ElementKind.CODE,
}


@dataclass
class StringValue:
    """Quoted literal, kept exactly as written (no escape processing)"""
    token: Token
    value: str


@dataclass
class NumberValue:
    """Numeric literal, kept as its source text"""
    token: Token
    value: str


@dataclass
class VariableRef:
    """``$name`` reference to a labeled element, resolved at generation time"""
    token: Token
    name: str


@dataclass
class ArrayValue:
    """``[a, b, c]`` of string, number, or variable-reference items"""
    token: Token
    values: List[Union[StringValue, NumberValue, VariableRef]] = field(default_factory=list)


@dataclass
class CodeBlockValue:
    """Raw ``{ ... }`` content with trailing whitespace trimmed"""
    token: Token
    content: str


Value = Union[StringValue, NumberValue, VariableRef, ArrayValue, CodeBlockValue]


@dataclass
class Element:
    """
    One LPML element

    Attributes:
        token: The opening tag token (line/column used in error messages)
        kind: Resolved element kind
        properties: Property name -> Value; last assignment of a name wins
        children: Nested elements, in source order
    """
    token: Token
    kind: ElementKind
    properties: Dict[str, Value] = field(default_factory=dict)
    children: List['Element'] = field(default_factory=list)


@dataclass
class PageSection:
    """A top/mid/bottom page section and its elements"""
    token: Token
    kind: SectionKind
    children: List[Element] = field(default_factory=list)


@dataclass
class Document:
    """Compilation unit: page sections in source order"""
    sections: List[PageSection] = field(default_factory=list)
