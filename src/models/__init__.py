"""
Models package for lpml

Contains data structures and type definitions for the compilation pipeline.
"""

from .state import ProgramState, pipeline
from .tokens import Token, TokenType
from .ast import (
    Document,
    PageSection,
    Element,
    SectionKind,
    ElementKind,
    StringValue,
    NumberValue,
    VariableRef,
    ArrayValue,
    CodeBlockValue,
)
from .compile import CompileResult

__all__ = [
    "ProgramState",
    "pipeline",
    "Token",
    "TokenType",
    "Document",
    "PageSection",
    "Element",
    "SectionKind",
    "ElementKind",
    "StringValue",
    "NumberValue",
    "VariableRef",
    "ArrayValue",
    "CodeBlockValue",
    "CompileResult",
]
