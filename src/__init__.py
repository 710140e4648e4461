"""
lpml - Lazy Page Maker Language compiler

Translates bracket-tagged LPML markup into static HTML pages.
"""

__version__ = "1.0.0"

from .lib import Lexer, Parser, Generator, Compiler, compile_source, LOG, state_connectToLogger

__all__ = [
    "Lexer",
    "Parser",
    "Generator",
    "Compiler",
    "compile_source",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
