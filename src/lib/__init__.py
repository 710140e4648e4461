"""
lpml - Lazy Page Maker Language compiler

Bracket-tagged markup compiled to static HTML.
"""

__version__ = "1.0.0"

from .lexer import Lexer
from .parser import Parser
from .generator import Generator
from .compiler import Compiler, compile_source
from .log import LOG, state_connectToLogger, state_disconnectFromLogger

__all__ = [
    "Lexer",
    "Parser",
    "Generator",
    "Compiler",
    "compile_source",
    "LOG",
    "state_connectToLogger",
    "state_disconnectFromLogger",
    "__version__",
]
