"""
Compiler for LPML source to HTML

Runs the full pipeline over an in-memory source string:
source text → Lexer → Parser → Document → Generator → HTML text.

Generation only happens when parsing recorded no errors; otherwise the
result carries the errors and the partial tree for the caller to report.
"""

from .lexer import Lexer
from .parser import Parser
from .generator import Generator
from .log import LOG
from ..models.compile import CompileResult


class Compiler:
    """
    Compiles one LPML source string to a standalone HTML page

    Each Compiler builds fresh Lexer/Parser/Generator instances, so separate
    compiles never share state.
    """

    def __init__(self, source: str, verbosity: int = 1) -> None:
        """
        Args:
            source: Full LPML source text
            verbosity: Output verbosity level (0-3); 3 enables parser tracing
        """
        self.source = source
        self.verbosity = verbosity

    def compile(self) -> CompileResult:
        """
        Compile the source

        Returns:
            CompileResult with status False and the parser's errors if any
            were recorded, otherwise status True and the generated HTML
        """
        LOG(f"Lexing and parsing {len(self.source)} characters...", level=2)

        parser = Parser(Lexer(self.source), debug=(self.verbosity >= 3))
        document = parser.parse()

        if parser.errors:
            LOG(f"Parsing produced {len(parser.errors)} errors; skipping generation", level=2)
            return CompileResult(
                status=False,
                errors=list(parser.errors),
                document=document,
                section_count=len(document.sections),
            )

        html = Generator().generate(document)
        LOG(f"Generated {len(html)} characters of HTML", level=2)

        return CompileResult(
            status=True,
            html=html,
            document=document,
            section_count=len(document.sections),
        )


def compile_source(source: str) -> CompileResult:
    """Convenience wrapper: ``Compiler(source).compile()``"""
    return Compiler(source).compile()
