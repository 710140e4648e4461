"""
Compiler result model
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .ast import Document


@dataclass
class CompileResult:
    """
    Outcome of compiling one LPML source

    Attributes:
        status: True when parsing recorded no errors and HTML was generated
        html: Generated HTML ("" when status is False)
        errors: Parser messages, in the order they were recorded
        document: The (possibly partial) parsed tree
        section_count: Number of page sections in the document
    """
    status: bool
    html: str = ""
    errors: List[str] = field(default_factory=list)
    document: Optional[Document] = None
    section_count: int = 0
