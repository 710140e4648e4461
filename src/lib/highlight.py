"""
Pygments support for LPML

Provides a Pygments lexer for LPML source (so ``file_type = "lpml"`` code
blocks can show LPML itself) and the helper the generator uses when
``LPML_HIGHLIGHT_CODE`` is enabled.

Token types:
- Keyword.Declaration: Page section tags ([top-of-page-start], ...)
- Name.Tag: Element tags ([p-start], [lst-ord], ...)
- Name.Attribute: Property names
- String / Number: Literal values
- Name.Variable: $label references
- Punctuation: = , [ ] { }
"""

from typing import Optional

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer, RegexLexer, bygroups
from pygments.lexers import get_lexer_by_name
from pygments.token import (
    Text,
    Punctuation,
    Name,
    String,
    Keyword,
    Number,
    Error,
)
from pygments.util import ClassNotFound


class LpmlLexer(RegexLexer):
    """
    Lexer for LPML markup

    Example:
        [p-start] contains = "Hello" color = $accent [p-end]

    Tokens:
        [p-start] → Name.Tag
        contains  → Name.Attribute
        =         → Punctuation
        "Hello"   → String
        $accent   → Name.Variable
    """

    name = 'LPML'
    aliases = ['lpml']
    filenames = ['*.lpml']

    tokens = {
        'root': [
            (r'\s+', Text),

            # Page sections
            (r'(\[)((?:top-of-page|mid-page|bottom-of-page)-(?:start|end))(\])',
             bygroups(Punctuation, Keyword.Declaration, Punctuation)),

            # Element tags
            (r'(\[)([a-zA-Z][\w-]*)(\])', bygroups(Punctuation, Name.Tag, Punctuation)),

            # Code block content is opaque
            (r'\{', Punctuation, 'codeblock'),

            (r'([a-zA-Z_]\w*)(\s*)(=)', bygroups(Name.Attribute, Text, Punctuation)),
            (r'"[^"]*"?', String),
            (r'\d[\d.]*', Number),
            (r'\$\w*', Name.Variable),
            (r'[\[\],=]', Punctuation),
            (r'[a-zA-Z_]\w*', Name),
            (r'.', Error),
        ],

        'codeblock': [
            (r'\{', String.Other, '#push'),
            (r'\}', Punctuation, '#pop'),
            (r'[^{}]+', String.Other),
        ],
    }


def code_highlight(code: str, language: str, style: str = "default") -> Optional[str]:
    """
    Highlight code with inline styles

    Args:
        code: Raw code text
        language: Pygments alias (``lpml`` is handled by LpmlLexer)
        style: Pygments style name

    Returns:
        Span markup suitable for placing inside ``<pre><code>``, or None
        if no lexer is known for the language
    """
    lexer: Lexer
    try:
        if language.lower() == 'lpml':
            lexer = LpmlLexer()
        else:
            lexer = get_lexer_by_name(language)
    except ClassNotFound:
        return None

    formatter = HtmlFormatter(style=style, noclasses=True, nowrap=True)
    return highlight(code, lexer, formatter).rstrip("\n")
