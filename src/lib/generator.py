"""
HTML generator for LPML documents

Walks a parsed Document twice:
    1. Label collection: every element with ``label = "name"`` is recorded
       so ``$name`` references can be resolved anywhere in the document.
    2. Rendering: each page section becomes a ``<div>`` and each element is
       emitted as indented HTML with inline styles built from the friendly
       style vocabulary in styles.py.

Indentation depth travels with each entry of an explicit render stack
rather than living on the instance, so rendering one subtree can never
disturb another, and arbitrarily deep nesting cannot exhaust the call stack.

A heading's ``size`` is appended to its style list as one more
declaration, giving ``style="color: red; font-size: 9px;"`` with no empty
declaration between the two.

Example:
    >>> from lpml.lib.parser import Parser
    >>> doc = Parser('[mid-page-start] [p-start] contains = "Hi" color = "red" [p-end] [mid-page-end]').parse()
    >>> '<p style="color: red;">Hi</p>' in Generator().generate(doc)
    True
"""

from typing import Callable, Dict, FrozenSet, Iterator, List, Optional, Tuple

from ..models.ast import (
    Document,
    PageSection,
    Element,
    ElementKind,
    Value,
    StringValue,
    NumberValue,
    VariableRef,
    ArrayValue,
    CodeBlockValue,
)
from .styles import declarations_build, styleAttr_render
from .log import LOG


FORMAT_TAGS: Dict[str, str] = {
    "bold": "strong",
    "italic": "em",
    "underline": "u",
    "strike": "s",
    "code": "code",
    "mark": "mark",
}

# Opening text, and closing text to emit after the children (None: no children)
Rendered = Tuple[str, Optional[str]]


def html_escape(text: str) -> str:
    """Escape &, <, > and double quotes (single quotes are left alone)"""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


class Generator:
    """
    Renders a Document to a complete HTML page

    A Generator keeps only the label registry of the document it is
    currently generating; use one instance per compile.
    """

    def __init__(self) -> None:
        from ..config import appsettings

        self.labels: Dict[str, Element] = {}
        self.indent_unit = " " * appsettings.indent_width
        self.title = appsettings.document_title
        self.highlight_code = appsettings.highlight_code
        self.pygments_style = appsettings.pygments_style

        self.renderers: Dict[ElementKind, Callable[[Element, int], Rendered]] = {
            ElementKind.DIVIDE: self.divide_render,
            ElementKind.P: self.paragraph_render,
            ElementKind.H: self.heading_render,
            ElementKind.LINK: self.link_render,
            ElementKind.IMG: self.image_render,
            ElementKind.LIST: self.list_render,
            ElementKind.LIST_ORD: self.list_render,
            ElementKind.LIST_UNORD: self.list_render,
            ElementKind.ITEM: self.item_render,
            ElementKind.TABLE: self.table_render,
            ElementKind.ROW: self.row_render,
            ElementKind.CELL: self.cell_render,
            ElementKind.FORM: self.form_render,
            ElementKind.INPUT: self.input_render,
            ElementKind.BTN: self.button_render,
            ElementKind.BOLD: self.bold_render,
            ElementKind.ITALIC: self.italic_render,
            ElementKind.CODE: self.code_render,
        }

    def generate(self, document: Document) -> str:
        """
        Produce the full HTML text for a document

        Generating the same Document twice yields identical output.
        """
        self.labels = self.labels_collect(document)
        LOG(f"Collected {len(self.labels)} labels", level=2)

        parts: List[str] = [
            "<!DOCTYPE html>\n",
            "<html>\n",
            "<head>\n",
            f"  <title>{self.title}</title>\n",
            "  <style>\n",
            "    .top-of-page { }\n",
            "    .mid-page { }\n",
            "    .bottom-of-page { }\n",
            "  </style>\n",
            "</head>\n",
            "<body>\n",
        ]

        for section in document.sections:
            parts.append(self.section_render(section))

        parts.append("</body>\n")
        parts.append("</html>\n")

        return "".join(parts)

    # ------------------------------------------------------------------
    # Pass 1: labels
    # ------------------------------------------------------------------

    def labels_collect(self, document: Document) -> Dict[str, Element]:
        """
        Map label names to their elements, depth-first in source order

        When two elements share a label the later one wins.
        """
        labels: Dict[str, Element] = {}

        for section in document.sections:
            pending = list(reversed(section.children))
            while pending:
                element = pending.pop()
                label = element.properties.get("label")
                if isinstance(label, StringValue):
                    labels[label.value] = element
                pending.extend(reversed(element.children))

        return labels

    # ------------------------------------------------------------------
    # Value resolution
    # ------------------------------------------------------------------

    def value_resolve(self, value: Value, resolving: FrozenSet[str] = frozenset()) -> str:
        """
        Turn a Value into display text

        A variable reference yields the referenced element's own ``contains``
        text, or the literal ``$name`` if the label is unknown or the
        reference chain loops back on itself. Arrays join their items with
        ", ". Code blocks only render through [code-start], so they resolve
        to "".
        """
        if isinstance(value, (StringValue, NumberValue)):
            return value.value

        if isinstance(value, VariableRef):
            seen = set(resolving)
            while isinstance(value, VariableRef):
                target = self.labels.get(value.name)
                if target is None or value.name in seen:
                    return f"${value.name}"
                seen.add(value.name)
                value = target.properties.get("contains")
                if value is None:
                    return ""
            return self.value_resolve(value, frozenset(seen))

        if isinstance(value, ArrayValue):
            return ", ".join(self.value_resolve(item, resolving) for item in value.values)

        return ""

    def prop_get(
        self, element: Element, name: str, resolving: FrozenSet[str] = frozenset()
    ) -> str:
        """Resolved text of a property, or "" if the element lacks it"""
        value = element.properties.get(name)
        if value is None:
            return ""
        return self.value_resolve(value, resolving)

    # ------------------------------------------------------------------
    # Attribute helpers
    # ------------------------------------------------------------------

    def indent(self, depth: int) -> str:
        return self.indent_unit * depth

    def idAttr_build(self, element: Element) -> str:
        label = self.prop_get(element, "label")
        return f' id="{label}"' if label else ""

    def styleAttr_build(self, element: Element, extra: Optional[List[str]] = None) -> str:
        declarations = declarations_build(lambda name: self.prop_get(element, name))
        if extra:
            declarations.extend(extra)
        return styleAttr_render(declarations) or ""

    def formatting_apply(self, element: Element, content: str) -> str:
        """
        Wrap content per the ``format_with`` array

        Wraps are applied in array order, so the first entry ends up
        innermost: ["bold", "mark"] gives <mark><strong>X</strong></mark>.
        Unknown format names are ignored.
        """
        formats = element.properties.get("format_with")
        if not isinstance(formats, ArrayValue):
            return content

        for item in formats.values:
            tag = FORMAT_TAGS.get(self.value_resolve(item))
            if tag:
                content = f"<{tag}>{content}</{tag}>"
        return content

    # ------------------------------------------------------------------
    # Pass 2: rendering
    # ------------------------------------------------------------------

    def section_render(self, section: PageSection) -> str:
        """Render a page section as ``<div class="top-of-page|mid-page|bottom-of-page">``"""
        LOG(f"Rendering section {section.kind.value} ({len(section.children)} elements)", level=3)

        pad = self.indent(1)
        body = self.elements_render(section.children, 2)
        return f'{pad}<div class="{section.kind.value}">\n{body}{pad}</div>\n'

    def elements_render(self, elements: List[Element], depth: int) -> str:
        """
        Render a run of sibling elements and everything nested below them

        Walks the tree with an explicit stack of (children, depth, closing
        text) frames, so nesting depth is bounded by memory rather than by
        the interpreter's recursion limit. A renderer returns its opening
        text plus the closing text to emit after its children, or None as
        the closing text when the element does not render children.
        """
        parts: List[str] = []
        stack: List[Tuple[Iterator[Element], int, str]] = [(iter(elements), depth, "")]

        while stack:
            children, level, closing = stack[-1]
            element = next(children, None)
            if element is None:
                stack.pop()
                parts.append(closing)
                continue

            renderer = self.renderers.get(element.kind)
            if renderer is None:
                LOG(f"Warning: no renderer for element '{element.kind.value}'", level=2)
                continue

            opening, child_closing = renderer(element, level)
            parts.append(opening)
            if child_closing is not None:
                stack.append((iter(element.children), level + 1, child_closing))

        return "".join(parts)

    def divide_render(self, element: Element, depth: int) -> Rendered:
        pad = self.indent(depth)
        css_class = self.prop_get(element, "class")
        class_attr = f' class="{css_class}"' if css_class else ""
        return (
            f"{pad}<div{self.idAttr_build(element)}{class_attr}{self.styleAttr_build(element)}>\n",
            f"{pad}</div>\n",
        )

    def paragraph_render(self, element: Element, depth: int) -> Rendered:
        content = self.formatting_apply(element, self.prop_get(element, "contains"))
        return (
            f"{self.indent(depth)}<p{self.idAttr_build(element)}"
            f"{self.styleAttr_build(element)}>{content}</p>\n",
            None,
        )

    def heading_render(self, element: Element, depth: int) -> Rendered:
        """``level`` picks h1-h6 (default 1); ``size`` adds a raw font-size"""
        content = self.formatting_apply(element, self.prop_get(element, "contains"))
        level = self.prop_get(element, "level") or "1"
        size = self.prop_get(element, "size")
        extra = [f"font-size: {size}"] if size else None
        return (
            f"{self.indent(depth)}<h{level}{self.idAttr_build(element)}"
            f"{self.styleAttr_build(element, extra)}>{content}</h{level}>\n",
            None,
        )

    def link_render(self, element: Element, depth: int) -> Rendered:
        href = self.prop_get(element, "link_url") or self.prop_get(element, "href")
        content = self.prop_get(element, "contains")
        return f'{self.indent(depth)}<a href="{href}"{self.idAttr_build(element)}>{content}</a>\n', None

    def image_render(self, element: Element, depth: int) -> Rendered:
        src = self.prop_get(element, "src")
        alt = self.prop_get(element, "alt")
        return f'{self.indent(depth)}<img src="{src}" alt="{alt}"{self.idAttr_build(element)}>\n', None

    def list_render(self, element: Element, depth: int) -> Rendered:
        """
        Render ``<ol>``/``<ul>``

        The bracket kind picks the default tag, ``type = "ordered"`` or
        ``"unordered"`` overrides it. Items from an ``items`` array come
        first, then any nested [item-start] elements.
        """
        tag = "ol" if element.kind is ElementKind.LIST_ORD else "ul"
        list_type = self.prop_get(element, "type")
        if list_type == "ordered":
            tag = "ol"
        elif list_type == "unordered":
            tag = "ul"

        pad = self.indent(depth)
        child_pad = self.indent(depth + 1)
        parts = [f"{pad}<{tag}{self.idAttr_build(element)}>\n"]

        items = element.properties.get("items")
        if isinstance(items, ArrayValue):
            for item in items.values:
                parts.append(f"{child_pad}<li>{self.value_resolve(item)}</li>\n")

        return "".join(parts), f"{pad}</{tag}>\n"

    def item_render(self, element: Element, depth: int) -> Rendered:
        return f"{self.indent(depth)}<li>{self.prop_get(element, 'contains')}</li>\n", None

    def table_render(self, element: Element, depth: int) -> Rendered:
        pad = self.indent(depth)
        return f"{pad}<table{self.idAttr_build(element)}>\n", f"{pad}</table>\n"

    def row_render(self, element: Element, depth: int) -> Rendered:
        pad = self.indent(depth)
        return f"{pad}<tr>\n", f"{pad}</tr>\n"

    def cell_render(self, element: Element, depth: int) -> Rendered:
        return f"{self.indent(depth)}<td>{self.prop_get(element, 'contains')}</td>\n", None

    def form_render(self, element: Element, depth: int) -> Rendered:
        pad = self.indent(depth)
        action = self.prop_get(element, "action")
        return f'{pad}<form action="{action}"{self.idAttr_build(element)}>\n', f"{pad}</form>\n"

    def input_render(self, element: Element, depth: int) -> Rendered:
        input_type = self.prop_get(element, "type") or "text"
        name = self.prop_get(element, "name")
        return (
            f'{self.indent(depth)}<input type="{input_type}" name="{name}"'
            f"{self.idAttr_build(element)}>\n",
            None,
        )

    def button_render(self, element: Element, depth: int) -> Rendered:
        content = self.prop_get(element, "contains")
        return f"{self.indent(depth)}<button{self.idAttr_build(element)}>{content}</button>\n", None

    def bold_render(self, element: Element, depth: int) -> Rendered:
        return f"{self.indent(depth)}<strong>{self.prop_get(element, 'contains')}</strong>\n", None

    def italic_render(self, element: Element, depth: int) -> Rendered:
        return f"{self.indent(depth)}<em>{self.prop_get(element, 'contains')}</em>\n", None

    def code_render(self, element: Element, depth: int) -> Rendered:
        """
        Render ``<pre><code>``

        ``file_type`` adds a ``language-*`` class, ``linked_file`` adds a
        comment line naming the file (its content is never read), and the
        ``syntax`` code block is HTML-escaped. With highlighting enabled in
        settings, known languages are rendered through Pygments instead.
        """
        linked_file = self.prop_get(element, "linked_file")
        file_type = self.prop_get(element, "file_type")

        syntax = element.properties.get("syntax")
        code = syntax.content if isinstance(syntax, CodeBlockValue) else ""

        lang_class = f' class="language-{file_type}"' if file_type else ""
        parts = [f"{self.indent(depth)}<pre><code{lang_class}>"]

        if linked_file:
            parts.append(f"/* File: {linked_file} */\n")

        if code:
            parts.append(self.code_format(code, file_type))

        parts.append("</code></pre>\n")
        return "".join(parts), None

    def code_format(self, code: str, file_type: str) -> str:
        if self.highlight_code and file_type:
            from .highlight import code_highlight

            highlighted = code_highlight(code, file_type, self.pygments_style)
            if highlighted is not None:
                return highlighted
            LOG(f"No highlighter for '{file_type}', emitting plain code", level=2)
        return html_escape(code)
