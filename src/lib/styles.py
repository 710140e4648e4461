"""
Friendly style vocabulary

Maps LPML's friendly property values (``padding = "large"``) to CSS.
Any value that is not a key of the relevant table passes through unchanged
and is assumed to already be valid CSS.
"""

from typing import Callable, Dict, List, Optional, Tuple


TEXT_SIZES: Dict[str, str] = {
    "tiny": "10px",
    "small": "12px",
    "normal": "16px",
    "medium": "20px",
    "large": "24px",
    "huge": "32px",
    "giant": "48px",
}

SPACINGS: Dict[str, str] = {
    "none": "0",
    "tiny": "4px",
    "small": "8px",
    "medium": "16px",
    "large": "24px",
    "huge": "32px",
}

BORDERS: Dict[str, str] = {
    "none": "none",
    "thin": "1px solid #ccc",
    "medium": "2px solid #999",
    "thick": "3px solid #333",
}

ROUNDED: Dict[str, str] = {
    "none": "0",
    "small": "4px",
    "medium": "8px",
    "large": "16px",
    "full": "9999px",
    "circle": "50%",
}

SHADOWS: Dict[str, str] = {
    "none": "none",
    "small": "0 1px 3px rgba(0,0,0,0.12), 0 1px 2px rgba(0,0,0,0.24)",
    "medium": "0 3px 6px rgba(0,0,0,0.15), 0 2px 4px rgba(0,0,0,0.12)",
    "large": "0 10px 20px rgba(0,0,0,0.15), 0 3px 6px rgba(0,0,0,0.10)",
    "huge": "0 15px 25px rgba(0,0,0,0.15), 0 5px 10px rgba(0,0,0,0.05)",
}


def friendly_resolve(table: Dict[str, str]) -> Callable[[str], str]:
    """Build a translator that looks a value up in table, else passes it through"""
    def resolve(value: str) -> str:
        return table.get(value, value)
    return resolve


def passthrough(value: str) -> str:
    return value


def background_declare(value: str) -> str:
    """Gradients and images need the ``background`` shorthand"""
    if "gradient" in value or "url(" in value:
        return f"background: {value}"
    return f"background-color: {value}"


# (property, CSS property, translator), in emission order. Later duplicates
# win in the browser, so text_color/color and bg_color/background are
# ordered so the second of each pair takes precedence.
STYLE_PROPERTIES: List[Tuple[str, str, Callable[[str], str]]] = [
    ("text_color", "color", passthrough),
    ("color", "color", passthrough),
    ("bg_color", "background-color", passthrough),
    ("background", "", passthrough),
    ("text_size", "font-size", friendly_resolve(TEXT_SIZES)),
    ("font", "font-family", passthrough),
    ("align", "text-align", passthrough),
    ("padding", "padding", friendly_resolve(SPACINGS)),
    ("margin", "margin", friendly_resolve(SPACINGS)),
    ("border", "border", friendly_resolve(BORDERS)),
    ("rounded", "border-radius", friendly_resolve(ROUNDED)),
    ("shadow", "box-shadow", friendly_resolve(SHADOWS)),
    ("width", "width", passthrough),
    ("height", "height", passthrough),
    ("line_spacing", "line-height", passthrough),
    ("display", "display", passthrough),
]

CENTER_CONTENT: List[str] = [
    "display: flex",
    "justify-content: center",
    "align-items: center",
]


def declarations_build(lookup: Callable[[str], str]) -> List[str]:
    """
    Compose CSS declarations for an element

    Args:
        lookup: Returns the resolved display text of a property, or "" if
                the element does not carry it

    Returns:
        Declarations such as ``["color: red", "padding: 24px"]`` in the
        fixed STYLE_PROPERTIES order, followed by the flexbox trio when
        ``center_content = "true"``
    """
    declarations: List[str] = []

    for name, css_name, translate in STYLE_PROPERTIES:
        value = lookup(name)
        if not value:
            continue
        if name == "background":
            declarations.append(background_declare(value))
        else:
            declarations.append(f"{css_name}: {translate(value)}")

    if lookup("center_content") == "true":
        declarations.extend(CENTER_CONTENT)

    return declarations


def styleAttr_render(declarations: List[str]) -> Optional[str]:
    """
    Render declarations as a ``style`` attribute fragment

    Returns:
        ``' style="a: b; c: d;"'`` or None when there is nothing to emit
    """
    if not declarations:
        return None
    return f' style="{"; ".join(declarations)};"'
