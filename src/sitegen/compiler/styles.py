"""View style attributes to inline styles and CSS classes."""

import re

from ..blueprint.models import View

_DATA_URL_PREFIX = re.compile(r"data:image/[^;]+;base64,")
_NON_IDENT = re.compile(r"[^a-zA-Z0-9]")

PLACE_ITEMS = {
    ("Top", "Left"): "start start",
    ("Top", "Center"): "start center",
    ("Top", "Right"): "start end",
    ("Center", "Left"): "center start",
    ("Center", "Center"): "center center",
    ("Center", "Right"): "center end",
    ("Bottom", "Left"): "end start",
    ("Bottom", "Center"): "end center",
    ("Bottom", "Right"): "end end",
}
DEFAULT_PLACE_ITEMS = "center center"

TEXT_ALIGN = {
    "Left": ("left", "start"),
    "Center": ("center", "center"),
    "Right": ("right", "end"),
}

FLEX_JUSTIFY = {"Left": "flex-start", "Center": "center", "Right": "flex-end"}
FLEX_ALIGN = {"Top": "flex-start", "Center": "center", "Bottom": "flex-end"}

_SPACING = (
    "paddingLeft", "paddingRight", "paddingTop", "paddingBottom",
    "marginLeft", "marginRight", "marginTop", "marginBottom",
    "minHeight", "minWidth", "maxHeight", "maxWidth",
)


def px(value: float) -> str:
    """CSS pixel length (``12.0`` -> ``12px``)."""
    return f"{value:g}px"


def place_items(view: View) -> str:
    """Combined vertical and horizontal alignment as one ``placeItems`` value."""
    return PLACE_ITEMS.get((view.verticalAlign or "", view.align or ""), DEFAULT_PLACE_ITEMS)


def clean_background_image(value: str) -> str:
    """Strip inline base64 data prefixes from an image reference."""
    return _DATA_URL_PREFIX.sub("", value)


def cell_style(view: View | None, aligned: bool = False) -> dict[str, str]:
    """
    Inline style for the grid cell hosting a view.

    Page rows and container cells share colors, background image, spacing,
    size limits and grid placement. With ``aligned`` the view's horizontal
    alignment also sets text alignment, as inside containers.
    """
    if view is None:
        return {}

    style: dict[str, str] = {}
    if view.background_color:
        style["backgroundColor"] = view.background_color
    if view.background_image:
        style["backgroundImage"] = f"url({clean_background_image(view.background_image)})"
        style["backgroundSize"] = "cover"
        style["backgroundPosition"] = "center"
        style["backgroundRepeat"] = "no-repeat"
    if view.text_color:
        style["color"] = view.text_color

    for attr in _SPACING:
        value = getattr(view, attr)
        if value:
            style[attr] = px(value)

    style["display"] = "grid"
    style["placeItems"] = place_items(view)

    if aligned and view.align in TEXT_ALIGN:
        text_align, justify = TEXT_ALIGN[view.align]
        style["textAlign"] = text_align
        style["justifyContent"] = justify
    return style


def flex_wrapper_style(view: View) -> dict[str, str]:
    """Inner wrapper placing a subview per its declared alignment."""
    return {
        "display": "flex",
        "justifyContent": FLEX_JUSTIFY.get(view.align or "", "center"),
        "alignItems": FLEX_ALIGN.get(view.verticalAlign or "", "center"),
    }


def title_color_class(view: View) -> tuple[str, str] | None:
    """
    CSS class coloring headings inside a view.

    Returns:
        ``(class_name, css_rule)`` or None when no card title color is set
    """
    if not view.card_title_color:
        return None

    class_name = f"view-{_NON_IDENT.sub('_', view.id)}-title"
    selectors = ",\n".join(
        f".{class_name} {sel}" for sel in ("h1", "h2", "h3", ".card h1", ".card h2", ".card h3")
    )
    rule = f"{selectors} {{\n  color: {view.card_title_color} !important;\n}}"
    return class_name, rule
