"""
Design Theme
Site-wide CSS from the blueprint design settings: the web font import, base
element rules and the button shape.
"""

import re
from typing import Any
from urllib.parse import quote_plus

from ..core import get_logger

logger = get_logger(__name__)

# Tailwind text size classes to CSS lengths
FONT_SIZES = {
    "text-xs": "0.75rem",
    "text-sm": "0.875rem",
    "text-base": "1rem",
    "text-lg": "1.125rem",
    "text-xl": "1.25rem",
    "text-2xl": "1.5rem",
    "text-3xl": "1.875rem",
    "text-4xl": "2.25rem",
    "text-5xl": "3rem",
    "text-6xl": "3.75rem",
    "text-7xl": "4.5rem",
    "text-8xl": "6rem",
    "text-9xl": "8rem",
}
DEFAULT_FONT_SIZE = "1rem"

# Tailwind rounding classes to border radii
BUTTON_RADII = {
    "rounded-none": "0px",
    "rounded": "4px",
    "rounded-md": "6px",
    "rounded-lg": "8px",
    "rounded-xl": "12px",
    "rounded-2xl": "16px",
    "rounded-full": "9999px",
}
DEFAULT_BUTTON_RADIUS = "4px"

DESIGN_DEFAULTS = {
    "backgroundColor": "#ffffff",
    "textColor": "#333333",
    "titleColor": "#000000",
    "accentColor": "#516ab8",
    "accentTextColor": "#ffffff",
    "textFont": "Roboto",
    "titleFont": "Roboto",
    "logoFont": "Roboto",
    "titleFontSize": "text-3xl",
    "textFontSize": "text-base",
    "buttonRoundedness": "rounded",
}

FONTS_URL = "https://fonts.googleapis.com/css2"

# Characters that would end a declaration or rule early
_UNSAFE = re.compile(r"[;{}<>'\"\\\n\r]")


def design_value(design: dict[str, Any], key: str) -> str:
    """A design setting usable inside a CSS declaration, else its default."""
    value = design.get(key)
    if isinstance(value, str) and value.strip() and not _UNSAFE.search(value):
        return value.strip()
    if value not in (None, ""):
        logger.warning("design_value_invalid", key=key)
    return DESIGN_DEFAULTS[key]


def font_size(tw_class: str) -> str:
    return FONT_SIZES.get(tw_class, DEFAULT_FONT_SIZE)


def button_radius(roundedness: str) -> str:
    return BUTTON_RADII.get(roundedness, DEFAULT_BUTTON_RADIUS)


def font_import(design: dict[str, Any]) -> str:
    """``@import`` of the text, title and logo fonts."""
    families = "&".join(
        f"family={quote_plus(design_value(design, key))}" for key in ("textFont", "titleFont", "logoFont")
    )
    return f"@import url('{FONTS_URL}?{families}&display=swap');"


def _rule(selector: str, declarations: dict[str, str]) -> str:
    body = "\n".join(f"  {prop}: {value};" for prop, value in declarations.items())
    return f"{selector} {{\n{body}\n}}"


def theme_css(design: dict[str, Any] | None) -> str:
    """
    Theme stylesheet for a blueprint design.

    Missing or unusable settings take their defaults, so an empty design
    still yields a complete theme.
    """
    design = design or {}

    def value(key: str) -> str:
        return design_value(design, key)

    title_size = font_size(value("titleFontSize"))

    rules = [
        font_import(design),
        _rule(
            "body",
            {
                "background": value("backgroundColor"),
                "color": value("textColor"),
                "font-family": f"{value('textFont')}, sans-serif",
                "font-size": font_size(value("textFontSize")),
            },
        ),
        _rule(
            "h1",
            {
                "color": value("titleColor"),
                "font-family": f"{value('titleFont')}, sans-serif",
                "font-size": title_size,
            },
        ),
        _rule("h2", {"font-size": f"calc({title_size} * 0.85)", "font-weight": "800"}),
        _rule("h3", {"font-size": f"calc({title_size} * 0.7)", "font-weight": "600"}),
        _rule(
            "button",
            {
                "background-color": value("accentColor"),
                "color": value("accentTextColor"),
                "font-family": f"{value('titleFont')}, sans-serif",
                "border-radius": button_radius(value("buttonRoundedness")),
            },
        ),
    ]
    return "\n\n".join(rules) + "\n"
