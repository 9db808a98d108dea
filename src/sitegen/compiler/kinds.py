"""Closed set of view kinds."""

import re
from enum import Enum


class ViewKind(str, Enum):
    """Every view type the compiler knows how to emit."""

    TEXT = "text"
    IMAGE = "image"
    LOGO = "logo"
    MENU = "menu"
    CONTAINER = "container"
    VIDEO = "video"
    ICON_BAR = "iconbar"
    COMPONENT = "component"
    INTEGRATION = "integration"

    # Internal concerns backed by a fixed pre-built view
    LOGIN = "login"
    LOGIN_BUTTON = "loginbutton"
    LOGIN_CALLBACK = "logincallback"
    PROFILE = "profile"
    LOGGED_IN_MENU = "loggedinmenu"
    ADMIN_MENU = "adminmenu"
    USER_ADMIN = "useradmin"
    PRICING = "pricing"

    # Rich widgets configured by a JSON payload
    FORM = "form"
    TESTIMONIAL = "testimonial"
    PHOTO_GALLERY = "photogallery"
    VIDEO_GALLERY = "videogallery"
    SLIDESHOW = "slideshow"
    SOCIAL_BAR = "socialbar"
    CTA = "cta"
    MAP = "map"

    UNKNOWN = "unknown"


_SEPARATORS = re.compile(r"[\s_\-]+")

_ALIASES = {
    "youtube": ViewKind.VIDEO,
    "youtubevideo": ViewKind.VIDEO,
    "headerlogin": ViewKind.LOGIN_BUTTON,
    "ctabutton": ViewKind.CTA,
    "calltoaction": ViewKind.CTA,
    "complexcomponent": ViewKind.COMPONENT,
    "upgrade": ViewKind.PRICING,
}


def classify(view_type: str | None) -> ViewKind:
    """
    Map a free-form view type onto a ViewKind.

    Case, spaces, underscores and dashes are ignored, so ``"Icon Bar"`` and
    ``"icon_bar"`` are both ICON_BAR. Generated-component variants
    (``generatedcomponent``, ``generated_view``) are COMPONENT.

    Examples:
        >>> classify("Icon Bar")
        <ViewKind.ICON_BAR: 'iconbar'>
        >>> classify("carousel3d")
        <ViewKind.UNKNOWN: 'unknown'>
    """
    key = _SEPARATORS.sub("", (view_type or "").lower())
    if key in _ALIASES:
        return _ALIASES[key]
    if key.startswith("generated"):
        return ViewKind.COMPONENT
    try:
        kind = ViewKind(key)
    except ValueError:
        return ViewKind.UNKNOWN
    return kind
