"""
Menu Compiler
Static navigation data for the generic ``WrappedMenu`` view, with every item's
link resolved ahead of time.
"""

import re
from dataclasses import dataclass, field
from typing import Any

from ..blueprint.models import Menu, MenuItem, View
from ..core import get_logger
from .jsx import Element, Expr, Import, Module, h, js

logger = get_logger(__name__)

SAFE_SCHEMES = ("http://", "https://", "mailto:", "tel:")

# Page references at least this long are ids rather than names
UUID_LENGTH = 36

_NON_WORD = re.compile(r"[^a-zA-Z0-9\s]")
_SPACES = re.compile(r"\s+")


def is_safe_external(url: str | None) -> bool:
    """External links pass through only for web, mail and phone schemes."""
    return bool(url) and url.strip().lower().startswith(SAFE_SCHEMES)


def _slug_route(text: str) -> str:
    slug = _SPACES.sub("_", _NON_WORD.sub("", text).strip()).lower()
    if not slug:
        return "#"
    if slug in ("home", "index"):
        return "/"
    return f"/{slug}"


def resolve_href(item: MenuItem, page_routes: dict[str, str]) -> str:
    """
    Link target of a menu item.

    - external: the URL when its scheme is safe, otherwise ``#``
    - file: ``/library/files/<file name>``
    - page: the page's route; unknown pages fall back to the bare reference
      when it is not an id, else to the item's name
    """
    if item.link_type == "external":
        if is_safe_external(item.external_url):
            return item.external_url.strip()
        if item.external_url:
            logger.warning("unsafe_menu_link", item_id=item.id, url=item.external_url)
        return "#"

    if item.link_type == "file":
        return f"/library/files/{item.file_name}" if item.file_name else "#"

    if not item.page:
        return "#"
    if item.page in page_routes:
        return page_routes[item.page]

    logger.debug("menu_page_unresolved", item_id=item.id, page=item.page)
    if len(item.page) < UUID_LENGTH:
        return _slug_route(item.page)
    return _slug_route(item.name)


@dataclass
class MenuData:
    """Menu payload plus the page index forwarded to the menu view."""

    menu: dict[str, Any] = field(default_factory=dict)
    pages: list[dict[str, str]] = field(default_factory=list)


class MenuCompiler:
    """Builds menu data and menu view modules."""

    def __init__(self, session) -> None:
        self.session = session

    def compile(self, menu_id: str | None) -> MenuData:
        """Menu data for a menu id; an unknown id yields an empty menu."""
        menu = self.session.blueprint.menu(menu_id)
        if menu is None:
            if menu_id:
                logger.warning("menu_not_found", menu_id=menu_id)
            return MenuData(menu={}, pages=self.session.page_index)
        return MenuData(menu=self._menu_payload(menu), pages=self.session.page_index)

    def _menu_payload(self, menu: Menu) -> dict[str, Any]:
        routes = self.session.page_routes
        payload = menu.model_dump(exclude_none=True)
        payload["items"] = [
            {**item.model_dump(exclude_none=True), "href": resolve_href(item, routes)}
            for item in menu.items
        ]
        return payload

    def compile_view(self, view: View, component: str) -> Module:
        """Menu view module wrapping ``WrappedMenu`` around static data."""
        menu_id = view.custom_view_description if isinstance(view.custom_view_description, str) else None
        data = self.compile(menu_id)

        body: Element = h(
            "WrappedMenu",
            {
                "menu": Expr("menuData as any"),
                "pages": Expr("pagesData as any"),
                "collapseWidth": self.session.settings.menu_collapse_width,
            },
        )
        return Module(
            name=component,
            body=body,
            declarations=[
                f"const menuData = {js(data.menu)};",
                f"const pagesData = {js(data.pages)};",
            ],
        ).with_import(Import(self.session.components_import("wrapped_menu"), default="WrappedMenu"))
