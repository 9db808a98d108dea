"""
Page Compiler
One Next.js route module per page, rows of 12-unit grids.
"""

import posixpath
from itertools import groupby

from ..blueprint.models import Page, PageView
from ..core import get_logger
from .identity import page_route, page_slug
from .jsx import Element, Import, Module, h, js, render_module
from .kinds import ViewKind, classify
from .layout import GroupLayout
from .session import CompilationSession, CompiledModule
from .styles import cell_style

logger = get_logger(__name__)

ROW_CLASSES = "h-full gap-4 grid grid-cols-12 relative"
PAGE_MIN_HEIGHT = "70vh"


def group_rows(placements: list[PageView]) -> list[list[PageView]]:
    """Stable sort by row, then group contiguous placements sharing a row."""
    ordered = sorted(placements, key=lambda p: p.rowpos)
    return [list(group) for _, group in groupby(ordered, key=lambda p: p.rowpos)]


class PageCompiler:
    """Compiles pages into route modules."""

    def __init__(self, session: CompilationSession) -> None:
        self.session = session

    def page_dir(self, page: Page) -> str:
        """Route directory of a page, mirroring the URL path it is served at."""
        return posixpath.join(self.session.settings.app_dir, page_route(page).strip("/")).rstrip("/")

    def compile(self, page: Page) -> CompiledModule:
        """Compile one page. Dangling placements are skipped."""
        page_dir = self.page_dir(page)
        module = Module(
            name="Page",
            body=h("div"),
            declarations=[
                "export const metadata: Metadata = "
                f"{{ title: {js(page.name or page_slug(page))}, description: {js(page.description)} }};"
            ],
        ).with_import(Import("next", names=("Metadata",)))

        rows = [self._row(module, row, page_dir) for row in group_rows(page.views)]
        rows = [row for row in rows if row is not None]

        if rows:
            module.body = h(
                "div",
                {"className": "page", "style": {"minHeight": PAGE_MIN_HEIGHT}},
                h("main", None, *rows),
            )
        logger.debug("page_compiled", page_id=page.id, rows=len(rows), home=page.is_home)

        return CompiledModule(path=posixpath.join(page_dir, "page.tsx"), source=render_module(module))

    def _row(self, module: Module, group: list[PageView], page_dir: str) -> Element | None:
        cells = []
        for placement, spans in GroupLayout(group):
            view = self.session.view(placement.id)
            if view is None:
                logger.warning("page_view_not_found", view_id=placement.id)
                continue
            component = self.session.component(view)
            module.with_import(Import(self.session.view_import(view, page_dir), default=component))

            props = {"isContainer": False} if classify(view.type) is ViewKind.TEXT else {}
            cells.append(
                h(
                    "div",
                    {"className": f"h-full w-full {spans.classes()}", "style": cell_style(view)},
                    h("div", {"className": "w-full"}, h(component, props)),
                )
            )
        if not cells:
            return None
        return h("div", {"className": ROW_CLASSES}, *cells)

    def fallback_root(self) -> CompiledModule:
        """Minimal root route for blueprints without a home page."""
        module = Module(name="Home", body=h("div", None, "Home"))
        return CompiledModule(
            path=posixpath.join(self.session.settings.app_dir, "page.tsx"),
            source=render_module(module),
        )

