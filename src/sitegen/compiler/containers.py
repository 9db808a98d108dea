"""
Container Compiler
Composition modules arranging subviews in a 12-unit grid.
"""

from ..blueprint.models import View
from ..core import get_logger
from .graph import Subview, parse_subviews
from .jsx import Element, Import, Module, h, render_module
from .kinds import ViewKind, classify
from .layout import GroupLayout, Spans
from .session import CompilationSession, CompiledModule
from .styles import cell_style, flex_wrapper_style, title_color_class

logger = get_logger(__name__)

DIAGNOSTIC_CLASSES = "border border-dashed border-red-400 p-2 text-sm text-red-600"


class ContainerCompiler:
    """Compiles container views."""

    def __init__(self, session: CompilationSession) -> None:
        self.session = session

    def compile(self, view: View) -> CompiledModule:
        """Compile a container view into its module."""
        component = self.session.component(view)
        return CompiledModule(
            path=self.session.view_path(view),
            source=render_module(self.build(view, component)),
            view_id=view.id,
            identity=self.session.identity(view),
            component=component,
        )

    def build(self, view: View, component: str) -> Module:
        """
        Module tree of a container.

        Missing subviews are skipped. A subview that would nest the container
        inside itself is replaced by a visible diagnostic cell. Placement
        order is preserved; the worst case is an empty grid.
        """
        module = Module(name=component, body=h("div"))
        layout = GroupLayout(parse_subviews(view.custom_view_description))
        cells: list[Element] = []

        for subview, spans in layout:
            target = self.session.view(subview.id)
            if target is None:
                logger.warning("subview_not_found", container_id=view.id, subview_id=subview.id)
                continue

            if self._closes_cycle(view, target):
                logger.warning("subview_cycle", container_id=view.id, subview_id=target.id)
                cells.append(self._diagnostic_cell(subview, spans))
                continue

            sub_component = self.session.component(target)
            module.with_import(
                Import(self.session.view_import(target, self.session.settings.views_dir), default=sub_component)
            )
            cells.append(self._cell(target, sub_component, spans))

        module.body = h("div", {"className": self._grid_classes(view), "style": cell_style(view, aligned=True)}, *cells)
        return module

    def _closes_cycle(self, container: View, target: View) -> bool:
        if self.session.identity(target) == self.session.identity(container):
            return True
        if self.session.settings.cycle_check == "graph":
            return self.session.graph.closes_cycle(container.id, target.id)
        return False

    def _grid_classes(self, view: View) -> str:
        classes = ["h-full", "gap-4", "grid"]
        if view.flowVertical:
            classes += ["grid-cols-12", "grid-flow-row"]
        else:
            classes.append("grid-flow-col")
        classes.append("relative")
        title = title_color_class(view)
        if title:
            classes.append(title[0])
            self.session.add_style_rule(*title)
        return " ".join(classes)

    def _cell(self, target: View, sub_component: str, spans: Spans) -> Element:
        classes = ["h-full", "w-full", spans.classes()]
        title = title_color_class(target)
        if title:
            classes.append(title[0])
            self.session.add_style_rule(*title)

        props = {"isContainer": True} if classify(target.type) is ViewKind.TEXT else {}
        return h(
            "div",
            {"className": " ".join(classes), "style": cell_style(target, aligned=True)},
            h("div", {"className": "w-full", "style": flex_wrapper_style(target)}, h(sub_component, props)),
        )

    def _diagnostic_cell(self, subview: Subview, spans: Spans) -> Element:
        return h(
            "div",
            {"className": f"h-full w-full {spans.classes()} {DIAGNOSTIC_CLASSES}", "data-cycle": subview.id},
            f"Circular reference: view {subview.id} contains itself",
        )
