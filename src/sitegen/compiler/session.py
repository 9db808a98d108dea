"""
Compilation Session
Per-run state shared by every sub-compiler: the blueprint snapshot, the
identity assignments, collected CSS rules and emitted modules. A new session
is created for every run, so nothing leaks between runs.
"""

import posixpath
from dataclasses import dataclass
from functools import cached_property

from ..blueprint.models import Blueprint, View
from ..core import Settings, get_logger, new_run_id
from .graph import ViewGraph
from .identity import IdentityResolver, component_name, page_route

logger = get_logger(__name__)


@dataclass(frozen=True)
class CompiledModule:
    """One generated source file."""

    path: str
    source: str
    view_id: str | None = None
    identity: str | None = None
    component: str | None = None


class CompilationSession:
    """State of one compilation run."""

    def __init__(
        self,
        blueprint: Blueprint,
        settings: Settings,
        view_code: dict[str, str] | None = None,
    ) -> None:
        self.run_id = new_run_id()
        self.blueprint = blueprint
        self.settings = settings
        self.view_code = dict(view_code or {})
        self.identities = IdentityResolver()
        self.modules: dict[str, CompiledModule] = {}
        self._style_rules: dict[str, str] = {}

        self._views: dict[str, View] = {}
        for view in blueprint.views:
            if view.id in self._views:
                logger.warning("duplicate_view_id", view_id=view.id)
                continue
            self._views[view.id] = view

    def view(self, view_id: str | None) -> View | None:
        """View by id, None for dangling references."""
        if not view_id:
            return None
        return self._views.get(view_id)

    @property
    def views(self) -> list[View]:
        """Distinct views in blueprint order."""
        return list(self._views.values())

    def identity(self, view: View) -> str:
        return self.identities.resolve(view)

    def component(self, view: View) -> str:
        return component_name(self.identity(view))

    def view_path(self, view: View) -> str:
        """Output path of a view module."""
        return posixpath.join(self.settings.views_dir, f"{self.identity(view)}.tsx")

    def view_import(self, view: View, from_dir: str) -> str:
        """Relative import specifier of a view module, seen from ``from_dir``."""
        rel = posixpath.relpath(self.settings.views_dir, from_dir)
        if not rel.startswith("."):
            rel = f"./{rel}"
        return posixpath.join(rel, self.identity(view))

    def components_import(self, name: str) -> str:
        """Import specifier of a pre-built component, seen from the views directory."""
        return posixpath.join(self.settings.components_import, name)

    @cached_property
    def graph(self) -> ViewGraph:
        """Container nesting graph of the blueprint."""
        return ViewGraph(self.views)

    @cached_property
    def page_routes(self) -> dict[str, str]:
        """Page id to URL path."""
        return {page.id: page_route(page) for page in self.blueprint.pages}

    @cached_property
    def page_index(self) -> list[dict[str, str]]:
        """Page id and name pairs forwarded to navigation views."""
        return [{"id": page.id, "name": page.name} for page in self.blueprint.pages]

    def add_style_rule(self, class_name: str, rule: str) -> None:
        """Record a CSS rule for the shared view stylesheet (first wins)."""
        self._style_rules.setdefault(class_name, rule)

    @property
    def style_rules(self) -> list[str]:
        return list(self._style_rules.values())

    def stylesheet(self) -> str:
        """Collected view CSS."""
        if not self._style_rules:
            return ""
        return "\n\n".join(self.style_rules) + "\n"

    def emit(self, module: CompiledModule) -> CompiledModule:
        """Record a generated module; a later module for the same path replaces it."""
        if module.path in self.modules:
            logger.warning("module_replaced", path=module.path)
        self.modules[module.path] = module
        return module

    def reset(self) -> None:
        """Clear run state so the session can compile again."""
        self.identities.reset()
        self.modules.clear()
        self._style_rules.clear()
        self.run_id = new_run_id()
