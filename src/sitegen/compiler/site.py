"""
Site Compiler
Orchestrates one compilation run: identities, views, containers, pages, the
design theme and the shared view stylesheet.
"""

from dataclasses import dataclass, field
from typing import Any

from ..blueprint.models import Blueprint
from ..core import LogContext, RunID, Settings, capture_diagnostics, get_logger, get_settings
from ..output import ArtifactTarget
from .design import theme_css
from .kinds import ViewKind, classify
from .pages import PageCompiler
from .session import CompilationSession, CompiledModule
from .views import ViewCompiler

logger = get_logger(__name__)


@dataclass
class CompiledSite:
    """Every UI artifact of one run."""

    run_id: RunID
    modules: list[CompiledModule] = field(default_factory=list)
    identities: dict[str, str] = field(default_factory=dict)
    stylesheet_path: str | None = None
    stylesheet: str = ""
    diagnostics: list[dict[str, Any]] = field(default_factory=list)

    def module(self, path: str) -> CompiledModule | None:
        return next((m for m in self.modules if m.path == path), None)

    @property
    def paths(self) -> list[str]:
        return [m.path for m in self.modules]


class SiteCompiler:
    """Compiles a blueprint into view and route modules."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def compile(self, blueprint: Blueprint, view_code: dict[str, str] | None = None) -> CompiledSite:
        """
        Compile a blueprint.

        Identities are assigned for every view in blueprint order before any
        module is generated, so routes and containers import stable names.

        Args:
            blueprint: Validated blueprint snapshot
            view_code: Optional view id to pre-generated module source

        Returns:
            CompiledSite with views, containers, pages, stylesheets and the
            warnings logged during the run
        """
        session = CompilationSession(blueprint, self.settings, view_code)

        with LogContext(run_id=session.run_id), capture_diagnostics() as diagnostics:
            logger.info("compile_started", views=len(session.views), pages=len(blueprint.pages))

            for view in session.views:
                session.identity(view)

            views = ViewCompiler(session)
            containers = [v for v in session.views if classify(v.type) is ViewKind.CONTAINER]
            leaves = [v for v in session.views if classify(v.type) is not ViewKind.CONTAINER]

            for view in leaves:
                session.emit(views.compile(view))
            for view in containers:
                session.emit(views.containers.compile(view))

            pages = PageCompiler(session)
            for page in blueprint.pages:
                session.emit(pages.compile(page))
            if not any(page.is_home for page in blueprint.pages):
                logger.info("home_page_missing")
                session.emit(pages.fallback_root())

            session.emit(CompiledModule(path=self.settings.theme_path, source=theme_css(blueprint.design)))

            site = CompiledSite(
                run_id=session.run_id,
                modules=list(session.modules.values()),
                identities={v.id: session.identity(v) for v in session.views},
                stylesheet_path=self.settings.styles_path if session.style_rules else None,
                stylesheet=session.stylesheet(),
                diagnostics=diagnostics,
            )
            logger.info(
                "compile_finished",
                modules=len(site.modules),
                containers=len(containers),
                style_rules=len(session.style_rules),
                diagnostics=len(diagnostics),
            )
            return site


def write_site(site: CompiledSite, target: ArtifactTarget) -> list[str]:
    """
    Write every module of a compiled site.

    Returns:
        Paths written, in write order
    """
    written = []
    for module in site.modules:
        target.write(module.path, module.source)
        written.append(module.path)
    if site.stylesheet_path:
        target.write(site.stylesheet_path, site.stylesheet)
        written.append(site.stylesheet_path)
    logger.info("site_written", run_id=site.run_id, files=len(written))
    return written
