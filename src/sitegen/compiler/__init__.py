"""
UI Compiler
Blueprint views and pages to TSX modules.
"""

from .containers import ContainerCompiler
from .design import theme_css
from .graph import Subview, ViewGraph, parse_subviews
from .identity import IdentityResolver, component_name, page_route, page_slug, safe_slug
from .kinds import ViewKind, classify
from .layout import GroupLayout, Spans, spans
from .menus import MenuCompiler, MenuData, resolve_href
from .pages import PageCompiler
from .session import CompilationSession, CompiledModule
from .site import CompiledSite, SiteCompiler, write_site
from .views import ViewCompiler

__all__ = [
    "CompilationSession",
    "CompiledModule",
    "CompiledSite",
    "ContainerCompiler",
    "GroupLayout",
    "IdentityResolver",
    "MenuCompiler",
    "MenuData",
    "PageCompiler",
    "SiteCompiler",
    "Spans",
    "Subview",
    "ViewCompiler",
    "ViewGraph",
    "ViewKind",
    "classify",
    "component_name",
    "page_route",
    "page_slug",
    "parse_subviews",
    "resolve_href",
    "safe_slug",
    "spans",
    "theme_css",
    "write_site",
]
