"""
sitegen
Compiles a site blueprint into TSX view/route modules and SQL schema scripts.
"""

from .blueprint import Blueprint, ProjectInput, parse_blueprint, parse_project
from .compiler import CompiledSite, SiteCompiler, write_site
from .core import Settings, create_container, get_settings
from .output import ArtifactTarget, DirectoryTarget, MemoryTarget
from .schema import (
    BaseSchemaCompiler,
    MigrationCompiler,
    get_dialect,
    write_base_schema,
    write_migration,
)

__version__ = "0.1.0"

__all__ = [
    "ArtifactTarget",
    "BaseSchemaCompiler",
    "Blueprint",
    "CompiledSite",
    "DirectoryTarget",
    "MemoryTarget",
    "MigrationCompiler",
    "ProjectInput",
    "Settings",
    "SiteCompiler",
    "create_container",
    "get_dialect",
    "get_settings",
    "parse_blueprint",
    "parse_project",
    "write_base_schema",
    "write_migration",
    "write_site",
]
