"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from ..compiler.site import SiteCompiler
from ..output import ArtifactTarget, DirectoryTarget
from ..schema.base import BaseSchemaCompiler
from ..schema.dialects import Dialect, get_dialect
from ..schema.migrations import MigrationCompiler
from .config import Settings, get_settings


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings

    @singleton
    @provider
    def provide_dialect(self, settings: Settings) -> Dialect:
        """Provide the configured SQL dialect."""
        return get_dialect(settings.database_type)

    @singleton
    @provider
    def provide_base_schema_compiler(self, dialect: Dialect) -> BaseSchemaCompiler:
        return BaseSchemaCompiler(dialect)

    @singleton
    @provider
    def provide_migration_compiler(self, dialect: Dialect) -> MigrationCompiler:
        return MigrationCompiler(dialect)

    @singleton
    @provider
    def provide_site_compiler(self, settings: Settings) -> SiteCompiler:
        return SiteCompiler(settings)

    @singleton
    @provider
    def provide_target(self, settings: Settings) -> ArtifactTarget:
        """Provide the output directory target."""
        return DirectoryTarget(settings.output_dir)


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings)])
