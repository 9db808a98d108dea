"""
sitegen command line

    sitegen compile project.json --out ./site --database postgres
    sitegen migrate project.json --out ./site
    sitegen schema project.json --database mysql
"""

import argparse
import sys
from pathlib import Path

from injector import Injector
from returns.pipeline import is_successful

from .blueprint.models import ProjectInput
from .compiler.site import SiteCompiler, write_site
from .core import Settings, configure_logging, create_container, get_logger, get_settings, validate_project
from .output import ArtifactTarget
from .schema.base import BaseSchemaCompiler
from .schema.dialects import DIALECTS
from .schema.migrations import MigrationCompiler

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sitegen",
        description="Compile a site blueprint into view modules, routes and SQL scripts.",
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines on stderr")

    sub = parser.add_subparsers(dest="command", required=True)

    def project_command(name: str, help_text: str) -> argparse.ArgumentParser:
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("project", help="Project JSON file ('-' reads stdin)")
        cmd.add_argument("--database", choices=sorted(DIALECTS), default=None, help="SQL dialect")
        return cmd

    compile_cmd = project_command("compile", "Write view modules, routes, base schema and a migration")
    compile_cmd.add_argument("--out", default=None, help="Output directory")
    compile_cmd.add_argument("--skip-schema", action="store_true", help="Only write UI modules")

    migrate_cmd = project_command("migrate", "Write a migration for the schema journal only")
    migrate_cmd.add_argument("--out", default=None, help="Output directory")

    project_command("schema", "Print the base schema to stdout")
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Environment settings with command line overrides applied."""
    overrides = {}
    if getattr(args, "out", None):
        overrides["output_dir"] = args.out
    if args.database:
        overrides["database_type"] = "postgres" if args.database == "postgresql" else args.database
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.json_logs:
        overrides["json_logs"] = True
    settings = get_settings()
    return settings.model_copy(update=overrides) if overrides else settings


def read_project(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def run_compile(project: ProjectInput, container: Injector, schema: bool = True) -> None:
    target = container.get(ArtifactTarget)

    site = container.get(SiteCompiler).compile(project.blueprint, project.view_code)
    write_site(site, target)

    if schema:
        settings = container.get(Settings)
        container.get(BaseSchemaCompiler).write(target, project.blueprint.models, settings.migrations_dir)
        run_migrate(project, container)


def run_migrate(project: ProjectInput, container: Injector) -> str | None:
    settings = container.get(Settings)
    return container.get(MigrationCompiler).write(
        container.get(ArtifactTarget), project.blueprint.migrations, migrations_dir=settings.migrations_dir
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(args)
    configure_logging(settings.log_level, settings.json_logs)

    try:
        content = read_project(args.project)
    except OSError as e:
        logger.error("project_unreadable", path=args.project, error=str(e))
        return EXIT_ERROR

    result = validate_project(content)
    if not is_successful(result):
        failure = result.failure()
        logger.error("project_invalid", path=args.project, field=failure.field, error=failure.message)
        return EXIT_INVALID
    project = result.unwrap()

    container = create_container(settings)
    try:
        match args.command:
            case "compile":
                run_compile(project, container, schema=not args.skip_schema)
            case "migrate":
                run_migrate(project, container)
            case "schema":
                sys.stdout.write(container.get(BaseSchemaCompiler).compile(project.blueprint.models))
    except (OSError, ValueError) as e:
        logger.error("command_failed", command=args.command, error=str(e))
        return EXIT_ERROR

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
