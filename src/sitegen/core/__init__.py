"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .validate import (
    ValidationError,
    ValidationResult,
    validate_json_size,
    validate_json_depth,
    validate_project,
)
from .logging_config import capture_diagnostics, configure_logging, get_logger, LogContext
from .json import (
    extract_json,
    parse_config,
    safe_json_dumps,
    JSONParseError,
)
from .hash import hash_string
from .id import RunID, new_run_id


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Validation
    "ValidationError",
    "ValidationResult",
    "validate_json_size",
    "validate_json_depth",
    "validate_project",
    # Logging
    "configure_logging",
    "capture_diagnostics",
    "get_logger",
    "LogContext",
    # JSON
    "extract_json",
    "parse_config",
    "safe_json_dumps",
    "JSONParseError",
    # DI
    "create_container",
    # Hashing
    "hash_string",
    # IDs
    "RunID",
    "new_run_id",
]
