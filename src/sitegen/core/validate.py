"""Input validation with the Result pattern."""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
from returns.result import Result, Success, Failure

from .json import JSONParseError, extract_json

if TYPE_CHECKING:
    from ..blueprint.models import ProjectInput


# Validation limits
MAX_PROJECT_SIZE = 16 * 1024 * 1024  # 16MB
MAX_JSON_DEPTH = 64


class ValidationError(Exception):
    """Validation failed."""

    pass


@dataclass(frozen=True)
class ValidationResult:
    """Validation error with details (for Result pattern)."""

    message: str
    field: str | None = None
    value: Any | None = None


def validate_json_size(data: str, max_size: int = MAX_PROJECT_SIZE, name: str = "JSON") -> None:
    """
    Validate document size before decoding.

    Args:
        data: JSON string to validate
        max_size: Maximum allowed size in bytes
        name: Name for error messages

    Raises:
        ValidationError: If size exceeds limit
    """
    size = len(data.encode("utf-8"))
    if size > max_size:
        raise ValidationError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")


def validate_json_depth(obj: Any, max_depth: int = MAX_JSON_DEPTH, current_depth: int = 0) -> None:
    """
    Validate JSON nesting depth.

    Args:
        obj: Object to validate
        max_depth: Maximum allowed nesting depth
        current_depth: Current depth (internal)

    Raises:
        ValidationError: If depth exceeds limit
    """
    if current_depth > max_depth:
        raise ValidationError(f"JSON nesting depth {current_depth} exceeds maximum {max_depth}")

    if isinstance(obj, dict):
        for value in obj.values():
            validate_json_depth(value, max_depth, current_depth + 1)
    elif isinstance(obj, list):
        for item in obj:
            validate_json_depth(item, max_depth, current_depth + 1)


def validate_project(content: str | dict[str, Any]) -> Result["ProjectInput", ValidationResult]:
    """
    Validate and parse a project document (Result pattern version).

    Args:
        content: Project JSON string or decoded dict

    Returns:
        Success with the parsed ProjectInput, or Failure describing why the
        document cannot be compiled at all
    """
    from ..blueprint.parser import parse_project

    try:
        doc = content
        if isinstance(content, str):
            validate_json_size(content, name="Project")
            try:
                doc = extract_json(content, repair=True)
            except JSONParseError as e:
                raise ValidationError(f"Invalid JSON: {e}") from e
        validate_json_depth(doc)
        return Success(parse_project(doc))
    except ValidationError as e:
        return Failure(ValidationResult(str(e), field="blueprint"))
