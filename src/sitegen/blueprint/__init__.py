"""
Blueprint IR
Validated, read-only description of a site handed to the compiler.
"""

from .models import (
    Blueprint,
    Menu,
    MenuItem,
    Migration,
    MigrationChange,
    Model,
    ModelField,
    Page,
    PageView,
    ProjectInput,
    View,
    is_true,
)
from .parser import BlueprintParser, parse_blueprint, parse_project

__all__ = [
    "Blueprint",
    "BlueprintParser",
    "Menu",
    "MenuItem",
    "Migration",
    "MigrationChange",
    "Model",
    "ModelField",
    "Page",
    "PageView",
    "ProjectInput",
    "View",
    "is_true",
    "parse_blueprint",
    "parse_project",
]
