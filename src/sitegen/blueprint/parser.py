"""Blueprint Parser - JSON project documents to validated IR."""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..core import get_logger, ValidationError
from ..core.json import extract_json, JSONParseError
from .models import Blueprint, Menu, Migration, Model, Page, PageView, ProjectInput, View

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


def _strip_nulls(value: Any) -> Any:
    """Drop null members so model defaults apply."""
    if isinstance(value, dict):
        return {k: _strip_nulls(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_strip_nulls(v) for v in value if v is not None]
    return value


class BlueprintParser:
    """Parses project documents into a Blueprint and pre-generated view code.

    Individual malformed entries (a view without an id, a placement with a
    non-numeric row) are dropped with a warning; only a missing blueprint is
    fatal.
    """

    def parse(self, content: str | dict[str, Any]) -> ProjectInput:
        """
        Parse a project document.

        Accepted shapes:
        - ``{"blueprint": {...}, "code": {...}, "name": ...}``
        - ``{"data": {"blueprint": {...}, "code": {...}}}``
        - a bare blueprint ``{"views": [...], "pages": [...], ...}``

        Args:
            content: JSON string or already-decoded document

        Returns:
            ProjectInput with the validated blueprint

        Raises:
            ValidationError: If no blueprint object can be found
        """
        if isinstance(content, str):
            try:
                doc = extract_json(content, repair=True)
            except JSONParseError as e:
                logger.error("json_parse_failed", error=str(e))
                raise ValidationError(f"Invalid JSON: {e}") from e
        else:
            doc = content

        if not isinstance(doc, dict):
            logger.error("invalid_format", type=type(doc).__name__)
            raise ValidationError("Invalid project format: expected JSON object")

        data = doc.get("data") if isinstance(doc.get("data"), dict) else {}
        raw_blueprint = doc.get("blueprint") or data.get("blueprint")
        if raw_blueprint is None and any(k in doc for k in ("views", "pages", "models")):
            raw_blueprint = doc

        if not isinstance(raw_blueprint, dict):
            logger.error("missing_blueprint")
            raise ValidationError("No blueprint found in project data")

        code = doc.get("code") or data.get("code") or {}
        return ProjectInput(
            blueprint=self.parse_blueprint(raw_blueprint),
            view_code=self._expand_view_code(code),
            name=doc.get("name") or data.get("name"),
        )

    def parse_blueprint(self, raw: dict[str, Any]) -> Blueprint:
        """Validate a decoded blueprint object entry by entry."""
        raw = _strip_nulls(raw)
        pages = [self._clean_page(p) for p in self._as_list(raw, "pages")]

        blueprint = Blueprint(
            views=self._validate_each(View, self._as_list(raw, "views"), "view"),
            pages=self._validate_each(Page, [p for p in pages if p is not None], "page"),
            menus=self._validate_each(Menu, self._as_list(raw, "menus"), "menu"),
            models=self._validate_each(Model, self._as_list(raw, "models"), "model"),
            migrations=self._validate_each(Migration, self._as_list(raw, "migrations"), "migration"),
            design=raw.get("design") if isinstance(raw.get("design"), dict) else {},
        )

        logger.info(
            "blueprint_parsed",
            views=len(blueprint.views),
            pages=len(blueprint.pages),
            menus=len(blueprint.menus),
            models=len(blueprint.models),
            migrations=len(blueprint.migrations),
        )
        return blueprint

    def _as_list(self, raw: dict[str, Any], key: str) -> list[Any]:
        value = raw.get(key, [])
        if not isinstance(value, list):
            logger.warning("section_not_list", section=key, type=type(value).__name__)
            return []
        return value

    def _validate_each(self, model: type[M], items: list[Any], kind: str) -> list[M]:
        """Validate entries one at a time, skipping the malformed ones."""
        result = []
        for index, item in enumerate(items):
            try:
                result.append(model.model_validate(item))
            except PydanticValidationError as e:
                logger.warning("entry_skipped", kind=kind, index=index, errors=e.error_count())
        return result

    def _clean_page(self, page: Any) -> dict[str, Any] | None:
        """Drop unusable placements before the page itself is validated."""
        if not isinstance(page, dict):
            logger.warning("entry_skipped", kind="page", reason="not an object")
            return None
        views = page.get("views", [])
        if not isinstance(views, list):
            views = []
        placements = self._validate_each(PageView, views, "placement")
        return {**page, "views": [p.model_dump() for p in placements]}

    def _expand_view_code(self, code: Any) -> dict[str, str]:
        """
        Index pre-generated view sources by view id.

        Supports ``{"views": [{"viewID": ..., "code": ...}]}`` as produced by
        the generation service, and a plain ``{view_id: code}`` mapping.
        """
        if not isinstance(code, dict):
            return {}

        views = code.get("views")
        if isinstance(views, list):
            result = {}
            for entry in views:
                if not isinstance(entry, dict):
                    continue
                view_id = entry.get("viewID") or entry.get("id")
                source = entry.get("code")
                if view_id and isinstance(source, str) and source.strip():
                    result[str(view_id)] = source
            return result

        return {
            str(k): v for k, v in code.items()
            if k != "apis" and isinstance(v, str) and v.strip()
        }


def parse_project(content: str | dict[str, Any]) -> ProjectInput:
    """
    Convenience function to parse a project document

    Args:
        content: Project JSON string or decoded dict

    Returns:
        ProjectInput
    """
    parser = BlueprintParser()
    return parser.parse(content)


def parse_blueprint(raw: dict[str, Any]) -> Blueprint:
    """Validate a decoded blueprint object."""
    return BlueprintParser().parse_blueprint(raw)
