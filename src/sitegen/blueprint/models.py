"""Blueprint IR Models."""

from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


def is_true(value: Any) -> bool:
    """Read a blueprint flag ("true"/"True"/True) as a boolean."""
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() == "true"


class BlueprintModel(BaseModel):
    """Base for IR nodes: tolerant of upstream fields the compiler ignores."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


def _flag_string(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return "" if value is None else str(value)


class PageView(BlueprintModel):
    """Placement of a view in a page row or container cell."""

    id: str = Field(..., description="Referenced view id")
    rowpos: int = Field(default=0)
    colpos: int | None = Field(default=None, description="Large breakpoint span")
    colposmd: int | None = Field(default=None, description="Medium breakpoint span")
    colpossm: int | None = Field(default=None, description="Small breakpoint span")

    @field_validator("rowpos", mode="before")
    @classmethod
    def default_row(cls, v: Any) -> Any:
        return 0 if v in (None, "") else v

    @field_validator("colpos", "colposmd", "colpossm", mode="before")
    @classmethod
    def blank_span(cls, v: Any) -> Any:
        return None if v in ("", 0, "0") else v


class View(BlueprintModel):
    """One visual section of a page."""

    id: str
    name: str = ""
    type: str = ""
    prompt: str | None = None
    custom_view_description: Any = None

    background_color: str | None = None
    background_image: str | None = None
    text_color: str | None = None
    card_title_color: str | None = None

    paddingLeft: float | None = None
    paddingRight: float | None = None
    paddingTop: float | None = None
    paddingBottom: float | None = None
    marginLeft: float | None = None
    marginRight: float | None = None
    marginTop: float | None = None
    marginBottom: float | None = None
    minHeight: float | None = None
    minWidth: float | None = None
    maxHeight: float | None = None
    maxWidth: float | None = None

    flowVertical: bool | None = None
    align: str | None = None
    verticalAlign: str | None = None

    @field_validator("name", "type", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class Page(BlueprintModel):
    """One routed page of the site."""

    id: str
    name: str = ""
    description: str = ""
    is_home: bool = False
    views: list[PageView] = Field(default_factory=list)

    @field_validator("is_home", mode="before")
    @classmethod
    def home_flag(cls, v: Any) -> bool:
        return is_true(v)

    @field_validator("name", "description", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class MenuItem(BlueprintModel):
    """Menu entry linking to a page, an external URL or a library file."""

    id: str = ""
    name: str = ""
    page: str | None = None
    link_type: str | None = None
    external_url: str | None = None
    file_id: str | None = None
    file_name: str | None = None
    iconType: str | None = None
    hiddenOnDesktop: bool | None = None


class Menu(BlueprintModel):
    """Navigation menu."""

    id: str
    name: str = ""
    font: str | None = None
    fontSize: str | None = None
    direction: str | None = None
    align: str | None = None
    useIcons: bool | None = None
    items: list[MenuItem] = Field(default_factory=list)


class ModelField(BlueprintModel):
    """Column definition with abstract datatype."""

    name: str = ""
    datatype: str = ""
    datatypesize: str = ""
    required: str = ""
    key: str = ""

    @field_validator("datatypesize", "required", "key", "datatype", mode="before")
    @classmethod
    def as_string(cls, v: Any) -> str:
        return _flag_string(v)

    @property
    def is_required(self) -> bool:
        return is_true(self.required)

    @property
    def is_primary(self) -> bool:
        return self.key.strip().lower() == "primary"


class Model(BlueprintModel):
    """Relational data model (one table)."""

    id: str = ""
    name: str = ""
    data_is_user_specific: str = "false"
    fields: list[ModelField] = Field(default_factory=list)

    @field_validator("data_is_user_specific", mode="before")
    @classmethod
    def as_string(cls, v: Any) -> str:
        return _flag_string(v)

    @property
    def is_user_specific(self) -> bool:
        return is_true(self.data_is_user_specific)

    @property
    def table_name(self) -> str:
        return (self.name or self.id or "table").lower()


class MigrationChange(BlueprintModel):
    """One field/model/constraint level change inside a journal entry."""

    type: str = "field"
    operation: str = ""
    field: str | None = None
    oldValue: Any = None
    newValue: Any = None
    details: str | None = None


class Migration(BlueprintModel):
    """Append-only schema journal entry."""

    id: str = ""
    timestamp: str = ""
    modelId: str = ""
    modelName: str = ""
    action: str = ""
    changes: list[MigrationChange] = Field(default_factory=list)

    @property
    def table_name(self) -> str:
        return (self.modelName or self.modelId or "").lower()


class Blueprint(BlueprintModel):
    """Complete site description handed to the compiler."""

    views: list[View] = Field(default_factory=list)
    pages: list[Page] = Field(default_factory=list)
    menus: list[Menu] = Field(default_factory=list)
    models: list[Model] = Field(default_factory=list)
    migrations: list[Migration] = Field(default_factory=list)
    design: dict[str, Any] = Field(default_factory=dict)

    def view(self, view_id: str) -> View | None:
        """Look up a view by id."""
        return next((v for v in self.views if v.id == view_id), None)

    def menu(self, menu_id: str | None) -> Menu | None:
        """Look up a menu by id."""
        return next((m for m in self.menus if m.id == menu_id), None)


class ProjectInput(BlueprintModel):
    """Blueprint plus the optional pre-generated view sources."""

    blueprint: Blueprint
    view_code: dict[str, str] = Field(default_factory=dict)
    name: str | None = None
