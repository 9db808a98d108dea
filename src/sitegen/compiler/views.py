"""
View Compiler
One self-contained TSX module per view. Pre-generated sources win; every
other view is synthesized from its kind.
"""

from typing import Any, assert_never

from ..blueprint.models import View
from ..core import get_logger, JSONParseError, parse_config
from .containers import ContainerCompiler
from .icons import ICON_SVGS, align_class, icon_name
from .jsx import INDENT, Comment, Expr, Import, Module, h, js, render_module, render_node
from .kinds import ViewKind, classify
from .menus import MenuCompiler
from .session import CompilationSession, CompiledModule

logger = get_logger(__name__)

# Kind -> (component, module) of the pre-built view it wraps
INTERNAL_VIEWS: dict[ViewKind, tuple[str, str]] = {
    ViewKind.LOGIN: ("Login", "login"),
    ViewKind.LOGIN_BUTTON: ("LoginSection", "headerlogin"),
    ViewKind.LOGIN_CALLBACK: ("LoginCallback", "logincallback"),
    ViewKind.PROFILE: ("Profile", "profile"),
    ViewKind.LOGGED_IN_MENU: ("LoggedInMenu", "loggedinmenu"),
    ViewKind.ADMIN_MENU: ("AdminMenu", "adminmenu"),
    ViewKind.USER_ADMIN: ("Admin", "admin"),
    ViewKind.PRICING: ("Upgrade", "upgrade"),
}

# Kind -> (component, module, payload type) of configurable widgets
WIDGETS: dict[ViewKind, tuple[str, str, type]] = {
    ViewKind.FORM: ("RForm", "form", dict),
    ViewKind.TESTIMONIAL: ("RTestimonial", "testimonial", dict),
    ViewKind.PHOTO_GALLERY: ("RPhotoGallery", "photogallery", dict),
    ViewKind.VIDEO_GALLERY: ("RVideoGallery", "videogallery", dict),
    ViewKind.SLIDESHOW: ("Slideshow", "slideshow", list),
    ViewKind.SOCIAL_BAR: ("RSocialBar", "socialbar", dict),
    ViewKind.CTA: ("RCTA", "cta", dict),
}

IFRAME_ALLOW = (
    "accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; "
    "picture-in-picture; web-share"
)

LOGO_WIDTH = "240"
LOGO_HEIGHT = "80"


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _box_style(view: View) -> dict[str, str]:
    style = {"padding": "1.5rem", "borderRadius": "0.5rem"}
    if view.background_color:
        style["backgroundColor"] = view.background_color
    return style


class ViewCompiler:
    """Compiles single views into modules."""

    def __init__(self, session: CompilationSession) -> None:
        self.session = session
        self.menus = MenuCompiler(session)
        self.containers = ContainerCompiler(session)

    def compile(self, view: View) -> CompiledModule:
        """
        Compile a view.

        Never raises for malformed payloads: they are logged and replaced by
        empty configuration.
        """
        kind = classify(view.type)
        identity = self.session.identity(view)
        component = self.session.component(view)
        path = self.session.view_path(view)

        pregenerated = self.session.view_code.get(view.id)
        if pregenerated and kind is not ViewKind.CONTAINER:
            logger.debug("view_pregenerated", view_id=view.id, identity=identity)
            source = pregenerated
        else:
            source = render_module(self.build(view, kind, component))

        return CompiledModule(
            path=path,
            source=source,
            view_id=view.id,
            identity=identity,
            component=component,
        )

    def build(self, view: View, kind: ViewKind, component: str) -> Module:
        """Synthesize the module tree for a view of a given kind."""
        match kind:
            case ViewKind.TEXT:
                return self._text(view, component)
            case ViewKind.IMAGE:
                return self._image(view, component)
            case ViewKind.LOGO:
                return self._logo(view, component)
            case ViewKind.MENU:
                return self.menus.compile_view(view, component)
            case ViewKind.CONTAINER:
                return self.containers.build(view, component)
            case ViewKind.VIDEO:
                return self._video(view, component)
            case ViewKind.ICON_BAR:
                return self._icon_bar(view, component)
            case ViewKind.INTEGRATION:
                return self._integration(view, component)
            case (
                ViewKind.LOGIN
                | ViewKind.LOGIN_BUTTON
                | ViewKind.LOGIN_CALLBACK
                | ViewKind.PROFILE
                | ViewKind.LOGGED_IN_MENU
                | ViewKind.ADMIN_MENU
                | ViewKind.USER_ADMIN
                | ViewKind.PRICING
            ):
                return self._internal(kind, component)
            case (
                ViewKind.FORM
                | ViewKind.TESTIMONIAL
                | ViewKind.PHOTO_GALLERY
                | ViewKind.VIDEO_GALLERY
                | ViewKind.SLIDESHOW
                | ViewKind.SOCIAL_BAR
                | ViewKind.CTA
            ):
                return self._widget(view, kind, component)
            case ViewKind.MAP:
                return self._map(view, component)
            case ViewKind.COMPONENT:
                return self._placeholder(view, component, view.prompt or "Component view")
            case ViewKind.UNKNOWN:
                logger.info("view_type_unknown", view_id=view.id, type=view.type)
                return self._placeholder(view, component, view.prompt or f"{view.type} view")
            case _:
                assert_never(kind)

    def _text(self, view: View, component: str) -> Module:
        markup = view.custom_view_description
        if markup is not None and not isinstance(markup, str):
            logger.warning("text_markup_invalid", view_id=view.id, type=type(markup).__name__)
            markup = ""

        return Module(
            name=component,
            params=f"{{ isContainer = false }}: {component}Props",
            declarations=[
                f"interface {component}Props {{\n  isContainer?: boolean;\n}}",
                "",
                f"const baseStyle = {js(_box_style(view))};",
            ],
            body=h(
                "div",
                {
                    "className": "text-content opacity-80",
                    "style": Expr("{ ...baseStyle, margin: isContainer ? 0 : '5% 10%' }"),
                },
                h("div", {"className": "rtext-content", "dangerouslySetInnerHTML": {"__html": markup or ""}}),
            ),
        )

    def _image(self, view: View, component: str) -> Module:
        src = _text(view.custom_view_description) or view.background_image or ""
        image = None
        if src:
            image = h("img", {"src": src, "alt": view.name or "image", "style": {"maxWidth": "100%", "height": "auto"}})
        else:
            logger.debug("image_source_missing", view_id=view.id)
        return Module(
            name=component,
            body=h("div", {"style": {"display": "grid", "placeItems": "center"}}, image),
        )

    def _logo(self, view: View, component: str) -> Module:
        configured = view.background_image or _text(view.custom_view_description)
        file_name = configured[1:] if configured.startswith("/logo.") else "logo.png"
        img = h("img", {"src": f"/{file_name}", "alt": "Logo", "width": LOGO_WIDTH, "height": LOGO_HEIGHT})
        return Module(
            name=component,
            body=h("div", {"className": "logo"}, h("a", {"href": "/"}, img)),
        )

    def _video(self, view: View, component: str) -> Module:
        iframe = h(
            "iframe",
            {
                "src": _text(view.custom_view_description),
                "title": view.name or "YouTube video",
                "style": {"position": "absolute", "top": 0, "left": 0, "width": "100%", "height": "100%"},
                "frameBorder": 0,
                "allow": IFRAME_ALLOW,
                "allowFullScreen": True,
            },
        )
        return Module(
            name=component,
            body=h("div", {"style": {"position": "relative", "paddingBottom": "56.25%", "height": 0}}, iframe),
        )

    def _icon_bar(self, view: View, component: str) -> Module:
        try:
            entries = parse_config(view.custom_view_description, list)
        except JSONParseError as e:
            logger.warning("icon_bar_config_invalid", view_id=view.id, error=str(e))
            entries = []

        items = [
            {
                "icon": icon_name(entry.get("icon")),
                "text": str(entry.get("text") or ""),
                "pageId": str(entry.get("pageId") or ""),
            }
            for entry in entries
            if isinstance(entry, dict)
        ]

        if not items:
            return Module(
                name=component,
                body=h(
                    "div",
                    {"className": "p-8 text-center text-gray-500"},
                    h("p", {"className": "text-sm"}, "No icons configured"),
                ),
            )

        used = {item["icon"] for item in items}
        button = h(
            "button",
            {
                "key": Expr("index"),
                "type": "button",
                "title": Expr("item.text"),
                "aria-label": Expr("item.text"),
                "onClick": Expr("() => handleClick(item.pageId)"),
                "disabled": Expr("!item.pageId"),
                "className": "icon-bar-button flex-shrink-0 flex items-center justify-center rounded-lg "
                             "bg-transparent disabled:opacity-50 disabled:cursor-not-allowed",
                "style": {"height": "40px", "width": "40px"},
            },
            h(
                "div",
                {
                    "className": "w-full h-full flex items-center justify-center "
                                 "[&>svg]:w-6 [&>svg]:h-6 [&>svg]:stroke-gray-700",
                    "dangerouslySetInnerHTML": Expr("{ __html: ICON_SVGS[item.icon] }"),
                },
            ),
        )
        row = h(
            "div",
            {"className": f"flex gap-4 p-2 {align_class(view.align)}"},
            Expr(f"items.map((item, index) => (\n{INDENT * 4}{render_node(button, 4)}\n{INDENT * 3}))"),
        )

        return Module(
            name=component,
            directive="use client",
            body=row,
            declarations=[
                f"const ICON_SVGS: Record<string, string> = {js({k: v for k, v in ICON_SVGS.items() if k in used})};",
                f"const PAGE_ROUTES: Record<string, string> = {js(self.session.page_routes)};",
                f"const items = {js(items)};",
            ],
            statements=[
                "const router = useRouter();",
                "const handleClick = (pageId: string) => {\n"
                "  const route = pageId ? PAGE_ROUTES[pageId] : undefined;\n"
                "  if (!route) return;\n"
                "  router.push(route);\n"
                "};",
            ],
        ).with_import(Import("next/navigation", names=("useRouter",)))

    def _internal(self, kind: ViewKind, component: str) -> Module:
        name, module = INTERNAL_VIEWS[kind]
        return Module(name=component, body=h(name)).with_import(
            Import(self.session.components_import(module), default=name)
        )

    def _config_text(self, view: View, kind: ViewKind, expected: type) -> str:
        """Widget payload as JSON text; raw strings are forwarded unmodified."""
        raw = view.custom_view_description
        try:
            decoded = parse_config(raw, expected)
        except JSONParseError as e:
            logger.warning("widget_config_invalid", view_id=view.id, kind=kind.value, error=str(e))
            return "[]" if expected is list else "{}"
        if isinstance(raw, str) and raw.strip():
            return raw
        return js(decoded)

    def _widget(self, view: View, kind: ViewKind, component: str) -> Module:
        name, module, expected = WIDGETS[kind]
        config = self._config_text(view, kind, expected)
        declarations: list[str] = []
        statements: list[str] = []
        directive = None
        imports = [Import(self.session.components_import(module), default=name)]

        match kind:
            case ViewKind.FORM | ViewKind.TESTIMONIAL:
                declarations.append(f"const design = {js(self.session.blueprint.design)};")
                props = {"name": view.name, "custom_view_description": config, "design": Expr("design as any")}
            case ViewKind.PHOTO_GALLERY | ViewKind.VIDEO_GALLERY:
                props = {"config": config, "name": view.name}
            case ViewKind.SLIDESHOW:
                props = {"imageIds": config, "projectId": "", "textColor": view.text_color}
            case ViewKind.SOCIAL_BAR:
                view_data = {"id": view.id, "name": view.name, "type": view.type, "custom_view_description": config}
                declarations.append(f"const viewData = {js(view_data)};")
                props = {
                    "viewData": Expr("viewData as any"),
                    "views": Expr("[]"),
                    "projectId": "",
                    "textColor": view.text_color or "",
                    "accentColor": view.card_title_color or "",
                    "backgroundColor": view.background_color or "",
                }
            case _:
                directive = "use client"
                imports.append(Import("next/navigation", names=("useRouter",)))
                declarations.append(f"const PAGE_ROUTES: Record<string, string> = {js(self.session.page_routes)};")
                statements.append("const router = useRouter();")
                props = {
                    "custom_view_description": config,
                    "onNavigate": Expr("(pageId: string) => router.push(PAGE_ROUTES[pageId] ?? '/')"),
                }

        return Module(
            name=component,
            directive=directive,
            body=h(name, props),
            declarations=declarations,
            statements=statements,
        ).with_import(*imports)

    def _map(self, view: View, component: str) -> Module:
        return Module(
            name=component,
            body=h("Map", {"location": _text(view.custom_view_description), "name": view.name}),
        ).with_import(Import(self.session.components_import("map"), default="Map"))

    def _integration(self, view: View, component: str) -> Module:
        prompt = view.prompt or "Integration view"
        return Module(name=component, body=h("span", None, Comment(f"Integration Placeholder: {prompt}")))

    def _placeholder(self, view: View, component: str, prompt: str) -> Module:
        return Module(
            name=component,
            body=h(
                "div",
                {"className": "text-content opacity-80", "style": _box_style(view)},
                h("div", {"className": "text-gray-600"}, h("strong", None, "Prompt:"), f" {prompt}"),
            ),
        )
