"""
JSX Module Tree
Element tree for generated TSX modules and the single serializer turning it
into source text. Emission sites build nodes; escaping and formatting live
here only.
"""

from dataclasses import dataclass, field
from typing import Any, Union

from ..core.json import safe_json_dumps

INDENT = "  "

# Text containing these characters is emitted as a string expression
_JSX_TEXT_SPECIALS = set("{}<>&")
# Attribute strings containing these need an expression container
_JSX_ATTR_SPECIALS = set('"&\n\\')


@dataclass(frozen=True)
class Expr:
    """Raw JavaScript expression, emitted verbatim inside ``{}``."""

    code: str


@dataclass(frozen=True)
class Comment:
    """JSX comment ``{/* ... */}``."""

    text: str


@dataclass
class Element:
    """JSX element with props and children."""

    tag: str
    props: dict[str, Any] = field(default_factory=dict)
    children: list["Node"] = field(default_factory=list)


Node = Union[Element, Expr, Comment, str]


def h(tag: str, props: dict[str, Any] | None = None, *children: Node | None) -> Element:
    """Build an element, dropping ``None`` children."""
    return Element(tag, dict(props or {}), [c for c in children if c is not None])


def js(value: Any) -> str:
    """JavaScript literal for a JSON-compatible value (key order preserved)."""
    return safe_json_dumps(value)


@dataclass(frozen=True)
class Import:
    """One import line: default binding, named bindings or side effect only."""

    source: str
    default: str | None = None
    names: tuple[str, ...] = ()

    def render(self) -> str:
        bindings = []
        if self.default:
            bindings.append(self.default)
        if self.names:
            bindings.append("{ " + ", ".join(self.names) + " }")
        if not bindings:
            return f"import '{self.source}';"
        return f"import {', '.join(bindings)} from '{self.source}';"


REACT = Import("react", default="React")


@dataclass
class Module:
    """
    A generated TSX module exporting one default function component.

    Rendered layout: directive, imports, declarations, then
    ``export default function <name>(<params>) { <statements> return (<body>); }``.
    """

    name: str
    body: Node
    imports: list[Import] = field(default_factory=lambda: [REACT])
    directive: str | None = None
    declarations: list[str] = field(default_factory=list)
    params: str = ""
    statements: list[str] = field(default_factory=list)

    def with_import(self, *imports: Import) -> "Module":
        """Append imports not already present; returns the module."""
        for imp in imports:
            if imp not in self.imports:
                self.imports.append(imp)
        return self


def render_props(props: dict[str, Any]) -> str:
    """Serialize props to ``key=value`` pairs separated by spaces."""
    parts = []
    for key, value in props.items():
        if value is None:
            continue
        if value is True:
            parts.append(key)
        elif value is False:
            parts.append(f"{key}={{false}}")
        elif isinstance(value, Expr):
            parts.append(f"{key}={{{value.code}}}")
        elif isinstance(value, str):
            if _JSX_ATTR_SPECIALS.intersection(value):
                parts.append(f"{key}={{{js(value)}}}")
            else:
                parts.append(f'{key}="{value}"')
        else:
            parts.append(f"{key}={{{js(value)}}}")
    return " ".join(parts)


def render_text(text: str) -> str:
    """Serialize a text child, quoting it when JSX would misread it."""
    if _JSX_TEXT_SPECIALS.intersection(text) or text != text.strip() or "\n" in text:
        return f"{{{js(text)}}}"
    return text


def _render_inline(node: Node) -> str:
    if isinstance(node, Expr):
        return f"{{{node.code}}}"
    if isinstance(node, Comment):
        return "{/* " + node.text.replace("*/", "* /") + " */}"
    if isinstance(node, str):
        return render_text(node)
    return render_node(node, 0)


def _is_inline(element: Element) -> bool:
    if not element.children:
        return True
    return len(element.children) == 1 and not isinstance(element.children[0], Element)


def render_node(node: Node, depth: int = 0) -> str:
    """Serialize a node at the given indentation depth (first line unindented)."""
    if not isinstance(node, Element):
        return _render_inline(node)

    pad = INDENT * depth
    props = render_props(node.props)
    opening = f"<{node.tag} {props}" if props else f"<{node.tag}"

    if not node.children:
        return f"{opening} />"
    if _is_inline(node):
        return f"{opening}>{_render_inline(node.children[0])}</{node.tag}>"

    lines = [f"{opening}>"]
    inner = INDENT * (depth + 1)
    for child in node.children:
        lines.append(inner + render_node(child, depth + 1))
    lines.append(f"{pad}</{node.tag}>")
    return "\n".join(lines)


def render_module(module: Module) -> str:
    """Serialize a module to TSX source."""
    out: list[str] = []
    if module.directive:
        out.append(f"'{module.directive}';")
        out.append("")

    seen: set[str] = set()
    for imp in module.imports:
        line = imp.render()
        if line not in seen:
            seen.add(line)
            out.append(line)

    if module.declarations:
        out.append("")
        for declaration in module.declarations:
            out.append(declaration)

    out.append("")
    out.append(f"export default function {module.name}({module.params}) {{")
    for statement in module.statements:
        for line in statement.splitlines():
            out.append(f"{INDENT}{line}" if line else "")
    out.append(f"{INDENT}return (")
    out.append(INDENT * 2 + render_node(module.body, 2))
    out.append(f"{INDENT});")
    out.append("}")
    return "\n".join(out) + "\n"
