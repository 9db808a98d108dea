"""Tests for the JSX tree serializer."""

import pytest

from sitegen.compiler.jsx import (
    Comment,
    Expr,
    Import,
    Module,
    h,
    render_module,
    render_node,
    render_props,
    render_text,
)


@pytest.mark.unit
def test_render_props():
    """Test prop serialization rules."""
    props = {"className": "a b", "hidden": True, "skip": None, "count": 3, "open": False}
    assert render_props(props) == 'className="a b" hidden count={3} open={false}'


@pytest.mark.unit
def test_render_props_expressions_and_objects():
    props = {"onClick": Expr("() => go()"), "style": {"display": "grid", "gap": 4}}
    assert render_props(props) == 'onClick={() => go()} style={{"display":"grid","gap":4}}'


@pytest.mark.unit
def test_render_props_quotes_unsafe_strings():
    """Strings JSX attributes cannot hold literally become expressions."""
    assert render_props({"title": 'say "hi"'}) == 'title={"say \\"hi\\""}'
    assert render_props({"alt": "a & b"}) == 'alt={"a & b"}'


@pytest.mark.unit
def test_render_text():
    assert render_text("plain words") == "plain words"
    assert render_text("a < b") == '{"a < b"}'
    assert render_text(" padded") == '{" padded"}'
    assert render_text("{x}") == '{"{x}"}'


@pytest.mark.unit
def test_render_node_shapes():
    """Childless elements self-close, single text children stay inline."""
    assert render_node(h("div")) == "<div />"
    assert render_node(h("p", None, "hi")) == "<p>hi</p>"
    assert render_node(h("span", None, Expr("value"))) == "<span>{value}</span>"
    assert render_node(h("span", None, Comment("a */ b"))) == "<span>{/* a * / b */}</span>"


@pytest.mark.unit
def test_render_node_nested():
    tree = h("div", {"className": "x"}, h("span"), "text", None)
    assert render_node(tree) == '<div className="x">\n  <span />\n  text\n</div>'


@pytest.mark.unit
def test_render_node_indentation():
    tree = h("main", None, h("div", None, h("a"), h("b")))
    assert render_node(tree, 1) == "<main>\n    <div>\n      <a />\n      <b />\n    </div>\n  </main>"


@pytest.mark.unit
def test_import_render():
    assert Import("react", default="React").render() == "import React from 'react';"
    assert Import("next", names=("Metadata",)).render() == "import { Metadata } from 'next';"
    assert Import("./a", default="A", names=("b", "c")).render() == "import A, { b, c } from './a';"
    assert Import("./views.css").render() == "import './views.css';"


@pytest.mark.unit
def test_render_module_minimal():
    source = render_module(Module(name="Hello", body=h("div")))
    assert source == (
        "import React from 'react';\n"
        "\n"
        "export default function Hello() {\n"
        "  return (\n"
        "    <div />\n"
        "  );\n"
        "}\n"
    )


@pytest.mark.unit
def test_render_module_full_layout():
    module = Module(
        name="Widget",
        body=h("p", None, "x"),
        directive="use client",
        declarations=["const items = [];"],
        params="{ a }: Props",
        statements=["const b = a;\n\nconsole.log(b);"],
    ).with_import(Import("next/navigation", names=("useRouter",)))

    source = render_module(module)
    assert source.startswith("'use client';\n\nimport React from 'react';\n")
    assert "import { useRouter } from 'next/navigation';\n\nconst items = [];\n" in source
    assert "export default function Widget({ a }: Props) {\n  const b = a;\n\n  console.log(b);\n" in source


@pytest.mark.unit
def test_with_import_deduplicates():
    imp = Import("../components/map", default="Map")
    module = Module(name="M", body=h("Map")).with_import(imp).with_import(imp)

    assert module.imports.count(imp) == 1
    assert render_module(module).count("import Map") == 1
