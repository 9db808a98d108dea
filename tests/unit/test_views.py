"""Tests for single view compilation."""

import pytest

from sitegen.blueprint import Blueprint, Page, View
from sitegen.compiler import ViewCompiler


def compile_view(make_session, view, **kwargs):
    blueprint = Blueprint(
        views=[view],
        pages=[Page(id="p-home", name="Home", is_home=True), Page(id="p-shop", name="Shop")],
        design={"primaryColor": "#123456"},
    )
    session = make_session(blueprint, **kwargs)
    return ViewCompiler(session).compile(view)


# ============================================================================
# Basic Views
# ============================================================================

@pytest.mark.unit
def test_text_view(make_session):
    """Text markup is embedded raw and the view accepts isContainer."""
    module = compile_view(make_session, View(id="t1", name="Intro", type="text", custom_view_description="<p>Hi</p>"))

    assert module.path == "src/views/intro.tsx"
    assert module.component == "IntroView"
    assert "export default function IntroView({ isContainer = false }: IntroViewProps) {" in module.source
    assert 'dangerouslySetInnerHTML={{"__html":"<p>Hi</p>"}}' in module.source
    assert "margin: isContainer ? 0 : '5% 10%'" in module.source


@pytest.mark.unit
def test_image_without_source_renders_wrapper_only(make_session):
    module = compile_view(make_session, View(id="i1", name="Banner", type="image"))

    assert "<img" not in module.source
    assert '<div style={{"display":"grid","placeItems":"center"}} />' in module.source


@pytest.mark.unit
def test_image_with_source(make_session):
    view = View(id="i1", name="Banner", type="image", custom_view_description="https://cdn.example.com/b.png")
    module = compile_view(make_session, view)

    assert '<img src="https://cdn.example.com/b.png" alt="Banner"' in module.source


@pytest.mark.unit
def test_logo_defaults(make_session):
    module = compile_view(make_session, View(id="l1", name="Logo", type="logo"))

    assert '<img src="/logo.png" alt="Logo" width="240" height="80" />' in module.source
    assert '<a href="/">' in module.source


@pytest.mark.unit
def test_logo_keeps_configured_file(make_session):
    module = compile_view(make_session, View(id="l1", name="Logo", type="logo", background_image="/logo.svg"))
    assert 'src="/logo.svg"' in module.source


@pytest.mark.unit
def test_video_iframe(make_session):
    view = View(id="y1", name="Clip", type="YouTube", custom_view_description="https://www.youtube.com/embed/x")
    module = compile_view(make_session, view)

    assert '<iframe src="https://www.youtube.com/embed/x"' in module.source
    assert "allowFullScreen" in module.source


@pytest.mark.unit
def test_pregenerated_source_wins(make_session):
    view = View(id="t1", name="Intro", type="text")
    code = "export default function IntroView() { return null; }\n"
    module = compile_view(make_session, view, view_code={"t1": code})

    assert module.source == code


# ============================================================================
# Icon Bar
# ============================================================================

@pytest.mark.unit
def test_icon_bar_empty(make_session):
    module = compile_view(make_session, View(id="ib", name="Icons", type="Icon Bar", custom_view_description="[]"))

    assert "No icons configured" in module.source
    assert "useRouter" not in module.source


@pytest.mark.unit
def test_icon_bar_items(make_session):
    payload = '[{"icon": "search", "text": "Find", "pageId": "p-shop"}, {"icon": "rocket", "text": "Go"}]'
    view = View(id="ib", name="Icons", type="icon_bar", align="Right", custom_view_description=payload)
    module = compile_view(make_session, view)
    source = module.source

    assert source.startswith("'use client';")
    assert "import { useRouter } from 'next/navigation';" in source
    assert 'const PAGE_ROUTES: Record<string, string> = {"p-home":"/","p-shop":"/shop"};' in source
    # Unknown icons fall back to the default
    assert '{"icon":"bell","text":"Go","pageId":""}' in source
    assert '"search":"<svg' in source
    assert "if (!route) return;" in source
    assert "justify-end" in source


@pytest.mark.unit
def test_icon_bar_malformed_payload(make_session):
    module = compile_view(make_session, View(id="ib", name="Icons", type="iconbar", custom_view_description="[oops"))
    assert "No icons configured" in module.source


@pytest.mark.unit
@pytest.mark.parametrize("icon", ['["x"]', '{"name": "search"}', "7", "null"])
def test_icon_bar_non_string_icon_uses_default(make_session, icon):
    payload = f'[{{"icon": {icon}, "text": "a", "pageId": "p-shop"}}]'
    view = View(id="ib", name="Icons", type="iconbar", custom_view_description=payload)
    module = compile_view(make_session, view)

    assert '{"icon":"bell","text":"a","pageId":"p-shop"}' in module.source
    assert '"bell":"<svg' in module.source


# ============================================================================
# Widgets and Internal Views
# ============================================================================

@pytest.mark.unit
def test_form_widget_forwards_raw_config(make_session):
    view = View(id="f1", name="Contact", type="form", custom_view_description='{"fields":[]}')
    module = compile_view(make_session, view)

    assert "import RForm from '../components/form';" in module.source
    assert 'const design = {"primaryColor":"#123456"};' in module.source
    assert 'custom_view_description={"{\\"fields\\":[]}"}' in module.source


@pytest.mark.unit
def test_widget_malformed_config_replaced(make_session):
    module = compile_view(make_session, View(id="f1", name="Contact", type="form", custom_view_description="{bad"))
    assert 'custom_view_description="{}"' in module.source


@pytest.mark.unit
def test_slideshow_wrong_shape_replaced(make_session):
    view = View(id="s1", name="Slides", type="slideshow", custom_view_description='{"not": "a list"}')
    module = compile_view(make_session, view)

    assert 'imageIds="[]"' in module.source


@pytest.mark.unit
def test_cta_navigates_by_page_id(make_session):
    module = compile_view(make_session, View(id="c1", name="Buy", type="CTA Button", custom_view_description="{}"))

    assert module.source.startswith("'use client';")
    assert "onNavigate={(pageId: string) => router.push(PAGE_ROUTES[pageId] ?? '/')}" in module.source


@pytest.mark.unit
def test_internal_view(make_session):
    module = compile_view(make_session, View(id="lg", name="Sign In", type="login"))

    assert "import Login from '../components/login';" in module.source
    assert "<Login />" in module.source


@pytest.mark.unit
def test_components_import_setting(make_session):
    module = compile_view(make_session, View(id="lg", name="Sign In", type="profile"), components_import="@/components")
    assert "import Profile from '@/components/profile';" in module.source


@pytest.mark.unit
def test_map_view(make_session):
    module = compile_view(make_session, View(id="mp", name="Office", type="map", custom_view_description="Berlin"))

    assert "import Map from '../components/map';" in module.source
    assert '<Map location="Berlin" name="Office" />' in module.source


# ============================================================================
# Placeholders
# ============================================================================

@pytest.mark.unit
def test_integration_placeholder(make_session):
    view = View(id="in", name="Stripe", type="integration", prompt="Accept payments")
    module = compile_view(make_session, view)

    assert "<span>{/* Integration Placeholder: Accept payments */}</span>" in module.source


@pytest.mark.unit
def test_unknown_type_placeholder(make_session):
    view = View(id="u1", name="Spinner", type="carousel3d", prompt="Build a spinner")
    module = compile_view(make_session, view)

    assert "<strong>Prompt:</strong>" in module.source
    assert '{" Build a spinner"}' in module.source


@pytest.mark.unit
def test_component_placeholder_default_prompt(make_session):
    module = compile_view(make_session, View(id="g1", name="Gen", type="generated_component"))
    assert '{" Component view"}' in module.source
