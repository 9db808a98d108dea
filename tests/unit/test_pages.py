"""Tests for page route modules."""

import pytest

from sitegen.blueprint import Blueprint, Page, PageView, View
from sitegen.compiler import PageCompiler
from sitegen.compiler.pages import group_rows


def views():
    return [
        View(id="v1", name="Intro", type="text", custom_view_description="<p>Hi</p>"),
        View(id="v2", name="Banner", type="image", background_color="#000"),
        View(id="v3", name="Footer", type="text"),
    ]


@pytest.mark.unit
def test_group_rows_stable():
    placements = [PageView(id="c", rowpos=1), PageView(id="a", rowpos=0), PageView(id="b", rowpos=0)]
    assert [[p.id for p in row] for row in group_rows(placements)] == [["a", "b"], ["c"]]


@pytest.mark.unit
def test_home_page_module(make_session):
    page = Page(
        id="p1",
        name="Welcome",
        description="Start here",
        is_home=True,
        views=[PageView(id="v1", rowpos=0, colpos=6), PageView(id="v2", rowpos=0, colpos=6)],
    )
    session = make_session(Blueprint(views=views(), pages=[page]))
    module = PageCompiler(session).compile(page)
    source = module.source

    assert module.path == "src/app/page.tsx"
    assert "import { Metadata } from 'next';" in source
    assert "import IntroView from '../views/intro';" in source
    assert "import BannerView from '../views/banner';" in source
    assert 'export const metadata: Metadata = { title: "Welcome", description: "Start here" };' in source
    assert source.count('className="h-full gap-4 grid grid-cols-12 relative"') == 1
    assert source.count("col-span-6 md:col-span-6 lg:col-span-6") == 2
    assert "<IntroView isContainer={false} />" in source
    assert "<BannerView />" in source
    assert '"backgroundColor":"#000"' in source
    assert '<div className="page" style={{"minHeight":"70vh"}}>' in source


@pytest.mark.unit
def test_sub_page_path_and_imports(make_session):
    page = Page(id="p2", name="About Us", views=[PageView(id="v3", rowpos=0, colpos=12)])
    session = make_session(Blueprint(views=views(), pages=[page]))
    module = PageCompiler(session).compile(page)

    assert module.path == "src/app/about_us/page.tsx"
    assert "import FooterView from '../../views/footer';" in module.source


@pytest.mark.unit
def test_rows_sorted_by_position(make_session):
    page = Page(
        id="p1",
        name="Home",
        is_home=True,
        views=[PageView(id="v3", rowpos=2), PageView(id="v1", rowpos=0), PageView(id="v2", rowpos=1)],
    )
    session = make_session(Blueprint(views=views(), pages=[page]))
    source = PageCompiler(session).compile(page).source

    assert source.index("<IntroView") < source.index("<BannerView") < source.index("<FooterView")
    assert source.count('className="h-full gap-4 grid grid-cols-12 relative"') == 3


@pytest.mark.unit
def test_dangling_placements_skipped(make_session):
    page = Page(id="p1", name="Home", is_home=True, views=[PageView(id="ghost"), PageView(id="v1", rowpos=1)])
    session = make_session(Blueprint(views=views(), pages=[page]))
    source = PageCompiler(session).compile(page).source

    assert "ghost" not in source
    assert source.count('className="h-full gap-4 grid grid-cols-12 relative"') == 1


@pytest.mark.unit
def test_empty_page(make_session):
    page = Page(id="p1", name="Blank")
    session = make_session(Blueprint(pages=[page]))
    source = PageCompiler(session).compile(page).source

    assert "    <div />\n" in source
    assert "../views" not in source


@pytest.mark.unit
def test_custom_directories(make_session):
    page = Page(id="p1", name="Home", is_home=True, views=[PageView(id="v1")])
    session = make_session(Blueprint(views=views(), pages=[page]), app_dir="app", views_dir="components/views")
    source = PageCompiler(session).compile(page).source

    assert "import IntroView from '../components/views/intro';" in source


@pytest.mark.unit
def test_fallback_root(make_session):
    session = make_session(Blueprint())
    module = PageCompiler(session).fallback_root()

    assert module.path == "src/app/page.tsx"
    assert "export default function Home() {" in module.source
    assert "<div>Home</div>" in module.source
