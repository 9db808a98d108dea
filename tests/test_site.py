"""End-to-end compilation tests."""

import pytest

from sitegen.blueprint import Blueprint, Menu, MenuItem, Page, PageView, View
from sitegen.compiler import SiteCompiler, write_site


@pytest.mark.integration
def test_home_page_two_cells(settings):
    """A home page with a text view and a source-less image view."""
    blueprint = Blueprint(
        views=[View(id="v1", name="Intro", type="text"), View(id="v2", name="Picture", type="image")],
        pages=[
            Page(
                id="home",
                name="Home",
                is_home=True,
                views=[PageView(id="v1", rowpos=0, colpos=6), PageView(id="v2", rowpos=0, colpos=6)],
            )
        ],
    )
    site = SiteCompiler(settings).compile(blueprint)

    root = site.module("src/app/page.tsx")
    assert root is not None
    assert root.source.count('className="h-full gap-4 grid grid-cols-12 relative"') == 1
    assert root.source.count("col-span-6 md:col-span-6 lg:col-span-6") == 2

    image = site.module("src/views/picture.tsx")
    assert "<img" not in image.source
    assert "placeItems" in image.source


@pytest.mark.integration
def test_sample_site_artifacts(settings, sample_blueprint, target):
    site = SiteCompiler(settings).compile(sample_blueprint)
    written = write_site(site, target)

    assert set(written) == {
        "src/views/intro.tsx",
        "src/views/banner.tsx",
        "src/views/main_menu.tsx",
        "src/views/feature_box.tsx",
        "src/app/page.tsx",
        "src/app/about_us/page.tsx",
        "src/styles/theme.css",
        "src/styles/views.css",
    }
    assert site.identities["v-box"] == "feature_box"
    assert "import FeatureBoxView from '../../views/feature_box';" in target.read("src/app/about_us/page.tsx")
    assert ".view-v_box-title h1" in target.read("src/styles/views.css")


@pytest.mark.integration
def test_views_compiled_before_containers(settings, sample_blueprint):
    site = SiteCompiler(settings).compile(sample_blueprint)
    paths = site.paths

    assert paths.index("src/views/intro.tsx") < paths.index("src/views/feature_box.tsx")
    assert paths.index("src/views/feature_box.tsx") < paths.index("src/app/page.tsx")


@pytest.mark.integration
def test_fallback_root_without_home(settings):
    blueprint = Blueprint(
        views=[View(id="v1", name="Intro", type="text")],
        pages=[Page(id="p1", name="Contact", views=[PageView(id="v1")])],
    )
    site = SiteCompiler(settings).compile(blueprint)

    assert "<div>Home</div>" in site.module("src/app/page.tsx").source
    assert site.module("src/app/contact/page.tsx") is not None
    assert site.stylesheet_path is None


@pytest.mark.integration
def test_compilation_deterministic(settings, sample_blueprint):
    """Fresh sessions give identical output for the same blueprint."""
    compiler = SiteCompiler(settings)
    first = compiler.compile(sample_blueprint)
    second = compiler.compile(sample_blueprint)

    assert first.run_id != second.run_id
    assert [(m.path, m.source) for m in first.modules] == [(m.path, m.source) for m in second.modules]


@pytest.mark.integration
def test_colliding_names_get_distinct_modules(settings):
    blueprint = Blueprint(
        views=[
            View(id="a", name="Hero", type="text"),
            View(id="b", name="Hero", type="image", custom_view_description="/hero.png"),
        ],
        pages=[Page(id="p", name="Home", is_home=True, views=[PageView(id="a"), PageView(id="b", rowpos=1)])],
    )
    site = SiteCompiler(settings).compile(blueprint)
    page = site.module("src/app/page.tsx").source

    assert site.identities == {"a": "hero", "b": "hero_image"}
    assert "import HeroView from '../views/hero';" in page
    assert "import HeroImageView from '../views/hero_image';" in page


@pytest.mark.integration
def test_duplicate_view_ids_first_wins(settings):
    blueprint = Blueprint(
        views=[View(id="a", name="First", type="text"), View(id="a", name="Second", type="text")],
    )
    site = SiteCompiler(settings).compile(blueprint)

    assert site.identities == {"a": "first"}
    assert site.module("src/views/second.tsx") is None


@pytest.mark.integration
def test_route_links_match_written_pages(settings):
    """Links to an ``Index`` page point at the folder its module is written to."""
    blueprint = Blueprint(
        views=[View(id="nav", name="Nav", type="menu", custom_view_description="m")],
        pages=[
            Page(id="welcome", name="Welcome", is_home=True, views=[PageView(id="nav")]),
            Page(id="idx", name="Index", views=[PageView(id="nav")]),
        ],
        menus=[Menu(id="m", name="Main", items=[MenuItem(id="i", name="Index", page="idx")])],
    )
    site = SiteCompiler(settings).compile(blueprint)

    assert site.module("src/app/page.tsx") is not None
    assert site.module("src/app/index/page.tsx") is not None
    assert '"href":"/index"' in site.module("src/views/nav.tsx").source
