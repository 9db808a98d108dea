"""Pytest configuration and fixtures."""

import os
import pytest

from sitegen.blueprint import Blueprint, Menu, MenuItem, Model, Page, PageView, View
from sitegen.compiler import CompilationSession
from sitegen.core import Settings, configure_logging
from sitegen.output import MemoryTarget


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ['SITEGEN_LOG_LEVEL'] = 'DEBUG'
    os.environ['SITEGEN_DATABASE_TYPE'] = 'sqlite'
    os.environ['SITEGEN_CYCLE_CHECK'] = 'graph'
    os.environ.pop('SITEGEN_OUTPUT_DIR', None)
    configure_logging('DEBUG')


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings (fresh, not the cached instance)."""
    return Settings()


@pytest.fixture
def target():
    """In-memory artifact target."""
    return MemoryTarget()


@pytest.fixture
def make_session(settings):
    """Factory building a compilation session over a blueprint."""

    def _make(blueprint: Blueprint, view_code=None, **overrides):
        session_settings = settings.model_copy(update=overrides) if overrides else settings
        return CompilationSession(blueprint, session_settings, view_code)

    return _make


# ============================================================================
# Blueprint Fixtures
# ============================================================================

@pytest.fixture
def sample_blueprint():
    """Small site: home and about pages, a menu, a container and one model."""
    return Blueprint(
        views=[
            View(id="v-text", name="Intro", type="text", custom_view_description="<p>Welcome</p>"),
            View(id="v-image", name="Banner", type="image"),
            View(id="v-menu", name="Main Menu", type="menu", custom_view_description="m1"),
            View(
                id="v-box",
                name="Feature Box",
                type="container",
                custom_view_description='["v-text", "v-image"]',
                card_title_color="#ff0000",
            ),
        ],
        pages=[
            Page(
                id="p-home",
                name="Home",
                is_home=True,
                views=[
                    PageView(id="v-menu", rowpos=0, colpos=12),
                    PageView(id="v-text", rowpos=1, colpos=6),
                    PageView(id="v-image", rowpos=1, colpos=6),
                ],
            ),
            Page(
                id="p-about",
                name="About Us",
                description="Who we are",
                views=[PageView(id="v-box", rowpos=0, colpos=12)],
            ),
        ],
        menus=[
            Menu(
                id="m1",
                name="Main",
                items=[
                    MenuItem(id="i1", name="Home", page="p-home"),
                    MenuItem(id="i2", name="About", page="p-about"),
                    MenuItem(id="i3", name="Docs", link_type="external", external_url="https://example.com/docs"),
                ],
            )
        ],
        models=[
            Model(
                id="m-order",
                name="Order",
                data_is_user_specific="true",
                fields=[{"name": "id", "datatype": "UUID", "key": "primary", "required": "true"}],
            )
        ],
    )


@pytest.fixture
def sample_project(sample_blueprint):
    """Project document (decoded JSON) wrapping the sample blueprint."""
    return {
        "name": "Sample",
        "blueprint": sample_blueprint.model_dump(exclude_none=True),
        "code": {},
    }
