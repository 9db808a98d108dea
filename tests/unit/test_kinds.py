"""Tests for view type classification."""

import pytest

from sitegen.compiler.kinds import ViewKind, classify


@pytest.mark.unit
@pytest.mark.parametrize(
    "view_type,kind",
    [
        ("text", ViewKind.TEXT),
        ("Text", ViewKind.TEXT),
        ("Icon Bar", ViewKind.ICON_BAR),
        ("icon_bar", ViewKind.ICON_BAR),
        ("icon-bar", ViewKind.ICON_BAR),
        ("YouTube", ViewKind.VIDEO),
        ("Header Login", ViewKind.LOGIN_BUTTON),
        ("CTA Button", ViewKind.CTA),
        ("Photo Gallery", ViewKind.PHOTO_GALLERY),
        ("User Admin", ViewKind.USER_ADMIN),
        ("generated_view", ViewKind.COMPONENT),
        ("complex component", ViewKind.COMPONENT),
        ("container", ViewKind.CONTAINER),
        ("carousel3d", ViewKind.UNKNOWN),
        ("", ViewKind.UNKNOWN),
        (None, ViewKind.UNKNOWN),
    ],
)
def test_classify(view_type, kind):
    assert classify(view_type) is kind
