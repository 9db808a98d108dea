"""Filename identities for generated view modules.

Every view gets one slug naming its module file (``src/views/<slug>.tsx``) and
one component name derived from it. Identities are unique within a session
and stable once assigned.
"""

import re

from ..blueprint.models import Page, View
from ..core import get_logger, hash_string

logger = get_logger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_UNDERSCORES = re.compile(r"_+")
_WORD_START = re.compile(r"(^|_)([a-z])")

# Length of the id-derived disambiguation suffix
SUFFIX_LENGTH = 6


def safe_slug(text: str | None, placeholder: str = "page", digit_prefix: str = "p") -> str:
    """
    Reduce text to a filesystem and URL safe slug.

    Lowercases, turns every character outside ``[a-z0-9]`` into ``_``,
    collapses and trims underscores. Empty results become ``placeholder``
    and slugs starting with a digit get a ``p_`` prefix.

    Examples:
        >>> safe_slug("About Us!")
        'about_us'
        >>> safe_slug("404 page")
        'p_404_page'
    """
    slug = _NON_ALNUM.sub("_", str(text or "").lower())
    slug = _UNDERSCORES.sub("_", slug).strip("_")
    if not slug:
        slug = placeholder
    if slug[0].isdigit():
        slug = f"{digit_prefix}_{slug}"
    return slug


def view_base_slug(view: View) -> str:
    """Undisambiguated slug of a view (name, else id)."""
    return safe_slug(view.name or view.id or "view")


def page_slug(page: Page) -> str:
    """Route folder name of a page."""
    return safe_slug(page.name or page.id or "page")


def page_route(page: Page) -> str:
    """URL path a page is served at: the root for the home page, else its slug."""
    if page.is_home:
        return "/"
    return f"/{page_slug(page)}"


def component_name(identity: str) -> str:
    """PascalCase component name for an identity (``about_us`` -> ``AboutUsView``)."""
    return _WORD_START.sub(lambda m: m.group(2).upper(), identity) + "View"


class IdentityResolver:
    """
    Assigns collision-free module identities to views.

    A view keeps its base slug unless another view already claimed it, in
    which case the view type is appended, then a short digest of the view id,
    then a counter. Assignments are memoized per view id.
    """

    def __init__(self) -> None:
        self._assigned: dict[str, str] = {}
        self._claimed: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._assigned)

    def __contains__(self, view_id: object) -> bool:
        return view_id in self._assigned

    def resolve(self, view: View) -> str:
        """Return the identity of a view, assigning one on first sight."""
        cached = self._assigned.get(view.id)
        if cached is not None:
            return cached

        base = view_base_slug(view)
        candidate = base

        if self._taken(candidate, view.id):
            type_slug = safe_slug(view.type, placeholder="view")
            if not base.endswith(type_slug):
                candidate = f"{base}_{type_slug}"

        if self._taken(candidate, view.id):
            stem = f"{candidate}_{hash_string(view.id, truncate=SUFFIX_LENGTH)}"
            candidate = stem
            counter = 2
            while self._taken(candidate, view.id):
                candidate = f"{stem}_{counter}"
                counter += 1

        if candidate != base:
            logger.debug("identity_disambiguated", view_id=view.id, base=base, identity=candidate)

        self._claimed[candidate] = view.id
        self._assigned[view.id] = candidate
        return candidate

    def lookup(self, view_id: str) -> str | None:
        """Identity already assigned to a view id, if any."""
        return self._assigned.get(view_id)

    def reset(self) -> None:
        """Forget every assignment."""
        self._assigned.clear()
        self._claimed.clear()

    def _taken(self, candidate: str, view_id: str) -> bool:
        owner = self._claimed.get(candidate)
        return owner is not None and owner != view_id
