"""Responsive grid placement over a 12-unit grid."""

from dataclasses import dataclass
from typing import Protocol, Sequence

GRID_UNITS = 12


class Placement(Protocol):
    """Anything carrying per-breakpoint column hints."""

    colpos: int | None
    colposmd: int | None
    colpossm: int | None


def clamp_span(value: int) -> int:
    """Clamp a span to [1, 12]."""
    return max(1, min(GRID_UNITS, value))


@dataclass(frozen=True)
class Spans:
    """Column spans per breakpoint."""

    small: int
    medium: int
    large: int

    def classes(self) -> str:
        """Tailwind span classes, smallest breakpoint first."""
        return f"col-span-{self.small} md:col-span-{self.medium} lg:col-span-{self.large}"


def is_legacy(group: Sequence[Placement]) -> bool:
    """
    True when a group's declared large spans do not fill the grid exactly.

    Missing spans count as 1. An empty group is never legacy.
    """
    if not group:
        return False
    return sum(p.colpos or 1 for p in group) != GRID_UNITS


def spans(placement: Placement, group: Sequence[Placement]) -> Spans:
    """
    Compute the spans of one placement within its row or container group.

    Explicit mode keeps the declared values, with medium and small falling
    back to the next larger breakpoint. Legacy mode gives every member of
    the group ``12 // len(group)`` at all breakpoints.
    """
    if is_legacy(group):
        even = clamp_span(GRID_UNITS // len(group))
        return Spans(even, even, even)

    large = placement.colpos or 1
    medium = placement.colposmd or large
    small = placement.colpossm or medium
    return Spans(clamp_span(small), clamp_span(medium), clamp_span(large))


class GroupLayout:
    """Spans for every member of one group, computed once."""

    def __init__(self, group: Sequence[Placement]) -> None:
        self.group = list(group)
        self.legacy = is_legacy(self.group)

    def __iter__(self):
        for placement in self.group:
            yield placement, spans(placement, self.group)

    def __len__(self) -> int:
        return len(self.group)
