"""View graph: container to subview edges and cycle detection."""

from dataclasses import dataclass
from typing import Any, Iterable

from ..blueprint.models import View
from ..core import get_logger, JSONParseError, parse_config
from .kinds import ViewKind, classify

logger = get_logger(__name__)


@dataclass(frozen=True)
class Subview:
    """One slot in a container: referenced view id plus column hints."""

    id: str
    colpos: int | None = None
    colposmd: int | None = None
    colpossm: int | None = None


def _span(value: Any) -> int | None:
    try:
        span = int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return span or None


def parse_subviews(payload: Any) -> list[Subview]:
    """
    Read a container's subview list.

    Accepts a JSON string or decoded list whose entries are bare ids or
    objects with ``id``/``viewId`` plus optional ``colpos``, ``colposmd`` and
    ``colpossm``. Malformed payloads give an empty list; entries without an
    id are dropped.
    """
    try:
        entries = parse_config(payload, list)
    except JSONParseError as e:
        logger.warning("container_payload_invalid", error=str(e))
        return []

    result = []
    for entry in entries:
        if isinstance(entry, str):
            if entry:
                result.append(Subview(entry))
            continue
        if not isinstance(entry, dict):
            continue
        sub_id = entry.get("viewId") or entry.get("id")
        if not sub_id:
            continue
        result.append(
            Subview(
                id=str(sub_id),
                colpos=_span(entry.get("colpos")),
                colposmd=_span(entry.get("colposmd")),
                colpossm=_span(entry.get("colpossm")),
            )
        )
    return result


class ViewGraph:
    """
    Id-keyed graph of container views and the views they nest.

    Only containers have outgoing edges. ``cyclic_edges`` is the set of
    container to subview edges that close a cycle in a depth-first walk;
    rendering those slots as diagnostics leaves every container tree finite.
    """

    def __init__(self, views: Iterable[View]) -> None:
        self.edges: dict[str, list[str]] = {}
        self.nodes: set[str] = set()
        for view in views:
            self.nodes.add(view.id)
            if classify(view.type) is ViewKind.CONTAINER and view.id not in self.edges:
                self.edges[view.id] = [s.id for s in parse_subviews(view.custom_view_description)]
        self.cyclic_edges = self._find_cyclic_edges()
        if self.cyclic_edges:
            logger.warning("container_cycles_detected", edges=sorted(self.cyclic_edges))

    def subviews(self, view_id: str) -> list[str]:
        return self.edges.get(view_id, [])

    def closes_cycle(self, container_id: str, subview_id: str) -> bool:
        return (container_id, subview_id) in self.cyclic_edges

    def _find_cyclic_edges(self) -> frozenset[tuple[str, str]]:
        """Back edges of an iterative DFS over containers (grey/black colouring)."""
        visiting: set[str] = set()
        done: set[str] = set()
        back: set[tuple[str, str]] = set()

        for root in self.edges:
            if root in done:
                continue
            stack: list[tuple[str, Iterable[str]]] = [(root, iter(self.edges[root]))]
            visiting.add(root)
            while stack:
                node, children = stack[-1]
                child = next(children, None)
                if child is None:
                    stack.pop()
                    visiting.discard(node)
                    done.add(node)
                    continue
                if child in visiting:
                    back.add((node, child))
                elif child not in done and child in self.edges:
                    visiting.add(child)
                    stack.append((child, iter(self.edges[child])))

        return frozenset(back)

