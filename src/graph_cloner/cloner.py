"""Clone engine: identity-preserving deep copies of pattern-selected subgraphs.

``clone(department, "employees.address")`` returns a new ``Department`` whose
``employees`` list holds clones of the original employees, each with a cloned
address. Relations not named by a pattern keep their default on the clones.
An original reachable along several paths gets exactly one clone, so shared
references and cycles of the source graph are reproduced in the copy.
"""

from __future__ import annotations

import logging
from typing import Any, Hashable, Iterable, Sequence

from graph_cloner.explorer import BaseEntityExplorer
from graph_cloner.filters import PropertyFilter, allow_all
from graph_cloner.introspection import ClassInfo, EntityRegistry, default_registry
from graph_cloner.nodes import identity_key
from graph_cloner.parsing.pattern_parser import PatternCompiler
from graph_cloner.shapes import Shape, members, rebuild

logger = logging.getLogger(__name__)


class GraphCloner(BaseEntityExplorer):
    """Collaborator cloning every relation the traversal engine resolves.

    Traversal keeps walking the *original* graph; every resolved relation is
    mirrored onto the clone of its owner. Each ``clone``/``clone_all`` call starts
    with empty caches, so clones from separate calls never share objects.
    """

    def __init__(
        self,
        property_filter: PropertyFilter | None = None,
        registry: EntityRegistry | None = None,
        compiler: PatternCompiler | None = None,
    ) -> None:
        super().__init__(property_filter, registry, compiler)
        self._clones: dict[int, tuple[Any, Any]] = {}
        self._explored: dict[tuple[Hashable, str], tuple[Any, ...] | None] = {}

    # ---- Public API ----

    def clone(self, root: Any, *patterns: str) -> Any:
        """Clone ``root`` and the relations the patterns select from it."""
        self._reset()
        if root is None:
            return None
        clone = self.get_clone(root)
        self.explore_patterns([root], patterns)
        logger.debug("cloned %d entities for %d patterns", len(self._clones), len(patterns))
        return clone

    def clone_all(self, roots: Iterable[Any], *patterns: str) -> list[Any] | set[Any]:
        """Clone every root, sharing one clone cache between them.

        Returns a set when ``roots`` is a set, a list otherwise.
        """
        self._reset()
        as_set = isinstance(roots, (set, frozenset))
        roots = [r for r in roots if r is not None]
        clones = [self.get_clone(r) for r in roots]
        self.explore_patterns(roots, patterns)
        logger.debug(
            "cloned %d entities from %d roots for %d patterns",
            len(self._clones),
            len(roots),
            len(patterns),
        )
        return set(clones) if as_set else clones

    def _reset(self) -> None:
        self._clones = {}
        self._explored = {}

    def get_clone(self, original: Any) -> Any:
        """Return the clone of ``original``, creating it on first request.

        Non-entities are opaque values and are returned unchanged.
        """
        if original is None:
            return None
        cached = self._clones.get(id(original))
        if cached is not None:
            return cached[1]
        info = self.registry.get_class_info(original)
        if info is None:
            return original
        clone = info.instantiate()
        self._clones[id(original)] = (original, clone)
        _copy_properties(info, original, clone, self.property_filter)
        return clone

    def original_to_clone(self) -> dict[int, tuple[Any, Any]]:
        """Snapshot of the clone cache: ``id(original) -> (original, clone)``."""
        return dict(self._clones)

    # ---- Collaborator ----

    def explore(self, node: Any, name: str) -> Iterable[Any] | None:
        if node is None or name is None:
            return None
        key = (identity_key(node), name)
        if key in self._explored:
            return self._explored[key]
        # Placeholder: a lookup made while this pair is in progress sees no result.
        self._explored[key] = None
        related = super().explore(node, name)
        if related is not None:
            related = tuple(related)
        self._explored[key] = related
        return related

    def _on_explored(self, node: Any, name: str, shape: Shape, value: Any) -> None:
        info = self.registry.get_class_info(node)
        info.write(self.get_clone(node), name, rebuild(shape, value, self.get_clone))

        mapped_by = info.mapped_by(name)
        if not mapped_by:
            return
        for member in members(shape, value):
            if self.get_clone(member) is not member:
                self._explore_path(member, mapped_by)

    def _explore_path(self, start: Any, path: Sequence[str]) -> None:
        """Walk ``path`` from ``start``, one relation at a time."""
        nodes = [start]
        for name in path:
            reached: list[Any] = []
            for node in nodes:
                related = self.explore(node, name)
                if related is not None:
                    reached.extend(related)
            nodes = reached


def _copy_properties(
    info: ClassInfo, source: Any, target: Any, property_filter: PropertyFilter
) -> None:
    for name in info.properties:
        if property_filter(source, name):
            info.write(target, name, info.read(source, name))


# ---- Module-level API ----


def clone(
    root: Any,
    *patterns: str,
    property_filter: PropertyFilter | None = None,
    registry: EntityRegistry | None = None,
    compiler: PatternCompiler | None = None,
) -> Any:
    """Clone ``root`` with exactly the relations named by ``patterns`` populated.

    Plain attributes are copied unless ``property_filter`` rejects them. With
    no patterns only ``root`` itself is copied.
    """
    return GraphCloner(property_filter, registry, compiler).clone(root, *patterns)


def clone_all(
    roots: Iterable[Any],
    *patterns: str,
    property_filter: PropertyFilter | None = None,
    registry: EntityRegistry | None = None,
    compiler: PatternCompiler | None = None,
) -> list[Any] | set[Any]:
    """Clone every root with one shared cache; a set for set input, else a list."""
    return GraphCloner(property_filter, registry, compiler).clone_all(roots, *patterns)


def copy(
    source: Any,
    target: Any,
    property_filter: PropertyFilter | None = None,
    registry: EntityRegistry | None = None,
) -> None:
    """Copy the plain attributes of ``source`` onto ``target``; relations are untouched."""
    info = (registry or default_registry).get_class_info(source)
    if info is None:
        return
    _copy_properties(info, source, target, property_filter or allow_all)
