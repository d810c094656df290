"""Entity explorers exposing entity relations to the traversal engine."""

from __future__ import annotations

from typing import Any, Iterable, Sequence, TypeVar

from graph_cloner.errors import IllegalUsageError
from graph_cloner.filters import PropertyFilter, allow_all
from graph_cloner.introspection import EntityRegistry, default_registry
from graph_cloner.nodes import MapEntry, NodeSet
from graph_cloner.parsing.pattern_parser import PatternCompiler, default_compiler
from graph_cloner.shapes import Shape, related_nodes, shape_of

T = TypeVar("T")


class BaseEntityExplorer:
    """Resolves relations of ``@entity`` nodes and ``MapEntry`` pseudo-nodes.

    Subclasses react to every resolved relation through ``_on_explored``.
    """

    def __init__(
        self,
        property_filter: PropertyFilter | None = None,
        registry: EntityRegistry | None = None,
        compiler: PatternCompiler | None = None,
    ) -> None:
        self.property_filter: PropertyFilter = property_filter or allow_all
        self.registry = registry or default_registry
        self.compiler = compiler or default_compiler

    def get_properties(self, node: Any) -> Sequence[str]:
        # Map entries report nothing: wildcards never match key/value.
        info = self.registry.get_class_info(node)
        return info.relations if info is not None else ()

    def explore(self, node: Any, name: str) -> Iterable[Any] | None:
        if node is None or name is None:
            return None

        if isinstance(node, MapEntry):
            if name == "key":
                return (node.key,)
            if name == "value":
                return (node.value,)
            raise IllegalUsageError(f"a map entry has no property '{name}'")

        if not self.property_filter(node, name):
            return None
        info = self.registry.get_class_info(node)
        if info is None or not info.is_relation(name):
            return None

        value = info.read(node, name)
        if value is None:
            return None
        shape = shape_of(value, self.registry)
        self._on_explored(node, name, shape, value)
        return related_nodes(shape, value)

    def explore_patterns(self, roots: Iterable[Any], patterns: Sequence[str]) -> None:
        """Run every pattern from ``roots`` with this explorer as collaborator."""
        roots = NodeSet(roots)
        for pattern in patterns:
            self.compiler.compile(pattern).explore(roots, self)

    def _on_explored(self, node: Any, name: str, shape: Shape, value: Any) -> None:
        pass


class EntityCollector(BaseEntityExplorer):
    """Records every entity met while exploring, without modifying anything."""

    def __init__(
        self,
        property_filter: PropertyFilter | None = None,
        registry: EntityRegistry | None = None,
        compiler: PatternCompiler | None = None,
    ) -> None:
        super().__init__(property_filter, registry, compiler)
        self.entities = NodeSet()

    def add(self, obj: Any) -> None:
        if self.registry.is_entity(obj):
            self.entities.add(obj)

    def entities_of(self, cls: type[T]) -> list[T]:
        """Return the collected entities that are instances of ``cls``."""
        return [e for e in self.entities if isinstance(e, cls)]

    def _on_explored(self, node: Any, name: str, shape: Shape, value: Any) -> None:
        self.add(node)
        if shape is Shape.SINGULAR:
            self.add(value)
        elif shape.is_map:
            for key, item in value.items():
                self.add(key)
                self.add(item)
        else:
            for item in value:
                self.add(item)


def collect(
    root: Any,
    *patterns: str,
    property_filter: PropertyFilter | None = None,
    registry: EntityRegistry | None = None,
    compiler: PatternCompiler | None = None,
) -> EntityCollector:
    """Collect ``root`` and every entity the patterns reach from it."""
    return collect_all(
        [root], *patterns, property_filter=property_filter, registry=registry, compiler=compiler
    )


def collect_all(
    roots: Iterable[Any],
    *patterns: str,
    property_filter: PropertyFilter | None = None,
    registry: EntityRegistry | None = None,
    compiler: PatternCompiler | None = None,
) -> EntityCollector:
    """Collect ``roots`` and every entity the patterns reach from them."""
    collector = EntityCollector(property_filter, registry, compiler)
    roots = list(roots)
    for root in roots:
        collector.add(root)
    collector.explore_patterns(roots, patterns)
    return collector
