"""Property filters: decide which properties of an entity are processed.

A filter is any callable ``(entity, name) -> bool``. Returning ``False``
excludes the property: a plain attribute is left at its default on the clone,
and a relation is treated as absent.

    no_keys = exclude_tagged("id", "version")
    clone(company, "department+.(boss|employees)", property_filter=no_keys)
"""

from __future__ import annotations

from typing import Any, Callable

from graph_cloner.introspection import EntityRegistry, default_registry

PropertyFilter = Callable[[Any, str], bool]


def allow_all(entity: Any, name: str) -> bool:
    """Default filter: every property is processed."""
    return True


def exclude(*names: str) -> PropertyFilter:
    """Exclude properties by name, on every entity class."""
    excluded = frozenset(names)

    def _filter(entity: Any, name: str) -> bool:
        return name not in excluded

    return _filter


def exclude_tagged(*tags: str, registry: EntityRegistry | None = None) -> PropertyFilter:
    """Exclude properties declared with any of ``tags``.

    Properties of non-entities and unknown properties pass.
    """
    excluded = frozenset(tags)
    registry = registry or default_registry

    def _filter(entity: Any, name: str) -> bool:
        info = registry.get_class_info(entity)
        if info is None:
            return True
        prop = info.get_property_info(name)
        if prop is None:
            return True
        return excluded.isdisjoint(prop.tags)

    return _filter


def compose(*filters: PropertyFilter) -> PropertyFilter:
    """A filter passing only the properties every one of ``filters`` passes."""

    def _filter(entity: Any, name: str) -> bool:
        return all(f(entity, name) for f in filters)

    return _filter
