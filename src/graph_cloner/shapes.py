"""Container shapes a relation value may have, and how to mirror them."""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Collection, Mapping
from enum import Enum
from typing import Any, Callable

from sortedcontainers import SortedDict, SortedList, SortedSet

from graph_cloner.errors import UnsupportedShapeError
from graph_cloner.introspection import EntityRegistry
from graph_cloner.nodes import MapEntry


class Shape(Enum):
    """Runtime shape of a relation value."""

    SINGULAR = "singular"
    LIST = "list"
    TUPLE = "tuple"
    SET = "set"
    FROZENSET = "frozenset"
    SORTED_LIST = "sorted_list"
    SORTED_SET = "sorted_set"
    MAP = "map"
    SORTED_MAP = "sorted_map"

    @property
    def is_map(self) -> bool:
        return self in (Shape.MAP, Shape.SORTED_MAP)


def shape_of(value: Any, registry: EntityRegistry) -> Shape:
    """Classify ``value``; raise UnsupportedShapeError for unknown containers."""
    if registry.is_entity(value) or isinstance(value, (str, bytes, bytearray)):
        return Shape.SINGULAR
    if isinstance(value, SortedDict):
        return Shape.SORTED_MAP
    if isinstance(value, dict):
        return Shape.MAP
    if isinstance(value, Mapping):
        raise UnsupportedShapeError(f"unsupported mapping type: {type(value).__name__}")
    if isinstance(value, SortedSet):
        return Shape.SORTED_SET
    if isinstance(value, SortedList):
        return Shape.SORTED_LIST
    if isinstance(value, list):
        return Shape.LIST
    if isinstance(value, tuple):
        # Named tuples are values, not containers of related nodes.
        return Shape.SINGULAR if hasattr(value, "_fields") else Shape.TUPLE
    if isinstance(value, frozenset):
        return Shape.FROZENSET
    if isinstance(value, set):
        return Shape.SET
    if isinstance(value, Collection):
        raise UnsupportedShapeError(f"unsupported collection type: {type(value).__name__}")
    return Shape.SINGULAR


def related_nodes(shape: Shape, value: Any) -> list[Any]:
    """The nodes a traversal continues from: elements, map entries or the value."""
    if shape is Shape.SINGULAR:
        return [value]
    if shape.is_map:
        return [MapEntry(k, v) for k, v in value.items()]
    return list(value)


def members(shape: Shape, value: Any) -> list[Any]:
    """The nodes that may hold a back-reference: elements, map values or the value."""
    if shape is Shape.SINGULAR:
        return [value]
    if shape.is_map:
        return list(value.values())
    return list(value)


def rebuild(shape: Shape, value: Any, convert: Callable[[Any], Any]) -> Any:
    """Return a container of the same shape with every member passed through ``convert``.

    Sorted containers keep the key function of the original.
    """
    if shape is Shape.SINGULAR:
        return convert(value)
    if shape is Shape.LIST:
        return [convert(v) for v in value]
    if shape is Shape.TUPLE:
        return tuple(convert(v) for v in value)
    if shape is Shape.SET:
        return {convert(v) for v in value}
    if shape is Shape.FROZENSET:
        return frozenset(convert(v) for v in value)
    if shape is Shape.SORTED_LIST:
        return SortedList((convert(v) for v in value), key=getattr(value, "key", None))
    if shape is Shape.SORTED_SET:
        return SortedSet((convert(v) for v in value), key=getattr(value, "key", None))
    pairs = [(convert(k), convert(v)) for k, v in value.items()]
    if shape is Shape.SORTED_MAP:
        return SortedDict(getattr(value, "key", None), pairs)
    if isinstance(value, OrderedDict):
        return OrderedDict(pairs)
    return dict(pairs)
