"""Node sets threaded through a pattern traversal."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Iterable, Iterator


@dataclass(frozen=True, eq=False)
class MapEntry:
    """Pseudo-node for one entry of a map-valued relation.

    Exposes exactly two pseudo-properties, ``key`` and ``value``.
    """
    key: Any
    value: Any

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MapEntry):
            return NotImplemented
        return self.key is other.key and self.value is other.value

    def __hash__(self) -> int:
        return hash((id(self.key), id(self.value)))


def identity_key(node: Any) -> Hashable:
    """Return the key a node is deduplicated by."""
    if isinstance(node, MapEntry):
        return ("entry", id(node.key), id(node.value))
    return id(node)


class NodeSet:
    """Deduplicated collection of graph nodes, keyed by node identity.

    Entities are compared by identity rather than equality, so mutable
    (unhashable) objects can be members. The set holds a reference to every
    member, which keeps the ``id()`` keys stable while it is alive.
    """

    __slots__ = ("_nodes",)

    def __init__(self, nodes: Iterable[Any] = ()) -> None:
        self._nodes: dict[Hashable, Any] = {}
        self.update(nodes)

    def add(self, node: Any) -> None:
        self._nodes.setdefault(identity_key(node), node)

    def update(self, nodes: Iterable[Any]) -> None:
        for node in nodes:
            self.add(node)

    def difference(self, other: NodeSet) -> NodeSet:
        result = NodeSet()
        result._nodes = {k: n for k, n in self._nodes.items() if k not in other._nodes}
        return result

    def union(self, other: Iterable[Any]) -> NodeSet:
        result = NodeSet(self)
        result.update(other)
        return result

    def __contains__(self, node: object) -> bool:
        return identity_key(node) in self._nodes

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._nodes.values()))

    def __len__(self) -> int:
        return len(self._nodes)

    def __bool__(self) -> bool:
        return bool(self._nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeSet):
            return NotImplemented
        return self._nodes.keys() == other._nodes.keys()

    def __repr__(self) -> str:
        return f"NodeSet({list(self._nodes.values())!r})"
