"""Contract between the traversal engine and the object graph it walks."""

from __future__ import annotations

from typing import Any, Iterable, Protocol, Sequence, runtime_checkable


@runtime_checkable
class EntityExplorer(Protocol):
    """Exposes the relations of graph nodes to the traversal engine.

    Nodes are compared by identity. Implementations may keep state across
    calls (the cloner does); the engine itself never does.
    """

    def get_properties(self, node: Any) -> Sequence[str]:
        """Return the relation names of ``node``, never ``None``.

        The order is a hint only: putting collection-valued relations first
        reduces fetches in lazy-loading graphs.
        """
        ...

    def explore(self, node: Any, name: str) -> Iterable[Any] | None:
        """Return the nodes related to ``node`` through ``name``.

        Returns ``None`` when ``name`` is not a relation of ``node``, is
        filtered out, or currently holds no value.
        """
        ...
