"""Traversal plan AST nodes produced by the pattern compiler."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable, Union

if TYPE_CHECKING:
    from graph_cloner.nodes import NodeSet
    from graph_cloner.traversal.collaborator import EntityExplorer


class _ExplorerNode:
    """Mixin giving every AST node an ``explore`` entry point."""

    def explore(self, nodes: Iterable[Any], explorer: EntityExplorer) -> NodeSet:
        """Evaluate this plan over ``nodes`` using ``explorer``."""
        from graph_cloner.traversal.engine import explore

        return explore(self, nodes, explorer)  # type: ignore[arg-type]


# ---- Leaves ----


@dataclass(frozen=True)
class Literal(_ExplorerNode):
    """A single relation name."""
    name: str


@dataclass(frozen=True)
class Wildcard(_ExplorerNode):
    """A relation name pattern: ``*`` matches any run, ``?`` one character."""
    glob: str
    _regex: re.Pattern = field(init=False, repr=False, compare=False)
    _decisions: dict[str, bool] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        parts = []
        for token in re.findall(r"\*|\?|[^*?]+", self.glob):
            if token == "*":
                parts.append(".*?")
            elif token == "?":
                parts.append(".")
            else:
                parts.append(re.escape(token))
        object.__setattr__(self, "_regex", re.compile("".join(parts), re.DOTALL))

    def matches(self, name: str) -> bool:
        decision = self._decisions.get(name)
        if decision is None:
            decision = self._regex.fullmatch(name) is not None
            self._decisions[name] = decision
        return decision


# ---- Infix operators ----


@dataclass(frozen=True)
class Dot(_ExplorerNode):
    """Path concatenation: ``left.right``."""
    left: ExplorerNode
    right: ExplorerNode


@dataclass(frozen=True)
class Or(_ExplorerNode):
    """Alternation: ``left|right``, both branches from the same nodes."""
    left: ExplorerNode
    right: ExplorerNode


# ---- Postfix operators ----


@dataclass(frozen=True)
class Plus(_ExplorerNode):
    """One or more repetitions of ``child``: ``child+``."""
    child: ExplorerNode


@dataclass(frozen=True)
class Star(_ExplorerNode):
    """Zero or more repetitions of ``child``: ``(child)*``."""
    child: ExplorerNode


@dataclass(frozen=True)
class Terminator(_ExplorerNode):
    """Explore ``child`` but end the path there: ``child$``."""
    child: ExplorerNode


ExplorerNode = Union[Literal, Wildcard, Dot, Or, Plus, Star, Terminator]
