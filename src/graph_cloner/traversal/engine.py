"""Traversal engine: evaluates a compiled pattern over a set of nodes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable

from graph_cloner.nodes import NodeSet
from graph_cloner.traversal.types import (
    Dot,
    ExplorerNode,
    Literal,
    Or,
    Plus,
    Star,
    Terminator,
    Wildcard,
)

if TYPE_CHECKING:
    from graph_cloner.parsing.pattern_parser import PatternCompiler
    from graph_cloner.traversal.collaborator import EntityExplorer


def explore_pattern(
    pattern: str,
    roots: Iterable[Any],
    explorer: EntityExplorer,
    compiler: PatternCompiler | None = None,
) -> NodeSet:
    """Compile ``pattern`` (cached) and evaluate it from ``roots``."""
    if compiler is None:
        from graph_cloner.parsing.pattern_parser import default_compiler as compiler
    return explore(compiler.compile(pattern), roots, explorer)


# ---- Dispatch ----


def explore(node: ExplorerNode, nodes: Iterable[Any], explorer: EntityExplorer) -> NodeSet:
    """Evaluate ``node`` over ``nodes``, returning the nodes reached."""
    if isinstance(node, Literal):
        return _explore_literal(node, nodes, explorer)
    elif isinstance(node, Wildcard):
        return _explore_wildcard(node, nodes, explorer)
    elif isinstance(node, Dot):
        return explore(node.right, explore(node.left, nodes, explorer), explorer)
    elif isinstance(node, Or):
        return explore(node.left, nodes, explorer).union(explore(node.right, nodes, explorer))
    elif isinstance(node, Plus):
        return _explore_repeated(node.child, nodes, explorer, include_start=False)
    elif isinstance(node, Star):
        return _explore_repeated(node.child, nodes, explorer, include_start=True)
    elif isinstance(node, Terminator):
        # Explore for the side effects, but end the path here.
        explore(node.child, nodes, explorer)
        return NodeSet()
    else:
        raise ValueError(f"unknown explorer node: {type(node).__name__}")


# ---- Leaves ----


def _explore_literal(node: Literal, nodes: Iterable[Any], explorer: EntityExplorer) -> NodeSet:
    explored = NodeSet()
    for entity in nodes:
        related = explorer.explore(entity, node.name)
        if related is not None:
            explored.update(related)
    return explored


def _explore_wildcard(node: Wildcard, nodes: Iterable[Any], explorer: EntityExplorer) -> NodeSet:
    explored = NodeSet()
    for entity in nodes:
        for name in explorer.get_properties(entity):
            if not node.matches(name):
                continue
            related = explorer.explore(entity, name)
            if related is not None:
                explored.update(related)
    return explored


# ---- Repetition ----


def _explore_repeated(
    child: ExplorerNode,
    nodes: Iterable[Any],
    explorer: EntityExplorer,
    include_start: bool,
) -> NodeSet:
    """Fixpoint of ``child`` from ``nodes``.

    Each round only keeps nodes not visited before, so the frontier shrinks
    and the loop terminates on cyclic graphs.
    """
    frontier = NodeSet(nodes)
    visited = NodeSet(frontier) if include_start else NodeSet()
    while True:
        frontier = explore(child, frontier, explorer).difference(visited)
        if not frontier:
            return visited
        visited.update(frontier)
