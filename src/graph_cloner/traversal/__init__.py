"""Traversal plans and the engine that evaluates them."""

from graph_cloner.traversal.collaborator import EntityExplorer
from graph_cloner.traversal.engine import explore, explore_pattern
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

__all__ = [
    "EntityExplorer",
    "ExplorerNode",
    "Literal",
    "Wildcard",
    "Dot",
    "Or",
    "Plus",
    "Star",
    "Terminator",
    "explore",
    "explore_pattern",
]
