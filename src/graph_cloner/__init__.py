"""Graph Cloner - Pattern-driven, identity-preserving copies of object graphs."""

from graph_cloner.cloner import GraphCloner, clone, clone_all, copy
from graph_cloner.errors import (
    GraphClonerError,
    IllegalUsageError,
    InstantiationError,
    PatternSyntaxError,
    PropertyAccessError,
    UnsupportedShapeError,
)
from graph_cloner.explorer import BaseEntityExplorer, EntityCollector, collect, collect_all
from graph_cloner.filters import PropertyFilter, allow_all, compose, exclude, exclude_tagged
from graph_cloner.introspection import (
    ClassInfo,
    EntityRegistry,
    attribute,
    default_registry,
    entity,
    relation,
)
from graph_cloner.nodes import MapEntry, NodeSet
from graph_cloner.parsing import PatternCompiler, compile_pattern
from graph_cloner.traversal import EntityExplorer, explore_pattern

__all__ = [
    # Main API
    "clone",
    "clone_all",
    "copy",
    "collect",
    "collect_all",
    "GraphCloner",
    "EntityCollector",
    # Entity declarations
    "entity",
    "relation",
    "attribute",
    "EntityRegistry",
    "ClassInfo",
    "default_registry",
    # Filters
    "PropertyFilter",
    "allow_all",
    "exclude",
    "exclude_tagged",
    "compose",
    # Patterns and traversal
    "PatternCompiler",
    "compile_pattern",
    "explore_pattern",
    "EntityExplorer",
    "BaseEntityExplorer",
    "MapEntry",
    "NodeSet",
    # Errors
    "GraphClonerError",
    "PatternSyntaxError",
    "UnsupportedShapeError",
    "InstantiationError",
    "PropertyAccessError",
    "IllegalUsageError",
]

__version__ = "0.1.0"
