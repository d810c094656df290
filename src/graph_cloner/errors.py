"""Exception types raised while compiling patterns and cloning graphs."""


class PatternSyntaxError(SyntaxError):
    """A path pattern could not be compiled."""


class GraphClonerError(Exception):
    """Base class for errors raised while exploring or cloning a graph."""


class UnsupportedShapeError(GraphClonerError, TypeError):
    """A relation holds a collection or mapping type that cannot be mirrored."""


class InstantiationError(GraphClonerError):
    """An entity class could not be instantiated without arguments."""


class PropertyAccessError(GraphClonerError):
    """Reading or writing an entity property failed."""


class IllegalUsageError(GraphClonerError, ValueError):
    """The API was used in a way it does not support."""
