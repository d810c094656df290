"""Entity metadata: which fields of a class are relations and which are plain.

Entities are dataclasses marked with ``@entity``. Relations are declared with
``relation()``; every other dataclass field is a plain attribute::

    @entity
    @dataclass(eq=False)
    class Department:
        name: str = ""
        employees: list[Employee] = relation(many=True, mapped_by="department")
        boss: Employee | None = relation()
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import MISSING, dataclass
from typing import Any, Iterable

from graph_cloner.errors import IllegalUsageError, InstantiationError, PropertyAccessError

logger = logging.getLogger(__name__)

ENTITY_MARKER = "__graph_entity__"
RELATION_METADATA = "graph_cloner.relation"
TAGS_METADATA = "graph_cloner.tags"


# ---- Declarations ----


@dataclass(frozen=True)
class RelationSpec:
    """How a relation field is declared."""
    many: bool = False
    mapped_by: tuple[str, ...] = ()  # path of the inverse back-reference


def _split_path(path: str | None) -> tuple[str, ...]:
    if path is None or not path.strip():
        return ()
    return tuple(segment.strip() for segment in path.strip().split("."))


def relation(
    *,
    many: bool = False,
    mapped_by: str | None = None,
    tags: Iterable[str] = (),
    default: Any = MISSING,
    default_factory: Any = MISSING,
    **kwargs: Any,
) -> Any:
    """Declare a relation field.

    ``mapped_by`` names the property path (dotted for embedded hops) on the
    related nodes that points back at the owner. Defaults to ``None`` for
    singular relations and an empty list for ``many=True``.
    """
    if default is MISSING and default_factory is MISSING:
        if many:
            default_factory = list
        else:
            default = None
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[RELATION_METADATA] = RelationSpec(many=many, mapped_by=_split_path(mapped_by))
    metadata[TAGS_METADATA] = frozenset(tags)
    return dataclasses.field(
        default=default, default_factory=default_factory, metadata=metadata, **kwargs
    )


def attribute(*, tags: Iterable[str] = (), **kwargs: Any) -> Any:
    """Declare a plain attribute carrying ``tags`` (e.g. ``"id"``, ``"version"``)."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[TAGS_METADATA] = frozenset(tags)
    return dataclasses.field(metadata=metadata, **kwargs)


def entity(cls: type) -> type:
    """Class decorator marking a dataclass as an introspectable entity."""
    if not dataclasses.is_dataclass(cls):
        raise IllegalUsageError(f"@entity requires a dataclass, got {cls.__name__}")
    setattr(cls, ENTITY_MARKER, True)
    return cls


# ---- Metadata ----


@dataclass(frozen=True)
class PropertyAccessor:
    """Reads and writes one named property of a node."""
    name: str

    def read(self, node: Any) -> Any:
        try:
            return getattr(node, self.name)
        except Exception as exc:
            raise PropertyAccessError(
                f"cannot read property '{self.name}' of {type(node).__name__}"
            ) from exc

    def write(self, node: Any, value: Any) -> None:
        try:
            setattr(node, self.name, value)
        except Exception as exc:
            raise PropertyAccessError(
                f"cannot write property '{self.name}' of {type(node).__name__}"
            ) from exc


@dataclass(frozen=True)
class PropertyInfo:
    """A plain attribute or relation of an entity class."""
    name: str
    accessor: PropertyAccessor
    relation: RelationSpec | None = None
    tags: frozenset[str] = frozenset()

    @property
    def is_relation(self) -> bool:
        return self.relation is not None

    @property
    def mapped_by(self) -> tuple[str, ...]:
        return self.relation.mapped_by if self.relation is not None else ()


class ClassInfo:
    """Introspection data of one raw entity class."""

    def __init__(self, entity_class: type) -> None:
        self.entity_class = entity_class
        self._properties: dict[str, PropertyInfo] = {}
        plain: list[str] = []
        many: list[str] = []
        singular: list[str] = []
        for f in dataclasses.fields(entity_class):
            spec = f.metadata.get(RELATION_METADATA)
            info = PropertyInfo(
                name=f.name,
                accessor=PropertyAccessor(f.name),
                relation=spec,
                tags=frozenset(f.metadata.get(TAGS_METADATA, ())),
            )
            self._properties[f.name] = info
            if spec is None:
                plain.append(f.name)
            elif spec.many:
                many.append(f.name)
            else:
                singular.append(f.name)
        self.properties: tuple[str, ...] = tuple(plain)
        # Collection-valued relations first: fewer round trips for lazy graphs.
        self.relations: tuple[str, ...] = tuple(many + singular)
        self._relation_set = frozenset(self.relations)

    def is_relation(self, name: str) -> bool:
        return name in self._relation_set

    def get_property_info(self, name: str) -> PropertyInfo | None:
        return self._properties.get(name)

    def mapped_by(self, name: str) -> tuple[str, ...]:
        info = self._properties.get(name)
        return info.mapped_by if info is not None else ()

    def instantiate(self) -> Any:
        try:
            return self.entity_class()
        except Exception as exc:
            raise InstantiationError(
                f"cannot instantiate {self.entity_class.__name__} without arguments"
            ) from exc

    def read(self, node: Any, name: str) -> Any:
        return self._get(name).accessor.read(node)

    def write(self, node: Any, name: str, value: Any) -> None:
        self._get(name).accessor.write(node, value)

    def _get(self, name: str) -> PropertyInfo:
        info = self._properties.get(name)
        if info is None:
            raise PropertyAccessError(
                f"{self.entity_class.__name__} has no property '{name}'"
            )
        return info

    def __repr__(self) -> str:
        return f"ClassInfo({self.entity_class.__name__})"


class EntityRegistry:
    """Cache of ``ClassInfo`` per raw entity class.

    Entries are only ever added, with insert-if-absent semantics, so one
    registry can be shared between threads.
    """

    def __init__(self) -> None:
        self._raw_classes: dict[type, type | None] = {}
        self._infos: dict[type, ClassInfo] = {}

    def entity_class(self, cls: type) -> type | None:
        """Return the nearest ``@entity`` class in the MRO of ``cls``, or None.

        Undecorated subclasses (e.g. lazy-loading proxies) resolve to the
        decorated ancestor.
        """
        try:
            return self._raw_classes[cls]
        except KeyError:
            pass
        raw = next((c for c in cls.__mro__ if ENTITY_MARKER in vars(c)), None)
        return self._raw_classes.setdefault(cls, raw)

    def is_entity(self, obj: Any) -> bool:
        return obj is not None and self.entity_class(type(obj)) is not None

    def get_class_info(self, obj: Any) -> ClassInfo | None:
        """Return the class info of ``obj``, or None if it is not an entity."""
        if obj is None:
            return None
        return self.get_for_class(type(obj))

    def get_for_class(self, cls: type) -> ClassInfo | None:
        raw = self.entity_class(cls)
        if raw is None:
            return None
        info = self._infos.get(raw)
        if info is None:
            info = self._infos.setdefault(raw, ClassInfo(raw))
            logger.debug("built class info for %s: relations=%s", raw.__name__, info.relations)
        return info

    def __contains__(self, cls: type) -> bool:
        return self.entity_class(cls) is not None


default_registry = EntityRegistry()
