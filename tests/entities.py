"""Entity classes and graph builders shared by the tests."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field

from graph_cloner import attribute, entity, relation

_ids = itertools.count(1)


@entity
@dataclass(eq=False)
class Bar:
    id: int | None = attribute(tags=("id",), default=None)
    name: str = ""


@entity
@dataclass(eq=False)
class Foo:
    id: int | None = attribute(tags=("id",), default=None)
    bar: Bar | None = relation()


@entity
@dataclass(eq=False)
class Baz:
    id: int | None = attribute(tags=("id",), default=None)
    bar: Bar | None = relation()


@entity
@dataclass(eq=False)
class Point:
    x: int = 0
    y: int = 0


@entity
@dataclass(eq=False)
class Node:
    id: int | None = attribute(tags=("id",), default=None)
    version: int = attribute(tags=("version",), default=0)
    name: str = ""
    point: Point | None = relation()
    foo: Foo | None = relation()
    baz: Baz | None = relation()
    children: dict[int, Edge] = relation(many=True, mapped_by="parent", default_factory=dict)
    parents: set[Edge] = relation(many=True, mapped_by="child", default_factory=set)


@entity
@dataclass(eq=False)
class Edge:
    id: int | None = attribute(tags=("id",), default=None)
    position: int = 0
    parent: Node | None = relation()
    child: Node | None = relation()
    bar: Bar | None = relation()


# ---- Lazy-loading stand-ins: undecorated subclasses ----


class NodeProxy(Node):
    pass


class EdgeProxy(Edge):
    pass


# ---- Small graphs ----


@entity
@dataclass(eq=False)
class Department:
    name: str = ""
    employees: list[Employee] = relation(many=True, mapped_by="department")
    boss: Employee | None = relation()


@entity
@dataclass(eq=False)
class Employee:
    name: str = ""
    tags: list[str] = field(default_factory=list)
    department: Department | None = relation()
    address: Address | None = relation()


@entity
@dataclass(eq=False)
class Address:
    city: str = ""


@entity
@dataclass(eq=False)
class Owner:
    name: str = ""
    pets: list[Pet] = relation(many=True, mapped_by="info.owner")


@entity
@dataclass(eq=False)
class PetInfo:
    """Embedded part of a pet holding the back-reference."""
    owner: Owner | None = relation()


@entity
@dataclass(eq=False)
class Pet:
    name: str = ""
    info: PetInfo | None = relation()


@entity
@dataclass(eq=False)
class Holder:
    """Relations of every container shape."""
    items: list[Address] = relation(many=True)
    pair: tuple = relation(many=True, default=())
    bag: set = relation(many=True, default_factory=set)
    frozen: frozenset = relation(many=True, default=frozenset())
    lookup: dict = relation(many=True, default_factory=dict)
    other: object = relation()


@entity
@dataclass(eq=False)
class Link:
    name: str = ""
    next: Link | None = relation()


@dataclass
class NotAnEntity:
    value: int = 0


@entity
@dataclass(eq=False)
class NeedsArgs:
    value: int


def build_graph(node_class: type = Node, edge_class: type = Edge) -> Node:
    """Build the nine-node test graph and return its root.

    Nodes ``1 -> 1.1, 1.2`` and ``1.x -> 1.x.1, 1.x.2, 1.x.3``, with the
    cycles ``1.1.1 -> 1`` and ``1.2.3 -> 1``. Every edge shares one ``Bar``;
    the foos and bazes share another.
    """
    bar1 = Bar(id=next(_ids), name="bar1")
    bar2 = Bar(id=next(_ids), name="bar2")
    foo1, foo2 = Foo(id=next(_ids), bar=bar1), Foo(id=next(_ids), bar=bar1)
    baz1, baz2 = Baz(id=next(_ids), bar=bar1), Baz(id=next(_ids), bar=bar1)

    def node(name: str, x: int, y: int, first: bool) -> Node:
        return node_class(
            id=next(_ids),
            name=name,
            point=Point(x, y),
            foo=foo1 if first else foo2,
            baz=baz1 if first else baz2,
        )

    n1 = node("1", 1, 2, True)
    n1_1 = node("1.1", 3, 4, True)
    n1_1_1 = node("1.1.1", 5, 6, False)
    n1_1_2 = node("1.1.2", 7, 8, True)
    n1_1_3 = node("1.1.3", 9, 10, False)
    n1_2 = node("1.2", 11, 12, True)
    n1_2_1 = node("1.2.1", 13, 14, False)
    n1_2_2 = node("1.2.2", 15, 16, True)
    n1_2_3 = node("1.2.3", 17, 18, False)

    def add_children(parent: Node, *children: Node) -> None:
        for position, child in enumerate(children, start=1):
            edge = edge_class(
                id=next(_ids), position=position, parent=parent, child=child, bar=bar2
            )
            parent.children[position] = edge
            child.parents.add(edge)

    add_children(n1, n1_1, n1_2)
    add_children(n1_1, n1_1_1, n1_1_2, n1_1_3)
    add_children(n1_2, n1_2_1, n1_2_2, n1_2_3)
    add_children(n1_1_1, n1)
    add_children(n1_2_3, n1)
    return n1


def child_at(node: Node, *positions: int) -> Node:
    """Follow child edges by position: ``child_at(n, 1, 2)`` is node ``x.1.2``."""
    for position in positions:
        node = node.children[position].child
    return node
