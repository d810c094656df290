"""Tests for entity declarations and the metadata registry."""

from dataclasses import dataclass

import pytest

from entities import Department, Edge, EdgeProxy, Employee, NeedsArgs, Node, NodeProxy, NotAnEntity
from graph_cloner.errors import IllegalUsageError, InstantiationError, PropertyAccessError
from graph_cloner.introspection import EntityRegistry, PropertyAccessor, RelationSpec, entity


@pytest.fixture
def registry():
    return EntityRegistry()


class TestDeclarations:
    def test_entity_requires_dataclass(self):
        with pytest.raises(IllegalUsageError):

            @entity
            class Plain:
                pass

    def test_relation_defaults(self):
        node = Node()
        assert node.foo is None
        assert node.children == {}
        assert Department().employees == []
        assert Department().employees is not Department().employees

    def test_mapped_by_path_split(self, registry):
        info = registry.get_for_class(Node)
        assert info.mapped_by("children") == ("parent",)
        assert info.mapped_by("foo") == ()
        assert info.mapped_by("name") == ()
        assert info.mapped_by("unknown") == ()

    def test_relation_spec(self, registry):
        prop = registry.get_for_class(Department).get_property_info("employees")
        assert prop.is_relation
        assert prop.relation == RelationSpec(many=True, mapped_by=("department",))

    def test_tags(self, registry):
        info = registry.get_for_class(Node)
        assert info.get_property_info("id").tags == frozenset({"id"})
        assert info.get_property_info("version").tags == frozenset({"version"})
        assert info.get_property_info("name").tags == frozenset()


class TestClassInfo:
    def test_properties_and_relations(self, registry):
        info = registry.get_for_class(Node)
        assert info.properties == ("id", "version", "name")
        assert info.relations == ("children", "parents", "point", "foo", "baz")

    def test_is_relation(self, registry):
        info = registry.get_for_class(Employee)
        assert info.is_relation("department")
        assert not info.is_relation("tags")
        assert not info.is_relation("missing")

    def test_instantiate(self, registry):
        clone = registry.get_for_class(Edge).instantiate()
        assert type(clone) is Edge
        assert clone.parent is None

    def test_instantiate_failure(self, registry):
        with pytest.raises(InstantiationError) as exc_info:
            registry.get_for_class(NeedsArgs).instantiate()
        assert isinstance(exc_info.value.__cause__, TypeError)

    def test_read_write(self, registry):
        info = registry.get_for_class(Employee)
        employee = Employee(name="ann")
        assert info.read(employee, "name") == "ann"
        info.write(employee, "name", "bob")
        assert employee.name == "bob"

    def test_unknown_property(self, registry):
        info = registry.get_for_class(Employee)
        with pytest.raises(PropertyAccessError):
            info.read(Employee(), "salary")


class TestPropertyAccessor:
    def test_read_failure_wrapped(self):
        with pytest.raises(PropertyAccessError) as exc_info:
            PropertyAccessor("missing").read(object())
        assert isinstance(exc_info.value.__cause__, AttributeError)

    def test_write_failure_wrapped(self):
        @dataclass(frozen=True)
        class Frozen:
            value: int = 0

        with pytest.raises(PropertyAccessError):
            PropertyAccessor("value").write(Frozen(), 1)


class TestRegistry:
    def test_proxy_resolves_to_raw_class(self, registry):
        assert registry.entity_class(NodeProxy) is Node
        assert registry.entity_class(EdgeProxy) is Edge
        assert registry.get_class_info(NodeProxy()) is registry.get_for_class(Node)

    def test_non_entities(self, registry):
        assert registry.get_class_info(None) is None
        assert registry.get_class_info(NotAnEntity()) is None
        assert registry.get_class_info("text") is None
        assert not registry.is_entity(NotAnEntity())
        assert NotAnEntity not in registry
        assert Node in registry

    def test_info_cached(self, registry):
        first = registry.get_for_class(Node)
        assert registry.get_for_class(Node) is first
        assert registry.get_class_info(Node()) is first
