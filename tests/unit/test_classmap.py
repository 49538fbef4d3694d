"""Unit tests for ClassMap definitions and compiled plans."""

from __future__ import annotations

from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from rowmap.core.enums import CollectionKind
from rowmap.core.exceptions import MappingDefinitionError
from rowmap.mapping.classmap import ClassMap
from rowmap.mapping.plan import ClassMapping, IdMapping, PropertyMapping


@dataclass
class User:
    id: int
    name: str
    email: str | None = None


@dataclass
class Post:
    id: int
    title: str


class Tag(BaseModel):
    id: int
    label: str


class UserMap(ClassMap):
    entity = User

    def __init__(self) -> None:
        super().__init__()
        self.table("users").id("id").map("name", "user_name", nullable=False, length=80)


class TestPlanDataClasses:
    def test_id_mapping_frozen(self) -> None:
        plan = IdMapping(attribute="id")
        with pytest.raises(AttributeError):
            plan.column = "pk"  # type: ignore[misc]

    def test_class_mapping_frozen(self) -> None:
        plan = ClassMapping(entity=User)
        with pytest.raises(AttributeError):
            plan.table = "other"  # type: ignore[misc]

    def test_entity_name_is_qualified(self) -> None:
        assert ClassMapping(entity=User).entity_name == f"{__name__}.User"


class TestClassMap:
    def test_basic_build(self) -> None:
        mapping = UserMap().build()
        assert mapping.entity is User
        assert mapping.table == "users"
        assert mapping.id == IdMapping(attribute="id", column=None, type_name="int")
        assert mapping.properties == [
            PropertyMapping(
                attribute="name",
                column="user_name",
                type_name="str",
                nullable=False,
                length=80,
            )
        ]

    def test_unset_names_stay_none(self) -> None:
        mapping = ClassMap(User).id("id").map("name").build()
        assert mapping.table is None
        assert mapping.id is not None and mapping.id.column is None
        assert mapping.properties[0].column is None

    def test_entity_from_constructor(self) -> None:
        assert ClassMap(Post).id("id").build().entity is Post

    def test_missing_entity_raises_error(self) -> None:
        with pytest.raises(MappingDefinitionError, match="entity"):
            ClassMap().build()

    def test_optional_annotation_is_unwrapped(self) -> None:
        mapping = ClassMap(User).map("email").build()
        assert mapping.properties[0].type_name == "str"

    def test_auto_fields_skip_id_and_relations(self) -> None:
        mapping = (
            ClassMap(User)
            .id("id")
            .references("email", User)
            .auto_fields()
            .build()
        )
        assert [p.attribute for p in mapping.properties] == ["name"]

    def test_auto_fields_keep_explicit_mapping(self) -> None:
        mapping = ClassMap(User).id("id").map("name", "full_name").auto_fields().build()
        columns = {p.attribute: p.column for p in mapping.properties}
        assert columns == {"name": "full_name", "email": None}

    def test_auto_fields_pydantic(self) -> None:
        mapping = ClassMap(Tag).id("id").auto_fields().build()
        assert [p.attribute for p in mapping.properties] == ["label"]
        assert mapping.properties[0].type_name == "str"

    def test_references(self) -> None:
        mapping = ClassMap(Post).id("id").references("author", User, "author_id").build()
        reference = mapping.references[0]
        assert reference.target_class is User
        assert reference.column == "author_id"
        assert reference.lazy is None

    def test_has_many(self) -> None:
        mapping = ClassMap(User).id("id").has_many("posts", Post, inverse=True).build()
        collection = mapping.collections[0]
        assert collection.kind is CollectionKind.ONE_TO_MANY
        assert collection.inverse is True
        assert not collection.is_many_to_many

    def test_has_many_to_many(self) -> None:
        mapping = (
            ClassMap(Post)
            .id("id")
            .has_many_to_many("tags", Tag, "post_tags", "post_id", "tag_id", lazy=False)
            .build()
        )
        collection = mapping.collections[0]
        assert collection.is_many_to_many
        assert (collection.table, collection.key_column, collection.child_key_column) == (
            "post_tags",
            "post_id",
            "tag_id",
        )
        assert collection.lazy is False

    def test_inverse_marks_last_collection(self) -> None:
        mapping = (
            ClassMap(Post)
            .id("id")
            .has_many_to_many("tags", Tag)
            .has_many("comments", User)
            .inverse()
            .build()
        )
        assert [c.inverse for c in mapping.collections] == [False, True]

    def test_not_lazy_marks_last_relation(self) -> None:
        mapping = (
            ClassMap(Post)
            .id("id")
            .has_many_to_many("tags", Tag)
            .not_lazy()
            .references("author", User)
            .not_lazy()
            .build()
        )
        assert mapping.collections[0].lazy is False
        assert mapping.references[0].lazy is False

    def test_modifiers_follow_latest_relation_kind(self) -> None:
        mapping = (
            ClassMap(Post)
            .id("id")
            .has_many("comments", User)
            .references("author", User)
            .not_lazy()
            .build()
        )
        assert mapping.references[0].lazy is False
        assert mapping.collections[0].lazy is None

    def test_inverse_after_reference_raises_error(self) -> None:
        class_map = ClassMap(Post).id("id").has_many("comments", User).references("author", User)
        with pytest.raises(MappingDefinitionError, match="inverse"):
            class_map.inverse()

    def test_modifiers_without_relation_raise_error(self) -> None:
        class_map = ClassMap(Post).id("id")
        with pytest.raises(MappingDefinitionError, match="inverse"):
            class_map.inverse()
        with pytest.raises(MappingDefinitionError, match="not_lazy"):
            class_map.not_lazy()

    def test_auto_fields_plain_class_skip_variadic_parameters(self) -> None:
        class Draft:
            def __init__(self, id: int, title: str, *rest: object, **extra: object) -> None:
                self.id = id
                self.title = title

        mapping = ClassMap(Draft).id("id").auto_fields().build()
        assert [p.attribute for p in mapping.properties] == ["title"]

    def test_read_only_and_access(self) -> None:
        mapping = ClassMap(User).id("id").read_only().access("field").build()
        assert mapping.read_only is True
        assert mapping.access == "field"

    def test_build_is_repeatable(self) -> None:
        class_map = UserMap()
        assert class_map.build() == class_map.build()
