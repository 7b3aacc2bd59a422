"""
Test Suite for pig-graph
=========================
Tests for the item hierarchy, the factory, builders, the graph validator
and the JSON-LD round trip of every item type.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pig_graph import (
    AnEntity,
    AnEntityBuilder,
    AProperty,
    AReference,
    ARelationship,
    ARelationshipBuilder,
    Code,
    Entity,
    GraphValidator,
    Identifiable,
    ImmutableFieldError,
    Item,
    ItemTypeError,
    PigItem,
    PigItemType,
    Property,
    PropertyBuilder,
    Reference,
    Relationship,
    Severity,
)
from pig_graph.validator.graph import graph_items


# ===========================================================================
# Fixtures
# ===========================================================================


@pytest.fixture
def property_input() -> dict[str, Any]:
    return {
        "id": "dcterms:type",
        "itemType": "pig:Property",
        "hasClass": "pig:Property",
        "title": [{"value": "The type or category", "lang": "en"}],
        "description": [{"value": "A property used by anEntity or aRelationship", "lang": "en"}],
        "datatype": "xs:string",
        "minCount": 0,
        "maxCount": 1,
        "maxLength": 20,
        "defaultValue": "default_category",
    }


@pytest.fixture
def reference_input() -> dict[str, Any]:
    return {
        "id": "o:shows",
        "itemType": "pig:Reference",
        "hasClass": "pig:Reference",
        "title": [{"value": "shows", "lang": "en"}],
        "eligibleTarget": ["o:Entity_1"],
    }


@pytest.fixture
def entity_input() -> dict[str, Any]:
    return {
        "id": "o:Entity_1",
        "itemType": "pig:Entity",
        "hasClass": "pig:Entity",
        "title": [{"value": "Title of Entity Class 1"}],
        "description": [{"value": "Description of o:Entity_1"}],
        "icon": {"value": "&#x2662;"},
        "eligibleReference": [],
        "eligibleProperty": ["dcterms:type"],
    }


@pytest.fixture
def relationship_input() -> dict[str, Any]:
    return {
        "id": "o:relates",
        "itemType": "pig:Relationship",
        "hasClass": "pig:Relationship",
        "title": [{"value": "relates", "lang": "en"}],
        "eligibleSource": ["o:Entity_1"],
        "eligibleTarget": ["o:Entity_1"],
    }


@pytest.fixture
def a_property_input() -> dict[str, Any]:
    return {"itemType": "pig:aProperty", "hasClass": "dcterms:type", "value": "A category"}


@pytest.fixture
def a_reference_input() -> dict[str, Any]:
    return {"itemType": "pig:aReference", "hasClass": "o:shows", "idRef": "d:doc-1"}


@pytest.fixture
def an_entity_input() -> dict[str, Any]:
    return {
        "id": "d:anEntity_1",
        "itemType": "pig:anEntity",
        "hasClass": "o:Entity_1",
        "revision": "v1.0",
        "modified": "2024-05-01T10:00:00Z",
        "creator": "test_user",
        "title": [{"value": "Title of anEntity 1", "lang": "en"}],
        "description": [{"value": "Description of d:anEntity_1", "lang": "en"}],
        "hasProperty": [
            {"itemType": "pig:aProperty", "hasClass": "dcterms:type", "value": "Category of anEntity_1"},
        ],
        "hasTarget": [
            {"itemType": "pig:aReference", "hasClass": "o:shows", "idRef": "d:doc-1"},
        ],
    }


@pytest.fixture
def a_relationship_input() -> dict[str, Any]:
    return {
        "id": "d:aRelationship_1",
        "itemType": "pig:aRelationship",
        "hasClass": "o:relates",
        "modified": "2024-05-01T10:00:00Z",
        "hasProperty": [],
        "hasSource": [{"itemType": "pig:aReference", "hasClass": "o:relates", "idRef": "d:anEntity_1"}],
        "hasTarget": [{"itemType": "pig:aReference", "hasClass": "o:relates", "idRef": "d:anEntity_2"}],
    }


@pytest.fixture
def an_entity_jsonld() -> dict[str, Any]:
    return {
        "@id": "d:pump-1",
        "pig:itemType": {"@id": "pig:anEntity"},
        "@type": {"@id": "o:Pump"},
        "dcterms:title": [{"@value": "Feed pump", "@language": "en"}],
        "dcterms:modified": "2024-05-01T10:00:00Z",
        "o:Pressure": [{"pig:itemType": {"@id": "pig:aProperty"}, "@value": "5.5"}],
        "o:shows": [{"pig:itemType": {"@id": "pig:aTargetLink"}, "@id": "d:doc-1"}],
    }


@pytest.fixture
def graph_document(property_input: dict[str, Any], entity_input: dict[str, Any], an_entity_jsonld: dict[str, Any]) -> dict[str, Any]:
    return {
        "@context": {"pig": "https://product-information-graph.org/v0.2/metamodel#"},
        "@graph": [
            Property().set(property_input).get_jsonld(),
            Entity().set(entity_input).get_jsonld(),
            an_entity_jsonld,
        ],
    }


# ===========================================================================
# Item Tests
# ===========================================================================


class TestItemConstruction:

    def test_abstract_classes_raise(self) -> None:
        with pytest.raises(ItemTypeError):
            Item()
        with pytest.raises(ItemTypeError):
            Identifiable()

    def test_item_type_fixed_by_class(self) -> None:
        assert Property().item_type == PigItemType.PROPERTY
        assert AnEntity().item_type.value == "pig:anEntity"

    def test_matching_item_type_accepted(self) -> None:
        assert isinstance(Property("pig:Property"), Property)
        assert isinstance(Entity(PigItemType.ENTITY), Entity)

    def test_wrong_item_type_raises(self) -> None:
        with pytest.raises(ItemTypeError):
            Property("pig:Entity")

    def test_item_type_error_is_a_type_error(self) -> None:
        with pytest.raises(TypeError):
            AReference(PigItemType.A_PROPERTY)

    def test_unset_item(self) -> None:
        p = Property()
        assert p.get() is None
        assert p.status() is None
        assert p.id is None


class TestSetAndGet:

    def test_property_snapshot(self, property_input: dict[str, Any]) -> None:
        p = Property().set(property_input)
        assert p.status().ok
        assert p.get() == property_input
        assert p.id == "dcterms:type"
        assert p.datatype == "xs:string"
        assert p.max_length == 20

    def test_set_returns_item(self, property_input: dict[str, Any]) -> None:
        p = Property()
        assert p.set(property_input) is p

    def test_input_not_modified(self, property_input: dict[str, Any]) -> None:
        data = {k: v for k, v in property_input.items() if k not in ("minCount", "maxCount")}
        before = dict(data)
        Property().set(data)
        assert data == before

    def test_property_count_defaults(self, property_input: dict[str, Any]) -> None:
        del property_input["minCount"]
        del property_input["maxCount"]
        p = Property().set(property_input)
        assert p.min_count == 0
        assert p.max_count == 1

    def test_max_count_default_follows_min_count(self, property_input: dict[str, Any]) -> None:
        del property_input["maxCount"]
        property_input["minCount"] = 2
        p = Property().set(property_input)
        assert p.status().ok
        assert p.min_count == 2
        assert p.max_count == 2

    def test_explicit_max_count_below_min_count_rejected(self, property_input: dict[str, Any]) -> None:
        property_input["minCount"] = 2
        property_input["maxCount"] = 1
        p = Property().set(property_input)
        assert p.status().status == Code.SCHEMA_VALIDATION_FAILED
        assert p.get() is None

    def test_xsd_prefix_normalized(self, property_input: dict[str, Any]) -> None:
        property_input["datatype"] = "xsd:integer"
        p = Property().set(property_input)
        assert p.status().ok
        assert p.datatype == "xs:integer"

    def test_unsupported_datatype_tolerated(self, property_input: dict[str, Any], caplog: pytest.LogCaptureFixture) -> None:
        property_input["datatype"] = "xs:gYear"
        with caplog.at_level(logging.WARNING):
            p = Property().set(property_input)
        assert p.status().ok
        assert "xs:gYear" in caplog.text

    def test_none_values_stripped(self, property_input: dict[str, Any]) -> None:
        property_input["pattern"] = None
        p = Property().set(property_input)
        assert p.status().ok
        assert "pattern" not in p.get()

    def test_bare_string_title_coerced(self, property_input: dict[str, Any]) -> None:
        property_input["title"] = "Category"
        p = Property().set(property_input)
        assert p.get()["title"] == [{"value": "Category"}]

    def test_single_text_object_coerced(self, property_input: dict[str, Any]) -> None:
        property_input["description"] = {"value": "Beschreibung", "lang": "de"}
        p = Property().set(property_input)
        assert p.get()["description"] == [{"value": "Beschreibung", "lang": "de"}]

    def test_entity_class_snapshot(self, entity_input: dict[str, Any]) -> None:
        e = Entity().set(entity_input)
        assert e.status().ok
        assert e.get() == entity_input

    def test_an_entity_owned_items(self, an_entity_input: dict[str, Any]) -> None:
        e = AnEntity().set(an_entity_input)
        assert e.status().ok
        assert e.get() == an_entity_input
        assert len(e.has_property) == 1
        assert isinstance(e.has_property[0], AProperty)
        assert e.has_property[0].value == "Category of anEntity_1"
        assert e.has_property[0].has_class == "dcterms:type"
        assert isinstance(e.has_target[0], AReference)
        assert e.has_target[0].id_ref == "d:doc-1"

    def test_an_entity_arrays_always_present(self, an_entity_input: dict[str, Any]) -> None:
        del an_entity_input["hasProperty"]
        del an_entity_input["hasTarget"]
        snapshot = AnEntity().set(an_entity_input).get()
        assert snapshot["hasProperty"] == []
        assert snapshot["hasTarget"] == []

    def test_modified_synthesized(self, an_entity_input: dict[str, Any]) -> None:
        del an_entity_input["modified"]
        e = AnEntity().set(an_entity_input)
        assert e.status().ok
        assert datetime.fromisoformat(e.modified).tzinfo is not None

    def test_modified_gets_timezone(self, an_entity_input: dict[str, Any]) -> None:
        an_entity_input["modified"] = "2024-05-01T10:00:00"
        e = AnEntity().set(an_entity_input)
        assert e.modified == "2024-05-01T10:00:00Z"

    def test_an_entity_needs_title_or_description(self, an_entity_input: dict[str, Any]) -> None:
        del an_entity_input["title"]
        del an_entity_input["description"]
        e = AnEntity().set(an_entity_input)
        assert e.status().status == Code.SCHEMA_VALIDATION_FAILED

    def test_relationship_instance(self, a_relationship_input: dict[str, Any]) -> None:
        r = ARelationship().set(a_relationship_input)
        assert r.status().ok
        assert r.get() == a_relationship_input
        assert r.has_source[0].id_ref == "d:anEntity_1"
        assert r.has_target[0].id_ref == "d:anEntity_2"

    def test_relationship_instance_needs_source(self, a_relationship_input: dict[str, Any]) -> None:
        a_relationship_input["hasSource"] = []
        r = ARelationship().set(a_relationship_input)
        assert not r.status().ok
        assert r.get() is None

    def test_a_property_value_or_id_ref(self) -> None:
        both = {"itemType": "pig:aProperty", "hasClass": "o:Color", "value": "red", "idRef": "o:red"}
        neither = {"itemType": "pig:aProperty", "hasClass": "o:Color"}
        assert AProperty().set(both).status().status == Code.SCHEMA_VALIDATION_FAILED
        assert AProperty().set(neither).status().status == Code.SCHEMA_VALIDATION_FAILED
        assert AProperty().set({**neither, "idRef": "o:red"}).status().ok

    def test_owned_entry_failure_rejects_owner(self, an_entity_input: dict[str, Any]) -> None:
        an_entity_input["hasProperty"][0]["idRef"] = "o:x"
        e = AnEntity().set(an_entity_input)
        assert not e.status().ok
        assert e.get() is None
        assert e.has_property == []


class TestValidationErrors:

    def test_not_an_object(self) -> None:
        p = Property().set(["not", "an", "object"])
        assert p.status().status == Code.INSTANTIATION_FAILED
        assert p.get() is None

    def test_schema_failure(self, property_input: dict[str, Any]) -> None:
        del property_input["datatype"]
        status = Property().set(property_input).status()
        assert status.status == Code.SCHEMA_VALIDATION_FAILED
        assert status.category == "schema"
        assert "datatype" in status.status_text

    def test_unknown_field_rejected(self, property_input: dict[str, Any]) -> None:
        property_input["colour"] = "blue"
        assert Property().set(property_input).status().status == Code.SCHEMA_VALIDATION_FAILED

    def test_class_and_specialization_exclusive(self, property_input: dict[str, Any]) -> None:
        property_input["specializes"] = "o:Base"
        assert Property().set(property_input).status().status == Code.SCHEMA_VALIDATION_FAILED

    def test_item_type_change_rejected(self, property_input: dict[str, Any]) -> None:
        property_input["itemType"] = "pig:Entity"
        status = Property().set(property_input).status()
        assert status.status == Code.ITEM_TYPE_CHANGED
        assert status.category == "item"

    def test_instance_requires_class(self, an_entity_input: dict[str, Any]) -> None:
        del an_entity_input["hasClass"]
        assert AnEntity().set(an_entity_input).status().status == Code.HAS_CLASS_MISSING

    def test_a_reference_requires_class(self) -> None:
        status = AReference().set({"itemType": "pig:aReference", "idRef": "d:x"}).status()
        assert status.status == Code.HAS_CLASS_MISSING

    def test_reference_needs_target(self, reference_input: dict[str, Any]) -> None:
        reference_input["eligibleTarget"] = []
        assert Reference().set(reference_input).status().status == Code.TOO_FEW_ELEMENTS

    def test_localized_message(self, property_input: dict[str, Any]) -> None:
        p = Property(lang="de").set(property_input)
        status = p.set({**property_input, "id": "o:other"}).status()
        assert status.status == Code.ID_CHANGED
        assert "Die ID" in status.status_text


class TestIdImmutability:

    def test_second_set_with_other_id_rejected(self, property_input: dict[str, Any]) -> None:
        p = Property().set(property_input)
        p.set({**property_input, "id": "o:other"})
        assert p.status().status == Code.ID_CHANGED
        assert p.id == "dcterms:type"
        assert p.get() is None

    def test_second_set_with_same_id_accepted(self, property_input: dict[str, Any]) -> None:
        p = Property().set(property_input)
        p.set({**property_input, "maxLength": 40})
        assert p.status().ok
        assert p.max_length == 40

    def test_specializes_locked(self, property_input: dict[str, Any]) -> None:
        del property_input["hasClass"]
        property_input["specializes"] = "o:Base"
        p = Property().set(property_input)
        assert p.status().ok
        p.set({**property_input, "specializes": "o:Other"})
        assert p.status().status == Code.SPECIALIZES_CHANGED
        assert p.specializes == "o:Base"

    def test_failed_set_keeps_committed_state(self, property_input: dict[str, Any]) -> None:
        p = Property().set(property_input)
        p.set({**property_input, "maxLength": -1})
        assert not p.status().ok
        assert p.max_length == 20

    def test_assignment_raises(self, property_input: dict[str, Any]) -> None:
        p = Property().set(property_input)
        with pytest.raises(ImmutableFieldError):
            p.id = "o:other"
        with pytest.raises(AttributeError):
            p.datatype = "xs:integer"
        with pytest.raises(ImmutableFieldError):
            p.item_type = PigItemType.ENTITY


class TestMultiLanguageText:

    def test_empty_title_valid(self, an_entity_input: dict[str, Any]) -> None:
        an_entity_input["title"] = []
        assert AnEntity().set(an_entity_input).status().ok

    def test_single_entry_without_lang_valid(self, an_entity_input: dict[str, Any]) -> None:
        an_entity_input["title"] = [{"value": "Pump"}]
        assert AnEntity().set(an_entity_input).status().ok

    def test_two_entries_one_missing_lang_rejected(self, an_entity_input: dict[str, Any]) -> None:
        an_entity_input["title"] = [{"value": "Pump", "lang": "en"}, {"value": "Pumpe"}]
        status = AnEntity().set(an_entity_input).status()
        assert status.status == Code.TEXT_ITEM_LANG_MISSING
        assert status.category == "text"

    def test_two_entries_with_lang_valid(self, property_input: dict[str, Any]) -> None:
        property_input["title"] = [{"value": "Type", "lang": "en"}, {"value": "Typ", "lang": "de"}]
        assert Property().set(property_input).status().ok


class TestEligibleConstraints:

    def test_eligible_property_absent_is_unrestricted(self, entity_input: dict[str, Any]) -> None:
        del entity_input["eligibleProperty"]
        e = Entity().set(entity_input)
        assert e.status().ok
        assert e.eligible_property is None
        assert "eligibleProperty" not in e.get()

    def test_eligible_property_empty_is_recorded(self, entity_input: dict[str, Any]) -> None:
        entity_input["eligibleProperty"] = []
        e = Entity().set(entity_input)
        assert e.status().ok
        assert e.eligible_property == []
        assert e.get()["eligibleProperty"] == []

    def test_eligible_source_empty_rejected(self, relationship_input: dict[str, Any]) -> None:
        relationship_input["eligibleSource"] = []
        status = Relationship().set(relationship_input).status()
        assert status.status == Code.TOO_FEW_ELEMENTS
        assert status.category == "array"

    def test_eligible_source_absent_accepted(self, relationship_input: dict[str, Any]) -> None:
        del relationship_input["eligibleSource"]
        assert Relationship().set(relationship_input).status().ok

    def test_eligible_target_empty_rejected(self, relationship_input: dict[str, Any]) -> None:
        relationship_input["eligibleTarget"] = []
        assert Relationship().set(relationship_input).status().status == Code.TOO_FEW_ELEMENTS


# ===========================================================================
# JSON-LD Tests
# ===========================================================================


ROUND_TRIP_CASES = [
    (Property, "property_input"),
    (Reference, "reference_input"),
    (Entity, "entity_input"),
    (Relationship, "relationship_input"),
    (AProperty, "a_property_input"),
    (AReference, "a_reference_input"),
    (AnEntity, "an_entity_input"),
    (ARelationship, "a_relationship_input"),
]


class TestJsonLd:

    @pytest.mark.parametrize("cls,fixture", ROUND_TRIP_CASES)
    def test_round_trip(self, cls: type[Item], fixture: str, request: pytest.FixtureRequest) -> None:
        item = cls().set(request.getfixturevalue(fixture))
        assert item.status().ok
        jld = item.get_jsonld()
        again = cls().set_jsonld(jld)
        assert again.status().ok, str(again.status())
        assert again.get() == item.get()

    def test_property_jsonld_shape(self, property_input: dict[str, Any]) -> None:
        jld = Property().set(property_input).get_jsonld()
        assert jld["@id"] == "dcterms:type"
        assert jld["pig:itemType"] == {"@id": "pig:Property"}
        assert jld["@type"] == {"@id": "pig:Property"}
        assert jld["sh:datatype"] == {"@id": "xs:string"}
        assert jld["sh:maxLength"] == 20
        assert jld["dcterms:title"] == [{"@value": "The type or category", "@language": "en"}]

    def test_configurables_grouped_by_class(self, an_entity_input: dict[str, Any]) -> None:
        jld = AnEntity().set(an_entity_input).get_jsonld()
        assert "hasProperty" not in jld
        assert "hasTarget" not in jld
        assert jld["dcterms:type"] == [
            {"pig:itemType": {"@id": "pig:aProperty"}, "@value": "Category of anEntity_1"},
        ]
        assert jld["o:shows"] == [{"pig:itemType": {"@id": "pig:aTargetLink"}, "@id": "d:doc-1"}]

    def test_sources_and_targets_share_class_key(self, a_relationship_input: dict[str, Any]) -> None:
        jld = ARelationship().set(a_relationship_input).get_jsonld()
        assert [e["pig:itemType"]["@id"] for e in jld["o:relates"]] == ["pig:aSourceLink", "pig:aTargetLink"]

    def test_set_jsonld(self, an_entity_jsonld: dict[str, Any]) -> None:
        e = AnEntity().set_jsonld(an_entity_jsonld)
        assert e.status().ok
        assert e.id == "d:pump-1"
        assert e.has_class == "o:Pump"
        assert e.has_property[0].has_class == "o:Pressure"
        assert e.has_property[0].value == "5.5"
        assert e.has_target[0].id_ref == "d:doc-1"

    def test_jsonld_reproduced(self, an_entity_jsonld: dict[str, Any]) -> None:
        assert AnEntity().set_jsonld(an_entity_jsonld).get_jsonld() == an_entity_jsonld

    def test_set_jsonld_does_not_modify_input(self, an_entity_jsonld: dict[str, Any]) -> None:
        before = {k: v for k, v in an_entity_jsonld.items()}
        AnEntity().set_jsonld(an_entity_jsonld)
        assert an_entity_jsonld == before

    def test_plain_a_reference_tag_accepted(self, an_entity_jsonld: dict[str, Any]) -> None:
        an_entity_jsonld["o:shows"] = [{"pig:itemType": {"@id": "pig:aReference"}, "@id": "d:doc-2"}]
        e = AnEntity().set_jsonld(an_entity_jsonld)
        assert e.has_target[0].id_ref == "d:doc-2"

    def test_primitive_configurable(self, an_entity_jsonld: dict[str, Any]) -> None:
        an_entity_jsonld["o:Weight"] = 12
        e = AnEntity().set_jsonld(an_entity_jsonld)
        values = {p.has_class: p.value for p in e.has_property}
        assert values["o:Weight"] == "12"

    def test_get_jsonld_of_invalid_item(self) -> None:
        assert Property().set({}).get_jsonld() is None


# ===========================================================================
# Factory Tests
# ===========================================================================


class TestPigItem:

    def test_create(self) -> None:
        assert isinstance(PigItem.create("pig:Property"), Property)
        assert isinstance(PigItem.create(PigItemType.A_RELATIONSHIP), ARelationship)

    def test_create_unknown(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR):
            assert PigItem.create("pig:Unknown") is None
        assert "pig:Unknown" in caplog.text

    def test_create_passes_language(self) -> None:
        assert PigItem.create("pig:Entity", lang="fr").lang == "fr"

    def test_type_predicates(self) -> None:
        assert PigItem.is_class("pig:Entity")
        assert not PigItem.is_class("pig:anEntity")
        assert PigItem.is_instance(PigItemType.A_PROPERTY)
        assert PigItem.is_instantiable("pig:anEntity")
        assert not PigItem.is_instantiable("pig:aProperty")
        assert not PigItem.is_instantiable("pig:aReference")
        assert PigItem.is_supported_type("pig:aReference")
        assert not PigItem.is_supported_type("pig:Package")
        assert len(PigItem.supported_types()) == 8

    def test_supported_datatypes(self) -> None:
        assert PigItem.is_supported_datatype("xs:boolean")
        assert PigItem.is_supported_datatype("xsd:dateTime")
        assert not PigItem.is_supported_datatype("xs:gYear")
        assert not PigItem.is_supported_datatype(None)

    def test_from_jsonld(self, an_entity_jsonld: dict[str, Any]) -> None:
        status = PigItem.from_jsonld(an_entity_jsonld)
        assert status.ok
        assert isinstance(status.response, AnEntity)
        assert status.response_type == "pig:anEntity"

    def test_from_jsonld_not_an_object(self) -> None:
        assert PigItem.from_jsonld("d:x").status == Code.INSTANTIATION_FAILED

    def test_from_jsonld_missing_item_type(self) -> None:
        assert PigItem.from_jsonld({"@id": "d:x"}).status == Code.REQUIRED_FIELD_MISSING

    def test_from_jsonld_unknown_item_type(self) -> None:
        status = PigItem.from_jsonld({"@id": "d:x", "pig:itemType": {"@id": "pig:Unknown"}})
        assert status.status == Code.UNKNOWN_ITEM_TYPE

    def test_from_jsonld_owned_type_not_allowed(self) -> None:
        status = PigItem.from_jsonld({"pig:itemType": {"@id": "pig:aProperty"}, "@value": "1"})
        assert status.status == Code.ITEM_TYPE_NOT_ALLOWED
        assert status.category == "instantiation"

    def test_from_jsonld_invalid_item(self, an_entity_jsonld: dict[str, Any]) -> None:
        del an_entity_jsonld["@type"]
        assert PigItem.from_jsonld(an_entity_jsonld).status == Code.HAS_CLASS_MISSING


# ===========================================================================
# Builder Tests
# ===========================================================================


class TestPropertyBuilder:

    def test_double_with_range(self) -> None:
        p = (
            PropertyBuilder.double("Pressure", "Pressure")
            .with_title("Druck", lang="de")
            .with_range(0, 250)
            .with_unit("bar")
            .build()
        )
        assert p.status().ok, str(p.status())
        assert p.id == "o:Pressure"
        assert p.has_class == "pig:Property"
        assert p.datatype == "xs:double"
        assert p.min_inclusive == 0
        assert p.max_inclusive == 250
        assert p.unit == "bar"

    def test_specializing(self) -> None:
        p = PropertyBuilder.string("Name", "Name", max_length=80).specializing("o:Label").build()
        assert p.status().ok
        assert p.specializes == "o:Label"
        assert p.has_class is None
        assert p.max_length == 80

    def test_eligible_values(self) -> None:
        p = (
            PropertyBuilder.string("Color", "Color")
            .with_eligible_value("red", "Red")
            .with_eligible_value("blue", "Blue")
            .build()
        )
        assert p.status().ok
        assert [v["id"] for v in p.get()["eligibleValue"]] == ["o:red", "o:blue"]

    def test_composed(self) -> None:
        p = PropertyBuilder.composed("Dimensions", "Dimensions", "Width", "o:Height").build()
        assert p.status().ok
        assert p.composed_property == ["o:Width", "o:Height"]

    def test_count(self) -> None:
        p = PropertyBuilder.integer("Ports", "Ports").with_count(1, 8).build()
        assert (p.min_count, p.max_count) == (1, 8)

    def test_invalid_count_reported(self) -> None:
        p = PropertyBuilder.integer("Ports", "Ports").with_count(3, 1).build()
        assert p.status().status == Code.SCHEMA_VALIDATION_FAILED

    def test_to_dict(self) -> None:
        data = PropertyBuilder.boolean("Active", "Active").to_dict()
        assert data["itemType"] == "pig:Property"
        assert data["datatype"] == "xs:boolean"


class TestInstanceBuilders:

    def test_an_entity(self) -> None:
        e = (
            AnEntityBuilder("pump-1", "o:Pump")
            .with_title("Feed pump P-1")
            .with_property("o:Pressure", 5.5)
            .with_property("o:Active", True)
            .with_target("o:shows", "d:doc-1")
            .by("alice", revision="v1")
            .build()
        )
        assert e.status().ok, str(e.status())
        assert e.id == "d:pump-1"
        assert [p.value for p in e.has_property] == ["5.5", "true"]
        assert e.has_target[0].has_class == "o:shows"
        assert e.creator == "alice"
        assert e.revision == "v1"

    def test_an_entity_modified_at(self) -> None:
        e = (
            AnEntityBuilder("d:pump-1", "o:Pump")
            .with_description("no title")
            .modified_at("2024-05-01T10:00:00Z")
            .revised_from("v0")
            .build()
        )
        assert e.modified == "2024-05-01T10:00:00Z"
        assert e.prior_revision == ["v0"]

    def test_two_titles_need_languages(self) -> None:
        e = AnEntityBuilder("pump-1", "o:Pump").with_title("Pump").with_title("Pumpe", lang="de").build()
        assert e.status().status == Code.TEXT_ITEM_LANG_MISSING

    def test_a_relationship(self) -> None:
        r = (
            ARelationshipBuilder("feeds-1", "o:feeds")
            .from_source("o:feeds", "d:pump-1")
            .to_target("o:feeds", "d:tank-1")
            .build()
        )
        assert r.status().ok, str(r.status())
        assert r.has_source[0].id_ref == "d:pump-1"
        assert r.has_target[0].id_ref == "d:tank-1"

    def test_a_relationship_without_target(self) -> None:
        r = ARelationshipBuilder("feeds-1", "o:feeds").from_source("o:feeds", "d:pump-1").build()
        assert not r.status().ok
        assert r.get() is None


# ===========================================================================
# Graph Validator Tests
# ===========================================================================


class TestGraphValidator:

    def test_valid_graph(self, graph_document: dict[str, Any]) -> None:
        result = GraphValidator().validate(graph_document)
        assert result.passed, str(result)
        assert result.item_count == 3
        assert len(result.items) == 3
        assert result.issues == []

    def test_duplicate_id(self, graph_document: dict[str, Any]) -> None:
        graph_document["@graph"].append(dict(graph_document["@graph"][0]))
        result = GraphValidator().validate(graph_document)
        assert not result.passed
        assert [i.rule_id for i in result.errors] == ["PIG-671"]
        assert result.errors[0].index == 3

    def test_item_without_id(self, graph_document: dict[str, Any]) -> None:
        graph_document["@graph"].append({"pig:itemType": {"@id": "pig:anEntity"}})
        result = GraphValidator().validate(graph_document)
        assert [i.rule_id for i in result.errors] == ["PIG-670"]

    def test_invalid_item_reported_with_code(self, graph_document: dict[str, Any]) -> None:
        del graph_document["@graph"][2]["@type"]
        result = GraphValidator().validate(graph_document)
        assert not result.passed
        assert result.errors[0].rule_id == "PIG-601"
        assert result.errors[0].item_id == "d:pump-1"
        assert any(i.rule_id == "PIG-679" and i.severity == Severity.INFO for i in result.issues)

    def test_unsupported_datatype_warning(self, property_input: dict[str, Any]) -> None:
        property_input["datatype"] = "xs:gYear"
        document = [Property().set(property_input).get_jsonld()]
        result = GraphValidator().validate(document)
        assert result.passed
        assert [i.rule_id for i in result.warnings] == ["PIG-680"]
        assert not GraphValidator(strict=True).validate(document).passed

    def test_validate_batch(self, graph_document: dict[str, Any]) -> None:
        results = GraphValidator().validate_batch([graph_document, []])
        assert [r.passed for r in results] == [True, True]
        assert results[1].item_count == 0

    def test_graph_items(self) -> None:
        assert graph_items({"@graph": [1, 2]}) == [1, 2]
        assert graph_items([1]) == [1]
        assert graph_items({"@id": "d:x"}) == [{"@id": "d:x"}]
