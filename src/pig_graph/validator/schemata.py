"""
Item Schemata
==============
Structural schemata for the eight concrete PIG item types, expressed as
pydantic models. They check shape only: required fields, id-string syntax,
types and cardinalities. Immutability and multi-language rules are checked
by :mod:`pig_graph.validator.guards` afterwards.

Each item type has a pair of functions::

    from pig_graph.validator.schemata import (
        validate_property_schema, get_validate_property_errors,
    )

    if not validate_property_schema(candidate):
        print(get_validate_property_errors())

The validated record returned by :meth:`ItemSchema.parse` is what an item
stores once ``set()`` succeeds.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    StringConstraints,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from ..models.types import PigItemType
from ..transform.ids import ID_PATTERN

PigId = Annotated[StrictStr, StringConstraints(pattern=ID_PATTERN)]
DataTypeName = Annotated[StrictStr, StringConstraints(pattern=r"^xs:[A-Za-z]+$")]
Number = Union[StrictInt, StrictFloat]


class PigRecord(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
    )

    def snapshot(self) -> dict[str, Any]:
        """Plain dict with camelCase keys and unset optional fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class LanguageText(PigRecord):
    value: StrictStr
    lang: StrictStr | None = None


class Text(PigRecord):
    value: StrictStr


class EligibleValue(PigRecord):
    id: PigId
    title: list[LanguageText] = Field(..., min_length=1)


# ---------------------------------------------------------------------------
# Classes
# ---------------------------------------------------------------------------


class _ClassRecord(PigRecord):
    id: PigId
    item_type: PigId
    has_class: PigId | None = None
    specializes: PigId | None = None
    title: list[LanguageText] = Field(..., min_length=1)
    description: list[LanguageText] | None = Field(None, min_length=1)

    @model_validator(mode="after")
    def _class_or_specialization(self) -> "_ClassRecord":
        if (self.has_class is None) == (self.specializes is None):
            raise ValueError("exactly one of 'hasClass' and 'specializes' is required")
        return self


class PropertyRecord(_ClassRecord):
    datatype: DataTypeName
    min_count: StrictInt | None = Field(None, ge=0)
    max_count: StrictInt | None = Field(None, ge=0)
    max_length: StrictInt | None = Field(None, ge=0)
    pattern: str | None = None
    min_inclusive: Number | None = None
    max_inclusive: Number | None = None
    eligible_value: list[EligibleValue] | None = None
    default_value: str | None = None
    unit: str | None = None
    composed_property: list[PigId] | None = None

    @model_validator(mode="after")
    def _count_range(self) -> "PropertyRecord":
        if self.min_count is not None and self.max_count is not None and self.max_count < self.min_count:
            raise ValueError("'maxCount' must not be smaller than 'minCount'")
        return self


class ReferenceRecord(_ClassRecord):
    eligible_target: list[PigId]


class _ElementRecord(_ClassRecord):
    eligible_property: list[PigId] | None = None
    icon: Text | None = None


class EntityRecord(_ElementRecord):
    eligible_reference: list[PigId] | None = None


class RelationshipRecord(_ElementRecord):
    eligible_source: list[PigId] | None = None
    eligible_target: list[PigId] | None = None


# ---------------------------------------------------------------------------
# Instances
# ---------------------------------------------------------------------------


class APropertyRecord(PigRecord):
    item_type: PigId
    has_class: PigId | None = None
    value: StrictStr | None = None
    id_ref: PigId | None = None
    a_composed_property: list[PigId] | None = None

    @model_validator(mode="after")
    def _value_or_reference(self) -> "APropertyRecord":
        if (self.value is None) == (self.id_ref is None):
            raise ValueError("exactly one of 'value' and 'idRef' is required")
        return self


class AReferenceRecord(PigRecord):
    item_type: PigId
    has_class: PigId | None = None
    id_ref: PigId


class _OwnedProperty(APropertyRecord):
    item_type: Literal["pig:aProperty"]
    has_class: PigId


class _OwnedReference(AReferenceRecord):
    item_type: Literal["pig:aReference"]
    has_class: PigId


class _AnElementRecord(PigRecord):
    id: PigId
    item_type: PigId
    has_class: PigId | None = None
    specializes: PigId | None = None
    title: list[LanguageText] | None = None
    description: list[LanguageText] | None = None
    revision: str | None = None
    prior_revision: list[str] | None = Field(None, min_length=1, max_length=2)
    modified: StrictStr
    creator: str | None = None
    has_property: list[_OwnedProperty] = Field(default_factory=list)

    @field_validator("modified")
    @classmethod
    def _iso_date_time(cls, v: str) -> str:
        try:
            datetime.fromisoformat(v)
        except ValueError as exc:
            raise ValueError(f"'{v}' is not an ISO 8601 date-time") from exc
        return v


class AnEntityRecord(_AnElementRecord):
    has_target: list[_OwnedReference] = Field(default_factory=list)

    @model_validator(mode="after")
    def _title_or_description(self) -> "AnEntityRecord":
        if not self.title and not self.description:
            raise ValueError("a non-empty 'title' or 'description' is required")
        return self


class ARelationshipRecord(_AnElementRecord):
    title: list[LanguageText] | None = Field(None, min_length=1)
    description: list[LanguageText] | None = Field(None, min_length=1)
    has_source: list[_OwnedReference] = Field(..., min_length=1)
    has_target: list[_OwnedReference] = Field(..., min_length=1)


# ---------------------------------------------------------------------------
# Validator interface
# ---------------------------------------------------------------------------


def format_errors(exc: ValidationError) -> str:
    """Render pydantic errors as ``path: message`` pairs joined by ``; ``."""
    parts = []
    for error in exc.errors():
        location = "/".join(str(p) for p in error["loc"]) or "<root>"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


class ItemSchema:
    """
    Schema of one item type.

    ``validate``/``errors`` form the boolean interface; ``parse`` returns
    the validated record and raises :class:`pydantic.ValidationError`.
    """

    def __init__(self, item_type: PigItemType, model: type[PigRecord]) -> None:
        self.item_type = item_type
        self.model = model
        self._errors = ""

    def parse(self, candidate: Any) -> PigRecord:
        return self.model.model_validate(candidate)

    def validate(self, candidate: Any) -> bool:
        try:
            self.parse(candidate)
        except ValidationError as exc:
            self._errors = format_errors(exc)
            return False
        self._errors = ""
        return True

    def errors(self) -> str:
        return self._errors

    def __repr__(self) -> str:
        return f"ItemSchema({self.item_type.value}, {self.model.__name__})"


PROPERTY_SCHEMA = ItemSchema(PigItemType.PROPERTY, PropertyRecord)
REFERENCE_SCHEMA = ItemSchema(PigItemType.REFERENCE, ReferenceRecord)
ENTITY_SCHEMA = ItemSchema(PigItemType.ENTITY, EntityRecord)
RELATIONSHIP_SCHEMA = ItemSchema(PigItemType.RELATIONSHIP, RelationshipRecord)
APROPERTY_SCHEMA = ItemSchema(PigItemType.A_PROPERTY, APropertyRecord)
AREFERENCE_SCHEMA = ItemSchema(PigItemType.A_REFERENCE, AReferenceRecord)
ANENTITY_SCHEMA = ItemSchema(PigItemType.AN_ENTITY, AnEntityRecord)
ARELATIONSHIP_SCHEMA = ItemSchema(PigItemType.A_RELATIONSHIP, ARelationshipRecord)

SCHEMAS: dict[str, ItemSchema] = {
    s.item_type.value: s
    for s in (
        PROPERTY_SCHEMA,
        REFERENCE_SCHEMA,
        ENTITY_SCHEMA,
        RELATIONSHIP_SCHEMA,
        APROPERTY_SCHEMA,
        AREFERENCE_SCHEMA,
        ANENTITY_SCHEMA,
        ARELATIONSHIP_SCHEMA,
    )
}

validate_property_schema = PROPERTY_SCHEMA.validate
get_validate_property_errors = PROPERTY_SCHEMA.errors
validate_reference_schema = REFERENCE_SCHEMA.validate
get_validate_reference_errors = REFERENCE_SCHEMA.errors
validate_entity_schema = ENTITY_SCHEMA.validate
get_validate_entity_errors = ENTITY_SCHEMA.errors
validate_relationship_schema = RELATIONSHIP_SCHEMA.validate
get_validate_relationship_errors = RELATIONSHIP_SCHEMA.errors
validate_a_property_schema = APROPERTY_SCHEMA.validate
get_validate_a_property_errors = APROPERTY_SCHEMA.errors
validate_a_reference_schema = AREFERENCE_SCHEMA.validate
get_validate_a_reference_errors = AREFERENCE_SCHEMA.errors
validate_an_entity_schema = ANENTITY_SCHEMA.validate
get_validate_an_entity_errors = ANENTITY_SCHEMA.errors
validate_a_relationship_schema = ARELATIONSHIP_SCHEMA.validate
get_validate_a_relationship_errors = ARELATIONSHIP_SCHEMA.errors
