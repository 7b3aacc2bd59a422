"""
PIG Items
==========
The item class hierarchy of the Product Information Graph::

    Item
    ├── AProperty, AReference          (owned instances, no identity)
    └── Identifiable
        ├── Property, Reference        (classes)
        ├── Element
        │   └── Entity, Relationship   (classes)
        └── AnElement
            └── AnEntity, ARelationship (instances)

Every item goes through the same pipeline::

    item = Property()                  # item type fixed by the class
    item.set(data)                     # normalize -> validate -> commit
    item.status()                      # Status of the last set()
    item.get()                         # snapshot, or None when invalid

``set()`` never raises for bad data. Validation runs the schema first,
then the local guards of each class (most specific class first) and
finally instantiates owned sub-items; the first failure is reported and
nothing is committed. Committed fields are read-only attributes.

JSON-LD is handled by ``set_jsonld()``/``get_jsonld()``, which wrap the
same pipeline with tag renaming, id-object (un)packing and the grouping of
configurable properties and references under their class keys.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Mapping

from pydantic import ValidationError

from ..exceptions import ImmutableFieldError, ItemTypeError
from ..messages import DEFAULT_LANGUAGE, STATUS_OK, Code, Status, create_response, create_status, get_message
from ..transform.configurables import (
    HAS_PROPERTY,
    HAS_SOURCE,
    HAS_TARGET,
    Configurable,
    add_configurables_to_jsonld,
    collect_configurables_from_jsonld,
)
from ..transform.ids import make_id_objects, replace_id_objects
from ..transform.json_tree import strip_none
from ..transform.mvf import FROM_JSONLD, TO_JSONLD, rename_json_tags
from ..transform.normalize import normalize_date_time, normalize_multi_language_text, now_iso
from ..validator import schemata
from ..validator.guards import validate_id_string, validate_id_string_array, validate_multi_language_text
from ..validator.schemata import ItemSchema, format_errors
from .types import PigItemType, is_supported_datatype, item_type_tag, normalize_datatype

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Field access
# ---------------------------------------------------------------------------


class _RecordField:
    """Read-only attribute backed by the committed record."""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: "Item | None", owner: type) -> Any:
        if instance is None:
            return self
        record = instance._record
        return None if record is None else getattr(record, self.name)

    def __set__(self, instance: "Item", value: Any) -> None:
        raise ImmutableFieldError(
            f"'{self.name}' of {type(instance).__name__} is read-only; use set() to change an item"
        )


class _OwnedField(_RecordField):
    """Read-only attribute returning the owned sub-items of one configurable array."""

    def __init__(self, configurable: Configurable) -> None:
        self.configurable = configurable

    def __get__(self, instance: "Item | None", owner: type) -> Any:
        if instance is None:
            return self
        return list(instance._owned.get(self.configurable.field, []))


@dataclass(frozen=True)
class ValidatedItem:
    """Result of a successful validation, ready to be committed."""
    record: schemata.PigRecord
    owned: dict[str, list["Item"]] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Base classes
# ---------------------------------------------------------------------------


class Item:
    """
    Base of all PIG items.

    Subclasses set ``item_type`` and ``schema``; the classes that leave
    ``item_type`` unset are abstract and cannot be instantiated.
    """

    item_type: ClassVar[PigItemType | None] = None
    schema: ClassVar[ItemSchema | None] = None
    owned: ClassVar[tuple[tuple[Configurable, type["Item"]], ...]] = ()
    requires_class: ClassVar[bool] = False

    has_class = _RecordField()

    def __init__(self, item_type: PigItemType | str | None = None, *, lang: str = DEFAULT_LANGUAGE) -> None:
        if self.item_type is None:
            raise ItemTypeError(f"{type(self).__name__} is abstract and cannot be instantiated")
        if item_type is not None and item_type_tag(item_type) != self.item_type.value:
            raise ItemTypeError(
                f"{type(self).__name__} has item type '{self.item_type.value}', not '{item_type_tag(item_type)}'"
            )
        self.lang = lang
        self._record: schemata.PigRecord | None = None
        self._owned: dict[str, list[Item]] = {}
        self._status: Status | None = None

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "item_type":
            raise ImmutableFieldError(f"the item type of {type(self).__name__} is fixed")
        super().__setattr__(name, value)

    def __repr__(self) -> str:
        ref = getattr(self, "id", None) or self.has_class
        return f"<{type(self).__name__} {ref}>"

    # -- pipeline ----------------------------------------------------------

    def normalize(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Return a cleaned copy of ``data``; ``data`` itself is not modified."""
        return self._normalize(strip_none(copy.deepcopy(dict(data))))

    def _normalize(self, candidate: dict[str, Any]) -> dict[str, Any]:
        return candidate

    def validate(self, candidate: Any) -> Status:
        """
        Validate ``candidate`` without changing the item.

        On success the status response is a :class:`ValidatedItem`.
        """
        if not isinstance(candidate, Mapping):
            return create_status(
                Code.INSTANTIATION_FAILED,
                type(self).__name__,
                self.item_type.value,
                f"expected an object, got {type(candidate).__name__}",
                lang=self.lang,
            )

        label = candidate.get("id") or candidate.get("hasClass") or ""
        try:
            record = self.schema.parse(candidate)
        except ValidationError as exc:
            return create_status(
                Code.SCHEMA_VALIDATION_FAILED, self.item_type.value, label, format_errors(exc), lang=self.lang
            )
        except Exception as exc:
            logger.exception("Schema engine failed on %s '%s'", self.item_type.value, label)
            return create_status(Code.SCHEMA_ENGINE_ERROR, self.item_type.value, label, str(exc), lang=self.lang)

        status = self._check(candidate)
        if not status.ok:
            return status

        owned: dict[str, list[Item]] = {}
        for configurable, cls in self.owned:
            items = []
            for entry in candidate.get(configurable.field) or []:
                sub = cls(lang=self.lang).set(entry)
                if not sub.status().ok:
                    return sub.status()
                items.append(sub)
            owned[configurable.field] = items

        return create_response(Code.OK, ValidatedItem(record, owned), "item", lang=self.lang)

    def _check(self, candidate: Mapping[str, Any]) -> Status:
        """Local guards; subclasses check their own fields, then call ``super()``."""
        given = candidate.get("itemType")
        if given != self.item_type.value:
            return create_status(Code.ITEM_TYPE_CHANGED, self.item_type.value, given, lang=self.lang)
        if self.requires_class and not candidate.get("hasClass"):
            return create_status(Code.HAS_CLASS_MISSING, self.item_type.value, lang=self.lang)
        return STATUS_OK

    def _commit(self, validated: ValidatedItem) -> None:
        self._record = validated.record
        self._owned = validated.owned

    def set(self, data: Any) -> "Item":
        """Normalize, validate and, only when valid, commit ``data``. Returns the item."""
        candidate = self.normalize(data) if isinstance(data, Mapping) else data
        status = self.validate(candidate)
        self._status = status
        if status.ok:
            self._commit(status.response)
        return self

    def get(self) -> dict[str, Any] | None:
        if self._status is None or not self._status.ok or self._record is None:
            return None
        return self._record.snapshot()

    def status(self) -> Status | None:
        return self._status

    # -- JSON-LD -----------------------------------------------------------

    def from_jsonld(self, obj: Any) -> Any:
        """Convert a JSON-LD object to the internal form ``set()`` expects."""
        candidate = rename_json_tags(obj, FROM_JSONLD)
        candidate = replace_id_objects(candidate, mutate=True)
        if not isinstance(candidate, dict):
            return candidate
        for configurable, _ in self.owned:
            candidate[configurable.field] = collect_configurables_from_jsonld(candidate, configurable)
        return candidate

    def set_jsonld(self, obj: Any) -> "Item":
        return self.set(self.from_jsonld(obj))

    def get_jsonld(self) -> dict[str, Any] | None:
        snapshot = self.get()
        if snapshot is None:
            return None
        jld = rename_json_tags(snapshot, TO_JSONLD)
        # Pack before regrouping: configurable entries carry literal @value strings.
        jld = make_id_objects(jld, mutate=True)
        for configurable, _ in self.owned:
            add_configurables_to_jsonld(jld, snapshot, configurable.field)
        return jld


class Identifiable(Item):
    """An item with an id; ``id`` and ``specializes`` are locked once committed."""

    id = _RecordField()
    specializes = _RecordField()
    title = _RecordField()
    description = _RecordField()

    def _normalize(self, candidate: dict[str, Any]) -> dict[str, Any]:
        for key in ("title", "description"):
            if key in candidate:
                candidate[key] = normalize_multi_language_text(candidate[key])
        return super()._normalize(candidate)

    def _check(self, candidate: Mapping[str, Any]) -> Status:
        new_id = candidate.get("id")
        if self._record is not None:
            if new_id != self._record.id:
                return create_status(Code.ID_CHANGED, self._record.id, new_id, lang=self.lang)
            committed = self._record.specializes
            if committed is not None and candidate.get("specializes") != committed:
                return create_status(
                    Code.SPECIALIZES_CHANGED, committed, candidate.get("specializes"), lang=self.lang
                )

        status = validate_id_string(new_id, "id", lang=self.lang)
        if not status.ok:
            return status
        for key in ("title", "description"):
            if key in candidate:
                status = validate_multi_language_text(candidate[key], key, lang=self.lang)
                if not status.ok:
                    return status
        return super()._check(candidate)


class Element(Identifiable):
    """Entity and Relationship classes; ``eligibleProperty`` absent means unrestricted."""

    eligible_property = _RecordField()
    icon = _RecordField()

    def _check(self, candidate: Mapping[str, Any]) -> Status:
        status = validate_id_string_array(
            candidate.get("eligibleProperty"), "eligibleProperty", min_count=0, can_be_absent=True, lang=self.lang
        )
        if not status.ok:
            return status
        return super()._check(candidate)


class AnElement(Identifiable):
    """Entity and Relationship instances."""

    requires_class = True

    revision = _RecordField()
    prior_revision = _RecordField()
    modified = _RecordField()
    creator = _RecordField()
    has_property = _OwnedField(HAS_PROPERTY)

    def _normalize(self, candidate: dict[str, Any]) -> dict[str, Any]:
        candidate["modified"] = normalize_date_time(candidate.get("modified")) or now_iso()
        return super()._normalize(candidate)


# ---------------------------------------------------------------------------
# Classes
# ---------------------------------------------------------------------------


class Property(Identifiable):
    item_type = PigItemType.PROPERTY
    schema = schemata.PROPERTY_SCHEMA

    datatype = _RecordField()
    min_count = _RecordField()
    max_count = _RecordField()
    max_length = _RecordField()
    pattern = _RecordField()
    min_inclusive = _RecordField()
    max_inclusive = _RecordField()
    eligible_value = _RecordField()
    default_value = _RecordField()
    unit = _RecordField()
    composed_property = _RecordField()

    def _normalize(self, candidate: dict[str, Any]) -> dict[str, Any]:
        if "datatype" in candidate:
            candidate["datatype"] = normalize_datatype(candidate["datatype"])
        candidate.setdefault("minCount", 0)
        if "maxCount" not in candidate:
            # Never below minCount.
            min_count = candidate["minCount"]
            fits = isinstance(min_count, int) and not isinstance(min_count, bool)
            candidate["maxCount"] = max(min_count, 1) if fits else 1
        return super()._normalize(candidate)

    def _check(self, candidate: Mapping[str, Any]) -> Status:
        datatype = candidate.get("datatype")
        if not is_supported_datatype(datatype):
            # Tolerated; values are treated as xs:string.
            logger.warning(get_message(Code.UNSUPPORTED_DATATYPE, candidate.get("id"), datatype, lang=self.lang))
        return super()._check(candidate)


class Reference(Identifiable):
    item_type = PigItemType.REFERENCE
    schema = schemata.REFERENCE_SCHEMA

    eligible_target = _RecordField()

    def _check(self, candidate: Mapping[str, Any]) -> Status:
        status = validate_id_string_array(candidate.get("eligibleTarget"), "eligibleTarget", lang=self.lang)
        if not status.ok:
            return status
        return super()._check(candidate)


class Entity(Element):
    item_type = PigItemType.ENTITY
    schema = schemata.ENTITY_SCHEMA

    eligible_reference = _RecordField()

    def _check(self, candidate: Mapping[str, Any]) -> Status:
        status = validate_id_string_array(
            candidate.get("eligibleReference"), "eligibleReference", min_count=0, can_be_absent=True, lang=self.lang
        )
        if not status.ok:
            return status
        return super()._check(candidate)


class Relationship(Element):
    """A relationship class; when present, each endpoint list needs at least one class."""

    item_type = PigItemType.RELATIONSHIP
    schema = schemata.RELATIONSHIP_SCHEMA

    eligible_source = _RecordField()
    eligible_target = _RecordField()

    def _check(self, candidate: Mapping[str, Any]) -> Status:
        for key in ("eligibleSource", "eligibleTarget"):
            status = validate_id_string_array(candidate.get(key), key, min_count=1, can_be_absent=True, lang=self.lang)
            if not status.ok:
                return status
        return super()._check(candidate)


# ---------------------------------------------------------------------------
# Instances
# ---------------------------------------------------------------------------


class AProperty(Item):
    """A property value owned by an instance; holds either ``value`` or ``idRef``."""

    item_type = PigItemType.A_PROPERTY
    schema = schemata.APROPERTY_SCHEMA
    requires_class = True

    value = _RecordField()
    id_ref = _RecordField()
    a_composed_property = _RecordField()


class AReference(Item):
    item_type = PigItemType.A_REFERENCE
    schema = schemata.AREFERENCE_SCHEMA
    requires_class = True

    id_ref = _RecordField()


class AnEntity(AnElement):
    item_type = PigItemType.AN_ENTITY
    schema = schemata.ANENTITY_SCHEMA
    owned = ((HAS_PROPERTY, AProperty), (HAS_TARGET, AReference))

    has_target = _OwnedField(HAS_TARGET)


class ARelationship(AnElement):
    item_type = PigItemType.A_RELATIONSHIP
    schema = schemata.ARELATIONSHIP_SCHEMA
    owned = ((HAS_PROPERTY, AProperty), (HAS_SOURCE, AReference), (HAS_TARGET, AReference))

    has_source = _OwnedField(HAS_SOURCE)
    has_target = _OwnedField(HAS_TARGET)


ITEM_CLASSES: dict[str, type[Item]] = {
    cls.item_type.value: cls
    for cls in (Property, Reference, Entity, Relationship, AProperty, AReference, AnEntity, ARelationship)
}
