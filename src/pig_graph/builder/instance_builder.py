"""
Instance Builder
=================
Fluent builder API for entity and relationship instances.

Example::

    from pig_graph.builder.instance_builder import AnEntityBuilder, ARelationshipBuilder

    pump = (
        AnEntityBuilder("pump-1", "o:Pump")
        .with_title("Feed pump P-1")
        .with_property("o:Pressure", "5.5")
        .by("alice", revision="v1")
        .build()
    )

    feeds = (
        ARelationshipBuilder("feeds-1", "o:feeds")
        .from_source("o:feeds-source", "d:pump-1")
        .to_target("o:feeds-target", "d:tank-1")
        .build()
    )
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from ..messages import DEFAULT_LANGUAGE
from ..models.items import AnEntity, ARelationship
from ..models.types import PigItemType
from ..transform.configurables import literal
from ..transform.ids import normalize_id
from .class_builder import ItemBuilder


class _AnElementBuilder(ItemBuilder):
    def __init__(self, id_: str, has_class: str, lang: str = DEFAULT_LANGUAGE) -> None:
        super().__init__(id_, lang)
        self._data["hasClass"] = normalize_id(has_class, PigItemType.ENTITY)
        self._data["hasProperty"] = []

    def with_property(
        self,
        property_class: str,
        value: Any = None,
        id_ref: str | None = None,
    ) -> "_AnElementBuilder":
        """
        Add a configured property value.

        Give either ``value`` (stored as text) or ``id_ref`` (a reference to
        an eligible value or another item).
        """
        entry: dict[str, Any] = {
            "itemType": PigItemType.A_PROPERTY.value,
            "hasClass": normalize_id(property_class, PigItemType.PROPERTY),
        }
        if value is not None:
            entry["value"] = str(literal(value))
        if id_ref is not None:
            entry["idRef"] = id_ref
        self._data["hasProperty"].append(entry)
        return self

    def by(self, creator: str, revision: str | None = None) -> "_AnElementBuilder":
        self._data["creator"] = creator
        if revision:
            self._data["revision"] = revision
        return self

    def revised_from(self, *prior: str) -> "_AnElementBuilder":
        """One prior revision, or two for a merge."""
        self._data["priorRevision"] = list(prior)
        return self

    def modified_at(self, when: datetime | str | None = None) -> "_AnElementBuilder":
        when = when or datetime.now(tz=timezone.utc)
        self._data["modified"] = when.isoformat() if isinstance(when, datetime) else when
        return self

    @staticmethod
    def _reference(reference_class: str, id_ref: str) -> dict[str, Any]:
        return {
            "itemType": PigItemType.A_REFERENCE.value,
            "hasClass": normalize_id(reference_class, PigItemType.REFERENCE),
            "idRef": id_ref,
        }


class AnEntityBuilder(_AnElementBuilder):
    """Fluent builder for AnEntity; ``modified`` defaults to now."""

    item_class = AnEntity

    def __init__(self, id_: str, has_class: str, lang: str = DEFAULT_LANGUAGE) -> None:
        super().__init__(id_, has_class, lang)
        self._data["hasTarget"] = []

    def with_target(self, reference_class: str, id_ref: str) -> "AnEntityBuilder":
        """Reference another item, e.g. a document shown by this entity."""
        self._data["hasTarget"].append(self._reference(reference_class, id_ref))
        return self

    def build(self) -> AnEntity:
        return super().build()


class ARelationshipBuilder(_AnElementBuilder):
    """Fluent builder for ARelationship; at least one source and one target are required."""

    item_class = ARelationship

    def __init__(self, id_: str, has_class: str, lang: str = DEFAULT_LANGUAGE) -> None:
        super().__init__(id_, has_class, lang)
        self._data["hasClass"] = normalize_id(has_class, PigItemType.RELATIONSHIP)
        self._data["hasSource"] = []
        self._data["hasTarget"] = []

    def from_source(self, reference_class: str, id_ref: str) -> "ARelationshipBuilder":
        self._data["hasSource"].append(self._reference(reference_class, id_ref))
        return self

    def to_target(self, reference_class: str, id_ref: str) -> "ARelationshipBuilder":
        self._data["hasTarget"].append(self._reference(reference_class, id_ref))
        return self

    def build(self) -> ARelationship:
        return super().build()
