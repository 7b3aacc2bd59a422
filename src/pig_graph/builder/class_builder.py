"""
Class Builder
==============
Fluent builder API for PIG class items.

Provides a factory method per supported datatype and a chainable builder
for the common Property constraints.

Example::

    from pig_graph.builder.class_builder import PropertyBuilder

    pressure = (
        PropertyBuilder.double("Pressure", "Pressure")
        .with_title("Druck", lang="de")
        .with_range(0, 250)
        .with_unit("bar")
        .build()
    )
    pressure.id   # "o:Pressure"
"""

from __future__ import annotations

from typing import Any

from ..messages import DEFAULT_LANGUAGE
from ..models.items import Item, Property
from ..models.types import PigItemType, XsDataType
from ..transform.ids import normalize_id


class ItemBuilder:
    """
    Shared part of all item builders: id, class, texts.

    ``build()`` returns the item after ``set()``; check ``item.status()``
    since invalid data is reported there rather than raised.
    """

    item_class: type[Item] = Item

    def __init__(self, id_: str, lang: str = DEFAULT_LANGUAGE) -> None:
        item_type = self.item_class.item_type
        self._lang = lang
        self._data: dict[str, Any] = {
            "id": normalize_id(id_, item_type.value),
            "itemType": item_type.value,
        }

    # ------------------------------------------------------------------
    # Texts
    # ------------------------------------------------------------------

    def _add_text(self, key: str, value: str, lang: str | None) -> None:
        entry = {"value": value}
        if lang:
            entry["lang"] = lang
        self._data.setdefault(key, []).append(entry)

    def with_title(self, value: str, lang: str | None = None) -> "ItemBuilder":
        """Add a title; with more than one title every entry needs ``lang``."""
        self._add_text("title", value, lang)
        return self

    def with_description(self, value: str, lang: str | None = None) -> "ItemBuilder":
        self._add_text("description", value, lang)
        return self

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """The internal form handed to ``set()``."""
        return {k: list(v) if isinstance(v, list) else v for k, v in self._data.items()}

    def build(self) -> Item:
        return self.item_class(lang=self._lang).set(self.to_dict())


class PropertyBuilder(ItemBuilder):
    """
    Fluent builder for Property classes.

    Typically instantiated via the datatype factory methods (e.g.
    ``PropertyBuilder.string(...)``). Without ``specializing()`` the class
    gets ``hasClass: pig:Property``.
    """

    item_class = Property

    def __init__(
        self,
        id_: str,
        title: str | None = None,
        datatype: XsDataType | str = XsDataType.STRING,
        lang: str = DEFAULT_LANGUAGE,
    ) -> None:
        super().__init__(id_, lang)
        self._data["datatype"] = datatype.value if isinstance(datatype, XsDataType) else datatype
        if title:
            self.with_title(title, lang)

    # ------------------------------------------------------------------
    # Factory methods per datatype
    # ------------------------------------------------------------------

    @classmethod
    def string(cls, id_: str, title: str | None = None, max_length: int | None = None) -> "PropertyBuilder":
        b = cls(id_, title, XsDataType.STRING)
        if max_length is not None:
            b._data["maxLength"] = max_length
        return b

    @classmethod
    def boolean(cls, id_: str, title: str | None = None) -> "PropertyBuilder":
        return cls(id_, title, XsDataType.BOOLEAN)

    @classmethod
    def integer(cls, id_: str, title: str | None = None) -> "PropertyBuilder":
        return cls(id_, title, XsDataType.INTEGER)

    @classmethod
    def double(cls, id_: str, title: str | None = None) -> "PropertyBuilder":
        return cls(id_, title, XsDataType.DOUBLE)

    @classmethod
    def any_uri(cls, id_: str, title: str | None = None) -> "PropertyBuilder":
        return cls(id_, title, XsDataType.ANY_URI)

    @classmethod
    def date_time(cls, id_: str, title: str | None = None) -> "PropertyBuilder":
        return cls(id_, title, XsDataType.DATE_TIME)

    @classmethod
    def composed(cls, id_: str, title: str | None, *parts: str) -> "PropertyBuilder":
        """A complex property made of other Property classes."""
        b = cls(id_, title, XsDataType.COMPLEX_TYPE)
        b._data["composedProperty"] = [normalize_id(p, PigItemType.PROPERTY) for p in parts]
        return b

    # ------------------------------------------------------------------
    # Builder chain methods
    # ------------------------------------------------------------------

    def specializing(self, parent: str) -> "PropertyBuilder":
        """Make this class a specialization of ``parent`` instead of an instance of pig:Property."""
        self._data["specializes"] = normalize_id(parent, PigItemType.PROPERTY)
        return self

    def with_count(self, min_count: int = 0, max_count: int = 1) -> "PropertyBuilder":
        self._data["minCount"] = min_count
        self._data["maxCount"] = max_count
        return self

    def with_max_length(self, max_length: int) -> "PropertyBuilder":
        self._data["maxLength"] = max_length
        return self

    def with_pattern(self, pattern: str) -> "PropertyBuilder":
        self._data["pattern"] = pattern
        return self

    def with_range(self, minimum: int | float | None = None, maximum: int | float | None = None) -> "PropertyBuilder":
        if minimum is not None:
            self._data["minInclusive"] = minimum
        if maximum is not None:
            self._data["maxInclusive"] = maximum
        return self

    def with_unit(self, unit: str) -> "PropertyBuilder":
        self._data["unit"] = unit
        return self

    def with_default(self, value: str) -> "PropertyBuilder":
        self._data["defaultValue"] = value
        return self

    def with_eligible_value(self, id_: str, title: str, lang: str | None = None) -> "PropertyBuilder":
        """Add an enumeration value; the set of eligible values becomes closed."""
        entry: dict[str, Any] = {"value": title}
        if lang:
            entry["lang"] = lang
        self._data.setdefault("eligibleValue", []).append(
            {"id": normalize_id(id_, PigItemType.PROPERTY), "title": [entry]}
        )
        return self

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if "specializes" not in data:
            data["hasClass"] = PigItemType.PROPERTY.value
        return data

    def build(self) -> Property:
        return super().build()
