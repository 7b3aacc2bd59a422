"""
Item Factory
=============
Creates PIG items from their item type tag.

Example::

    from pig_graph.models.factory import PigItem

    status = PigItem.from_jsonld(graph_entry)
    if status.ok:
        item = status.response
"""

from __future__ import annotations

import logging
from typing import Any

from ..messages import DEFAULT_LANGUAGE, Code, Status, create_response, create_status
from .items import ITEM_CLASSES, Item
from .types import GRAPH_TYPES, is_class_type, is_instance_type, is_supported_datatype, item_type_tag

logger = logging.getLogger(__name__)


class PigItem:
    """Lookup and instantiation of item classes by item type."""

    @staticmethod
    def create(item_type: Any, lang: str = DEFAULT_LANGUAGE) -> Item | None:
        """Return a fresh, unset item, or ``None`` for an unknown item type."""
        cls = ITEM_CLASSES.get(item_type_tag(item_type))
        if cls is None:
            logger.error("Unknown item type: %s", item_type)
            return None
        return cls(lang=lang)

    @staticmethod
    def is_class(item_type: Any) -> bool:
        return is_class_type(item_type)

    @staticmethod
    def is_instance(item_type: Any) -> bool:
        return is_instance_type(item_type)

    @staticmethod
    def is_instantiable(item_type: Any) -> bool:
        """True for the item types that may stand alone in a package graph."""
        return item_type_tag(item_type) in GRAPH_TYPES

    @staticmethod
    def is_supported_type(item_type: Any) -> bool:
        return item_type_tag(item_type) in ITEM_CLASSES

    @staticmethod
    def supported_types() -> list[str]:
        return list(ITEM_CLASSES)

    @staticmethod
    def is_supported_datatype(datatype: Any) -> bool:
        return is_supported_datatype(datatype)

    @staticmethod
    def from_jsonld(obj: Any, lang: str = DEFAULT_LANGUAGE) -> Status:
        """
        Instantiate one top-level graph item from its JSON-LD form.

        The response of a successful status is the item. Failures:
        654 not an object, 650 no item type, 652 unknown item type,
        651 item type not allowed at graph level, otherwise the item's own
        validation status.
        """
        where = "PigItem.from_jsonld"
        if not isinstance(obj, dict):
            return create_status(Code.INSTANTIATION_FAILED, where, "item", "expected an object", lang=lang)

        raw = obj.get("pig:itemType", obj.get("itemType"))
        item_type = raw.get("@id", raw.get("id")) if isinstance(raw, dict) else raw
        if not item_type:
            return create_status(Code.REQUIRED_FIELD_MISSING, where, "pig:itemType", obj.get("@id", ""), lang=lang)
        if not isinstance(item_type, str) or item_type not in ITEM_CLASSES:
            return create_status(Code.UNKNOWN_ITEM_TYPE, where, item_type, lang=lang)
        if item_type not in GRAPH_TYPES:
            return create_status(Code.ITEM_TYPE_NOT_ALLOWED, where, item_type, lang=lang)

        item = PigItem.create(item_type, lang=lang).set_jsonld(obj)
        status = item.status()
        if not status.ok:
            return status
        return create_response(Code.OK, item, item_type, lang=lang)
