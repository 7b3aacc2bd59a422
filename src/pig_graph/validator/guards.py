"""
Runtime Guards
===============
Local structural checks run after schema validation. Each guard returns a
:class:`~pig_graph.messages.Status`; the first failure is reported.

Example::

    from pig_graph.validator.guards import validate_id_string_array

    status = validate_id_string_array([], "eligibleSource", min_count=1)
    status.status   # 631
"""

from __future__ import annotations

from typing import Any

from ..messages import STATUS_OK, Code, Status, create_status
from ..transform.ids import is_valid_id_string


def validate_id_string(value: Any, field_name: str = "id", *, lang: str = "en") -> Status:
    if value is None:
        return create_status(Code.ID_MISSING, field_name, lang=lang)
    if not isinstance(value, str) or not value.strip():
        return create_status(Code.ID_EMPTY, field_name, lang=lang)
    if not is_valid_id_string(value):
        return create_status(Code.ID_INVALID, field_name, lang=lang)
    return STATUS_OK


def validate_id_string_array(
    value: Any,
    field_name: str = "ids",
    *,
    min_count: int = 1,
    can_be_absent: bool = False,
    lang: str = "en",
) -> Status:
    """
    Check a list of id strings.

    ``can_be_absent`` accepts ``None``; a present list must still have at
    least ``min_count`` entries.
    """
    if value is None and can_be_absent:
        return STATUS_OK
    if not isinstance(value, list):
        return create_status(Code.NOT_AN_ARRAY, field_name, lang=lang)
    if len(value) < min_count:
        return create_status(Code.TOO_FEW_ELEMENTS, field_name, min_count, lang=lang)
    for i, entry in enumerate(value):
        if not is_valid_id_string(entry):
            return create_status(Code.INVALID_ID_ELEMENT, field_name, i, lang=lang)
    return STATUS_OK


def validate_id_object_array(value: Any, field_name: str = "ids", *, lang: str = "en") -> Status:
    """Check a non-empty list of id-objects, each ``{"id": ...}`` or ``{"@id": ...}`` only."""
    if not isinstance(value, list):
        return create_status(Code.NOT_AN_ARRAY, field_name, lang=lang)
    if not value:
        return create_status(Code.TOO_FEW_ELEMENTS, field_name, 1, lang=lang)
    for i, entry in enumerate(value):
        if not isinstance(entry, dict):
            return create_status(Code.NOT_AN_ID_OBJECT, field_name, i, lang=lang)
        candidate = entry["@id"] if "@id" in entry else entry.get("id")
        if not is_valid_id_string(candidate):
            return create_status(Code.ID_OBJECT_INVALID, field_name, i, lang=lang)
        if len(entry) != 1:
            return create_status(Code.ID_OBJECT_EXTRA_KEYS, field_name, i, lang=lang)
    return STATUS_OK


def validate_multi_language_text(value: Any, field_name: str, *, lang: str = "en") -> Status:
    """
    Check the multi-language text rule.

    - no entries: valid
    - one entry: ``lang`` is optional but must be a string when present
    - several entries: each needs a string ``value`` and a non-empty ``lang``
    """
    if not isinstance(value, list):
        return create_status(Code.TEXT_NOT_AN_ARRAY, field_name, lang=lang)
    if not value:
        return STATUS_OK
    if len(value) == 1:
        entry = value[0]
        if not isinstance(entry, dict) or not isinstance(entry.get("value"), str):
            return create_status(Code.TEXT_ENTRY_INVALID, field_name, lang=lang)
        if "lang" in entry and not isinstance(entry["lang"], str):
            return create_status(Code.TEXT_LANG_INVALID, field_name, lang=lang)
        return STATUS_OK
    for i, entry in enumerate(value):
        if not isinstance(entry, dict):
            return create_status(Code.TEXT_ITEM_NOT_AN_OBJECT, field_name, i, lang=lang)
        if not isinstance(entry.get("value"), str):
            return create_status(Code.TEXT_ITEM_VALUE_INVALID, field_name, i, lang=lang)
        tag = entry.get("lang")
        if not isinstance(tag, str) or not tag.strip():
            return create_status(Code.TEXT_ITEM_LANG_MISSING, field_name, i, lang=lang)
    return STATUS_OK
