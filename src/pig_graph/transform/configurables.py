"""
Configurable Properties and References
=======================================
In JSON-LD an instance carries its configured properties and references
under keys equal to their *class* id::

    {
        "@id": "d:pump-1",
        "o:Pressure": [{"pig:itemType": {"@id": "pig:aProperty"}, "@value": "5"}],
        "o:feeds": [{"pig:itemType": {"@id": "pig:aTargetLink"}, "@id": "d:tank-1"}]
    }

Internally the same data lives in flat arrays (``hasProperty``,
``hasSource``, ``hasTarget``) whose records name their class in ``hasClass``.
:func:`collect_configurables_from_jsonld` goes one way and
:func:`add_configurables_to_jsonld` the other.

Which array an entry belongs to is decided by the registry below, keyed by
the entry's item type tag.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, MutableMapping

from ..models.types import A_SOURCE_LINK, A_TARGET_LINK, PigItemType, item_type_tag
from .ids import is_valid_id_string, replace_id_objects
from .mvf import FROM_JSONLD, TO_JSONLD


@dataclass(frozen=True)
class Configurable:
    """
    One configurable array of an instance.

    field:     internal array name, e.g. ``hasProperty``
    item_type: item type of the collected records
    wire_type: item type tag written to JSON-LD
    accepts:   item type tags recognized when reading JSON-LD
    """
    field: str | None
    item_type: str
    wire_type: str
    accepts: frozenset[str]

    @classmethod
    def for_item_type(cls, item_type: str) -> "Configurable":
        tag = str(item_type_tag(item_type))
        return cls(field=None, item_type=tag, wire_type=tag, accepts=frozenset({tag}))


HAS_PROPERTY = Configurable(
    field="hasProperty",
    item_type=PigItemType.A_PROPERTY.value,
    wire_type=PigItemType.A_PROPERTY.value,
    accepts=frozenset({PigItemType.A_PROPERTY.value}),
)
HAS_SOURCE = Configurable(
    field="hasSource",
    item_type=PigItemType.A_REFERENCE.value,
    wire_type=A_SOURCE_LINK,
    accepts=frozenset({A_SOURCE_LINK}),
)
HAS_TARGET = Configurable(
    field="hasTarget",
    item_type=PigItemType.A_REFERENCE.value,
    wire_type=A_TARGET_LINK,
    accepts=frozenset({A_TARGET_LINK, PigItemType.A_REFERENCE.value}),
)

CONFIGURABLES: dict[str, Configurable] = {
    "hasProperty": HAS_PROPERTY,
    "hasSource": HAS_SOURCE,
    "hasTarget": HAS_TARGET,
}

# Metamodel keys in either vocabulary are never ontology terms.
RESERVED_KEYS = frozenset(FROM_JSONLD) | frozenset(TO_JSONLD)


def _resolve(expected: Configurable | str) -> Configurable:
    if isinstance(expected, Configurable):
        return expected
    return Configurable.for_item_type(expected)


def _entry_item_type(entry: Mapping[str, Any]) -> Any:
    tag = entry.get("itemType", entry.get("pig:itemType"))
    if isinstance(tag, dict):
        tag = tag.get("@id", tag.get("id"))
    return tag


def _first(entry: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if entry.get(key) is not None:
            return entry[key]
    return None


def literal(value: Any) -> Any:
    """Render a JSON scalar as the string form stored in ``value``."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return value


def _record(kind: Configurable, key: str, entry: Mapping[str, Any]) -> dict[str, Any]:
    record: dict[str, Any] = {"itemType": kind.item_type, "hasClass": key}
    value = _first(entry, "value", "@value")
    if value is not None:
        record["value"] = literal(value)
    id_ref = _first(entry, "idRef", "id", "@id")
    if id_ref is not None:
        record["idRef"] = id_ref
    composed = _first(entry, "aComposedProperty", "pig:aComposedProperty")
    if composed is not None:
        record["aComposedProperty"] = replace_id_objects(composed)
    return record


def collect_configurables_from_jsonld(
    obj: MutableMapping[str, Any],
    expected: Configurable | str,
) -> list[dict[str, Any]]:
    """
    Pull the entries of one configurable kind out of ``obj``.

    Matched entries are removed from ``obj`` in place; a key is deleted once
    nothing is left under it. Unmatched entries stay where they are.
    Records are ordered by key, then by position within the key.
    """
    kind = _resolve(expected)
    records: list[dict[str, Any]] = []

    for key in list(obj):
        if key in RESERVED_KEYS or not is_valid_id_string(key):
            continue
        value = obj[key]

        if isinstance(value, list):
            remaining = []
            for entry in value:
                if isinstance(entry, dict) and _entry_item_type(entry) in kind.accepts:
                    records.append(_record(kind, key, entry))
                else:
                    remaining.append(entry)
            if remaining:
                obj[key] = remaining
            else:
                del obj[key]

        elif isinstance(value, dict):
            if _entry_item_type(value) in kind.accepts:
                records.append(_record(kind, key, value))
                del obj[key]

        elif kind.item_type == PigItemType.A_PROPERTY.value and isinstance(value, (str, int, float, bool)):
            records.append({"itemType": kind.item_type, "hasClass": key, "value": literal(value)})
            del obj[key]

    return records


def add_configurables_to_jsonld(
    jld: MutableMapping[str, Any],
    owner: Any,
    field_name: str,
) -> MutableMapping[str, Any]:
    """
    Regroup ``owner[field_name]`` under the records' class keys of ``jld``.

    ``owner`` is an item snapshot (or an item, whose ``get()`` is used).
    ``field_name`` is removed from ``jld``; ``jld`` is modified and returned.
    """
    snapshot = owner if isinstance(owner, Mapping) else (owner.get() or {})
    records = snapshot.get(field_name)
    kind = CONFIGURABLES.get(field_name)

    if isinstance(records, list):
        grouped: dict[str, list[dict[str, Any]]] = {}
        for record in records:
            wire_type = kind.wire_type if kind else record.get("itemType")
            entry: dict[str, Any] = {"pig:itemType": {"@id": wire_type}}
            if record.get("value") is not None:
                entry["@value"] = record["value"]
            if record.get("idRef") is not None:
                entry["@id"] = record["idRef"]
            if record.get("aComposedProperty") is not None:
                entry["pig:aComposedProperty"] = [{"@id": ref} for ref in record["aComposedProperty"]]
            grouped.setdefault(record["hasClass"], []).append(entry)
        for key, entries in grouped.items():
            # Sources and targets may share a class key.
            existing = jld.get(key)
            jld[key] = existing + entries if isinstance(existing, list) else entries

    jld.pop(field_name, None)
    return jld
