"""
Multi-Vocabulary Facility
==========================
Maps PIG metamodel attribute names to and from JSON-LD predicates and XML
tags. All other keys are ontology terms and pass through unchanged.

Example::

    from pig_graph.transform.mvf import TO_JSONLD, FROM_JSONLD, rename_json_tags

    jld = rename_json_tags({"id": "d:1", "title": [{"value": "Pump"}]}, TO_JSONLD)
    # {"@id": "d:1", "dcterms:title": [{"@value": "Pump"}]}
    rename_json_tags(jld, FROM_JSONLD)  # back to the internal names
"""

from __future__ import annotations

import logging
from typing import Mapping

from .json_tree import JsonPrimitive, JsonValue, is_leaf

logger = logging.getLogger(__name__)


def _reverse(pairs: list[tuple[str, str]]) -> dict[str, str]:
    # Several external terms may map to one internal name; the last one wins.
    return {internal: external for external, internal in pairs}


# ---------------------------------------------------------------------------
# JSON-LD
# ---------------------------------------------------------------------------

_JSONLD_PAIRS: list[tuple[str, str]] = [
    ("@context", "context"),
    ("@id", "id"),
    ("@type", "hasClass"),
    ("@value", "value"),
    ("@language", "lang"),
    ("pig:revision", "revision"),
    ("pig:priorRevision", "priorRevision"),
    ("rdfs:subClassOf", "specializes"),
    ("rdfs:subPropertyOf", "specializes"),
    ("pig:specializes", "specializes"),
    ("pig:icon", "icon"),
    ("xs:simpleType", "datatype"),
    ("sh:datatype", "datatype"),
    ("xs:minOccurs", "minCount"),
    ("sh:minCount", "minCount"),
    ("xs:maxOccurs", "maxCount"),
    ("sh:maxCount", "maxCount"),
    ("xs:maxLength", "maxLength"),
    ("sh:maxLength", "maxLength"),
    ("xs:minInclusive", "minInclusive"),
    ("sh:minInclusive", "minInclusive"),
    ("xs:maxInclusive", "maxInclusive"),
    ("sh:maxInclusive", "maxInclusive"),
    ("xs:default", "defaultValue"),
    ("sh:defaultValue", "defaultValue"),
    ("xs:pattern", "pattern"),
    ("sh:pattern", "pattern"),
    ("pig:unit", "unit"),
    ("pig:composedProperty", "composedProperty"),
    ("pig:aComposedProperty", "aComposedProperty"),
    ("pig:itemType", "itemType"),
    ("pig:eligibleProperty", "eligibleProperty"),
    ("pig:eligibleReference", "eligibleReference"),
    ("pig:eligibleSourceLink", "eligibleSource"),
    ("pig:eligibleSource", "eligibleSource"),
    ("pig:eligibleTargetLink", "eligibleTarget"),
    ("pig:eligibleTarget", "eligibleTarget"),
    ("pig:eligibleValue", "eligibleValue"),
    ("dcterms:title", "title"),
    ("dcterms:description", "description"),
    ("dcterms:created", "created"),
    ("dcterms:modified", "modified"),
    ("dcterms:creator", "creator"),
]

FROM_JSONLD: dict[str, str] = dict(_JSONLD_PAIRS)
TO_JSONLD: dict[str, str] = _reverse(_JSONLD_PAIRS)


# ---------------------------------------------------------------------------
# XML
# ---------------------------------------------------------------------------

# XML carries text values as element content, so @value/@language have no tag.
_XML_PAIRS: list[tuple[str, str]] = [
    ("pig:revision", "revision"),
    ("pig:priorRevision", "priorRevision"),
    ("rdf:type", "hasClass"),
    ("rdfs:subClassOf", "specializes"),
    ("rdfs:subPropertyOf", "specializes"),
    ("pig:specializes", "specializes"),
    ("pig:icon", "icon"),
    ("sh:datatype", "datatype"),
    ("xs:simpleType", "datatype"),
    ("sh:minCount", "minCount"),
    ("xs:minOccurs", "minCount"),
    ("sh:maxCount", "maxCount"),
    ("xs:maxOccurs", "maxCount"),
    ("sh:maxLength", "maxLength"),
    ("xs:maxLength", "maxLength"),
    ("sh:minInclusive", "minInclusive"),
    ("xs:minInclusive", "minInclusive"),
    ("sh:maxInclusive", "maxInclusive"),
    ("xs:maxInclusive", "maxInclusive"),
    ("sh:defaultValue", "defaultValue"),
    ("xs:default", "defaultValue"),
    ("sh:pattern", "pattern"),
    ("xs:pattern", "pattern"),
    ("pig:unit", "unit"),
    ("pig:composedProperty", "composedProperty"),
    ("pig:aComposedProperty", "aComposedProperty"),
    ("pig:itemType", "itemType"),
    ("pig:eligibleProperty", "eligibleProperty"),
    ("pig:eligibleReference", "eligibleReference"),
    ("pig:eligibleSource", "eligibleSource"),
    ("pig:eligibleTarget", "eligibleTarget"),
    ("pig:eligibleValue", "eligibleValue"),
    ("dcterms:title", "title"),
    ("dcterms:description", "description"),
    ("dcterms:created", "created"),
    ("dcterms:modified", "modified"),
    ("dcterms:creator", "creator"),
]

FROM_XML: dict[str, str] = dict(_XML_PAIRS)
TO_XML: dict[str, str] = _reverse(_XML_PAIRS)


# ---------------------------------------------------------------------------
# Renaming
# ---------------------------------------------------------------------------


def rename_json_tags(
    node: JsonValue,
    mapping: Mapping[str, str],
    *,
    mutate: bool = False,
) -> JsonValue:
    """
    Rename dict keys found in ``mapping`` at every depth.

    Only keys are renamed; list elements and primitive values are recursed
    into but never looked up. When a renamed key already exists at the same
    level, the renamed value overwrites it and a warning is logged.

    Use ``mutate=True`` only for large trees the caller no longer needs.
    """
    if node is None or is_leaf(node):
        return node

    if isinstance(node, list):
        if mutate:
            for i, child in enumerate(node):
                node[i] = rename_json_tags(child, mapping, mutate=True)
            return node
        return [rename_json_tags(child, mapping) for child in node]

    out: dict[str, JsonValue] = {}
    renamed: dict[str, str] = {}
    for key, child in node.items():
        value = rename_json_tags(child, mapping, mutate=mutate)
        mapped = mapping.get(key, key)
        if mapped == key:
            if key in renamed:
                # The renamed value holds the slot.
                logger.warning("rename_json_tags: overwriting key '%s' while renaming '%s'", key, renamed[key])
                continue
        else:
            if mapped in out:
                logger.warning("rename_json_tags: overwriting key '%s' while renaming '%s'", mapped, key)
            renamed[mapped] = key
        out[mapped] = value

    if mutate:
        node.clear()
        node.update(out)
        return node
    return out


def map_term(term: JsonPrimitive, mapping: Mapping[str, str]) -> JsonPrimitive:
    """Map a single term; non-strings and unknown terms are returned unchanged."""
    if not isinstance(term, str):
        return term
    return mapping.get(term, term)
