"""
PIG Item Types
===============
Item type tags and XML Schema datatypes of the Product Information Graph.
"""

from __future__ import annotations

from enum import Enum


class PigItemType(str, Enum):
    """The ``itemType`` tag of every PIG item."""
    # Classes
    PROPERTY = "pig:Property"
    REFERENCE = "pig:Reference"
    ENTITY = "pig:Entity"
    RELATIONSHIP = "pig:Relationship"
    # Instances
    A_PROPERTY = "pig:aProperty"
    A_REFERENCE = "pig:aReference"
    AN_ENTITY = "pig:anEntity"
    A_RELATIONSHIP = "pig:aRelationship"


# Wire tags distinguishing the role of a reference in JSON-LD.
A_SOURCE_LINK = "pig:aSourceLink"
A_TARGET_LINK = "pig:aTargetLink"

CLASS_TYPES = frozenset(t.value for t in (
    PigItemType.PROPERTY,
    PigItemType.REFERENCE,
    PigItemType.ENTITY,
    PigItemType.RELATIONSHIP,
))

INSTANCE_TYPES = frozenset(t.value for t in (
    PigItemType.A_PROPERTY,
    PigItemType.A_REFERENCE,
    PigItemType.AN_ENTITY,
    PigItemType.A_RELATIONSHIP,
))

# AProperty and AReference live inside their owner and never stand alone in a graph.
GRAPH_TYPES = frozenset(t.value for t in (
    PigItemType.PROPERTY,
    PigItemType.REFERENCE,
    PigItemType.ENTITY,
    PigItemType.RELATIONSHIP,
    PigItemType.AN_ENTITY,
    PigItemType.A_RELATIONSHIP,
))


def item_type_tag(item_type: object) -> object:
    """Plain string tag of a PigItemType member; other values are returned as is."""
    return item_type.value if isinstance(item_type, PigItemType) else item_type


def is_class_type(item_type: object) -> bool:
    return item_type_tag(item_type) in CLASS_TYPES


def is_instance_type(item_type: object) -> bool:
    return item_type_tag(item_type) in INSTANCE_TYPES


class XsDataType(str, Enum):
    """Datatypes with dedicated support; any other ``xs:`` type is treated as a string."""
    ANY_TYPE = "xs:anyType"
    BOOLEAN = "xs:boolean"
    INTEGER = "xs:integer"
    DOUBLE = "xs:double"
    STRING = "xs:string"
    ANY_URI = "xs:anyURI"
    DATE = "xs:date"
    DATE_TIME = "xs:dateTime"
    DURATION = "xs:duration"
    COMPLEX_TYPE = "xs:complexType"


_DATATYPES = frozenset(t.value for t in XsDataType)


def normalize_datatype(value: str) -> str:
    """Rewrite the ``xsd:`` prefix to ``xs:``."""
    if isinstance(value, str) and value.startswith("xsd:"):
        return "xs:" + value[4:]
    return value


def is_supported_datatype(value: object) -> bool:
    if not isinstance(value, str):
        return False
    return normalize_datatype(value) in _DATATYPES
