"""
pig-graph – Product Information Graph
======================================
Typed items of the Product Information Graph (PIG) and their conversion
to and from JSON-LD.

Classes (Property, Reference, Entity, Relationship) define the ontology of
a package; instances (AnEntity, ARelationship with their owned AProperty
and AReference values) carry the product data. Every item is validated
before it is committed and reports problems as status codes.

Quick Start::

    from pig_graph import AnEntityBuilder, PigItem

    pump = (
        AnEntityBuilder("pump-1", "o:Pump")
        .with_title("Feed pump P-1", lang="en")
        .with_property("o:Pressure", "5.5")
        .build()
    )
    pump.status().ok          # True
    jld = pump.get_jsonld()   # {"@id": "d:pump-1", "o:Pressure": [...], ...}

    # Read back
    status = PigItem.from_jsonld(jld)
    if status.ok:
        print(status.response.get())
"""

__version__ = "0.1.0"

# Items
from .models.items import (
    Item,
    Identifiable,
    Element,
    AnElement,
    Property,
    Reference,
    Entity,
    Relationship,
    AProperty,
    AReference,
    AnEntity,
    ARelationship,
    ValidatedItem,
)
from .models.types import PigItemType, XsDataType
from .models.factory import PigItem

# Status and errors
from .messages import Code, Status, create_response, create_status
from .exceptions import ImmutableFieldError, ItemTypeError, PigError

# Builders
from .builder.class_builder import PropertyBuilder
from .builder.instance_builder import AnEntityBuilder, ARelationshipBuilder

# Validator
from .validator.graph import (
    GraphValidator,
    ValidationResult,
    ValidationIssue,
    Severity,
)

__all__ = [
    # Items
    "Item",
    "Identifiable",
    "Element",
    "AnElement",
    "Property",
    "Reference",
    "Entity",
    "Relationship",
    "AProperty",
    "AReference",
    "AnEntity",
    "ARelationship",
    "ValidatedItem",
    "PigItemType",
    "XsDataType",
    "PigItem",
    # Status and errors
    "Code",
    "Status",
    "create_status",
    "create_response",
    "PigError",
    "ItemTypeError",
    "ImmutableFieldError",
    # Builders
    "PropertyBuilder",
    "AnEntityBuilder",
    "ARelationshipBuilder",
    # Validation
    "GraphValidator",
    "ValidationResult",
    "ValidationIssue",
    "Severity",
]
