"""
Id Normalizer
==============
Id grammar and the two complementary id transforms.

JSON-LD writes every reference as an object ``{"@id": "..."}``; PIG items
hold references as bare strings. :func:`make_id_objects` packs strings for
output and :func:`replace_id_objects` unpacks them on input.

Example::

    make_id_objects({"@id": "d:1", "hasClass": "o:Pump"})
    # {"@id": "d:1", "hasClass": {"@id": "o:Pump"}}

    replace_id_objects({"hasClass": {"@id": "o:Pump"}})
    # {"hasClass": "o:Pump"}
"""

from __future__ import annotations

import copy
import logging
import re
from typing import Iterable

from ..models.types import is_class_type
from .json_tree import JsonValue

logger = logging.getLogger(__name__)

TERM_WITH_NAMESPACE_RE = re.compile(r"^([a-zA-Z_][a-zA-Z0-9_\-.]*):([^\s]+)$")
URI_RE = re.compile(r"^(https?|ftp)://[^\s/$.?#].[^\s]*$", re.IGNORECASE)

# Stricter shape used by the schema models.
ID_PATTERN = r"^(?:[A-Za-z0-9_-]+:[^:\s]+|https?://[^\s]+)$"

CLASS_NAMESPACE = "o:"
INSTANCE_NAMESPACE = "d:"


def is_valid_id_string(value: object) -> bool:
    """True for a namespace-qualified term (``prefix:local``) or a URI."""
    return isinstance(value, str) and bool(
        TERM_WITH_NAMESPACE_RE.match(value) or URI_RE.match(value)
    )


# ---------------------------------------------------------------------------
# Packing and unpacking
# ---------------------------------------------------------------------------


def make_id_objects(
    node: JsonValue,
    *,
    id_key: str = "@id",
    mutate: bool = False,
) -> JsonValue:
    """
    Wrap every id-like string as ``{id_key: string}``.

    The value stored under ``id_key`` itself is never wrapped, so objects
    that are already id-objects pass through unchanged.
    """
    if isinstance(node, str):
        return {id_key: node} if is_valid_id_string(node) else node
    if isinstance(node, list):
        if mutate:
            for i, child in enumerate(node):
                node[i] = make_id_objects(child, id_key=id_key, mutate=True)
            return node
        return [make_id_objects(child, id_key=id_key) for child in node]
    if isinstance(node, dict):
        target = node if mutate else {}
        for key, value in node.items():
            if key == id_key:
                target[key] = value
            else:
                target[key] = make_id_objects(value, id_key=id_key, mutate=mutate)
        return target
    return node


def _is_id_object(node: JsonValue, id_keys: tuple[str, ...]) -> bool:
    if not isinstance(node, dict) or len(node) != 1:
        return False
    (key, value), = node.items()
    return key in id_keys and isinstance(value, str)


def replace_id_objects(
    node: JsonValue,
    *,
    id_keys: Iterable[str] = ("id", "@id"),
    mutate: bool = False,
) -> JsonValue:
    """
    Collapse every single-key id-object (e.g. ``{"@id": "o:X"}``) to its string.

    Works on a deep copy unless ``mutate`` is set.
    """
    keys = tuple(id_keys)
    root = node if mutate else copy.deepcopy(node)

    def walk(n: JsonValue) -> JsonValue:
        if isinstance(n, list):
            for i, child in enumerate(n):
                n[i] = walk(child)
            return n
        if isinstance(n, dict):
            if _is_id_object(n, keys):
                return next(iter(n.values()))
            for key in list(n):
                n[key] = walk(n[key])
            return n
        return n

    return walk(root)


def normalize_id(id_: str, item_type: str) -> str:
    """
    Give a bare id a namespace prefix: ``o:`` for classes, ``d:`` otherwise.

    Ids that already satisfy the id grammar are returned unchanged.
    """
    if not id_ or not isinstance(id_, str) or is_valid_id_string(id_):
        return id_
    prefix = CLASS_NAMESPACE if is_class_type(item_type) else INSTANCE_NAMESPACE
    normalized = f"{prefix}{id_}"
    logger.info("Id normalized: '%s' -> '%s' (%s)", id_, normalized, item_type)
    return normalized
