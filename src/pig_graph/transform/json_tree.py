"""
JSON Tree Walker
=================
Recursive helpers over untyped JSON-like trees (dicts, lists, primitives).

The input is assumed to be acyclic, as it originates from JSON.
"""

from __future__ import annotations

from typing import Any, Callable, Union

JsonPrimitive = Union[str, int, float, bool, None]
JsonValue = Any
JsonPath = list[Union[str, int]]


def is_leaf(node: JsonValue) -> bool:
    """True for strings, numbers and booleans; ``None`` is not a leaf."""
    return isinstance(node, (str, int, float, bool))


def iterate_json(
    node: JsonValue,
    visit: Callable[[JsonPrimitive, JsonPath], None],
    path: JsonPath | None = None,
) -> None:
    """
    Call ``visit(leaf, path)`` for every primitive leaf, depth first.

    ``path`` lists the dict keys and list indices from the root. ``None``
    values are neither visited nor descended. The tree is not modified.
    """
    path = path or []
    if node is None:
        return
    if is_leaf(node):
        visit(node, path)
        return
    if isinstance(node, list):
        for i, child in enumerate(node):
            iterate_json(child, visit, [*path, i])
        return
    for key, child in node.items():
        iterate_json(child, visit, [*path, key])


def map_json(
    node: JsonValue,
    transform: Callable[[JsonPrimitive, JsonPath], JsonPrimitive],
    *,
    mutate: bool = False,
    path: JsonPath | None = None,
) -> JsonValue:
    """
    Replace every primitive leaf by ``transform(leaf, path)``.

    Returns a new tree unless ``mutate`` is set, in which case containers are
    updated in place and the input is returned.
    """
    path = path or []
    if node is None:
        return None
    if is_leaf(node):
        return transform(node, path)
    if isinstance(node, list):
        if mutate:
            for i, child in enumerate(node):
                node[i] = map_json(child, transform, mutate=True, path=[*path, i])
            return node
        return [map_json(child, transform, path=[*path, i]) for i, child in enumerate(node)]
    if mutate:
        for key in list(node):
            node[key] = map_json(node[key], transform, mutate=True, path=[*path, key])
        return node
    return {key: map_json(child, transform, path=[*path, key]) for key, child in node.items()}


def strip_none(value: JsonValue) -> JsonValue:
    """Return a copy with ``None``-valued dict entries removed at every depth."""
    if isinstance(value, list):
        return [strip_none(v) for v in value]
    if isinstance(value, dict):
        return {k: strip_none(v) for k, v in value.items() if v is not None}
    return value
