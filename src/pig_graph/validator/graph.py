"""
Graph Validator
================
Validates a JSON-LD package graph item by item.

Every entry of ``@graph`` is instantiated through
:meth:`pig_graph.models.factory.PigItem.from_jsonld`; item failures are
reported with their status code, followed by the package rules below.
Cross-item reference resolution is not performed here.

Example::

    from pig_graph.validator.graph import GraphValidator

    result = GraphValidator().validate(document)
    if not result.passed:
        for issue in result.issues:
            print(f"[{issue.severity}] {issue.rule_id}: {issue.message}")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..messages import DEFAULT_LANGUAGE, Code, get_message
from ..models.factory import PigItem
from ..models.items import Item, Property
from ..models.types import is_supported_datatype


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


class Severity(str, Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass
class ValidationIssue:
    rule_id: str
    severity: Severity
    message: str
    index: int | None = None
    item_id: str | None = None


@dataclass
class ValidationResult:
    """Result of a graph validation run; ``items`` holds the items that were created."""
    passed: bool
    item_count: int
    issues: list[ValidationIssue] = field(default_factory=list)
    items: list[Item] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    def __str__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        return (
            f"[{status}] {len(self.items)}/{self.item_count} item(s) "
            f"– {len(self.errors)} error(s), {len(self.warnings)} warning(s)"
        )


def graph_items(document: Any) -> list[Any]:
    """Entries of a package: the ``@graph`` of a dict, a list as is, or a single item."""
    if isinstance(document, dict):
        if "@graph" in document:
            graph = document["@graph"]
            return graph if isinstance(graph, list) else [graph]
        return [document]
    if isinstance(document, list):
        return document
    return [document]


def _raw_id(entry: Any) -> Any:
    if not isinstance(entry, dict):
        return None
    return entry.get("@id", entry.get("id"))


# ---------------------------------------------------------------------------
# Graph Validator
# ---------------------------------------------------------------------------


class GraphValidator:
    """
    Validates the items of a PIG package graph.

    Rules implemented:
    - PIG-670  every item has an id
    - PIG-671  ids are unique within the graph
    - PIG-6xx  each item instantiates and validates (the item's status code)
    - PIG-680  Property datatypes are supported (warning)
    - PIG-679  summary when only part of the graph could be created (info)

    With ``strict`` set, warnings fail the run as well.
    """

    def __init__(self, lang: str = DEFAULT_LANGUAGE, strict: bool = False) -> None:
        self.lang = lang
        self.strict = strict

    def validate(self, document: Any) -> ValidationResult:
        entries = graph_items(document)
        issues: list[ValidationIssue] = []
        items: list[Item] = []
        seen: dict[str, int] = {}

        def add(code: int, sev: Severity, msg: str, index: int | None = None, item_id: str | None = None) -> None:
            issues.append(ValidationIssue(f"PIG-{int(code)}", sev, msg, index, item_id))

        for index, entry in enumerate(entries):
            item_id = _raw_id(entry)

            # PIG-670 id present
            if isinstance(entry, dict) and not item_id:
                add(Code.ITEM_WITHOUT_ID, Severity.ERROR, get_message(Code.ITEM_WITHOUT_ID, index, lang=self.lang), index)
                continue

            # PIG-671 unique ids
            if isinstance(item_id, str):
                if item_id in seen:
                    add(
                        Code.DUPLICATE_ID,
                        Severity.ERROR,
                        get_message(Code.DUPLICATE_ID, item_id, seen[item_id], index, lang=self.lang),
                        index,
                        item_id,
                    )
                    continue
                seen[item_id] = index

            # PIG-6xx item validation
            status = PigItem.from_jsonld(entry, lang=self.lang)
            if not status.ok:
                add(status.status, Severity.ERROR, status.status_text, index, item_id)
                continue
            item = status.response
            items.append(item)

            # PIG-680 datatype support
            if isinstance(item, Property) and not is_supported_datatype(item.datatype):
                add(
                    Code.UNSUPPORTED_DATATYPE,
                    Severity.WARNING,
                    get_message(Code.UNSUPPORTED_DATATYPE, item.id, item.datatype, lang=self.lang),
                    index,
                    item.id,
                )

        # PIG-679 partial graph
        if entries and len(items) < len(entries):
            add(
                Code.PARTIAL_GRAPH,
                Severity.INFO,
                get_message(Code.PARTIAL_GRAPH, "GraphValidator", len(items), len(entries), lang=self.lang),
            )

        failing = (Severity.ERROR, Severity.WARNING) if self.strict else (Severity.ERROR,)
        passed = not any(i.severity in failing for i in issues)
        return ValidationResult(passed=passed, item_count=len(entries), issues=issues, items=items)

    def validate_batch(self, documents: list[Any]) -> list[ValidationResult]:
        """Validate several package documents and return all results."""
        return [self.validate(doc) for doc in documents]
