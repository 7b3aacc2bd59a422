"""
Examples for pig-graph
=======================
Three complete examples of building, exchanging and validating Product
Information Graph items.

Run:
    python examples/examples.py
"""

from __future__ import annotations

import json
import sys
import tempfile
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pig_graph import (
    AnEntityBuilder,
    ARelationshipBuilder,
    Entity,
    GraphValidator,
    PigItem,
    PropertyBuilder,
    Relationship,
)


# ---------------------------------------------------------------------------
# Example 1: Pump ontology
# ---------------------------------------------------------------------------


def example_ontology() -> list[dict]:
    """
    Example 1: Defining the classes of a small plant ontology.

    A pump has a pressure rating and a status; pumps feed tanks. The classes
    are built in memory and serialized to JSON-LD.
    """
    print("\n" + "="*60)
    print("EXAMPLE 1: Plant Ontology")
    print("="*60)

    pressure = (
        PropertyBuilder.double("Pressure", "Pressure")
        .with_title("Druck", lang="de")
        .with_range(0, 250)
        .with_unit("bar")
        .build()
    )
    status = (
        PropertyBuilder.string("Status", "Operating status")
        .with_eligible_value("running", "Running", lang="en")
        .with_eligible_value("stopped", "Stopped", lang="en")
        .build()
    )
    pump = Entity().set({
        "id": "o:Pump",
        "itemType": "pig:Entity",
        "hasClass": "pig:Entity",
        "title": "Pump",
        "eligibleProperty": [pressure.id, status.id],
    })
    tank = Entity().set({
        "id": "o:Tank",
        "itemType": "pig:Entity",
        "hasClass": "pig:Entity",
        "title": "Tank",
    })
    feeds = Relationship().set({
        "id": "o:feeds",
        "itemType": "pig:Relationship",
        "hasClass": "pig:Relationship",
        "title": "feeds",
        "eligibleSource": ["o:Pump"],
        "eligibleTarget": ["o:Tank"],
    })

    classes = [pressure, status, pump, tank, feeds]
    for item in classes:
        print(f"  {item.item_type.value:<18} {item.id:<12} {item.status()}")

    print(f"  Pressure range: {pressure.min_inclusive}..{pressure.max_inclusive} {pressure.unit}")
    print("  ✓ Example 1 complete")
    return [item.get_jsonld() for item in classes]


# ---------------------------------------------------------------------------
# Example 2: Instances and JSON-LD exchange
# ---------------------------------------------------------------------------


def example_instances() -> list[dict]:
    """
    Example 2: Describing a pump and a tank and exchanging them as JSON-LD.

    Configured property values appear in JSON-LD under their class keys;
    reading the document back yields the same items.
    """
    print("\n" + "="*60)
    print("EXAMPLE 2: Instances and JSON-LD")
    print("="*60)

    pump = (
        AnEntityBuilder("P-101", "o:Pump")
        .with_title("Feed pump P-101", lang="en")
        .with_title("Speisepumpe P-101", lang="de")
        .with_property("o:Pressure", 16)
        .with_property("o:Status", id_ref="o:running")
        .by("plant-engineering", revision="r1")
        .build()
    )
    tank = AnEntityBuilder("T-201", "o:Tank").with_title("Buffer tank T-201").build()
    feeds = (
        ARelationshipBuilder("P-101-feeds-T-201", "o:feeds")
        .from_source("o:feeds", pump.id)
        .to_target("o:feeds", tank.id)
        .build()
    )

    instances = [pump, tank, feeds]
    for item in instances:
        print(f"  {item.item_type.value:<18} {item.id:<22} {item.status()}")

    jld = pump.get_jsonld()
    print(f"  JSON-LD keys of {pump.id}: {sorted(jld)}")

    status = PigItem.from_jsonld(jld)
    print(f"  Read back: {status}")
    print(f"  Same snapshot: {status.ok and status.response.get() == pump.get()}")
    print("  ✓ Example 2 complete")
    return [item.get_jsonld() for item in instances]


# ---------------------------------------------------------------------------
# Example 3: Package validation
# ---------------------------------------------------------------------------


def example_validation(graph: list[dict]) -> None:
    """
    Example 3: Validating a package file.

    The package is written to disk, read back and validated. A broken copy
    with a duplicate id and an instance without class shows the reported
    issues.
    """
    print("\n" + "="*60)
    print("EXAMPLE 3: Package Validation")
    print("="*60)

    document = {"@context": {"o": "https://example.org/plant#", "d": "https://example.org/data#"}, "@graph": graph}
    with tempfile.NamedTemporaryFile("w", suffix=".jsonld", delete=False, encoding="utf-8") as f:
        json.dump(document, f, indent=2)
        package_path = Path(f.name)
    print(f"  Written to: {package_path}")

    loaded = json.loads(package_path.read_text(encoding="utf-8"))
    result = GraphValidator().validate(loaded)
    print(f"  Validation: {result}")

    broken = [*graph, dict(graph[0])]
    orphan = {k: v for k, v in graph[-2].items() if k != "@type"}
    orphan["@id"] = "d:orphan"
    broken.append(orphan)

    result = GraphValidator(lang="de").validate(broken)
    print(f"  Broken copy: {result}")
    for issue in result.issues:
        print(f"    [{issue.severity.value}] {issue.rule_id}: {issue.message}")

    package_path.unlink(missing_ok=True)
    print("  ✓ Example 3 complete")


# ---------------------------------------------------------------------------
# Run all examples
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    classes = example_ontology()
    instances = example_instances()
    example_validation(classes + instances)

    print("\n" + "="*60)
    print("All examples completed successfully.")
    print("="*60 + "\n")
