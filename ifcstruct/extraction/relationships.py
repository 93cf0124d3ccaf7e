"""Find the building storey an element belongs to."""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

CONTAINMENT = "containment"
DECOMPOSITION = "decomposition"

# Spatial hierarchies are shallow (site > building > storey > space)
_MAX_HIERARCHY_DEPTH = 16


def _storey_above(start: Any) -> Any | None:
    """Return *start* if it is a storey, else walk up IfcRelAggregates."""
    current = start
    for _ in range(_MAX_HIERARCHY_DEPTH):
        if current is None:
            return None
        if current.is_a("IfcBuildingStorey"):
            return current
        decomposes = getattr(current, "Decomposes", None)
        current = decomposes[0].RelatingObject if decomposes else None
    return None


def containing_storey(element: Any) -> Any | None:
    """Storey reached through IfcRelContainedInSpatialStructure."""
    rels = getattr(element, "ContainedInStructure", None)
    if not rels:
        return None
    return _storey_above(rels[0].RelatingStructure)


def decomposing_storey(element: Any) -> Any | None:
    """Storey reached through the element's own aggregation parent.

    Covers elements aggregated directly into a storey and parts of an
    assembly that is itself contained in one.
    """
    decomposes = getattr(element, "Decomposes", None)
    if not decomposes:
        return None
    parent = decomposes[0].RelatingObject
    return _storey_above(parent) or containing_storey(parent)


def find_storey(element: Any) -> tuple[Any | None, str | None]:
    """Return ``(storey, relation)``; containment takes precedence.

    Decomposition is only consulted for elements with no spatial
    containment at all; a container outside any storey is final.
    """
    if getattr(element, "ContainedInStructure", None):
        storey = containing_storey(element)
        if storey is not None:
            return storey, CONTAINMENT
        return None, None
    storey = decomposing_storey(element)
    if storey is not None:
        return storey, DECOMPOSITION
    return None, None
