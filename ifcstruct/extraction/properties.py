"""Read property sets and quantity sets attached to IFC elements."""

from __future__ import annotations

import logging
from typing import Any, Iterator

import ifcopenshell
import ifcopenshell.util.element

logger = logging.getLogger(__name__)


def extract_psets(element: ifcopenshell.entity_instance) -> dict[str, dict[str, Any]]:
    """Return the property sets of *element*, keyed by Pset name.

    Quantity sets are excluded; the internal ``id`` key ifcopenshell adds
    to every set is dropped.
    """
    try:
        raw = ifcopenshell.util.element.get_psets(element, psets_only=True)
    except Exception:
        logger.debug("Pset extraction failed for %s", element.GlobalId, exc_info=True)
        return {}

    return {
        pset_name: {k: v for k, v in props.items() if k != "id"}
        for pset_name, props in raw.items()
    }


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def iter_numeric_properties(
    psets: dict[str, dict[str, Any]],
) -> Iterator[tuple[str, float]]:
    """Yield ``(property name, value)`` for every single numeric property."""
    for props in psets.values():
        for name, value in props.items():
            number = _as_number(value)
            if number is not None:
                yield name, number


def explicit_volume(element: ifcopenshell.entity_instance) -> float | None:
    """Return the first positive IfcQuantityVolume attached to *element*."""
    for rel in getattr(element, "IsDefinedBy", None) or ():
        if not rel.is_a("IfcRelDefinesByProperties"):
            continue
        definition = rel.RelatingPropertyDefinition
        if definition is None or not definition.is_a("IfcElementQuantity"):
            continue
        for quantity in definition.Quantities or ():
            if quantity.is_a("IfcQuantityVolume") and quantity.VolumeValue:
                value = float(quantity.VolumeValue)
                if value > 0:
                    return value
    return None
