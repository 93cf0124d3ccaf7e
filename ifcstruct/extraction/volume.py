"""Volume, weight and per-category measures of structural elements."""

from __future__ import annotations

import logging
from typing import Any

from ifcstruct.extraction.properties import explicit_volume
from ifcstruct.models.element import Category, Dimensions, Material

logger = logging.getLogger(__name__)

QUANTITY = "quantity"
DIMENSIONS = "dimensions"
FAILED = "failed"


def calculate_volume(element: Any, dimensions: Dimensions) -> tuple[float, str]:
    """Return ``(volume in m³, source)``; never negative, never raises.

    An attached positive IfcQuantityVolume is preferred over the volume
    derived from *dimensions*.
    """
    try:
        quantity = explicit_volume(element)
        if quantity is not None and quantity > 0:
            return quantity, QUANTITY
        return dimensions.volume_m3(), DIMENSIONS
    except Exception:
        logger.debug(
            "Volume calculation failed for %s",
            getattr(element, "GlobalId", "?"),
            exc_info=True,
        )
        return 0.0, FAILED


def calculate_weight(volume: float, material: Material | None) -> float:
    """Weight in kg; zero without a material."""
    if material is None:
        return 0.0
    return volume * material.density


def category_measures(category: Category, dimensions: Dimensions) -> dict[str, float | None]:
    """Category-specific fields of a normalized record.

    Beams report their extrusion as ``length``; slabs report ``area`` (m²)
    of their footprint and ``thickness`` (mm).
    """
    if category is Category.BEAM:
        return {"length": dimensions.height, "area": None, "thickness": None}
    if category is Category.SLAB:
        return {
            "length": None,
            "area": dimensions.cross_section_m2(),
            "thickness": dimensions.height,
        }
    return {"length": None, "area": None, "thickness": None}
