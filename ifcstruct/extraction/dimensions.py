"""DimensionExtractor — ordered fallback chain producing positive dimensions.

Strategies, first success wins:

1. ``properties``      explicit width/depth/height properties (all three)
2. ``geometry``        extruded profile or bounding box of the body
3. ``material_layers`` summed layer thickness over a default footprint
                       (plate-like categories only)
4. ``defaults``        fixed per-category dimensions; always succeeds

A strategy that raises is skipped, never escalated.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict

from ifcstruct.config import PLATE_LIKE_CATEGORIES
from ifcstruct.extraction.materials import extract_materials, layer_thickness
from ifcstruct.extraction.profiles import interpret_representation
from ifcstruct.extraction.properties import extract_psets, iter_numeric_properties
from ifcstruct.models.element import Category, Dimensions, MaterialLayer
from ifcstruct.settings import ExtractionSettings

logger = logging.getLogger(__name__)

PROPERTIES = "properties"
GEOMETRY = "geometry"
MATERIAL_LAYERS = "material_layers"
DEFAULTS = "defaults"


class DimensionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    dimensions: Dimensions
    source: str


Strategy = Callable[[Any, Category, Optional[list[MaterialLayer]]], Optional[Dimensions]]


class DimensionExtractor:
    """Resolve element dimensions in millimetres.

    Parameters
    ----------
    settings:
        Synonym groups, fallback extents and category defaults.
    scale:
        Millimetres per model length unit.
    """

    def __init__(self, settings: ExtractionSettings | None = None, scale: float = 1.0) -> None:
        self.settings = settings or ExtractionSettings()
        self.scale = scale
        self.strategies: list[tuple[str, Strategy]] = [
            (PROPERTIES, self.from_properties),
            (GEOMETRY, self.from_geometry),
            (MATERIAL_LAYERS, self.from_material_layers),
        ]

    def extract(
        self,
        element: Any,
        category: Category,
        layers: list[MaterialLayer] | None = None,
    ) -> DimensionResult:
        """Return the dimensions of *element*; never fails."""
        for source, strategy in self.strategies:
            try:
                dims = strategy(element, category, layers)
            except Exception:
                logger.debug(
                    "Dimension strategy %s failed for %s",
                    source,
                    getattr(element, "GlobalId", "?"),
                    exc_info=True,
                )
                continue
            if dims is not None:
                return DimensionResult(dimensions=dims, source=source)
        return DimensionResult(dimensions=self.defaults(category), source=DEFAULTS)

    # -- strategies --------------------------------------------------------

    def from_properties(
        self,
        element: Any,
        category: Category,
        layers: list[MaterialLayer] | None = None,
    ) -> Dimensions | None:
        """Match property names against the synonym groups."""
        synonyms = self.settings.dimension_synonyms
        found: dict[str, float] = {}

        for name, value in iter_numeric_properties(extract_psets(element)):
            if value <= 0:
                continue
            lowered = name.lower()
            for axis in ("width", "depth", "height"):
                if any(s in lowered for s in synonyms.get(axis, ())):
                    found.setdefault(axis, value * self.scale)
                    break

        if len(found) < 3:
            return None
        return Dimensions(width=found["width"], depth=found["depth"], height=found["height"])

    def from_geometry(
        self,
        element: Any,
        category: Category,
        layers: list[MaterialLayer] | None = None,
    ) -> Dimensions | None:
        """Cross-section from the body profile, height from its extrusion."""
        interpreted = interpret_representation(
            getattr(element, "Representation", None),
            scale=self.scale,
            fallback_extent=self.settings.fallback_profile_extent,
        )
        if interpreted is None or interpreted.extrusion is None:
            return None
        return Dimensions(
            width=interpreted.width,
            depth=interpreted.depth,
            height=interpreted.extrusion,
        )

    def from_material_layers(
        self,
        element: Any,
        category: Category,
        layers: list[MaterialLayer] | None = None,
    ) -> Dimensions | None:
        """Layer thickness over the default footprint, for plate-like elements."""
        if category.value not in PLATE_LIKE_CATEGORIES:
            return None
        if layers is None:
            layers = extract_materials(element)
        thickness = layer_thickness(layers) * self.scale
        if thickness <= 0:
            return None
        width, depth = self.settings.slab_footprint
        return Dimensions(width=width, depth=depth, height=thickness)

    def defaults(self, category: Category) -> Dimensions:
        width, depth, height = self.settings.default_dimensions[category]
        return Dimensions(width=width, depth=depth, height=height)
