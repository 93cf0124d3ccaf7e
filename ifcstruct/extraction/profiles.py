"""Interpret representation trees into profile extents and extrusion lengths.

Items are inspected in source order.  The first IfcExtrudedAreaSolid
whose swept profile can be classified wins; only when no extrusion is
recognised does a direct IfcBoundingBox item count.
"""

from __future__ import annotations

import logging
import math
from itertools import islice
from typing import Any, Iterator

from ifcstruct.config import FALLBACK_PROFILE_EXTENT, MAX_REPRESENTATION_ITEMS
from ifcstruct.models.geometry import (
    BoundingBoxProfile,
    CircularProfile,
    InterpretedProfile,
    PolygonProfile,
    ProfileGeometry,
    RectangularProfile,
)

logger = logging.getLogger(__name__)

# Mapped items and boolean operands nest; real exports rarely go deeper
_MAX_NESTING = 8

# Parameterized section profiles reduced to their overall extents:
# IFC class -> (width attributes in preference order, depth attribute)
_SECTION_PROFILES: dict[str, tuple[tuple[str, ...], str]] = {
    "IfcIShapeProfileDef": (("OverallWidth",), "OverallDepth"),
    "IfcTShapeProfileDef": (("FlangeWidth",), "Depth"),
    "IfcUShapeProfileDef": (("FlangeWidth",), "Depth"),
    "IfcZShapeProfileDef": (("FlangeWidth",), "Depth"),
    "IfcCShapeProfileDef": (("Width",), "Depth"),
    "IfcLShapeProfileDef": (("Width", "Depth"), "Depth"),
}


def _expand(items: Any, depth: int) -> Iterator[Any]:
    for item in items or ():
        if item.is_a("IfcMappedItem"):
            mapped = getattr(item.MappingSource, "MappedRepresentation", None)
            if mapped is not None and depth < _MAX_NESTING:
                yield from _expand(mapped.Items, depth + 1)
        elif item.is_a("IfcBooleanResult"):
            if depth < _MAX_NESTING:
                yield from _expand([item.FirstOperand], depth + 1)
        else:
            yield item


def iter_representation_items(product_shape: Any) -> Iterator[Any]:
    """Yield geometric items of an IfcProductDefinitionShape in source order."""
    if product_shape is None:
        return

    def _all() -> Iterator[Any]:
        for representation in getattr(product_shape, "Representations", None) or ():
            yield from _expand(representation.Items, 0)

    yield from islice(_all(), MAX_REPRESENTATION_ITEMS)


def _curve_points(curve: Any, scale: float) -> tuple[tuple[float, float], ...]:
    if curve is None:
        return ()
    if curve.is_a("IfcPolyline"):
        coords = [p.Coordinates for p in curve.Points or ()]
    elif curve.is_a("IfcIndexedPolyCurve"):
        coords = list(curve.Points.CoordList or ())
    else:
        return ()
    return tuple(
        (float(c[0]) * scale, float(c[1]) * scale) for c in coords if len(c) >= 2
    )


def classify_profile(profile: Any, scale: float = 1.0) -> ProfileGeometry | None:
    """Classify a swept-area profile, or return None if it is not recognised."""
    if profile is None:
        return None

    if profile.is_a("IfcRectangleProfileDef"):
        return RectangularProfile(width=float(profile.XDim) * scale, depth=float(profile.YDim) * scale)

    if profile.is_a("IfcCircleProfileDef"):
        return CircularProfile(radius=float(profile.Radius) * scale)

    for ifc_class, (width_attrs, depth_attr) in _SECTION_PROFILES.items():
        if profile.is_a(ifc_class):
            depth = float(getattr(profile, depth_attr))
            width = next(
                (float(v) for v in (getattr(profile, a, None) for a in width_attrs) if v is not None),
                depth,
            )
            return RectangularProfile(width=width * scale, depth=depth * scale)

    if profile.is_a("IfcArbitraryClosedProfileDef"):
        return PolygonProfile(points=_curve_points(profile.OuterCurve, scale))

    return None


def _usable(value: float) -> bool:
    return math.isfinite(value) and value > 0


def _interpreted(
    profile: ProfileGeometry,
    extrusion: float | None,
    fallback_extent: tuple[float, float],
) -> InterpretedProfile:
    width, depth = profile.extents()
    if not (_usable(width) and _usable(depth)):
        width, depth = fallback_extent
    if extrusion is not None and not _usable(extrusion):
        extrusion = None
    return InterpretedProfile(profile=profile, width=width, depth=depth, extrusion=extrusion)


def interpret_representation(
    product_shape: Any,
    scale: float = 1.0,
    fallback_extent: tuple[float, float] = FALLBACK_PROFILE_EXTENT,
) -> InterpretedProfile | None:
    """Return the first recognised profile of *product_shape*, or None.

    Empty or degenerate outlines report *fallback_extent* instead of zero
    extents, so downstream dimensions stay positive.
    """
    items = list(iter_representation_items(product_shape))

    for item in items:
        if not item.is_a("IfcExtrudedAreaSolid"):
            continue
        swept = item.SweptArea
        profile = classify_profile(swept, scale)
        if profile is None:
            logger.debug("Unrecognised swept profile %s", swept.is_a() if swept is not None else None)
            continue
        return _interpreted(profile, float(item.Depth) * scale, fallback_extent)

    for item in items:
        if item.is_a("IfcBoundingBox"):
            box = BoundingBoxProfile(
                x=float(item.XDim) * scale,
                y=float(item.YDim) * scale,
                z=float(item.ZDim) * scale,
            )
            return _interpreted(box, box.z, fallback_extent)

    return None
