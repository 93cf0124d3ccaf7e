"""Resolve nested IfcLocalPlacement chains into absolute translations.

The chain is walked iteratively with a hard depth cap, so malformed
(cyclic) input turns into a defined failure instead of unbounded
recursion.  Only translations are accumulated; axis rotations are not
applied.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict

from ifcstruct.config import MAX_PLACEMENT_DEPTH
from ifcstruct.extraction.errors import PlacementDepthExceeded
from ifcstruct.models.element import ORIGIN, Point3D, ZPolicy

logger = logging.getLogger(__name__)

RESOLVED = "resolved"
ABSENT = "absent"
DEPTH_EXCEEDED = "depth_exceeded"
FAILED = "failed"


class ResolvedPlacement(BaseModel):
    """Outcome of walking one placement chain."""

    model_config = ConfigDict(frozen=True)

    absolute: Point3D = ORIGIN
    local: Point3D = ORIGIN
    """Translation of the head link alone (the element's own offset)."""

    depth: int = 0
    status: str = RESOLVED

    @property
    def ok(self) -> bool:
        return self.status in (RESOLVED, ABSENT)


def _link_translation(link: Any, scale: float) -> Point3D:
    """Local translation contributed by a single placement link."""
    if not link.is_a("IfcLocalPlacement"):
        return ORIGIN
    relative = getattr(link, "RelativePlacement", None)
    location = getattr(relative, "Location", None) if relative is not None else None
    if location is None:
        return ORIGIN
    coords = [float(c) for c in location.Coordinates] + [0.0, 0.0, 0.0]
    return Point3D(x=coords[0] * scale, y=coords[1] * scale, z=coords[2] * scale)


def _walk(placement: Any, max_depth: int, scale: float) -> ResolvedPlacement:
    total = ORIGIN
    local: Point3D | None = None
    depth = 0
    link = placement
    while link is not None:
        depth += 1
        if depth > max_depth:
            raise PlacementDepthExceeded(max_depth)
        translation = _link_translation(link, scale)
        if local is None:
            local = translation
        total = total + translation
        link = getattr(link, "PlacementRelTo", None)
    return ResolvedPlacement(absolute=total, local=local or ORIGIN, depth=depth)


def resolve_placement(
    placement: Any,
    max_depth: int = MAX_PLACEMENT_DEPTH,
    scale: float = 1.0,
) -> ResolvedPlacement:
    """Return the absolute translation of *placement*; never raises.

    Parameters
    ----------
    placement:
        Head of the chain (an element's ``ObjectPlacement``), or None.
    max_depth:
        Maximum number of links walked before the chain is declared
        malformed.
    scale:
        Millimetres per model length unit.

    A missing head resolves to the origin with status ``absent``.  Any
    failure also yields the origin, flagged ``depth_exceeded`` or
    ``failed``.
    """
    if placement is None:
        return ResolvedPlacement(status=ABSENT)
    try:
        return _walk(placement, max_depth, scale)
    except PlacementDepthExceeded:
        logger.debug("Placement chain exceeds %d links", max_depth)
        return ResolvedPlacement(depth=max_depth, status=DEPTH_EXCEEDED)
    except Exception:
        logger.debug("Placement resolution failed", exc_info=True)
        return ResolvedPlacement(status=FAILED)


def element_placement(element: Any, max_depth: int = MAX_PLACEMENT_DEPTH, scale: float = 1.0) -> ResolvedPlacement:
    """Resolve the ``ObjectPlacement`` of *element*."""
    try:
        placement = getattr(element, "ObjectPlacement", None)
    except Exception:
        logger.debug("Could not read ObjectPlacement", exc_info=True)
        return ResolvedPlacement(status=FAILED)
    return resolve_placement(placement, max_depth=max_depth, scale=scale)


def combine_z(
    policy: ZPolicy,
    placement: ResolvedPlacement,
    storey_elevation: float | None,
) -> Point3D:
    """Apply a category's Z policy to a resolved placement.

    Without a known storey elevation, or for a failed placement, the
    resolved absolute position is returned unchanged.
    """
    absolute = placement.absolute
    if not placement.ok or storey_elevation is None or policy == ZPolicy.PLACEMENT:
        return absolute
    if policy == ZPolicy.STOREY_PLUS_LOCAL:
        return Point3D(x=absolute.x, y=absolute.y, z=storey_elevation + placement.local.z)
    return Point3D(x=absolute.x, y=absolute.y, z=storey_elevation)
