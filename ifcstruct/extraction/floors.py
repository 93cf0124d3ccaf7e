"""FloorLevelResolver — infer an integer floor index for an element.

The storey is looked up through spatial containment, then through
decomposition.  The level is then taken from, in order: the storey's
elevation, the first run of digits in the storey name, the element's
absolute Z, and finally 0.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict

from ifcstruct.config import DEFAULT_STOREY_HEIGHT_MM
from ifcstruct.extraction.placement import RESOLVED, ResolvedPlacement
from ifcstruct.extraction.relationships import find_storey

logger = logging.getLogger(__name__)

ELEVATION = "elevation"
NAME = "name"
ABSOLUTE_Z = "absolute_z"
DEFAULT = "default"

_DIGITS = re.compile(r"\d+")


class FloorResolution(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: int = 0
    source: str = DEFAULT
    storey_relation: str | None = None
    storey_name: str | None = None
    storey_elevation: float | None = None
    """Storey elevation in millimetres, when the model declares one."""


@dataclass(frozen=True)
class _Context:
    storey: Any = None
    elevation: float | None = None
    placement: ResolvedPlacement | None = None


Strategy = Callable[[_Context], Optional[int]]


class FloorLevelResolver:
    """Resolve floor levels with a configurable storey height.

    Parameters
    ----------
    story_height_mm:
        Assumed height of one storey for elevation and Z arithmetic.
    scale:
        Millimetres per model length unit.
    """

    def __init__(self, story_height_mm: float = DEFAULT_STOREY_HEIGHT_MM, scale: float = 1.0) -> None:
        if story_height_mm <= 0:
            raise ValueError("story_height_mm must be positive")
        self.story_height_mm = story_height_mm
        self.scale = scale
        self.strategies: list[tuple[str, Strategy]] = [
            (ELEVATION, self.from_elevation),
            (NAME, self.from_name),
            (ABSOLUTE_Z, self.from_absolute_z),
        ]

    def resolve(self, element: Any, placement: ResolvedPlacement | None = None) -> FloorResolution:
        """Return the floor level of *element*; never fails."""
        storey, relation = self._lookup(element)
        elevation = self._elevation(storey)
        ctx = _Context(storey=storey, elevation=elevation, placement=placement)
        storey_name = (getattr(storey, "Name", None) or None) if storey is not None else None

        for source, strategy in self.strategies:
            try:
                level = strategy(ctx)
            except Exception:
                logger.debug("Floor strategy %s failed", source, exc_info=True)
                continue
            if level is not None:
                return FloorResolution(
                    level=level,
                    source=source,
                    storey_relation=relation,
                    storey_name=storey_name,
                    storey_elevation=elevation,
                )
        return FloorResolution(
            storey_relation=relation,
            storey_name=storey_name,
            storey_elevation=elevation,
        )

    def _lookup(self, element: Any) -> tuple[Any | None, str | None]:
        try:
            return find_storey(element)
        except Exception:
            logger.debug("Storey lookup failed", exc_info=True)
            return None, None

    def _elevation(self, storey: Any) -> float | None:
        if storey is None:
            return None
        try:
            elevation = getattr(storey, "Elevation", None)
            return float(elevation) * self.scale if elevation is not None else None
        except Exception:
            logger.debug("Unreadable storey elevation", exc_info=True)
            return None

    # -- strategies --------------------------------------------------------

    def from_elevation(self, ctx: _Context) -> int | None:
        if ctx.elevation is None:
            return None
        return round(ctx.elevation / self.story_height_mm)

    def from_name(self, ctx: _Context) -> int | None:
        if ctx.storey is None:
            return None
        match = _DIGITS.search(ctx.storey.Name or "")
        return int(match.group()) if match else None

    def from_absolute_z(self, ctx: _Context) -> int | None:
        placement = ctx.placement
        if placement is None or placement.status != RESOLVED:
            return None
        return round(placement.absolute.z / self.story_height_mm)
