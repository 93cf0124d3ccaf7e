"""Profile geometry variants recognised in representation trees."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class RectangularProfile(BaseModel):
    """Rectangle with explicit X/Y extents (also used for I/L/T/U shapes)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["rectangular"] = "rectangular"
    width: float
    depth: float

    def extents(self) -> tuple[float, float]:
        return self.width, self.depth


class CircularProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["circular"] = "circular"
    radius: float

    def extents(self) -> tuple[float, float]:
        return 2 * self.radius, 2 * self.radius


class PolygonProfile(BaseModel):
    """Arbitrary outline; extents are its axis-aligned bounds."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["polygon"] = "polygon"
    points: tuple[tuple[float, float], ...] = ()

    def extents(self) -> tuple[float, float]:
        if not self.points:
            return 0.0, 0.0
        xs = [p[0] for p in self.points]
        ys = [p[1] for p in self.points]
        return max(xs) - min(xs), max(ys) - min(ys)


class BoundingBoxProfile(BaseModel):
    """Direct bounding-box item; ``z`` doubles as the extrusion length."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["bounding_box"] = "bounding_box"
    x: float
    y: float
    z: float

    def extents(self) -> tuple[float, float]:
        return self.x, self.y


ProfileGeometry = Annotated[
    Union[RectangularProfile, CircularProfile, PolygonProfile, BoundingBoxProfile],
    Field(discriminator="kind"),
]


class InterpretedProfile(BaseModel):
    """First recognised profile of a representation plus its extrusion length."""

    model_config = ConfigDict(frozen=True)

    profile: ProfileGeometry
    width: float
    depth: float
    extrusion: float | None = None
