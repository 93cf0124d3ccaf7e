"""The flat, typed record produced for one structural element.

A record is produced once per source element per extraction pass and is
never mutated afterwards; storage and rendering collaborators receive it
as a value.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ifcstruct.config import MM2_PER_M2, MM3_PER_M3


class Category(str, Enum):
    """Closed set of structural element categories."""

    COLUMN = "Column"
    BEAM = "Beam"
    SLAB = "Slab"


class ZPolicy(str, Enum):
    """How the world Z of an element is combined with its storey elevation."""

    PLACEMENT = "placement"
    """Keep the absolute Z of the resolved placement chain."""

    STOREY = "storey"
    """Use the storey elevation, discarding placement-local Z."""

    STOREY_PLUS_LOCAL = "storey_plus_local"
    """Add the element's own placement-local Z to the storey elevation."""


class Point3D(BaseModel):
    """World-frame position in millimetres."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Point3D) -> Point3D:
        return Point3D(x=self.x + other.x, y=self.y + other.y, z=self.z + other.z)


ORIGIN = Point3D()


class Dimensions(BaseModel):
    """Strictly positive width/depth/height triple in millimetres."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(gt=0)
    depth: float = Field(gt=0)
    height: float = Field(gt=0)

    def volume_m3(self) -> float:
        return (self.width * self.depth * self.height) / MM3_PER_M3

    def cross_section_m2(self) -> float:
        return (self.width * self.depth) / MM2_PER_M2

    def __str__(self) -> str:
        return f"{self.width:g}x{self.depth:g}x{self.height:g} mm"


class Material(BaseModel):
    """A structural material with the physical data needed for weights."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    name: str
    category: str = "Concrete"
    density: float = Field(default=0.0, ge=0)
    """kg/m³"""

    compressive_strength: float | None = None
    """MPa"""


class MaterialLayer(BaseModel):
    """A material layer, profile or constituent as associated in the model."""

    name: str = ""
    thickness: float | None = None
    category: str | None = None


class Provenance(BaseModel):
    """Which strategy produced each derived value (diagnostics only)."""

    model_config = ConfigDict(frozen=True)

    placement_status: str = "resolved"
    dimension_source: str = "defaults"
    floor_source: str = "default"
    storey_relation: str | None = None
    volume_source: str = "dimensions"


class NormalizedElement(BaseModel):
    """Canonical, storage- and rendering-agnostic record of one element."""

    model_config = ConfigDict(frozen=True)

    # Identity; global_id is advisory and may repeat across elements
    global_id: str
    name: str
    category: Category
    ifc_type: str = ""

    # Geometry
    location: Point3D = Field(default_factory=Point3D)
    dimensions: Dimensions
    length: float | None = None
    area: float | None = None
    thickness: float | None = None

    # Derived
    floor_level: int = 0
    volume: float = Field(default=0.0, ge=0)
    weight: float = Field(default=0.0, ge=0)

    material: Material | None = None
    provenance: Provenance = Field(default_factory=Provenance)

    @property
    def material_id(self) -> int | None:
        return self.material.id if self.material is not None else None

    @property
    def material_name(self) -> str | None:
        return self.material.name if self.material is not None else None
