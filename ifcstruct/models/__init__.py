"""Pydantic records shared by extraction and analytics."""

from ifcstruct.models.element import (
    ORIGIN,
    Category,
    Dimensions,
    Material,
    MaterialLayer,
    NormalizedElement,
    Point3D,
    Provenance,
    ZPolicy,
)
from ifcstruct.models.geometry import (
    BoundingBoxProfile,
    CircularProfile,
    InterpretedProfile,
    PolygonProfile,
    ProfileGeometry,
    RectangularProfile,
)
from ifcstruct.models.report import (
    BatchReport,
    CategoryReport,
    CategoryState,
    ExtractionResult,
    ModelInfo,
)
from ifcstruct.models.statistics import StatisticsSnapshot

__all__ = [
    "ORIGIN",
    "BatchReport",
    "BoundingBoxProfile",
    "Category",
    "CategoryReport",
    "CategoryState",
    "CircularProfile",
    "Dimensions",
    "ExtractionResult",
    "InterpretedProfile",
    "Material",
    "MaterialLayer",
    "ModelInfo",
    "NormalizedElement",
    "Point3D",
    "PolygonProfile",
    "ProfileGeometry",
    "Provenance",
    "RectangularProfile",
    "StatisticsSnapshot",
    "ZPolicy",
]
