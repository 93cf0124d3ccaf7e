"""Normalize structural IFC elements into flat, typed records."""

__version__ = "1.0.0"

from ifcstruct.analytics.exporter import ReportExporter
from ifcstruct.analytics.statistics import StatisticsAggregator
from ifcstruct.extraction.errors import (
    ExtractionCancelled,
    ModelFileError,
    ModelFileNotFoundError,
    UnreadableModelError,
    UnsupportedFileTypeError,
)
from ifcstruct.extraction.pipeline import (
    ExtractionPipeline,
    extract_structural_elements,
    quick_info,
    validate_model_file,
)
from ifcstruct.materials.catalog import MaterialCatalog
from ifcstruct.models.element import (
    Category,
    Dimensions,
    Material,
    NormalizedElement,
    Point3D,
    ZPolicy,
)
from ifcstruct.models.report import BatchReport, ExtractionResult, ModelInfo
from ifcstruct.models.statistics import StatisticsSnapshot
from ifcstruct.settings import ExtractionSettings, load_settings

__all__ = [
    "__version__",
    "BatchReport",
    "Category",
    "Dimensions",
    "ExtractionCancelled",
    "ExtractionPipeline",
    "ExtractionResult",
    "ExtractionSettings",
    "Material",
    "MaterialCatalog",
    "ModelFileError",
    "ModelFileNotFoundError",
    "ModelInfo",
    "NormalizedElement",
    "Point3D",
    "ReportExporter",
    "StatisticsAggregator",
    "StatisticsSnapshot",
    "UnreadableModelError",
    "UnsupportedFileTypeError",
    "ZPolicy",
    "extract_structural_elements",
    "load_settings",
    "quick_info",
    "validate_model_file",
]
