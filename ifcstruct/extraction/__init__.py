"""Extraction and normalization of structural elements from IFC models."""

from ifcstruct.extraction.dimensions import DimensionExtractor, DimensionResult
from ifcstruct.extraction.errors import (
    ExtractionCancelled,
    ModelFileError,
    ModelFileNotFoundError,
    UnreadableModelError,
    UnsupportedFileTypeError,
)
from ifcstruct.extraction.floors import FloorLevelResolver, FloorResolution
from ifcstruct.extraction.pipeline import (
    ExtractionPipeline,
    collect_elements,
    extract_structural_elements,
    open_model,
    quick_info,
    validate_model_file,
)
from ifcstruct.extraction.placement import ResolvedPlacement, combine_z, resolve_placement
from ifcstruct.extraction.profiles import interpret_representation
from ifcstruct.extraction.volume import calculate_volume, calculate_weight

__all__ = [
    "DimensionExtractor",
    "DimensionResult",
    "ExtractionCancelled",
    "ExtractionPipeline",
    "FloorLevelResolver",
    "FloorResolution",
    "ModelFileError",
    "ModelFileNotFoundError",
    "ResolvedPlacement",
    "UnreadableModelError",
    "UnsupportedFileTypeError",
    "calculate_volume",
    "calculate_weight",
    "collect_elements",
    "combine_z",
    "extract_structural_elements",
    "interpret_representation",
    "open_model",
    "quick_info",
    "resolve_placement",
    "validate_model_file",
]
