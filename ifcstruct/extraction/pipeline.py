"""Main extraction pipeline.

Entry point: ``extract_structural_elements(ifc_path)``

Opens an IFC2x3/IFC4 file, normalizes every column, beam and slab into a
:class:`NormalizedElement` and computes whole-model aggregates.  A
malformed file aborts before any element is touched; a malformed element
is skipped and only counted.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Iterable, Mapping

import ifcopenshell
import ifcopenshell.util.unit

from ifcstruct.config import ALLOWED_EXTENSIONS, CATEGORY_IFC_CLASSES, MM_PER_M, SUPPORTED_SCHEMAS
from ifcstruct.extraction.dimensions import DimensionExtractor
from ifcstruct.extraction.errors import (
    ExtractionCancelled,
    ModelFileNotFoundError,
    UnreadableModelError,
    UnsupportedFileTypeError,
)
from ifcstruct.extraction.floors import FloorLevelResolver
from ifcstruct.extraction.materials import extract_materials, primary_material_name
from ifcstruct.extraction.placement import combine_z, element_placement
from ifcstruct.extraction.volume import calculate_volume, calculate_weight, category_measures
from ifcstruct.materials.catalog import MaterialCatalog
from ifcstruct.models.element import Category, NormalizedElement, Provenance
from ifcstruct.models.report import CategoryState, ExtractionResult, ModelInfo
from ifcstruct.settings import ExtractionSettings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Model file handling
# ---------------------------------------------------------------------------


def validate_model_file(path: str | Path, allowed: tuple[str, ...] = ALLOWED_EXTENSIONS) -> bool:
    """True if *path* exists and carries an allowed extension."""
    p = Path(path)
    return p.is_file() and p.suffix.lower() in allowed


def open_model(path: str | Path, allowed: tuple[str, ...] = ALLOWED_EXTENSIONS) -> ifcopenshell.file:
    """Open *path* or raise a :class:`ModelFileError` naming the reason."""
    p = Path(path)
    if not p.is_file():
        raise ModelFileNotFoundError(p)
    if p.suffix.lower() not in allowed:
        raise UnsupportedFileTypeError(p, allowed)
    try:
        ifc_file = ifcopenshell.open(str(p))
    except Exception as exc:
        raise UnreadableModelError(p, str(exc)) from exc
    if ifc_file.schema not in SUPPORTED_SCHEMAS:
        raise UnreadableModelError(p, f"unsupported schema {ifc_file.schema}")
    return ifc_file


def detect_length_scale(ifc_file: ifcopenshell.file) -> float:
    """Millimetres per model length unit; 1.0 when the model declares no units."""
    projects = ifc_file.by_type("IfcProject")
    if not projects or not getattr(projects[0], "UnitsInContext", None):
        return 1.0
    try:
        return ifcopenshell.util.unit.calculate_unit_scale(ifc_file) * MM_PER_M
    except Exception:
        logger.debug("Could not read length unit, assuming millimetres", exc_info=True)
        return 1.0


def collect_elements(ifc_file: ifcopenshell.file) -> dict[Category, list[ifcopenshell.entity_instance]]:
    """Partition the model's structural elements by category (subtypes included)."""
    return {
        category: list(ifc_file.by_type(CATEGORY_IFC_CLASSES[category.value]))
        for category in Category
    }


def _project(ifc_file: ifcopenshell.file) -> tuple[str, str | None]:
    projects = ifc_file.by_type("IfcProject")
    if not projects:
        return "Unnamed Project", None
    project = projects[0]
    return project.Name or "Unnamed Project", getattr(project, "Description", None)


def quick_info(path: str | Path, allowed: tuple[str, ...] = ALLOWED_EXTENSIONS) -> ModelInfo:
    """Project name and structural element count, without normalizing."""
    ifc_file = open_model(path, allowed)
    name, _ = _project(ifc_file)
    count = sum(len(v) for v in collect_elements(ifc_file).values())
    return ModelInfo(project_name=name, element_count=count)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class ExtractionPipeline:
    """Single forward pass from raw elements to normalized records.

    Parameters
    ----------
    settings:
        Pipeline tunables; defaults to :class:`ExtractionSettings`.
    catalog:
        Material catalog used to attach densities; defaults to the seeded
        catalog with ``settings.default_material`` as fallback.

    An instance holds no per-run state, so one pipeline may serve
    concurrent runs over different files.
    """

    def __init__(
        self,
        settings: ExtractionSettings | None = None,
        catalog: MaterialCatalog | None = None,
    ) -> None:
        self.settings = settings or ExtractionSettings()
        self.catalog = catalog or MaterialCatalog(default_name=self.settings.default_material)

    def extract_file(
        self,
        ifc_path: str | Path,
        cancel_event: threading.Event | None = None,
    ) -> ExtractionResult:
        """Open *ifc_path* and extract it; file problems raise ModelFileError."""
        ifc_path = Path(ifc_path)
        logger.info("Opening %s", ifc_path)
        ifc_file = open_model(ifc_path, self.settings.allowed_extensions)
        return self.extract_model(ifc_file, cancel_event=cancel_event, file_name=ifc_path.name)

    def extract_model(
        self,
        ifc_file: ifcopenshell.file,
        cancel_event: threading.Event | None = None,
        file_name: str = "",
    ) -> ExtractionResult:
        partitions = collect_elements(ifc_file)
        logger.info(
            "Found %s",
            ", ".join(f"{len(items)} {cat.value.lower()}(s)" for cat, items in partitions.items()),
        )

        scale = self.settings.length_unit_scale or detect_length_scale(ifc_file)
        result = self.extract_elements(partitions, scale=scale, cancel_event=cancel_event)

        result.file_name = file_name
        result.project_name, result.description = _project(ifc_file)
        return result

    def extract_elements(
        self,
        partitions: Mapping[Category, Iterable[Any]],
        scale: float = 1.0,
        cancel_event: threading.Event | None = None,
    ) -> ExtractionResult:
        """Normalize pre-partitioned elements, one category after another.

        Raises :class:`ExtractionCancelled` (carrying the partial report)
        when *cancel_event* is set between two elements.
        """
        dimensions = DimensionExtractor(self.settings, scale)
        floors = FloorLevelResolver(self.settings.story_height_mm, scale)
        result = ExtractionResult()
        report = result.report

        for category in Category:
            items = list(partitions.get(category, ()))
            cat_report = report.categories[category]
            cat_report.state = CategoryState.PARSING
            bucket = result.by_category(category)

            for element in items:
                if cancel_event is not None and cancel_event.is_set():
                    report.cancelled = True
                    raise ExtractionCancelled(report)

                cat_report.attempted += 1
                try:
                    normalized = self._normalize(element, category, dimensions, floors, scale)
                except Exception:
                    cat_report.failed += 1
                    logger.debug(
                        "Skipping %s %s due to error",
                        category.value,
                        getattr(element, "GlobalId", "?"),
                        exc_info=True,
                    )
                    continue
                bucket.append(normalized)
                report.record(normalized)
                cat_report.succeeded += 1

            cat_report.state = CategoryState.COMPLETED
            if cat_report.failed:
                logger.warning(
                    "%d of %d %s element(s) could not be extracted",
                    cat_report.failed,
                    cat_report.attempted,
                    category.value.lower(),
                )

        elements = result.elements
        result.total_volume = sum(e.volume for e in elements)
        result.floor_count = len({e.floor_level for e in elements})

        logger.info(
            "Extraction complete: %d/%d elements, %.3f m3 over %d floor(s)",
            report.succeeded,
            report.attempted,
            result.total_volume,
            result.floor_count,
        )
        return result

    def extract_element(self, element: Any, category: Category, scale: float = 1.0) -> NormalizedElement:
        """Normalize a single element; unexpected errors propagate."""
        return self._normalize(
            element,
            category,
            DimensionExtractor(self.settings, scale),
            FloorLevelResolver(self.settings.story_height_mm, scale),
            scale,
        )

    def _normalize(
        self,
        element: Any,
        category: Category,
        dimensions: DimensionExtractor,
        floors: FloorLevelResolver,
        scale: float,
    ) -> NormalizedElement:
        placement = element_placement(element, self.settings.max_placement_depth, scale)
        layers = extract_materials(element)
        dims = dimensions.extract(element, category, layers)
        floor = floors.resolve(element, placement)
        location = combine_z(self.settings.z_policy(category), placement, floor.storey_elevation)
        volume, volume_source = calculate_volume(element, dims.dimensions)
        material = self.catalog.resolve(primary_material_name(layers))

        return NormalizedElement(
            global_id=str(element.GlobalId or ""),
            name=element.Name or category.value,
            category=category,
            ifc_type=element.is_a(),
            location=location,
            dimensions=dims.dimensions,
            floor_level=floor.level,
            volume=volume,
            weight=calculate_weight(volume, material),
            material=material,
            provenance=Provenance(
                placement_status=placement.status,
                dimension_source=dims.source,
                floor_source=floor.source,
                storey_relation=floor.storey_relation,
                volume_source=volume_source,
            ),
            **category_measures(category, dims.dimensions),
        )


def extract_structural_elements(
    ifc_path: str | Path,
    settings: ExtractionSettings | None = None,
    cancel_event: threading.Event | None = None,
) -> ExtractionResult:
    """Extract all columns, beams and slabs of the IFC file at *ifc_path*.

    Returns
    -------
    ExtractionResult
        Normalized elements per category, the batch report and the total
        volume / distinct floor count aggregates.
    """
    return ExtractionPipeline(settings).extract_file(ifc_path, cancel_event=cancel_event)
