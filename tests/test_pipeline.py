"""End-to-end tests for the extraction pipeline.

Models are built with the shared factory, written to ``tmp_path`` and
read back through :func:`extract_structural_elements`.
"""

from __future__ import annotations

import json
import logging
import threading

import pytest

from ifcstruct.extraction.errors import (
    ExtractionCancelled,
    ModelFileError,
    ModelFileNotFoundError,
    UnreadableModelError,
    UnsupportedFileTypeError,
)
from ifcstruct.extraction.pipeline import (
    ExtractionPipeline,
    collect_elements,
    detect_length_scale,
    extract_structural_elements,
    open_model,
    quick_info,
    validate_model_file,
)
from ifcstruct.models.element import Category, Dimensions, Point3D
from ifcstruct.models.report import CategoryState
from ifcstruct.settings import ExtractionSettings, load_settings


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _structural_model(factory):
    """One column, one beam and one slab over two storeys."""
    ground = factory.storey("Ground Floor", elevation=0.0)
    first = factory.storey("First Floor", elevation=3000.0)

    column = factory.column(
        "C1",
        placement=factory.placement(1000, 2000, 0),
        shape=factory.extruded_shape(factory.rectangle(300, 300), 4000),
    )
    factory.material(column, "C30/37 Concrete")

    beam = factory.beam(
        "B1",
        placement=factory.placement(0, 0, 2700),
        shape=factory.extruded_shape(factory.rectangle(300, 500), 6000),
    )
    factory.material(beam, "S500 Steel")

    slab = factory.slab("S1")
    factory.layers(slab, [("Concrete", 150.0)])

    factory.contain([column], ground)
    factory.contain([beam, slab], first)
    return factory


@pytest.fixture()
def model_path(factory, tmp_path):
    return _structural_model(factory).write(tmp_path / "structure.ifc")


# ---------------------------------------------------------------------------
# Model file handling
# ---------------------------------------------------------------------------


class TestModelFile:
    def test_validate(self, model_path, tmp_path):
        assert validate_model_file(model_path)
        assert not validate_model_file(tmp_path / "missing.ifc")

        other = tmp_path / "structure.txt"
        other.write_text("ISO-10303-21;")
        assert not validate_model_file(other)

    def test_extension_is_case_insensitive(self, factory, tmp_path):
        path = factory.write(tmp_path / "UPPER.IFC")
        assert validate_model_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ModelFileNotFoundError) as exc_info:
            extract_structural_elements(tmp_path / "missing.ifc")
        assert "File not found" in str(exc_info.value)

    def test_wrong_extension(self, tmp_path):
        path = tmp_path / "structure.dwg"
        path.write_bytes(b"\x00\x01")
        with pytest.raises(UnsupportedFileTypeError):
            extract_structural_elements(path)

    def test_unreadable_content(self, tmp_path):
        path = tmp_path / "broken.ifc"
        path.write_text("this is not a STEP file")
        with pytest.raises(UnreadableModelError) as exc_info:
            open_model(path)
        assert isinstance(exc_info.value, ModelFileError)
        assert exc_info.value.path == path

    def test_unsupported_schema(self, factory, tmp_path, monkeypatch):
        path = factory.write(tmp_path / "newer.ifc")
        monkeypatch.setattr("ifcstruct.extraction.pipeline.SUPPORTED_SCHEMAS", ("IFC2X3",))

        with pytest.raises(UnreadableModelError) as exc_info:
            open_model(path)
        assert "unsupported schema IFC4" in str(exc_info.value)
        assert exc_info.value.path == path

    def test_quick_info(self, model_path):
        info = quick_info(model_path)
        assert info.project_name == "StructuralProject"
        assert info.element_count == 3

    def test_collect_elements(self, factory):
        _structural_model(factory)
        partitions = collect_elements(factory.file)
        assert {c: len(v) for c, v in partitions.items()} == {
            Category.COLUMN: 1,
            Category.BEAM: 1,
            Category.SLAB: 1,
        }


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


class TestExtraction:
    def test_result_metadata(self, model_path):
        result = extract_structural_elements(model_path)
        assert result.file_name == "structure.ifc"
        assert result.project_name == "StructuralProject"
        assert result.total_element_count == 3

    def test_column_from_extruded_profile(self, model_path):
        column = extract_structural_elements(model_path).columns[0]

        assert column.name == "C1"
        assert column.category is Category.COLUMN
        assert column.ifc_type == "IfcColumn"
        assert column.dimensions == Dimensions(width=300, depth=300, height=4000)
        assert column.volume == pytest.approx(0.36)
        assert column.floor_level == 0
        assert column.location == Point3D(x=1000, y=2000, z=0)
        assert column.material_id == 1
        assert column.weight == pytest.approx(900.0)
        assert column.provenance.dimension_source == "geometry"
        assert column.provenance.floor_source == "elevation"

    def test_beam_keeps_local_offset_above_storey(self, model_path):
        beam = extract_structural_elements(model_path).beams[0]

        assert beam.floor_level == 1
        assert beam.location.z == pytest.approx(5700.0)
        assert beam.length == 6000
        assert beam.material_name == "S500 Steel"
        assert beam.weight == pytest.approx(0.9 * 7850.0)

    def test_slab_from_material_layers(self, model_path):
        slab = extract_structural_elements(model_path).slabs[0]

        assert slab.dimensions.height == 150
        assert slab.thickness == 150
        assert slab.area == pytest.approx(25.0)
        assert slab.volume == pytest.approx(3.75)
        assert slab.floor_level == 1
        assert slab.material.category == "Concrete"
        assert slab.weight == pytest.approx(9375.0)
        assert slab.location.z == 3000.0
        assert slab.provenance.dimension_source == "material_layers"

    def test_slab_level_from_storey_name(self, factory, tmp_path):
        storey = factory.storey("Level 2")
        slab = factory.slab()
        factory.layers(slab, [("Concrete", 150.0)])
        factory.contain([slab], storey)

        result = extract_structural_elements(factory.write(tmp_path / "slab.ifc"))
        assert result.slabs[0].floor_level == 2
        assert result.slabs[0].provenance.floor_source == "name"

    def test_aggregates(self, model_path):
        result = extract_structural_elements(model_path)
        assert result.total_volume == pytest.approx(0.36 + 0.9 + 3.75)
        assert result.floor_count == 2

    def test_explicit_volume_quantity(self, factory, tmp_path):
        column = factory.column(shape=factory.extruded_shape(factory.rectangle(300, 300), 3000))
        factory.volume_quantity(column, 0.25)

        element = extract_structural_elements(factory.write(tmp_path / "q.ifc")).columns[0]
        assert element.volume == 0.25
        assert element.provenance.volume_source == "quantity"

    def test_defaults_for_bare_elements(self, factory, tmp_path):
        factory.column(None)
        result = extract_structural_elements(factory.write(tmp_path / "bare.ifc"))

        column = result.columns[0]
        assert column.name == "Column"
        assert column.dimensions == Dimensions(width=300, depth=300, height=3000)
        assert column.volume == pytest.approx(0.27)
        assert column.floor_level == 0
        assert column.location == Point3D()
        assert column.material is None
        assert column.weight == 0.0

    def test_partial_default_override_keeps_other_categories(self, factory, tmp_path):
        (tmp_path / ".ifcstruct").mkdir()
        (tmp_path / ".ifcstruct" / "config.json").write_text(
            json.dumps({"default_dimensions": {"Column": [400, 400, 3500]}})
        )
        settings = load_settings(tmp_path, environ={})
        factory.column(None)
        factory.beam(None)
        factory.slab(None)

        result = ExtractionPipeline(settings).extract_model(factory.file)
        assert result.report.failed == 0
        assert result.columns[0].dimensions == Dimensions(width=400, depth=400, height=3500)
        assert result.beams[0].dimensions == Dimensions(width=300, depth=500, height=6000)
        assert result.slabs[0].dimensions == Dimensions(width=5000, depth=5000, height=200)

    def test_cyclic_placement_still_emits_element(self, factory, tmp_path):
        outer = factory.placement(0, 0, 100)
        inner = factory.placement(500, 0, 0, relative_to=outer)
        outer.PlacementRelTo = inner
        factory.column("Looped", placement=inner)

        result = extract_structural_elements(factory.write(tmp_path / "cycle.ifc"))
        assert len(result.columns) == 1
        column = result.columns[0]
        assert column.location == Point3D()
        assert column.provenance.placement_status == "depth_exceeded"
        assert result.report.placement_failures == 1
        assert result.report.failed == 0

    def test_unit_scale_detected_from_project(self, factory, tmp_path):
        metre = factory.file.create_entity("IfcSIUnit", UnitType="LENGTHUNIT", Name="METRE")
        factory.project.UnitsInContext = factory.file.create_entity("IfcUnitAssignment", Units=[metre])
        factory.column(
            placement=factory.placement(1.5, 0, 0),
            shape=factory.extruded_shape(factory.rectangle(0.3, 0.3), 3.0),
        )

        assert detect_length_scale(factory.file) == pytest.approx(1000.0)
        column = extract_structural_elements(factory.write(tmp_path / "metres.ifc")).columns[0]
        assert column.dimensions.width == pytest.approx(300)
        assert column.dimensions.height == pytest.approx(3000)
        assert column.location.x == pytest.approx(1500)

    def test_configured_unit_scale_overrides_detection(self, factory):
        factory.column(shape=factory.extruded_shape(factory.rectangle(30, 30), 300))
        settings = ExtractionSettings(length_unit_scale=10.0)

        result = ExtractionPipeline(settings).extract_model(factory.file)
        assert result.columns[0].dimensions.height == pytest.approx(3000)

    def test_ifc2x3_model(self, ifc2x3_factory, tmp_path):
        factory = ifc2x3_factory
        storey = factory.storey("Level 1", elevation=3000.0)
        beam = factory.beam(shape=factory.extruded_shape(factory.rectangle(300, 600), 5000))
        factory.contain([beam], storey)

        result = extract_structural_elements(factory.write(tmp_path / "legacy.ifc"))
        assert result.beams[0].floor_level == 1
        assert result.beams[0].length == 5000

    def test_extraction_is_idempotent(self, model_path):
        first = extract_structural_elements(model_path)
        second = extract_structural_elements(model_path)
        assert [e.model_dump_json() for e in first.elements] == [
            e.model_dump_json() for e in second.elements
        ]
        assert first.report == second.report


# ---------------------------------------------------------------------------
# Batch behaviour
# ---------------------------------------------------------------------------


class _BrokenElement:
    """Element stand-in that fails once normalization reads its type."""

    GlobalId = "broken-element"
    Name = "Broken"

    def is_a(self, *args):
        raise RuntimeError("corrupt entity")


class TestBatch:
    def test_report_counters(self, model_path):
        report = extract_structural_elements(model_path).report

        assert report.attempted == 3
        assert report.succeeded == 3
        assert report.failed == 0
        assert all(r.state is CategoryState.COMPLETED for r in report.categories.values())
        assert report.dimension_sources == {"geometry": 2, "material_layers": 1}
        assert sum(report.floor_sources.values()) == 3

    def test_failing_element_is_skipped(self, factory, caplog):
        good = [factory.column("A"), factory.column("B")]
        pipeline = ExtractionPipeline()

        with caplog.at_level(logging.WARNING, logger="ifcstruct.extraction.pipeline"):
            result = pipeline.extract_elements({Category.COLUMN: [good[0], _BrokenElement(), good[1]]})

        assert [e.name for e in result.columns] == ["A", "B"]
        column_report = result.report.categories[Category.COLUMN]
        assert (column_report.attempted, column_report.succeeded, column_report.failed) == (3, 2, 1)
        assert "1 of 3 column" in caplog.text

    def test_extract_element_propagates_errors(self):
        with pytest.raises(RuntimeError):
            ExtractionPipeline().extract_element(_BrokenElement(), Category.BEAM)

    def test_cancelled_before_start(self, model_path):
        event = threading.Event()
        event.set()

        with pytest.raises(ExtractionCancelled) as exc_info:
            extract_structural_elements(model_path, cancel_event=event)
        assert exc_info.value.report.cancelled
        assert exc_info.value.report.attempted == 0

    def test_cancelled_between_elements(self, factory, monkeypatch):
        columns = [factory.column(f"C{i}") for i in range(3)]
        pipeline = ExtractionPipeline()
        event = threading.Event()
        normalize = pipeline._normalize

        def normalize_then_cancel(*args):
            normalized = normalize(*args)
            event.set()
            return normalized

        monkeypatch.setattr(pipeline, "_normalize", normalize_then_cancel)
        with pytest.raises(ExtractionCancelled) as exc_info:
            pipeline.extract_elements({Category.COLUMN: columns}, cancel_event=event)

        report = exc_info.value.report
        assert report.attempted == 1
        assert report.succeeded == 1
        assert report.categories[Category.COLUMN].state is CategoryState.PARSING
        assert report.categories[Category.SLAB].state is CategoryState.NOT_STARTED

    def test_duplicate_global_ids_are_kept(self, factory):
        first = factory.column("A")
        second = factory.column("B")
        second.GlobalId = first.GlobalId

        result = ExtractionPipeline().extract_model(factory.file)
        assert len(result.columns) == 2
        assert result.columns[0].global_id == result.columns[1].global_id
