"""ReportExporter — JSON/CSV/Markdown export of statistics and element records."""

from __future__ import annotations

import csv
import io
import json
import logging
from pathlib import Path
from typing import Iterable

from ifcstruct.models.element import NormalizedElement
from ifcstruct.models.statistics import StatisticsSnapshot

logger = logging.getLogger(__name__)

# Flat column layout handed to storage/spreadsheet consumers
ELEMENT_FIELDS = [
    "global_id",
    "name",
    "category",
    "ifc_type",
    "location_x",
    "location_y",
    "location_z",
    "width",
    "depth",
    "height",
    "length",
    "area",
    "thickness",
    "floor_level",
    "volume",
    "weight",
    "material_id",
    "material_name",
]


def element_row(element: NormalizedElement) -> dict[str, object]:
    """Flatten one record into the :data:`ELEMENT_FIELDS` layout."""
    return {
        "global_id": element.global_id,
        "name": element.name,
        "category": element.category.value,
        "ifc_type": element.ifc_type,
        "location_x": element.location.x,
        "location_y": element.location.y,
        "location_z": element.location.z,
        "width": element.dimensions.width,
        "depth": element.dimensions.depth,
        "height": element.dimensions.height,
        "length": element.length,
        "area": element.area,
        "thickness": element.thickness,
        "floor_level": element.floor_level,
        "volume": element.volume,
        "weight": element.weight,
        "material_id": element.material_id,
        "material_name": element.material_name,
    }


class ReportExporter:
    """Export statistics snapshots and element records in various formats."""

    def export_json(self, snapshot: StatisticsSnapshot) -> str:
        """Export a snapshot as structured JSON."""
        return json.dumps({"statistics": snapshot.model_dump(mode="json")}, indent=2)

    def export_csv(self, elements: Iterable[NormalizedElement], path: str | Path) -> Path:
        """Write one CSV row per element to *path*."""
        p = Path(path)
        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=ELEMENT_FIELDS)
        writer.writeheader()
        for element in elements:
            writer.writerow(element_row(element))
        p.write_text(buf.getvalue(), encoding="utf-8")
        return p

    def export_markdown(self, snapshot: StatisticsSnapshot) -> str:
        """Export a snapshot as a Markdown summary."""
        lines = [
            "# Structural Statistics",
            "",
            f"**Elements:** {snapshot.total_elements}",
            f"**Total volume:** {snapshot.total_volume:,.3f} m³",
            f"**Total weight:** {snapshot.total_weight:,.0f} kg",
            f"**Floors:** {snapshot.floor_count}",
            "",
            "## By Category",
            "",
            "| Category | Count | Volume (m³) | Weight (kg) |",
            "|----------|-------|-------------|-------------|",
        ]
        for category, count in snapshot.count_by_category.items():
            volume = snapshot.volume_by_category.get(category, 0.0)
            weight = snapshot.weight_by_category.get(category, 0.0)
            lines.append(f"| {category.value} | {count} | {volume:,.3f} | {weight:,.0f} |")
        lines.append("")

        lines.append("## By Floor")
        lines.append("")
        lines.append("| Floor | Count | Volume (m³) |")
        lines.append("|-------|-------|-------------|")
        for floor, count in snapshot.count_by_floor.items():
            lines.append(f"| {floor} | {count} | {snapshot.volume_by_floor.get(floor, 0.0):,.3f} |")
        lines.append("")

        if snapshot.count_by_material:
            lines.append("## By Material")
            lines.append("")
            lines.append("| Material | Count | Volume (m³) | Weight (kg) |")
            lines.append("|----------|-------|-------------|-------------|")
            for name, count in snapshot.count_by_material.items():
                name_cell = name.replace("|", "\\|")
                volume = snapshot.volume_by_material.get(name, 0.0)
                weight = snapshot.weight_by_material.get(name, 0.0)
                lines.append(f"| {name_cell} | {count} | {volume:,.3f} | {weight:,.0f} |")
            lines.append("")

        return "\n".join(lines)
