"""Batch diagnostics and whole-model extraction results."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field

from ifcstruct.models.element import Category, NormalizedElement


class CategoryState(str, Enum):
    NOT_STARTED = "not_started"
    PARSING = "parsing"
    COMPLETED = "completed"


class CategoryReport(BaseModel):
    """Per-category counters for one extraction pass."""

    category: Category
    state: CategoryState = CategoryState.NOT_STARTED
    attempted: int = 0
    succeeded: int = 0
    failed: int = 0


class BatchReport(BaseModel):
    """Aggregate diagnostics returned alongside the normalized elements.

    Per-element failures are only ever reported here, as counts.
    """

    categories: dict[Category, CategoryReport] = Field(
        default_factory=lambda: {c: CategoryReport(category=c) for c in Category}
    )
    dimension_sources: dict[str, int] = Field(default_factory=dict)
    floor_sources: dict[str, int] = Field(default_factory=dict)
    placement_failures: int = 0
    cancelled: bool = False

    @property
    def attempted(self) -> int:
        return sum(r.attempted for r in self.categories.values())

    @property
    def succeeded(self) -> int:
        return sum(r.succeeded for r in self.categories.values())

    @property
    def failed(self) -> int:
        return sum(r.failed for r in self.categories.values())

    def record(self, element: NormalizedElement) -> None:
        """Count the strategies that produced *element*'s derived values."""
        prov = element.provenance
        self.dimension_sources[prov.dimension_source] = (
            self.dimension_sources.get(prov.dimension_source, 0) + 1
        )
        self.floor_sources[prov.floor_source] = self.floor_sources.get(prov.floor_source, 0) + 1
        if prov.placement_status in ("depth_exceeded", "failed"):
            self.placement_failures += 1


class ExtractionResult(BaseModel):
    """Everything one extraction pass over a model produced."""

    file_name: str = ""
    project_name: str = "Unnamed Project"
    description: str | None = None
    parsed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    columns: list[NormalizedElement] = Field(default_factory=list)
    beams: list[NormalizedElement] = Field(default_factory=list)
    slabs: list[NormalizedElement] = Field(default_factory=list)

    report: BatchReport = Field(default_factory=BatchReport)

    total_volume: float = 0.0
    floor_count: int = 0

    @property
    def elements(self) -> list[NormalizedElement]:
        return [*self.columns, *self.beams, *self.slabs]

    @property
    def total_element_count(self) -> int:
        return len(self.columns) + len(self.beams) + len(self.slabs)

    def by_category(self, category: Category) -> list[NormalizedElement]:
        return {
            Category.COLUMN: self.columns,
            Category.BEAM: self.beams,
            Category.SLAB: self.slabs,
        }[category]


class ModelInfo(BaseModel):
    """Cheap summary of a model file, read without normalizing elements."""

    project_name: str
    element_count: int
