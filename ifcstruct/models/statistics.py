"""Derived summary of a set of normalized elements."""

from __future__ import annotations

from pydantic import BaseModel, Field

from ifcstruct.models.element import Category


class StatisticsSnapshot(BaseModel):
    """Counts, volumes (m³) and weights (kg) grouped three ways.

    Recomputed on demand; ``total_volume`` equals the sum of
    ``volume_by_category`` and ``count_by_floor`` sums to
    ``total_elements``.
    """

    total_elements: int = 0
    total_volume: float = 0.0
    total_weight: float = 0.0

    count_by_category: dict[Category, int] = Field(default_factory=dict)
    volume_by_category: dict[Category, float] = Field(default_factory=dict)
    weight_by_category: dict[Category, float] = Field(default_factory=dict)

    count_by_floor: dict[int, int] = Field(default_factory=dict)
    volume_by_floor: dict[int, float] = Field(default_factory=dict)

    count_by_material: dict[str, int] = Field(default_factory=dict)
    volume_by_material: dict[str, float] = Field(default_factory=dict)
    weight_by_material: dict[str, float] = Field(default_factory=dict)

    @property
    def floor_count(self) -> int:
        return len(self.count_by_floor)
