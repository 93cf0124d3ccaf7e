"""StatisticsAggregator — group normalized elements by category, floor and material."""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable

from ifcstruct.models.element import Category, NormalizedElement
from ifcstruct.models.statistics import StatisticsSnapshot


class StatisticsAggregator:
    """Compute :class:`StatisticsSnapshot` objects on demand.

    Elements without a material contribute zero weight and are left out
    of the material groups, but still count towards category and floor
    totals.
    """

    def aggregate(self, elements: Iterable[NormalizedElement]) -> StatisticsSnapshot:
        count_by_category: dict[Category, int] = {c: 0 for c in Category}
        volume_by_category: dict[Category, float] = {c: 0.0 for c in Category}
        weight_by_category: dict[Category, float] = {c: 0.0 for c in Category}
        count_by_floor: dict[int, int] = defaultdict(int)
        volume_by_floor: dict[int, float] = defaultdict(float)
        count_by_material: dict[str, int] = defaultdict(int)
        volume_by_material: dict[str, float] = defaultdict(float)
        weight_by_material: dict[str, float] = defaultdict(float)

        total = 0
        for element in elements:
            total += 1
            weight = element.weight
            count_by_category[element.category] += 1
            volume_by_category[element.category] += element.volume
            weight_by_category[element.category] += weight
            count_by_floor[element.floor_level] += 1
            volume_by_floor[element.floor_level] += element.volume

            if element.material is not None:
                name = element.material.name
                count_by_material[name] += 1
                volume_by_material[name] += element.volume
                weight_by_material[name] += weight

        return StatisticsSnapshot(
            total_elements=total,
            total_volume=sum(volume_by_category.values()),
            total_weight=sum(weight_by_category.values()),
            count_by_category=count_by_category,
            volume_by_category=volume_by_category,
            weight_by_category=weight_by_category,
            count_by_floor=dict(sorted(count_by_floor.items())),
            volume_by_floor=dict(sorted(volume_by_floor.items())),
            count_by_material=dict(sorted(count_by_material.items())),
            volume_by_material=dict(sorted(volume_by_material.items())),
            weight_by_material=dict(sorted(weight_by_material.items())),
        )

    def aggregate_floor(self, elements: Iterable[NormalizedElement], floor_level: int) -> StatisticsSnapshot:
        """Snapshot restricted to one floor."""
        return self.aggregate(e for e in elements if e.floor_level == floor_level)
