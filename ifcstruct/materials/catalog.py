"""Map model material names to physical material data."""

from __future__ import annotations

import logging
from typing import Any

from ifcstruct.materials.seed_data import CATEGORY_KEYWORDS, SEED_MATERIALS
from ifcstruct.models.element import Material

logger = logging.getLogger(__name__)


class MaterialCatalog:
    """Lookup table of known materials.

    Parameters
    ----------
    materials:
        Material records; defaults to the embedded seed data.
    default_name:
        Catalog material returned by :meth:`default`, or None.
    """

    def __init__(
        self,
        materials: list[dict[str, Any]] | list[Material] | None = None,
        default_name: str | None = None,
    ) -> None:
        records = SEED_MATERIALS if materials is None else materials
        self._by_name: dict[str, Material] = {}
        for record in records:
            material = record if isinstance(record, Material) else Material(**record)
            self._by_name[material.name.lower()] = material
        self.default_name = default_name

    def __len__(self) -> int:
        return len(self._by_name)

    def all(self) -> list[Material]:
        return list(self._by_name.values())

    def get(self, name: str) -> Material | None:
        """Exact, case-insensitive lookup."""
        return self._by_name.get(name.strip().lower())

    def infer(self, name: str) -> Material | None:
        """Build a material from keywords in *name* (e.g. "Concrete, Cast In Situ")."""
        lowered = name.lower()
        for keyword, (category, density) in CATEGORY_KEYWORDS.items():
            if keyword in lowered:
                return Material(name=name, category=category, density=density)
        return None

    def resolve(self, name: str | None) -> Material | None:
        """Resolve a model material name, falling back to the default material."""
        if name:
            material = self.get(name) or self.infer(name)
            if material is not None:
                return material
            logger.debug("Unknown material %r", name)
        return self.default()

    def default(self) -> Material | None:
        if not self.default_name:
            return None
        material = self.get(self.default_name)
        if material is None:
            logger.warning("Default material %r is not in the catalog", self.default_name)
        return material
