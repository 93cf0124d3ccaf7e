"""Structural material catalog."""

from ifcstruct.materials.catalog import MaterialCatalog
from ifcstruct.materials.seed_data import SEED_MATERIALS

__all__ = ["MaterialCatalog", "SEED_MATERIALS"]
