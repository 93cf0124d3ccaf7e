"""Embedded structural material data.

Densities in kg/m³, characteristic compressive strengths in MPa.
"""

from __future__ import annotations

from typing import Any

SEED_MATERIALS: list[dict[str, Any]] = [
    {"id": 1, "name": "C30/37 Concrete", "category": "Concrete", "density": 2500.0, "compressive_strength": 30.0},
    {"id": 2, "name": "C35/45 Concrete", "category": "Concrete", "density": 2500.0, "compressive_strength": 35.0},
    {"id": 3, "name": "S420 Steel", "category": "Steel", "density": 7850.0, "compressive_strength": 420.0},
    {"id": 4, "name": "S500 Steel", "category": "Steel", "density": 7850.0, "compressive_strength": 500.0},
]

# Keyword -> (category, density) used when a model material is not in the catalog
CATEGORY_KEYWORDS: dict[str, tuple[str, float]] = {
    "concrete": ("Concrete", 2500.0),
    "beton": ("Concrete", 2500.0),
    "steel": ("Steel", 7850.0),
    "stahl": ("Steel", 7850.0),
    "timber": ("Wood", 500.0),
    "wood": ("Wood", 500.0),
    "glulam": ("Wood", 500.0),
}
