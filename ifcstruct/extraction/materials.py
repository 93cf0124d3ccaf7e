"""Read material names and layer thicknesses associated with IFC elements."""

from __future__ import annotations

import logging

import ifcopenshell
import ifcopenshell.util.element

from ifcstruct.models.element import MaterialLayer

logger = logging.getLogger(__name__)


def _layer(material: ifcopenshell.entity_instance | None, thickness: float | None = None, category: str | None = None) -> MaterialLayer:
    return MaterialLayer(
        name=(material.Name or "") if material is not None else "",
        thickness=float(thickness) if thickness is not None else None,
        category=category or (getattr(material, "Category", None) if material is not None else None),
    )


def extract_materials(element: ifcopenshell.entity_instance) -> list[MaterialLayer]:
    """Return material layers / profiles / constituents for *element*.

    Handles single IfcMaterial assignments, layer sets and their usages,
    profile sets and their usages, constituent sets and material lists.
    """
    try:
        mat = ifcopenshell.util.element.get_material(element)
    except Exception:
        logger.debug("Material extraction failed for %s", element.GlobalId, exc_info=True)
        return []

    if mat is None:
        return []

    if mat.is_a("IfcMaterial"):
        return [_layer(mat)]

    if mat.is_a("IfcMaterialLayerSetUsage"):
        mat = mat.ForLayerSet
    if mat.is_a("IfcMaterialLayerSet"):
        return [
            _layer(layer.Material, layer.LayerThickness, getattr(layer, "Category", None))
            for layer in mat.MaterialLayers or ()
        ]

    if mat.is_a("IfcMaterialProfileSetUsage"):
        mat = mat.ForProfileSet
    if mat.is_a("IfcMaterialProfileSet"):
        return [
            _layer(profile.Material, category=getattr(profile, "Category", None))
            for profile in mat.MaterialProfiles or ()
        ]

    if mat.is_a("IfcMaterialConstituentSet"):
        return [
            _layer(constituent.Material, category=getattr(constituent, "Category", None))
            for constituent in mat.MaterialConstituents or ()
        ]

    if mat.is_a("IfcMaterialList"):
        return [_layer(m) for m in mat.Materials or ()]

    return []


def layer_thickness(layers: list[MaterialLayer]) -> float:
    """Sum of all known layer thicknesses (model units)."""
    return sum(layer.thickness for layer in layers if layer.thickness)


def primary_material_name(layers: list[MaterialLayer]) -> str | None:
    """Name of the first named material, used for catalog lookup."""
    for layer in layers:
        if layer.name:
            return layer.name
    return None
