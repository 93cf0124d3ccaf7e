"""Shared fixtures: synthetic IFC4 models built in-memory with ifcopenshell."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import ifcopenshell
import ifcopenshell.api
import ifcopenshell.guid
import pytest


class ModelFactory:
    """Small builder for structural IFC content.

    Spatial and material relations are created as plain entities so the
    inverse attributes (ContainedInStructure, Decomposes, IsDefinedBy,
    HasAssociations) are exactly what the tests declare.
    """

    def __init__(self, schema: str = "IFC4") -> None:
        self.file = ifcopenshell.file(schema=schema)
        self.project = self._root("IfcProject", "StructuralProject")
        self.context = ifcopenshell.api.run("context.add_context", self.file, context_type="Model")

    def _guid(self) -> str:
        return ifcopenshell.guid.new()

    def _root(self, ifc_class: str, name: str | None) -> ifcopenshell.entity_instance:
        if self.file.schema == "IFC2X3":
            # OwnerHistory is mandatory in IFC2X3; the api only fills it for a configured user
            return self.file.create_entity(ifc_class, GlobalId=self._guid(), Name=name)
        return ifcopenshell.api.run("root.create_entity", self.file, ifc_class=ifc_class, name=name)

    # -- spatial ------------------------------------------------------------

    def storey(self, name: str = "Level 0", elevation: float | None = None) -> ifcopenshell.entity_instance:
        storey = self._root("IfcBuildingStorey", name)
        if elevation is not None:
            storey.Elevation = float(elevation)
        return storey

    def contain(self, elements: Iterable, structure) -> ifcopenshell.entity_instance:
        return self.file.create_entity(
            "IfcRelContainedInSpatialStructure",
            GlobalId=self._guid(),
            RelatedElements=list(elements),
            RelatingStructure=structure,
        )

    def aggregate(self, parts: Iterable, whole) -> ifcopenshell.entity_instance:
        return self.file.create_entity(
            "IfcRelAggregates",
            GlobalId=self._guid(),
            RelatingObject=whole,
            RelatedObjects=list(parts),
        )

    # -- elements -----------------------------------------------------------

    def element(
        self,
        ifc_class: str,
        name: str | None = None,
        placement=None,
        shape=None,
    ) -> ifcopenshell.entity_instance:
        element = self._root(ifc_class, name)
        if placement is not None:
            element.ObjectPlacement = placement
        if shape is not None:
            element.Representation = shape
        return element

    def column(self, name: str | None = "C1", **kwargs) -> ifcopenshell.entity_instance:
        return self.element("IfcColumn", name, **kwargs)

    def beam(self, name: str | None = "B1", **kwargs) -> ifcopenshell.entity_instance:
        return self.element("IfcBeam", name, **kwargs)

    def slab(self, name: str | None = "S1", **kwargs) -> ifcopenshell.entity_instance:
        return self.element("IfcSlab", name, **kwargs)

    # -- placement ----------------------------------------------------------

    def point(self, *coords: float) -> ifcopenshell.entity_instance:
        return self.file.create_entity("IfcCartesianPoint", Coordinates=tuple(float(c) for c in coords))

    def axis(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> ifcopenshell.entity_instance:
        return self.file.create_entity("IfcAxis2Placement3D", Location=self.point(x, y, z))

    def placement(
        self,
        x: float = 0.0,
        y: float = 0.0,
        z: float = 0.0,
        relative_to=None,
    ) -> ifcopenshell.entity_instance:
        return self.file.create_entity(
            "IfcLocalPlacement",
            PlacementRelTo=relative_to,
            RelativePlacement=self.axis(x, y, z),
        )

    def chain(self, *offsets: tuple[float, float, float]) -> ifcopenshell.entity_instance:
        """Build a chain root-first; returns the innermost (head) placement."""
        parent = None
        for x, y, z in offsets:
            parent = self.placement(x, y, z, relative_to=parent)
        return parent

    # -- geometry -----------------------------------------------------------

    def rectangle(self, width: float, depth: float) -> ifcopenshell.entity_instance:
        return self.file.create_entity(
            "IfcRectangleProfileDef", ProfileType="AREA", XDim=float(width), YDim=float(depth)
        )

    def circle(self, radius: float) -> ifcopenshell.entity_instance:
        return self.file.create_entity("IfcCircleProfileDef", ProfileType="AREA", Radius=float(radius))

    def i_shape(self, width: float, depth: float) -> ifcopenshell.entity_instance:
        return self.file.create_entity(
            "IfcIShapeProfileDef",
            ProfileType="AREA",
            OverallWidth=float(width),
            OverallDepth=float(depth),
            WebThickness=10.0,
            FlangeThickness=15.0,
        )

    def polygon(self, points: Iterable[tuple[float, float]]) -> ifcopenshell.entity_instance:
        polyline = self.file.create_entity(
            "IfcPolyline", Points=[self.point(x, y) for x, y in points]
        )
        return self.file.create_entity(
            "IfcArbitraryClosedProfileDef", ProfileType="AREA", OuterCurve=polyline
        )

    def indexed_polygon(self, points: Iterable[tuple[float, float]]) -> ifcopenshell.entity_instance:
        point_list = self.file.create_entity(
            "IfcCartesianPointList2D", CoordList=[(float(x), float(y)) for x, y in points]
        )
        curve = self.file.create_entity("IfcIndexedPolyCurve", Points=point_list, SelfIntersect=False)
        return self.file.create_entity(
            "IfcArbitraryClosedProfileDef", ProfileType="AREA", OuterCurve=curve
        )

    def extrusion(self, profile, depth: float) -> ifcopenshell.entity_instance:
        return self.file.create_entity(
            "IfcExtrudedAreaSolid",
            SweptArea=profile,
            Position=self.axis(),
            ExtrudedDirection=self.file.create_entity("IfcDirection", DirectionRatios=(0.0, 0.0, 1.0)),
            Depth=float(depth),
        )

    def clipped(self, solid, z: float = 0.0) -> ifcopenshell.entity_instance:
        """Cut *solid* with a horizontal half space at height *z*."""
        half_space = self.file.create_entity(
            "IfcHalfSpaceSolid",
            BaseSurface=self.file.create_entity("IfcPlane", Position=self.axis(0, 0, z)),
            AgreementFlag=False,
        )
        return self.file.create_entity(
            "IfcBooleanClippingResult", Operator="DIFFERENCE", FirstOperand=solid, SecondOperand=half_space
        )

    def bounding_box(self, x: float, y: float, z: float) -> ifcopenshell.entity_instance:
        return self.file.create_entity(
            "IfcBoundingBox", Corner=self.point(0, 0, 0), XDim=float(x), YDim=float(y), ZDim=float(z)
        )

    def shape(self, *items, representation_type: str = "SweptSolid") -> ifcopenshell.entity_instance:
        representation = self.file.create_entity(
            "IfcShapeRepresentation",
            ContextOfItems=self.context,
            RepresentationIdentifier="Body",
            RepresentationType=representation_type,
            Items=list(items),
        )
        return self.file.create_entity("IfcProductDefinitionShape", Representations=[representation])

    def extruded_shape(self, profile, depth: float) -> ifcopenshell.entity_instance:
        return self.shape(self.extrusion(profile, depth))

    # -- properties, quantities, materials ----------------------------------

    def pset(self, element, name: str, properties: dict[str, object]) -> ifcopenshell.entity_instance:
        props = []
        for prop_name, value in properties.items():
            if isinstance(value, bool):
                nominal = self.file.create_entity("IfcBoolean", value)
            elif isinstance(value, (int, float)):
                nominal = self.file.create_entity("IfcLengthMeasure", float(value))
            else:
                nominal = self.file.create_entity("IfcLabel", str(value))
            props.append(
                self.file.create_entity("IfcPropertySingleValue", Name=prop_name, NominalValue=nominal)
            )
        pset = self.file.create_entity(
            "IfcPropertySet", GlobalId=self._guid(), Name=name, HasProperties=props
        )
        self.file.create_entity(
            "IfcRelDefinesByProperties",
            GlobalId=self._guid(),
            RelatedObjects=[element],
            RelatingPropertyDefinition=pset,
        )
        return pset

    def volume_quantity(self, element, value: float, name: str = "NetVolume") -> ifcopenshell.entity_instance:
        quantity = self.file.create_entity("IfcQuantityVolume", Name=name, VolumeValue=float(value))
        qto = self.file.create_entity(
            "IfcElementQuantity", GlobalId=self._guid(), Name="Qto_BaseQuantities", Quantities=[quantity]
        )
        self.file.create_entity(
            "IfcRelDefinesByProperties",
            GlobalId=self._guid(),
            RelatedObjects=[element],
            RelatingPropertyDefinition=qto,
        )
        return qto

    def assign_material(self, element, material) -> None:
        self.file.create_entity(
            "IfcRelAssociatesMaterial",
            GlobalId=self._guid(),
            RelatedObjects=[element],
            RelatingMaterial=material,
        )

    def material(self, element, name: str) -> ifcopenshell.entity_instance:
        material = self.file.create_entity("IfcMaterial", Name=name)
        self.assign_material(element, material)
        return material

    def layers(self, element, layers: Iterable[tuple[str, float]]) -> ifcopenshell.entity_instance:
        layer_set = self.file.create_entity(
            "IfcMaterialLayerSet",
            LayerSetName="Layers",
            MaterialLayers=[
                self.file.create_entity(
                    "IfcMaterialLayer",
                    Material=self.file.create_entity("IfcMaterial", Name=name),
                    LayerThickness=float(thickness),
                )
                for name, thickness in layers
            ],
        )
        self.assign_material(element, layer_set)
        return layer_set

    def write(self, path: Path) -> Path:
        self.file.write(str(path))
        return path


@pytest.fixture()
def factory() -> ModelFactory:
    return ModelFactory()


@pytest.fixture()
def ifc2x3_factory() -> ModelFactory:
    return ModelFactory(schema="IFC2X3")
