"""Global configuration: IFC class names, unit factors, default constants."""

# IFC classes extracted per category. by_type() also yields subtypes
# (IfcColumnStandardCase, IfcBeamStandardCase, IfcSlabStandardCase, ...).
CATEGORY_IFC_CLASSES = {
    "Column": "IfcColumn",
    "Beam": "IfcBeam",
    "Slab": "IfcSlab",
}

# Supported IFC schemas
SUPPORTED_SCHEMAS = ("IFC2X3", "IFC4", "IFC4X3")

ALLOWED_EXTENSIONS = (".ifc",)

# Unit conversion
MM3_PER_M3 = 1_000_000_000.0
MM2_PER_M2 = 1_000_000.0
MM_PER_M = 1000.0

# Placement chain guard
MAX_PLACEMENT_DEPTH = 64

# Assumed storey height used for elevation and absolute-Z floor arithmetic
DEFAULT_STOREY_HEIGHT_MM = 3000.0

# Extent used when a polygon profile is empty or degenerate (width, depth)
FALLBACK_PROFILE_EXTENT = (300.0, 600.0)

# Terminal dimension defaults per category: (width, depth, height) in mm
DEFAULT_DIMENSIONS = {
    "Column": (300.0, 300.0, 3000.0),
    "Beam": (300.0, 500.0, 6000.0),
    "Slab": (5000.0, 5000.0, 200.0),
}

# Footprint combined with a slab's summed layer thickness (width, depth)
SLAB_DEFAULT_FOOTPRINT = (5000.0, 5000.0)

# Case-insensitive substrings recognised in property names
DIMENSION_SYNONYMS = {
    "width": ("width",),
    "depth": ("depth", "thickness"),
    "height": ("height", "length"),
}

# Categories whose material layers describe a thickness
PLATE_LIKE_CATEGORIES = ("Slab",)

# Maximum number of representation items inspected per element
MAX_REPRESENTATION_ITEMS = 256
