"""Tunables for the normalization pipeline.

Settings are merged from (lowest to highest precedence):
defaults -> environment profile -> ``.ifcstruct/config.json`` -> ``.env``
-> environment variables.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, Field, field_validator

from ifcstruct import config
from ifcstruct.models.element import Category, ZPolicy

logger = logging.getLogger(__name__)

# Environment keys -> (settings field, default, description)
_CONFIG_KEYS: dict[str, dict[str, Any]] = {
    "IFCSTRUCT_ENV": {"field": None, "default": "development", "description": "Environment profile"},
    "IFCSTRUCT_STORY_HEIGHT": {
        "field": "story_height_mm",
        "default": str(config.DEFAULT_STOREY_HEIGHT_MM),
        "description": "Assumed storey height in mm for floor arithmetic",
    },
    "IFCSTRUCT_MAX_PLACEMENT_DEPTH": {
        "field": "max_placement_depth",
        "default": str(config.MAX_PLACEMENT_DEPTH),
        "description": "Placement chain depth cap",
    },
    "IFCSTRUCT_LENGTH_UNIT_SCALE": {
        "field": "length_unit_scale",
        "default": "",
        "description": "Millimetres per model length unit (empty = detect)",
    },
    "IFCSTRUCT_DEFAULT_MATERIAL": {
        "field": "default_material",
        "default": "",
        "description": "Catalog material assigned when an element has none",
    },
    "IFCSTRUCT_LOG_LEVEL": {"field": "log_level", "default": "INFO", "description": "Logging level"},
}

_PROFILES: dict[str, dict[str, str]] = {
    "development": {"IFCSTRUCT_LOG_LEVEL": "DEBUG"},
    "production": {"IFCSTRUCT_LOG_LEVEL": "WARNING"},
    "testing": {"IFCSTRUCT_LOG_LEVEL": "DEBUG"},
}

_DEFAULT_Z_POLICIES = {
    Category.COLUMN: ZPolicy.STOREY,
    Category.BEAM: ZPolicy.STOREY_PLUS_LOCAL,
    Category.SLAB: ZPolicy.STOREY,
}


class ExtractionSettings(BaseModel):
    """All configurable constants of the extraction pipeline."""

    story_height_mm: float = Field(default=config.DEFAULT_STOREY_HEIGHT_MM, gt=0)
    max_placement_depth: int = Field(default=config.MAX_PLACEMENT_DEPTH, ge=1)
    z_policies: dict[Category, ZPolicy] = Field(default_factory=lambda: dict(_DEFAULT_Z_POLICIES))

    default_dimensions: dict[Category, tuple[float, float, float]] = Field(
        default_factory=lambda: {Category(k): v for k, v in config.DEFAULT_DIMENSIONS.items()}
    )
    slab_footprint: tuple[float, float] = config.SLAB_DEFAULT_FOOTPRINT
    fallback_profile_extent: tuple[float, float] = config.FALLBACK_PROFILE_EXTENT
    dimension_synonyms: dict[str, tuple[str, ...]] = Field(
        default_factory=lambda: dict(config.DIMENSION_SYNONYMS)
    )

    length_unit_scale: float | None = None
    """Millimetres per model length unit; None detects it from the model."""

    default_material: str | None = None
    allowed_extensions: tuple[str, ...] = config.ALLOWED_EXTENSIONS
    log_level: str = "INFO"

    @field_validator("length_unit_scale", "default_material", mode="before")
    @classmethod
    def _blank_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    # Overrides may name only some categories; the rest keep their defaults

    @field_validator("z_policies")
    @classmethod
    def _complete_z_policies(cls, value: dict[Category, ZPolicy]) -> dict[Category, ZPolicy]:
        return {**_DEFAULT_Z_POLICIES, **value}

    @field_validator("default_dimensions")
    @classmethod
    def _complete_defaults(
        cls, value: dict[Category, tuple[float, float, float]]
    ) -> dict[Category, tuple[float, float, float]]:
        merged = {Category(k): v for k, v in config.DEFAULT_DIMENSIONS.items()}
        merged.update(value)
        for category, dims in merged.items():
            if any(d <= 0 for d in dims):
                raise ValueError(f"default dimensions for {category.value} must be positive")
        return merged

    @field_validator("dimension_synonyms")
    @classmethod
    def _complete_synonyms(cls, value: dict[str, tuple[str, ...]]) -> dict[str, tuple[str, ...]]:
        return {**config.DIMENSION_SYNONYMS, **value}

    def z_policy(self, category: Category) -> ZPolicy:
        return self.z_policies[category]


def _read_env_file(path: Path) -> dict[str, str]:
    values: dict[str, str] = {}
    try:
        for line in path.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                k, v = line.split("=", 1)
                values[k.strip()] = v.strip()
    except OSError:
        logger.debug("Could not read %s", path, exc_info=True)
    return values


def load_settings(
    project_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ExtractionSettings:
    """Build merged settings for *project_path*.

    Parameters
    ----------
    project_path:
        Directory that may hold ``.ifcstruct/config.json`` and ``.env``.
    environ:
        Environment mapping; defaults to ``os.environ``.
    """
    env = os.environ if environ is None else environ
    flat: dict[str, str] = {key: str(info["default"]) for key, info in _CONFIG_KEYS.items()}

    env_name = env.get("IFCSTRUCT_ENV", flat["IFCSTRUCT_ENV"])
    flat.update(_PROFILES.get(env_name, {}))

    structured: dict[str, Any] = {}
    if project_path is not None:
        root = Path(project_path)

        config_json = root / ".ifcstruct" / "config.json"
        if config_json.is_file():
            try:
                data = json.loads(config_json.read_text(encoding="utf-8"))
                for k, v in data.items():
                    if k in _CONFIG_KEYS:
                        flat[k] = str(v)
                    else:
                        structured[k] = v
            except (json.JSONDecodeError, OSError):
                logger.debug("Could not read config.json", exc_info=True)

        env_file = root / ".env"
        if env_file.is_file():
            for k, v in _read_env_file(env_file).items():
                if k in _CONFIG_KEYS:
                    flat[k] = v

    for key in _CONFIG_KEYS:
        env_val = env.get(key)
        if env_val is not None:
            flat[key] = env_val

    fields: dict[str, Any] = dict(structured)
    for key, info in _CONFIG_KEYS.items():
        if info["field"] is not None:
            fields[info["field"]] = flat[key]
    return ExtractionSettings(**fields)


def generate_env_template(project_path: str | Path) -> Path:
    """Write ``.env.example`` listing every configuration key."""
    env_path = Path(project_path) / ".env.example"
    lines = ["# ifcstruct configuration template", "# Copy to .env and fill in values", ""]
    for key, info in _CONFIG_KEYS.items():
        lines.append(f"# {info['description']}")
        lines.append(f"{key}={info['default']}")
        lines.append("")
    env_path.write_text("\n".join(lines), encoding="utf-8")
    return env_path


def apply_log_level(level: str) -> None:
    """Set the level of the ``ifcstruct`` logger hierarchy."""
    logging.getLogger("ifcstruct").setLevel(level.upper())
