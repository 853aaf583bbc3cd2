"""
Mapping file models for modslicer.

The mapping file is TOML. It names the mod, the archives to read and the
folders to search in each, the files to copy unchanged, and the texture
atlases to slice, with atlas cells keyed by their two-hex-digit position.
"""

import logging
import tomllib
from pathlib import Path
from typing import Annotated, Dict, List, Optional

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from modslicer.coordinates.grid_position import GridPosition
from modslicer.errors import ConfigParseError, ResourceIOError

logger = logging.getLogger("modslicer.config")

AtlasKey = Annotated[GridPosition, BeforeValidator(GridPosition.coerce)]

# Atlas cell -> output base name
AtlasMapping = Dict[AtlasKey, str]

# Atlas identifier -> its cell mapping
AtlasCatalog = Dict[str, AtlasMapping]


class RunConfig(BaseModel):
    """Parsed mapping file. Immutable for the whole run."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    modid: str = Field(..., min_length=1, description="Mod namespace under assets/")
    banner: Optional[str] = Field(
        default=None, description="Banner image copied to the namespace root"
    )
    models: List[str] = Field(default_factory=list, description="Block model files")
    gui: List[str] = Field(default_factory=list, description="GUI texture files")
    blocks_copy: List[str] = Field(
        default_factory=list, description="Block textures copied unchanged"
    )
    # Kept for compatibility with existing mapping files; not processed.
    imgs: List[str] = Field(default_factory=list)
    bin: Optional[str] = None
    folders: Dict[str, List[str]] = Field(
        ..., description="Archive file -> internal folders, in search order"
    )
    blocks: AtlasCatalog = Field(default_factory=dict, description="Block atlases")
    items: AtlasCatalog = Field(default_factory=dict, description="Item atlases")

    @field_validator("blocks", "items", mode="before")
    @classmethod
    def _reject_duplicate_cells(cls, value):
        if not isinstance(value, dict):
            return value
        for atlas, mapping in value.items():
            if not isinstance(mapping, dict):
                continue
            seen = {}
            for key in mapping:
                if not isinstance(key, str):
                    continue
                normalized = key.lower()
                if normalized in seen:
                    raise ValueError(
                        f"atlas {atlas!r} maps cell {normalized} twice "
                        f"({seen[normalized]!r} and {key!r})"
                    )
                seen[normalized] = key
        return value

    @field_validator("blocks", "items")
    @classmethod
    def _sort_cells(cls, value):
        return {atlas: dict(sorted(mapping.items())) for atlas, mapping in value.items()}


def load_run_config(path):
    """
    Load and validate a mapping file.

    Args:
        path: Path to the TOML mapping file

    Returns:
        RunConfig instance

    Raises:
        ResourceIOError: If the file cannot be read
        ConfigParseError: If the file is not valid TOML or does not match the schema
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(path, str(e)) from e
    except OSError as e:
        raise ResourceIOError(f"Failed to read mapping file {path}: {e}") from e

    try:
        config = RunConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigParseError(path, str(e)) from e

    logger.info(
        f"Loaded mapping for mod '{config.modid}' from {path}: "
        f"{len(config.folders)} archives, "
        f"{len(config.blocks)} block atlases, {len(config.items)} item atlases"
    )
    return config
