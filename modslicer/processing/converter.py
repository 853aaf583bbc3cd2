"""
Conversion of a mod's archives into a resource pack tree.

This module drives a whole run:
1. Loading the mapping file.
2. Opening the archives it names.
3. Copying models and textures unchanged into the resource layout.
4. Slicing the block and item atlases into individual textures.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List

from modslicer.archives.archive_mux import ArchiveMultiplexer
from modslicer.config import load_run_config
from modslicer.errors import ResourceIOError
from modslicer.export.atlas_slicer import slice_atlas
from modslicer.image_ops import IMAGE_EXTENSION

# Set up logging
logger = logging.getLogger("modslicer.processing.converter")

# Path from the mapping file's folder to the resource root
RESOURCES_PATH = ("src", "main", "resources")


class ResourceLayout:
    """
    Destination folders of a run, all under assets/<modid>.
    """

    def __init__(self, resources_dir, modid):
        """
        Args:
            resources_dir: The src/main/resources folder of the mod project
            modid: Mod namespace
        """
        self.resources_dir = Path(resources_dir)
        self.namespace_dir = self.resources_dir / "assets" / modid
        textures_dir = self.namespace_dir / "textures"
        self.models_dir = self.namespace_dir / "models" / "block"
        self.gui_dir = textures_dir / "gui"
        self.blocks_dir = textures_dir / "block"
        self.items_dir = textures_dir / "item"

    @classmethod
    def for_mapping(cls, mapping_path, modid):
        """Build the layout relative to the folder holding the mapping file."""
        return cls(Path(mapping_path).parent.joinpath(*RESOURCES_PATH), modid)

    def directories(self) -> List[Path]:
        return [
            self.namespace_dir,
            self.models_dir,
            self.gui_dir,
            self.blocks_dir,
            self.items_dir,
        ]

    def ensure_dirs(self):
        """Ensure that the output directories exist."""
        for directory in self.directories():
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ResourceIOError(f"Failed to create directory {directory}: {e}") from e


def copy_entry(archives: ArchiveMultiplexer, name: str, output_dir: Path) -> Path:
    """
    Copy one archive entry unchanged, keeping its file name.

    Args:
        archives: Open archive group
        name: Logical file name to look up
        output_dir: Destination directory

    Returns:
        Path of the written file
    """
    data = archives.find(name)
    output_path = output_dir / name
    try:
        with open(output_path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise ResourceIOError(f"Failed to write {output_path}: {e}") from e
    logger.debug(f"Copied {name} -> {output_path} ({len(data)} bytes)")
    return output_path


def slice_catalog(archives: ArchiveMultiplexer, catalog, output_dir: Path) -> List[Path]:
    """
    Slice every atlas of a catalog into `output_dir`.

    Args:
        archives: Open archive group
        catalog: Dict of atlas identifier -> {GridPosition: output name}
        output_dir: Destination directory for the slices

    Returns:
        List of written slice paths
    """
    written = []
    for atlas_id, mapping in catalog.items():
        atlas_name = f"{atlas_id}{IMAGE_EXTENSION}"
        data = archives.find(atlas_name)
        written.extend(slice_atlas(data, mapping, output_dir, source=atlas_name))
    return written


def convert(input_dir, mapping_path) -> Dict[str, Any]:
    """
    Run a full conversion.

    Args:
        input_dir: Directory holding the mod's archive files
        mapping_path: Path to the TOML mapping file

    Returns:
        A dictionary containing:
        - 'output_dir': the assets/<modid> folder that was populated
        - 'copied': number of files copied unchanged
        - 'sliced': number of textures cut out of atlases

    Raises:
        ModSlicerError: On the first failure; the run is not resumed
    """
    config = load_run_config(mapping_path)
    layout = ResourceLayout.for_mapping(mapping_path, config.modid)
    layout.ensure_dirs()

    if config.imgs or config.bin:
        logger.debug(f"Ignoring unused fields: imgs={config.imgs}, bin={config.bin}")

    copies = [(name, layout.models_dir) for name in config.models]
    copies += [(name, layout.gui_dir) for name in config.gui]
    copies += [(name, layout.blocks_dir) for name in config.blocks_copy]
    # The banner goes to assets/<modid>/, not to the src/main/resources root.
    if config.banner:
        copies.insert(0, (config.banner, layout.namespace_dir))

    with ArchiveMultiplexer(config.folders, input_dir) as archives:
        for name, output_dir in copies:
            copy_entry(archives, name, output_dir)
        logger.info(f"Copied {len(copies)} files into {layout.namespace_dir}")

        sliced = slice_catalog(archives, config.items, layout.items_dir)
        sliced += slice_catalog(archives, config.blocks, layout.blocks_dir)

    return {
        "output_dir": layout.namespace_dir,
        "copied": len(copies),
        "sliced": len(sliced),
    }
