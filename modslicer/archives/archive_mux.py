"""
Lookup of named entries across several mod archives.

Each archive (a jar or zip file) is searched under an ordered list of internal
folders. The first archive/folder pair holding the requested file wins, so the
order of the archive group decides which copy is used when names collide.
"""

import logging
import zipfile
import zlib
from pathlib import Path
from typing import Dict, List, Tuple

from modslicer.errors import ArchiveOpenError, EntryNotFoundError, ResourceIOError

# Set up logging
logger = logging.getLogger("modslicer.archives.archive_mux")


def join_entry_path(prefix: str, name: str) -> str:
    """
    Join an archive folder prefix and a file name into a zip member name.

    Args:
        prefix: Folder inside the archive, with or without a trailing slash
        name: File name to look up

    Returns:
        Member name such as "assets/mod/textures/stone.png"
    """
    prefix = prefix.strip("/")
    if not prefix:
        return name
    return f"{prefix}/{name}"


class ArchiveMultiplexer:
    """
    Owns the opened archives of a run and resolves file names across them.

    Archives are searched in the order the mapping file lists them, not
    alphabetically by file name as older mapping files may assume.
    """

    def __init__(self, folders: Dict[str, List[str]], input_dir):
        """
        Open every archive of the group.

        Args:
            folders: Archive file name -> internal folders to search, in priority order
            input_dir: Directory the archive file names are relative to

        Raises:
            ArchiveOpenError: If any archive is missing or not a zip container
        """
        self.input_dir = Path(input_dir)
        self._archives: List[Tuple[str, zipfile.ZipFile, List[str]]] = []

        try:
            for archive_name, prefixes in folders.items():
                archive_path = self.input_dir / archive_name
                self._archives.append(
                    (archive_name, self._open_archive(archive_path), list(prefixes))
                )
                logger.info(
                    f"Opened archive {archive_path} ({len(prefixes)} search folders)"
                )
        except ArchiveOpenError:
            self.close()
            raise

    @staticmethod
    def _open_archive(archive_path):
        try:
            return zipfile.ZipFile(archive_path, "r")
        except zipfile.BadZipFile as e:
            raise ArchiveOpenError(archive_path, f"not a zip archive ({e})") from e
        except OSError as e:
            raise ArchiveOpenError(archive_path, e.strerror or str(e)) from e

    @property
    def archive_names(self):
        """Archive file names in search order."""
        return [name for name, _, _ in self._archives]

    def find(self, name: str) -> bytes:
        """
        Read the first entry called `name` found under the archive group.

        Archives are tried in declared order, and within each archive its
        folders are tried in declared order.

        Args:
            name: Logical file name, e.g. "stone.png"

        Returns:
            The full content of the entry

        Raises:
            EntryNotFoundError: If no archive/folder pair contains the name
        """
        for archive_name, archive, prefixes in self._archives:
            for prefix in prefixes:
                member = join_entry_path(prefix, name)
                try:
                    info = archive.getinfo(member)
                except KeyError:
                    continue
                logger.debug(f"Found {name} at {archive_name}:{member}")
                try:
                    return archive.read(info)
                except (zipfile.BadZipFile, zlib.error, OSError) as e:
                    raise ResourceIOError(
                        f"Failed to read {member} from {archive_name}: {e}"
                    ) from e

        raise EntryNotFoundError(name, self.archive_names)

    def close(self):
        """Close every opened archive."""
        for _, archive, _ in self._archives:
            archive.close()
        self._archives = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False
