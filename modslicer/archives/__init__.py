"""
Access to the mod's source archives.
"""

from modslicer.archives.archive_mux import ArchiveMultiplexer

__all__ = ["ArchiveMultiplexer"]
