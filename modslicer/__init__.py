"""
modslicer - extract and reorganize mod assets from archive files.

Copies models and textures out of a mod's jar/zip archives into a resource
pack layout and slices 16x16-cell texture atlases into individual images.
"""

__version__ = "0.1.0"
