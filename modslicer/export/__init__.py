"""
Export functionality for atlas images.

This module provides tools for writing the textures held in a texture atlas out
as individual image files.
"""
