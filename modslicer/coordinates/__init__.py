"""
Atlas grid coordinate utilities.
"""

from modslicer.coordinates.grid_position import CELL_SIZE, GRID_SIZE, GridPosition

__all__ = ["CELL_SIZE", "GRID_SIZE", "GridPosition"]
