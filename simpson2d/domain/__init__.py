"""
Domain module: sampling grids and the values living on them.

Provides:
- Axis, Grid: uniform sampling in 2D, linear or in ln(x)
- FunctionMap: function values cached on a grid, kept across refinements
"""

from .grid import Axis, Grid, Spacing, is_simpson_count, simpson_count
from .function_map import FunctionMap
