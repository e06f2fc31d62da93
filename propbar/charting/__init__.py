"""Altair rendering of proportion layers and percentage bar charts.

Everything here consumes `propbar.analysis.PropLayer` tables and returns Altair
chart objects; no statistics are computed in this package.
"""

from .colbar import ggally_colbar, ggally_rowbar
from .schema import PercentBarOptions
from .stat_prop import stat_prop

__all__ = ["PercentBarOptions", "ggally_colbar", "ggally_rowbar", "stat_prop"]
