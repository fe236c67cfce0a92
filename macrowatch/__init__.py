"""
Macrowatch - Time-Series Normalization and Signal Derivation Engine

Ingests macroeconomic and solar-activity time series from heterogeneous
sources, normalizes them into canonical date-keyed points, merges related
series, and derives recession windows and yield-curve inversion streaks
for visualization.
"""

__version__ = "0.1.0"
__author__ = "Macrowatch Team"
