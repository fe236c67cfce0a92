"""Display metrics computed over canonical series"""

from .rolling import rolling_mean

__all__ = [
    "rolling_mean",
]
