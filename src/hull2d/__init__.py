from hull2d.bounded_stack import BoundedStack
from hull2d.config import CONFIG
from hull2d.config import HullConfig
from hull2d.geometry import AreaSign
from hull2d.geometry import Point
from hull2d.geometry import orientation
from hull2d.hull import FLAGGED_INDEX_DTYPE
from hull2d.hull import Hull2D

__all__ = [
    "AreaSign",
    "BoundedStack",
    "CONFIG",
    "FLAGGED_INDEX_DTYPE",
    "Hull2D",
    "HullConfig",
    "Point",
    "orientation",
]
