"""Decision and production logic for each generation unit."""

from .base import UnitController
from .wind import WindTurbineController
from .solar import SolarPanelController
from .hydro import HydropowerController

__all__ = [
    "UnitController",
    "WindTurbineController",
    "SolarPanelController",
    "HydropowerController",
]
