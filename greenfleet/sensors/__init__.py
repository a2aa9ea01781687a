"""Sensor sources feeding the unit controllers."""

from .base import SensorSource
from .static import StaticSensor
from .textfile import TextFileSensor
from .mysql import MySQLSensor

__all__ = [
    "SensorSource",
    "StaticSensor",
    "TextFileSensor",
    "MySQLSensor",
]
