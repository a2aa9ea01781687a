"""Shared utilities for greenfleet."""

from .models import Command, Heading, PowerCurve, Quantity, ReadingSeries, SensorReading
from .errors import EmptyPowerCurve, GreenfleetError, InvalidConfig, Unavailable
from .parsing import parse_floats, parse_ints, parse_numbers
from .config import load_yaml_config, get_config_path
from .database import DBConfig
from .mqtt import MQTTConfig
from .logging import setup_logging

__all__ = [
    "Command",
    "Heading",
    "PowerCurve",
    "Quantity",
    "ReadingSeries",
    "SensorReading",
    "EmptyPowerCurve",
    "GreenfleetError",
    "InvalidConfig",
    "Unavailable",
    "parse_floats",
    "parse_ints",
    "parse_numbers",
    "load_yaml_config",
    "get_config_path",
    "DBConfig",
    "MQTTConfig",
    "setup_logging",
]
