"""Fleet description loading.

Turns the YAML fleet document into typed settings and builds the sensor
sources and unit controllers it describes.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import logging

from greenfleet.controllers import (
    HydropowerController,
    SolarPanelController,
    UnitController,
    WindTurbineController,
)
from greenfleet.sensors import MySQLSensor, SensorSource, StaticSensor, TextFileSensor
from greenfleet.shared.config import get_config_path, get_log_level, load_yaml_config
from greenfleet.shared.database import DBConfig
from greenfleet.shared.errors import InvalidConfig
from greenfleet.shared.models import PowerCurve, Quantity, whole_number
from greenfleet.shared.mqtt import MQTTConfig
from greenfleet.shared.parsing import parse_kind

logger = logging.getLogger(__name__)


@dataclass
class SensorSettings:
    type: str
    quantity: Quantity
    path: Optional[str] = None
    values: List[Union[int, float]] = field(default_factory=list)
    kind: str = "float"
    samples_per_day: int = 24
    metric: Optional[str] = None
    location: Optional[str] = None


@dataclass
class UnitSettings:
    name: str
    type: str
    sensors: Dict[str, SensorSettings]
    orientation: int = 0
    power: int = 0
    power_curve: Dict[int, int] = field(default_factory=dict)


@dataclass
class DisplaySettings:
    console: bool = False


@dataclass
class FleetConfig:
    units: List[UnitSettings]
    db_config: DBConfig
    mqtt: Optional[MQTTConfig] = None
    display: DisplaySettings = field(default_factory=DisplaySettings)
    log_level: str = "INFO"
    base_dir: Path = field(default_factory=Path.cwd)


# Sensor role -> quantity, per unit type; roles in the optional set may be omitted
UNIT_TYPES = {
    "wind_turbine": {
        "roles": {
            "speed": Quantity.WIND_SPEED,
            "direction": Quantity.WIND_DIRECTION,
            "temperature": Quantity.TEMPERATURE,
        },
        "optional": set(),
    },
    "solar_panel": {
        "roles": {
            "brightness": Quantity.BRIGHTNESS,
            "direction": Quantity.LIGHT_DIRECTION,
            "temperature": Quantity.TEMPERATURE,
        },
        "optional": {"direction"},
    },
    "hydropower": {
        "roles": {
            "reserves": Quantity.RESERVES,
            "flow": Quantity.FLOW,
        },
        "optional": set(),
    },
}

SENSOR_TYPES = ("static", "file", "mysql")


def _parse_sensor(unit_name: str, role: str, quantity: Quantity, data: Any) -> SensorSettings:
    if not isinstance(data, dict):
        raise InvalidConfig(f"Sensor {unit_name}.{role} must be a mapping")
    sensor_type = data.get("type")
    if sensor_type not in SENSOR_TYPES:
        raise InvalidConfig(f"Unsupported sensor type for {unit_name}.{role}: {sensor_type!r}")
    if sensor_type == "file" and not data.get("path"):
        raise InvalidConfig(f"File sensor {unit_name}.{role} needs a path")

    return SensorSettings(
        type=sensor_type,
        quantity=quantity,
        path=data.get("path"),
        values=list(data.get("values", [])),
        kind=str(data.get("kind", "float")),
        samples_per_day=int(data.get("samples_per_day", 24)),
        metric=data.get("metric"),
        location=data.get("location"),
    )


def _whole(unit_name: str, key: str, value: Any) -> int:
    try:
        return whole_number(value)
    except InvalidConfig:
        raise InvalidConfig(f"{key.capitalize()} for {unit_name} must be a whole number, got {value!r}") from None


def _parse_unit(name: str, data: Any) -> UnitSettings:
    if not isinstance(data, dict):
        raise InvalidConfig(f"Unit {name} must be a mapping")
    unit_type = data.get("type")
    if unit_type not in UNIT_TYPES:
        raise InvalidConfig(f"Unsupported unit type for {name}: {unit_type!r}")

    layout = UNIT_TYPES[unit_type]
    sensor_data = data.get("sensors") or {}
    sensors = {}
    for role, quantity in layout["roles"].items():
        if role not in sensor_data:
            if role in layout["optional"]:
                continue
            raise InvalidConfig(f"Unit {name} is missing its {role} sensor")
        sensors[role] = _parse_sensor(name, role, quantity, sensor_data[role])

    curve = data.get("power_curve") or {}
    if not isinstance(curve, dict):
        raise InvalidConfig(f"Power curve for {name} must be a mapping")

    return UnitSettings(
        name=name,
        type=unit_type,
        sensors=sensors,
        orientation=_whole(name, "orientation", data.get("orientation", 0)),
        power=_whole(name, "power", data.get("power", 0)),
        power_curve=dict(curve),
    )


def load_config(path: Optional[Union[str, Path]] = None) -> FleetConfig:
    """Load the fleet description from YAML with environment variable support.

    Args:
        path: Path to the YAML file. If None, uses config-{env}.yaml in
            the repo's config directory.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        InvalidConfig: If the document doesn't describe a valid fleet.
    """
    config_path = Path(path) if path is not None else get_config_path()
    config_data = load_yaml_config(config_path)
    if not isinstance(config_data, dict):
        raise InvalidConfig("Fleet config must be a mapping")

    units_data = config_data.get("units") or {}
    if not units_data:
        raise InvalidConfig("Fleet config defines no units")
    units = [_parse_unit(name, data) for name, data in units_data.items()]

    mqtt_data = config_data.get("mqtt")
    display_data = config_data.get("display") or {}

    return FleetConfig(
        units=units,
        db_config=DBConfig.from_env(),
        mqtt=MQTTConfig.from_dict(mqtt_data) if mqtt_data else None,
        display=DisplaySettings(console=bool(display_data.get("console", False))),
        log_level=get_log_level(config_data),
        base_dir=config_path.resolve().parent,
    )


def build_sensor(settings: SensorSettings, config: FleetConfig) -> SensorSource:
    """Create a sensor source from its settings"""
    try:
        kind = parse_kind(settings.kind)
    except ValueError as e:
        raise InvalidConfig(str(e)) from e

    if settings.type == "static":
        return StaticSensor(settings.quantity, settings.values, samples_per_day=settings.samples_per_day)
    if settings.type == "file":
        path = Path(settings.path)
        if not path.is_absolute():
            path = config.base_dir / path
        return TextFileSensor(settings.quantity, path, kind=kind, samples_per_day=settings.samples_per_day)
    if settings.type == "mysql":
        return MySQLSensor(
            settings.quantity,
            config.db_config,
            metric=settings.metric,
            location=settings.location,
            kind=kind,
        )
    raise InvalidConfig(f"Unsupported sensor type: {settings.type}")


def build_unit(settings: UnitSettings, config: FleetConfig) -> UnitController:
    """Create a unit controller and its sensors"""
    sensors = {role: build_sensor(s, config) for role, s in settings.sensors.items()}

    if settings.type == "wind_turbine":
        return WindTurbineController(
            speed_sensor=sensors["speed"],
            direction_sensor=sensors["direction"],
            temperature_sensor=sensors["temperature"],
            power_curve=PowerCurve(settings.power_curve),
            orientation=settings.orientation,
        )
    if settings.type == "solar_panel":
        return SolarPanelController(
            brightness_sensor=sensors["brightness"],
            direction_sensor=sensors.get("direction"),
            temperature_sensor=sensors["temperature"],
            power=settings.power,
        )
    if settings.type == "hydropower":
        return HydropowerController(
            reserves_sensor=sensors["reserves"],
            flow_sensor=sensors["flow"],
            power=settings.power,
        )
    raise InvalidConfig(f"Unsupported unit type: {settings.type}")


def build_units(config: FleetConfig) -> Dict[str, UnitController]:
    """Create every configured unit, keyed by name, in document order."""
    units = {settings.name: build_unit(settings, config) for settings in config.units}
    logger.info(f"Built {len(units)} units: {', '.join(units)}")
    return units
