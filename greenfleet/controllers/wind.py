from typing import Mapping, Optional, Union
import logging

from greenfleet.sensors.base import SensorSource
from greenfleet.shared.models import Command, Period, PowerCurve, SensorReading
from .base import UnitController

logger = logging.getLogger(__name__)


class WindTurbineController(UnitController):
    """Wind turbine driven by speed, direction and temperature readings.

    Orientation is in degrees: north is 0, east 90, south 180, west 270.
    """

    MIN_TEMPERATURE = -10
    MAX_TEMPERATURE = 40
    DIRECTION_TOLERANCE = 90

    def __init__(
        self,
        speed_sensor: SensorSource,
        direction_sensor: SensorSource,
        temperature_sensor: SensorSource,
        power_curve: Union[PowerCurve, Mapping[int, int]],
        orientation: int,
    ):
        if not isinstance(power_curve, PowerCurve):
            power_curve = PowerCurve(power_curve)
        self.speed_sensor = speed_sensor
        self.direction_sensor = direction_sensor
        self.temperature_sensor = temperature_sensor
        self.power_curve = power_curve
        self.orientation = orientation % 360
        logger.info(
            f"Initialized WindTurbineController facing {self.orientation} with "
            f"speed envelope [{power_curve.min_speed}, {power_curve.max_speed}]"
        )

    def command(self) -> Command:
        speed = self.speed_sensor.current().value
        direction = self.direction_sensor.current().value
        temperature = self.temperature_sensor.current().value

        if not self.power_curve.covers(speed):
            logger.debug(f"Wind speed {speed} outside operating range")
            return Command.OFF
        # Linear range, no wraparound at 0/360
        if (direction < self.orientation - self.DIRECTION_TOLERANCE
                or direction > self.orientation + self.DIRECTION_TOLERANCE):
            logger.debug(f"Wind direction {direction} outside operating range for orientation {self.orientation}")
            return Command.OFF
        if temperature < self.MIN_TEMPERATURE or temperature > self.MAX_TEMPERATURE:
            logger.debug(f"Temperature {temperature} outside operating range")
            return Command.OFF
        return Command.ON

    def _production(self, period: Period, day: Optional[str] = None) -> int:
        speeds = self.speed_sensor.window(period, day)
        return sum(self.power_curve.output(speed) for speed in speeds)

    def day_production(self, day: Optional[str] = None) -> int:
        return self._production(Period.DAY, day)

    def total_production(self) -> int:
        return self._production(Period.ALL)

    def headline_reading(self) -> SensorReading:
        return self.speed_sensor.current()
