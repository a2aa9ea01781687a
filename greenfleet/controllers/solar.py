from typing import Optional, Union
import logging

from greenfleet.sensors.base import SensorSource
from greenfleet.shared.models import Command, Heading, Period, SensorReading
from .base import UnitController, check_rated_power

logger = logging.getLogger(__name__)


class SolarPanelController(UnitController):
    """Sun-tracking solar panel.

    Light direction runs from 0 (east) to 180 (west). Without a direction
    sensor the panel is simply switched on.
    """

    MIN_TEMPERATURE = -40
    MAX_TEMPERATURE = 65
    MIN_BRIGHTNESS = 500
    PRODUCTION_BRIGHTNESS = 18000

    def __init__(
        self,
        brightness_sensor: SensorSource,
        direction_sensor: Optional[SensorSource],
        temperature_sensor: SensorSource,
        power: int,
    ):
        self.brightness_sensor = brightness_sensor
        self.direction_sensor = direction_sensor
        self.temperature_sensor = temperature_sensor
        self.power = check_rated_power(power)
        logger.info(f"Initialized SolarPanelController rated at {self.power}")

    def command(self) -> Union[Command, Heading]:
        temperature = self.temperature_sensor.current().value
        brightness = self.brightness_sensor.current().value

        if temperature < self.MIN_TEMPERATURE or temperature > self.MAX_TEMPERATURE:
            logger.debug(f"Temperature {temperature} outside operating range")
            return Command.OFF
        if brightness < self.MIN_BRIGHTNESS:
            logger.debug(f"Brightness {brightness} below {self.MIN_BRIGHTNESS}")
            return Command.OFF
        if self.direction_sensor is None:
            return Command.ON
        # Within operating range, face the sun
        return Heading(self.direction_sensor.current().value)

    def _production(self, period: Period, day: Optional[str] = None) -> float:
        light = self.brightness_sensor.window(period, day)
        productive = sum(1 for value in light if value > self.PRODUCTION_BRIGHTNESS)
        return float(productive * self.power)

    def day_production(self, day: Optional[str] = None) -> float:
        return self._production(Period.DAY, day)

    def total_production(self) -> float:
        return self._production(Period.ALL)

    def headline_reading(self) -> SensorReading:
        return self.brightness_sensor.current()
