from typing import Optional
import logging

from greenfleet.sensors.base import SensorSource
from greenfleet.shared.models import Command, Period, SensorReading
from .base import UnitController, check_rated_power

logger = logging.getLogger(__name__)


class HydropowerController(UnitController):
    """Dam driven by reserve fraction (0 to 1) and river flow readings."""

    DROUGHT_RESERVES = 0.3
    DROUGHT_FLOW = 14
    LOW_FLOW = 5
    FULL_RESERVES = 0.95

    def __init__(
        self,
        reserves_sensor: SensorSource,
        flow_sensor: SensorSource,
        power: int,
    ):
        self.reserves_sensor = reserves_sensor
        self.flow_sensor = flow_sensor
        self.power = check_rated_power(power)
        logger.info(f"Initialized HydropowerController rated at {self.power}")

    def command(self) -> Command:
        flow = self.flow_sensor.current().value
        reserves = self.reserves_sensor.current().value

        # Drought rule wins over the release rule
        if reserves < self.DROUGHT_RESERVES and flow > self.DROUGHT_FLOW:
            logger.debug(f"Reserves {reserves} low with flow {flow}, conserving water")
            return Command.CLOSE_DAM
        if flow < self.LOW_FLOW or reserves > self.FULL_RESERVES:
            logger.debug(f"Releasing water: flow {flow}, reserves {reserves}")
            return Command.OPEN_DAM
        return Command.CLOSE_DAM

    def _production(self, period: Period, day: Optional[str] = None) -> float:
        flow = self.flow_sensor.window(period, day)
        reserves = self.reserves_sensor.window(period, day)
        excess = sum(r for r in reserves if r > self.FULL_RESERVES)
        return float((sum(flow) + excess) * self.power)

    def day_production(self, day: Optional[str] = None) -> float:
        return self._production(Period.DAY, day)

    def total_production(self) -> float:
        return self._production(Period.ALL)

    def headline_reading(self) -> SensorReading:
        return self.flow_sensor.current()
