"""Runs one decision cycle across the fleet and reports the outcomes."""

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Union
import logging

from greenfleet.controllers.base import UnitController
from greenfleet.shared.errors import Unavailable
from greenfleet.shared.models import Command, Heading, Number, SensorReading

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnitOutcome:
    """Result of asking one unit for its command"""
    unit: str
    command: Optional[Union[Command, Heading]] = None
    reading: Optional[SensorReading] = None
    error: Optional[str] = None

    @property
    def known(self) -> bool:
        return self.command is not None

    @property
    def command_text(self) -> str:
        return str(self.command) if self.command is not None else "unknown"


@dataclass(frozen=True)
class ProductionSummary:
    """Day and total production of one unit"""
    unit: str
    day: Optional[Number] = None
    total: Optional[Number] = None
    error: Optional[str] = None


class FleetCoordinator:
    """Asks every unit for its command and hands the results to sinks.

    Holds no decision logic. A unit whose sensors are unavailable is
    reported as unknown and the remaining units are still evaluated.
    """

    def __init__(self, units: Mapping[str, UnitController], sinks: Sequence = ()):
        self.units: Dict[str, UnitController] = dict(units)
        self.sinks = list(sinks)
        logger.info(f"Initialized FleetCoordinator with {len(self.units)} units and {len(self.sinks)} sinks")

    def _evaluate(self, name: str, unit: UnitController) -> UnitOutcome:
        try:
            command = unit.command()
        except Unavailable as e:
            logger.warning(f"Skipping {name}: {e}")
            return UnitOutcome(unit=name, error=str(e))

        try:
            reading = unit.headline_reading()
        except Unavailable as e:
            logger.warning(f"No headline reading for {name}: {e}")
            return UnitOutcome(unit=name, command=command, error=str(e))
        return UnitOutcome(unit=name, command=command, reading=reading)

    def run_cycle(self) -> List[UnitOutcome]:
        """Evaluate each unit once, in registration order."""
        outcomes = [self._evaluate(name, unit) for name, unit in self.units.items()]

        for sink in self.sinks:
            try:
                sink.publish_outcomes(outcomes)
            except Exception as e:
                logger.error(f"Sink {sink.__class__.__name__} failed to publish outcomes: {e}")

        return outcomes

    def _summarize(self, name: str, unit: UnitController, day: Optional[str]) -> ProductionSummary:
        try:
            return ProductionSummary(
                unit=name,
                day=unit.day_production(day),
                total=unit.total_production(),
            )
        except Unavailable as e:
            logger.warning(f"No production figures for {name}: {e}")
            return ProductionSummary(unit=name, error=str(e))

    def production_report(self, day: Optional[str] = None) -> List[ProductionSummary]:
        """Day and total production for every unit."""
        summaries = [self._summarize(name, unit, day) for name, unit in self.units.items()]

        for sink in self.sinks:
            try:
                sink.publish_production(summaries)
            except Exception as e:
                logger.error(f"Sink {sink.__class__.__name__} failed to publish production: {e}")

        return summaries

    def close(self):
        for sink in self.sinks:
            sink.close()
