"""Interface shared by the unit controllers."""

from abc import ABC, abstractmethod
from typing import Optional, Union

from greenfleet.shared.errors import InvalidConfig
from greenfleet.shared.models import Command, Heading, Number, SensorReading


class UnitController(ABC):
    """A generation unit that can be told what to do and asked what it made.

    Controllers hold only construction-time configuration and their
    sensor sources; every call re-reads the sensors. Unavailable from a
    sensor propagates to the caller.
    """

    @abstractmethod
    def command(self) -> Union[Command, Heading]:
        """Decide the unit's operating state from current readings."""
        pass

    @abstractmethod
    def day_production(self, day: Optional[str] = None) -> Number:
        """Production over one day of readings."""
        pass

    @abstractmethod
    def total_production(self) -> Number:
        """Production over all recorded readings."""
        pass

    @abstractmethod
    def headline_reading(self) -> SensorReading:
        """The reading reported alongside the unit's decision."""
        pass


def check_rated_power(power: Number) -> Number:
    if power < 0:
        raise InvalidConfig(f"Rated power must not be negative, got {power}")
    return power
