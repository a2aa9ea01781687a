"""Base class for sensor sources."""

from abc import ABC, abstractmethod
from typing import Optional, Union
import logging

from greenfleet.shared.models import Period, Quantity, ReadingSeries, SensorReading

logger = logging.getLogger(__name__)


class SensorSource(ABC):
    """Read access to one physical quantity.

    Sources raise Unavailable when they cannot be reached. A reachable
    source without data returns an empty series from window() and raises
    Unavailable from current().
    """

    def __init__(self, quantity: Union[Quantity, str]):
        self.quantity = Quantity(quantity)

    def current(self) -> SensorReading:
        """Most recent reading."""
        return self.window(Period.ALL).latest()

    def window(self, period: Union[Period, str], day: Optional[str] = None) -> ReadingSeries:
        """Readings for ``period`` ("day" or "all"), oldest first.

        Args:
            period: History window to return.
            day: Day key for the "day" window; sources that do not index
                by day ignore it.
        """
        period = Period.parse(period)
        if period is Period.DAY:
            return self.read_day(day)
        return self.read_all()

    @abstractmethod
    def read_day(self, day: Optional[str] = None) -> ReadingSeries:
        """Readings for one day."""
        pass

    @abstractmethod
    def read_all(self) -> ReadingSeries:
        """Every recorded reading."""
        pass

    def check_health(self) -> bool:
        """Basic health check - can we reach our data?"""
        return True

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.quantity.value})"
