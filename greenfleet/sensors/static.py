from typing import Iterable, Optional, Union
import logging

from greenfleet.shared.models import Number, Quantity, ReadingSeries
from .base import SensorSource

logger = logging.getLogger(__name__)


class StaticSensor(SensorSource):
    """In-memory history, used for fixed readings and tests."""

    def __init__(
        self,
        quantity: Union[Quantity, str],
        values: Iterable[Number] = (),
        samples_per_day: int = 24,
    ):
        super().__init__(quantity)
        self.series = ReadingSeries(self.quantity, tuple(values))
        self.samples_per_day = samples_per_day
        logger.debug(f"Initialized StaticSensor for {self.quantity.value} with {len(self.series)} samples")

    def read_day(self, day: Optional[str] = None) -> ReadingSeries:
        return self.series.tail(self.samples_per_day)

    def read_all(self) -> ReadingSeries:
        return self.series
