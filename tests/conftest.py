from __future__ import annotations

import pytest

from greenfleet.sensors import StaticSensor
from greenfleet.shared.errors import Unavailable
from greenfleet.shared.models import Quantity, ReadingSeries


class FailingSensor(StaticSensor):
    """Sensor whose data source cannot be reached."""

    def read_day(self, day=None) -> ReadingSeries:
        raise Unavailable(f"{self.quantity.value} offline", self.quantity.value)

    def read_all(self) -> ReadingSeries:
        raise Unavailable(f"{self.quantity.value} offline", self.quantity.value)


@pytest.fixture()
def sensor():
    def _make(quantity: Quantity, *values, samples_per_day: int = 24) -> StaticSensor:
        return StaticSensor(quantity, values, samples_per_day=samples_per_day)

    return _make


@pytest.fixture()
def failing_sensor():
    def _make(quantity: Quantity) -> FailingSensor:
        return FailingSensor(quantity)

    return _make


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("GREENFLEET_ENV", "GREENFLEET_CONFIG", "GREENFLEET_CONFIG_DIR", "GREENFLEET_DAY"):
        monkeypatch.delenv(var, raising=False)
