from __future__ import annotations

import pytest

from greenfleet.controllers import SolarPanelController
from greenfleet.shared.errors import InvalidConfig, Unavailable
from greenfleet.shared.models import Command, Heading, Quantity

DAY_LIGHT = [
    0.01, 0.001, 0.001, 0.2, 0.2, 15, 100, 400,
    1800, 5700, 16000, 17555, 19002, 20006, 25043, 23752,
    21655, 20896, 17033, 13893, 6839, 1002, 250, 0.2,
]


@pytest.fixture()
def panel(sensor):
    def _make(brightness=51000, temperature=20, direction=110, power=250, light=None, with_direction=True):
        light_values = light if light is not None else [brightness]
        return SolarPanelController(
            brightness_sensor=sensor(Quantity.BRIGHTNESS, *light_values),
            direction_sensor=sensor(Quantity.LIGHT_DIRECTION, direction) if with_direction else None,
            temperature_sensor=sensor(Quantity.TEMPERATURE, temperature),
            power=power,
        )

    return _make


def test_tracks_the_sun_in_operating_range(panel) -> None:
    assert panel().command() == Heading(110)


def test_brightness_boundary(panel) -> None:
    assert panel(brightness=499).command() is Command.OFF
    assert panel(brightness=500).command() == Heading(110)


@pytest.mark.parametrize(
    ("temperature", "expected_off"),
    [(-40.5, True), (-40, False), (65, False), (65.1, True)],
)
def test_temperature_bounds(panel, temperature, expected_off) -> None:
    result = panel(temperature=temperature).command()
    assert (result is Command.OFF) is expected_off


def test_temperature_checked_before_brightness(panel) -> None:
    assert panel(temperature=80, brightness=100000).command() is Command.OFF


def test_without_direction_sensor_switches_on(panel) -> None:
    assert panel(with_direction=False).command() is Command.ON


def test_day_production_counts_bright_samples(panel) -> None:
    controller = panel(light=DAY_LIGHT, power=250)
    # 19002 20006 25043 23752 21655 20896
    assert controller.day_production() == 6 * 250.0
    assert isinstance(controller.day_production(), float)


def test_threshold_is_strict(panel) -> None:
    assert panel(light=[18000, 18000.5], power=2).total_production() == 2.0


def test_total_production_is_repeatable(panel) -> None:
    controller = panel(light=DAY_LIGHT + DAY_LIGHT, power=10)
    assert controller.total_production() == 120.0
    assert controller.total_production() == controller.total_production()


def test_empty_history_gives_zero_production(panel) -> None:
    assert panel(light=[]).day_production() == 0.0


def test_unavailable_temperature_propagates(sensor, failing_sensor) -> None:
    controller = SolarPanelController(
        brightness_sensor=sensor(Quantity.BRIGHTNESS, 51000),
        direction_sensor=None,
        temperature_sensor=failing_sensor(Quantity.TEMPERATURE),
        power=250,
    )
    with pytest.raises(Unavailable):
        controller.command()


def test_negative_power_is_rejected(panel) -> None:
    with pytest.raises(InvalidConfig):
        panel(power=-1)
