"""Core data models for sensor readings and unit decisions."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, Mapping, Tuple, Union

from .errors import EmptyPowerCurve, InvalidConfig, Unavailable

Number = Union[int, float]


def whole_number(value) -> int:
    """Convert a config value to int, rejecting fractions and non-numbers."""
    if isinstance(value, bool):
        raise InvalidConfig(f"Expected a whole number, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise InvalidConfig(f"Expected a whole number, got {value!r}") from None
    if isinstance(value, float) and number != value:
        raise InvalidConfig(f"Expected a whole number, got {value!r}")
    return number


class Quantity(str, Enum):
    """Physical quantity a sensor measures."""

    WIND_SPEED = "wind_speed"
    WIND_DIRECTION = "wind_direction"
    TEMPERATURE = "temperature"
    BRIGHTNESS = "brightness"
    LIGHT_DIRECTION = "light_direction"
    RESERVES = "reserves"
    FLOW = "flow"


class Period(str, Enum):
    """History window a sensor can be asked for."""

    DAY = "day"
    ALL = "all"

    @classmethod
    def parse(cls, value: Union[str, "Period"]) -> "Period":
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown period {value!r}, expected 'day' or 'all'") from None


class Command(str, Enum):
    """Operating state requested from a unit."""

    ON = "On"
    OFF = "Off"
    OPEN_DAM = "Open dam"
    CLOSE_DAM = "Close dam"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Heading:
    """Direction a solar panel is told to face, in degrees."""
    degrees: Number

    def __str__(self) -> str:
        return str(self.degrees)


@dataclass(frozen=True)
class SensorReading:
    """A single scalar sample tagged with what it measures."""
    quantity: Quantity
    value: Number


@dataclass(frozen=True)
class ReadingSeries:
    """Chronological samples for one quantity, oldest first."""
    quantity: Quantity
    values: Tuple[Number, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(self.values))

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[Number]:
        return iter(self.values)

    def latest(self) -> SensorReading:
        """Most recent sample.

        Raises:
            Unavailable: If the series holds no samples.
        """
        if not self.values:
            raise Unavailable(f"No {self.quantity.value} readings available", self.quantity.value)
        return SensorReading(quantity=self.quantity, value=self.values[-1])

    def tail(self, count: int) -> "ReadingSeries":
        """The last ``count`` samples."""
        if count <= 0:
            return ReadingSeries(self.quantity)
        return ReadingSeries(self.quantity, self.values[-count:])


@dataclass(frozen=True)
class PowerCurve:
    """Rated turbine output per integer wind speed.

    The smallest and largest speeds define the turbine's operating
    envelope.
    """
    points: Mapping[int, int] = field(default_factory=dict)

    def __post_init__(self):
        if not self.points:
            raise EmptyPowerCurve("Power curve must have at least one entry")
        normalized: Dict[int, int] = {}
        for speed, power in dict(self.points).items():
            try:
                key = whole_number(speed)
                value = whole_number(power)
            except InvalidConfig:
                raise InvalidConfig(f"Invalid power curve entry {speed!r}: {power!r}") from None
            if key in normalized:
                raise InvalidConfig(f"Duplicate power curve speed {speed!r}")
            normalized[key] = value
        object.__setattr__(self, "points", normalized)

    @property
    def min_speed(self) -> int:
        return min(self.points)

    @property
    def max_speed(self) -> int:
        return max(self.points)

    def covers(self, speed: Number) -> bool:
        return self.min_speed <= speed <= self.max_speed

    def output(self, speed: Number) -> int:
        """Rated output at exactly ``speed``; unmapped speeds give 0."""
        return self.points.get(speed, 0)
