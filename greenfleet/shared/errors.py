"""Exception types shared by sensors, controllers and the coordinator."""

from typing import Optional


class GreenfleetError(Exception):
    """Base class for greenfleet errors."""

    pass


class Unavailable(GreenfleetError):
    """Raised when a reading or series could not be obtained.

    Never converted into a default reading: callers either handle it or
    let it propagate.
    """

    def __init__(self, message: str, quantity: Optional[str] = None):
        super().__init__(message)
        self.quantity = quantity


class InvalidConfig(GreenfleetError, ValueError):
    """Raised when a controller or fleet description is misconfigured."""

    pass


class EmptyPowerCurve(InvalidConfig):
    """Raised when a turbine is given a power curve without entries."""

    pass
