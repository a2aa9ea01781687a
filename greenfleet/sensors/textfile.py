from pathlib import Path
from typing import List, Optional, Type, Union
import logging
import os

from greenfleet.shared.errors import Unavailable
from greenfleet.shared.models import Number, Quantity, ReadingSeries
from greenfleet.shared.parsing import parse_numbers
from .base import SensorSource

logger = logging.getLogger(__name__)


class TextFileSensor(SensorSource):
    """Readings stored as whitespace-separated numbers in text files.

    ``path`` is either a single file holding the whole history, or a
    directory with one ``<day>.txt`` file per day. Unparsable tokens are
    skipped.
    """

    SUFFIX = ".txt"

    def __init__(
        self,
        quantity: Union[Quantity, str],
        path: Union[str, Path],
        kind: Type = float,
        samples_per_day: int = 24,
    ):
        super().__init__(quantity)
        self.path = Path(path)
        self.kind = kind
        self.samples_per_day = samples_per_day

        if not self.path.exists():
            logger.error(f"Sensor file for {self.quantity.value} not found at {self.path}")
        logger.info(f"Initialized TextFileSensor for {self.quantity.value} at {self.path}")

    def _read_file(self, path: Path) -> List[Number]:
        try:
            with open(path, "r") as f:
                return parse_numbers(f, self.kind)
        except OSError as e:
            logger.error(f"Failed to read {self.quantity.value} from {path}: {e}")
            raise Unavailable(f"Cannot read {path}: {e}", self.quantity.value) from e

    def _day_files(self) -> List[Path]:
        try:
            return sorted(p for p in self.path.iterdir() if p.is_file() and p.suffix == self.SUFFIX)
        except OSError as e:
            logger.error(f"Failed to list {self.quantity.value} files in {self.path}: {e}")
            raise Unavailable(f"Cannot list {self.path}: {e}", self.quantity.value) from e

    def _day_file(self, day: str) -> Path:
        # day keys name a file inside the directory, never a path
        if day in ("", ".", "..") or any(sep in day for sep in ("/", "\\", os.sep)):
            raise ValueError(f"Invalid day key {day!r}")
        return self.path / f"{day}{self.SUFFIX}"

    def _series(self, values: List[Number]) -> ReadingSeries:
        return ReadingSeries(self.quantity, tuple(values))

    def read_day(self, day: Optional[str] = None) -> ReadingSeries:
        if not self.path.is_dir():
            return self.read_all().tail(self.samples_per_day)

        if day is None:
            files = self._day_files()
            if not files:
                return self._series([])
            return self._series(self._read_file(files[-1]))

        return self._series(self._read_file(self._day_file(day)))

    def read_all(self) -> ReadingSeries:
        if self.path.is_dir():
            values: List[Number] = []
            for day_file in self._day_files():
                values.extend(self._read_file(day_file))
            return self._series(values)
        return self._series(self._read_file(self.path))

    def check_health(self) -> bool:
        """Check the file or directory is there"""
        return self.path.exists()
