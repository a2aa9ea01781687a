"""Best-effort extraction of numbers from raw sensor text.

Sensor files and database rows hold free-form text. Each line is split on
whitespace and every token is parsed on its own; tokens that are not
numbers are dropped rather than failing the whole read.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Type, Union

logger = logging.getLogger(__name__)

Number = Union[int, float]


@dataclass(frozen=True)
class ParsedToken:
    """Outcome of parsing a single token."""
    token: str
    value: Optional[Number] = None

    @property
    def ok(self) -> bool:
        return self.value is not None


def _to_int(token: str) -> Optional[int]:
    try:
        return int(token)
    except ValueError:
        return None


def _to_float(token: str) -> Optional[float]:
    try:
        value = float(token)
    except ValueError:
        return None
    # nan/inf are valid float literals but never valid samples
    if not math.isfinite(value):
        return None
    return value


_CONVERTERS = {
    int: _to_int,
    float: _to_float,
}


def _converter(kind: Type) -> Callable[[str], Optional[Number]]:
    try:
        return _CONVERTERS[kind]
    except KeyError:
        raise ValueError(f"Unsupported numeric kind: {kind!r}") from None


def parse_tokens(lines: Iterable[str], kind: Type = float) -> List[ParsedToken]:
    """Parse every whitespace-separated token of ``lines``.

    Args:
        lines: Raw text lines.
        kind: ``int`` or ``float``.

    Returns:
        One ParsedToken per token, in line-then-token order.
    """
    convert = _converter(kind)
    return [
        ParsedToken(token=token, value=convert(token))
        for line in lines
        for token in line.split()
    ]


def parse_numbers(lines: Iterable[str], kind: Type = float) -> List[Number]:
    """Parse ``lines`` into numbers of type ``kind``, skipping bad tokens.

    An empty input, or one where nothing parses, gives an empty list.
    """
    tokens = parse_tokens(lines, kind)
    values = [t.value for t in tokens if t.ok]
    dropped = len(tokens) - len(values)
    if dropped:
        logger.debug(f"Dropped {dropped} unparsable token(s) out of {len(tokens)}")
    return values


def parse_ints(lines: Iterable[str]) -> List[int]:
    return parse_numbers(lines, int)


def parse_floats(lines: Iterable[str]) -> List[float]:
    return parse_numbers(lines, float)


def parse_kind(name: Union[str, Type]) -> Type:
    """Map a config value such as ``"int"`` to the numeric type."""
    if name in (int, float):
        return name
    kinds = {"int": int, "integer": int, "float": float, "double": float}
    try:
        return kinds[str(name).lower()]
    except KeyError:
        raise ValueError(f"Unknown numeric kind: {name!r}") from None
