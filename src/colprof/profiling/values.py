"""Column value ingestion.

Spreadsheet columns arrive as an untyped mix of numbers, strings, booleans
and nulls. Every value is ingested once into a Cell so downstream rules
branch on ``cell.kind`` instead of probing Python types.

Two coercions are shared by every rule and statistic:

- ``Cell.text``: the canonical string form (``True -> "true"``,
  ``1.0 -> "1"``, ``1e-7 -> "1e-7"``).
- ``Cell.number``: the finite numeric reading of a value, or None.
  Strings are trimmed, an all-whitespace string reads as 0, ``0x``/``0o``/``0b``
  prefixes are honored, and ``Infinity``/``NaN``/``1,000`` are not numbers.
"""

from __future__ import annotations

import math
import numbers
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, time
from decimal import Decimal
from enum import Enum
from typing import Any

# Stripped before reading a number, including NBSP, line separators and the BOM
WHITESPACE = "\t\n\v\f\r " + "".join(
    chr(code_point)
    for code_point in (
        0xA0, 0x1680, *range(0x2000, 0x200B), 0x2028, 0x2029, 0x202F, 0x205F, 0x3000, 0xFEFF
    )
)

_DECIMAL_LITERAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_PREFIXED_INTEGER = re.compile(r"0([xXoObB])([0-9a-zA-Z]+)", re.ASCII)
_RADIX = {"x": 16, "o": 8, "b": 2}


class CellKind(str, Enum):
    """Variant tag of an ingested value."""

    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    NULL = "null"


@dataclass(frozen=True, slots=True)
class Cell:
    """One ingested column value.

    Attributes:
        kind: Variant tag
        value: Normalized payload (int/float, str, bool or None)
        text: Canonical string form
        number: Finite numeric reading, None when the value has none
        raw: The value exactly as supplied by the caller
    """

    kind: CellKind
    value: bool | int | float | str | None
    text: str
    number: float | None
    raw: Any = field(default=None, compare=False, hash=False, repr=False)

    @property
    def is_null(self) -> bool:
        return self.kind is CellKind.NULL

    @property
    def is_boolean(self) -> bool:
        return self.kind is CellKind.BOOLEAN

    @property
    def key(self) -> tuple[CellKind, Any]:
        """Distinct-value identity.

        Different kinds never collide (``1``, ``"1"`` and ``True`` are three
        values), ``1`` and ``1.0`` are one value, and every NaN is the same value.
        """
        if (
            self.kind is CellKind.NUMBER
            and isinstance(self.value, float)
            and math.isnan(self.value)
        ):
            return (self.kind, "NaN")
        return (self.kind, self.value)


def format_number(value: int | float) -> str:
    """Render a number in shortest round-trip decimal form.

    Integral values print without a fraction; exponent notation is used for
    magnitudes below 1e-6 or at/above 1e21.
    """
    if isinstance(value, int) and abs(value) < 10**21:
        return str(value)
    try:
        value = float(value)
    except OverflowError:
        return "Infinity" if value > 0 else "-Infinity"

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    decimal = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in decimal.digits)
    k = len(digits)
    n = int(decimal.exponent) + k  # Position of the decimal point

    if k <= n <= 21:
        body = digits + "0" * (n - k)
    elif 0 < n <= 21:
        body = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        body = "0." + "0" * -n + digits
    else:
        exponent = n - 1
        mantissa = digits[0] + (f".{digits[1:]}" if k > 1 else "")
        body = f"{mantissa}e{'+' if exponent >= 0 else '-'}{abs(exponent)}"
    return sign + body


def _finite(value: float) -> float | None:
    return value if math.isfinite(value) else None


def parse_number(text: str) -> float | None:
    """Read a string as a finite number, or None."""
    stripped = text.strip(WHITESPACE)
    if not stripped:
        return 0.0

    if _DECIMAL_LITERAL.fullmatch(stripped):
        return _finite(float(stripped))

    prefixed = _PREFIXED_INTEGER.fullmatch(stripped)
    if prefixed:
        try:
            return _finite(float(int(prefixed.group(2), _RADIX[prefixed.group(1).lower()])))
        except (ValueError, OverflowError):
            return None

    return None


def _number_of(value: int | float) -> float | None:
    try:
        return _finite(float(value))
    except OverflowError:
        return None


def _real_of(value: numbers.Real | Decimal) -> int | float:
    if isinstance(value, numbers.Integral):
        return int(value)
    # Signaling NaN refuses float conversion
    if isinstance(value, Decimal) and value.is_nan():
        return math.nan
    return float(value)


def to_cell(value: Any) -> Cell:
    """Ingest one raw value.

    None and the empty string are nulls. ``bool`` is checked before numbers
    because it subclasses ``int``. Dates and times become ISO strings.
    """
    if value is None or (isinstance(value, str) and value == ""):
        return Cell(kind=CellKind.NULL, value=None, text="", number=None, raw=value)

    if isinstance(value, bool):
        return Cell(
            kind=CellKind.BOOLEAN,
            value=value,
            text="true" if value else "false",
            number=1.0 if value else 0.0,
            raw=value,
        )

    if isinstance(value, (numbers.Real, Decimal)):
        number_value = _real_of(value)
        return Cell(
            kind=CellKind.NUMBER,
            value=number_value,
            text=format_number(number_value),
            number=_number_of(number_value),
            raw=value,
        )

    if isinstance(value, (date, time)):
        text = value.isoformat()
    else:
        text = str(value)

    return Cell(kind=CellKind.STRING, value=text, text=text, number=parse_number(text), raw=value)


def ingest(values: Iterable[Any]) -> list[Cell]:
    """Ingest a whole column, preserving order."""
    return [to_cell(value) for value in values]


def non_null(cells: Iterable[Cell]) -> list[Cell]:
    """Drop null cells."""
    return [cell for cell in cells if not cell.is_null]


def distinct_cells(cells: Iterable[Cell]) -> list[Cell]:
    """Distinct cells in first-seen order."""
    seen: dict[tuple[CellKind, Any], Cell] = {}
    for cell in cells:
        seen.setdefault(cell.key, cell)
    return list(seen.values())
