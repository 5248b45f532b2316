from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import math


@dataclass(frozen=True)
class ValueLabel:
    """Numeric axis value paired with a pre-formatted unit string (e.g. "$")."""

    value: float
    unit: str = ""

    def fraction_digits(self) -> int:
        # Ranges are checked literally: values in (999, 1000] fall through to 3 digits.
        if self.value > 1000:
            return 0
        if 2 <= self.value <= 999:
            return 2
        return 3

    def formatted(self) -> str:
        return f"{format_value(self.value, self.fraction_digits())}{self.unit}"


def format_value(value: float, max_fraction_digits: int) -> str:
    """Round half-even to at most `max_fraction_digits`, group thousands, drop trailing zeros."""
    if not math.isfinite(value):
        return str(value)
    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-max_fraction_digits)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, ",f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out
