from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

DEFAULT_USD_TO_CAD_RATE = 1.37
CAD_SUFFIX = "$CAD"

_LEADING_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)")
_CENT = Decimal("0.01")


def _leading_number(text: str) -> Optional[float]:
    m = _LEADING_NUMBER_RE.match(text)
    if not m:
        return None
    return float(m.group(0))


def _format_amount(value: float) -> str:
    rounded = Decimal(repr(value)).quantize(_CENT, rounding=ROUND_HALF_UP)
    return f"{rounded:,.2f}"


def convert_price_to_cad(usd_price: Optional[str], rate: Optional[float]) -> str:
    """Convert a model-formatted USD price (or "low - high" range) to CAD.

    "$69,123.45" at 1.37 -> "94,699.13 $CAD". Returns "" for a missing rate,
    empty or "N/A" input, or when any part of the range is not a number.
    """

    if not rate or not usd_price or usd_price.strip().lower() == "n/a":
        return ""

    cleaned = usd_price.replace("$", "").replace(",", "").strip()
    parts = [p.strip() for p in cleaned.split("-")]

    converted = []
    for part in parts:
        num = _leading_number(part)
        if num is None:
            return ""
        converted.append(_format_amount(num * rate))

    return f"{' - '.join(converted)} {CAD_SUFFIX}"
