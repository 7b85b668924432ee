"""Salary presentation: display formatting and compact range parsing.

Formatting mirrors en-US currency output with no fraction digits. Parsing is
only used by the ingestion path (CSV seeding) and understands strings such as
``"INR 12L – 18L / year"`` where ``k`` means thousands and ``l`` means lakh.
"""

import logging
import re
from typing import Literal

from pydantic import BaseModel

logger = logging.getLogger(__name__)

SalaryPeriod = Literal["monthly", "yearly"]

NOT_SPECIFIED = "Salary not specified"

_CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "INR": "₹",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CAD": "CA$",
    "AUD": "A$",
}

_PERIOD_UNITS: dict[str, str] = {"monthly": "month", "yearly": "year"}

_MULTIPLIERS: dict[str, int] = {"": 1, "k": 1_000, "l": 100_000}

_MAGNITUDE_RE = re.compile(r"^(\d+(?:\.\d+)?)([kKlL]?)$")

_RANGE_RE = re.compile(
    r"^(?P<currency>[A-Z]{3})\s+"
    r"(?P<min>[\d.]+[kKlL]?)\s*[–-]\s*(?P<max>[\d.]+[kKlL]?)"
    r"\s*/\s*(?P<period>month|year)$",
    re.IGNORECASE,
)


class SalaryRange(BaseModel):
    """Structured salary fields recovered from a compact range string."""

    currency: str
    min: float
    max: float
    period: SalaryPeriod
    range_string: str


def _grouped(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,}"


def format_amount(value: float, currency: str | None) -> str:
    """Render one amount with its currency symbol, rounded to whole units."""
    code = (currency or "USD").upper()
    number = f"{round(value):,}"
    symbol = _CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{code} {number}"
    return f"{symbol}{number}"


def format_salary(
    salary_min: float | None,
    salary_max: float | None,
    currency: str | None,
    period: str | None,
) -> str:
    """Format a salary range for display.

    Both bounds give ``"$1,000–$2,000 / month"``; a single bound gives
    ``"From ..."`` or ``"Up to ..."``; no bounds give ``NOT_SPECIFIED``.
    """
    if salary_min is None and salary_max is None:
        return NOT_SPECIFIED

    unit = _PERIOD_UNITS.get(period or "")
    suffix = f" / {unit}" if unit else ""

    if salary_min is not None and salary_max is not None:
        low = format_amount(salary_min, currency)
        high = format_amount(salary_max, currency)
        return f"{low}–{high}{suffix}"
    if salary_min is not None:
        return f"From {format_amount(salary_min, currency)}{suffix}"
    return f"Up to {format_amount(salary_max, currency)}{suffix}"  # type: ignore[arg-type]


def build_salary_range_string(
    salary_min: float | None,
    salary_max: float | None,
    currency: str | None,
    period: str | None,
) -> str | None:
    """Build the compact string stored in ``jobs.salary_range_string``.

    Returns None unless both bounds, a currency and a period are present.
    """
    if salary_min is None or salary_max is None or not currency or not period:
        return None
    unit = _PERIOD_UNITS.get(period)
    if unit is None:
        return None
    return f"{currency} {_grouped(salary_min)}–{_grouped(salary_max)} / {unit}"


def parse_magnitude(text: str | None) -> float | None:
    """Parse ``"12"``, ``"1.5k"`` or ``"18L"`` into a number; None if malformed."""
    if not text:
        return None
    match = _MAGNITUDE_RE.match(text.strip())
    if not match:
        return None
    value = float(match.group(1)) * _MULTIPLIERS[match.group(2).lower()]
    if value.is_integer():
        return int(value)
    return round(value, 2)


def parse_salary_range(text: str | None) -> SalaryRange | None:
    """Parse ``"CUR <min> – <max> / month|year"``; None if it does not match."""
    if not text:
        return None
    match = _RANGE_RE.match(text.strip())
    if not match:
        logger.debug("Unparseable salary range: %r", text)
        return None

    salary_min = parse_magnitude(match.group("min"))
    salary_max = parse_magnitude(match.group("max"))
    if salary_min is None or salary_max is None:
        return None

    period: SalaryPeriod = "monthly" if match.group("period").lower() == "month" else "yearly"
    return SalaryRange(
        currency=match.group("currency").upper(),
        min=salary_min,
        max=salary_max,
        period=period,
        range_string=text.strip(),
    )
