# leansim/services/formatting.py
# -----------------------------------------------------------------------------
# Human-readable figures for recommendation messages
# -----------------------------------------------------------------------------
from __future__ import annotations

from leansim.schemas.simulation import Figure, is_reachable

CURRENCY = "€"
DAYS_PER_MONTH = 30


def format_number(value: float) -> str:
    """1234.5 -> '1,234.50', 1234.0 -> '1,234'."""
    text = f"{abs(value):,.2f}"
    if text.endswith(".00"):
        text = text[:-3]
    return f"-{text}" if value < 0 and text != "0" else text


def format_money(value: float) -> str:
    text = format_number(value)
    if text.startswith("-"):
        return f"-{CURRENCY}{text[1:]}"
    return f"{CURRENCY}{text}"


def format_ratio(ltv: float, cac: float) -> str:
    """LTV:CAC left-hand side, whole numbers from 1 upwards."""
    if cac == 0:
        return "∞"
    if ltv <= 0:
        return "0"
    ratio = ltv / cac
    return str(round(ratio)) if ratio >= 1 else f"{ratio:.1f}"


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"


def format_duration(months: Figure) -> str:
    """Months as days, weeks or months, whichever reads best."""
    if not is_reachable(months) or months <= 0:
        return "∞"

    if abs(months - round(months)) < 0.01:
        return _plural(round(months), "month")

    if months < 1:
        days = max(1, round(months * DAYS_PER_MONTH))
        if days <= 7:
            return _plural(days, "day")
        return _plural(max(1, round(days / 7)), "week")

    if abs(months - round(months)) < 0.1:
        return _plural(round(months), "month")
    return f"{months:.1f} months"
