"""
Campaign window - which delivery dates a plan may start on.

Ramadan 2026 runs from RAMADAN_START to RAMADAN_END inclusive. The
30-day plan always covers the whole window; a 10-day plan may start on any
day that leaves ten days inside the window; a one-day order may be
delivered on any campaign day.
"""
from datetime import date, timedelta
from typing import Optional

from ..engine.models import OrderConfig, OrderType, SubDuration

RAMADAN_START = "2026-02-18"
RAMADAN_END = "2026-03-19"


def _parse(d: str) -> Optional[date]:
    """Parse a canonical YYYY-MM-DD date; any other spelling is None."""
    try:
        parsed = date.fromisoformat(d)
    except (TypeError, ValueError):
        return None
    if parsed.isoformat() != d:
        return None
    return parsed


def add_days(d: str, n: int) -> str:
    return (date.fromisoformat(d) + timedelta(days=n)).isoformat()


def is_campaign_date(d: str) -> bool:
    """True when ``d`` is a valid ISO date inside the campaign window."""
    parsed = _parse(d)
    if parsed is None:
        return False
    return _parse(RAMADAN_START) <= parsed <= _parse(RAMADAN_END)


def plan_days(order: OrderConfig) -> int:
    if order.order_type == OrderType.ONE_DAY:
        return 1
    return int(order.sub_duration)


def is_full_campaign(order: OrderConfig) -> bool:
    return order.order_type == OrderType.SUBSCRIPTION and order.sub_duration == SubDuration.THIRTY


def max_start_date(order: OrderConfig) -> str:
    """Last day the plan may start on."""
    if is_full_campaign(order):
        return RAMADAN_START
    return add_days(RAMADAN_END, -(plan_days(order) - 1))


def is_selectable_start(order: OrderConfig, d: str) -> bool:
    """
    Whether the wizard calendar lets the customer pick ``d`` as start date.

    The 30-day plan's start is fixed, so no date is selectable for it.
    """
    if not is_campaign_date(d) or is_full_campaign(order):
        return False
    return _parse(d) <= _parse(max_start_date(order))


def delivery_dates(order: OrderConfig) -> list[str]:
    """Every delivery day the order covers, in order. Empty without a start date."""
    if is_full_campaign(order):
        return [add_days(RAMADAN_START, i) for i in range(30)]
    if _parse(order.start_date) is None:
        return []
    return [add_days(order.start_date, i) for i in range(plan_days(order))]


def campaign_warnings(order: OrderConfig) -> list[str]:
    """Problems with the order's start date. Decoded orders are not range-checked, so checkout reports them here."""
    if not order.start_date:
        return ["No start date selected"]
    if not is_campaign_date(order.start_date):
        return [f"Start date {order.start_date} is outside the campaign window"]
    if is_full_campaign(order):
        if order.start_date != RAMADAN_START:
            return [f"30-day plan always starts on {RAMADAN_START}"]
        return []
    if _parse(order.start_date) > _parse(max_start_date(order)):
        return [f"{plan_days(order)}-day plan starting {order.start_date} runs past {RAMADAN_END}"]
    return []
