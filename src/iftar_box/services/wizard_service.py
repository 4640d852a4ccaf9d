"""
Wizard Service - state transitions for the four-step order wizard.

Every helper returns a new OrderConfig; the caller keeps whichever it
wants as the current state.
"""
from dataclasses import replace

from ..engine.models import (
    MAX_SALAD_EXTRA,
    BoxSize,
    BoxTheme,
    CustomerInfo,
    OrderConfig,
    OrderType,
    SubDuration,
)
from ..policy.campaign import RAMADAN_START, is_selectable_start

STEPS = ("Configure Box", "Add-Ons", "Your Info", "Review")

THEME_LABELS = {
    BoxTheme.TRADITIONAL: "Traditional Tlemcen",
    BoxTheme.MIXED: "Mixed Algerian",
    BoxTheme.LIGHT: "Light Ramadan",
}

BOX_LABELS = {
    BoxSize.SINGLE: "Single (1–2 persons)",
    BoxSize.FAMILY: "Family (4–6 persons)",
}

# (label, order type, duration) as offered on the plan toggle
PLAN_OPTIONS = (
    ("One-Day", OrderType.ONE_DAY, SubDuration.TEN),
    ("10-Day", OrderType.SUBSCRIPTION, SubDuration.TEN),
    ("30-Day", OrderType.SUBSCRIPTION, SubDuration.THIRTY),
)


def default_order() -> OrderConfig:
    """Single traditional box, full 30-day subscription from the first night, no add-ons."""
    return OrderConfig(start_date=RAMADAN_START)


def default_customer() -> CustomerInfo:
    return CustomerInfo()


def next_step(step: int) -> int:
    return min(step + 1, len(STEPS) - 1)


def previous_step(step: int) -> int:
    return max(step - 1, 0)


def select_plan(order: OrderConfig, order_type, sub_duration) -> OrderConfig:
    """
    Switch plan. The 30-day plan always starts on the first campaign night,
    any other plan clears the start date so the customer picks one.

    The duration is stored as given even for one-day orders.
    """
    order_type = OrderType(order_type)
    sub_duration = SubDuration(sub_duration)
    full = order_type == OrderType.SUBSCRIPTION and sub_duration == SubDuration.THIRTY
    return replace(
        order,
        order_type=order_type,
        sub_duration=sub_duration,
        start_date=RAMADAN_START if full else "",
    )


def set_start_date(order: OrderConfig, d: str) -> OrderConfig:
    """Apply ``d`` when the calendar allows it for this plan, otherwise keep the order as is."""
    if is_selectable_start(order, d):
        return replace(order, start_date=d)
    return order


def set_salad_extra(order: OrderConfig, count: int) -> OrderConfig:
    return replace(order, salad_extra=max(0, min(MAX_SALAD_EXTRA, int(count))))


def plan_label(order: OrderConfig) -> str:
    if order.order_type == OrderType.SUBSCRIPTION:
        return f"Ramadan Subscription – {int(order.sub_duration)} Days"
    return "Iftar Box – One Day"


def active_plan_index(order: OrderConfig) -> int:
    """Position of the order's plan on the plan toggle."""
    if order.order_type == OrderType.ONE_DAY:
        return 0
    return 1 if order.sub_duration == SubDuration.TEN else 2
