"""
Price Calculator - turns an order configuration into a price breakdown.

Resolution order:
1. Resolve the price tier from order type + duration
2. Look up the box price at that tier
3. Sum the daily add-ons (boureks, hmiss, extra salads) at the same tier
4. Multiply the daily total by the number of days
5. Add the one-day delivery fee when it applies
6. Compare against the one-day tier to report subscription savings

Every step is recorded on the breakdown's trace.
"""
from dataclasses import replace
from decimal import Decimal

from .formatter import fmt
from .models import (
    BourekOption,
    DeliveryMethod,
    HmissOption,
    LineItem,
    OrderConfig,
    OrderType,
    PriceBreakdown,
    PriceTier,
)
from .pricing_tables import (
    BOUREK_PRICING,
    BOX_PRICING,
    DELIVERY_FEE_ONEDAY,
    HMISS_PRICING,
    SALAD_PRICING,
)
from .tier_resolver import tier_from_order

ZERO = Decimal("0")


def _addon_lines(order: OrderConfig, tier: PriceTier) -> list[LineItem]:
    """Priced add-on lines for one day at the given tier. Unselected add-ons are skipped."""
    lines = []
    if order.bourek_option != BourekOption.NONE:
        qty = int(order.bourek_option)
        price = BOUREK_PRICING[order.bourek_option][tier]
        label = "1 pc" if qty == 1 else f"{qty} pcs"
        lines.append(LineItem(
            code="bourek",
            description=f"Boureks ({label})",
            quantity=qty,
            unit_price=price,
            daily_price=price,
        ))
    if order.hmiss_option != HmissOption.NONE:
        price = HMISS_PRICING[order.hmiss_option][tier]
        lines.append(LineItem(
            code="hmiss",
            description=f"Hmiss ({order.hmiss_option.value})",
            quantity=1,
            unit_price=price,
            daily_price=price,
        ))
    if order.salad_extra > 0:
        unit = SALAD_PRICING[tier]
        lines.append(LineItem(
            code="salad",
            description=f"Extra salad ×{order.salad_extra}",
            quantity=order.salad_extra,
            unit_price=unit,
            daily_price=unit * order.salad_extra,
        ))
    return lines


def daily_price_at(order: OrderConfig, tier: PriceTier) -> Decimal:
    """Box plus add-ons for one day, priced entirely at ``tier``."""
    box = BOX_PRICING[order.box_size][tier]
    return box + sum((line.daily_price for line in _addon_lines(order, tier)), ZERO)


def compute_prices(order: OrderConfig, delivery_method=DeliveryMethod.PICKUP) -> PriceBreakdown:
    """
    Compute the full price breakdown for an order.

    Args:
        order: A conforming order (enums closed, salad_extra in [0, 4])
        delivery_method: pickup (default) or delivery

    Returns:
        PriceBreakdown with amounts, itemised lines and trace
    """
    order = replace(order)  # re-coerce fields assigned as raw values after construction
    delivery_method = DeliveryMethod(delivery_method)
    tier = tier_from_order(order)

    box_price = BOX_PRICING[order.box_size][tier]
    addons = _addon_lines(order, tier)
    addons_daily = sum((line.daily_price for line in addons), ZERO)
    daily_total = box_price + addons_daily

    days = 1 if order.order_type == OrderType.ONE_DAY else int(order.sub_duration)
    meal_total = daily_total * days

    delivery_fee = ZERO
    if delivery_method == DeliveryMethod.DELIVERY and order.order_type == OrderType.ONE_DAY:
        delivery_fee = DELIVERY_FEE_ONEDAY

    grand_total = meal_total + delivery_fee

    savings = ZERO
    if order.order_type == OrderType.SUBSCRIPTION:
        savings = daily_price_at(order, PriceTier.ONE_DAY) * days - meal_total

    box_line = LineItem(
        code="box",
        description=f"{order.box_size.value.title()} Iftar Box",
        quantity=1,
        unit_price=box_price,
        daily_price=box_price,
    )

    result = PriceBreakdown(
        box_price=box_price,
        addons_daily=addons_daily,
        daily_total=daily_total,
        days=days,
        meal_total=meal_total,
        delivery_fee=delivery_fee,
        grand_total=grand_total,
        savings=savings,
        tier=tier,
        lines=[box_line] + addons,
    )

    result.add_trace("Tier", f"{order.order_type.value} / {int(order.sub_duration)} days", tier.value)
    result.add_trace("Box", f"{order.box_size.value} @ {tier.value}", f"${fmt(box_price)}")
    for line in addons:
        result.add_trace("Add-on", line.description, f"${fmt(line.daily_price)}")
    result.add_trace("Daily Total", "Box + add-ons", f"${fmt(daily_total)}")
    result.add_trace("Extension", f"{days} day(s) × ${fmt(daily_total)}", f"${fmt(meal_total)}")
    if delivery_fee:
        result.add_trace("Delivery", "One-day home delivery fee", f"${fmt(delivery_fee)}")
    elif delivery_method == DeliveryMethod.DELIVERY:
        result.add_trace("Delivery", "Free delivery with subscription")
    else:
        result.add_trace("Delivery", "Pickup (free)")
    result.add_trace("Grand Total", "Meals + delivery", f"${fmt(grand_total)}")
    if savings:
        result.add_trace("Savings", "Versus one-day pricing", f"${fmt(savings)}")

    return result
