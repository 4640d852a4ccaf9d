"""
Tier Resolver - the single place that maps an order's plan to a price tier.
"""
from .models import OrderConfig, OrderType, PriceTier, SubDuration


def resolve_tier(order_type, sub_duration) -> PriceTier:
    """
    Resolve the price tier for a plan.

    One-day orders always price at the one-day tier, whatever duration is
    still stored on the order. Subscriptions price at sub-10 for 10 days
    and sub-30 for 30; raw durations are coerced, anything else raises
    ValueError.
    """
    if OrderType(order_type) == OrderType.ONE_DAY:
        return PriceTier.ONE_DAY
    if SubDuration(int(sub_duration)) == SubDuration.TEN:
        return PriceTier.SUB_10
    return PriceTier.SUB_30


def tier_from_order(order: OrderConfig) -> PriceTier:
    return resolve_tier(order.order_type, order.sub_duration)
