"""Engine subpackage - core pricing logic and resolution."""
from .pricing_engine import compute_prices
from .tier_resolver import resolve_tier, tier_from_order
from .formatter import fmt, fmt_money
from .models import (
    BoxSize,
    BoxTheme,
    BourekOption,
    CheckoutRequest,
    CustomerInfo,
    DeliveryMethod,
    HmissOption,
    OrderConfig,
    OrderType,
    PriceBreakdown,
    PriceTier,
    SubDuration,
)

__all__ = [
    'compute_prices', 'resolve_tier', 'tier_from_order', 'fmt', 'fmt_money',
    'BoxSize', 'BoxTheme', 'BourekOption', 'CheckoutRequest', 'CustomerInfo',
    'DeliveryMethod', 'HmissOption', 'OrderConfig', 'OrderType',
    'PriceBreakdown', 'PriceTier', 'SubDuration',
]
