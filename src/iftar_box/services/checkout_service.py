"""
Checkout Service - rebuilds the order summary from the hand-off query.

Checkout never trusts a price from the wizard: it decodes the canonical
inputs and recomputes the breakdown with the same calculator.
"""
from dataclasses import dataclass, field
from typing import Optional

from ..codec.order_codec import Params, order_to_search_params, search_params_to_checkout
from ..config.settings import Settings, get_settings
from ..engine.models import CustomerInfo, DeliveryMethod, OrderConfig, PriceBreakdown
from ..engine.pricing_engine import compute_prices
from ..engine.pricing_tables import INCLUDED
from ..policy.campaign import campaign_warnings, delivery_dates
from ..policy.customer_validation import validate_customer
from .wizard_service import BOX_LABELS, THEME_LABELS, plan_label


@dataclass
class CheckoutSummary:
    """Everything the checkout page shows for one order."""
    order: OrderConfig
    customer: CustomerInfo
    delivery_method: DeliveryMethod
    prices: PriceBreakdown
    plan_label: str
    box_label: str
    theme_label: str
    included: list[str]
    delivery_dates: list[str]
    edit_url: str
    currency: str
    errors: dict[str, str] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)

    @property
    def ready(self) -> bool:
        """Contact details are complete enough to take payment."""
        return not self.errors

    @property
    def pay_label(self) -> str:
        if self.order.is_subscription:
            return "Pay & Confirm My Subscription"
        return "Pay & Confirm My Order"


def build_checkout_summary(params: Params, settings: Optional[Settings] = None) -> CheckoutSummary:
    """
    Decode a checkout query and price it.

    Args:
        params: The hand-off query string or mapping
        settings: Optional settings override

    Returns:
        CheckoutSummary; bad input degrades to defaults, never raises
    """
    settings = settings or get_settings()
    request = search_params_to_checkout(params)
    order = request.order

    prices = compute_prices(order, request.delivery_method)

    return CheckoutSummary(
        order=order,
        customer=request.customer,
        delivery_method=request.delivery_method,
        prices=prices,
        plan_label=plan_label(order),
        box_label=BOX_LABELS[order.box_size],
        theme_label=THEME_LABELS[order.box_theme],
        included=list(INCLUDED[order.box_size]),
        delivery_dates=delivery_dates(order),
        edit_url=settings.product_url(order_to_search_params(order)),
        currency=settings.currency,
        errors=validate_customer(request.customer, request.delivery_method),
        warnings=campaign_warnings(order),
    )
