"""Codec subpackage - order <-> query string hand-off."""
from .order_codec import (
    checkout_to_search_params,
    order_to_search_params,
    search_params_to_checkout,
    search_params_to_customer,
    search_params_to_delivery,
    search_params_to_order,
)

__all__ = [
    'checkout_to_search_params', 'order_to_search_params',
    'search_params_to_checkout', 'search_params_to_customer',
    'search_params_to_delivery', 'search_params_to_order',
]
