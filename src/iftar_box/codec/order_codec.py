"""
Order Codec - carries an order between the wizard and checkout as a query string.

Encoding is form-urlencoded in a fixed key order. Decoding treats the
query as untrusted user-editable state: every field is checked against its
closed domain and anything unrecognised falls back to the field default.
Decoding never raises.
"""
import math
import re
from collections.abc import Mapping
from typing import Optional, Union
from urllib.parse import parse_qs, urlencode

from ..engine.models import (
    MAX_SALAD_EXTRA,
    BoxSize,
    BoxTheme,
    BourekOption,
    CheckoutRequest,
    CustomerInfo,
    DeliveryMethod,
    HmissOption,
    OrderConfig,
    OrderType,
    SubDuration,
)

Params = Union[str, bytes, Mapping, None]

# Literals a browser's Number() accepts: decimal with optional sign and exponent,
# or an unsigned 0x/0o/0b integer. No underscores.
_NUMBER_RE = re.compile(r'[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')
_RADIX_RE = re.compile(r'0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+')
_INFINITY = {'Infinity': math.inf, '+Infinity': math.inf, '-Infinity': -math.inf}

# Wire key -> CustomerInfo attribute
CUSTOMER_KEYS = {
    'firstName': 'first_name',
    'lastName': 'last_name',
    'phone': 'phone',
    'email': 'email',
    'address': 'address',
    'city': 'city',
    'postalCode': 'postal_code',
    'notes': 'notes',
}
REQUIRED_CUSTOMER_KEYS = ('firstName', 'lastName', 'phone', 'email')
OPTIONAL_CUSTOMER_KEYS = ('address', 'city', 'postalCode', 'notes')


def _normalize_params(params: Params) -> dict[str, str]:
    """Flatten any supported params shape into {key: first value}."""
    if params is None:
        return {}
    if isinstance(params, bytes):
        params = params.decode('utf-8', errors='replace')
    if isinstance(params, str):
        parsed = parse_qs(params.lstrip('?'), keep_blank_values=True)
        return {k: v[0] for k, v in parsed.items() if v}

    flat = {}
    try:
        items = list(params.items())
    except (AttributeError, TypeError):
        return {}
    for key, value in items:
        if isinstance(value, (list, tuple)):
            if not value:
                continue
            value = value[0]
        if value is None:
            continue
        flat[str(key)] = value if isinstance(value, str) else str(value)
    return flat


def _to_number(raw: Optional[str]) -> float:
    """
    Parse a raw query value the way the browser's Number() would.

    Missing or blank is 0; anything non-numeric is NaN.
    """
    if raw is None:
        return 0.0
    text = raw.strip()
    if not text:
        return 0.0
    if text in _INFINITY:
        return _INFINITY[text]
    if _NUMBER_RE.fullmatch(text):
        return float(text)
    if _RADIX_RE.fullmatch(text):
        try:
            return float(int(text, 0))
        except OverflowError:
            return math.inf
    return math.nan


def _decode_bourek(raw: Optional[str]) -> BourekOption:
    value = _to_number(raw)
    for option in BourekOption:
        if value == option:
            return option
    return BourekOption.NONE


def _decode_salad(raw: Optional[str]) -> int:
    value = _to_number(raw)
    if math.isnan(value):
        value = 0.0
    value = max(0.0, min(float(MAX_SALAD_EXTRA), value))
    return int(value)


def _decode_choice(enum_cls, raw: Optional[str], default):
    for member in enum_cls:
        if raw == member.value:
            return member
    return default


def order_to_search_params(order: OrderConfig) -> str:
    """
    Serialize an order to a query string.

    ``duration`` is always emitted, even for one-day orders; ``start`` only
    when a start date is set.
    """
    pairs = [
        ('box', BoxSize(order.box_size).value),
        ('theme', BoxTheme(order.box_theme).value),
        ('type', OrderType(order.order_type).value),
        ('duration', str(int(order.sub_duration))),
        ('boureks', str(int(order.bourek_option))),
        ('hmiss', HmissOption(order.hmiss_option).value),
        ('salad', str(order.salad_extra)),
    ]
    if order.start_date:
        pairs.append(('start', order.start_date))
    return urlencode(pairs)


def search_params_to_order(params: Params) -> OrderConfig:
    """
    Rebuild an order from query params, defaulting every invalid field.

    Args:
        params: Query string (leading '?' allowed), mapping of key to value
            or list of values, or None

    Returns:
        A conforming OrderConfig
    """
    p = _normalize_params(params)

    return OrderConfig(
        box_size=BoxSize.FAMILY if p.get('box') == 'family' else BoxSize.SINGLE,
        box_theme=_decode_choice(BoxTheme, p.get('theme'), BoxTheme.TRADITIONAL),
        order_type=OrderType.ONE_DAY if p.get('type') == 'one-day' else OrderType.SUBSCRIPTION,
        sub_duration=SubDuration.TEN if p.get('duration') == '10' else SubDuration.THIRTY,
        bourek_option=_decode_bourek(p.get('boureks')),
        hmiss_option=_decode_choice(HmissOption, p.get('hmiss'), HmissOption.NONE),
        salad_extra=_decode_salad(p.get('salad')),
        start_date=p.get('start', ''),
    )


def checkout_to_search_params(
    order: OrderConfig,
    customer: CustomerInfo,
    delivery_method=DeliveryMethod.PICKUP
) -> str:
    """
    Build the checkout hand-off query: order params, required contact
    fields, delivery method, then optional contact fields when filled in.
    """
    pairs = [(key, getattr(customer, CUSTOMER_KEYS[key]) or '') for key in REQUIRED_CUSTOMER_KEYS]
    pairs.append(('delivery', DeliveryMethod(delivery_method).value))
    for key in OPTIONAL_CUSTOMER_KEYS:
        value = getattr(customer, CUSTOMER_KEYS[key])
        if value:
            pairs.append((key, value))
    return f"{order_to_search_params(order)}&{urlencode(pairs)}"


def search_params_to_customer(params: Params) -> CustomerInfo:
    """Rebuild the contact record; missing fields are empty strings."""
    p = _normalize_params(params)
    return CustomerInfo(**{attr: p.get(key, '') for key, attr in CUSTOMER_KEYS.items()})


def search_params_to_delivery(params: Params) -> DeliveryMethod:
    p = _normalize_params(params)
    return DeliveryMethod.DELIVERY if p.get('delivery') == 'delivery' else DeliveryMethod.PICKUP


def search_params_to_checkout(params: Params) -> CheckoutRequest:
    """Decode everything the checkout page needs from one query."""
    p = _normalize_params(params)
    return CheckoutRequest(
        order=search_params_to_order(p),
        customer=search_params_to_customer(p),
        delivery_method=search_params_to_delivery(p),
    )
