import pytest
import sys
import os
from itertools import product
from urllib.parse import parse_qsl

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from iftar_box.engine import (
    BoxSize,
    BoxTheme,
    BourekOption,
    CustomerInfo,
    DeliveryMethod,
    HmissOption,
    OrderConfig,
    OrderType,
    SubDuration,
    compute_prices,
)
from iftar_box.codec import (
    checkout_to_search_params,
    order_to_search_params,
    search_params_to_checkout,
    search_params_to_customer,
    search_params_to_delivery,
    search_params_to_order,
)


def assert_in_domain(order: OrderConfig):
    assert order.box_size in BoxSize
    assert order.box_theme in BoxTheme
    assert order.order_type in OrderType
    assert order.sub_duration in SubDuration
    assert order.bourek_option in BourekOption
    assert order.hmiss_option in HmissOption
    assert isinstance(order.salad_extra, int)
    assert 0 <= order.salad_extra <= 4
    assert isinstance(order.start_date, str)


# --- Encode -----------------------------------------------------------------

def test_encode_key_order_and_values():
    order = OrderConfig(
        box_size="family",
        box_theme="light",
        order_type="subscription",
        sub_duration=10,
        bourek_option=6,
        hmiss_option="small",
        salad_extra=2,
        start_date="2026-02-20",
    )
    assert order_to_search_params(order) == (
        "box=family&theme=light&type=subscription&duration=10"
        "&boureks=6&hmiss=small&salad=2&start=2026-02-20"
    )


def test_encode_omits_empty_start():
    query = order_to_search_params(OrderConfig())
    assert "start" not in dict(parse_qsl(query))


def test_encode_always_emits_duration_for_one_day():
    query = order_to_search_params(OrderConfig(order_type="one-day", sub_duration=10))
    assert dict(parse_qsl(query))["duration"] == "10"


# --- Decode defaults --------------------------------------------------------

def test_decode_empty_gives_defaults():
    order = search_params_to_order("")
    assert order == OrderConfig(
        box_size="single",
        box_theme="traditional",
        order_type="subscription",
        sub_duration=30,
        bourek_option=0,
        hmiss_option="none",
        salad_extra=0,
        start_date="",
    )


@pytest.mark.parametrize("params", [None, {}, "?", b"", 42, ["box", "family"]])
def test_decode_odd_inputs_give_defaults(params):
    order = search_params_to_order(params)
    assert order == OrderConfig(start_date="")


@pytest.mark.parametrize("query,field,expected", [
    ("box=family", "box_size", BoxSize.FAMILY),
    ("box=FAMILY", "box_size", BoxSize.SINGLE),
    ("box=", "box_size", BoxSize.SINGLE),
    ("theme=mixed", "box_theme", BoxTheme.MIXED),
    ("theme=spicy", "box_theme", BoxTheme.TRADITIONAL),
    ("type=one-day", "order_type", OrderType.ONE_DAY),
    ("type=weekly", "order_type", OrderType.SUBSCRIPTION),
    ("duration=10", "sub_duration", SubDuration.TEN),
    ("duration=30", "sub_duration", SubDuration.THIRTY),
    ("duration=10.0", "sub_duration", SubDuration.THIRTY),
    ("duration=abc", "sub_duration", SubDuration.THIRTY),
    ("boureks=6", "bourek_option", BourekOption.SIX),
    ("boureks=12", "bourek_option", BourekOption.TWELVE),
    ("boureks=7", "bourek_option", BourekOption.NONE),
    ("boureks=-1", "bourek_option", BourekOption.NONE),
    ("boureks=six", "bourek_option", BourekOption.NONE),
    ("boureks=%206%20", "bourek_option", BourekOption.SIX),
    ("boureks=6.0", "bourek_option", BourekOption.SIX),
    ("hmiss=large", "hmiss_option", HmissOption.LARGE),
    ("hmiss=medium", "hmiss_option", HmissOption.NONE),
    ("salad=3", "salad_extra", 3),
    ("salad=9", "salad_extra", 4),
    ("salad=-2", "salad_extra", 0),
    ("salad=lots", "salad_extra", 0),
    ("salad=2.7", "salad_extra", 2),
    ("salad=Infinity", "salad_extra", 4),
    ("salad=1_0", "salad_extra", 0),
    ("boureks=0xC", "bourek_option", BourekOption.TWELVE),
    ("boureks=0x6", "bourek_option", BourekOption.SIX),
    ("boureks=0b110", "bourek_option", BourekOption.SIX),
    ("boureks=0o14", "bourek_option", BourekOption.TWELVE),
    ("boureks=-0x6", "bourek_option", BourekOption.NONE),
    ("boureks=0xG", "bourek_option", BourekOption.NONE),
    ("salad=0x3", "salad_extra", 3),
    ("salad=0x" + "f" * 300, "salad_extra", 4),
    ("start=2026-03-01", "start_date", "2026-03-01"),
    ("start=2031-01-01", "start_date", "2031-01-01"),
    ("start=", "start_date", ""),
])
def test_decode_field(query, field, expected):
    assert getattr(search_params_to_order(query), field) == expected


def test_decode_absent_start_is_empty():
    assert search_params_to_order("box=family").start_date == ""


def test_decode_invalid_boureks_prices_as_none():
    order = search_params_to_order("type=one-day&boureks=7")
    assert order.bourek_option == BourekOption.NONE
    assert compute_prices(order).addons_daily == 0


def test_decode_accepts_leading_question_mark():
    assert search_params_to_order("?box=family").box_size == BoxSize.FAMILY


def test_decode_first_value_wins():
    assert search_params_to_order("box=family&box=single").box_size == BoxSize.FAMILY


def test_decode_mapping_with_lists_and_non_strings():
    order = search_params_to_order({"box": ["family", "single"], "boureks": 12, "salad": 3.0, "hmiss": None})
    assert order.box_size == BoxSize.FAMILY
    assert order.bourek_option == BourekOption.TWELVE
    assert order.salad_extra == 3
    assert order.hmiss_option == HmissOption.NONE


@pytest.mark.parametrize("query", [
    "box=%ZZ&theme=%&type=&&&=&salad=%00",
    "boureks=1e400&salad=-Infinity",
    "salad=nan&boureks=NaN",
    "duration=" + "9" * 5000,
    "start=%F0%9F%8C%99",
    "box[]=family&theme=traditional;mixed",
])
def test_decode_garbage_never_raises(query):
    assert_in_domain(search_params_to_order(query))


# --- Round trip -------------------------------------------------------------

def test_round_trip_every_valid_config():
    for size, theme, order_type, duration, bourek, hmiss, salad in product(
        BoxSize, BoxTheme, OrderType, SubDuration, BourekOption, HmissOption, range(5)
    ):
        order = OrderConfig(size, theme, order_type, duration, bourek, hmiss, salad, "2026-03-01")
        assert search_params_to_order(order_to_search_params(order)) == order


def test_round_trip_keeps_stale_duration_on_one_day():
    order = OrderConfig(order_type="one-day", sub_duration=10, start_date="2026-03-05")
    decoded = search_params_to_order(order_to_search_params(order))
    assert decoded.sub_duration == SubDuration.TEN
    assert compute_prices(decoded) == compute_prices(order)


def test_round_trip_unset_start():
    order = OrderConfig(start_date="")
    assert search_params_to_order(order_to_search_params(order)).start_date == ""


# --- Checkout hand-off ------------------------------------------------------

def make_customer(**overrides):
    fields = dict(first_name="Amina", last_name="Benali", phone="514 555 0101", email="amina@example.com")
    fields.update(overrides)
    return CustomerInfo(**fields)


def test_checkout_query_appends_contact_and_delivery():
    query = checkout_to_search_params(OrderConfig(start_date="2026-02-18"), make_customer(), "pickup")
    keys = [k for k, _ in parse_qsl(query)]
    assert keys == [
        "box", "theme", "type", "duration", "boureks", "hmiss", "salad", "start",
        "firstName", "lastName", "phone", "email", "delivery",
    ]
    assert dict(parse_qsl(query))["phone"] == "514 555 0101"


def test_checkout_query_includes_optional_fields_only_when_set():
    customer = make_customer(address="12 Rue Jean-Talon", city="Montréal", notes="Ring twice & wait")
    params = dict(parse_qsl(checkout_to_search_params(OrderConfig(), customer, DeliveryMethod.DELIVERY)))
    assert params["address"] == "12 Rue Jean-Talon"
    assert params["city"] == "Montréal"
    assert params["notes"] == "Ring twice & wait"
    assert "postalCode" not in params
    assert params["delivery"] == "delivery"


def test_checkout_round_trip():
    order = OrderConfig(box_size="family", order_type="one-day", hmiss_option="large", start_date="2026-03-10")
    customer = make_customer(address="12 Rue Jean-Talon", city="Montréal", postal_code="H2R 1S6")
    request = search_params_to_checkout(checkout_to_search_params(order, customer, "delivery"))

    assert request.order == order
    assert request.customer == customer
    assert request.delivery_method == DeliveryMethod.DELIVERY


def test_customer_missing_fields_are_empty():
    customer = search_params_to_customer("firstName=Amina")
    assert customer.first_name == "Amina"
    assert customer.last_name == ""
    assert customer.postal_code == ""


@pytest.mark.parametrize("value,expected", [
    ("delivery", DeliveryMethod.DELIVERY),
    ("pickup", DeliveryMethod.PICKUP),
    ("drone", DeliveryMethod.PICKUP),
    (None, DeliveryMethod.PICKUP),
])
def test_delivery_decode(value, expected):
    params = {} if value is None else {"delivery": value}
    assert search_params_to_delivery(params) == expected
