"""
Static price tables (CAD, per day), keyed by item then by price tier.

Amounts are Decimals so repeated sums of halves and cents stay exact.
"""
from decimal import Decimal
from types import MappingProxyType

from .models import BoxSize, BourekOption, HmissOption, PriceTier


def _row(one_day: str, sub_10: str, sub_30: str) -> MappingProxyType:
    return MappingProxyType({
        PriceTier.ONE_DAY: Decimal(one_day),
        PriceTier.SUB_10: Decimal(sub_10),
        PriceTier.SUB_30: Decimal(sub_30),
    })


BOX_PRICING = MappingProxyType({
    BoxSize.SINGLE: _row("23", "20", "18"),
    BoxSize.FAMILY: _row("85", "73", "65"),
})

# Quantity 0 has no entry: no boureks contributes nothing.
BOUREK_PRICING = MappingProxyType({
    BourekOption.ONE: _row("2.5", "2", "2"),
    BourekOption.SIX: _row("14", "12", "12"),
    BourekOption.TWELVE: _row("26", "22", "22"),
})

HMISS_PRICING = MappingProxyType({
    HmissOption.SMALL: _row("5", "4", "4"),
    HmissOption.LARGE: _row("9", "8", "8"),
})

# Price of one extra salad portion per day.
SALAD_PRICING = _row("4", "3", "3")

DELIVERY_FEE_ONEDAY = Decimal("5")

INCLUDED = MappingProxyType({
    BoxSize.SINGLE: (
        "Harira (soup)",
        "2 Boureks",
        "Fresh salad",
        "Bread, dates & sharbat",
    ),
    BoxSize.FAMILY: (
        "Harira ×4",
        "Boureks ×8",
        "Salad ×4",
        "Bread, dates & sharbat (family)",
    ),
})


def iter_price_rows():
    """
    Yield (item, code, row) for every priced entry, in display order.

    Used by the price list export and the API table listing.
    """
    for size, row in BOX_PRICING.items():
        yield f"{size.value.title()} Iftar Box", f"box:{size.value}", row
    for qty, row in BOUREK_PRICING.items():
        label = "1 pc" if qty == BourekOption.ONE else f"{int(qty)} pcs"
        yield f"Boureks ({label})", f"bourek:{int(qty)}", row
    for size, row in HMISS_PRICING.items():
        yield f"Hmiss ({size.value})", f"hmiss:{size.value}", row
    yield "Extra salad", "salad", SALAD_PRICING
