"""
Data models for the order pricing engine.

Closed enums for every choice the wizard offers, dataclasses for the
order, the customer contact record and the computed price breakdown.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Optional

MAX_SALAD_EXTRA = 4


class BoxSize(str, Enum):
    SINGLE = "single"
    FAMILY = "family"


class BoxTheme(str, Enum):
    TRADITIONAL = "traditional"
    MIXED = "mixed"
    LIGHT = "light"


class OrderType(str, Enum):
    ONE_DAY = "one-day"
    SUBSCRIPTION = "subscription"


class SubDuration(IntEnum):
    TEN = 10
    THIRTY = 30


class BourekOption(IntEnum):
    NONE = 0
    ONE = 1
    SIX = 6
    TWELVE = 12


class HmissOption(str, Enum):
    NONE = "none"
    SMALL = "small"
    LARGE = "large"


class PriceTier(str, Enum):
    ONE_DAY = "one-day"
    SUB_10 = "sub-10"
    SUB_30 = "sub-30"


class DeliveryMethod(str, Enum):
    PICKUP = "pickup"
    DELIVERY = "delivery"


@dataclass
class TraceStep:
    """A single step in the price resolution trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass
class OrderConfig:
    """
    The complete purchasable configuration.

    Raw strings/ints are coerced into their enums on construction, so
    ``OrderConfig(box_size="family")`` works; an out-of-domain value raises
    ValueError. Untrusted input goes through the order codec instead.
    """
    box_size: BoxSize = BoxSize.SINGLE
    box_theme: BoxTheme = BoxTheme.TRADITIONAL
    order_type: OrderType = OrderType.SUBSCRIPTION
    sub_duration: SubDuration = SubDuration.THIRTY
    bourek_option: BourekOption = BourekOption.NONE
    hmiss_option: HmissOption = HmissOption.NONE
    salad_extra: int = 0
    start_date: str = ""  # YYYY-MM-DD within the campaign window, "" = unset

    def __post_init__(self):
        self.box_size = BoxSize(self.box_size)
        self.box_theme = BoxTheme(self.box_theme)
        self.order_type = OrderType(self.order_type)
        self.sub_duration = SubDuration(self.sub_duration)
        self.bourek_option = BourekOption(self.bourek_option)
        self.hmiss_option = HmissOption(self.hmiss_option)
        self.salad_extra = int(self.salad_extra)
        if not 0 <= self.salad_extra <= MAX_SALAD_EXTRA:
            raise ValueError(f"salad_extra must be between 0 and {MAX_SALAD_EXTRA}, got {self.salad_extra}")
        self.start_date = self.start_date or ""

    @property
    def is_subscription(self) -> bool:
        return self.order_type == OrderType.SUBSCRIPTION


@dataclass
class CustomerInfo:
    """Contact and delivery details carried alongside the order to checkout."""
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""
    city: str = ""
    postal_code: str = ""
    notes: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class LineItem:
    """One priced component of the daily box (the box itself or an add-on)."""
    code: str
    description: str
    quantity: int
    unit_price: Decimal
    daily_price: Decimal


@dataclass
class PriceBreakdown:
    """
    Result of a price computation.

    Equality covers the amounts only; ``lines`` and ``trace`` are
    explanatory and excluded from comparison.
    """
    box_price: Decimal
    addons_daily: Decimal
    daily_total: Decimal
    days: int
    meal_total: Decimal
    delivery_fee: Decimal
    grand_total: Decimal
    savings: Decimal
    tier: Optional[PriceTier] = None
    lines: list[LineItem] = field(default_factory=list, compare=False)
    trace: list[TraceStep] = field(default_factory=list, compare=False, repr=False)

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the trace for this breakdown."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"→ {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"→ {t.step}: {t.description}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Flat dict of the amounts, keyed the way the checkout page reads them."""
        return {
            "boxPrice": self.box_price,
            "addonsDaily": self.addons_daily,
            "dailyTotal": self.daily_total,
            "days": self.days,
            "mealTotal": self.meal_total,
            "deliveryFee": self.delivery_fee,
            "grandTotal": self.grand_total,
            "savings": self.savings,
        }


@dataclass
class CheckoutRequest:
    """Everything the checkout page reconstructs from the hand-off query string."""
    order: OrderConfig
    customer: CustomerInfo
    delivery_method: DeliveryMethod = DeliveryMethod.PICKUP
