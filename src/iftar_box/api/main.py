from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, Field
import sys
from pathlib import Path

# Add src to path for internal imports
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from iftar_box.engine import (
    BoxSize,
    BoxTheme,
    BourekOption,
    CustomerInfo,
    DeliveryMethod,
    HmissOption,
    OrderConfig,
    OrderType,
    PriceTier,
    SubDuration,
    compute_prices,
)
from iftar_box.engine.pricing_tables import DELIVERY_FEE_ONEDAY, INCLUDED, iter_price_rows
from iftar_box.codec import checkout_to_search_params, search_params_to_order
from iftar_box.config.settings import get_settings
from iftar_box.policy.campaign import RAMADAN_END, RAMADAN_START
from iftar_box.policy.customer_validation import validate_customer
from iftar_box.services.checkout_service import build_checkout_summary

app = FastAPI(
    title="Iftar Box API",
    description="Pricing and checkout hand-off for the Iftar Box order wizard",
    version="1.0.0"
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


class OrderBody(BaseModel):
    box_size: BoxSize = BoxSize.SINGLE
    box_theme: BoxTheme = BoxTheme.TRADITIONAL
    order_type: OrderType = OrderType.SUBSCRIPTION
    sub_duration: SubDuration = SubDuration.THIRTY
    bourek_option: BourekOption = BourekOption.NONE
    hmiss_option: HmissOption = HmissOption.NONE
    salad_extra: int = Field(default=0, ge=0, le=4)
    start_date: str = RAMADAN_START

    def to_order(self) -> OrderConfig:
        return OrderConfig(**self.model_dump(include=set(OrderBody.model_fields)))


class PriceRequest(OrderBody):
    delivery_method: DeliveryMethod = DeliveryMethod.PICKUP


class CustomerBody(BaseModel):
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""
    city: str = ""
    postal_code: str = ""
    notes: str = ""


class EncodeRequest(BaseModel):
    order: OrderBody = Field(default_factory=OrderBody)
    customer: CustomerBody = Field(default_factory=CustomerBody)
    delivery_method: DeliveryMethod = DeliveryMethod.PICKUP


class EncodeResponse(BaseModel):
    query: str
    checkout_url: str


def _breakdown_payload(prices) -> dict:
    payload = jsonable_encoder(prices.to_dict())
    payload["tier"] = prices.tier.value
    payload["lines"] = jsonable_encoder(prices.lines)
    payload["trace"] = prices.get_trace_text()
    return payload


@app.get("/")
async def root():
    return {"status": "online", "message": "Iftar Box API Active"}


@app.get("/pricing/tables")
async def get_pricing_tables():
    return {
        "tiers": [tier.value for tier in PriceTier],
        "items": [
            {"item": item, "code": code, "prices": {tier.value: float(price) for tier, price in row.items()}}
            for item, code, row in iter_price_rows()
        ],
        "delivery_fee_oneday": float(DELIVERY_FEE_ONEDAY),
        "included": {size.value: list(items) for size, items in INCLUDED.items()},
        "campaign": {"start": RAMADAN_START, "end": RAMADAN_END},
        "currency": get_settings().currency,
    }


@app.post("/prices")
async def calculate_prices(req: PriceRequest):
    prices = compute_prices(req.to_order(), req.delivery_method)
    return _breakdown_payload(prices)


@app.post("/order/encode", response_model=EncodeResponse)
async def encode_order(req: EncodeRequest):
    customer = CustomerInfo(**req.customer.model_dump())
    errors = validate_customer(customer, req.delivery_method)
    if errors:
        raise HTTPException(status_code=400, detail={"errors": errors})

    query = checkout_to_search_params(req.order.to_order(), customer, req.delivery_method)
    return EncodeResponse(query=query, checkout_url=get_settings().checkout_url(query))


@app.get("/order/decode")
async def decode_order(request: Request):
    order = search_params_to_order(request.url.query)
    return jsonable_encoder(order)


@app.get("/checkout")
async def checkout(request: Request):
    summary = build_checkout_summary(request.url.query)
    return {
        "order": jsonable_encoder(summary.order),
        "customer": jsonable_encoder(summary.customer),
        "delivery_method": summary.delivery_method.value,
        "prices": _breakdown_payload(summary.prices),
        "plan_label": summary.plan_label,
        "box_label": summary.box_label,
        "theme_label": summary.theme_label,
        "included": summary.included,
        "delivery_dates": summary.delivery_dates,
        "edit_url": summary.edit_url,
        "currency": summary.currency,
        "errors": summary.errors,
        "warnings": summary.warnings,
        "ready": summary.ready,
        "pay_label": summary.pay_label,
    }
