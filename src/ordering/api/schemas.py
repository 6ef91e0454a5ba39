"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. Clients never send prices: the order value is
computed from the catalog.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Order Schemas
# ---------------------------------------------------------------------------
class OrderLineSchema(BaseModel):
    item_id: str
    item_qty: int


class CreateOrderRequest(BaseModel):
    items_list: list[OrderLineSchema] = Field(default_factory=list)
    discount_code: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items_list": [
                        {"item_id": "6f1c9c0e-4c8e-4f0a-9a57-1f0d3f1b2a10", "item_qty": 2},
                    ],
                    "discount_code": "3b0c7c52-9d4e-4a11-8f0e-6a2d51c9e7b4",
                }
            ]
        }
    }


class CreateOrderResponse(BaseModel):
    message: str = "Order created successfully"
    order_id: str
    invoice_id: str
    order_value_in_paise_after_discount: float
    discount_amount: float = 0.0
    discount_code: str | None = None
    applied_discount_code: str | None = None


class SettlePaymentRequest(BaseModel):
    invoice_id: str


class SettlePaymentResponse(BaseModel):
    order_id: str
    paid: bool


# ---------------------------------------------------------------------------
# Discount Code Schemas
# ---------------------------------------------------------------------------
class ValidateCodeRequest(BaseModel):
    code: str


class ValidateCodeResponse(BaseModel):
    valid_code: bool
    discount_percent: int | None = None


class RedeemCodeRequest(BaseModel):
    order_id: str


class IssueCodeRequest(BaseModel):
    discount_percent: int = Field(default=10, ge=0, le=100)


class CodeResponse(BaseModel):
    message: str = "Discount code created successfully"
    code: str


class DiscountCodeSchema(BaseModel):
    code: str
    discount_percent: int
    discount_amount: float
    status: str


class DiscountCodeListResponse(BaseModel):
    discount_codes: list[DiscountCodeSchema]


# ---------------------------------------------------------------------------
# Admin Schemas
# ---------------------------------------------------------------------------
class PurchasedItemSchema(BaseModel):
    item_id: str
    item_name: str
    purchased_count: int


class PurchasedItemListResponse(BaseModel):
    items_purchased: list[PurchasedItemSchema]


class TotalResponse(BaseModel):
    total: float


class AddItemRequest(BaseModel):
    item_name: str = Field(min_length=1, max_length=255)
    price_in_paise: int = Field(ge=0)
    available_qty: int = Field(default=0, ge=0)


class ItemIdResponse(BaseModel):
    item_id: str


class StatusResponse(BaseModel):
    status: str = "ok"
