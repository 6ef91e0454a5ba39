"""FastAPI routes for orders, discount codes and admin reports."""

from fastapi import APIRouter, Depends

from ordering.admin.capability import AdminCapability
from ordering.admin.codes import expire_code, issue_promotional_code, stock_item
from ordering.admin.reports import (
    list_discount_codes,
    list_items_purchased,
    total_discount_amount,
    total_purchase_amount,
)
from ordering.api.dependencies import admin_capability, current_user_id
from ordering.api.schemas import (
    AddItemRequest,
    CodeResponse,
    CreateOrderRequest,
    CreateOrderResponse,
    DiscountCodeListResponse,
    DiscountCodeSchema,
    IssueCodeRequest,
    ItemIdResponse,
    PurchasedItemListResponse,
    PurchasedItemSchema,
    RedeemCodeRequest,
    SettlePaymentRequest,
    SettlePaymentResponse,
    StatusResponse,
    TotalResponse,
    ValidateCodeRequest,
    ValidateCodeResponse,
)
from ordering.discount.redemption import redeem_code
from ordering.discount.validation import validate_code
from ordering.order.placement import create_order
from ordering.order.settlement import settle_payment

# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=CreateOrderResponse)
async def place_order(body: CreateOrderRequest, user_id: str = Depends(current_user_id)) -> CreateOrderResponse:
    receipt = create_order(
        user_id,
        [line.model_dump() for line in body.items_list],
        discount_code=body.discount_code,
    )
    return CreateOrderResponse(
        order_id=receipt.order_id,
        invoice_id=receipt.invoice_id,
        order_value_in_paise_after_discount=receipt.order_value_in_paise_after_discount,
        discount_amount=receipt.discount_amount,
        discount_code=receipt.discount_code,
        applied_discount_code=receipt.applied_discount_code,
    )


@order_router.post("/{order_id}/payment", response_model=SettlePaymentResponse)
async def pay_for_order(order_id: str, body: SettlePaymentRequest) -> SettlePaymentResponse:
    paid = settle_payment(order_id, body.invoice_id)
    return SettlePaymentResponse(order_id=order_id, paid=paid)


# ---------------------------------------------------------------------------
# Discount Code Router
# ---------------------------------------------------------------------------
discount_router = APIRouter(prefix="/discount-codes", tags=["discount-codes"])


@discount_router.post("/validate", response_model=ValidateCodeResponse)
async def validate_discount_code(body: ValidateCodeRequest) -> ValidateCodeResponse:
    result = validate_code(body.code)
    return ValidateCodeResponse(valid_code=result.valid_code, discount_percent=result.discount_percent)


@discount_router.post("/{code}/redeem", response_model=StatusResponse)
async def redeem_discount_code(
    code: str,
    body: RedeemCodeRequest,
    user_id: str = Depends(current_user_id),
) -> StatusResponse:
    redeem_code(code, body.order_id, user_id)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin", tags=["admin"])


@admin_router.post("/discount-codes", status_code=201, response_model=CodeResponse)
async def create_discount_code(
    body: IssueCodeRequest | None = None,
    capability: AdminCapability = Depends(admin_capability),
) -> CodeResponse:
    discount_percent = body.discount_percent if body is not None else IssueCodeRequest().discount_percent
    code = issue_promotional_code(capability, discount_percent=discount_percent)
    return CodeResponse(code=code)


@admin_router.put("/discount-codes/{code}/expire", response_model=StatusResponse)
async def expire_discount_code(code: str, capability: AdminCapability = Depends(admin_capability)) -> StatusResponse:
    expire_code(capability, code)
    return StatusResponse()


@admin_router.get("/discount-codes", response_model=DiscountCodeListResponse)
async def get_discount_codes(capability: AdminCapability = Depends(admin_capability)) -> DiscountCodeListResponse:
    lines = list_discount_codes(capability)
    return DiscountCodeListResponse(
        discount_codes=[
            DiscountCodeSchema(
                code=line.code,
                discount_percent=line.discount_percent,
                discount_amount=line.discount_amount,
                status=line.status,
            )
            for line in lines
        ]
    )


@admin_router.get("/discount-codes/total", response_model=TotalResponse)
async def get_total_discount_amount(capability: AdminCapability = Depends(admin_capability)) -> TotalResponse:
    return TotalResponse(total=total_discount_amount(capability))


@admin_router.get("/items/purchased", response_model=PurchasedItemListResponse)
async def get_items_purchased(capability: AdminCapability = Depends(admin_capability)) -> PurchasedItemListResponse:
    lines = list_items_purchased(capability)
    return PurchasedItemListResponse(
        items_purchased=[
            PurchasedItemSchema(
                item_id=line.item_id,
                item_name=line.item_name,
                purchased_count=line.purchased_count,
            )
            for line in lines
        ]
    )


@admin_router.get("/orders/total", response_model=TotalResponse)
async def get_total_purchase_amount(capability: AdminCapability = Depends(admin_capability)) -> TotalResponse:
    return TotalResponse(total=total_purchase_amount(capability))


@admin_router.post("/items", status_code=201, response_model=ItemIdResponse)
async def add_item(body: AddItemRequest, capability: AdminCapability = Depends(admin_capability)) -> ItemIdResponse:
    item_id = stock_item(
        capability,
        item_name=body.item_name,
        price_in_paise=body.price_in_paise,
        available_qty=body.available_qty,
    )
    return ItemIdResponse(item_id=item_id)
