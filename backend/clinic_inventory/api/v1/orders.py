"""Supplier order API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, status

from clinic_inventory.api.v1.dependencies import OrderServiceDep
from clinic_inventory.api.v1.errors import to_http_exception
from clinic_inventory.api.v1.schemas import OrderListResponse, OrderResponse, StatusResponse
from clinic_inventory.services.exceptions import ServiceError

router = APIRouter(tags=["orders"])


@router.post(
    "/orders",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createOrder",
)
async def create_order(
    payload: Annotated[dict[str, Any], Body()],
    service: OrderServiceDep,
) -> OrderResponse:
    """Create an order. order_number is generated ("ORD-202501-001") when omitted."""
    try:
        order = await service.create_order(payload)
    except ServiceError as e:
        raise to_http_exception(e, entity="Order") from e
    return OrderResponse.from_model(order)


@router.get("/orders", response_model=OrderListResponse, operation_id="listOrders")
async def list_orders(
    service: OrderServiceDep,
    skip: int = 0,
    limit: int = 50,
) -> OrderListResponse:
    """List orders with pagination, newest first."""
    orders, total = await service.list_orders(skip=skip, limit=limit)
    return OrderListResponse(
        orders=[OrderResponse.from_model(order) for order in orders],
        total=total,
    )


@router.get("/orders/{order_number}", response_model=OrderResponse, operation_id="getOrder")
async def get_order(
    order_number: str,
    service: OrderServiceDep,
) -> OrderResponse:
    """Get a single order by its order number."""
    try:
        order = await service.get_order(order_number)
    except ServiceError as e:
        raise to_http_exception(e, entity="Order") from e
    return OrderResponse.from_model(order)


@router.put("/orders/{order_number}", response_model=OrderResponse, operation_id="updateOrder")
async def update_order(
    order_number: str,
    payload: Annotated[dict[str, Any], Body()],
    service: OrderServiceDep,
) -> OrderResponse:
    """Update an order. Omitted fields keep their values; order_number cannot be changed."""
    try:
        order = await service.update_order(order_number, payload)
    except ServiceError as e:
        raise to_http_exception(e, entity="Order") from e
    return OrderResponse.from_model(order)


@router.delete("/orders/{order_number}", response_model=StatusResponse, operation_id="deleteOrder")
async def delete_order(
    order_number: str,
    service: OrderServiceDep,
) -> StatusResponse:
    """Delete an order."""
    try:
        await service.delete_order(order_number)
    except ServiceError as e:
        raise to_http_exception(e, entity="Order") from e
    return StatusResponse(status="ok", message=f"Deleted order {order_number}")
