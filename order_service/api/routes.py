import logging

from fastapi import APIRouter, Depends, status

from order_service.api.handler import OrderHandler
from order_service.core.models import (
    CreateOrderRequest,
    CreateOrderResponse,
    ErrorResponse,
    GetOrderResponse,
    GetOrdersResponse,
    UpdateOrderStatusRequest,
    UpdateOrderStatusResponse,
)
from order_service.data.database import AsyncSessionLocal
from order_service.data.repository import RelationalDatabase
from order_service.services.orders import OrderService

router = APIRouter(
    prefix="/api/orders",
    tags=["orders"],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)

database = RelationalDatabase(AsyncSessionLocal)

def get_database() -> RelationalDatabase:
    return database

def get_order_handler(db: RelationalDatabase = Depends(get_database)) -> OrderHandler:
    service = OrderService(db, logging.getLogger("order_service.service"))
    return OrderHandler(service, logging.getLogger("order_service.handler"))

@router.post("/", response_model=CreateOrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    order_in: CreateOrderRequest,
    handler: OrderHandler = Depends(get_order_handler),
):
    return await handler.create_order(order_in)

@router.get("/", response_model=GetOrdersResponse)
async def get_orders(
    customer_id: str,
    handler: OrderHandler = Depends(get_order_handler),
):
    return await handler.get_orders(customer_id)

@router.get("/{order_id}", response_model=GetOrderResponse)
async def get_order(
    order_id: str,
    customer_id: str,
    handler: OrderHandler = Depends(get_order_handler),
):
    return await handler.get_order(customer_id, order_id)

@router.patch("/{order_id}/status", response_model=UpdateOrderStatusResponse)
async def update_order_status(
    order_id: str,
    status_in: UpdateOrderStatusRequest,
    handler: OrderHandler = Depends(get_order_handler),
):
    return await handler.update_order_status(order_id, status_in)
