"""Translation between wire messages and order records."""
import logging
import uuid
from typing import List

from sqlalchemy.exc import SQLAlchemyError

from order_service.core.errors import InvalidRequestError, StoreError
from order_service.core.models import (
    CreateOrderRequest,
    CreateOrderResponse,
    GetOrderResponse,
    GetOrdersResponse,
    OrderMessage,
    UpdateOrderStatusRequest,
    UpdateOrderStatusResponse,
)
from order_service.data.models import Address, Item, Order
from order_service.services.orders import OrderService, calculate_total


def parse_customer_id(value: str) -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except (ValueError, TypeError, AttributeError) as e:
        raise InvalidRequestError("Unable to parse customer id") from e


def to_order_record(customer_id: uuid.UUID, request: CreateOrderRequest) -> Order:
    items: List[Item] = [
        Item(product_id=item.product_id, quantity=item.quantity, price=item.price)
        for item in request.items
    ]
    return Order(
        customer_id=customer_id,
        items=items,
        address=Address(**request.address.model_dump()),
        phone=request.phone,
        total_price=calculate_total(items),
    )


class OrderHandler:
    def __init__(self, service: OrderService, logger: logging.Logger):
        self.service = service
        self.logger = logger

    async def create_order(self, request: CreateOrderRequest) -> CreateOrderResponse:
        customer_id = parse_customer_id(request.customer_id)
        order = to_order_record(customer_id, request)
        try:
            order = await self.service.create_order(order)
        except SQLAlchemyError as e:
            self.logger.error(f"Failed to create order for customer {customer_id}: {e}")
            raise StoreError(f"Failed to create the order. error: {e}") from e
        return CreateOrderResponse(message="Successfully created the order", order_id=order.order_id)

    async def get_orders(self, customer_id: str) -> GetOrdersResponse:
        buyer_id = parse_customer_id(customer_id)
        try:
            orders = await self.service.get_orders(buyer_id)
        except SQLAlchemyError as e:
            self.logger.error(f"Failed to fetch orders for customer {buyer_id}: {e}")
            raise StoreError(f"Failed to fetch the orders. error: {e}") from e
        return GetOrdersResponse(
            orders=[OrderMessage.model_validate(order) for order in orders],
            message="Successfully retrieved the orders",
        )

    async def get_order(self, customer_id: str, order_id: str) -> GetOrderResponse:
        buyer_id = parse_customer_id(customer_id)
        try:
            order = await self.service.get_order(buyer_id, order_id)
        except SQLAlchemyError as e:
            self.logger.error(f"Failed to fetch order {order_id}: {e}")
            raise StoreError(f"Failed to fetch the order. error: {e}") from e
        return GetOrderResponse(
            order=OrderMessage.model_validate(order),
            message="Successfully retrieved the order",
        )

    async def update_order_status(self, order_id: str, request: UpdateOrderStatusRequest) -> UpdateOrderStatusResponse:
        buyer_id = parse_customer_id(request.customer_id)
        try:
            order = await self.service.get_order(buyer_id, order_id)
            # Any status string is accepted; there is no transition table.
            if order.status != request.status:
                order.status = request.status
            await self.service.update_order(order)
        except SQLAlchemyError as e:
            self.logger.error(f"Failed to update status of order {order_id}: {e}")
            raise StoreError(f"Failed to update the order status. error: {e}") from e

        self.logger.info(f"Order {order_id} status set to {request.status}")
        return UpdateOrderStatusResponse(message="Successfully updated the order status")
