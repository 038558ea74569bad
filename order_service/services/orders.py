import logging
import uuid
from typing import List

from order_service.core.errors import OrderNotFoundError
from order_service.data.models import Order, Product
from order_service.data.repository import (
    Command,
    Expression,
    Operation,
    RelationalDatabase,
    Transaction,
    decrement_expression,
)

EAGER_RELATIONS = ("items", "address")


def calculate_total(items) -> float:
    return sum(item.price * item.quantity for item in items)


def build_order_transaction(order: Order) -> Transaction:
    """Insert the order and decrement stock for every ordered product."""
    transaction = Transaction().append(Operation(model=order, command=Command.CREATE))

    for item in order.items:
        transaction = transaction.append(
            Operation(
                model=Product,
                command=Command.UPDATE,
                condition={"id": item.product_id},
                expression=Expression(
                    column="quantity",
                    value=decrement_expression(Product, "quantity", item.quantity),
                ),
            )
        )
    return transaction


class OrderService:
    def __init__(self, database: RelationalDatabase, logger: logging.Logger):
        self.database = database
        self.logger = logger

    async def create_order(self, order: Order) -> Order:
        await self.database.transaction(build_order_transaction(order))
        self.logger.info(f"Created order {order.order_id} for customer {order.customer_id}")
        return order

    async def get_orders(self, customer_id: uuid.UUID) -> List[Order]:
        orders = await self.database.query_by_condition(
            Order, {"customer_id": customer_id}, *EAGER_RELATIONS
        )
        if not orders:
            self.logger.info(f"No orders found for customer {customer_id}")
            raise OrderNotFoundError("no orders found")
        return orders

    async def get_order(self, customer_id: uuid.UUID, order_id: str) -> Order:
        orders = await self.database.query_by_condition(
            Order, {"customer_id": customer_id, "order_id": order_id}, *EAGER_RELATIONS
        )
        if not orders:
            self.logger.info(f"Order {order_id} not found for customer {customer_id}")
            raise OrderNotFoundError("order not found")
        return orders[0]

    async def update_order(self, order: Order) -> None:
        await self.database.update(order)
