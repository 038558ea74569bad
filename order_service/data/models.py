import uuid
from datetime import datetime, timezone
from enum import Enum
from sqlalchemy import CheckConstraint, Column, String, Integer, Float, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from order_service.data.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class OrderStatus(str, Enum):
    """Known order statuses.

    The status column is a plain string: values outside this enum are stored
    as given and no transition between statuses is enforced.
    """

    CREATED = "CREATED"
    UPDATED = "UPDATED"
    PAID = "PAID"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class Order(Base):
    __tablename__ = "orders"

    order_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    customer_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    phone = Column(String(32), nullable=False, default="")
    total_price = Column(Float, nullable=False, default=0.0)
    status = Column(String(50), nullable=False, default=OrderStatus.CREATED.value)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    items = relationship(
        "Item", back_populates="order", cascade="all, delete-orphan", order_by="Item.item_id"
    )
    address = relationship(
        "Address", back_populates="order", cascade="all, delete-orphan", uselist=False
    )


class Item(Base):
    __tablename__ = "order_items"

    item_id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(36), ForeignKey("orders.order_id", ondelete="CASCADE"), nullable=False)
    product_id = Column(String(64), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Float, nullable=False)

    order = relationship("Order", back_populates="items")


class Address(Base):
    __tablename__ = "addresses"

    address_id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(36), ForeignKey("orders.order_id", ondelete="CASCADE"), nullable=False, unique=True)
    address_line1 = Column(String(255), nullable=False, default="")
    address_line2 = Column(String(255), nullable=False, default="")
    city = Column(String(100), nullable=False, default="")
    state = Column(String(100), nullable=False, default="")
    zip = Column(String(20), nullable=False, default="")
    country = Column(String(100), nullable=False, default="")

    order = relationship("Order", back_populates="address")


class Product(Base):
    # Owned by the catalogue; orders only decrement its stock.
    __tablename__ = "products"
    __table_args__ = (CheckConstraint("quantity >= 0", name="ck_products_quantity_non_negative"),)

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False, default="")
    quantity = Column(Integer, nullable=False, default=0)
    price = Column(Float, nullable=False, default=0.0)
