from pydantic import BaseModel, Field
from typing import List, Optional

class OrderItemMessage(BaseModel):
    product_id: str
    quantity: int = Field(gt=0)
    price: float = Field(ge=0)

    class Config:
        from_attributes = True

class AddressMessage(BaseModel):
    address_line1: str = ""
    address_line2: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = ""

    class Config:
        from_attributes = True

class OrderMessage(BaseModel):
    order_id: str
    status: str
    items: List[OrderItemMessage]
    address: Optional[AddressMessage] = None
    phone: str
    total_price: float

    class Config:
        from_attributes = True

# customer_id is parsed by the handler
class CreateOrderRequest(BaseModel):
    customer_id: str
    items: List[OrderItemMessage]
    address: AddressMessage
    phone: str = ""

class CreateOrderResponse(BaseModel):
    message: str
    order_id: Optional[str] = None

class GetOrdersResponse(BaseModel):
    orders: List[OrderMessage] = []
    message: str

class GetOrderResponse(BaseModel):
    order: Optional[OrderMessage] = None
    message: str

class UpdateOrderStatusRequest(BaseModel):
    customer_id: str
    status: str

class UpdateOrderStatusResponse(BaseModel):
    message: str

class ErrorResponse(BaseModel):
    message: str
