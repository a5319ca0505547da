import uuid
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from services.catalog import ServiceTier
from services.lifecycle import OrderStatus


# ── Requests ───────────────────────────────────────────────

class SubItemIn(BaseModel):
    item_name: str
    quantity: int
    price_per_item: Optional[float] = None


class OrderItemIn(BaseModel):
    service_id: uuid.UUID
    service_type: ServiceTier = ServiceTier.STANDARD
    weight_in_kg: Optional[float] = None
    price_per_kg: Optional[float] = None
    pair_count: Optional[int] = None
    price_per_pair: Optional[float] = None
    sub_items: list[SubItemIn] = []


class OrderCreate(BaseModel):
    customer_id: uuid.UUID
    items: list[OrderItemIn] = []
    is_pickup_scheduled: bool = False
    pickup_date: Optional[datetime] = None
    pickup_slot_id: Optional[uuid.UUID] = None
    pickup_agent_id: Optional[uuid.UUID] = None
    order_source: Literal["Call", "Walk-in"] = "Call"
    delivery_type: Literal["Store Pick-up", "Home Delivery"] = "Home Delivery"
    payment_status: Literal["Pending", "Confirmed"] = "Pending"
    payment_method: Literal["Cash", "UPI"] = "Cash"
    transaction_id: Optional[str] = None


class OrderUpdate(BaseModel):
    # Unknown keys (including the delivery address snapshot fields) are dropped
    model_config = ConfigDict(extra="ignore")

    items: Optional[list[OrderItemIn]] = None
    order_status: Optional[OrderStatus] = None
    payment_status: Optional[Literal["Pending", "Confirmed"]] = None
    payment_method: Optional[Literal["Cash", "UPI"]] = None
    transaction_id: Optional[str] = None
    delivery_type: Optional[Literal["Store Pick-up", "Home Delivery"]] = None
    pickup_date: Optional[datetime] = None
    pickup_slot_id: Optional[uuid.UUID] = None
    pickup_agent_id: Optional[uuid.UUID] = None
    delivery_date: Optional[datetime] = None
    delivery_agent_id: Optional[uuid.UUID] = None


class OrderStatusUpdate(BaseModel):
    order_status: OrderStatus


# ── Responses ──────────────────────────────────────────────

class SubItemRead(BaseModel):
    item_name: str
    quantity: int
    price_per_item: float


class OrderItemRead(BaseModel):
    service_id: str
    service_name: str
    service_type: str
    weight_in_kg: Optional[float] = None
    price_per_kg: Optional[float] = None
    pair_count: Optional[int] = None
    price_per_pair: Optional[float] = None
    sub_items: list[SubItemRead] = []
    item_total: float


class CustomerBrief(BaseModel):
    id: uuid.UUID
    customer_name: str
    phone: str

    model_config = ConfigDict(from_attributes=True)


class SlotBrief(BaseModel):
    id: uuid.UUID
    slot_name: str

    model_config = ConfigDict(from_attributes=True)


class AgentBrief(BaseModel):
    id: uuid.UUID
    name: str
    phone: str

    model_config = ConfigDict(from_attributes=True)


class OrderRead(BaseModel):
    id: uuid.UUID
    order_number: str
    customer_id: Optional[uuid.UUID] = None
    delivery_address: str
    delivery_society: str
    delivery_pincode: Optional[str] = None
    order_source: str
    delivery_type: str
    items: list[OrderItemRead]
    bill_amount: float
    order_status: str
    payment_status: str
    payment_method: str
    transaction_id: Optional[str] = None
    pickup_date: Optional[datetime] = None
    pickup_slot_id: Optional[uuid.UUID] = None
    pickup_agent_id: Optional[uuid.UUID] = None
    pickup_agent_name: Optional[str] = None
    delivery_date: Optional[datetime] = None
    expected_delivery_date: Optional[datetime] = None
    delivery_slot_id: Optional[uuid.UUID] = None
    delivery_agent_id: Optional[uuid.UUID] = None
    delivery_agent_name: Optional[str] = None
    ordered_on: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderDetailResponse(OrderRead):
    """Order with customer, slot and agent references expanded."""
    customer: Optional[CustomerBrief] = None
    pickup_slot: Optional[SlotBrief] = None
    delivery_slot: Optional[SlotBrief] = None
    pickup_agent: Optional[AgentBrief] = None
    delivery_agent: Optional[AgentBrief] = None


class OrderListResponse(BaseModel):
    orders: list[OrderDetailResponse]
    total: int
    page: int
    has_more: bool
