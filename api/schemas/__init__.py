"""Pydantic schemas for API request/response models."""

from __future__ import annotations
import uuid
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field

from schemas.order import (  # noqa: F401
    SubItemIn, OrderItemIn, OrderCreate, OrderUpdate, OrderStatusUpdate,
    OrderItemRead, OrderRead, OrderDetailResponse, OrderListResponse, AgentBrief,
)


# ── Enums ──────────────────────────────────────────────────

class SlotType(str, Enum):
    PICKUP = "Pickup"
    DELIVERY = "Delivery"


class ManifestType(str, Enum):
    PICKUPS = "pickups"
    DELIVERIES = "deliveries"


# ── Reference Schemas ──────────────────────────────────────

class RoleResponse(BaseModel):
    id: uuid.UUID
    role_name: str

    model_config = ConfigDict(from_attributes=True)


class SocietyResponse(BaseModel):
    id: uuid.UUID
    name: str

    model_config = ConfigDict(from_attributes=True)


# ── Customer Schemas ───────────────────────────────────────

class CustomerCreate(BaseModel):
    customer_name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=5, max_length=20)
    address: str
    society_id: uuid.UUID
    pincode: str


class CustomerUpdate(CustomerCreate):
    pass


class AddressResponse(BaseModel):
    id: int
    address: str
    society: SocietyResponse
    pincode: str
    is_current: bool

    model_config = ConfigDict(from_attributes=True)


class CustomerResponse(BaseModel):
    id: uuid.UUID
    customer_name: str
    phone: str
    addresses: list[AddressResponse]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CustomerSummary(CustomerResponse):
    order_count: int = 0
    total_spent: float = 0.0


class CustomerListResponse(BaseModel):
    customers: list[CustomerSummary]
    total: int
    page: int
    has_more: bool


# ── Staff Schemas ──────────────────────────────────────────

class StaffCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: str | None = None
    phone: str = Field(..., min_length=5, max_length=20)
    password: str = Field(..., min_length=6)
    role_id: uuid.UUID
    society_ids: list[uuid.UUID] = []


class StaffUpdate(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    password: str | None = Field(None, min_length=6)
    role_id: uuid.UUID | None = None
    society_ids: list[uuid.UUID] | None = None


class StaffResponse(BaseModel):
    id: uuid.UUID
    name: str
    email: str | None
    phone: str
    role: RoleResponse
    societies: list[SocietyResponse]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ── Service Schemas ────────────────────────────────────────

class SubcategorySchema(BaseModel):
    item_name: str
    price: float = Field(..., ge=0)


class ServiceResponse(BaseModel):
    id: uuid.UUID
    category_name: str
    pricing_model: str
    price_per_kg: float | None
    price_per_pair: float | None
    subcategories: list[SubcategorySchema]
    standard_tat: str
    express_tat: str | None
    superfast_tat: str | None
    express_price_multiplier: float | None
    superfast_price_multiplier: float | None

    model_config = ConfigDict(from_attributes=True)


class ServiceUpdate(BaseModel):
    category_name: str | None = None
    price_per_kg: float | None = Field(None, ge=0)
    price_per_pair: float | None = Field(None, ge=0)
    subcategories: list[SubcategorySchema] | None = None
    standard_tat: str | None = None
    express_tat: str | None = None
    superfast_tat: str | None = None
    express_price_multiplier: float | None = Field(None, gt=0)
    superfast_price_multiplier: float | None = Field(None, gt=0)


# ── Slot Schemas ───────────────────────────────────────────

class SlotResponse(BaseModel):
    id: uuid.UUID
    slot_name: str
    slot_type: SlotType
    max_capacity: int

    model_config = ConfigDict(from_attributes=True)


class SlotStatusResponse(SlotResponse):
    booked_count: int


class SlotCapacityUpdate(BaseModel):
    max_capacity: int = Field(..., ge=1)


# ── Dashboard Schemas ──────────────────────────────────────

class StatusCount(BaseModel):
    status: str
    count: int


class RecentOrder(BaseModel):
    order_number: str
    customer_name: str | None
    bill_amount: float
    order_status: str
    ordered_on: datetime


class DashboardStats(BaseModel):
    start_date: datetime
    end_date: datetime
    total_orders: int
    total_revenue: float
    pending_revenue: float
    total_active_customers: int
    order_status_breakdown: list[StatusCount]
    recent_orders: list[RecentOrder]


# ── Manifest Schemas ───────────────────────────────────────

class ManifestRowSchema(BaseModel):
    sequence: int
    order_ref: str
    customer: str
    address: str
    contact: str
    summary: str
    items: str
    agent: str
    notes: str = ""


class ManifestPage(BaseModel):
    page: int
    rows: list[ManifestRowSchema]


class ManifestResponse(BaseModel):
    title: str
    date_label: str
    report_date: str
    total_tasks: int
    columns: list[str]
    pages: list[ManifestPage]
