"""Shared fixtures: catalog rows, customers and an in-memory order store."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "api"))

import uuid

import pytest

from models.customer import Customer, CustomerAddress
from models.reference import Society
from models.service import Service
from models.slot import Slot
from models.staff import Staff
from services.errors import ConflictError, DependencyError


def make_service(name: str, pricing_model: str, **fields) -> Service:
    return Service(id=uuid.uuid4(), category_name=name, pricing_model=pricing_model, **fields)


def make_customer(*addresses: CustomerAddress, name: str = "Asha Rao", phone: str = "9876543210") -> Customer:
    return Customer(id=uuid.uuid4(), customer_name=name, phone=phone, addresses=list(addresses))


def make_address(address: str = "Flat 402, Tower B", society: str = "ASBL Spire",
                 pincode: str = "500032", is_current: bool = False) -> CustomerAddress:
    return CustomerAddress(address=address, society=Society(name=society), pincode=pincode, is_current=is_current)


class FakeOrderStore:
    """Dict-backed stand-in for services.store.OrderStore."""

    def __init__(self, customers=(), services=(), staff=(), delivery_slot=None):
        self.customers = {c.id: c for c in customers}
        self.services = {s.id: s for s in services}
        self.staff = {s.id: s for s in staff}
        self.delivery_slot = delivery_slot
        self.orders = {}
        self.fail_inserts_after = None
        self.inserted = 0
        self.updates = []

    async def get_customer(self, customer_id):
        return self.customers.get(customer_id)

    async def get_service(self, service_id):
        return self.services.get(service_id)

    async def get_staff(self, staff_id):
        return self.staff.get(staff_id)

    async def get_delivery_slot(self):
        return self.delivery_slot

    async def order_number_exists(self, order_number):
        return order_number in self.orders

    async def get_order(self, order_number):
        return self.orders.get(order_number)

    async def insert_order(self, order):
        if self.fail_inserts_after is not None and self.inserted >= self.fail_inserts_after:
            raise DependencyError("Storage is unavailable. Please try again.")
        if order.order_number in self.orders:
            raise ConflictError("Record conflicts with an existing one (duplicate unique field)")
        if order.id is None:
            order.id = uuid.uuid4()
        self.orders[order.order_number] = order
        self.inserted += 1
        return order

    async def update_order(self, order, changes):
        self.updates.append(dict(changes))
        for field, value in changes.items():
            setattr(order, field, value)
        return order


@pytest.fixture
def wash_fold():
    return make_service(
        "Wash & Fold", "PerKg", price_per_kg=80,
        standard_tat="48 Hours", express_tat="36 Hours", superfast_tat="24 Hours",
        express_price_multiplier=1.5, superfast_price_multiplier=2,
    )


@pytest.fixture
def ironing():
    return make_service(
        "Ironing Only", "PerItem",
        subcategories=[
            {"item_name": "Shirt", "price": 20},
            {"item_name": "T-Shirt", "price": 15},
            {"item_name": "Jeans", "price": 30},
        ],
        standard_tat="24 Hours", express_tat="18 Hours", superfast_tat="12 Hours",
    )


@pytest.fixture
def shoes():
    return make_service(
        "Shoes & Footwear", "PerPair", price_per_pair=120,
        standard_tat="72 Hours", express_tat="54 Hours", superfast_tat="36 Hours",
    )


@pytest.fixture
def customer():
    return make_customer(make_address(is_current=True))


@pytest.fixture
def agents():
    role_id = uuid.uuid4()
    return [
        Staff(id=uuid.uuid4(), name="Ravi Kumar", phone="9000000001", password_hash="x", role_id=role_id),
        Staff(id=uuid.uuid4(), name="Meena Das", phone="9000000002", password_hash="x", role_id=role_id),
    ]


@pytest.fixture
def delivery_slot():
    return Slot(id=uuid.uuid4(), slot_name="9 AM - 10 PM", slot_type="Delivery", max_capacity=20)


@pytest.fixture
def store(customer, wash_fold, ironing, shoes, agents, delivery_slot):
    return FakeOrderStore(
        customers=[customer],
        services=[wash_fold, ironing, shoes],
        staff=agents,
        delivery_slot=delivery_slot,
    )
