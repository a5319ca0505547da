"""Tests for ORM model helpers and relationship settings."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "api"))

from conftest import make_address, make_customer
from models.customer import Customer
from models.order import Order


def test_customer_orders_never_lazy_load():
    assert Customer.orders.property.lazy == "raise"
    assert Customer.orders.property.passive_deletes is True


def test_order_can_be_attached_to_customer():
    customer = make_customer(make_address(is_current=True))
    order = Order(order_number="WX-00001", customer=customer)
    assert order.customer is customer


def test_current_address_falls_back_to_first():
    first = make_address(address="First Flat")
    customer = make_customer(first, make_address(address="Second Flat"))
    assert customer.current_address is first
    assert make_customer().current_address is None
