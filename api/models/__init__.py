from models.reference import Role, Society
from models.customer import Customer, CustomerAddress
from models.staff import Staff
from models.service import Service
from models.slot import Slot
from models.order import Order

__all__ = [
    "Role", "Society", "Customer", "CustomerAddress",
    "Staff", "Service", "Slot", "Order",
]
