# Data classes for the three stored entities.
# Ids are generated when the object is built, never typed in by the user.

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


def new_id():
    return str(uuid.uuid4())


def new_user_id():
    return "U" + uuid.uuid4().hex[:8]


@dataclass
class Supplier:
    id: str = field(default_factory=new_id)
    name: Optional[str] = None
    contact_info: Optional[str] = None
    address: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    def __str__(self):
        return self.name or ""


@dataclass
class StockItem:
    id: str = field(default_factory=new_id)
    name: str = ""
    description: str = ""
    price: float = 0.0
    quantity: int = 0
    supplier: Optional[Supplier] = None

    @property
    def total_value(self):
        return self.price * self.quantity

    @property
    def supplier_id(self):
        return self.supplier.id if self.supplier else None

    @property
    def supplier_name(self):
        return self.supplier.name if self.supplier else None

    def __str__(self):
        return self.name


@dataclass
class User:
    id: str = field(default_factory=new_user_id)
    username: str = ""
    password: str = ""
    full_name: Optional[str] = None
    email: Optional[str] = None
    role: str = "user"
    created_at: Optional[datetime] = None

    @property
    def is_admin(self):
        return self.role == "admin"

    def __str__(self):
        return self.username
