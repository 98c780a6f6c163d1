from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class User:
    id: uuid.UUID
    name: str
    email: str
    # Plaintext; hashed before it reaches the database.
    password: str

    def row(self, password_hash: str) -> dict:
        return {"id": self.id, "name": self.name, "email": self.email, "password": password_hash}


@dataclass(frozen=True)
class Customer:
    id: uuid.UUID
    name: str
    email: str
    image_url: str

    def row(self) -> dict:
        return {"id": self.id, "name": self.name, "email": self.email, "image_url": self.image_url}


@dataclass(frozen=True)
class Invoice:
    customer_id: uuid.UUID
    # Smallest currency unit (cents).
    amount: int
    status: str
    date: date

    def row(self, invoice_id: uuid.UUID) -> dict:
        return {"id": invoice_id, "customer_id": self.customer_id, "amount": self.amount, "status": self.status, "date": self.date}


@dataclass(frozen=True)
class RevenueRecord:
    month: str
    revenue: int

    def row(self) -> dict:
        return {"month": self.month, "revenue": self.revenue}


@dataclass(frozen=True)
class SeedDataset:
    users: tuple[User, ...] = field(default_factory=tuple)
    customers: tuple[Customer, ...] = field(default_factory=tuple)
    invoices: tuple[Invoice, ...] = field(default_factory=tuple)
    revenue: tuple[RevenueRecord, ...] = field(default_factory=tuple)


USERS: tuple[User, ...] = (
    User(
        id=uuid.UUID("410544b2-4001-4271-9855-fec4b6a6442a"),
        name="User",
        email="user@nextmail.com",
        password="123456",
    ),
)


CUSTOMERS: tuple[Customer, ...] = (
    Customer(
        id=uuid.UUID("d6e15727-9fe1-4961-8c5b-ea44a9bd81aa"),
        name="Evil Rabbit",
        email="evil@rabbit.com",
        image_url="/customers/evil-rabbit.png",
    ),
    Customer(
        id=uuid.UUID("3958dc9e-712f-4377-85e9-fec4b6a6442a"),
        name="Delba de Oliveira",
        email="delba@oliveira.com",
        image_url="/customers/delba-de-oliveira.png",
    ),
    Customer(
        id=uuid.UUID("3958dc9e-742f-4377-85e9-fec4b6a6442a"),
        name="Lee Robinson",
        email="lee@robinson.com",
        image_url="/customers/lee-robinson.png",
    ),
    Customer(
        id=uuid.UUID("76d65c26-f784-44a2-ac19-586678f7c2f2"),
        name="Michael Novotny",
        email="michael@novotny.com",
        image_url="/customers/michael-novotny.png",
    ),
    Customer(
        id=uuid.UUID("cc27c14a-0acf-4f4a-a6c9-d45682c144b9"),
        name="Amy Burns",
        email="amy@burns.com",
        image_url="/customers/amy-burns.png",
    ),
    Customer(
        id=uuid.UUID("13d07535-c59e-4157-a011-f8d2ef4e0cbb"),
        name="Balazs Orban",
        email="balazs@orban.com",
        image_url="/customers/balazs-orban.png",
    ),
)


def _invoice(customer_idx: int, amount: int, status: str, day: str) -> Invoice:
    return Invoice(
        customer_id=CUSTOMERS[customer_idx].id,
        amount=amount,
        status=status,
        date=date.fromisoformat(day),
    )


INVOICES: tuple[Invoice, ...] = (
    _invoice(0, 15795, "pending", "2022-12-06"),
    _invoice(1, 20348, "pending", "2022-11-14"),
    _invoice(4, 3040, "paid", "2022-10-29"),
    _invoice(3, 44800, "paid", "2023-09-10"),
    _invoice(5, 34577, "pending", "2023-08-05"),
    _invoice(2, 54246, "pending", "2023-07-16"),
    _invoice(0, 666, "pending", "2023-06-27"),
    _invoice(3, 32545, "paid", "2023-06-09"),
    _invoice(4, 1250, "paid", "2023-06-17"),
    _invoice(5, 8546, "paid", "2023-06-07"),
    _invoice(1, 500, "paid", "2023-08-19"),
    _invoice(5, 8945, "paid", "2023-06-03"),
    _invoice(2, 1000, "paid", "2022-06-05"),
)


REVENUE: tuple[RevenueRecord, ...] = (
    RevenueRecord(month="Jan", revenue=2000),
    RevenueRecord(month="Feb", revenue=1800),
    RevenueRecord(month="Mar", revenue=2200),
    RevenueRecord(month="Apr", revenue=2500),
    RevenueRecord(month="May", revenue=2300),
    RevenueRecord(month="Jun", revenue=3200),
    RevenueRecord(month="Jul", revenue=3500),
    RevenueRecord(month="Aug", revenue=3700),
    RevenueRecord(month="Sep", revenue=2500),
    RevenueRecord(month="Oct", revenue=2800),
    RevenueRecord(month="Nov", revenue=3000),
    RevenueRecord(month="Dec", revenue=4800),
)


DEFAULT_DATASET = SeedDataset(users=USERS, customers=CUSTOMERS, invoices=INVOICES, revenue=REVENUE)
