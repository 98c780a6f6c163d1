from __future__ import annotations

import sqlalchemy as sa


UUID_EXTENSION = sa.text('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

CREATE_USERS = sa.text(
    "CREATE TABLE IF NOT EXISTS users ("
    "id UUID DEFAULT uuid_generate_v4() PRIMARY KEY, "
    "name VARCHAR(255) NOT NULL, "
    "email TEXT NOT NULL UNIQUE, "
    "password TEXT NOT NULL)"
)

CREATE_CUSTOMERS = sa.text(
    "CREATE TABLE IF NOT EXISTS customers ("
    "id UUID DEFAULT uuid_generate_v4() PRIMARY KEY, "
    "name VARCHAR(255) NOT NULL, "
    "email VARCHAR(255) NOT NULL, "
    "image_url VARCHAR(255) NOT NULL)"
)

# customer_id references customers.id but is not a declared foreign key.
CREATE_INVOICES = sa.text(
    "CREATE TABLE IF NOT EXISTS invoices ("
    "id UUID DEFAULT uuid_generate_v4() PRIMARY KEY, "
    "customer_id UUID NOT NULL, "
    "amount INT NOT NULL, "
    "status VARCHAR(255) NOT NULL, "
    "date DATE NOT NULL)"
)

CREATE_REVENUE = sa.text(
    "CREATE TABLE IF NOT EXISTS revenue ("
    "month VARCHAR(4) NOT NULL UNIQUE, "
    "revenue INT NOT NULL)"
)


users = sa.table(
    "users",
    sa.column("id"),
    sa.column("name"),
    sa.column("email"),
    sa.column("password"),
)
customers = sa.table(
    "customers",
    sa.column("id"),
    sa.column("name"),
    sa.column("email"),
    sa.column("image_url"),
)
invoices = sa.table(
    "invoices",
    sa.column("id"),
    sa.column("customer_id"),
    sa.column("amount"),
    sa.column("status"),
    sa.column("date"),
)
revenue = sa.table(
    "revenue",
    sa.column("month"),
    sa.column("revenue"),
)

# Unique/primary key each table's conflict-skip insert is keyed on.
CONFLICT_KEYS: dict[str, str] = {
    "users": "id",
    "customers": "id",
    "invoices": "id",
    "revenue": "month",
}

SEEDED_TABLES: tuple[str, ...] = ("users", "customers", "invoices", "revenue")
