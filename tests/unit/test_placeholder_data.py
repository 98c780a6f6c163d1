from __future__ import annotations

from db.placeholder_data import DEFAULT_DATASET


def test_default_dataset_sizes() -> None:
    assert len(DEFAULT_DATASET.users) == 1
    assert len(DEFAULT_DATASET.customers) == 6
    assert len(DEFAULT_DATASET.invoices) == 13
    assert len(DEFAULT_DATASET.revenue) == 12


def test_invoices_reference_known_customers() -> None:
    customer_ids = {c.id for c in DEFAULT_DATASET.customers}
    assert all(inv.customer_id in customer_ids for inv in DEFAULT_DATASET.invoices)


def test_revenue_months_are_unique_and_fit_column() -> None:
    months = [r.month for r in DEFAULT_DATASET.revenue]
    assert len(set(months)) == len(months)
    assert all(len(m) <= 4 for m in months)


def test_invoice_ids_are_distinct() -> None:
    from db.seed import invoice_id

    ids = {invoice_id(inv) for inv in DEFAULT_DATASET.invoices}
    assert len(ids) == len(DEFAULT_DATASET.invoices)
