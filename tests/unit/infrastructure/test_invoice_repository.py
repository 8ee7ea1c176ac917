"""InMemoryInvoiceRepository: daily invoice numbering under concurrency."""

from concurrent.futures import ThreadPoolExecutor
from datetime import date
from decimal import Decimal

import pytest

from promsys.domain.entities import Invoice
from promsys.domain.invoice_workflow import InvoiceType
from promsys.infrastructure.repositories.in_memory.finance import InMemoryInvoiceRepository

pytestmark = pytest.mark.unit

DAY = date(2024, 3, 7)


def _draft(invoice_id: str) -> Invoice:
    return Invoice(
        id=invoice_id,
        invoice_number="",
        type=InvoiceType.EXPENSE,
        category_id="cat",
        subtotal=Decimal("10"),
        tax_amount=Decimal("0"),
        total=Decimal("10"),
        due_date=DAY,
        created_by_id="user-finance",
    )


def test_numbers_follow_the_daily_sequence():
    repo = InMemoryInvoiceRepository()
    first = repo.add_numbered(_draft("a"), DAY)
    second = repo.add_numbered(_draft("b"), DAY)
    other_day = repo.add_numbered(_draft("c"), date(2024, 3, 8))

    assert first.invoice_number == "INV-20240307-0001"
    assert second.invoice_number == "INV-20240307-0002"
    assert other_day.invoice_number == "INV-20240308-0001"


def test_deleted_numbers_are_not_reissued():
    repo = InMemoryInvoiceRepository()
    repo.add_numbered(_draft("a"), DAY)
    repo.add_numbered(_draft("b"), DAY)
    repo.delete("a")
    assert repo.add_numbered(_draft("c"), DAY).invoice_number == "INV-20240307-0003"


def test_concurrent_creates_get_unique_numbers():
    repo = InMemoryInvoiceRepository()
    with ThreadPoolExecutor(max_workers=8) as pool:
        created = list(pool.map(lambda i: repo.add_numbered(_draft(f"inv-{i}"), DAY), range(200)))

    numbers = {inv.invoice_number for inv in created}
    assert len(numbers) == 200
    assert max(numbers) == "INV-20240307-0200"
    assert repo.count() == 200
