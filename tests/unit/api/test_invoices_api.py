"""Invoice endpoints: capability gates, totals and status changes."""

import pytest

pytestmark = pytest.mark.unit


@pytest.fixture
def invoice(client, headers_for, finance, income_category, vat):
    res = client.post(
        "/api/invoices",
        json={
            "type": "INCOME",
            "categoryId": income_category.id,
            "subtotal": "1000",
            "dueDate": "2099-01-31",
            "taxId": vat.id,
        },
        headers=headers_for(finance),
    )
    assert res.status_code == 201
    return res.json()["data"]


def test_totals_are_computed(invoice):
    assert invoice["taxAmount"] == "110.00"
    assert invoice["total"] == "1110.00"
    assert invoice["invoiceNumber"].startswith("INV-")
    assert invoice["status"] == "DRAFT"


@pytest.mark.parametrize("who", ["manager", "employee"])
def test_non_finance_roles_are_forbidden(client, headers_for, request, who, income_category):
    user = request.getfixturevalue(who)
    assert client.get("/api/invoices", headers=headers_for(user)).status_code == 403
    res = client.post(
        "/api/invoices",
        json={
            "type": "INCOME",
            "categoryId": income_category.id,
            "subtotal": "1",
            "dueDate": "2099-01-31",
        },
        headers=headers_for(user),
    )
    assert res.status_code == 403


def test_status_flow(client, headers_for, finance, invoice):
    headers = headers_for(finance)
    url = f"/api/invoices/{invoice['id']}/status"
    assert client.patch(url, json={"status": "SENT"}, headers=headers).json()["data"]["status"] == "SENT"

    overdue = client.patch(url, json={"status": "OVERDUE"}, headers=headers)
    assert overdue.status_code == 409

    assert client.patch(url, json={"status": "PAID"}, headers=headers).status_code == 200
    edit = client.patch(
        f"/api/invoices/{invoice['id']}", json={"notes": "late"}, headers=headers
    )
    assert edit.status_code == 409
    assert edit.json()["code"] == "CONFLICT"


def test_type_filter(client, headers_for, finance, invoice):
    res = client.get("/api/invoices", params={"type": "EXPENSE"}, headers=headers_for(finance))
    assert res.json()["data"] == []
    res = client.get("/api/invoices", params={"type": "income"}, headers=headers_for(finance))
    assert [i["id"] for i in res.json()["data"]] == [invoice["id"]]
