"""Reimbursement endpoints, including the paid-without-proof gap."""

import pytest

pytestmark = pytest.mark.unit


@pytest.fixture
def claim_id(client, headers_for, employee, expense_category):
    res = client.post(
        "/api/reimbursements",
        json={"title": "Hotel", "amount": "750000.50", "categoryId": expense_category.id},
        headers=headers_for(employee),
    )
    assert res.status_code == 201
    return res.json()["data"]["id"]


def test_amount_serializes_as_string(client, headers_for, employee, claim_id):
    res = client.get(f"/api/reimbursements/{claim_id}", headers=headers_for(employee))
    data = res.json()["data"]
    assert data["amount"] == "750000.50"
    assert data["status"] == "PENDING"
    assert data["missingPaymentProof"] is False


@pytest.mark.parametrize("body", [{}, {"reason": ""}, {"reason": "   "}])
def test_blank_rejection_reason_is_422(client, headers_for, finance, claim_id, body):
    res = client.patch(
        f"/api/reimbursements/{claim_id}/reject", json=body, headers=headers_for(finance)
    )
    assert res.status_code == 422
    problem = res.json()
    assert problem["code"] == "VALIDATION_ERROR"
    assert problem["errors"][0]["field"] == "reason"

    after = client.get(f"/api/reimbursements/{claim_id}", headers=headers_for(finance))
    assert after.json()["data"]["status"] == "PENDING"


def test_submitter_cannot_approve(client, headers_for, employee, claim_id):
    res = client.patch(f"/api/reimbursements/{claim_id}/approve", headers=headers_for(employee))
    assert res.status_code == 403


def test_others_cannot_read_a_claim(client, headers_for, manager, claim_id):
    assert client.get(f"/api/reimbursements/{claim_id}", headers=headers_for(manager)).status_code == 404
    listing = client.get("/api/reimbursements", headers=headers_for(manager))
    assert listing.json()["data"] == []


def test_paid_without_proof_is_visible(client, headers_for, finance, claim_id):
    headers = headers_for(finance)
    assert client.patch(f"/api/reimbursements/{claim_id}/approve", headers=headers).status_code == 200
    paid = client.patch(f"/api/reimbursements/{claim_id}/pay", headers=headers)
    assert paid.json()["data"]["status"] == "PAID"

    failed = client.post(
        f"/api/reimbursements/{claim_id}/attachments",
        files={"file": ("proof.png", b"", "image/png")},
        data={"type": "PAYMENT"},
        headers=headers,
    )
    assert failed.status_code == 422

    after = client.get(f"/api/reimbursements/{claim_id}", headers=headers).json()["data"]
    assert after["status"] == "PAID"
    assert after["missingPaymentProof"] is True

    fixed = client.post(
        f"/api/reimbursements/{claim_id}/attachments",
        files={"file": ("proof.png", b"\x89PNG", "image/png")},
        data={"type": "PAYMENT"},
        headers=headers,
    )
    assert fixed.status_code == 201
    assert fixed.json()["data"]["missingPaymentProof"] is False


def test_payment_proof_before_paid_is_409(client, headers_for, finance, claim_id):
    res = client.post(
        f"/api/reimbursements/{claim_id}/attachments",
        files={"file": ("proof.png", b"\x89PNG", "image/png")},
        data={"type": "PAYMENT"},
        headers=headers_for(finance),
    )
    assert res.status_code == 409
    assert res.json()["code"] == "CONFLICT"


def test_status_filter(client, headers_for, finance, claim_id):
    res = client.get(
        "/api/reimbursements", params={"status": "approved"}, headers=headers_for(finance)
    )
    assert res.json()["data"] == []
    bad = client.get(
        "/api/reimbursements", params={"status": "LOST"}, headers=headers_for(finance)
    )
    assert bad.status_code == 422
