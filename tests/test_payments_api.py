def _payments(client, headers, contract_id):
    resp = client.get(f"/api/contracts/{contract_id}/payments", headers=headers)
    return resp.json()["data"]


# ---- deleted history ----

def test_delete_payment_keeps_history_and_restores(client, admin_headers,
                                                   user_headers, contract):
    first = _payments(client, user_headers, contract.id)["payments"][0]

    resp = client.delete(f"/api/payments/{first['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert _payments(client, user_headers, contract.id)["total"] == 11

    resp = client.get(f"/api/deleted-payments/contract/{contract.id}",
                      headers=user_headers)
    history = resp.json()["data"]
    assert history["total"] == 1
    deleted = history["deleted_payments"][0]
    assert deleted["original_id"] == first["id"]
    assert deleted["installment_number"] == 1
    assert deleted["deleted_by"] == "1"

    resp = client.get("/api/deleted-payments/user/1", headers=user_headers)
    assert resp.json()["data"]["total"] == 1
    resp = client.get("/api/deleted-payments/user/2", headers=user_headers)
    assert resp.json()["data"]["total"] == 0

    resp = client.post(f"/api/deleted-payments/restore/{deleted['id']}",
                       headers=admin_headers)
    assert resp.status_code == 200
    restored = resp.json()["data"]
    assert restored["is_restored"] is True
    assert restored["is_paid"] is False
    assert restored["due_date"] == first["due_date"]
    assert restored["installment_number"] == 1

    assert _payments(client, user_headers, contract.id)["total"] == 12
    resp = client.get("/api/deleted-payments/all", headers=user_headers)
    assert resp.json()["data"]["total"] == 0
    assert resp.json()["data"]["deleted_payments"] == []


def test_paid_payment_is_not_deleted(client, admin_headers, user_headers, contract):
    first = _payments(client, user_headers, contract.id)["payments"][0]
    client.put("/api/payments/", headers=user_headers, json={
        "id": first["id"], "is_paid": True, "payment_date": "2024-04-10"})

    resp = client.delete(f"/api/payments/{first['id']}", headers=admin_headers)
    assert resp.status_code == 400
    resp = client.get("/api/deleted-payments/all", headers=user_headers)
    assert resp.json()["data"]["total"] == 0


def test_restore_requires_admin(client, admin_headers, user_headers, contract):
    first = _payments(client, user_headers, contract.id)["payments"][0]
    client.delete(f"/api/payments/{first['id']}", headers=admin_headers)
    deleted = client.get("/api/deleted-payments/all", headers=user_headers) \
        .json()["data"]["deleted_payments"][0]

    resp = client.post(f"/api/deleted-payments/restore/{deleted['id']}",
                       headers=user_headers)
    assert resp.status_code == 403


def test_restore_unknown_entry(client, admin_headers):
    resp = client.post("/api/deleted-payments/restore/999", headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == "Parcela excluída não encontrada"


# ---- receipts ----

def test_receipt_data(client, user_headers, contract):
    first = _payments(client, user_headers, contract.id)["payments"][0]

    resp = client.get(f"/api/payments/{first['id']}/receipt-data",
                      headers=user_headers)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["payment"]["id"] == first["id"]
    assert data["contract"]["id"] == contract.id
    assert data["owner"]["name"] == "Ana Silva"
    assert data["tenant"]["guarantor"]["name"] == "Carla Souza"
    assert data["property"]["name"] == "Apto 12"


def test_receipt_pdf(client, user_headers, contract):
    first = _payments(client, user_headers, contract.id)["payments"][0]
    client.put("/api/payments/", headers=user_headers, json={
        "id": first["id"], "is_paid": True, "payment_date": "2024-04-12",
        "late_payment_fee": "20.00", "payment_method": "PIX"})

    resp = client.get(f"/api/payments/{first['id']}/pdf", headers=user_headers)
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert f"recibo_{first['id']}.pdf" in resp.headers["content-disposition"]
    assert resp.content.startswith(b"%PDF")


def test_receipt_for_unknown_payment(client, user_headers):
    resp = client.get("/api/payments/999/pdf", headers=user_headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == "Parcela não encontrada"


# ---- registration form ----

def test_tenant_registration_form(client, user_headers, contract):
    resp = client.get(f"/api/tenants/{contract.tenant_id}/registration-form",
                      headers=user_headers)
    assert resp.status_code == 200
    assert resp.content.startswith(b"%PDF")
    assert f"ficha-cadastral-{contract.tenant_id}.pdf" in \
        resp.headers["content-disposition"]


def test_registration_form_unknown_tenant(client, user_headers):
    resp = client.get("/api/tenants/999/registration-form", headers=user_headers)
    assert resp.status_code == 404
