from datetime import date

from rental_service.app.models.contracts.contract_templates import ContractTemplate


# ---- documents ----

def test_contract_html(client, user_headers, contract, residential_template):
    resp = client.get(f"/api/contracts/{contract.id}/html/residential",
                      headers=user_headers)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert "no-store" in resp.headers["cache-control"]
    assert "Locador: Ana Silva, CPF: 111.222.333-44RG nº: 12.345-6" in resp.text
    assert "Fiador: Carla Souza" in resp.text
    assert "Página 1 de 1" in resp.text
    assert "{{" not in resp.text


def test_contract_html_with_explicit_template(client, user_headers, contract, db):
    template = ContractTemplate(name="Curto", type="commercial",
                                content="Inquilino {{tenant.name}}")
    db.add(template)
    db.commit()

    resp = client.get(
        f"/api/contracts/{contract.id}/html/commercial?template_id={template.id}",
        headers=user_headers)
    assert resp.status_code == 200
    assert "Inquilino Bruno Costa" in resp.text


def test_contract_html_without_template_of_type(client, user_headers, contract,
                                                residential_template):
    resp = client.get(f"/api/contracts/{contract.id}/html/commercial",
                      headers=user_headers)
    assert resp.status_code == 404
    body = resp.json()
    assert body["status"] == "Failed"
    assert "commercial" in body["message"]


def test_contract_html_unknown_contract(client, user_headers, residential_template):
    resp = client.get("/api/contracts/999/html/residential", headers=user_headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == "Contrato não encontrado"


def test_contract_documents_require_token(client, contract, residential_template):
    resp = client.get(f"/api/contracts/{contract.id}/html/residential")
    assert resp.status_code in (401, 403)


def test_contract_preview(client, user_headers, contract, residential_template):
    resp = client.get(f"/api/contracts/{contract.id}/preview/residential",
                      headers=user_headers)
    assert resp.status_code == 200
    assert "Baixar PDF" in resp.text
    assert "Ana Silva" in resp.text


def test_contract_pdf(client, user_headers, contract, residential_template):
    resp = client.get(f"/api/contracts/{contract.id}/pdf/residential",
                      headers=user_headers)
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert f"contrato_{contract.id}.pdf" in resp.headers["content-disposition"]
    assert resp.content.startswith(b"%PDF")


def test_payment_slips(client, user_headers, contract):
    resp = client.get(f"/api/contracts/{contract.id}/payment-slips",
                      headers=user_headers)
    assert resp.status_code == 200
    assert resp.content.startswith(b"%PDF")
    assert f"carnes_contrato_{contract.id}.pdf" in resp.headers["content-disposition"]


def test_payment_slips_without_pending_installments(client, user_headers, contract, db):
    for payment in contract.payments:
        payment.is_paid = True
        payment.payment_date = date(2024, 5, 1)
    db.commit()

    resp = client.get(f"/api/contracts/{contract.id}/payment-slips",
                      headers=user_headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == "Não há parcelas pendentes para gerar carnês"


# ---- templates ----

def test_template_writes_are_admin_only(client, user_headers):
    resp = client.post("/api/contract-templates/", headers=user_headers, json={
        "name": "Modelo", "type": "residential",
        "content": "<p>{{owner.name}}</p>"})
    assert resp.status_code == 403


def test_template_with_unknown_tag_rejected(client, admin_headers):
    resp = client.post("/api/contract-templates/", headers=admin_headers, json={
        "name": "Modelo", "type": "residential",
        "content": "<p>{{owner.name}} {{owner.cpf}}</p>"})
    assert resp.status_code == 400
    assert "{{owner.cpf}}" in resp.json()["message"]


def test_template_lifecycle(client, admin_headers, user_headers):
    resp = client.post("/api/contract-templates/", headers=admin_headers, json={
        "name": "Modelo", "type": "commercial",
        "content": "<p>{{owner.name}} e {{tenant.name}}</p>"})
    assert resp.status_code == 200
    template_id = resp.json()["data"]["id"]

    resp = client.get("/api/contract-templates/all?type=commercial",
                      headers=user_headers)
    assert resp.json()["data"]["total"] == 1

    resp = client.put("/api/contract-templates/", headers=admin_headers, json={
        "id": template_id, "name": "Modelo Comercial"})
    assert resp.json()["data"]["name"] == "Modelo Comercial"

    resp = client.delete(f"/api/contract-templates/{template_id}",
                         headers=admin_headers)
    assert resp.status_code == 200

    resp = client.get("/api/contract-templates/all", headers=user_headers)
    assert resp.json()["data"]["total"] == 0

    resp = client.get(f"/api/contract-templates/{template_id}",
                      headers=user_headers)
    assert resp.json()["data"]["is_active"] is False


def test_template_tags_listing(client, user_headers):
    resp = client.get("/api/contract-templates/tags", headers=user_headers)
    assert resp.status_code == 200
    placeholders = [t["placeholder"] for t in resp.json()["data"]]
    assert "{{owner.name}}" in placeholders
    assert "{{PAGINA}}" in placeholders


# ---- renewals ----

def _renew(client, headers, contract_id):
    return client.post("/api/contract-renewals/", headers=headers, json={
        "original_contract_id": contract_id,
        "renewal_date": "2025-03-01",
        "start_date": "2025-03-15",
        "end_date": "2026-03-15",
        "new_rent_value": "1100.00",
        "adjustment_index": "IGP-M",
    })


def test_renewal_flow(client, admin_headers, user_headers, contract, db):
    resp = _renew(client, admin_headers, contract.id)
    assert resp.status_code == 200
    renewed = resp.json()["data"]["contract"]
    assert renewed["is_renewal"] is True
    assert renewed["original_contract_id"] == contract.id
    assert renewed["duration"] == 12

    resp = client.get(f"/api/contracts/{contract.id}", headers=user_headers)
    assert resp.json()["data"]["status"] == "renovado"

    resp = client.get(f"/api/contracts/{renewed['id']}/payments",
                      headers=user_headers)
    assert resp.json()["data"]["total"] == 12

    resp = _renew(client, admin_headers, contract.id)
    assert resp.status_code == 400
    assert "já foi renovado" in resp.json()["message"]


def test_renewed_contract_renders_original_period(client, admin_headers,
                                                  user_headers, contract, db):
    db.add(ContractTemplate(
        name="Renovação", type="residential",
        content="Renova o contrato {{contract.originalContractId}} ({{contract.originalPeriod}})"))
    db.commit()
    renewed_id = _renew(client, admin_headers, contract.id).json()["data"]["contract"]["id"]

    resp = client.get(f"/api/contracts/{renewed_id}/html/residential",
                      headers=user_headers)
    assert f"Renova o contrato {contract.id} (14/03/2024 a 14/03/2025)" in resp.text


def test_renewal_requires_admin(client, user_headers, contract):
    assert _renew(client, user_headers, contract.id).status_code == 403


def test_renewed_contract_cannot_be_reactivated(client, admin_headers,
                                                user_headers, contract):
    assert _renew(client, admin_headers, contract.id).status_code == 200

    resp = client.put("/api/contracts/", headers=user_headers,
                      json={"id": contract.id, "status": "ativo"})
    assert resp.status_code == 400
    assert resp.json()["status_code"] == "201"

    resp = _renew(client, admin_headers, contract.id)
    assert resp.status_code == 400

    resp = client.get(f"/api/contract-renewals/original/{contract.id}",
                      headers=user_headers)
    assert len(resp.json()["data"]) == 1

    resp = client.get(f"/api/contracts/{contract.id}", headers=user_headers)
    assert resp.json()["data"]["status"] == "renovado"


def test_renewed_contract_accepts_other_edits(client, admin_headers,
                                             user_headers, contract):
    _renew(client, admin_headers, contract.id)
    resp = client.put("/api/contracts/", headers=user_headers, json={
        "id": contract.id, "status": "renovado", "observations": "Arquivado"})
    assert resp.status_code == 200
    assert resp.json()["data"]["observations"] == "Arquivado"


def test_delete_renewal_reverts_both_contracts(client, admin_headers,
                                              user_headers, contract):
    result = _renew(client, admin_headers, contract.id).json()["data"]
    renewal_id = result["renewal"]["id"]
    renewed_id = result["contract"]["id"]

    resp = client.delete(f"/api/contract-renewals/{renewal_id}",
                         headers=admin_headers)
    assert resp.status_code == 200

    resp = client.get(f"/api/contracts/{contract.id}", headers=user_headers)
    assert resp.json()["data"]["status"] == "ativo"
    resp = client.get(f"/api/contracts/{renewed_id}", headers=user_headers)
    assert resp.status_code == 404

    assert _renew(client, admin_headers, contract.id).status_code == 200


def test_delete_renewal_refused_after_payment(client, admin_headers,
                                             user_headers, contract):
    result = _renew(client, admin_headers, contract.id).json()["data"]
    renewed_id = result["contract"]["id"]
    resp = client.get(f"/api/contracts/{renewed_id}/payments",
                      headers=user_headers)
    first = resp.json()["data"]["payments"][0]
    resp = client.put("/api/payments/", headers=user_headers, json={
        "id": first["id"], "is_paid": True, "payment_date": "2025-04-10"})
    assert resp.status_code == 200

    resp = client.delete(f"/api/contract-renewals/{result['renewal']['id']}",
                         headers=admin_headers)
    assert resp.status_code == 400

    resp = client.get(f"/api/contracts/{contract.id}", headers=user_headers)
    assert resp.json()["data"]["status"] == "renovado"


def test_renewal_term_html(client, admin_headers, user_headers, contract):
    renewal_id = _renew(client, admin_headers, contract.id).json()["data"]["renewal"]["id"]

    resp = client.get(f"/api/contract-renewals/{renewal_id}/html",
                      headers=user_headers)
    assert resp.status_code == 200
    text = resp.text
    assert "TERMO ADITIVO DE RENOVAÇÃO" in text
    assert (f"contrato de locação nº {contract.id}, vigente de 14/03/2024 "
            "a 14/03/2025") in text
    assert "com início em 14/03/2025 e término em 14/03/2026" in text
    assert "R$ 1.100,00" in text
    assert "índice IGP-M em 28/02/2025" in text
    assert "Carla Souza" in text
    assert "{{" not in text


def test_renewal_term_pdf(client, admin_headers, user_headers, contract):
    result = _renew(client, admin_headers, contract.id).json()["data"]
    renewal_id = result["renewal"]["id"]

    resp = client.get(f"/api/contract-renewals/{renewal_id}/pdf",
                      headers=user_headers)
    assert resp.status_code == 200
    assert resp.content.startswith(b"%PDF")
    assert f"termo_aditivo_{renewal_id}.pdf" in resp.headers["content-disposition"]

    resp = client.get(
        f"/api/contract-renewals/by-contract/{result['contract']['id']}/pdf",
        headers=user_headers)
    assert resp.status_code == 200
    assert resp.content.startswith(b"%PDF")

    # the original contract was not created by a renewal
    resp = client.get(f"/api/contract-renewals/by-contract/{contract.id}/pdf",
                      headers=user_headers)
    assert resp.status_code == 404


def test_health(client):
    assert client.get("/api/health").json()["data"]["status"] == "healthy"
