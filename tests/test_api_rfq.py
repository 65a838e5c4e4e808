"""
API tests for the per-user RFQ builder and PDF export
"""

SUPPLIER = {"supplierName": "Sun d.o.o.", "supplierAddress": "Side 2, Novi Sad", "supplierEmail": "sales@sun.test"}


class TestRfqApi:
    def test_starts_empty(self, client, staff_headers):
        response = client.get("/rfq/", headers=staff_headers)
        assert response.status_code == 200
        assert response.json() == {"items": [], "count": 0, "total": 0}

    def test_add_merges_by_item(self, client, make_item, staff_headers):
        item = make_item(name="Inverter", unitPrice=40.0, unit="pcs")
        client.post("/rfq/items", json={"itemId": item["id"], "quantity": 2}, headers=staff_headers)
        data = client.post("/rfq/items", json={"itemId": item["id"], "quantity": 3}, headers=staff_headers).json()

        assert data["count"] == 1
        line = data["items"][0]
        assert line["quantity"] == 5
        assert line["lineTotal"] == 200.0
        assert line["id"].startswith(f"rfq-{item['id']}-")
        assert data["total"] == 200.0

    def test_quantity_defaults_to_one(self, client, make_item, staff_headers):
        item = make_item()
        data = client.post("/rfq/items", json={"itemId": item["id"]}, headers=staff_headers).json()
        assert data["items"][0]["quantity"] == 1

    def test_unknown_item(self, client, staff_headers):
        response = client.post("/rfq/items", json={"itemId": 999, "quantity": 1}, headers=staff_headers)
        assert response.status_code == 404

    def test_update_remove_and_clear(self, client, make_item, staff_headers):
        first = make_item(name="Panel")
        second = make_item(name="Mount")
        client.post("/rfq/items", json={"itemId": first["id"], "quantity": 2}, headers=staff_headers)
        data = client.post("/rfq/items", json={"itemId": second["id"], "quantity": 1}, headers=staff_headers).json()
        line_id = data["items"][0]["id"]

        data = client.patch(f"/rfq/items/{line_id}", json={"quantity": 0}, headers=staff_headers).json()
        assert data["items"][0]["quantity"] == 1

        data = client.delete(f"/rfq/items/{line_id}", headers=staff_headers).json()
        assert [line["name"] for line in data["items"]] == ["Mount"]

        assert client.patch("/rfq/items/rfq-missing", json={"quantity": 2}, headers=staff_headers).status_code == 404
        assert client.delete("/rfq/items/rfq-missing", headers=staff_headers).status_code == 404

        assert client.delete("/rfq/", headers=staff_headers).json()["count"] == 0

    def test_builders_are_per_user(self, client, make_item, staff_headers, admin_headers):
        item = make_item()
        client.post("/rfq/items", json={"itemId": item["id"]}, headers=staff_headers)

        assert client.get("/rfq/", headers=staff_headers).json()["count"] == 1
        assert client.get("/rfq/", headers=admin_headers).json()["count"] == 0

    def test_logout_drops_rfq(self, client, make_item, staff_headers):
        item = make_item()
        client.post("/rfq/items", json={"itemId": item["id"]}, headers=staff_headers)
        client.post("/auth/logout", headers=staff_headers)
        assert client.get("/rfq/", headers=staff_headers).json()["count"] == 0


class TestRfqPdfApi:
    def test_export(self, client, make_item, staff_headers):
        item = make_item()
        client.post("/rfq/items", json={"itemId": item["id"], "quantity": 4}, headers=staff_headers)

        response = client.post("/rfq/pdf", json=SUPPLIER, headers=staff_headers)
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert 'filename="rfq_' in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    def test_supplier_name_checked_first(self, client, staff_headers):
        response = client.post("/rfq/pdf", json={}, headers=staff_headers)
        assert response.status_code == 422
        assert response.json()["detail"] == "Supplier name is required"

    def test_missing_email(self, client, staff_headers):
        payload = dict(SUPPLIER, supplierEmail="   ")
        response = client.post("/rfq/pdf", json=payload, headers=staff_headers)
        assert response.json()["detail"] == "Supplier email is required"

    def test_empty_rfq(self, client, staff_headers):
        response = client.post("/rfq/pdf", json=SUPPLIER, headers=staff_headers)
        assert response.status_code == 422
        assert response.json()["detail"] == "Select at least one item"
