"""
Tests for the repair and verification endpoints.
"""
from fastapi import status


def _storage(client):
    return client.app.state.storage


def _customer_with_order(client, rate=100):
    customer = client.post("/api/v1/customers", json={"name": "Ravi"}).json()
    client.post("/api/v1/orders", json={
        "customerId": customer["id"],
        "items": [{"type": "chicken", "quantity": 1, "rate": rate}],
    })
    return customer


def _corrupt_pending(client, customer_id, pending):
    storage = _storage(client)
    storage.customers[customer_id] = storage.customers[customer_id].model_copy(update={"pending_amount": pending})


def test_verify_consistent_customer(test_client):
    customer = _customer_with_order(test_client)

    response = test_client.get(f"/api/v1/admin/verify-customer/{customer['id']}")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["isValid"] is True
    assert response.json()["message"] == "No issues found"


def test_verify_mismatch_is_conflict(test_client):
    customer = _customer_with_order(test_client)
    _corrupt_pending(test_client, customer["id"], 80)

    response = test_client.get(f"/api/v1/admin/verify-customer/{customer['id']}")

    assert response.status_code == status.HTTP_409_CONFLICT
    report = response.json()["detail"]
    assert report["storedAmount"] == 80
    assert report["calculatedAmount"] == 100
    assert report["repairs"] == []


def test_repair_customer_is_idempotent(test_client):
    customer = _customer_with_order(test_client)
    _corrupt_pending(test_client, customer["id"], 80)

    first = test_client.post(f"/api/v1/admin/repair-customer/{customer['id']}").json()
    assert first["isValid"] is False
    assert first["repairs"] == ["Fixed pending amount: 80.00 -> 100.00"]
    assert first["customerId"] == customer["id"]

    commits = _storage(test_client).commits
    second = test_client.post(f"/api/v1/admin/repair-customer/{customer['id']}").json()
    assert second["isValid"] is True
    assert second["repairs"] == []
    assert _storage(test_client).commits == commits

    assert test_client.get(f"/api/v1/customers/{customer['id']}").json()["pendingAmount"] == 100


def test_repair_customer_force(test_client):
    customer = _customer_with_order(test_client)
    _corrupt_pending(test_client, customer["id"], 50_000)

    unforced = test_client.post(f"/api/v1/admin/repair-customer/{customer['id']}").json()
    assert unforced["repairs"] == []
    assert "nothing repaired" in unforced["message"]

    forced = test_client.post(f"/api/v1/admin/repair-customer/{customer['id']}", params={"force": True}).json()
    assert forced["repairs"]


def test_repair_order(test_client):
    customer = _customer_with_order(test_client)
    storage = _storage(test_client)
    order_id = next(iter(storage.orders))
    storage.orders[order_id] = storage.orders[order_id].model_copy(update={"paid_amount": 150})

    response = test_client.post(f"/api/v1/admin/repair-order/{order_id}")

    data = response.json()
    assert response.status_code == status.HTTP_200_OK
    assert data["wasCorrupted"] is True
    assert data["order"]["paidAmount"] == 100
    assert data["order"]["paymentStatus"] == "paid"
    assert test_client.get(f"/api/v1/customers/{customer['id']}").json()["pendingAmount"] == 0

    assert test_client.post("/api/v1/admin/repair-order/missing").status_code == status.HTTP_404_NOT_FOUND


def test_repair_supplier(test_client):
    supplier = test_client.post("/api/v1/suppliers", json={"name": "Farm Fresh", "openingDebt": 300}).json()
    storage = _storage(test_client)
    storage.suppliers[supplier["id"]] = storage.suppliers[supplier["id"]].model_copy(update={"debt": 250})

    data = test_client.post(f"/api/v1/admin/repair-supplier/{supplier['id']}").json()

    assert data["supplierId"] == supplier["id"]
    assert data["calculatedAmount"] == 300
    assert data["repairs"] == ["Fixed debt: 250.00 -> 300.00"]
    assert test_client.get(f"/api/v1/suppliers/{supplier['id']}").json()["debt"] == 300


def test_unknown_entities_are_404(test_client):
    assert test_client.post("/api/v1/admin/repair-customer/missing").status_code == 404
    assert test_client.get("/api/v1/admin/verify-customer/missing").status_code == 404
    assert test_client.post("/api/v1/admin/repair-supplier/missing").status_code == 404
