# tests/test_admin.py
import pytest

from conftest import ADMIN_KEY

PEN = {"name": "Pen", "price": 1, "description": "pen", "images": ["pen.jpg"]}
LAMP = {"id": 1, "name": "Lamp", "price": 20, "description": "desk lamp", "images": ["lamp.jpg"]}

@pytest.mark.parametrize("headers", [{}, {"x-admin-key": ""}, {"x-admin-key": "wrong"},
                                     {"x-admin-key": ADMIN_KEY.upper()}])
def test_bad_key_is_403_and_never_mutates(client, seed, read_store, headers):
    seed("products", [LAMP])

    r = client.post("/api/admin/products", headers=headers, json=PEN)
    assert r.status_code == 403
    assert r.json() == {"error": "Forbidden: Admin access required"}

    r = client.delete("/api/admin/products/1", headers=headers)
    assert r.status_code == 403
    assert read_store("products") == [LAMP]

def test_forbidden_takes_precedence_over_validation(client):
    r = client.post("/api/admin/products", headers={"x-admin-key": "nope"}, json={"name": ""})
    assert r.status_code == 403

def test_exact_key_passes_gate(client):
    r = client.post("/api/admin/products", headers={"x-admin-key": ADMIN_KEY}, json=PEN)
    assert r.status_code == 201

def test_public_routes_need_no_key(client):
    assert client.get("/api/products").status_code == 200
    assert client.get("/api/cart").status_code == 200
