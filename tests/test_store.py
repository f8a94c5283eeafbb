# tests/test_store.py
import pytest

from storefront.config import MissingPolicy, Settings
from storefront.core import StoreReadError
from storefront.database import CART, PRODUCTS, JsonStore
from storefront.main import create_app
from fastapi.testclient import TestClient

from conftest import ADMIN_KEY

RECORDS = [{"id": 2, "name": "b", "images": ["x"]}, {"id": 1, "name": "a", "nested": {"k": [1, 2]}}]

def test_save_then_load_round_trip(settings):
    store = JsonStore.from_settings(settings)
    assert store.save(PRODUCTS, RECORDS) is True
    assert store.load(PRODUCTS) == RECORDS

def test_save_is_pretty_printed(settings):
    store = JsonStore.from_settings(settings)
    store.save(CART, RECORDS)
    text = settings.cart_path.read_text()
    assert text.startswith("[\n  {")

def test_non_array_file_counts_as_unreadable(settings):
    settings.products_path.write_text('{"id": 1}')
    store = JsonStore.from_settings(settings)
    assert store.load(PRODUCTS) == []

def test_fail_if_missing_policy_raises(tmp_path):
    settings = Settings(admin_api_key=ADMIN_KEY, data_dir=tmp_path,
                        products_missing_policy=MissingPolicy.FAIL_IF_MISSING)
    store = JsonStore.from_settings(settings)
    with pytest.raises(StoreReadError):
        store.load(PRODUCTS)
    # the cart keeps its own policy
    assert store.load(CART) == []

def test_unknown_store_is_fatal(settings):
    store = JsonStore.from_settings(settings)
    with pytest.raises(StoreReadError):
        store.load("orders")

def test_read_fault_maps_to_500(tmp_path):
    settings = Settings(admin_api_key=ADMIN_KEY, data_dir=tmp_path,
                        products_missing_policy="fail")
    client = TestClient(create_app(settings))
    r = client.get("/api/products")
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to read products data"}
    assert client.get("/api/products/1").status_code == 500

def test_save_failure_is_reported_not_raised(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    settings = Settings(admin_api_key=ADMIN_KEY, data_dir=blocker)
    store = JsonStore.from_settings(settings)
    assert store.save(CART, RECORDS) is False

def test_write_fault_still_answers_with_intended_state(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    client = TestClient(create_app(Settings(admin_api_key=ADMIN_KEY, data_dir=blocker)))
    item = {"id": 1, "name": "X", "price": 5, "images": ["a"]}
    r = client.post("/api/cart", json=item)
    assert r.status_code == 201
    assert r.json() == [item]
    assert r.headers["X-Persisted"] == "false"
    # nothing reached disk, so the next read starts from empty again
    assert client.get("/api/cart").json() == []

def test_failed_write_leaves_previous_file_intact(settings, monkeypatch):
    store = JsonStore.from_settings(settings)
    store.save(PRODUCTS, RECORDS)

    def broken_replace(src, dst):
        raise OSError("disk full")
    monkeypatch.setattr("storefront.database.os.replace", broken_replace)

    assert store.save(PRODUCTS, []) is False
    assert store.load(PRODUCTS) == RECORDS
    assert [p.name for p in settings.data_dir.iterdir()] == ["products.json"]
