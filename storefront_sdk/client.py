# storefront_sdk/client.py
import requests
import httpx
from typing import Optional, Dict, Any, List
from rich import print

class StoreClient:
    def __init__(self, base_url: str = "http://localhost:3000", admin_key: Optional[str] = None,
                 timeout: int = 10, session=None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.admin_key = admin_key

    def _admin_headers(self) -> Dict[str, str]:
        if not self.admin_key:
            raise ValueError("admin_key is required for admin operations")
        return {"x-admin-key": self.admin_key}

    # Products
    def list_products(self) -> List[Dict[str, Any]]:
        r = self.session.get(f"{self.base_url}/api/products", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: int) -> Dict[str, Any]:
        r = self.session.get(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Cart
    def view_cart(self) -> List[Dict[str, Any]]:
        r = self.session.get(f"{self.base_url}/api/cart", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def add_to_cart(self, product: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Snapshot a product (as returned by get_product) into the cart."""
        r = self.session.post(f"{self.base_url}/api/cart", json=_line_item(product), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def remove_from_cart(self, index: int) -> List[Dict[str, Any]]:
        # indexes shift after every removal; re-read the cart before the next one
        r = self.session.delete(f"{self.base_url}/api/cart/{index}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    async def add_to_cart_async(self, product: Dict[str, Any]):
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            r = await client.post(f"{self.base_url}/api/cart", json=_line_item(product))
            return r

    # Admin
    def create_product(self, name: str, price: float, description: str, images: List[str], **extra: Any):
        payload = {"name": name, "price": price, "description": description, "images": images, **extra}
        r = self.session.post(f"{self.base_url}/api/admin/products", json=payload,
                              headers=self._admin_headers(), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: int) -> bool:
        r = self.session.delete(f"{self.base_url}/api/admin/products/{product_id}",
                                headers=self._admin_headers(), timeout=self.timeout)
        if r.status_code == 404:
            return False
        r.raise_for_status()
        return True


def _line_item(product: Dict[str, Any]) -> Dict[str, Any]:
    return {k: product.get(k) for k in ("id", "name", "price", "images")}


if __name__ == "__main__":
    import argparse
    import json

    parser = argparse.ArgumentParser(description="Storefront CLI")
    parser.add_argument("--base-url", default="http://127.0.0.1:3000")
    parser.add_argument("--admin-key", help="Value sent as x-admin-key for admin commands")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---------------------------
    # Product commands
    # ---------------------------
    subparsers.add_parser("list-products", help="List all products")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", type=int, required=True, help="ID of the product")

    cp = subparsers.add_parser("create-product", help="Create a product (admin)")
    cp.add_argument("--name", required=True, help="Product name")
    cp.add_argument("--price", type=float, required=True, help="Price")
    cp.add_argument("--description", required=True, help="Product description")
    cp.add_argument("--image", action="append", required=True, help="Image URL (repeatable)")

    dp = subparsers.add_parser("delete-product", help="Delete a product (admin)")
    dp.add_argument("--product-id", type=int, required=True, help="ID of the product")

    # ---------------------------
    # Cart commands
    # ---------------------------
    subparsers.add_parser("view-cart", help="View cart contents")

    add = subparsers.add_parser("add-to-cart", help="Add a product to the cart")
    add.add_argument("--product-id", type=int, required=True, help="Product ID")

    rm = subparsers.add_parser("remove-from-cart", help="Remove a cart line by position")
    rm.add_argument("--index", type=int, required=True, help="Zero-based cart position")

    # ---------------------------
    # Parse and execute
    # ---------------------------
    args = parser.parse_args()
    c = StoreClient(base_url=args.base_url, admin_key=args.admin_key)

    if args.command == "list-products":
        print(c.list_products())
    elif args.command == "get-product":
        print(c.get_product(args.product_id))
    elif args.command == "create-product":
        print(c.create_product(args.name, args.price, args.description, args.image))
    elif args.command == "delete-product":
        print({"deleted": c.delete_product(args.product_id)})
    elif args.command == "view-cart":
        print(json.dumps(c.view_cart(), indent=2))
    elif args.command == "add-to-cart":
        print(c.add_to_cart(c.get_product(args.product_id)))
    elif args.command == "remove-from-cart":
        print(c.remove_from_cart(args.index))
