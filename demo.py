#!/usr/bin/env python
import os
from storefront_sdk.client import StoreClient

def main():
    c = StoreClient(base_url="http://127.0.0.1:3000", admin_key=os.environ["ADMIN_API_KEY"])

    # -----------------------------
    # Create products (admin)
    # -----------------------------
    print("Creating products...")
    lamp = c.create_product("Desk Lamp", 39.5, "Warm LED desk lamp", ["lamp-front.jpg", "lamp-side.jpg"])
    mug = c.create_product("Mug", 12, "Stoneware mug", ["mug.jpg"], color="blue")
    print(lamp)
    print(mug)

    # -----------------------------
    # List / get products
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())
    print(f"\nFetching product {mug['id']}...")
    print(c.get_product(mug["id"]))

    # -----------------------------
    # Cart
    # -----------------------------
    print("\nAdding products to cart...")
    print(c.add_to_cart(lamp))
    print(c.add_to_cart(mug))
    print(c.add_to_cart(mug))

    print("\nRemoving the first line item...")
    print(c.remove_from_cart(0))

    print("\nViewing cart...")
    print(c.view_cart())

    # -----------------------------
    # Delete product (admin)
    # -----------------------------
    print(f"\nDeleting product {lamp['id']}...")
    print(c.delete_product(lamp["id"]))
    print(c.list_products())

if __name__ == "__main__":
    main()
