import asyncio
from storefront_sdk.client import StoreClient

async def simulate_add(client, product, n):
    r = await client.add_to_cart_async(product)
    if r.status_code == 201:
        print(f"✅ add #{n} accepted (persisted={r.headers.get('X-Persisted')})")
    else:
        print(f"❌ add #{n} failed with {r.status_code}: {r.text}")

async def main():
    c = StoreClient(base_url="http://127.0.0.1:3000")

    products = c.list_products()
    if not products:
        print("Catalog is empty; run demo.py first.")
        return
    product = products[0]
    before = len(c.view_cart())

    print(f"\n⚡ Adding {product['name']} to the cart 10 times concurrently...")
    await asyncio.gather(*(simulate_add(c, product, n) for n in range(10)))

    after = len(c.view_cart())
    print(f"\n🛒 Cart grew from {before} to {after} line items (expected {before + 10})")

if __name__ == "__main__":
    asyncio.run(main())
