import asyncio
import uuid
from sdk.pystore import StoreClient


async def create_one(client, n):
    r = await client.create_item_async(f"Concurrent item {n}", 10 + n, "Demo")
    if r.status_code == 201:
        print(f"✅ created {r.json()}")
    else:
        print(f"❌ request {n} failed with {r.status_code}: {r.text}")
    return r


async def main():
    c = StoreClient(base_url="http://127.0.0.1:3000")

    username = f"burst-{uuid.uuid4().hex[:6]}"
    c.signup(username, "s3cret")
    c.login(username, "s3cret")

    before = len(c.list_items())
    print(f"\n📦 Catalog has {before} items")

    print("\n⚡ Creating 10 items concurrently...")
    results = await asyncio.gather(*(create_one(c, n) for n in range(10)))

    after = c.list_items()
    ids = [it["id"] for it in after]
    print(f"\n📦 Catalog has {len(after)} items ({sum(r.status_code == 201 for r in results)} created)")
    if len(ids) != len(set(ids)):
        print("⚠️  duplicate ids present (ids are assigned from catalog length)")


if __name__ == "__main__":
    asyncio.run(main())
