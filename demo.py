#!/usr/bin/env python
import uuid
from sdk.pystore import StoreClient


def main():
    c = StoreClient(base_url="http://127.0.0.1:3000")

    # -----------------------------
    # Sign up and log in
    # -----------------------------
    username = f"demo-{uuid.uuid4().hex[:6]}"
    print(f"Signing up {username}...")
    print(c.signup(username, "s3cret"))

    print("\nLogging in...")
    print(c.login(username, "s3cret"))

    # -----------------------------
    # Browse the catalog
    # -----------------------------
    print("\nListing items...")
    print(c.list_items())

    print("\nElectronics only...")
    print(c.list_items(category="Electronics"))

    print("\nPriced between 100 and 200...")
    print(c.list_items(min_price=100, max_price=200))

    # -----------------------------
    # Manage items
    # -----------------------------
    print("\nCreating an item...")
    item = c.create_item("Desk Lamp", 45, "Home Goods")
    print(item)

    print("\nUpdating its price...")
    print(c.update_item(item["id"], price=39))

    print("\nDeleting it...")
    print(c.delete_item(item["id"]))

    # -----------------------------
    # Cart
    # -----------------------------
    print("\nAdding item 1 to cart...")
    print(c.add_to_cart(1, 2))


if __name__ == "__main__":
    main()
