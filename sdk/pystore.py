# sdk/pystore.py
import httpx
import requests
from typing import Any, Dict, Optional
from rich import print


class StoreClient:
    def __init__(self, base_url: str = "http://localhost:3000", token: Optional[str] = None, timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout
        self.token = None
        self.username = None
        if token:
            self.set_token(token)

    def set_token(self, token: str):
        self.token = token
        self.session.headers.update({"Authorization": f"Bearer {token}"})

    def _auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    # Auth
    def signup(self, username: str, password: str) -> str:
        r = self.session.post(f"{self.base_url}/api/signup", json={"username": username, "password": password}, timeout=self.timeout)
        r.raise_for_status()
        return r.text

    def login(self, username: str, password: str) -> Dict[str, Any]:
        r = self.session.post(f"{self.base_url}/api/login", json={"username": username, "password": password}, timeout=self.timeout)
        r.raise_for_status()
        body = r.json()
        # later calls to protected endpoints reuse the token
        self.set_token(body["accessToken"])
        self.username = body["username"]
        return body

    # Items
    def list_items(self, category: Optional[str] = None, min_price: Optional[float] = None, max_price: Optional[float] = None):
        params = {}
        if category:
            params["category"] = category
        if min_price is not None:
            params["minPrice"] = str(min_price)
        if max_price is not None:
            params["maxPrice"] = str(max_price)
        r = self.session.get(f"{self.base_url}/api/items", params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def create_item(self, name: str, price: Any, category: str):
        r = self.session.post(f"{self.base_url}/api/items", json={
            "name": name, "price": price, "category": category
        }, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def update_item(self, item_id: int, **fields):
        r = self.session.put(f"{self.base_url}/api/items/{item_id}", json=fields, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_item(self, item_id: int) -> bool:
        r = self.session.delete(f"{self.base_url}/api/items/{item_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.status_code == 204

    # Cart
    def add_to_cart(self, item_id: Any, quantity: int = 1) -> str:
        r = self.session.post(f"{self.base_url}/api/cart/add", json={"itemId": item_id, "quantity": quantity}, timeout=self.timeout)
        r.raise_for_status()
        return r.text

    # Async create (used by the concurrency demo)
    async def create_item_async(self, name: str, price: Any, category: str) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            # do not raise here; callers inspect 400/401/403 themselves
            return await client.post(
                f"{self.base_url}/api/items",
                json={"name": name, "price": price, "category": category},
                headers=self._auth_headers(),
            )

    def health(self):
        r = self.session.get(f"{self.base_url}/health", timeout=self.timeout)
        r.raise_for_status()
        return r.json()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="storefront SDK CLI")
    parser.add_argument("--base-url", default="http://127.0.0.1:3000", help="Service base URL")
    parser.add_argument("--token", help="Access token for protected commands")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---------------------------
    # Auth commands
    # ---------------------------
    su = subparsers.add_parser("signup", help="Create a user")
    su.add_argument("--username", required=True)
    su.add_argument("--password", required=True)

    li = subparsers.add_parser("login", help="Log in and print the access token")
    li.add_argument("--username", required=True)
    li.add_argument("--password", required=True)

    # ---------------------------
    # Item commands
    # ---------------------------
    ls = subparsers.add_parser("list-items", help="List catalog items")
    ls.add_argument("--category", help="Filter by exact category")
    ls.add_argument("--min-price", type=float, help="Inclusive lower price bound")
    ls.add_argument("--max-price", type=float, help="Inclusive upper price bound")

    ci = subparsers.add_parser("create-item", help="Create an item (needs --token)")
    ci.add_argument("--name", required=True)
    ci.add_argument("--price", type=float, required=True)
    ci.add_argument("--category", required=True)

    ui = subparsers.add_parser("update-item", help="Update fields of an item (needs --token)")
    ui.add_argument("--id", type=int, required=True)
    ui.add_argument("--name")
    ui.add_argument("--price", type=float)
    ui.add_argument("--category")

    di = subparsers.add_parser("delete-item", help="Delete an item (needs --token)")
    di.add_argument("--id", type=int, required=True)

    # ---------------------------
    # Cart commands
    # ---------------------------
    add = subparsers.add_parser("add-to-cart", help="Add an item to the cart (needs --token)")
    add.add_argument("--item-id", type=int, required=True)
    add.add_argument("--qty", type=int, default=1)

    args = parser.parse_args()
    c = StoreClient(base_url=args.base_url, token=args.token)

    if args.command == "signup":
        print(c.signup(args.username, args.password))
    elif args.command == "login":
        print(c.login(args.username, args.password))
    elif args.command == "list-items":
        print(c.list_items(args.category, args.min_price, args.max_price))
    elif args.command == "create-item":
        print(c.create_item(args.name, args.price, args.category))
    elif args.command == "update-item":
        fields = {k: v for k, v in (("name", args.name), ("price", args.price), ("category", args.category)) if v is not None}
        print(c.update_item(args.id, **fields))
    elif args.command == "delete-item":
        print(c.delete_item(args.id))
    elif args.command == "add-to-cart":
        print(c.add_to_cart(args.item_id, args.qty))
