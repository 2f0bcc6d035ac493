# sdk/pystore.py
from typing import Any, Dict, Optional

import requests


class StoreAPIError(Exception):
    def __init__(self, status_code: int, error: str, message: str):
        super().__init__(f"{status_code} {error}: {message}")
        self.status_code = status_code
        self.error = error
        self.message = message


class StoreClient:
    """Thin client for the product catalog API.

    ``session`` defaults to a ``requests.Session``; anything with the same
    get/post/put/delete interface works (tests pass a FastAPI TestClient).
    """

    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None,
                 timeout: int = 10, session: Any = None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.headers = {"x-api-key": api_key} if api_key else {}

    def _handle(self, r) -> Any:
        if r.status_code >= 400:
            try:
                body = r.json()
            except ValueError:
                body = {}
            raise StoreAPIError(
                r.status_code,
                body.get("error", "HTTP error"),
                body.get("message", r.text),
            )
        return r.json()

    def index(self):
        r = self.session.get(f"{self.base_url}/", timeout=self.timeout)
        return self._handle(r)

    # Products: reads
    def list_products(self, category: Optional[str] = None, in_stock: Optional[bool] = None,
                      page: Optional[int] = None, limit: Optional[int] = None):
        params: Dict[str, Any] = {}
        if category:
            params["category"] = category
        if in_stock is not None:
            params["inStock"] = "true" if in_stock else "false"
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        r = self.session.get(f"{self.base_url}/api/products", params=params, timeout=self.timeout)
        return self._handle(r)

    def search_products(self, q: str):
        r = self.session.get(f"{self.base_url}/api/products/search", params={"q": q}, timeout=self.timeout)
        return self._handle(r)

    def stats(self):
        r = self.session.get(f"{self.base_url}/api/products/stats", timeout=self.timeout)
        return self._handle(r)

    def get_product(self, product_id: str):
        r = self.session.get(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        return self._handle(r)

    # Products: writes (need api_key)
    def create_product(self, name: str, description: str, price: float, category: str, in_stock: bool = True):
        payload = {"name": name, "description": description, "price": price,
                   "category": category, "inStock": in_stock}
        r = self.session.post(f"{self.base_url}/api/products", json=payload,
                              headers=self.headers, timeout=self.timeout)
        return self._handle(r)

    def update_product(self, product_id: str, name: str, description: str, price: float,
                       category: str, in_stock: bool):
        # PUT replaces every field, so all of them are required here too
        payload = {"name": name, "description": description, "price": price,
                   "category": category, "inStock": in_stock}
        r = self.session.put(f"{self.base_url}/api/products/{product_id}", json=payload,
                             headers=self.headers, timeout=self.timeout)
        return self._handle(r)

    def delete_product(self, product_id: str):
        r = self.session.delete(f"{self.base_url}/api/products/{product_id}",
                                headers=self.headers, timeout=self.timeout)
        return self._handle(r)


if __name__ == "__main__":
    import argparse
    import os

    from rich import print

    parser = argparse.ArgumentParser(description="Product catalog client")
    parser.add_argument("--base-url", default=os.getenv("STORE_URL", "http://127.0.0.1:3000"))
    parser.add_argument("--api-key", default=os.getenv("API_KEY"))
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List products")
    lp.add_argument("--category", help="Filter by category")
    lp.add_argument("--in-stock", choices=["true", "false"], help="Filter by stock status")
    lp.add_argument("--page", type=int)
    lp.add_argument("--limit", type=int)

    sp = subparsers.add_parser("search", help="Search name and description")
    sp.add_argument("--q", required=True)

    subparsers.add_parser("stats", help="Catalog statistics")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True)

    for cmd in ("create-product", "update-product"):
        p = subparsers.add_parser(cmd)
        if cmd == "update-product":
            p.add_argument("--product-id", required=True)
        p.add_argument("--name", required=True)
        p.add_argument("--description", required=True)
        p.add_argument("--price", type=float, required=True)
        p.add_argument("--category", required=True)
        p.add_argument("--out-of-stock", action="store_true")

    dp = subparsers.add_parser("delete-product")
    dp.add_argument("--product-id", required=True)

    args = parser.parse_args()
    c = StoreClient(base_url=args.base_url, api_key=args.api_key)

    try:
        if args.command == "list-products":
            in_stock = None if args.in_stock is None else args.in_stock == "true"
            print(c.list_products(args.category, in_stock, args.page, args.limit))
        elif args.command == "search":
            print(c.search_products(args.q))
        elif args.command == "stats":
            print(c.stats())
        elif args.command == "get-product":
            print(c.get_product(args.product_id))
        elif args.command == "create-product":
            print(c.create_product(args.name, args.description, args.price, args.category,
                                   not args.out_of_stock))
        elif args.command == "update-product":
            print(c.update_product(args.product_id, args.name, args.description, args.price,
                                   args.category, not args.out_of_stock))
        elif args.command == "delete-product":
            print(c.delete_product(args.product_id))
    except StoreAPIError as e:
        print(f"[red]{e}[/red]")
        raise SystemExit(1)
