# sdk/productapi.py
from typing import Any, Dict, Optional

import httpx
import requests
from rich import print

API_KEY_HEADER = "x-api-key"


class ProductApiError(Exception):
    """Raised for any non-2xx response; carries the server's error envelope."""

    def __init__(self, status_code: int, name: str, message: str):
        super().__init__(f"{status_code} {name}: {message}")
        self.status_code = status_code
        self.name = name
        self.message = message


def _raise_for_error(r) -> None:
    if r.status_code < 400:
        return
    try:
        err = r.json()["error"]
        raise ProductApiError(r.status_code, err["name"], err["message"])
    except (ValueError, KeyError, TypeError):
        raise ProductApiError(r.status_code, "HTTPError", r.text)


def _product_payload(name=None, price=None, description=None, category=None, in_stock=None) -> Dict[str, Any]:
    fields = {"name": name, "price": price, "description": description, "category": category, "inStock": in_stock}
    return {k: v for k, v in fields.items() if v is not None}


class ProductClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: str = "secret-api-key",
                 timeout: int = 10, session=None, async_transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.async_transport = async_transport
        self.session.headers.update({API_KEY_HEADER: api_key})

    def _url(self, path: str = "") -> str:
        return f"{self.base_url}/api/products{path}"

    def list_products(self, category: Optional[str] = None, search: Optional[str] = None,
                      page: Optional[int] = None, limit: Optional[int] = None):
        params = {}
        if category:
            params["category"] = category
        if search:
            params["search"] = search
        if page is not None:
            params["page"] = str(page)
        if limit is not None:
            params["limit"] = str(limit)
        r = self.session.get(self._url(), params=params, timeout=self.timeout)
        _raise_for_error(r)
        return r.json()

    def get_stats(self):
        r = self.session.get(self._url("/stats"), timeout=self.timeout)
        _raise_for_error(r)
        return r.json()

    def get_product(self, product_id: str):
        r = self.session.get(self._url(f"/{product_id}"), timeout=self.timeout)
        _raise_for_error(r)
        return r.json()

    def create_product(self, name: str, price: float, description: Optional[str] = None,
                       category: Optional[str] = None, in_stock: Optional[bool] = None):
        payload = _product_payload(name, price, description, category, in_stock)
        r = self.session.post(self._url(), json=payload, timeout=self.timeout)
        _raise_for_error(r)
        return r.json()

    def update_product(self, product_id: str, name: Optional[str] = None, price: Optional[float] = None,
                       description: Optional[str] = None, category: Optional[str] = None,
                       in_stock: Optional[bool] = None):
        payload = _product_payload(name, price, description, category, in_stock)
        r = self.session.put(self._url(f"/{product_id}"), json=payload, timeout=self.timeout)
        _raise_for_error(r)
        return r.json()

    def delete_product(self, product_id: str) -> None:
        r = self.session.delete(self._url(f"/{product_id}"), timeout=self.timeout)
        _raise_for_error(r)

    # Async create (example)
    async def create_product_async(self, name: str, price: float, description: Optional[str] = None,
                                   category: Optional[str] = None, in_stock: Optional[bool] = None):
        payload = _product_payload(name, price, description, category, in_stock)
        headers = {API_KEY_HEADER: self.api_key}
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.async_transport) as client:
            r = await client.post(self._url(), json=payload, headers=headers)
            _raise_for_error(r)
            return r.json()


if __name__ == "__main__":
    import argparse
    import os

    parser = argparse.ArgumentParser(description="Product API CLI")
    parser.add_argument("--base-url", default="http://127.0.0.1:3000")
    parser.add_argument("--api-key", default=os.environ.get("API_KEY", "secret-api-key"))
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list", help="List products")
    lp.add_argument("--category", help="Filter products by category")
    lp.add_argument("--search", help="Substring of the product name")
    lp.add_argument("--page", type=int)
    lp.add_argument("--limit", type=int)

    subparsers.add_parser("stats", help="Show product statistics")

    gp = subparsers.add_parser("get", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True)

    cp = subparsers.add_parser("create", help="Create a product")
    cp.add_argument("--name", required=True)
    cp.add_argument("--price", type=float, required=True)
    cp.add_argument("--description")
    cp.add_argument("--category")
    cp.add_argument("--out-of-stock", action="store_true")

    up = subparsers.add_parser("update", help="Update fields of a product")
    up.add_argument("--product-id", required=True)
    up.add_argument("--name")
    up.add_argument("--price", type=float)
    up.add_argument("--description")
    up.add_argument("--category")
    up.add_argument("--in-stock", choices=["true", "false"])

    dp = subparsers.add_parser("delete", help="Delete a product")
    dp.add_argument("--product-id", required=True)

    args = parser.parse_args()
    c = ProductClient(base_url=args.base_url, api_key=args.api_key)

    try:
        if args.command == "list":
            print(c.list_products(args.category, args.search, args.page, args.limit))
        elif args.command == "stats":
            print(c.get_stats())
        elif args.command == "get":
            print(c.get_product(args.product_id))
        elif args.command == "create":
            print(c.create_product(args.name, args.price, args.description, args.category,
                                   False if args.out_of_stock else None))
        elif args.command == "update":
            in_stock = None if args.in_stock is None else args.in_stock == "true"
            print(c.update_product(args.product_id, args.name, args.price, args.description,
                                   args.category, in_stock))
        elif args.command == "delete":
            c.delete_product(args.product_id)
            print(f"[green]Deleted {args.product_id}[/green]")
    except ProductApiError as e:
        print(f"[red]{e}[/red]")
        raise SystemExit(1)
