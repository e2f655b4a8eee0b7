# sdk/pycatalog.py
from typing import Any, Dict, List, Optional

import httpx
import requests

from catalog.config import API_URL


class CatalogAPIError(Exception):
    """Raised for any non-2xx answer; keeps the decoded error body."""

    def __init__(self, status_code: int, body: Any):
        self.status_code = status_code
        self.body = body
        super().__init__(f"HTTP {status_code}: {self.describe()}")

    def describe(self) -> str:
        if isinstance(self.body, dict):
            if "errors" in self.body:
                return "; ".join(str(e) for e in self.body["errors"])
            if "error" in self.body:
                return str(self.body["error"])
        return str(self.body)


def _decode(r) -> Any:
    if r.status_code == 204 or not r.content:
        return None
    try:
        return r.json()
    except ValueError:
        return r.text


def _check(r) -> Any:
    body = _decode(r)
    if r.status_code >= 400:
        raise CatalogAPIError(r.status_code, body)
    return body


class CatalogClient:
    def __init__(self, base_url: str = API_URL, timeout: int = 10, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _url(self, path: str = "") -> str:
        return f"{self.base_url}/api/products{path}"

    # Reads
    def list_products(self, category: Optional[str] = None, q: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {}
        if category:
            params["category"] = category
        if q:
            params["q"] = q
        r = self.session.get(self._url(), params=params, timeout=self.timeout)
        return _check(r)

    def list_categories(self) -> List[str]:
        r = self.session.get(self._url("/categories"), timeout=self.timeout)
        return _check(r)

    def get_product(self, product_id: str) -> Dict[str, Any]:
        r = self.session.get(self._url(f"/{product_id}"), timeout=self.timeout)
        return _check(r)

    # Writes
    def create_product(self, title: str, price: Any, category: Optional[str] = None, **fields) -> Dict[str, Any]:
        payload = {"title": title, "price": price, **fields}
        if category is not None:
            payload["category"] = category
        r = self.session.post(self._url(), json=payload, timeout=self.timeout)
        return _check(r)

    def update_product(self, product_id: str, **fields) -> Dict[str, Any]:
        r = self.session.patch(self._url(f"/{product_id}"), json=fields, timeout=self.timeout)
        return _check(r)

    def delete_product(self, product_id: str) -> None:
        r = self.session.delete(self._url(f"/{product_id}"), timeout=self.timeout)
        _check(r)

    # Async create (example)
    async def create_product_async(
        self,
        title: str,
        price: Any,
        category: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **fields,
    ) -> Dict[str, Any]:
        payload = {"title": title, "price": price, **fields}
        if category is not None:
            payload["category"] = category
        async with httpx.AsyncClient(timeout=self.timeout, transport=transport) as client:
            r = await client.post(self._url(), json=payload)
            return _check(r)
