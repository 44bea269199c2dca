"""
HTTP client shared by the storefront and admin pages.

All requests go through one ``requests.Session`` so the session cookie set at
admin login travels with every later call. GETs are served through the
injected ``QueryCache``; mutations bypass it and invalidate the reads derived
from the collection they touched.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import urlencode

import requests

from costume_rental.client.cache import QueryCache
from costume_rental.client.errors import error_from_response

logger = logging.getLogger(__name__)

CATEGORIES = "/api/categories"
COSTUMES = "/api/costumes"
ACCESSORIES = "/api/accessories"
BOOKINGS = "/api/bookings"
AVAILABILITY = "/api/availability"
AUTH = "/api/admin/auth"
AUTH_USER = "/api/admin/auth/user"
DASHBOARD_STATS = "/api/admin/dashboard/stats"
ADMIN_ITEMS = "/api/admin/items"
ADMIN_BOOKINGS = "/api/admin/bookings"
ADMIN_CATEGORIES = "/api/admin/categories"

CATALOG_READS = (COSTUMES, ACCESSORIES, ADMIN_ITEMS)

# Mutated collection -> cached reads that become stale
INVALIDATIONS: Dict[str, Tuple[str, ...]] = {
    BOOKINGS: CATALOG_READS + (ADMIN_BOOKINGS, DASHBOARD_STATS),
    ADMIN_BOOKINGS: CATALOG_READS + (ADMIN_BOOKINGS, DASHBOARD_STATS),
    ADMIN_ITEMS: CATALOG_READS + (DASHBOARD_STATS,),
    ADMIN_CATEGORIES: CATALOG_READS + (CATEGORIES, ADMIN_CATEGORIES),
    AUTH: (AUTH_USER,),
    AVAILABILITY: (),
}


def invalidation_targets(path: str) -> Tuple[str, ...]:
    """Cached read prefixes made stale by a mutation on ``path``."""
    matches = [
        collection
        for collection in INVALIDATIONS
        if path == collection or path.startswith(collection + "/")
    ]
    if not matches:
        return (path,)
    return INVALIDATIONS[max(matches, key=len)]


def build_key(path: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Cache key for a read: the path plus its non-empty query parameters, sorted."""
    query = clean_params(params)
    if not query:
        return path
    return f"{path}?{urlencode(sorted(query.items()))}"


def clean_params(params: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    if not params:
        return {}
    return {
        key: str(value)
        for key, value in params.items()
        if value is not None and value != ""
    }


def parse_body(response: requests.Response) -> Any:
    """JSON when the content type says so, otherwise the raw text."""
    if response.status_code == 204 or not response.content:
        return None
    if "application/json" in response.headers.get("Content-Type", ""):
        return response.json()
    return response.text


class ApiClient:
    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        cache: Optional[QueryCache] = None,
        timeout: float = 10,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.cache = cache if cache is not None else QueryCache()
        self.timeout = timeout

    def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Send one uncached request; non-2xx responses raise an ``ApiError``."""
        response = self.session.request(
            method,
            f"{self.base_url}{path}",
            json=json,
            params=clean_params(params) or None,
            timeout=self.timeout,
        )
        if not response.ok:
            error = error_from_response(response)
            logger.info(f"{method} {path} failed: {error}")
            raise error
        return parse_body(response)

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.cache.fetch(
            build_key(path, params), lambda: self.request("GET", path, params=params)
        )

    def _mutate(self, method: str, path: str, json: Any = None) -> Any:
        result = self.request(method, path, json=json)
        self.cache.invalidate(*invalidation_targets(path))
        return result

    def post(self, path: str, json: Any = None) -> Any:
        return self._mutate("POST", path, json)

    def put(self, path: str, json: Any = None) -> Any:
        return self._mutate("PUT", path, json)

    def patch(self, path: str, json: Any = None) -> Any:
        return self._mutate("PATCH", path, json)

    def delete(self, path: str) -> Any:
        return self._mutate("DELETE", path)

    def close(self) -> None:
        self.cache.clear()
        self.session.close()
