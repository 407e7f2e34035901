"""
Shopify Admin API client.

GraphQL for catalog reads and the productUpdate mutation, REST for
per-variant weight reads/writes and the shop connectivity check.
No retries: a failed call raises and the caller decides whether to continue.
"""

import json

import requests

from shopify_audit.config import DEFAULT_API_VERSION
from shopify_audit.errors import ApiError, NetworkError

# =============================================================================
# SHOPIFY ADMIN API CLIENT
# =============================================================================


class ShopifyClient:
    """Minimal Shopify Admin API client."""

    def __init__(self, shop: str, access_token: str, api_version: str = DEFAULT_API_VERSION):
        self.shop = shop
        self.access_token = access_token
        self.api_version = api_version
        self.base_url = f"https://{shop}/admin/api/{api_version}"
        self.graphql_url = f"{self.base_url}/graphql.json"

    def _headers(self):
        return {
            "X-Shopify-Access-Token": self.access_token,
            "Content-Type": "application/json",
        }

    def _request(self, method: str, url: str, **kwargs) -> dict:
        try:
            response = requests.request(method, url, headers=self._headers(), **kwargs)
        except requests.RequestException as e:
            raise NetworkError(None, str(e)) from e

        if not 200 <= response.status_code < 300:
            raise NetworkError(response.status_code, response.text[:500])

        try:
            return response.json()
        except ValueError as e:
            raise NetworkError(response.status_code, f"Invalid JSON: {e}") from e

    def query(self, document: str, variables: dict = None) -> dict:
        """Execute a GraphQL query or mutation and return its data member."""
        payload = {"query": document, "variables": variables or {}}
        data = self._request("POST", self.graphql_url, json=payload)

        errors = data.get("errors")
        if errors:
            print(f"GraphQL Errors: {json.dumps(errors, indent=2)}")
            raise ApiError(errors)

        return data.get("data") or {}

    def rest_get(self, path: str) -> dict:
        """GET an Admin REST resource, e.g. 'variants/123.json'."""
        return self._request("GET", f"{self.base_url}/{path.lstrip('/')}")

    def rest_put(self, path: str, body: dict) -> dict:
        """PUT an Admin REST resource."""
        return self._request("PUT", f"{self.base_url}/{path.lstrip('/')}", json=body)

    def get_shop(self) -> dict:
        """Fetch shop info; used as the startup connectivity check."""
        return self.rest_get("shop.json").get("shop", {})
