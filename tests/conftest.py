"""
Shared fixtures: a scripted in-memory Shopify client and node builders.

No test touches the network.
"""

from __future__ import annotations

import pytest

from shopify_audit.config import AuditConfig
from shopify_audit.errors import NetworkError


def product_node(pid, title, handle, seo_title=None, variants=()):
    return {
        "id": f"gid://shopify/Product/{pid}",
        "handle": handle,
        "title": title,
        "seo": {"title": seo_title},
        "variants": {
            "edges": [
                {
                    "node": {
                        "id": f"gid://shopify/ProductVariant/{vid}",
                        "title": vtitle,
                        "sku": sku,
                        "selectedOptions": [{"name": "Title", "value": vtitle}],
                    }
                }
                for vid, vtitle, sku in variants
            ]
        },
    }


def products_page(nodes, has_next_page=False, cursor_prefix="c"):
    return {
        "products": {
            "pageInfo": {"hasNextPage": has_next_page, "hasPreviousPage": False},
            "edges": [
                {"cursor": f"{cursor_prefix}{i}", "node": node}
                for i, node in enumerate(nodes)
            ],
        }
    }


class FakeShopifyClient:
    """
    Scripted stand-in for ShopifyClient.

    pages: product query responses, returned in order (an Exception is raised)
    metafields: product gid -> list of {"key", "value"} (or an Exception)
    variants: variant id -> REST variant dict (or an Exception); missing ids 404
    user_errors: product gid -> userErrors list for productUpdate
    put_errors: variant id -> Exception raised by rest_put
    """

    def __init__(self, pages=None, metafields=None, variants=None,
                 user_errors=None, put_errors=None, shop=None):
        self.pages = list(pages or [])
        self.metafields = metafields or {}
        self.variants = variants or {}
        self.user_errors = user_errors or {}
        self.put_errors = put_errors or {}
        self.shop = shop if shop is not None else {"name": "Test Store", "email": "owner@example.com"}
        self.product_queries = []
        self.puts = []
        self.mutations = []

    def query(self, document, variables=None):
        variables = variables or {}
        if "GetProducts" in document:
            self.product_queries.append(variables)
            if not self.pages:
                return {}
            page = self.pages.pop(0)
            if isinstance(page, Exception):
                raise page
            return page

        if "GetProductMetafields" in document:
            found = self.metafields.get(variables["id"], [])
            if isinstance(found, Exception):
                raise found
            return {"product": {"metafields": {"edges": [{"node": n} for n in found]}}}

        if "productUpdate" in document:
            self.mutations.append(variables)
            product_id = variables["input"]["id"]
            found = self.user_errors.get(product_id, [])
            if isinstance(found, Exception):
                raise found
            return {"productUpdate": {"product": {"id": product_id}, "userErrors": found}}

        raise AssertionError(f"unexpected query: {document[:40]}")

    def rest_get(self, path):
        variant_id = path.split("/")[-1].replace(".json", "")
        found = self.variants.get(variant_id)
        if found is None:
            raise NetworkError(404, "Not Found")
        if isinstance(found, Exception):
            raise found
        return {"variant": found}

    def rest_put(self, path, body):
        variant_id = path.split("/")[-1].replace(".json", "")
        self.puts.append((path, body))
        error = self.put_errors.get(variant_id)
        if error is not None:
            raise error
        return {"variant": body["variant"]}

    def get_shop(self):
        if isinstance(self.shop, Exception):
            raise self.shop
        return self.shop


@pytest.fixture()
def config(tmp_path) -> AuditConfig:
    return AuditConfig(shop="test.myshopify.com", token="shpat_test", output_dir=tmp_path)


@pytest.fixture()
def red_cap_client() -> FakeShopifyClient:
    """One product with no SEO title and one variant with no weight."""
    return FakeShopifyClient(
        pages=[products_page([product_node(1, "Red Cap", "red-cap", seo_title="", variants=[(11, "Default Title", "RC-1")])])],
        variants={"11": {"id": 11, "weight": None, "weight_unit": "kg"}},
    )
