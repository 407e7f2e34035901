"""
Product fetch - cursor-paginated catalog read.

READ-ONLY. Builds CatalogEntry records from the products connection.
Weight data is NOT part of this query; the analyze stage fetches it per variant.
"""

from dataclasses import dataclass, field
from typing import Optional

from shopify_audit.errors import ApiError, NetworkError

# =============================================================================
# QUERIES
# =============================================================================

PRODUCTS_QUERY = """
query GetProducts($first: Int!, $after: String) {
    products(first: $first, after: $after) {
        pageInfo {
            hasNextPage
            hasPreviousPage
        }
        edges {
            cursor
            node {
                id
                handle
                title
                seo {
                    title
                }
                variants(first: 20) {
                    edges {
                        node {
                            id
                            title
                            sku
                            selectedOptions {
                                name
                                value
                            }
                        }
                    }
                }
            }
        }
    }
}
"""

# =============================================================================
# RECORDS
# =============================================================================


@dataclass(frozen=True)
class Variant:
    id: str
    title: str = ""
    sku: Optional[str] = None
    selected_options: tuple = ()


@dataclass(frozen=True)
class CatalogEntry:
    id: str
    handle: str
    title: str
    seo_title: Optional[str] = None
    variants: tuple = field(default_factory=tuple)


def parse_product_node(node: dict) -> CatalogEntry:
    """Convert a products.edges[].node dict into a CatalogEntry."""
    variants = []
    for edge in (node.get("variants") or {}).get("edges", []):
        v = edge.get("node") or {}
        options = tuple(
            (opt.get("name", ""), opt.get("value", ""))
            for opt in v.get("selectedOptions") or []
        )
        variants.append(Variant(
            id=v.get("id", ""),
            title=v.get("title") or "",
            sku=v.get("sku"),
            selected_options=options,
        ))

    return CatalogEntry(
        id=node.get("id", ""),
        handle=node.get("handle") or "",
        title=node.get("title") or "",
        seo_title=(node.get("seo") or {}).get("title"),
        variants=tuple(variants),
    )


# =============================================================================
# PAGINATION
# =============================================================================


def fetch_all_products(client, page_size: int = 10, max_products: Optional[int] = 20) -> list:
    """
    Fetch products page by page until the last page or the cap.

    Args:
        client: ShopifyClient (or anything with a query() method)
        page_size: Products per page
        max_products: Stop once this many are collected; None or <= 0 for a full scan

    Returns:
        List of CatalogEntry. A transport failure mid-scan returns the
        products collected so far.
    """
    if max_products is not None and max_products <= 0:
        max_products = None

    all_products = []
    has_next_page = True
    after_cursor = None

    print("Fetching products...")

    while has_next_page:
        try:
            data = client.query(PRODUCTS_QUERY, {"first": page_size, "after": after_cursor})
        except (NetworkError, ApiError) as e:
            print(f"Error fetching products: {e}")
            break

        products = data.get("products") if data else None
        if not products:
            print("No products data returned")
            break

        edges = products.get("edges", [])
        for edge in edges:
            all_products.append(parse_product_node(edge.get("node") or {}))

        has_next_page = bool((products.get("pageInfo") or {}).get("hasNextPage"))
        if not edges:
            break
        after_cursor = edges[-1].get("cursor")

        print(f"Fetched {len(all_products)} products...")

        if max_products is not None and len(all_products) >= max_products:
            if has_next_page:
                print(f"Stopping at {max_products} products (MAX_PRODUCTS cap)")
            break

    if max_products is not None:
        all_products = all_products[:max_products]

    return all_products
