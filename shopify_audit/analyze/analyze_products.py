"""
Product analysis - weight + SEO title checks.

READ-ONLY. For every product: one metafield lookup for the fallback weight,
then one REST lookup per variant for live weight data. Lookup failures
degrade to defaults and never stop the run.

NOTE: O(products + variants) round trips with no batching.
"""

from dataclasses import dataclass
from decimal import Decimal

from shopify_audit.config import parse_float
from shopify_audit.errors import ApiError, NetworkError

OK = "OK"
MISSING = "MISSING"
EMPTY = "EMPTY"

METAFIELDS_QUERY = """
query GetProductMetafields($id: ID!, $namespace: String!) {
    product(id: $id) {
        metafields(namespace: $namespace, first: 10) {
            edges {
                node {
                    key
                    value
                }
            }
        }
    }
}
"""


@dataclass(frozen=True)
class AuditRow:
    """One report line: a variant plus its parent product's SEO state."""

    product_id: str
    handle: str
    title: str
    variant_id: str
    variant_title: str
    sku: str
    current_weight: str
    suggested_weight: str
    current_seo_title: str
    suggested_seo_title: str
    needs_weight_update: bool
    needs_seo_update: bool
    has_weight_data: bool = False


# =============================================================================
# HELPERS
# =============================================================================


def extract_id(gid: str) -> str:
    """gid://shopify/Product/123 -> '123'."""
    return gid.split("/")[-1]


def format_weight(value) -> str:
    """Render a weight in plain decimal notation, without a trailing '.0'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, float):
        return format(Decimal(repr(value)), "f")
    return str(value)


def suggest_seo_title(title: str, handle: str) -> str:
    return f"{title} | {handle}"


# =============================================================================
# LOOKUPS
# =============================================================================


def get_weight_from_metafield(client, product_gid: str, namespace: str, key: str, default: float) -> float:
    """Return the product's fallback weight metafield, or default."""
    try:
        data = client.query(METAFIELDS_QUERY, {"id": product_gid, "namespace": namespace})
    except (NetworkError, ApiError):
        print(f"  Cannot fetch metafield for product {extract_id(product_gid)}")
        return default

    edges = (((data or {}).get("product") or {}).get("metafields") or {}).get("edges", [])
    for edge in edges:
        node = edge.get("node") or {}
        if node.get("key") == key:
            return parse_float(node.get("value"), default)

    return default


def fetch_variant_weight(client, variant_id: str) -> dict:
    """Fetch a variant's weight via REST; weight is None when unavailable."""
    try:
        data = client.rest_get(f"variants/{variant_id}.json")
    except (NetworkError, ApiError) as e:
        print(f"  Cannot fetch weight via REST for variant {variant_id}: {e}")
        return {"weight": None, "weight_unit": None}

    return data.get("variant") or {"weight": None, "weight_unit": None}


# =============================================================================
# ANALYSIS
# =============================================================================


def analyze_product(client, entry, config) -> list:
    """Build one AuditRow per variant of a CatalogEntry."""
    rows = []
    seo_title = entry.seo_title or ""
    has_seo_title = len(seo_title.strip()) > 0
    needs_seo_update = not has_seo_title
    suggested_seo = suggest_seo_title(entry.title, entry.handle) if needs_seo_update else OK

    default_weight = get_weight_from_metafield(
        client, entry.id, config.weight_namespace, config.weight_key, config.default_weight
    )

    for variant in entry.variants:
        variant_id = extract_id(variant.id)
        variant_data = fetch_variant_weight(client, variant_id)
        weight = variant_data.get("weight")
        has_weight = weight is not None
        needs_weight_update = not has_weight

        if has_weight:
            current_weight = f"{format_weight(weight)} {variant_data.get('weight_unit') or 'g'}"
        else:
            current_weight = MISSING

        rows.append(AuditRow(
            product_id=extract_id(entry.id),
            handle=entry.handle,
            title=entry.title,
            variant_id=variant_id,
            variant_title=variant.title or "Default",
            sku=variant.sku or "N/A",
            current_weight=current_weight,
            suggested_weight=f"{format_weight(default_weight)} kg" if needs_weight_update else OK,
            current_seo_title=seo_title or EMPTY,
            suggested_seo_title=suggested_seo,
            needs_weight_update=needs_weight_update,
            needs_seo_update=needs_seo_update,
            has_weight_data=has_weight,
        ))

    return rows


def analyze_products(client, entries: list, config) -> list:
    """Analyze every product in order; row order follows product order."""
    results = []
    total = len(entries)
    for i, entry in enumerate(entries, start=1):
        print(f"Analyzing product {i}/{total}: {entry.title[:50]}...")
        results.extend(analyze_product(client, entry, config))
    return results
