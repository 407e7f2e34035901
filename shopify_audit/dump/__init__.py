from shopify_audit.dump.fetch_products import CatalogEntry, Variant, fetch_all_products

__all__ = ["CatalogEntry", "Variant", "fetch_all_products"]
