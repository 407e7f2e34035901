from shopify_audit.client.shopify_client import ShopifyClient

__all__ = ["ShopifyClient"]
