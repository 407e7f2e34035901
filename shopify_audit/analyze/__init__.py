from shopify_audit.analyze.analyze_products import AuditRow, analyze_product, analyze_products, extract_id

__all__ = ["AuditRow", "analyze_product", "analyze_products", "extract_id"]
