# =============================================================================
# SHOPIFY-AUDIT
# Variant weight + SEO title audit for Shopify stores
# =============================================================================
"""
Shopify catalog audit pipeline.

Stages (run in order by shopify_audit.run_audit):
- dump:    cursor-paginated product fetch (READ-ONLY)
- analyze: per-variant weight / per-product SEO checks (READ-ONLY)
- report:  CSV export + console summary
- apply:   capped weight/SEO fixes (DRY_RUN unless --apply)
"""

__version__ = "1.0.0"
