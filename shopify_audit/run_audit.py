#!/usr/bin/env python3
"""
Shopify Variant & SEO Audit

Finds variants with no weight and products with no SEO title, writes a CSV
report, and optionally fixes a capped number of them.

Default behavior is DRY_RUN (no mutations).

Usage:
    shopify-audit                              # DRY_RUN, first 20 products
    shopify-audit --apply                      # LIVE WRITES (max 10 variants, 5 products)
    shopify-audit --max-products 0             # Full catalog scan
    shopify-audit --apply --max-variant-updates 50 --max-product-updates 20

Output:
    shopify-audit-report-YYYY-MM-DD.csv
    shopify-audit-updates-YYYY-MM-DD.json
"""

import argparse
import sys

from shopify_audit.analyze.analyze_products import analyze_products
from shopify_audit.apply.apply_updates import UpdateExecutor, apply_updates
from shopify_audit.client.shopify_client import ShopifyClient
from shopify_audit.config import AuditConfig, load_config, load_env
from shopify_audit.dump.fetch_products import fetch_all_products
from shopify_audit.errors import AbortException, ApiError, NetworkError
from shopify_audit.report.write_report import (
    print_audit_summary,
    write_csv_report,
    write_update_results,
)

# =============================================================================
# AUDIT RUNNER
# =============================================================================


class AuditRunner:
    """Wires fetch -> analyze -> report -> update for one run."""

    def __init__(self, config: AuditConfig, client=None):
        self.config = config
        self.client = client or ShopifyClient(config.shop, config.token, config.api_version)
        self.rows = []
        self.summary = None

    def check_connection(self) -> dict:
        """Fetch shop info; any failure aborts the run."""
        print("Testing Shopify store connection...")
        try:
            shop = self.client.get_shop()
        except (NetworkError, ApiError) as e:
            raise AbortException(f"Connection failed: {e}") from e

        print("  [OK] Connection successful")
        print(f"  Store name: {shop.get('name')}")
        print(f"  Email: {shop.get('email')}")
        return shop

    def run(self) -> dict:
        """Execute the full audit. Returns paths and the update summary."""
        config = self.config
        print(f"\nStarting audit in {config.mode} mode...")

        products = fetch_all_products(self.client, config.page_size, config.max_products)
        print(f"Total products found: {len(products)}")

        if not products:
            print("No products found")
            return {"rows": [], "summary": None, "report_path": None, "updates_path": None}

        self.rows = analyze_products(self.client, products, config)
        print(f"Analysis complete. Total variants analyzed: {len(self.rows)}")

        report_path = write_csv_report(self.rows, config.output_dir)

        executor = UpdateExecutor(self.client, dry_run=not config.apply_mode)
        self.summary = apply_updates(
            self.rows,
            executor,
            max_variant_updates=config.max_variant_updates,
            max_product_updates=config.max_product_updates,
        )
        updates_path = write_update_results(self.summary, config.mode, config.output_dir)

        print_audit_summary(
            self.rows,
            self.summary,
            config.apply_mode,
            report_path,
            config.max_variant_updates,
            config.max_product_updates,
        )

        return {
            "rows": self.rows,
            "summary": self.summary,
            "report_path": report_path,
            "updates_path": updates_path,
        }


# =============================================================================
# CLI
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Audit Shopify variants for missing weights and products for missing SEO titles"
    )
    parser.add_argument(
        "--apply",
        action="store_true",
        help="Make REAL updates (default is DRY_RUN)",
    )
    parser.add_argument(
        "--max-products",
        type=int,
        help="Stop fetching after N products (0 = full catalog; env MAX_PRODUCTS, default 20)",
    )
    parser.add_argument(
        "--max-variant-updates",
        type=int,
        help="Max variant weight updates; 0 or less = none (env MAX_VARIANT_UPDATES, default 10)",
    )
    parser.add_argument(
        "--max-product-updates",
        type=int,
        help="Max product SEO updates; 0 or less = none (env MAX_PRODUCT_UPDATES, default 5)",
    )
    parser.add_argument(
        "--output-dir",
        help="Directory for the CSV report and update results (default: current directory)",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    print("=" * 70)
    print("Shopify Variant & SEO Audit Tool")
    print("=" * 70)
    print()

    env_path = load_env()
    if env_path:
        print(f"Loaded credentials from: {env_path}")

    config = load_config(
        apply_mode=args.apply,
        max_products=args.max_products,
        max_variant_updates=args.max_variant_updates,
        max_product_updates=args.max_product_updates,
        output_dir=args.output_dir,
    )

    if config.apply_mode:
        print("=" * 70)
        print("WARNING: APPLY MODE - LIVE API WRITES ENABLED")
        print("=" * 70)
    else:
        print("Running in DRY_RUN mode (no actual changes)")
    print()

    try:
        if not config.shop or not config.token:
            raise AbortException("SHOPIFY_STORE_DOMAIN or SHOPIFY_ACCESS_TOKEN not set in .env file")

        runner = AuditRunner(config)
        runner.check_connection()
        runner.run()

    except AbortException as e:
        print(f"\nABORTED: {e}")
        sys.exit(1)

    except Exception as e:
        print(f"\nERROR: Unexpected error: {e}")
        sys.exit(1)

    print()
    print("=" * 70)
    print("Audit completed successfully!")
    print("=" * 70)


if __name__ == "__main__":
    main()
