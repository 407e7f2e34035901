"""
Report writers - CSV audit report, JSON update results, console summary.

One CSV per calendar day: shopify-audit-report-YYYY-MM-DD.csv.
Re-running on the same day overwrites it.
"""

import csv
import json
from datetime import date, datetime, timezone
from pathlib import Path

CSV_HEADERS = [
    "Product ID",
    "Handle",
    "Product Title",
    "Variant ID",
    "Variant Title",
    "SKU",
    "Current Weight",
    "Suggested Weight",
    "Current SEO Title",
    "Suggested SEO Title",
    "Needs Weight Update",
    "Needs SEO Update",
]


def yes_no(flag: bool) -> str:
    return "YES" if flag else "NO"


def report_filename(today: date = None) -> str:
    today = today or date.today()
    return f"shopify-audit-report-{today.isoformat()}.csv"


def row_to_csv(row) -> list:
    return [
        row.product_id,
        row.handle,
        row.title,
        row.variant_id,
        row.variant_title,
        row.sku,
        row.current_weight,
        row.suggested_weight,
        row.current_seo_title,
        row.suggested_seo_title,
        yes_no(row.needs_weight_update),
        yes_no(row.needs_seo_update),
    ]


# =============================================================================
# WRITERS
# =============================================================================


def write_csv_report(rows: list, output_dir: Path = Path("."), today: date = None) -> Path:
    """Write all AuditRows to the day's CSV report and return its path."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / report_filename(today)

    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADERS)
        for row in rows:
            writer.writerow(row_to_csv(row))

    print(f"Report created: {path}")
    return path


def write_update_results(summary, mode: str, output_dir: Path = Path("."), today: date = None) -> Path:
    """Write the update run's outcome as JSON next to the CSV report."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    today = today or date.today()
    path = output_dir / f"shopify-audit-updates-{today.isoformat()}.json"

    results = {
        "execution_mode": mode,
        "generated_utc": datetime.now(timezone.utc).isoformat(),
        "summary": summary.to_dict(),
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(results, f, indent=2)

    return path


# =============================================================================
# CONSOLE SUMMARY
# =============================================================================


def print_audit_summary(rows: list, summary, apply_mode: bool, report_path: Path,
                        max_variant_updates: int = 10, max_product_updates: int = 5):
    print()
    print("=" * 70)
    print("AUDIT SUMMARY")
    print("=" * 70)
    print(f"Products analyzed: {len({r.product_id for r in rows})}")
    print(f"Variants analyzed: {len(rows)}")
    print(f"Variants needing weight updates: {sum(1 for r in rows if r.needs_weight_update)}")
    print(f"Products needing SEO updates: {len({r.product_id for r in rows if r.needs_seo_update})}")

    if summary is not None:
        print()
        print("=" * 70)
        print(f"UPDATE SUMMARY ({'APPLY' if apply_mode else 'DRY_RUN'})")
        print("=" * 70)
        print(f"Successfully updated: {summary.updated}")
        print(f"Failed updates: {summary.failed}")
        print(f"Skipped updates: {summary.skipped}")
        if summary.variants_updated:
            print(f"Variants updated: {len(summary.variants_updated)}")
        if summary.products_updated:
            print(f"Products updated: {len(summary.products_updated)}")
        if summary.errors:
            print("\nErrors encountered:")
            for error in summary.errors:
                print(f"  - {error}")

    if not apply_mode:
        print("\nTo apply actual updates, run:")
        print("  shopify-audit --apply")
        print(f"\nNote: Will update maximum {max_variant_updates} variants and {max_product_updates} products")

    print(f"\nReport saved to: {report_path}")
