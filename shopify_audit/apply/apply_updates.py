"""
Apply Updates - capped weight and SEO title fixes

################################################################################
# Default behavior is DRY_RUN (no mutations).
# APPLY mode is fixed when UpdateExecutor is constructed and never changes.
# Every outcome is printed and recorded in UpdateSummary.
# No rollback: a failed item never blocks the items after it.
################################################################################
"""

import re
from dataclasses import dataclass, field

from shopify_audit.errors import ApiError, NetworkError, ParseError, ValidationError

SEO_TITLE_MAX_LENGTH = 255
WEIGHT_UNITS = {"g", "kg", "oz", "lb"}
PRODUCT_GID_PREFIX = "gid://shopify/Product/"

WEIGHT_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([A-Za-z]+)\s*$")

PRODUCT_UPDATE_MUTATION = """
mutation productUpdate($input: ProductInput!) {
    productUpdate(input: $input) {
        product {
            id
            seo {
                title
            }
        }
        userErrors {
            field
            message
        }
    }
}
"""

STATUS_SUCCESS = "SUCCESS"
STATUS_SKIPPED = "SKIPPED"
STATUS_FAILED = "FAILED"


# =============================================================================
# RECORDS
# =============================================================================


@dataclass(frozen=True)
class ParsedWeight:
    value: float
    unit: str


@dataclass
class UpdateSummary:
    """Outcome counters for one update run."""

    updated: int = 0
    failed: int = 0
    skipped: int = 0
    variants_updated: list = field(default_factory=list)
    products_updated: list = field(default_factory=list)
    errors: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "updated": self.updated,
            "failed": self.failed,
            "skipped": self.skipped,
            "variants_updated": list(self.variants_updated),
            "products_updated": list(self.products_updated),
            "errors": list(self.errors),
        }


def parse_weight(text: str) -> ParsedWeight:
    """
    Parse a '<number> <unit>' weight string.

    Raises:
        ParseError: text does not match, or the unit is not one Shopify accepts
    """
    match = WEIGHT_PATTERN.match(text or "")
    if not match:
        raise ParseError(f"Invalid weight format: {text!r}")

    unit = match.group(2).lower()
    if unit not in WEIGHT_UNITS:
        raise ParseError(f"Unsupported weight unit: {match.group(2)!r}")

    return ParsedWeight(value=float(match.group(1)), unit=unit)


# =============================================================================
# CANDIDATE SELECTION
# =============================================================================


def select_variant_candidates(rows: list, limit: int = 10) -> list:
    """Rows needing a weight update, in report order, first `limit` only."""
    candidates = [r for r in rows if r.needs_weight_update]
    return candidates[:max(limit, 0)]


def select_product_candidates(rows: list, limit: int = 5) -> list:
    """Rows needing an SEO update, one per product (first row wins), first `limit` only."""
    seen = set()
    candidates = []
    for r in rows:
        if not r.needs_seo_update or r.product_id in seen:
            continue
        seen.add(r.product_id)
        candidates.append(r)
    return candidates[:max(limit, 0)]


# =============================================================================
# OPERATION EXECUTOR
# =============================================================================


class UpdateExecutor:
    """Executes variant/product mutations; simulates them in DRY_RUN."""

    def __init__(self, client, dry_run: bool = True):
        self.client = client
        self.dry_run = dry_run

    @property
    def mode(self) -> str:
        return "DRY_RUN" if self.dry_run else "APPLY"

    def _skipped(self) -> dict:
        return {"status": STATUS_SKIPPED, "message": "Dry run - no update performed"}

    def update_variant_weight(self, variant_id: str, weight: ParsedWeight) -> dict:
        if self.dry_run:
            return self._skipped()

        body = {
            "variant": {
                "id": int(variant_id) if variant_id.isdigit() else variant_id,
                "weight": weight.value,
                "weight_unit": weight.unit,
            }
        }
        try:
            self.client.rest_put(f"variants/{variant_id}.json", body)
        except (NetworkError, ApiError) as e:
            return {"status": STATUS_FAILED, "message": str(e)}

        return {"status": STATUS_SUCCESS, "message": "Variant weight updated successfully"}

    def update_product_seo(self, product_id: str, seo_title: str) -> dict:
        if self.dry_run:
            return self._skipped()

        variables = {
            "input": {
                "id": f"{PRODUCT_GID_PREFIX}{product_id}",
                "seo": {"title": seo_title[:SEO_TITLE_MAX_LENGTH]},
            }
        }
        try:
            data = self.client.query(PRODUCT_UPDATE_MUTATION, variables)
            user_errors = (data.get("productUpdate") or {}).get("userErrors") or []
            if user_errors:
                raise ValidationError(user_errors)
        except (NetworkError, ApiError, ValidationError) as e:
            return {"status": STATUS_FAILED, "message": str(e)}

        return {"status": STATUS_SUCCESS, "message": "Product SEO updated successfully"}


# =============================================================================
# UPDATE RUN
# =============================================================================


def record_result(summary: UpdateSummary, result: dict, kind: str, item_id: str):
    """Fold one executor result into the summary and print it."""
    status = result.get("status")
    if status == STATUS_SUCCESS:
        summary.updated += 1
        if kind == "variant":
            summary.variants_updated.append(item_id)
        else:
            summary.products_updated.append(item_id)
        print(f"  [OK] {kind} {item_id} updated")
    elif status == STATUS_SKIPPED:
        summary.skipped += 1
        print(f"  [SKIP] {kind} {item_id} ({result.get('message')})")
    else:
        summary.failed += 1
        summary.errors.append(f"{kind} {item_id}: {result.get('message')}")
        print(f"  [FAIL] {kind} {item_id}: {result.get('message')}")


def apply_updates(rows: list, executor: UpdateExecutor,
                  max_variant_updates: int = 10, max_product_updates: int = 5) -> UpdateSummary:
    """
    Run capped variant weight and product SEO updates.

    Args:
        rows: AuditRow list in report order
        executor: UpdateExecutor (mode fixed at construction)
        max_variant_updates: Cap on variant mutations attempted
        max_product_updates: Cap on product mutations attempted

    Returns:
        UpdateSummary
    """
    summary = UpdateSummary()
    print(f"\nApplying updates ({executor.mode})...")

    all_variants = [r for r in rows if r.needs_weight_update]
    variants = select_variant_candidates(rows, max_variant_updates)
    print(f"Updating {len(variants)} variants out of {len(all_variants)} needing weight updates")

    for row in variants:
        try:
            weight = parse_weight(row.suggested_weight)
        except ParseError as e:
            summary.skipped += 1
            print(f"  [SKIP] variant {row.variant_id} - {e}")
            continue

        result = executor.update_variant_weight(row.variant_id, weight)
        record_result(summary, result, "variant", row.variant_id)

    all_products = {r.product_id for r in rows if r.needs_seo_update}
    products = select_product_candidates(rows, max_product_updates)
    print(f"Updating {len(products)} products out of {len(all_products)} needing SEO updates")

    for row in products:
        result = executor.update_product_seo(row.product_id, row.suggested_seo_title)
        record_result(summary, result, "product", row.product_id)

    return summary
