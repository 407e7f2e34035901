from shopify_audit.apply.apply_updates import (
    ParsedWeight,
    UpdateExecutor,
    UpdateSummary,
    apply_updates,
    parse_weight,
)

__all__ = ["ParsedWeight", "UpdateExecutor", "UpdateSummary", "apply_updates", "parse_weight"]
