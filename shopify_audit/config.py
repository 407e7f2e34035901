"""
Configuration loading.

Credentials and audit defaults come from the environment (.env via
python-dotenv). The apply flag and the caps can be overridden from the
command line; the resulting AuditConfig is immutable for the whole run.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# =============================================================================
# CONFIGURATION
# =============================================================================

PACKAGE_DIR = Path(__file__).parent
PROJECT_ROOT = PACKAGE_DIR.parent

DEFAULT_API_VERSION = "2023-10"
DEFAULT_WEIGHT_NAMESPACE = "custom"
DEFAULT_WEIGHT_KEY = "default_weight"
DEFAULT_WEIGHT = 1.0

# Exploratory-run limits. MAX_PRODUCTS=0 removes the fetch cap;
# MAX_*_UPDATES=0 (or negative) attempts no updates.
DEFAULT_MAX_PRODUCTS = 20
DEFAULT_MAX_VARIANT_UPDATES = 10
DEFAULT_MAX_PRODUCT_UPDATES = 5
PAGE_SIZE = 10


@dataclass(frozen=True)
class AuditConfig:
    """Settings for a single audit run."""

    shop: str
    token: str
    api_version: str = DEFAULT_API_VERSION
    weight_namespace: str = DEFAULT_WEIGHT_NAMESPACE
    weight_key: str = DEFAULT_WEIGHT_KEY
    default_weight: float = DEFAULT_WEIGHT
    apply_mode: bool = False
    page_size: int = PAGE_SIZE
    max_products: Optional[int] = DEFAULT_MAX_PRODUCTS
    max_variant_updates: int = DEFAULT_MAX_VARIANT_UPDATES
    max_product_updates: int = DEFAULT_MAX_PRODUCT_UPDATES
    output_dir: Path = Path(".")

    @property
    def mode(self) -> str:
        return "APPLY" if self.apply_mode else "DRY_RUN"


# =============================================================================
# CREDENTIAL LOADING
# =============================================================================


def load_env() -> Optional[Path]:
    """Load .env from the project root or fallback locations."""
    env_paths = [
        PROJECT_ROOT / ".env",
        Path.cwd() / ".env",
        Path.home() / "shopify-audit" / ".env",
    ]
    for env_path in env_paths:
        if env_path.exists():
            load_dotenv(env_path)
            return env_path
    return None


def parse_float(value: Optional[str], default: float) -> float:
    """Parse a positive float, falling back to default on blank, bad or zero input."""
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return default
    if parsed != parsed or parsed == 0:  # NaN or zero
        return default
    return parsed


def parse_int(value: Optional[str], default: Optional[int]) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def cap_or_none(value: Optional[int]) -> Optional[int]:
    """Zero or negative disables a cap."""
    if value is None or value <= 0:
        return None
    return value


def update_cap(value: Optional[int]) -> int:
    """Update caps never go below zero; 0 means no updates are attempted."""
    return max(value or 0, 0)


def load_config(apply_mode: bool = False, **overrides) -> AuditConfig:
    """
    Build AuditConfig from environment variables.

    Args:
        apply_mode: True when --apply was passed
        **overrides: CLI values that replace environment values when not None

    Returns:
        Frozen AuditConfig
    """
    config = AuditConfig(
        shop=os.getenv("SHOPIFY_STORE_DOMAIN", "").strip(),
        token=os.getenv("SHOPIFY_ACCESS_TOKEN", "").strip(),
        api_version=os.getenv("SHOPIFY_API_VERSION") or DEFAULT_API_VERSION,
        weight_namespace=os.getenv("WEIGHT_METAFIELD_NAMESPACE") or DEFAULT_WEIGHT_NAMESPACE,
        weight_key=os.getenv("WEIGHT_METAFIELD_KEY") or DEFAULT_WEIGHT_KEY,
        default_weight=parse_float(os.getenv("DEFAULT_WEIGHT"), DEFAULT_WEIGHT),
        apply_mode=apply_mode,
        max_products=cap_or_none(parse_int(os.getenv("MAX_PRODUCTS"), DEFAULT_MAX_PRODUCTS)),
        max_variant_updates=update_cap(parse_int(os.getenv("MAX_VARIANT_UPDATES"), DEFAULT_MAX_VARIANT_UPDATES)),
        max_product_updates=update_cap(parse_int(os.getenv("MAX_PRODUCT_UPDATES"), DEFAULT_MAX_PRODUCT_UPDATES)),
    )

    overrides = {k: v for k, v in overrides.items() if v is not None}
    if "max_products" in overrides:
        overrides["max_products"] = cap_or_none(overrides["max_products"])
    for name in ("max_variant_updates", "max_product_updates"):
        if name in overrides:
            overrides[name] = update_cap(overrides[name])
    if "output_dir" in overrides:
        overrides["output_dir"] = Path(overrides["output_dir"])

    return replace(config, **overrides)
