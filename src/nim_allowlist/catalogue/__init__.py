"""Model catalogue: descriptors, tiers and the tier limit policy."""

from pathlib import Path

from nim_allowlist.catalogue.models import Catalogue, CatalogueSource, ModelDescriptor
from nim_allowlist.catalogue.provider import (
    DEFAULT_PROVIDER_API,
    DEFAULT_PROVIDER_BASE_URL,
    DEFAULT_PROVIDER_NAME,
)
from nim_allowlist.catalogue.tiers import TIER_LIMITS, Tier, TierLimits, limits_for_tier

# Catalogue shipped with the package
BUNDLED_CATALOGUE_PATH = Path(__file__).parent / "data" / "sources.yaml"

__all__ = [
    "BUNDLED_CATALOGUE_PATH",
    "Catalogue",
    "CatalogueSource",
    "DEFAULT_PROVIDER_API",
    "DEFAULT_PROVIDER_BASE_URL",
    "DEFAULT_PROVIDER_NAME",
    "ModelDescriptor",
    "TIER_LIMITS",
    "Tier",
    "TierLimits",
    "limits_for_tier",
]
