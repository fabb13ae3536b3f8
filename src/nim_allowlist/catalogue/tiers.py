"""Tier definitions and the tier → resource limit policy.

Tiers follow the Aider Polyglot / SWE-bench scale used to rank coding models:

- S+: elite frontier coders
- S:  excellent
- A+: great
- A:  good
- A-: decent
- B+: average
- B:  below average
- C:  lightweight / edge models
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Tier(str, Enum):
    """Coarse quality category of a model, ordered best to worst."""

    S_PLUS = "S+"
    S = "S"
    A_PLUS = "A+"
    A = "A"
    A_MINUS = "A-"
    B_PLUS = "B+"
    B = "B"
    C = "C"


class TierLimits(BaseModel):
    """Context window and output token limit registered for a model."""

    model_config = ConfigDict(frozen=True)

    context_window: int = Field(..., ge=1, description="Context window size in tokens")
    max_tokens: int = Field(..., ge=1, description="Maximum output tokens")


_FRONTIER = TierLimits(context_window=128000, max_tokens=8192)
_STRONG = TierLimits(context_window=131072, max_tokens=4096)
_SMALL = TierLimits(context_window=32768, max_tokens=2048)

# Several tiers intentionally share the same limits.
TIER_LIMITS: dict[Tier, TierLimits] = {
    Tier.S_PLUS: _FRONTIER,
    Tier.S: _FRONTIER,
    Tier.A_PLUS: _STRONG,
    Tier.A: _STRONG,
    Tier.A_MINUS: _STRONG,
    Tier.B_PLUS: _SMALL,
    Tier.B: _SMALL,
    Tier.C: _SMALL,
}


def limits_for_tier(tier: Tier | str) -> TierLimits:
    """Return the resource limits for a tier.

    Args:
        tier: Tier enum member or its string value (e.g. ``"A+"``).

    Returns:
        TierLimits for the tier. Unrecognised tier strings get the smallest limits.

    Example:
        >>> limits_for_tier("S").context_window
        128000
    """
    try:
        tier = Tier(tier)
    except ValueError:
        return _SMALL
    return TIER_LIMITS[tier]
