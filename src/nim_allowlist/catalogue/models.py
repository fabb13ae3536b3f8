"""Pydantic models for the model catalogue.

The catalogue data file stores each model as a compact row
``[id, label, tier, score]``; these models accept that row form as well as
regular mappings.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from nim_allowlist.catalogue.tiers import Tier, TierLimits, limits_for_tier

_ROW_FIELDS = ("id", "label", "tier", "score")


class ModelDescriptor(BaseModel):
    """A single catalogued model.

    Attributes:
        id: Provider model identifier (e.g. "moonshotai/kimi-k2-thinking").
        label: Human readable display name.
        tier: Quality tier, used only to select default limits.
        score: Optional benchmark score string (e.g. "67.0%").
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Model identifier")
    label: str = Field(..., description="Display label")
    tier: Tier = Field(..., description="Quality tier")
    score: str | None = Field(None, description="Benchmark score")

    @model_validator(mode="before")
    @classmethod
    def from_row(cls, value: Any) -> Any:
        """Accept ``[id, label, tier]`` / ``[id, label, tier, score]`` rows."""
        if isinstance(value, (list, tuple)):
            if not 3 <= len(value) <= 4:
                raise ValueError(
                    "model row must have 3 or 4 elements (id, label, tier, score), "
                    f"got {len(value)}"
                )
            return dict(zip(_ROW_FIELDS, value))
        return value

    @field_validator("id")
    @classmethod
    def strip_id(cls, v: str) -> str:
        """Reject whitespace-only identifiers."""
        if not v.strip():
            raise ValueError("model id must not be blank")
        return v

    @property
    def is_thinking(self) -> bool:
        """Whether the identifier names a "thinking" (reasoning) variant."""
        return "thinking" in self.id

    @property
    def limits(self) -> TierLimits:
        """Resource limits derived from the tier."""
        return limits_for_tier(self.tier)


class CatalogueSource(BaseModel):
    """Models offered by one provider source."""

    name: str = Field(..., description="Source display name (e.g. 'NIM')")
    models: list[ModelDescriptor] = Field(default_factory=list, description="Ordered models")

    @field_validator("models")
    @classmethod
    def unique_ids(cls, v: list[ModelDescriptor]) -> list[ModelDescriptor]:
        """Ensure identifiers are unique within the source."""
        seen: set[str] = set()
        duplicates = []
        for model in v:
            if model.id in seen:
                duplicates.append(model.id)
            seen.add(model.id)
        if duplicates:
            raise ValueError(f"duplicate model ids: {', '.join(duplicates)}")
        return v


class Catalogue(BaseModel):
    """Complete model catalogue.

    This represents the structure of the catalogue data file after loading and
    validation.

    Attributes:
        sources: Mapping of source key (e.g. "nvidia") to its models.
    """

    sources: dict[str, CatalogueSource] = Field(..., description="Model sources by key")

    def source(self, key: str) -> CatalogueSource:
        """Return the source registered under ``key``.

        Raises:
            CatalogueError: If no such source exists.
        """
        try:
            return self.sources[key]
        except KeyError:
            from nim_allowlist.config.catalogue_loader import CatalogueError  # noqa: PLC0415

            known = ", ".join(sorted(self.sources)) or "none"
            raise CatalogueError(f"Unknown catalogue source '{key}' (known: {known})") from None

    def all_models(self) -> list[ModelDescriptor]:
        """Flatten every source's models, preserving source and model order."""
        return [model for source in self.sources.values() for model in source.models]

    def by_tier(self, tier: Tier | str) -> list[ModelDescriptor]:
        """Return all models of the given tier."""
        tier = Tier(tier)
        return [model for model in self.all_models() if model.tier == tier]
