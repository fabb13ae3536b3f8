"""Tests for catalogue models."""

import pytest
from pydantic import ValidationError

from nim_allowlist.catalogue import Catalogue, CatalogueSource, ModelDescriptor, Tier
from nim_allowlist.config import CatalogueError


class TestModelDescriptor:
    """Test ModelDescriptor parsing and derived properties."""

    def test_from_four_element_row(self) -> None:
        """Test the compact [id, label, tier, score] row form."""
        model = ModelDescriptor.model_validate(
            ["deepseek-ai/deepseek-v3.2", "DeepSeek V3.2", "S+", "73.1%"]
        )

        assert model.id == "deepseek-ai/deepseek-v3.2"
        assert model.label == "DeepSeek V3.2"
        assert model.tier is Tier.S_PLUS
        assert model.score == "73.1%"

    def test_from_three_element_row(self) -> None:
        """Test the score column is optional."""
        model = ModelDescriptor.model_validate(["vendor/model-a", "Model A", "S"])

        assert model.score is None
        assert model.tier is Tier.S

    def test_from_mapping(self) -> None:
        """Test regular mapping input."""
        model = ModelDescriptor.model_validate({"id": "x/y", "label": "Y", "tier": "C"})
        assert model.tier is Tier.C

    @pytest.mark.parametrize("row", [["only-id", "label"], ["a", "b", "S", "1%", "extra"]])
    def test_rejects_wrong_row_length(self, row: list[str]) -> None:
        """Test rows must have 3 or 4 elements."""
        with pytest.raises(ValidationError, match="3 or 4 elements"):
            ModelDescriptor.model_validate(row)

    @pytest.mark.parametrize("model_id", ["", "   "])
    def test_rejects_blank_id(self, model_id: str) -> None:
        """Test identifiers must be non-empty."""
        with pytest.raises(ValidationError):
            ModelDescriptor.model_validate([model_id, "Label", "S"])

    def test_rejects_unknown_tier(self) -> None:
        """Test tiers outside the fixed set are rejected."""
        with pytest.raises(ValidationError):
            ModelDescriptor.model_validate(["x/y", "Y", "S++"])

    def test_is_thinking(self) -> None:
        """Test thinking variants are detected by substring."""
        thinking = ModelDescriptor.model_validate(["moonshotai/kimi-k2-thinking", "K2", "A+"])
        plain = ModelDescriptor.model_validate(["moonshotai/kimi-k2-instruct", "K2", "A+"])

        assert thinking.is_thinking is True
        assert plain.is_thinking is False

    def test_limits_follow_tier(self) -> None:
        """Test limits are derived from the tier."""
        model = ModelDescriptor.model_validate(["x/y", "Y", "B"])
        assert model.limits.context_window == 32768
        assert model.limits.max_tokens == 2048

    def test_is_frozen(self) -> None:
        """Test descriptors are immutable."""
        model = ModelDescriptor.model_validate(["x/y", "Y", "B"])
        with pytest.raises(ValidationError):
            model.id = "other"  # type: ignore[misc]


class TestCatalogue:
    """Test Catalogue lookups."""

    @pytest.fixture
    def catalogue(self) -> Catalogue:
        return Catalogue.model_validate(
            {
                "sources": {
                    "nvidia": {
                        "name": "NIM",
                        "models": [
                            ["a/one", "One", "S"],
                            ["a/two", "Two", "A"],
                            ["a/three", "Three", "S"],
                        ],
                    },
                    "other": {"name": "Other", "models": [["b/four", "Four", "C"]]},
                }
            }
        )

    def test_source_lookup(self, catalogue: Catalogue) -> None:
        """Test sources are returned by key with models in order."""
        source = catalogue.source("nvidia")

        assert isinstance(source, CatalogueSource)
        assert source.name == "NIM"
        assert [m.id for m in source.models] == ["a/one", "a/two", "a/three"]

    def test_unknown_source(self, catalogue: Catalogue) -> None:
        """Test unknown source keys raise CatalogueError."""
        with pytest.raises(CatalogueError, match="Unknown catalogue source 'missing'"):
            catalogue.source("missing")

    def test_all_models_flattens_in_order(self, catalogue: Catalogue) -> None:
        """Test all_models preserves source then model order."""
        assert [m.id for m in catalogue.all_models()] == ["a/one", "a/two", "a/three", "b/four"]

    def test_by_tier(self, catalogue: Catalogue) -> None:
        """Test filtering by tier."""
        assert [m.id for m in catalogue.by_tier("S")] == ["a/one", "a/three"]
        assert catalogue.by_tier(Tier.B) == []

    def test_duplicate_ids_rejected(self) -> None:
        """Test identifiers must be unique within a source."""
        with pytest.raises(ValidationError, match="duplicate model ids: a/one"):
            CatalogueSource.model_validate(
                {"name": "NIM", "models": [["a/one", "One", "S"], ["a/one", "Again", "A"]]}
            )
