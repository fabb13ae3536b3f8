"""Model record construction for the two OpenClaw document shapes."""

from enum import Enum
from typing import Any

from nim_allowlist.catalogue import ModelDescriptor


class FieldVariant(str, Enum):
    """Which optional fields a persisted model record carries.

    EXTENDED records (agent model registry) add a reasoning flag, input
    modalities and a zero-cost billing block. MINIMAL records (application
    config) only carry identity and limits.
    """

    EXTENDED = "extended"
    MINIMAL = "minimal"


def build_model_record(descriptor: ModelDescriptor, variant: FieldVariant) -> dict[str, Any]:
    """Build the JSON record registering ``descriptor`` with OpenClaw.

    Args:
        descriptor: Catalogued model.
        variant: Field variant of the target document.

    Returns:
        A new dict, keys in the order OpenClaw writes them.
    """
    limits = descriptor.limits
    record: dict[str, Any] = {
        "id": descriptor.id,
        "name": descriptor.label,
        "contextWindow": limits.context_window,
        "maxTokens": limits.max_tokens,
    }
    if variant is FieldVariant.EXTENDED:
        record["reasoning"] = descriptor.is_thinking
        record["input"] = ["text"]
        record["cost"] = {"input": 0, "output": 0, "cacheRead": 0, "cacheWrite": 0}
    return record
