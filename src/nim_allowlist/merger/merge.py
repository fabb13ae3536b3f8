"""In-memory merge of catalogue models into an OpenClaw provider entry.

Nothing in this module touches the filesystem; see ``documents`` for I/O.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from nim_allowlist.catalogue import DEFAULT_PROVIDER_API, DEFAULT_PROVIDER_BASE_URL, ModelDescriptor
from nim_allowlist.errors import DocumentStructureError
from nim_allowlist.merger.records import FieldVariant, build_model_record
from nim_allowlist.telemetry import MODELS_MERGED, PROVIDER_ENTRY_CREATED, get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class ProviderDefaults:
    """Connection details written when a provider entry has to be created."""

    base_url: str = DEFAULT_PROVIDER_BASE_URL
    api: str = DEFAULT_PROVIDER_API

    def new_entry(self) -> dict[str, Any]:
        """Return a fresh, empty provider entry."""
        return {"baseUrl": self.base_url, "api": self.api, "models": []}


@dataclass
class MergeResult:
    """Outcome of merging a catalogue into one document."""

    document: dict[str, Any]
    added_ids: list[str] = field(default_factory=list)
    total: int = 0
    provider_created: bool = False

    @property
    def added(self) -> int:
        """Number of records appended."""
        return len(self.added_ids)


def _ensure_container(
    document: dict[str, Any], container_path: Sequence[str]
) -> dict[str, Any]:
    """Walk ``container_path`` from the document root, creating missing objects."""
    node = document
    walked: list[str] = []
    for key in container_path:
        walked.append(key)
        child = node.get(key)
        if child is None:
            child = {}
            node[key] = child
        elif not isinstance(child, dict):
            raise DocumentStructureError(
                None,
                f"Expected an object at '{'.'.join(walked)}', got {type(child).__name__}",
            )
        node = child
    return node


def _ensure_provider(
    container: dict[str, Any],
    provider_name: str,
    defaults: ProviderDefaults,
    location: str,
) -> tuple[list[Any], bool]:
    """Return the provider's record list, creating the provider entry if needed."""
    created = False
    provider = container.get(provider_name)
    if provider is None:
        provider = defaults.new_entry()
        container[provider_name] = provider
        created = True
    elif not isinstance(provider, dict):
        raise DocumentStructureError(
            None, f"Expected an object at '{location}', got {type(provider).__name__}"
        )

    records = provider.get("models")
    if records is None:
        records = []
        provider["models"] = records
    elif not isinstance(records, list):
        raise DocumentStructureError(
            None, f"Expected a list at '{location}.models', got {type(records).__name__}"
        )
    return records, created


def container_location(container_path: Sequence[str], provider: str) -> str:
    """Dotted location of a provider entry, e.g. ``models.providers.nvidia``."""
    return ".".join([*container_path, provider])


def existing_record_ids(records: Iterable[Any]) -> set[str]:
    """Collect the ids of well-formed records; anything else is ignored."""
    return {
        record["id"]
        for record in records
        if isinstance(record, dict) and isinstance(record.get("id"), str)
    }


def merge_catalogue_into_document(
    document: dict[str, Any],
    catalogue: Iterable[ModelDescriptor],
    provider_name: str,
    field_variant: FieldVariant,
    *,
    container_path: Sequence[str] = ("providers",),
    defaults: ProviderDefaults | None = None,
) -> MergeResult:
    """Append a record for every catalogued model the provider entry lacks.

    The document is mutated in place. Existing records are never modified,
    reordered or removed, and nothing outside ``<container_path>.<provider_name>``
    changes apart from creating that path when it is missing. Running the merge
    again on its own output adds nothing.

    Args:
        document: Parsed JSON object.
        catalogue: Models to register, in the order they should be appended.
        provider_name: Provider key inside the container (e.g. "nvidia").
        field_variant: Which optional record fields to emit.
        container_path: Keys leading from the root to the providers mapping,
            ``("providers",)`` or ``("models", "providers")``.
        defaults: Connection details for a newly created provider entry.

    Returns:
        MergeResult with the (same) document and the ids that were appended.

    Raises:
        DocumentStructureError: If a level of the provider path has the wrong type.
    """
    defaults = defaults or ProviderDefaults()
    location = container_location(container_path, provider_name)

    container = _ensure_container(document, container_path)
    records, created = _ensure_provider(container, provider_name, defaults, location)
    if created:
        log.info(PROVIDER_ENTRY_CREATED, provider=location)

    seen = existing_record_ids(records)
    added_ids: list[str] = []
    for descriptor in catalogue:
        if descriptor.id in seen:
            continue
        records.append(build_model_record(descriptor, field_variant))
        seen.add(descriptor.id)
        added_ids.append(descriptor.id)

    log.info(
        MODELS_MERGED,
        provider=location,
        variant=field_variant.value,
        added=len(added_ids),
        total=len(records),
    )
    return MergeResult(
        document=document,
        added_ids=added_ids,
        total=len(records),
        provider_created=created,
    )
