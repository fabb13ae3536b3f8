"""Config Merger: register catalogue models in OpenClaw's JSON documents."""

from nim_allowlist.merger.documents import (
    DocumentTarget,
    LoadedDocument,
    PatchReport,
    backup_document,
    patch_document,
    read_document,
    serialize_document,
    write_document,
)
from nim_allowlist.merger.merge import (
    MergeResult,
    ProviderDefaults,
    container_location,
    merge_catalogue_into_document,
)
from nim_allowlist.merger.records import FieldVariant, build_model_record
from nim_allowlist.merger.runner import build_targets, patch_targets, provider_defaults

__all__ = [
    "DocumentTarget",
    "FieldVariant",
    "LoadedDocument",
    "MergeResult",
    "PatchReport",
    "ProviderDefaults",
    "backup_document",
    "build_model_record",
    "build_targets",
    "container_location",
    "merge_catalogue_into_document",
    "patch_document",
    "patch_targets",
    "provider_defaults",
    "read_document",
    "serialize_document",
    "write_document",
]
