"""Reading, backing up and writing OpenClaw JSON documents."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import orjson

from nim_allowlist.catalogue import ModelDescriptor
from nim_allowlist.errors import DocumentStructureError, NotFoundError, ParseError
from nim_allowlist.merger.merge import ProviderDefaults, merge_catalogue_into_document
from nim_allowlist.merger.records import FieldVariant
from nim_allowlist.telemetry import (
    DOCUMENT_BACKED_UP,
    DOCUMENT_LOADED,
    DOCUMENT_WRITTEN,
    get_logger,
)

log = get_logger(__name__)


@dataclass(frozen=True)
class DocumentTarget:
    """A JSON document to patch and where its providers live inside it.

    Attributes:
        label: Short name used in output (e.g. "models.json").
        path: Absolute location of the document.
        container_path: Keys leading from the document root to the providers mapping.
        variant: Which optional fields new model records carry.
    """

    label: str
    path: Path
    container_path: tuple[str, ...]
    variant: FieldVariant


@dataclass(frozen=True)
class LoadedDocument:
    """A parsed document together with the exact bytes it was read from."""

    path: Path
    raw: bytes
    data: dict[str, Any]


@dataclass(frozen=True)
class PatchReport:
    """Summary of patching one document."""

    target: DocumentTarget
    added_ids: tuple[str, ...]
    total: int
    backup_path: Path | None
    written: bool
    provider_created: bool = False

    @property
    def added(self) -> int:
        return len(self.added_ids)


def read_document(path: Path) -> LoadedDocument:
    """Read and parse a JSON document.

    Integers are kept exactly up to 64 bits. orjson reads anything larger as a
    float, so such a value elsewhere in the document is written back in float
    form.

    Args:
        path: Document location.

    Returns:
        LoadedDocument holding both the original bytes and the parsed object.

    Raises:
        NotFoundError: If the path does not exist or is not a regular file.
        ParseError: If the content is not valid JSON or its root is not an object.
    """
    if not path.exists():
        raise NotFoundError(path, f"{path.name} not found at: {path}")
    if not path.is_file():
        raise NotFoundError(path, f"{path.name} is not a file: {path}")

    raw = path.read_bytes()
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise ParseError(path, f"Failed to parse {path.name}: {e}") from None

    if not isinstance(data, dict):
        raise ParseError(
            path, f"Failed to parse {path.name}: expected a JSON object, got {type(data).__name__}"
        )

    log.debug(DOCUMENT_LOADED, path=str(path), size=len(raw))
    return LoadedDocument(path=path, raw=raw, data=data)


def backup_path_for(path: Path, timestamp: datetime | None = None) -> Path:
    """Return an unused ``<name>.backup-<epoch-millis>`` path next to ``path``."""
    if timestamp is None:
        timestamp = datetime.now(timezone.utc)
    millis = int(timestamp.timestamp() * 1000)

    candidate = path.with_name(f"{path.name}.backup-{millis}")
    counter = 1
    while candidate.exists():
        candidate = path.with_name(f"{path.name}.backup-{millis}-{counter}")
        counter += 1
    return candidate


def backup_document(path: Path, content: bytes, *, timestamp: datetime | None = None) -> Path:
    """Write ``content`` (the unmodified document bytes) to a timestamped sibling file.

    Args:
        path: The document being backed up.
        content: Exact bytes read from ``path``.
        timestamp: Backup time; defaults to now.

    Returns:
        Path of the backup file.
    """
    backup_path = backup_path_for(path, timestamp)
    backup_path.write_bytes(content)
    log.info(DOCUMENT_BACKED_UP, path=str(path), backup_path=str(backup_path), size=len(content))
    return backup_path


def serialize_document(data: dict[str, Any]) -> bytes:
    """Serialise a document with two-space indentation, preserving key order."""
    return orjson.dumps(data, option=orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE)


def write_document(path: Path, data: dict[str, Any]) -> None:
    """Write a document back to disk."""
    content = serialize_document(data)
    path.write_bytes(content)
    log.info(DOCUMENT_WRITTEN, path=str(path), size=len(content))


def patch_document(
    target: DocumentTarget,
    catalogue: Iterable[ModelDescriptor],
    *,
    provider: str,
    defaults: ProviderDefaults | None = None,
    dry_run: bool = False,
    timestamp: datetime | None = None,
) -> PatchReport:
    """Read, merge, back up and write one target document.

    The merge runs in memory first, so a document whose provider path has the
    wrong shape fails before any file is created. The backup is then written
    before the document is touched, even when no records end up being added.
    With ``dry_run`` neither the backup nor the document is written.

    Raises:
        NotFoundError: If the document is missing.
        ParseError: If the document is not a valid JSON object or its provider
            path has an unexpected shape.
    """
    loaded = read_document(target.path)

    try:
        result = merge_catalogue_into_document(
            loaded.data,
            catalogue,
            provider,
            target.variant,
            container_path=target.container_path,
            defaults=defaults,
        )
    except DocumentStructureError as e:
        raise DocumentStructureError(target.path, f"{target.path}: {e}") from None

    backup_path = None
    if not dry_run:
        backup_path = backup_document(target.path, loaded.raw, timestamp=timestamp)
        write_document(target.path, result.document)

    return PatchReport(
        target=target,
        added_ids=tuple(result.added_ids),
        total=result.total,
        backup_path=backup_path,
        written=not dry_run,
        provider_created=result.provider_created,
    )
