"""Run orchestration: patch every target document in order."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from nim_allowlist.catalogue import ModelDescriptor
from nim_allowlist.errors import AllowlistError
from nim_allowlist.merger.documents import DocumentTarget, PatchReport, patch_document
from nim_allowlist.merger.merge import ProviderDefaults
from nim_allowlist.merger.records import FieldVariant
from nim_allowlist.telemetry import PATCH_COMPLETED, PATCH_FAILED, PATCH_STARTED, get_logger

if TYPE_CHECKING:
    from nim_allowlist.config.settings import AppConfig

log = get_logger(__name__)

MODELS_JSON_CONTAINER = ("providers",)
OPENCLAW_JSON_CONTAINER = ("models", "providers")


def build_targets(settings: AppConfig) -> list[DocumentTarget]:
    """Return the two OpenClaw documents to patch, in processing order.

    1. The agent model registry (``models.json``), extended records.
    2. The application config (``openclaw.json``), minimal records.
    """
    return [
        DocumentTarget(
            label="models.json",
            path=settings.resolved_models_json_path,
            container_path=MODELS_JSON_CONTAINER,
            variant=FieldVariant.EXTENDED,
        ),
        DocumentTarget(
            label="openclaw.json",
            path=settings.resolved_openclaw_json_path,
            container_path=OPENCLAW_JSON_CONTAINER,
            variant=FieldVariant.MINIMAL,
        ),
    ]


def provider_defaults(settings: AppConfig) -> ProviderDefaults:
    """Connection details for newly created provider entries, from settings."""
    return ProviderDefaults(base_url=settings.provider_base_url, api=settings.provider_api)


def patch_targets(
    targets: Sequence[DocumentTarget],
    catalogue: Sequence[ModelDescriptor],
    *,
    provider: str,
    defaults: ProviderDefaults | None = None,
    dry_run: bool = False,
    on_target: Callable[[DocumentTarget], None] | None = None,
    on_report: Callable[[PatchReport], None] | None = None,
) -> list[PatchReport]:
    """Patch each target in turn.

    The first failure aborts the run; later targets are not attempted and
    documents already patched are left as written.

    Args:
        targets: Documents to patch, in order.
        catalogue: Models to register.
        provider: Provider key (e.g. "nvidia").
        defaults: Connection details for a newly created provider entry.
        dry_run: Merge in memory only; write neither backups nor documents.
        on_target: Called before each target is processed.
        on_report: Called with each target's report as soon as it is patched.

    Returns:
        One PatchReport per target.

    Raises:
        AllowlistError: The first error encountered.
    """
    log.info(
        PATCH_STARTED,
        targets=[str(t.path) for t in targets],
        models_count=len(catalogue),
        provider=provider,
        dry_run=dry_run,
    )

    reports: list[PatchReport] = []
    for target in targets:
        if on_target is not None:
            on_target(target)
        try:
            report = patch_document(
                target, catalogue, provider=provider, defaults=defaults, dry_run=dry_run
            )
        except AllowlistError as e:
            log.error(
                PATCH_FAILED,
                target=target.label,
                path=str(target.path),
                error=str(e),
                error_type=type(e).__name__,
            )
            raise
        reports.append(report)
        if on_report is not None:
            on_report(report)

    log.info(
        PATCH_COMPLETED,
        added={r.target.label: r.added for r in reports},
        dry_run=dry_run,
    )
    return reports
