"""CLI for registering the model catalogue with OpenClaw.

Examples:
    nim-allowlist                 # patch both OpenClaw documents
    nim-allowlist patch --dry-run
    nim-allowlist list --tier S+
"""

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from nim_allowlist.catalogue import BUNDLED_CATALOGUE_PATH, Catalogue, Tier
from nim_allowlist.config import AppConfig, load_app_config, load_catalogue
from nim_allowlist.config.validators import resolve_path
from nim_allowlist.errors import AllowlistError
from nim_allowlist.merger import (
    DocumentTarget,
    PatchReport,
    build_targets,
    container_location,
    patch_targets,
    provider_defaults,
)
from nim_allowlist.telemetry import configure_logging

app = typer.Typer(
    help="Register NVIDIA NIM models with OpenClaw so they are no longer 'not allowed'"
)
console = Console()


def _load_settings(verbose: bool, **overrides: Optional[Path | str]) -> AppConfig:
    """Load settings, apply command-line overrides and configure logging.

    Raises:
        typer.Exit: If the settings are invalid.
    """
    try:
        settings = load_app_config()
    except ValidationError as error:
        console.print(f"[red]✖ Invalid configuration:[/red] {escape(str(error))}")
        raise typer.Exit(1) from error

    update = {}
    for key, value in overrides.items():
        if value is None:
            continue
        update[key] = resolve_path(value) if isinstance(value, Path) else value
    if update:
        settings = settings.model_copy(update=update)

    configure_logging(
        level="DEBUG" if verbose else settings.effective_log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
    )
    return settings


def _load_catalogue(settings: AppConfig) -> Catalogue:
    """Load the configured catalogue, exiting with status 1 on failure."""
    try:
        return load_catalogue(settings.catalogue_path or BUNDLED_CATALOGUE_PATH)
    except AllowlistError as error:
        console.print(f"[red]  ✖ {escape(str(error))}[/red]")
        raise typer.Exit(1) from error


def _print_report(report: PatchReport, provider: str) -> None:
    """Print the per-document progress lines."""
    label = report.target.label
    if report.backup_path is not None:
        console.print(f"  💾 Backup: {report.backup_path}")
    if report.provider_created:
        location = container_location(report.target.container_path, provider)
        console.print(f"  ➕ Created provider entry [bold]{location}[/bold]")
    verb = "Added" if report.written else "Would add"
    console.print(f"  ✅ {verb} {report.added} models to {label}")
    console.print(f"  📊 Total {provider.upper()} models: {report.total}")


def _run_patch(settings: AppConfig, dry_run: bool) -> int:
    """Patch both OpenClaw documents and print progress.

    Returns:
        Process exit code.
    """
    catalogue = _load_catalogue(settings)
    try:
        models = catalogue.source(settings.catalogue_source).models
    except AllowlistError as error:
        console.print(f"[red]  ✖ {escape(str(error))}[/red]")
        return 1

    provider = settings.provider_name
    console.print(
        f"🦞 Patching OpenClaw for full {provider.upper()} model support"
        f"{' (dry run)' if dry_run else ''}...\n"
    )

    targets = build_targets(settings)

    def announce(target: DocumentTarget) -> None:
        if target is not targets[0]:
            console.print()
        console.print(f"📄 Patching {target.label}...")

    try:
        patch_targets(
            targets,
            models,
            provider=provider,
            defaults=provider_defaults(settings),
            dry_run=dry_run,
            on_target=announce,
            on_report=lambda report: _print_report(report, provider),
        )
    except AllowlistError as error:
        console.print(f"[red]  ✖ {escape(str(error))}[/red]")
        return 1

    if dry_run:
        console.print("\n✨ Dry run complete, no files were changed.")
        return 0

    console.print("\n✨ Patch complete!")
    console.print("\n💡 Next steps:")
    console.print("   1. Restart OpenClaw gateway: systemctl --user restart openclaw-gateway")
    console.print("   2. Select any catalogued model - no more 'not allowed' errors!")
    console.print()
    return 0


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Default entrypoint: running without a command patches both documents."""
    if ctx.invoked_subcommand is not None:
        return

    settings = _load_settings(verbose=False)
    raise typer.Exit(_run_patch(settings, dry_run=False))


@app.command()
def patch(
    models_json: Optional[Path] = typer.Option(
        None,
        "--models-json",
        help="Agent model registry (default: ~/.openclaw/agents/main/agent/models.json)",
    ),
    openclaw_json: Optional[Path] = typer.Option(
        None, "--openclaw-json", help="Application config (default: ~/.openclaw/openclaw.json)"
    ),
    catalogue: Optional[Path] = typer.Option(
        None, "--catalogue", help="Catalogue YAML file (default: bundled catalogue)"
    ),
    source: Optional[str] = typer.Option(None, "--source", help="Catalogue source key"),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show what would be added without writing anything"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug events to stderr"),
) -> None:
    """Register every catalogued model in both OpenClaw documents.

    Each document is backed up to <file>.backup-<epoch-ms> before it is written.
    """
    settings = _load_settings(
        verbose,
        models_json_path=models_json,
        openclaw_json_path=openclaw_json,
        catalogue_path=catalogue,
        catalogue_source=source,
    )
    raise typer.Exit(_run_patch(settings, dry_run=dry_run))


@app.command(name="list")
def list_models(
    tier: Optional[Tier] = typer.Option(None, "--tier", "-t", help="Only show this tier"),
    catalogue: Optional[Path] = typer.Option(
        None, "--catalogue", help="Catalogue YAML file (default: bundled catalogue)"
    ),
    source: Optional[str] = typer.Option(None, "--source", help="Catalogue source key"),
) -> None:
    """Show the catalogue with the limits each model is registered with."""
    settings = _load_settings(False, catalogue_path=catalogue, catalogue_source=source)
    loaded = _load_catalogue(settings)
    try:
        catalogue_source = loaded.source(settings.catalogue_source)
    except AllowlistError as error:
        console.print(f"[red]✖ {escape(str(error))}[/red]")
        raise typer.Exit(1) from error

    models = catalogue_source.models
    if tier is not None:
        models = [m for m in models if m.tier == tier]

    table = Table(title=f"{catalogue_source.name} catalogue ({len(models)} models)")
    table.add_column("Tier", style="bold")
    table.add_column("Model ID", style="cyan")
    table.add_column("Label")
    table.add_column("Score", justify="right")
    table.add_column("Context", justify="right")
    table.add_column("Max tokens", justify="right")
    table.add_column("Reasoning")

    for model in models:
        limits = model.limits
        table.add_row(
            model.tier.value,
            model.id,
            model.label,
            model.score or "-",
            str(limits.context_window),
            str(limits.max_tokens),
            "yes" if model.is_thinking else "",
        )

    console.print(table)


if __name__ == "__main__":
    app()
