"""Load and validate the model catalogue from its YAML data file.

This module provides the main entry point for loading the catalogue:
- Loads the catalogue data file (bundled, or overridden via settings)
- Validates against the Pydantic schema
- Returns a typed Catalogue object
"""

from pathlib import Path

from pydantic import ValidationError

from nim_allowlist.catalogue import BUNDLED_CATALOGUE_PATH, Catalogue
from nim_allowlist.config.loader import ConfigLoadError, load_yaml_file
from nim_allowlist.telemetry import CATALOGUE_LOADED, get_logger

log = get_logger(__name__)


class CatalogueError(ConfigLoadError):
    """Raised when the model catalogue cannot be loaded or is invalid."""

    pass


def load_catalogue(path: Path | str | None = None) -> Catalogue:
    """Load and validate the model catalogue.

    Args:
        path: Path to a catalogue YAML file. If None, uses settings.catalogue_path,
            falling back to the catalogue bundled with the package.

    Returns:
        Validated Catalogue object.

    Raises:
        CatalogueError: If the catalogue cannot be loaded, parsed, or validated.

    Example:
        >>> from nim_allowlist.config import load_catalogue
        >>> catalogue = load_catalogue()
        >>> catalogue.source("nvidia").models[0].id
        'deepseek-ai/deepseek-v3.1'
    """
    if path is None:
        from nim_allowlist.config.settings import get_settings  # noqa: PLC0415

        path = get_settings().catalogue_path or BUNDLED_CATALOGUE_PATH

    path = Path(path)

    if not path.exists():
        raise CatalogueError(f"Catalogue file not found: {path}")

    if not path.is_file():
        raise CatalogueError(f"Catalogue path is not a file: {path}")

    content = load_yaml_file(path, error_class=CatalogueError)
    if not content:
        log.warning("catalogue_empty", path=str(path))
        return Catalogue(sources={})

    try:
        catalogue = Catalogue.model_validate(content)
    except ValidationError as e:
        error_messages = []
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            error_messages.append(f"{field_path}: {error['msg']}")

        error_summary = "\n".join(error_messages)
        raise CatalogueError(f"Catalogue validation failed ({path}):\n{error_summary}") from None

    log.info(
        CATALOGUE_LOADED,
        path=str(path),
        sources=list(catalogue.sources),
        models_count=len(catalogue.all_models()),
    )
    return catalogue
