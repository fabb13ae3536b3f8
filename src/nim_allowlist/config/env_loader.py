"""Environment variable file loader with priority-based loading."""

import os
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv

from nim_allowlist.telemetry import get_logger

log = get_logger(__name__)


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


def get_environment() -> Environment:
    """Detect current environment from the APP_ENV environment variable.

    Returns:
        Environment enum value.

    Environment variable mapping:
    - "production" or "prod" → Environment.PRODUCTION
    - "staging" or "stage" → Environment.STAGING
    - "test" → Environment.TEST
    - Default → Environment.DEVELOPMENT

    Note: environment detection must happen before settings are loaded,
    so this reads os.environ directly.
    """
    app_env = os.getenv("APP_ENV", "").lower()

    if app_env in ("production", "prod"):
        return Environment.PRODUCTION
    elif app_env in ("staging", "stage"):
        return Environment.STAGING
    elif app_env == "test":
        return Environment.TEST
    else:
        return Environment.DEVELOPMENT


def load_env_files(base_dir: Path | None = None) -> list[Path]:
    """Load .env files in priority order.

    Priority order (highest to lowest):
    1. `.env.{environment}.local`
    2. `.env.{environment}`
    3. `.env.local`
    4. `.env`

    Args:
        base_dir: Directory holding the .env files. Defaults to the working directory.

    Returns:
        The files that were loaded, lowest priority first.
    """
    if base_dir is None:
        base_dir = Path.cwd()

    env_name = get_environment().value

    # Later files override earlier ones
    env_files = [
        base_dir / ".env",
        base_dir / ".env.local",
        base_dir / f".env.{env_name}",
        base_dir / f".env.{env_name}.local",
    ]

    # load_dotenv(override=False) keeps the first value it sees, so walk from
    # highest to lowest priority. Explicit environment variables still win.
    loaded_files = []
    for env_file in reversed(env_files):
        if env_file.is_file():
            load_dotenv(env_file, override=False)
            loaded_files.append(env_file)
    loaded_files.reverse()

    if loaded_files:
        log.info(
            "env_files_loaded",
            environment=env_name,
            files=[str(p.relative_to(base_dir)) for p in loaded_files],
            base_dir=str(base_dir),
        )
    else:
        log.debug("no_env_files_found", environment=env_name, base_dir=str(base_dir))
    return loaded_files
