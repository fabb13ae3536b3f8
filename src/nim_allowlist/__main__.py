"""Allow ``python -m nim_allowlist``."""

from nim_allowlist.ui.cli import app

if __name__ == "__main__":
    app()
