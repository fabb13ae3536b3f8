"""Command-line interface (Typer-based).

Run with ``nim-allowlist`` or ``python -m nim_allowlist``.
"""

__all__ = []  # CLI is run directly, no exports needed
