"""Shared fixtures."""

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from nim_allowlist.catalogue import ModelDescriptor
from nim_allowlist.config import reset_settings


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Run each test from an empty directory with no NIM_ALLOWLIST_* variables set."""
    for key in list(os.environ):
        if key.startswith("NIM_ALLOWLIST_") or key == "APP_ENV":
            monkeypatch.delenv(key)
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    reset_settings()
    yield workdir
    reset_settings()


def make_descriptor(model_id: str, label: str = "Model", tier: str = "S") -> ModelDescriptor:
    """Build a descriptor from the compact row form."""
    return ModelDescriptor.model_validate([model_id, label, tier])
