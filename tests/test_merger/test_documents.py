"""Tests for document reading, backup and patching."""

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest
from conftest import make_descriptor

from nim_allowlist.errors import DocumentStructureError, NotFoundError, ParseError
from nim_allowlist.merger import (
    DocumentTarget,
    FieldVariant,
    backup_document,
    patch_document,
    read_document,
    serialize_document,
    write_document,
)

CATALOGUE = [
    make_descriptor("vendor/model-a", "Model A", "S"),
    make_descriptor("vendor/model-b-thinking", "Model B", "B+"),
]

BACKUP_TIME = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
BACKUP_MILLIS = int(BACKUP_TIME.timestamp() * 1000)


def _target(path: Path, variant: FieldVariant = FieldVariant.EXTENDED) -> DocumentTarget:
    return DocumentTarget(
        label=path.name, path=path, container_path=("providers",), variant=variant
    )


def _backups(path: Path) -> list[Path]:
    return sorted(path.parent.glob(f"{path.name}.backup-*"))


class TestReadDocument:
    """Test reading documents from disk."""

    def test_read_valid_document(self, tmp_path: Path) -> None:
        """Test parsed data and raw bytes are both returned."""
        path = tmp_path / "models.json"
        path.write_text('{"providers": {}, "note": "café"}', encoding="utf-8")

        loaded = read_document(path)

        assert loaded.data == {"providers": {}, "note": "café"}
        assert loaded.raw == path.read_bytes()
        assert loaded.path == path

    def test_missing_document(self, tmp_path: Path) -> None:
        """Test a missing document raises NotFoundError."""
        path = tmp_path / "models.json"

        with pytest.raises(NotFoundError, match="models.json not found") as exc_info:
            read_document(path)
        assert exc_info.value.path == path

    def test_directory_is_not_a_document(self, tmp_path: Path) -> None:
        """Test a directory raises NotFoundError."""
        with pytest.raises(NotFoundError, match="is not a file"):
            read_document(tmp_path)

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Test malformed content raises ParseError."""
        path = tmp_path / "models.json"
        path.write_text("{not json")

        with pytest.raises(ParseError, match="Failed to parse models.json"):
            read_document(path)

    def test_non_object_root(self, tmp_path: Path) -> None:
        """Test a JSON array root raises ParseError."""
        path = tmp_path / "models.json"
        path.write_text("[1, 2, 3]")

        with pytest.raises(ParseError, match="expected a JSON object"):
            read_document(path)


class TestBackupDocument:
    """Test the backup step."""

    def test_backup_is_byte_identical(self, tmp_path: Path) -> None:
        """Test the backup holds exactly the given bytes."""
        path = tmp_path / "openclaw.json"
        content = b'{\n    "odd":   "spacing" }\n'
        path.write_bytes(content)

        backup = backup_document(path, content, timestamp=BACKUP_TIME)

        assert backup == tmp_path / f"openclaw.json.backup-{BACKUP_MILLIS}"
        assert backup.read_bytes() == content

    def test_existing_backup_not_overwritten(self, tmp_path: Path) -> None:
        """Test a second backup in the same millisecond gets a suffix."""
        path = tmp_path / "openclaw.json"
        path.write_bytes(b"{}")

        first = backup_document(path, b'{"v": 1}', timestamp=BACKUP_TIME)
        second = backup_document(path, b'{"v": 2}', timestamp=BACKUP_TIME)

        assert second.name == f"openclaw.json.backup-{BACKUP_MILLIS}-1"
        assert first.read_bytes() == b'{"v": 1}'
        assert second.read_bytes() == b'{"v": 2}'


class TestWriteDocument:
    """Test document serialisation."""

    def test_two_space_indent_and_key_order(self) -> None:
        """Test output is indented by two spaces and keeps key order."""
        content = serialize_document({"z": 1, "a": {"b": [1]}})

        assert content == b'{\n  "z": 1,\n  "a": {\n    "b": [\n      1\n    ]\n  }\n}\n'

    def test_write_round_trips(self, tmp_path: Path) -> None:
        """Test written documents parse back to the same data."""
        path = tmp_path / "models.json"
        data = {"providers": {"nvidia": {"models": []}}, "name": "über"}

        write_document(path, data)

        assert json.loads(path.read_text(encoding="utf-8")) == data
        assert "über" in path.read_text(encoding="utf-8")


class TestPatchDocument:
    """Test read → backup → merge → write for one document."""

    def test_patch_writes_backup_and_document(self, tmp_path: Path) -> None:
        """Test a patch backs up the original and writes merged records."""
        path = tmp_path / "models.json"
        original = b'{"providers": {"nvidia": {"models": [{"id": "vendor/model-a"}]}}}'
        path.write_bytes(original)

        report = patch_document(
            _target(path), CATALOGUE, provider="nvidia", timestamp=BACKUP_TIME
        )

        assert report.added == 1
        assert report.added_ids == ("vendor/model-b-thinking",)
        assert report.total == 2
        assert report.written is True
        assert report.backup_path is not None
        assert report.backup_path.read_bytes() == original

        data = json.loads(path.read_text())
        records = data["providers"]["nvidia"]["models"]
        assert records[0] == {"id": "vendor/model-a"}
        assert records[1]["reasoning"] is True
        assert records[1]["contextWindow"] == 32768

    def test_backup_even_when_nothing_added(self, tmp_path: Path) -> None:
        """Test the backup is written even if the merge adds no records."""
        path = tmp_path / "models.json"
        path.write_text(
            json.dumps(
                {"providers": {"nvidia": {"models": [{"id": m.id} for m in CATALOGUE]}}}
            )
        )

        report = patch_document(_target(path), CATALOGUE, provider="nvidia")

        assert report.added == 0
        assert len(_backups(path)) == 1

    def test_second_patch_is_noop(self, tmp_path: Path) -> None:
        """Test patching twice leaves the document as the first patch wrote it."""
        path = tmp_path / "openclaw.json"
        path.write_text("{}")
        target = DocumentTarget(
            label="openclaw.json",
            path=path,
            container_path=("models", "providers"),
            variant=FieldVariant.MINIMAL,
        )

        patch_document(target, CATALOGUE, provider="nvidia")
        after_first = path.read_bytes()
        report = patch_document(target, CATALOGUE, provider="nvidia")

        assert report.added == 0
        assert path.read_bytes() == after_first
        records = json.loads(after_first)["models"]["providers"]["nvidia"]["models"]
        assert records[0] == {
            "id": "vendor/model-a",
            "name": "Model A",
            "contextWindow": 128000,
            "maxTokens": 8192,
        }

    def test_large_integers_outside_provider_survive(self, tmp_path: Path) -> None:
        """Test 64-bit integers in unrelated keys are written back unchanged."""
        path = tmp_path / "models.json"
        path.write_text('{"gateway": {"token": 9223372036854775807}, "providers": {}}')

        patch_document(_target(path), CATALOGUE, provider="nvidia")

        assert b'"token": 9223372036854775807' in path.read_bytes()

    def test_parse_error_before_backup_or_write(self, tmp_path: Path) -> None:
        """Test malformed content fails before anything is written."""
        path = tmp_path / "models.json"
        path.write_text("not json at all")

        with pytest.raises(ParseError):
            patch_document(_target(path), CATALOGUE, provider="nvidia")

        assert path.read_text() == "not json at all"
        assert _backups(path) == []

    def test_missing_document(self, tmp_path: Path) -> None:
        """Test a missing document fails without creating anything."""
        path = tmp_path / "models.json"

        with pytest.raises(NotFoundError):
            patch_document(_target(path), CATALOGUE, provider="nvidia")

        assert not path.exists()
        assert _backups(path) == []

    def test_structure_error_leaves_document(self, tmp_path: Path) -> None:
        """Test a wrongly shaped provider path is reported with the file path."""
        path = tmp_path / "models.json"
        path.write_text('{"providers": []}')

        with pytest.raises(DocumentStructureError, match="models.json") as exc_info:
            patch_document(_target(path), CATALOGUE, provider="nvidia")

        assert exc_info.value.path == path
        assert path.read_text() == '{"providers": []}'
        assert _backups(path) == []

    def test_dry_run_writes_nothing(self, tmp_path: Path) -> None:
        """Test a dry run reports additions without touching the filesystem."""
        path = tmp_path / "models.json"
        path.write_text("{}")

        report = patch_document(_target(path), CATALOGUE, provider="nvidia", dry_run=True)

        assert report.added == 2
        assert report.written is False
        assert report.backup_path is None
        assert path.read_text() == "{}"
        assert _backups(path) == []
