"""Unit tests for temporary upload storage."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest
import pytest_check as check

from lingua_relay.parsing.uploads import (
    discard,
    save_upload,
    temporary_upload,
    unique_filename,
)


class TestSaveUpload:
    """Tests for storing uploads on disk."""

    def test_writes_content_with_metadata(self, tmp_path: Path) -> None:
        upload = save_upload(b"hello", "Notes.TXT", tmp_path)

        check.equal(upload.path.read_bytes(), b"hello")
        check.equal(upload.original_name, "Notes.TXT")
        check.equal(upload.declared_extension, ".txt")
        check.equal(upload.size_bytes, 5)
        check.equal(upload.path.parent, tmp_path)

    def test_creates_missing_directory(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "uploads"

        upload = save_upload(b"x", "a.txt", target)

        assert upload.path.exists()

    def test_stored_name_does_not_reuse_original(self, tmp_path: Path) -> None:
        upload = save_upload(b"x", "secret-name.pdf", tmp_path)

        check.is_not_in("secret-name", upload.path.name)
        check.is_true(upload.path.name.endswith(".pdf"))

    def test_concurrent_names_do_not_collide(self) -> None:
        """Names for uploads in the same millisecond still differ."""
        with patch("lingua_relay.parsing.uploads.time.time", return_value=1700000000.0):
            names = {unique_filename("doc.txt") for _ in range(50)}

        assert len(names) == 50


class TestDiscard:
    """Tests for upload cleanup."""

    def test_removes_file(self, tmp_path: Path) -> None:
        upload = save_upload(b"x", "a.txt", tmp_path)

        discard(upload)

        assert not upload.path.exists()

    def test_missing_file_is_logged_not_raised(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        upload = save_upload(b"x", "a.txt", tmp_path)
        upload.path.unlink()

        with caplog.at_level(logging.ERROR):
            discard(upload)

        assert "Error cleaning up upload a.txt" in caplog.text


class TestTemporaryUpload:
    """Tests for the scoped upload context manager."""

    def test_deleted_after_block(self, tmp_path: Path) -> None:
        with temporary_upload(b"x", "a.txt", tmp_path) as upload:
            assert upload.path.exists()

        assert list(tmp_path.iterdir()) == []

    def test_deleted_when_block_raises(self, tmp_path: Path) -> None:
        with pytest.raises(RuntimeError), temporary_upload(b"x", "a.txt", tmp_path):
            raise RuntimeError("boom")

        assert list(tmp_path.iterdir()) == []

    def test_discards_exactly_once(self, tmp_path: Path) -> None:
        with patch("lingua_relay.parsing.uploads.discard") as mock_discard:
            with pytest.raises(ValueError), temporary_upload(b"x", "a.txt", tmp_path):
                raise ValueError("fail")

        mock_discard.assert_called_once()
