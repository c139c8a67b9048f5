"""Tests for export file writing."""

import pytest

from msg_harvest.utils import atomic_write_bytes


class TestAtomicWriteBytes:
    """Test suite for atomic_write_bytes()."""

    def test_creates_parent_directories(self, tmp_path):
        target = tmp_path / "out" / "nested" / "emails.xlsx"

        atomic_write_bytes(target, b"xlsx")

        assert target.read_bytes() == b"xlsx"
        assert list(target.parent.iterdir()) == [target]

    def test_replaces_existing_file(self, tmp_path):
        target = tmp_path / "files.zip"
        target.write_bytes(b"old")

        atomic_write_bytes(str(target), b"new")

        assert target.read_bytes() == b"new"

    def test_failure_keeps_existing_file(self, tmp_path):
        """Should leave the previous export and no temp file behind on error."""
        target = tmp_path / "files.zip"
        target.write_bytes(b"old")

        with pytest.raises(TypeError):
            atomic_write_bytes(target, "not bytes")

        assert target.read_bytes() == b"old"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["files.zip"]
