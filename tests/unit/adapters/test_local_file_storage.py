"""Unit tests for LocalFileStorage."""
from __future__ import annotations

import pytest

from thumbgen.adapters.outbound.persistence.local_file_storage import LocalFileStorage


class TestDeleteSync:
    def test_deletes_existing_files(self, tmp_path):
        palette = tmp_path / "palette-1.png"
        palette.write_bytes(b"png")

        deleted = LocalFileStorage().delete_sync([str(palette)], force=True)

        assert deleted == [str(palette)]
        assert not palette.exists()

    def test_force_ignores_missing(self, tmp_path):
        missing = tmp_path / "gone.png"
        assert LocalFileStorage().delete_sync([str(missing)], force=True) == []

    def test_missing_without_force_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            LocalFileStorage().delete_sync([str(tmp_path / "gone.png")])
