"""Unit tests for scratch cleanup."""

import os
import time
from pathlib import Path

from pagescope.cleanup import run_cleanup
from pagescope.config import CleanupConfig, PathsConfig, Settings


def make_settings(scratch: Path, retention_hours: int = 24) -> Settings:
    return Settings(
        paths=PathsConfig(scratch=scratch),
        cleanup=CleanupConfig(retention_hours=retention_hours),
    )


def age(path: Path, hours: float) -> None:
    then = time.time() - hours * 3600
    os.utime(path, (then, then))


class TestRunCleanup:
    """Tests for run_cleanup."""

    def test_removes_only_stale_directories(self, tmp_path: Path) -> None:
        settings = make_settings(tmp_path / "scratch")
        stale = settings.paths.scratch / "content-old"
        fresh = settings.paths.scratch / "forgery-new"
        stale.mkdir()
        fresh.mkdir()
        (stale / "page-1.png").write_bytes(b"x")
        age(stale, 48)

        assert run_cleanup(settings) == 1
        assert not stale.exists()
        assert fresh.exists()

    def test_ignores_files(self, tmp_path: Path) -> None:
        settings = make_settings(tmp_path / "scratch")
        stray = settings.paths.scratch / "stray.txt"
        stray.write_text("x")
        age(stray, 48)

        assert run_cleanup(settings) == 0
        assert stray.exists()

    def test_missing_scratch_dir(self, tmp_path: Path) -> None:
        settings = make_settings(tmp_path / "scratch")
        settings.paths.scratch.rmdir()

        assert run_cleanup(settings) == 0
