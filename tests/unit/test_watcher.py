"""
Unit tests for watch mode.
"""

import os

from atomcss.core.manifest import parse_config
from atomcss.core.pipeline import GenerationStatus, load_context
from atomcss.runtime.watcher import FileWatcher, RegenerationWatcher


def _touch_later(path, content):
    """Write a file and push its mtime forward so polling sees the change."""
    path.write_text(content)
    stat = path.stat()
    os.utime(path, (stat.st_atime, stat.st_mtime + 10))


class TestFileWatcher:
    """Tests for mtime polling."""

    def test_detects_new_modified_and_deleted(self, tmp_path):
        kept = tmp_path / "index.wxml"
        gone = tmp_path / "old.wxml"
        kept.write_text("<view/>")
        gone.write_text("<view/>")
        watcher = FileWatcher([tmp_path], on_change=lambda paths: None, file_types=[".wxml"])
        watcher._file_mtimes = watcher._scan_files()

        _touch_later(kept, '<view class="px-20"/>')
        gone.unlink()
        added = tmp_path / "new.wxml"
        added.write_text("<view/>")

        assert watcher.poll() == sorted([kept, gone, added])
        assert watcher.poll() == []

    def test_filters_file_types_and_ignored(self, tmp_path):
        output = tmp_path / "min.wxss"
        watcher = FileWatcher(
            [tmp_path],
            on_change=lambda paths: None,
            file_types=[".wxss"],
            ignore=[output],
        )
        watcher._file_mtimes = watcher._scan_files()
        output.write_text(".a { }")
        (tmp_path / "notes.txt").write_text("x")
        assert watcher.poll() == []


class TestRegenerationWatcher:
    """Tests for regeneration on change."""

    def test_handle_change_regenerates(self, mini_program):
        root = mini_program(
            ["pages/index/index"],
            {"pages/index/index.wxml": '<view class="px-20"></view>'},
        )
        work_dir = root / "miniprogram"
        reports = []
        context = load_context(parse_config({"watch": {"delay": 0}}))
        watcher = RegenerationWatcher(work_dir, context, on_report=reports.append)

        watcher.handle_change([work_dir / "pages/index/index.wxml"])

        assert watcher.refresh_count == 1
        assert [r.status for r in reports] == [GenerationStatus.WRITTEN]
        assert ".px-20 {" in (work_dir / "min.wxss").read_text()

    def test_generated_files_ignored(self, mini_program):
        root = mini_program(["pages/index/index"], {"pages/index/index.wxml": "<view/>"})
        work_dir = root / "miniprogram"
        watcher = RegenerationWatcher(work_dir, load_context(parse_config({})))
        assert (work_dir / "min.wxss").resolve() in watcher.watcher.ignore
        assert (work_dir / "var.wxss").resolve() in watcher.watcher.ignore
