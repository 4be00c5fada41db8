"""
Long-running modes.

- FileWatcher: mtime polling over a directory tree
- RegenerationWatcher: regenerates stylesheets after each burst of changes
"""

from .watcher import FileWatcher, RegenerationWatcher

__all__ = ["FileWatcher", "RegenerationWatcher"]
