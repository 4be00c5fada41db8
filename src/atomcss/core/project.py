"""
Mini program project discovery and page scanning.

Pages come from ``app.json`` (``pages`` plus every subpackage's
``root/pages``); components are the page files under the component
directory whose script enables global classes. Page scans run on a
bounded thread pool.
"""

from __future__ import annotations

import json
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigError
from .manifest import RunningConfig
from .markup import read_page_class_names
from .stylesheet import collect_declared_names, read_selector_names

logger = logging.getLogger(__name__)


@dataclass
class PageInfo:
    """A page file and which sibling files exist next to it."""

    page: Path
    ts_path: Path | None = None
    js_path: Path | None = None
    css_path: Path | None = None

    @property
    def script_path(self) -> Path | None:
        return self.ts_path or self.js_path


@dataclass
class ProjectScan:
    """Class names found in a project, split by where they were found."""

    declared: list[str] = field(default_factory=list)
    page_names: list[str] = field(default_factory=list)
    component_names: list[str] = field(default_factory=list)

    @property
    def missing(self) -> list[str]:
        """Used class names without a declaration, sorted."""
        used = set(self.page_names) | set(self.component_names)
        return sorted(used - set(self.declared))

    @property
    def unused(self) -> list[str]:
        """Declared class names no page uses, sorted."""
        used = set(self.page_names) | set(self.component_names)
        return sorted(set(self.declared) - used)


def ensure_work_dir(root: Path, config: RunningConfig) -> Path:
    """
    Locate the mini program directory.

    ``root`` is accepted when it contains the mini program directory (which
    then becomes the work dir) or the main CSS file.

    Raises:
        ConfigError: if neither is found
    """
    files = config.files
    candidate = root / files.mini_program_dir
    if candidate.is_dir():
        logger.info("[task] working directory found for %s at %s", files.mini_program_dir, root)
        return candidate
    if (root / files.css_main_file).is_file():
        logger.info("[task] working directory found for %s at %s", files.css_main_file, root)
        return root
    raise ConfigError(
        f"{root} is not a mini program directory, "
        f"no {files.css_main_file} or {files.mini_program_dir}/ found"
    )


def read_app_pages(work_dir: Path, config: RunningConfig) -> list[Path]:
    """
    Page files listed in the app config.

    Raises:
        ConfigError: if the app config is missing or malformed
    """
    app_file = work_dir / config.files.app_config_file
    try:
        app = json.loads(app_file.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {app_file}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {app_file}: {e}") from e

    if not isinstance(app, dict):
        raise ConfigError(f"{app_file} must contain an object")

    pages = list(app.get("pages", []))
    for package in app.get("subpackages") or app.get("subPackages") or []:
        root = package.get("root", "").rstrip("/")
        pages.extend(f"{root}/{page}" for page in package.get("pages", []))

    logger.info("[task] read mini program pages from %s, found %d pages", app_file.name, len(pages))
    return [work_dir / f"{page}{config.extensions.page}" for page in pages]


def _sibling(page: Path, old: str, new: str) -> Path:
    return page.with_name(page.name[: -len(old)] + new)


def _page_info(page: Path, config: RunningConfig) -> PageInfo:
    ext = config.extensions

    def existing(suffix: str) -> Path | None:
        path = _sibling(page, ext.page, suffix)
        return path if path.is_file() else None

    return PageInfo(
        page=page,
        ts_path=existing(ext.ts),
        js_path=existing(ext.js),
        css_path=existing(ext.css),
    )


def discover_component_pages(work_dir: Path, config: RunningConfig) -> list[PageInfo]:
    """Every page file under the component directory, sorted by path."""
    component_dir = work_dir / config.files.component_dir
    if not component_dir.is_dir():
        logger.debug("No component directory at %s", component_dir)
        return []
    pages = sorted(component_dir.rglob(f"*{config.extensions.page}"))
    return [_page_info(page, config) for page in pages if page.is_file()]


def scan_page(page: Path, config: RunningConfig) -> list[str]:
    """Class names used by a page and not declared in its own stylesheet."""
    if not page.is_file():
        logger.warning("Missing page file %s", page)
        return []
    class_names = read_page_class_names(page)
    if config.debug.show_page_class_names:
        logger.info("[check] %s class names [%s]", page.name, ",".join(class_names))

    css_path = _sibling(page, config.extensions.page, config.extensions.css)
    declared = set(read_selector_names(css_path) or [])
    return [name for name in class_names if name not in declared]


def scan_component(info: PageInfo, config: RunningConfig) -> list[str]:
    """Like scan_page, for components that enable global classes only."""
    script = info.script_path
    if script is None:
        return []
    if not re.search(config.css.component_global_css, script.read_text(encoding="utf-8")):
        logger.debug("Ignore %s without global class option", info.page)
        return []
    return scan_page(info.page, config)


def scan_project(work_dir: Path, config: RunningConfig) -> ProjectScan:
    """Scan global stylesheets, pages and components of a project."""
    files = config.files
    declared = collect_declared_names(
        work_dir / name for name in [*files.css_input_files, files.css_main_file]
    )

    pages = read_app_pages(work_dir, config)
    components = discover_component_pages(work_dir, config)

    with ThreadPoolExecutor(max_workers=config.process.max_workers) as executor:
        page_results = list(executor.map(lambda page: scan_page(page, config), pages))
        component_results = list(
            executor.map(lambda info: scan_component(info, config), components)
        )

    scan = ProjectScan(
        declared=declared,
        page_names=sorted({name for names in page_results for name in names}),
        component_names=sorted({name for names in component_results for name in names}),
    )
    logger.info("[data] total found %d global style names", len(scan.declared))
    logger.info("[data] total found %d class names from pages", len(scan.page_names))
    logger.info("[data] total found %d class names from components", len(scan.component_names))
    return scan
