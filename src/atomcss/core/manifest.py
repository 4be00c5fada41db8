import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigError
from .ir.style import CssOption, UnitValueDeclaration

CONFIG_FILE = "atomcss.toml"


@dataclass
class FileStructure:
    """Mini program file layout, relative to the working directory."""

    mini_program_dir: str = "miniprogram"
    component_dir: str = "components"
    app_config_file: str = "app.json"
    css_main_file: str = "app.wxss"
    css_var_file: str = "var.wxss"  # generated variables
    css_output_file: str = "min.wxss"  # generated rules
    css_input_files: list[str] = field(default_factory=lambda: ["font.wxss", "reset.wxss"])


@dataclass
class FileExtension:
    """Page file extensions."""

    page: str = ".wxml"
    css: str = ".wxss"
    ts: str = ".ts"
    js: str = ".js"


@dataclass
class DataOption:
    """Rule and theme files; empty means the bundled defaults."""

    rule_file: str = ""
    theme_file: str = ""


@dataclass
class DebugOption:
    """Extra log output, all off by default."""

    print_rules: bool = False
    print_themes: bool = False
    show_page_class_names: bool = False
    show_style_task_result: bool = False
    show_file_content: bool = False


@dataclass
class ProcessOption:
    max_workers: int = 5


@dataclass
class WatchOption:
    """Polling watcher settings (seconds)."""

    delay: float = 0.5
    poll_interval: float = 0.5
    file_types: list[str] = field(
        default_factory=lambda: [".wxml", ".wxss", ".ts", ".js", ".json"]
    )


@dataclass
class RunningConfig:
    """
    Running configuration loaded from atomcss.toml.

    ``config_dir`` is the directory relative data file paths resolve against.
    """

    files: FileStructure = field(default_factory=FileStructure)
    extensions: FileExtension = field(default_factory=FileExtension)
    css: CssOption = field(default_factory=CssOption)
    data: DataOption = field(default_factory=DataOption)
    debug: DebugOption = field(default_factory=DebugOption)
    process: ProcessOption = field(default_factory=ProcessOption)
    watch: WatchOption = field(default_factory=WatchOption)
    config_dir: Path = field(default_factory=Path.cwd)

    def data_path(self, value: str) -> Path | None:
        """Resolve a configured data file path, None for bundled defaults."""
        if not value:
            return None
        path = Path(value).expanduser()
        return path if path.is_absolute() else self.config_dir / path


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table")
    return section


def _build(cls: type, section: dict[str, Any], name: str) -> Any:
    try:
        return cls(**section)
    except TypeError as e:
        raise ConfigError(f"Invalid option in [{name}]: {e}") from e


def parse_config(data: dict[str, Any], config_dir: Path | None = None) -> RunningConfig:
    """Build a RunningConfig from parsed TOML data."""
    css_data = dict(_section(data, "css"))
    one_data = css_data.pop("one", {})
    if not isinstance(one_data, dict):
        raise ConfigError("[css.one] must be a table")
    one_data = dict(one_data)
    if "from" in one_data:
        one_data["from_"] = one_data.pop("from")
    one = _build(UnitValueDeclaration, one_data, "css.one")
    if one.to == 0:
        raise ConfigError("[css.one] to must not be 0")
    css = _build(CssOption, {**css_data, "one": one}, "css")

    return RunningConfig(
        files=_build(FileStructure, _section(data, "files"), "files"),
        extensions=_build(FileExtension, _section(data, "extensions"), "extensions"),
        css=css,
        data=_build(DataOption, _section(data, "data"), "data"),
        debug=_build(DebugOption, _section(data, "debug"), "debug"),
        process=_build(ProcessOption, _section(data, "process"), "process"),
        watch=_build(WatchOption, _section(data, "watch"), "watch"),
        config_dir=config_dir or Path.cwd(),
    )


def load_config(path: Path) -> RunningConfig:
    """
    Load atomcss.toml; a missing file yields the defaults.

    Raises:
        ConfigError: on invalid TOML or unknown options
    """
    if not path.exists():
        return RunningConfig(config_dir=path.parent.resolve())
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    return parse_config(data, config_dir=path.parent.resolve())
