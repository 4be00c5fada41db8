"""
End-to-end generation run.

scan project -> missing class names -> resolve -> format -> write the
variable file and the rule file into the work dir.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

from .data_loader import load_rule_table, load_theme_map
from .formatter import BatchResult, generate_batch
from .ir.theme import ThemeMap
from .manifest import RunningConfig
from .project import ProjectScan, scan_project
from .resolver import StyleResolver
from .rule_table import RuleTable

logger = logging.getLogger(__name__)


class GenerationStatus(IntEnum):
    """Outcome of one generation run, used as the process exit code."""

    WRITTEN = 0
    NOTHING_MISSING = 1
    NOTHING_RESOLVED = 2


@dataclass
class GenerationContext:
    """Configuration plus the rule table and palette loaded once per process."""

    config: RunningConfig
    rule_table: RuleTable
    theme_map: ThemeMap

    def resolver(self) -> StyleResolver:
        return StyleResolver(self.rule_table, self.theme_map, self.config.css)


@dataclass
class GenerationReport:
    status: GenerationStatus
    scan: ProjectScan
    result: BatchResult | None = None
    var_file: Path | None = None
    output_file: Path | None = None


def load_context(config: RunningConfig) -> GenerationContext:
    """
    Load the rule table and palette named by the configuration.

    Raises:
        RuleConfigError: if the rule file is invalid
        ThemeConfigError: if the theme file is invalid
    """
    rule_table = load_rule_table(config.data_path(config.data.rule_file))
    theme_map = load_theme_map(config.data_path(config.data.theme_file))
    if config.debug.print_rules:
        for rule in rule_table.rules:
            logger.info("[rule] %-24s %s", rule.syntax, rule.expr or ",".join(rule.compose or []))
    if config.debug.print_themes:
        for name in theme_map.theme_names():
            logger.info("[theme] %-12s %s", name, ",".join(theme_map.ramp(config.css.palette, name) or []))
    return GenerationContext(config=config, rule_table=rule_table, theme_map=theme_map)


def write_outputs(work_dir: Path, result: BatchResult, config: RunningConfig) -> tuple[Path, Path]:
    """Write the variable block and the rule text into the work dir."""
    var_file = work_dir / config.files.css_var_file
    output_file = work_dir / config.files.css_output_file
    if config.debug.show_file_content:
        logger.info("[data] variables=%s", result.variables)
        logger.info("[data] styles=%s", result.styles)

    var_file.write_text(result.variables, encoding="utf-8")
    logger.info("[task] save %d chars to %s", len(result.variables), var_file.name)
    output_file.write_text(result.styles, encoding="utf-8")
    logger.info("[task] save %d chars to %s", len(result.styles), output_file.name)
    return var_file, output_file


def run_generation(work_dir: Path, context: GenerationContext) -> GenerationReport:
    """
    Generate the stylesheets for a project.

    Args:
        work_dir: mini program directory (see ``project.ensure_work_dir``)
        context: loaded configuration, rules and palette

    Returns:
        GenerationReport; nothing is written unless the status is WRITTEN
    """
    config = context.config
    scan = scan_project(work_dir, config)

    unused = scan.unused
    if unused:
        logger.debug("[data] %d declared class names unused: %s", len(unused), ",".join(unused))

    missing = scan.missing
    if not missing:
        logger.info("[data] no class names to create")
        return GenerationReport(status=GenerationStatus.NOTHING_MISSING, scan=scan)

    logger.info("[data] new task to generate %d class names [%s]", len(missing), ",".join(missing))
    result = generate_batch(
        missing,
        context.resolver(),
        context.theme_map,
        config.css,
        declared=scan.declared,
        show_task_result=config.debug.show_style_task_result,
    )
    if not result.has_output:
        logger.warning("[data] no updates, %d class names unmatched", len(result.warnings))
        return GenerationReport(status=GenerationStatus.NOTHING_RESOLVED, scan=scan, result=result)

    logger.info("[data] create %d unit vars [%s]", len(result.units), ",".join(result.units))
    logger.info("[data] create %d color vars [%s]", len(result.colors), ",".join(result.colors))
    var_file, output_file = write_outputs(work_dir, result, config)
    return GenerationReport(
        status=GenerationStatus.WRITTEN,
        scan=scan,
        result=result,
        var_file=var_file,
        output_file=output_file,
    )
