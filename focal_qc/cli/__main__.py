from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..logging.init import log_summary, set_level, setup_logging
from ..logging.report_log import ValidationReportBuffer, records_from_results
from ..models.analysis_result import AnalysisResult
from ..services.orchestrator import ProcessingError, run_analysis
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load ``.env`` (may set FOCAL_QC_CONFIG)
- Load and validate the YAML config
- Read the merged workbook and its source files
- Extract focal-follow ranges, run the consistency checks
- Log one line per check result, optionally write a JSON Lines report
- Finish with a SUMMARY line and an exit code
"""

EXIT_ALL_PASSED = 0
EXIT_FATAL = 1
EXIT_CHECKS_FAILED = 2

CONFIG_ENV_VAR = "FOCAL_QC_CONFIG"


def _load_env_file(path: Path) -> None:
    """Load .env without overriding variables already set in the process."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Focal-follow extraction and merged data consistency checks")
    p.add_argument("--config", type=Path, default=None, help=f"Config file (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--report", action="store_true", help="Write issues and warnings as JSON Lines")
    p.add_argument("--show-ranges", action="store_true", help="List every focal-follow range found")
    return p.parse_args(argv)


def _resolve_config_path(cli_value: Path | None) -> Path:
    if cli_value is not None:
        return cli_value
    env_value = os.getenv(CONFIG_ENV_VAR)
    if env_value:
        return Path(env_value)
    return DEFAULT_CONFIG_PATH


def _log_ranges(logger: logging.Logger, result: AnalysisResult) -> None:
    views = {result.merged_file: result.merged_ranges, **result.source_ranges}
    for name, ranges in views.items():
        logger.info(f"ranges {name}: {len(ranges)}")
        for r in ranges:
            color = result.color_map.get(r.focal_type, "")
            logger.info(
                f"  {r.focal_type} rows={r.start_row}-{r.end_row} count={r.row_count} "
                f"time={r.start_time}-{r.end_time} color={color}"
            )


def _log_validations(logger: logging.Logger, result: AnalysisResult) -> None:
    for v in result.validations:
        if v.passed:
            logger.info(f"check '{v.check}' passed")
        for issue in v.issues:
            logger.error(f"check '{v.check}': {issue}")
        for warning in v.warnings:
            logger.warning(f"check '{v.check}': {warning}")


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # only fall back to sys.argv for None: main([]) must not pick up pytest flags
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        set_level(logging.DEBUG)
        logger.debug("debug mode enabled")

    config_path = _resolve_config_path(args.config)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    logger.info(f"Analyzing {cfg.merged_file} against {len(cfg.source_files)} source file(s)")
    try:
        result = run_analysis(cfg)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    if args.show_ranges or args.debug:
        _log_ranges(logger, result)
    else:
        logger.info(f"focal follows found: {len(result.merged_ranges)} in {result.merged_file}")
    _log_validations(logger, result)

    if args.report:
        buffer = ValidationReportBuffer(cfg.report_directory)
        buffer.extend(records_from_results(result.merged_file, result.validations))
        report_path = buffer.flush()
        logger.info(f"report written: {report_path}")

    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.failed_checks > 0:
        return EXIT_CHECKS_FAILED
    return EXIT_ALL_PASSED


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
