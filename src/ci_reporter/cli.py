"""
Command-line interface for the CI reporter.
"""

import logging
import sys
from typing import List, Optional, Tuple

import click
import pytest

from .config import ConfigurationError, load_config, validate_config

logger = logging.getLogger(__name__)


def build_pytest_args(
    pytest_args: Tuple[str, ...],
    config: Optional[str],
    report_dir: Optional[str],
    report_format: Optional[str],
) -> List[str]:
    """Return the pytest argument list with the reporter plugin switched on."""
    args = ["-p", "ci_reporter.pytest_plugin", "--ci-reporter"]
    if config:
        args += ["--ci-reporter-config", config]
    if report_dir:
        args += ["--ci-reports", report_dir]
    if report_format:
        args += ["--ci-reports-format", report_format]
    return args + list(pytest_args)


@click.command(context_settings={"ignore_unknown_options": True})
@click.option(
    "--config",
    type=click.Path(exists=True),
    help="Path to configuration file (YAML)",
)
@click.option(
    "--report-dir",
    type=click.Path(file_okay=False),
    help="Directory for report files (overrides config)",
)
@click.option(
    "--report-format",
    type=click.Choice(["junit", "json"]),
    help="Report format (overrides config)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default="INFO",
    help="Logging level",
)
@click.argument("pytest_args", nargs=-1, type=click.UNPROCESSED)
def main(
    config: Optional[str],
    report_dir: Optional[str],
    report_format: Optional[str],
    log_level: str,
    pytest_args: Tuple[str, ...],
) -> None:
    """
    CI Reporter - run pytest and write one report file per test group.

    Arguments after the options are passed to pytest unchanged.

    Examples:

      # Run the suite under tests/ with JUnit reports in build/reports
      ci-reporter --report-dir build/reports tests/

      # JSON reports, settings from a config file, extra pytest flags
      ci-reporter --config ci-reporter.yaml --report-format json -- -x -q
    """
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    try:
        logger.info("Loading configuration...")
        reporter_config = load_config(config)

        if report_dir:
            reporter_config.report_dir = report_dir
        if report_format:
            reporter_config.report_format = report_format

        errors = validate_config(reporter_config)
        if errors:
            click.echo("Configuration errors:", err=True)
            for error in errors:
                click.echo(f"  - {error}", err=True)
            sys.exit(1)

        args = build_pytest_args(pytest_args, config, report_dir, report_format)
        logger.debug("Running pytest with %s", args)
        exit_code = pytest.main(args)

        logger.info("pytest finished with exit code %d", int(exit_code))
        sys.exit(int(exit_code))

    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except FileNotFoundError as e:
        logger.error("File not found: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        click.echo(f"Unexpected error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
