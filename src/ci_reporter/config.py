"""
Configuration management for the CI reporter.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from .backtrace import DEFAULT_BACKTRACE_EXCLUSIONS

logger = logging.getLogger(__name__)

VALID_FORMATS = ["junit", "json"]

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


class ConfigurationError(Exception):
    """Raised when configuration is invalid or cannot be loaded."""

    pass


@dataclass
class ReporterConfig:
    """Main configuration for the CI reporter.

    Example config YAML::

        report_dir: build/test-reports
        report_kind: spec
        report_format: junit
        clean_reports: true
        full_backtrace: false
        backtrace_exclusions:
          - "site-packages"
    """

    # Output location; None means <cwd>/<report_kind>/reports
    report_dir: Optional[str] = None
    report_kind: str = "spec"
    report_format: str = "junit"  # junit, json
    clean_reports: bool = True

    # Backtrace configuration
    full_backtrace: bool = False
    backtrace_exclusions: List[str] = field(
        default_factory=lambda: list(DEFAULT_BACKTRACE_EXCLUSIONS)
    )


def _parse_env_bool(var_name: str) -> Optional[bool]:
    """
    Safely parse a boolean from an environment variable.

    Args:
        var_name: Name of the environment variable

    Returns:
        Parsed boolean value, or None if the variable is not set

    Raises:
        ConfigurationError: If the value is not a recognised boolean
    """
    value = os.environ.get(var_name)
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"Environment variable {var_name} must be a boolean "
        f"({'/'.join(_TRUE_VALUES + _FALSE_VALUES)}), got: '{value}'"
    )


def load_config(config_file: Optional[str] = None) -> ReporterConfig:
    """
    Load configuration from file and environment variables.

    Configuration precedence (highest to lowest):
    1. Environment variables
    2. Configuration file
    3. Default values

    Args:
        config_file: Path to YAML configuration file (optional)

    Returns:
        ReporterConfig object with merged configuration

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist
        ConfigurationError: If config file has invalid YAML or env vars are invalid
    """
    config_data: Dict[str, Any] = {}

    if config_file:
        logger.info("Loading configuration from %s", config_file)
        try:
            with open(config_file, "r") as f:
                file_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file '{config_file}': {e}")
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {config_file}")
        except PermissionError:
            raise ConfigurationError(f"Permission denied reading config file '{config_file}'")
        except OSError as e:
            raise ConfigurationError(f"Unable to read config file '{config_file}': {e}")

        if not isinstance(file_config, dict):
            raise ConfigurationError(
                f"Config file '{config_file}' must contain a mapping, "
                f"got {type(file_config).__name__}"
            )
        config_data.update(file_config)

    env_overrides = _load_from_env()
    config_data.update(env_overrides)
    if env_overrides:
        logger.debug("Applied environment variable overrides: %s", list(env_overrides.keys()))

    try:
        return ReporterConfig(**config_data)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_from_env() -> Dict[str, Any]:
    """
    Load configuration from environment variables.

    Supported environment variables:
    - CI_REPORTS: Directory reports are written to
    - CI_REPORTS_KIND: Report kind label, used as the file name prefix
    - CI_REPORTS_FORMAT: Report format (junit, json)
    - CI_REPORTS_CLEAN: Remove stale reports of the same kind on start
    - CI_FULL_BACKTRACE: Disable backtrace filtering

    Returns:
        Dictionary of configuration values from environment

    Raises:
        ConfigurationError: If environment variable values are invalid
    """
    env_config: Dict[str, Any] = {}

    if "CI_REPORTS" in os.environ:
        env_config["report_dir"] = os.environ["CI_REPORTS"]

    if "CI_REPORTS_KIND" in os.environ:
        env_config["report_kind"] = os.environ["CI_REPORTS_KIND"]

    if "CI_REPORTS_FORMAT" in os.environ:
        env_config["report_format"] = os.environ["CI_REPORTS_FORMAT"]

    clean = _parse_env_bool("CI_REPORTS_CLEAN")
    if clean is not None:
        env_config["clean_reports"] = clean

    full_backtrace = _parse_env_bool("CI_FULL_BACKTRACE")
    if full_backtrace is not None:
        env_config["full_backtrace"] = full_backtrace

    return env_config


def validate_config(config: ReporterConfig) -> List[str]:
    """
    Validate configuration and return list of errors.

    Values coming from YAML are not coerced, so each field's type is checked
    before its contents.

    Args:
        config: ReporterConfig to validate

    Returns:
        List of error messages (empty if valid)
    """
    errors: List[str] = []

    if not isinstance(config.report_kind, str):
        errors.append(f"report_kind must be a string: {config.report_kind!r}")
    elif not config.report_kind:
        errors.append("report_kind is required")
    elif not config.report_kind.isalnum():
        errors.append(f"report_kind must be alphanumeric: {config.report_kind}")

    if not isinstance(config.report_format, str) or config.report_format not in VALID_FORMATS:
        errors.append(f"report_format must be one of {VALID_FORMATS}: {config.report_format!r}")

    if config.report_dir is not None:
        if not isinstance(config.report_dir, str):
            errors.append(f"report_dir must be a string: {config.report_dir!r}")
        elif not config.report_dir.strip():
            errors.append("report_dir must not be empty")

    for name in ("clean_reports", "full_backtrace"):
        value = getattr(config, name)
        if not isinstance(value, bool):
            errors.append(f"{name} must be true or false: {value!r}")

    if not isinstance(config.backtrace_exclusions, list):
        errors.append(
            f"backtrace_exclusions must be a list of patterns: {config.backtrace_exclusions!r}"
        )
    else:
        for pattern in config.backtrace_exclusions:
            if not isinstance(pattern, str):
                errors.append(f"Invalid backtrace exclusion pattern {pattern!r}: not a string")
                continue
            try:
                re.compile(pattern)
            except re.error as e:
                errors.append(f"Invalid backtrace exclusion pattern {pattern!r}: {e}")

    return errors
