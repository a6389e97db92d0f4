"""
Configuration management for datepipe.

This module reads INI-style ``datepipe.conf`` files from the system, user
and project locations, merges them in priority order and exposes values
with dot-notation keys such as ``core.locale``.
"""

import configparser
import os
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .aliases import DEFAULT_FORMAT
from .exceptions import ConfigurationError
from .types import validate_config_key, validate_locale_id

CONFIG_FILENAME = "datepipe.conf"
DEFAULT_LOCALE = "en-US"
LOCALE_ENV_VARS = ("LC_ALL", "LC_TIME", "LANG")


@dataclass
class ConfigSource:
    """Represents a configuration source with its priority and path."""

    path: Optional[Path]
    priority: int
    source_type: str  # 'system', 'global', 'local', 'explicit'
    parser: Optional[configparser.ConfigParser] = None


class Config:
    """
    Configuration management for datepipe.

    Handles loading and merging configuration from multiple sources
    in the correct priority order: system < global < local < explicit.
    """

    def __init__(self, config_files: Optional[List[Path]] = None) -> None:
        """
        Initialize configuration manager.

        Args:
            config_files: Explicit list of config files to load instead of
                the system, global and local ones
        """
        self._sources: List[ConfigSource] = []
        self._merged_config: Dict[str, Any] = {}

        if config_files:
            self._load_explicit_configs(config_files)
        else:
            self._load_default_configs()

        self._merge_configurations()

    def _load_explicit_configs(self, config_files: List[Path]) -> None:
        for i, config_file in enumerate(config_files):
            if config_file.exists():
                self._add_source(config_file, 100 + i, "explicit")

    def _load_default_configs(self) -> None:
        for path in self._get_system_config_paths():
            if path.exists():
                self._add_source(path, 10, "system")

        global_path = self._get_global_config_path()
        if global_path.exists():
            self._add_source(global_path, 20, "global")

        local_path = self._find_local_config_path()
        if local_path:
            self._add_source(local_path, 30, "local")

    def _add_source(self, path: Path, priority: int, source_type: str) -> None:
        self._sources.append(
            ConfigSource(
                path=path,
                priority=priority,
                source_type=source_type,
                parser=self._load_config_file(path),
            )
        )

    def _get_system_config_paths(self) -> List[Path]:
        if sys.platform.startswith("win"):
            if "PROGRAMFILES" in os.environ:
                return [Path(os.environ["PROGRAMFILES"]) / "datepipe" / CONFIG_FILENAME]
            return []
        return [
            Path("/etc/datepipe") / CONFIG_FILENAME,
            Path("/usr/local/etc/datepipe") / CONFIG_FILENAME,
        ]

    def _get_global_config_path(self) -> Path:
        if sys.platform.startswith("win"):
            return Path.home() / ".datepipe" / CONFIG_FILENAME

        xdg_config = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config:
            return Path(xdg_config) / "datepipe" / CONFIG_FILENAME
        return Path.home() / ".config" / "datepipe" / CONFIG_FILENAME

    def _find_local_config_path(self) -> Optional[Path]:
        """Look for datepipe.conf in the current directory and its parents."""
        current = Path.cwd()
        while True:
            config_path = current / CONFIG_FILENAME
            if config_path.exists():
                return config_path
            if current == current.parent:
                return None
            current = current.parent

    def _load_config_file(self, config_path: Path) -> configparser.ConfigParser:
        """
        Load and parse a configuration file.

        Args:
            config_path: Path to configuration file

        Returns:
            Parsed configuration

        Raises:
            ConfigurationError: If file cannot be read or parsed
        """
        parser = configparser.ConfigParser(
            interpolation=None,
            allow_no_value=True,
            delimiters=("=",),
            comment_prefixes=("#", ";"),
            strict=False,
        )
        # Keys are case sensitive, like alias names
        parser.optionxform = str

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                parser.read_string(f.read(), source=str(config_path))
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read configuration file: {e}", config_file=str(config_path)
            )
        except configparser.Error as e:
            raise ConfigurationError(
                f"Invalid configuration syntax: {e}", config_file=str(config_path)
            )

        return parser

    def _merge_configurations(self) -> None:
        self._sources.sort(key=lambda s: s.priority)

        merged: Dict[str, Any] = {}
        for source in self._sources:
            if source.parser:
                self._merge_parser_into_dict(source.parser, merged)

        self._merged_config = merged

    def _merge_parser_into_dict(
        self, parser: configparser.ConfigParser, target: Dict[str, Any]
    ) -> None:
        for section_name in parser.sections():
            main_section, sub_section = self._parse_subsection(section_name)
            section = target.setdefault(main_section, {})
            if sub_section:
                section = section.setdefault(sub_section, {})
            for key, value in parser.items(section_name):
                section[key] = value

    def _parse_subsection(self, section_name: str) -> Tuple[str, str]:
        """Parse a section name like 'locale "de"' into main and sub sections."""
        match = re.match(r'^(\S+)\s+"([^"]+)"$', section_name)
        if match:
            return match.group(1), match.group(2)
        return section_name, ""

    def _get_nested_value(self, config: Dict[str, Any], key: str) -> Any:
        current: Any = config
        for part in key.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return None
        return current

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value with dot notation.

        Args:
            key: Configuration key in dot notation (e.g., 'core.locale')
            default: Default value if key not found

        Returns:
            Configuration value

        Raises:
            ConfigurationError: If key is invalid
        """
        if not validate_config_key(key):
            raise ConfigurationError(f"Invalid configuration key: {key}", config_key=key)

        value = self._get_nested_value(self._merged_config, key)
        return default if value is None else value

    @property
    def locale(self) -> Optional[str]:
        return self.get("core.locale")

    @property
    def default_format(self) -> str:
        return self.get("core.format", DEFAULT_FORMAT)

    def validate(self) -> List[str]:
        """
        Validate configuration and return list of issues.

        Returns:
            List of validation error messages
        """
        issues = []

        locale_id = self.locale
        if locale_id is not None and not validate_locale_id(locale_id):
            issues.append(f"Invalid locale: {locale_id}")

        format_token = self.get("core.format")
        if format_token is not None and not format_token.strip():
            issues.append("Empty default format")

        return issues

    def __repr__(self) -> str:
        sources = [s.source_type for s in self._sources]
        return f"Config(sources={sources})"


def default_locale_id() -> str:
    """
    Return the locale named by the environment.

    The ``LC_ALL``, ``LC_TIME`` and ``LANG`` variables are read in that
    order, dropping any encoding or modifier suffix; ``C`` and ``POSIX``
    are skipped. ``en-US`` when none of them names a locale.
    """
    for name in LOCALE_ENV_VARS:
        value = os.environ.get(name)
        if not value:
            continue
        locale_id = value.split(".", 1)[0].split("@", 1)[0]
        if locale_id in ("C", "POSIX"):
            continue
        return locale_id
    return DEFAULT_LOCALE


def resolve_locale_id(config: Config) -> str:
    """
    Determine the active locale identifier.

    ``core.locale`` from configuration wins over the environment.

    Args:
        config: Configuration to consult

    Returns:
        Locale identifier

    Raises:
        ConfigurationError: If the configured locale is malformed
    """
    locale_id = config.locale
    if locale_id is None:
        return default_locale_id()

    if not validate_locale_id(locale_id):
        raise ConfigurationError(f"Invalid locale: {locale_id}", config_key="core.locale")
    return locale_id
