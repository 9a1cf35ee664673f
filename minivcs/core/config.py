"""Repository and user configuration.

Settings are INI files read with configparser. A repository keeps its
own in .vcs/config; ~/.vcsconfig holds per-user defaults shared by all
repositories.
"""

import configparser
import io
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from minivcs.utils.fs import atomic_write_text
from .errors import ConfigKeyNotFoundError, InvalidInputError

logger = logging.getLogger(__name__)

DEFAULT_SECTION = 'core'
ENV_PREFIX = 'VCS_'


def split_key(key: str) -> Tuple[str, str]:
    """
    Split a dotted key into (section, option).

    'user.name' -> ('user', 'name'); a key without a dot lives in 'core'.
    """
    if '.' in key:
        section, option = key.split('.', 1)
    else:
        section, option = DEFAULT_SECTION, key

    if not section or not option:
        raise InvalidInputError(f"Invalid config key: {key!r}")
    return section, option


def env_name(section: str, option: str) -> str:
    """Environment variable that overrides section.option."""
    return f"{ENV_PREFIX}{section.upper()}_{option.upper()}"


class Config:
    """
    Layered view over the repository and user config files.

    Lookups check, in order: an environment variable named
    VCS_<SECTION>_<OPTION>, the repository file, the user file. Writes go
    to exactly one file, chosen by the caller.

    Files are parsed lazily and cached for the lifetime of the instance.
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.vcsconfig'

    def __init__(self, repo_config_path: Optional[Path] = None):
        """
        Args:
            repo_config_path: The repository's config file, or None when
                running outside a repository
        """
        self.repo_config_path = repo_config_path
        self._parsed: Dict[str, configparser.ConfigParser] = {}

    @staticmethod
    def _load(path: Optional[Path]) -> configparser.ConfigParser:
        parser = configparser.ConfigParser(interpolation=None)
        if path and Path(path).exists():
            try:
                parser.read(path)
            except configparser.Error as e:
                raise InvalidInputError(f"Cannot parse config file {path}: {e}")
        return parser

    def _parser(self, scope: str, path: Path) -> configparser.ConfigParser:
        if scope not in self._parsed:
            self._parsed[scope] = self._load(path)
        return self._parsed[scope]

    @property
    def global_config(self) -> configparser.ConfigParser:
        """Parsed user-level file (empty when it does not exist)."""
        return self._parser('global', self.GLOBAL_CONFIG_PATH)

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        """Parsed repository file, None outside a repository."""
        if not self.repo_config_path:
            return None
        return self._parser('repo', self.repo_config_path)

    def _layers(self) -> List[configparser.ConfigParser]:
        """File layers, most specific first."""
        layers = []
        if self.repo_config is not None:
            layers.append(self.repo_config)
        layers.append(self.global_config)
        return layers

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Look up section.key.

        Args:
            section: Section name, e.g. 'user'
            key: Option name, e.g. 'email'
            fallback: Returned when no layer defines the option

        Returns:
            The first value found, or fallback
        """
        override = os.environ.get(env_name(section, key))
        if override is not None:
            return override

        for layer in self._layers():
            if layer.has_option(section, key):
                return layer.get(section, key)
        return fallback

    def get_value(self, dotted_key: str) -> str:
        """
        Look up a dotted key such as 'user.email'.

        Raises:
            ConfigKeyNotFoundError: If no layer defines it
        """
        section, option = split_key(dotted_key)
        value = self.get(section, option)
        if value is None:
            raise ConfigKeyNotFoundError(dotted_key)
        return value

    def _target(self, global_config: bool) -> Tuple[configparser.ConfigParser, Path]:
        if global_config:
            return self.global_config, self.GLOBAL_CONFIG_PATH

        if self.repo_config is None:
            raise InvalidInputError("Not inside a repository; use --global for user settings")
        return self.repo_config, self.repo_config_path

    @staticmethod
    def _save(parser: configparser.ConfigParser, path: Path) -> None:
        buffer = io.StringIO()
        parser.write(buffer)
        atomic_write_text(path, buffer.getvalue())

    def set(self, section: str, key: str, value: str, global_config: bool = False) -> None:
        """Store section.key = value in the user file or the repository file."""
        parser, path = self._target(global_config)

        if not parser.has_section(section):
            parser.add_section(section)
        parser.set(section, key, value)

        self._save(parser, path)
        logger.debug("Set %s.%s in %s", section, key, path)

    def set_value(self, dotted_key: str, value: str, global_config: bool = False) -> None:
        section, option = split_key(dotted_key)
        self.set(section, option, value, global_config)

    def unset(self, section: str, key: str, global_config: bool = False) -> bool:
        """
        Delete section.key from one file.

        A section left with no options is dropped as well.

        Returns:
            False when the option was not there to begin with
        """
        parser, path = self._target(global_config)

        if not parser.has_option(section, key):
            return False

        parser.remove_option(section, key)
        if not parser.options(section):
            parser.remove_section(section)

        self._save(parser, path)
        logger.debug("Unset %s.%s in %s", section, key, path)
        return True

    def list_all(self, global_only: bool = False, repo_only: bool = False) -> Dict[str, str]:
        """
        Every value defined in the files, keyed 'section.option'.

        Where both files define a key the repository value is reported.
        Environment overrides are not included.
        """
        layers = []
        if not repo_only:
            layers.append(self.global_config)
        if not global_only and self.repo_config is not None:
            layers.append(self.repo_config)

        values = {}
        for layer in layers:
            for section in layer.sections():
                for option, value in layer.items(section):
                    values[f"{section}.{option}"] = value
        return values

    def get_user_identity(self) -> Tuple[Optional[str], Optional[str]]:
        """(user.name, user.email), each None when unset."""
        return self.get('user', 'name'), self.get('user', 'email')


def get_config(repo=None) -> Config:
    """Config for repo, or user-level only when repo is None."""
    if repo is None:
        return Config()
    return Config(repo.config_file)
