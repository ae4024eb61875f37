"""Settings for a run: YAML config file merged under command line flags."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# String printed between blocks of output
SEPARATOR = "--------------------------"
DEFAULT_INDENT = "    "
DEFAULT_INTERFACE = "terminal"

# Top-level mapping in the YAML file holding every setting
CONFIG_SECTION = "github"

# (name, expected type, human readable type) for values a run cannot do without
REQUIRED_PARAMS = (
    ("org", str, "string"),
    ("repos", list, "list"),
    ("authors", list, "list"),
)


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class Settings:
    """Finalized configuration for one run."""

    org: str
    repos: list[str]
    authors: list[str]
    username: str | None = None
    password: str | None = None
    auth_token: str | None = None
    interface: str = DEFAULT_INTERFACE
    auto_open: bool = False
    show_link: bool = False
    indent: str = DEFAULT_INDENT
    verbose: bool = False
    quiet: bool = False
    separator: str = field(default=SEPARATOR, repr=False)

    @property
    def uses_token(self) -> bool:
        return self.auth_token is not None

    @property
    def wants_all_repos(self) -> bool:
        return "all" in self.repos

    def with_repos(self, repos: list[str]) -> "Settings":
        return replace(self, repos=sorted(repos))


def normalize_authors(authors: list[str]) -> list[str]:
    return sorted({str(author).strip().lower() for author in authors})


def _first(*values: Any, default: Any = None) -> Any:
    """Return the first value that was actually set."""
    for value in values:
        if value is not None:
            return value
    return default


def resolve_output_modes(
    cli_verbose: bool | None,
    file_verbose: bool | None,
    cli_quiet: bool | None,
    file_quiet: bool | None,
) -> tuple[bool, bool]:
    """Return ``(verbose, quiet)``.

    The command line wins over the file for both flags, and verbose mode
    always switches quiet mode off.
    """
    verbose = bool(_first(cli_verbose, file_verbose, default=False))
    if verbose:
        return True, False
    quiet = bool(_first(cli_quiet, file_quiet, default=False))
    return False, quiet


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Read the YAML file and return its ``github`` section."""
    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise ConfigError(f"Config file '{config_path}' doesn't exist, can't continue.")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file '{config_path}' is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{config_path}' must contain a mapping.")
    section = data.get(CONFIG_SECTION)
    if not isinstance(section, dict):
        raise ConfigError(f"Config file '{config_path}' has no '{CONFIG_SECTION}' section.")
    logger.debug("Loaded config from %s with keys %s", config_path, sorted(section))
    return section


def _validate(values: dict[str, Any]) -> None:
    for name, expected, type_name in REQUIRED_PARAMS:
        value = values.get(name)
        if value is None:
            raise ConfigError(f"Missing required config param '{name}'")
        if not isinstance(value, expected):
            raise ConfigError(
                f"Param '{name}' is of the wrong type. Expected {type_name},"
                f" was actually {type(value).__name__}"
            )

    has_basic = values.get("username") and values.get("password")
    if not (has_basic or values.get("auth_token")):
        raise ConfigError(
            "You must specify either a username/password combo or an auth token to use."
        )


def build_settings(options: dict[str, Any], file_values: dict[str, Any]) -> Settings:
    """Merge command line ``options`` over ``file_values``.

    Options that were not given on the command line must be ``None`` (or
    absent) so the file value, and then the default, can apply.
    """
    def pick(key: str, file_key: str | None = None, default: Any = None) -> Any:
        return _first(options.get(key), file_values.get(file_key or key), default=default)

    merged = {
        "username": pick("username"),
        "password": pick("password"),
        "auth_token": pick("auth_token", default=os.environ.get("GITHUB_TOKEN") or None),
        "org": pick("org"),
        "repos": pick("repos"),
        "authors": pick("authors"),
    }
    _validate(merged)

    verbose, quiet = resolve_output_modes(
        options.get("verbose"),
        file_values.get("verbose_mode"),
        options.get("quiet"),
        file_values.get("quiet_mode"),
    )

    return Settings(
        org=merged["org"],
        repos=sorted(str(repo) for repo in merged["repos"]),
        authors=normalize_authors(merged["authors"]),
        username=merged["username"],
        password=merged["password"],
        auth_token=merged["auth_token"],
        interface=pick("interface", default=DEFAULT_INTERFACE),
        auto_open=bool(pick("auto_open", default=False)),
        show_link=bool(pick("show_link", default=False)),
        indent=str(pick("indent", default=DEFAULT_INDENT)),
        verbose=verbose,
        quiet=quiet,
    )


def load_settings(config_path: str | Path, options: dict[str, Any] | None = None) -> Settings:
    return build_settings(options or {}, load_config_file(config_path))
