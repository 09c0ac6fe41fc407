"""Indexing policy loader and writer.

Priority (high → low):
  1. Environment variables  (LOCALINDEX_MAX_DEPTH, LOCALINDEX_MAX_FILE_SIZE)
  2. ~/.localindex/config.yaml  (flat key/value mapping)
  3. Hardcoded defaults

The policy is an immutable value. Changes produce a new policy via
``set_policy_value`` / ``dataclasses.replace`` and are written back with
``save_policy``. All YAML reads use yaml.safe_load() — never yaml.load().
"""

from __future__ import annotations

import dataclasses
import os
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_HOME_ENV = "LOCALINDEX_HOME"
_DEFAULT_DATA_DIR: Path = Path.home() / ".localindex"
_CONFIG_NAME = "config.yaml"

_ENV_INT_OVERRIDES = {
    "LOCALINDEX_MAX_DEPTH": "max_depth",
    "LOCALINDEX_MAX_FILE_SIZE": "max_file_size_bytes",
}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(ValueError):
    """Raised when a config file or override contains an invalid value."""


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IndexingPolicy:
    """User-tunable indexing policy (config.yaml, flat keys).

    Attributes:
        index_home: Crawl the home directory (primary content root).
        index_documentation: Crawl developer documentation trees.
        index_repositories: Discover and crawl git repositories.
        max_depth: Maximum entry depth relative to a walked root.
        max_file_size_bytes: Files above this size are indexed by metadata only.
        reindex_interval_seconds: Age after which the index is considered stale.
        include_hidden: Also walk dotfiles and dot-directories.
        excluded_paths: Path fragments; any entry whose root-relative path
            contains one is skipped along with its subtree.
        home_root: Primary content root.
        documentation_roots: Documentation trees (missing ones are ignored).
        repository_search_paths: Directories searched for git repositories.
    """

    index_home: bool = True
    index_documentation: bool = True
    index_repositories: bool = True
    max_depth: int = 10
    max_file_size_bytes: int = 10_000_000
    reindex_interval_seconds: int = 86_400
    include_hidden: bool = False
    excluded_paths: tuple[str, ...] = (
        ".Trash",
        "Library/Caches",
        "Library/Logs",
        ".cache",
        "node_modules",
        ".git",
    )
    home_root: str = "~"
    documentation_roots: tuple[str, ...] = (
        "/usr/share/doc",
        "/usr/local/share/doc",
        "/Library/Developer/Documentation",
        "~/Library/Developer/Xcode/Documentation",
        "/Applications/Xcode.app/Contents/Developer/Documentation",
    )
    repository_search_paths: tuple[str, ...] = (
        "~/Projects",
        "~/Developer",
        "~/Code",
        "~/Documents",
    )


_FIELD_TYPES: dict[str, str] = {
    "index_home": "bool",
    "index_documentation": "bool",
    "index_repositories": "bool",
    "include_hidden": "bool",
    "max_depth": "int",
    "max_file_size_bytes": "int",
    "reindex_interval_seconds": "int",
    "home_root": "str",
    "excluded_paths": "list",
    "documentation_roots": "list",
    "repository_search_paths": "list",
}

_MINIMUMS: dict[str, int] = {
    "max_depth": 1,
    "max_file_size_bytes": 0,
    "reindex_interval_seconds": 0,
}


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


def data_dir() -> Path:
    """Application data directory (``$LOCALINDEX_HOME`` or ``~/.localindex``)."""
    override = os.environ.get(_HOME_ENV)
    return Path(override).expanduser() if override else _DEFAULT_DATA_DIR


def default_config_path() -> Path:
    return data_dir() / _CONFIG_NAME


def expand_root(root: str) -> Path:
    """Expand ``~`` in a configured root and return an absolute path."""
    return Path(root).expanduser().absolute()


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _coerce(key: str, value: Any, source: str) -> Any:
    """Validate *value* for policy field *key*; return the typed value."""
    kind = _FIELD_TYPES[key]

    if kind == "bool":
        if not isinstance(value, bool):
            raise ConfigError(f"'{key}' in {source} must be true or false, got {value!r}")
        return value

    if kind == "int":
        if isinstance(value, bool):
            raise ConfigError(f"'{key}' in {source} must be an integer, got {value!r}")
        try:
            number = int(value)
        except (TypeError, ValueError):
            raise ConfigError(
                f"'{key}' in {source} must be an integer, got {value!r}"
            ) from None
        minimum = _MINIMUMS.get(key, 0)
        if number < minimum:
            raise ConfigError(f"'{key}' in {source} must be >= {minimum}, got {number}")
        return number

    if kind == "str":
        if not isinstance(value, str) or not value:
            raise ConfigError(f"'{key}' in {source} must be a non-empty string")
        return value

    # list of strings; a single string is accepted as a one-item list
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' in {source} must be a list of strings")
    return tuple(value)


def _policy_from_dict(data: dict[str, Any], source: str) -> IndexingPolicy:
    """Build an *IndexingPolicy* from a raw flat mapping."""
    changes: dict[str, Any] = {}
    for key, value in data.items():
        if key not in _FIELD_TYPES:
            warnings.warn(
                f"Unknown config key '{key}' in '{source}' — ignored.",
                UserWarning,
                stacklevel=3,
            )
            continue
        changes[key] = _coerce(key, value, source)
    return dataclasses.replace(IndexingPolicy(), **changes)


def _apply_env_overrides(policy: IndexingPolicy) -> IndexingPolicy:
    changes: dict[str, Any] = {}
    for env_var, key in _ENV_INT_OVERRIDES.items():
        if (raw := os.environ.get(env_var)) is not None:
            changes[key] = _coerce(key, raw, f"${env_var}")
    return dataclasses.replace(policy, **changes) if changes else policy


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_policy(config_path: Path | None = None) -> IndexingPolicy:
    """Load the merged indexing policy.

    Args:
        config_path: Override the config file location (for testing).

    Returns:
        Policy with file values and environment overrides applied.

    Raises:
        ConfigError: If the file is not a mapping or holds an invalid value.
    """
    path = config_path if config_path is not None else default_config_path()

    policy = IndexingPolicy()
    if path.exists():
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if not isinstance(raw, dict):
            raise ConfigError(f"Config file '{path}' must contain a key/value mapping.")
        policy = _policy_from_dict(raw, str(path))

    return _apply_env_overrides(policy)


def policy_to_dict(policy: IndexingPolicy) -> dict[str, Any]:
    """Flat, YAML-friendly mapping of *policy* (tuples become lists)."""
    return {
        key: list(value) if isinstance(value, tuple) else value
        for key, value in dataclasses.asdict(policy).items()
    }


def save_policy(policy: IndexingPolicy, config_path: Path | None = None) -> Path:
    """Write *policy* to the config file and return its path.

    The parent directory is created with mode 0o700 and the file is
    chmod'ed to 0o600.
    """
    target = config_path if config_path is not None else default_config_path()
    target.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
    target.write_text(
        yaml.safe_dump(policy_to_dict(policy), sort_keys=False),
        encoding="utf-8",
    )
    target.chmod(0o600)
    return target


def set_policy_value(policy: IndexingPolicy, key: str, raw: str) -> IndexingPolicy:
    """Return a copy of *policy* with *key* set from the string *raw*.

    *raw* is parsed as a YAML scalar or flow sequence, so ``true``, ``12``
    and ``[a, b]`` all work from the command line.

    Raises:
        ConfigError: Unknown key or invalid value.
    """
    if key not in _FIELD_TYPES:
        known = ", ".join(sorted(_FIELD_TYPES))
        raise ConfigError(f"Unknown setting '{key}'. Known settings: {known}")
    try:
        value = yaml.safe_load(raw)
    except yaml.YAMLError:
        value = raw
    if _FIELD_TYPES[key] == "str" and value is not None and not isinstance(value, str):
        value = raw
    return dataclasses.replace(policy, **{key: _coerce(key, value, "setting")})
