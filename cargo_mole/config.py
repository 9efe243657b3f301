"""
Configuration management for cargo-mole.

Loads settings from the scanned directory:
1. .cargo-mole.toml (local config)
2. pyproject.toml (project-level config)

Both use the ``[tool.cargo-mole]`` table.
"""

import os

try:
    import tomllib
except ImportError:  # pragma: no cover - fallback for Python < 3.11
    import tomli as tomllib  # type: ignore
from pathlib import Path

LOCAL_CONFIG_NAME = ".cargo-mole.toml"
PYPROJECT_NAME = "pyproject.toml"
TOOL_SECTION = "cargo-mole"

DEEP_ENV_VAR = "CARGO_MOLE_DEEP"
VERBOSE_ENV_VAR = "CARGO_MOLE_VERBOSE"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def load_config_file(config_path: Path) -> dict:
    """Load a TOML configuration file."""
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except Exception as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}") from e


def find_tool_config(root: Path) -> tuple[dict, Path | None]:
    """
    Load the ``[tool.cargo-mole]`` table for a scan root.

    Priority:
    1. .cargo-mole.toml (local config, highest priority)
    2. pyproject.toml (project-level config, fallback)

    Args:
        root: Directory being scanned.

    Returns:
        The tool table and the file it came from, or ``({}, None)`` when
        neither file defines one.
    """
    root = Path(root)
    for name in (LOCAL_CONFIG_NAME, PYPROJECT_NAME):
        config_path = root / name
        config = load_config_file(config_path)
        tool_config = config.get("tool", {}).get(TOOL_SECTION)
        if isinstance(tool_config, dict):
            return tool_config, config_path
    return {}, None


def get_tool_config(root: Path) -> dict:
    """Load the ``[tool.cargo-mole]`` table for a scan root."""
    return find_tool_config(root)[0]


def get_excluded_dirs(root: Path) -> list[str]:
    """
    Return directory names the file explorer should skip.

    Args:
        root: Directory being scanned.

    Returns:
        Excluded directory names, duplicates removed, in config order.
    """
    tool_config, config_path = find_tool_config(root)
    excluded = tool_config.get("exclude", [])
    if not isinstance(excluded, list):
        raise ValueError(
            f"Invalid 'exclude' setting in {config_path}: "
            "expected a list of directory names"
        )
    return list(dict.fromkeys(str(name) for name in excluded))


def _env_flag(name: str) -> bool | None:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return None


def _flag(root: Path, env_var: str, key: str) -> bool:
    env_value = _env_flag(env_var)
    if env_value is not None:
        return env_value
    tool_config, config_path = find_tool_config(root)
    value = tool_config.get(key, False)
    if not isinstance(value, bool):
        raise ValueError(
            f"Invalid '{key}' setting in {config_path}: expected true or false"
        )
    return value


def is_deep_enabled(root: Path) -> bool:
    """
    Check whether build output and hidden directories should be scanned.

    Priority:
    1. CARGO_MOLE_DEEP environment variable
    2. ``deep`` in .cargo-mole.toml / pyproject.toml
    3. Default: False
    """
    return _flag(root, DEEP_ENV_VAR, "deep")


def is_verbose_enabled(root: Path) -> bool:
    """
    Check whether status lines should be printed.

    Priority:
    1. CARGO_MOLE_VERBOSE environment variable
    2. ``verbose`` in .cargo-mole.toml / pyproject.toml
    3. Default: False
    """
    return _flag(root, VERBOSE_ENV_VAR, "verbose")
