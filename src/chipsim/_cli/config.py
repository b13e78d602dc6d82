"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path


class ConfigError(Exception):
    """Error in chipsim configuration."""


@dataclass(slots=True, frozen=True)
class ChipsimConfig:
    """Configuration loaded from pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    script: Path | None = None
    output: Path | None = None
    max_depth: int | None = None
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _parse_path(section: dict[str, object], key: str, project_root: Path) -> Path | None:
    if key not in section:
        return None
    value = section[key]
    if not isinstance(value, str):
        msg = f"Invalid [tool.chipsim].{key}: expected string path"
        raise ConfigError(msg)
    path = Path(value)
    if not path.is_absolute():
        path = project_root / path
    return path


def _parse_max_depth(section: dict[str, object]) -> int | None:
    if "max_depth" not in section:
        return None
    value = section["max_depth"]
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        msg = "Invalid [tool.chipsim].max_depth: expected positive integer"
        raise ConfigError(msg)
    return value


def load_config(pyproject_path: Path) -> ChipsimConfig:
    """Load and validate [tool.chipsim] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed ChipsimConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("chipsim", {})
    if not isinstance(section, dict):
        msg = "Invalid [tool.chipsim] configuration. Expected a table."
        raise ConfigError(msg)

    return ChipsimConfig(
        script=_parse_path(section, "script", project_root),
        output=_parse_path(section, "output", project_root),
        max_depth=_parse_max_depth(section),
        project_root=project_root,
    )


def get_config() -> ChipsimConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        ChipsimConfig (may be empty if no pyproject.toml or no [tool.chipsim] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return ChipsimConfig()
    return load_config(pyproject_path)
