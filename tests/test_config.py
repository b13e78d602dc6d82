"""Tests for the configuration module."""

from pathlib import Path

import pytest

from chipsim._cli.config import ChipsimConfig, ConfigError, find_pyproject_toml, load_config


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml function."""

    def test_finds_in_current_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in current directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        assert find_pyproject_toml(tmp_path) == pyproject

    def test_finds_in_parent_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in parent directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        subdir = tmp_path / "circuits" / "small"
        subdir.mkdir(parents=True)

        assert find_pyproject_toml(subdir) == pyproject

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        """Should return None when no pyproject.toml is found."""
        assert find_pyproject_toml(tmp_path) is None


class TestLoadConfig:
    """Tests for loading [tool.chipsim]."""

    def test_full_configuration(self, tmp_path: Path) -> None:
        """Should read every supported key and resolve paths against the project root."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            """
[tool.chipsim]
script = "circuits/main.txt"
output = "out/results.toml"
max_depth = 200
""",
        )

        config = load_config(pyproject)

        assert config.script == tmp_path / "circuits/main.txt"
        assert config.output == tmp_path / "out/results.toml"
        assert config.max_depth == 200
        assert config.project_root == tmp_path

    def test_absolute_path_kept(self, tmp_path: Path) -> None:
        """Should keep absolute paths unchanged."""
        script = tmp_path / "elsewhere" / "c.txt"
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(f'[tool.chipsim]\nscript = "{script.as_posix()}"\n')

        assert load_config(pyproject).script == script

    def test_empty_section(self, tmp_path: Path) -> None:
        """Should return defaults when there is no [tool.chipsim] section."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        assert load_config(pyproject) == ChipsimConfig(project_root=tmp_path)

    def test_invalid_script_type(self, tmp_path: Path) -> None:
        """Should raise ConfigError when script is not a string."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.chipsim]\nscript = 123\n")

        with pytest.raises(ConfigError, match="expected string path"):
            load_config(pyproject)

    @pytest.mark.parametrize("value", ["0", "-3", "true", '"10"', "1.5"])
    def test_invalid_max_depth(self, tmp_path: Path, value: str) -> None:
        """Should raise ConfigError when max_depth is not a positive integer."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(f"[tool.chipsim]\nmax_depth = {value}\n")

        with pytest.raises(ConfigError, match="max_depth"):
            load_config(pyproject)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Should raise ConfigError when pyproject.toml cannot be parsed."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.chipsim\n")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(pyproject)
