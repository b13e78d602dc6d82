"""Tests for loading scripts and exporting results."""

import tomllib
from pathlib import Path

import pytest

from chipsim import ConnectCommand, ScriptError, export_results_to_toml, load_script, parse_script, run_script
from chipsim._io import results_to_dict

TOML_SCRIPT = """
chips = ["I1", "I2", "D1", "O1"]

[[commands]]
op = "A"
source = "I1"
target = "D1"

[[commands]]
op = "A"
source = "I2"
target = "D1"

[[commands]]
op = "A"
source = "D1"
target = "O1"

[[commands]]
op = "I"
identity = "I1"
value = 5.0

[[commands]]
op = "O"
identity = "O1"
"""


class TestLoadScript:
    """Tests for load_script."""

    def test_text_file(self, tmp_path: Path) -> None:
        """Should parse a .txt file as a token stream."""
        path = tmp_path / "circuit.txt"
        path.write_text("2 I1 O1\n1\nA I1 O1\n")
        script = load_script(path)
        assert script.chips == ["I1", "O1"]
        assert script.commands == [ConnectCommand(source="I1", target="O1")]

    def test_file_without_suffix_is_text(self, tmp_path: Path) -> None:
        """Should treat a file without a suffix as a token stream."""
        path = tmp_path / "circuit"
        path.write_text("1 I1 0")
        assert load_script(str(path)).chips == ["I1"]

    def test_toml_file(self, tmp_path: Path) -> None:
        """Should load chips and commands from a .toml file."""
        path = tmp_path / "circuit.toml"
        path.write_text(TOML_SCRIPT)
        script = load_script(path)
        assert script.chips == ["I1", "I2", "D1", "O1"]
        assert len(script.commands) == 5

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Should raise ScriptError for malformed TOML."""
        path = tmp_path / "circuit.toml"
        path.write_text("chips = [")
        with pytest.raises(ScriptError, match="Invalid TOML"):
            load_script(path)

    def test_toml_missing_chips(self, tmp_path: Path) -> None:
        """Should raise ScriptError when the chips list is missing."""
        path = tmp_path / "circuit.toml"
        path.write_text('[[commands]]\nop = "O"\nidentity = "O1"\n')
        with pytest.raises(ScriptError, match="Invalid script"):
            load_script(path)

    def test_text_file_not_utf8(self, tmp_path: Path) -> None:
        """Should raise ScriptError for a text script that is not valid UTF-8."""
        path = tmp_path / "circuit.txt"
        path.write_bytes(b"1 I\xff1 0")
        with pytest.raises(ScriptError, match="Invalid script"):
            load_script(path)


class TestExportResults:
    """Tests for exporting run results."""

    def test_results_to_dict(self, tmp_path: Path) -> None:
        """Should convert each output and its diagnostics to plain data."""
        path = tmp_path / "circuit.toml"
        path.write_text(TOML_SCRIPT)
        data = results_to_dict(run_script(load_script(path)))
        assert data == {
            "outputs": [
                {
                    "identity": "O1",
                    "value": 0.0,
                    "diagnostics": [
                        {
                            "kind": "division_by_zero",
                            "identity": "D1",
                            "message": "Division by zero in chip D1",
                        },
                    ],
                },
            ],
        }

    def test_export_round_trip(self, tmp_path: Path) -> None:
        """Should create parent directories and write readable TOML."""
        result = run_script(parse_script("2 I1 O1 3 A I1 O1 I I1 4 O O1"))
        output = tmp_path / "out" / "results.toml"

        export_results_to_toml(result, output)

        with output.open("rb") as f:
            data = tomllib.load(f)
        assert data == {"outputs": [{"identity": "O1", "value": 4.0}]}
