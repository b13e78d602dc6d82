from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomli_w
from pydantic import ValidationError

from ._errors import ScriptError
from ._script import CircuitScript, parse_script

if TYPE_CHECKING:
    from ._script import RunResult

logger = logging.getLogger(__name__)


def load_script(path: Path | str) -> CircuitScript:
    """Load a command script from a file.

    Files ending in ``.toml`` are read as a table with a ``chips`` array and
    an array of ``[[commands]]`` tables, each with an ``op`` key (``A``,
    ``I`` or ``O``) and that command's fields. Any other file is read as a
    plain text token stream.

    Example:
        A TOML script equivalent to ``3 I1 N1 O1 4 A I1 N1 A N1 O1 I I1 2 O O1``::

            chips = ["I1", "N1", "O1"]

            [[commands]]
            op = "A"
            source = "I1"
            target = "N1"

            [[commands]]
            op = "A"
            source = "N1"
            target = "O1"

            [[commands]]
            op = "I"
            identity = "I1"
            value = 2.0

            [[commands]]
            op = "O"
            identity = "O1"

    Raises:
        ScriptError: If the file cannot be parsed or does not describe a valid script.

    """
    path = Path(path)
    logger.debug(f"Loading script from {path}")

    if path.suffix != ".toml":
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            msg = f"Invalid script in {path}: {e}"
            raise ScriptError(msg) from e
        return parse_script(text)

    with path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {path}: {e}"
            raise ScriptError(msg) from e

    try:
        return CircuitScript.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid script in {path}: {e}"
        raise ScriptError(msg) from e


def results_to_dict(result: RunResult) -> dict[str, Any]:
    """Convert the outputs of a run to a dictionary suitable for TOML export.

    Diagnostics are listed per output by the identity of the chip that
    raised them.
    """
    outputs: list[dict[str, Any]] = []
    for output in result.outputs:
        entry: dict[str, Any] = {"identity": output.identity, "value": output.value}
        if output.diagnostics:
            entry["diagnostics"] = [
                {"kind": str(diag.kind), "identity": diag.identity, "message": diag.message}
                for diag in output.diagnostics
            ]
        outputs.append(entry)
    return {"outputs": outputs}


def export_results_to_toml(result: RunResult, output_path: Path | str) -> None:
    """Export the outputs of a run to a TOML file.

    Args:
        result: The run to export.
        output_path: Path to the output TOML file.

    """
    toml_data = results_to_dict(result)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("wb") as f:
        tomli_w.dump(toml_data, f)

    logger.debug(f"Exported results to {output_path}")
