"""Chip circuit simulator."""

__all__ = [
    "Chip",
    "ChipGraph",
    "ChipKind",
    "ChipView",
    "CircuitError",
    "CircuitScript",
    "ConnectCommand",
    "ConnectionEntry",
    "Diagnostic",
    "DiagnosticKind",
    "DuplicateIdentityError",
    "Empty",
    "EvaluateCommand",
    "EvaluationDepthError",
    "EvaluationResult",
    "Evaluator",
    "Filled",
    "InvalidWiringError",
    "MissingWiringError",
    "RunResult",
    "ScriptError",
    "SetInputCommand",
    "SlotsFullError",
    "UnknownChipKindError",
    "UnknownIdentityError",
    "build_connection_report",
    "evaluate",
    "export_results_to_toml",
    "format_connection",
    "load_script",
    "parse_script",
    "run_script",
]

from ._chip import Chip, ChipKind, ChipView, Empty, Filled
from ._errors import (
    CircuitError,
    DuplicateIdentityError,
    EvaluationDepthError,
    InvalidWiringError,
    MissingWiringError,
    ScriptError,
    SlotsFullError,
    UnknownChipKindError,
    UnknownIdentityError,
)
from ._eval import Diagnostic, DiagnosticKind, EvaluationResult, Evaluator, evaluate
from ._graph import ChipGraph
from ._io import export_results_to_toml, load_script
from ._report import ConnectionEntry, build_connection_report, format_connection
from ._script import (
    CircuitScript,
    ConnectCommand,
    EvaluateCommand,
    RunResult,
    SetInputCommand,
    parse_script,
    run_script,
)
