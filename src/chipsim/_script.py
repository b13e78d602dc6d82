"""Command scripts that build and drive a circuit.

A script lists the chips to create followed by commands to run against
them. The plain text form is a whitespace separated token stream::

    5 I1 I2 A1 N1 O1
    6
    A I1 A1
    A I2 A1
    A A1 N1
    A N1 O1
    I I1 3
    O O1

The leading count gives the number of chip identities that follow, the
second count the number of commands. Commands are ``A <source> <target>``
(connect), ``I <identity> <value>`` (set an input value) and
``O <identity>`` (evaluate).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import BaseModel, Field

from ._errors import ScriptError
from ._graph import ChipGraph

if TYPE_CHECKING:
    from ._eval import EvaluationResult

logger = logging.getLogger(__name__)


class ConnectCommand(BaseModel):
    """Wire ``source`` into ``target``."""

    op: Literal["A"] = "A"
    source: str
    target: str


class SetInputCommand(BaseModel):
    """Set the value of an input chip."""

    op: Literal["I"] = "I"
    identity: str
    value: float


class EvaluateCommand(BaseModel):
    """Evaluate a chip and record its value."""

    op: Literal["O"] = "O"
    identity: str


Command = Annotated[ConnectCommand | SetInputCommand | EvaluateCommand, Field(discriminator="op")]


class CircuitScript(BaseModel):
    """Chips to create and the commands to run, in order."""

    chips: list[str]
    commands: list[Command] = Field(default_factory=list)


class _Tokens:
    """Cursor over the tokens of a plain text script."""

    def __init__(self, text: str) -> None:
        self._tokens = text.split()
        self._pos = 0

    def take(self, what: str) -> str:
        if self._pos >= len(self._tokens):
            msg = f"Unexpected end of script: expected {what} at token {self._pos + 1}"
            raise ScriptError(msg)
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def take_count(self, what: str) -> int:
        token = self.take(what)
        try:
            count = int(token)
        except ValueError:
            count = -1
        if count < 0:
            msg = f"Expected {what} at token {self._pos}, got '{token}'"
            raise ScriptError(msg)
        return count

    def take_float(self, what: str) -> float:
        token = self.take(what)
        try:
            return float(token)
        except ValueError:
            msg = f"Expected {what} at token {self._pos}, got '{token}'"
            raise ScriptError(msg) from None

    @property
    def remaining(self) -> int:
        return len(self._tokens) - self._pos


def parse_script(text: str) -> CircuitScript:
    """Parse a plain text script.

    Args:
        text: The token stream.

    Returns:
        The parsed CircuitScript.

    Raises:
        ScriptError: If a count or value is malformed, a command letter is
            unknown, or the stream ends early.

    """
    tokens = _Tokens(text)

    chip_count = tokens.take_count("chip count")
    chips = [tokens.take("chip identity") for _ in range(chip_count)]

    command_count = tokens.take_count("command count")
    commands: list[Command] = []
    for _ in range(command_count):
        op = tokens.take("command")
        match op:
            case "A":
                source = tokens.take("source identity")
                target = tokens.take("target identity")
                commands.append(ConnectCommand(source=source, target=target))
            case "I":
                identity = tokens.take("input identity")
                commands.append(SetInputCommand(identity=identity, value=tokens.take_float("input value")))
            case "O":
                commands.append(EvaluateCommand(identity=tokens.take("chip identity")))
            case _:
                msg = f"Unknown command '{op}' (expected A, I or O)"
                raise ScriptError(msg)

    if tokens.remaining:
        logger.warning("Ignoring %d trailing token(s) after the last command", tokens.remaining)

    return CircuitScript(chips=chips, commands=commands)


@dataclass(slots=True)
class RunResult:
    """Outcome of running a script.

    Attributes:
        graph: The circuit after all commands have run.
        outputs: One result per evaluate command, in command order.

    """

    graph: ChipGraph
    outputs: list[EvaluationResult] = field(default_factory=list)


def build_graph(script: CircuitScript) -> ChipGraph:
    """Create a graph holding the script's chips, with no wiring applied."""
    graph = ChipGraph()
    for identity in script.chips:
        graph.create_from_identity(identity)
    return graph


def run_script(script: CircuitScript, *, max_depth: int | None = None) -> RunResult:
    """Create the script's chips and run its commands in order.

    Args:
        script: The script to run.
        max_depth: Optional bound on dependency chain length during evaluation.

    Returns:
        The resulting graph and the value of every evaluate command.

    Raises:
        CircuitError: If any command violates the wiring rules or refers to
            an unknown chip. Commands after the failing one are not run.

    """
    graph = build_graph(script)
    result = RunResult(graph=graph)

    for command in script.commands:
        match command:
            case ConnectCommand(source=source, target=target):
                graph.connect(source, target)
            case SetInputCommand(identity=identity, value=value):
                graph.set_input_value(identity, value)
            case EvaluateCommand(identity=identity):
                logger.debug("Evaluating %s", identity)
                result.outputs.append(graph.evaluate(identity, max_depth=max_depth))

    return result
