"""Demand-driven evaluation of chips."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import TYPE_CHECKING

from ._chip import Chip, ChipKind
from ._errors import EvaluationDepthError, MissingWiringError

if TYPE_CHECKING:
    from ._graph import ChipGraph

logger = logging.getLogger(__name__)


class DiagnosticKind(StrEnum):
    """Kinds of non-fatal problems found during evaluation."""

    DIVISION_BY_ZERO = auto()


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A non-fatal problem recorded while evaluating a chip.

    Attributes:
        kind: What went wrong.
        identity: The chip where it happened.
        message: Human readable description.

    """

    kind: DiagnosticKind
    identity: str
    message: str


@dataclass(frozen=True, slots=True)
class EvaluationResult:
    """Result of evaluating one chip.

    Attributes:
        identity: The chip that was requested.
        value: Its computed value.
        diagnostics: Non-fatal problems found anywhere along its dependencies,
            in the order they occurred.

    """

    identity: str
    value: float
    diagnostics: tuple[Diagnostic, ...] = field(default_factory=tuple)

    @property
    def success(self) -> bool:
        """Check if evaluation completed without diagnostics."""
        return len(self.diagnostics) == 0


class Evaluator:
    """Computes chip values by recursively evaluating their dependencies.

    Nothing is cached between calls: every dependency is recomputed each
    time it is reached, so results always reflect the current input values.
    A chip feeding several consumers is recomputed once per path through it.

    The graph must be acyclic. Without ``max_depth`` a cycle ends in
    ``RecursionError``.

    Args:
        graph: The graph whose chips are evaluated.
        max_depth: Optional bound on the length of a dependency chain.

    """

    def __init__(self, graph: ChipGraph, *, max_depth: int | None = None) -> None:
        self._graph = graph
        self._max_depth = max_depth

    def evaluate(self, identity: str) -> EvaluationResult:
        """Compute the value of a chip.

        Every chip visited has its ``cached_result`` updated.

        Args:
            identity: The chip to evaluate.

        Returns:
            The value and any division-by-zero diagnostics.

        Raises:
            UnknownIdentityError: If the chip or one of its dependencies is not registered.
            MissingWiringError: If a chip on the path lacks required dependencies.
            EvaluationDepthError: If ``max_depth`` is set and exceeded.

        """
        diagnostics: list[Diagnostic] = []
        value = self._compute(identity, 0, diagnostics)
        return EvaluationResult(identity=identity, value=value, diagnostics=tuple(diagnostics))

    def _compute(self, identity: str, depth: int, diagnostics: list[Diagnostic]) -> float:
        if self._max_depth is not None and depth > self._max_depth:
            raise EvaluationDepthError(identity, self._max_depth)

        chip = self._graph.lookup(identity)

        if chip.kind == ChipKind.INPUT:
            chip.cached_result = chip.input_value
            return chip.cached_result

        if not chip.is_fully_wired:
            raise MissingWiringError(identity, len(chip.dependencies), chip.kind.arity)

        operands = [self._compute(dep, depth + 1, diagnostics) for dep in chip.dependencies]
        chip.cached_result = _apply(chip, operands, diagnostics)
        logger.debug("Evaluated %s = %r", identity, chip.cached_result)
        return chip.cached_result


def _apply(chip: Chip, operands: list[float], diagnostics: list[Diagnostic]) -> float:
    """Apply a chip's operation to the values of its dependencies."""
    match chip.kind:
        case ChipKind.OUTPUT:
            return operands[0]
        case ChipKind.NEGATE:
            # 0.0 - a avoids producing -0.0
            return 0.0 - operands[0]
        case ChipKind.ADD:
            return operands[0] + operands[1]
        case ChipKind.SUBTRACT:
            return operands[0] - operands[1]
        case ChipKind.MULTIPLY:
            return operands[0] * operands[1]
        case ChipKind.DIVIDE:
            if operands[1] == 0:
                message = f"Division by zero in chip {chip.identity}"
                logger.warning(message)
                diagnostics.append(Diagnostic(DiagnosticKind.DIVISION_BY_ZERO, chip.identity, message))
                return 0.0
            return operands[0] / operands[1]
        case _:
            msg = f"Cannot apply an operation for chip kind {chip.kind!r}"
            raise ValueError(msg)


def evaluate(graph: ChipGraph, identity: str, *, max_depth: int | None = None) -> EvaluationResult:
    """Evaluate a single chip of a graph.

    Example:
        >>> from chipsim import ChipGraph
        >>> graph = ChipGraph()
        >>> for identity in ("I1", "N1"):
        ...     _ = graph.create_from_identity(identity)
        >>> graph.connect("I1", "N1")
        >>> graph.set_input_value("I1", 2.5)
        >>> evaluate(graph, "N1").value
        -2.5

    """
    return Evaluator(graph, max_depth=max_depth).evaluate(identity)
