"""Connection report for a circuit.

These are pure functions over a ``ChipGraph``: they read each chip's wiring
and never modify the graph.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ._chip import EMPTY, ChipKind

if TYPE_CHECKING:
    from ._chip import ChipView, Slot
    from ._graph import ChipGraph


@dataclass(frozen=True, slots=True)
class ConnectionEntry:
    """The wiring of one chip as shown in the connection report.

    Attributes:
        identity: The chip.
        kind: Its kind.
        inputs: Dependency slots shown for the chip. Empty for INPUT chips.
        consumer: The consumer, or None if not shown for this kind.
        show_consumer: Whether the consumer column applies to this kind.

    """

    identity: str
    kind: ChipKind
    inputs: tuple[Slot, ...]
    consumer: str | None
    show_consumer: bool


def _entry(view: ChipView) -> ConnectionEntry:
    if view.kind == ChipKind.INPUT:
        return ConnectionEntry(view.identity, view.kind, (), view.consumer, show_consumer=True)
    if view.kind == ChipKind.OUTPUT:
        return ConnectionEntry(view.identity, view.kind, view.dependencies, None, show_consumer=False)
    # Unary NEGATE chips are reported with both input columns like the binary kinds
    inputs = view.dependencies
    if len(inputs) < 2:  # noqa: PLR2004
        inputs = (*inputs, EMPTY)
    return ConnectionEntry(view.identity, view.kind, inputs, view.consumer, show_consumer=True)


def build_connection_report(graph: ChipGraph) -> list[ConnectionEntry]:
    """Build one report entry per chip.

    Chips appear in creation order, except OUTPUT chips, which are listed
    after all others.

    Args:
        graph: The circuit to report on.

    Returns:
        List of ConnectionEntry.

    """
    views = list(graph.views())
    ordered = [v for v in views if v.kind != ChipKind.OUTPUT] + [v for v in views if v.kind == ChipKind.OUTPUT]
    return [_entry(view) for view in ordered]


def format_connection(entry: ConnectionEntry) -> str:
    """Render an entry as a single line.

    Example:
        >>> from chipsim._chip import Filled
        >>> format_connection(
        ...     ConnectionEntry("A1", ChipKind.ADD, (Filled("I1"), Filled("I2")), "O1", show_consumer=True),
        ... )
        'A1, Input 1 = I1, Input 2 = I2, Output = O1'

    """
    parts = [entry.identity]
    parts.extend(f"Input {i} = {slot}" for i, slot in enumerate(entry.inputs, start=1))
    if entry.show_consumer:
        parts.append(f"Output = {entry.consumer or 'None'}")
    return ", ".join(parts)
