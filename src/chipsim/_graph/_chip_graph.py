"""Registry that owns and wires the chips of a circuit."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chipsim._chip import EMPTY, Chip, ChipKind, ChipView, Filled
from chipsim._errors import (
    DuplicateIdentityError,
    InvalidWiringError,
    SlotsFullError,
    UnknownIdentityError,
)
from chipsim._eval import Evaluator

from ._algorithms import find_cycle

if TYPE_CHECKING:
    from collections.abc import Iterator

    from chipsim._eval import EvaluationResult

logger = logging.getLogger(__name__)


class ChipGraph:
    """The set of chips making up a circuit, keyed by identity.

    The graph exclusively owns its chips. Chips refer to each other by
    identity only, so lookups stay O(1) and no reference cycles form between
    chip objects.

    Example:
        >>> graph = ChipGraph()
        >>> for identity in ("I1", "I2", "A1"):
        ...     _ = graph.create_from_identity(identity)
        >>> graph.connect("I1", "A1")
        >>> graph.connect("I2", "A1")
        >>> graph.lookup("A1").dependencies
        ('I1', 'I2')

    """

    def __init__(self) -> None:
        self._chips: dict[str, Chip] = {}

    def create(self, kind: ChipKind, identity: str) -> Chip:
        """Register a new chip.

        Args:
            kind: The operation the chip performs.
            identity: Unique name of the chip.

        Returns:
            The newly created chip.

        Raises:
            DuplicateIdentityError: If a chip with this identity already exists.

        """
        if identity in self._chips:
            raise DuplicateIdentityError(identity)
        chip = Chip(identity=identity, kind=kind)
        self._chips[identity] = chip
        logger.debug("Created %s chip %s", kind.name, identity)
        return chip

    def create_from_identity(self, identity: str) -> Chip:
        """Register a new chip whose kind is given by the identity's first character.

        Raises:
            UnknownChipKindError: If the prefix does not name a chip kind.
            DuplicateIdentityError: If a chip with this identity already exists.

        """
        return self.create(ChipKind.from_identity(identity), identity)

    def lookup(self, identity: str) -> Chip:
        """Resolve an identity to its chip.

        Raises:
            UnknownIdentityError: If no chip has this identity.

        """
        try:
            return self._chips[identity]
        except KeyError:
            raise UnknownIdentityError(identity) from None

    def connect(self, source: str, target: str) -> None:
        """Wire ``source`` as a dependency of ``target``.

        OUTPUT and NEGATE targets have a single slot, which is overwritten on
        every connect. Binary targets fill their first empty slot. On success
        ``target`` becomes the consumer of ``source``.

        Args:
            source: Identity of the chip providing the value.
            target: Identity of the chip consuming the value.

        Raises:
            UnknownIdentityError: If either identity is not registered.
            InvalidWiringError: If ``target`` is an INPUT chip.
            SlotsFullError: If ``target`` is binary and both slots are filled.

        """
        source_chip = self.lookup(source)
        target_chip = self.lookup(target)

        match target_chip.kind:
            case ChipKind.INPUT:
                raise InvalidWiringError(target, "input chips cannot have dependencies")
            case ChipKind.OUTPUT | ChipKind.NEGATE:
                target_chip.dependency1 = Filled(source)
            case _:
                if target_chip.dependency1 == EMPTY:
                    target_chip.dependency1 = Filled(source)
                elif target_chip.dependency2 == EMPTY:
                    target_chip.dependency2 = Filled(source)
                else:
                    raise SlotsFullError(source, target)

        source_chip.consumer = target
        logger.debug("Connected %s -> %s", source, target)

    def set_input_value(self, identity: str, value: float) -> None:
        """Set the externally supplied value of an INPUT chip.

        Raises:
            UnknownIdentityError: If no chip has this identity.
            InvalidWiringError: If the chip is not an INPUT chip.

        """
        chip = self.lookup(identity)
        if chip.kind != ChipKind.INPUT:
            raise InvalidWiringError(identity, f"only input chips take a value, not {chip.kind.name.lower()}")
        chip.input_value = float(value)
        logger.debug("Set %s = %r", identity, chip.input_value)

    def evaluate(self, identity: str, *, max_depth: int | None = None) -> EvaluationResult:
        """Compute the current value of a chip.

        See ``Evaluator.evaluate`` for the evaluation rules and errors.
        """
        return Evaluator(self, max_depth=max_depth).evaluate(identity)

    def dependencies(self, identity: str) -> tuple[str, ...]:
        """Identities wired into a chip, in slot order."""
        return self.lookup(identity).dependencies

    def views(self) -> Iterator[ChipView]:
        """Iterate over read-only snapshots of every chip, in creation order."""
        for chip in self._chips.values():
            yield ChipView.of(chip)

    def find_cycle(self) -> list[str] | None:
        """Find a dependency cycle among the wired chips.

        Evaluation assumes the graph is acyclic and never calls this; it is a
        diagnostic for callers that want to check before evaluating.

        Returns:
            Identities along a cycle, each depending on the next, with the
            first repeated at the end. None if the graph is acyclic.

        """
        return find_cycle({identity: chip.dependencies for identity, chip in self._chips.items()})

    def __len__(self) -> int:
        """Return the number of chips in the graph."""
        return len(self._chips)

    def __contains__(self, identity: object) -> bool:
        """Check if a chip with the identity exists."""
        return identity in self._chips

    def __iter__(self) -> Iterator[str]:
        """Iterate over chip identities in creation order."""
        return iter(self._chips)
