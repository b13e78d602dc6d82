"""Chip records and the fixed set of chip kinds."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Self, TypeAlias

from ._errors import UnknownChipKindError


class ChipKind(StrEnum):
    """The operation a chip performs.

    The value of each member is the identity prefix that selects it, so
    ``ChipKind("A")`` is ``ChipKind.ADD``. Each member also carries the number
    of dependencies it must be wired to and a docstring.
    """

    arity: int

    def __new__(cls, value: str, arity: int, doc: str = "") -> Self:
        """Create a new kind with its wiring arity and a docstring."""
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.arity = arity
        obj.__doc__ = doc
        return obj

    INPUT = "I", 0, "Externally supplied value."
    OUTPUT = "O", 1, "Passes its single dependency through."
    ADD = "A", 2, "Sum of both dependencies."
    SUBTRACT = "S", 2, "First dependency minus the second."
    MULTIPLY = "M", 2, "Product of both dependencies."
    DIVIDE = "D", 2, "First dependency divided by the second; zero on division by zero."
    NEGATE = "N", 1, "Negation of its single dependency."

    @classmethod
    def from_identity(cls, identity: str) -> ChipKind:
        """Derive the kind from the leading character of an identity.

        Raises:
            UnknownChipKindError: If the identity is empty or its prefix is not a known kind.

        """
        try:
            return cls(identity[:1])
        except ValueError:
            raise UnknownChipKindError(identity) from None


@dataclass(frozen=True, slots=True)
class Empty:
    """An unwired dependency slot."""

    def __str__(self) -> str:
        return "None"


@dataclass(frozen=True, slots=True)
class Filled:
    """A dependency slot wired to the chip with the given identity."""

    identity: str

    def __str__(self) -> str:
        return self.identity


Slot: TypeAlias = Empty | Filled

EMPTY = Empty()


@dataclass(slots=True)
class Chip:
    """One node in a circuit.

    Dependencies and the consumer are stored as identities, never as
    references to other chips; the owning ``ChipGraph`` resolves them.

    Attributes:
        identity: Unique name of the chip. Its first character selects ``kind``.
        kind: The operation performed by the chip.
        dependency1: First dependency slot.
        dependency2: Second dependency slot, used by binary kinds only.
        consumer: Identity of the chip that last took this one as a dependency.
        input_value: Externally supplied value, meaningful for INPUT chips only.
        cached_result: Value computed by the most recent evaluation.

    """

    identity: str
    kind: ChipKind
    dependency1: Slot = EMPTY
    dependency2: Slot = EMPTY
    consumer: str | None = None
    input_value: float = 0.0
    cached_result: float = 0.0

    @property
    def slots(self) -> tuple[Slot, ...]:
        """The dependency slots that the chip's kind uses, in wiring order."""
        return (self.dependency1, self.dependency2)[: self.kind.arity]

    @property
    def dependencies(self) -> tuple[str, ...]:
        """Identities of the wired dependencies, in wiring order."""
        return tuple(slot.identity for slot in self.slots if isinstance(slot, Filled))

    @property
    def is_fully_wired(self) -> bool:
        """Whether every slot required by the kind is filled."""
        return all(isinstance(slot, Filled) for slot in self.slots)


@dataclass(frozen=True, slots=True)
class ChipView:
    """Read-only snapshot of a chip's wiring, handed to reporting code."""

    identity: str
    kind: ChipKind
    dependencies: tuple[Slot, ...] = field(default_factory=tuple)
    consumer: str | None = None

    @classmethod
    def of(cls, chip: Chip) -> ChipView:
        return cls(
            identity=chip.identity,
            kind=chip.kind,
            dependencies=chip.slots,
            consumer=chip.consumer,
        )
