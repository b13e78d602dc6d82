"""Tests for chip kinds and chip records."""

import pytest

from chipsim import Chip, ChipKind, Empty, Filled, UnknownChipKindError
from chipsim._chip import EMPTY


class TestChipKind:
    """Tests for ChipKind."""

    @pytest.mark.parametrize(
        ("identity", "kind"),
        [
            ("I1", ChipKind.INPUT),
            ("O50", ChipKind.OUTPUT),
            ("A1", ChipKind.ADD),
            ("S2", ChipKind.SUBTRACT),
            ("M3", ChipKind.MULTIPLY),
            ("D4", ChipKind.DIVIDE),
            ("N5", ChipKind.NEGATE),
        ],
    )
    def test_from_identity(self, identity: str, kind: ChipKind) -> None:
        assert ChipKind.from_identity(identity) is kind

    def test_from_identity_unknown_prefix(self) -> None:
        with pytest.raises(UnknownChipKindError, match="X1") as exc_info:
            ChipKind.from_identity("X1")
        assert exc_info.value.identity == "X1"

    def test_from_identity_is_case_sensitive(self) -> None:
        with pytest.raises(UnknownChipKindError):
            ChipKind.from_identity("a1")

    def test_from_empty_identity(self) -> None:
        with pytest.raises(UnknownChipKindError):
            ChipKind.from_identity("")

    def test_arity(self) -> None:
        assert ChipKind.INPUT.arity == 0
        assert ChipKind.OUTPUT.arity == 1
        assert ChipKind.NEGATE.arity == 1
        for kind in (ChipKind.ADD, ChipKind.SUBTRACT, ChipKind.MULTIPLY, ChipKind.DIVIDE):
            assert kind.arity == 2

    def test_members_have_docstrings(self) -> None:
        for kind in ChipKind:
            assert kind.__doc__

    def test_value_is_prefix(self) -> None:
        assert ChipKind.DIVIDE == "D"
        assert str(ChipKind.NEGATE) == "N"


class TestSlots:
    """Tests for Empty and Filled slots."""

    def test_empty_is_singleton_equal(self) -> None:
        assert Empty() == EMPTY
        assert str(EMPTY) == "None"

    def test_filled(self) -> None:
        assert Filled("I1") == Filled("I1")
        assert Filled("I1") != Filled("I2")
        assert str(Filled("I1")) == "I1"


class TestChip:
    """Tests for the Chip record."""

    def test_defaults(self) -> None:
        chip = Chip(identity="A1", kind=ChipKind.ADD)
        assert chip.dependency1 == EMPTY
        assert chip.dependency2 == EMPTY
        assert chip.consumer is None
        assert chip.input_value == 0.0
        assert chip.cached_result == 0.0

    def test_slots_follow_arity(self) -> None:
        assert Chip("I1", ChipKind.INPUT).slots == ()
        assert Chip("N1", ChipKind.NEGATE).slots == (EMPTY,)
        assert Chip("A1", ChipKind.ADD).slots == (EMPTY, EMPTY)

    def test_dependencies_skip_empty_slots(self) -> None:
        chip = Chip("S1", ChipKind.SUBTRACT, dependency1=Filled("I1"))
        assert chip.dependencies == ("I1",)
        assert not chip.is_fully_wired

    def test_fully_wired(self) -> None:
        chip = Chip("S1", ChipKind.SUBTRACT, dependency1=Filled("I1"), dependency2=Filled("I2"))
        assert chip.dependencies == ("I1", "I2")
        assert chip.is_fully_wired

    def test_input_is_always_fully_wired(self) -> None:
        assert Chip("I1", ChipKind.INPUT).is_fully_wired
