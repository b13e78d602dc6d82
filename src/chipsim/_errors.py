"""Exceptions raised by circuit operations."""


class CircuitError(Exception):
    """Base class for errors raised while building or evaluating a circuit."""


class DuplicateIdentityError(CircuitError):
    """Raised when a chip is created with an identity that already exists."""

    def __init__(self, identity: str) -> None:
        self.identity = identity
        super().__init__(f"Chip '{identity}' already exists")


class UnknownIdentityError(CircuitError):
    """Raised when an identity does not name any chip in the graph."""

    def __init__(self, identity: str) -> None:
        self.identity = identity
        super().__init__(f"No chip named '{identity}'")


class UnknownChipKindError(CircuitError):
    """Raised when an identity's leading character does not select a chip kind."""

    def __init__(self, identity: str) -> None:
        self.identity = identity
        super().__init__(f"Cannot derive a chip kind from identity '{identity}'")


class InvalidWiringError(CircuitError):
    """Raised when an operation is applied to a chip of the wrong kind."""

    def __init__(self, identity: str, reason: str) -> None:
        self.identity = identity
        self.reason = reason
        super().__init__(f"Invalid wiring for chip '{identity}': {reason}")


class SlotsFullError(CircuitError):
    """Raised when connecting into a binary chip whose two slots are already filled."""

    def __init__(self, source: str, target: str) -> None:
        self.source = source
        self.target = target
        super().__init__(f"Cannot connect '{source}' to '{target}': both inputs are already wired")


class MissingWiringError(CircuitError):
    """Raised when a chip is evaluated before its required dependencies are connected."""

    def __init__(self, identity: str, wired: int, required: int) -> None:
        self.identity = identity
        self.wired = wired
        self.required = required
        super().__init__(f"Chip '{identity}' has {wired} of {required} required inputs wired")


class EvaluationDepthError(CircuitError):
    """Raised when evaluation recurses deeper than the configured bound."""

    def __init__(self, identity: str, max_depth: int) -> None:
        self.identity = identity
        self.max_depth = max_depth
        super().__init__(f"Evaluation of '{identity}' exceeded the maximum depth of {max_depth}")


class ScriptError(Exception):
    """Raised when a command script cannot be parsed."""
