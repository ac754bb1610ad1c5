from typing import Any


class SignalError(Exception):
    """Base class for every error raised by signalkit."""


class ConfigurationError(SignalError):
    """Raised when required configuration is missing or invalid."""


class InvalidListener(SignalError, TypeError):
    """Raised when a listener is not callable."""

    def __init__(self, listener: Any, signal: Any = None) -> None:
        self.listener = listener
        self.signal = signal
        target = f" for {signal}" if signal is not None else ""
        super().__init__(
            f"Invalid listener{target}, expected a callable, got {type(listener).__name__}"
        )


class InvalidValueClass(SignalError, TypeError):
    """Raised when a value class descriptor cannot be understood."""

    def __init__(self, descriptor: Any, reason: str = "unknown value class") -> None:
        self.descriptor = descriptor
        super().__init__(f"{reason}: {descriptor!r}")


class ArityMismatch(SignalError, TypeError):
    """Raised when dispatch receives the wrong number of arguments."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Value class mismatch, expected {expected} got {actual}")


class TypeMismatch(SignalError, TypeError):
    """Raised when a dispatch argument does not match its value class."""

    def __init__(self, expected: str, actual: str, position: int | None = None) -> None:
        self.expected = expected
        self.actual = actual
        self.position = position
        where = f" at position {position}" if position is not None else ""
        super().__init__(
            f"Argument{where} does not match required value class, "
            f"expected {expected}, received {actual}"
        )
