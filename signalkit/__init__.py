from signalkit.core.exceptions import (
    ArityMismatch,
    ConfigurationError,
    InvalidListener,
    InvalidValueClass,
    SignalError,
    TypeMismatch,
)
from signalkit.core.signals import OnceSignal, Signal, new_once_signal, new_signal
from signalkit.core.slots import Slot
from signalkit.core.value_classes import ValueClass, ValueKind, validate

__all__ = [
    "ArityMismatch",
    "ConfigurationError",
    "InvalidListener",
    "InvalidValueClass",
    "OnceSignal",
    "Signal",
    "SignalError",
    "Slot",
    "TypeMismatch",
    "ValueClass",
    "ValueKind",
    "new_once_signal",
    "new_signal",
    "validate",
]
