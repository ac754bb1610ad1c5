from typing import Any

_MAX_REPR = 40


def type_name(value: Any) -> str:
    """Qualified name of a value's type (builtins stay short)."""
    cls = value if isinstance(value, type) else type(value)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def describe_value(value: Any) -> str:
    """Short `type (repr)` text used in error messages."""
    if value is None:
        return "None"
    text = repr(value)
    if len(text) > _MAX_REPR:
        text = text[: _MAX_REPR - 3] + "..."
    return f"{type_name(value)} ({text})"


def describe_signal(signal: Any, num_listeners: int) -> str:
    return f"Signal class: {type(signal).__name__}, number of listeners: {num_listeners}"
