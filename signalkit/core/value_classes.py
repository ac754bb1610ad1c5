"""Value classes: positional type constraints checked before dispatch.

A descriptor is either a primitive ``ValueKind`` (or one of its string
aliases) or a nominal type checked with ``isinstance``. Nominal types may
be given as classes, tuples of classes, or dotted import paths.
"""
import importlib
import logging
import numbers
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from signalkit.core.exceptions import InvalidValueClass, TypeMismatch
from signalkit.utils.formatting import describe_value, type_name

logger = logging.getLogger(__name__)


class ValueKind(Enum):
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STR = "str"
    ARRAY = "array"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    OBJECT = "object"
    NONE = "none"
    NUMERIC = "numeric"
    SCALAR = "scalar"
    ANY = "any"
    NOMINAL = "nominal"


_BUILTIN_VALUES = (bool, int, float, complex, str, bytes, bytearray, list, tuple, dict, set, frozenset)

# Decimal or exponent notation only; "inf", "nan" and digit separators are not numeric.
_NUMERIC_STRING = re.compile(r"\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*")


def _is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, numbers.Number):
        return True
    if isinstance(value, str):
        return _NUMERIC_STRING.fullmatch(value) is not None
    return False


def _is_array(value: Any) -> bool:
    return isinstance(value, Mapping) or _PREDICATES[ValueKind.SEQUENCE](value)


_PREDICATES: Dict[ValueKind, Callable[[Any], bool]] = {
    ValueKind.BOOL: lambda v: isinstance(v, bool),
    ValueKind.INT: lambda v: isinstance(v, int) and not isinstance(v, bool),
    ValueKind.FLOAT: lambda v: isinstance(v, float),
    ValueKind.STR: lambda v: isinstance(v, str),
    ValueKind.ARRAY: _is_array,
    ValueKind.SEQUENCE: lambda v: isinstance(v, Sequence) and not isinstance(v, (str, bytes, bytearray)),
    ValueKind.MAPPING: lambda v: isinstance(v, Mapping),
    ValueKind.OBJECT: lambda v: v is not None and not isinstance(v, _BUILTIN_VALUES),
    ValueKind.NONE: lambda v: v is None,
    ValueKind.NUMERIC: _is_numeric,
    ValueKind.SCALAR: lambda v: isinstance(v, (bool, int, float, str)),
    ValueKind.ANY: lambda v: True,
}

# Accepts the legacy base type names alongside the Python spellings.
_ALIASES: Dict[str, ValueKind] = {
    "array": ValueKind.ARRAY,
    "list": ValueKind.SEQUENCE,
    "sequence": ValueKind.SEQUENCE,
    "bool": ValueKind.BOOL,
    "boolean": ValueKind.BOOL,
    "double": ValueKind.FLOAT,
    "float": ValueKind.FLOAT,
    "real": ValueKind.FLOAT,
    "int": ValueKind.INT,
    "integer": ValueKind.INT,
    "long": ValueKind.INT,
    "null": ValueKind.NONE,
    "none": ValueKind.NONE,
    "numeric": ValueKind.NUMERIC,
    "object": ValueKind.OBJECT,
    "scalar": ValueKind.SCALAR,
    "string": ValueKind.STR,
    "str": ValueKind.STR,
    "dict": ValueKind.MAPPING,
    "mapping": ValueKind.MAPPING,
    "any": ValueKind.ANY,
}


@dataclass(frozen=True)
class ValueClass:
    """A normalized descriptor for one positional dispatch argument."""

    kind: ValueKind
    types: Tuple[type, ...] = ()

    @property
    def name(self) -> str:
        if self.kind is ValueKind.NOMINAL:
            return " | ".join(type_name(cls) for cls in self.types)
        return self.kind.value

    def accepts(self, value: Any) -> bool:
        if self.kind is ValueKind.NOMINAL:
            return isinstance(value, self.types)
        return _PREDICATES[self.kind](value)

    def __str__(self) -> str:
        return self.name


def _import_type(path: str) -> type:
    module_path, _, class_name = path.rpartition(".")
    if not module_path:
        raise InvalidValueClass(path)
    try:
        module = importlib.import_module(module_path)
        cls = getattr(module, class_name)
    except (ImportError, AttributeError) as exc:
        raise InvalidValueClass(path, f"cannot import value class ({exc})") from exc
    if not isinstance(cls, type):
        raise InvalidValueClass(path, "value class is not a type")
    return cls


def _nominal(descriptor: Any, types: Tuple[type, ...]) -> ValueClass:
    # Plain typing.Protocol classes refuse isinstance checks.
    try:
        isinstance(None, types)
    except TypeError as exc:
        raise InvalidValueClass(descriptor, f"value class does not support isinstance ({exc})") from exc
    return ValueClass(ValueKind.NOMINAL, types)


def value_class(descriptor: Any) -> ValueClass:
    """Normalize a single descriptor into a ``ValueClass``."""
    if isinstance(descriptor, ValueClass):
        return descriptor
    if isinstance(descriptor, ValueKind):
        if descriptor is ValueKind.NOMINAL:
            raise InvalidValueClass(descriptor, "nominal value class needs a type")
        return ValueClass(descriptor)
    if isinstance(descriptor, str):
        kind = _ALIASES.get(descriptor.strip().lower())
        if kind is not None:
            return ValueClass(kind)
        return _nominal(descriptor, (_import_type(descriptor.strip()),))
    if descriptor is None:
        return ValueClass(ValueKind.NONE)
    if isinstance(descriptor, type):
        return _nominal(descriptor, (descriptor,))
    if isinstance(descriptor, tuple) and descriptor and all(isinstance(t, type) for t in descriptor):
        return _nominal(descriptor, descriptor)
    raise InvalidValueClass(descriptor)


def value_classes(descriptors: Iterable[Any]) -> Tuple[ValueClass, ...]:
    return tuple(value_class(descriptor) for descriptor in descriptors)


def validate(descriptor: Any, value: Any, position: Optional[int] = None) -> bool:
    """Return True if ``value`` satisfies ``descriptor``, else raise ``TypeMismatch``."""
    expected = value_class(descriptor)
    if not expected.accepts(value):
        actual = describe_value(value)
        logger.debug("Value class check failed: expected %s, received %s", expected, actual)
        raise TypeMismatch(expected.name, actual, position)
    return True
