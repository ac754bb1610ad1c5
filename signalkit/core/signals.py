import logging
from threading import RLock
from typing import Any, Callable, List, Sequence, Tuple

from signalkit.core.exceptions import ArityMismatch
from signalkit.core.slots import Slot
from signalkit.core.value_classes import ValueClass, validate, value_classes
from signalkit.settings import settings
from signalkit.utils.formatting import describe_signal

logger = logging.getLogger(__name__)


class OnceSignal:
    """Signal whose listeners are dispatched a single time.

    Listeners run in descending priority, ties in registration order. Each
    dispatch walks a snapshot of the registry, so listeners may add or
    remove slots (or dispatch again) without disturbing the current pass.
    """

    def __init__(self, *value_classes: Any) -> None:
        self._lock = RLock()
        self._slots: List[Slot] = []
        self._value_classes: Tuple[ValueClass, ...] = ()
        self.value_classes = value_classes

    @property
    def value_classes(self) -> Tuple[ValueClass, ...]:
        return self._value_classes

    @value_classes.setter
    def value_classes(self, descriptors: Sequence[Any]) -> None:
        self._value_classes = value_classes(descriptors)

    @property
    def num_listeners(self) -> int:
        with self._lock:
            return len(self._slots)

    @property
    def slots(self) -> Tuple[Slot, ...]:
        with self._lock:
            return tuple(self._slots)

    def add_once(self, listener: Callable[..., Any], priority: int = 0) -> Slot:
        return self._register(listener, once=True, priority=priority)

    def dispatch(self, *args: Any) -> "OnceSignal":
        """Validate ``args`` against the value classes, then call every slot."""
        expected = self._value_classes
        if expected:
            if len(args) != len(expected):
                logger.debug("%s rejected %d arguments, expected %d", self, len(args), len(expected))
                raise ArityMismatch(len(expected), len(args))
            for position, (value_class, value) in enumerate(zip(expected, args)):
                validate(value_class, value, position)

        with self._lock:
            snapshot = list(self._slots)
        if settings.trace_dispatch:
            logger.debug("Dispatching %s to %d listeners", type(self).__name__, len(snapshot))
        for slot in snapshot:
            slot.execute(args)
        return self

    def remove(self, slot_id: str) -> "OnceSignal":
        if self._discard(slot_id):
            logger.debug("Removed slot %s from %s", slot_id, type(self).__name__)
        return self

    def remove_all(self) -> "OnceSignal":
        with self._lock:
            self._slots = []
        return self

    def describe(self) -> str:
        return describe_signal(self, self.num_listeners)

    def _claim(self, slot: Slot) -> bool:
        """Mark a one-shot slot as fired and unregister it; False if it already fired."""
        with self._lock:
            if slot._fired:
                return False
            slot._fired = True
            self._discard(slot.id)
        return True

    def _discard(self, slot_id: str) -> bool:
        """Remove the slot with ``slot_id``; return whether it was registered."""
        with self._lock:
            for index, slot in enumerate(self._slots):
                if slot.id == slot_id:
                    del self._slots[index]
                    return True
        return False

    def _register(self, listener: Callable[..., Any], once: bool = False, priority: int = 0) -> Slot:
        slot = Slot(listener, self, once=once, priority=priority)
        with self._lock:
            index = len(self._slots)
            while index > 0 and self._slots[index - 1].priority < slot.priority:
                index -= 1
            self._slots.insert(index, slot)
        logger.debug("Registered %r on %s", slot, type(self).__name__)
        return slot

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        classes = ", ".join(str(vc) for vc in self._value_classes)
        return f"<{type(self).__name__}({classes}) listeners={self.num_listeners}>"


class Signal(OnceSignal):
    """A signal capable of dispatching its listeners multiple times."""

    def add(self, listener: Callable[..., Any], priority: int = 0) -> Slot:
        return self._register(listener, once=False, priority=priority)


def new_signal(*value_classes: Any) -> Signal:
    return Signal(*value_classes)


def new_once_signal(*value_classes: Any) -> OnceSignal:
    return OnceSignal(*value_classes)
