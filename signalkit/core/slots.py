import logging
import uuid
import weakref
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence, Tuple

from signalkit.core.exceptions import InvalidListener

if TYPE_CHECKING:
    from signalkit.core.signals import OnceSignal

logger = logging.getLogger(__name__)


class Slot:
    """One listener registration on a signal.

    The slot keeps only a weak reference to its signal, so it never keeps
    the signal alive. Bound ``params`` are appended after the dispatch
    arguments on every call.
    """

    def __init__(
        self,
        listener: Callable[..., Any],
        signal: "OnceSignal",
        once: bool = False,
        priority: int = 0,
    ) -> None:
        if not callable(listener):
            raise InvalidListener(listener, signal)
        self._id = uuid.uuid4().hex
        self._listener = listener
        self._signal_ref = weakref.ref(signal)
        self._once = bool(once)
        self._priority = int(priority)
        self._params: Tuple[Any, ...] = ()
        self._enabled = True
        self._fired = False

    @property
    def id(self) -> str:
        return self._id

    @property
    def listener(self) -> Callable[..., Any]:
        return self._listener

    @listener.setter
    def listener(self, listener: Callable[..., Any]) -> None:
        if not callable(listener):
            raise InvalidListener(listener, self.signal)
        self._listener = listener

    @property
    def params(self) -> Tuple[Any, ...]:
        return self._params

    @params.setter
    def params(self, value: Sequence[Any]) -> None:
        self._params = tuple(value)

    @property
    def once(self) -> bool:
        return self._once

    @property
    def priority(self) -> int:
        return self._priority

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = bool(value)

    @property
    def signal(self) -> Optional["OnceSignal"]:
        """The owning signal, or None once it has been garbage collected."""
        return self._signal_ref()

    def execute(self, args: Sequence[Any] = ()) -> None:
        """Call the listener with ``args`` followed by the bound params.

        Disabled slots do nothing. A one-shot slot removes itself before the
        call. It fires at most once even if it sits in several snapshots
        (reentrant or concurrent dispatch), and still fires if a listener
        earlier in the same pass already removed it.
        """
        if not self._enabled:
            return
        if self._once:
            signal = self.signal
            if signal is None or not signal._claim(self):
                return
        self._listener(*args, *self._params)

    def remove(self) -> "Slot":
        signal = self.signal
        if signal is not None:
            signal.remove(self._id)
        return self

    def __repr__(self) -> str:
        name = getattr(self._listener, "__qualname__", repr(self._listener))
        return (
            f"<Slot {self._id[:8]} listener={name} once={self._once} "
            f"priority={self._priority} enabled={self._enabled}>"
        )
