import gc
import threading

import pytest

from signalkit import InvalidListener, Signal, Slot


def test_register_rejects_non_callable():
    signal = Signal()
    with pytest.raises(InvalidListener):
        signal.add("not callable")
    assert signal.num_listeners == 0


def test_listener_setter_validates():
    signal = Signal()
    slot = signal.add(print)
    with pytest.raises(InvalidListener):
        slot.listener = 42
    assert slot.listener is print


def test_new_slot_defaults():
    signal = Signal()
    slot = signal.add(print)
    assert isinstance(slot, Slot)
    assert slot.enabled is True
    assert slot.once is False
    assert slot.priority == 0
    assert slot.params == ()
    assert slot.signal is signal


def test_slot_ids_are_unique():
    signal = Signal()
    ids = {signal.add(print).id for _ in range(50)}
    assert len(ids) == 50


def test_add_once_fires_at_most_once():
    signal = Signal()
    calls = []
    slot = signal.add_once(lambda: calls.append(signal.num_listeners))
    signal.dispatch()
    signal.dispatch()
    assert calls == [0]
    assert slot.once is True
    assert signal.num_listeners == 0


def test_disabled_slot_is_skipped_but_kept():
    signal = Signal()
    calls = []
    slot = signal.add(lambda: calls.append("hit"))
    slot.enabled = False
    signal.dispatch()
    assert calls == []
    assert signal.num_listeners == 1
    slot.enabled = False
    assert slot.enabled is False
    slot.enabled = True
    signal.dispatch()
    assert calls == ["hit"]


def test_disabled_once_slot_survives_dispatch():
    signal = Signal()
    calls = []
    slot = signal.add_once(lambda: calls.append("hit"))
    slot.enabled = False
    signal.dispatch()
    assert signal.num_listeners == 1
    slot.enabled = True
    signal.dispatch()
    signal.dispatch()
    assert calls == ["hit"]


def test_remove_is_idempotent():
    signal = Signal()
    slot = signal.add(print)
    other = signal.add(print)
    signal.remove(slot.id)
    signal.remove(slot.id)
    slot.remove()
    signal.remove("missing")
    assert signal.slots == (other,)


def test_self_removal_does_not_skip_neighbours():
    signal = Signal()
    calls = []
    signal.add(lambda: calls.append("a"))
    slot = signal.add(lambda: (calls.append("b"), slot.remove()))
    signal.add(lambda: calls.append("c"))
    signal.dispatch()
    signal.dispatch()
    assert calls == ["a", "b", "c", "a", "c"]


def test_mutations_during_dispatch_wait_for_next_pass():
    signal = Signal()
    calls = []
    later = []

    def first():
        calls.append("first")
        later.append(signal.add(lambda: calls.append("added")))
        signal.remove(third.id)

    signal.add(first)
    signal.add(lambda: calls.append("second"))
    third = signal.add(lambda: calls.append("third"))
    signal.dispatch()
    assert calls == ["first", "second", "third"]
    assert signal.num_listeners == 3
    calls.clear()
    signal.remove(later[0].id)
    signal.remove_all()
    signal.dispatch()
    assert calls == []


def test_once_slot_is_not_repeated_by_reentrant_dispatch():
    signal = Signal()
    calls = []
    depth = []

    def reenter():
        if not depth:
            depth.append(1)
            signal.dispatch()

    signal.add(reenter)
    signal.add_once(lambda: calls.append("once"))
    signal.dispatch()
    assert calls == ["once"]


def test_once_slot_removed_mid_pass_still_fires_in_that_pass():
    signal = Signal()
    calls = []
    signal.add(signal.remove_all)
    signal.add(lambda: calls.append("plain"))
    signal.add_once(lambda: calls.append("once"))
    signal.dispatch()
    assert calls == ["plain", "once"]
    assert signal.num_listeners == 0
    signal.dispatch()
    assert calls == ["plain", "once"]


def test_once_slot_removed_by_id_mid_pass_fires_once():
    signal = Signal()
    calls = []
    signal.add(lambda: signal.remove(once.id))
    once = signal.add_once(lambda: calls.append("once"))
    signal.dispatch()
    signal.dispatch()
    assert calls == ["once"]


def test_once_slot_is_gone_while_its_listener_runs():
    signal = Signal()
    seen = []
    signal.add_once(lambda: seen.append(signal.num_listeners))
    signal.add(print)
    signal.dispatch()
    assert seen == [1]


def test_once_slot_fires_once_across_threads():
    signal = Signal()
    calls = []
    lock = threading.Lock()
    barrier = threading.Barrier(8)

    def record():
        with lock:
            calls.append(1)

    signal.add_once(record)

    def worker():
        barrier.wait()
        signal.dispatch()

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert calls == [1]


def test_slot_does_not_keep_signal_alive():
    signal = Signal()
    slot = signal.add(print)
    del signal
    gc.collect()
    assert slot.signal is None
    assert slot.remove() is slot
