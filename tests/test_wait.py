import signal
import threading

from kubeshark.wait import wait_for_termination


def test_returns_when_already_done():
    done = threading.Event()
    done.set()
    calls = []
    assert wait_for_termination(done, lambda: calls.append(1)) is False
    assert calls == []


def test_returns_when_done_later():
    done = threading.Event()
    timer = threading.Timer(0.1, done.set)
    timer.start()
    calls = []
    try:
        assert wait_for_termination(done, lambda: calls.append(1)) is False
    finally:
        timer.cancel()
    assert calls == []


def test_signal_cancels():
    done = threading.Event()
    calls = []
    fallback = threading.Timer(5.0, done.set)
    trigger = threading.Timer(0.1, signal.raise_signal, args=(signal.SIGINT,))
    fallback.start()
    trigger.start()
    try:
        result = wait_for_termination(done, lambda: calls.append(1))
    finally:
        fallback.cancel()
        trigger.cancel()
    assert result is True
    assert calls == [1]


def test_previous_handler_restored():
    original = signal.getsignal(signal.SIGINT)
    done = threading.Event()
    done.set()
    result = wait_for_termination(done, lambda: None)
    assert result is False
    assert signal.getsignal(signal.SIGINT) is original