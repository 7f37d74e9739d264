"""Filtered watches over cluster resources, one worker per namespace."""

from __future__ import annotations

import logging
import queue
import re
import threading
import time
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from kubeshark.pods import Pod

log = logging.getLogger(__name__)

DEFAULT_RESTART_DELAY = 5.0
DEFAULT_UNSTABLE_WINDOW = 60.0


class EventType(Enum):
    """The kind of change a watch reports."""

    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    DELETED = "DELETED"
    BOOKMARK = "BOOKMARK"
    ERROR = "ERROR"


@dataclass(frozen=True)
class ClusterEvent:
    """A cluster event and the kind of object it is about."""

    name: str
    regarding_kind: str = ""
    namespace: str = ""
    reason: str = ""
    note: str = ""


class InvalidObjectType(TypeError):
    """A watch event holds an object of another type than the one asked for."""

    def __init__(self, requested_type: type) -> None:
        self.requested_type = requested_type
        super().__init__(f"Cannot convert event to type {requested_type.__name__}")


class WatchError(RuntimeError):
    """A watch failed or reported an error status."""

    def __init__(self, message: str, reason: str = "", code: int | None = None) -> None:
        self.message = message
        self.reason = reason
        self.code = code
        super().__init__(message)


class TapManagerErrorReason(Enum):
    WORKER_UPDATE_ERROR = "WORKER_UPDATE_ERROR"
    POD_WATCH_ERROR = "POD_WATCH_ERROR"
    POD_LIST_ERROR = "POD_LIST_ERROR"


class TapManagerError(Exception):
    """An error of the tap manager, tagged with why it happened."""

    def __init__(self, original_error: BaseException, reason: TapManagerErrorReason) -> None:
        self.original_error = original_error
        self.reason = reason
        super().__init__(str(original_error))

    def __str__(self) -> str:
        return str(self.original_error)


class ClusterBehindProxyError(Exception):
    """The configured cluster server is reached through a local proxy."""

    def __init__(self) -> None:
        super().__init__("Cluster is behind proxy")


@dataclass(frozen=True)
class WatchEvent:
    """One change reported by a watch: its type and the object concerned."""

    type: EventType
    object: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, EventType):
            object.__setattr__(self, "type", EventType(self.type))

    def to_pod(self) -> Pod:
        """Return the object as a Pod; raises InvalidObjectType otherwise."""
        if not isinstance(self.object, Pod):
            raise InvalidObjectType(Pod)
        return self.object

    def to_event(self) -> ClusterEvent:
        """Return the object as a ClusterEvent; raises InvalidObjectType otherwise."""
        if not isinstance(self.object, ClusterEvent):
            raise InvalidObjectType(ClusterEvent)
        return self.object

    def to_error(self) -> WatchError:
        """Build the error that an error event's status object describes."""
        obj = self.object
        if isinstance(obj, Mapping) and "message" in obj:
            return WatchError(str(obj["message"]), str(obj.get("reason", "")), obj.get("code"))
        return WatchError(f"unexpected object: {obj!r}")


WatchSource = Callable[[threading.Event, str], Iterable[WatchEvent]]


class EventFilterer(Protocol):
    def filter(self, event: WatchEvent) -> bool: ...


class WatchCreator(Protocol):
    def new_watcher(self, stop: threading.Event, namespace: str) -> Iterable[WatchEvent]: ...


class PodWatchHelper:
    """Watches pods and lets through those whose name matches a pattern."""

    def __init__(self, name_regex: str | re.Pattern[str], watch_source: WatchSource) -> None:
        self.name_regex = re.compile(name_regex)
        self._watch_source = watch_source

    def filter(self, event: WatchEvent) -> bool:
        try:
            pod = event.to_pod()
        except InvalidObjectType:
            return False
        return self.name_regex.search(pod.name) is not None

    def new_watcher(self, stop: threading.Event, namespace: str) -> Iterable[WatchEvent]:
        return self._watch_source(stop, namespace)


class EventWatchHelper:
    """Watches cluster events by name pattern and kind of object concerned."""

    def __init__(self, name_regex: str | re.Pattern[str], kind: str, watch_source: WatchSource) -> None:
        self.name_regex = re.compile(name_regex)
        self.kind = kind
        self._watch_source = watch_source

    def filter(self, event: WatchEvent) -> bool:
        try:
            cluster_event = event.to_event()
        except InvalidObjectType:
            return False
        if self.name_regex.search(cluster_event.name) is None:
            return False
        return cluster_event.regarding_kind.casefold() == self.kind.casefold()

    def new_watcher(self, stop: threading.Event, namespace: str) -> Iterable[WatchEvent]:
        return self._watch_source(stop, namespace)


_CLOSED = object()


def _stop_watcher(watcher: Any) -> None:
    for name in ("stop", "close"):
        method = getattr(watcher, name, None)
        if callable(method):
            method()
            return


def _wrap(err: BaseException) -> WatchError:
    wrapped = WatchError(f"error in k8s watch: {err}")
    wrapped.__cause__ = err
    return wrapped


class FilteredWatch:
    """Runs a watch per namespace and collects the events that pass the filter.

    Events land in ``events`` and errors in ``errors``; once ``stop`` is set
    and every worker has finished, both queues are closed and the iterators
    end.
    """

    def __init__(
        self,
        stop: threading.Event,
        watch_creator: WatchCreator,
        namespaces: Iterable[str],
        filterer: EventFilterer,
        restart_delay: float = DEFAULT_RESTART_DELAY,
        unstable_window: float = DEFAULT_UNSTABLE_WINDOW,
    ) -> None:
        self._stop = stop
        self._creator = watch_creator
        self._filterer = filterer
        self._restart_delay = restart_delay
        self._unstable_window = unstable_window
        self.events: queue.Queue = queue.Queue()
        self.errors: queue.Queue = queue.Queue()
        self._workers = [
            threading.Thread(target=self._watch_namespace, args=(namespace,), daemon=True)
            for namespace in namespaces
        ]
        for worker in self._workers:
            worker.start()
        self._closer = threading.Thread(target=self._close_when_stopped, daemon=True)
        self._closer.start()

    def _close_when_stopped(self) -> None:
        self._stop.wait()
        for worker in self._workers:
            worker.join()
        self.events.put(_CLOSED)
        self.errors.put(_CLOSED)

    def _run(self, watcher: Iterable[WatchEvent]) -> BaseException | None:
        try:
            for event in watcher:
                if self._stop.is_set():
                    return None
                if event.type is EventType.ERROR:
                    return event.to_error()
                try:
                    passed = self._filterer.filter(event)
                except Exception as err:
                    return err
                if passed:
                    self.events.put(event)
        except Exception as err:
            return err
        return None

    def _watch_namespace(self, namespace: str) -> None:
        last_restart: float | None = None
        while True:
            try:
                watcher = self._creator.new_watcher(self._stop, namespace)
            except Exception as err:
                self.errors.put(_wrap(err))
                return
            try:
                err = self._run(watcher)
            finally:
                _stop_watcher(watcher)
            if self._stop.is_set():
                return
            if err is not None:
                self.errors.put(_wrap(err))
                return
            now = time.monotonic()
            if last_restart is None or now - last_restart >= self._unstable_window:
                last_restart = now
                log.warning("K8s watch channel closed, restarting watcher...")
                if self._stop.wait(self._restart_delay):
                    return
                continue
            self.errors.put(WatchError("K8s watch unstable, closes frequently"))
            return

    @staticmethod
    def _drain(source: queue.Queue, timeout: float | None) -> Iterator[Any]:
        while True:
            item = source.get(timeout=timeout)
            if item is _CLOSED:
                source.put(_CLOSED)
                return
            yield item

    def iter_events(self, timeout: float | None = None) -> Iterator[WatchEvent]:
        """Yield events until the watch is closed; queue.Empty on timeout."""
        return self._drain(self.events, timeout)

    def iter_errors(self, timeout: float | None = None) -> Iterator[BaseException]:
        """Yield errors until the watch is closed; queue.Empty on timeout."""
        return self._drain(self.errors, timeout)

    def __iter__(self) -> Iterator[WatchEvent]:
        return self.iter_events()


def filtered_watch(
    stop: threading.Event,
    watch_creator: WatchCreator,
    namespaces: Iterable[str],
    filterer: EventFilterer,
    restart_delay: float = DEFAULT_RESTART_DELAY,
) -> FilteredWatch:
    """Start watching ``namespaces`` and return the running FilteredWatch."""
    return FilteredWatch(stop, watch_creator, namespaces, filterer, restart_delay)