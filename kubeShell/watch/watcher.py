# kubeShell/watch/watcher.py
"""
Kubeconfig change detection.

A watchdog observer reports file events for the kubeconfig paths. Each event
is checked against the self-change flag: events caused by our own
`use-context` are swallowed, anything else latches a restart signal that
the supervisor acknowledges when it starts the next session.
"""

import logging
import os
import threading
import time
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from watchdog.events import (
    EVENT_TYPE_CREATED, EVENT_TYPE_DELETED, EVENT_TYPE_MODIFIED, EVENT_TYPE_MOVED,
    FileSystemEvent, FileSystemEventHandler,
)
from watchdog.observers import Observer

from kubeShell.constants import WATCHER_JOIN_TIMEOUT

logger = logging.getLogger(__name__)

_WATCHED_EVENT_TYPES = (EVENT_TYPE_MODIFIED, EVENT_TYPE_MOVED, EVENT_TYPE_DELETED, EVENT_TYPE_CREATED)


class SelfChangeFlag:
    """
    Set by the context switcher right before kubectl writes the kubeconfig,
    cleared by the watcher when it sees the resulting event.

    kubectl may touch the file more than once per write, so events are also
    attributed to us while the switch is still running and for
    `settle_seconds` after it releases the flag. Outside that window any
    event seen with the flag clear is external.
    """

    def __init__(self, settle_seconds: float = 0.0, clock: Callable[[], float] = time.monotonic):
        self._lock = threading.Lock()
        self._pending = False
        self._switching = False
        self._settle_seconds = settle_seconds
        self._settle_until = 0.0
        self._clock = clock

    def mark(self):
        with self._lock:
            self._pending = True
            self._switching = True

    def release(self):
        """The switch that marked the flag has finished writing."""
        with self._lock:
            if self._switching:
                self._switching = False
                self._settle_until = self._clock() + self._settle_seconds

    def clear(self):
        with self._lock:
            self._pending = False
            self._switching = False

    def is_set(self) -> bool:
        with self._lock:
            return self._pending

    def consume(self) -> bool:
        """Returns True when an observed event should be attributed to our own write."""
        with self._lock:
            if self._pending:
                self._pending = False
                return True
            return self._switching or self._clock() < self._settle_until


class RestartSignal:
    """
    One-shot latch from the watcher thread to the foreground session.
    `trigger` returns True only for the first call until `acknowledge`.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._event = threading.Event()
        self._listeners: List[Callable[[], None]] = []

    def add_listener(self, callback: Callable[[], None]):
        with self._lock:
            self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[], None]):
        with self._lock:
            if callback in self._listeners:
                self._listeners.remove(callback)

    def trigger(self) -> bool:
        with self._lock:
            if self._event.is_set():
                return False
            self._event.set()
            listeners = list(self._listeners)
        for callback in listeners:
            callback()
        return True

    def is_set(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._event.wait(timeout)

    def acknowledge(self):
        self._event.clear()


class WatcherState(Enum):
    IDLE = "idle"
    WATCHING = "watching"
    SIGNALING_RESTART = "signaling_restart"


def _normalize(path) -> str:
    if isinstance(path, bytes):
        path = os.fsdecode(path)
    return os.path.normpath(os.path.abspath(path))


class KubeconfigEventHandler(FileSystemEventHandler):
    """Forwards modify/move/delete/create events that touch one of `paths`."""

    def __init__(self, paths: Iterable[Path], on_change: Callable[[FileSystemEvent], None]):
        super().__init__()
        self._paths = {_normalize(path) for path in paths}
        self._on_change = on_change

    def on_any_event(self, event: FileSystemEvent):
        if event.is_directory or event.event_type not in _WATCHED_EVENT_TYPES:
            return
        touched = {_normalize(event.src_path)}
        dest_path = getattr(event, "dest_path", "")
        if dest_path:
            touched.add(_normalize(dest_path))
        if touched & self._paths:
            self._on_change(event)


class ConfigWatcher:
    """
    Watches the kubeconfig files in the background.

    States: IDLE (not watching, also the degraded state), WATCHING, and
    SIGNALING_RESTART until the supervisor acknowledges. A failure of the
    observer drops the watcher to IDLE with a warning and is never retried.
    """

    def __init__(self, paths: Iterable[Path], flag: SelfChangeFlag, restart_signal: RestartSignal,
                 observer_factory: Callable[[], Observer] = Observer):
        self.paths = tuple(Path(path) for path in paths)
        self.flag = flag
        self.restart_signal = restart_signal
        self._observer_factory = observer_factory
        self._observer = None
        self._lock = threading.Lock()
        self._stopped = False
        self.state = WatcherState.IDLE
        self.handler = KubeconfigEventHandler(self.paths, self._on_change)

    @property
    def is_watching(self) -> bool:
        return self.state is not WatcherState.IDLE

    def start(self) -> bool:
        """Subscribes to file events. Returns False (and warns) when that is not possible."""
        directories = sorted({path.parent for path in self.paths})
        missing = [str(directory) for directory in directories if not directory.is_dir()]
        if missing:
            self._degrade(f"kubeconfig directory not found: {', '.join(missing)}")
            return False

        try:
            observer = self._observer_factory()
            for directory in directories:
                observer.schedule(self.handler, str(directory), recursive=False)
            observer.start()
        except Exception as e:
            self._degrade(f"{type(e).__name__} - {e}")
            return False

        with self._lock:
            self._observer = observer
            self._stopped = False
            self.state = WatcherState.WATCHING
        logger.info(f"Watching {', '.join(str(path) for path in self.paths)}")
        return True

    def _on_change(self, event: FileSystemEvent):
        if self.flag.consume():
            logger.debug(f"Ignoring self-caused {event.event_type} on {event.src_path}")
            return

        with self._lock:
            if self.state is not WatcherState.WATCHING:
                return
            self.state = WatcherState.SIGNALING_RESTART

        logger.info(f"External {event.event_type} on {event.src_path}")
        self.restart_signal.trigger()

    def acknowledge(self):
        """Called by the supervisor once it has handled the restart."""
        with self._lock:
            if self.state is WatcherState.SIGNALING_RESTART:
                self.state = WatcherState.WATCHING
        self.restart_signal.acknowledge()

    def check_health(self) -> bool:
        """Degrades to IDLE if the observer or one of its emitters died."""
        with self._lock:
            observer = self._observer
            if observer is None or self._stopped:
                return self.is_watching
        alive = observer.is_alive() and all(emitter.is_alive() for emitter in observer.emitters)
        if not alive:
            self._degrade("file watcher stopped unexpectedly")
            self.stop()
        return alive

    def _degrade(self, reason: str):
        with self._lock:
            self.state = WatcherState.IDLE
        logger.warning(f"Kubeconfig watcher unavailable: {reason}")
        print(f"⚠️ Kubeconfig change detection disabled ({reason}). External edits will not be picked up.")

    def stop(self, timeout: float = WATCHER_JOIN_TIMEOUT):
        """Stops the observer. Safe to call any number of times."""
        with self._lock:
            observer = self._observer
            self._observer = None
            self._stopped = True
            self.state = WatcherState.IDLE
        if observer is None:
            return
        try:
            observer.stop()
            if observer.is_alive():
                observer.join(timeout=timeout)
        except RuntimeError as e:
            logger.debug(f"Observer stop: {e}")
        if observer.is_alive():
            logger.warning(f"Watcher thread did not stop within {timeout}s")
