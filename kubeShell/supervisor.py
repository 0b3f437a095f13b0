# kubeShell/supervisor.py
"""
Owns the outer lifecycle: start a session with freshly read state, watch
the kubeconfig alongside it, and start over when someone else edits it.
"""

import logging
import threading
from dataclasses import replace
from enum import Enum
from typing import Callable, Optional

from kubeShell.constants import EXIT_OK, WATCHER_JOIN_TIMEOUT
from kubeShell.contexts.switch import ContextSwitcher
from kubeShell.core.context import SessionContext
from kubeShell.core.exceptions import KubectlError, StartupFatalError
from kubeShell.core.settings import SessionOptions, ShellSettings
from kubeShell.engine.host_shell import terminate_host_commands
from kubeShell.engine.kubectl import read_current_context
from kubeShell.shell import InteractiveSession, PromptToolkitReader
from kubeShell.watch.watcher import ConfigWatcher, RestartSignal, SelfChangeFlag

logger = logging.getLogger(__name__)


class SupervisorState(Enum):
    INIT = "init"
    RUNNING = "running"
    RESTARTING = "restarting"
    TERMINATED = "terminated"


class SessionSupervisor:
    def __init__(self, settings: ShellSettings, options: SessionOptions,
                 read_current: Callable[[], str] = read_current_context,
                 reader_factory: Callable[[], object] = PromptToolkitReader,
                 watcher_factory: Callable[..., ConfigWatcher] = ConfigWatcher,
                 session_factory: Callable[..., InteractiveSession] = InteractiveSession,
                 terminate_children: Callable[[], int] = terminate_host_commands):
        self.settings = settings
        self.options = options
        self.state = SupervisorState.INIT
        self.restart_signal = RestartSignal()
        self.restarts = 0
        self._read_current = read_current
        self._reader_factory = reader_factory
        self._watcher_factory = watcher_factory
        self._session_factory = session_factory
        self._terminate_children = terminate_children
        self._reader = None
        self._session: Optional[InteractiveSession] = None
        self._watcher: Optional[ConfigWatcher] = None
        # Reentrant: request_termination runs from a signal handler on the main thread
        self._lock = threading.RLock()
        self._termination_requested = threading.Event()
        self.termination_signal: Optional[int] = None

    def request_termination(self, signum: Optional[int] = None):
        """
        Safe to call from a signal handler: interrupts the running session, if
        any, and stops a host command it may be waiting on.
        """
        self.termination_signal = signum
        self._termination_requested.set()
        with self._lock:
            session = self._session
        if session is not None:
            session.interrupt()
        self._terminate_children()

    def _read_active_context(self, first_run: bool) -> str:
        try:
            return self._read_current()
        except KubectlError as e:
            if first_run:
                raise StartupFatalError(str(e))
            logger.warning(f"Could not read the active context after restart: {e}")
            print(f"⚠️ {e}")
            return ""

    def _start_watcher(self, flag: SelfChangeFlag) -> Optional[ConfigWatcher]:
        if not self.options.watch_enabled:
            return None
        watcher = self._watcher_factory(self.settings.kubeconfig_paths, flag, self.restart_signal)
        with self._lock:
            self._watcher = watcher
        watcher.start()
        return watcher

    def _teardown(self):
        with self._lock:
            session, self._session = self._session, None
            watcher, self._watcher = self._watcher, None
        if watcher is not None:
            watcher.stop(timeout=WATCHER_JOIN_TIMEOUT)
        if session is not None:
            self.restart_signal.remove_listener(session.interrupt)

    def run(self) -> int:
        """
        Init -> Running -> (Restarting -> Init)* until the session exits on its
        own. Every iteration re-reads the active context from kubectl.
        """
        options = self.options
        first_run = True
        try:
            while True:
                self.state = SupervisorState.INIT
                self.restart_signal.acknowledge()
                flag = SelfChangeFlag(self.settings.settle_seconds)
                # Watch before reading so an edit in between still triggers a restart
                watcher = self._start_watcher(flag)
                active_context = self._read_active_context(first_run)
                first_run = False

                if self._reader is None:
                    self._reader = self._reader_factory()
                self._reader.reset()

                context = SessionContext(self.settings, options, active_context,
                                         watcher_available=watcher is not None and watcher.is_watching)
                session = self._session_factory(context, ContextSwitcher(flag), self._reader, watcher)
                with self._lock:
                    self._session = session
                self.restart_signal.add_listener(session.interrupt)
                if self._termination_requested.is_set() or self.restart_signal.is_set():
                    session.interrupt()

                self.state = SupervisorState.RUNNING
                logger.info(f"Session running with context '{active_context}'")
                status = session.run()
                self._teardown()
                # The prompt toggle is session state, not kubeconfig state: carry it over
                options = replace(options, prompt_enabled=context.prompt_state.enabled)

                if self._termination_requested.is_set():
                    self.state = SupervisorState.TERMINATED
                    return 128 + self.termination_signal if self.termination_signal else EXIT_OK
                if status is None and self.restart_signal.is_set():
                    self.state = SupervisorState.RESTARTING
                    self.restarts += 1
                    print("\n🔄 Kubeconfig changed outside this shell. Restarting session...")
                    continue

                self.state = SupervisorState.TERMINATED
                return EXIT_OK if status is None else status
        finally:
            self._teardown()
            self.state = SupervisorState.TERMINATED
