# kubeShell/shell.py
"""
The interactive session: reads lines at the prompt and dispatches them until
the operator exits or the supervisor interrupts it.
"""

import asyncio
import logging
import threading
from pathlib import Path
from typing import Callable, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from kubeShell.constants import EXIT_OK
from kubeShell.contexts.switch import ContextSwitcher
from kubeShell.core.context import SessionContext
from kubeShell.core.exceptions import SessionInterrupted
from kubeShell.dispatch.dispatcher import execute_command
from kubeShell.engine.kubectl import enumerate_contexts
from kubeShell.watch.watcher import ConfigWatcher

logger = logging.getLogger(__name__)

HISTORY_FILE = Path.home() / ".kubeshell_history"


class PromptToolkitReader:
    """
    Line reader whose blocking `read` can be ended from another thread:
    `interrupt` makes the pending (or next) read raise SessionInterrupted.
    """

    def __init__(self, history_path: Optional[Path] = HISTORY_FILE):
        history = FileHistory(str(history_path)) if history_path else None
        self._prompt_session = PromptSession(history=history)
        self._interrupt_requested = threading.Event()

    def reset(self):
        self._interrupt_requested.clear()

    def read(self, message: str) -> str:
        if self._interrupt_requested.is_set():
            raise SessionInterrupted()
        return self._prompt_session.prompt(message, pre_run=self._exit_if_interrupted)

    def interrupt(self):
        self._interrupt_requested.set()
        app = self._prompt_session.app
        loop = app.loop
        if app.is_running and loop is not None:
            loop.call_soon_threadsafe(self._exit_app)

    def _exit_if_interrupted(self):
        # Covers an interrupt that arrived while the prompt was starting up
        if self._interrupt_requested.is_set():
            asyncio.get_running_loop().call_soon(self._exit_app)

    def _exit_app(self):
        app = self._prompt_session.app
        if app.is_running and not app.is_done:
            app.exit(exception=SessionInterrupted())


class InteractiveSession:
    def __init__(self, context: SessionContext, switcher: ContextSwitcher, reader,
                 watcher: Optional[ConfigWatcher] = None,
                 enumerate_contexts: Callable[[], str] = enumerate_contexts):
        self.context = context
        self.switcher = switcher
        self.reader = reader
        self.watcher = watcher
        self.enumerate_contexts = enumerate_contexts
        self._interrupted = threading.Event()

    @property
    def interrupted(self) -> bool:
        return self._interrupted.is_set()

    def interrupt(self):
        """Thread-safe; ends run() at the next opportunity."""
        self._interrupted.set()
        self.reader.interrupt()

    def run(self) -> Optional[int]:
        """
        Runs the read/dispatch loop. Returns the exit status chosen by the
        operator, or None if the session was interrupted.
        """
        logger.debug(f"Session started: {self.context}")
        while True:
            if self.interrupted:
                return None
            if self.watcher is not None and self.watcher.is_watching:
                self.watcher.check_health()

            try:
                line_input = self.reader.read(self.context.get_prompt())
            except SessionInterrupted:
                return None
            except KeyboardInterrupt:
                # Ctrl-C at the prompt just discards the line
                continue
            except EOFError:
                print("\n👋 Goodbye!")
                return EXIT_OK

            try:
                execute_command(line_input, self)
            except SessionInterrupted:
                return None
            except KeyboardInterrupt:
                print("\nOperation cancelled.")

            if self.context.exit_status is not None:
                print("👋 Goodbye!")
                return self.context.exit_status
