# kubeShell/contexts/switch.py
"""
Switches the active kubectl context on behalf of the session.

The self-change flag is raised before kubectl touches the kubeconfig so the
watcher can attribute the resulting file event to us instead of restarting.
"""

import logging
import threading
from typing import Callable, Optional

from kubeShell.engine.kubectl import read_current_context, use_context
from kubeShell.watch.watcher import SelfChangeFlag

logger = logging.getLogger(__name__)


class ContextSwitcher:
    def __init__(self, flag: SelfChangeFlag,
                 mutate: Callable[[str], None] = use_context,
                 read_current: Callable[[], str] = read_current_context):
        self.flag = flag
        self._mutate = mutate
        self._read_current = read_current
        # One outstanding self-change at a time
        self._lock = threading.Lock()

    def switch_to(self, name: str, on_confirmed: Optional[Callable[[str], None]] = None) -> str:
        """
        Makes `name` the current context and returns the context kubectl reports
        afterwards. Existence is left to kubectl, which raises UnknownContextError.
        """
        with self._lock:
            self.flag.mark()
            try:
                self._mutate(name)
            except Exception:
                # kubectl refused, so no file event is coming
                self.flag.clear()
                raise
            self.flag.release()

            confirmed = self._read_current()
            if confirmed != name:
                logger.warning(f"Switched to '{name}' but kubeconfig now reports '{confirmed}'")
                print(f"⚠️ The kubeconfig changed concurrently; active context is now '{confirmed}'.")
            if on_confirmed is not None:
                on_confirmed(confirmed)
            return confirmed
