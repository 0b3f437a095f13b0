# kubeShell/core/context/session_context.py
"""
Manages the operational context of one interactive session: the active
kubectl context, the prompt toggle and the settings it was started with.
A new SessionContext is built by the supervisor for every (re)start.
"""

from typing import Optional

from kubeShell.core.context.prompt_state import PromptState, render, toggle, set_enabled
from kubeShell.core.settings import ShellSettings, SessionOptions


class SessionContext:
    def __init__(self, settings: ShellSettings, options: SessionOptions,
                 active_context: str, watcher_available: bool = False):
        self.settings = settings
        self.options = options
        self.watcher_available = watcher_available
        self.prompt_state = PromptState(enabled=options.prompt_enabled, active_context=active_context)
        self.exit_status: Optional[int] = None

    @property
    def active_context(self) -> str:
        return self.prompt_state.active_context

    def set_active_context(self, name: str):
        """Only the context switcher and session startup call this."""
        self.prompt_state = PromptState(enabled=self.prompt_state.enabled, active_context=name)

    def toggle_prompt(self) -> bool:
        self.prompt_state = toggle(self.prompt_state)
        return self.prompt_state.enabled

    def set_prompt_enabled(self, value: bool):
        self.prompt_state = set_enabled(self.prompt_state, value)

    def get_prompt(self) -> str:
        """Returns the current command prompt string."""
        return render(self.prompt_state, self.settings.base_prompt)

    def request_exit(self, status: int = 0):
        self.exit_status = status

    def __str__(self):
        watcher = "on" if self.watcher_available else "off"
        return f"Current Context: '{self.active_context}' (prompt {'on' if self.prompt_state.enabled else 'off'}, watcher {watcher})"
