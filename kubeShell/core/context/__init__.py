"""
KubeShell Core Context Module

Prompt state and the per-session context snapshot.
"""

from .prompt_state import PromptState, render, toggle, set_enabled
from .session_context import SessionContext

__all__ = ['PromptState', 'render', 'toggle', 'set_enabled', 'SessionContext']
