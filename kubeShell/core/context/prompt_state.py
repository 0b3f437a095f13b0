# kubeShell/core/context/prompt_state.py
"""
Prompt rendering. `render` is a pure function of the prompt state and the
base prompt; the toggles return new states instead of mutating.
"""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class PromptState:
    enabled: bool = True
    active_context: str = ""


def render(state: PromptState, base_prompt: str) -> str:
    if not state.enabled:
        return base_prompt
    return f"({state.active_context}) {base_prompt}"


def toggle(state: PromptState) -> PromptState:
    return replace(state, enabled=not state.enabled)


def set_enabled(state: PromptState, value: bool) -> PromptState:
    return replace(state, enabled=value)
