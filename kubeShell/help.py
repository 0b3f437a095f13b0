# kubeShell/help.py
"""Static help text for the interactive session."""

import shlex
from typing import Optional

from kubeShell import constants
from kubeShell.engine.host_shell import run_host_command

GENERAL_HELP = """📚 KubeShell Help
==================================================

KubeShell Commands:
   context                    - Show the active kubectl context
   context list               - List all contexts (* marks the active one)
   context select             - List contexts and pick one by number
   context <name|fragment>    - Switch to a context by name or name fragment
   prompt [on|off]            - Toggle or set the context shown in the prompt
   help [context|prompt]      - Show this help or help for one command
   exit [status], quit        - Leave KubeShell

Anything else is run by your shell, e.g.:
   kubectl get pods

The session restarts automatically when the kubeconfig is edited outside it."""

CONTEXT_HELP = """context                    - Show the active kubectl context
context list               - List every context with its number and cluster
context select             - List contexts, then enter a number to switch
context <name|fragment>    - Switch to the context with that exact name, or
                             the first one (in list order) whose name contains
                             the fragment. Nothing happens if none matches."""

PROMPT_HELP = """prompt                     - Toggle showing the active context in the prompt
prompt on                  - Show the active context in the prompt
prompt off                 - Hide it"""

TOPICS = {
    constants.HELP_TOPIC_CONTEXT: CONTEXT_HELP,
    constants.HELP_TOPIC_PROMPT: PROMPT_HELP,
}


def show_help(topic: Optional[str] = None, host_shell: str = constants.DEFAULT_HOST_SHELL):
    """Prints KubeShell help; unknown topics go to the host shell's `help`."""
    if topic is None:
        print(GENERAL_HELP)
        return
    text = TOPICS.get(topic.lower())
    if text is not None:
        print(text)
        return
    run_host_command(f"help {shlex.quote(topic)}", host_shell)
