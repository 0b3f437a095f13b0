# kubeShell/dispatch/dispatcher.py
"""
Routes one line of input: KubeShell commands go to their handler, anything
else to the host shell. Failures stay inside the command that caused them.
"""

import logging
import traceback
from typing import Callable, Dict

from lark.exceptions import LarkError

from kubeShell import constants
from kubeShell.contexts import cli_handlers
from kubeShell.core.exceptions import KubeShellError, SessionInterrupted
from kubeShell.engine.host_shell import run_host_command
from kubeShell.help import show_help
from kubeShell.parser.parser import parse_command

logger = logging.getLogger(__name__)

COMMAND_KEYWORDS = {"context", "prompt", "help", "exit", "quit"}


def handle_help(parsed_data: dict, session):
    show_help(parsed_data.get("topic"), session.context.settings.host_shell)


def handle_exit(parsed_data: dict, session):
    session.context.request_exit(parsed_data["status"])


COMMAND_HANDLERS: Dict[str, Callable[[dict, object], None]] = {
    constants.ACTION_SHOW_CONTEXT: cli_handlers.handle_show_context,
    constants.ACTION_LIST_CONTEXTS: cli_handlers.handle_list_contexts,
    constants.ACTION_SELECT_CONTEXT: cli_handlers.handle_select_context,
    constants.ACTION_USE_CONTEXT: cli_handlers.handle_use_context,
    constants.ACTION_TOGGLE_PROMPT: cli_handlers.handle_toggle_prompt,
    constants.ACTION_SET_PROMPT: cli_handlers.handle_set_prompt,
    constants.ACTION_HELP: handle_help,
    constants.ACTION_EXIT: handle_exit,
}


def is_shell_command(command_string: str) -> bool:
    words = command_string.split()
    return bool(words) and words[0].lower() in COMMAND_KEYWORDS


def execute_command(command_string: str, session) -> bool:
    """
    Executes one line of input. Returns False if it was a KubeShell command
    that failed, True otherwise (host commands report their own errors).
    """
    if not command_string.strip():
        return True

    if not is_shell_command(command_string):
        status = run_host_command(command_string, session.context.settings.host_shell)
        logger.debug(f"Host command exited with {status}")
        return True

    try:
        parsed_data = parse_command(command_string)
    except LarkError as e:
        logger.debug(f"Parse error for '{command_string}': {e}")
        print(f"❌ Invalid command: '{command_string.strip()}'. Type 'help' for usage.")
        return False

    handler = COMMAND_HANDLERS.get(parsed_data["action"])
    if handler is None:
        print(f"❌ Command not recognized or not supported: '{command_string.strip()}'")
        return False

    try:
        handler(parsed_data, session)
        return True
    except SessionInterrupted:
        raise
    except KubeShellError as e:
        print(f"❌ {e}")
        return False
    except Exception as e:
        print(f"❌ Unexpected error while executing '{command_string.strip()}': {type(e).__name__} - {e}")
        logger.error(f"Unexpected error in handler for {parsed_data['action']}: {e}")
        logger.debug(traceback.format_exc())
        return False
