# kubeShell/contexts/cli_handlers.py
"""
Handlers for the `context` and `prompt` commands. Each receives the parsed
command dict and the running InteractiveSession.
"""

import logging
from typing import List

from tabulate import tabulate

from kubeShell.contexts.catalog import Context, parse_contexts, find_by_ordinal, resolve_context
from kubeShell.core.exceptions import UnknownSubcommandError, UserInputError

logger = logging.getLogger(__name__)

PROMPT_VALUES = {"on": True, "off": False}


def load_catalog(session) -> List[Context]:
    """Always a fresh enumeration; the kubeconfig may have changed since the last one."""
    return parse_contexts(session.enumerate_contexts())


def format_catalog(catalog: List[Context], active_context: str) -> str:
    rows = [
        [index, "*" if context.name == active_context else "", context.name, context.cluster]
        for index, context in enumerate(catalog, start=1)
    ]
    return tabulate(rows, headers=["#", "", "NAME", "CLUSTER"], tablefmt="plain")


def _print_catalog(catalog: List[Context], active_context: str) -> bool:
    if not catalog:
        print("ℹ️ No contexts found in the kubeconfig.")
        return False
    print(format_catalog(catalog, active_context))
    return True


def _switch(session, context: Context):
    confirmed = session.switcher.switch_to(context.name, on_confirmed=session.context.set_active_context)
    print(f"✅ Switched kubectl context to: {confirmed}")


def handle_show_context(parsed_data: dict, session):
    active = session.context.active_context
    if active:
        print(active)
    else:
        print("ℹ️ No active context.")


def handle_list_contexts(parsed_data: dict, session):
    _print_catalog(load_catalog(session), session.context.active_context)


def handle_select_context(parsed_data: dict, session):
    catalog = load_catalog(session)
    if not _print_catalog(catalog, session.context.active_context):
        return
    try:
        selection_input = session.reader.read("➡️ Select a context by number: ")
    except EOFError:
        raise UserInputError("Selection cancelled.")
    selected = find_by_ordinal(catalog, selection_input)
    _switch(session, selected)


def handle_use_context(parsed_data: dict, session):
    target = parsed_data["target"]
    selected = resolve_context(load_catalog(session), target)
    if selected is None:
        logger.info(f"No context matches '{target}'; nothing switched")
        return
    _switch(session, selected)


def handle_toggle_prompt(parsed_data: dict, session):
    session.context.toggle_prompt()


def handle_set_prompt(parsed_data: dict, session):
    value = parsed_data["value"]
    if value not in PROMPT_VALUES:
        raise UnknownSubcommandError("prompt", value, "on, off")
    session.context.set_prompt_enabled(PROMPT_VALUES[value])
