# kubeShell/parser/parser.py
from lark import Lark
from kubeShell.parser.transformer import KubeShellTransformer

shell_grammar = r"""
    ?start: command

    command: context_command
           | prompt_command
           | help_command
           | exit_command

    // --- Keywords ---
    // A keyword only matches as a whole word, so "context listing" still
    // reaches use_context with ARG "listing".
    CONTEXT_KW.2: /context(?!\S)/i
    LIST_KW.2: /list(?!\S)/i
    SELECT_KW.2: /select(?!\S)/i
    PROMPT_KW.2: /prompt(?!\S)/i
    HELP_KW.2: /help(?!\S)/i
    EXIT_KW.2: /(?:exit|quit)(?!\S)/i

    // --- context ---
    context_command: CONTEXT_KW            -> show_context
                   | CONTEXT_KW LIST_KW    -> list_contexts
                   | CONTEXT_KW SELECT_KW  -> select_context
                   | CONTEXT_KW ARG        -> use_context

    // --- prompt ---
    prompt_command: PROMPT_KW              -> toggle_prompt
                  | PROMPT_KW ARG          -> set_prompt

    help_command: HELP_KW [ARG]            -> help_cmd
    exit_command: EXIT_KW [STATUS]         -> exit_cmd

    // --- Shared terminals ---
    STATUS: /[0-9]+(?!\S)/
    // Context names may contain ':', '/', '@' and the like (EKS ARNs, GKE names)
    ARG: /\S+/

    %import common.WS
    %ignore WS
"""

kube_shell_parser = Lark(shell_grammar, parser="lalr", transformer=KubeShellTransformer(), maybe_placeholders=True)


def parse_command(command_line: str) -> dict:
    return kube_shell_parser.parse(command_line.strip())
