# kubeShell/parser/transformer.py
from lark import Transformer, v_args, Token
from kubeShell import constants


class KubeShellTransformer(Transformer):
    # --- Terminals ---
    def ARG(self, token: Token) -> str:
        return str(token.value)

    def STATUS(self, token: Token) -> int:
        return int(token.value)

    # Keywords are case-insensitive; canonicalize them
    def CONTEXT_KW(self, token: Token): return token.value.upper()
    def LIST_KW(self, token: Token): return token.value.upper()
    def SELECT_KW(self, token: Token): return token.value.upper()
    def PROMPT_KW(self, token: Token): return token.value.upper()
    def HELP_KW(self, token: Token): return token.value.upper()
    def EXIT_KW(self, token: Token): return token.value.upper()

    def command(self, items: list):
        return items[0]

    # --- context ---
    @v_args(inline=True)
    def show_context(self, context_kw):
        return {"action": constants.ACTION_SHOW_CONTEXT}

    @v_args(inline=True)
    def list_contexts(self, context_kw, list_kw):
        return {"action": constants.ACTION_LIST_CONTEXTS}

    @v_args(inline=True)
    def select_context(self, context_kw, select_kw):
        return {"action": constants.ACTION_SELECT_CONTEXT}

    @v_args(inline=True)
    def use_context(self, context_kw, name_or_fragment: str):
        # Context names are case-sensitive, unlike the keywords
        return {"action": constants.ACTION_USE_CONTEXT, "target": name_or_fragment}

    # --- prompt ---
    @v_args(inline=True)
    def toggle_prompt(self, prompt_kw):
        return {"action": constants.ACTION_TOGGLE_PROMPT}

    @v_args(inline=True)
    def set_prompt(self, prompt_kw, value: str):
        return {"action": constants.ACTION_SET_PROMPT, "value": value.lower()}

    # --- help / exit ---
    @v_args(inline=True)
    def help_cmd(self, help_kw, topic):
        return {"action": constants.ACTION_HELP, "topic": topic}

    @v_args(inline=True)
    def exit_cmd(self, exit_kw, status):
        return {"action": constants.ACTION_EXIT, "status": status if status is not None else constants.EXIT_OK}
