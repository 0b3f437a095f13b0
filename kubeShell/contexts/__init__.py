# kubeShell/contexts/__init__.py
from .catalog import Context, parse_contexts, find_by_name, find_by_fragment, find_by_ordinal, resolve_context
from .switch import ContextSwitcher

__all__ = [
    'Context', 'parse_contexts', 'find_by_name', 'find_by_fragment', 'find_by_ordinal',
    'resolve_context', 'ContextSwitcher',
]
