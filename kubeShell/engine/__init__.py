# kubeShell/engine/__init__.py
"""
Thin wrappers around the kubectl binary.
"""

from .kubectl import run_kubectl, read_current_context, enumerate_contexts, use_context

__all__ = ['run_kubectl', 'read_current_context', 'enumerate_contexts', 'use_context']
