# kubeShell/__init__.py
"""
KubeShell - an interactive shell that keeps the kubectl context in the prompt
and restarts itself when the kubeconfig is edited from outside.
"""

__version__ = "0.3.0"
