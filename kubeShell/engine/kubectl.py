# kubeShell/engine/kubectl.py
"""
Reads and writes the kubeconfig through kubectl.

Nothing here caches: every call asks kubectl again, since the kubeconfig can
be edited by other processes at any time.
"""

import logging
import subprocess
from typing import List

from kubeShell.constants import KUBECTL_BINARY
from kubeShell.core.exceptions import (
    KubectlError, KubectlNotFoundError, NoActiveContextError, UnknownContextError,
)

logger = logging.getLogger(__name__)

_NO_CURRENT_CONTEXT_MARKERS = ("current-context is not set",)
_UNKNOWN_CONTEXT_MARKERS = ("no context exists", "no such context")


def run_kubectl(args: List[str]) -> subprocess.CompletedProcess:
    """Runs kubectl with `args`. Raises KubectlNotFoundError if it is not installed."""
    command = [KUBECTL_BINARY] + list(args)
    logger.debug(f"Running: {' '.join(command)}")
    try:
        return subprocess.run(command, capture_output=True, text=True, check=False)
    except FileNotFoundError:
        raise KubectlNotFoundError()


def read_current_context() -> str:
    """Returns the name of the active context."""
    result = run_kubectl(["config", "current-context"])
    stderr = result.stderr.strip()
    if result.returncode != 0:
        if any(marker in stderr for marker in _NO_CURRENT_CONTEXT_MARKERS):
            raise NoActiveContextError(stderr)
        raise KubectlError(f"Failed to read the current context:\n{stderr}", stderr)

    name = result.stdout.strip()
    if not name:
        raise NoActiveContextError(stderr)
    return name


def enumerate_contexts() -> str:
    """Returns the raw kubeconfig dump that parse_contexts understands."""
    result = run_kubectl(["config", "view", "-o", "yaml"])
    if result.returncode != 0:
        stderr = result.stderr.strip()
        raise KubectlError(f"Failed to read the kubeconfig:\n{stderr}", stderr)
    return result.stdout


def use_context(name: str):
    """Switches the kubeconfig's current-context. Does not confirm the result."""
    result = run_kubectl(["config", "use-context", name])
    if result.returncode != 0:
        stderr = result.stderr.strip()
        if any(marker in stderr for marker in _UNKNOWN_CONTEXT_MARKERS):
            raise UnknownContextError(name, stderr)
        raise KubectlError(f"Failed to switch to context '{name}':\n{stderr}", stderr)
    logger.info(f"kubectl switched context to {name}")
