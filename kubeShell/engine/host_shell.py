# kubeShell/engine/host_shell.py
"""
Runs lines that are not KubeShell commands in the host shell, so kubectl and
everything else keeps working inside the session.

Running children are tracked so a termination signal can stop them instead
of waiting for something like `kubectl logs -f` to end on its own.
"""

import logging
import os
import subprocess
import threading
from typing import List, Mapping, Optional, Set

from kubeShell.constants import ENV_ACTIVE_GUARD, HOST_COMMAND_KILL_TIMEOUT

logger = logging.getLogger(__name__)

# Reentrant: the signal handler runs on the main thread, which may hold it
_children_lock = threading.RLock()
_running_children: Set[subprocess.Popen] = set()


def child_environment(environ: Optional[Mapping[str, str]] = None) -> dict:
    """The environment for child processes, marked so a nested kubeshell refuses to start."""
    env = dict(os.environ if environ is None else environ)
    env[ENV_ACTIVE_GUARD] = "1"
    return env


def run_host_command(command_line: str, host_shell: str) -> int:
    """Runs `command_line` with `host_shell -c` and returns its exit status."""
    logger.debug(f"Host shell ({host_shell}): {command_line}")
    try:
        process = subprocess.Popen([host_shell, "-c", command_line], env=child_environment())
    except FileNotFoundError:
        print(f"❌ Host shell '{host_shell}' not found. Set SHELL to a valid shell.")
        return 127

    with _children_lock:
        _running_children.add(process)
    try:
        return process.wait()
    except BaseException:
        # Ctrl-C while waiting: do not leave the child behind
        process.kill()
        process.wait()
        raise
    finally:
        with _children_lock:
            _running_children.discard(process)


def running_host_commands() -> List[subprocess.Popen]:
    with _children_lock:
        return [process for process in _running_children if process.returncode is None]


def terminate_host_commands(kill_after: float = HOST_COMMAND_KILL_TIMEOUT) -> int:
    """
    Sends SIGTERM to every running host command and SIGKILL to those still
    alive `kill_after` seconds later. Returns immediately, so it is safe to
    call from a signal handler while the main thread waits on the child.
    """
    children = running_host_commands()
    for process in children:
        logger.info(f"Terminating host command (pid {process.pid})")
        process.terminate()
    if children:
        timer = threading.Timer(kill_after, _kill_survivors, args=(children,))
        timer.daemon = True
        timer.start()
    return len(children)


def _kill_survivors(children: List[subprocess.Popen]):
    for process in children:
        if process.returncode is None:
            logger.warning(f"Host command (pid {process.pid}) ignored SIGTERM, killing it")
            process.kill()
