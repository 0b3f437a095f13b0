# kubeShell/core/settings.py
"""
Environment-derived settings, read once per process and handed to each new
session as an immutable snapshot.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

from kubernetes.config.kube_config import ENV_KUBECONFIG_PATH_SEPARATOR

from kubeShell import constants

logger = logging.getLogger(__name__)

DEFAULT_KUBECONFIG = "~/.kube/config"


def resolve_kubeconfig_paths(raw: Optional[str]) -> Tuple[Path, ...]:
    """
    Splits a KUBECONFIG value into absolute paths, dropping empty entries and
    duplicates while keeping their order. Falls back to ~/.kube/config.
    """
    entries = [entry for entry in (raw or "").split(ENV_KUBECONFIG_PATH_SEPARATOR) if entry.strip()]
    if not entries:
        entries = [DEFAULT_KUBECONFIG]

    paths = []
    for entry in entries:
        path = Path(os.path.expandvars(entry.strip())).expanduser().absolute()
        if path not in paths:
            paths.append(path)
    return tuple(paths)


@dataclass(frozen=True)
class ShellSettings:
    kubeconfig_paths: Tuple[Path, ...]
    base_prompt: str = constants.DEFAULT_BASE_PROMPT
    settle_seconds: float = constants.DEFAULT_SETTLE_SECONDS
    host_shell: str = constants.DEFAULT_HOST_SHELL
    log_level: str = constants.DEFAULT_LOG_LEVEL

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "ShellSettings":
        environ = os.environ if environ is None else environ

        settle_raw = environ.get(constants.ENV_SETTLE_SECONDS)
        settle_seconds = constants.DEFAULT_SETTLE_SECONDS
        if settle_raw:
            try:
                settle_seconds = max(0.0, float(settle_raw))
            except ValueError:
                logger.warning(f"Ignoring invalid {constants.ENV_SETTLE_SECONDS}={settle_raw!r}")

        return cls(
            kubeconfig_paths=resolve_kubeconfig_paths(environ.get(constants.ENV_KUBECONFIG)),
            base_prompt=environ.get(constants.ENV_BASE_PROMPT) or constants.DEFAULT_BASE_PROMPT,
            settle_seconds=settle_seconds,
            host_shell=environ.get(constants.ENV_SHELL) or constants.DEFAULT_HOST_SHELL,
            log_level=(environ.get(constants.ENV_LOG_LEVEL) or constants.DEFAULT_LOG_LEVEL).upper(),
        )


@dataclass(frozen=True)
class SessionOptions:
    """Startup flags: -i disables the watcher, -p starts with the prompt off."""
    watch_enabled: bool = True
    prompt_enabled: bool = True
