# kubeShell/main.py
"""
KubeShell Main Entry Point

Parses the startup flags, checks that the shell can run here, then hands
control to the SessionSupervisor until the operator exits.
"""

import argparse
import logging
import os
import shutil
import signal
import sys
from typing import List, Mapping, Optional

from kubeShell import __version__, constants
from kubeShell.core.exceptions import StartupFatalError
from kubeShell.core.settings import SessionOptions, ShellSettings
from kubeShell.supervisor import SessionSupervisor

logger = logging.getLogger(__name__)

TERMINATION_SIGNALS = [sig for sig in (getattr(signal, "SIGTERM", None), getattr(signal, "SIGHUP", None)) if sig]


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kubeshell",
        description="Interactive shell that shows the active kubectl context in the prompt "
                    "and restarts when the kubeconfig is edited elsewhere.",
    )
    parser.add_argument("-i", dest="watch_enabled", action="store_false",
                        help="do not watch the kubeconfig for external changes")
    parser.add_argument("-p", dest="prompt_enabled", action="store_false",
                        help="start with the context hidden from the prompt")
    return parser


def configure_logging(level_name: str):
    level = getattr(logging, level_name, logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')


def check_python_version(version_info=sys.version_info):
    if tuple(version_info[:2]) < constants.MINIMUM_PYTHON:
        required = ".".join(str(part) for part in constants.MINIMUM_PYTHON)
        raise StartupFatalError(f"KubeShell requires Python {required} or newer.")


def check_not_nested(environ: Mapping[str, str]):
    if environ.get(constants.ENV_ACTIVE_GUARD):
        raise StartupFatalError("KubeShell is already running in this terminal.")


def check_required_tools():
    if shutil.which(constants.KUBECTL_BINARY) is None:
        raise StartupFatalError("'kubectl' command not found. Please ensure kubectl is installed and in your PATH.")


def install_signal_handlers(supervisor: SessionSupervisor) -> dict:
    """Routes termination signals to the supervisor. Returns the previous handlers."""
    def _handle(signum, frame):
        logger.info(f"Received signal {signum}, shutting down")
        supervisor.request_termination(signum)

    previous = {}
    for signum in TERMINATION_SIGNALS:
        previous[signum] = signal.signal(signum, _handle)
    return previous


def restore_signal_handlers(previous: dict):
    for signum, handler in previous.items():
        signal.signal(signum, handler)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for KubeShell. Returns the process exit status.
    """
    args = build_arg_parser().parse_args(argv)
    settings = ShellSettings.from_environ()
    configure_logging(settings.log_level)
    options = SessionOptions(watch_enabled=args.watch_enabled, prompt_enabled=args.prompt_enabled)

    previous_handlers = {}
    try:
        check_python_version()
        check_not_nested(os.environ)
        check_required_tools()

        supervisor = SessionSupervisor(settings, options)
        previous_handlers = install_signal_handlers(supervisor)
        logger.info(f"KubeShell {__version__} starting (watch={options.watch_enabled}, prompt={options.prompt_enabled})")
        return supervisor.run()
    except StartupFatalError as e:
        print(f"🚨 {e}")
        return e.exit_code
    finally:
        restore_signal_handlers(previous_handlers)


if __name__ == "__main__":
    sys.exit(main())
