# kubeShell/core/exceptions.py
"""
Error taxonomy for KubeShell.

Startup failures end the process, user input errors are reported at the
prompt, and watcher failures only disable change detection.
"""

from kubeShell.constants import EXIT_STARTUP_FATAL


class KubeShellError(Exception):
    """Base class for every error KubeShell reports to the operator."""
    pass


class StartupFatalError(KubeShellError):
    """Raised before any session exists; the process exits with `exit_code`."""

    def __init__(self, message: str, exit_code: int = EXIT_STARTUP_FATAL):
        super().__init__(message)
        self.exit_code = exit_code


class UserInputError(KubeShellError):
    """Bad input at the prompt. Reported inline, no state change."""
    pass


class OutOfRangeError(UserInputError):
    def __init__(self, ordinal: int, size: int):
        if size:
            message = f"Invalid selection {ordinal}. Please enter a number between 1 and {size}."
        else:
            message = "No contexts available to select."
        super().__init__(message)
        self.ordinal = ordinal
        self.size = size


class NotAnIntegerError(UserInputError):
    def __init__(self, raw: str):
        super().__init__(f"Invalid input '{raw}'. Please enter a number.")
        self.raw = raw


class UnknownSubcommandError(UserInputError):
    def __init__(self, command: str, argument: str, expected: str):
        super().__init__(f"Unknown argument '{argument}' for '{command}'. Expected: {expected}")
        self.command = command
        self.argument = argument


class KubectlError(KubeShellError):
    """kubectl ran but reported a failure."""

    def __init__(self, message: str, stderr: str = ""):
        super().__init__(message)
        self.stderr = stderr


class KubectlNotFoundError(KubectlError):
    def __init__(self):
        super().__init__("'kubectl' command not found. Please ensure kubectl is installed and in your PATH.")


class NoActiveContextError(KubectlError):
    def __init__(self, stderr: str = ""):
        super().__init__("No current context is set in the kubeconfig.", stderr)


class UnknownContextError(KubectlError):
    def __init__(self, name: str, stderr: str = ""):
        super().__init__(f"Context '{name}' not found in the kubeconfig.", stderr)
        self.name = name


class MalformedKubeconfigError(KubeShellError):
    def __init__(self, detail: str):
        super().__init__(f"Could not parse the kubeconfig dump: {detail}")


class WatcherDegradedError(KubeShellError):
    """The file-change facility is unavailable; the session keeps running."""
    pass


class SessionInterrupted(Exception):
    """
    Control flow, not an error: raised out of a blocked prompt when the
    supervisor needs the session to end (restart or termination).
    """
    pass
