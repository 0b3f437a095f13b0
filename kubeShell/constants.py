# kubeShell/constants.py
"""
This module defines constants used throughout the KubeShell application.
"""

# Actions produced by the command parser
ACTION_SHOW_CONTEXT = "SHOW_CONTEXT"
ACTION_LIST_CONTEXTS = "LIST_CONTEXTS"
ACTION_SELECT_CONTEXT = "SELECT_CONTEXT"
ACTION_USE_CONTEXT = "USE_CONTEXT"
ACTION_TOGGLE_PROMPT = "TOGGLE_PROMPT"
ACTION_SET_PROMPT = "SET_PROMPT"
ACTION_HELP = "HELP"
ACTION_EXIT = "EXIT"

# Help topics handled by KubeShell itself; anything else goes to the host shell
HELP_TOPIC_CONTEXT = "context"
HELP_TOPIC_PROMPT = "prompt"

# Environment variables
ENV_KUBECONFIG = "KUBECONFIG"
ENV_ACTIVE_GUARD = "KUBESHELL_ACTIVE"
ENV_BASE_PROMPT = "KUBESHELL_BASE_PROMPT"
ENV_SETTLE_SECONDS = "KUBESHELL_SETTLE_SECONDS"
ENV_LOG_LEVEL = "KUBESHELL_LOG_LEVEL"
ENV_SHELL = "SHELL"

# Default Values
DEFAULT_BASE_PROMPT = "kube$ "
DEFAULT_SETTLE_SECONDS = 0.1
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_HOST_SHELL = "/bin/sh"
KUBECTL_BINARY = "kubectl"
MINIMUM_PYTHON = (3, 9)

# Seconds to wait for the watcher thread on teardown
WATCHER_JOIN_TIMEOUT = 2.0

# Seconds a host command gets to exit after SIGTERM before it is killed
HOST_COMMAND_KILL_TIMEOUT = 2.0

# Exit codes
EXIT_OK = 0
EXIT_STARTUP_FATAL = 1
