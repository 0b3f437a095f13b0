#!/usr/bin/env python3
"""
Shared test doubles: an in-memory kubectl and a scripted line reader, so the
session and supervisor can be exercised without a cluster or a terminal.
"""

from kubeShell.core.context import SessionContext
from kubeShell.core.exceptions import NoActiveContextError, SessionInterrupted, UnknownContextError
from kubeShell.core.settings import SessionOptions, ShellSettings
from kubeShell.contexts.switch import ContextSwitcher
from kubeShell.shell import InteractiveSession
from kubeShell.watch.watcher import SelfChangeFlag

KUBECONFIG_DUMP = """apiVersion: v1
clusters:
- cluster:
    server: https://prod.example.com
  name: c1
- cluster:
    server: https://staging.example.com
  name: c2
contexts:
- context:
    cluster: c1
    user: admin
  name: prod
- context:
    cluster: c2
    namespace: default
    user: admin
  name: staging
current-context: prod
kind: Config
preferences: {}
users:
- name: admin
  user:
    token: REDACTED
"""


class FakeKubectl:
    """Mimics `kubectl config` over an in-memory list of (name, cluster)."""

    def __init__(self, contexts=(("prod", "c1"), ("staging", "c2")), current="prod"):
        self.contexts = list(contexts)
        self.current = current
        self.switch_calls = []

    def enumerate(self) -> str:
        lines = ["apiVersion: v1", "contexts:"]
        for name, cluster in self.contexts:
            lines += ["- context:", f"    cluster: {cluster}", "    user: admin", f"  name: {name}"]
        lines.append(f"current-context: {self.current or ''}")
        return "\n".join(lines) + "\n"

    def use_context(self, name: str):
        self.switch_calls.append(name)
        if name not in [existing for existing, _ in self.contexts]:
            raise UnknownContextError(name)
        self.current = name

    def read_current(self) -> str:
        if not self.current:
            raise NoActiveContextError()
        return self.current


class ScriptedReader:
    """Returns queued lines, then raises EOFError like Ctrl-D."""

    def __init__(self, lines=()):
        self.lines = list(lines)
        self.prompts = []
        self.interrupted = False
        self.on_read = None

    def reset(self):
        self.interrupted = False

    def read(self, message: str) -> str:
        self.prompts.append(message)
        if self.on_read is not None:
            self.on_read(self)
        if self.interrupted:
            raise SessionInterrupted()
        if not self.lines:
            raise EOFError()
        return self.lines.pop(0)

    def interrupt(self):
        self.interrupted = True


def make_settings(**overrides) -> ShellSettings:
    values = dict(kubeconfig_paths=(), base_prompt="$ ", settle_seconds=0.0, host_shell="/bin/sh")
    values.update(overrides)
    return ShellSettings(**values)


def make_session(kubectl: FakeKubectl, lines=(), prompt_enabled=True):
    flag = SelfChangeFlag()
    context = SessionContext(make_settings(), SessionOptions(prompt_enabled=prompt_enabled), kubectl.read_current())
    switcher = ContextSwitcher(flag, mutate=kubectl.use_context, read_current=kubectl.read_current)
    reader = ScriptedReader(lines)
    session = InteractiveSession(context, switcher, reader, enumerate_contexts=kubectl.enumerate)
    return session, reader, flag
