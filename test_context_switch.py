#!/usr/bin/env python3
"""
KubeShell Context Switch Tests

The self-change flag must be raised before kubectl writes, and the
active context must come from a re-read, not from the request.
"""

import sys
import io
import logging
import threading
from pathlib import Path
from unittest.mock import patch

import pytest

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

# Configure logging for tests
logging.basicConfig(level=logging.ERROR)

from kubeShell.contexts.switch import ContextSwitcher
from kubeShell.core.exceptions import UnknownContextError
from kubeShell.watch.watcher import SelfChangeFlag
from kubeshell_fakes import FakeKubectl


def test_flag_is_set_before_mutation():
    print("🧪 Testing switch ordering...")
    kubectl = FakeKubectl()
    flag = SelfChangeFlag()
    observed = []

    def mutate(name):
        observed.append(flag.is_set())
        kubectl.use_context(name)

    confirmed_names = []
    switcher = ContextSwitcher(flag, mutate=mutate, read_current=kubectl.read_current)
    assert switcher.switch_to("staging", on_confirmed=confirmed_names.append) == "staging"
    assert observed == [True]
    assert confirmed_names == ["staging"]
    assert kubectl.read_current() == "staging"
    # Still pending: only the watcher clears it
    assert flag.is_set()
    assert flag.consume()
    # The switch has returned, so with no tail the next event is external
    assert not flag.consume()


def test_failed_switch_clears_flag():
    kubectl = FakeKubectl()
    flag = SelfChangeFlag()
    confirmed_names = []
    switcher = ContextSwitcher(flag, mutate=kubectl.use_context, read_current=kubectl.read_current)
    with pytest.raises(UnknownContextError):
        switcher.switch_to("nope", on_confirmed=confirmed_names.append)
    assert not flag.is_set()
    assert confirmed_names == []
    assert kubectl.current == "prod"


def test_switch_reports_concurrently_changed_context():
    """Another process switched right after us; the re-read value wins"""
    kubectl = FakeKubectl(contexts=[("prod", "c1"), ("staging", "c2"), ("dev", "c3")])
    flag = SelfChangeFlag()

    def read_current():
        return "dev"

    switcher = ContextSwitcher(flag, mutate=kubectl.use_context, read_current=read_current)
    with patch("sys.stdout", new_callable=io.StringIO) as stdout:
        assert switcher.switch_to("staging") == "dev"
    assert "'dev'" in stdout.getvalue()


def test_switches_are_serialized():
    kubectl = FakeKubectl()
    flag = SelfChangeFlag()
    inside = threading.Event()
    release = threading.Event()
    order = []

    def slow_mutate(name):
        order.append(f"start {name}")
        if name == "staging":
            inside.set()
            release.wait(5)
        kubectl.use_context(name)
        order.append(f"end {name}")

    switcher = ContextSwitcher(flag, mutate=slow_mutate, read_current=kubectl.read_current)
    worker = threading.Thread(target=switcher.switch_to, args=("staging",))
    worker.start()
    assert inside.wait(5)
    second = threading.Thread(target=switcher.switch_to, args=("prod",))
    second.start()
    release.set()
    worker.join(5)
    second.join(5)
    assert order == ["start staging", "end staging", "start prod", "end prod"]
    assert kubectl.current == "prod"


def test_events_during_switch_are_attributed_to_it():
    kubectl = FakeKubectl()
    flag = SelfChangeFlag()
    attributed = []

    def noisy_mutate(name):
        # kubectl writing the file twice
        attributed.append(flag.consume())
        attributed.append(flag.consume())
        kubectl.use_context(name)

    switcher = ContextSwitcher(flag, mutate=noisy_mutate, read_current=kubectl.read_current)
    switcher.switch_to("staging")
    assert attributed == [True, True]
    assert not flag.consume()
