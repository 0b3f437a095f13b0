#!/usr/bin/env python3
"""
KubeShell Command Parser Tests

The lark grammar for the interactive commands: keywords are
case-insensitive, context names are taken verbatim.
"""

import sys
import logging
from pathlib import Path

import pytest
from lark.exceptions import LarkError

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

# Configure logging for tests
logging.basicConfig(level=logging.ERROR)

from kubeShell import constants
from kubeShell.parser.parser import parse_command


@pytest.mark.parametrize("command, expected", [
    ("context", {"action": constants.ACTION_SHOW_CONTEXT}),
    ("CONTEXT", {"action": constants.ACTION_SHOW_CONTEXT}),
    ("context list", {"action": constants.ACTION_LIST_CONTEXTS}),
    ("Context LIST", {"action": constants.ACTION_LIST_CONTEXTS}),
    ("context select", {"action": constants.ACTION_SELECT_CONTEXT}),
    ("  context   Select  ", {"action": constants.ACTION_SELECT_CONTEXT}),
    ("context stag", {"action": constants.ACTION_USE_CONTEXT, "target": "stag"}),
    ("context Prod", {"action": constants.ACTION_USE_CONTEXT, "target": "Prod"}),
    ("prompt", {"action": constants.ACTION_TOGGLE_PROMPT}),
    ("prompt ON", {"action": constants.ACTION_SET_PROMPT, "value": "on"}),
    ("prompt off", {"action": constants.ACTION_SET_PROMPT, "value": "off"}),
    ("prompt maybe", {"action": constants.ACTION_SET_PROMPT, "value": "maybe"}),
    ("help", {"action": constants.ACTION_HELP, "topic": None}),
    ("help context", {"action": constants.ACTION_HELP, "topic": "context"}),
    ("HELP cd", {"action": constants.ACTION_HELP, "topic": "cd"}),
    ("exit", {"action": constants.ACTION_EXIT, "status": 0}),
    ("quit 3", {"action": constants.ACTION_EXIT, "status": 3}),
])
def test_parse_commands(command, expected):
    assert parse_command(command) == expected


def test_keyword_prefixes_are_context_names():
    """Only whole words are keywords"""
    print("🧪 Testing keyword boundaries...")
    assert parse_command("context listing") == {"action": constants.ACTION_USE_CONTEXT, "target": "listing"}
    assert parse_command("context list-prod") == {"action": constants.ACTION_USE_CONTEXT, "target": "list-prod"}
    assert parse_command("context selector") == {"action": constants.ACTION_USE_CONTEXT, "target": "selector"}


def test_context_names_with_punctuation():
    arn = "arn:aws:eks:us-east-1:123456789012:cluster/prod"
    assert parse_command(f"context {arn}")["target"] == arn
    assert parse_command("context admin@kind-dev")["target"] == "admin@kind-dev"
    assert parse_command("context gke_project_europe-west1_main")["target"] == "gke_project_europe-west1_main"


@pytest.mark.parametrize("command", ["context a b", "prompt on off", "exit now", "help a b"])
def test_invalid_commands(command):
    with pytest.raises(LarkError):
        parse_command(command)
