#!/usr/bin/env python3
"""
KubeShell Context Catalog Tests

Parsing of `kubectl config view -o yaml` output and the three lookup modes:
exact name, name fragment and 1-based ordinal.
"""

import sys
import logging
from pathlib import Path

import pytest

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

# Configure logging for tests
logging.basicConfig(level=logging.ERROR)

from kubeShell.contexts.catalog import (
    Context, parse_contexts, find_by_fragment, find_by_name, find_by_ordinal, resolve_context,
)
from kubeShell.core.exceptions import (
    KubeShellError, MalformedKubeconfigError, NotAnIntegerError, OutOfRangeError, UserInputError,
)
from kubeshell_fakes import KUBECONFIG_DUMP

CATALOG = [Context("prod", "c1"), Context("staging", "c2")]


def test_parse_kubectl_view():
    """Only the contexts section is read; clusters and users also carry name: keys"""
    print("🧪 Testing catalog parsing of kubectl config view...")
    assert parse_contexts(KUBECONFIG_DUMP) == CATALOG


def test_parse_keeps_source_order_and_trims():
    dump = (
        "contexts:\n"
        "- context:\n"
        "    cluster:   zeta-cluster   \n"
        "  name:   zeta  \n"
        "- context:\n"
        "    cluster: alpha-cluster\n"
        "  name: alpha\n"
    )
    assert parse_contexts(dump) == [Context("zeta", "zeta-cluster"), Context("alpha", "alpha-cluster")]


def test_parse_delimiter_first_has_no_empty_leading_record():
    dump = "- context:\n    cluster: c1\n  name: prod\n"
    assert parse_contexts(dump) == [Context("prod", "c1")]


def test_parse_emits_trailing_block_without_newline():
    dump = "contexts:\n- context:\n    cluster: c1\n  name: prod\n- context:\n    cluster: c2\n  name: last"
    assert [context.name for context in parse_contexts(dump)] == ["prod", "last"]


def test_parse_drops_blocks_without_name():
    dump = (
        "contexts:\n"
        "- context:\n"
        "    cluster: orphan\n"
        "    user: nobody\n"
        "- context:\n"
        "    cluster: c2\n"
        "  name: staging\n"
    )
    assert parse_contexts(dump) == [Context("staging", "c2")]


def test_parse_name_without_cluster():
    assert parse_contexts("contexts:\n- context:\n    user: admin\n  name: bare\n") == [Context("bare", "")]


def test_parse_ignores_nested_extension_names():
    """minikube adds an extension list whose entries have their own name: key"""
    dump = (
        "contexts:\n"
        "- context:\n"
        "    cluster: minikube\n"
        "    extensions:\n"
        "    - extension:\n"
        "        provider: minikube.sigs.k8s.io\n"
        "        version: v1.30.1\n"
        "      name: context_info\n"
        "    namespace: default\n"
        "    user: minikube\n"
        "  name: minikube\n"
        "current-context: minikube\n"
    )
    assert parse_contexts(dump) == [Context("minikube", "minikube")]


def test_parse_name_first_and_quoted_values():
    dump = (
        "contexts:\n"
        "- name: \"arn:aws:eks:us-east-1:123456789012:cluster/prod\"\n"
        "  context:\n"
        "    cluster: 'arn:aws:eks:us-east-1:123456789012:cluster/prod'\n"
    )
    arn = "arn:aws:eks:us-east-1:123456789012:cluster/prod"
    assert parse_contexts(dump) == [Context(arn, arn)]


def test_parse_empty_and_null_contexts():
    assert parse_contexts("") == []
    assert parse_contexts("apiVersion: v1\ncontexts: null\ncurrent-context: \"\"\n") == []


def test_parse_drops_duplicate_names():
    dump = "contexts:\n- context:\n    cluster: c1\n  name: dup\n- context:\n    cluster: c2\n  name: dup\n"
    assert parse_contexts(dump) == [Context("dup", "c1")]


def test_parse_returns_fresh_records():
    first = parse_contexts(KUBECONFIG_DUMP)
    second = parse_contexts(KUBECONFIG_DUMP)
    assert first == second
    assert first is not second


def test_parse_unescapes_quoted_names():
    """Names reach kubectl use-context exactly as YAML decodes them"""
    print("🧪 Testing quoted and escaped context names...")
    dump = (
        "contexts:\n"
        "- context:\n"
        "    cluster: c1\n"
        "  name: 'it''s-prod'\n"
        "- context:\n"
        "    cluster: \"c\\u00e9\"\n"
        "  name: \"tab\\there\"\n"
    )
    assert parse_contexts(dump) == [Context("it's-prod", "c1"), Context("tab\there", "cé")]


def test_parse_flow_style_and_numeric_names():
    dump = "contexts: [{name: 2024, context: {cluster: c1}}, {name: dev, context: null}]\n"
    assert parse_contexts(dump) == [Context("2024", "c1"), Context("dev", "")]


def test_parse_ignores_contexts_that_are_not_a_list():
    assert parse_contexts("contexts: prod\n") == []
    assert parse_contexts("contexts:\n- just-a-string\n- name: ok\n") == [Context("ok", "")]


def test_parse_malformed_dump():
    with pytest.raises(MalformedKubeconfigError) as excinfo:
        parse_contexts("contexts:\n- name: [unclosed\n")
    assert isinstance(excinfo.value, KubeShellError)


def test_find_by_fragment():
    print("🧪 Testing fragment lookup...")
    assert find_by_fragment(CATALOG, "stag") == Context("staging", "c2")
    assert find_by_fragment(CATALOG, "nope") is None
    assert find_by_fragment(CATALOG, "STAG") is None


def test_find_by_fragment_first_match_is_deterministic():
    catalog = [Context("dev-eu", "c1"), Context("dev-us", "c2"), Context("dev", "c3")]
    results = {find_by_fragment(catalog, "dev") for _ in range(10)}
    assert results == {Context("dev-eu", "c1")}


def test_resolve_context_prefers_exact_name():
    catalog = [Context("dev-eu", "c1"), Context("dev", "c3")]
    assert find_by_name(catalog, "dev") == Context("dev", "c3")
    assert resolve_context(catalog, "dev") == Context("dev", "c3")
    assert resolve_context(catalog, "eu") == Context("dev-eu", "c1")
    assert resolve_context(catalog, "missing") is None


def test_find_by_ordinal_every_position():
    catalog = [Context(f"ctx-{index}", f"cluster-{index}") for index in range(5)]
    for ordinal in range(1, len(catalog) + 1):
        assert find_by_ordinal(catalog, ordinal) == catalog[ordinal - 1]
        assert find_by_ordinal(catalog, str(ordinal)) == catalog[ordinal - 1]


@pytest.mark.parametrize("raw", [0, "0", -1, "-1", 3, "3", " 42 "])
def test_find_by_ordinal_out_of_range(raw):
    with pytest.raises(OutOfRangeError):
        find_by_ordinal(CATALOG, raw)


@pytest.mark.parametrize("raw", ["abc", "1.5", "", "0x1", "2a"])
def test_find_by_ordinal_not_an_integer(raw):
    with pytest.raises(NotAnIntegerError) as excinfo:
        find_by_ordinal(CATALOG, raw)
    assert isinstance(excinfo.value, UserInputError)


def test_find_by_ordinal_on_empty_catalog():
    with pytest.raises(OutOfRangeError) as excinfo:
        find_by_ordinal([], 1)
    assert "No contexts" in str(excinfo.value)
