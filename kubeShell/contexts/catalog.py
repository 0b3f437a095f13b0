# kubeShell/contexts/catalog.py
"""
Parses the kubeconfig dump into an ordered list of contexts and looks
contexts up by name, fragment or 1-based ordinal.

The catalog is never cached or updated in place: callers re-enumerate and
re-parse whenever they need it, because other processes own the kubeconfig.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Union

import yaml

from kubeShell.core.exceptions import MalformedKubeconfigError, NotAnIntegerError, OutOfRangeError

logger = logging.getLogger(__name__)

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Context:
    name: str
    cluster: str = ""


def _scalar(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def _context_entries(config_data: Any) -> list:
    # A full `kubectl config view` document, or just its contexts list
    if isinstance(config_data, dict):
        config_data = config_data.get("contexts")
    return config_data if isinstance(config_data, list) else []


def parse_contexts(raw_dump: str) -> List[Context]:
    """
    Parses `kubectl config view -o yaml` output into Context records in
    source order. Entries without a name are dropped, and so are later
    entries repeating an earlier name. A dump with no contexts list (empty,
    `contexts: null`) gives an empty catalog.
    """
    try:
        config_data = yaml.safe_load(raw_dump)
    except yaml.YAMLError as e:
        raise MalformedKubeconfigError(str(e))

    contexts: List[Context] = []
    seen_names = set()
    for entry in _context_entries(config_data):
        if not isinstance(entry, dict):
            continue
        name = _scalar(entry.get("name"))
        if not name:
            logger.debug(f"Ignoring context entry without a name: {entry}")
            continue
        if name in seen_names:
            logger.warning(f"Ignoring duplicate context entry '{name}'")
            continue
        details = entry.get("context")
        cluster = _scalar(details.get("cluster")) if isinstance(details, dict) else ""
        seen_names.add(name)
        contexts.append(Context(name=name, cluster=cluster))

    logger.debug(f"Parsed {len(contexts)} contexts")
    return contexts


def find_by_name(catalog: Sequence[Context], name: str) -> Optional[Context]:
    for context in catalog:
        if context.name == name:
            return context
    return None


def find_by_fragment(catalog: Sequence[Context], fragment: str) -> Optional[Context]:
    """First context, in catalog order, whose name contains `fragment` (case-sensitive)."""
    for context in catalog:
        if fragment in context.name:
            return context
    return None


def resolve_context(catalog: Sequence[Context], name_or_fragment: str) -> Optional[Context]:
    """An exact name wins over an earlier entry that merely contains it."""
    return find_by_name(catalog, name_or_fragment) or find_by_fragment(catalog, name_or_fragment)


def find_by_ordinal(catalog: Sequence[Context], raw: Union[str, int]) -> Context:
    """1-based lookup in display order."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        ordinal = raw
    else:
        token = str(raw).strip()
        if not _INTEGER_PATTERN.fullmatch(token):
            raise NotAnIntegerError(str(raw))
        ordinal = int(token)

    if ordinal < 1 or ordinal > len(catalog):
        raise OutOfRangeError(ordinal, len(catalog))
    return catalog[ordinal - 1]
