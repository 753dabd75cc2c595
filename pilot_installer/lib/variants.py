from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Variant:
    name: str
    source_url: str


DEFAULT_VARIANT = Variant("openpilot (official)", "https://github.com/commaai/openpilot.git")
DEFAULT_REPO_URL_TEMPLATE = "https://github.com/{name}/openpilot.git"

_NAME_RE = re.compile(r'"name"\s*:\s*"([^"]*)"')
_URL_RE = re.compile(r'"url"\s*:\s*"([^"]*)"')


def resolve_source_url(name: str, url: str, *, repo_url_template: str = DEFAULT_REPO_URL_TEMPLATE) -> str:
    """Map a listed URL to something git can clone.

    Web installer links (``http...`` without ``.git``) are rewritten to a
    repository URL built from the variant name. This is a guess: it is wrong
    whenever the name is not the owner of an upstream repository.
    """
    if url.startswith("http") and ".git" not in url:
        return repo_url_template.format(name=name)
    return url


def _records_from_json(data: Any) -> List[tuple[str, str]]:
    if isinstance(data, dict):
        # Accept {"forks": [...]} style wrappers.
        data = next((v for v in data.values() if isinstance(v, list)), [])
    if not isinstance(data, list):
        return []

    out: List[tuple[str, str]] = []
    for item in data:
        if not isinstance(item, dict):
            break
        name = item.get("name")
        url = item.get("url")
        if not isinstance(name, str) or not isinstance(url, str):
            break
        out.append((name, url))
    return out


def _records_from_scan(document: str) -> List[tuple[str, str]]:
    out: List[tuple[str, str]] = []
    pos = 0
    while True:
        m_name = _NAME_RE.search(document, pos)
        if m_name is None:
            break
        m_url = _URL_RE.search(document, m_name.end())
        if m_url is None:
            break
        out.append((m_name.group(1), m_url.group(1)))
        pos = m_url.end()
    return out


def parse_variant_list(
    document: Optional[str],
    *,
    default: Variant = DEFAULT_VARIANT,
    repo_url_template: str = DEFAULT_REPO_URL_TEMPLATE,
) -> List[Variant]:
    """Parse a remote variant list; the default variant always comes first.

    Expected shape is ``[{"name": ..., "url": ...}, ...]``. Parsing stops at the
    first malformed record and keeps everything before it. Documents that are
    not valid JSON (e.g. a truncated download) are scanned for name/url pairs
    instead.
    """

    variants = [default]
    if not document or not document.strip():
        return variants

    try:
        records = _records_from_json(json.loads(document))
    except (ValueError, RecursionError):
        records = _records_from_scan(document)
        if records:
            logger.info("Variant list is not valid JSON; recovered %d record(s)", len(records))

    for name, url in records:
        variants.append(Variant(name, resolve_source_url(name, url, repo_url_template=repo_url_template)))
    return variants
