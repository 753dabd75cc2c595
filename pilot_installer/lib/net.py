from __future__ import annotations

import logging
from typing import List

from .command import run_cmd
from .variants import DEFAULT_REPO_URL_TEMPLATE, DEFAULT_VARIANT, Variant, parse_variant_list

logger = logging.getLogger(__name__)


def http_get(url: str, *, timeout_s: int = 30) -> str:
    """Best-effort GET through curl. Returns "" on any failure."""

    try:
        r = run_cmd(
            ["curl", "-s", "-L", "--max-time", str(timeout_s), url],
            check=False,
        )
    except OSError as e:
        logger.warning("curl unavailable: %s", e)
        return ""
    if r.returncode != 0:
        logger.warning("GET %s failed (curl exit %s)", url, r.returncode)
        return ""
    return r.stdout


def fetch_variant_list(
    url: str,
    *,
    default: Variant = DEFAULT_VARIANT,
    repo_url_template: str = DEFAULT_REPO_URL_TEMPLATE,
) -> List[Variant]:
    """Fetch and parse the remote variant list.

    Never fails: without a usable response the result is just ``[default]``.
    """

    logger.debug("Fetching variant list from %s", url)
    document = http_get(url)
    if not document:
        logger.warning("Failed to fetch variant list, using default")
        return [default]

    variants = parse_variant_list(document, default=default, repo_url_template=repo_url_template)
    if len(variants) == 1:
        logger.warning("Variant list had no usable entries, using default")
    else:
        logger.info("Fetched %d variant(s)", len(variants) - 1)
    return variants
