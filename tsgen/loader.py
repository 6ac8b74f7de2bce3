"""Load an OpenAPI v3 document from a JSON file or an http(s) URL.

Also exposes the parts of the document the parser reads: paths,
component schemas and the documented operations.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import httpx

logger = logging.getLogger(__name__)

HTTP_TIMEOUT = 30.0

HTTP_METHODS = ("get", "post", "put", "delete", "patch")


def is_url(source: str | Path) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def load_document(
    source: str | Path,
    http_client: httpx.Client | None = None,
) -> dict[str, Any]:
    """Load the OpenAPI document from disk or over HTTP."""
    if is_url(source):
        logger.info("Fetching %s", source)
        if http_client is not None:
            response = http_client.get(str(source))
        else:
            response = httpx.get(str(source), timeout=HTTP_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
        return response.json()

    logger.info("Reading %s", source)
    with open(source, encoding="utf-8") as f:
        return json.load(f)


def get_paths(document: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the document."""
    return document.get("paths") or {}


def get_schemas(document: dict[str, Any]) -> dict[str, Any]:
    """Extract component schemas from the document."""
    return (document.get("components") or {}).get("schemas") or {}


def iter_operations(
    document: dict[str, Any],
    path_prefix: str | None = None,
) -> Iterator[tuple[str, str]]:
    """Yield (path, method) for every documented operation, in sorted path order."""
    for path, path_item in sorted(get_paths(document).items()):
        if path_prefix and not path.startswith(path_prefix):
            continue
        for method in HTTP_METHODS:
            if method in (path_item or {}):
                yield path, method
