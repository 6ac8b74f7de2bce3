"""Parse one OpenAPI v3 operation into a ParseResult.

The operation's four type groups (path variables, query, request body,
response body) are resolved into independent collectors, then merged and
deduplicated by interface name in that order.
"""

from __future__ import annotations

from typing import Any

from .loader import get_paths, get_schemas
from .models import Interface, ParseResult
from .naming import (
    extract_path_vars,
    parse_operation_id,
    path_var_type_name,
    query_type_name,
)
from .schema_parser import InterfaceCollector, resolve_parameters, resolve_schema

FORM_DATA_MEDIA_TYPE = "multipart/form-data"

REQUEST_BODY_NAME = "RequestBody"
RESPONSE_BODY_NAME = "ResponseBody"


def _first_content(container: dict[str, Any] | None) -> tuple[str | None, dict[str, Any]]:
    """Return the first declared media type and its schema."""
    content = (container or {}).get("content") or {}
    for media_type, media in content.items():
        return media_type, (media or {}).get("schema") or {}
    return None, {}


def _success_response(operation: dict[str, Any]) -> dict[str, Any] | None:
    responses = operation.get("responses") or {}
    return responses.get("200") or responses.get(200)


def _deduplicate(interfaces: list[Interface]) -> list[Interface]:
    """Drop interfaces whose name was already seen, keeping the first."""
    seen: set[str] = set()
    unique = []
    for interface in interfaces:
        if interface.name in seen:
            continue
        seen.add(interface.name)
        unique.append(interface)
    return unique


def _is_array_of_ref(schema: dict[str, Any], name: str | None) -> bool:
    return name is not None and schema.get("type") == "array" and bool((schema.get("items") or {}).get("$ref"))


def _registered(collector: InterfaceCollector, name: str) -> str | None:
    return name if name in collector else None


def parse_operation(document: dict[str, Any], path: str, method: str) -> ParseResult | None:
    """Parse the operation documented at ``path`` / ``method``.

    Returns None when the document has no such operation.
    """
    method = method.lower()
    operation = (get_paths(document).get(path) or {}).get(method)
    if not operation:
        return None

    definitions = get_schemas(document)
    name = parse_operation_id(operation.get("operationId") or "")
    path_vars = extract_path_vars(path)
    parameters = operation.get("parameters") or []

    path_var_name = path_var_type_name(name)
    path_types = resolve_parameters(
        path_var_name,
        [p for p in parameters if p.get("in") == "path" or p.get("name") in path_vars],
        definitions,
    )

    query_name = query_type_name(name)
    query_types = resolve_parameters(
        query_name,
        [p for p in parameters if p.get("in") == "query" and p.get("name") not in path_vars],
        definitions,
    )

    media_type, body_schema = _first_content(operation.get("requestBody"))
    body_types, body = resolve_schema(body_schema, definitions, REQUEST_BODY_NAME)

    _, res_schema = _first_content(_success_response(operation))
    res_types, res = resolve_schema(res_schema, definitions, RESPONSE_BODY_NAME)

    collectors = (path_types, query_types, body_types, res_types)
    summary = operation.get("summary")
    description = operation.get("description")

    return ParseResult(
        name=name,
        path=path,
        method=method,
        comment=", ".join(part for part in (summary, description) if part),
        is_form_data=media_type == FORM_DATA_MEDIA_TYPE,
        path_var=_registered(path_types, path_var_name),
        query=_registered(query_types, query_name),
        body=body,
        res=res,
        body_is_array=_is_array_of_ref(body_schema, body),
        res_is_array=_is_array_of_ref(res_schema, res),
        interfaces=_deduplicate([i for collector in collectors for i in collector]),
        notices=[n for collector in collectors for n in collector.notices],
    )
