"""Build the jinja2 template context from an OpenAPI v3 document.

Parses every selected operation, makes the generated function names
unique, names each operation's own interfaces after its function, and
merges all interfaces into one list.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .loader import iter_operations
from .models import Interface, Notice, ParseResult
from .naming import (
    extract_path_vars,
    is_identifier,
    path_var_type_name,
    query_type_name,
    to_first_upper_case,
    to_function_name,
)
from .parser import REQUEST_BODY_NAME, RESPONSE_BODY_NAME, parse_operation

logger = logging.getLogger(__name__)


def _qualify_operation_types(result: ParseResult, function_name: str) -> None:
    """Name the operation's synthetic and inline interfaces after its function.

    Path variable and query types, and inline RequestBody/ResponseBody
    interfaces, belong to one operation only; operations whose ids reduce to
    the same base name would otherwise share them.
    """
    renames: dict[str, str] = {}
    if result.path_var:
        renames[result.path_var] = path_var_type_name(function_name)
    if result.query:
        renames[result.query] = query_type_name(function_name)
    for default_name in (REQUEST_BODY_NAME, RESPONSE_BODY_NAME):
        if default_name in (result.body, result.res):
            renames[default_name] = f"{to_first_upper_case(function_name)}{default_name}"

    for interface in result.interfaces:
        interface.name = renames.get(interface.name, interface.name)
    result.path_var = renames.get(result.path_var, result.path_var)
    result.query = renames.get(result.query, result.query)
    result.body = renames.get(result.body, result.body)
    result.res = renames.get(result.res, result.res)


def url_template(path: str, typed_vars: Iterable[str]) -> str:
    """Turn ``/pets/{id}`` into the TypeScript template ``/pets/${pathVar.id}``.

    Only variables typed on the path variable interface are interpolated;
    the others are left as written and logged.
    """
    typed = set(typed_vars)
    for var in extract_path_vars(path):
        if var not in typed:
            logger.warning("path variable %s of %s has no type and is not interpolated", var, path)
            continue
        accessor = f"pathVar.{var}" if is_identifier(var) else f"pathVar[{var!r}]"
        path = path.replace(f"{{{var}}}", f"${{{accessor}}}")
    return path


def _deduplicate_function_names(operations: list[dict[str, Any]]) -> None:
    """Ensure all function names are unique by appending method suffix if needed."""
    seen: dict[str, int] = {}
    for operation in operations:
        name = operation["name"]
        if name in seen:
            seen[name] += 1
            operation["name"] = f"{name}{to_first_upper_case(operation['method'])}"
        else:
            seen[name] = 1

    final_seen: dict[str, int] = {}
    for operation in operations:
        name = operation["name"]
        if name in final_seen:
            final_seen[name] += 1
            operation["name"] = f"{name}{final_seen[name]}"
        else:
            final_seen[name] = 1


def _merge_interfaces(results: list[ParseResult]) -> list[Interface]:
    """Merge the interfaces of all results; the first definition of a name wins."""
    merged: dict[str, Interface] = {}
    for result in results:
        for interface in result.interfaces:
            existing = merged.get(interface.name)
            if existing is None:
                merged[interface.name] = interface
            elif existing != interface:
                logger.warning(
                    "interface %s of %s conflicts with an earlier definition, keeping the first",
                    interface.name,
                    result.name,
                )
    return list(merged.values())


def _array_type(name: str | None, is_array: bool) -> str | None:
    return f"{name}[]" if name and is_array else name


def _path_var_names(result: ParseResult) -> list[str]:
    """Names of the fields of the operation's path variable interface."""
    for interface in result.interfaces:
        if interface.name == result.path_var:
            return [item.name for item in interface.fields]
    return []


def build_context(
    document: dict[str, Any],
    operations: Iterable[tuple[str, str]] | None = None,
    path_prefix: str | None = None,
) -> dict[str, Any]:
    """Build the full template context.

    ``operations`` selects (path, method) pairs; by default every operation
    under ``path_prefix`` is parsed.
    """
    if operations is None:
        operations = iter_operations(document, path_prefix)

    results: list[ParseResult] = []
    rendered: list[dict[str, Any]] = []

    for path, method in operations:
        result = parse_operation(document, path, method)
        if result is None:
            logger.warning("no operation documented for %s %s", method.upper(), path)
            continue
        results.append(result)
        rendered.append({"name": to_function_name(result.name), "method": result.method})

    _deduplicate_function_names(rendered)

    for result, operation in zip(results, rendered):
        _qualify_operation_types(result, operation["name"])
        operation.update({
            "path": result.path,
            "url": url_template(result.path, _path_var_names(result)),
            "comment": result.comment,
            "path_var": result.path_var,
            "query": result.query,
            "body": result.body,
            "res": result.res,
            "body_type": _array_type(result.body, result.body_is_array),
            "res_type": _array_type(result.res, result.res_is_array),
            "is_form_data": result.is_form_data,
        })

    notices: list[Notice] = [n for result in results for n in result.notices]
    info = document.get("info") or {}

    return {
        "operations": rendered,
        "interfaces": _merge_interfaces(results),
        "notices": notices,
        "operation_count": len(rendered),
        "title": info.get("title", ""),
        "api_version": info.get("version", "unknown"),
    }
