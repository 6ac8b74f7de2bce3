"""Derive TypeScript names from OpenAPI operation ids, references and paths.

Examples:
  operationId getPetUsingGET              -> getPet
  getPet + path variables                 -> GetPetPathVar
  getPet + query parameters               -> GetPetQuery
  #/components/schemas/Pet                -> Pet
  #/components/schemas/Result«List«Pet»»  -> ResultListPet
  /pets/{id}/toys/{toyId}                 -> ["id", "toyId"]
"""

from __future__ import annotations

import re
from typing import Any

DEFINITION_PREFIX = "#/components/schemas/"

# Springfox appends "Using<METHOD>" to operation ids it generates
_OPERATION_ID_SUFFIX = "Using"

_PATH_VAR_RE = re.compile(r"\{(.+?)\}")
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")


def parse_operation_id(operation_id: str) -> str:
    """Strip the generator's ``Using...`` suffix from an operation id."""
    index = operation_id.find(_OPERATION_ID_SUFFIX)
    return operation_id if index == -1 else operation_id[:index]


def to_first_upper_case(name: str) -> str:
    return name[:1].upper() + name[1:]


def path_var_type_name(operation_name: str) -> str:
    return f"{to_first_upper_case(operation_name)}PathVar"


def query_type_name(operation_name: str) -> str:
    return f"{to_first_upper_case(operation_name)}Query"


def definition_name(ref: str) -> str:
    """Return the key of a reference in ``components.schemas``."""
    if ref.startswith(DEFINITION_PREFIX):
        return ref[len(DEFINITION_PREFIX):]
    return ref.rsplit("/", 1)[-1]


def _sanitize_type_name(name: str) -> str:
    name = re.sub(r"[^\w$]", "", name)
    if name[:1].isdigit():
        name = f"_{name}"
    return name


def ref_type_name(ref: str, definitions: dict[str, Any] | None = None) -> str:
    """Return the interface name for a reference.

    Characters that cannot appear in a TypeScript identifier (generic
    markers such as ``«»``, dots, dashes, spaces) are dropped. When several
    definitions sanitize to the same name, the ones after the first in
    declaration order get a counter: ``ResultPet``, ``ResultPet2``.
    """
    raw = definition_name(ref)
    name = _sanitize_type_name(raw)
    if not definitions or raw not in definitions:
        return name
    clashing = [key for key in definitions if _sanitize_type_name(key) == name]
    index = clashing.index(raw)
    return name if index == 0 else f"{name}{index + 1}"


def extract_path_vars(path: str) -> list[str]:
    """Return the names of the ``{brace}`` segments of a path template."""
    return _PATH_VAR_RE.findall(path)


def is_identifier(name: str) -> bool:
    """Check if a name can be used unquoted as a TypeScript property key."""
    return bool(_IDENTIFIER_RE.match(name))


def to_function_name(name: str) -> str:
    """Sanitize an operation name for use as a TypeScript function name."""
    name = re.sub(r"[^\w$]", "_", name)
    name = re.sub(r"_+", "_", name).strip("_")
    if not name:
        return "request"
    if name[0].isdigit():
        name = f"_{name}"
    return name
