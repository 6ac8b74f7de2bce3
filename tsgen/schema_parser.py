"""Resolve OpenAPI v3 schemas into TypeScript interfaces.

Handles:
- Primitive and array type mapping
- $ref resolution into named interfaces, registered once per collector
- Reference cycles (a name already collected is never resolved again)
- Inline object request/response bodies
- Path and query parameters gathered into one synthetic interface
- Unrepresentable fields (dropped, with a notice)

Interfaces are inserted at the front of the collector, so a referencing
interface always ends up after the interfaces it refers to.
"""

from __future__ import annotations

import logging
from typing import Any

from .models import Field, Interface, Notice, PendingRef
from .naming import DEFINITION_PREFIX, definition_name, ref_type_name

logger = logging.getLogger(__name__)


class InterfaceCollector:
    """Name-unique, order-sensitive list of interfaces built by one resolver run."""

    def __init__(self) -> None:
        self.interfaces: list[Interface] = []
        self.notices: list[Notice] = []

    def __contains__(self, name: object) -> bool:
        return any(interface.name == name for interface in self.interfaces)

    def __iter__(self):
        return iter(self.interfaces)

    def __len__(self) -> int:
        return len(self.interfaces)

    def prepend(self, interface: Interface) -> None:
        self.interfaces.insert(0, interface)

    def notice(self, owner: str, field_name: str) -> None:
        """Record a dropped field."""
        notice = Notice(owner=owner, field=field_name)
        logger.warning(notice.message)
        self.notices.append(notice)


def map_primitive_type(schema: dict[str, Any]) -> str | None:
    """Map a schema's type/format to a TypeScript type, or None if unrepresentable."""
    schema_type = schema.get("type") or ""
    if schema_type == "file" or schema.get("format") == "binary":
        return "File"
    if schema_type in ("number", "integer"):
        return "number"
    if schema_type in ("string", "boolean", "object"):
        return schema_type
    if schema_type == "array":
        items = schema.get("items") or {}
        if items.get("$ref"):
            return f"{items['$ref']}[]"
        if items.get("type"):
            item_type = map_primitive_type(items)
            if item_type:
                return f"{item_type}[]"
    return None


def _pending_ref(schema: dict[str, Any]) -> PendingRef | None:
    """Find the named reference a schema points at, directly or through arrays."""
    if schema.get("$ref"):
        return PendingRef(schema["$ref"])
    suffix = ""
    while schema.get("type") == "array":
        items = schema.get("items") or {}
        suffix += "[]"
        if items.get("$ref"):
            return PendingRef(items["$ref"], suffix)
        schema = items
    return None


def _field_type(schema: dict[str, Any]) -> tuple[str | None, PendingRef | None]:
    """Return the provisional type of a field and its pending reference, if any."""
    if schema.get("$ref"):
        ts_type: str | None = schema["$ref"]
    elif schema.get("type"):
        ts_type = map_primitive_type(schema)
    else:
        ts_type = None
    if ts_type is None:
        return None, None

    pending = _pending_ref(schema)
    if pending is None or pending.raw != ts_type or not pending.ref.startswith(DEFINITION_PREFIX):
        return ts_type, None
    return ts_type, pending


def _resolve_pending(
    fields: list[Field],
    definitions: dict[str, Any],
    collector: InterfaceCollector,
    mark_required: bool,
) -> None:
    """Resolve the references of pending fields and substitute their type names.

    A reference that could not be registered keeps its raw text.
    """
    for item in fields:
        if item.pending is None:
            continue
        resolve_interface(item.pending.ref, definitions, collector, mark_required)
        type_name = ref_type_name(item.pending.ref, definitions)
        if type_name in collector:
            item.type = f"{type_name}{item.pending.suffix}"
            item.pending = None


def resolve_interface(
    ref: str,
    definitions: dict[str, Any],
    collector: InterfaceCollector,
    mark_required: bool,
) -> None:
    """Resolve a named reference into the collector, unless it is already there."""
    if not ref:
        return
    name = ref_type_name(ref, definitions)
    if name in collector:
        return
    resolve_properties(name, definitions.get(definition_name(ref)), definitions, collector, mark_required)


def resolve_properties(
    name: str,
    definition: dict[str, Any] | None,
    definitions: dict[str, Any],
    collector: InterfaceCollector,
    mark_required: bool,
) -> None:
    """Build an interface from a definition's properties and register it.

    A field is optional unless ``mark_required`` is set and the field is
    listed in the definition's ``required``. Definitions without properties
    register nothing.
    """
    definition = definition or {}
    properties = definition.get("properties")
    if not properties:
        return
    required = definition.get("required") or []

    fields: list[Field] = []
    for prop_name, prop_schema in properties.items():
        prop_schema = prop_schema or {}
        ts_type, pending = _field_type(prop_schema)
        if ts_type is None:
            collector.notice(name, prop_name)
            continue
        fields.append(Field(
            name=prop_name,
            type=ts_type,
            optional=not mark_required or prop_name not in required,
            description=prop_schema.get("description"),
            format=prop_schema.get("format"),
            pending=pending,
        ))

    collector.prepend(Interface(name=name, fields=fields, description=definition.get("description")))
    _resolve_pending(fields, definitions, collector, mark_required)


def resolve_parameters(
    interface_name: str,
    parameters: list[dict[str, Any]],
    definitions: dict[str, Any],
) -> InterfaceCollector:
    """Gather operation parameters into one synthetic interface.

    Returns a fresh collector; the synthetic interface is only registered
    when at least one parameter could be typed.
    """
    collector = InterfaceCollector()
    fields: list[Field] = []

    for parameter in parameters:
        name = parameter.get("name", "")
        schema = parameter.get("schema") or {}

        if schema.get("$ref"):
            resolve_interface(schema["$ref"], definitions, collector, True)

        ts_type, pending = _field_type(schema)
        if ts_type is None:
            collector.notice(interface_name, name)
            continue
        fields.append(Field(
            name=name,
            type=ts_type,
            optional=not parameter.get("required", False),
            description=parameter.get("description"),
            format=schema.get("format"),
            pending=pending,
        ))

    if fields:
        collector.prepend(Interface(name=interface_name, fields=fields))
    _resolve_pending(fields, definitions, collector, True)
    return collector


def resolve_schema(
    schema: dict[str, Any] | None,
    definitions: dict[str, Any],
    default_name: str,
) -> tuple[InterfaceCollector, str | None]:
    """Resolve a request or response body schema.

    Returns the collector and the body's type name. For an array of
    references the name is the element interface's name, without ``[]``.
    """
    collector = InterfaceCollector()
    schema = schema or {}

    if schema.get("type") == "array":
        items = schema.get("items") or {}
        if not items.get("$ref"):
            return collector, map_primitive_type(schema)
        resolve_interface(items["$ref"], definitions, collector, True)
        name = ref_type_name(items["$ref"], definitions)
    elif schema.get("$ref"):
        resolve_interface(schema["$ref"], definitions, collector, True)
        name = ref_type_name(schema["$ref"], definitions)
    else:
        resolve_properties(default_name, schema, definitions, collector, True)
        name = default_name

    return collector, name if name in collector else None
