"""Render templates and write generated output.

Takes the context from context_builder and produces one TypeScript module.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jinja2

from .models import Field
from .naming import is_identifier

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "api.ts.j2"

DEFAULT_OUTPUT = Path("api.ts")
DEFAULT_REQUEST_IMPORT = "./request"


def _doc_lines(lines: list[str], indent: int) -> str:
    pad = " " * indent
    lines = [line.replace("*/", "*\\/") for line in lines]
    if len(lines) == 1:
        return f"{pad}/** {lines[0]} */"
    body = "\n".join(f"{pad} * {line}".rstrip() for line in lines)
    return f"{pad}/**\n{body}\n{pad} */"


def ts_doc(text: str | None, indent: int = 0) -> str:
    """Format text as a JSDoc comment, or an empty string when there is none."""
    if not text or not text.strip():
        return ""
    return _doc_lines(text.strip().splitlines(), indent)


def field_doc(item: Field, indent: int = 2) -> str:
    """JSDoc for a field: its description followed by its format."""
    lines = item.description.strip().splitlines() if item.description else []
    if item.format:
        lines.append(f"@format {item.format}")
    return _doc_lines(lines, indent) if lines else ""


def ts_key(name: str) -> str:
    """Quote a property key unless it is a valid identifier."""
    return name if is_identifier(name) else json.dumps(name)


def ts_params(operation: dict[str, Any]) -> str:
    """Build the parameter list of a generated request function."""
    params = []
    for arg, key in (("pathVar", "path_var"), ("query", "query"), ("body", "body_type")):
        if operation.get(key):
            params.append(f"{arg}: {operation[key]}")
    return ", ".join(params)


FILTERS = {
    "ts_doc": ts_doc,
    "field_doc": field_doc,
    "ts_key": ts_key,
    "ts_params": ts_params,
}


def create_environment(template_dir: Path | None = None) -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters.update(FILTERS)
    return env


def render(
    context: dict[str, Any],
    request_import: str = DEFAULT_REQUEST_IMPORT,
    template_dir: Path | None = None,
) -> str:
    """Render the TypeScript module for a template context."""
    template = create_environment(template_dir).get_template(TEMPLATE_NAME)
    return template.render(request_import=request_import, **context)


def generate(
    context: dict[str, Any],
    output_path: Path = DEFAULT_OUTPUT,
    request_import: str = DEFAULT_REQUEST_IMPORT,
) -> Path:
    """Render the module and write it to ``output_path``."""
    output = render(context, request_import=request_import)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(output, encoding="utf-8")

    print(f"Generated {output_path} ({context['operation_count']} operations, "
          f"{len(context['interfaces'])} interfaces)")
    return output_path
