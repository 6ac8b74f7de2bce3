"""Entry point: python -m tsgen

Reads an OpenAPI v3 document (file or URL) and writes TypeScript
interfaces plus request functions for one operation or a whole API.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path

import httpx

from .codegen import DEFAULT_OUTPUT, DEFAULT_REQUEST_IMPORT, generate
from .context_builder import build_context
from .loader import load_document
from .parser import parse_operation

EXIT_SUCCESS = 0
EXIT_FILE_NOT_FOUND = 1
EXIT_INVALID_JSON = 2
EXIT_FETCH_ERROR = 3
EXIT_OPERATION_NOT_FOUND = 4
EXIT_GENERATION_ERROR = 5


def parse_command_line_args(args: list[str] | None = None) -> argparse.Namespace:
    """Create and configure the command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="tsgen",
        description="Generate TypeScript interfaces from an OpenAPI v3 document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s openapi.json
  %(prog)s openapi.json --path /pets/{id} --method get -o src/api/pet.ts
  %(prog)s http://localhost:8080/v3/api-docs --prefix /pets
        """,
    )
    parser.add_argument(
        "source",
        help="Path or http(s) URL of the OpenAPI v3 JSON document",
        metavar="SOURCE",
    )
    parser.add_argument("--path", help="Path template of a single operation, e.g. /pets/{id}")
    parser.add_argument("--method", default="get", help="HTTP method of --path (default: %(default)s)")
    parser.add_argument("--prefix", help="Only generate operations whose path starts with this prefix")
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=DEFAULT_OUTPUT,
        help="Output TypeScript file (default: %(default)s)",
        dest="output_path",
    )
    parser.add_argument(
        "--request-import",
        default=DEFAULT_REQUEST_IMPORT,
        help="Module the generated code imports `request` from (default: %(default)s)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output")

    parsed_args = parser.parse_args(args)
    if parsed_args.path and parsed_args.prefix:
        parser.error("--path and --prefix are mutually exclusive")
    return parsed_args


def main(args: list[str] | None = None) -> int:
    parsed_args = parse_command_line_args(args)
    logging.basicConfig(
        level=logging.INFO if parsed_args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        document = load_document(parsed_args.source)

        if parsed_args.path:
            if parse_operation(document, parsed_args.path, parsed_args.method) is None:
                print(
                    f"Error: no operation documented for "
                    f"{parsed_args.method.upper()} {parsed_args.path}",
                    file=sys.stderr,
                )
                return EXIT_OPERATION_NOT_FOUND
            context = build_context(document, operations=[(parsed_args.path, parsed_args.method)])
        else:
            context = build_context(document, path_prefix=parsed_args.prefix)

        generate(context, parsed_args.output_path, request_import=parsed_args.request_import)

        if parsed_args.verbose:
            for notice in context["notices"]:
                print(f"  ignored: {notice.message}")
        return EXIT_SUCCESS

    except FileNotFoundError:
        print(f"Error: Specification file not found: {parsed_args.source}", file=sys.stderr)
        return EXIT_FILE_NOT_FOUND
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in specification: {e}", file=sys.stderr)
        return EXIT_INVALID_JSON
    except httpx.HTTPError as e:
        print(f"Error: Could not fetch specification: {e}", file=sys.stderr)
        return EXIT_FETCH_ERROR
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if parsed_args.verbose:
            traceback.print_exc()
        return EXIT_GENERATION_ERROR


if __name__ == "__main__":
    sys.exit(main())
