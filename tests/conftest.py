"""Shared fixtures: a small pet store OpenAPI v3 document.

Covers the shapes the resolvers care about: path and query parameters,
$ref bodies, arrays of references, inline bodies, multipart uploads,
mutually referencing schemas and unrepresentable properties.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

PREFIX = "#/components/schemas/"

PETSTORE: dict[str, Any] = {
    "openapi": "3.0.1",
    "info": {"title": "Pet Store", "version": "1.2.0"},
    "paths": {
        "/pets/{id}": {
            "get": {
                "operationId": "getPetUsingGET",
                "summary": "Find pet by id",
                "parameters": [
                    {"name": "id", "in": "path", "required": True, "schema": {"type": "integer"}},
                ],
                "responses": {
                    "200": {
                        "description": "OK",
                        "content": {"*/*": {"schema": {"$ref": PREFIX + "Pet"}}},
                    }
                },
            },
            "put": {
                "operationId": "updatePetUsingPUT",
                "summary": "Update a pet",
                "description": "Replaces every field",
                "parameters": [
                    {"name": "id", "in": "path", "required": True, "schema": {"type": "integer"}},
                    {"name": "dryRun", "in": "query", "schema": {"type": "boolean"}},
                ],
                "requestBody": {
                    "content": {"application/json": {"schema": {"$ref": PREFIX + "Pet"}}},
                },
                "responses": {
                    "200": {
                        "description": "OK",
                        "content": {"*/*": {"schema": {"$ref": PREFIX + "Pet"}}},
                    }
                },
            },
        },
        "/pets": {
            "get": {
                "operationId": "listPetsUsingGET",
                "parameters": [
                    {"name": "page", "in": "query", "required": True, "schema": {"type": "integer"}},
                    {"name": "tags", "in": "query", "schema": {"type": "array", "items": {"type": "string"}}},
                    {"name": "X-Trace", "in": "header", "schema": {"type": "string"}},
                ],
                "responses": {
                    "200": {
                        "description": "OK",
                        "content": {
                            "application/json": {
                                "schema": {"type": "array", "items": {"$ref": PREFIX + "Pet"}},
                            }
                        },
                    }
                },
            },
            "post": {
                "operationId": "createPetUsingPOST",
                "requestBody": {
                    "content": {
                        "application/json": {
                            "schema": {
                                "type": "object",
                                "required": ["name"],
                                "properties": {
                                    "name": {"type": "string"},
                                    "owner": {"$ref": PREFIX + "Owner"},
                                },
                            }
                        }
                    }
                },
                "responses": {
                    "200": {
                        "description": "OK",
                        "content": {"application/json": {"schema": {"type": "integer"}}},
                    }
                },
            },
        },
        "/pets/{id}/photo": {
            "post": {
                "operationId": "uploadPhotoUsingPOST",
                "parameters": [
                    {"name": "id", "in": "path", "required": True, "schema": {"type": "integer"}},
                ],
                "requestBody": {
                    "content": {
                        "multipart/form-data": {
                            "schema": {
                                "type": "object",
                                "properties": {"file": {"type": "string", "format": "binary"}},
                            }
                        }
                    }
                },
                "responses": {
                    "200": {
                        "description": "OK",
                        "content": {
                            "application/json": {
                                "schema": {"type": "array", "items": {"type": "number"}},
                            }
                        },
                    }
                },
            },
        },
    },
    "components": {
        "schemas": {
            "Pet": {
                "type": "object",
                "description": "A pet",
                "required": ["name", "age"],
                "properties": {
                    "name": {"type": "string", "description": "Pet name"},
                    "age": {"type": "integer"},
                },
            },
            "Owner": {
                "type": "object",
                "required": ["name"],
                "properties": {
                    "name": {"type": "string"},
                    "pets": {"type": "array", "items": {"$ref": PREFIX + "Pet"}},
                    "meta": {"description": "untyped"},
                },
            },
        }
    },
}


@pytest.fixture
def petstore() -> dict[str, Any]:
    """A fresh copy of the pet store document."""
    return copy.deepcopy(PETSTORE)


@pytest.fixture
def petstore_file(tmp_path: Path, petstore: dict[str, Any]) -> Path:
    """The pet store document written to a JSON file."""
    path = tmp_path / "openapi.json"
    path.write_text(json.dumps(petstore))
    return path
