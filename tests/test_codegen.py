"""Tests for the codegen module."""

from tsgen.codegen import field_doc, generate, render, ts_doc, ts_key, ts_params
from tsgen.context_builder import build_context
from tsgen.models import Field


class TestFilters:
    """Test the jinja2 filters."""

    def test_ts_doc_single_line(self):
        assert ts_doc("Find pet by id") == "/** Find pet by id */"

    def test_ts_doc_multi_line(self):
        assert ts_doc("First\nSecond", indent=2) == "  /**\n   * First\n   * Second\n   */"

    def test_ts_doc_empty(self):
        assert ts_doc(None) == ""
        assert ts_doc("   ") == ""

    def test_ts_doc_escapes_comment_end(self):
        assert ts_doc("a */ b") == "/** a *\\/ b */"

    def test_field_doc_description(self):
        assert field_doc(Field(name="name", type="string", description="Pet name")) == "  /** Pet name */"

    def test_field_doc_format_only(self):
        assert field_doc(Field(name="file", type="File", format="binary")) == "  /** @format binary */"

    def test_field_doc_description_and_format(self):
        item = Field(name="id", type="number", description="Pet id", format="int64")
        assert field_doc(item) == "  /**\n   * Pet id\n   * @format int64\n   */"

    def test_field_doc_nothing(self):
        assert field_doc(Field(name="id", type="number")) == ""

    def test_ts_key(self):
        assert ts_key("petId") == "petId"
        assert ts_key("X-Trace") == '"X-Trace"'

    def test_ts_params(self):
        operation = {"path_var": "GetPetPathVar", "query": None, "body_type": "Pet"}
        assert ts_params(operation) == "pathVar: GetPetPathVar, body: Pet"

    def test_ts_params_array_body(self):
        assert ts_params({"path_var": None, "query": None, "body_type": "Pet[]"}) == "body: Pet[]"

    def test_ts_params_none(self):
        assert ts_params({"path_var": None, "query": None, "body_type": None}) == ""


class TestRender:
    """Test the rendered TypeScript module."""

    def test_header(self, petstore):
        output = render(build_context(petstore, operations=[("/pets/{id}", "get")]))
        assert output.startswith("/* eslint-disable */\n// Generated by tsgen from Pet Store 1.2.0. Do not edit.\n")
        assert "import request from './request'\n" in output

    def test_custom_request_import(self, petstore):
        output = render(build_context(petstore, operations=[("/pets/{id}", "get")]), request_import="@/utils/http")
        assert "import request from '@/utils/http'\n" in output

    def test_interfaces(self, petstore):
        output = render(build_context(petstore, operations=[("/pets/{id}", "get")]))
        assert "export interface GetPetPathVar {\n  id: number\n}\n" in output
        assert "/** A pet */\nexport interface Pet {\n  /** Pet name */\n  name: string\n  age: number\n}\n" in output

    def test_function(self, petstore):
        output = render(build_context(petstore, operations=[("/pets/{id}", "get")]))
        assert (
            "/** Find pet by id */\n"
            "export function getPet(pathVar: GetPetPathVar): Promise<Pet> {\n"
            "  return request({\n"
            "    url: `/pets/${pathVar.id}`,\n"
            "    method: 'get',\n"
            "  })\n"
            "}\n"
        ) in output

    def test_optional_fields_and_query(self, petstore):
        output = render(build_context(petstore, operations=[("/pets/{id}", "put")]))
        assert "  dryRun?: boolean\n" in output
        assert "export function updatePet(pathVar: UpdatePetPathVar, query: UpdatePetQuery, body: Pet): Promise<Pet> {" in output
        assert "    params: query,\n    data: body,\n" in output

    def test_form_data(self, petstore):
        output = render(build_context(petstore, operations=[("/pets/{id}/photo", "post")]))
        assert "  file?: File\n" in output
        assert "headers: { 'Content-Type': 'multipart/form-data' }," in output
        assert "Promise<number[]>" in output

    def test_untyped_response(self, petstore):
        output = render(build_context(petstore, operations=[("/pets", "post")]))
        assert "export function createPet(body: CreatePetRequestBody): Promise<any> {" in output

    def test_array_of_ref_response(self, petstore):
        output = render(build_context(petstore, operations=[("/pets", "get")]))
        assert "export function listPets(query: ListPetsQuery): Promise<Pet[]> {" in output

    def test_array_of_ref_body(self):
        document = {
            "paths": {
                "/pets/batch": {
                    "post": {
                        "operationId": "savePetsUsingPOST",
                        "requestBody": {
                            "content": {
                                "application/json": {
                                    "schema": {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}},
                                }
                            }
                        },
                        "responses": {},
                    }
                }
            },
            "components": {"schemas": {"Pet": {"properties": {"name": {"type": "string"}}}}},
        }
        output = render(build_context(document))
        assert "export function savePets(body: Pet[]): Promise<any> {" in output
        assert "export interface Pet {" in output

    def test_referrer_after_references(self, petstore):
        output = render(build_context(petstore, operations=[("/pets", "post")]))
        assert output.index("interface Pet ") < output.index("interface Owner ") < output.index("interface CreatePetRequestBody ")


class TestGenerate:
    """Test writing the module to disk."""

    def test_writes_file(self, petstore, tmp_path, capsys):
        context = build_context(petstore, operations=[("/pets/{id}", "get")])
        output_path = generate(context, tmp_path / "src" / "api" / "pet.ts")
        assert output_path.read_text() == render(context)
        out = capsys.readouterr().out
        assert out.startswith("Generated ")
        assert "(1 operations, 2 interfaces)" in out
