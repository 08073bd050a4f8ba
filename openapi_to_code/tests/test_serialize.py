"""
Tests for the IR dump format.
"""

from __future__ import annotations

import json

import pytest
import yaml

from openapi_to_code.errors import UnknownFormatError
from openapi_to_code.pipeline.config import DumpFormat
from openapi_to_code.pipeline.ir import annotation_kinds as ak
from openapi_to_code.pipeline.ir.ir_nodes import (
    Annotation,
    Const,
    EnumKind,
    Field,
    Function,
    FunctionKind,
    Metadata,
    Module,
    Param,
    SourceLocation,
    StructKind,
    Type,
    TypeParam,
    Variant,
)
from openapi_to_code.pipeline.ir.serialize import dump_module, item_to_dict, kind_to_dict, module_to_dict, type_to_dict


def sample_module() -> Module:
    pet = Type(
        name="Pet",
        kind=StructKind(fields=[Field("age", Type.optional(Type.reference(ak.INTEGER)))]),
        metadata=Metadata(docs="A pet.", extra={"x-internal": True}),
    )
    list_pets = Function(
        name="listPets",
        args=[Param("limit", Type.reference(ak.INTEGER), annotations=[Annotation.with_string(ak.PARAM_LOCATION, "query")])],
        ret=Type.generic(ak.RESULT, [Type.reference("Pet"), Type.reference(ak.API_ERROR)]),
        annotations=[Annotation.with_string(ak.HTTP_METHOD, "GET"), Annotation.with_string(ak.HTTP_PATH, "/pets")],
    )
    return Module(
        name="petstore",
        items=[pet, list_pets, Const("VERSION", Type.reference(ak.STRING), "1.0")],
        metadata=Metadata(source=SourceLocation(file="petstore.yaml", line=1)),
    )


class TestShapes:
    def test_ref_type(self):
        assert type_to_dict(Type.reference(ak.STRING)) == {"kind": {"kind": "ref", "name": "String"}}

    def test_generic_type(self):
        assert type_to_dict(Type.optional(Type.reference(ak.INTEGER))) == {
            "kind": {"kind": "ref", "name": "Option"},
            "args": [{"kind": {"kind": "ref", "name": "i64"}}],
        }

    def test_struct_type(self):
        data = item_to_dict(sample_module().items[0])
        assert data["item"] == "type"
        assert data["name"] == "Pet"
        assert data["kind"]["kind"] == "struct"
        assert data["kind"]["fields"][0]["name"] == "age"
        assert data["metadata"] == {"docs": "A pet.", "extra": {"x-internal": True}}

    def test_function_item(self):
        data = item_to_dict(sample_module().items[1])
        assert data["item"] == "function"
        assert data["name"] == "listPets"
        assert data["args"][0]["annotations"] == [{"kind": "param_location", "value": "query"}]
        assert data["return"]["args"][1] == {"kind": {"kind": "ref", "name": "ApiError"}}
        assert data["annotations"] == [
            {"kind": "http_method", "value": "GET"},
            {"kind": "http_path", "value": "/pets"},
        ]
        assert "metadata" not in data
        assert "params" not in data

    def test_const_item(self):
        data = item_to_dict(sample_module().items[2])
        assert data == {"item": "const", "name": "VERSION", "type": {"kind": {"kind": "ref", "name": "String"}}, "value": "1.0"}

    def test_enum_and_function_kinds(self):
        enum = EnumKind(variants=[Variant("A", annotations=[Annotation.flag(ak.DEPRECATED)])])
        assert kind_to_dict(enum) == {"kind": "enum", "variants": [{"name": "A", "annotations": [{"kind": "deprecated"}]}]}

        function = FunctionKind(params=[Param(None, Type.reference(ak.BOOLEAN))])
        assert kind_to_dict(function) == {
            "kind": "function",
            "params": [{"type": {"kind": {"kind": "ref", "name": "bool"}}}],
            "ret": None,
        }

    def test_type_annotation_values(self):
        bound = TypeParam("T", bounds=[Annotation.with_type(ak.BOUND, Type.reference("Clone"))])
        data = type_to_dict(Type(name="Box", params=[bound]))
        assert data["params"] == [{"name": "T", "bounds": [{"kind": "bound", "value": {"kind": {"kind": "ref", "name": "Clone"}}}]}]

    def test_module(self):
        data = module_to_dict(sample_module())
        assert data["name"] == "petstore"
        assert len(data["items"]) == 3
        assert data["metadata"] == {"source": {"file": "petstore.yaml", "line": 1}}
        assert "submodules" not in data


class TestDump:
    def test_json(self):
        text = dump_module(sample_module(), "json")
        assert json.loads(text) == module_to_dict(sample_module())

    def test_yaml(self):
        text = dump_module(sample_module(), DumpFormat.YAML)
        assert yaml.safe_load(text) == module_to_dict(sample_module())
        assert text.startswith("name: petstore\n")

    def test_default_is_json(self):
        assert dump_module(Module(name="m")) == '{\n  "name": "m"\n}'

    def test_unknown_format(self):
        with pytest.raises(UnknownFormatError) as exc_info:
            dump_module(sample_module(), "toml")
        assert "toml" in str(exc_info.value)
        assert exc_info.value.known == ["json", "yaml"]
