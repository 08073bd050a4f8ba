"""
Tests for identifier normalization.
"""

from __future__ import annotations

import pytest

from openapi_to_code.naming import (
    escape_keyword,
    sanitize_identifier,
    to_const_name,
    to_field_name,
    to_module_name,
    to_pascal_case,
    to_snake_case,
    to_type_name,
)

IDENTIFIERS = [
    "petId",
    "PetId",
    "pet_id",
    "pet-id",
    "pet id",
    "HTTPStatus",
    "type",
    "self",
    "Self",
    "crate",
    "r#type",
    "2fa",
    "x.y",
    "a__b",
    "",
    "_",
    "in-progress",
    "value1",
]


class TestCaseConversion:
    def test_snake_case_from_camel_case(self):
        assert to_snake_case("petId") == "pet_id"
        assert to_snake_case("createdAtUtc") == "created_at_utc"

    def test_snake_case_separators(self):
        assert to_snake_case("pet-id") == "pet_id"
        assert to_snake_case("pet id") == "pet_id"

    def test_snake_case_keeps_acronyms_together(self):
        assert to_snake_case("HTTPStatus") == "httpstatus"

    def test_pascal_case(self):
        assert to_pascal_case("pet_store") == "PetStore"
        assert to_pascal_case("in-progress") == "InProgress"
        assert to_pascal_case("petStore") == "PetStore"
        assert to_pascal_case("sold out") == "SoldOut"


class TestKeywordEscaping:
    @pytest.mark.parametrize("keyword", ["type", "match", "fn", "async", "struct"])
    def test_raw_identifier(self, keyword):
        assert escape_keyword(keyword) == f"r#{keyword}"

    @pytest.mark.parametrize("keyword", ["self", "Self", "super", "crate"])
    def test_keywords_without_raw_form_get_suffix(self, keyword):
        assert escape_keyword(keyword) == f"{keyword}_"

    def test_non_keyword_unchanged(self):
        assert escape_keyword("pet") == "pet"


class TestIdentifiers:
    def test_field_name(self):
        assert to_field_name("petId") == "pet_id"
        assert to_field_name("type") == "r#type"
        assert to_field_name("self") == "self_"
        assert to_field_name("2fa") == "_2fa"
        assert to_field_name("x.y") == "x_y"

    def test_type_name(self):
        assert to_type_name("pet") == "Pet"
        assert to_type_name("pet_store") == "PetStore"
        assert to_type_name("x.y") == "XY"
        assert to_type_name("Self") == "Self_"
        assert to_type_name("") == "Empty"

    def test_sanitize_identifier(self):
        assert sanitize_identifier("a b!c") == "a_b_c"
        assert sanitize_identifier("") == "_"
        assert sanitize_identifier("9lives") == "_9lives"
        assert sanitize_identifier("r#type") == "r#type"

    def test_const_name(self):
        assert to_const_name("baseUrl") == "BASE_URL"
        assert to_const_name("api-version") == "API_VERSION"

    def test_module_name(self):
        assert to_module_name("Swagger Petstore") == "swagger_petstore"
        assert to_module_name("  My API (v2) ") == "my_api__v2"
        assert to_module_name("!!!") == ""


class TestIdempotence:
    @pytest.mark.parametrize("name", IDENTIFIERS)
    def test_field_name_idempotent(self, name):
        once = to_field_name(name)
        assert to_field_name(once) == once

    @pytest.mark.parametrize("name", IDENTIFIERS)
    def test_type_name_idempotent(self, name):
        once = to_type_name(name)
        assert to_type_name(once) == once

    @pytest.mark.parametrize("name", IDENTIFIERS)
    def test_const_name_idempotent(self, name):
        once = to_const_name(name)
        assert to_const_name(once) == once

    @pytest.mark.parametrize("name", ["pet_id", "list_pets", "r#type", "self_"])
    def test_normalized_field_names_unchanged(self, name):
        assert to_field_name(name) == name

    @pytest.mark.parametrize("name", ["Pet", "PetStore", "Self_", "ApiError"])
    def test_normalized_type_names_unchanged(self, name):
        assert to_type_name(name) == name
