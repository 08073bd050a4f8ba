"""
Tests for the public package surface.
"""

from __future__ import annotations

import openapi_to_code
from openapi_to_code.pipeline import ir
from openapi_to_code.pipeline.ir import annotation_kinds as ak


class TestImports:
    def test_version(self):
        assert openapi_to_code.__version__ == "0.1.0"

    def test_public_names(self):
        for name in openapi_to_code.__all__:
            assert hasattr(openapi_to_code, name), name

    def test_annotation_kinds_module(self):
        assert ir.annotation_kinds is ak
        assert ak.OPTION == "Option"
        assert ak.API_ERROR in ak.BUILTIN_NAMES
        assert set(ak.PRIMITIVE_NAMES) <= set(ak.BUILTIN_NAMES)

    def test_ir_names_reexported(self):
        for name in ir.__all__:
            assert hasattr(ir, name), name
