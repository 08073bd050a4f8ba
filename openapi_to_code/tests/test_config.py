"""
Tests for the generator configuration.
"""

from __future__ import annotations

from openapi_to_code.pipeline.config import DEFAULT_DERIVES, CodeGeneratorConfig, DumpFormat


class TestCodeGeneratorConfig:
    def test_defaults(self):
        config = CodeGeneratorConfig()
        assert config.add_generation_comment is True
        assert config.output_file_name == "mod.rs"
        assert config.derives == DEFAULT_DERIVES
        assert config.async_functions is True
        assert config.hoist_inline_types is True
        assert config.validate_before_write is True

    def test_derives_not_shared(self):
        config = CodeGeneratorConfig()
        config.derives.append("Eq")
        assert CodeGeneratorConfig().derives == DEFAULT_DERIVES

    def test_from_dict_ignores_unknown_keys(self):
        config = CodeGeneratorConfig.from_dict({"output_file_name": "api.rs", "no_such_option": 1})
        assert config.output_file_name == "api.rs"
        assert not hasattr(config, "no_such_option")

    def test_round_trip(self):
        config = CodeGeneratorConfig(async_functions=False, derives=["Debug"])
        assert CodeGeneratorConfig.from_dict(config.to_dict()) == config


class TestDumpFormat:
    def test_values(self):
        assert DumpFormat("json") is DumpFormat.JSON
        assert DumpFormat.YAML == "yaml"
