"""
Configuration for the code generator pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DumpFormat(str, Enum):
    """Output format of an IR dump."""

    JSON = "json"
    YAML = "yaml"


DEFAULT_DERIVES = ["Debug", "Clone", "PartialEq", "Serialize", "Deserialize"]


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Name of the file written into the output directory
    output_file_name: str = "mod.rs"

    # Traits derived on every generated struct and enum
    derives: list[str] = field(default_factory=lambda: list(DEFAULT_DERIVES))

    # Emit operation stubs as async functions
    async_functions: bool = True

    # Emit anonymous nested structs/enums/unions as named declarations
    hoist_inline_types: bool = True

    # Run sanity checks on the generated code before writing it
    validate_before_write: bool = True

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "add_generation_comment": self.add_generation_comment,
            "output_file_name": self.output_file_name,
            "derives": list(self.derives),
            "async_functions": self.async_functions,
            "hoist_inline_types": self.hoist_inline_types,
            "validate_before_write": self.validate_before_write,
        }
